"""
Tempo and tempo interpolations

A :class:`Tempo` is a number of beats per minute together with the
subdivision of the beat (4=quarter, 8=eighth). An :class:`Interpolation`
describes a continuous change from one tempo to another along a metrical
duration, following an :class:`~tactus.easing.Easing` curve. It converts
symbolic time (metrical offsets) into real time (seconds):

.. code-block:: python

    >>> accel = Interpolation(Tempo(60), Tempo(120), MetricalDuration(4, 4))
    >>> round(accel.secondsOffset(MetricalDuration(2, 4)), 4)
    1.6902

Tempo is interpolated in the log domain: halfway through an interpolation
from 60 to 120 the tempo is ~84.85, not 90.
"""
from __future__ import annotations
from dataclasses import dataclass, field
import math
import logging

import numpy as np

from .common import F
from .config import config
from .duration import MetricalDuration, asMetricalDuration, ZERO
from .easing import Easing, Linear, asEasing
from .mathutils import isPowerOfTwo, lcm, clamp

import typing as _t

if _t.TYPE_CHECKING:
    from .common import ratio_t


logger = logging.getLogger("tactus.tempo")


__all__ = (
    'Tempo',
    'Interpolation',
)


@dataclass(frozen=True)
class Tempo:
    """
    A tempo

    Args:
        bpm: beats per minute
        subdivision: the beat, 4 = quarter note, 8 = eighth note, etc.
    """
    bpm: float = field(default_factory=lambda: config['tempo.defaultBpm'])
    subdivision: int = field(default_factory=lambda: config['tempo.defaultSubdivision'])

    def __post_init__(self):
        if not self.bpm > 0:
            raise ValueError(f"The tempo must be positive, got {self.bpm}")
        if not isPowerOfTwo(self.subdivision):
            raise ValueError(f"The subdivision of a tempo must be a power of two, "
                             f"got {self.subdivision}")

    def __repr__(self):
        bpm = int(self.bpm) if self.bpm == int(self.bpm) else round(self.bpm, 4)
        return f"Tempo({bpm}, {self.subdivision})"

    def respelling(self, subdivision: int) -> Tempo:
        """
        The same tempo expressed in another subdivision

        >>> Tempo(60, 4).respelling(8)
        Tempo(120, 8)
        """
        return Tempo(self.bpm * subdivision / self.subdivision, subdivision)

    @property
    def quarterTempo(self) -> float:
        """This tempo expressed in quarter notes per minute"""
        return self.bpm * 4 / self.subdivision

    @property
    def durationOfBeat(self) -> float:
        """Duration of one beat in seconds"""
        return 60 / self.bpm

    def durationForBeatAt(self, subdivision: int) -> float:
        """Duration in seconds of a ``1/subdivision`` note at this tempo"""
        return self.durationOfBeat * self.subdivision / subdivision

    def secondsFor(self, duration: MetricalDuration | F) -> float:
        """Duration in seconds of the given metrical duration at this tempo"""
        return float(duration) * self.subdivision * self.durationOfBeat


@dataclass(frozen=True, eq=False)
class Interpolation:
    """
    A change of tempo along a metrical duration

    Args:
        start: the tempo at the beginning
        end: the tempo at the end
        metricalDuration: the symbolic duration of the interpolation
        easing: the shape of the change. A str is parsed by
            :func:`~tactus.easing.asEasing`

    Two interpolations are equal if their tempi are equal once expressed in
    quarter notes: ``Interpolation(Tempo(60, 4), Tempo(60, 4))`` equals
    ``Interpolation(Tempo(120, 8), Tempo(120, 8))``

    Raises ValueError if metricalDuration is negative
    """
    start: Tempo = field(default_factory=Tempo)
    end: Tempo = field(default_factory=Tempo)
    metricalDuration: MetricalDuration = field(default_factory=lambda: MetricalDuration(1, 4))
    easing: Easing = field(default_factory=Linear)

    def __post_init__(self):
        object.__setattr__(self, 'metricalDuration', asMetricalDuration(self.metricalDuration))
        object.__setattr__(self, 'easing', asEasing(self.easing))
        if self.metricalDuration < ZERO:
            raise ValueError(f"The duration of an interpolation cannot be negative, "
                             f"got {self.metricalDuration}")

    def _key(self) -> tuple:
        return (self.start.quarterTempo, self.end.quarterTempo, self.metricalDuration, self.easing)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Interpolation):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    @classmethod
    def static(cls, tempo: Tempo, duration: MetricalDuration | ratio_t = (1, 4)
               ) -> Interpolation:
        """An interpolation holding the given tempo for the given duration"""
        return cls(start=tempo, end=tempo, metricalDuration=asMetricalDuration(duration))

    def __repr__(self):
        if self.start.quarterTempo == self.end.quarterTempo:
            return f"Interpolation({self.start}, {self.metricalDuration})"
        easing = '' if isinstance(self.easing, Linear) else f", {self.easing}"
        return f"Interpolation({self.start} -> {self.end}, {self.metricalDuration}{easing})"

    @property
    def range(self) -> tuple[MetricalDuration, MetricalDuration]:
        return ZERO, self.metricalDuration

    @property
    def length(self) -> MetricalDuration:
        return self.metricalDuration

    @property
    def durationSecs(self) -> float:
        """Duration of this interpolation, in seconds"""
        return self.secondsOffset(self.metricalDuration)

    def fragment(self, start: MetricalDuration = ZERO, end: MetricalDuration | None = None
                 ) -> Interpolation:
        """
        The part of this interpolation between start and end

        Both offsets are clamped to the duration of this interpolation.
        Raises ValueError if end comes before start

        .. note::

            The resulting interpolation is always linear. The easing of this
            interpolation is not carried over: a fragment of a non-linear one has
            the right tempi at its boundaries but a linear shape in between. A
            fragment covering the whole interpolation is the interpolation itself

        Args:
            start: start offset
            end: end offset, None to use the end of this interpolation

        Returns:
            a new Interpolation
        """
        start = clamp(asMetricalDuration(start), ZERO, self.metricalDuration)
        if end is None:
            end = self.metricalDuration
        else:
            end = clamp(asMetricalDuration(end), ZERO, self.metricalDuration)
        if end < start:
            raise ValueError(f"The end of a fragment ({end}) cannot come before "
                             f"its start ({start})")
        if start == ZERO and end == self.metricalDuration:
            return self
        if not isinstance(self.easing, Linear):
            logger.debug("Fragmenting %s, the easing %s is replaced by a linear easing",
                         self, self.easing)
        return Interpolation(start=self.tempoAt(start), end=self.tempoAt(end),
                             metricalDuration=end - start, easing=Linear())

    def _normalizedValues(self, offset: MetricalDuration
                          ) -> tuple[Tempo, Tempo, MetricalDuration, MetricalDuration]:
        den = lcm([self.start.subdivision,
                   self.end.subdivision,
                   self.metricalDuration.denominator,
                   offset.denominator])
        return (self.start.respelling(den),
                self.end.respelling(den),
                self.metricalDuration.respelling(den),
                offset.respelling(den))

    def tempoAt(self, offset: MetricalDuration | F) -> Tempo:
        """
        The tempo at the given metrical offset

        Past the end of this interpolation the end tempo is returned

        Args:
            offset: the offset from the beginning of this interpolation

        Returns:
            the tempo at offset
        """
        offset = asMetricalDuration(offset)
        if offset == ZERO:
            self.easing.evaluate(0.)
            return self.start
        if offset >= self.metricalDuration:
            self.easing.evaluate(1.)
            return self.end
        start, end, _, _ = self._normalizedValues(offset)
        x = float(offset / self.metricalDuration)
        eased = self.easing.evaluate(x)
        return Tempo(start.bpm * (end.bpm / start.bpm) ** eased, start.subdivision)

    def secondsOffset(self, offset: MetricalDuration | F) -> float:
        """
        The offset in seconds corresponding to the given metrical offset

        For a constant tempo or a linear easing the result is exact. For any
        other easing the interpolation is divided in segments (see the config
        key 'interpolation.approxResolution') and the duration of each segment
        is computed with the tempo at its beginning

        Args:
            offset: the metrical offset from the beginning of this interpolation

        Returns:
            the offset in seconds
        """
        offset = asMetricalDuration(offset)
        if offset == ZERO:
            return 0.

        start, end, duration, normalizedOffset = self._normalizedValues(offset)
        if start == end:
            return normalizedOffset.numerator * start.durationOfBeat

        if isinstance(self.easing, Linear):
            # The duration of a beat moves exponentially from a to b, so its
            # integral has a closed form
            a = start.durationOfBeat
            b = end.durationOfBeat
            x = float(offset / self.metricalDuration)
            integral = (math.pow(b / a, x) - 1) * a / math.log(b / a)
            return integral * duration.numerator

        return self._approximateSecondsOffset(offset)

    def _approximateSecondsOffset(self, offset: MetricalDuration) -> float:
        resolution = config['interpolation.approxResolution']
        numFullSegments = math.floor(offset.asFraction() * resolution)
        start, end, _, _ = self._normalizedValues(offset)

        # Tempo at the beginning of each full segment, clamped at the end
        positions = np.arange(numFullSegments, dtype=float) / resolution
        xs = np.minimum(positions / float(self.metricalDuration), 1.0)
        eased = np.fromiter((self.easing.evaluate(x) for x in xs), dtype=float,
                            count=numFullSegments)
        bpms = start.bpm * (end.bpm / start.bpm) ** eased
        accum = float(np.sum(60. / bpms)) * start.subdivision / resolution

        lastSegment = offset - MetricalDuration(numFullSegments, resolution)
        if lastSegment > ZERO:
            lastTempo = self.tempoAt(MetricalDuration(numFullSegments, resolution))
            accum += lastTempo.secondsFor(lastSegment)
        return accum
