"""
A tempo timeline

A :class:`Stratum` is a spanning container of tempo
:class:`~tactus.tempo.Interpolation`, keyed by metrical offset. It maps any
metrical offset within it to seconds:

.. code-block:: python

    >>> builder = Stratum.builder()
    >>> stratum = (builder.addTempo(Tempo(60), (0, 4), interpolating=True)
    ...                   .addTempo(Tempo(120), (4, 4))
    ...                   .addTempo(Tempo(120), (8, 4))
    ...                   .build())
    >>> round(stratum.secondsOffset(MetricalDuration(4, 4)), 4)
    2.8854

"""
from __future__ import annotations
from dataclasses import dataclass
import logging

from emlib import iterlib
from emlib import misc

from .duration import MetricalDuration, asMetricalDuration, ZERO
from .spanning import SpanningContainer, SpanningContainerBuilder
from .tempo import Tempo, Interpolation

import typing as _t

if _t.TYPE_CHECKING:
    from typing import Sequence
    from typing_extensions import Self
    from .common import F, ratio_t
    offset_t = MetricalDuration | F | ratio_t | str | int


logger = logging.getLogger("tactus.stratum")


__all__ = (
    'Stratum',
    'StratumBuilder',
    'TempoContext',
)


@dataclass(frozen=True)
class TempoContext:
    """An interpolation together with an offset within it"""

    interpolation: Interpolation
    """The interpolation"""

    offset: MetricalDuration
    """Metrical offset within the interpolation"""

    @property
    def tempo(self) -> Tempo:
        """The tempo at offset"""
        return self.interpolation.tempoAt(self.offset)


class Stratum(SpanningContainer[Interpolation]):
    """
    A sequence of tempo interpolations forming a tempo timeline

    Use :meth:`builder` to create a Stratum

    Args:
        offsets: the metrical offset of each interpolation
        elements: the interpolations
    """
    zero = ZERO

    def __init__(self, offsets: Sequence[MetricalDuration] = (),
                 elements: Sequence[Interpolation] = ()):
        super().__init__(offsets, elements)
        durations = [interpolation.durationSecs for interpolation in self.elements]
        self.secondsOffsets: list[float] = [0.] + list(iterlib.partialsum(durations))
        """The offset in seconds of each interpolation, plus the end of the last one"""

    @classmethod
    def builder(cls) -> StratumBuilder:
        return StratumBuilder(cls)

    @property
    def durationSecs(self) -> float:
        """Total duration in seconds"""
        return self.secondsOffsets[-1]

    def _indexOf(self, offset: MetricalDuration) -> int | None:
        # The end of the stratum belongs to the last interpolation
        index = self.indexOf(offset)
        if index is None and self and offset == self.duration:
            return len(self) - 1
        return index

    def secondsOffset(self, offset: offset_t) -> float | None:
        """
        The offset in seconds of the given metrical offset

        Args:
            offset: the metrical offset, from the beginning of this stratum

        Returns:
            the offset in seconds, or None if offset lies outside this stratum
        """
        offset = asMetricalDuration(offset)
        index = self._indexOf(offset)
        if index is None:
            return None
        interpolationOffset, interpolation = self[index]
        secs = interpolation.secondsOffset(offset - interpolationOffset)
        return self.secondsOffsets[index] + secs

    def interpolationAt(self, offset: offset_t) -> Interpolation | None:
        """The interpolation containing offset, None if outside this stratum"""
        index = self._indexOf(asMetricalDuration(offset))
        return None if index is None else self.elements[index]

    def tempoContext(self, offset: offset_t) -> TempoContext | None:
        """
        The interpolation containing offset and the offset within it

        Returns None if offset lies outside this stratum
        """
        offset = asMetricalDuration(offset)
        index = self._indexOf(offset)
        if index is None:
            return None
        interpolationOffset, interpolation = self[index]
        return TempoContext(interpolation=interpolation, offset=offset - interpolationOffset)

    def tempoAt(self, offset: offset_t) -> Tempo | None:
        """The tempo at offset, None if outside this stratum"""
        context = self.tempoContext(offset)
        return None if context is None else context.tempo

    def fragment(self, start: offset_t, end: offset_t) -> Self:
        """
        The part of this stratum between start and end, starting at offset zero

        The interpolations at the boundaries are fragmented (see
        :meth:`Interpolation.fragment <tactus.tempo.Interpolation.fragment>`),
        interpolations in between are kept as they are

        Args:
            start: start offset
            end: end offset

        Returns:
            a new Stratum
        """
        return super().fragment(asMetricalDuration(start), asMetricalDuration(end))

    def dump(self) -> None:
        rows = [(i, offset, self.end(i), self.secondsOffsets[i], interpolation)
                for i, (offset, interpolation) in enumerate(self)]
        misc.print_table(rows, headers=('idx', 'offset', 'end', 'seconds', 'interpolation'),
                         floatfmt='.3f', showindex=False)


class StratumBuilder(SpanningContainerBuilder[Interpolation]):
    """
    Builds a :class:`Stratum`

    Interpolations can be added one after the other via :meth:`add`, or a
    stratum can be described by its tempo changes via :meth:`addTempo`
    """
    def __init__(self, product: type[Stratum] = Stratum):
        super().__init__(product)
        self._pending: tuple[MetricalDuration, Tempo, bool] | None = None

    def add(self, element: Interpolation) -> Self:
        self._pending = None
        return super().add(element)

    def addTempo(self, tempo: Tempo, offset: offset_t, interpolating=False) -> Self:
        """
        Add a tempo change at the given offset

        The segment started by the previous tempo change ends here: it
        interpolates towards ``tempo`` if the previous change was marked as
        ``interpolating``, otherwise it holds the previous tempo. The last
        tempo added only marks the end of the previous segment

        The first tempo change, and the first one after an :meth:`add`, must
        be placed at the current offset of the builder. Otherwise a ValueError
        is raised

        Args:
            tempo: the tempo starting at offset
            offset: the metrical offset of the change
            interpolating: if True, the segment starting here interpolates
                towards the tempo of the next change

        Returns:
            self
        """
        offset = asMetricalDuration(offset)
        pending = self._pending
        if pending is not None:
            startOffset, startTempo, startInterpolating = pending
            if offset <= startOffset:
                raise ValueError(f"Tempo changes must be added in time order, "
                                 f"{offset} should come after {startOffset}")
            interpolation = Interpolation(start=startTempo,
                                          end=tempo if startInterpolating else startTempo,
                                          metricalDuration=offset - startOffset)
            logger.debug("Closing segment %s at %s", interpolation, offset)
            self.add(interpolation)
        elif offset != self.offset:
            raise ValueError(f"The first tempo change must be at the current offset of the "
                             f"builder, {self.offset}, got {offset}")
        self._pending = (offset, tempo, interpolating)
        return self
