"""
Meters and collections of meters

A :class:`Meter` is a time signature (numerator, denominator). A
:class:`MeterFragment` is a meter together with the part of it which is
actually used, which allows a collection to start or end in the middle of
a measure. A :class:`MeterCollection` is a spanning container of meter
fragments, offsets are expressed in whole notes.

.. code-block:: python

    >>> meters = MeterCollection.fromMeters([Meter(4, 4), Meter(3, 4), Meter(5, 8)])
    >>> meters.duration
    Fraction(19, 8)
    >>> meters[F(1, 2):F(2)]
    MeterCollection(0: MeterFragment(4/4, 1/2-1), 1/2: MeterFragment(3/4), 5/4: MeterFragment(5/8, 0-1/4))

"""
from __future__ import annotations
from dataclasses import dataclass
import re

from .common import F, F0, asF
from .mathutils import isPowerOfTwo
from .spanning import SpanningContainer, SpanningContainerBuilder

import typing as _t

if _t.TYPE_CHECKING:
    from typing import Iterable
    from typing_extensions import Self


__all__ = (
    'Meter',
    'MeterFragment',
    'MeterCollection',
    'MeterCollectionBuilder',
    'BeatContext',
)


@dataclass(frozen=True)
class Meter:
    """
    A meter, or time signature

    Args:
        numerator: number of beats
        denominator: the beat (4=quarter, 8=eighth, ...), a power of two
    """
    numerator: int
    denominator: int

    def __post_init__(self):
        if self.numerator <= 0:
            raise ValueError(f"The numerator of a meter must be positive, got {self.numerator}")
        if not isPowerOfTwo(self.denominator):
            raise ValueError(f"The denominator of a meter must be a power of two, "
                             f"got {self.denominator}")

    @classmethod
    def parse(cls, s: str | tuple[int, int]) -> Meter:
        """
        Parse a meter from a str "num/den" or a tuple (num, den)

        >>> Meter.parse("7/8")
        Meter(7/8)
        """
        if isinstance(s, tuple):
            return cls(*s)
        match = re.fullmatch(r"\s*(\d+)\s*/\s*(\d+)\s*", s)
        if not match:
            raise ValueError(f"Cannot parse meter: {s!r}")
        return cls(int(match.group(1)), int(match.group(2)))

    @property
    def length(self) -> F:
        """The length of this meter, in whole notes"""
        return F(self.numerator, self.denominator)

    def beatOffsets(self) -> list[F]:
        """The offset of each beat within this meter"""
        return [F(i, self.denominator) for i in range(self.numerator)]

    def __repr__(self):
        return f"Meter({self.numerator}/{self.denominator})"


@dataclass(frozen=True)
class MeterFragment:
    """
    The part of a meter spanning from ``start`` to ``end``

    Args:
        meter: the meter
        start: start offset within the meter, in whole notes
        end: end offset within the meter. None to use the length of the meter
    """
    meter: Meter
    start: F = F0
    end: F | None = None

    def __post_init__(self):
        object.__setattr__(self, 'start', asF(self.start))
        object.__setattr__(self, 'end', self.meter.length if self.end is None else asF(self.end))
        if not (F0 <= self.start <= self.end <= self.meter.length):
            raise ValueError(f"Invalid range ({self.start}, {self.end}) for {self.meter}")

    @property
    def range(self) -> tuple[F, F]:
        return self.start, self.end

    @property
    def length(self) -> F:
        return self.end - self.start

    def isComplete(self) -> bool:
        """Does this fragment span the whole meter?"""
        return self.start == 0 and self.end == self.meter.length

    def fragment(self, start: F, end: F) -> MeterFragment:
        """A fragment of the same meter spanning (start, end), in meter coordinates"""
        return MeterFragment(self.meter, start, end)

    def __repr__(self):
        if self.isComplete():
            return f"MeterFragment({self.meter.numerator}/{self.meter.denominator})"
        return (f"MeterFragment({self.meter.numerator}/{self.meter.denominator}, "
                f"{self.start}-{self.end})")


@dataclass(frozen=True)
class BeatContext:
    """A beat within a meter collection"""

    meterOffset: F
    """Offset of the meter fragment holding this beat"""

    meter: Meter
    """The meter holding this beat"""

    offset: F
    """Offset of the beat within the meter"""


class MeterCollection(SpanningContainer[MeterFragment]):
    """
    A spanning container of meter fragments, keyed by offset in whole notes

    Use :meth:`fromMeters` or :meth:`builder` to create a collection
    """

    @classmethod
    def builder(cls) -> MeterCollectionBuilder:
        return MeterCollectionBuilder(cls)

    @classmethod
    def fromMeters(cls, meters: Iterable[Meter | MeterFragment | str]) -> Self:
        """
        Create a collection from a sequence of meters

        Args:
            meters: a sequence of Meters, MeterFragments or strings
                as accepted by :meth:`Meter.parse`
        """
        return cls.builder().addAll(meters).build()

    @property
    def meters(self) -> list[Meter]:
        """The meter of each fragment"""
        return [fragment.meter for fragment in self.elements]

    def beatContexts(self) -> list[BeatContext]:
        """
        A BeatContext for each beat in this collection

        The beats of a fragment are placed every ``1/denominator`` from the
        start of the fragment
        """
        out = []
        for offset, fragment in self:
            step = F(1, fragment.meter.denominator)
            beat = fragment.start
            while beat < fragment.end:
                out.append(BeatContext(meterOffset=offset, meter=fragment.meter, offset=beat))
                beat += step
        return out


class MeterCollectionBuilder(SpanningContainerBuilder[MeterFragment]):
    """
    Builds a :class:`MeterCollection`

    Meters are converted to fragments spanning the whole meter
    """
    def add(self, meter: Meter | MeterFragment | str) -> Self:
        if isinstance(meter, (str, tuple)):
            meter = Meter.parse(meter)
        if isinstance(meter, Meter):
            meter = MeterFragment(meter)
        return super().add(meter)
