"""
Metrical durations: rational durations with a power-of-two denominator

A :class:`MetricalDuration` keeps its spelling. ``MetricalDuration(4, 16)`` and
``MetricalDuration(1, 4)`` are equal (and hash equally) but are printed, and
notated, differently.
"""
from __future__ import annotations
import functools

from .common import F
from .mathutils import isPowerOfTwo

import typing as _t


__all__ = (
    'MetricalDuration',
    'asMetricalDuration',
    'ZERO',
)


@functools.total_ordering
class MetricalDuration:
    """
    A duration expressed as numerator/denominator, denominator a power of two

    Args:
        numerator: number of beats
        denominator: the subdivision of the beat (4=quarter, 8=eighth, ...).
            Must be a power of two

    Raises ValueError if the denominator is not a power of two
    """
    __slots__ = ('numerator', 'denominator')

    def __init__(self, numerator: int, denominator: int = 1):
        if not isPowerOfTwo(denominator):
            raise ValueError(f"Cannot create a MetricalDuration with non-power-of-two "
                             f"denominator: {numerator}/{denominator}")
        self.numerator: int = int(numerator)
        self.denominator: int = int(denominator)

    @classmethod
    def zero(cls) -> MetricalDuration:
        return cls(0, 1)

    def asFraction(self) -> F:
        return F(self.numerator, self.denominator)

    def reduced(self) -> MetricalDuration:
        """The same duration spelled with the smallest possible denominator"""
        f = self.asFraction()
        return MetricalDuration(f.numerator, f.denominator)

    def respelling(self, denominator: int) -> MetricalDuration:
        """
        The same duration spelled with the given denominator

        Raises ValueError if the duration cannot be expressed with denominator
        """
        num = self.numerator * denominator
        if num % self.denominator:
            raise ValueError(f"{self} cannot be expressed with denominator {denominator}")
        return MetricalDuration(num // self.denominator, denominator)

    def __float__(self) -> float:
        return self.numerator / self.denominator

    def __bool__(self) -> bool:
        return self.numerator != 0

    def __repr__(self):
        return f"{self.numerator}/{self.denominator}"

    def __hash__(self):
        return hash(self.asFraction())

    def __eq__(self, other) -> bool:
        if isinstance(other, MetricalDuration):
            return self.numerator * other.denominator == other.numerator * self.denominator
        if isinstance(other, (int, F)):
            return self.asFraction() == other
        return NotImplemented

    def __lt__(self, other) -> bool:
        if isinstance(other, MetricalDuration):
            return self.numerator * other.denominator < other.numerator * self.denominator
        if isinstance(other, (int, F)):
            return self.asFraction() < other
        return NotImplemented

    def _common(self, other: MetricalDuration) -> tuple[int, int, int]:
        den = max(self.denominator, other.denominator)
        return (self.numerator * (den // self.denominator),
                other.numerator * (den // other.denominator),
                den)

    def __add__(self, other) -> MetricalDuration | F:
        if isinstance(other, int):
            other = MetricalDuration(other)
        elif isinstance(other, F):
            # mixing with a plain Fraction loses the spelling
            return self.asFraction() + other
        elif not isinstance(other, MetricalDuration):
            return NotImplemented
        a, b, den = self._common(other)
        return MetricalDuration(a + b, den)

    __radd__ = __add__

    def __sub__(self, other) -> MetricalDuration | F:
        if isinstance(other, int):
            other = MetricalDuration(other)
        elif isinstance(other, F):
            return self.asFraction() - other
        elif not isinstance(other, MetricalDuration):
            return NotImplemented
        a, b, den = self._common(other)
        return MetricalDuration(a - b, den)

    def __rsub__(self, other) -> MetricalDuration | F:
        if isinstance(other, int):
            return MetricalDuration(other) - self
        elif isinstance(other, F):
            return other - self.asFraction()
        return NotImplemented

    def __neg__(self) -> MetricalDuration:
        return MetricalDuration(-self.numerator, self.denominator)

    def __mul__(self, other) -> MetricalDuration:
        if isinstance(other, int):
            return MetricalDuration(self.numerator * other, self.denominator)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other) -> F:
        if isinstance(other, MetricalDuration):
            return self.asFraction() / other.asFraction()
        if isinstance(other, (int, F)):
            return self.asFraction() / other
        return NotImplemented


def asMetricalDuration(x: MetricalDuration | F | int | str | tuple[int, int]
                       ) -> MetricalDuration:
    """
    Convert x to a MetricalDuration

    Args:
        x: a MetricalDuration, a tuple (numerator, denominator), a str "3/16",
            an int or a Fraction with a power-of-two denominator

    Returns:
        the corresponding MetricalDuration

    >>> asMetricalDuration("3/16")
    3/16
    >>> asMetricalDuration((4, 16))
    4/16
    """
    if isinstance(x, MetricalDuration):
        return x
    elif isinstance(x, tuple):
        num, den = x
        return MetricalDuration(num, den)
    elif isinstance(x, str):
        if "/" in x:
            num, den = x.split("/")
            return MetricalDuration(int(num), int(den))
        return MetricalDuration(int(x))
    elif isinstance(x, (int, F)):
        f = F(x)
        return MetricalDuration(f.numerator, f.denominator)
    raise TypeError(f"Cannot convert {x} to a MetricalDuration")


ZERO: _t.Final[MetricalDuration] = MetricalDuration(0, 1)
