from __future__ import annotations
import math
from functools import reduce

from emlib import mathlib

import typing as _t
if _t.TYPE_CHECKING:
    from .common import F


def isPowerOfTwo(n: int) -> bool:
    """True if ``n`` is a positive power of two (1 included)"""
    return n > 0 and mathlib.ispowerof2(n)


def lcm(values: _t.Iterable[int]) -> int:
    """
    Least common multiple of all values

    >>> lcm([4, 6, 16])
    48
    """
    return reduce(math.lcm, values, 1)


def gcd(values: _t.Iterable[int]) -> int:
    """Greatest common divisor of all values (0 for an empty sequence)"""
    return reduce(math.gcd, values, 0)


def closestPowerOfTwo(coefficient: int, target: int) -> int:
    """
    The multiple ``coefficient * 2**n`` (n >= 0) closest to ``target``

    On a tie the smaller multiple wins. The coefficient itself is returned if
    it is already greater than the target

    Args:
        coefficient: a positive integer
        target: the value to approach

    Returns:
        the power-of-two multiple of coefficient nearest to target

    >>> closestPowerOfTwo(1, 6)
    4
    >>> closestPowerOfTwo(1, 3)
    2
    >>> closestPowerOfTwo(5, 8)
    10
    """
    if coefficient <= 0:
        raise ValueError(f"The coefficient must be positive, got {coefficient}")
    candidate = coefficient
    while candidate * 2 <= target:
        candidate *= 2
    upper = candidate * 2
    return upper if (upper - target) < (target - candidate) else candidate


def exactLog2(ratio: F | float) -> int:
    """
    log2 of ratio, which must be an integral power of two (2**n, n may be negative)

    Raises ValueError if the result is not an integer
    """
    exponent = math.log2(ratio)
    rounded = round(exponent)
    if abs(exponent - rounded) > 1e-9:
        raise ValueError(f"{ratio} is not a power of two")
    return rounded


T = _t.TypeVar('T')


def clamp(value: T, lower: T, upper: T) -> T:
    """Clamp value between lower and upper"""
    if value < lower:
        return lower
    elif value > upper:
        return upper
    return value
