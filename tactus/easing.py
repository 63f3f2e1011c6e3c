"""
Easing curves

An easing maps the proportion of elapsed duration (0-1) to the proportion
of change (0-1). Each curve can be evaluated and integrated between 0 and
any point within [0, 1]

=================  ===============================================  =============
easing             formula                                          constraint
=================  ===============================================  =============
Linear             x
PowerIn(e)         x^e                                              e > 0
PowerInOut(e)      2^(e-1) x^e, mirrored for x > 0.5                e >= 1
ExponentialIn(b)   (b^x - 1) / (b - 1)                              b > 0, b != 1
SineInOut          (1 - cos(pi x)) / 2
CubicBezier        not supported
=================  ===============================================  =============

An easing can also be given as a string, see :func:`asEasing`
"""
from __future__ import annotations
from dataclasses import dataclass
import math
import re


__all__ = (
    'Easing',
    'Linear',
    'PowerIn',
    'PowerInOut',
    'ExponentialIn',
    'SineInOut',
    'CubicBezier',
    'EasingDomainError',
    'asEasing',
)


class EasingDomainError(ValueError):
    """
    Raised when an easing is evaluated outside its domain

    Attributes:
        value: the offending value (an input or a parameter of the curve)
        description: what is wrong with it
    """
    def __init__(self, value: float, description: str):
        super().__init__(f"{description}, got {value}")
        self.value = value
        self.description = description


def _checkInput(x: float) -> None:
    if not 0 <= x <= 1:
        raise EasingDomainError(x, "Input must lie in [0, 1]")


class Easing:
    """Base class of all easing curves"""

    def evaluate(self, x: float) -> float:
        """The curve evaluated at x, within [0, 1]"""
        _checkInput(x)
        self.checkParameters()
        return self._evaluate(x)

    def integrate(self, x: float) -> float:
        """The integral of the curve from 0 to x, within [0, 1]"""
        _checkInput(x)
        self.checkParameters()
        return self._integrate(x)

    def checkParameters(self) -> None:
        """Raises EasingDomainError if the parameters of this curve are invalid"""
        pass

    def _evaluate(self, x: float) -> float:
        raise NotImplementedError

    def _integrate(self, x: float) -> float:
        raise NotImplementedError


@dataclass(frozen=True)
class Linear(Easing):

    def _evaluate(self, x: float) -> float:
        return x

    def _integrate(self, x: float) -> float:
        return x ** 2 / 2


@dataclass(frozen=True)
class PowerIn(Easing):
    """x^exponent"""
    exponent: float

    def checkParameters(self) -> None:
        if not self.exponent > 0:
            raise EasingDomainError(self.exponent, "Exponent must be positive")

    def _evaluate(self, x: float) -> float:
        return x ** self.exponent

    def _integrate(self, x: float) -> float:
        e = self.exponent
        return x ** (e + 1) / (e + 1)


@dataclass(frozen=True)
class PowerInOut(Easing):
    """x^exponent in the first half, mirrored in the second half"""
    exponent: float

    def checkParameters(self) -> None:
        if not self.exponent >= 1:
            raise EasingDomainError(self.exponent, "Exponent must be at least 1")

    def _evaluate(self, x: float) -> float:
        e = self.exponent
        if x <= 0.5:
            return 2 ** (e - 1) * x ** e
        return 1 - 2 ** (e - 1) * (1 - x) ** e

    def _integrate(self, x: float) -> float:
        e = self.exponent
        if x <= 0.5:
            return 2 ** (e - 1) / (e + 1) * x ** (e + 1)
        # The antiderivative of the second half, shifted so that both halves
        # meet at 0.5. All other terms cancel out
        return 2 ** (e - 1) * (1 - x) ** (e + 1) / (e + 1) + x - 0.5


@dataclass(frozen=True)
class ExponentialIn(Easing):
    """(base^x - 1) / (base - 1)"""
    base: float

    def checkParameters(self) -> None:
        if not self.base > 0:
            raise EasingDomainError(self.base, "Base must be positive")
        if self.base == 1:
            raise EasingDomainError(self.base, "Base must not be 1")

    def _evaluate(self, x: float) -> float:
        b = self.base
        return (b ** x - 1) / (b - 1)

    def _integrate(self, x: float) -> float:
        b = self.base
        return ((b ** x - 1) / math.log(b) - x) / (b - 1)


@dataclass(frozen=True)
class SineInOut(Easing):
    """Half a cosine wave, (1 - cos(pi*x)) / 2"""

    def _evaluate(self, x: float) -> float:
        return 0.5 * (1 - math.cos(x * math.pi))

    def _integrate(self, x: float) -> float:
        return (x - math.sin(math.pi * x) / math.pi) / 2


@dataclass(frozen=True)
class CubicBezier(Easing):
    """
    A timing function given by the control points of a cubic Bézier curve

    The curve runs from (0, 0) to (1, 1). Neither evaluation nor integration
    is supported yet, both raise NotImplementedError
    """
    controlPoint1: tuple[float, float]
    controlPoint2: tuple[float, float]

    def _evaluate(self, x: float) -> float:
        raise NotImplementedError(f"evaluate is not supported for {self}")

    def _integrate(self, x: float) -> float:
        raise NotImplementedError(f"integrate is not supported for {self}")


_shapes = {
    'linear': Linear,
    'powerin': PowerIn,
    'powerinout': PowerInOut,
    'expon': ExponentialIn,
    'sine': SineInOut,
    'sineinout': SineInOut,
}


def asEasing(shape: str | Easing) -> Easing:
    """
    Convert shape to an Easing

    Args:
        shape: an Easing or a descriptor, one of 'linear', 'sine', 'powerin(e)',
            'powerinout(e)' or 'expon(b)'

    Returns:
        the easing

    >>> asEasing('powerin(2)')
    PowerIn(exponent=2.0)
    """
    if isinstance(shape, Easing):
        return shape
    match = re.fullmatch(r"\s*([a-zA-Z]+)\s*(?:\(\s*([-+0-9.eE]+)\s*\))?\s*", shape)
    if not match:
        raise ValueError(f"Could not parse easing: {shape!r}")
    name, param = match.group(1).lower(), match.group(2)
    cls = _shapes.get(name)
    if cls is None:
        raise ValueError(f"Unknown easing '{name}', possible values: {list(_shapes)}")
    if cls in (Linear, SineInOut):
        if param is not None:
            raise ValueError(f"The easing '{name}' does not take any parameter")
        return cls()
    if param is None:
        raise ValueError(f"The easing '{name}' needs a parameter, as in '{name}(2)'")
    return cls(float(param))
