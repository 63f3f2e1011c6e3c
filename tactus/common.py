"""
NB: this module cannot import anything from tactus itself
"""
from __future__ import annotations

import typing as _t
if _t.TYPE_CHECKING:
    from fractions import Fraction as F
else:
    from quicktions import Fraction as F


__all__ = (
    'F',
    'F0',
    'F1',
    'asF',
    'ratio_t',
)


ratio_t: _t.TypeAlias = tuple[int, int]


F0: F = F(0)
F1: F = F(1)


def asF(t: int | float | str | F) -> F:
    """
    Convert ``t`` to a fraction if needed

    Objects defining ``asFraction`` (a MetricalDuration, for example) are
    converted via that method
    """
    if isinstance(t, F):
        return t
    elif isinstance(t, (int, float, str)):
        return F(t)
    elif hasattr(t, 'asFraction'):
        return t.asFraction()
    else:
        raise TypeError(f"Could not convert {t} to a rational")
