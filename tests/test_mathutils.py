"""Tests for the numeric helpers and lazy log strings."""

import logging

import pytest

from tactus import _logutils
from tactus.common import F, asF
from tactus.duration import MetricalDuration
from tactus.mathutils import clamp, closestPowerOfTwo, exactLog2, gcd, isPowerOfTwo, lcm
from tactus.tree import asTree


@pytest.mark.parametrize("n, expected", [(1, True), (2, True), (64, True), (0, False),
                                         (-4, False), (6, False), (96, False)])
def test_is_power_of_two(n, expected):
    assert isPowerOfTwo(n) is expected


def test_lcm_gcd():
    assert lcm([4, 6, 16]) == 48
    assert lcm([]) == 1
    assert gcd([4, 6, 16]) == 2
    assert gcd([]) == 0


@pytest.mark.parametrize("coefficient, target, expected", [
    (1, 6, 4),      # 4 and 8 are both 2 away, the smaller wins
    (1, 3, 2),
    (5, 6, 5),
    (5, 8, 10),
    (3, 13, 12),
    (7, 2, 7),
    (5, 5, 5),
])
def test_closest_power_of_two(coefficient, target, expected):
    assert closestPowerOfTwo(coefficient, target) == expected


def test_closest_power_of_two_needs_positive_coefficient():
    with pytest.raises(ValueError):
        closestPowerOfTwo(0, 4)


def test_exact_log2():
    assert exactLog2(8) == 3
    assert exactLog2(F(1, 4)) == -2
    with pytest.raises(ValueError):
        exactLog2(3)


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(F(1, 2), 0, 3) == F(1, 2)


def test_as_f():
    assert asF(MetricalDuration(6, 16)) == F(3, 8)
    assert asF("3/8") == F(3, 8)
    with pytest.raises(TypeError):
        asF(None)


def test_lazy_str_is_rendered_on_demand(caplog):
    calls = []

    def render():
        calls.append(1)
        return "rendered"

    logger = logging.getLogger("tactus.test")
    with caplog.at_level(logging.INFO, logger="tactus.test"):
        logger.debug("%s", _logutils.LazyStr(render))
        assert not calls
    with caplog.at_level(logging.DEBUG, logger="tactus.test"):
        logger.debug("%s", _logutils.LazyStr(render))
    assert calls
    assert "rendered" in caplog.text


def test_lazy_str_of_tree():
    tree = asTree([1, [2, 3]])
    assert str(_logutils.LazyStr.repr(tree)) == repr(tree)
    assert str(_logutils.LazyStr.dump(tree)) == tree.dump()
