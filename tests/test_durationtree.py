"""Tests for metrical duration trees.

The scenarios check the exact spelling of every node, not only its value.
"""

import pytest

from tactus.common import F
from tactus.duration import MetricalDuration
from tactus.mathutils import isPowerOfTwo
from tactus.proportiontree import ProportionTree
from tactus.tree import Branch, Leaf
from tactus.durationtree import (
    duration,
    durationTree,
    fromDuration,
    fromSubdivision,
    leafOffsets,
    scaling,
)


def md(num: int, den: int) -> MetricalDuration:
    return MetricalDuration(num, den)


def test_subdivision_16():
    tree = durationTree(16, [1, [1, 2, 3]])
    assert repr(tree) == "Branch(4/16, [Leaf(1/16), Leaf(2/16), Leaf(3/16)])"


def test_nested_tuplet():
    tree = durationTree(md(5, 32), [1, [[1, [1, 1, 1]], 2, 3]])
    assert repr(tree) == ("Branch(10/64, [Branch(2/64, [Leaf(1/64), Leaf(1/64), Leaf(1/64)]), "
                          "Leaf(4/64), Leaf(6/64)])")


@pytest.mark.parametrize("root, proportions, expectedRoot, expectedLeaves", [
    (md(17, 64), [1, 2, 3], "17/64", ["2/64", "4/64", "6/64"]),
    (md(1, 8), [1, 2, 3, 4, 1], "8/64", ["1/64", "2/64", "3/64", "4/64", "1/64"]),
    (md(3, 16), [2, 4, 3, 2, 2], "12/64", ["2/64", "4/64", "3/64", "2/64", "2/64"]),
    (md(5, 8), [1, 1], "5/8", ["2/8", "2/8"]),
    (md(8, 64), [2, 2, 1], "8/64", ["4/64", "4/64", "2/64"]),
    (md(1, 8), [1, 1, 1], "2/16", ["1/16", "1/16", "1/16"]),
])
def test_flat_proportions(root, proportions, expectedRoot, expectedLeaves):
    tree = durationTree(root, proportions)
    assert repr(tree.value) == expectedRoot
    assert [repr(leaf) for leaf in tree.leaves] == expectedLeaves


@pytest.mark.parametrize("root, proportions", [
    (md(17, 64), [1, 2, 3]),
    (md(1, 8), [1, 2, 3, 4, 1]),
    (md(3, 16), [2, 4, 3, 2, 2]),
    (md(5, 32), [1, [[1, [1, 1, 1]], 2, 3]]),
    (md(3, 4), [1, [1, 1, 1, 1, 1]]),
])
def test_root_keeps_duration(root, proportions):
    # The root is the requested duration, spelled with a power of two
    # multiple of its denominator
    tree = durationTree(root, proportions)
    assert tree.value == root
    assert tree.value.denominator % root.denominator == 0
    assert isPowerOfTwo(tree.value.denominator // root.denominator)


def test_empty_proportions():
    tree = durationTree(md(3, 16), [])
    assert tree == Branch(md(3, 16), (Leaf(md(3, 16)),))
    assert repr(tree) == "Branch(3/16, [Leaf(3/16)])"


def test_duration_accepts_str_and_tuple():
    assert durationTree("1/8", [1, 1, 1]) == durationTree((1, 8), [1, 1, 1])


def test_from_subdivision_uses_tree_as_given():
    tree = fromSubdivision(8, ProportionTree([3, [1, 1]]))
    assert repr(tree) == "Branch(3/8, [Leaf(1/8), Leaf(1/8)])"


def test_from_duration():
    tree = fromDuration(md(1, 4), ProportionTree([1, [1, 1, 1]]))
    assert repr(tree) == "Branch(2/8, [Leaf(1/8), Leaf(1/8), Leaf(1/8)])"


def test_duration():
    assert duration(durationTree(16, [1, [1, 2, 3]])) == md(1, 4)


def test_scaling_triplet():
    tree = durationTree(md(1, 8), [1, 1, 1])
    assert scaling(tree) == Branch(F(1), (Leaf(F(2, 3)), Leaf(F(2, 3)), Leaf(F(2, 3))))


def test_scaling_without_tuplet():
    tree = durationTree(md(4, 16), [1, 1, 2])
    assert scaling(tree).leaves == [F(1)] * 3


def test_leaf_offsets_triplet():
    tree = durationTree(md(1, 8), [1, 1, 1])
    assert leafOffsets(tree) == [F(0), F(1, 24), F(1, 12)]


def test_leaf_offsets_first_is_zero():
    tree = durationTree(md(5, 32), [1, [[1, [1, 1, 1]], 2, 3]])
    offsets = leafOffsets(tree)
    assert offsets[0] == 0
    assert len(offsets) == len(tree.leaves)


def test_scaling_uses_values_across_spellings():
    # A quarter holding three eighths: each eighth plays as 2/3 of its value
    tree = Branch(md(1, 4), (Leaf(md(1, 8)), Leaf(md(1, 8)), Leaf(md(1, 8))))
    assert scaling(tree).leaves == [F(2, 3)] * 3
