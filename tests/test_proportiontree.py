"""Tests for proportion tree normalization and its passes."""

import pytest

from tactus.tree import Branch, Leaf, TreeShapeError, asTree
from tactus.proportiontree import (
    ProportionTree,
    decodeDuration,
    encodeDistance,
    matchingChildrenToParents,
    matchingParentsToChildren,
    normalized,
    propagated,
    reducingSiblings,
)


class TestPasses:

    def test_reducing_siblings(self):
        tree = asTree([1, [2, 4, 6]])
        assert reducingSiblings(tree) == asTree([1, [1, 2, 3]])

    def test_reducing_siblings_is_recursive_and_keeps_root(self):
        tree = asTree([6, [[3, [4, 8]], 6]])
        assert reducingSiblings(tree) == asTree([6, [[1, [1, 2]], 2]])

    def test_parent_smaller_than_children(self):
        # 1 -> 4, the power of two multiple of 1 closest to 6
        assert matchingParentsToChildren(asTree([1, [1, 2, 3]])).value == 4

    def test_parent_greater_than_children(self):
        assert matchingParentsToChildren(asTree([12, [1, 2, 3]])).value == 2

    def test_parent_equal_to_children(self):
        assert matchingParentsToChildren(asTree([6, [1, 2, 3]])).value == 6

    def test_matching_children_to_parents(self):
        tree = asTree([8, [1, 1, 1]])
        assert matchingChildrenToParents(tree) == asTree([8, [2, 2, 2]])

    def test_matching_children_only_for_height_one(self):
        tree = asTree([8, [[1, [1, 1]], 1]])
        assert matchingChildrenToParents(tree) == tree

    def test_propagated(self):
        distances = Branch(2, (Leaf(0), Branch(1, (Leaf(0),))))
        assert propagated(distances) == Branch(3, (Leaf(1), Branch(1, (Leaf(0),))))

    def test_encode_distance(self):
        assert encodeDistance(1, 4) == 2
        assert encodeDistance(4, 2) == -1
        assert encodeDistance(3, 3) == 0

    def test_encode_distance_not_a_power_of_two(self):
        with pytest.raises(ValueError):
            encodeDistance(2, 3)

    def test_decode_duration(self):
        assert decodeDuration(3, 2) == 12
        assert decodeDuration(12, -2) == 3
        assert decodeDuration(5, 0) == 5

    def test_decode_duration_inexact(self):
        with pytest.raises(ValueError):
            decodeDuration(3, -1)


class TestNormalized:

    @pytest.mark.parametrize("spec, expected", [
        ([1, [1, 2, 3]], [4, [1, 2, 3]]),
        ([1, [1, 1]], [2, [1, 1]]),
        ([4, [2, 2]], [2, [1, 1]]),
        ([1, [[1, [1, 1, 1]], 2, 3]], [8, [[2, [1, 1, 1]], 4, 6]]),
        ([8, [2, 2, 1]], [8, [4, 4, 2]]),
    ])
    def test_normalized(self, spec, expected):
        assert normalized(asTree(spec)) == asTree(expected)

    def test_leaf_is_unchanged(self):
        assert normalized(Leaf(3)) == Leaf(3)

    @pytest.mark.parametrize("spec", [
        [1, [1, 2, 3]],
        [1, [[1, [1, 1, 1]], 2, 3]],
        [5, [[5, [5, 5, 5]], 10, 15]],
        [3, [2, 4, 3, 2, 2]],
        [17, [1, 2, 3]],
        [1, [[2, [1, 3]], [1, [1, 1, 1, 1, 1]]]],
    ])
    def test_preserves_proportions(self, spec):
        reduced = reducingSiblings(asTree(spec))
        result = normalized(asTree(spec))
        pending = [(reduced, result)]
        while pending:
            before, after = pending.pop()
            if isinstance(before, Branch):
                ratios = {after.value / before.value
                          for before, after in zip(before.trees, after.trees)}
                assert len(ratios) == 1
                pending.extend(zip(before.trees, after.trees))


class TestProportionTree:

    def test_raw(self):
        assert ProportionTree([1, [1, 2, 3]]) == asTree([1, [1, 2, 3]])

    def test_normalize(self):
        tree = ProportionTree([1, [[1, [1, 1, 1]], 2, 3]], normalize=True)
        assert tree == asTree([8, [[2, [1, 1, 1]], 4, 6]])

    def test_only_integers(self):
        with pytest.raises(TypeError):
            ProportionTree([1, [1.5, 2]])

    def test_shape_error_is_a_value_error(self):
        assert issubclass(TreeShapeError, ValueError)
