"""
Normalization of proportion trees

A proportion tree is a :class:`~tactus.tree.Tree` of integers where the
value of each node is a proportion relative to its siblings and the root
holds the nominal number of subdivisions. A tree like ``[1, [1, 2, 3]]``
describes a span divided in 1+2+3 parts.

Normalizing a proportion tree rewrites its values so that every node can be
expressed with the same power-of-two subdivision, while keeping the relative
durations:

    >>> normalized(asTree([1, [1, 2, 3]]))
    Branch(4, [Leaf(1), Leaf(2), Leaf(3)])

The root (1) is matched to the closest power-of-two multiple of itself (4)
to the sum of its children (6). The result is a 6:4 tuplet.
"""
from __future__ import annotations
import math
import logging

from .tree import Tree, Branch, Leaf, TreeShapeError, zipTrees, asTree
from .mathutils import closestPowerOfTwo, exactLog2, gcd
from ._logutils import LazyStr

import typing as _t


logger = logging.getLogger("tactus.proportiontree")


__all__ = (
    'ProportionTree',
    'normalized',
    'reducingSiblings',
    'matchingParentsToChildren',
    'matchingChildrenToParents',
    'propagated',
    'encodeDistance',
    'decodeDuration',
)


def ProportionTree(spec, normalize=False) -> Tree[int]:
    """
    Create a proportion tree from a nested sequence of integers

    Args:
        spec: a nested sequence of the form ``[value, [child, ...]]``, where a
            child can be an int or itself a nested sequence. A Tree is also
            accepted
        normalize: if True, the tree is normalized (see :func:`normalized`)

    Returns:
        the proportion tree

    Example
    ~~~~~~~

        >>> ProportionTree([1, [[1, [1, 1, 1]], 2, 3]])
        Branch(1, [Branch(1, [Leaf(1), Leaf(1), Leaf(1)]), Leaf(2), Leaf(3)])
        >>> ProportionTree([1, [[1, [1, 1, 1]], 2, 3]], normalize=True)
        Branch(8, [Branch(2, [Leaf(1), Leaf(1), Leaf(1)]), Leaf(4), Leaf(6)])
    """
    tree = asTree(spec)
    if not all(isinstance(v, int) for v in _values(tree)):
        raise TypeError(f"A proportion tree can only hold integers, got {spec}")
    return normalized(tree) if normalize else tree


def _values(tree: Tree) -> _t.Iterator:
    yield tree.value
    for child in tree.children:
        yield from _values(child)


def normalized(tree: Tree[int]) -> Tree[int]:
    """
    Normalize a proportion tree

    The values of the returned tree can all be represented with the same
    subdivision (denominator), this being a power of two times the
    subdivision of the root

    Args:
        tree: the proportion tree

    Returns:
        a new, normalized, proportion tree
    """
    siblingsReduced = reducingSiblings(tree)
    parentsMatched = matchingParentsToChildren(siblingsReduced)
    distances = propagated(zipTrees(siblingsReduced, parentsMatched, encodeDistance))
    logger.debug("Normalizing %s, reduced: %s, matched: %s, distances: %s",
                 LazyStr.repr(tree), LazyStr.repr(siblingsReduced),
                 LazyStr.repr(parentsMatched), LazyStr.repr(distances))
    return matchingChildrenToParents(zipTrees(siblingsReduced, distances, decodeDuration))


def reducingSiblings(tree: Tree[int]) -> Tree[int]:
    """
    Reduce each group of siblings by their gcd

    ``[2, 4, 6] -> [1, 2, 3]``. The value of the root is left untouched
    """
    if not isinstance(tree, Branch):
        return tree
    divisor = gcd(child.value for child in tree.trees)
    reduced = [child.updating(child.value // divisor) for child in tree.trees]
    return Branch(tree.value, tuple(reducingSiblings(child) for child in reduced))


def matchingParentsToChildren(tree: Tree[int]) -> Tree[int]:
    """
    Match the value of each parent to the sum of the values of its children

    * If the parent is smaller, it is scaled up to its power-of-two multiple
      closest to the sum
    * If the parent is greater, it is scaled down by its gcd with the sum
    """
    if not isinstance(tree, Branch):
        return tree
    value = tree.value
    total = sum(child.value for child in tree.trees)
    if value < total:
        value = closestPowerOfTwo(value, total)
    elif value > total:
        value = value // math.gcd(value, total)
    return Branch(value, tuple(matchingParentsToChildren(child) for child in tree.trees))


def matchingChildrenToParents(tree: Tree[int]) -> Tree[int]:
    """
    Scale up the leaves of a single-level branch whose sum falls short of its parent

    Only a branch of height 1 is considered
    """
    if not isinstance(tree, Branch) or tree.height != 1:
        return tree
    total = sum(child.value for child in tree.trees)
    if total >= tree.value:
        return tree
    quotient = closestPowerOfTwo(total, tree.value) // total
    return Branch(tree.value, tuple(child.map(lambda v: v * quotient) for child in tree.trees))


def propagated(tree: Tree[int]) -> Tree[int]:
    """
    Propagate the distances of a distance tree up and then down

    Propagating up accumulates, at each branch, its own distance plus the
    maximum distance of its children. Propagating down then hands each
    child the value of its parent minus the original distance of that
    parent, so that the whole tree shares one subdivision.
    """
    up = _propagateUp(tree)
    return _propagateDown(tree, up, None)


def _propagateUp(tree: Tree[int]) -> Tree[int]:
    if not isinstance(tree, Branch):
        return tree
    trees = tuple(_propagateUp(child) for child in tree.trees)
    return Branch(tree.value + max(child.value for child in trees), trees)


def _propagateDown(original: Tree[int], up: Tree[int], inherited: int | None
                   ) -> Tree[int]:
    if isinstance(original, Leaf) and isinstance(up, Leaf):
        # a leaf below the root always has an inherited value
        return Leaf(inherited if inherited is not None else up.value)
    elif isinstance(original, Branch) and isinstance(up, Branch):
        if len(original.trees) != len(up.trees):
            raise TreeShapeError(f"Incompatible trees: {original} and {up}")
        value = inherited if inherited is not None else up.value
        return Branch(value, tuple(_propagateDown(o, p, value - original.value)
                                   for o, p in zip(original.trees, up.trees)))
    raise TreeShapeError(f"Incompatible trees: {original} and {up}")


def encodeDistance(original: int, new: int) -> int:
    """The distance in powers of two from original to new"""
    return exactLog2(new / original)


def decodeDuration(original: int, distance: int) -> int:
    """original scaled by the power of two given by distance"""
    if distance >= 0:
        return original * 2 ** distance
    divisor = 2 ** -distance
    if original % divisor:
        raise ValueError(f"Cannot scale {original} by 2**{distance}")
    return original // divisor
