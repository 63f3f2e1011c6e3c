"""
Trees of metrical durations

A metrical duration tree binds a proportion tree to a concrete duration. Each
node holds the :class:`~tactus.duration.MetricalDuration` of its span, the
root holds the total and the children of a branch divide the duration of
their parent according to their proportions.

.. code-block:: python

    >>> from tactus import *
    >>> durationTree(16, [1, [1, 2, 3]])
    Branch(4/16, [Leaf(1/16), Leaf(2/16), Leaf(3/16)])
    >>> durationTree(MetricalDuration(5, 32), [1, [[1, [1, 1, 1]], 2, 3]])
    Branch(10/64, [Branch(2/64, [Leaf(1/64), Leaf(1/64), Leaf(1/64)]), Leaf(4/64), Leaf(6/64)])

"""
from __future__ import annotations
import math
import logging
from itertools import accumulate

from .common import F, F0, F1, asF
from .duration import MetricalDuration, asMetricalDuration
from .tree import Tree, Branch, Leaf
from .proportiontree import ProportionTree, normalized
from ._logutils import LazyStr

import typing as _t


logger = logging.getLogger("tactus.durationtree")


__all__ = (
    'MetricalDurationTree',
    'fromSubdivision',
    'fromDuration',
    'durationTree',
    'scaling',
    'leafOffsets',
)


MetricalDurationTree: _t.TypeAlias = Tree[MetricalDuration]


def fromSubdivision(subdivision: int, proportions: Tree[int]) -> MetricalDurationTree:
    """
    Create a duration tree from a proportion tree and a subdivision

    Each value ``v`` of the tree becomes the duration ``v/subdivision``. The
    proportion tree is used as given, it should already be normalized.

    Args:
        subdivision: the denominator of every duration (a power of two)
        proportions: a (normalized) proportion tree

    Returns:
        the duration tree
    """
    return proportions.map(lambda value: MetricalDuration(value, subdivision))


def fromDuration(duration: MetricalDuration, proportions: Tree[int]
                 ) -> MetricalDurationTree:
    """
    Create a duration tree with the given duration at its root

    The proportion tree is scaled so that its root is a multiple of the
    beats of ``duration``, then normalized. The subdivision is adjusted
    to the normalized root

    Args:
        duration: the duration of the root
        proportions: a proportion tree

    Returns:
        the duration tree. Its root equals ``duration``, possibly with
        a different spelling
    """
    beats = duration.numerator
    subdivision = duration.denominator
    multiplier = math.lcm(beats, proportions.value) // proportions.value
    scaled = proportions.map(lambda value: value * multiplier)
    normalizedTree = normalized(scaled)
    newSubdivision = F(subdivision * normalizedTree.value, beats)
    if newSubdivision.denominator != 1:
        raise ValueError(f"Cannot fit {proportions} into {duration}, the resulting "
                         f"subdivision ({newSubdivision}) is not an integer")
    logger.debug("Scaled proportions by %d, subdivision %d -> %s, normalized tree:\n%s",
                 multiplier, subdivision, newSubdivision, LazyStr.dump(normalizedTree))
    return fromSubdivision(int(newSubdivision), normalizedTree)


def durationTree(duration: MetricalDuration | int | tuple[int, int] | str,
                 proportions: _t.Sequence | Tree[int]
                 ) -> MetricalDurationTree:
    """
    Create a duration tree from a duration (or subdivision) and proportions

    Args:
        duration: either an int, used as subdivision, or a metrical duration
            (anything accepted by :func:`~tactus.duration.asMetricalDuration`
            except an int) which becomes the duration of the root
        proportions: a flat list of ints (the children of the root), a nested
            sequence ``[value, [children...]]`` or a proportion tree

    Returns:
        the duration tree

    Example
    ~~~~~~~

        >>> durationTree(MetricalDuration(3, 16), [])
        Branch(3/16, [Leaf(3/16)])
        >>> durationTree(MetricalDuration(1, 8), [1, 1, 1])
        Branch(2/16, [Leaf(1/16), Leaf(1/16), Leaf(1/16)])
    """
    if isinstance(duration, int):
        tree = normalized(ProportionTree(proportions))
        return fromSubdivision(duration, tree)

    duration = asMetricalDuration(duration)
    if isinstance(proportions, Tree):
        return fromDuration(duration, proportions)
    if not proportions:
        return Branch(duration, (Leaf(duration),))
    if all(isinstance(p, int) for p in proportions):
        return fromDuration(duration, ProportionTree([duration.numerator, list(proportions)]))
    return fromDuration(duration, ProportionTree(proportions))


def duration(tree: MetricalDurationTree) -> MetricalDuration:
    """The duration of the root of this tree"""
    return tree.value


def scaling(tree: Tree) -> Tree[F]:
    """
    The inherited scale of each node

    The root has a scale of 1. The children of a branch are scaled by the
    ratio between the value of their parent and the sum of their own values,
    multiplied by the scale of the parent. In a triplet of eighths within a
    quarter (2/16 divided in 3 * 1/16) each eighth has a scale of 2/3

    Args:
        tree: a duration tree or a proportion tree

    Returns:
        a tree of the same shape holding the scale of each node
    """
    return _scaling(tree, F1)


def _scaling(tree: Tree, scale: F) -> Tree[F]:
    if not isinstance(tree, Branch):
        return Leaf(scale)
    total = sum((asF(child.value) for child in tree.trees), F0)
    childScale = scale * asF(tree.value) / total
    return Branch(scale, tuple(_scaling(child, childScale) for child in tree.trees))


def leafOffsets(tree: MetricalDurationTree) -> list[F]:
    """
    The offset of each leaf from the start of the tree

    The offset of each leaf is the sum of the durations of the leaves
    preceding it, scaled by the scale of the leaf (see :func:`scaling`)

    Args:
        tree: a duration tree

    Returns:
        a list with the offset of each leaf

    Example
    ~~~~~~~

        >>> leafOffsets(durationTree(MetricalDuration(1, 8), [1, 1, 1]))
        [Fraction(0, 1), Fraction(1, 24), Fraction(1, 12)]
    """
    durations = [asF(leaf) for leaf in tree.leaves]
    offsets = [F0] + list(accumulate(durations[:-1]))
    return [offset * scale for offset, scale in zip(offsets, scaling(tree).leaves)]
