"""
Leaf / branch trees holding one value per node

A tree is either a :class:`Leaf` (a value) or a :class:`Branch` (a value and a
tuple of subtrees). Trees are immutable; every transformation returns a new tree.

    >>> tree = Branch(1, (Leaf(1), Leaf(2), Leaf(3)))
    >>> tree.map(lambda v: v * 2)
    Branch(2, [Leaf(2), Leaf(4), Leaf(6)])
    >>> tree.leaves
    [1, 2, 3]

"""
from __future__ import annotations
from dataclasses import dataclass
from collections.abc import Sequence

import typing as _t

if _t.TYPE_CHECKING:
    from typing import Callable, Iterator, Any

T = _t.TypeVar('T')
U = _t.TypeVar('U')


__all__ = (
    'Tree',
    'Leaf',
    'Branch',
    'TreeShapeError',
    'zipTrees',
    'asTree',
)


class TreeShapeError(ValueError):
    """Raised when two trees expected to have the same shape do not"""


class Tree(_t.Generic[T]):
    """
    Base class for :class:`Leaf` and :class:`Branch`

    Attributes:
        value: the value held by this node
    """
    value: T

    @property
    def children(self) -> tuple[Tree[T], ...]:
        return ()

    def isLeaf(self) -> bool:
        return not isinstance(self, Branch)

    def map(self, func: Callable[[T], U]) -> Tree[U]:
        """Apply func to the value of every node"""
        raise NotImplementedError

    def updating(self, value: T) -> Tree[T]:
        """A copy of this node with its value replaced"""
        raise NotImplementedError

    @property
    def leaves(self) -> list[T]:
        """The values of the leaves, left to right"""
        return [node.value for node in self.leafNodes()]

    def leafNodes(self) -> Iterator[Tree[T]]:
        if isinstance(self, Branch):
            for child in self.children:
                yield from child.leafNodes()
        else:
            yield self

    @property
    def height(self) -> int:
        """Height of this tree. A leaf has height 0"""
        if isinstance(self, Branch):
            return 1 + max(child.height for child in self.children)
        return 0

    def dump(self, indent=0) -> str:
        """A multiline representation of this tree"""
        lines = [f"{'  ' * indent}{self.value}"]
        for child in self.children:
            lines.append(child.dump(indent + 1))
        return "\n".join(lines)


@dataclass(frozen=True)
class Leaf(Tree[T]):
    value: T

    def map(self, func: Callable[[T], U]) -> Leaf[U]:
        return Leaf(func(self.value))

    def updating(self, value: T) -> Leaf[T]:
        return Leaf(value)

    def __repr__(self):
        return f"Leaf({self.value})"


@dataclass(frozen=True)
class Branch(Tree[T]):
    value: T
    trees: tuple[Tree[T], ...]

    def __post_init__(self):
        if not isinstance(self.trees, tuple):
            object.__setattr__(self, 'trees', tuple(self.trees))
        if not self.trees:
            raise ValueError("A Branch needs at least one subtree")

    @property
    def children(self) -> tuple[Tree[T], ...]:
        return self.trees

    def map(self, func: Callable[[T], U]) -> Branch[U]:
        return Branch(func(self.value), tuple(tree.map(func) for tree in self.trees))

    def updating(self, value: T) -> Branch[T]:
        return Branch(value, self.trees)

    def __repr__(self):
        return f"Branch({self.value}, {list(self.trees)})"


def zipTrees(a: Tree[T], b: Tree[U], func: Callable[[T, U], Any]) -> Tree:
    """
    Combine two trees of the same shape node by node

    Args:
        a: the first tree
        b: the second tree, must have the same shape as ``a``
        func: a function ``(valueA, valueB) -> value``

    Returns:
        a tree of the same shape holding the combined values

    Raises TreeShapeError if the trees differ in shape
    """
    if isinstance(a, Branch) and isinstance(b, Branch):
        if len(a.trees) != len(b.trees):
            raise TreeShapeError(f"Incompatible trees: {a} and {b}")
        return Branch(func(a.value, b.value),
                      tuple(zipTrees(ta, tb, func) for ta, tb in zip(a.trees, b.trees)))
    elif isinstance(a, Leaf) and isinstance(b, Leaf):
        return Leaf(func(a.value, b.value))
    raise TreeShapeError(f"Incompatible trees: {a} and {b}")


def asTree(spec) -> Tree:
    """
    Build a tree from a nested sequence

    A branch is written as ``[value, [child, child, ...]]``, where each child
    is either a plain value (a leaf) or itself a ``[value, [...]]`` pair. A
    plain value gives a leaf.

        >>> asTree([1, [1, 2, 3]])
        Branch(1, [Leaf(1), Leaf(2), Leaf(3)])
        >>> asTree([1, [[1, [1, 1, 1]], 2, 3]])
        Branch(1, [Branch(1, [Leaf(1), Leaf(1), Leaf(1)]), Leaf(2), Leaf(3)])

    """
    if isinstance(spec, Tree):
        return spec
    if isinstance(spec, Sequence) and not isinstance(spec, str):
        if len(spec) != 2 or not isinstance(spec[1], Sequence):
            raise ValueError(f"Expected a [value, [children...]] pair, got {spec}")
        value, children = spec
        if not children:
            return Leaf(value)
        return Branch(value, tuple(asTree(child) for child in children))
    return Leaf(spec)
