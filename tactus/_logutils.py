from __future__ import annotations
import typing as _t


class LazyStr:
    """
    A string which is only built when rendered

    Trees and containers can be large; wrapping them in a LazyStr when
    logging means their representation is only computed if the record
    is actually emitted::

        logger.debug("Normalized: %s", LazyStr.repr(tree))

    Args:
        func: a function returning a str
        args: arguments passed to func
    """
    __slots__ = ('func', 'args')

    def __init__(self, func: _t.Callable[..., str], *args):
        self.func = func
        self.args = args

    @classmethod
    def repr(cls, obj) -> LazyStr:
        return cls(repr, obj)

    @classmethod
    def dump(cls, tree) -> LazyStr:
        """The multiline dump of a tree, see :meth:`~tactus.tree.Tree.dump`"""
        return cls(tree.dump)

    def __str__(self) -> str:
        return self.func(*self.args)

    def __repr__(self) -> str:
        return f"LazyStr({self.func.__name__})"
