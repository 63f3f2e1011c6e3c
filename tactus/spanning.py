"""
Containers of elements spanning a contiguous range of a timeline

A :class:`SpanningContainer` holds elements (meter fragments, tempo
interpolations, ...) one after the other, each at the cumulative offset of
the elements before it. The offsets form a partition of ``[0, duration)``:
the first offset is 0 and each element ends where the next one begins.

A container is built with its builder and is read-only afterwards:

.. code-block:: python

    builder = MeterCollection.builder()
    builder.add(Meter(4, 4))
    builder.add(Meter(3, 8))
    meters = builder.build()
    meters.elementAt(F(1))            # (Fraction(1, 1), MeterFragment(3/8))
    meters[F(1, 2):F(5, 4)]           # a new collection spanning 3/4

An element needs to implement the :class:`Spanning` protocol.
"""
from __future__ import annotations
import logging

from emlib import misc

from .common import F0

import typing as _t

if _t.TYPE_CHECKING:
    from typing import Iterator, Iterable, Sequence
    from typing_extensions import Self


logger = logging.getLogger("tactus.spanning")


__all__ = (
    'Spanning',
    'SpanningContainer',
    'SpanningContainerBuilder',
)


class Spanning(_t.Protocol):
    """
    Protocol for elements of a :class:`SpanningContainer`

    The range of an element is expressed in its own coordinates, a fragment
    of a 4/4 meter covering its last half has a range (1/2, 1). The length is
    ``end - start``. ``fragment(start, end)`` returns a new element covering
    the given range, also in the element's own coordinates
    """

    @property
    def range(self) -> tuple[_t.Any, _t.Any]: ...

    @property
    def length(self) -> _t.Any: ...

    def fragment(self, start, end) -> Self: ...


E = _t.TypeVar('E', bound=Spanning)


class SpanningContainer(_t.Generic[E]):
    """
    A sequence of spanning elements keyed by their cumulative offset

    Do not create a container directly, use its builder (see :meth:`builder`)

    Args:
        offsets: the offset of each element, starting at zero
        elements: the elements
    """
    zero: _t.ClassVar[_t.Any] = F0
    """The offset at which the first element is placed"""

    def __init__(self, offsets: Sequence = (), elements: Sequence[E] = ()):
        if len(offsets) != len(elements):
            raise ValueError(f"Got {len(offsets)} offsets for {len(elements)} elements")
        self.offsets: tuple = tuple(offsets)
        """The offset of each element"""

        self.elements: tuple[E, ...] = tuple(elements)
        """The elements of this container"""

    @classmethod
    def builder(cls) -> SpanningContainerBuilder:
        """Create a builder for this class of container"""
        return SpanningContainerBuilder(cls)

    @classmethod
    def fromElements(cls, elements: Iterable[E]) -> Self:
        """Create a container holding the given elements, one after the other"""
        return cls.builder().addAll(elements).build()

    @classmethod
    def empty(cls) -> Self:
        return cls()

    def __len__(self) -> int:
        return len(self.elements)

    def __iter__(self) -> Iterator[tuple[_t.Any, E]]:
        return zip(self.offsets, self.elements)

    def __bool__(self) -> bool:
        return bool(self.elements)

    def __eq__(self, other) -> bool:
        return (type(self) is type(other) and
                self.offsets == other.offsets and
                self.elements == other.elements)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.offsets, self.elements))

    def __repr__(self):
        items = ", ".join(f"{offset}: {element}" for offset, element in self)
        return f"{type(self).__name__}({items})"

    @_t.overload
    def __getitem__(self, item: int) -> tuple[_t.Any, E]: ...

    @_t.overload
    def __getitem__(self, item: slice) -> Self: ...

    def __getitem__(self, item):
        """
        container[i] returns the pair (offset, element) at index i

        container[start:end] returns a fragment of this container (see
        :meth:`fragment`)
        """
        if isinstance(item, slice):
            if item.step is not None:
                raise ValueError("A step is not supported when fragmenting a container")
            start = self.zero if item.start is None else item.start
            end = self.duration if item.stop is None else item.stop
            return self.fragment(start, end)
        return self.offsets[item], self.elements[item]

    @property
    def duration(self):
        """The total length of this container"""
        if not self.elements:
            return self.zero
        return self.offsets[-1] + self.elements[-1].length

    def end(self, index: int):
        """The end offset of the element at the given index"""
        return self.offsets[index] + self.elements[index].length

    def indexOf(self, offset, allowingEnd=False) -> int | None:
        """
        Index of the element containing the given offset

        Args:
            offset: the offset to search
            allowingEnd: if False, an element contains the offsets within
                ``[start, end)``. If True, it contains ``(start, end]``, so
                that an offset lying exactly at a boundary resolves to the
                element *ending* there. This is used to resolve the end of a range

        Returns:
            the index of the element, or None if offset is outside this container

        Example
        ~~~~~~~

        With two elements spanning [0, 4) and [4, 8)

        =======  ==============  ==================
        offset   allowingEnd=F   allowingEnd=T
        =======  ==============  ==================
        0        0               None
        4        1               0
        8        None            1
        =======  ==============  ==================
        """
        start = 0
        end = len(self.offsets)
        while start < end:
            middle = start + (end - start) // 2
            elementStart = self.offsets[middle]
            elementEnd = elementStart + self.elements[middle].length
            if allowingEnd:
                if elementStart < offset <= elementEnd:
                    return middle
                if offset > elementEnd:
                    start = middle + 1
                else:
                    end = middle
            else:
                if elementStart <= offset < elementEnd:
                    return middle
                if offset >= elementEnd:
                    start = middle + 1
                else:
                    end = middle
        return None

    def elementAt(self, offset) -> tuple[_t.Any, E] | None:
        """
        The pair (offset, element) of the element containing the given offset

        Returns None if the offset is outside this container
        """
        index = self.indexOf(offset)
        if index is None:
            return None
        return self.offsets[index], self.elements[index]

    def _fragmentFrom(self, offset, index: int) -> E:
        elementOffset, element = self.offsets[index], self.elements[index]
        start, end = element.range
        return element.fragment(start + (offset - elementOffset), end)

    def _fragmentTo(self, offset, index: int) -> E:
        elementOffset, element = self.offsets[index], self.elements[index]
        start, end = element.range
        return element.fragment(start, start + (offset - elementOffset))

    def fragment(self, start, end) -> Self:
        """
        A new container spanning the range [start, end) of this one

        The elements at the boundaries are fragmented, the elements in
        between are kept as they are. The offsets of the returned container
        start at zero

        Args:
            start: the start offset
            end: the end offset. If it lies past the end of this container,
                the fragment extends to the end

        Returns:
            the fragment. It is empty if start lies outside this container
        """
        startIndex = self.indexOf(start)
        if startIndex is None:
            logger.debug("Offset %s outside of %s, returning an empty fragment", start, self)
            return self.empty()
        if end <= start:
            return self.empty()

        endIndex = self.indexOf(end, allowingEnd=True)
        if endIndex is None:
            endIndex = len(self) - 1
            end = min(end, self.duration)

        if endIndex <= startIndex:
            elementOffset, element = self.offsets[startIndex], self.elements[startIndex]
            elementStart, elementEnd = element.range
            fragmentEnd = min(elementStart + (end - elementOffset), elementEnd)
            fragment = element.fragment(elementStart + (start - elementOffset), fragmentEnd)
            return self.fromElements([fragment])

        first = self._fragmentFrom(start, startIndex)
        last = self._fragmentTo(end, endIndex)
        middle = self.elements[startIndex+1:endIndex]
        return self.fromElements([first, *middle, last])

    def dump(self) -> None:
        """Print the offsets and elements of this container as a table"""
        rows = [(i, offset, self.end(i), element)
                for i, (offset, element) in enumerate(self)]
        misc.print_table(rows, headers=('idx', 'offset', 'end', 'element'), showindex=False)


class SpanningContainerBuilder(_t.Generic[E]):
    """
    Builds a :class:`SpanningContainer` by appending elements in time order

    Each element is placed at the current offset, which then advances by
    the length of the element

    Args:
        product: the class of the container to build
    """
    def __init__(self, product: type[SpanningContainer[E]]):
        self.product = product
        self.offset = product.zero
        self.offsets: list = []
        self.elements: list[E] = []

    def add(self, element: E) -> Self:
        """
        Append element at the current offset

        Raises ValueError if the element has no length
        """
        if not element.length > self.product.zero:
            raise ValueError(f"Cannot add an element without length: {element}")
        self.offsets.append(self.offset)
        self.elements.append(element)
        self.offset = self.offset + element.length
        return self

    def addAll(self, elements: Iterable[E]) -> Self:
        """Append each of the elements"""
        for element in elements:
            self.add(element)
        return self

    def build(self) -> SpanningContainer[E]:
        """Create the container"""
        return self.product(self.offsets, self.elements)
