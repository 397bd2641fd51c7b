"""Abstractions over collection types with fallible, capacity-bound operations."""

from __future__ import annotations

import abc
import copy
import itertools
from collections.abc import Callable, Iterable, Iterator
from typing import Any, TypeVar

C = TypeVar("C", bound="TryExtend")


class CapacityError(Exception):
    """A collection's capacity was exceeded."""

    def __init__(self, message: str = "capacity exceeded", item: Any = None) -> None:
        super().__init__(message)
        self.item = item


class Length(abc.ABC):
    """A collection with a length."""

    @abc.abstractmethod
    def __len__(self) -> int:
        """Return the number of elements."""

    def is_empty(self) -> bool:
        """Return whether the collection has no elements."""
        return len(self) == 0


class Truncate(abc.ABC):
    """A collection that can be shortened."""

    @abc.abstractmethod
    def truncate(self, length: int) -> None:
        """Keep only the first ``length`` elements; longer lengths change nothing."""


class TryExtend(abc.ABC):
    """A collection that can be extended, possibly failing when full."""

    @abc.abstractmethod
    def try_extend(self, iterable: Iterable[Any]) -> None:
        """Append the elements of ``iterable`` or raise :class:`CapacityError`."""

    def try_extend_from_slice(self, items: Iterable[Any]) -> None:
        """Append copies of ``items`` or raise :class:`CapacityError`."""
        self.try_extend(copy.copy(item) for item in items)


class TryPush(abc.ABC):
    """A collection that accepts single elements, possibly failing when full."""

    @abc.abstractmethod
    def try_push(self, item: Any) -> None:
        """Append ``item`` or raise :class:`CapacityError` carrying it."""


class Collection(Length, Truncate, TryExtend, TryPush):
    """A collection supporting every operation of this module."""


class ListCollection(Collection):
    """List-backed collection with an optional fixed capacity.

    Failed operations leave the contents unchanged.
    """

    def __init__(self, items: Iterable[Any] = (), capacity: int | None = None) -> None:
        if capacity is not None and capacity < 0:
            raise ValueError("capacity must be non-negative")
        self._capacity = capacity
        self._items: list[Any] = []
        self.try_extend(items)

    @property
    def capacity(self) -> int | None:
        """Maximum number of elements, or ``None`` when unbounded."""
        return self._capacity

    def _free(self) -> int | None:
        if self._capacity is None:
            return None
        return self._capacity - len(self._items)

    def truncate(self, length: int) -> None:
        if length < 0:
            raise ValueError("length must be non-negative")
        del self._items[length:]

    def try_extend(self, iterable: Iterable[Any]) -> None:
        free = self._free()
        if free is None:
            self._items.extend(iterable)
            return
        taken = list(itertools.islice(iterable, free + 1))
        if len(taken) > free:
            raise CapacityError(
                f"collection of capacity {self._capacity} is full", taken[free]
            )
        self._items.extend(taken)

    def try_extend_from_slice(self, items: Iterable[Any]) -> None:
        values = list(items)
        free = self._free()
        if free is not None and len(values) > free:
            raise CapacityError(
                f"collection of capacity {self._capacity} is full", values[free]
            )
        self._items.extend(copy.copy(item) for item in values)

    def try_push(self, item: Any) -> None:
        free = self._free()
        if free is not None and free <= 0:
            raise CapacityError(f"collection of capacity {self._capacity} is full", item)
        self._items.append(item)

    def is_empty(self) -> bool:
        return not self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __getitem__(self, index: int | slice) -> Any:
        return self._items[index]

    def __setitem__(self, index: int, value: Any) -> None:
        if isinstance(index, slice):
            raise TypeError("slice assignment is not supported")
        self._items[index] = value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ListCollection):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ListCollection({self._items!r}, capacity={self._capacity!r})"


def try_from_iter(cls: Callable[[], C], iterable: Iterable[Any]) -> C:
    """Create an empty collection with ``cls()`` and extend it with ``iterable``."""
    collection = cls()
    collection.try_extend(iterable)
    return collection


def try_collect(iterable: Iterable[Any], cls: Callable[[], C]) -> C:
    """Collect ``iterable`` into a new collection made by ``cls()``."""
    return try_from_iter(cls, iterable)