"""Fixed-size arrays whose length is chosen from a set of supported sizes.

An :class:`Array` keeps its length for its whole life. Elements can be read
and replaced, but slice assignment that would change the length is refused.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Iterator
from typing import Any

SUPPORTED_SIZES = frozenset(
    list(range(65))
    + [96, 128, 192, 256, 384, 448, 512, 768, 896, 1024, 2048, 4096, 8192]
)


def _check_size(size: int) -> None:
    if size not in SUPPORTED_SIZES:
        raise ValueError(f"unsupported array size: {size}")


@functools.total_ordering
class Array:
    """Array of a fixed, supported length."""

    __slots__ = ("_items",)

    def __init__(self, items: Iterable[Any]) -> None:
        values = list(items)
        _check_size(len(values))
        self._items = values

    @classmethod
    def from_fn(cls, size: int, func: Callable[[int], Any]) -> Array:
        """Build an array of ``size`` elements, element ``i`` being ``func(i)``."""
        _check_size(size)
        return cls(func(i) for i in range(size))

    @classmethod
    def from_slice(cls, data: Iterable[Any], size: int) -> Array:
        """Build an array of ``size`` elements from ``data``.

        Raises :class:`ValueError` if ``data`` does not hold exactly ``size``
        elements.
        """
        values = list(data)
        if len(values) != size:
            raise ValueError(
                f"could not convert slice of length {len(values)} to array of size {size}"
            )
        return cls(values)

    def map(self, func: Callable[[Any], Any]) -> Array:
        """Return a new array of the same size with ``func`` applied to each element."""
        return type(self)(func(item) for item in self._items)

    def as_slice(self) -> list[Any]:
        """Return the elements as a list."""
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int | slice) -> Any:
        return self._items[index]

    def __setitem__(self, index: int | slice, value: Any) -> None:
        if isinstance(index, slice):
            updated = list(self._items)
            updated[index] = value
            if len(updated) != len(self._items):
                raise ValueError("slice assignment would change the array size")
            self._items = updated
        else:
            self._items[index] = value

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        return self._items == other._items

    def __hash__(self) -> int:
        return hash(tuple(self._items))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Array):
            return NotImplemented
        return self._items < other._items

    def __repr__(self) -> str:
        return f"Array({self._items!r})"