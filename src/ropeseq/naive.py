from __future__ import annotations
from collections.abc import Iterable, Iterator
from typing import Any

from .errors import IndexOutOfBounds, InvalidRange


class NaiveRope:
    """A rope with the same API as Rope, backed by one flat list.

    Every edit copies the whole list. It exists to check Rope against.
    """

    __slots__: tuple[str, ...] = ("values",)

    def __init__(self, values: Iterable[Any] = ()):
        self.values: list[Any] = list(values)

    @classmethod
    def new(cls) -> NaiveRope:
        return cls()

    @classmethod
    def from_sequence(cls, values: Iterable[Any]) -> NaiveRope:
        return cls(values)

    def __len__(self) -> int:
        return len(self.values)

    def len(self) -> int:
        return len(self.values)

    def is_empty(self) -> bool:
        return not self.values

    def insert(self, index: int, values: Iterable[Any]) -> NaiveRope:
        if index < 0 or index > len(self.values):
            raise IndexOutOfBounds(len(self.values), index)
        return NaiveRope(self.values[:index] + list(values) + self.values[index:])

    def delete(self, start: int, end: int) -> NaiveRope:
        if start > end:
            raise InvalidRange(start, end)
        if end > len(self.values):
            raise IndexOutOfBounds(len(self.values), end)
        if start < 0:
            raise IndexOutOfBounds(len(self.values), start)
        return NaiveRope(self.values[:start] + self.values[end:])

    remove = delete

    def to_vector(self) -> list[Any]:
        return list(self.values)

    to_list = to_vector

    def __iter__(self) -> Iterator[Any]:
        return iter(self.values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NaiveRope):
            return NotImplemented
        return self.values == other.values

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, NaiveRope):
            return NotImplemented
        return self.values < other.values

    def __le__(self, other: object) -> bool:
        if not isinstance(other, NaiveRope):
            return NotImplemented
        return self.values <= other.values

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, NaiveRope):
            return NotImplemented
        return self.values > other.values

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, NaiveRope):
            return NotImplemented
        return self.values >= other.values

    def __hash__(self) -> int:
        return hash(tuple(self.values))

    def __repr__(self):
        return f"<NaiveRope len: {len(self.values)}>"
