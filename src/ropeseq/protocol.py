from __future__ import annotations
from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RopeLike(Protocol):
    """The operations shared by Rope and NaiveRope.

    Test code written against this runs unchanged on either implementation.
    """

    @classmethod
    def new(cls) -> RopeLike: ...

    def len(self) -> int: ...

    def is_empty(self) -> bool: ...

    def insert(self, index: int, values: Iterable[Any]) -> RopeLike: ...

    def delete(self, start: int, end: int) -> RopeLike: ...

    def to_vector(self) -> list[Any]: ...
