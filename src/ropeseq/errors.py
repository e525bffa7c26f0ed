from __future__ import annotations


class RopeError(Exception):
    """Base class for every error raised by ropeseq"""


class IndexOutOfBounds(RopeError, IndexError):
    """An index or range endpoint is past the end of the rope"""

    def __init__(self, length: int, index: int):
        self.length: int = length
        self.index: int = index
        super().__init__(
            f"index out of bounds: the len is {length} but the index is {index}"
        )


class InvalidRange(RopeError, ValueError):
    """A range's start is greater than its end"""

    def __init__(self, start: int, end: int):
        self.start: int = start
        self.end: int = end
        super().__init__(
            f"invalid range: start {start} is greater than end {end}"
        )
