from .rope import Rope
from .naive import NaiveRope
from .protocol import RopeLike
from .errors import RopeError, IndexOutOfBounds, InvalidRange

__all__ = [
    "IndexOutOfBounds",
    "InvalidRange",
    "NaiveRope",
    "Rope",
    "RopeError",
    "RopeLike",
]
