from __future__ import annotations
from collections.abc import Iterable, Iterator, Sequence
from itertools import islice
from typing import (
    Any,
    Union,
    overload,
)

from .errors import IndexOutOfBounds, InvalidRange

# --- Configuration ---
REPR_PREVIEW: int = 16  # max number of values shown by Rope.__repr__

# Which result a bypassed subtree belongs to while splitting
_LEFT: int = 0
_RIGHT: int = 1


class LeafNode:
    """A contiguous run of values. The only place values are stored"""

    __slots__: tuple[str, ...] = ("values",)

    def __init__(self, values: Sequence[Any] = ()):
        self.values: Sequence[Any] = values

    def __len__(self):
        return len(self.values)

    def split(self, index: int) -> tuple[LeafNode, LeafNode]:
        """Split the run into two leaf nodes at the given local index"""
        if index == 0:
            return LeafNode(self.values[:0]), self
        if index == len(self.values):
            return self, LeafNode(self.values[:0])
        return LeafNode(self.values[:index]), LeafNode(self.values[index:])

    def __repr__(self):
        return f"<LeafNode len: {len(self.values)}>"


class BranchNode:
    """Two non-empty subtrees and their combined length.

    Build these with `join`, which never makes a branch with an empty child.
    """

    __slots__: tuple[str, ...] = ("left", "right", "length")

    def __init__(self, left: Node, right: Node):
        self.left: Node = left
        self.right: Node = right
        self.length: int = len(left) + len(right)

    def __len__(self):
        return self.length

    def __repr__(self):
        return f"<BranchNode len: {self.length}>"


Node = Union[LeafNode, BranchNode]


def join(left: Node, right: Node) -> Node:
    """Concatenate two trees, dropping whichever side is empty"""
    if len(left) == 0:
        return right
    if len(right) == 0:
        return left
    return BranchNode(left, right)


def split(node: Node, index: int) -> tuple[Node, Node]:
    """Split the tree into [0:index] and [index:].

    Walks down to the leaf holding `index`, remembering every subtree it
    steps past and which side of the split it falls on. The leaf is cut in
    two, then the remembered subtrees are joined back on, innermost first.
    """
    length = len(node)
    if index < 0 or index > length:
        raise IndexOutOfBounds(length, index)

    bypassed: list[tuple[Node, int]] = []
    while isinstance(node, BranchNode):
        left_len = len(node.left)
        if index < left_len:
            bypassed.append((node.right, _RIGHT))
            node = node.left
        else:
            index -= left_len
            bypassed.append((node.left, _LEFT))
            node = node.right

    left, right = node.split(index)
    for sub, side in reversed(bypassed):
        if side == _LEFT:
            left = join(sub, left)
        else:
            right = join(right, sub)
    return left, right


def flatten(node: Node) -> list[Any]:
    """Get all of the values in one flat list"""
    ret: list[Any] = []
    pending: list[Node] = []
    while True:
        while isinstance(node, BranchNode):
            pending.append(node.right)
            node = node.left
        ret.extend(node.values)
        if not pending:
            return ret
        node = pending.pop()


def iter_values(node: Node) -> Iterator[Any]:
    """Lazily yield the values under a node, in order"""
    pending: list[Node] = []
    while True:
        while isinstance(node, BranchNode):
            pending.append(node.right)
            node = node.left
        yield from node.values
        if not pending:
            return
        node = pending.pop()


def height(node: Node) -> int:
    """The number of branches on the longest path from node to a leaf"""
    deepest = 0
    stack: list[tuple[Node, int]] = [(node, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, BranchNode):
            stack.append((node.left, depth + 1))
            stack.append((node.right, depth + 1))
        elif depth > deepest:
            deepest = depth
    return deepest


def _as_sequence(values: Iterable[Any]) -> Sequence[Any]:
    """Keep values as-is when leaves can slice them, otherwise copy to a list"""
    if isinstance(values, Sequence):
        try:
            values[:0]
        except TypeError:
            # deque and friends are Sequences without slicing
            return list(values)
        return values
    return list(values)


# --- Main Rope Class ---
class Rope:
    """An immutable sequence with cheap splicing at arbitrary offsets.

    Every editing method returns a new Rope and leaves the receiver alone.
    Nodes are never modified after they are built, so the old and the new
    rope share whatever subtrees the edit did not touch.

    The tree is never rebalanced and can get as deep as the number of edits
    made, so every traversal here uses an explicit stack.
    """

    __slots__: tuple[str, ...] = ("root",)

    def __init__(self, values: Iterable[Any] = ()):
        self.root: Node = LeafNode(_as_sequence(values))

    @classmethod
    def new(cls) -> Rope:
        """An empty rope"""
        return cls()

    @classmethod
    def from_sequence(cls, values: Iterable[Any]) -> Rope:
        """Wrap values as a single leaf. Sequences are not copied, so don't
        mutate them afterwards."""
        return cls(values)

    @classmethod
    def _of(cls, root: Node) -> Rope:
        rope = cls.__new__(cls)
        rope.root = root
        return rope

    # --- Public API ---
    def __len__(self) -> int:
        return len(self.root)

    def len(self) -> int:
        """The number of values, read from the root's cached length"""
        return len(self.root)

    def is_empty(self) -> bool:
        return len(self.root) == 0

    def insert(self, index: int, values: Union[Rope, Iterable[Any]]) -> Rope:
        """Return a new rope with values inserted before index.

        Raises:
            IndexOutOfBounds: index is negative or greater than len(self)
        """
        left, right = split(self.root, index)
        if isinstance(values, Rope):
            mid = values.root
        else:
            mid = LeafNode(_as_sequence(values))
        return self._of(join(left, join(mid, right)))

    def delete(self, start: int, end: int) -> Rope:
        """Return a new rope with the values in [start:end) removed.

        Raises:
            InvalidRange: start is greater than end
            IndexOutOfBounds: start is negative, or end is greater than len(self)
        """
        if start > end:
            raise InvalidRange(start, end)
        length = len(self.root)
        if end > length:
            raise IndexOutOfBounds(length, end)
        left, rest = split(self.root, start)
        _removed, right = split(rest, end - start)
        return self._of(join(left, right))

    remove = delete

    def split_at(self, index: int) -> tuple[Rope, Rope]:
        """Split into the ropes [0:index] and [index:]"""
        left, right = split(self.root, index)
        return self._of(left), self._of(right)

    def concat(self, other: Rope) -> Rope:
        """Return a new rope holding this rope's values followed by other's"""
        return self._of(join(self.root, other.root))

    def __add__(self, other: object) -> Rope:
        if not isinstance(other, Rope):
            return NotImplemented
        return self.concat(other)

    def to_vector(self) -> list[Any]:
        """Return all values as a flattened list"""
        return flatten(self.root)

    to_list = to_vector

    def height(self) -> int:
        """Depth of the tree in branches. Useful for spotting skewed ropes"""
        return height(self.root)

    def __iter__(self) -> Iterator[Any]:
        return iter_values(self.root)

    # ------------------------------------------------------------
    # Indexing
    # ------------------------------------------------------------

    @overload
    def __getitem__(self, key: int) -> Any: ...

    @overload
    def __getitem__(self, key: slice) -> list[Any]: ...

    def __getitem__(self, key: Union[int, slice]) -> Any:
        if isinstance(key, slice):
            start, stop, step = key.indices(len(self))
            if step != 1:
                raise ValueError("Slice step must be 1")
            return self.get_range(start, stop)
        return self.get_single(key)

    def get_single(self, index: int) -> Any:
        """Get the value at index. Negative indices count from the end"""
        node = self.root
        length = len(node)
        local = index + length if index < 0 else index
        if local < 0 or local >= length:
            raise IndexOutOfBounds(length, index)

        while isinstance(node, BranchNode):
            left_len = len(node.left)
            if local < left_len:
                node = node.left
            else:
                local -= left_len
                node = node.right
        return node.values[local]

    def get_range(self, start: int, end: int) -> list[Any]:
        """Get values from index `start` to `end` (exclusive).

        Both ends are clamped to the rope, and subtrees that don't overlap
        the range are skipped without being visited.
        """
        root = self.root
        start = max(0, min(start, len(root)))
        end = max(0, min(end, len(root)))
        if start >= end:
            return []

        ret: list[Any] = []
        stack: list[tuple[Node, int]] = [(root, 0)]  # (node, offset_in_sequence)
        while stack:
            node, offset = stack.pop()
            if offset + len(node) <= start or offset >= end:
                continue

            if isinstance(node, LeafNode):
                local_start = max(0, start - offset)
                local_end = min(len(node), end - offset)
                ret.extend(node.values[local_start:local_end])
            else:
                # Push right first so left is processed first
                stack.append((node.right, offset + len(node.left)))
                stack.append((node.left, offset))
        return ret

    # ------------------------------------------------------------
    # Comparison. Always by content, never by tree shape
    # ------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rope):
            return NotImplemented
        if len(self) != len(other):
            return False
        return flatten(self.root) == flatten(other.root)

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Rope):
            return NotImplemented
        return not self == other

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Rope):
            return NotImplemented
        return flatten(self.root) < flatten(other.root)

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Rope):
            return NotImplemented
        return flatten(self.root) <= flatten(other.root)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Rope):
            return NotImplemented
        return flatten(self.root) > flatten(other.root)

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Rope):
            return NotImplemented
        return flatten(self.root) >= flatten(other.root)

    def __hash__(self) -> int:
        return hash(tuple(iter_values(self.root)))

    def __repr__(self):
        preview = list(islice(iter_values(self.root), REPR_PREVIEW))
        more = ", ..." if len(self) > REPR_PREVIEW else ""
        return f"<Rope len: {len(self)} [{repr(preview)[1:-1]}{more}]>"
