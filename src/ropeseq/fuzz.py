"""Differential testing of Rope against NaiveRope.

A seeded generator produces a stream of valid insert and delete operations.
Each one is applied to both implementations in lockstep, and after every
step their length, emptiness and contents must agree. The seed is logged
before the run starts so any divergence can be replayed exactly, either by
passing it back in or through the ROPESEQ_SEED environment variable.
"""

from __future__ import annotations
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
import logging
import os
import random
from typing import Any, Optional

from .errors import RopeError
from .naive import NaiveRope
from .protocol import RopeLike
from .rope import Rope

logger = logging.getLogger(__name__)

# --- Configuration ---
DEFAULT_STEPS: int = 200  # operations per differential run
MAX_INSERT_LEN: int = 8  # longest run of values a single insert adds
INSERT_WEIGHT: float = 0.6  # chance of an insert when the rope isn't empty
ALPHABET: str = "abcdefghijklmnopqrstuvwxyz"
SEED_ENV: str = "ROPESEQ_SEED"


class DivergenceError(RopeError, AssertionError):
    """The rope and the oracle disagreed after an operation"""

    def __init__(self, seed: int, step: int, op: Optional[Op], detail: str):
        self.seed: int = seed
        self.step: int = step
        self.op: Optional[Op] = op
        self.detail: str = detail
        super().__init__(f"seed {seed}, step {step}, {op!r}: {detail}")


@dataclass(frozen=True)
class Op:
    """One edit. For inserts `end` is unused"""

    kind: str  # "insert" or "delete"
    start: int
    end: int = 0
    values: str = ""

    def apply(self, rope: RopeLike) -> RopeLike:
        if self.kind == "insert":
            return rope.insert(self.start, list(self.values))
        return rope.delete(self.start, self.end)

    def __repr__(self):
        if self.kind == "insert":
            return f"insert({self.start}, {self.values!r})"
        return f"delete({self.start}, {self.end})"


def resolve_seed(seed: Optional[int] = None) -> int:
    """Pick the seed for a run: the argument, then $ROPESEQ_SEED, then random"""
    if seed is not None:
        return seed
    env = os.environ.get(SEED_ENV)
    if env:
        return int(env)
    return random.SystemRandom().randrange(2**32)


def generate_ops(
    seed: int,
    steps: int = DEFAULT_STEPS,
    initial_len: int = 0,
    max_insert_len: int = MAX_INSERT_LEN,
) -> Iterator[Op]:
    """Yield `steps` operations, each valid for the rope the previous ones
    leave behind, starting from a rope of `initial_len` values."""
    rng = random.Random(seed)
    length = initial_len
    for _ in range(steps):
        if length == 0 or rng.random() < INSERT_WEIGHT:
            index = rng.randint(0, length)
            count = rng.randint(0, max_insert_len)
            values = "".join(rng.choice(ALPHABET) for _ in range(count))
            length += count
            yield Op("insert", index, values=values)
        else:
            start = rng.randint(0, length)
            end = rng.randint(start, length)
            length -= end - start
            yield Op("delete", start, end)


def check_agreement(expected: RopeLike, actual: RopeLike) -> Optional[str]:
    """Describe the first way the two ropes differ, or None if they agree"""
    if expected.len() != actual.len():
        return f"len {actual.len()} != {expected.len()}"
    if expected.is_empty() != actual.is_empty():
        return f"is_empty {actual.is_empty()} != {expected.is_empty()}"
    want = expected.to_vector()
    got = actual.to_vector()
    if want != got:
        return f"contents {got!r} != {want!r}"
    return None


def run_differential(
    seed: Optional[int] = None,
    steps: int = DEFAULT_STEPS,
    initial: Sequence[Any] = "",
    rope_cls: type = Rope,
    oracle_cls: type = NaiveRope,
) -> int:
    """Run one lockstep comparison and return the seed it used.

    Raises:
        DivergenceError: the implementations disagreed
    """
    seed = resolve_seed(seed)
    logger.info(
        "differential run: seed=%d steps=%d initial_len=%d", seed, steps, len(initial)
    )

    rope = rope_cls.from_sequence(list(initial))
    oracle = oracle_cls.from_sequence(list(initial))
    detail = check_agreement(oracle, rope)
    if detail is not None:
        raise DivergenceError(seed, 0, None, detail)

    for step, op in enumerate(generate_ops(seed, steps, len(initial)), start=1):
        logger.debug("step %d: %r", step, op)
        rope = op.apply(rope)
        oracle = op.apply(oracle)
        detail = check_agreement(oracle, rope)
        if detail is not None:
            logger.error("divergence at step %d (seed=%d): %s", step, seed, detail)
            raise DivergenceError(seed, step, op, detail)
    return seed
