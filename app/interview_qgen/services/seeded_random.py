"""
Purpose: Repeatable pseudo-randomness keyed by the job description.
Why: Identical inputs must give identical question order (stable fixtures,
stable UI across reruns), so `random` is not used here.

- seed_from(text): 32-bit FNV-1a over the UTF-16 code units of `text`.
- next_float(state): one xorshift32 step (13 / 17 / 5) -> (float, new_state).
- shuffle(items, seed): Fisher-Yates from the last index down.
"""

from __future__ import annotations
from typing import Sequence, TypeVar

T = TypeVar("T")

MASK32 = 0xFFFFFFFF
FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
# xorshift32 is stuck at zero; any non-zero state works.
ZERO_STATE_REPLACEMENT = FNV_OFFSET_BASIS


def seed_from(text: str) -> int:
    h = FNV_OFFSET_BASIS
    data = (text or "").encode("utf-16-le")
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = (h * FNV_PRIME) & MASK32
    return h


def xorshift32(state: int) -> int:
    x = (state & MASK32) or ZERO_STATE_REPLACEMENT
    x ^= (x << 13) & MASK32
    x ^= x >> 17
    x ^= (x << 5) & MASK32
    return x & MASK32


def next_float(state: int) -> tuple[float, int]:
    new_state = xorshift32(state)
    return new_state / MASK32, new_state


def shuffle(items: Sequence[T], seed: int) -> list[T]:
    """Return a permuted copy; the input is not modified."""
    out = list(items)
    state = seed
    for i in range(len(out) - 1, 0, -1):
        r, state = next_float(state)
        # r can reach exactly 1.0 at state 0xFFFFFFFF
        j = min(int(r * (i + 1)), i)
        out[i], out[j] = out[j], out[i]
    return out

