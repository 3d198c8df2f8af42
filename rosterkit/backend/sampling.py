"""Uniform random helpers shared by the draw and grouping engines."""

from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")

_default_rng = random.Random()


def default_rng() -> random.Random:
    return _default_rng


def uniform_index(size: int, rng: random.Random | None = None) -> int:
    """Return an integer drawn uniformly from ``[0, size)``."""
    if size <= 0:
        raise ValueError("size must be positive")
    return (rng or _default_rng).randrange(size)


def pick(pool: Sequence[T], rng: random.Random | None = None) -> T:
    """Return one element of ``pool`` with equal probability for each position."""
    return pool[uniform_index(len(pool), rng)]
