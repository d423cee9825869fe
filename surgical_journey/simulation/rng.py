from __future__ import annotations

import random
from typing import Iterable, List, Optional, Protocol

from ..config import settings


class RandomSource(Protocol):
    """Anything with a ``random()`` returning floats in [0, 1)."""

    def random(self) -> float:
        ...


class SequenceRandom:
    """Replays a fixed list of draws, cycling when exhausted."""

    def __init__(self, values: Iterable[float]) -> None:
        self.values: List[float] = [float(v) for v in values]
        if not self.values:
            raise ValueError("SequenceRandom needs at least one value")
        self.calls = 0

    def random(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


def make_rng(seed: Optional[int] = None) -> random.Random:
    if seed is None:
        seed = settings.random_seed
    return random.Random(seed)


def resolve_rng(rng: Optional[RandomSource]) -> RandomSource:
    return rng if rng is not None else make_rng()


def symmetric(rng: RandomSource, spread: float) -> float:
    """Uniform draw in [-spread, spread)."""
    return rng.random() * spread * 2 - spread
