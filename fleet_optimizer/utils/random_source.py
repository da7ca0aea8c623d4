"""
Injectable randomness for fleet simulation.

Generation code never touches the ``random`` module's global state. Every
generator function takes an optional ``rng`` argument satisfying the
``RandomSource`` protocol: a single ``random()`` method returning a uniform
float in ``[0, 1)``.

``random.Random`` satisfies the protocol as-is, so tests can pass a seeded
instance for reproducible fleets, or a scripted source that replays fixed
draws to pin exact table values.
"""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class RandomSource(Protocol):
    """Anything that yields uniform draws in ``[0, 1)``."""

    def random(self) -> float: ...


def default_source() -> RandomSource:
    """Return a fresh, unseeded generator (no reproducibility across runs)."""
    return random.Random()


def random_between(source: RandomSource, low: int, high: int) -> int:
    """Draw an integer uniformly from ``[low, high]`` (both ends inclusive).

    Uses exactly one draw from ``source``.
    """
    return math.floor(source.random() * (high - low + 1)) + low


def choice(source: RandomSource, items: Sequence[T]) -> T:
    """Pick one element of ``items`` uniformly using a single draw."""
    return items[random_between(source, 0, len(items) - 1)]
