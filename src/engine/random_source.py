"""
Dice Pool - Random Sources

Every die draw goes through a RandomSource so callers can inject a seeded
generator or a scripted sequence instead of the process-wide ``random`` state.
"""

import random
from typing import Iterable, Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Uniform integer generator."""

    def randint(self, low: int, high: int) -> int:
        """Return an integer N with low <= N <= high."""
        ...


class SystemRandomSource:
    """RandomSource backed by a private ``random.Random`` instance."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def randint(self, low: int, high: int) -> int:
        return self._random.randint(low, high)


class ScriptedRandomSource:
    """
    RandomSource that replays a fixed sequence of values.

    Used by tests to make rolls deterministic. Each scripted value must fall
    inside the requested range.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self._values = list(values)
        self._position = 0

    @property
    def remaining(self) -> int:
        return len(self._values) - self._position

    def randint(self, low: int, high: int) -> int:
        if self._position >= len(self._values):
            raise IndexError(
                f"Scripted random source exhausted after {len(self._values)} values."
            )
        value = self._values[self._position]
        if not (low <= value <= high):
            raise ValueError(
                f"Scripted value {value} at position {self._position} "
                f"is outside [{low}, {high}]."
            )
        self._position += 1
        return value
