"""Injectable uniform integer sources.

Every algorithm in the package draws randomness through a ``RandomSource``
passed in by the caller. There is no module-level generator: a test seeds its
own source, and concurrent workers each own an independent one.
"""

from __future__ import annotations

import random
from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    """Uniform integer source with a half-open range."""

    def next(self, low: int, high: int) -> int:
        """Return an integer drawn uniformly from ``[low, high)``."""
        ...


class PythonRandomSource:
    """``RandomSource`` backed by a private ``random.Random`` instance.

    Not suitable for cryptographic use.

    Args:
        seed: Seed for the underlying generator. ``None`` seeds from the OS.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def next(self, low: int, high: int) -> int:
        if high <= low:
            raise ValueError(f"Empty draw range [{low}, {high})")
        return self._rng.randrange(low, high)

    def __repr__(self) -> str:
        return f"PythonRandomSource(seed={self.seed!r})"


class ScriptedRandomSource:
    """Source replaying a fixed list of draws; used to pin exact outcomes.

    Each scripted value must fall within the requested range. Running out of
    values raises ``IndexError``.
    """

    def __init__(self, values: list[int]) -> None:
        self._values = list(values)
        self._pos = 0

    def next(self, low: int, high: int) -> int:
        value = self._values[self._pos]
        self._pos += 1
        if not low <= value < high:
            raise ValueError(f"Scripted value {value} outside [{low}, {high})")
        return value

    @property
    def remaining(self) -> int:
        return len(self._values) - self._pos
