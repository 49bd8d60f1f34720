"""Deterministic seed derivation for independent per-task random sources."""

from __future__ import annotations

import hashlib
from typing import Any, Optional

from randpath.random_source import PythonRandomSource


class SeedManager:
    """Derives per-component seeds from one master seed.

    Sharing one generator across concurrent segment completions would make
    the draw order depend on thread scheduling. SeedManager hands each task a
    source seeded from ``(master_seed, *components)`` with SHA-256, so results
    are reproducible regardless of execution order or worker count.

    Usage:
        seed_mgr = SeedManager(5)
        rng = seed_mgr.create_random_source("iteration", 3, "segment", 7)
    """

    def __init__(self, master_seed: Optional[int] = None) -> None:
        """Initialize the seed manager.

        Args:
            master_seed: Master seed for deterministic operations. If None,
                        seed derivation will return None (non-deterministic).
        """
        self.master_seed = master_seed

    def derive_seed(self, *components: Any) -> Optional[int]:
        """Derive a deterministic seed from master seed and component identifiers.

        Args:
            *components: Component identifiers (strings, integers, etc.) that
                        uniquely identify the task needing a seed.

        Returns:
            Derived seed as positive integer, or None if no master seed set.
        """
        if self.master_seed is None:
            return None

        seed_input = f"{self.master_seed}:" + ":".join(str(c) for c in components)
        hash_digest = hashlib.sha256(seed_input.encode()).digest()

        seed_value = int.from_bytes(hash_digest[:4], byteorder="big")
        return seed_value & 0x7FFFFFFF  # Ensure positive 32-bit integer

    def create_random_source(self, *components: Any) -> PythonRandomSource:
        """Create a new source with a derived seed (unseeded if no master seed).

        Args:
            *components: Component identifiers for seed derivation.
        """
        return PythonRandomSource(self.derive_seed(*components))
