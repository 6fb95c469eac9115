"""Seeds and seeded randomness for random permutations."""

import random
import secrets
import time

MASK64 = 0xFFFFFFFFFFFFFFFF

# Provide a decent distribution of 64 bits
SHUFFLE1 = 0x9696594B6A5936B2
SHUFFLE2 = 0xD2165B4B66592AD6


def timestamp() -> int:
    """Return the current high-resolution timestamp (nanoseconds) as a 64-bit value."""
    return time.time_ns() & MASK64


def mix_seed(seed: int) -> int:
    """Derive the internal additive offset from a user seed."""
    return (seed & MASK64) ^ SHUFFLE1 ^ SHUFFLE2


class SeedRandom:
    """Random number generator for drawing sample indices.

    Uses `secrets` when unseeded, `random.Random(seed)` for reproducible
    sampling.
    """

    def __init__(self, seed: int | None = None):
        self._seeded = seed is not None
        if self._seeded:
            self._rng = random.Random(seed)
        else:
            self._rng = None

    def get_range(self, max_val: int) -> int:
        """Return a random integer in [0, max_val)."""
        if max_val <= 0:
            return 0
        if self._seeded:
            return self._rng.randrange(max_val)
        return secrets.randbelow(max_val)

    def distinct_indices(self, universe: int, count: int) -> list[int]:
        """Draw `count` distinct integers from [0, universe)."""
        if count > universe:
            raise ValueError(f"cannot draw {count} distinct values from {universe}")
        seen: set[int] = set()
        picks: list[int] = []
        while len(picks) < count:
            i = self.get_range(universe)
            if i not in seen:
                seen.add(i)
                picks.append(i)
        return picks
