"""Seedable pseudo-random permutations of [0, universe) with O(1) memory.

Each query squares modulo a prime p ≡ 3 (mod 4), adds a seed offset, and
squares again; no table of the permutation is ever built.
"""

from random_permutation.errors import (
    InvalidUniverseError, PermutationCollisionError, PermutationError,
)
from random_permutation.permutation import PermutationCursor, RandomPermutation
from random_permutation.utils.primes import (
    COMMON_UNIVERSES, CommonUniverse, is_prime, isqrt_ceil, isqrt_floor,
    prev_prime_3mod4, prime_predecessor,
)
from random_permutation.utils.seed import SHUFFLE1, SHUFFLE2, mix_seed, timestamp

__all__ = [
    "RandomPermutation", "PermutationCursor",
    "PermutationError", "InvalidUniverseError", "PermutationCollisionError",
    "COMMON_UNIVERSES", "CommonUniverse",
    "is_prime", "isqrt_floor", "isqrt_ceil", "prime_predecessor", "prev_prime_3mod4",
    "SHUFFLE1", "SHUFFLE2", "mix_seed", "timestamp",
]
