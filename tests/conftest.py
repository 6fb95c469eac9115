"""Shared test fixtures."""

import pytest

from random_permutation.permutation import RandomPermutation
from random_permutation.utils.seed import SeedRandom

# permute_index(0..99) for universe=100, seed=0
UNIVERSE_100_SEED_0 = [
    37, 11, 28, 41, 56, 13, 54, 47, 92, 81, 50, 43, 89, 48, 39, 87, 63, 24, 9, 71,
    96, 72, 97, 5, 36, 45, 23, 93, 8, 27, 98, 34, 18, 33, 25, 91, 67, 53, 14, 46,
    55, 6, 90, 88, 84, 58, 80, 52, 20, 77, 1, 83, 15, 21, 0, 2, 42, 99, 76, 10,
    74, 62, 85, 60, 82, 51, 22, 16, 35, 79, 64, 73, 66, 94, 70, 32, 57, 19, 86, 95,
    4, 49, 17, 38, 61, 3, 30, 59, 7, 40, 75, 29, 68, 26, 69, 31, 78, 44, 12, 65,
]


@pytest.fixture
def rng():
    """Provide a seeded SeedRandom for deterministic sampling."""
    return SeedRandom(seed=42)


@pytest.fixture
def perm100():
    """Provide the permutation of [0, 100) for seed 0."""
    return RandomPermutation.create(100, seed=0)


def quadratic_step(x: int, prime: int) -> int:
    """Reference one-phase quadratic-residue step on [0, prime)."""
    r = x * x % prime
    return r if x <= prime // 2 else prime - r
