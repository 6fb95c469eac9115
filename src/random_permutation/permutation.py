"""Pseudo-random permutations of [0, universe) computed on demand.

Based on Jeff Preshing's construction of unique random integer sequences from
quadratic residues (https://preshing.com/20121224/how-to-generate-a-sequence-of-unique-random-integers),
extended to arbitrary universe sizes up to 2^64 - 1.
"""

from __future__ import annotations

import logging
import operator
from dataclasses import dataclass

from random_permutation.errors import InvalidUniverseError, PermutationCollisionError
from random_permutation.utils.primes import prev_prime_3mod4
from random_permutation.utils.seed import MASK64, SeedRandom, mix_seed, timestamp

logger = logging.getLogger(__name__)

MAX_UNIVERSE = MASK64


@dataclass(frozen=True)
class RandomPermutation:
    """A seeded permutation of the integers in [0, universe).

    `seed` is the internal additive offset (already mixed); use `create` to
    build a permutation from a user seed. The default instance is the
    identity on {0}.
    """

    universe: int = 1
    prime: int = 0
    seed: int = 0

    def __post_init__(self):
        if not 1 <= self.universe <= MAX_UNIVERSE:
            raise InvalidUniverseError(self.universe)
        if not 0 <= self.prime <= self.universe:
            raise ValueError(f"prime {self.prime} outside [0, {self.universe}]")
        if not 0 <= self.seed <= MASK64:
            raise ValueError(f"seed {self.seed} is not a 64-bit offset")

    @classmethod
    def create(cls, universe: int, seed: int | None = None) -> RandomPermutation:
        """Build the permutation of [0, universe) for the given seed.

        Without a seed, the current high-resolution timestamp is used.
        """
        if not 1 <= universe <= MAX_UNIVERSE:
            raise InvalidUniverseError(universe)
        if seed is None:
            seed = timestamp()
        return cls(universe, prev_prime_3mod4(universe), mix_seed(seed))

    def _permute(self, x: int) -> int:
        p = self.prime
        if x >= p:
            # numbers in the gap map to themselves; the seed offset shuffles them
            return x
        r = x * x % p
        return r if x <= p >> 1 else p - r

    def permute_index(self, i: int) -> int:
        """Return the i-th number of the permutation."""
        i = operator.index(i)
        if not 0 <= i < self.universe:
            raise IndexError(f"index {i} outside [0, {self.universe})")
        return self._permute((self.seed + self._permute(i)) % self.universe)

    def __call__(self, i: int) -> int:
        return self.permute_index(i)

    def __getitem__(self, key: int | slice) -> int | list[int]:
        if isinstance(key, slice):
            return [self.permute_index(i) for i in range(*key.indices(self.universe))]
        return self.permute_index(key)

    def __len__(self) -> int:
        return self.universe

    def __bool__(self) -> bool:
        # universe >= 1; avoids len() overflowing for universes past sys.maxsize
        return True

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and 0 <= value < self.universe

    def __iter__(self) -> PermutationCursor:
        return PermutationCursor(self)

    def at(self, i: int) -> PermutationCursor:
        """Return a cursor starting at the i-th number of the permutation."""
        return PermutationCursor(self, i)

    def verify(self) -> None:
        """Check exhaustively that every index maps to a distinct value.

        Needs one bit of scratch space per universe element.

        Raises:
            PermutationCollisionError: if two indices share an image.
        """
        seen = bytearray((self.universe + 7) >> 3)
        for i in range(self.universe):
            j = self.permute_index(i)
            bit = 1 << (j & 7)
            if seen[j >> 3] & bit:
                raise PermutationCollisionError(i, j)
            seen[j >> 3] |= bit
        logger.debug("verified all %d values of %r", self.universe, self)

    def verify_sample(self, count: int, rng: SeedRandom | None = None) -> None:
        """Check that `count` distinct random indices map to distinct values."""
        if rng is None:
            rng = SeedRandom()
        images: set[int] = set()
        for i in rng.distinct_indices(self.universe, min(count, self.universe)):
            j = self.permute_index(i)
            if j in images:
                raise PermutationCollisionError(i, j)
            images.add(j)
        logger.debug("verified %d sampled values of %r", len(images), self)


class PermutationCursor:
    """Forward-only iterator over a permutation, starting at any index.

    `exhausted` becomes true once the cursor has produced the value for
    index universe - 1.
    """

    def __init__(self, permutation: RandomPermutation, index: int = 0):
        index = operator.index(index)
        if not 0 <= index <= permutation.universe:
            raise IndexError(f"cursor index {index} outside [0, {permutation.universe}]")
        self.permutation = permutation
        self.index = index
        self.exhausted = index == permutation.universe

    def __iter__(self) -> PermutationCursor:
        return self

    def __next__(self) -> int:
        if self.exhausted:
            raise StopIteration
        value = self.permutation.permute_index(self.index)
        self.index += 1
        self.exhausted = self.index == self.permutation.universe
        return value

    def __length_hint__(self) -> int:
        return self.permutation.universe - self.index
