"""Prime search for quadratic-residue permutations.

Finds the largest prime ``p <= universe`` with ``p ≡ 3 (mod 4)``. For such a
prime, squaring modulo ``p`` combined with a reflection of the upper half is a
bijection on ``[0, p)``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# The 54 primes below 256
SMALL_PRIMES: tuple[int, ...] = (
    2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67, 71,
    73, 79, 83, 89, 97, 101, 103, 107, 109, 113, 127, 131, 137, 139, 149, 151,
    157, 163, 167, 173, 179, 181, 191, 193, 197, 199, 211, 223, 227, 229, 233,
    239, 241, 251,
)

# Above this bound the 6k±1 wheel is too slow in pure Python.
TRIAL_DIVISION_LIMIT = 1 << 32

# Deterministic for every n < 3.3 * 10^24, which covers all 64-bit values.
_MILLER_RABIN_WITNESSES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


@dataclass(frozen=True)
class CommonUniverse:
    universe: int
    prime: int


def _pow2(x: int) -> int:
    return 1 << x


# Common universe sizes and their largest primes satisfying p ≡ 3 (mod 4)
COMMON_UNIVERSES: tuple[CommonUniverse, ...] = (
    CommonUniverse(_pow2(16) - 2, _pow2(16) - 17),
    CommonUniverse(_pow2(16) - 1, _pow2(16) - 17),
    CommonUniverse(_pow2(24) - 2, _pow2(24) - 17),
    CommonUniverse(_pow2(24) - 1, _pow2(24) - 17),
    CommonUniverse(_pow2(32) - 2, _pow2(32) - 5),
    CommonUniverse(_pow2(32) - 1, _pow2(32) - 5),
    CommonUniverse(_pow2(40) - 2, _pow2(40) - 213),
    CommonUniverse(_pow2(40) - 1, _pow2(40) - 213),
    CommonUniverse(_pow2(48) - 2, _pow2(48) - 65),
    CommonUniverse(_pow2(48) - 1, _pow2(48) - 65),
    CommonUniverse(_pow2(56) - 2, _pow2(56) - 5),
    CommonUniverse(_pow2(56) - 1, _pow2(56) - 5),
    CommonUniverse(_pow2(63) - 2, _pow2(63) - 25),
    CommonUniverse(_pow2(63) - 1, _pow2(63) - 25),
    CommonUniverse(_pow2(64) - 2, 0xFFFFFFFFFFFFFF43),
    CommonUniverse(_pow2(64) - 1, 0xFFFFFFFFFFFFFF43),
)


def isqrt_floor(x: int) -> int:
    """Integer square root of x, rounded down.

    Digit-by-digit method: each step brings in the next two bits of x and
    decides the next bit of the root. Exact for arbitrarily large x.
    """
    if x < 0:
        raise ValueError(f"square root of negative number {x}")
    if x < 4:
        return int(x > 0)

    # the top bit pair of x is in [1, 3], whose root is 1
    e = (x.bit_length() - 1) >> 1
    r = 1
    while e:
        e -= 1
        cur = x >> (e << 1)
        sm = r << 1
        lg = sm + 1
        r = sm + (lg * lg <= cur)
    return r


def isqrt_ceil(x: int) -> int:
    """Integer square root of x, rounded up."""
    r = isqrt_floor(x)
    return r + (r * r < x)


def _miller_rabin(n: int) -> bool:
    d = n - 1
    s = 0
    while d % 2 == 0:
        d >>= 1
        s += 1

    for a in _MILLER_RABIN_WITNESSES:
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def is_prime(p: int) -> bool:
    """Deterministic primality test.

    Trial division by SMALL_PRIMES, then by 6k±1 up to ceil(sqrt(p)).
    Candidates at or above TRIAL_DIVISION_LIMIT go through Miller-Rabin with
    a witness set that is exact for the 64-bit range.
    """
    if p < 2:
        return False
    if p % 2 == 0:
        return p == 2

    m = isqrt_ceil(p)
    for q in SMALL_PRIMES[1:]:
        if q > m:
            return True
        if p % q == 0:
            return p == q

    if p >= TRIAL_DIVISION_LIMIT:
        return _miller_rabin(p)

    # 257 = 6 * 43 - 1, the first wheel candidate past SMALL_PRIMES
    i = 257
    while i <= m:
        if p % i == 0 or p % (i + 2) == 0:
            return False
        i += 6
    return True


def prime_predecessor(p: int) -> int:
    """Return the greatest prime <= p, or 0 if there is none."""
    if p < 0:
        raise ValueError(f"prime_predecessor of negative number {p}")
    if p < 2:
        return 0
    if p == 2:
        return 2
    if p % 2 == 0:
        p -= 1

    # linear descent over odd candidates; stops at 3 at the latest
    while not is_prime(p):
        p -= 2
    return p


def common_universe_prime(universe: int) -> int | None:
    """Look up a precomputed prime for a common universe size."""
    for entry in COMMON_UNIVERSES:
        if entry.universe == universe:
            return entry.prime
    return None


def prev_prime_3mod4(universe: int) -> int:
    """Find the largest prime p <= universe with p ≡ 3 (mod 4).

    Returns 0 for universes below 3, where no such prime exists; a
    permutation with prime 0 skips the quadratic-residue step entirely.
    """
    prime = common_universe_prime(universe)
    if prime is not None:
        logger.debug("universe %d: common size, prime %d", universe, prime)
        return prime

    if universe < 3:
        return 0

    p = prime_predecessor(universe)
    skipped = 0
    while p & 3 != 3:
        p = prime_predecessor(p - 1)
        skipped += 1

    logger.debug(
        "universe %d: searched prime %d (%d primes ≡ 1 mod 4 skipped)",
        universe, p, skipped,
    )
    return p
