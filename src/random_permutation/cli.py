"""Command-line entry point: print the first numbers of a random permutation."""

from __future__ import annotations

import argparse
import logging
import re
import sys
from itertools import islice

from random_permutation.errors import PermutationCollisionError, PermutationError
from random_permutation.permutation import RandomPermutation
from random_permutation.utils.proof import PROOF_PRIME_LIMIT, find_residue_collision
from random_permutation.utils.seed import SeedRandom, timestamp

logger = logging.getLogger(__name__)

_SIZE_RE = re.compile(r"^\s*(0[xX][0-9a-fA-F]+|\d+)\s*([kKMGTPE]i?)?[bB]?\s*$")
_SUFFIX_EXPONENTS = {"k": 1, "K": 1, "M": 2, "G": 3, "T": 4, "P": 5, "E": 6}


def parse_size(text: str) -> int:
    """Parse a count such as ``4096``, ``0xFFFF``, ``10k`` or ``4Gi``.

    Plain suffixes are powers of 1000, suffixes ending in ``i`` powers of 1024.
    """
    match = _SIZE_RE.match(text)
    if match is None:
        raise argparse.ArgumentTypeError(f"invalid size: {text!r}")
    number, suffix = match.groups()
    value = int(number, 0)
    if suffix:
        base = 1024 if suffix.endswith("i") else 1000
        value *= base ** _SUFFIX_EXPONENTS[suffix[0]]
    return value


def parse_seed(text: str) -> int:
    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid seed: {text!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="random-permutation",
        description="Generates a random permutation of a universe and prints it to the standard output.",
    )
    parser.add_argument("-n", "--num", type=parse_size, default=10,
                        help="The number of numbers to generate (default: 10).")
    parser.add_argument("-u", "--universe", type=parse_size, default=0xFFFFFFFF,
                        help="The universe to draw numbers from (default: 32-bit numbers).")
    parser.add_argument("-s", "--seed", type=parse_seed, default=None,
                        help="The random seed (default: high-res timestamp).")
    parser.add_argument("-c", "--check", action="store_true",
                        help="Check that a permutation is generated (visits the whole universe).")
    parser.add_argument("--sample", type=parse_size, default=0, metavar="COUNT",
                        help="Check COUNT random indices for distinct images instead of the whole universe.")
    parser.add_argument("--prove", action="store_true",
                        help=f"Prove the quadratic-residue step bijective with z3 (prime <= {PROOF_PRIME_LIMIT}).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )

    if args.universe < args.num:
        print("the universe must be at least as large as the number of generated numbers",
              file=sys.stderr)
        return 1

    seed = timestamp() if args.seed is None else args.seed
    try:
        perm = RandomPermutation.create(args.universe, seed)
    except PermutationError as e:
        print(e, file=sys.stderr)
        return 1
    logger.info("universe %d, prime %d, seed %d", perm.universe, perm.prime, seed)

    if args.prove:
        if perm.prime > PROOF_PRIME_LIMIT:
            print(f"prime {perm.prime} is too large to prove (limit {PROOF_PRIME_LIMIT})",
                  file=sys.stderr)
            return 1
        if perm.prime >= 2:
            pair = find_residue_collision(perm.prime)
            if pair is not None:
                logger.error("quadratic-residue step collides: %d and %d", *pair)
                print(f"collision in quadratic-residue step: {pair[0]} and {pair[1]}",
                      file=sys.stderr)
                return 2

    try:
        if args.check:
            perm.verify()
        elif args.sample:
            perm.verify_sample(args.sample, SeedRandom(seed))
    except PermutationCollisionError as e:
        logger.error("permutation check failed: %s", e)
        print(f"not a permutation: {e}", file=sys.stderr)
        return 2
    except (MemoryError, OverflowError):
        print(f"not enough memory to check a universe of {perm.universe}; use --sample instead",
              file=sys.stderr)
        return 1

    for value in islice(perm, args.num):
        print(value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
