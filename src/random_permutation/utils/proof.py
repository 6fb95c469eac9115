"""Z3-based check of the one-phase quadratic-residue step."""

from __future__ import annotations

from z3 import BitVec, BitVecVal, If, Solver, ULE, ULT, URem, sat

# Bit-blasted multiplication gets expensive quickly; keep proofs small.
PROOF_PRIME_LIMIT = 1 << 12


def find_residue_collision(prime: int) -> tuple[int, int] | None:
    """Search for x != y in [0, prime) with the same quadratic-residue image.

    The image of x is x^2 mod prime for x <= prime // 2 and
    prime - (x^2 mod prime) above that. Returns a colliding pair, or None
    when the solver proves the step is a bijection (the case for every
    prime ≡ 3 mod 4).
    """
    if not 2 <= prime <= PROOF_PRIME_LIMIT:
        raise ValueError(f"prime must be in [2, {PROOF_PRIME_LIMIT}], got {prime}")

    # wide enough that x * x never wraps
    width = 2 * prime.bit_length() + 1
    p = BitVecVal(prime, width)
    half = BitVecVal(prime >> 1, width)
    x = BitVec("x", width)
    y = BitVec("y", width)

    def step(v):
        r = URem(v * v, p)
        return If(ULE(v, half), r, p - r)

    s = Solver()
    s.add(ULT(x, p), ULT(y, p), x != y)
    s.add(step(x) == step(y))

    if s.check() != sat:
        return None

    model = s.model()
    return model.eval(x).as_long(), model.eval(y).as_long()
