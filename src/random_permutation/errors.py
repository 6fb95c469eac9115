"""Exceptions raised by random_permutation."""


class PermutationError(Exception):
    """Base class for permutation errors."""


class InvalidUniverseError(PermutationError, ValueError):
    """The universe size is outside [1, 2^64 - 1]."""

    def __init__(self, universe: int):
        super().__init__(f"universe must be in [1, 2^64 - 1], got {universe}")
        self.universe = universe


class PermutationCollisionError(PermutationError):
    """Two indices were mapped to the same value.

    This means the permutation arithmetic is broken; it is never a
    recoverable condition.
    """

    def __init__(self, index: int, value: int):
        super().__init__(f"index {index} maps to {value}, which was already produced")
        self.index = index
        self.value = value
