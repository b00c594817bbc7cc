"""
Deterministic hashing and the seeded sequence generator behind totem icons.

The sequence is a linear congruential recurrence chosen for reproducibility,
not for statistical quality or security.
"""

import random
import time
from typing import Optional, Union

MODULUS = 233280
MULTIPLIER = 9301
INCREMENT = 49297


def _int32(n):
    """Wrap to a signed 32-bit integer."""
    n &= 0xFFFFFFFF
    return n - 0x100000000 if n & 0x80000000 else n


def string_hash(value: str) -> int:
    """
    Map a string to a non-negative integer.

    Folds UTF-16 code units with ``acc * 31 + code`` wrapped to signed
    32 bits and returns the absolute value.
    """
    acc = 0
    encoded = value.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(encoded), 2):
        code = encoded[i] | (encoded[i + 1] << 8)
        acc = _int32(acc * 31 + code)
    return abs(acc)


class SeededPRNG:
    """
    Reproducible stream of floats in [0, 1).

    ``state = (state * 9301 + 49297) % 233280`` followed by
    ``state / 233280``.
    """

    def __init__(self, seed: int):
        """Initialize with an integer seed (usually a ``string_hash``)."""
        self.call_count = 0
        self.state = int(seed)

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        self.state = (self.state * MULTIPLIER + INCREMENT) % MODULUS
        return self.state / MODULUS


RandomSource = Union[SeededPRNG, random.Random]


def create_random_source(seed: Optional[str]) -> RandomSource:
    """
    Return the random source for one generation run.

    A seed string gives a ``SeededPRNG``; ``None`` gives an unseeded
    ``random.Random`` whose output is not reproducible.
    """
    if seed is None:
        return random.Random()
    return SeededPRNG(string_hash(seed))


def new_session_seed() -> str:
    """Draw a timestamp-like seed for a fresh, pinnable pattern."""
    return str(time.time_ns() // 1_000_000)
