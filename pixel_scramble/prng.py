# pixel_scramble/prng.py
"""
MINSTD: the Lehmer linear congruential generator with the Park-Miller
parameters. Not a cryptographic generator; it exists so that a seed always
reproduces the exact same stream.
"""
import math
import threading
import time

MULTIPLIER = 16807          # 7**5
MODULUS = 2147483647        # 2**31 - 1

# Schrage's decomposition of the modulus against the multiplier
_Q = MODULUS // MULTIPLIER
_R = MODULUS % MULTIPLIER


def normalize_seed(raw: int) -> int:
    """Map any integer seed onto a valid state in [1, MODULUS - 1]."""
    seed = raw % MODULUS
    while math.gcd(seed, MODULUS) > 1:
        seed = (seed + 1) % MODULUS
    return seed


class RandomNumberGenerator:

    def __init__(self, seed=None):
        if seed is None:
            seed = int(time.time() * 1000) % MODULUS
        self._state = normalize_seed(seed)
        self._lock = threading.Lock()

    @property
    def seed(self) -> int:
        """Current state; persisting it reproduces the rest of the stream."""
        return self._state

    def _next_state(self) -> int:
        with self._lock:
            q = self._state // _Q
            n = MULTIPLIER * (self._state - _Q * q) - _R * q
            if n < 0:
                n += MODULUS
            self._state = n
            return n

    def random(self, lo=0.0, hi=1.0) -> float:
        """Return a pseudorandom float in [lo, hi)."""
        s = self._next_state()
        # double arithmetic, evaluated left to right
        return lo + float(hi - lo) * (s - 1) / (MODULUS - 1)
