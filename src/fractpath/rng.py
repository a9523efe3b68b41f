"""
rng.py
------

Thread-safe random generator used by the displacement routines.

- Supports both `random.Random` and `numpy.random.Generator` backends.
- Identical scalar API for both backends.
- Thread-safe lock for concurrent access.
- `seed=None` draws entropy from PID/time; any integer (including 0) is a
  deterministic seed.
"""

from __future__ import annotations

__all__ = ["RNGBackend", "RNG", "get_rng", "entropy_seed"]

import os
import time
import random
import threading
from numbers import Real, Integral
from typing import Optional, TypeAlias, Union

import numpy as np

RNGBackend: TypeAlias = Union[random.Random, np.random.Generator, "RNG"]


def entropy_seed() -> int:
    """Return a non-deterministic 32-bit seed mixed from PID, clock and system bits."""
    return os.getpid() ^ (time.time_ns() & 0xFFFFFFFF) ^ random.getrandbits(32)


class RNG:
    """Encapsulated, thread-safe hybrid random generator.

    Attributes:
        _rng:  Backend RNG (random.Random or numpy.random.Generator).
        _lock: threading.Lock for safe concurrent access.
        seed_value: The seed the current stream was started from.
    """

    def __init__(self, seed: Optional[int] = None, use_numpy: bool = False):
        self._lock = threading.Lock()
        self._use_numpy = use_numpy
        self.seed_value = self._resolve_seed(seed)

        if use_numpy:
            self._rng: RNGBackend = np.random.default_rng(self.seed_value)
        else:
            self._rng: RNGBackend = random.Random(self.seed_value)

    @staticmethod
    def _resolve_seed(seed: Optional[int]) -> int:
        if seed is None:
            return entropy_seed()
        if isinstance(seed, bool) or not isinstance(seed, Integral):
            raise TypeError(f"seed must be an integer or None, got {type(seed).__name__}")
        # numpy's SeedSequence rejects negative entropy
        return int(seed) & 0xFFFFFFFFFFFFFFFF

    # -----------------------------------------------------------------
    # Core seeding
    # -----------------------------------------------------------------
    def seed(self, seed: Optional[int] = None) -> None:
        """Reinitialize the RNG in place (preserves object identity)."""
        with self._lock:
            self.seed_value = self._resolve_seed(seed)
            if self._use_numpy:
                self._rng = np.random.default_rng(self.seed_value)
            else:
                self._rng.seed(self.seed_value)

    # -----------------------------------------------------------------
    # Basic random methods
    # -----------------------------------------------------------------
    def random(self) -> float:
        with self._lock:
            return float(self._rng.random())

    def uniform(self, a: float, b: float) -> float:
        """Return a uniform random value in [a, b]."""
        with self._lock:
            out = self._rng.uniform(a, b)
            if self._use_numpy and isinstance(out, Real):
                return float(out)
            return out

    def randint(self, a: int, b: int) -> int:
        """Return an integer in [a, b] (both inclusive)."""
        with self._lock:
            if self._use_numpy:
                return int(self._rng.integers(a, b + 1))
            return self._rng.randrange(a, b + 1)

    # -----------------------------------------------------------------
    # Utility & Introspection
    # -----------------------------------------------------------------
    def getstate(self):
        with self._lock:
            if self._use_numpy:
                return self._rng.bit_generator.state
            return self._rng.getstate()

    def setstate(self, state):
        with self._lock:
            if self._use_numpy:
                self._rng.bit_generator.state = state
            else:
                self._rng.setstate(state)

    def __repr__(self) -> str:
        backend = "numpy" if self._use_numpy else "stdlib"
        return f"<RNG backend={backend} seed={self.seed_value} pid={os.getpid()} id={id(self)}>"


# =============================================================================
# GLOBAL & THREAD-LOCAL ACCESSORS
# =============================================================================
_global_rng = RNG()
_thread_local = threading.local()


def get_rng(thread_safe: bool = False, use_numpy: bool = False) -> RNG:
    """Return an RNG instance (shared or per-thread)."""
    if thread_safe:
        if not hasattr(_thread_local, "rng"):
            _thread_local.rng = RNG(use_numpy=use_numpy)
        return _thread_local.rng
    return _global_rng
