"""
Per-thread random number generators.

Worker threads must never share one unsynchronized generator. Each
thread lazily receives its own numpy RandomState, seeded from a master
generator that is only touched under a lock. Seeding a registry makes
the set of per-thread seeds reproducible, although which thread draws
which seed still depends on scheduling.
"""

import threading
from typing import Optional

import numpy as np


class RngRegistry:
    """Hands out one independently seeded RandomState per thread."""

    def __init__(self, seed: Optional[int] = None):
        self._lock = threading.Lock()
        self._master = np.random.RandomState(seed)
        self._local = threading.local()

    def spawn(self) -> np.random.RandomState:
        """Create a fresh generator seeded from the master."""
        with self._lock:
            seed = self._master.randint(0, 2**31 - 1)
        return np.random.RandomState(seed)

    def get(self) -> np.random.RandomState:
        """Generator owned by the calling thread."""
        local = self._local
        rng = getattr(local, "rng", None)
        if rng is None:
            rng = self.spawn()
            local.rng = rng
        return rng


_default = RngRegistry()


def thread_rng() -> np.random.RandomState:
    """Calling thread's generator from the process-wide default registry."""
    return _default.get()
