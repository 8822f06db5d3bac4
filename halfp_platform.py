"""One-time probe of the host double layout."""
from __future__ import annotations

import dataclasses
import logging
import threading
from typing import Callable, Optional

import numpy as np

logger = logging.getLogger(__name__)

IEEE_ONE_HIGH_WORD = 0x3FF00000


@dataclasses.dataclass(frozen=True)
class PlatformInfo:
    """Result of the host floating-point probe."""

    ieee754: bool
    # Index of the 32-bit word holding sign and exponent: 0 big-endian, 1 little-endian.
    high_word: int


def probe_native_double() -> PlatformInfo:
    """Inspect the native double 1.0 as two 32-bit words."""
    words = np.array([1.0], dtype=np.float64).view(np.uint32)
    high_word = 0 if int(words[0]) else 1
    low_word = 1 - high_word
    ieee754 = int(words[high_word]) == IEEE_ONE_HIGH_WORD and int(words[low_word]) == 0
    return PlatformInfo(ieee754=ieee754, high_word=high_word)


class PlatformProbe:
    """Runs a probe function exactly once and caches its result.

    Concurrent first callers block on the lock until the probe finishes.
    Once set, the cached result is read without locking.
    """

    def __init__(self, probe: Callable[[], PlatformInfo]):
        self._probe = probe
        self._lock = threading.Lock()
        self._result: Optional[PlatformInfo] = None

    def get(self) -> PlatformInfo:
        result = self._result
        if result is not None:
            return result
        with self._lock:
            if self._result is None:
                info = self._probe()
                if info.ieee754:
                    logger.debug("Native double is IEEE-754, high word index %d", info.high_word)
                else:
                    logger.error("Native double is not IEEE-754 binary64; conversions are disabled")
                self._result = info
            return self._result


_PROBE = PlatformProbe(probe_native_double)


def platform_info() -> PlatformInfo:
    """Return the cached host probe, running it on first use."""
    return _PROBE.get()


def is_ieee754() -> bool:
    """Return True if the host double is IEEE-754 binary64."""
    return platform_info().ieee754
