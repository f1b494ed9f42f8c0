"""
Name allocation for stored derivatives.

Names are "{nanoseconds}{ext}". The allocator never checks the filesystem;
uniqueness within a process comes from keeping the issued timestamps
strictly increasing, even when the clock repeats or steps backwards.
Two processes writing to the same root can still collide.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable

logger = logging.getLogger(__name__)


class IdentityAllocator:
    """Hands out collision-resistant file names for new derivatives."""

    def __init__(self, clock: Callable[[], int] = time.time_ns):
        self._clock = clock
        self._lock = threading.Lock()
        self._last = 0

    def next_timestamp(self) -> int:
        with self._lock:
            now = self._clock()
            if now <= self._last:
                logger.debug("Clock reading %d not after %d, bumping", now, self._last)
                now = self._last + 1
            self._last = now
            return now

    def allocate(self, original_ext: str) -> str:
        """
        Build a new file name keeping the upload's extension verbatim.

        original_ext includes its leading dot, e.g. ".jpg".
        """
        return f"{self.next_timestamp()}{original_ext}"
