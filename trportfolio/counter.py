"""Thread-safe counters of processed and skipped operations."""

from __future__ import annotations

import threading


class OperationCounter:
    """Counts processed and skipped operations; safe to share between threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._processed = 0
        self._skipped = 0

    def increment_processed(self) -> int:
        """Count one more processed operation and return the new total."""
        with self._lock:
            self._processed += 1
            return self._processed

    def increment_skipped(self) -> int:
        """Count one more skipped operation and return the new total."""
        with self._lock:
            self._skipped += 1
            return self._skipped

    def processed(self) -> int:
        """Number of processed operations so far."""
        with self._lock:
            return self._processed

    def skipped(self) -> int:
        """Number of skipped operations so far."""
        with self._lock:
            return self._skipped