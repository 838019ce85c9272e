"""
Timing utilities for per-stage measurement of the extraction pipeline.
"""

from __future__ import annotations

import time


class Timer:
    """
    Accumulating timer keyed by stage name.

    Usage:
        timer = Timer()
        timer.start("open")
        ...
        timer.stop("open")
        timer.to_dict()
    """

    def __init__(self):
        self._starts: dict[str, float] = {}
        self._totals: dict[str, float] = {}
        self._global_start: float = time.perf_counter()

    def start(self, name: str) -> None:
        self._starts[name] = time.perf_counter()

    def stop(self, name: str) -> float:
        """Stop timing ``name`` and return the duration in seconds."""
        if name not in self._starts:
            return 0.0
        duration = time.perf_counter() - self._starts.pop(name)
        self._totals[name] = self._totals.get(name, 0.0) + duration
        return duration

    @property
    def elapsed(self) -> float:
        """Seconds since the timer was created."""
        return time.perf_counter() - self._global_start

    def to_dict(self) -> dict[str, float]:
        return {name: round(total, 6) for name, total in self._totals.items()}
