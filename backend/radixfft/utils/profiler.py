"""Lightweight timing collection for transform benchmarks.

Usage:
    from radixfft.utils.profiler import Profiler

    profiler = Profiler("bench")

    with profiler.measure("n=1000"):
        transform(1000, x_re, x_im)

    profiler.report()  # Logs statistics and resets
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class TimingStats:
    """Accumulated timing statistics for a single operation."""

    count: int = 0
    total_ns: int = 0
    min_ns: int = 0
    max_ns: int = 0

    def record(self, elapsed_ns: int) -> None:
        self.count += 1
        self.total_ns += elapsed_ns
        if self.count == 1:
            self.min_ns = elapsed_ns
            self.max_ns = elapsed_ns
        else:
            self.min_ns = min(self.min_ns, elapsed_ns)
            self.max_ns = max(self.max_ns, elapsed_ns)

    @property
    def avg_ns(self) -> float:
        return self.total_ns / self.count if self.count > 0 else 0.0

    @property
    def avg_ms(self) -> float:
        return self.avg_ns / 1_000_000.0


@dataclass
class Profiler:
    """Collects per-operation wall-clock timings with time.perf_counter_ns()."""

    name: str
    enabled: bool = True
    _stats: dict[str, TimingStats] = field(default_factory=lambda: defaultdict(TimingStats))

    @contextmanager
    def measure(self, operation: str) -> Generator[None, None, None]:
        """Context manager timing one run of `operation`."""
        if not self.enabled:
            yield
            return

        start = time.perf_counter_ns()
        try:
            yield
        finally:
            self._stats[operation].record(time.perf_counter_ns() - start)

    def stats(self, operation: str) -> TimingStats:
        return self._stats[operation]

    def operations(self) -> list[str]:
        return list(self._stats)

    def report(self) -> str | None:
        """Log a summary of all operations in insertion order and reset.

        Returns the report string, or None if nothing was measured.
        """
        if not self.enabled or not self._stats:
            return None

        lines = [f"[PROFILE] {self.name}:"]
        for op, stats in self._stats.items():
            if stats.count == 0:
                continue
            lines.append(
                f"  {op}: {stats.count:4d} runs | avg={stats.avg_ms:.3f}ms "
                f"min={stats.min_ns / 1e6:.3f}ms max={stats.max_ns / 1e6:.3f}ms"
            )

        report = "\n".join(lines)
        logger.info(report)
        self.reset()
        return report

    def reset(self) -> None:
        self._stats.clear()
