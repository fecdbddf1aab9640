"""Utility modules for radixfft."""

from radixfft.utils.log_levels import configure_logging, parse_log_level
from radixfft.utils.profiler import Profiler, TimingStats

__all__ = [
    "Profiler",
    "TimingStats",
    "configure_logging",
    "parse_log_level",
]
