import logging

from radixfft.utils.profiler import Profiler, TimingStats


def test_timing_stats_record() -> None:
    stats = TimingStats()
    stats.record(2_000_000)
    stats.record(4_000_000)

    assert stats.count == 2
    assert stats.min_ns == 2_000_000
    assert stats.max_ns == 4_000_000
    assert stats.avg_ms == 3.0


def test_profiler_measure_and_report(caplog) -> None:
    profiler = Profiler("test")
    for _ in range(3):
        with profiler.measure("n=100"):
            sum(range(100))

    assert profiler.stats("n=100").count == 3
    with caplog.at_level(logging.INFO):
        report = profiler.report()

    assert report is not None
    assert "n=100" in report
    assert "3 runs" in report
    assert "[PROFILE] test" in caplog.text
    # report() resets
    assert profiler.operations() == []


def test_disabled_profiler_records_nothing() -> None:
    profiler = Profiler("off", enabled=False)
    with profiler.measure("x"):
        pass

    assert profiler.operations() == []
    assert profiler.report() is None
