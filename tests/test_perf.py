from __future__ import annotations

from choicecheck.perf import benchmark_distribution, benchmark_evaluation, capture_profile


def test_benchmark_evaluation_returns_statistics() -> None:
    stats = benchmark_evaluation(200, repeat=2)

    assert set(stats) == {"min", "max", "mean"}
    assert stats["max"] >= stats["min"]


def test_benchmark_distribution_returns_statistics() -> None:
    stats = benchmark_distribution("legacy", 5.0, 3, repeat=2)

    assert set(stats) == {"min", "max", "mean"}
    assert stats["mean"] >= 0.0


def test_capture_profile_returns_profile_output() -> None:
    with capture_profile() as (evaluator, exporter):
        evaluator.evaluate([0, 1, 2, 3] * 5)

    profile_output = exporter()

    assert "function calls" in profile_output
