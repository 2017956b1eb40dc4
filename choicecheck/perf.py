"""Performance helpers for benchmarking and profiling the randomness test."""

from __future__ import annotations

import cProfile
import io
import pstats
import statistics
import timeit
from contextlib import contextmanager
from typing import Callable, Iterator, Mapping

from .evaluator import EvaluatorSettings, RandomnessEvaluator
from .history import InputHistory
from .stats import build_distribution


def benchmark_evaluation(
    length: int,
    *,
    settings: EvaluatorSettings | None = None,
    repeat: int = 5,
) -> Mapping[str, float]:
    """Benchmark one evaluation pass over a cyclic history of ``length`` choices."""

    evaluator = RandomnessEvaluator(settings)
    num_options = evaluator.settings.num_options
    history = InputHistory(index % num_options for index in range(length))
    timer = timeit.Timer(lambda: evaluator.evaluate(history))
    return _summarise(timer.repeat(repeat=repeat, number=1))


def benchmark_distribution(
    method: str,
    statistic: float,
    degrees_of_freedom: int,
    *,
    repeat: int = 5,
) -> Mapping[str, float]:
    """Benchmark a single p-value computation with the backend ``method``."""

    distribution = build_distribution(method)
    timer = timeit.Timer(lambda: distribution.sf(statistic, degrees_of_freedom))
    return _summarise(timer.repeat(repeat=repeat, number=1))


@contextmanager
def capture_profile(
    evaluator: RandomnessEvaluator | None = None,
) -> Iterator[tuple[RandomnessEvaluator, Callable[[int], str]]]:
    """Context manager capturing profiling data for manual inspection.

    The yielded tuple contains the evaluator to exercise and a callable that
    returns a formatted profile summary when invoked.
    """

    profiler = cProfile.Profile()
    target = evaluator or RandomnessEvaluator()
    profiler.enable()

    def exporter(limit: int = 25) -> str:
        profiler.disable()
        stream = io.StringIO()
        stats = pstats.Stats(profiler, stream=stream)
        stats.strip_dirs().sort_stats("cumulative").print_stats(limit)
        return stream.getvalue()

    try:
        yield target, exporter
    finally:
        profiler.disable()


def _summarise(runs: list[float]) -> Mapping[str, float]:
    return {
        "min": min(runs),
        "max": max(runs),
        "mean": statistics.fmean(runs),
    }


__all__ = [
    "benchmark_distribution",
    "benchmark_evaluation",
    "capture_profile",
]
