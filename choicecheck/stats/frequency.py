"""N-gram frequency tables and the chi-squared statistic."""

from __future__ import annotations

from typing import Iterable, List, Sequence

import numpy as np

MIN_EXPECTED_PER_BUCKET = 5.0
"""Minimum expected count per bucket before a group size is analysed."""


def max_group_size(
    history_length: int,
    num_options: int,
    *,
    min_expected: float = MIN_EXPECTED_PER_BUCKET,
) -> int:
    """Return ``floor(log(n / min_expected) / log(num_options))``.

    Computed as the largest ``g`` with ``num_options**g * min_expected <= n``,
    which is the same value without floating point error at exact powers.
    Histories shorter than ``min_expected`` yield ``0``.
    """

    if num_options < 2 or history_length <= 0:
        return 0
    size = 0
    while num_options ** (size + 1) * min_expected <= history_length:
        size += 1
    return size


def candidate_group_sizes(
    history_length: int,
    num_options: int,
    *,
    min_expected: float = MIN_EXPECTED_PER_BUCKET,
) -> List[int]:
    """Return the group sizes evaluated for ``history_length``, in order.

    Group sizes that do not divide the history length are skipped.
    """

    upper = max_group_size(history_length, num_options, min_expected=min_expected)
    return [size for size in range(1, upper + 1) if history_length % size == 0]


def frequency_table(
    symbols: Iterable[int] | np.ndarray,
    group_size: int,
    num_options: int,
) -> np.ndarray:
    """Count non-overlapping windows of ``group_size`` symbols.

    Each window is read as a base-``num_options`` number, most significant
    symbol first, and the bucket with that index is incremented.  A trailing
    partial window is discarded.
    """

    if group_size < 1:
        raise ValueError("Group size must be at least 1.")
    values = np.fromiter(symbols, dtype=np.int64) if not isinstance(symbols, np.ndarray) else symbols
    window_count = values.size // group_size
    bucket_count = num_options ** group_size
    if window_count == 0:
        return np.zeros(bucket_count, dtype=np.int64)
    windows = values[: window_count * group_size].reshape(window_count, group_size)
    place_values = num_options ** np.arange(group_size - 1, -1, -1, dtype=np.int64)
    indices = windows @ place_values
    return np.bincount(indices, minlength=bucket_count)


def chi_squared_statistic(frequencies: Sequence[int] | np.ndarray) -> float:
    """Return ``sum((observed - expected)**2 / expected)`` against uniformity.

    An empty table or one without observations yields ``0.0``.
    """

    observed = np.asarray(frequencies, dtype=float)
    if observed.size == 0:
        return 0.0
    total = observed.sum()
    expected = total / observed.size
    if expected <= 0:
        return 0.0
    return float((((observed - expected) ** 2) / expected).sum())


__all__ = [
    "MIN_EXPECTED_PER_BUCKET",
    "candidate_group_sizes",
    "chi_squared_statistic",
    "frequency_table",
    "max_group_size",
]
