"""Unit tests for :mod:`choicecheck.stats.frequency`."""

from __future__ import annotations

import pytest

from choicecheck.stats import (
    candidate_group_sizes,
    chi_squared_statistic,
    frequency_table,
    max_group_size,
)


@pytest.mark.parametrize(
    ("length", "expected"),
    [(0, 0), (4, 0), (5, 0), (19, 0), (20, 1), (79, 1), (80, 2), (320, 3)],
)
def test_max_group_size_for_four_options(length: int, expected: int) -> None:
    assert max_group_size(length, 4) == expected


def test_candidate_group_sizes_skip_non_divisors() -> None:
    assert candidate_group_sizes(6, 2, min_expected=1.0) == [1, 2]
    assert candidate_group_sizes(5, 2, min_expected=1.0) == [1]
    assert candidate_group_sizes(4, 4) == []


def test_frequency_table_reads_windows_most_significant_first() -> None:
    table = frequency_table([0, 1, 2, 3, 3, 2], 2, 4)

    assert table.size == 16
    assert table[1] == 1  # (0, 1)
    assert table[11] == 1  # (2, 3)
    assert table[14] == 1  # (3, 2)
    assert table.sum() == 3


def test_frequency_table_discards_trailing_partial_window() -> None:
    table = frequency_table(iter([0, 1, 2]), 2, 4)

    assert table.sum() == 1
    assert table[1] == 1


def test_frequency_table_single_symbol_groups() -> None:
    assert frequency_table([0] * 20, 1, 4).tolist() == [20, 0, 0, 0]


def test_chi_squared_zero_only_for_equal_buckets() -> None:
    assert chi_squared_statistic([10, 10, 10, 10]) == 0.0
    assert chi_squared_statistic([20, 0, 0, 0]) == pytest.approx(60.0)
    assert chi_squared_statistic([11, 9, 10, 10]) > 0.0


def test_chi_squared_guards_empty_tables() -> None:
    assert chi_squared_statistic([]) == 0.0
    assert chi_squared_statistic([0, 0, 0]) == 0.0
