"""Multi-scale chi-squared test deciding whether player choices look random.

After every recorded choice the whole history is split into non-overlapping
windows ("groups") of increasing size.  For each group size the windows are
counted in a frequency table and compared against the uniform distribution
with a chi-squared goodness-of-fit test.  The first group size whose p-value
drops to ``alpha`` or below rejects the history as non-random.

The largest group size analysed grows with the history: a group size ``g`` is
only considered once every one of the ``K**g`` buckets can expect at least
:data:`~choicecheck.stats.frequency.MIN_EXPECTED_PER_BUCKET` windows, so
histories shorter than that are never judged at all.

Numerical trouble never escapes this module.  Degenerate tables or gamma
values are treated as "no evidence against randomness" and produce a p-value
of ``1.0``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Tuple

import numpy as np

from .history import InputHistory
from .stats import (
    MIN_EXPECTED_PER_BUCKET,
    QUADRATURE_STEP,
    ChiSquaredDistribution,
    build_distribution,
    candidate_group_sizes,
    chi_squared_statistic,
    frequency_table,
)

ALPHA: float = 0.05
"""Significance threshold at or below which a history is rejected."""

NUM_OPTIONS: int = 4
"""Number of selectable options, i.e. the size of the symbol alphabet."""


@dataclass(frozen=True)
class EvaluatorSettings:
    """Tunable constants of the randomness test."""

    alpha: float = ALPHA
    num_options: int = NUM_OPTIONS
    min_expected_per_bucket: float = MIN_EXPECTED_PER_BUCKET
    method: str = "exact"
    quadrature_step: float = QUADRATURE_STEP


@dataclass(frozen=True)
class GroupTrial:
    """Outcome of the chi-squared test for a single group size."""

    group_size: int
    frequencies: Tuple[int, ...]
    chi_squared: float
    degrees_of_freedom: int
    p_value: float
    rejected: bool

    @property
    def bucket_count(self) -> int:
        return len(self.frequencies)

    @property
    def window_count(self) -> int:
        return sum(self.frequencies)


@dataclass(frozen=True)
class Verdict:
    """Result of one evaluation pass over the history."""

    history_length: int
    alpha: float
    trials: Tuple[GroupTrial, ...] = field(default_factory=tuple)

    @property
    def trigger(self) -> GroupTrial | None:
        """First trial that rejected the history, if any."""

        for trial in self.trials:
            if trial.rejected:
                return trial
        return None

    @property
    def terminated(self) -> bool:
        return self.trigger is not None

    @property
    def p_value(self) -> float | None:
        trigger = self.trigger
        return trigger.p_value if trigger is not None else None

    @property
    def group_size(self) -> int | None:
        trigger = self.trigger
        return trigger.group_size if trigger is not None else None


class RandomnessEvaluator:
    """Evaluate an :class:`~choicecheck.history.InputHistory` for randomness."""

    def __init__(
        self,
        settings: EvaluatorSettings | None = None,
        *,
        distribution: ChiSquaredDistribution | None = None,
    ) -> None:
        self.settings = settings or EvaluatorSettings()
        self.distribution = distribution or build_distribution(
            self.settings.method, step=self.settings.quadrature_step
        )

    def evaluate(
        self, history: InputHistory | Iterable[int], *, exhaustive: bool = False
    ) -> Verdict:
        """Run the multi-scale test over ``history``.

        Evaluation stops at the first rejecting group size unless
        ``exhaustive`` is set, in which case every candidate group size is
        tested; the verdict is decided by the first rejection either way.
        """

        source = history.iterate() if isinstance(history, InputHistory) else iter(history)
        symbols = np.fromiter(source, dtype=np.int64)
        settings = self.settings
        trials: list[GroupTrial] = []
        for group_size in candidate_group_sizes(
            symbols.size,
            settings.num_options,
            min_expected=settings.min_expected_per_bucket,
        ):
            trial = self.run_trial(symbols, group_size)
            trials.append(trial)
            if trial.rejected and not exhaustive:
                break
        return Verdict(history_length=int(symbols.size), alpha=settings.alpha, trials=tuple(trials))

    def run_trial(self, symbols: Iterable[int] | np.ndarray, group_size: int) -> GroupTrial:
        """Test a single group size against the uniform distribution."""

        frequencies = frequency_table(symbols, group_size, self.settings.num_options)
        degrees_of_freedom = frequencies.size - 1
        if frequencies.sum() == 0:
            chi_squared, p_value = 0.0, 1.0
        else:
            chi_squared = chi_squared_statistic(frequencies)
            p_value = self.distribution.sf(chi_squared, degrees_of_freedom)
        return GroupTrial(
            group_size=group_size,
            frequencies=tuple(int(count) for count in frequencies),
            chi_squared=chi_squared,
            degrees_of_freedom=degrees_of_freedom,
            p_value=p_value,
            rejected=p_value <= self.settings.alpha,
        )


__all__ = [
    "ALPHA",
    "NUM_OPTIONS",
    "EvaluatorSettings",
    "GroupTrial",
    "RandomnessEvaluator",
    "Verdict",
]
