"""Concrete chi-squared distribution backends."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .base import ChiSquaredDistribution
from .utils import (
    QUADRATURE_STEP,
    clamp_probability,
    lower_incomplete_gamma,
    regularized_lower_gamma,
    regularized_upper_gamma,
    stirling_gamma,
)


def chi_squared_cdf(x: float, k: float, *, step: float = QUADRATURE_STEP) -> float:
    """Original game formula: ``lower_incomplete_gamma(k/2, x/2) / gamma(k/2)``.

    ``gamma`` is Stirling's approximation and the incomplete gamma function is
    a rectangle-rule integral, so the result is only approximately a CDF and
    can exceed ``1``.  ``nan`` signals a degenerate gamma value.
    """

    denominator = stirling_gamma(k / 2)
    if not math.isfinite(denominator) or denominator <= 0:
        return math.nan
    return lower_incomplete_gamma(k / 2, x / 2, step=step) / denominator


@dataclass
class _BaseDistribution(ChiSquaredDistribution):
    name: str

    def cdf(self, statistic: float, degrees_of_freedom: int) -> float:  # pragma: no cover - abstract
        raise NotImplementedError

    def sf(self, statistic: float, degrees_of_freedom: int) -> float:
        if degrees_of_freedom <= 0 or math.isnan(statistic):
            return 1.0
        return clamp_probability(1.0 - self.cdf(statistic, degrees_of_freedom))


class ExactChiSquared(_BaseDistribution):
    def __init__(self) -> None:
        super().__init__(name="exact")

    def cdf(self, statistic: float, degrees_of_freedom: int) -> float:
        return regularized_lower_gamma(degrees_of_freedom / 2, statistic / 2)

    def sf(self, statistic: float, degrees_of_freedom: int) -> float:
        if degrees_of_freedom <= 0 or math.isnan(statistic):
            return 1.0
        return clamp_probability(regularized_upper_gamma(degrees_of_freedom / 2, statistic / 2))


class LegacyChiSquared(_BaseDistribution):
    """Stirling gamma over rectangle-rule quadrature, as the original game."""

    def __init__(self, step: float = QUADRATURE_STEP) -> None:
        super().__init__(name="legacy")
        self.step = step

    def cdf(self, statistic: float, degrees_of_freedom: int) -> float:
        return chi_squared_cdf(statistic, degrees_of_freedom, step=self.step)


__all__ = ["ExactChiSquared", "LegacyChiSquared", "chi_squared_cdf"]
