"""Statistical primitives behind the randomness evaluator."""

from .base import ChiSquaredDistribution
from .distributions import ExactChiSquared, LegacyChiSquared, chi_squared_cdf
from .factory import DISTRIBUTIONS, build_distribution
from .frequency import (
    MIN_EXPECTED_PER_BUCKET,
    candidate_group_sizes,
    chi_squared_statistic,
    frequency_table,
    max_group_size,
)
from .utils import (
    QUADRATURE_STEP,
    lower_incomplete_gamma,
    regularized_lower_gamma,
    regularized_upper_gamma,
    stirling_gamma,
)

__all__ = [
    "ChiSquaredDistribution",
    "DISTRIBUTIONS",
    "ExactChiSquared",
    "LegacyChiSquared",
    "MIN_EXPECTED_PER_BUCKET",
    "QUADRATURE_STEP",
    "build_distribution",
    "candidate_group_sizes",
    "chi_squared_cdf",
    "chi_squared_statistic",
    "frequency_table",
    "lower_incomplete_gamma",
    "max_group_size",
    "regularized_lower_gamma",
    "regularized_upper_gamma",
    "stirling_gamma",
]
