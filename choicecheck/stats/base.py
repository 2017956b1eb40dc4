"""Common interfaces for chi-squared distributions."""

from __future__ import annotations

from typing import Protocol


class ChiSquaredDistribution(Protocol):
    """Protocol implemented by every chi-squared distribution backend."""

    name: str

    def cdf(self, statistic: float, degrees_of_freedom: int) -> float:
        """Return ``P(X <= statistic)`` for ``degrees_of_freedom``."""

    def sf(self, statistic: float, degrees_of_freedom: int) -> float:
        """Return the p-value ``1 - cdf`` clamped into ``[0, 1]``."""
