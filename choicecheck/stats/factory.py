"""Factory utilities for selecting a chi-squared distribution backend."""

from __future__ import annotations

from typing import Callable, Dict, Mapping

from ..errors import InvalidConfigurationError
from .base import ChiSquaredDistribution
from .distributions import ExactChiSquared, LegacyChiSquared
from .utils import QUADRATURE_STEP


def _default_registry() -> Dict[str, Callable[[float], ChiSquaredDistribution]]:
    return {
        "exact": lambda step: ExactChiSquared(),
        "legacy": lambda step: LegacyChiSquared(step=step),
    }


DISTRIBUTIONS: Mapping[str, Callable[[float], ChiSquaredDistribution]] = _default_registry()


def build_distribution(
    method: str,
    *,
    step: float = QUADRATURE_STEP,
    registry: Mapping[str, Callable[[float], ChiSquaredDistribution]] | None = None,
) -> ChiSquaredDistribution:
    """Instantiate the distribution registered under ``method``."""

    factories = dict(registry or DISTRIBUTIONS)
    factory = factories.get(method.strip().lower())
    if factory is None:
        known = ", ".join(sorted(factories))
        raise InvalidConfigurationError(
            f"Unknown p-value method '{method}'; expected one of: {known}."
        )
    return factory(step)


__all__ = ["DISTRIBUTIONS", "build_distribution"]
