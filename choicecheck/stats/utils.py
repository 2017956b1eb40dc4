"""Numerical helpers shared by the chi-squared distributions."""

from __future__ import annotations

import math

import numpy as np

QUADRATURE_STEP = 0.001
"""Step width of the rectangle rule used by :func:`lower_incomplete_gamma`."""

_CHUNK_SIZE = 1_000_000
_MAX_ITERATIONS = 500
_EPSILON = 1e-15
_TINY = 1e-300


def stirling_gamma(n: float) -> float:
    """Approximate ``gamma(n)`` with Stirling's formula.

    Accuracy degrades quickly for small ``n``; ``nan`` is returned where the
    formula is undefined (``n < 1``).
    """

    m = n - 1
    if m < 0:
        return math.nan
    return math.sqrt(2 * math.pi * m) * (m / math.e) ** m


def lower_incomplete_gamma(n: float, x: float, *, step: float = QUADRATURE_STEP) -> float:
    """Integrate ``t**(n-1) * exp(-t)`` over ``[0, x)`` with the rectangle rule.

    Sample points are ``0, step, 2*step, ...`` while below ``x``.  The
    integral is accumulated in chunks and stops early once the integrand has
    underflowed to zero beyond its mode.
    """

    if step <= 0:
        raise ValueError("Quadrature step must be greater than zero.")
    if not x > 0:
        return 0.0
    count = math.ceil(x / step)
    mode = max(n - 1, 0.0)
    total = 0.0
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        for begin in range(0, count, _CHUNK_SIZE):
            t = np.arange(begin, min(begin + _CHUNK_SIZE, count), dtype=float) * step
            t = t[t < x]
            if t.size == 0:
                break
            values = np.power(t, n - 1) * np.exp(-t)
            total += float(values.sum()) * step
            if t[0] > mode and not values.any():
                break
    return total


def regularized_lower_gamma(a: float, x: float) -> float:
    """Return the regularised lower incomplete gamma function ``P(a, x)``."""

    if a <= 0 or math.isnan(x):
        return math.nan
    if x <= 0:
        return 0.0
    if x < a + 1:
        return _gamma_series(a, x)
    return 1.0 - _gamma_continued_fraction(a, x)


def regularized_upper_gamma(a: float, x: float) -> float:
    """Return ``Q(a, x) = 1 - P(a, x)`` without cancellation for large ``x``."""

    if a <= 0 or math.isnan(x):
        return math.nan
    if x <= 0:
        return 1.0
    if x < a + 1:
        return 1.0 - _gamma_series(a, x)
    return _gamma_continued_fraction(a, x)


def _log_prefactor(a: float, x: float) -> float:
    return -x + a * math.log(x) - math.lgamma(a)


def _gamma_series(a: float, x: float) -> float:
    term = 1.0 / a
    total = term
    denominator = a
    for _ in range(_MAX_ITERATIONS):
        denominator += 1
        term *= x / denominator
        total += term
        if abs(term) < abs(total) * _EPSILON:
            break
    return min(1.0, total * math.exp(_log_prefactor(a, x)))


def _gamma_continued_fraction(a: float, x: float) -> float:
    # Modified Lentz evaluation of the continued fraction for Q(a, x).
    b = x + 1 - a
    c = 1.0 / _TINY
    d = 1.0 / b
    h = d
    for i in range(1, _MAX_ITERATIONS):
        an = -i * (i - a)
        b += 2
        d = an * d + b
        if abs(d) < _TINY:
            d = _TINY
        c = b + an / c
        if abs(c) < _TINY:
            c = _TINY
        d = 1.0 / d
        delta = d * c
        h *= delta
        if abs(delta - 1.0) < _EPSILON:
            break
    return min(1.0, math.exp(_log_prefactor(a, x)) * h)


def clamp_probability(value: float) -> float:
    """Clamp ``value`` into ``[0, 1]``; non-finite values become ``1.0``."""

    if not math.isfinite(value):
        return 1.0
    return max(0.0, min(1.0, value))


__all__ = [
    "QUADRATURE_STEP",
    "clamp_probability",
    "lower_incomplete_gamma",
    "regularized_lower_gamma",
    "regularized_upper_gamma",
    "stirling_gamma",
]
