"""
F-distribution providers.

ScipyFDistribution is the default provider, backed by scipy.stats.f.
The evaluate_* helpers are what the solvers call: they run any provider
satisfying the FDistribution protocol and turn every failure mode
(exceptions, NaN, out-of-range results) into DistributionEvaluationError
carrying the offending degrees of freedom.
"""

import math

from scipy import stats as sp_stats

from pyanova.core.exceptions import DistributionEvaluationError, InvalidInputError
from pyanova.core.protocols import FDistribution


class ScipyFDistribution:
    """FDistribution provider using scipy.stats.f."""

    @property
    def name(self) -> str:
        return 'scipy'

    def cdf(self, x: float, df1: float, df2: float) -> float:
        return float(sp_stats.f.cdf(x, df1, df2))

    def sf(self, x: float, df1: float, df2: float) -> float:
        return float(sp_stats.f.sf(x, df1, df2))

    def quantile(self, p: float, df1: float, df2: float) -> float:
        return float(sp_stats.f.ppf(p, df1, df2))

    def __repr__(self) -> str:
        return "ScipyFDistribution()"


_DEFAULT = ScipyFDistribution()


def resolve_distribution(distribution: FDistribution | None) -> FDistribution:
    """
    Return the given provider, or the scipy default when None.

    Raises:
        InvalidInputError: If distribution lacks cdf or quantile
    """
    if distribution is None:
        return _DEFAULT
    if not isinstance(distribution, FDistribution):
        raise InvalidInputError(
            "distribution: must provide cdf(x, df1, df2) and "
            f"quantile(p, df1, df2); got {type(distribution).__name__}"
        )
    return distribution


def distribution_name(distribution: FDistribution) -> str:
    """Provider identifier: its name attribute, else its class name."""
    name = getattr(distribution, 'name', None)
    if isinstance(name, str) and name:
        return name
    return type(distribution).__name__


def _call(
    distribution: FDistribution,
    operation: str,
    x: float,
    df1: float,
    df2: float,
) -> float:
    method = getattr(distribution, operation)
    try:
        value = float(method(x, df1, df2))
    except DistributionEvaluationError:
        raise
    except Exception as e:
        raise DistributionEvaluationError(
            f"F distribution {operation}({x!r}) failed for "
            f"df=({df1:g}, {df2:g}): {type(e).__name__}: {e}",
            df_between=df1,
            df_within=df2,
            x=x,
            operation=operation,
        ) from e

    if math.isnan(value):
        raise DistributionEvaluationError(
            f"F distribution {operation}({x!r}) returned NaN for "
            f"df=({df1:g}, {df2:g})",
            df_between=df1,
            df_within=df2,
            x=x,
            operation=operation,
        )
    return value


def evaluate_sf(
    distribution: FDistribution,
    x: float,
    df1: float,
    df2: float,
) -> float:
    """
    Upper-tail probability P(F > x), checked to lie in [0, 1].

    Uses the provider's sf when it has one, else 1 - cdf(x).

    Raises:
        DistributionEvaluationError: provider failed or returned garbage
    """
    if not callable(getattr(distribution, 'sf', None)):
        return 1.0 - evaluate_cdf(distribution, x, df1, df2)

    value = _call(distribution, 'sf', x, df1, df2)
    if not (0.0 <= value <= 1.0):
        raise DistributionEvaluationError(
            f"F distribution sf({x!r}) returned {value!r}, outside [0, 1], "
            f"for df=({df1:g}, {df2:g})",
            df_between=df1,
            df_within=df2,
            x=x,
            operation='sf',
        )
    return value


def evaluate_cdf(
    distribution: FDistribution,
    x: float,
    df1: float,
    df2: float,
) -> float:
    """P(F <= x), checked to lie in [0, 1]."""
    value = _call(distribution, 'cdf', x, df1, df2)
    if not (0.0 <= value <= 1.0):
        raise DistributionEvaluationError(
            f"F distribution cdf({x!r}) returned {value!r}, outside [0, 1], "
            f"for df=({df1:g}, {df2:g})",
            df_between=df1,
            df_within=df2,
            x=x,
            operation='cdf',
        )
    return value


def evaluate_quantile(
    distribution: FDistribution,
    p: float,
    df1: float,
    df2: float,
) -> float:
    """
    Inverse CDF at p, checked to be finite and non-negative.

    Raises:
        DistributionEvaluationError: provider failed or returned garbage
    """
    value = _call(distribution, 'quantile', p, df1, df2)
    if not math.isfinite(value) or value < 0.0:
        raise DistributionEvaluationError(
            f"F distribution quantile({p!r}) returned {value!r} for "
            f"df=({df1:g}, {df2:g})",
            df_between=df1,
            df_within=df2,
            x=p,
            operation='quantile',
        )
    return value
