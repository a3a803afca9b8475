"""
ANOVA solver dispatch.

Public API:
    anova_oneway(data, group=None, ...) -> AnovaSolution
    critical_value(df_between, df_within, alpha=0.05, ...) -> float
"""

import warnings
from typing import Any

from pyanova.core.compute.timing import Timer
from pyanova.core.distributions import (
    distribution_name,
    evaluate_quantile,
    evaluate_sf,
    resolve_distribution,
)
from pyanova.core.exceptions import DegenerateDesignError
from pyanova.core.protocols import FDistribution
from pyanova.core.result import Result
from pyanova.core.validation import check_positive, check_probability
from pyanova.anova._common import DEFAULT_ALPHA, AnovaParams
from pyanova.anova._ss import partition_sum_of_squares
from pyanova.anova.design import AnovaDesign
from pyanova.anova.solution import AnovaSolution


def anova_oneway(
    data: Any,
    group: Any = None,
    *,
    distribution: FDistribution | None = None,
) -> AnovaSolution:
    """
    One-way Analysis of Variance.

    Tests H0: mu_1 = mu_2 = ... = mu_k, the means of k >= 2 groups being
    equal, by partitioning the total sum of squares into between-group and
    within-group components.

    Args:
        data: One of
            - mapping {group label: sequence of values}
            - sequence of (group label, value) pairs or Observation objects
            - 1D numeric response, with group= giving parallel labels
            - an AnovaDesign
        group: Group labels parallel to data, when data is a response vector
        distribution: F-distribution provider (FDistribution protocol).
            Default: scipy.stats.f

    Returns:
        AnovaSolution with the ANOVA table, group summaries and effect sizes

    Raises:
        InvalidInputError: empty dataset, fewer than 2 groups, non-finite
            or non-numeric values, malformed input
        DegenerateDesignError: df_within = N - k <= 0
        DistributionEvaluationError: the provider failed for (df1, df2)
        NumericalError: the SS partition failed its consistency check

    Notes:
        Zero within-group variance: F = +inf and p = 0 when the group means
        differ; F = 0 and p = 1 when every observation is identical. A
        RuntimeWarning is issued and the message recorded on the result.
        Groups with a single observation are allowed (UserWarning).

    Examples:
        >>> result = anova_oneway({'pursuit': [95, 90, 97, 95],
        ...                        'flight': [85, 89, 92, 89],
        ...                        'substance': [75, 77, 79, 80]})
        >>> result.f_value
        38.35471698...
        >>> result.reject_null(alpha=0.05)
        True
        >>> print(result.summary())
    """
    timer = Timer()
    timer.start()

    dist = resolve_distribution(distribution)
    warnings_list: list[str] = []

    with timer.section('validate'):
        design = AnovaDesign.coerce(data, group)

    k = design.k
    n = design.n
    df_between = k - 1
    df_within = n - k
    if df_within <= 0:
        raise DegenerateDesignError(
            f"df_within = N - k = {n} - {k} = {df_within}: need more "
            f"observations than groups to estimate within-group variance",
            n_obs=n,
            n_groups=k,
        )

    with timer.section('sum_of_squares'):
        ss = partition_sum_of_squares(design.y, design.group, design.levels)

    singletons = [g.label for g in ss.groups if g.n == 1]
    if singletons:
        msg = (
            f"groups with a single observation contribute no within-group "
            f"information: {singletons}"
        )
        warnings.warn(msg, UserWarning, stacklevel=2)
        warnings_list.append(msg)

    ms_between = ss.between / df_between
    ms_within = ss.within / df_within

    with timer.section('distribution'):
        if ms_within == 0.0:
            if ms_between == 0.0:
                f_value, p_value = 0.0, 1.0
                msg = (
                    "all observations are identical: no variance between or "
                    "within groups; reporting F = 0, p = 1"
                )
            else:
                f_value, p_value = float('inf'), 0.0
                msg = (
                    "zero within-group variance with differing group means; "
                    "reporting F = inf, p = 0"
                )
            warnings.warn(msg, RuntimeWarning, stacklevel=2)
            warnings_list.append(msg)
        else:
            f_value = ms_between / ms_within
            p_value = evaluate_sf(dist, f_value, df_between, df_within)

    eta_sq = ss.between / ss.total if ss.total > 0 else 0.0
    omega_denom = ss.total + ms_within
    if ms_within == 0.0 or omega_denom <= 0:
        omega_sq = 0.0
    else:
        omega_sq = (ss.between - df_between * ms_within) / omega_denom

    timer.stop()

    params = AnovaParams(
        ss_between=ss.between,
        ss_within=ss.within,
        ss_total=ss.total,
        df_between=df_between,
        df_within=df_within,
        ms_between=ms_between,
        ms_within=ms_within,
        f_value=f_value,
        p_value=p_value,
        n_obs=n,
        n_groups=k,
        grand_mean=ss.grand_mean,
        grand_total=ss.grand_total,
        groups=ss.groups,
        eta_squared=eta_sq,
        omega_squared=omega_sq,
    )

    result = Result(
        params=params,
        info={
            'design_type': 'oneway',
            'source': design.source,
            'distribution': distribution_name(dist),
            'levels': design.levels,
        },
        timing=timer.result(),
        backend_name='cpu',
        warnings=tuple(warnings_list),
    )

    return AnovaSolution(_result=result, _design=design, _distribution=dist)


def critical_value(
    df_between: float,
    df_within: float,
    alpha: float = DEFAULT_ALPHA,
    *,
    distribution: FDistribution | None = None,
) -> float:
    """
    Critical F value: the f_crit with P(F > f_crit) = alpha.

    Reject H0 at level alpha when the observed F exceeds f_crit.

    Args:
        df_between: Numerator degrees of freedom (k - 1), > 0
        df_within: Denominator degrees of freedom (N - k), > 0
        alpha: Significance level in (0, 1). Default 0.05
        distribution: F-distribution provider. Default: scipy.stats.f

    Returns:
        f_crit

    Raises:
        InvalidInputError: alpha outside (0, 1) or non-positive df
        DistributionEvaluationError: the provider could not invert the CDF

    Examples:
        >>> critical_value(2, 9, 0.05)
        4.25649472...
    """
    df1 = check_positive(df_between, "df_between")
    df2 = check_positive(df_within, "df_within")
    a = check_probability(alpha, "alpha")
    dist = resolve_distribution(distribution)
    return evaluate_quantile(dist, 1.0 - a, df1, df2)
