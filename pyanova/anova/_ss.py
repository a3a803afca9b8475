"""
Sums of squares for one-way ANOVA.

The production path uses the deviation forms:

    SS_total   = sum_i (y_i - grand_mean)^2
    SS_between = sum_g n_g (mean_g - grand_mean)^2
    SS_within  = sum_g sum_{i in g} (y_i - mean_g)^2

which are sums of non-negative terms and so never go negative through
cancellation. The "computational" (totals) forms

    SS_between = sum_g T_g^2 / n_g - G^2 / N
    SS_within  = SS_total - SS_between

are kept here as independent cross-checks; partition_sum_of_squares()
verifies the additive identity and the test suite compares both forms.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pyanova.anova._common import GroupSummary
from pyanova.core.compute.tolerances import PARTITION, ZERO_SS_RTOL, ToleranceTier
from pyanova.core.exceptions import NumericalError


@dataclass(frozen=True)
class SumOfSquares:
    """The partition of the total sum of squares."""
    total: float
    between: float
    within: float
    grand_mean: float
    grand_total: float
    n: int
    groups: tuple[GroupSummary, ...]


def group_summaries(
    y: NDArray[np.floating[Any]],
    group: NDArray,
    levels: tuple[str, ...],
) -> tuple[GroupSummary, ...]:
    """Per-group n, mean, total and within-group sum of squares."""
    summaries = []
    for level in levels:
        y_g = y[group == level]
        mean_g = float(np.mean(y_g))
        summaries.append(GroupSummary(
            label=level,
            n=int(y_g.shape[0]),
            mean=mean_g,
            total=float(np.sum(y_g)),
            sum_sq=float(np.sum((y_g - mean_g) ** 2)),
        ))
    return tuple(summaries)


def ss_total(y: NDArray[np.floating[Any]]) -> float:
    """Sum of squared deviations about the grand mean."""
    return float(np.sum((y - np.mean(y)) ** 2))


def ss_between_deviations(
    groups: tuple[GroupSummary, ...],
    grand_mean: float,
) -> float:
    """SS_between = sum_g n_g (mean_g - grand_mean)^2."""
    return float(sum(g.n * (g.mean - grand_mean) ** 2 for g in groups))


def ss_between_totals(
    groups: tuple[GroupSummary, ...],
    grand_total: float,
    n: int,
) -> float:
    """SS_between = sum_g T_g^2 / n_g - G^2 / N."""
    return float(sum(g.total ** 2 / g.n for g in groups) - grand_total ** 2 / n)


def ss_within_pooled(groups: tuple[GroupSummary, ...]) -> float:
    """SS_within = sum_g sum_{i in g} (y_i - mean_g)^2."""
    return float(sum(g.sum_sq for g in groups))


def ss_within_residual(total: float, between: float) -> float:
    """SS_within = SS_total - SS_between."""
    return total - between


def partition_sum_of_squares(
    y: NDArray[np.floating[Any]],
    group: NDArray,
    levels: tuple[str, ...],
    *,
    tolerance: ToleranceTier = PARTITION,
) -> SumOfSquares:
    """
    Compute the SS partition and verify SS_total = SS_between + SS_within.

    Args:
        y: 1D float64 response, validated
        group: 1D string labels parallel to y
        levels: Group labels in reporting order
        tolerance: Tier used for the additive identity check

    Returns:
        SumOfSquares

    Raises:
        NumericalError: if the identity fails beyond tolerance. That is a
            bug in the arithmetic, not a property of the data.
    """
    n = int(y.shape[0])
    grand_mean = float(np.mean(y))
    grand_total = float(np.sum(y))

    groups = group_summaries(y, group, levels)

    total = ss_total(y)
    between = ss_between_deviations(groups, grand_mean)
    within = ss_within_pooled(groups)

    # Round-off grows with sum(y^2), not with SS_total
    scale = float(np.sum(y * y))
    if not tolerance.allclose(total, between + within, scale=scale):
        raise NumericalError(
            f"sum of squares partition failed: SS_total={total!r} but "
            f"SS_between + SS_within={between + within!r} "
            f"(SS_between={between!r}, SS_within={within!r}, "
            f"tolerance={tolerance.name})"
        )

    # Constant groups or identical group means: drop round-off residue
    if between <= ZERO_SS_RTOL * scale:
        between = 0.0
    if within <= ZERO_SS_RTOL * scale:
        within = 0.0

    return SumOfSquares(
        total=total,
        between=between,
        within=within,
        grand_mean=grand_mean,
        grand_total=grand_total,
        n=n,
        groups=groups,
    )
