"""
User-facing ANOVA solution type.

AnovaSolution wraps a Result[AnovaParams] and provides convenient accessors,
the significance decision, and formatted summary output (matching R's
summary(aov(...)) conventions).
"""

from dataclasses import dataclass
from typing import Any

import numpy as np

from pyanova.core.distributions import evaluate_quantile, resolve_distribution
from pyanova.core.protocols import FDistribution
from pyanova.core.result import Result
from pyanova.core.validation import check_probability
from pyanova.anova._common import (
    DEFAULT_ALPHA,
    AnovaParams,
    AnovaTableRow,
    GroupSummary,
)
from pyanova.anova.design import AnovaDesign


@dataclass
class AnovaSolution:
    """
    User-facing result for one-way ANOVA.

    Produced by anova_oneway().
    """
    _result: Result[AnovaParams]
    _design: AnovaDesign | None = None
    _distribution: FDistribution | None = None

    @property
    def params(self) -> AnovaParams:
        return self._result.params

    @property
    def table(self) -> tuple[AnovaTableRow, ...]:
        """ANOVA table (Between, Within): term, df, SS, MS, F, p."""
        return self._result.params.table

    @property
    def ss_between(self) -> float:
        return self._result.params.ss_between

    @property
    def ss_within(self) -> float:
        return self._result.params.ss_within

    @property
    def ss_total(self) -> float:
        return self._result.params.ss_total

    @property
    def df_between(self) -> int:
        return self._result.params.df_between

    @property
    def df_within(self) -> int:
        return self._result.params.df_within

    @property
    def ms_between(self) -> float:
        return self._result.params.ms_between

    @property
    def ms_within(self) -> float:
        return self._result.params.ms_within

    @property
    def f_value(self) -> float:
        """F = MS_between / MS_within (+inf if within-group variance is 0)."""
        return self._result.params.f_value

    @property
    def p_value(self) -> float:
        """P(F > f_value) under H0."""
        return self._result.params.p_value

    @property
    def n_obs(self) -> int:
        return self._result.params.n_obs

    @property
    def n_groups(self) -> int:
        return self._result.params.n_groups

    @property
    def grand_mean(self) -> float:
        return self._result.params.grand_mean

    @property
    def grand_total(self) -> float:
        return self._result.params.grand_total

    @property
    def groups(self) -> tuple[GroupSummary, ...]:
        return self._result.params.groups

    @property
    def group_means(self) -> dict[str, float]:
        return {g.label: g.mean for g in self._result.params.groups}

    @property
    def eta_squared(self) -> float:
        return self._result.params.eta_squared

    @property
    def omega_squared(self) -> float:
        return self._result.params.omega_squared

    @property
    def design(self) -> AnovaDesign | None:
        return self._design

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    # --- Decision ---

    def critical_value(self, alpha: float = DEFAULT_ALPHA) -> float:
        """F critical value at level alpha for this table's degrees of freedom."""
        a = check_probability(alpha, "alpha")
        dist = resolve_distribution(self._distribution)
        return evaluate_quantile(dist, 1.0 - a, self.df_between, self.df_within)

    def reject_null(self, alpha: float = DEFAULT_ALPHA) -> bool:
        """
        Critical-value decision: True iff F > f_crit(alpha).

        Agrees with significant() except when p is within floating-point
        noise of alpha.
        """
        return bool(self.f_value > self.critical_value(alpha))

    def significant(self, alpha: float = DEFAULT_ALPHA) -> bool:
        """p-value decision: True iff p < alpha."""
        a = check_probability(alpha, "alpha")
        return bool(self.p_value < a)

    # --- Formatting ---

    def summary(self, alpha: float | None = None) -> str:
        """
        Generate R-style one-way ANOVA summary.

        Args:
            alpha: If given, append the critical value and the decision
                on H0 at this level.
        """
        p = self._result.params
        lines = [
            "One-way Analysis of Variance",
            "=" * 78,
            f"Observations: {p.n_obs}    Groups: {p.n_groups}    "
            f"Grand mean: {p.grand_mean:.4f}",
            "",
            f"{'Source':<12} {'Df':>6} {'Sum Sq':>14} {'Mean Sq':>14} "
            f"{'F value':>10} {'Pr(>F)':>12}",
            "-" * 78,
        ]

        for row in self.table:
            if row.f_value is not None:
                sig = _significance_stars(row.p_value)
                lines.append(
                    f"{row.term:<12} {row.df:>6} {row.sum_sq:>14.4f} "
                    f"{row.mean_sq:>14.4f} {row.f_value:>10.4f} "
                    f"{row.p_value:>12.4e} {sig}"
                )
            else:
                lines.append(
                    f"{row.term:<12} {row.df:>6} {row.sum_sq:>14.4f} "
                    f"{row.mean_sq:>14.4f}"
                )
        lines.append(
            f"{'Total':<12} {p.df_between + p.df_within:>6} {p.ss_total:>14.4f}"
        )

        lines.append("-" * 78)
        lines.append("Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1")

        lines.append("")
        lines.append("Groups:")
        lines.append(
            f"  {'Group':<20} {'n':>6} {'Mean':>14} {'Total':>14} {'Variance':>14}"
        )
        for g in p.groups:
            lines.append(
                f"  {g.label:<20} {g.n:>6} {g.mean:>14.4f} {g.total:>14.4f} "
                f"{_format_number(g.variance):>14}"
            )

        lines.append("")
        lines.append(
            f"Effect sizes: eta^2 = {p.eta_squared:.4f}, "
            f"omega^2 = {p.omega_squared:.4f}"
        )

        if alpha is not None:
            f_crit = self.critical_value(alpha)
            decision = "reject H0" if p.f_value > f_crit else "fail to reject H0"
            lines.append(
                f"Critical F({p.df_between}, {p.df_within}) at alpha = {alpha:g}: "
                f"{f_crit:.4f}  ->  {decision}"
            )

        for w in self.warnings:
            lines.append(f"Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        p = self._result.params
        return (
            f"AnovaSolution(n={p.n_obs}, k={p.n_groups}, "
            f"F={p.f_value:.4g}, p={p.p_value:.4g})"
        )


# =====================================================================
# Helpers
# =====================================================================


def _significance_stars(p: float | None) -> str:
    """Return significance stars for a p-value."""
    if p is None or np.isnan(p):
        return ""
    if p < 0.001:
        return "***"
    if p < 0.01:
        return "**"
    if p < 0.05:
        return "*"
    if p < 0.1:
        return "."
    return ""


def _format_number(x: float) -> str:
    if np.isnan(x):
        return "NA"
    return f"{x:.4f}"
