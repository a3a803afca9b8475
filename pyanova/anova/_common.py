"""
Common data types for one-way ANOVA.

Contains the frozen parameter payloads that go inside Result[P] envelopes.
Each payload is a pure data container; the only methods are trivial
derived quantities.
"""

from dataclasses import dataclass


DEFAULT_ALPHA = 0.05

BETWEEN = 'Between'
WITHIN = 'Within'


@dataclass(frozen=True)
class Observation:
    """A single measurement tagged with its group label."""
    group: str
    value: float


@dataclass(frozen=True)
class GroupSummary:
    """Descriptive statistics of one group (one level of the factor)."""
    label: str
    n: int
    mean: float
    total: float
    sum_sq: float       # sum of squared deviations about the group mean

    @property
    def variance(self) -> float:
        """Sample variance (ddof=1); NaN for a single-observation group."""
        if self.n < 2:
            return float('nan')
        return self.sum_sq / (self.n - 1)


@dataclass(frozen=True)
class AnovaTableRow:
    """One row of an ANOVA table (Between or Within)."""
    term: str
    df: int
    sum_sq: float
    mean_sq: float
    f_value: float | None    # None for Within row
    p_value: float | None    # None for Within row


@dataclass(frozen=True)
class AnovaParams:
    """
    Parameter payload for one-way ANOVA.

    ss_total == ss_between + ss_within up to the PARTITION tolerance, and
    df_between + df_within == n_obs - 1.
    """
    ss_between: float
    ss_within: float
    ss_total: float
    df_between: int
    df_within: int
    ms_between: float
    ms_within: float
    f_value: float
    p_value: float
    n_obs: int
    n_groups: int
    grand_mean: float
    grand_total: float
    groups: tuple[GroupSummary, ...]
    eta_squared: float
    omega_squared: float

    @property
    def table(self) -> tuple[AnovaTableRow, ...]:
        return (
            AnovaTableRow(
                term=BETWEEN,
                df=self.df_between,
                sum_sq=self.ss_between,
                mean_sq=self.ms_between,
                f_value=self.f_value,
                p_value=self.p_value,
            ),
            AnovaTableRow(
                term=WITHIN,
                df=self.df_within,
                sum_sq=self.ss_within,
                mean_sq=self.ms_within,
                f_value=None,
                p_value=None,
            ),
        )
