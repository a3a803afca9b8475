"""
One-way Analysis of Variance (ANOVA).

Public API:
    anova_oneway(data, group=None, ...) -> AnovaSolution
    critical_value(df_between, df_within, alpha=0.05) -> float
"""

from pyanova.anova.solvers import (
    anova_oneway,
    critical_value,
)
from pyanova.anova.design import AnovaDesign
from pyanova.anova.solution import AnovaSolution
from pyanova.anova._common import (
    AnovaParams,
    AnovaTableRow,
    GroupSummary,
    Observation,
)

__all__ = [
    "anova_oneway",
    "critical_value",
    "AnovaDesign",
    "AnovaSolution",
    "AnovaParams",
    "AnovaTableRow",
    "GroupSummary",
    "Observation",
]
