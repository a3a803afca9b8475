"""
PyANOVA: one-factor Analysis of Variance for Python.

Partitions the variability of grouped observations into between-group and
within-group sums of squares and tests the equality of group means with
the F distribution. Results match R's summary(aov(y ~ group)).

Submodules:
    anova: one-way ANOVA and F critical values
    core: exceptions, result envelope, validation, distribution providers
"""

__version__ = "0.1.0"

from pyanova import anova
from pyanova.anova import anova_oneway, critical_value

__all__ = [
    "__version__",
    "anova",
    "anova_oneway",
    "critical_value",
]
