"""
Core protocols for PyANOVA.

These define structural interfaces for the collaborators the calculator
consumes. We use Protocol (structural typing) rather than ABC (nominal
typing) so any object with the right methods can be injected, e.g. a
fake distribution in tests or a different numerical library.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class FDistribution(Protocol):
    """
    Protocol for an F-distribution provider.

    The ANOVA calculator never evaluates the F distribution itself; it asks
    a provider. Implementations must be pure functions of their arguments.

    Only cdf and quantile are required. A provider may also expose:
        sf(x, df1, df2): upper tail P(F > x). Used for the p-value when
            present, since it keeps precision where 1 - cdf underflows.
        name: identifier recorded in Result.info. Defaults to the class name.

    Failure contract:
        Implementations may raise DistributionEvaluationError directly. Any
        other exception, or a NaN / out-of-range return value, is converted
        into DistributionEvaluationError by the caller.
    """

    def cdf(self, x: float, df1: float, df2: float) -> float:
        """P(F <= x) for F ~ F(df1, df2)."""
        ...

    def quantile(self, p: float, df1: float, df2: float) -> float:
        """Inverse CDF: the x with cdf(x, df1, df2) = p."""
        ...
