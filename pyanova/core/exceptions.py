"""
Exception hierarchy for PyANOVA.

All exceptions inherit from PyAnovaError to allow catching any
library-specific error. Input problems are ValidationErrors, failures of
the arithmetic or of the distribution provider are NumericalErrors.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyAnovaError(Exception):
    """Base exception for all PyANOVA errors."""
    pass


class ValidationError(PyAnovaError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class InvalidInputError(ValidationError):
    """
    The dataset cannot be analysed at all.

    Raised when the dataset is empty, has fewer than two groups, contains
    non-finite or non-numeric values, or is malformed.
    """
    pass


class DimensionError(InvalidInputError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class DegenerateDesignError(ValidationError):
    """
    Not enough observations to estimate the within-group error.

    Raised when df_within = N - k <= 0, i.e. every group holds a single
    observation. Supply more data or fewer groups.

    Attributes:
        n_obs: Total number of observations (N)
        n_groups: Number of groups (k)
    """

    def __init__(
        self,
        message: str,
        n_obs: int | None = None,
        n_groups: int | None = None,
    ):
        super().__init__(message)
        self.n_obs = n_obs
        self.n_groups = n_groups

    @property
    def df_within(self) -> int | None:
        if self.n_obs is None or self.n_groups is None:
            return None
        return self.n_obs - self.n_groups


class NumericalError(PyAnovaError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation,
    including internal consistency checks on the sum-of-squares partition.
    """
    pass


class DistributionEvaluationError(NumericalError):
    """
    The F-distribution provider failed to evaluate or invert.

    Raised when the CDF, survival function or quantile cannot be computed
    for the given degrees of freedom (e.g. overflow at extreme df, or a
    provider returning NaN).

    Attributes:
        df_between: Numerator degrees of freedom
        df_within: Denominator degrees of freedom
        x: The point (F value or probability) being evaluated, if known
        operation: 'cdf', 'sf' or 'quantile'
    """

    def __init__(
        self,
        message: str,
        df_between: float,
        df_within: float,
        x: float | None = None,
        operation: str | None = None,
    ):
        super().__init__(message)
        self.df_between = df_between
        self.df_within = df_within
        self.x = x
        self.operation = operation
