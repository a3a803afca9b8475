"""
Core infrastructure for PyANOVA.

Shared abstractions used by the anova package.

Key components:
    protocols: FDistribution collaborator protocol
    distributions: scipy-backed F distribution and checked evaluation
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing and tolerance tiers
"""

from pyanova.core.protocols import FDistribution
from pyanova.core.distributions import ScipyFDistribution
from pyanova.core.result import Result
from pyanova.core.exceptions import (
    PyAnovaError,
    ValidationError,
    InvalidInputError,
    DimensionError,
    DegenerateDesignError,
    NumericalError,
    DistributionEvaluationError,
)

__all__ = [
    # Protocols
    "FDistribution",
    "ScipyFDistribution",
    # Result
    "Result",
    # Exceptions
    "PyAnovaError",
    "ValidationError",
    "InvalidInputError",
    "DimensionError",
    "DegenerateDesignError",
    "NumericalError",
    "DistributionEvaluationError",
]
