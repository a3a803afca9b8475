"""
Shared compute infrastructure for PyANOVA.

Submodules:
    timing: Execution timing utilities
    tolerances: Tolerance tiers for numerical cross-checks
"""

from pyanova.core.compute.timing import Timer
from pyanova.core.compute.tolerances import (
    ToleranceTier,
    PARTITION,
    ZERO_SS_RTOL,
)

__all__ = [
    "Timer",
    "ToleranceTier",
    "PARTITION",
    "ZERO_SS_RTOL",
]
