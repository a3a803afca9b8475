"""
Tolerance tiers for numerical validation.

Defines precision expectations for the checks PyANOVA performs on its own
arithmetic:
- PARTITION: agreement between the two forms of the sum-of-squares
  partition (SS_total = SS_between + SS_within)

Used by the solver's internal consistency check and by the test suite.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str

    def allclose(self, a: float, b: float, scale: float = 1.0) -> bool:
        """
        True if |a - b| <= atol * scale + rtol * max(|a|, |b|).

        scale lifts the absolute floor for data of large magnitude, where
        round-off in a sum of squares grows with the sum of y^2.
        """
        return abs(a - b) <= self.atol * max(scale, 1.0) + self.rtol * max(abs(a), abs(b))


# Sum-of-squares partition cross-check
PARTITION = ToleranceTier(
    rtol=1e-9,
    atol=1e-12,
    name='partition',
    description='SS_total vs SS_between + SS_within, scaled to data magnitude',
)

# A sum of squares below ZERO_SS_RTOL * sum(y^2) is round-off, not signal:
# deviations smaller than ~1e-12 relative to the data are treated as zero.
ZERO_SS_RTOL = 1e-24
