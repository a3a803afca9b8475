"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def worked_example():
    """
    Three conditions, four observations each.

    R:
        y <- c(95, 90, 97, 95, 85, 89, 92, 89, 75, 77, 79, 80)
        g <- factor(rep(c("pursuit", "flight", "substance"), each = 4))
        summary(aov(y ~ g))
                    Df Sum Sq Mean Sq F value   Pr(>F)
        g            2  564.7  282.33   38.35 3.93e-05 ***
        Residuals    9   66.2    7.36
    """
    return {
        'pursuit': [95, 90, 97, 95],
        'flight': [85, 89, 92, 89],
        'substance': [75, 77, 79, 80],
    }
