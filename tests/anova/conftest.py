"""
Shared fixtures for ANOVA tests.

Provides reusable datasets for balanced, unbalanced, null-effect and
degenerate one-way designs.
"""

import numpy as np
import pytest


@pytest.fixture
def oneway_balanced():
    """3-group balanced design (n=10 each), clear group differences."""
    rng = np.random.default_rng(42)
    n_per_group = 10
    y = np.concatenate([
        rng.normal(10.0, 2.0, n_per_group),
        rng.normal(15.0, 2.0, n_per_group),
        rng.normal(20.0, 2.0, n_per_group),
    ])
    group = np.array(['A'] * n_per_group + ['B'] * n_per_group + ['C'] * n_per_group)
    return y, group


@pytest.fixture
def oneway_unbalanced():
    """3-group unbalanced design (n=5, 10, 15)."""
    rng = np.random.default_rng(123)
    y = np.concatenate([
        rng.normal(10.0, 2.0, 5),
        rng.normal(15.0, 2.0, 10),
        rng.normal(20.0, 2.0, 15),
    ])
    group = np.array(['A'] * 5 + ['B'] * 10 + ['C'] * 15)
    return y, group


@pytest.fixture
def oneway_no_effect():
    """3-group design where all groups have same population mean."""
    rng = np.random.default_rng(99)
    n_per = 15
    y = rng.normal(10.0, 2.0, n_per * 3)
    group = np.array(['A'] * n_per + ['B'] * n_per + ['C'] * n_per)
    return y, group


@pytest.fixture
def oneway_two_groups():
    """2-group design (should match independent t-test)."""
    rng = np.random.default_rng(77)
    n = 20
    y = np.concatenate([
        rng.normal(10.0, 3.0, n),
        rng.normal(14.0, 3.0, n),
    ])
    group = np.array(['control'] * n + ['treatment'] * n)
    return y, group


@pytest.fixture
def equal_means():
    """Sample means exactly equal (2.0) in every group."""
    return {
        'a': [1.0, 2.0, 3.0],
        'b': [3.0, 2.0, 1.0],
        'c': [0.0, 2.0, 4.0],
    }


@pytest.fixture
def large_offset(rng):
    """Small spread on a huge offset: exercises cancellation in SS."""
    y = np.concatenate([
        1e9 + rng.normal(0.0, 1.0, 8),
        1e9 + rng.normal(2.0, 1.0, 8),
        1e9 + rng.normal(4.0, 1.0, 8),
    ])
    group = np.repeat(['x', 'y', 'z'], 8)
    return y, group
