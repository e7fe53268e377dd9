"""
Pytest configuration and shared fixtures.

Provides sample windows with known change point behaviour.
"""

import numpy as np
import pytest


@pytest.fixture
def constant_window():
    """23 identical samples: no split separates the means."""
    return [1.0] * 23


@pytest.fixture
def step_window():
    """11 low samples followed by 12 elevated ones; the last low value is index 10."""
    return [1.0] * 11 + [2.0] * 12


@pytest.fixture
def noisy_window():
    """Oscillating samples with no sustained level change."""
    return [1, 1, 2, 2, 1, 1, 2, 2, 1, 1, 2, 3, 0, 1, 2, 2, 1, 1, 2, 2, 1, 1, 2]


@pytest.fixture
def rng():
    return np.random.default_rng(20240611)
