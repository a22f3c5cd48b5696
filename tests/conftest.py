"""
Shared test fixtures and pytest configuration.
"""

import matplotlib
matplotlib.use("Agg")  # headless: the app module builds real figures

import pytest

from bs_heatmap.black_scholes import OptionType, PricingInput


@pytest.fixture
def call_input():
    """Textbook ATM call: S=K=100, T=1, r=5%, sigma=20%."""
    return PricingInput(OptionType.CALL, 100.0, 100.0, 1.0, 0.05, 0.20)


@pytest.fixture
def put_input():
    return PricingInput(OptionType.PUT, 100.0, 100.0, 1.0, 0.05, 0.20)


@pytest.fixture
def heatmap_path(tmp_path):
    return tmp_path / "heatmap.png"
