"""Shared pytest fixtures for exprcalc tests."""

import pytest

from exprcalc.core.config import CalcConfig


@pytest.fixture
def default_config() -> CalcConfig:
    """Return the default calculator configuration."""
    return CalcConfig()
