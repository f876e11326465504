"""Shared pytest fixtures for promo pricing tests."""

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()
