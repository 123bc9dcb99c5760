"""Shared pytest fixtures for exprengine tests."""

from collections.abc import Iterator

import pytest

from exprengine.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    """Drop cached settings so environment overrides never leak between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
