"""Shared pytest fixtures."""

from collections.abc import Iterator

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_loguru() -> Iterator[None]:
    """Drop sinks a test configured so they do not outlive captured streams."""
    yield
    logger.remove()
