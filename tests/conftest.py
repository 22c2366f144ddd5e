from __future__ import annotations

from unittest.mock import Mock

import pytest

from restcore.config import ClientConfig
from restcore.utils import clear_correlation_id


@pytest.fixture
def config() -> ClientConfig:
    """Create a client configuration with every credential set."""
    return ClientConfig(
        api_key="key",
        api_secret="secret",
        token="token",
        app_name="demo",
        app_version="1.2.0",
    )


@pytest.fixture
def mock_sink() -> Mock:
    """Create a mock sink collecting streamed chunks."""
    return Mock()


@pytest.fixture(autouse=True)
def _reset_correlation_id() -> None:
    clear_correlation_id()
