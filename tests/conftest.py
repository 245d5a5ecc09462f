from __future__ import annotations

from unittest.mock import Mock

import pytest

from hirest.listener import ActionListener
from hirest.transport import RestClient


@pytest.fixture
def mock_transport() -> RestClient:
    """Create a mock RestClient transport for testing."""
    return Mock(spec=RestClient)


@pytest.fixture
def mock_listener() -> ActionListener:
    """Create a mock ActionListener for testing asynchronous calls.

    Example:
        >>> def test_listener(mock_listener):
        ...     client.get_async(request, mock_listener)
        ...     mock_listener.on_response.assert_called_once()
    """
    return Mock(spec=ActionListener)
