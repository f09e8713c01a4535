"""Pytest configuration and fixtures."""

from datetime import date
from unittest.mock import MagicMock

import pytest

from helpers import list_response


@pytest.fixture
def fixed_today() -> date:
    """Date used when a record has no readable creation date."""
    return date(2025, 1, 31)


@pytest.fixture
def service_url() -> str:
    return "http://bank.test:8082/services/ws"


@pytest.fixture
def fake_transport() -> MagicMock:
    """Transport double returning an empty list response by default."""
    transport = MagicMock()
    transport.call.return_value = list_response()
    return transport
