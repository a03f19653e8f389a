"""
API test fixtures.
The app is built with a mocked component container; no database or provider is touched.
"""
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from backend.main import create_app


@pytest.fixture
def mock_container():
    return MagicMock()


@pytest.fixture
def app(test_settings, mock_container):
    return create_app(test_settings, container=mock_container)


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def mock_matcher(mock_container):
    return mock_container.matcher


@pytest.fixture
def mock_notifications(mock_container):
    return mock_container.notifications
