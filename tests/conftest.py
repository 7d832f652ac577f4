"""Pytest fixtures for cpanel_api tests."""
import pytest
from unittest.mock import Mock

from cpanel_api.registry import ConnectionRegistry, default_registry
from cpanel_api.server import Credentials, WhmServer


@pytest.fixture(autouse=True)
def clear_default_registry():
    """Keep the process wide registry empty between tests."""
    default_registry.clear()
    yield
    default_registry.clear()


@pytest.fixture
def login():
    return {'host': 'whm.example.com', 'hash': 'abc123'}


@pytest.fixture
def registry():
    return ConnectionRegistry()


@pytest.fixture
def server(login):
    """A real WhmServer whose perform_request is replaced by a mock."""
    server = WhmServer(Credentials.from_mapping(login))
    server.perform_request = Mock(return_value={'data': []})
    return server
