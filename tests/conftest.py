"""Pytest configuration and shared fixtures."""

import pytest

from remote_bridge import DispatchPolicy, Remote, RemoteConfig
from remote_bridge.config import ENV_DISPATCH_POLICY, ENV_REPORT_ERRORS
from remote_bridge.testing import TestRemoteConnector


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's environment out of dispatcher configuration."""
    monkeypatch.delenv(ENV_DISPATCH_POLICY, raising=False)
    monkeypatch.delenv(ENV_REPORT_ERRORS, raising=False)


@pytest.fixture
def connector():
    """In-process connector double."""
    return TestRemoteConnector()


@pytest.fixture
def root():
    """Sandboxed root object for visit-global commands."""
    return {"a": {"b": "value"}}


@pytest.fixture
def remote(connector, root):
    """Dispatcher with the default abort-batch policy."""
    remote = Remote(connector, RemoteConfig(), root=root)
    yield remote
    remote.dispose()


@pytest.fixture
def isolating_remote(connector, root):
    """Dispatcher that isolates failures per command."""
    remote = Remote(
        connector,
        RemoteConfig(dispatch_policy=DispatchPolicy.ISOLATE),
        root=root,
    )
    yield remote
    remote.dispose()
