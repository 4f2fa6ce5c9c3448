"""Tests for dispatcher configuration."""

import pytest

from remote_bridge import DispatchPolicy, RemoteConfig
from remote_bridge.config import ENV_DISPATCH_POLICY, ENV_REPORT_ERRORS


class TestRemoteConfig:
    """Test defaults and environment loading."""

    def test_defaults(self):
        """Abort-batch with error reporting enabled."""
        config = RemoteConfig()

        assert config.dispatch_policy is DispatchPolicy.ABORT_BATCH
        assert config.report_errors is True

    def test_from_env_defaults(self):
        """No variables means defaults."""
        assert RemoteConfig.from_env() == RemoteConfig()

    @pytest.mark.parametrize("raw", ["isolate", "ISOLATE", " isolate "])
    def test_from_env_policy(self, monkeypatch, raw):
        """The policy is read case-insensitively."""
        monkeypatch.setenv(ENV_DISPATCH_POLICY, raw)

        assert RemoteConfig.from_env().dispatch_policy is DispatchPolicy.ISOLATE

    def test_from_env_invalid_policy(self, monkeypatch):
        """Unknown policies are rejected with the allowed values."""
        monkeypatch.setenv(ENV_DISPATCH_POLICY, "retry")

        with pytest.raises(ValueError, match="abort, isolate"):
            RemoteConfig.from_env()

    @pytest.mark.parametrize(
        "raw,expected",
        [("1", True), ("true", True), ("Yes", True), ("0", False), ("off", False)],
    )
    def test_from_env_report_errors(self, monkeypatch, raw, expected):
        """Boolean flags accept the usual spellings."""
        monkeypatch.setenv(ENV_REPORT_ERRORS, raw)

        assert RemoteConfig.from_env().report_errors is expected

    def test_from_env_invalid_flag(self, monkeypatch):
        """Unrecognized flags are rejected."""
        monkeypatch.setenv(ENV_REPORT_ERRORS, "maybe")

        with pytest.raises(ValueError, match=ENV_REPORT_ERRORS):
            RemoteConfig.from_env()

    def test_policy_from_string(self):
        """Policies validate from their wire values."""
        config = RemoteConfig(dispatch_policy="isolate")

        assert config.dispatch_policy is DispatchPolicy.ISOLATE
