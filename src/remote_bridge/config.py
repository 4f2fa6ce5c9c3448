"""Dispatcher configuration.

Settings come from keyword arguments or from the environment:

    REMOTE_BRIDGE_DISPATCH_POLICY   "abort" (default) or "isolate"
    REMOTE_BRIDGE_REPORT_ERRORS     "1"/"true" (default) or "0"/"false"
"""

from __future__ import annotations

import os
from enum import Enum

from pydantic import BaseModel

ENV_DISPATCH_POLICY = "REMOTE_BRIDGE_DISPATCH_POLICY"
ENV_REPORT_ERRORS = "REMOTE_BRIDGE_REPORT_ERRORS"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class DispatchPolicy(str, Enum):
    """How the dispatcher reacts to a failing command or addon callback."""

    # First failure propagates; the rest of the batch is dropped
    ABORT_BATCH = "abort"
    # Each failure is logged and recorded; processing continues
    ISOLATE = "isolate"


class RemoteConfig(BaseModel):
    """Runtime options for a Remote dispatcher."""

    dispatch_policy: DispatchPolicy = DispatchPolicy.ABORT_BATCH
    # Only used under ISOLATE: forward isolated failures to the peer
    report_errors: bool = True

    @classmethod
    def from_env(cls) -> RemoteConfig:
        """Build a config from environment variables, falling back to defaults."""
        values: dict[str, object] = {}

        if policy := os.getenv(ENV_DISPATCH_POLICY):
            try:
                values["dispatch_policy"] = DispatchPolicy(policy.strip().lower())
            except ValueError:
                allowed = ", ".join(p.value for p in DispatchPolicy)
                raise ValueError(
                    f"Invalid {ENV_DISPATCH_POLICY}={policy!r} (expected one of: {allowed})"
                ) from None

        if (report := os.getenv(ENV_REPORT_ERRORS)) is not None:
            values["report_errors"] = _parse_bool(ENV_REPORT_ERRORS, report)

        return cls(**values)


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid {name}={raw!r} (expected a boolean flag)")
