"""scciter runtime configuration helpers."""

from __future__ import annotations

import os
import logging

_TRACE_ENV = "SCCITER_TRACE"
_CHECK_STATE_ENV = "SCCITER_CHECK_STATE"

LOGGER = logging.getLogger(__name__)


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    raw = raw.strip().lower()
    if raw in {"", "0", "false", "no"}:
        return False
    if raw in {"1", "true", "yes"}:
        return True
    return default


def trace_enabled() -> bool:
    """Whether the enumerator should emit per-node DEBUG trace lines."""

    enabled = _env_bool(_TRACE_ENV)
    LOGGER.debug("trace_enabled env=%s value=%s", _TRACE_ENV, enabled)
    return enabled


def check_state_enabled() -> bool:
    """Whether the enumerator should verify its stacks after every advance."""

    enabled = _env_bool(_CHECK_STATE_ENV)
    LOGGER.debug("check_state_enabled env=%s value=%s", _CHECK_STATE_ENV, enabled)
    return enabled


__all__ = [
    "trace_enabled",
    "check_state_enabled",
    "_TRACE_ENV",
    "_CHECK_STATE_ENV",
]
