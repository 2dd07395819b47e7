"""Logging and launch context propagation."""

from __future__ import annotations

from launch_bootstrap.observability.logging import (
    bind_launch,
    configure_logging,
    get_context_fields,
    new_launch_id,
    set_phase,
    unbind_launch,
)

__all__ = [
    "bind_launch",
    "configure_logging",
    "get_context_fields",
    "new_launch_id",
    "set_phase",
    "unbind_launch",
]
