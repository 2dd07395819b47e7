"""Launch sequence, host integration entry and CLI."""

from __future__ import annotations

from launch_bootstrap.runtime.bootstrap import LaunchSequence, on_launch
from launch_bootstrap.runtime.forwarder import forward

__all__ = ["LaunchSequence", "forward", "on_launch"]
