"""Extension plugin registration."""

from __future__ import annotations

from launch_bootstrap.plugins.registry import PluginRegistry

__all__ = ["PluginRegistry"]
