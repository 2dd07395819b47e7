"""Mapping-service activation on the launch path."""

from __future__ import annotations

from launch_bootstrap.maps.activator import MapsServices, activate_if_present

__all__ = ["MapsServices", "activate_if_present"]
