"""Manifest loading, key resolution and process settings.

- The manifest is bundled at packaging time (YAML or plist) and read-only.
- ${ENV_VAR} placeholders are expanded; unresolved ones drop the entry.
"""

from __future__ import annotations

from launch_bootstrap.config.loader import load_manifest
from launch_bootstrap.config.resolver import preview, resolve
from launch_bootstrap.config.settings import API_KEY_NAME, BootstrapSettings, load_settings
from launch_bootstrap.core.errors import ConfigError

__all__ = [
    "API_KEY_NAME",
    "BootstrapSettings",
    "ConfigError",
    "load_manifest",
    "load_settings",
    "preview",
    "resolve",
]
