from __future__ import annotations


class BootstrapError(Exception):
    """Base exception for this project."""


class ConfigError(BootstrapError):
    """Raised when the manifest or settings are invalid or unreadable."""

    def __init__(self, message: str, *, path: str | None = None):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class PluginError(BootstrapError):
    """Raised when the plugin registry cannot be assembled."""
