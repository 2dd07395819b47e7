"""Process settings for the bootstrap.

The manifest itself is bundled data; these settings only say where it lives
and how the launch path behaves. Environment variables override defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from launch_bootstrap.config.resolver import DEFAULT_PREVIEW_CHARS
from launch_bootstrap.core.errors import ConfigError


API_KEY_NAME = "GMSApiKey"

ENV_MANIFEST = "LAUNCH_BOOTSTRAP_MANIFEST"
ENV_LOG_LEVEL = "LAUNCH_BOOTSTRAP_LOG_LEVEL"
ENV_PLUGINS = "LAUNCH_BOOTSTRAP_PLUGINS"
ENV_PREVIEW_CHARS = "LAUNCH_BOOTSTRAP_PREVIEW_CHARS"


@dataclass(frozen=True, slots=True)
class BootstrapSettings:
    manifest_path: Path = Path("configs/manifest.yaml")
    api_key_name: str = API_KEY_NAME
    preview_chars: int = DEFAULT_PREVIEW_CHARS
    log_level: str = "INFO"
    # Import specs ("package.module:attr") of the compiled-in plugins.
    plugins: tuple[str, ...] = ()


def _split_specs(raw: str) -> tuple[str, ...]:
    return tuple(s.strip() for s in raw.split(",") if s.strip())


def load_settings(env: Mapping[str, str] | None = None) -> BootstrapSettings:
    """Build settings from environment variables on top of the defaults."""

    source = os.environ if env is None else env
    defaults = BootstrapSettings()

    preview_raw = source.get(ENV_PREVIEW_CHARS)
    preview_chars = defaults.preview_chars
    if preview_raw:
        try:
            preview_chars = int(preview_raw)
        except ValueError as exc:
            raise ConfigError("must be an integer", path=ENV_PREVIEW_CHARS) from exc
        if preview_chars < 0:
            raise ConfigError("must be >= 0", path=ENV_PREVIEW_CHARS)

    manifest_raw = source.get(ENV_MANIFEST)
    return BootstrapSettings(
        manifest_path=Path(manifest_raw) if manifest_raw else defaults.manifest_path,
        preview_chars=preview_chars,
        log_level=source.get(ENV_LOG_LEVEL) or defaults.log_level,
        plugins=_split_specs(source.get(ENV_PLUGINS, "")),
    )
