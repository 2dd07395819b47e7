"""Bundled manifest loader.

The manifest is produced at packaging time and is read-only at runtime.
Two formats are accepted:
- YAML (`.yaml` / `.yml`), the format used under configs/.
- Apple property lists (`.plist`), i.e. the bundle's Info.plist.

String values may reference build settings as `${ENV_VAR}`. A placeholder
whose variable is missing or empty drops the entry from the manifest, the
same way an unset build setting leaves the bundled key unusable.
"""

from __future__ import annotations

import logging
import os
import plistlib
import re
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import yaml
from dotenv import load_dotenv

from launch_bootstrap.core.errors import ConfigError


logger = logging.getLogger(__name__)

_ENV_PLACEHOLDER_RE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")

_YAML_SUFFIXES = {".yaml", ".yml"}
_PLIST_SUFFIXES = {".plist"}


@dataclass(frozen=True, slots=True)
class _UnresolvedEnvRef:
    """Tracks an unresolved ${ENV_VAR} reference for the warning log."""

    var_name: str
    key_path: str
    reason: str  # "missing" | "empty"


class _Dropped:
    """Marker for values removed because of an unresolved placeholder."""


_DROPPED = _Dropped()


def _load_yaml(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    return yaml.safe_load(text)


def _load_plist(path: Path) -> Any:
    with path.open("rb") as fh:
        return plistlib.load(fh)


def _expand_env_in_obj(obj: Any, *, key_path: str, unresolved: list[_UnresolvedEnvRef]) -> Any:
    if isinstance(obj, str):
        missing_before = len(unresolved)

        def repl(match: re.Match[str]) -> str:
            name = match.group(1)
            value = os.getenv(name)
            if value is None or value == "":
                unresolved.append(
                    _UnresolvedEnvRef(
                        var_name=name,
                        key_path=key_path,
                        reason="missing" if value is None else "empty",
                    )
                )
                return match.group(0)
            return value

        expanded = _ENV_PLACEHOLDER_RE.sub(repl, obj)
        return _DROPPED if len(unresolved) > missing_before else expanded

    if isinstance(obj, Mapping):
        out: dict[str, Any] = {}
        for k, v in obj.items():
            child_path = f"{key_path}.{k}" if key_path else str(k)
            child = _expand_env_in_obj(v, key_path=child_path, unresolved=unresolved)
            if child is not _DROPPED:
                out[str(k)] = child
        return out

    if isinstance(obj, list):
        out_list: list[Any] = []
        for i, v in enumerate(obj):
            child_path = f"{key_path}[{i}]" if key_path else f"[{i}]"
            child = _expand_env_in_obj(v, key_path=child_path, unresolved=unresolved)
            if child is not _DROPPED:
                out_list.append(child)
        return out_list

    return obj


def _freeze(obj: Any) -> Any:
    if isinstance(obj, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in obj.items()})
    if isinstance(obj, list):
        return tuple(_freeze(v) for v in obj)
    return obj


def load_manifest(
    path: str | Path,
    *,
    load_dotenv_file: bool = True,
    dotenv_path: Path | None = None,
) -> Mapping[str, Any]:
    """Load the bundled manifest and expand ${ENV_VAR} placeholders.

    Args:
        path: YAML or plist file.
        load_dotenv_file: Whether to load a .env file before expansion.
        dotenv_path: Optional explicit .env path. When omitted, attempts to load
            a `.env` in the current working directory.

    Returns:
        A read-only mapping. Nested mappings are read-only too and lists
        become tuples.

    Raises:
        ConfigError: If the file is missing, unreadable, malformed, or its root
            is not a mapping.
    """

    manifest_path = Path(path).expanduser()
    if not manifest_path.exists():
        raise ConfigError("manifest file not found", path=str(manifest_path))

    suffix = manifest_path.suffix.lower()
    if suffix not in _YAML_SUFFIXES | _PLIST_SUFFIXES:
        raise ConfigError(f"unsupported manifest format {suffix!r}", path=str(manifest_path))

    if load_dotenv_file:
        # Do not override already-set environment variables.
        load_dotenv(dotenv_path or Path.cwd() / ".env", override=False)

    try:
        raw = _load_plist(manifest_path) if suffix in _PLIST_SUFFIXES else _load_yaml(manifest_path)
    except Exception as exc:  # noqa: BLE001
        raise ConfigError(f"failed to parse manifest: {exc}", path=str(manifest_path)) from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ConfigError("manifest root must be a mapping/dict", path=str(manifest_path))

    unresolved: list[_UnresolvedEnvRef] = []
    expanded = _expand_env_in_obj(raw, key_path="", unresolved=unresolved)

    for ref in unresolved:
        logger.warning(
            "manifest_placeholder_unresolved",
            extra={
                "var_name": ref.var_name,
                "key_path": ref.key_path or "<root>",
                "reason": ref.reason,
                "manifest": str(manifest_path),
            },
        )

    logger.debug("manifest_loaded", extra={"manifest": str(manifest_path), "keys": sorted(expanded)})
    return _freeze(expanded)
