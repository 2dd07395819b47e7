from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Sequence

from launch_bootstrap.config.loader import load_manifest
from launch_bootstrap.config.settings import BootstrapSettings, load_settings
from launch_bootstrap.core.errors import BootstrapError, ConfigError
from launch_bootstrap.core.types import BaseLifecycleHandler, MappingService
from launch_bootstrap.maps.activator import MapsServices
from launch_bootstrap.observability.logging import configure_logging
from launch_bootstrap.plugins.registry import PluginRegistry
from launch_bootstrap.runtime.bootstrap import on_launch
from launch_bootstrap.runtime.host import AcceptingLifecycle, HeadlessHost


logger = logging.getLogger(__name__)

_SECRET_MARKERS = ("apikey", "api_key", "token", "secret", "password")


def _redact_secrets(obj: Any) -> Any:
    """Best-effort redaction for human-facing manifest dumps."""

    if isinstance(obj, Mapping):
        out = {}
        for k, v in obj.items():
            if isinstance(k, str) and any(p in k.lower() for p in _SECRET_MARKERS):
                out[k] = "<redacted>"
            else:
                out[k] = _redact_secrets(v)
        return out
    if isinstance(obj, (list, tuple)):
        return [_redact_secrets(x) for x in obj]
    return obj


def _read_manifest(path: Path) -> Mapping[str, Any]:
    """Read the manifest once; an unreadable manifest degrades to empty."""

    try:
        return load_manifest(path)
    except ConfigError as exc:
        logger.error("manifest_unavailable", extra={"error": str(exc)})
        return MappingProxyType({})


def run(
    application: Any,
    launch_options: Mapping[str, Any] | None,
    *,
    settings: BootstrapSettings,
    maps: MappingService,
    host: Any,
    base_handler: BaseLifecycleHandler | None = None,
) -> bool:
    """Host integration entry: wire the collaborators and launch.

    `maps` and `host` are owned by the caller: the activated mapping client
    and the plugins attached to the host outlive this call.

    Plugins are imported from `settings.plugins`; a bad spec fails the
    process before launch instead of silently dropping a plugin.
    """

    manifest = _read_manifest(settings.manifest_path)
    registry = PluginRegistry.from_specs(settings.plugins)

    return on_launch(
        application,
        launch_options,
        manifest=manifest,
        maps=maps,
        registry=registry,
        host=host,
        base_handler=base_handler if base_handler is not None else AcceptingLifecycle(),
        settings=settings,
    )


def _parse_option(raw: str) -> tuple[str, str]:
    name, sep, value = raw.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got {raw!r}")
    return name, value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="launch-bootstrap",
        description="Run the application launch bootstrap against a headless host",
    )

    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    parser.add_argument(
        "--manifest",
        type=Path,
        default=None,
        help="Path to the bundled manifest (.yaml, .yml or .plist)",
    )
    parser.add_argument(
        "--plugin",
        action="append",
        default=[],
        metavar="MODULE:ATTR",
        help="Plugin import spec; may be repeated",
    )

    sub = parser.add_subparsers(dest="command")

    launch_p = sub.add_parser("launch", help="Run the launch sequence once")
    launch_p.add_argument(
        "--option",
        action="append",
        default=[],
        type=_parse_option,
        metavar="NAME=VALUE",
        help="Launch option passed to the base handler; may be repeated",
    )
    launch_p.set_defaults(command="launch")

    print_p = sub.add_parser("print-manifest", help="Load and print the manifest with secrets redacted")
    print_p.set_defaults(command="print-manifest")

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint referenced by pyproject.toml."""

    argv_list = list(argv) if argv is not None else sys.argv[1:]

    # Default to `launch` when no subcommand is provided. It goes in front of
    # the first launch-only argument so top-level options still parse.
    known = {"launch", "print-manifest"}
    if not any(a in known for a in argv_list) and not any(a in {"-h", "--help"} for a in argv_list):
        at = next(
            (i for i, a in enumerate(argv_list) if a == "--option" or a.startswith("--option=")),
            len(argv_list),
        )
        argv_list = [*argv_list[:at], "launch", *argv_list[at:]]

    parser = _build_parser()

    try:
        ns = parser.parse_args(argv_list)
    except SystemExit as e:
        code = e.code
        return int(code) if isinstance(code, int) else 1

    try:
        settings = load_settings()
    except ConfigError as e:
        sys.stderr.write(f"ConfigError: {e}\n")
        return 2

    if ns.manifest is not None:
        settings = replace(settings, manifest_path=ns.manifest)
    if ns.log_level:
        settings = replace(settings, log_level=ns.log_level)
    if ns.plugin:
        settings = replace(settings, plugins=(*settings.plugins, *ns.plugin))

    configure_logging(level=settings.log_level)

    try:
        if ns.command == "print-manifest":
            manifest = load_manifest(settings.manifest_path)
            sys.stdout.write(json.dumps(_redact_secrets(manifest), ensure_ascii=False, indent=2, default=str))
            sys.stdout.write("\n")
            return 0

        maps = MapsServices()
        host = HeadlessHost()
        handled = run(
            None,
            MappingProxyType(dict(ns.option)),
            settings=settings,
            maps=maps,
            host=host,
        )
        sys.stdout.write(
            json.dumps(
                {
                    "handled": handled,
                    "maps_active": maps.is_active,
                    "maps_key_preview": maps.api_key_preview(settings.preview_chars),
                    "plugins": sorted(host.attached),
                },
                ensure_ascii=False,
            )
        )
        sys.stdout.write("\n")
        return 0 if handled else 1

    except ConfigError as e:
        logger.error("config_error", extra={"error": str(e)})
        sys.stderr.write(f"ConfigError: {e}\n")
        return 2
    except BootstrapError as e:
        logger.error("bootstrap_error", extra={"error": str(e)})
        sys.stderr.write(f"BootstrapError: {e}\n")
        return 2
    except Exception as e:  # noqa: BLE001
        logger.exception("fatal_error")
        sys.stderr.write(f"Fatal error: {e}\n")
        return 1
