"""Explicit plugin registry.

The registry is constructed at startup and passed into the launch sequence;
there is no global registration point. Plugins are registered with the host
in insertion order, once per registry.

Failures are non-fatal: a plugin that raises while registering is logged and
the remaining plugins are still registered.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any, Iterable

from launch_bootstrap.core.errors import PluginError
from launch_bootstrap.core.types import Plugin


logger = logging.getLogger(__name__)


def _plugin_name(plugin: Any) -> str:
    name = getattr(plugin, "name", None)
    return name if isinstance(name, str) and name else type(plugin).__name__


def _load_spec(spec: str) -> Any:
    """Import a plugin from a `package.module:attr` spec.

    `attr` may be a plugin instance or a zero-argument factory (a class
    included) returning one.
    """

    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise PluginError(f"invalid plugin spec {spec!r}, expected 'package.module:attr'")

    try:
        module = importlib.import_module(module_name)
    except Exception as exc:  # noqa: BLE001
        raise PluginError(f"cannot import plugin module {module_name!r}: {exc}") from exc

    try:
        target = getattr(module, attr)
    except AttributeError as exc:
        raise PluginError(f"plugin module {module_name!r} has no attribute {attr!r}") from exc

    plugin = target
    if not callable(getattr(target, "register", None)) or isinstance(target, type):
        if not callable(target):
            raise PluginError(f"plugin {spec!r} is neither a plugin nor a factory")
        try:
            plugin = target()
        except Exception as exc:  # noqa: BLE001
            raise PluginError(f"plugin factory {spec!r} failed: {exc}") from exc

    if not callable(getattr(plugin, "register", None)):
        raise PluginError(f"plugin {spec!r} does not define register(host)")
    return plugin


class PluginRegistry:
    def __init__(self, plugins: Iterable[Plugin] = ()) -> None:
        self._plugins: dict[str, Plugin] = {}
        self._registered = False
        for plugin in plugins:
            self.add(plugin)

    @classmethod
    def from_specs(cls, specs: Iterable[str]) -> PluginRegistry:
        return cls(_load_spec(spec) for spec in specs)

    @property
    def plugins(self) -> list[Plugin]:
        return list(self._plugins.values())

    @property
    def registered(self) -> bool:
        return self._registered

    def add(self, plugin: Plugin) -> None:
        if self._registered:
            raise PluginError("cannot add plugins after register_all()")
        name = _plugin_name(plugin)
        if name in self._plugins:
            raise PluginError(f"duplicate plugin name: {name}")
        self._plugins[name] = plugin

    def register_all(self, host: Any) -> list[str]:
        """Register every plugin against `host`.

        Returns the names of the plugins whose `register` returned without
        raising. A second call is a no-op.
        """

        if self._registered:
            logger.warning("plugins_already_registered")
            return []
        self._registered = True

        done: list[str] = []
        for name, plugin in self._plugins.items():
            try:
                plugin.register(host)
            except Exception:  # noqa: BLE001
                logger.warning("plugin_register_failed", extra={"plugin": name}, exc_info=True)
                continue
            done.append(name)

        logger.info(
            "plugins_registered",
            extra={"count": len(done), "total": len(self._plugins), "plugins": done},
        )
        return done
