"""Launch sequence composition root.

Steps, in strict order, once per launch:
1. resolve the API key from the manifest
2. activate the mapping service when a key was found
3. register the plugins with the host
4. forward the launch event to the base handler

The base handler's result is the result of the launch. The only non-fatal
condition is an absent key, which leaves the mapping service inactive.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from launch_bootstrap.config.resolver import resolve
from launch_bootstrap.config.settings import BootstrapSettings
from launch_bootstrap.core.types import (
    BaseLifecycleHandler,
    LaunchEvent,
    LaunchPhase,
    LaunchReport,
    MappingService,
)
from launch_bootstrap.maps.activator import activate_if_present
from launch_bootstrap.observability.logging import bind_launch, new_launch_id, set_phase, unbind_launch
from launch_bootstrap.plugins.registry import PluginRegistry
from launch_bootstrap.runtime.forwarder import forward


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LaunchSequence:
    """Holds the launch collaborators and runs the sequence once."""

    manifest: Mapping[str, Any]
    maps: MappingService
    registry: PluginRegistry
    host: Any
    base_handler: BaseLifecycleHandler
    settings: BootstrapSettings = field(default_factory=BootstrapSettings)

    _report: LaunchReport | None = field(default=None, init=False)

    @property
    def report(self) -> LaunchReport | None:
        return self._report

    def run(self, event: LaunchEvent) -> LaunchReport:
        if self._report is not None:
            raise RuntimeError("launch sequence has already run")

        report = LaunchReport(launch_id=new_launch_id())
        self._report = report
        token = bind_launch(report.launch_id)
        try:
            set_phase(LaunchPhase.START.value)
            logger.info("launch_started", extra={"options": sorted(str(k) for k in event.options)})

            api_key = resolve(
                self.manifest,
                self.settings.api_key_name,
                preview_chars=self.settings.preview_chars,
            )
            report.key_present = api_key is not None
            self._advance(report, LaunchPhase.CONFIG_RESOLVED)

            report.service_activated = activate_if_present(self.maps, api_key)
            self._advance(report, LaunchPhase.SERVICE_HANDLED)

            report.plugins_registered = self.registry.register_all(self.host)
            self._advance(report, LaunchPhase.PLUGINS_REGISTERED)

            report.result = forward(self.base_handler, event)
            self._advance(report, LaunchPhase.FORWARDED)

            logger.info("launch_finished", extra={"report": report.to_payload()})
            return report
        finally:
            unbind_launch(token)

    @staticmethod
    def _advance(report: LaunchReport, phase: LaunchPhase) -> None:
        report.advance(phase)
        set_phase(phase.value)


def on_launch(
    application: Any,
    launch_options: Mapping[str, Any] | None,
    *,
    manifest: Mapping[str, Any],
    maps: MappingService,
    registry: PluginRegistry,
    host: Any,
    base_handler: BaseLifecycleHandler,
    settings: BootstrapSettings | None = None,
) -> bool:
    """Launch entry point, invoked once per process by the host integration.

    `launch_options` is passed to the base handler unmodified; None means the
    host supplied no options.
    """

    event = LaunchEvent(
        application=application,
        options=launch_options if launch_options is not None else MappingProxyType({}),
    )
    sequence = LaunchSequence(
        manifest=manifest,
        maps=maps,
        registry=registry,
        host=host,
        base_handler=base_handler,
        settings=settings or BootstrapSettings(),
    )
    return sequence.run(event).result  # type: ignore[return-value]
