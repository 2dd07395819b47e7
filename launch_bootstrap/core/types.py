from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Protocol


class MappingService(Protocol):
    """Activation entry point of the external mapping-service client."""

    def provide_key(self, api_key: str) -> Any: ...


class Plugin(Protocol):
    """A statically known extension module."""

    name: str

    def register(self, host: Any) -> Any: ...


class BaseLifecycleHandler(Protocol):
    """The host framework's own launch handler."""

    def forward_launch(self, application: Any, launch_options: Mapping[str, Any]) -> bool: ...


class LaunchPhase(str, enum.Enum):
    START = "start"
    CONFIG_RESOLVED = "config_resolved"
    SERVICE_HANDLED = "service_handled"
    PLUGINS_REGISTERED = "plugins_registered"
    FORWARDED = "forwarded"


@dataclass(frozen=True, slots=True)
class LaunchEvent:
    """Launch record handed over by the host OS. Passed through unmodified."""

    application: Any
    options: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(slots=True)
class LaunchReport:
    """What happened during one launch. Not kept after the launch returns."""

    launch_id: str
    phases: list[LaunchPhase] = field(default_factory=lambda: [LaunchPhase.START])
    key_present: bool = False
    service_activated: bool = False
    plugins_registered: list[str] = field(default_factory=list)
    result: bool | None = None

    @property
    def phase(self) -> LaunchPhase:
        return self.phases[-1]

    def advance(self, phase: LaunchPhase) -> None:
        self.phases.append(phase)

    def to_payload(self) -> dict[str, Any]:
        return {
            "launch_id": self.launch_id,
            "phase": self.phase.value,
            "phases": [p.value for p in self.phases],
            "key_present": self.key_present,
            "service_activated": self.service_activated,
            "plugins_registered": list(self.plugins_registered),
            "result": self.result,
        }
