from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

import pytest

from launch_bootstrap.core.types import LaunchEvent, LaunchPhase
from launch_bootstrap.plugins.registry import PluginRegistry
from launch_bootstrap.runtime.bootstrap import LaunchSequence, on_launch
from launch_bootstrap.runtime.forwarder import forward


class RecordingMaps:
    def __init__(self, events: list[str]) -> None:
        self._events = events
        self.keys: list[str] = []

    def provide_key(self, api_key: str) -> None:
        self._events.append("maps.provide_key")
        self.keys.append(api_key)


class RecordingPlugin:
    name = "maps_view"

    def __init__(self, events: list[str]) -> None:
        self._events = events

    def register(self, host: Any) -> None:
        self._events.append("plugin.register")


class CountingRegistry(PluginRegistry):
    def __init__(self, events: list[str]) -> None:
        super().__init__([RecordingPlugin(events)])
        self.calls = 0

    def register_all(self, host: Any) -> list[str]:
        self.calls += 1
        return super().register_all(host)


class RecordingLifecycle:
    def __init__(self, events: list[str], result: Any = True) -> None:
        self._events = events
        self._result = result
        self.calls: list[tuple[Any, Mapping[str, Any]]] = []

    def forward_launch(self, application: Any, launch_options: Mapping[str, Any]) -> Any:
        self._events.append("base.forward_launch")
        self.calls.append((application, launch_options))
        return self._result


class ExplodingLifecycle:
    def forward_launch(self, application: Any, launch_options: Mapping[str, Any]) -> bool:
        raise RuntimeError("host framework failure")


def _launch(manifest: Mapping[str, Any], *, result: Any = True) -> tuple[Any, list[str], RecordingMaps, CountingRegistry, RecordingLifecycle]:
    events: list[str] = []
    maps = RecordingMaps(events)
    registry = CountingRegistry(events)
    base = RecordingLifecycle(events, result=result)
    out = on_launch(
        "app",
        {"url": "maps://home"},
        manifest=manifest,
        maps=maps,
        registry=registry,
        host=object(),
        base_handler=base,
    )
    return out, events, maps, registry, base


def test_scenario_key_present_activates_and_forwards() -> None:
    out, events, maps, registry, _ = _launch({"GMSApiKey": "AIzaSyABC123"})

    assert out is True
    assert maps.keys == ["AIzaSyABC123"]
    assert registry.calls == 1
    assert events == ["maps.provide_key", "plugin.register", "base.forward_launch"]


def test_scenario_empty_manifest_skips_activation() -> None:
    out, events, maps, registry, _ = _launch({})

    assert out is True
    assert maps.keys == []
    assert registry.calls == 1
    assert events == ["plugin.register", "base.forward_launch"]


def test_scenario_wrong_type_is_treated_as_absent() -> None:
    out, events, maps, registry, _ = _launch({"GMSApiKey": 42})

    assert out is True
    assert maps.keys == []
    assert registry.calls == 1
    assert events[-1] == "base.forward_launch"


@pytest.mark.parametrize("manifest", [{"GMSApiKey": "k"}, {}, {"GMSApiKey": None}])
@pytest.mark.parametrize("result", [True, False])
def test_result_is_the_base_handler_result(manifest: Mapping[str, Any], result: bool) -> None:
    out, events, _, _, _ = _launch(manifest, result=result)

    assert out is result
    assert events[-1] == "base.forward_launch"


def test_launch_options_are_passed_through_unmodified() -> None:
    events: list[str] = []
    base = RecordingLifecycle(events)
    options = MappingProxyType({"url": "maps://home", "source": "push"})

    on_launch(
        "the-app",
        options,
        manifest={},
        maps=RecordingMaps(events),
        registry=PluginRegistry(),
        host=object(),
        base_handler=base,
    )

    assert base.calls == [("the-app", options)]
    assert base.calls[0][1] is options


def test_missing_launch_options_become_empty_mapping() -> None:
    events: list[str] = []
    base = RecordingLifecycle(events)

    on_launch(
        "app",
        None,
        manifest={},
        maps=RecordingMaps(events),
        registry=PluginRegistry(),
        host=object(),
        base_handler=base,
    )

    assert dict(base.calls[0][1]) == {}


def test_manifest_is_not_mutated() -> None:
    manifest = {"GMSApiKey": "AIzaSyABC123", "CFBundleName": "Runner"}
    before = dict(manifest)

    _launch(manifest)

    assert manifest == before


def test_sequence_reports_every_phase_in_order() -> None:
    events: list[str] = []
    sequence = LaunchSequence(
        manifest={"GMSApiKey": "AIzaSyABC123"},
        maps=RecordingMaps(events),
        registry=PluginRegistry([RecordingPlugin(events)]),
        host=object(),
        base_handler=RecordingLifecycle(events),
    )

    report = sequence.run(LaunchEvent(application="app"))

    assert report.phases == [
        LaunchPhase.START,
        LaunchPhase.CONFIG_RESOLVED,
        LaunchPhase.SERVICE_HANDLED,
        LaunchPhase.PLUGINS_REGISTERED,
        LaunchPhase.FORWARDED,
    ]
    assert report.key_present is True
    assert report.service_activated is True
    assert report.plugins_registered == ["maps_view"]
    assert report.result is True
    assert sequence.report is report
    assert "AIzaSyABC123" not in repr(report.to_payload())


def test_sequence_runs_only_once() -> None:
    events: list[str] = []
    sequence = LaunchSequence(
        manifest={},
        maps=RecordingMaps(events),
        registry=PluginRegistry(),
        host=object(),
        base_handler=RecordingLifecycle(events),
    )
    sequence.run(LaunchEvent(application="app"))

    with pytest.raises(RuntimeError):
        sequence.run(LaunchEvent(application="app"))


def test_base_handler_errors_propagate() -> None:
    events: list[str] = []
    with pytest.raises(RuntimeError, match="host framework failure"):
        on_launch(
            "app",
            {},
            manifest={"GMSApiKey": "k"},
            maps=RecordingMaps(events),
            registry=PluginRegistry(),
            host=object(),
            base_handler=ExplodingLifecycle(),
        )
    # Earlier steps still ran.
    assert events == ["maps.provide_key"]


def test_forward_does_not_transform_the_result() -> None:
    sentinel = object()
    base = RecordingLifecycle([], result=sentinel)

    assert forward(base, LaunchEvent(application="app")) is sentinel
