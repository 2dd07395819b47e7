from __future__ import annotations

import pytest

from launch_bootstrap.runtime.host import AcceptingLifecycle, HeadlessHost


def test_headless_host_keeps_last_attachment(caplog: pytest.LogCaptureFixture) -> None:
    host = HeadlessHost()
    first, second = object(), object()

    host.attach("maps_view", first)
    host.attach("maps_view", second)

    assert host.attached == {"maps_view": second}
    assert any(r.getMessage() == "host_attach_replaced" for r in caplog.records)


@pytest.mark.parametrize("result", [True, False])
def test_accepting_lifecycle_returns_configured_result(result: bool) -> None:
    base = AcceptingLifecycle(result=result)

    assert base.forward_launch(None, {"url": "x"}) is result
    assert base.launches == [{"url": "x"}]
