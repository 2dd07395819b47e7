from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest


def pytest_configure() -> None:
    root = Path(__file__).resolve().parents[1]
    if str(root) not in sys.path:
        sys.path.insert(0, str(root))


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    # Keep a developer's local .env out of the tests.
    monkeypatch.chdir(tmp_path)
    # setenv first so the original value is restored even when load_dotenv
    # writes the variable behind monkeypatch's back.
    monkeypatch.setenv("GMS_API_KEY", "")
    monkeypatch.delenv("GMS_API_KEY")


@pytest.fixture
def info_logs(caplog: pytest.LogCaptureFixture) -> pytest.LogCaptureFixture:
    caplog.set_level(logging.INFO, logger="launch_bootstrap")
    return caplog
