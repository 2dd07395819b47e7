"""Headless host used when the launch path runs outside a real host process.

The CLI dry run needs something to register plugins against and a base
handler to forward to. Neither renders or dispatches anything.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping


logger = logging.getLogger(__name__)


class HeadlessHost:
    """Collects whatever plugins attach to it."""

    def __init__(self, name: str = "headless") -> None:
        self.name = name
        self.attached: dict[str, Any] = {}

    def attach(self, name: str, handle: Any) -> None:
        if name in self.attached:
            logger.warning("host_attach_replaced", extra={"attached_name": name})
        self.attached[name] = handle


class AcceptingLifecycle:
    """Base handler that accepts every launch."""

    def __init__(self, result: bool = True) -> None:
        self._result = result
        self.launches: list[Mapping[str, Any]] = []

    def forward_launch(self, application: Any, launch_options: Mapping[str, Any]) -> bool:
        _ = application
        self.launches.append(launch_options)
        return self._result
