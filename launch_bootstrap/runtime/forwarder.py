from __future__ import annotations

import logging

from launch_bootstrap.core.types import BaseLifecycleHandler, LaunchEvent


logger = logging.getLogger(__name__)


def forward(base_handler: BaseLifecycleHandler, event: LaunchEvent) -> bool:
    """Hand the launch event to the base handler and return its result as-is."""

    result = base_handler.forward_launch(event.application, event.options)
    logger.info("launch_forwarded", extra={"result": result})
    return result
