"""Mapping-service activation.

The mapping service itself is an external collaborator; this module only
decides whether to hand it a key. A missing key leaves the service inactive,
which disables map features elsewhere but is not an error.
"""

from __future__ import annotations

import logging

from launch_bootstrap.config.resolver import DEFAULT_PREVIEW_CHARS, preview
from launch_bootstrap.core.types import MappingService


logger = logging.getLogger(__name__)


class MapsServices:
    """Write-once holder for the process-wide mapping client key.

    Activation happens on the launch path before any reader exists, so no
    locking is needed.
    """

    def __init__(self) -> None:
        self._api_key: str | None = None

    @property
    def is_active(self) -> bool:
        return self._api_key is not None

    def api_key_preview(self, chars: int = DEFAULT_PREVIEW_CHARS) -> str | None:
        return preview(self._api_key, chars) if self._api_key is not None else None

    def provide_key(self, api_key: str) -> bool:
        if self._api_key is not None:
            if api_key != self._api_key:
                logger.warning("maps_key_already_provided")
            return False
        self._api_key = api_key
        logger.debug("maps_client_activated")
        return True


def activate_if_present(service: MappingService, key: str | None) -> bool:
    """Activate `service` with `key` when there is one.

    Returns True when activation was attempted. Failures raised by the service
    are its own concern: they are logged and not propagated.
    """

    if key is None:
        logger.info("maps_activation_skipped", extra={"reason": "api_key_absent"})
        return False

    try:
        service.provide_key(key)
    except Exception:  # noqa: BLE001
        logger.warning("maps_activation_failed", exc_info=True)
    else:
        logger.info("maps_activated")
    return True
