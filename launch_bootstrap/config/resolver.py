from __future__ import annotations

import logging
from typing import Any, Mapping


logger = logging.getLogger(__name__)

DEFAULT_PREVIEW_CHARS = 10


def preview(value: str, chars: int = DEFAULT_PREVIEW_CHARS) -> str:
    """Return a length-limited, non-identifying preview of a secret."""

    return f"{value[: max(chars, 0)]}..."


def resolve(manifest: Mapping[str, Any], key: str, *, preview_chars: int = DEFAULT_PREVIEW_CHARS) -> str | None:
    """Look up `key` in the manifest.

    Absence and a non-string value are both normal outcomes and return None.
    """

    if not key:
        raise ValueError("key must be a non-empty string")

    value = manifest.get(key)
    if isinstance(value, str):
        logger.info(
            "config_key_found",
            extra={"key": key, "preview": preview(value, preview_chars)},
        )
        return value

    if value is None:
        logger.info("config_key_not_found", extra={"key": key})
    else:
        # Never log the value itself.
        logger.info(
            "config_key_not_found",
            extra={"key": key, "reason": "unexpected_type", "type": type(value).__name__},
        )
    return None
