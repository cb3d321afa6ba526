"""Audit events as single-line JSON.

Events go through the ``photoline.events`` logger, so they end up wherever
:func:`photoline.logging_config.configure_logging` sends application logs and
can be filtered by logger name.
"""

import json
import logging
from datetime import UTC, datetime
from typing import Any

EVENTS_LOGGER = "photoline.events"


def _event_payload(event: str, fields: dict[str, Any]) -> dict[str, Any]:
    payload: dict[str, Any] = {"timestamp": datetime.now(UTC).isoformat(), "event": event}
    for key, value in fields.items():
        if key == "extra" and isinstance(value, dict):
            payload.update(value)
        elif value is not None:
            payload[key] = value
    return payload


class StructuredLogger:
    def __init__(self, name: str = EVENTS_LOGGER):
        self._logger = logging.getLogger(name)

    def log_event(self, event: str, level: int = logging.INFO, **fields) -> None:
        """Log ``event`` with ``fields`` as one JSON object.

        Fields set to None are left out; an ``extra`` dict is merged into the
        top level. Values JSON cannot encode are written with ``str()``.
        """
        if not self._logger.isEnabledFor(level):
            return

        payload = _event_payload(event, fields)
        try:
            message = json.dumps(payload, default=str)
        except (TypeError, ValueError):
            message = f"{event} {fields!r}"
        self._logger.log(level, message)


logger = StructuredLogger()

__all__ = ["EVENTS_LOGGER", "StructuredLogger", "logger"]
