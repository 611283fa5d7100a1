# ==============================================================================
# Logging Event Sink
# ==============================================================================
"""
Event sink that writes each activity record to the log as JSON.

Useful for local development and command-line simulations where no
backend is available.
"""

import json
import logging

from shoptrack.base.sinks import EventSink

ACTIVITY_LOGGER = "shoptrack.activity"


class LoggingEventSink(EventSink):
    """Logs activity records instead of storing them."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.INFO):
        self._logger = logger or logging.getLogger(ACTIVITY_LOGGER)
        self._level = level

    def insert(self, record: dict) -> None:
        self._logger.log(self._level, "activity %s", json.dumps(record, sort_keys=True, default=str))
