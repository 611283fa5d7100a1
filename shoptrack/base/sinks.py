# ==============================================================================
# Sink Abstract Base Classes
# ==============================================================================
"""
Outbound transports of the tracking pipeline.

- EventSink: append-only store receiving one activity record per insert
- BeaconTransport: best-effort, unload-surviving one-way send

Neither transport returns data to the pipeline; nothing reads results back.
"""

from abc import ABC, abstractmethod


class EventSink(ABC):
    """Append-only destination for activity records."""

    @abstractmethod
    def insert(self, record: dict) -> None:
        """
        Insert one activity record.

        Args:
            record: Dict with user_id, session_id, event_type, event_data
                    and page_url. created_at is assigned by the sink.

        Raises:
            Exception: Any failure; the emitter logs and drops the event
        """
        ...

    def close(self) -> None:
        """Release resources. Default is a no-op."""


class BeaconTransport(ABC):
    """Fire-and-forget transport that survives page teardown."""

    @abstractmethod
    def send(self, url: str, payload: bytes) -> bool:
        """
        Queue a payload for delivery.

        Args:
            url: Absolute endpoint URL
            payload: Serialized body

        Returns:
            True if the payload was handed off, False otherwise. Never raises.
        """
        ...
