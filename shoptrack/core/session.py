# ==============================================================================
# Tracking Session - Identity and Timing State
# ==============================================================================
"""
Session identity and page-timing state for one mounted tracker.

A session is minted when the tracker mounts and lives until it unmounts or
the page unloads. It owns the only mutable tracking state: the session id
and the start timestamp (t0) of the page currently being viewed.

State machine:
    UNINITIALIZED --activate()--> ACTIVE --restart_timer()--> ACTIVE
    ACTIVE --terminate()--> TERMINATED

Elapsed times are measured on a monotonic clock in milliseconds.
"""

import logging
import math
import time
import uuid
from collections.abc import Callable
from enum import Enum

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Monotonic clock reading in milliseconds."""
    return time.monotonic() * 1000.0


def round_elapsed_ms(elapsed: float) -> int:
    """Round an elapsed duration to whole milliseconds, halves rounding up.

    Built-in round() uses banker's rounding (1500.5 -> 1500); durations
    round half up instead (1500.5 -> 1501, 1500.7 -> 1501).
    """
    return int(math.floor(elapsed + 0.5))


class SessionState(str, Enum):
    """Lifecycle states of a tracking session."""

    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    TERMINATED = "terminated"


class TrackingSession:
    """
    Session identity and timer for one mounted tracker.

    The session id is generated once, on first read, and never regenerated.
    Only the owning tracker writes the timer.
    """

    def __init__(
        self,
        clock: Clock = monotonic_ms,
        id_factory: Callable[[], str] = lambda: str(uuid.uuid4()),
    ):
        """
        Initialize an unmounted session.

        Args:
            clock: Monotonic clock returning milliseconds
            id_factory: Generator for the opaque session identifier
        """
        self._clock = clock
        self._id_factory = id_factory
        self._session_id: str | None = None
        self._started_at: float | None = None
        self._state = SessionState.UNINITIALIZED

    @property
    def session_id(self) -> str:
        """Opaque session identifier, stable for the session's lifetime."""
        if self._session_id is None:
            self._session_id = self._id_factory()
        return self._session_id

    @property
    def state(self) -> SessionState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_active(self) -> bool:
        """Whether events are attributable to this session."""
        return self._state is SessionState.ACTIVE

    @property
    def timer_running(self) -> bool:
        """Whether a page start timestamp is active."""
        return self._started_at is not None

    def activate(self) -> None:
        """Mount the session and start timing the first page."""
        if self._state is not SessionState.UNINITIALIZED:
            raise RuntimeError(f"Cannot activate a session in state '{self._state.value}'")
        self._started_at = self._clock()
        self._state = SessionState.ACTIVE
        logger.info("Tracking session %s active", self.session_id)

    def elapsed_ms(self) -> int | None:
        """Whole milliseconds since the current page started, or None if not timing."""
        if self._started_at is None:
            return None
        return round_elapsed_ms(self._clock() - self._started_at)

    def restart_timer(self) -> int | None:
        """Stop timing the current page and start timing the next one.

        Returns:
            Elapsed milliseconds of the page being left, or None if not timing
        """
        now = self._clock()
        elapsed = None
        if self._started_at is not None:
            elapsed = round_elapsed_ms(now - self._started_at)
        self._started_at = now
        return elapsed

    def terminate(self) -> None:
        """End the session. Idempotent."""
        if self._state is SessionState.TERMINATED:
            return
        self._started_at = None
        self._state = SessionState.TERMINATED
        logger.info("Tracking session %s terminated", self.session_id)
