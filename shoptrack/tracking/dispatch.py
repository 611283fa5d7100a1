# ==============================================================================
# Emission Dispatchers
# ==============================================================================
"""
Execution strategies for activity deliveries.

The emitter hands every delivery to a dispatcher so that tracking never
blocks the flow it instruments:

- BackgroundDispatcher: single worker thread; submit() returns immediately.
  One worker means deliveries run in submission order.
- InlineDispatcher: runs the delivery on the caller's thread. Used by tests
  and short-lived command-line runs.
"""

import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, wait

logger = logging.getLogger(__name__)


class Dispatcher(ABC):
    """Strategy for running deliveries."""

    @abstractmethod
    def submit(self, task: Callable[[], None]) -> None:
        """
        Schedule a delivery.

        Raises:
            RuntimeError: If the dispatcher has been shut down
        """
        ...

    def flush(self, timeout: float | None = None) -> bool:
        """Wait for pending deliveries. Returns True if none remain."""
        return True

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting deliveries."""


class InlineDispatcher(Dispatcher):
    """Runs each delivery immediately on the calling thread."""

    def __init__(self) -> None:
        self._closed = False

    def submit(self, task: Callable[[], None]) -> None:
        if self._closed:
            raise RuntimeError("Dispatcher is shut down")
        task()

    def shutdown(self, wait: bool = True) -> None:
        self._closed = True


class BackgroundDispatcher(Dispatcher):
    """Runs deliveries on a single background worker thread."""

    def __init__(self, thread_name_prefix: str = "shoptrack-emit"):
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=thread_name_prefix)
        self._pending: set[Future] = set()
        self._lock = threading.Lock()

    def submit(self, task: Callable[[], None]) -> None:
        future = self._executor.submit(task)
        with self._lock:
            self._pending.add(future)
        future.add_done_callback(self._forget)

    def _forget(self, future: Future) -> None:
        with self._lock:
            self._pending.discard(future)

    def flush(self, timeout: float | None = None) -> bool:
        with self._lock:
            pending = list(self._pending)
        if not pending:
            return True
        _, not_done = wait(pending, timeout=timeout)
        if not_done:
            logger.warning("%d activity deliveries still pending after flush", len(not_done))
        return not not_done

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
