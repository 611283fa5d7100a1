# ==============================================================================
# HTTP Beacon Transport
# ==============================================================================
"""
Fire-and-forget POST used for the unload-time timing report.

send() hands the request to a daemon thread and returns at once, the way a
browser queues a beacon. The response is never read, failures are silent,
and a process that exits mid-flight simply loses the beacon.
"""

import threading
from collections.abc import Callable

import requests

from shoptrack.base.sinks import BeaconTransport

BEACON_CONTENT_TYPE = "application/json"


class HttpBeaconTransport(BeaconTransport):
    """Best-effort beacon over HTTP POST."""

    def __init__(
        self,
        timeout: float = 1.0,
        background: bool = True,
        post: Callable[..., requests.Response] | None = None,
    ):
        """
        Initialize the transport.

        Args:
            timeout: Request timeout in seconds
            background: Send on a daemon thread (False sends on the caller's thread)
            post: HTTP POST function (defaults to requests.post)
        """
        self._timeout = timeout
        self._background = background
        self._post = post or requests.post

    def send(self, url: str, payload: bytes) -> bool:
        if not self._background:
            return self._deliver(url, payload)
        try:
            threading.Thread(
                target=self._deliver,
                args=(url, payload),
                name="shoptrack-beacon",
                daemon=True,
            ).start()
        except RuntimeError:
            return False
        return True

    def _deliver(self, url: str, payload: bytes) -> bool:
        try:
            self._post(
                url,
                data=payload,
                headers={"Content-Type": BEACON_CONTENT_TYPE},
                timeout=self._timeout,
            )
        except Exception:
            return False
        return True
