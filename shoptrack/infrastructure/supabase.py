# ==============================================================================
# Hosted Backend Adapters
# ==============================================================================
"""
Adapters for the hosted backend-as-a-service (auth + REST data API).

Provides:
- SupabaseIdentityProvider: current user from the auth API
- SupabaseEventSink: inserts activity rows through the REST data API

API Documentation: https://supabase.com/docs/guides/api
"""

import logging

import requests

from shoptrack.base.identity import IdentityProvider
from shoptrack.base.sinks import EventSink
from shoptrack.utils.config import Settings, SupabaseSettings, get_settings

logger = logging.getLogger(__name__)

# Auth API answers these for a missing, expired or revoked session
_ANONYMOUS_STATUSES = {401, 403}


def _base_headers(config: SupabaseSettings) -> dict[str, str]:
    """API key plus bearer token (user JWT when signed in, else the anon key)."""
    token = config.access_token or config.anon_key
    return {
        "apikey": config.anon_key,
        "Authorization": f"Bearer {token}",
    }


class SupabaseIdentityProvider(IdentityProvider):
    """
    Resolves the signed-in user through the auth API.

    Returns None without a network call when no access token is configured.
    """

    def __init__(self, settings: Settings | None = None, session: requests.Session | None = None):
        """
        Initialize the identity provider.

        Args:
            settings: Application settings. If None, uses get_settings().
            session: HTTP session to reuse. If None, a new one is created.
        """
        self._config = (settings or get_settings()).supabase
        self._http = session or requests.Session()

    def current_user_id(self) -> str | None:
        """
        Get the id of the signed-in user.

        Raises:
            requests.exceptions.RequestException: On transport or server errors
        """
        if not self._config.access_token:
            return None

        response = self._http.get(
            f"{self._config.auth_url}/user",
            headers=_base_headers(self._config),
            timeout=self._config.timeout_seconds,
        )
        if response.status_code in _ANONYMOUS_STATUSES:
            return None
        response.raise_for_status()
        return response.json().get("id")


class SupabaseEventSink(EventSink):
    """
    Inserts activity rows through the REST data API.

    One POST per event; the row's created_at is assigned by the database.
    """

    def __init__(self, settings: Settings | None = None, session: requests.Session | None = None):
        """
        Initialize the event sink.

        Args:
            settings: Application settings. If None, uses get_settings().
            session: HTTP session to reuse. If None, a new one is created.
        """
        self._config = (settings or get_settings()).supabase
        self._http = session or requests.Session()

    @property
    def table_url(self) -> str:
        return f"{self._config.rest_url}/{self._config.activity_table}"

    def insert(self, record: dict) -> None:
        """
        Insert one activity row.

        Raises:
            requests.exceptions.RequestException: If the API rejects the row
                or is unreachable
        """
        headers = _base_headers(self._config)
        headers["Content-Type"] = "application/json"
        headers["Prefer"] = "return=minimal"
        response = self._http.post(
            self.table_url,
            json=record,
            headers=headers,
            timeout=self._config.timeout_seconds,
        )
        response.raise_for_status()

    def close(self) -> None:
        self._http.close()
