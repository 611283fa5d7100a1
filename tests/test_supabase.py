# ==============================================================================
# Tests for the Hosted Backend Adapters
# ==============================================================================
"""
Tests for SupabaseIdentityProvider and SupabaseEventSink.

The HTTP session is a MagicMock, so no network access is needed.
"""

from unittest.mock import MagicMock

import pytest
import requests

from shoptrack.infrastructure.supabase import SupabaseEventSink, SupabaseIdentityProvider
from shoptrack.utils.config import Settings, SupabaseSettings


def _settings(access_token=None) -> Settings:
    return Settings(
        supabase=SupabaseSettings(
            url="https://proj.supabase.test/",
            anon_key="anon-key",
            access_token=access_token,
            activity_table="user_activity",
            timeout_seconds=2.0,
        )
    )


def _response(status_code=200, json_body=None):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_body or {}
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(str(status_code))
    return response


# ==============================================================================
# Identity
# ==============================================================================


class TestIdentityProvider:
    def test_no_token_is_anonymous_without_request(self):
        http = MagicMock()
        provider = SupabaseIdentityProvider(_settings(), session=http)
        assert provider.current_user_id() is None
        http.get.assert_not_called()

    def test_signed_in_user(self):
        http = MagicMock()
        http.get.return_value = _response(json_body={"id": "user-42"})
        provider = SupabaseIdentityProvider(_settings("jwt-token"), session=http)

        assert provider.current_user_id() == "user-42"
        args, kwargs = http.get.call_args
        assert args[0] == "https://proj.supabase.test/auth/v1/user"
        assert kwargs["headers"]["Authorization"] == "Bearer jwt-token"
        assert kwargs["headers"]["apikey"] == "anon-key"
        assert kwargs["timeout"] == 2.0

    @pytest.mark.parametrize("status", [401, 403])
    def test_expired_session_is_anonymous(self, status):
        http = MagicMock()
        http.get.return_value = _response(status)
        provider = SupabaseIdentityProvider(_settings("expired"), session=http)
        assert provider.current_user_id() is None

    def test_server_error_raises(self):
        http = MagicMock()
        http.get.return_value = _response(500)
        provider = SupabaseIdentityProvider(_settings("jwt-token"), session=http)
        with pytest.raises(requests.exceptions.HTTPError):
            provider.current_user_id()


# ==============================================================================
# Event sink
# ==============================================================================


class TestEventSink:
    RECORD = {
        "user_id": None,
        "session_id": "s-1",
        "event_type": "page_view",
        "event_data": None,
        "page_url": "/",
    }

    def test_insert_posts_row(self):
        http = MagicMock()
        http.post.return_value = _response(201)
        sink = SupabaseEventSink(_settings(), session=http)

        sink.insert(self.RECORD)

        args, kwargs = http.post.call_args
        assert args[0] == "https://proj.supabase.test/rest/v1/user_activity"
        assert kwargs["json"] == self.RECORD
        assert kwargs["headers"]["Prefer"] == "return=minimal"
        assert kwargs["headers"]["Authorization"] == "Bearer anon-key"

    def test_insert_failure_raises(self):
        http = MagicMock()
        http.post.return_value = _response(400)
        sink = SupabaseEventSink(_settings(), session=http)
        with pytest.raises(requests.exceptions.HTTPError):
            sink.insert(self.RECORD)

    def test_close_closes_session(self):
        http = MagicMock()
        SupabaseEventSink(_settings(), session=http).close()
        http.close.assert_called_once()
