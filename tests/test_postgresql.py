# ==============================================================================
# Tests for the PostgreSQL Repositories
# ==============================================================================
"""
Tests for PostgreSQLActivityRepository and PostgreSQLOrderRepository.

psycopg2.connect is patched, so statements are asserted on a MagicMock
cursor instead of a live database.
"""

from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock, patch

import psycopg2
import pytest
from psycopg2.extras import Json

from shoptrack.infrastructure.repositories.postgresql import (
    PostgreSQLActivityRepository,
    PostgreSQLOrderRepository,
    _add_connect_timeout,
    _as_float,
    check_postgresql_connection,
)
from shoptrack.utils.config import PostgresSettings, Settings

_CONNECT = "shoptrack.infrastructure.repositories.postgresql.psycopg2.connect"


def _settings() -> Settings:
    return Settings(postgres=PostgresSettings(schema_name="shop"))


def _connected(repo_cls, rows=None):
    """Connect a repository to a mock connection whose cursor returns rows."""
    conn = MagicMock()
    cursor = conn.cursor.return_value.__enter__.return_value
    cursor.fetchall.return_value = rows or []
    with patch(_CONNECT, return_value=conn):
        repo = repo_cls(_settings())
        repo.connect()
    return repo, conn, cursor


class TestConnectTimeout:
    def test_added(self):
        assert _add_connect_timeout("postgresql://h/db") == "postgresql://h/db?connect_timeout=10"

    def test_appended_to_query(self):
        assert _add_connect_timeout("postgresql://h/db?sslmode=prefer").endswith(
            "&connect_timeout=10"
        )

    def test_kept(self):
        url = "postgresql://h/db?connect_timeout=3"
        assert _add_connect_timeout(url) == url


class TestAsFloat:
    def test_numbers(self):
        assert _as_float(Decimal("19.90")) == pytest.approx(19.9)
        assert _as_float(3) == 3.0

    def test_null_and_junk(self):
        assert _as_float(None) == 0.0
        assert _as_float("n/a") == 0.0


class TestActivityRepository:
    def test_requires_connection(self):
        repo = PostgreSQLActivityRepository(_settings())
        with pytest.raises(RuntimeError, match="connect"):
            repo.insert({"session_id": "s", "event_type": "page_view"})

    def test_insert(self):
        repo, conn, cursor = _connected(PostgreSQLActivityRepository)
        repo.insert(
            {
                "user_id": None,
                "session_id": "s-1",
                "event_type": "add_to_cart",
                "event_data": {"product_id": "abc"},
                "page_url": "/products",
            }
        )
        sql, params = cursor.execute.call_args.args
        assert "INSERT INTO shop.user_activity" in sql
        assert isinstance(params["event_data"], Json)
        assert params["session_id"] == "s-1"
        conn.commit.assert_called_once()

    def test_insert_without_payload(self):
        repo, _, cursor = _connected(PostgreSQLActivityRepository)
        repo.insert({"session_id": "s-1", "event_type": "page_view", "page_url": "/"})
        assert cursor.execute.call_args.args[1]["event_data"] is None

    def test_insert_error_rolls_back(self):
        repo, conn, cursor = _connected(PostgreSQLActivityRepository)
        cursor.execute.side_effect = psycopg2.DatabaseError("boom")
        with pytest.raises(psycopg2.DatabaseError):
            repo.insert({"session_id": "s", "event_type": "x"})
        conn.rollback.assert_called_once()

    def test_fetch_recent(self):
        row = {
            "id": "a1",
            "event_type": "page_view",
            "created_at": datetime(2024, 6, 1, tzinfo=timezone.utc),
            "page_url": "/",
            "event_data": None,
            "user_id": "u1",
            "full_name": "Ada Lovelace",
        }
        repo, _, cursor = _connected(PostgreSQLActivityRepository, rows=[row])
        [record] = repo.fetch_recent(limit=10)
        assert record.full_name == "Ada Lovelace"
        sql, params = cursor.execute.call_args.args
        assert "LEFT JOIN shop.profiles" in sql
        assert params == (10,)

    def test_close(self):
        repo, conn, _ = _connected(PostgreSQLActivityRepository)
        repo.close()
        repo.close()
        conn.close.assert_called_once()


class TestOrderRepository:
    def test_fetch_orders_coerces_numbers(self):
        row = {
            "id": "o1",
            "status": None,
            "total": Decimal("19.90"),
            "subtotal": None,
            "order_items": [{"product_name": "Mug", "quantity": 2}],
            "created_at": None,
        }
        repo, _, _ = _connected(PostgreSQLOrderRepository, rows=[row])
        [order] = repo.fetch_orders()
        assert order.total == pytest.approx(19.9)
        assert order.subtotal == 0.0
        assert order.status == "pending"
        assert order.item_count == 2


class TestCheckConnection:
    def test_reachable(self):
        with patch(_CONNECT) as connect:
            assert check_postgresql_connection(_settings()) is True
        connect.return_value.close.assert_called_once()

    def test_unreachable(self):
        with patch(_CONNECT, side_effect=psycopg2.OperationalError("refused")):
            assert check_postgresql_connection(_settings()) is False
