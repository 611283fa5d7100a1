# ==============================================================================
# PostgreSQL Repository Implementations
# ==============================================================================
"""
PostgreSQL implementations of the sink and repository interfaces.

Provides:
- PostgreSQLActivityRepository: append activity rows, read recent ones back
- PostgreSQLOrderRepository: read storefront orders for the dashboard
"""

import logging
import psycopg2
from psycopg2.extras import Json, RealDictCursor

from shoptrack.base.repositories import ActivityRepository, OrderRepository
from shoptrack.base.sinks import EventSink
from shoptrack.core.models import ActivityRecord, Order
from shoptrack.utils.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Connection timeout
CONNECT_TIMEOUT = 10


def _add_connect_timeout(conn_string: str) -> str:
    """Add connect_timeout to connection string if not present."""
    if "connect_timeout" not in conn_string:
        separator = "&" if "?" in conn_string else "?"
        return f"{conn_string}{separator}connect_timeout={CONNECT_TIMEOUT}"
    return conn_string


def _as_float(value) -> float:
    """Numeric column to float; NULL and junk count as 0."""
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


class _PostgreSQLRepository:
    """Connection handling shared by the PostgreSQL repositories."""

    def __init__(self, settings: Settings | None = None):
        """
        Initialize the repository.

        Args:
            settings: Application settings. If None, uses get_settings().
        """
        self._settings = settings or get_settings()
        self._conn: psycopg2.extensions.connection | None = None
        self._schema = self._settings.postgres.schema_name

    @property
    def schema(self) -> str:
        """Get the database schema name."""
        return self._schema

    def connect(self) -> None:
        """Establish connection to PostgreSQL."""
        conn_string = _add_connect_timeout(self._settings.postgres.connection_string)
        self._conn = psycopg2.connect(conn_string)
        logger.info("%s connected (schema=%s)", type(self).__name__, self._schema)

    def _require_connection(self) -> "psycopg2.extensions.connection":
        if self._conn is None:
            raise RuntimeError("PostgreSQL connection not established. Call connect() first.")
        return self._conn

    def rollback(self) -> None:
        """Rollback current transaction."""
        if self._conn:
            try:
                self._conn.rollback()
            except psycopg2.Error as e:
                logger.warning("Rollback failed: %s", e)

    def close(self) -> None:
        """Close connection and release resources."""
        if self._conn:
            try:
                self._conn.close()
                logger.info("%s connection closed", type(self).__name__)
            except Exception as e:
                logger.warning("Error closing connection: %s", e)
            finally:
                self._conn = None


class PostgreSQLActivityRepository(_PostgreSQLRepository, EventSink, ActivityRepository):
    """
    PostgreSQL implementation of EventSink and ActivityRepository.

    Inserts are append-only with no uniqueness constraint; created_at
    defaults to now() in the table definition.
    """

    def __init__(self, settings: Settings | None = None):
        super().__init__(settings)
        self._table = self._settings.supabase.activity_table

    def insert(self, record: dict) -> None:
        """
        Insert one activity row.

        Args:
            record: Dict with keys user_id, session_id, event_type,
                    event_data (dict or None), page_url
        """
        conn = self._require_connection()
        event_data = record.get("event_data")
        try:
            with conn.cursor() as cur:
                cur.execute(
                    f"""
                    INSERT INTO {self._schema}.{self._table}
                        (user_id, session_id, event_type, event_data, page_url)
                    VALUES
                        (%(user_id)s, %(session_id)s, %(event_type)s,
                         %(event_data)s, %(page_url)s)
                    """,
                    {
                        "user_id": record.get("user_id"),
                        "session_id": record["session_id"],
                        "event_type": record["event_type"],
                        "event_data": Json(event_data) if event_data is not None else None,
                        "page_url": record.get("page_url"),
                    },
                )
            conn.commit()
        except psycopg2.Error:
            self.rollback()
            raise

    def fetch_recent(self, limit: int = 100) -> list[ActivityRecord]:
        """
        Fetch the most recent activity rows with the actor's full name.

        Args:
            limit: Maximum number of rows

        Returns:
            Activity records, newest first
        """
        conn = self._require_connection()
        with conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                f"""
                SELECT a.id::text AS id, a.event_type, a.created_at, a.page_url,
                       a.event_data, a.user_id::text AS user_id, p.full_name
                FROM {self._schema}.{self._table} a
                LEFT JOIN {self._schema}.profiles p ON p.id = a.user_id
                ORDER BY a.created_at DESC
                LIMIT %s
                """,
                (limit,),
            )
            rows = cur.fetchall()
        conn.rollback()  # end the read-only transaction
        return [ActivityRecord(**row) for row in rows]


class PostgreSQLOrderRepository(_PostgreSQLRepository, OrderRepository):
    """PostgreSQL implementation of OrderRepository."""

    def fetch_orders(self) -> list[Order]:
        """
        Fetch all orders, newest first.

        Returns:
            Order records with their line items
        """
        conn = self._require_connection()
        with conn.cursor(cursor_factory=RealDictCursor) as cur:
            cur.execute(
                f"""
                SELECT id::text AS id, status, total, subtotal, order_items, created_at
                FROM {self._schema}.orders
                ORDER BY created_at DESC
                """
            )
            rows = cur.fetchall()
        conn.rollback()  # end the read-only transaction

        return [
            Order(
                id=row["id"],
                status=row.get("status") or "pending",
                total=_as_float(row.get("total")),
                subtotal=_as_float(row.get("subtotal")),
                order_items=row.get("order_items") or [],
                created_at=row.get("created_at"),
            )
            for row in rows
        ]


def check_postgresql_connection(settings: Settings | None = None) -> bool:
    """
    Check if PostgreSQL is reachable.

    Args:
        settings: Application settings. If None, uses get_settings().

    Returns:
        True if connection successful, False otherwise
    """
    try:
        settings = settings or get_settings()
        conn_string = _add_connect_timeout(settings.postgres.connection_string)
        conn = psycopg2.connect(conn_string)
        conn.close()
        return True
    except psycopg2.Error:
        return False
