# ==============================================================================
# Database Utilities
# ==============================================================================
"""
Database utility functions for the activity table.

Provides schema initialization for deployments that write activity events
straight to PostgreSQL instead of through the hosted REST API, and the
reads behind the admin dashboard commands.
Includes retry logic with exponential backoff for network resilience.
"""

import logging
from pathlib import Path

import psycopg2
from jinja2 import Template

from shoptrack.core.models import ActivityRecord, Order
from shoptrack.utils.config import get_settings
from shoptrack.utils.paths import get_init_sql_path
from shoptrack.utils.retry import POSTGRES_RETRY_EXCEPTIONS, retry_light, retry_standard

logger = logging.getLogger(__name__)


def get_schema_file() -> Path | None:
    """Get the schema init.sql path, or None if not found."""
    path = get_init_sql_path()
    if path.exists():
        return path
    cwd_path = Path.cwd() / "schema" / "init.sql"
    if cwd_path.exists():
        return cwd_path
    return None


def render_schema_sql(schema_name: str, activity_table: str) -> str:
    """Render the schema SQL template for the given schema and table names."""
    schema_file = get_schema_file()
    if not schema_file:
        raise RuntimeError(
            "Schema file (schema/init.sql) not found. "
            "Make sure you're running from the project root."
        )

    template = Template(schema_file.read_text())
    return template.render(schema_name=schema_name, activity_table=activity_table)


@retry_standard(POSTGRES_RETRY_EXCEPTIONS, logger)
def check_schema_exists() -> bool:
    """
    Check if the activity table exists.

    Retries on connection errors with exponential backoff.
    """
    settings = get_settings()
    with psycopg2.connect(settings.postgres.connection_string, connect_timeout=5) as conn:
        with conn.cursor() as cur:
            cur.execute(
                """
                SELECT EXISTS (
                    SELECT FROM information_schema.tables
                    WHERE table_schema = %s
                    AND table_name = %s
                )
                """,
                (settings.postgres.schema_name, settings.supabase.activity_table),
            )
            result = cur.fetchone()
            return result[0] if result else False


@retry_standard(POSTGRES_RETRY_EXCEPTIONS, logger)
def ensure_schema() -> bool:
    """
    Ensure the activity table exists, initializing it if needed.

    Idempotent and safe to call multiple times.

    Returns:
        True if the schema was created, False if it already existed

    Raises:
        RuntimeError: If schema file not found or initialization fails
    """
    if check_schema_exists():
        return False

    settings = get_settings()
    schema_name = settings.postgres.schema_name
    table = settings.supabase.activity_table

    logger.info("Initializing activity table '%s.%s'...", schema_name, table)

    schema_sql = render_schema_sql(schema_name, table)
    try:
        with psycopg2.connect(settings.postgres.connection_string) as conn:
            with conn.cursor() as cur:
                cur.execute(schema_sql)
            conn.commit()
    except POSTGRES_RETRY_EXCEPTIONS:
        raise
    except Exception as e:
        raise RuntimeError(f"Failed to initialize schema: {e}") from e

    logger.info("Activity table '%s.%s' initialized.", schema_name, table)
    return True


# ==============================================================================
# Dashboard Reads
# ==============================================================================


@retry_light(POSTGRES_RETRY_EXCEPTIONS, logger)
def load_recent_activities(limit: int | None = None) -> list[ActivityRecord]:
    """
    Load the most recent activity rows for the dashboard.

    Args:
        limit: Maximum number of rows (defaults to ANALYTICS_ACTIVITY_LIMIT)

    Returns:
        Activity records, newest first
    """
    from shoptrack.infrastructure.repositories import PostgreSQLActivityRepository

    settings = get_settings()
    repo = PostgreSQLActivityRepository(settings)
    repo.connect()
    try:
        return repo.fetch_recent(limit or settings.analytics.activity_limit)
    finally:
        repo.close()


@retry_light(POSTGRES_RETRY_EXCEPTIONS, logger)
def load_orders() -> list[Order]:
    """Load all orders for the dashboard summary."""
    from shoptrack.infrastructure.repositories import PostgreSQLOrderRepository

    repo = PostgreSQLOrderRepository(get_settings())
    repo.connect()
    try:
        return repo.fetch_orders()
    finally:
        repo.close()
