# ==============================================================================
# Database Commands
# ==============================================================================
"""
Database commands for the shoptrack CLI.
"""

import typer

from shoptrack.cli.shared import C, I, check_db_connection
from shoptrack.utils.config import get_settings


def db_init() -> None:
    """Create the activity table if it does not exist.

    Renders schema/init.sql for the configured schema and table names and
    runs it against PostgreSQL. Safe to run repeatedly.

    Examples:
        shoptrack db init
    """
    from shoptrack.utils.db import ensure_schema

    settings = get_settings()
    target = f"{settings.postgres.schema_name}.{settings.supabase.activity_table}"

    print()
    if not check_db_connection():
        print(
            f"{C.BRIGHT_RED}{I.CROSS} PostgreSQL is not reachable at "
            f"{settings.postgres.host}:{settings.postgres.port}{C.RESET}"
        )
        raise typer.Exit(1)

    try:
        created = ensure_schema()
    except Exception as e:
        print(f"{C.BRIGHT_RED}{I.CROSS} Schema initialization failed: {e}{C.RESET}")
        raise typer.Exit(1)

    if created:
        print(f"{C.BRIGHT_GREEN}{I.CHECK} Created {target}{C.RESET}")
    else:
        print(f"{C.BRIGHT_GREEN}{I.CHECK} {target} already exists{C.RESET}")
    print()
