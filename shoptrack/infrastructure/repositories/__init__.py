# ==============================================================================
# Database Repository Adapters
# ==============================================================================
"""
Database adapters implementing the sink and repository interfaces from base/.

Currently supported:
- PostgreSQL (postgresql.py)
"""

from shoptrack.infrastructure.repositories.postgresql import (
    PostgreSQLActivityRepository,
    PostgreSQLOrderRepository,
    check_postgresql_connection,
)

__all__ = [
    "PostgreSQLActivityRepository",
    "PostgreSQLOrderRepository",
    "check_postgresql_connection",
]
