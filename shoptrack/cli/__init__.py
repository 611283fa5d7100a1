# ==============================================================================
# CLI Commands Module
# ==============================================================================
"""
CLI commands for shoptrack.

Commands are organized into separate modules for maintainability:
- shared.py: Common constants and box-drawing helpers
- config.py: Configuration display
- db.py: Activity table setup
- analytics.py: Admin dashboard panels
- simulate.py: Scripted tracking sessions
"""

from shoptrack.cli.shared import (
    BOX_WIDTH,
    B,
    Box,
    C,
    Colors,
    I,
    Icons,
    check_db_connection,
)

__all__ = [
    "BOX_WIDTH",
    "B",
    "Box",
    "C",
    "Colors",
    "I",
    "Icons",
    "check_db_connection",
]
