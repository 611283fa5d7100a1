# ==============================================================================
# Config Commands
# ==============================================================================
"""
Configuration commands for the shoptrack CLI.
"""

import json
from typing import Annotated

import typer

from shoptrack.cli.shared import C
from shoptrack.utils.config import get_settings


def _mask(secret: str | None) -> str:
    if not secret:
        return "(not set)"
    return f"{secret[:4]}…" if len(secret) > 8 else "****"


# ==============================================================================
# Commands
# ==============================================================================


def config_show(
    json_output: Annotated[
        bool, typer.Option("--json", "-j", help="Output configuration as JSON")
    ] = False,
) -> None:
    """Display current configuration (includes secrets in JSON mode)."""
    settings = get_settings()

    # JSON output mode
    if json_output:
        config = {
            "supabase": {
                "url": settings.supabase.url,
                "anon_key": settings.supabase.anon_key,
                "access_token": settings.supabase.access_token,
                "activity_table": settings.supabase.activity_table,
                "timeout_seconds": settings.supabase.timeout_seconds,
            },
            "postgresql": {
                "host": settings.postgres.host,
                "port": settings.postgres.port,
                "database": settings.postgres.database,
                "schema": settings.postgres.schema_name,
                "user": settings.postgres.user,
                "password": settings.postgres.password,
                "sslmode": settings.postgres.sslmode,
            },
            "tracking": {
                "sink": settings.tracking.sink,
                "identity": settings.tracking.identity,
                "dispatch": settings.tracking.dispatch,
                "beacon_url": settings.tracking.beacon_url,
                "beacon_timeout_seconds": settings.tracking.beacon_timeout_seconds,
                "marker_attribute": settings.tracking.marker_attribute,
                "meta_attribute": settings.tracking.meta_attribute,
            },
            "analytics": {
                "activity_limit": settings.analytics.activity_limit,
                "top_products": settings.analytics.top_products,
                "recent_window_hours": settings.analytics.recent_window_hours,
            },
            "log_level": settings.log_level,
        }
        print(json.dumps(config, indent=2))
        return

    # Human-readable output
    print()
    print(f"{C.BOLD}Configuration{C.RESET}")
    print()

    print(f"{C.CYAN}Supabase{C.RESET}")
    print(f"  URL:        {C.WHITE}{settings.supabase.url}{C.RESET}")
    print(f"  Anon key:   {C.WHITE}{_mask(settings.supabase.anon_key)}{C.RESET}")
    print(f"  Session:    {C.WHITE}{_mask(settings.supabase.access_token)}{C.RESET}")
    print(f"  Table:      {C.WHITE}{settings.supabase.activity_table}{C.RESET}")
    print()

    print(f"{C.CYAN}PostgreSQL{C.RESET}")
    print(f"  Host:       {C.WHITE}{settings.postgres.host}{C.RESET}")
    print(f"  Port:       {C.WHITE}{settings.postgres.port}{C.RESET}")
    print(f"  Database:   {C.WHITE}{settings.postgres.database}{C.RESET}")
    print(f"  Schema:     {C.WHITE}{settings.postgres.schema_name}{C.RESET}")
    print(f"  User:       {C.WHITE}{settings.postgres.user}{C.RESET}")
    print(f"  SSL:        {C.WHITE}{settings.postgres.sslmode}{C.RESET}")
    print()

    print(f"{C.CYAN}Tracking{C.RESET}")
    print(f"  Sink:       {C.WHITE}{settings.tracking.sink}{C.RESET}")
    print(f"  Identity:   {C.WHITE}{settings.tracking.identity}{C.RESET}")
    print(f"  Dispatch:   {C.WHITE}{settings.tracking.dispatch}{C.RESET}")
    print(f"  Beacon:     {C.WHITE}{settings.tracking.beacon_url}{C.RESET}")
    markers = f"{settings.tracking.marker_attribute} / {settings.tracking.meta_attribute}"
    print(f"  Markers:    {C.WHITE}{markers}{C.RESET}")
    print()
