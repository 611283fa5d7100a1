# ==============================================================================
# Shoptrack CLI
# ==============================================================================
"""
Command-line interface for storefront activity tracking.

Usage:
    shoptrack --help
    shoptrack --version
    shoptrack config show
    shoptrack db init
    shoptrack analytics activity --event-type add_to_cart
    shoptrack analytics orders --json
    shoptrack simulate / /products /cart --click add_to_cart
"""

import logging
import os
from typing import Annotated, Optional

import typer

# ==============================================================================
# App Configuration
# ==============================================================================
# Set consistent terminal width for help output formatting
if "COLUMNS" not in os.environ:
    os.environ["COLUMNS"] = "115"

app = typer.Typer(
    name="shoptrack",
    help="Storefront activity tracking CLI",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        from shoptrack.utils.versions import get_shoptrack_version

        print(f"shoptrack {get_shoptrack_version()}")
        raise typer.Exit()


@app.callback()
def _configure(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
        ),
    ] = None,
) -> None:
    """Storefront activity tracking CLI."""
    from shoptrack.utils.config import get_settings

    settings = get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


config_app = typer.Typer(
    help="Configuration management",
    no_args_is_help=True,
)
app.add_typer(config_app, name="config")

# Register config commands from cli.config module
from shoptrack.cli.config import config_show

config_app.command("show")(config_show)

db_app = typer.Typer(
    help="Database operations",
    no_args_is_help=True,
)
app.add_typer(db_app, name="db")

from shoptrack.cli.db import db_init

db_app.command("init")(db_init)

analytics_app = typer.Typer(
    help="Admin dashboard analytics",
    no_args_is_help=True,
)
app.add_typer(analytics_app, name="analytics")

from shoptrack.cli.analytics import analytics_activity, analytics_orders

analytics_app.command("activity")(analytics_activity)
analytics_app.command("orders")(analytics_orders)

# Simulate command is imported from shoptrack.cli.simulate
from shoptrack.cli.simulate import simulate

app.command("simulate")(simulate)


# ==============================================================================
# Entry Point
# ==============================================================================


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
