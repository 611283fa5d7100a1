# ==============================================================================
# Simulate Command
# ==============================================================================
"""
Drives a tracker through a scripted visit for local testing of the pipeline.
"""

from typing import Annotated, Optional

import typer

from shoptrack.cli.shared import C, I
from shoptrack.utils.config import get_settings


def _parse_click(value: str) -> tuple[str, str | None]:
    """Split 'marker' or 'marker:{json}' into marker value and raw meta."""
    marker, sep, meta = value.partition(":")
    return marker, (meta if sep else None)


def simulate(
    paths: Annotated[list[str], typer.Argument(help="Paths to visit, in order")],
    click: Annotated[
        Optional[list[str]],
        typer.Option(
            "--click",
            "-c",
            help="Click a marked element on the last page (MARKER or MARKER:JSON)",
        ),
    ] = None,
    sink: Annotated[
        Optional[str],
        typer.Option("--sink", "-s", help="Event sink override (supabase, postgresql, log)"),
    ] = None,
) -> None:
    """Simulate one storefront visit and send its activity to the event sink.

    Mounts a tracker on the first path, navigates through the rest, clicks
    the given markers and unloads the page. Deliveries run inline so every
    event is sent before the command exits.

    Examples:
        shoptrack simulate / /products /cart
        shoptrack simulate /products -c 'add_to_cart:{"product_id":"abc123"}'
        shoptrack simulate / /checkout --sink log
    """
    from shoptrack.infrastructure.beacon import HttpBeaconTransport
    from shoptrack.tracking.dispatch import InlineDispatcher
    from shoptrack.tracking.factory import build_tracker, get_event_sink
    from shoptrack.ui.document import Document
    from shoptrack.ui.router import HistoryRouter

    settings = get_settings()

    try:
        event_sink = get_event_sink(settings, impl=sink)
    except Exception as e:
        print(f"\n{C.BRIGHT_RED}{I.CROSS} Could not open event sink: {e}{C.RESET}\n")
        raise typer.Exit(1)

    document = Document()
    targets = []
    for value in click or []:
        marker, meta = _parse_click(value)
        attrs = {settings.tracking.marker_attribute: marker}
        if meta is not None:
            attrs[settings.tracking.meta_attribute] = meta
        button = document.root.append("button", **attrs)
        targets.append(button.append("span"))

    router = HistoryRouter(paths[0])
    tracker = build_tracker(
        document,
        router,
        settings=settings,
        sink=event_sink,
        dispatcher=InlineDispatcher(),
        beacon=HttpBeaconTransport(
            timeout=settings.tracking.beacon_timeout_seconds, background=False
        ),
    )

    tracker.mount()
    session_id = tracker.session_id
    for path in paths[1:]:
        router.push(path)
    for target in targets:
        document.dispatch_click(target)
    tracker.unload()
    tracker.close()

    print()
    print(f"{C.BRIGHT_GREEN}{I.CHECK} Simulated session {C.WHITE}{session_id}{C.RESET}")
    print(f"  Pages:    {C.WHITE}{' {} '.format(I.ARROW).join(paths)}{C.RESET}")
    print(f"  Clicks:   {C.WHITE}{len(targets)}{C.RESET}")
    print(f"  Sink:     {C.WHITE}{sink or settings.tracking.sink}{C.RESET}")
    print()
