# ==============================================================================
# Tracker Factory
# ==============================================================================
"""
Factory functions for wiring the tracking pipeline from settings.

Implementations are selected by the TRACKING_* environment variables:
- TRACKING_SINK: "supabase" (default), "postgresql", or "log"
- TRACKING_IDENTITY: "supabase" (default) or "anonymous"
- TRACKING_DISPATCH: "background" (default) or "inline"
"""

from shoptrack.base.identity import IdentityProvider
from shoptrack.base.sinks import BeaconTransport, EventSink
from shoptrack.core.session import Clock, monotonic_ms
from shoptrack.tracking.dispatch import BackgroundDispatcher, Dispatcher, InlineDispatcher
from shoptrack.tracking.tracker import ActivityTracker
from shoptrack.ui.document import Document
from shoptrack.ui.router import HistoryRouter
from shoptrack.utils.config import Settings, get_settings


def get_event_sink(settings: Settings | None = None, impl: str | None = None) -> EventSink:
    """
    Get the event sink selected by TRACKING_SINK.

    Args:
        settings: Application settings. If None, uses get_settings().
        impl: Override of the configured implementation name

    Returns:
        EventSink: A ready-to-use sink (database sinks are already connected)

    Raises:
        ValueError: If an unknown sink is specified
    """
    settings = settings or get_settings()
    impl = impl or settings.tracking.sink

    match impl:
        case "supabase":
            from shoptrack.infrastructure.supabase import SupabaseEventSink

            return SupabaseEventSink(settings)
        case "postgresql":
            from shoptrack.infrastructure.repositories import PostgreSQLActivityRepository

            repo = PostgreSQLActivityRepository(settings)
            repo.connect()
            return repo
        case "log":
            from shoptrack.infrastructure.logging_sink import LoggingEventSink

            return LoggingEventSink()
        case _:
            raise ValueError(
                f"Unknown event sink: '{impl}'.\nValid options are: supabase, postgresql, log"
            )


def get_identity_provider(settings: Settings | None = None) -> IdentityProvider:
    """
    Get the identity provider selected by TRACKING_IDENTITY.

    Raises:
        ValueError: If an unknown provider is specified
    """
    settings = settings or get_settings()
    impl = settings.tracking.identity

    match impl:
        case "supabase":
            from shoptrack.infrastructure.supabase import SupabaseIdentityProvider

            return SupabaseIdentityProvider(settings)
        case "anonymous":
            from shoptrack.infrastructure.identity import StaticIdentityProvider

            return StaticIdentityProvider(None)
        case _:
            raise ValueError(
                f"Unknown identity provider: '{impl}'.\nValid options are: supabase, anonymous"
            )


def get_dispatcher(settings: Settings | None = None) -> Dispatcher:
    """
    Get the emission dispatcher selected by TRACKING_DISPATCH.

    Raises:
        ValueError: If an unknown dispatch mode is specified
    """
    settings = settings or get_settings()
    impl = settings.tracking.dispatch

    match impl:
        case "background":
            return BackgroundDispatcher()
        case "inline":
            return InlineDispatcher()
        case _:
            raise ValueError(
                f"Unknown dispatch mode: '{impl}'.\nValid options are: background, inline"
            )


def build_tracker(
    document: Document,
    router: HistoryRouter,
    settings: Settings | None = None,
    sink: EventSink | None = None,
    dispatcher: Dispatcher | None = None,
    beacon: BeaconTransport | None = None,
    clock: Clock = monotonic_ms,
) -> ActivityTracker:
    """
    Build an unmounted ActivityTracker from settings.

    Args:
        document: UI surface to observe
        router: Navigation source
        settings: Application settings. If None, uses get_settings().
        sink: Event sink override (defaults to get_event_sink())
        dispatcher: Dispatcher override (defaults to get_dispatcher())
        beacon: Beacon transport override (defaults to HttpBeaconTransport)
        clock: Monotonic millisecond clock

    Returns:
        ActivityTracker: Call mount() to start tracking

    Example:
        >>> tracker = build_tracker(document, router).mount()
        >>> tracker.emitter("add_to_cart", {"product_id": "abc123"})
    """
    from shoptrack.infrastructure.beacon import HttpBeaconTransport

    settings = settings or get_settings()
    return ActivityTracker(
        document=document,
        router=router,
        sink=sink or get_event_sink(settings),
        identity=get_identity_provider(settings),
        beacon=beacon or HttpBeaconTransport(timeout=settings.tracking.beacon_timeout_seconds),
        beacon_url=settings.tracking.beacon_url,
        dispatcher=dispatcher or get_dispatcher(settings),
        clock=clock,
        marker_attribute=settings.tracking.marker_attribute,
        meta_attribute=settings.tracking.meta_attribute,
    )
