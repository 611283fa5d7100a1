# ==============================================================================
# Interaction Markers - Pure Domain Logic
# ==============================================================================
"""
Resolution of declarative click-tracking markers.

Any element in the UI tree can opt into click tracking by carrying a marker
attribute (data-track) naming its event type, plus an optional attribute
(data-track-meta) holding a JSON object payload. A click anywhere inside a
marked element resolves to the nearest marked ancestor.

Works on any node exposing `parent`, `tag_name` and `get_attribute(name)`,
so it can be unit tested with a synthetic tree.
"""

import json
from typing import TYPE_CHECKING, Any

from shoptrack.core.models import ClickMarker, EventType

if TYPE_CHECKING:
    from shoptrack.ui.document import UiElement

DEFAULT_MARKER_ATTRIBUTE = "data-track"
DEFAULT_META_ATTRIBUTE = "data-track-meta"


def find_marked_element(
    target: "UiElement | None", marker_attribute: str = DEFAULT_MARKER_ATTRIBUTE
) -> "UiElement | None":
    """
    Walk from target up through its ancestors to the nearest marked element.

    The target itself is checked first.

    Args:
        target: Element that received the click
        marker_attribute: Name of the marker attribute

    Returns:
        The nearest element carrying the marker attribute, or None
    """
    node = target
    while node is not None:
        if node.get_attribute(marker_attribute) is not None:
            return node
        node = node.parent
    return None


def parse_marker_payload(raw: str | None) -> dict[str, Any]:
    """
    Parse the serialized payload of a marker.

    Args:
        raw: Value of the meta attribute, or None if absent

    Returns:
        The parsed object; {"meta": raw} when raw is not a JSON object;
        an empty dict when raw is absent or empty
    """
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except ValueError:
        return {"meta": raw}
    if not isinstance(parsed, dict):
        return {"meta": raw}
    return parsed


def element_metadata(element: "UiElement") -> dict[str, str]:
    """Tag name, id and class list of an element, omitting empty values."""
    metadata = {"tag": element.tag_name}
    element_id = element.get_attribute("id")
    if element_id:
        metadata["id"] = element_id
    classes = element.get_attribute("class")
    if classes:
        metadata["classes"] = classes
    return metadata


def find_nearest_marked(
    target: "UiElement | None",
    marker_attribute: str = DEFAULT_MARKER_ATTRIBUTE,
    meta_attribute: str = DEFAULT_META_ATTRIBUTE,
) -> ClickMarker | None:
    """
    Resolve the tracking marker that applies to a click on target.

    Args:
        target: Element that received the click
        marker_attribute: Name of the marker attribute
        meta_attribute: Name of the payload attribute

    Returns:
        ClickMarker with the event type and augmented payload, or None when
        no element in the ancestor chain is marked
    """
    element = find_marked_element(target, marker_attribute)
    if element is None:
        return None

    event_type = element.get_attribute(marker_attribute) or EventType.CLICK.value
    payload = parse_marker_payload(element.get_attribute(meta_attribute))
    payload.update(element_metadata(element))
    return ClickMarker(event_type=event_type, payload=payload)
