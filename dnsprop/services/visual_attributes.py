"""Per-element visual attributes for table rows and map markers.

Every attribute is recomputed from (PropagationStats, ServerResult,
HoverState); nothing derived is cached between batches.
"""

from dataclasses import dataclass
from typing import List, Optional

from dnsprop.models.app_state import HoverState
from dnsprop.models.dns_result import ResultBatch, ServerResult
from dnsprop.models.propagation import PropagationStats
from dnsprop.services.color_assigner import palette_index, result_color


DIMMED_OPACITY = 0.4
HOVERED_SCALE = 1.5


@dataclass(frozen=True)
class ElementStyle:
    """Rendering attributes of one row or marker.

    Attributes:
        color: Hex fill color.
        palette_index: Class palette index, None for unsuccessful results.
        opacity: 1.0, or DIMMED_OPACITY while a sibling is hovered.
        scale: Size multiplier; HOVERED_SCALE for the hovered element.
        pulse_ring: Whether the pulsing ring is drawn.
    """

    color: str
    palette_index: Optional[int]
    opacity: float
    scale: float
    pulse_ring: bool


@dataclass(frozen=True)
class MapMarker:
    """A resolver placed on the world map."""

    element_id: str
    latitude: float
    longitude: float
    label: str
    style: ElementStyle


def element_style(
    stats: PropagationStats,
    result: ServerResult,
    hover: HoverState,
    element_id: Optional[str] = None,
) -> ElementStyle:
    """Compute the style of one element.

    Args:
        stats: Statistics of the batch the result belongs to.
        result: The result rendered by the element.
        hover: Current hover state.
        element_id: Element id; defaults to the result's server id.

    Returns:
        ElementStyle: Color, opacity, scale and ring flag.
    """
    element_id = element_id if element_id is not None else result.server_id
    hovered = hover.is_hovered(element_id)

    return ElementStyle(
        color=result_color(stats, result),
        palette_index=palette_index(stats, result),
        opacity=DIMMED_OPACITY if hover.is_dimmed(element_id) else 1.0,
        scale=HOVERED_SCALE if hovered else 1.0,
        pulse_ring=hovered,
    )


def marker_label(result: ServerResult) -> str:
    """Tooltip text for a marker."""
    region = result.region or "Unknown"
    if result.answers:
        answers = ", ".join(a.value for a in result.answers)
        return f"{result.server_id} ({region}): {answers}"
    return f"{result.server_id} ({region}): {result.raw_status}"


def build_map_markers(
    batch: ResultBatch, stats: PropagationStats, hover: HoverState
) -> List[MapMarker]:
    """Build markers for every result with known coordinates.

    Results without coordinates are left out of the map only.
    """
    markers = []
    for result in batch.results:
        if not result.has_coordinates():
            continue
        markers.append(
            MapMarker(
                element_id=result.server_id,
                latitude=result.latitude,
                longitude=result.longitude,
                label=marker_label(result),
                style=element_style(stats, result, hover),
            )
        )
    return markers
