"""Tooltip placement that never clips the viewport.

Horizontal placement is decided fully before vertical placement. The
vertical pass may flip the box below the cursor and then clamp again.
"""

from dataclasses import dataclass


DEFAULT_PADDING = 8.0
DEFAULT_OFFSET_X = 12.0
DEFAULT_OFFSET_Y = 12.0


@dataclass(frozen=True)
class TooltipPlacement:
    """Top-left corner of a tooltip box in viewport coordinates."""

    left: float
    top: float


def resolve_horizontal(
    x: float,
    box_width: float,
    viewport_width: float,
    padding: float,
    offset_x: float,
) -> float:
    """Place the box right of the cursor, flipping left on overflow."""
    left = x + offset_x
    if left + box_width + padding > viewport_width:
        left = x - box_width - offset_x
    if left < padding:
        left = padding
    return left


def resolve_vertical(
    y: float,
    box_height: float,
    viewport_height: float,
    padding: float,
    offset_y: float,
) -> float:
    """Place the box above the cursor, flipping below if it clips the top."""
    top = y - box_height - offset_y
    if top < padding:
        top = y + offset_y
    if top + box_height + padding > viewport_height:
        top = viewport_height - box_height - padding
    if top < padding:
        top = padding
    return top


def resolve_tooltip_placement(
    x: float,
    y: float,
    box_width: float,
    box_height: float,
    viewport_width: float,
    viewport_height: float,
    padding: float = DEFAULT_PADDING,
    offset_x: float = DEFAULT_OFFSET_X,
    offset_y: float = DEFAULT_OFFSET_Y,
) -> TooltipPlacement:
    """Compute a non-clipping tooltip position for a cursor.

    When the viewport exceeds the box by more than 2 * padding in each
    dimension, the cursor lies inside the viewport and both offsets are at
    least padding, the returned box lies inside the padded viewport.

    Args:
        x: Cursor x in viewport coordinates.
        y: Cursor y in viewport coordinates.
        box_width: Tooltip width.
        box_height: Tooltip height.
        viewport_width: Viewport width.
        viewport_height: Viewport height.
        padding: Minimum gap between box and viewport edge.
        offset_x: Horizontal gap between cursor and box.
        offset_y: Vertical gap between cursor and box.

    Returns:
        TooltipPlacement: Resolved top-left corner.
    """
    left = resolve_horizontal(x, box_width, viewport_width, padding, offset_x)
    top = resolve_vertical(y, box_height, viewport_height, padding, offset_y)
    return TooltipPlacement(left=left, top=top)
