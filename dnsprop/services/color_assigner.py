"""Palette assignment for equivalence classes.

The same class maps to the same palette index in the results table and
on the map. Assignment is scoped to one PropagationStats instance; a new
batch starts from scratch.
"""

from typing import Optional

from dnsprop.models.dns_result import ServerResult, ServerStatus
from dnsprop.models.propagation import PropagationStats
from dnsprop.services.consistency_analyzer import equivalence_key


PALETTE_SIZE = 8

PALETTE = (
    "#10b981",  # emerald
    "#3b82f6",  # blue
    "#8b5cf6",  # violet
    "#ec4899",  # pink
    "#14b8a6",  # teal
    "#eab308",  # yellow
    "#6366f1",  # indigo
    "#84cc16",  # lime
)

STATUS_COLORS = {
    ServerStatus.TIMEOUT: "#f59e0b",
    ServerStatus.ERROR: "#ef4444",
    ServerStatus.SERVFAIL: "#ef4444",
    ServerStatus.NXDOMAIN: "#f97316",
}

FALLBACK_COLOR = "#6b7280"  # gray; noanswer and unrecognized statuses


def palette_index(stats: PropagationStats, result: ServerResult) -> Optional[int]:
    """Return the palette index for a result's equivalence class.

    Args:
        stats: Statistics computed from the batch the result belongs to.
        result: One result from that batch.

    Returns:
        Optional[int]: Class position modulo PALETTE_SIZE, or None if the
        result is not successful or its class is not part of stats.
    """
    if not result.is_successful():
        return None

    position = stats.class_position(equivalence_key(result))
    if position is None:
        return None
    return position % PALETTE_SIZE


def result_color(stats: PropagationStats, result: ServerResult) -> str:
    """Return the display color for a result.

    Successful results use their class color; others use a status color.
    """
    index = palette_index(stats, result)
    if index is not None:
        return PALETTE[index]
    return STATUS_COLORS.get(result.status, FALLBACK_COLOR)
