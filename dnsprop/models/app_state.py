"""Application state and per-event reducers.

UI-local state is a single immutable AppState value. Each reducer takes
the current state plus one event payload and returns a new state.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from dnsprop.models.dns_result import ResultBatch
from dnsprop.models.propagation import PropagationStats
from dnsprop.services.consistency_analyzer import analyze_batch
from dnsprop.services.sort_engine import SortKey


class Theme(Enum):
    """Display theme preference."""

    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class HoverState:
    """Which single element is hovered, if any.

    Attributes:
        hovered_id: Id of the hovered marker or row; None when all idle.
    """

    hovered_id: Optional[str] = None

    def is_hovered(self, element_id: str) -> bool:
        return self.hovered_id is not None and self.hovered_id == element_id

    def is_dimmed(self, element_id: str) -> bool:
        """Idle siblings are dimmed while another element is hovered."""
        return self.hovered_id is not None and self.hovered_id != element_id


def enter(hover: HoverState, element_id: str) -> HoverState:
    """Hover an element; any previously hovered element returns to idle."""
    return HoverState(hovered_id=element_id)


def leave(hover: HoverState, element_id: str) -> HoverState:
    """Return to all-idle if element_id is the hovered element."""
    if hover.hovered_id != element_id:
        return hover
    return HoverState()


@dataclass(frozen=True)
class SortState:
    """Selected table column and direction; key None keeps batch order."""

    key: Optional[SortKey] = None
    ascending: bool = True


def next_sort(sort: SortState, key: SortKey) -> SortState:
    """Flip direction on the same column; reset to ascending on a new one."""
    if sort.key == key:
        return SortState(key=key, ascending=not sort.ascending)
    return SortState(key=key, ascending=True)


@dataclass(frozen=True)
class QueryState:
    """State of the most recent query submission.

    Attributes:
        sequence: Number of the latest submission (0 before the first).
        loading: True while the latest submission is outstanding.
        batch: Result batch of the latest successful submission.
        stats: Statistics computed from batch.
        error: User-visible error text of the latest failed submission.
    """

    sequence: int = 0
    loading: bool = False
    batch: Optional[ResultBatch] = None
    stats: Optional[PropagationStats] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class AppState:
    """Complete UI-local application state."""

    theme: Theme = Theme.LIGHT
    query: QueryState = field(default_factory=QueryState)
    sort: SortState = field(default_factory=SortState)
    hover: HoverState = field(default_factory=HoverState)


def submit_query(state: AppState) -> Tuple[AppState, int]:
    """Start a new submission, clearing the previous batch and error.

    Returns:
        tuple[AppState, int]: New state and the submission's sequence number,
        which must accompany its eventual response.
    """
    sequence = state.query.sequence + 1
    new_state = replace(
        state,
        query=QueryState(sequence=sequence, loading=True),
        hover=HoverState(),
    )
    return new_state, sequence


def _is_stale(state: AppState, sequence: int) -> bool:
    return sequence != state.query.sequence


def receive_batch(state: AppState, sequence: int, batch: ResultBatch) -> AppState:
    """Store a successful response and its freshly computed statistics.

    Responses for any submission other than the latest are discarded and
    the same state object is returned, so callers can detect and log them.
    """
    if _is_stale(state, sequence):
        return state

    return replace(
        state,
        query=QueryState(
            sequence=sequence,
            loading=False,
            batch=batch,
            stats=analyze_batch(batch),
        ),
        hover=HoverState(),
    )


def receive_failure(state: AppState, sequence: int, message: str) -> AppState:
    """Store a failed response; no batch or statistics survive it."""
    if _is_stale(state, sequence):
        return state

    return replace(
        state,
        query=QueryState(sequence=sequence, loading=False, error=message),
        hover=HoverState(),
    )


def select_sort(state: AppState, key: SortKey) -> AppState:
    return replace(state, sort=next_sort(state.sort, key))


def pointer_enter(state: AppState, element_id: str) -> AppState:
    return replace(state, hover=enter(state.hover, element_id))


def pointer_leave(state: AppState, element_id: str) -> AppState:
    return replace(state, hover=leave(state.hover, element_id))


def toggle_theme(state: AppState) -> AppState:
    theme = Theme.LIGHT if state.theme == Theme.DARK else Theme.DARK
    return replace(state, theme=theme)
