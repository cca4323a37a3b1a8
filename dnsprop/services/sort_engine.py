"""Column sorting for result tables."""

from enum import Enum
from typing import Any, Callable, Dict, List, Sequence

from dnsprop.models.dns_result import ServerResult


class SortKey(Enum):
    """Sortable result columns."""

    SERVER = "server"
    STATUS = "status"
    RTT = "rtt"


def _rtt_or_zero(result: ServerResult) -> float:
    # Missing RTT (typically a failed query) sorts as fastest
    return result.rtt_ms if result.rtt_ms is not None else 0.0


_KEY_FUNCTIONS: Dict[SortKey, Callable[[ServerResult], Any]] = {
    SortKey.SERVER: lambda r: r.server_id,
    SortKey.STATUS: lambda r: r.raw_status,
    SortKey.RTT: _rtt_or_zero,
}


def sort_results(
    results: Sequence[ServerResult], key: SortKey, ascending: bool = True
) -> List[ServerResult]:
    """Return a sorted copy of results.

    The sort is stable in both directions: results comparing equal keep
    their input order. String columns compare by codepoint.

    Args:
        results: Results to sort; left unmodified.
        key: Column to sort by.
        ascending: Sort direction.

    Returns:
        list[ServerResult]: New list in the requested order.
    """
    return sorted(results, key=_KEY_FUNCTIONS[key], reverse=not ascending)
