"""Consistency analysis for resolver result batches.

Partitions successful results into answer-equivalence classes and
computes the propagation score.
"""

from typing import Dict, List, Sequence, Tuple

from dnsprop.models.dns_result import ResultBatch, ServerResult
from dnsprop.models.propagation import EquivalenceClass, PropagationStats


# Unit separator; never part of a DNS presentation value
KEY_DELIMITER = "\x1f"

# Key used if a successful result ever carries no answer values
EMPTY_KEY = "\x00empty"


def answer_values(result: ServerResult) -> Tuple[str, ...]:
    """Return the result's answer values sorted by codepoint."""
    return tuple(sorted(answer.value for answer in result.answers))


def equivalence_key(result: ServerResult) -> str:
    """Build the equivalence key for a result.

    Args:
        result: Resolver result (expected to be successful).

    Returns:
        str: Sorted answer values joined by KEY_DELIMITER, so answers
        ["2.2.2.2", "1.1.1.1"] and ["1.1.1.1", "2.2.2.2"] share a key.
    """
    values = answer_values(result)
    if not values:
        return EMPTY_KEY
    return KEY_DELIMITER.join(values)


def propagation_percentage(largest_class: int, total_servers: int) -> int:
    """Compute round(100 * largest_class / total_servers), halves rounded up.

    Args:
        largest_class: Size of the largest equivalence class.
        total_servers: Number of results in the batch.

    Returns:
        int: Percentage in [0, 100], or 0 when total_servers is 0.
    """
    if total_servers <= 0:
        return 0
    return (200 * largest_class + total_servers) // (2 * total_servers)


def group_results(results: Sequence[ServerResult]) -> List[EquivalenceClass]:
    """Group successful results by equivalence key in first-seen order.

    Args:
        results: Results in batch order.

    Returns:
        list[EquivalenceClass]: Classes ordered by first appearance.
    """
    order: List[str] = []
    index: Dict[str, int] = {}
    members: List[List[ServerResult]] = []
    values: List[Tuple[str, ...]] = []

    for result in results:
        if not result.is_successful():
            continue

        key = equivalence_key(result)
        position = index.get(key)
        if position is None:
            position = len(order)
            index[key] = position
            order.append(key)
            members.append([])
            values.append(answer_values(result))
        members[position].append(result)

    return [
        EquivalenceClass(key=key, values=values[i], members=tuple(members[i]))
        for i, key in enumerate(order)
    ]


def analyze_batch(batch: ResultBatch) -> PropagationStats:
    """Compute propagation statistics for one batch.

    Never raises: results with unknown status or no answers are simply
    left out of every class.

    Args:
        batch: Result batch from the resolver collaborator.

    Returns:
        PropagationStats: Fresh statistics for this batch only.
    """
    classes = group_results(batch.results)

    total_servers = len(batch.results)
    successful_servers = sum(cls.size for cls in classes)
    largest = max((cls.size for cls in classes), default=0)

    all_agree = len(classes) == 1 and successful_servers == total_servers

    return PropagationStats(
        total_servers=total_servers,
        successful_servers=successful_servers,
        classes=tuple(classes),
        propagation_percentage=propagation_percentage(largest, total_servers),
        all_agree=all_agree,
    )
