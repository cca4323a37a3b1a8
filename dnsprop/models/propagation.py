"""Propagation statistics models.

PropagationStats is a pure derivation from one ResultBatch. It is built
once by the consistency analyzer and never mutated or merged.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from dnsprop.models.dns_result import ServerResult


@dataclass(frozen=True)
class EquivalenceClass:
    """Successful results sharing an identical sorted answer-value set.

    Attributes:
        key: Equivalence key (sorted answer values joined by a delimiter).
        values: Sorted answer values the key was built from.
        members: Results in order of first appearance in the batch.
    """

    key: str
    values: Tuple[str, ...]
    members: Tuple[ServerResult, ...]

    @property
    def size(self) -> int:
        return len(self.members)


@dataclass(frozen=True)
class PropagationStats:
    """Aggregate agreement statistics for one ResultBatch.

    Attributes:
        total_servers: Number of results in the batch.
        successful_servers: Results with status OK and at least one answer.
        classes: Equivalence classes in first-seen order.
        propagation_percentage: Share of the largest class, 0-100.
        all_agree: True iff one class exists and every server succeeded.

    Invariants:
        - classes partition exactly the successful results
        - sum(c.size for c in classes) == successful_servers
        - 0 <= propagation_percentage <= 100
    """

    total_servers: int
    successful_servers: int
    classes: Tuple[EquivalenceClass, ...]
    propagation_percentage: int
    all_agree: bool
    _positions: Mapping[str, int] = field(
        default_factory=dict, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "classes", tuple(self.classes))
        if not self._positions:
            object.__setattr__(
                self,
                "_positions",
                {cls.key: position for position, cls in enumerate(self.classes)},
            )

    @property
    def majority_class(self) -> Optional[EquivalenceClass]:
        """Largest class; ties resolve to the first-seen class.

        Returns:
            Optional[EquivalenceClass]: None when there are no classes.
        """
        majority: Optional[EquivalenceClass] = None
        for cls in self.classes:
            if majority is None or cls.size > majority.size:
                majority = cls
        return majority

    def class_position(self, key: str) -> Optional[int]:
        """Return the 0-based first-seen position of a class key."""
        return self._positions.get(key)

    def to_json(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict.

        Returns:
            dict: Summary plus per-class server lists in first-seen order.
        """
        majority = self.majority_class
        return {
            "total_servers": self.total_servers,
            "successful_servers": self.successful_servers,
            "propagation_percentage": self.propagation_percentage,
            "all_agree": self.all_agree,
            "majority_values": list(majority.values) if majority else [],
            "classes": [
                {
                    "values": list(cls.values),
                    "servers": [m.server_id for m in cls.members],
                }
                for cls in self.classes
            ],
        }
