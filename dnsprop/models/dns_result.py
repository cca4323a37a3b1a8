"""DNS query result models.

A ResultBatch is produced once per submitted query by the resolver
collaborator and is immutable thereafter.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ServerStatus(Enum):
    """Outcome classification of one resolver query."""

    OK = "ok"
    ERROR = "error"
    TIMEOUT = "timeout"
    NXDOMAIN = "nxdomain"
    SERVFAIL = "servfail"
    NOANSWER = "noanswer"
    UNKNOWN = "unknown"  # Any status text not listed above

    @classmethod
    def from_text(cls, text: Optional[str]) -> "ServerStatus":
        """Map raw status text to a ServerStatus.

        Args:
            text: Status string as reported by the resolver collaborator.

        Returns:
            ServerStatus: Matching member, or UNKNOWN for unrecognized text.
        """
        if not isinstance(text, str):
            return cls.UNKNOWN
        try:
            status = cls(text.strip().lower())
        except ValueError:
            return cls.UNKNOWN
        return status


class RecordType(Enum):
    """Supported DNS record types."""

    A = "A"
    AAAA = "AAAA"
    CNAME = "CNAME"
    TXT = "TXT"
    MX = "MX"
    NS = "NS"
    SOA = "SOA"


@dataclass(frozen=True)
class Answer:
    """A single answer value.

    Attributes:
        value: Presentation form of the record data.
        ttl: Time to live in seconds, if reported.
    """

    value: str
    ttl: Optional[int] = None


@dataclass(frozen=True)
class ServerResult:
    """Outcome of querying one resolver.

    Attributes:
        server_id: Resolver address (port stripped).
        status: Classified outcome.
        observed_at: When the query completed.
        answers: Answers in the order the resolver returned them.
        region: Human-readable location label.
        latitude: Approximate resolver latitude.
        longitude: Approximate resolver longitude.
        rtt_ms: Round-trip time in milliseconds.
        authenticated_data: AD flag from the response, if requested.
        authority: Owner names from the authority section.
        raw_status: Status text as received; equals status.value unless
            status is UNKNOWN.
    """

    server_id: str
    status: ServerStatus
    observed_at: datetime
    answers: Tuple[Answer, ...] = ()
    region: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    rtt_ms: Optional[float] = None
    authenticated_data: Optional[bool] = None
    authority: Tuple[str, ...] = ()
    raw_status: str = ""

    def __post_init__(self) -> None:
        # Normalize list inputs so instances stay hashable and immutable
        object.__setattr__(self, "answers", tuple(self.answers or ()))
        object.__setattr__(self, "authority", tuple(self.authority or ()))
        if not self.raw_status:
            object.__setattr__(self, "raw_status", self.status.value)

    def is_successful(self) -> bool:
        """Check if this result takes part in equivalence classes.

        Returns:
            bool: True if status is OK and at least one answer is present.
        """
        return self.status == ServerStatus.OK and len(self.answers) > 0

    def has_coordinates(self) -> bool:
        """Check if the result can be placed on a map.

        Returns:
            bool: True if both latitude and longitude are known.
        """
        return self.latitude is not None and self.longitude is not None

    def to_json(self) -> Dict[str, Any]:
        """Serialize to the resolver wire shape, omitting absent fields."""
        data: Dict[str, Any] = {"server": self.server_id}
        if self.region is not None:
            data["region"] = self.region
        if self.latitude is not None:
            data["latitude"] = self.latitude
        if self.longitude is not None:
            data["longitude"] = self.longitude
        data["status"] = self.raw_status
        if self.rtt_ms is not None:
            data["rtt_ms"] = self.rtt_ms
        if self.answers:
            data["answers"] = [
                {"value": a.value, "ttl": a.ttl}
                if a.ttl is not None
                else {"value": a.value}
                for a in self.answers
            ]
        if self.authority:
            data["authority"] = list(self.authority)
        if self.authenticated_data is not None:
            data["ad"] = self.authenticated_data
        data["when"] = self.observed_at.isoformat()
        return data


@dataclass(frozen=True)
class ResultBatch:
    """All per-resolver outcomes for one submitted query.

    The order of results is the arrival order reported by the resolver
    collaborator and seeds equivalence-class ordering.
    """

    query_name: str
    record_type: RecordType
    results: Tuple[ServerResult, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "results", tuple(self.results or ()))

    def to_json(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict.

        Returns:
            dict: Resolver response shape (name, type, results).
        """
        return {
            "name": self.query_name,
            "type": self.record_type.value,
            "results": [r.to_json() for r in self.results],
        }

    def server_ids(self) -> List[str]:
        """Return server ids in batch order."""
        return [r.server_id for r in self.results]
