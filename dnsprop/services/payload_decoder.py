"""Decoding of resolver collaborator payloads into typed models.

Payloads are validated against RESOLVE_RESPONSE_SCHEMA before any field
is read. Unknown status strings are tagged ServerStatus.UNKNOWN.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from jsonschema import Draft7Validator, ValidationError

from dnsprop.models.dns_result import (
    Answer,
    RecordType,
    ResultBatch,
    ServerResult,
    ServerStatus,
)


_OPTIONAL_NUMBER = {"type": ["number", "null"]}

RESOLVE_RESPONSE_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["name", "type", "results"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "type": {"enum": [rt.value for rt in RecordType]},
        "results": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["server", "status", "when"],
                "properties": {
                    "server": {"type": "string", "minLength": 1},
                    "region": {"type": ["string", "null"]},
                    "latitude": _OPTIONAL_NUMBER,
                    "longitude": _OPTIONAL_NUMBER,
                    "status": {"type": "string"},
                    "rtt_ms": {"type": ["number", "null"], "minimum": 0},
                    "answers": {
                        "type": ["array", "null"],
                        "items": {
                            "type": "object",
                            "required": ["value"],
                            "properties": {
                                "value": {"type": "string"},
                                "ttl": {"type": ["integer", "null"], "minimum": 0},
                            },
                        },
                    },
                    "authority": {
                        "type": ["array", "null"],
                        "items": {"type": "string"},
                    },
                    "ad": {"type": ["boolean", "null"]},
                    "when": {"type": "string", "minLength": 1},
                },
            },
        },
    },
}

_validator = Draft7Validator(RESOLVE_RESPONSE_SCHEMA)


class PayloadValidationError(ValueError):
    """Raised when a resolver payload does not match the expected shape."""


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 timestamp; naive values are taken as UTC.

    Raises:
        PayloadValidationError: If text is not a valid timestamp.
    """
    try:
        value = datetime.fromisoformat(text.strip())
    except ValueError as e:
        raise PayloadValidationError(f"Invalid timestamp: {text!r}") from e
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _coordinates(item: Dict[str, Any]) -> tuple[Optional[float], Optional[float]]:
    latitude = item.get("latitude")
    longitude = item.get("longitude")
    if latitude is None or longitude is None:
        return None, None
    # The resolver service reports 0,0 for servers it cannot place
    if latitude == 0 and longitude == 0:
        return None, None
    return float(latitude), float(longitude)


def decode_server_result(item: Dict[str, Any]) -> ServerResult:
    """Build a ServerResult from one schema-valid result object."""
    raw_status = item["status"]
    latitude, longitude = _coordinates(item)
    rtt_ms = item.get("rtt_ms")

    return ServerResult(
        server_id=item["server"],
        status=ServerStatus.from_text(raw_status),
        observed_at=parse_timestamp(item["when"]),
        answers=tuple(
            Answer(value=a["value"], ttl=a.get("ttl"))
            for a in item.get("answers") or []
        ),
        region=item.get("region") or None,
        latitude=latitude,
        longitude=longitude,
        rtt_ms=float(rtt_ms) if rtt_ms is not None else None,
        authenticated_data=item.get("ad"),
        authority=tuple(item.get("authority") or ()),
        raw_status=raw_status.strip().lower() or ServerStatus.UNKNOWN.value,
    )


def decode_resolve_response(payload: Any) -> ResultBatch:
    """Validate and decode a resolver response body.

    Args:
        payload: Parsed JSON body.

    Returns:
        ResultBatch: Typed batch with results in payload order.

    Raises:
        PayloadValidationError: If the payload fails schema validation or
            carries an unparseable timestamp.
    """
    try:
        _validator.validate(payload)
    except ValidationError as e:
        location = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise PayloadValidationError(f"{location}: {e.message}") from e

    return ResultBatch(
        query_name=payload["name"],
        record_type=RecordType(payload["type"]),
        results=tuple(decode_server_result(item) for item in payload["results"]),
    )
