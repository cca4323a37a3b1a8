"""Unit tests for resolver payload decoding."""

from datetime import datetime, timezone

import pytest

from dnsprop.models.dns_result import RecordType, ServerStatus
from dnsprop.services.payload_decoder import (
    PayloadValidationError,
    decode_resolve_response,
    parse_timestamp,
)


def test_decode_valid_payload(sample_payload):
    """Test a well-formed payload decodes in order."""
    batch = decode_resolve_response(sample_payload)

    assert batch.query_name == "example.com"
    assert batch.record_type == RecordType.A
    assert batch.server_ids() == ["1.1.1.1", "203.0.113.53", "8.8.8.8"]

    first = batch.results[0]
    assert first.status == ServerStatus.OK
    assert first.answers[0].value == "93.184.216.34"
    assert first.answers[0].ttl == 300
    assert first.rtt_ms == 12.4
    assert first.observed_at == datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def test_unknown_status_is_tagged(sample_payload):
    """Test unrecognized status text becomes UNKNOWN but keeps its text."""
    result = decode_resolve_response(sample_payload).results[1]

    assert result.status == ServerStatus.UNKNOWN
    assert result.raw_status == "refused"


def test_zero_coordinates_are_absent(sample_payload):
    """Test 0,0 coordinates for unplaceable servers decode as missing."""
    result = decode_resolve_response(sample_payload).results[1]

    assert result.latitude is None
    assert result.longitude is None


def test_missing_optional_fields(sample_payload):
    """Test missing region, RTT and answers decode as absent."""
    result = decode_resolve_response(sample_payload).results[2]

    assert result.region is None
    assert result.rtt_ms is None
    assert result.answers == ()
    assert result.authenticated_data is None
    assert result.has_coordinates() is True


def test_null_optional_fields(sample_payload):
    """Test explicit nulls are accepted for optional fields."""
    sample_payload["results"][0]["answers"] = None
    sample_payload["results"][0]["ad"] = None

    result = decode_resolve_response(sample_payload).results[0]

    assert result.answers == ()
    assert result.is_successful() is False


def test_empty_results(sample_payload):
    sample_payload["results"] = []

    assert decode_resolve_response(sample_payload).results == ()


@pytest.mark.parametrize(
    "mutate",
    [
        lambda p: p.pop("name"),
        lambda p: p.update(type="PTR"),
        lambda p: p.update(results="nope"),
        lambda p: p["results"][0].pop("server"),
        lambda p: p["results"][0].update(rtt_ms=-1),
        lambda p: p["results"][0]["answers"][0].update(ttl="300"),
        lambda p: p["results"][0].update(status=7),
    ],
)
def test_invalid_payloads_rejected(sample_payload, mutate):
    """Test schema violations raise PayloadValidationError."""
    mutate(sample_payload)

    with pytest.raises(PayloadValidationError):
        decode_resolve_response(sample_payload)


def test_non_object_payload_rejected():
    with pytest.raises(PayloadValidationError, match="<root>"):
        decode_resolve_response(["not", "an", "object"])


def test_invalid_timestamp_rejected(sample_payload):
    sample_payload["results"][0]["when"] = "yesterday"

    with pytest.raises(PayloadValidationError, match="Invalid timestamp"):
        decode_resolve_response(sample_payload)


def test_parse_timestamp_naive_is_utc():
    assert parse_timestamp("2025-06-01T12:00:00").tzinfo == timezone.utc
