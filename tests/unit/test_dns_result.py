"""Unit tests for DNS result models."""

from datetime import UTC, datetime

from dnsprop.models.dns_result import (
    Answer,
    RecordType,
    ResultBatch,
    ServerResult,
    ServerStatus,
)


def test_server_status_enum_values():
    """Test ServerStatus has the wire values plus an explicit unknown."""
    assert [s.value for s in ServerStatus] == [
        "ok",
        "error",
        "timeout",
        "nxdomain",
        "servfail",
        "noanswer",
        "unknown",
    ]


def test_server_status_from_text_known():
    """Test known status text maps case-insensitively."""
    assert ServerStatus.from_text("ok") == ServerStatus.OK
    assert ServerStatus.from_text(" SERVFAIL ") == ServerStatus.SERVFAIL


def test_server_status_from_text_unknown():
    """Test unrecognized status text is tagged UNKNOWN, not defaulted."""
    assert ServerStatus.from_text("refused") == ServerStatus.UNKNOWN
    assert ServerStatus.from_text("") == ServerStatus.UNKNOWN
    assert ServerStatus.from_text(None) == ServerStatus.UNKNOWN


def test_server_result_is_successful_true():
    """Test is_successful() for OK status with answers."""
    result = ServerResult(
        server_id="1.1.1.1",
        status=ServerStatus.OK,
        observed_at=datetime.now(UTC),
        answers=[Answer("93.184.216.34", 300)],
    )
    assert result.is_successful() is True


def test_server_result_is_successful_false_without_answers():
    """Test OK status without answers is not successful."""
    result = ServerResult(
        server_id="1.1.1.1", status=ServerStatus.OK, observed_at=datetime.now(UTC)
    )
    assert result.is_successful() is False


def test_server_result_is_successful_false_for_failures():
    """Test non-OK statuses are never successful, even with answers."""
    for status in ServerStatus:
        if status == ServerStatus.OK:
            continue
        result = ServerResult(
            server_id="1.1.1.1",
            status=status,
            observed_at=datetime.now(UTC),
            answers=[Answer("93.184.216.34")],
        )
        assert result.is_successful() is False


def test_server_result_raw_status_defaults_to_status_value():
    """Test raw_status mirrors the enum value when not given."""
    result = ServerResult(
        server_id="1.1.1.1", status=ServerStatus.TIMEOUT, observed_at=datetime.now(UTC)
    )
    assert result.raw_status == "timeout"


def test_server_result_lists_become_tuples():
    """Test list inputs are frozen into tuples."""
    result = ServerResult(
        server_id="1.1.1.1",
        status=ServerStatus.OK,
        observed_at=datetime.now(UTC),
        answers=[Answer("a.example.")],
        authority=["example.com."],
    )
    assert isinstance(result.answers, tuple)
    assert isinstance(result.authority, tuple)
    hash(result)


def test_server_result_has_coordinates():
    """Test has_coordinates() requires both latitude and longitude."""
    now = datetime.now(UTC)
    placed = ServerResult("1.1.1.1", ServerStatus.OK, now, latitude=1.0, longitude=2.0)
    half = ServerResult("1.1.1.1", ServerStatus.OK, now, latitude=1.0)
    assert placed.has_coordinates() is True
    assert half.has_coordinates() is False


def test_server_result_to_json_omits_absent_fields():
    """Test serialization leaves out missing optional fields."""
    timestamp = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)
    result = ServerResult(
        server_id="8.8.8.8", status=ServerStatus.TIMEOUT, observed_at=timestamp
    )

    assert result.to_json() == {
        "server": "8.8.8.8",
        "status": "timeout",
        "when": "2025-06-01T12:00:00+00:00",
    }


def test_server_result_to_json_full():
    """Test serialization of a fully populated result."""
    timestamp = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)
    result = ServerResult(
        server_id="1.1.1.1",
        status=ServerStatus.OK,
        observed_at=timestamp,
        answers=[Answer("93.184.216.34", 300), Answer("93.184.216.35")],
        region="San Francisco, CA, Cloudflare",
        latitude=37.7749,
        longitude=-122.4194,
        rtt_ms=12.5,
        authenticated_data=True,
        authority=["example.com."],
    )

    data = result.to_json()

    assert data["answers"] == [
        {"value": "93.184.216.34", "ttl": 300},
        {"value": "93.184.216.35"},
    ]
    assert data["ad"] is True
    assert data["rtt_ms"] == 12.5
    assert data["authority"] == ["example.com."]
    assert data["region"] == "San Francisco, CA, Cloudflare"


def test_result_batch_to_json():
    """Test batch serialization keeps result order."""
    now = datetime.now(UTC)
    batch = ResultBatch(
        query_name="example.com",
        record_type=RecordType.MX,
        results=[
            ServerResult("9.9.9.9", ServerStatus.ERROR, now),
            ServerResult("1.1.1.1", ServerStatus.ERROR, now),
        ],
    )

    data = batch.to_json()

    assert data["name"] == "example.com"
    assert data["type"] == "MX"
    assert [r["server"] for r in data["results"]] == ["9.9.9.9", "1.1.1.1"]
    assert batch.server_ids() == ["9.9.9.9", "1.1.1.1"]
