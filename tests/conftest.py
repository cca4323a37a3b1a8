"""pytest fixtures for testing."""

from datetime import datetime, timezone

import pytest

from dnsprop.models.dns_result import (
    Answer,
    RecordType,
    ResultBatch,
    ServerResult,
    ServerStatus,
)


OBSERVED_AT = datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_result(
    server: str,
    status: ServerStatus = ServerStatus.OK,
    values: list[str] | None = None,
    rtt_ms: float | None = None,
    **kwargs,
) -> ServerResult:
    """Build a ServerResult with answers from plain values."""
    kwargs.setdefault(
        "answers", tuple(Answer(value=v, ttl=300) for v in values or [])
    )
    return ServerResult(
        server_id=server,
        status=status,
        observed_at=OBSERVED_AT,
        rtt_ms=rtt_ms,
        **kwargs,
    )


def make_batch(*results: ServerResult, record_type=RecordType.A) -> ResultBatch:
    return ResultBatch(
        query_name="example.com", record_type=record_type, results=results
    )


@pytest.fixture
def result_factory():
    """Factory for ServerResult objects."""
    return make_result


@pytest.fixture
def batch_factory():
    """Factory for ResultBatch objects."""
    return make_batch


@pytest.fixture
def split_batch():
    """Batch with two answer sets, one timeout and one NXDOMAIN."""
    return make_batch(
        make_result("1.1.1.1", values=["93.184.216.34"], rtt_ms=12.5),
        make_result("8.8.8.8", values=["203.0.113.7"], rtt_ms=20.1),
        make_result("9.9.9.9", values=["93.184.216.34"], rtt_ms=8.0),
        make_result("4.2.2.1", status=ServerStatus.TIMEOUT),
        make_result("77.88.8.8", status=ServerStatus.NXDOMAIN, rtt_ms=45.0),
    )


@pytest.fixture
def sample_payload():
    """Resolver service response body as sent over the wire."""
    return {
        "name": "example.com",
        "type": "A",
        "results": [
            {
                "server": "1.1.1.1",
                "region": "San Francisco, CA, Cloudflare",
                "latitude": 37.7749,
                "longitude": -122.4194,
                "status": "ok",
                "rtt_ms": 12.4,
                "answers": [{"value": "93.184.216.34", "ttl": 300}],
                "when": "2025-06-01T12:00:00Z",
            },
            {
                "server": "203.0.113.53",
                "region": "Unknown",
                "latitude": 0,
                "longitude": 0,
                "status": "refused",
                "rtt_ms": 30.2,
                "when": "2025-06-01T12:00:01Z",
            },
            {
                "server": "8.8.8.8",
                "latitude": 37.422,
                "longitude": -122.0841,
                "status": "timeout",
                "when": "2025-06-01T12:00:02Z",
            },
        ],
    }
