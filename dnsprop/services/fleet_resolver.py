"""Direct querying of a resolver fleet.

Each server receives exactly one query (no retries). Results are
collected in completion order, which becomes the batch order.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

import dns.exception
import dns.flags
import dns.message
import dns.rcode
import dns.rdatatype
import dns.resolver

from dnsprop.models.dns_result import (
    Answer,
    RecordType,
    ResultBatch,
    ServerResult,
    ServerStatus,
)
from dnsprop.services.logger import log_resolver_failure
from dnsprop.utils.fleet_catalog import (
    canonical_server,
    coordinates_for,
    region_for,
    split_server,
)


logger = logging.getLogger(__name__)

EDNS_PAYLOAD_SIZE = 1232


_VALUE_EXTRACTORS: Dict[RecordType, Callable[[object], str]] = {
    RecordType.A: lambda rdata: rdata.address,
    RecordType.AAAA: lambda rdata: rdata.address,
    RecordType.CNAME: lambda rdata: rdata.target.to_text(),
    RecordType.NS: lambda rdata: rdata.target.to_text(),
    RecordType.MX: lambda rdata: rdata.exchange.to_text(),
    RecordType.TXT: lambda rdata: b"".join(rdata.strings).decode(
        "utf-8", errors="replace"
    ),
    RecordType.SOA: lambda rdata: f"{rdata.mname.to_text()} {rdata.rname.to_text()}",
}


def extract_answers(response: Optional[dns.message.Message]) -> List[Answer]:
    """Convert the answer section of a response into Answer values.

    Every supported rrset is kept, so a CNAME chain contributes its
    targets alongside the final records. Other types (e.g. RRSIG) are
    skipped.

    Args:
        response: DNS response message (may be None).

    Returns:
        list[Answer]: One Answer per rdata, each with its rrset's TTL.
    """
    if response is None:
        return []

    answers = []
    for rrset in response.answer:
        try:
            rrset_type = RecordType(dns.rdatatype.to_text(rrset.rdtype))
        except ValueError:
            continue
        extract = _VALUE_EXTRACTORS[rrset_type]
        answers.extend(Answer(value=extract(rdata), ttl=rrset.ttl) for rdata in rrset)
    return answers


def authority_names(response: Optional[dns.message.Message]) -> List[str]:
    if response is None:
        return []
    return [rrset.name.to_text() for rrset in response.authority]


def failure_response(exception: Exception) -> Optional[dns.message.Message]:
    """Return the response message carried by a query exception, if any.

    Args:
        exception: Exception raised by the resolver.

    Returns:
        Optional[dns.message.Message]: The NXDOMAIN response, or the last
        error response recorded by NoNameservers; None otherwise.
    """
    if not isinstance(exception, dns.exception.DNSException):
        return None

    if isinstance(exception, dns.resolver.NXDOMAIN):
        responses = exception.kwargs.get("responses") or {}
        return next(iter(responses.values()), None)

    if isinstance(exception, dns.resolver.NoNameservers):
        # Entries are (server, tcp, port, error or rcode text, response)
        for entry in reversed(exception.kwargs.get("errors") or []):
            if isinstance(entry[-1], dns.message.Message):
                return entry[-1]
    return None


def classify_failure(
    exception: Exception, response: Optional[dns.message.Message] = None
) -> str:
    """Map a query exception to a status string.

    Args:
        exception: Exception raised by the resolver.
        response: Response carried by the exception (see failure_response).

    Returns:
        str: nxdomain, yxdomain, timeout, the lowercase rcode of a failed
        response (servfail, refused, notimp, ...) or error.
    """
    if isinstance(exception, dns.resolver.NXDOMAIN):
        return ServerStatus.NXDOMAIN.value
    elif isinstance(exception, dns.resolver.YXDOMAIN):
        return dns.rcode.to_text(dns.rcode.YXDOMAIN).lower()
    elif isinstance(exception, dns.exception.Timeout):
        return ServerStatus.TIMEOUT.value
    elif isinstance(exception, dns.resolver.NoNameservers) and response is not None:
        return dns.rcode.to_text(response.rcode()).lower()
    else:
        return ServerStatus.ERROR.value


def build_resolver(
    host: str, port: int, timeout: float, dnssec: bool
) -> dns.resolver.Resolver:
    """Create a resolver bound to a single nameserver."""
    resolver = dns.resolver.Resolver(configure=False)
    resolver.nameservers = [host]
    resolver.port = port
    resolver.timeout = timeout
    resolver.lifetime = timeout
    resolver.use_edns(0, dns.flags.DO if dnssec else 0, EDNS_PAYLOAD_SIZE)
    return resolver


def query_server(
    server: str,
    name: str,
    record_type: RecordType,
    timeout: float = 2.0,
    dnssec: bool = False,
) -> ServerResult:
    """Query one resolver once.

    Args:
        server: Resolver address with optional port.
        name: Domain name.
        record_type: Record type to query.
        timeout: Query timeout in seconds.
        dnssec: Set the DO bit and report the AD flag.

    Returns:
        ServerResult: Classified outcome; never raises for DNS failures.
    """
    host, port = split_server(server)
    server_id = canonical_server(server)
    latitude, longitude = coordinates_for(host)
    fields = {
        "server_id": server_id,
        "region": region_for(host),
        "latitude": latitude,
        "longitude": longitude,
    }

    resolver = build_resolver(host, port, timeout, dnssec)
    started = time.perf_counter()

    try:
        answer = resolver.resolve(
            name, dns.rdatatype.from_text(record_type.value), raise_on_no_answer=False
        )
    except (dns.exception.DNSException, OSError) as e:
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        response = failure_response(e)
        status_text = classify_failure(e, response)
        log_resolver_failure(server_id, status_text, type(e).__name__)

        # Timeouts and transport errors never produced a response
        answered = response is not None or isinstance(
            e, (dns.resolver.NXDOMAIN, dns.resolver.YXDOMAIN)
        )
        authority = ()
        if status_text == ServerStatus.NXDOMAIN.value:
            authority = tuple(authority_names(response))
        return ServerResult(
            status=ServerStatus.from_text(status_text),
            raw_status=status_text,
            observed_at=datetime.now(timezone.utc),
            rtt_ms=elapsed_ms if answered else None,
            authority=authority,
            **fields,
        )

    rtt_ms = (time.perf_counter() - started) * 1000.0
    answers = extract_answers(answer.response)
    status = ServerStatus.OK if answers else ServerStatus.NOANSWER

    return ServerResult(
        status=status,
        observed_at=datetime.now(timezone.utc),
        answers=tuple(answers),
        rtt_ms=rtt_ms,
        authenticated_data=(
            bool(answer.response.flags & dns.flags.AD) if dnssec else None
        ),
        authority=tuple(authority_names(answer.response)),
        **fields,
    )


def query_fleet(
    name: str,
    record_type: RecordType,
    servers: List[str],
    timeout: float = 2.0,
    concurrency: int = 20,
    dnssec: bool = False,
) -> ResultBatch:
    """Query every resolver concurrently and collect one batch.

    Uses ThreadPoolExecutor with at most `concurrency` queries in flight.

    Args:
        name: Domain name.
        record_type: Record type to query.
        servers: Resolver addresses (validated, deduplicated).
        timeout: Per-query timeout in seconds.
        concurrency: Max concurrent queries.
        dnssec: Set the DO bit and report the AD flag.

    Returns:
        ResultBatch: Results in completion order.
    """
    results: List[ServerResult] = []
    if not servers:
        return ResultBatch(query_name=name, record_type=record_type, results=())

    workers = max(1, min(concurrency, len(servers)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {
            executor.submit(query_server, server, name, record_type, timeout, dnssec): server
            for server in servers
        }

        for future in as_completed(futures):
            try:
                results.append(future.result())
            except Exception as e:
                # Unexpected error - report the server as failed
                server = futures[future]
                logger.error(f"Unexpected error querying {server} for {name}: {e}")
                latitude, longitude = coordinates_for(server)
                results.append(
                    ServerResult(
                        server_id=canonical_server(server),
                        status=ServerStatus.ERROR,
                        observed_at=datetime.now(timezone.utc),
                        region=region_for(server),
                        latitude=latitude,
                        longitude=longitude,
                    )
                )

    return ResultBatch(query_name=name, record_type=record_type, results=tuple(results))
