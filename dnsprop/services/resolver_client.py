"""HTTP client for the resolver service."""

import logging
from typing import Any, Dict, List, Optional

import requests

from dnsprop.models.dns_result import RecordType, ResultBatch
from dnsprop.services.payload_decoder import (
    PayloadValidationError,
    decode_resolve_response,
)


logger = logging.getLogger(__name__)

RESOLVE_PATH = "/api/resolve"


class ResolverRequestError(Exception):
    """Raised when a resolve request fails; the message is user-visible."""


class ResolverClient:
    """Submits one resolve request per query to the resolver service.

    Example:
        >>> client = ResolverClient("https://dnsprop.example.net", timeout=5)
        >>> batch = client.resolve("example.com", RecordType.A)
        >>> len(batch.results)
        30
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """Initialize client.

        Args:
            base_url: Service root URL, e.g. "https://dnsprop.example.net".
            timeout: HTTP timeout in seconds.
            session: Optional requests session (shared connection pool).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def build_request(
        self,
        name: str,
        record_type: RecordType,
        servers: Optional[List[str]] = None,
        dnssec: bool = False,
    ) -> Dict[str, Any]:
        """Build the JSON request body; optional fields are omitted when unset."""
        body: Dict[str, Any] = {"name": name, "type": record_type.value}
        if servers:
            body["servers"] = list(servers)
        if dnssec:
            body["dnssec"] = True
        return body

    def resolve(
        self,
        name: str,
        record_type: RecordType,
        servers: Optional[List[str]] = None,
        dnssec: bool = False,
    ) -> ResultBatch:
        """Query every resolver for one name and record type.

        Args:
            name: Domain name.
            record_type: Record type to query.
            servers: Resolver addresses; the service default fleet if None.
            dnssec: Request DNSSEC validation data (AD flag).

        Returns:
            ResultBatch: Decoded, validated results.

        Raises:
            ResolverRequestError: On transport failure, a non-success HTTP
                status (message carries the raw response body) or an
                invalid payload.
        """
        url = f"{self.base_url}{RESOLVE_PATH}"
        body = self.build_request(name, record_type, servers, dnssec)

        try:
            response = self.session.post(url, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Resolve request to {url} failed: {e}")
            raise ResolverRequestError(f"Request failed: {e}") from e

        if not response.ok:
            logger.error(
                f"Resolve request to {url} returned HTTP {response.status_code}"
            )
            raise ResolverRequestError(
                f"HTTP {response.status_code} {response.text.strip()}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise ResolverRequestError("Resolver returned invalid JSON") from e

        try:
            return decode_resolve_response(payload)
        except PayloadValidationError as e:
            logger.error(f"Resolver payload rejected: {e}")
            raise ResolverRequestError(f"Invalid resolver response: {e}") from e
