"""Input validation for resolve requests."""

from dnsprop.models.dns_result import RecordType
from dnsprop.utils.fleet_catalog import canonical_server, split_server


MAX_NAME_LENGTH = 253
MAX_LABEL_LENGTH = 63
MAX_SERVERS = 50


def _is_alphanumeric(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


def validate_domain_name(name: str) -> str:
    """Validate and normalize a domain name.

    Internationalized names are converted to their ASCII (punycode) form.

    Args:
        name: User-provided domain name.

    Returns:
        str: Normalized ASCII name without trailing dot.

    Raises:
        ValueError: If the name is empty, too long or has an invalid label.

    Examples:
        >>> validate_domain_name(" Example.com. ")
        'Example.com'
        >>> validate_domain_name("bücher.de")
        'xn--bcher-kva.de'
    """
    name = (name or "").strip()
    if not name:
        raise ValueError("domain name cannot be empty")

    if name.endswith("."):
        name = name[:-1]

    try:
        ascii_name = name.encode("idna").decode("ascii")
    except UnicodeError as e:
        raise ValueError(f"invalid domain name: {e}") from e

    if len(ascii_name) > MAX_NAME_LENGTH:
        raise ValueError(
            f"domain name too long: {len(ascii_name)} characters (max {MAX_NAME_LENGTH})"
        )

    for label in ascii_name.split("."):
        if not label:
            raise ValueError("domain name cannot have empty labels")
        if len(label) > MAX_LABEL_LENGTH:
            raise ValueError(
                f"label '{label}' too long: {len(label)} characters (max {MAX_LABEL_LENGTH})"
            )
        if not _is_alphanumeric(label[0]):
            raise ValueError(f"label '{label}' must start with letter or digit")
        if not _is_alphanumeric(label[-1]):
            raise ValueError(f"label '{label}' must end with letter or digit")
        for ch in label:
            if not _is_alphanumeric(ch) and ch != "-":
                raise ValueError(f"label '{label}' contains invalid character '{ch}'")

    return ascii_name


def validate_record_type(value: str) -> RecordType:
    """Parse a record type case-insensitively.

    Raises:
        ValueError: If the type is empty or unsupported.
    """
    value = (value or "").strip().upper()
    if not value:
        raise ValueError("record type cannot be empty")
    try:
        return RecordType(value)
    except ValueError:
        supported = ", ".join(rt.value for rt in RecordType)
        raise ValueError(
            f"unsupported record type '{value}' (supported: {supported})"
        ) from None


def validate_servers(servers: list[str], max_count: int = MAX_SERVERS) -> list[str]:
    """Validate resolver addresses and drop blanks and duplicates.

    Args:
        servers: IPv4/IPv6 addresses with optional port.
        max_count: Maximum number of servers accepted.

    Returns:
        list[str]: Canonical addresses (see canonical_server), unique per
        endpoint, in input order.

    Raises:
        ValueError: If there are too many servers or one is not an IP address.
    """
    if len(servers) > max_count:
        raise ValueError(f"too many servers: {len(servers)} (max {max_count})")

    unique: list[str] = []
    for server in servers:
        server = server.strip()
        if not server:
            continue
        split_server(server)
        server = canonical_server(server)
        if server not in unique:
            unique.append(server)
    return unique
