"""Default public resolver fleet with approximate locations."""

import ipaddress
from typing import Optional, Tuple


# address -> (region label, latitude, longitude)
RESOLVER_LOCATIONS: dict[str, Tuple[str, float, float]] = {
    # North America - US West
    "1.1.1.1": ("San Francisco, CA, Cloudflare", 37.7749, -122.4194),
    "1.0.0.1": ("San Francisco, CA, Cloudflare", 37.7849, -122.4094),
    "8.8.8.8": ("Mountain View, CA, Google", 37.4220, -122.0841),
    "8.8.4.4": ("Mountain View, CA, Google", 37.4320, -122.0741),
    "9.9.9.9": ("Berkeley, CA, Quad9", 37.8715, -122.2730),
    "149.112.112.112": ("Berkeley, CA, Quad9", 37.8815, -122.2630),
    "208.67.222.222": ("San Francisco, CA, OpenDNS", 37.7849, -122.4394),
    "208.67.220.220": ("San Francisco, CA, OpenDNS", 37.7949, -122.4294),
    # North America - US East and Central
    "156.154.70.1": ("Ashburn, VA, Neustar", 39.0438, -77.4874),
    "156.154.71.1": ("Ashburn, VA, Neustar", 39.0538, -77.4774),
    "4.2.2.1": ("Broomfield, CO, Level3", 39.9142, -105.0519),
    "4.2.2.2": ("Broomfield, CO, Level3", 39.9242, -105.0419),
    # North America - Canada
    "76.76.2.0": ("Toronto, ON, ControlD", 43.6532, -79.3832),
    "76.76.10.0": ("Toronto, ON, ControlD", 43.6632, -79.3732),
    # Europe
    "94.140.14.14": ("Limassol, Cyprus, AdGuard", 34.7070, 33.0220),
    "94.140.15.15": ("Limassol, Cyprus, AdGuard", 34.7170, 33.0320),
    "185.228.168.9": ("Amsterdam, Netherlands, CleanBrowsing", 52.3676, 4.9041),
    "185.228.169.9": ("Amsterdam, Netherlands, CleanBrowsing", 52.3776, 4.9141),
    "77.88.8.8": ("Moscow, Russia, Yandex", 55.7558, 37.6173),
    "77.88.8.1": ("Moscow, Russia, Yandex", 55.7658, 37.6273),
    # Asia - China
    "114.114.114.114": ("Nanjing, Jiangsu, 114DNS", 32.0603, 118.7969),
    "114.114.115.115": ("Nanjing, Jiangsu, 114DNS", 32.0703, 118.8069),
    "223.5.5.5": ("Hangzhou, Zhejiang, Alibaba DNS", 30.2741, 120.1551),
    "223.6.6.6": ("Hangzhou, Zhejiang, Alibaba DNS", 30.2841, 120.1651),
    "119.29.29.29": ("Shenzhen, Guangdong, DNSPod", 22.5431, 114.0579),
    # Asia - Taiwan
    "168.95.1.1": ("Taipei, Taiwan, HiNet", 25.0330, 121.5654),
    "168.95.192.1": ("Taipei, Taiwan, HiNet", 25.0430, 121.5754),
    # Asia-Pacific
    "1.1.1.2": ("Sydney, NSW, Cloudflare", -33.8688, 151.2093),
    "1.0.0.2": ("Sydney, NSW, Cloudflare", -33.8588, 151.2193),
    # South America
    "200.221.11.100": ("Rio de Janeiro, Brazil, NET", -22.9068, -43.1729),
}

DEFAULT_RESOLVERS: list[str] = list(RESOLVER_LOCATIONS)

UNKNOWN_REGION = "Unknown"

DEFAULT_PORT = 53


def split_server(server: str) -> Tuple[str, int]:
    """Split a server address into host and port.

    Accepts "1.1.1.1", "1.1.1.1:5353", "2606:4700::1111" and
    "[2606:4700::1111]:53".

    Args:
        server: Server address with optional port.

    Returns:
        tuple[str, int]: Host and port (DEFAULT_PORT when absent).

    Raises:
        ValueError: If the host is not an IP address or the port is invalid.
    """
    server = server.strip()
    host, port = server, DEFAULT_PORT

    if server.startswith("["):
        host, sep, rest = server[1:].partition("]")
        if not sep:
            raise ValueError(f"Invalid server address '{server}'")
        if rest:
            if not rest.startswith(":"):
                raise ValueError(f"Invalid server address '{server}'")
            port = _parse_port(rest[1:], server)
    elif server.count(":") == 1:
        host, port_text = server.split(":")
        port = _parse_port(port_text, server)

    try:
        ipaddress.ip_address(host)
    except ValueError as e:
        raise ValueError(
            f"Invalid server address '{server}': must be a valid IPv4 or IPv6 address"
        ) from e
    return host, port


def _parse_port(text: str, server: str) -> int:
    if not text.isdigit() or not 0 < int(text) < 65536:
        raise ValueError(f"Invalid port in server address '{server}'")
    return int(text)


def normalize_server(server: str) -> str:
    """Return the host part of a server address, or the input if unparseable."""
    try:
        host, _ = split_server(server)
    except ValueError:
        return server.strip()
    return host


def canonical_server(server: str) -> str:
    """Return the canonical address used as a server's id.

    The default port is dropped and other ports are kept, so
    "1.1.1.1:53" becomes "1.1.1.1" while "1.1.1.1:5353" and
    "[2606:4700::1111]:5353" are unchanged. Unparseable input is only
    trimmed.
    """
    try:
        host, port = split_server(server)
    except ValueError:
        return server.strip()
    host = str(ipaddress.ip_address(host))
    if port == DEFAULT_PORT:
        return host
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def region_for(server: str) -> str:
    location = RESOLVER_LOCATIONS.get(normalize_server(server))
    return location[0] if location else UNKNOWN_REGION


def coordinates_for(server: str) -> Tuple[Optional[float], Optional[float]]:
    """Return (latitude, longitude), or (None, None) for unknown servers."""
    location = RESOLVER_LOCATIONS.get(normalize_server(server))
    if location is None:
        return None, None
    return location[1], location[2]
