"""Source URL validation that keeps the fetcher away from internal hosts.

A registered source is later fetched server-side, so its URL must not
point at the loopback interface, link-local addresses, RFC 1918 ranges,
or mDNS ``.local`` names.  The check is purely syntactic on the hostname:
no DNS lookups are performed.  Numeric hosts are first read the way a
browser reads them (``127.1``, ``2130706433``, ``0x7f.0.0.1``), because
the resolver the fetcher uses accepts the same shorthand forms.
"""

from __future__ import annotations

import ipaddress
import re
from urllib.parse import urlsplit

from newsfeed.utils.errors import InvalidSourceURLError

_ALLOWED_SCHEMES = ("http", "https")

_BLOCKED_HOSTNAMES = ("localhost", "localhost.localdomain")

_BLOCKED_NETWORKS = [
    ipaddress.ip_network("127.0.0.0/8"),
    ipaddress.ip_network("0.0.0.0/8"),
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("169.254.0.0/16"),
    ipaddress.ip_network("::1/128"),
    ipaddress.ip_network("fe80::/10"),
]


_HEX_PART = re.compile(r"0[xX][0-9a-fA-F]*")
_OCTAL_PART = re.compile(r"0[0-7]+")
_DECIMAL_PART = re.compile(r"[0-9]+")


def _ipv4_part(part: str) -> int:
    if _HEX_PART.fullmatch(part):
        return int(part[2:] or "0", 16)
    if _OCTAL_PART.fullmatch(part):
        return int(part, 8)
    if _DECIMAL_PART.fullmatch(part) and not (len(part) > 1 and part.startswith("0")):
        return int(part)
    raise ValueError(f"invalid IPv4 part {part!r}")


def parse_ipv4_host(host: str) -> ipaddress.IPv4Address | None:
    """Read *host* as a browser URL parser reads numeric IPv4 hosts.

    Accepts one to four dot-separated parts in decimal, ``0x`` hex, or
    leading-zero octal, the last part filling the remaining bytes, so
    ``127.1``, ``2130706433`` and ``0x7f.0.0.1`` all give ``127.0.0.1``.
    Returns None when the last part is not numeric (an ordinary domain).

    Raises:
        ValueError: the host ends in a number but is not a valid address.
    """
    parts = host.split(".")
    if not (_DECIMAL_PART.fullmatch(parts[-1]) or _HEX_PART.fullmatch(parts[-1])):
        return None
    if len(parts) > 4:
        raise ValueError(f"too many IPv4 parts in {host!r}")

    numbers = [_ipv4_part(part) for part in parts]
    if any(n > 255 for n in numbers[:-1]) or numbers[-1] >= 256 ** (5 - len(numbers)):
        raise ValueError(f"IPv4 part out of range in {host!r}")

    value = numbers[-1]
    for index, number in enumerate(numbers[:-1]):
        value += number << (8 * (3 - index))
    return ipaddress.IPv4Address(value)


def is_private_hostname(hostname: str) -> bool:
    """Return True if *hostname* names a local, loopback, or private host.

    Raises:
        ValueError: *hostname* is a malformed IP literal (a numeric name that
            is not valid IPv4, or a bracketed host that is not valid IPv6).
    """
    host = hostname.strip().lower().strip("[]").rstrip(".")
    if host in _BLOCKED_HOSTNAMES or host.endswith(".local"):
        return True

    address: ipaddress.IPv4Address | ipaddress.IPv6Address | None
    if ":" in host:
        address = ipaddress.IPv6Address(host)
    else:
        address = parse_ipv4_host(host)
        if address is None:
            return False

    # IPv4-mapped IPv6 (::ffff:10.0.0.1) is judged by its IPv4 part.
    if isinstance(address, ipaddress.IPv6Address) and address.ipv4_mapped:
        address = address.ipv4_mapped

    return any(
        address.version == network.version and address in network
        for network in _BLOCKED_NETWORKS
    )


def validate_source_url(url: str) -> str:
    """Validate a source URL and return it unchanged.

    Raises:
        InvalidSourceURLError: with the client-facing message for the first
            rule the URL breaks.
    """
    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
        # Accessing .port validates the port component.
        parts.port
    except ValueError as exc:
        raise InvalidSourceURLError("Invalid URL format") from exc

    if not parts.scheme:
        raise InvalidSourceURLError("Invalid URL format")

    if parts.scheme.lower() not in _ALLOWED_SCHEMES:
        raise InvalidSourceURLError("URL must use HTTP or HTTPS")

    if not parts.netloc or not hostname:
        raise InvalidSourceURLError("Invalid URL format")

    try:
        private = is_private_hostname(hostname)
    except ValueError as exc:
        raise InvalidSourceURLError("Invalid URL format") from exc
    if private:
        raise InvalidSourceURLError("Private/local URLs are not allowed")

    return url
