"""
Outbound URL guard for feed fetching.

Feed URLs come from callers, so before fetching we refuse anything that
would reach the local host, a private network, or a cloud metadata service.
"""

import ipaddress
import socket
from urllib.parse import urlparse

from .exceptions import BlockedURLError

ALLOWED_SCHEMES = {"http", "https"}

BLOCKED_HOSTNAMES = {
    "localhost",
    "localhost.localdomain",
    "ip6-localhost",
    "ip6-loopback",
    "metadata",
    "metadata.google.internal",
}

BLOCKED_SUFFIXES = (".local", ".internal", ".localhost")


def is_ip_blocked(ip_str: str) -> bool:
    """Check whether an address is loopback, private, link-local or reserved."""
    try:
        ip = ipaddress.ip_address(ip_str)
    except ValueError:
        return False
    return (
        ip.is_loopback
        or ip.is_private
        or ip.is_link_local
        or ip.is_reserved
        or ip.is_multicast
        or ip.is_unspecified
    )


def validate_feed_url(url: str, resolve_dns: bool = True) -> str:
    """
    Validate a feed URL before it is fetched.

    Args:
        url: The URL to validate
        resolve_dns: Also resolve the hostname and check every address

    Returns:
        The URL unchanged

    Raises:
        BlockedURLError: If the URL fails validation
    """
    try:
        parsed = urlparse(url)
        port = parsed.port
    except ValueError as e:
        raise BlockedURLError(url, f"invalid URL: {e}")

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise BlockedURLError(url, f"scheme '{parsed.scheme}' is not allowed")

    if not parsed.hostname:
        raise BlockedURLError(url, "URL must include a hostname")

    hostname = parsed.hostname.lower()
    try:
        hostname.encode("idna")
    except UnicodeError:
        raise BlockedURLError(url, f"host '{hostname}' is not a valid hostname")

    if hostname in BLOCKED_HOSTNAMES or hostname.endswith(BLOCKED_SUFFIXES):
        raise BlockedURLError(url, f"host '{hostname}' is not allowed")

    try:
        ipaddress.ip_address(hostname)
    except ValueError:
        pass
    else:
        if is_ip_blocked(hostname):
            raise BlockedURLError(url, f"address '{hostname}' is not allowed")
        return url

    if resolve_dns:
        try:
            addrinfo = socket.getaddrinfo(hostname, port or 80, proto=socket.IPPROTO_TCP)
        except (socket.gaierror, UnicodeError):
            # Unresolvable hosts fail at fetch time
            return url
        for _, _, _, _, sockaddr in addrinfo:
            if is_ip_blocked(sockaddr[0]):
                raise BlockedURLError(
                    url, f"host '{hostname}' resolves to blocked address '{sockaddr[0]}'"
                )

    return url
