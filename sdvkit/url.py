"""Resolve HTTP(S) URLs with literal IP hosts to socket addresses."""

from __future__ import annotations

import ipaddress
from typing import Union
from urllib.parse import urlsplit

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

_DEFAULT_PORTS = {"http": 80, "https": 443}


class UrlSocketAddrParseError(ValueError):
    """A URL could not be turned into a socket address."""


def parse_socket_address(url: str) -> tuple[IPAddress, int]:
    """Return ``(ip, port)`` for an ``http`` or ``https`` URL whose host is an IP.

    The port defaults to the scheme's port when the URL names none.
    """
    parts = urlsplit(url)
    default_port = _DEFAULT_PORTS.get(parts.scheme)
    if default_port is None:
        raise UrlSocketAddrParseError("invalid scheme")
    host = parts.hostname
    if not host:
        raise UrlSocketAddrParseError("missing host")
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        raise UrlSocketAddrParseError("invalid address") from None
    port = parts.port
    return address, default_port if port is None else port