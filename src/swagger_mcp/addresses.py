"""
Resolution of listen addresses and dialable URLs for the network transports.

SSE advertises a URL for clients to dial that can differ from the address the
socket binds to, so its resolver accepts either or both. Streamable HTTP only
takes a listen address and derives its URL from it.
"""

import logging
from typing import Tuple
from urllib.parse import urlsplit

from .exceptions import (
    InvalidAddressFormatError,
    MissingAddressError,
    UnsupportedSchemeError,
)

logger = logging.getLogger(__name__)

DEFAULT_DIALABLE_URL = "http://localhost:8080"
DEFAULT_LISTEN_ADDRESS = "localhost:8080"

DEFAULT_PORTS = {"http": 80, "https": 443}


def _check_listen_address(address: str, flag: str) -> None:
    # ":PORT" or "HOST:PORT"
    if ":" not in address:
        raise InvalidAddressFormatError(
            f"{flag} must be in :PORT or HOST:PORT format, got {address!r}"
        )


def _listen_address_from_url(url: str) -> str:
    """Derive ``host:port`` from a dialable URL, inferring the port from the scheme."""
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise InvalidAddressFormatError(f"Invalid sseUrl {url!r}: {e}")
    try:
        port = parts.port
    except ValueError as e:
        raise InvalidAddressFormatError(f"Invalid port in sseUrl {url!r}: {e}")
    # The scheme only matters when it has to supply the port
    if port is None:
        scheme = parts.scheme.lower()
        if scheme not in DEFAULT_PORTS:
            raise UnsupportedSchemeError(
                f"Unknown scheme for sseUrl: {parts.scheme or '(none)'!r}; "
                "use http or https, or give an explicit port"
            )
        port = DEFAULT_PORTS[scheme]
    host = parts.hostname
    if not host:
        raise MissingAddressError(f"sseUrl {url!r} does not name a host")
    if ":" in host:
        host = f"[{host}]"
    return f"{host}:{port}"


def resolve_sse_addresses(sse_url: str = "", sse_addr: str = "") -> Tuple[str, str]:
    """Resolve the SSE transport's dialable URL and listen address.

    Args:
        sse_url: URL clients use to reach the SSE server, may be empty
        sse_addr: Address the SSE server binds to, may be empty. Takes
            precedence over ``sse_url`` when both are given.

    Returns:
        Tuple of (dialable URL, listen address)

    Raises:
        InvalidAddressFormatError: If ``sse_addr`` has no port separator
        UnsupportedSchemeError: If ``sse_url`` has no port and is not http or https
        MissingAddressError: If ``sse_url`` has no host
    """
    if not sse_addr and not sse_url:
        return DEFAULT_DIALABLE_URL, DEFAULT_LISTEN_ADDRESS

    if sse_addr:
        if sse_url:
            logger.debug("sseAddr %s takes precedence over sseUrl %s", sse_addr, sse_url)
        if sse_addr.startswith(":"):
            return f"http://localhost{sse_addr}", sse_addr
        _check_listen_address(sse_addr, "sseAddr")
        return f"http://{sse_addr}", sse_addr

    return sse_url, _listen_address_from_url(sse_url)


def resolve_http_address(http_addr: str = "") -> Tuple[str, str]:
    """Resolve the streamable HTTP transport's dialable URL and listen address.

    The listen address is returned as given; ``:PORT`` binds on all
    interfaces while the dialable URL points at localhost.

    Raises:
        InvalidAddressFormatError: If ``http_addr`` has no port separator
    """
    if not http_addr:
        return DEFAULT_DIALABLE_URL, DEFAULT_LISTEN_ADDRESS
    if http_addr.startswith(":"):
        return f"http://localhost{http_addr}", http_addr
    _check_listen_address(http_addr, "httpAddr")
    return f"http://{http_addr}", http_addr
