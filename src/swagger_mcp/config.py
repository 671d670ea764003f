"""
Resolution of the raw command-line inputs into one immutable configuration.
"""

import logging
from typing import Optional

from .addresses import resolve_http_address, resolve_sse_addresses
from .exceptions import InvalidBaseUrlError
from .models import (
    DEFAULT_MOUNT_PATH,
    ApiConfig,
    Config,
    HttpConfig,
    RawInputs,
    SpecSource,
    SseConfig,
    TransportMode,
)
from .parsing import (
    parse_credentials,
    parse_header_names,
    parse_headers,
    parse_methods,
    parse_path_filters,
)
from .spec_source import REMOTE_PREFIXES, validate_spec_source
from .transport import select_transport

logger = logging.getLogger(__name__)


def validate_base_url(base_url: str) -> str:
    """Check that a non-empty API base URL is an http(s) URL.

    Raises:
        InvalidBaseUrlError: If the URL has another scheme
    """
    if base_url and not base_url.startswith(REMOTE_PREFIXES):
        raise InvalidBaseUrlError(
            f"baseUrl must start with http:// or https://, got {base_url!r}"
        )
    return base_url


def normalize_mount_path(http_path: str) -> str:
    if not http_path:
        return DEFAULT_MOUNT_PATH
    if not http_path.startswith("/"):
        return "/" + http_path
    return http_path


def assemble_config(
    spec_source: SpecSource,
    api: ApiConfig,
    sse: Optional[SseConfig] = None,
    http: Optional[HttpConfig] = None,
) -> Config:
    """Combine already-resolved parts into a Config.

    No validation or I/O happens here; every part must come from the
    resolvers.
    """
    return Config(
        spec_source=spec_source,
        sse=sse or SseConfig(),
        http=http or HttpConfig(),
        api=api,
    )


def resolve_config(raw: RawInputs) -> Config:
    """Resolve raw inputs into a Config, failing on the first invalid input.

    Validation runs in a fixed order: the spec source, the API base URL,
    the transport mode, the addresses for the selected transport, and
    finally the filter, header and credential lists.

    Args:
        raw: The inputs as captured from the command line

    Returns:
        The resolved configuration

    Raises:
        ConfigError: The first validation failure; no partial configuration
            is ever returned
    """
    spec_source = validate_spec_source(raw.spec_url)
    base_url = validate_base_url(raw.base_url)
    mode = select_transport(raw.sse, raw.http)
    logger.debug("Selected %s transport", mode.value)

    sse = None
    http = None
    if mode is TransportMode.SSE:
        dialable_url, listen_address = resolve_sse_addresses(raw.sse_url, raw.sse_addr)
        sse = SseConfig(
            enabled=True,
            dialable_url=dialable_url,
            listen_address=listen_address,
            passthrough_headers=parse_header_names(raw.sse_headers),
        )
    elif mode is TransportMode.STREAMABLE_HTTP:
        dialable_url, listen_address = resolve_http_address(raw.http_addr)
        http = HttpConfig(
            enabled=True,
            listen_address=listen_address,
            dialable_url=dialable_url,
            mount_path=normalize_mount_path(raw.http_path),
            passthrough_headers=parse_header_names(raw.http_headers),
        )

    api = ApiConfig(
        base_url=base_url,
        include_paths=parse_path_filters(raw.include_paths),
        exclude_paths=parse_path_filters(raw.exclude_paths),
        include_methods=parse_methods(raw.include_methods),
        exclude_methods=parse_methods(raw.exclude_methods),
        credentials=parse_credentials(
            raw.security, raw.basic_auth, raw.bearer_auth, raw.api_key_auth
        ),
        static_header_items=tuple(parse_headers(raw.headers).items()),
    )
    return assemble_config(spec_source, api, sse=sse, http=http)
