"""
Parsers for the string-encoded flag values: comma-separated lists, header
lists and authentication credentials.

Each value is parsed once here so that consumers of the resolved
configuration only ever see typed structures.
"""

import logging
from typing import Dict, Tuple

from .exceptions import (
    InvalidFilterError,
    InvalidHeaderFormatError,
    InvalidSecurityConfigError,
)
from .models import (
    ApiKey,
    ApiKeyCredentials,
    BasicCredentials,
    BearerCredentials,
    NoCredentials,
    PathFilter,
    SecurityScheme,
)

logger = logging.getLogger(__name__)

HTTP_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS", "TRACE")
API_KEY_LOCATIONS = ("header", "query", "cookie")


def parse_list(value: str) -> Tuple[str, ...]:
    """Split a comma-separated flag value, dropping blank entries."""
    if not value:
        return ()
    return tuple(item.strip() for item in value.split(",") if item.strip())


def parse_header_names(value: str) -> Tuple[str, ...]:
    """Parse a ``name1,name2`` list of headers to pass through.

    Header names are case-insensitive, so later duplicates are dropped.
    """
    names = []
    seen = set()
    for name in parse_list(value):
        if name.lower() not in seen:
            seen.add(name.lower())
            names.append(name)
    return tuple(names)


def parse_headers(value: str) -> Dict[str, str]:
    """Parse a ``name1=value1,name2=value2`` list of static request headers.

    Raises:
        InvalidHeaderFormatError: If an entry has no ``=`` or no name
    """
    headers: Dict[str, str] = {}
    for entry in parse_list(value):
        name, sep, header_value = entry.partition("=")
        name = name.strip()
        if not sep or not name:
            raise InvalidHeaderFormatError(
                f"Invalid header {entry!r}; expected name=value"
            )
        headers[name] = header_value.strip()
    return headers


def parse_path_filters(value: str) -> Tuple[PathFilter, ...]:
    return tuple(PathFilter(pattern=pattern) for pattern in parse_list(value))


def parse_methods(value: str) -> Tuple[str, ...]:
    """Parse a comma-separated list of HTTP methods, normalised to upper case.

    Raises:
        InvalidFilterError: If an entry is not an HTTP method
    """
    methods = tuple(method.upper() for method in parse_list(value))
    for method in methods:
        if method not in HTTP_METHODS:
            raise InvalidFilterError(
                f"Unknown HTTP method {method!r}; expected one of {', '.join(HTTP_METHODS)}"
            )
    return methods


def _parse_api_keys(value: str) -> Tuple[ApiKey, ...]:
    keys = []
    for entry in parse_list(value):
        pass_as, sep, rest = entry.partition(":")
        name, eq, key_value = rest.partition("=")
        pass_as = pass_as.strip().lower()
        name = name.strip()
        if not sep or not eq or not name:
            raise InvalidSecurityConfigError(
                f"Invalid apiKeyAuth entry {entry!r}; expected passAs:name=value"
            )
        if pass_as not in API_KEY_LOCATIONS:
            raise InvalidSecurityConfigError(
                f"Invalid apiKeyAuth passAs {pass_as!r}; expected header, query or cookie"
            )
        keys.append(ApiKey(pass_as=pass_as, name=name, value=key_value))
    if not keys:
        raise InvalidSecurityConfigError("apiKey security requires --apiKeyAuth")
    return tuple(keys)


def parse_credentials(
    security: str = "",
    basic_auth: str = "",
    bearer_auth: str = "",
    api_key_auth: str = "",
):
    """Build the credentials for the selected security scheme.

    Args:
        security: The scheme name: basic, apiKey or bearer (case-insensitive).
            Empty means no authentication.
        basic_auth: ``user:password``
        bearer_auth: The bearer token
        api_key_auth: Comma-separated ``passAs:name=value`` entries

    Returns:
        One of the credential models, tagged by its ``scheme``

    Raises:
        InvalidSecurityConfigError: If the scheme is unknown or its
            credentials are missing or malformed
    """
    schemes = {scheme.value.lower(): scheme for scheme in SecurityScheme}
    scheme = schemes.get(security.strip().lower() or "none")
    if scheme is None:
        raise InvalidSecurityConfigError(
            f"Unknown security type {security!r}; expected basic, apiKey or bearer"
        )

    if scheme is SecurityScheme.NONE:
        if basic_auth or bearer_auth or api_key_auth:
            logger.warning("Credentials were given without --security; they will not be sent")
        return NoCredentials()

    if scheme is SecurityScheme.BASIC:
        username, sep, password = basic_auth.partition(":")
        if not sep or not username:
            raise InvalidSecurityConfigError(
                "basic security requires --basicAuth in user:password format"
            )
        return BasicCredentials(username=username, password=password)

    if scheme is SecurityScheme.BEARER:
        if not bearer_auth.strip():
            raise InvalidSecurityConfigError("bearer security requires --bearerAuth")
        return BearerCredentials(token=bearer_auth.strip())

    return ApiKeyCredentials(keys=_parse_api_keys(api_key_auth))
