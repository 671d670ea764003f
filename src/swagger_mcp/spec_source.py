"""
Classification and pre-validation of the Swagger/OpenAPI document source.
"""

import re
from pathlib import Path
from urllib.parse import urlsplit

from .exceptions import (
    InvalidSpecUrlError,
    MissingSpecSourceError,
    SpecFileNotFoundError,
    UnrecognizedSpecSourceSchemeError,
)
from .models import SpecSource, SpecSourceKind

REMOTE_PREFIXES = ("http://", "https://")
FILE_PREFIX = "file://"

_FORBIDDEN_URL_CHARS = re.compile(r"[\s\x00-\x1f\x7f]")


def _check_request_uri(url: str) -> None:
    """Check that ``url`` is a syntactically valid absolute request URI.

    Raises:
        InvalidSpecUrlError: If the URL cannot be used to request the spec
    """
    match = _FORBIDDEN_URL_CHARS.search(url)
    if match:
        raise InvalidSpecUrlError(
            f"Invalid spec URL {url!r}: contains invalid character {match.group()!r}"
        )
    try:
        parts = urlsplit(url)
        parts.port  # raises on a non-numeric or out of range port
    except ValueError as e:
        raise InvalidSpecUrlError(f"Invalid spec URL {url!r}: {e}")
    if not parts.hostname:
        raise InvalidSpecUrlError(f"Invalid spec URL {url!r}: missing host")


def validate_spec_source(raw: str) -> SpecSource:
    """Classify the spec source as remote or local and validate it.

    Args:
        raw: The --specUrl value, an http(s):// URL or a file:// path

    Returns:
        The classified spec source

    Raises:
        MissingSpecSourceError: If ``raw`` is empty
        InvalidSpecUrlError: If a remote URL is malformed
        SpecFileNotFoundError: If a local file does not exist
        UnrecognizedSpecSourceSchemeError: For any other prefix
    """
    if not raw or not raw.strip():
        raise MissingSpecSourceError(
            "Please provide the Swagger JSON URL or file path using the --specUrl flag"
        )

    if raw.startswith(REMOTE_PREFIXES):
        _check_request_uri(raw)
        return SpecSource(raw=raw, kind=SpecSourceKind.REMOTE, location=raw)

    if raw.startswith(FILE_PREFIX):
        file_path = raw[len(FILE_PREFIX):]
        # Existence only; readability is checked when the spec is loaded
        if not file_path or not Path(file_path).exists():
            raise SpecFileNotFoundError(f"Spec file does not exist: {file_path!r}")
        return SpecSource(raw=raw, kind=SpecSourceKind.LOCAL, location=file_path)

    raise UnrecognizedSpecSourceSchemeError(
        f"Invalid specUrl format {raw!r}. Must be a valid HTTP URL or file:// path"
    )
