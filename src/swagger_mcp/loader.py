"""
Loading of the Swagger/OpenAPI document from a validated spec source.
"""

import http.client
import json
import logging
import urllib.request
from pathlib import Path
from typing import Any, Dict

import yaml

from .exceptions import SpecLoadError
from .models import SpecSource

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 30


def _fetch(url: str, timeout: float) -> str:
    request = urllib.request.Request(
        url, headers={"Accept": "application/json, application/yaml, */*"}
    )
    with urllib.request.urlopen(request, timeout=timeout) as response:
        charset = response.headers.get_content_charset() or "utf-8"
        return response.read().decode(charset)


def parse_spec(content: str) -> Dict[str, Any]:
    """Parse a spec document as JSON, falling back to YAML.

    Raises:
        SpecLoadError: If the content is neither, or is not a mapping
    """
    try:
        spec = json.loads(content)
    except json.JSONDecodeError:
        try:
            spec = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise SpecLoadError(f"Failed to parse specification: {e}")

    if not isinstance(spec, dict):
        raise SpecLoadError("Specification must be a JSON or YAML object")
    return spec


def load_spec(source: SpecSource, timeout: float = FETCH_TIMEOUT) -> Dict[str, Any]:
    """Load the Swagger/OpenAPI document a spec source points at.

    Args:
        source: A spec source returned by ``validate_spec_source``
        timeout: Seconds to wait for a remote document

    Returns:
        The parsed document

    Raises:
        SpecLoadError: If the document cannot be fetched, read or parsed
    """
    logger.info("Loading Swagger spec from %s", source.location)
    try:
        if source.is_remote:
            content = _fetch(source.location, timeout)
        else:
            content = Path(source.location).read_text(encoding="utf-8")
    except (OSError, ValueError, LookupError, http.client.HTTPException) as e:
        raise SpecLoadError(f"Failed to load Swagger spec from {source.raw}: {e}")

    return parse_spec(content)
