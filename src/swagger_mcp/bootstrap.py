"""
Hand-off from the resolved configuration to the transport runner.
"""

from typing import Any, Dict, TextIO

import yaml
from pydantic import ValidationError

from .exceptions import SpecLoadError
from .extractor import extract_tools
from .models import Config, ServerPlan, TransportMode


def startup_message(config: Config) -> str:
    """Describe the server that is about to start, without any secrets."""
    mode = config.transport_mode
    if mode is TransportMode.SSE:
        return (
            f"Starting server with specUrl: {config.spec_source.raw}, SSE mode, "
            f"SSE URL: {config.sse.dialable_url}, SSE Addr: {config.sse.listen_address}, "
            f"Base URL: {config.api.base_url}"
        )
    if mode is TransportMode.STREAMABLE_HTTP:
        return (
            f"Starting server with specUrl: {config.spec_source.raw}, StreamableHTTP mode, "
            f"HTTP URL: {config.http.endpoint_url}, HTTP Addr: {config.http.listen_address}, "
            f"Base URL: {config.api.base_url}"
        )
    return f"Starting server with specUrl: {config.spec_source.raw}, Stdio mode."


def build_plan(spec: Dict[str, Any], config: Config) -> ServerPlan:
    """Extract the tools of a loaded spec and bundle them with the config.

    Raises:
        SpecLoadError: If the spec's operations cannot be turned into tools
    """
    try:
        tools = extract_tools(spec, config.api)
    except ValidationError as e:
        raise SpecLoadError(f"Unsupported content in specification: {e}")
    return ServerPlan(transport=config.transport_mode, config=config, tools=tools)


def plan_to_dict(plan: ServerPlan) -> Dict[str, Any]:
    # Secret fields and credential-bearing headers dump as a mask
    return plan.model_dump(mode="json", by_alias=True, exclude_none=True)


def write_plan(plan: ServerPlan, stream: TextIO) -> None:
    """Write the server plan as YAML.

    Args:
        plan: The plan to write
        stream: An open text stream, e.g. a file or stdout
    """
    yaml.safe_dump(plan_to_dict(plan), stream, sort_keys=False)
