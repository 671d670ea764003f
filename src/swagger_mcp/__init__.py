"""Swagger/OpenAPI to MCP bridge package."""

from .config import resolve_config
from .exceptions import ConfigError, SpecLoadError, SwaggerMCPError
from .models import Config, MCPParameter, MCPTool, RawInputs, TransportMode

__version__ = "0.1.0"
__all__ = [
    "resolve_config",
    "Config",
    "RawInputs",
    "TransportMode",
    "MCPTool",
    "MCPParameter",
    "ConfigError",
    "SpecLoadError",
    "SwaggerMCPError",
]
