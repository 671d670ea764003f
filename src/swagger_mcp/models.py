"""
Data models for the resolved bridge configuration and extracted MCP tools.
"""

import re
from enum import Enum
from functools import lru_cache
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_serializer

DEFAULT_MOUNT_PATH = "/mcp"

# Same mask pydantic uses when dumping SecretStr
SECRET_MASK = "**********"

_SENSITIVE_HEADERS = {"authorization", "proxy-authorization", "cookie", "set-cookie"}
_SENSITIVE_MARKERS = ("token", "secret", "key", "auth", "password", "session")


def is_sensitive_header(name: str) -> bool:
    """Whether a header name suggests it carries a credential."""
    lowered = name.lower()
    return lowered in _SENSITIVE_HEADERS or any(m in lowered for m in _SENSITIVE_MARKERS)


class TransportMode(str, Enum):
    """The transport an MCP client uses to reach the bridge."""

    STDIO = "stdio"
    SSE = "sse"
    STREAMABLE_HTTP = "streamable-http"


class SpecSourceKind(str, Enum):
    REMOTE = "remote"
    LOCAL = "local"


class SecurityScheme(str, Enum):
    """Authentication applied to proxied API requests."""

    NONE = "none"
    BASIC = "basic"
    API_KEY = "apiKey"
    BEARER = "bearer"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class RawInputs(_Frozen):
    """Command-line inputs exactly as captured, before any resolution."""

    spec_url: str = ""
    sse: bool = False
    sse_addr: str = ""
    sse_url: str = ""
    http: bool = False
    http_addr: str = ""
    http_path: str = ""
    base_url: str = ""
    include_paths: str = ""
    exclude_paths: str = ""
    include_methods: str = ""
    exclude_methods: str = ""
    security: str = ""
    basic_auth: str = ""
    bearer_auth: str = ""
    api_key_auth: str = ""
    headers: str = ""
    sse_headers: str = ""
    http_headers: str = ""


class SpecSource(_Frozen):
    """A validated origin of the Swagger/OpenAPI document.

    ``location`` is the URL for remote sources and the filesystem path for
    local ones.
    """

    raw: str
    kind: SpecSourceKind
    location: str

    @property
    def is_remote(self) -> bool:
        return self.kind is SpecSourceKind.REMOTE


class SseConfig(_Frozen):
    enabled: bool = False
    dialable_url: str = ""
    listen_address: str = ""
    passthrough_headers: Tuple[str, ...] = ()


class HttpConfig(_Frozen):
    enabled: bool = False
    listen_address: str = ""
    dialable_url: str = ""
    mount_path: str = ""
    passthrough_headers: Tuple[str, ...] = ()

    @property
    def endpoint_url(self) -> str:
        """URL a client posts MCP messages to."""
        if not self.dialable_url:
            return ""
        return self.dialable_url.rstrip("/") + self.mount_path


class NoCredentials(_Frozen):
    scheme: Literal["none"] = "none"


class BasicCredentials(_Frozen):
    scheme: Literal["basic"] = "basic"
    username: str
    password: SecretStr


class BearerCredentials(_Frozen):
    scheme: Literal["bearer"] = "bearer"
    token: SecretStr


class ApiKey(_Frozen):
    """A single API key and where it is sent."""

    pass_as: Literal["header", "query", "cookie"]
    name: str
    value: SecretStr


class ApiKeyCredentials(_Frozen):
    scheme: Literal["apiKey"] = "apiKey"
    keys: Tuple[ApiKey, ...]


Credentials = Annotated[
    Union[NoCredentials, BasicCredentials, BearerCredentials, ApiKeyCredentials],
    Field(discriminator="scheme"),
]


@lru_cache(maxsize=None)
def _compile(pattern: str) -> Optional["re.Pattern[str]"]:
    try:
        return re.compile(pattern)
    except re.error:
        return None


class PathFilter(_Frozen):
    """A path filter entry: either a literal path or a regular expression."""

    pattern: str

    @property
    def is_regex(self) -> bool:
        return _compile(self.pattern) is not None

    def matches(self, path: str) -> bool:
        if path == self.pattern:
            return True
        regex = _compile(self.pattern)
        return regex is not None and regex.fullmatch(path) is not None


class ApiConfig(_Frozen):
    """Settings for the HTTP requests the bridge proxies to the API."""

    base_url: str = ""
    include_paths: Tuple[PathFilter, ...] = ()
    exclude_paths: Tuple[PathFilter, ...] = ()
    include_methods: Tuple[str, ...] = ()
    exclude_methods: Tuple[str, ...] = ()
    credentials: Credentials = Field(default_factory=NoCredentials)
    static_header_items: Tuple[Tuple[str, str], ...] = Field(
        default=(), serialization_alias="static_headers"
    )

    @property
    def static_headers(self) -> Dict[str, str]:
        """A copy of the headers sent with every API request."""
        return dict(self.static_header_items)

    @field_serializer("static_header_items")
    def _serialize_static_headers(self, items: Tuple[Tuple[str, str], ...]) -> Dict[str, str]:
        return {
            name: SECRET_MASK if is_sensitive_header(name) else value for name, value in items
        }

    @property
    def security_scheme(self) -> SecurityScheme:
        return SecurityScheme(self.credentials.scheme)

    def allows_path(self, path: str) -> bool:
        """Check a path against the include filters, then the exclude filters."""
        if self.include_paths and not any(f.matches(path) for f in self.include_paths):
            return False
        return not any(f.matches(path) for f in self.exclude_paths)

    def allows_method(self, method: str) -> bool:
        method = method.upper()
        if self.include_methods and method not in self.include_methods:
            return False
        return method not in self.exclude_methods


class Config(_Frozen):
    """The fully resolved, read-only configuration of one bridge process."""

    spec_source: SpecSource
    sse: SseConfig = Field(default_factory=SseConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    api: ApiConfig = Field(default_factory=ApiConfig)

    @property
    def transport_mode(self) -> TransportMode:
        if self.sse.enabled:
            return TransportMode.SSE
        if self.http.enabled:
            return TransportMode.STREAMABLE_HTTP
        return TransportMode.STDIO


class MCPParameter(BaseModel):
    """Represents a tool parameter taken from an API operation."""

    name: str
    type: str
    location: Literal["path", "query", "header", "cookie", "body"]
    description: Optional[str] = None
    required: bool = False
    default: Optional[Union[str, int, float, bool, List, Dict]] = None


class MCPTool(BaseModel):
    """Represents one API operation exposed as an MCP tool."""

    name: str
    description: Optional[str] = None
    method: str
    path: str
    url: str
    parameters: List[MCPParameter] = Field(default_factory=list)
    body_schema: Optional[Dict] = None


class ServerPlan(BaseModel):
    """Everything a transport runner needs to start serving."""

    transport: TransportMode
    config: Config
    tools: List[MCPTool] = Field(default_factory=list)
