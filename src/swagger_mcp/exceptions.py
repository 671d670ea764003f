class SwaggerMCPError(Exception):
    """Base exception for swagger-mcp errors."""
    pass

class ConfigError(SwaggerMCPError):
    """Raised when the command-line configuration cannot be resolved."""
    pass

class MissingSpecSourceError(ConfigError):
    """Raised when no spec URL or file path was given."""
    pass

class InvalidSpecUrlError(ConfigError):
    """Raised when a remote spec URL is not a valid absolute URI."""
    pass

class SpecFileNotFoundError(ConfigError):
    """Raised when a file:// spec source does not exist on disk."""
    pass

class UnrecognizedSpecSourceSchemeError(ConfigError):
    """Raised when the spec source is neither http(s):// nor file://."""
    pass

class ConflictingTransportModesError(ConfigError):
    """Raised when SSE and streamable HTTP modes are both requested."""
    pass

class InvalidAddressFormatError(ConfigError):
    """Raised when a listen address is not in :PORT or HOST:PORT form."""
    pass

class UnsupportedSchemeError(ConfigError):
    """Raised when a dialable URL uses a scheme other than http or https."""
    pass

class MissingAddressError(ConfigError):
    """Raised when an address is required but none can be determined."""
    pass

class InvalidBaseUrlError(ConfigError):
    """Raised when the API base URL does not start with http:// or https://."""
    pass

class InvalidHeaderFormatError(ConfigError):
    """Raised when a header list entry is not in name=value form."""
    pass

class InvalidFilterError(ConfigError):
    """Raised when a path or method filter entry is invalid."""
    pass

class InvalidSecurityConfigError(ConfigError):
    """Raised when the security scheme or its credentials are invalid."""
    pass

class SpecLoadError(SwaggerMCPError):
    """Raised when the Swagger/OpenAPI document cannot be loaded."""
    pass
