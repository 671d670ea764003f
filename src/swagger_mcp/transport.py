"""
Selection of the transport the bridge serves MCP over.
"""

from .exceptions import ConflictingTransportModesError
from .models import TransportMode


def select_transport(sse: bool, http: bool) -> TransportMode:
    """Pick the active transport from the --sse and --http flags.

    Stdio is used when neither network transport is requested.

    Raises:
        ConflictingTransportModesError: If both flags are set
    """
    if sse and http:
        raise ConflictingTransportModesError(
            "Cannot run in both SSE and StreamableHTTP modes"
        )
    if sse:
        return TransportMode.SSE
    if http:
        return TransportMode.STREAMABLE_HTTP
    return TransportMode.STDIO
