"""
Extraction of MCP tool definitions from a Swagger 2.0 or OpenAPI 3.x document.
"""

import logging
from typing import Any, Dict, List, Optional

from .models import ApiConfig, MCPParameter, MCPTool

logger = logging.getLogger(__name__)

OPERATION_METHODS = ["get", "post", "put", "delete", "patch", "head", "options"]


def generate_tool_name(method: str, path: str) -> str:
    """Generate a tool name from HTTP method and path.

    Args:
        method: HTTP method (GET, POST, etc.)
        path: API endpoint path

    Returns:
        str: Generated tool name, e.g. ``GET_PETS_PETID``
    """
    path = path.strip("/")
    path = path.replace("{", "").replace("}", "")
    path = path.replace("/", "_").replace("-", "_").replace(".", "_")
    if not path:
        return method.upper()
    return f"{method.upper()}_{path.upper()}"


def _resolve_local_ref(spec: Dict[str, Any], obj: Any) -> Any:
    """Replace a ``#/...`` $ref with its target; anything else is returned as is."""
    if not isinstance(obj, dict) or "$ref" not in obj:
        return obj
    ref = obj["$ref"]
    if not isinstance(ref, str) or not ref.startswith("#/"):
        return obj

    current: Any = spec
    for part in ref[2:].split("/"):
        # Unescape JSON pointer encoding
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(current, dict) or part not in current:
            logger.warning("Could not resolve reference %s", ref)
            return obj
        current = current[part]
    return current


def get_base_url(spec: Dict[str, Any], api_config: ApiConfig) -> str:
    """Pick the URL proxied requests are sent to.

    An explicit base URL wins, then the first OpenAPI 3 server, then the
    Swagger 2 scheme, host and basePath.
    """
    if api_config.base_url:
        return api_config.base_url.rstrip("/")

    servers = spec.get("servers")
    if isinstance(servers, list) and servers and isinstance(servers[0], dict):
        url = servers[0].get("url")
        if isinstance(url, str) and url:
            return url.rstrip("/")

    host = spec.get("host")
    if host:
        schemes = spec.get("schemes") or ["https"]
        return f"{schemes[0]}://{host}{spec.get('basePath', '')}".rstrip("/")
    return ""


def _type_name(value: Any, default: str = "string") -> str:
    """Normalise a schema ``type``; OpenAPI 3.1 allows a list such as ``["string", "null"]``."""
    if isinstance(value, str) and value:
        return value
    if isinstance(value, list):
        for item in value:
            if isinstance(item, str) and item != "null":
                return item
    return default


def _schema_type(schema: Optional[Dict[str, Any]], default: str = "string") -> str:
    if not isinstance(schema, dict):
        return default
    return _type_name(schema.get("type"), default)


def _dict_or_none(value: Any) -> Optional[Dict[str, Any]]:
    return value if isinstance(value, dict) else None


def _text_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _parameter_list(obj: Dict[str, Any]) -> List[Any]:
    params = obj.get("parameters")
    return params if isinstance(params, list) else []


def _convert_parameters(
    spec: Dict[str, Any], path_item: Dict[str, Any], operation: Dict[str, Any]
) -> List[MCPParameter]:
    """Merge path-level and operation-level parameters.

    Operation parameters override path-level ones with the same name and
    location.
    """
    merged: Dict[tuple, Dict[str, Any]] = {}
    for raw in _parameter_list(path_item) + _parameter_list(operation):
        param = _resolve_local_ref(spec, raw)
        if not isinstance(param, dict) or not _text_or_none(param.get("name")):
            continue
        merged[(param["name"], param.get("in"))] = param

    parameters = []
    for param in merged.values():
        location = param.get("in")
        if location == "formData":
            location = "body"
        if location not in ("path", "query", "header", "cookie", "body"):
            continue
        schema = _resolve_local_ref(spec, param.get("schema"))
        if location == "body":
            param_type = _schema_type(schema, "object")
        else:
            # Swagger 2 puts the type on the parameter itself
            param_type = _type_name(param.get("type"), _schema_type(schema))
        default = param.get("default")
        if default is None and isinstance(schema, dict):
            default = schema.get("default")
        parameters.append(
            MCPParameter(
                name=param["name"],
                type=param_type,
                location=location,
                description=_text_or_none(param.get("description")),
                required=bool(param.get("required", location == "path")),
                default=default,
            )
        )
    return parameters


def _convert_request_body(
    spec: Dict[str, Any], operation: Dict[str, Any]
) -> Optional[Dict[str, Any]]:
    request_body = _resolve_local_ref(spec, operation.get("requestBody"))
    if isinstance(request_body, dict):
        content = request_body.get("content")
        if not isinstance(content, dict):
            return None
        media = content.get("application/json") or next(iter(content.values()), None)
        if isinstance(media, dict) and "schema" in media:
            return _dict_or_none(_resolve_local_ref(spec, media["schema"]))
        return None

    # Swagger 2 body parameter
    for raw in _parameter_list(operation):
        param = _resolve_local_ref(spec, raw)
        if isinstance(param, dict) and param.get("in") == "body":
            return _dict_or_none(_resolve_local_ref(spec, param.get("schema")))
    return None


def extract_tools(spec: Dict[str, Any], api_config: ApiConfig) -> List[MCPTool]:
    """Convert the operations of a spec into MCP tools.

    Operations whose path or method is filtered out by ``api_config`` are
    skipped.

    Args:
        spec: A parsed Swagger/OpenAPI document
        api_config: The resolved API settings

    Returns:
        List[MCPTool]: One tool per remaining operation
    """
    base_url = get_base_url(spec, api_config)
    tools = []

    paths = spec.get("paths")
    if not isinstance(paths, dict):
        logger.warning("Spec has no paths object; no tools extracted")
        paths = {}

    for path, path_item in paths.items():
        path_item = _resolve_local_ref(spec, path_item)
        if not isinstance(path, str) or not isinstance(path_item, dict):
            continue
        if not api_config.allows_path(path):
            logger.debug("Skipping path %s", path)
            continue

        for method, operation in path_item.items():
            if method not in OPERATION_METHODS or not isinstance(operation, dict):
                continue
            if not api_config.allows_method(method):
                logger.debug("Skipping %s %s", method.upper(), path)
                continue

            # Use summary as fallback for description
            description = _text_or_none(operation.get("description")) or _text_or_none(
                operation.get("summary")
            )
            tools.append(
                MCPTool(
                    name=_text_or_none(operation.get("operationId"))
                    or generate_tool_name(method, path),
                    description=description,
                    method=method.upper(),
                    path=path,
                    url=f"{base_url}{path}",
                    parameters=_convert_parameters(spec, path_item, operation),
                    body_schema=_convert_request_body(spec, operation),
                )
            )

    logger.info("Extracted %d tools", len(tools))
    return tools
