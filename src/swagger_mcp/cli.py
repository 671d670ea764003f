"""
Command-line interface for the Swagger to MCP bridge.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import typer

from .bootstrap import build_plan, startup_message, write_plan
from .config import resolve_config
from .exceptions import ConfigError, SpecLoadError
from .loader import load_spec
from .models import RawInputs

logger = logging.getLogger(__name__)

ENV_PREFIX = "SWAGGER_MCP_"

app = typer.Typer(help="Expose a Swagger/OpenAPI described API as MCP tools")


def _env(name: str) -> str:
    return ENV_PREFIX + name


def _configure_logging(log_level: str) -> None:
    """Send log records to stderr; stdout belongs to the stdio transport.

    Raises:
        typer.Exit: If the level name is unknown
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        typer.echo(f"Error: unknown log level {log_level!r}", err=True)
        raise typer.Exit(1)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@app.command()
def serve(
    spec_url: str = typer.Option(
        "", "--specUrl", envvar=_env("SPEC_URL"),
        help="URL of the Swagger JSON specification (http(s):// or file://)",
    ),
    sse: bool = typer.Option(
        False, "--sse", envvar=_env("SSE"), help="Run in SSE mode instead of stdio mode"
    ),
    sse_addr: str = typer.Option(
        "", "--sseAddr", envvar=_env("SSE_ADDR"),
        help="SSE server listen address in :Port or IP:Port format",
    ),
    sse_url: str = typer.Option(
        "", "--sseUrl", envvar=_env("SSE_URL"), help="Base URL for the SSE server"
    ),
    http: bool = typer.Option(
        False, "--http", envvar=_env("HTTP"),
        help="Run in StreamableHTTP mode instead of stdio mode",
    ),
    http_addr: str = typer.Option(
        "", "--httpAddr", envvar=_env("HTTP_ADDR"),
        help="StreamableHTTP server listen address in :Port or IP:Port format",
    ),
    http_path: str = typer.Option(
        "", "--httpPath", envvar=_env("HTTP_PATH"),
        help="Endpoint path for the StreamableHTTP server (default /mcp)",
    ),
    base_url: str = typer.Option(
        "", "--baseUrl", envvar=_env("BASE_URL"), help="Base URL for API requests"
    ),
    include_paths: str = typer.Option(
        "", "--includePaths", envvar=_env("INCLUDE_PATHS"),
        help="Comma-separated list of paths or regex to include",
    ),
    exclude_paths: str = typer.Option(
        "", "--excludePaths", envvar=_env("EXCLUDE_PATHS"),
        help="Comma-separated list of paths or regex to exclude",
    ),
    include_methods: str = typer.Option(
        "", "--includeMethods", envvar=_env("INCLUDE_METHODS"),
        help="Comma-separated list of HTTP methods to include",
    ),
    exclude_methods: str = typer.Option(
        "", "--excludeMethods", envvar=_env("EXCLUDE_METHODS"),
        help="Comma-separated list of HTTP methods to exclude",
    ),
    security: str = typer.Option(
        "", "--security", envvar=_env("SECURITY"),
        help="API security type: basic, apiKey, or bearer",
    ),
    basic_auth: str = typer.Option(
        "", "--basicAuth", envvar=_env("BASIC_AUTH"),
        help="Basic auth credentials in user:password format",
    ),
    bearer_auth: str = typer.Option(
        "", "--bearerAuth", envvar=_env("BEARER_AUTH"),
        help="Bearer token for the Authorization header",
    ),
    api_key_auth: str = typer.Option(
        "", "--apiKeyAuth", envvar=_env("API_KEY_AUTH"),
        help="API key auth as passAs:name=value, passAs=header/query/cookie, multiple by comma",
    ),
    headers: str = typer.Option(
        "", "--headers", envvar=_env("HEADERS"),
        help="Additional headers to include in requests (name1=value1,name2=value2)",
    ),
    sse_headers: str = typer.Option(
        "", "--sseHeaders", envvar=_env("SSE_HEADERS"),
        help="Headers to read from SSE requests and pass to API requests (name1,name2)",
    ),
    http_headers: str = typer.Option(
        "", "--httpHeaders", envvar=_env("HTTP_HEADERS"),
        help="Headers to read from StreamableHTTP requests and pass to API requests (name1,name2)",
    ),
    output_file: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Path to save the server plan YAML. If not provided, it is written to stdout",
    ),
    log_level: str = typer.Option(
        "INFO", "--log-level", envvar=_env("LOG_LEVEL"), help="Logging level"
    ),
) -> None:
    """Resolve the bridge configuration, load the spec and emit the server plan."""
    _configure_logging(log_level)

    raw = RawInputs(
        spec_url=spec_url,
        sse=sse,
        sse_addr=sse_addr,
        sse_url=sse_url,
        http=http,
        http_addr=http_addr,
        http_path=http_path,
        base_url=base_url,
        include_paths=include_paths,
        exclude_paths=exclude_paths,
        include_methods=include_methods,
        exclude_methods=exclude_methods,
        security=security,
        basic_auth=basic_auth,
        bearer_auth=bearer_auth,
        api_key_auth=api_key_auth,
        headers=headers,
        sse_headers=sse_headers,
        http_headers=http_headers,
    )

    try:
        config = resolve_config(raw)
    except ConfigError as e:
        typer.echo(f"Error: {str(e)}", err=True)
        raise typer.Exit(1)

    try:
        spec = load_spec(config.spec_source)
        plan = build_plan(spec, config)
    except SpecLoadError as e:
        typer.echo(f"Error: {str(e)}", err=True)
        raise typer.Exit(1)

    logger.info(startup_message(config))

    if output_file is None:
        write_plan(plan, sys.stdout)
        return
    try:
        with open(output_file, "w") as f:
            write_plan(plan, f)
    except OSError as e:
        typer.echo(f"Error saving to {output_file}: {str(e)}", err=True)
        raise typer.Exit(1)


def main():
    """Entry point for the CLI."""
    app()
