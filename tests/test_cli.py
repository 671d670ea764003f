"""Tests for the command-line interface."""

import json

import pytest
import yaml
from typer.testing import CliRunner

from swagger_mcp.cli import app

runner = CliRunner()

SPEC = {
    "openapi": "3.0.0",
    "info": {"title": "Pets", "version": "1.0.0"},
    "paths": {"/pets": {"get": {"operationId": "listPets"}}},
}


@pytest.fixture
def spec_file(tmp_path):
    path = tmp_path / "spec.json"
    path.write_text(json.dumps(SPEC))
    return path


def test_http_mode(spec_file, tmp_path):
    """Test resolving streamable HTTP mode and saving the plan."""
    output = tmp_path / "plan.yaml"
    result = runner.invoke(
        app,
        ["--specUrl", f"file://{spec_file}", "--http", "--httpAddr=:9000", "-o", str(output)],
    )

    assert result.exit_code == 0, result.output
    plan = yaml.safe_load(output.read_text())
    assert plan["transport"] == "streamable-http"
    assert plan["config"]["http"]["listen_address"] == ":9000"
    assert plan["config"]["http"]["mount_path"] == "/mcp"
    assert plan["config"]["sse"]["enabled"] is False
    assert [tool["name"] for tool in plan["tools"]] == ["listPets"]


def test_sse_mode(spec_file, tmp_path):
    """Test resolving SSE mode from a dialable URL."""
    output = tmp_path / "plan.yaml"
    result = runner.invoke(
        app,
        [f"--specUrl=file://{spec_file}", "--sse", "--sseUrl=https://example.com", "-o", str(output)],
    )

    assert result.exit_code == 0, result.output
    sse = yaml.safe_load(output.read_text())["config"]["sse"]
    assert sse["enabled"] is True
    assert sse["dialable_url"] == "https://example.com"
    assert sse["listen_address"] == "example.com:443"


def test_spec_url_from_environment(spec_file, tmp_path):
    """Test that flags can be supplied through environment variables."""
    output = tmp_path / "plan.yaml"
    result = runner.invoke(
        app,
        ["-o", str(output)],
        env={"SWAGGER_MCP_SPEC_URL": f"file://{spec_file}"},
    )

    assert result.exit_code == 0, result.output
    assert yaml.safe_load(output.read_text())["transport"] == "stdio"


def test_missing_spec_url():
    """Test that an empty --specUrl exits with an error."""
    result = runner.invoke(app, ["--specUrl=", "--sse", "--http"])

    assert result.exit_code == 1
    assert "--specUrl" in result.output
    assert "both SSE" not in result.output


def test_conflicting_modes(spec_file):
    """Test that --sse and --http together exit with an error."""
    result = runner.invoke(app, ["--specUrl", f"file://{spec_file}", "--sse", "--http"])

    assert result.exit_code == 1
    assert "Cannot run in both SSE and StreamableHTTP modes" in result.output


def test_missing_spec_file():
    """Test that a spec file that does not exist exits with an error."""
    result = runner.invoke(app, ["--specUrl", "file:///does/not/exist"])

    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_unloadable_spec(tmp_path):
    """Test that a spec that cannot be parsed exits with an error."""
    bad_spec = tmp_path / "bad.yaml"
    bad_spec.write_text("paths: [unclosed")

    result = runner.invoke(app, ["--specUrl", f"file://{bad_spec}"])

    assert result.exit_code == 1
    assert "Failed to parse specification" in result.output


def test_unknown_log_level(spec_file):
    """Test that an unknown log level is rejected."""
    result = runner.invoke(app, ["--specUrl", f"file://{spec_file}", "--log-level", "chatty"])

    assert result.exit_code == 1
    assert "unknown log level" in result.output


def test_openapi31_spec(tmp_path):
    """Test that an OpenAPI 3.1 spec with nullable list types is accepted."""
    spec_file = tmp_path / "spec31.json"
    spec_file.write_text(
        json.dumps(
            {
                "openapi": "3.1.0",
                "info": {"title": "Search", "version": "1.0.0"},
                "paths": {
                    "/search": {
                        "get": {
                            "parameters": [
                                {"name": "q", "in": "query", "schema": {"type": ["string", "null"]}}
                            ]
                        }
                    }
                },
            }
        )
    )
    output = tmp_path / "plan.yaml"

    result = runner.invoke(app, ["--specUrl", f"file://{spec_file}", "-o", str(output)])

    assert result.exit_code == 0, result.output
    (tool,) = yaml.safe_load(output.read_text())["tools"]
    assert tool["parameters"][0]["type"] == "string"


def test_unrepresentable_spec_content(tmp_path):
    """Test that spec values that cannot become tools exit with an error."""
    spec_file = tmp_path / "spec.yaml"
    spec_file.write_text(
        "paths:\n"
        "  /events:\n"
        "    get:\n"
        "      parameters:\n"
        "        - name: since\n"
        "          in: query\n"
        "          default: 2024-01-01\n"
    )

    result = runner.invoke(app, ["--specUrl", f"file://{spec_file}"])

    assert result.exit_code == 1
    assert "Unsupported content in specification" in result.output
