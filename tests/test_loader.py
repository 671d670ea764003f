"""Tests for loading the Swagger/OpenAPI document."""

import http.client
import json
import urllib.error

import pytest
import yaml

from swagger_mcp import loader
from swagger_mcp.exceptions import SpecLoadError
from swagger_mcp.loader import load_spec, parse_spec
from swagger_mcp.spec_source import validate_spec_source

SPEC = {
    "openapi": "3.0.0",
    "info": {"title": "Pets", "version": "1.0.0"},
    "paths": {"/pets": {"get": {"summary": "List pets"}}},
}


def test_load_local_json(tmp_path):
    """Test loading a JSON spec from a file:// source."""
    spec_file = tmp_path / "spec.json"
    spec_file.write_text(json.dumps(SPEC))

    assert load_spec(validate_spec_source(f"file://{spec_file}")) == SPEC


def test_load_local_yaml(tmp_path):
    """Test loading a YAML spec from a file:// source."""
    spec_file = tmp_path / "spec.yaml"
    spec_file.write_text(yaml.safe_dump(SPEC))

    assert load_spec(validate_spec_source(f"file://{spec_file}")) == SPEC


def test_load_local_file_removed_after_validation(tmp_path):
    """Test that a file that disappears before loading raises SpecLoadError."""
    spec_file = tmp_path / "spec.json"
    spec_file.write_text("{}")
    source = validate_spec_source(f"file://{spec_file}")
    spec_file.unlink()

    with pytest.raises(SpecLoadError):
        load_spec(source)


def test_load_remote(monkeypatch):
    """Test that remote sources are fetched and parsed."""
    requested = []

    def fake_fetch(url, timeout):
        requested.append((url, timeout))
        return json.dumps(SPEC)

    monkeypatch.setattr(loader, "_fetch", fake_fetch)
    url = "https://api.example.com/openapi.json"

    assert load_spec(validate_spec_source(url), timeout=5) == SPEC
    assert requested == [(url, 5)]


def test_load_remote_failure(monkeypatch):
    """Test that network errors raise SpecLoadError."""

    def failing_fetch(url, timeout):
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr(loader, "_fetch", failing_fetch)

    with pytest.raises(SpecLoadError, match="connection refused"):
        load_spec(validate_spec_source("http://localhost:1/swagger.json"))


@pytest.mark.parametrize("content", ["paths: [unclosed", "just a string", "- a\n- b\n", ""])
def test_parse_spec_invalid(content):
    """Test that unparsable or non-mapping documents are rejected."""
    with pytest.raises(SpecLoadError):
        parse_spec(content)


class FakeHeaders:
    def __init__(self, charset):
        self.charset = charset

    def get_content_charset(self):
        return self.charset


class FakeResponse:
    def __init__(self, body=b"{}", charset=None, error=None):
        self.headers = FakeHeaders(charset)
        self.body = body
        self.error = error

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        return False

    def read(self):
        if self.error is not None:
            raise self.error
        return self.body


@pytest.mark.parametrize(
    "response",
    [
        FakeResponse(charset="no-such-charset"),
        FakeResponse(error=http.client.IncompleteRead(b"{")),
        FakeResponse(body=b"\xff\xfe\xfa"),
    ],
)
def test_load_remote_bad_response(monkeypatch, response):
    """Test that unreadable or undecodable responses raise SpecLoadError."""
    monkeypatch.setattr(loader.urllib.request, "urlopen", lambda request, timeout: response)

    with pytest.raises(SpecLoadError, match="Failed to load Swagger spec"):
        load_spec(validate_spec_source("https://api.example.com/openapi.json"))
