"""Pytest fixtures for the form ingest functions."""

import json
from unittest.mock import MagicMock

import pytest

from ingest_config import SCHEMAS_DIR, Settings, load_schema


@pytest.fixture
def settings() -> Settings:
    return Settings(notion_token="secret_test", notion_database_id="db-123")


@pytest.fixture
def register_schema():
    return load_schema(SCHEMAS_DIR / "register.json")


@pytest.fixture
def variant_schema():
    return load_schema(SCHEMAS_DIR / "variant.json")


@pytest.fixture
def make_event():
    """Build an API Gateway HTTP API (payload v2) event."""

    def _make(method="POST", body=None, origin=None, path="/register"):
        headers = {"content-type": "application/json"}
        if origin is not None:
            headers["origin"] = origin
        return {
            "version": "2.0",
            "rawPath": path,
            "headers": headers,
            "requestContext": {"http": {"method": method, "path": path}},
            "body": json.dumps(body) if isinstance(body, dict) else body,
            "isBase64Encoded": False,
        }

    return _make


def fake_response(status_code=200, payload=None, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text or json.dumps(payload or {})
    resp.json.return_value = payload if payload is not None else {}
    return resp


@pytest.fixture
def notion_http():
    """Stand-in for the requests module; records calls to post()."""
    http = MagicMock()
    http.post.return_value = fake_response(200, {"object": "page", "id": "abc123"})
    return http


@pytest.fixture
def notion_response():
    """Factory for fake requests.Response objects."""
    return fake_response
