"""End-to-end tests through the Lambda entry points."""

import json
from unittest.mock import patch

import pytest

import register_handler
import variant_handler
from ingest_config import Settings


@pytest.fixture
def configured(monkeypatch):
    cfg = Settings(notion_token="secret_test", notion_database_id="db-123")
    monkeypatch.setattr(register_handler, "SETTINGS", cfg)
    monkeypatch.setattr(variant_handler, "SETTINGS", cfg)
    return cfg


class TestRegisterHandler:
    def test_creates_page(self, configured, make_event, notion_response) -> None:
        body = {"First name": "Ada", "Last name": "Lovelace", "Téléphone": "0102030405"}
        with patch("requests.post", return_value=notion_response(200, {"id": "abc123"})) as post:
            resp = register_handler.handler(make_event(body=body, origin="https://leancompanion.com"), None)

        assert resp["statusCode"] == 201
        assert json.loads(resp["body"]) == {"ok": True, "data": {"id": "abc123"}}
        props = post.call_args.kwargs["json"]["properties"]
        assert props["Téléphone"] == {"phone_number": "0102030405"}
        assert props["Last name"]["rich_text"][0]["text"]["content"] == "Lovelace"

    def test_unconfigured(self, monkeypatch, make_event) -> None:
        monkeypatch.setattr(register_handler, "SETTINGS", Settings())
        with patch("requests.post") as post:
            resp = register_handler.handler(make_event(body={"firstName": "Ada"}), None)
        assert resp["statusCode"] == 500
        assert json.loads(resp["body"])["error"] == "Server not configured"
        post.assert_not_called()


class TestVariantHandler:
    def test_creates_page(self, configured, make_event, notion_response) -> None:
        body = {"Name": "Grace", "Country": "Canada", "Team size": "abc", "Newsletter": True}
        with patch("requests.post", return_value=notion_response(200, {"id": "page-9"})) as post:
            resp = variant_handler.handler(make_event(body=body, path="/variant"), None)

        assert resp["statusCode"] == 201
        props = post.call_args.kwargs["json"]["properties"]
        assert props["Country"] == {"select": {"name": "Canada"}}
        assert props["Team size"] == {"number": None}
        assert props["Newsletter"] == {"checkbox": True}

    def test_preflight(self, configured, make_event) -> None:
        with patch("requests.post") as post:
            resp = variant_handler.handler(make_event("OPTIONS", origin="https://www.leancompanion.com", path="/variant"), None)
        assert resp["statusCode"] == 204
        assert resp["headers"]["Access-Control-Allow-Origin"] == "https://www.leancompanion.com"
        post.assert_not_called()
