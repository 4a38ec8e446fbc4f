"""
Form ingest: CORS, method checks, field mapping and the Notion relay shared
by the /register and /variant functions.

Accepts API Gateway HTTP API events (payload v2) and REST/v1 proxy events.
"""
import base64
import binascii
import json
import logging

import requests

from ingest_errors import ConfigurationError, IngestError, MethodNotAllowedError
from notion_pages import create_page
from notion_props import map_to_notion_props

logger = logging.getLogger()

ALLOW_METHODS = "POST, OPTIONS"
ALLOW_HEADERS = "Content-Type"


def _headers(event) -> dict:
    return {str(k).lower(): v for k, v in (event.get("headers") or {}).items()}


def _method(event) -> str:
    # v2 carries it in requestContext.http, v1 at the top level
    http = (event.get("requestContext") or {}).get("http") or {}
    return (http.get("method") or event.get("httpMethod") or "").upper()


def _path(event) -> str:
    return event.get("rawPath") or event.get("path") or ""


def parse_body(event) -> dict:
    """Decode the JSON body. Missing, malformed or non-object bodies give {}."""
    raw = event.get("body")
    # direct invokes and console test events may hand over an already parsed body
    if isinstance(raw, dict):
        return raw
    if not raw or not isinstance(raw, (str, bytes, bytearray)):
        return {}
    try:
        if event.get("isBase64Encoded"):
            raw = base64.b64decode(raw).decode("utf-8")
        data = json.loads(raw)
    except (binascii.Error, UnicodeDecodeError, ValueError):
        logger.warning("Request body is not valid JSON, treating it as empty")
        return {}
    return data if isinstance(data, dict) else {}


def cors_headers(origin, allowed_origins) -> dict:
    allow = origin if origin in allowed_origins else allowed_origins[0]
    return {
        "Access-Control-Allow-Origin": allow,
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
    }


def _json_response(status: int, headers: dict, body: dict) -> dict:
    return {
        "statusCode": status,
        "headers": {**headers, "Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def _error_response(err: IngestError, headers: dict) -> dict:
    return _json_response(err.status_code, headers, {"ok": False, "error": err.message})


def handle(event, settings, schema, http=requests) -> dict:
    """Turn one API Gateway event into a Notion page and a JSON envelope."""
    req_headers = _headers(event)
    origin = req_headers.get("origin")
    method = _method(event)
    logger.info(f"{method} {_path(event)} origin={origin}")

    headers = cors_headers(origin, settings.allowed_origins)

    if method == "OPTIONS":
        return {"statusCode": 204, "headers": headers, "body": ""}

    try:
        if method != "POST":
            raise MethodNotAllowedError(method)

        data = parse_body(event)

        if not settings.configured:
            raise ConfigurationError()

        properties = map_to_notion_props(data, schema)
        page_id = create_page(settings, properties, http=http)
    except IngestError as e:
        logger.warning(f"Request rejected ({e.status_code}): {type(e).__name__}")
        return _error_response(e, headers)

    return _json_response(201, headers, {"ok": True, "data": {"id": page_id}})
