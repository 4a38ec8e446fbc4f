"""
Notion page creation: one POST /v1/pages per submission, no retry.
"""
import logging

import requests

from ingest_errors import DownstreamRejectionError, TransportError

logger = logging.getLogger()


def build_payload(database_id: str, properties: dict) -> dict:
    return {"parent": {"database_id": database_id}, "properties": properties}


def create_page(settings, properties: dict, http=requests):
    """
    Create a page in the configured database and return its id.

    Raises DownstreamRejectionError when Notion answers non-2xx, and
    TransportError for anything that goes wrong while talking to it.
    """
    headers = {
        "Authorization": f"Bearer {settings.notion_token}",
        "Notion-Version": settings.notion_version,
        "Content-Type": "application/json",
    }
    payload = build_payload(settings.notion_database_id, properties)

    try:
        r = http.post(settings.notion_url, headers=headers, json=payload, timeout=settings.timeout)
        if not 200 <= r.status_code < 300:
            logger.error(f"Notion rejected page creation: HTTP {r.status_code}")
            raise DownstreamRejectionError(r.text, r.status_code)
        out = r.json()
    except DownstreamRejectionError:
        raise
    except Exception as e:
        logger.error(f"Notion request failed: {e!r}")
        raise TransportError(str(e)) from e

    page_id = out.get("id") if isinstance(out, dict) else None
    logger.info(f"Notion page created: {page_id}")
    return page_id
