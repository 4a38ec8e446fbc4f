"""
POST /register: lead registration form -> Notion database page.
"""
from form_ingest import handle
from ingest_config import configure_logging, load_settings, resolve_schema

SETTINGS = load_settings()
configure_logging(SETTINGS)
SCHEMA = resolve_schema("register")


def handler(event, context):
    return handle(event, SETTINGS, SCHEMA)
