"""
POST /variant: same relay as /register with the extended property set
(country, team size, newsletter opt-in, message).
"""
from form_ingest import handle
from ingest_config import configure_logging, load_settings, resolve_schema

SETTINGS = load_settings()
configure_logging(SETTINGS)
SCHEMA = resolve_schema("variant")


def handler(event, context):
    return handle(event, SETTINGS, SCHEMA)
