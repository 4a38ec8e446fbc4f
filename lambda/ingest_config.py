"""
Process configuration for the form ingest functions.

Read once per cold start: settings come from the Lambda environment, the
property schema from a JSON file so it can be edited without touching code.
"""
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ingest_errors import SchemaError
from notion_props import ENCODERS, PropertySpec

logger = logging.getLogger()

NOTION_URL = "https://api.notion.com/v1/pages"
NOTION_VERSION = "2022-06-28"

# First entry is the default Access-Control-Allow-Origin value
ALLOWED_ORIGINS = (
    "https://leancompanion.com",
    "https://www.leancompanion.com",
    "http://localhost:5173",
)

SCHEMAS_DIR = Path(__file__).parent / "form_schemas"


@dataclass(frozen=True)
class Settings:
    notion_token: Optional[str] = None
    notion_database_id: Optional[str] = None
    allowed_origins: Tuple[str, ...] = ALLOWED_ORIGINS
    notion_url: str = NOTION_URL
    notion_version: str = NOTION_VERSION
    timeout: Optional[float] = None
    log_level: str = "INFO"

    @property
    def configured(self) -> bool:
        return bool(self.notion_token and self.notion_database_id)


def _fetch_token_from_ssm(param_name: str) -> Optional[str]:
    try:
        ssm = boto3.client("ssm")
        resp = ssm.get_parameter(Name=param_name, WithDecryption=True)
        return resp["Parameter"]["Value"]
    except ClientError as e:
        code = e.response["Error"]["Code"]
        logger.error(f"SSM lookup for {param_name} failed ({code})")
    except BotoCoreError as e:
        logger.error(f"SSM lookup for {param_name} failed: {e}")
    return None


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid NOTION_TIMEOUT={raw!r}")
        return None
    return value if value > 0 else None


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ

    token = env.get("NOTION_TOKEN") or None
    if not token and env.get("NOTION_TOKEN_PARAM"):
        token = _fetch_token_from_ssm(env["NOTION_TOKEN_PARAM"])

    return Settings(
        notion_token=token,
        notion_database_id=env.get("NOTION_DB_ID") or None,
        timeout=_parse_timeout(env.get("NOTION_TIMEOUT")),
        log_level=(env.get("LOG_LEVEL") or "INFO").upper(),
    )


def configure_logging(settings: Settings) -> None:
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.INFO
    logging.getLogger().setLevel(level)


def _parse_property(entry) -> PropertySpec:
    if not isinstance(entry, dict):
        raise SchemaError(f"Property entry must be an object, got {entry!r}")

    name = entry.get("name")
    prop_type = entry.get("type")
    aliases = entry.get("aliases") or []

    if not name or not isinstance(name, str):
        raise SchemaError(f"Property without a name: {entry!r}")
    if prop_type not in ENCODERS:
        raise SchemaError(f"Unknown type {prop_type!r} for property {name!r}")
    if not isinstance(aliases, list) or not all(isinstance(a, str) and a for a in aliases):
        raise SchemaError(f"Aliases for {name!r} must be a list of non-empty strings")
    if not aliases:
        raise SchemaError(f"Property {name!r} has no input aliases")

    return PropertySpec(name=name, type=prop_type, aliases=tuple(aliases))


def parse_schema(doc) -> Tuple[PropertySpec, ...]:
    entries = doc.get("properties") if isinstance(doc, dict) else None
    if not entries:
        raise SchemaError("Schema must define a non-empty 'properties' list")

    specs = tuple(_parse_property(e) for e in entries)

    names = [s.name for s in specs]
    dupes = sorted({n for n in names if names.count(n) > 1})
    if dupes:
        raise SchemaError(f"Duplicate property names: {', '.join(dupes)}")

    titles = [s.name for s in specs if s.type == "title"]
    if len(titles) != 1:
        raise SchemaError(f"Schema needs exactly one title property, found {len(titles)}")

    return specs


def load_schema(path) -> Tuple[PropertySpec, ...]:
    path = Path(path)
    try:
        with open(path, "r", encoding="utf8") as fh:
            doc = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        raise SchemaError(f"Cannot read schema {path}: {e}") from e
    return parse_schema(doc)


def resolve_schema(route: str, environ: Optional[Mapping[str, str]] = None) -> Tuple[PropertySpec, ...]:
    """Load PROPERTY_SCHEMA_PATH if set, else the schema bundled for `route`."""
    env = os.environ if environ is None else environ
    override = env.get("PROPERTY_SCHEMA_PATH")
    path = Path(override) if override else SCHEMAS_DIR / f"{route}.json"
    specs = load_schema(path)
    logger.info(f"Loaded {len(specs)} properties for /{route} from {path}")
    return specs
