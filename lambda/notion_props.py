"""
Notion property encoders and the form -> Notion property mapping.
Pure functions, no I/O.
"""
import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

MAX_TEXT_LENGTH = 2000


@dataclass(frozen=True)
class PropertySpec:
    name: str  # exact Notion column name (accents and case matter)
    type: str
    aliases: Tuple[str, ...]


def _to_str(v) -> str:
    # booleans read "true"/"false" as the form client sends them
    if isinstance(v, bool):
        return "true" if v else "false"
    return str(v)


def _text(v) -> str:
    if v is None:
        return ""
    return _to_str(v)[:MAX_TEXT_LENGTH]


def title(v=None) -> dict:
    return {"title": [{"type": "text", "text": {"content": _text(v)}}]}


def rich_text(v=None) -> dict:
    return {"rich_text": [{"type": "text", "text": {"content": _text(v)}}]}


def email(v=None) -> dict:
    return {"email": v or ""}


def phone(v=None) -> dict:
    return {"phone_number": v or ""}


def _to_number(v) -> Optional[float]:
    if v is None or v == "":
        return None
    try:
        n = float(v)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(n):
        return None
    return int(n) if n.is_integer() else n


def number(v=None) -> dict:
    return {"number": _to_number(v)}


def select(v=None) -> dict:
    if v is None or v == "":
        return {"select": None}
    return {"select": {"name": _to_str(v)}}


def checkbox(v=None) -> dict:
    return {"checkbox": v is True or str(v).lower() == "true"}


ENCODERS = {
    "title": title,
    "rich_text": rich_text,
    "email": email,
    "phone_number": phone,
    "number": number,
    "select": select,
    "checkbox": checkbox,
}


def pick(data: Mapping[str, Any], aliases) -> Any:
    """Return the value of the first alias present in data (None and "" count as absent)."""
    for key in aliases:
        v = data.get(key)
        if v is not None and v != "":
            return v
    return None


def map_to_notion_props(data: Mapping[str, Any], schema) -> Dict[str, dict]:
    """
    Build the Notion `properties` object for one submission.

    Every property of the schema is always written, using the encoder's
    default when no alias is present in the submission.
    """
    props = {}
    for spec in schema:
        encode = ENCODERS[spec.type]
        props[spec.name] = encode(pick(data, spec.aliases))
    return props
