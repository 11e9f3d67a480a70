"""
Upgrades stored resume data of unknown or older shape to the current schema.

There is no version field: structure is inferred purely from which keys are
present. Everything here tolerates garbage and falls back to defaults, so
loading never fails because of what was stored.
"""

from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel

from resume_schema import (
    DEFAULT_SECTION_ORDER,
    KNOWN_SECTIONS,
    LIST_FIELDS,
    Entry,
    ResumeDocument,
    default_document,
    default_order,
    new_entry_id,
)
from utils.console_logger import log

# Anything json.loads can hand back
Untrusted = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]


def _coerce_text(value: Untrusted, required: bool) -> Optional[str]:
    if isinstance(value, str):
        return value
    # bool is an int subclass, but True is not meaningful resume text
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return "" if required else None


def _coerce_model(model_cls: type, raw: Mapping) -> BaseModel:
    required = getattr(model_cls, "REQUIRED_FIELDS", {})
    values = {}
    for name in model_cls.model_fields:
        if name == "id" or name not in raw:
            continue
        values[name] = _coerce_text(raw[name], required=name in required)
    return model_cls(**values)


def _coerce_entries(list_name: str, model_cls: type, items: list) -> List[Entry]:
    entries = []
    seen_ids = set()
    for position, item in enumerate(items):
        if not isinstance(item, Mapping):
            log(f"   ⚠️ Dropping malformed {list_name}[{position}] ({type(item).__name__}).")
            continue

        entry = _coerce_model(model_cls, item)
        raw_id = item.get("id")
        if isinstance(raw_id, str) and raw_id and raw_id not in seen_ids:
            entry.id = raw_id
        else:
            entry.id = new_entry_id()
        seen_ids.add(entry.id)
        entries.append(entry)
    return entries


def _migrate_key(key: str, raw_value: Untrusted, fallback: Any) -> Any:
    if key == "summary":
        if isinstance(raw_value, str) or (
            isinstance(raw_value, (int, float)) and not isinstance(raw_value, bool)
        ):
            return str(raw_value)
        log(f"   ⚠️ '{key}' is not text. Using default.")
        return fallback

    if key in LIST_FIELDS:
        if isinstance(raw_value, list):
            return _coerce_entries(key, LIST_FIELDS[key], raw_value)
        log(f"   ⚠️ '{key}' is not a list. Using default.")
        return fallback

    if isinstance(raw_value, Mapping):
        model_cls = type(fallback)
        return _coerce_model(model_cls, raw_value)
    log(f"   ⚠️ '{key}' is not an object. Using default.")
    return fallback


def migrate_document(raw: Untrusted) -> ResumeDocument:
    """
    Normalizes a stored document into a `ResumeDocument`.

    - Missing top-level keys are filled from `default_document()`.
    - Present keys are kept, never overwritten by defaults.
    - Keys the schema no longer knows (e.g. `events`) are dropped.
    - A malformed sub-tree falls back to the default for that key.
    """
    defaults = default_document()
    if raw is None:
        return defaults
    if not isinstance(raw, Mapping):
        log(f"   ⚠️ Stored resume is a {type(raw).__name__}, not an object. Using defaults.")
        return defaults

    dropped = [key for key in raw if key not in ResumeDocument.model_fields]
    if dropped:
        log(f"   🧹 Dropping retired resume fields: {', '.join(sorted(map(str, dropped)))}")

    values = {}
    for key in ResumeDocument.model_fields:
        fallback = getattr(defaults, key)
        if key not in raw:
            values[key] = fallback
        else:
            values[key] = _migrate_key(key, raw[key], fallback)
    return ResumeDocument(**values)


def _section_id(item: Untrusted) -> Optional[str]:
    if isinstance(item, str):
        return item
    # Older versions stored {"id": ..., "title": ...} objects
    if isinstance(item, Mapping) and isinstance(item.get("id"), str):
        return item["id"]
    return None


def migrate_order(raw: Untrusted) -> List[str]:
    """
    Normalizes a stored section order.

    Unknown and duplicate ids are removed, surviving ids keep their relative
    order, and known ids missing from storage are appended at the end.
    Idempotent.
    """
    if raw is None:
        return default_order()
    if not isinstance(raw, list):
        log(f"   ⚠️ Stored section order is a {type(raw).__name__}, not a list. Using defaults.")
        return default_order()

    order = []
    for item in raw:
        section_id = _section_id(item)
        if section_id in KNOWN_SECTIONS and section_id not in order:
            order.append(section_id)

    for section_id in DEFAULT_SECTION_ORDER:
        if section_id not in order:
            order.append(section_id)
    return order
