"""
Identifier normalization and parent-link extraction.

Records reach the pedigree code in several shapes depending on where they
were loaded from: ORM rows, pydantic models, or JSON payloads with flat
``sire_id``/``dam_id`` fields, camelCase ``sireId``/``damId``, nested
``sire: {"id": ...}`` objects or a ``parents`` sub-record. Everything here
reduces those shapes to canonical string ids before any comparison runs.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from .schemas import ParentLinks

_MISSING = object()

ID_KEYS = ("id", "ID", "animal_id")
SIRE_KEYS = ("sire_id", "sireId", "sire", "farm_sire")
DAM_KEYS = ("dam_id", "damId", "dam", "farm_dam")


def normalize_id(value: Any) -> Optional[str]:
    """Canonical string form of an identifier, or None when absent.

    5, 5.0, "5" and " 05 " all normalize to "5". Empty values and 0 (the
    "no record" id used by WordPress-style payloads) normalize to None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        if value == 0:
            return None
        try:
            return str(value)
        except ValueError:
            # Past the interpreter's int-to-str digit limit; not a usable id
            return None
    if isinstance(value, float):
        if not value.is_integer():
            return str(value)
        return str(int(value)) if value != 0 else None
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        if s.isascii() and s.isdigit():
            return s.lstrip("0") or None
        return s
    return None


def ids_match(a: Any, b: Any) -> bool:
    """True only when both ids are present and denote the same record."""
    na = normalize_id(a)
    if na is None:
        return False
    return na == normalize_id(b)


def _get(record: Any, key: str) -> Any:
    if record is None:
        return _MISSING
    if isinstance(record, Mapping):
        return record.get(key, _MISSING)
    return getattr(record, key, _MISSING)


def _first(record: Any, keys: tuple[str, ...]) -> Any:
    for key in keys:
        value = _get(record, key)
        if value is _MISSING or value is None:
            continue
        # Nested {"id": ...} object or an ORM relationship
        if isinstance(value, Mapping) or not isinstance(value, (str, int, float)):
            value = _first(value, ID_KEYS)
            if value is None:
                continue
        if normalize_id(value) is not None:
            return value
    return None


def extract_id(record: Any) -> Optional[str]:
    return normalize_id(_first(record, ID_KEYS))


def extract_parent_links(record: Any) -> Optional[ParentLinks]:
    """Canonical parent links of a record, or None if lineage is unavailable.

    Top-level parent fields win over a nested ``parents`` record. A record
    with neither a sire nor a dam id yields None, never an empty match key.
    """
    sources = [record]
    parents = _get(record, "parents")
    if parents is not _MISSING and parents is not None:
        sources.append(parents)

    sire_id = dam_id = None
    for source in sources:
        if sire_id is None:
            sire_id = normalize_id(_first(source, SIRE_KEYS))
        if dam_id is None:
            dam_id = normalize_id(_first(source, DAM_KEYS))

    links = ParentLinks(sire_id=sire_id, dam_id=dam_id)
    if links.is_empty:
        return None
    return links
