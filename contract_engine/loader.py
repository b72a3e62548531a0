"""
loader.py - build schemas from JSON contract documents.

Public API
----------
load_schema(path) : read a JSON contract from disk or package data
schema_from_mapping(doc, name=None) : build a Schema from a parsed contract

Contract format (JSON-Schema-lite)::

    {
      "title": "SignupContract",
      "fields": {
        "channel_id": {"type": "integer", "required": true, "minimum": 1},
        "plan":       {"type": "string", "enum": ["free", "pro"], "default": "free"},
        "user": {
          "required": true,
          "fields": {
            "username": {"type": "string", "required": true, "min_length": 3}
          }
        }
      }
    }

A field carrying ``fields`` is a nested contract. ``type`` may be a list
(``["integer", "null"]``); ``null`` is dropped because every attribute
already accepts absence.
"""

from __future__ import annotations

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any, Mapping

from . import utils
from .errors import SchemaError
from .schema import MISSING, Schema, SchemaBuilder

__all__ = [
    "load_schema",
    "schema_from_mapping",
]

log = logging.getLogger(__name__)

_JSON_TYPES: dict[str, str] = {
    "string":   "string",
    "integer":  "integer",
    "number":   "float",
    "decimal":  "decimal",
    "boolean":  "boolean",
    "date":     "date",
    "datetime": "datetime",
    "object":   "value",
    "list":     "value",
    "array":    "value",
    "value":    "value",
}

_FORMATS: dict[str, str] = {
    "date-time": "datetime",
    "date":      "date",
}

# --------------------------------------------------------------------------- #
# Helpers                                                                     #
# --------------------------------------------------------------------------- #

def _read(path: Path) -> Mapping[str, Any]:
    """Read & parse a JSON contract, raising crisp errors on failure."""
    try:
        with path.open(encoding="utf-8") as fd:
            return json.load(fd)
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Contract not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc


def _resolve_type(name: str, meta: Mapping[str, Any]) -> str:
    declared = meta.get("type", "value")
    candidates = list(declared) if isinstance(declared, (list, tuple)) else [declared]
    candidates = [t for t in candidates if t != "null"] or ["value"]
    if len(candidates) > 1:
        raise SchemaError(f"field {name!r}: union types {candidates} are not supported")

    (json_type,) = candidates
    if json_type == "string" and meta.get("format") in _FORMATS:
        return _FORMATS[meta["format"]]
    try:
        return _JSON_TYPES[json_type]
    except (KeyError, TypeError):
        raise SchemaError(f"field {name!r}: unknown type {json_type!r}") from None


def _declare_rules(builder: SchemaBuilder, name: str, meta: Mapping[str, Any]) -> None:
    length = {k: meta[src] for k, src in (("minimum", "min_length"), ("maximum", "max_length")) if src in meta}
    bounds = {
        k: meta[src]
        for k, src in (("greater_than_or_equal_to", "minimum"), ("less_than_or_equal_to", "maximum"))
        if src in meta
    }
    builder.validates(
        name,
        presence=bool(meta.get("required")),
        inclusion=meta.get("enum"),
        length=length or None,
        format=meta.get("pattern"),
        numericality=bounds or False,
    )


def _declare_fields(builder: SchemaBuilder, fields: Any) -> None:
    if not isinstance(fields, Mapping):
        raise SchemaError(f"{builder.qualname}: 'fields' must be an object, got {type(fields).__name__}")

    for name, meta in fields.items():
        if not isinstance(meta, Mapping):
            raise SchemaError(f"{builder.qualname}.{name}: field spec must be an object")
        default = meta.get("default", MISSING)
        if "fields" in meta:
            builder.attribute(
                name,
                default=default,
                block=lambda child, sub=meta["fields"]: _declare_fields(child, sub),
            )
        else:
            builder.attribute(name, _resolve_type(name, meta), default=default)
        _declare_rules(builder, name, meta)


# --------------------------------------------------------------------------- #
# Public utilities                                                            #
# --------------------------------------------------------------------------- #

def schema_from_mapping(doc: Mapping[str, Any], *, name: str | None = None) -> Schema:
    """Build a :class:`Schema` from a parsed JSON contract document."""
    if not isinstance(doc, Mapping) or "fields" not in doc:
        raise SchemaError("contract document must be an object with a 'fields' key")
    builder = SchemaBuilder(name or doc.get("title") or "Contract")
    _declare_fields(builder, doc["fields"])
    return builder.build()


def load_schema(path: str | Path) -> Schema:
    p = Path(path)
    default_name = utils._camelize(p.stem)

    # 1) direct file on disk ------------------------------------------------
    if p.is_file():
        log.debug("loading contract from %s", p)
        return _from_document(_read(p), default_name)

    # 2) bundled resource (exact string or basename) -----------------------
    pkg = resources.files("contract_engine.schemas")
    candidates = (p.name, str(path))   # basename first, original second
    for name in candidates:
        try:
            text = pkg.joinpath(name).read_text(encoding="utf-8")
        except (FileNotFoundError, IsADirectoryError):
            continue   # try the next candidate
        try:
            doc = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in bundled contract {name}: {exc}") from exc
        log.debug("loading bundled contract %s", name)
        return _from_document(doc, default_name)

    # 3) give up -----------------------------------------------------------
    raise FileNotFoundError(
        f"Contract '{path}' not found on disk or in package data"
    )


def _from_document(doc: Any, default_name: str) -> Schema:
    title = doc.get("title") if isinstance(doc, Mapping) else None
    return schema_from_mapping(doc, name=title or default_name)
