"""
utils.py – shared, low-level utilities for the contract-engine package.

This module consolidates common helpers for:
- Key normalization (string / enum / bytes keyed input)
- Timestamps (ISO-8601 parsing for dates and date-times)
- JSON-safe conversion of serialized contracts
- Naming (humanized attribute names, schema identities)
"""

from __future__ import annotations

import datetime as _dt
import re
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping

# --------------------------------------------------------------------------- #
# Key normalization                                                           #
# --------------------------------------------------------------------------- #

def _normalize_key(key: Any) -> str:
    """Return the canonical ``str`` form of an input mapping key."""
    if isinstance(key, Enum):
        key = key.value if isinstance(key.value, str) else key.name
    if isinstance(key, bytes):
        return key.decode("utf-8", errors="replace")
    return str(key)


def _normalize_keys(data: Mapping[Any, Any]) -> dict[str, Any]:
    """Shallow copy of *data* with every key normalized (later keys win)."""
    return {_normalize_key(k): v for k, v in data.items()}


# --------------------------------------------------------------------------- #
# Timestamp parsing                                                           #
# --------------------------------------------------------------------------- #

_DT_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d{1,6})?)?)?"
    r"(?:Z|[+\-]\d{2}:\d{2})?$"
)
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def _parse_datetime(value: str) -> _dt.datetime:
    """Parse an ISO-8601 date-time string; raise ``ValueError`` otherwise."""
    text = value.strip()
    if not _DT_RE.fullmatch(text):
        raise ValueError(f"'{value}' is not ISO-8601 date-time")
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return _dt.datetime.fromisoformat(text)


def _parse_date(value: str) -> _dt.date:
    """Parse an ISO-8601 calendar date string; raise ``ValueError`` otherwise."""
    text = value.strip()
    if not _DATE_RE.fullmatch(text):
        raise ValueError(f"'{value}' is not an ISO-8601 date")
    return _dt.date.fromisoformat(text)


# --------------------------------------------------------------------------- #
# JSON helpers                                                                #
# --------------------------------------------------------------------------- #

def _json_safe(x: Any) -> Any:
    """Recursively prepare a serialized contract for ``json.dumps``."""
    if isinstance(x, Mapping):
        return {str(k): _json_safe(v) for k, v in x.items()}
    if isinstance(x, (list, tuple)):
        return [_json_safe(v) for v in x]
    if isinstance(x, (_dt.datetime, _dt.date)):
        return x.isoformat()
    if isinstance(x, Decimal):
        return str(x)
    return x


# --------------------------------------------------------------------------- #
# Naming                                                                      #
# --------------------------------------------------------------------------- #

def _camelize(name: str) -> str:
    """``"billing_address"`` -> ``"BillingAddress"``."""
    return "".join(part[:1].upper() + part[1:] for part in re.split(r"[_\-\s]+", name) if part)


def _underscore(name: str) -> str:
    """``"BillingAddressContract"`` -> ``"billing_address_contract"``."""
    s = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    s = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s)
    return s.replace("-", "_").lower()


def _humanize(name: str) -> str:
    """``"channel_id"`` -> ``"Channel id"``."""
    text = name.replace("_", " ").strip()
    return text[:1].upper() + text[1:]
