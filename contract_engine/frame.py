"""
frame.py - batch helpers for tabular hosts (ETL rows, CSV extracts).

Public API
----------
from_frame(schema, frame)     : one contract per DataFrame row
to_frame(contracts)           : serialized contracts as a flattened DataFrame
validate_frame(schema, frame) : per-row ``valid`` / ``errors`` report

Nested attributes travel as dotted column names (``user.username``), the
layout produced by :func:`pandas.json_normalize`. Missing cells (``NaN``,
``None``, ``NaT``) are treated as absent; a nested prefix whose cells are
all missing stays absent instead of producing an empty child contract.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

import pandas as pd

from .contract import Contract
from .validator import error_paths, validate

__all__ = [
    "from_frame",
    "to_frame",
    "validate_frame",
]

log = logging.getLogger(__name__)


def _is_missing(value: Any) -> bool:
    return pd.api.types.is_scalar(value) and bool(pd.isna(value))


def _unflatten(record: Mapping[str, Any], sep: str) -> dict[str, Any]:
    """``{"user.username": "a"}`` -> ``{"user": {"username": "a"}}``."""
    out: dict[str, Any] = {}
    for column, value in record.items():
        if _is_missing(value):
            continue
        *parents, leaf = str(column).split(sep)
        node = out
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = node[part] = {}
            node = child
        node[leaf] = value
    return out


def from_frame(schema, frame: pd.DataFrame, *, options: Any = None, sep: str = ".") -> list[Contract]:
    """Build one contract of *schema* per row of *frame*, in row order."""
    records = frame.to_dict(orient="records")
    log.debug("building %d %s contracts from frame", len(records), schema.qualname)
    return [schema.new(_unflatten(rec, sep), options=options) for rec in records]


def to_frame(contracts: Iterable[Contract], *, sep: str = ".") -> pd.DataFrame:
    """Serialize *contracts*; nested contracts become dotted columns."""
    return pd.json_normalize([c.to_mapping() for c in contracts], sep=sep)


def validate_frame(schema, frame: pd.DataFrame, *, options: Any = None, sep: str = ".") -> pd.DataFrame:
    """Validate every row; the result shares *frame*'s index."""
    contracts = from_frame(schema, frame, options=options, sep=sep)
    verdicts = [validate(c) for c in contracts]
    report = pd.DataFrame(
        {
            "valid":  verdicts,
            "errors": [error_paths(c) for c in contracts],
        },
        index=frame.index,
    )
    log.debug("%s: %d/%d rows valid", schema.qualname, sum(verdicts), len(verdicts))
    return report
