# contract_engine/card.py
from __future__ import annotations
from typing import Any, Iterable, Mapping, Sequence

from .contract import Contract
from .validator import error_paths

__all__ = ["to_markdown_card"]

def _format_scalar(v: Any) -> str:
    """Return a Markdown-safe scalar string."""
    if v is True:   return "true"
    if v is False:  return "false"
    if v is None:   return "null"
    return str(v)

def _format_mapping(v: Mapping[str, Any], depth: int = 0) -> list[str]:
    """Bulleted ``**key**: value`` lines, nested mappings indented below their key."""
    pad = "  " * depth
    lines: list[str] = []
    for key, item in v.items():
        if isinstance(item, Mapping):
            lines.append(f"{pad}- **{key}**:")
            lines.extend(_format_mapping(item, depth + 1))
        else:
            lines.append(f"{pad}- **{key}**: {_format_scalar(item)}")
    return lines

def _format_list(v: Iterable[Any]) -> str:
    """Return a bulleted Markdown list (no surrounding blank lines)."""
    return "\n".join(f"- {_format_scalar(item)}" for item in v)

def to_markdown_card(contract: Contract, *, heading_level: int = 2) -> str:
    """
    Convert a validated (or not yet validated) *contract* into a Markdown card.

    Parameters
    ----------
    contract : Contract
        Rendered through its serialized mapping; nested contracts become
        indented sub-bullets.
    heading_level : int, default 2
        Markdown heading level for the title; attributes sit one level below.

    Returns
    -------
    str
        Markdown document. An ``Errors`` section lists dotted-path messages
        when the last validation run failed.
    """
    h = "#" * heading_level
    sub = "#" * (heading_level + 1)
    parts: list[str] = [f"{h} {contract.schema.name}", ""]
    for key, value in contract.to_mapping().items():
        parts.append(f"{sub} {key.replace('_', ' ').title()}")
        if isinstance(value, Mapping):
            parts.append("\n".join(_format_mapping(value)))
        elif isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
            parts.append(_format_list(value))
        else:
            parts.append(_format_scalar(value))
        parts.append("")             # blank line after each section

    if contract.errors:
        parts.append(f"{sub} Errors")
        parts.append(_format_list(f"{path}: {msg}" for path, msgs in error_paths(contract).items() for msg in msgs))
        parts.append("")
    return "\n".join(parts).rstrip()
