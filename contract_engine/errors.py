"""
errors.py - exceptions and the per-attribute error report
=========================================================

Public API
----------
SchemaError
    Raised for declaration-time misuse (undeclared attributes, unknown
    types, declarations on a sealed builder).

InvalidContract
    Raised by :func:`contract_engine.validator.assert_valid`.

ErrorDetail
    One ``(attribute, kind, message)`` descriptor.

Errors
    Read-only mapping ``attribute -> [ErrorDetail, ...]`` filled by the
    validation engine.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Iterator

from . import utils

__all__ = [
    "SchemaError",
    "InvalidContract",
    "ErrorDetail",
    "Errors",
]

# --------------------------------------------------------------------------- #
# Exceptions                                                                  #
# --------------------------------------------------------------------------- #

class SchemaError(ValueError):
    """Raised when a schema declaration is malformed or used incorrectly."""


class InvalidContract(ValueError):
    """Raised when a contract is asserted valid but fails validation."""

    def __init__(self, contract):
        self.contract = contract
        self.errors = contract.errors
        detail = "; ".join(contract.errors.full_messages()) or "is invalid"
        super().__init__(f"{contract.schema.qualname}: {detail}")


# --------------------------------------------------------------------------- #
# Error descriptors                                                           #
# --------------------------------------------------------------------------- #

DEFAULT_MESSAGES: dict[str, str] = {
    "invalid":   "is invalid",
    "blank":     "can't be blank",
    "coercion":  "could not be cast",
    "inclusion": "is not included in the list",
    "exclusion": "is reserved",
}


@dataclass(frozen=True)
class ErrorDetail:
    """A single error descriptor attached to an attribute."""

    attribute: str
    kind: str
    message: str
    scope: str = ""

    @property
    def key(self) -> str:
        """Message key scoped by the owning schema's identity."""
        return f"contracts.{self.scope}.attributes.{self.attribute}.{self.kind}"

    @property
    def full_message(self) -> str:
        return f"{utils._humanize(self.attribute)} {self.message}"


# --------------------------------------------------------------------------- #
# Error report                                                                #
# --------------------------------------------------------------------------- #

class Errors(Mapping):
    """Per-attribute error report of one contract.

    Looking up an attribute without errors returns an empty list, so
    ``errors["name"]`` is always safe. Membership and iteration only cover
    attributes that actually carry errors.
    """

    def __init__(self, scope: str = ""):
        self.scope = scope
        self._details: dict[str, list[ErrorDetail]] = {}

    # Mapping protocol -------------------------------------------------------
    def __getitem__(self, attribute: str) -> list[ErrorDetail]:
        return list(self._details.get(attribute, ()))

    def __contains__(self, attribute: object) -> bool:
        return attribute in self._details

    def __iter__(self) -> Iterator[str]:
        return iter(self._details)

    def __len__(self) -> int:
        return len(self._details)

    def __repr__(self) -> str:
        return f"<Errors {self.messages()!r}>"

    # Mutation (validation engine only) --------------------------------------
    def add(self, attribute: str, kind: str = "invalid", message: str | None = None) -> ErrorDetail:
        """Append a descriptor for *attribute* and return it."""
        if message is None:
            message = DEFAULT_MESSAGES.get(kind, DEFAULT_MESSAGES["invalid"])
        detail = ErrorDetail(attribute, kind, message, self.scope)
        self._details.setdefault(attribute, []).append(detail)
        return detail

    def clear(self) -> None:
        self._details.clear()

    # Views ------------------------------------------------------------------
    def added(self, attribute: str, kind: str = "invalid") -> bool:
        return any(d.kind == kind for d in self._details.get(attribute, ()))

    def count(self) -> int:
        """Total number of descriptors across all attributes."""
        return sum(len(v) for v in self._details.values())

    def messages(self) -> dict[str, list[str]]:
        return {attr: [d.message for d in details] for attr, details in self._details.items()}

    def details(self) -> dict[str, list[str]]:
        return {attr: [d.kind for d in details] for attr, details in self._details.items()}

    def full_messages(self) -> list[str]:
        return [d.full_message for details in self._details.values() for d in details]

    to_dict = messages
