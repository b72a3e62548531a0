"""
validator.py - recursive contract validation
============================================

Public API
----------
validate(contract) -> bool
    Run every declared rule, surface deferred coercion failures, then
    recurse into nested contracts. Fills ``contract.errors`` (replacing any
    previous report) and returns the verdict. Never raises for a contract
    that was built successfully.

assert_valid(contract) -> Contract
    Same as :func:`validate` but raises :class:`InvalidContract` on failure.

error_paths(contract) -> dict[str, list[str]]
    Dotted-path view of the report *and* every invalid child's own report
    (``"user.username": ["can't be blank"]``), for hosts that want detail
    without walking the tree themselves.

A nested contract that fails contributes exactly one ``invalid`` descriptor
to its parent attribute; the child's own descriptors stay on the child.
"""

from __future__ import annotations

import logging

from .contract import Contract
from .errors import InvalidContract

__all__ = [
    "validate",
    "assert_valid",
    "error_paths",
]

log = logging.getLogger(__name__)


# --------------------------------------------------------------------------- #
# Core recursive validator                                                    #
# --------------------------------------------------------------------------- #

def validate(contract: Contract) -> bool:
    """Validate *contract* and every nested contract beneath it."""
    errors = contract.errors
    errors.clear()
    schema = contract.schema

    # 1) deferred coercion failures + declared rules -----------------------
    for name, spec in schema.attributes.items():
        failure = contract.cast_failures.get(name)
        if failure is not None:
            errors.add(name, "coercion", f"is not a valid {failure.type_name}")

        value = contract.values[name]
        for rule in spec.rules:
            for kind, message in rule.errors_for(value):
                errors.add(name, kind, message)

    # 2) nested contracts --------------------------------------------------
    for spec in schema.nested_attributes:
        child = contract.values[spec.name]
        if child is None:
            continue
        if not (isinstance(child, Contract) and child.schema is spec.type.schema):
            errors.add(spec.name, "invalid")
            continue
        if not validate(child):
            errors.add(spec.name, "invalid")

    # 3) verdict -----------------------------------------------------------
    valid = not errors
    log.debug("%s valid=%s errors=%s", schema.qualname, valid, errors.details())
    return valid


def assert_valid(contract: Contract) -> Contract:
    """Return *contract* if it validates; raise :class:`InvalidContract` otherwise."""
    if not validate(contract):
        raise InvalidContract(contract)
    return contract


# --------------------------------------------------------------------------- #
# Reporting                                                                   #
# --------------------------------------------------------------------------- #

def error_paths(contract: Contract, *, path: str = "") -> dict[str, list[str]]:
    """Flatten the already-populated reports of *contract* and its children."""
    out: dict[str, list[str]] = {}
    for name, messages in contract.errors.messages().items():
        out[f"{path}{name}"] = messages

    for spec in contract.schema.nested_attributes:
        child = contract.values[spec.name]
        if isinstance(child, Contract) and child.errors:
            out.update(error_paths(child, path=f"{path}{spec.name}."))
    return out
