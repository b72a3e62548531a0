"""
types.py - attribute coercers
=============================

Every declared attribute owns a *type* that turns an untyped raw value into
the attribute's declared shape. Types never validate; they only reshape.

Public API
----------
CoercionError
    Raised by a strict coercer when the input cannot be cast. Contract
    construction catches it and defers it to validation.

PrimitiveType (and subclasses)
    ``value``, ``string``, ``integer``, ``float``, ``decimal``, ``boolean``,
    ``date`` and ``datetime``.

NestedContractType
    Composite type that casts a mapping into a child contract of a
    sub-schema.

lookup(kind) -> PrimitiveType
    Resolve a type name (or pass a type instance through).
"""

from __future__ import annotations

import datetime as _dt
import math
import numbers
import re
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from . import utils
from .errors import SchemaError

__all__ = [
    "CoercionError",
    "PrimitiveType",
    "Value",
    "String",
    "Integer",
    "Float",
    "DecimalType",
    "Boolean",
    "Date",
    "DateTime",
    "NestedContractType",
    "lookup",
]

# --------------------------------------------------------------------------- #
# Exceptions                                                                  #
# --------------------------------------------------------------------------- #

class CoercionError(ValueError):
    """Raised when *value* cannot be cast to *type_name*."""

    def __init__(self, type_name: str, value: Any):
        self.type_name = type_name
        self.value = value
        super().__init__(f"cannot cast {value!r} to {type_name}")


_INT_RE = re.compile(r"^[+\-]?\d+$")
_NUM_RE = re.compile(r"^[+\-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+\-]?\d+)?$")

_TRUE_STRINGS = frozenset({"true", "t", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "f", "0", "no", "off"})


def _text(value: str | bytes) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace").strip()
    return value.strip()


# --------------------------------------------------------------------------- #
# Primitive types                                                             #
# --------------------------------------------------------------------------- #

class PrimitiveType:
    """Identity coercer and base class of every attribute type.

    ``None`` always casts to ``None`` (absent); subclasses implement
    :meth:`cast_value` for everything else.
    """

    name = "value"

    def cast(self, value: Any) -> Any:
        if value is None:
            return None
        return self.cast_value(value)

    def cast_value(self, value: Any) -> Any:
        return value

    def fail(self, value: Any) -> CoercionError:
        return CoercionError(self.name, value)

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


class Value(PrimitiveType):
    name = "value"


class String(PrimitiveType):
    """Lenient: scalars are stringified, other shapes pass through."""

    name = "string"

    def cast_value(self, value):
        if isinstance(value, str):
            return value
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, numbers.Number):
            return str(value)
        if isinstance(value, (_dt.date, _dt.datetime)):
            return value.isoformat()
        return value


class Integer(PrimitiveType):
    name = "integer"

    def cast_value(self, value):
        if isinstance(value, bool):
            raise self.fail(value)
        if isinstance(value, numbers.Integral):
            return int(value)
        if isinstance(value, (numbers.Real, Decimal)):
            try:
                if math.isfinite(value) and value == int(value):
                    return int(value)
            except (TypeError, ValueError, OverflowError, InvalidOperation):
                pass
            raise self.fail(value)
        if isinstance(value, (str, bytes)):
            text = _text(value)
            if not text:
                return None
            if _INT_RE.fullmatch(text):
                try:
                    return int(text)
                except ValueError:
                    pass   # past the interpreter's int digit limit
        raise self.fail(value)


class Float(PrimitiveType):
    name = "float"

    def cast_value(self, value):
        if isinstance(value, bool):
            raise self.fail(value)
        if isinstance(value, (numbers.Real, Decimal)):
            try:
                return float(value)
            except (OverflowError, ValueError) as exc:
                raise self.fail(value) from exc
        if isinstance(value, (str, bytes)):
            text = _text(value)
            if not text:
                return None
            if _NUM_RE.fullmatch(text):
                return float(text)
        raise self.fail(value)


class DecimalType(PrimitiveType):
    name = "decimal"

    def cast_value(self, value):
        if isinstance(value, bool):
            raise self.fail(value)
        if isinstance(value, Decimal):
            return value
        if isinstance(value, numbers.Integral):
            return Decimal(int(value))
        if isinstance(value, numbers.Real):
            if not math.isfinite(value):
                raise self.fail(value)
            return Decimal(str(value))
        if isinstance(value, (str, bytes)):
            text = _text(value)
            if not text:
                return None
            if _NUM_RE.fullmatch(text):
                return Decimal(text)
        raise self.fail(value)


class Boolean(PrimitiveType):
    name = "boolean"

    def cast_value(self, value):
        if isinstance(value, bool):
            return value
        if isinstance(value, numbers.Integral) and int(value) in (0, 1):
            return bool(int(value))
        if isinstance(value, (str, bytes)):
            text = _text(value).lower()
            if not text:
                return None
            if text in _TRUE_STRINGS:
                return True
            if text in _FALSE_STRINGS:
                return False
        raise self.fail(value)


class Date(PrimitiveType):
    name = "date"

    def cast_value(self, value):
        if isinstance(value, _dt.datetime):
            return value.date()
        if isinstance(value, _dt.date):
            return value
        if isinstance(value, (str, bytes)):
            text = _text(value)
            if not text:
                return None
            try:
                return utils._parse_date(text)
            except ValueError:
                pass
        raise self.fail(value)


class DateTime(PrimitiveType):
    name = "datetime"

    def cast_value(self, value):
        if isinstance(value, _dt.datetime):
            return value
        if isinstance(value, _dt.date):
            return _dt.datetime(value.year, value.month, value.day)
        if isinstance(value, (str, bytes)):
            text = _text(value)
            if not text:
                return None
            try:
                return utils._parse_datetime(text)
            except ValueError:
                pass
        raise self.fail(value)


# --------------------------------------------------------------------------- #
# Nested contracts                                                            #
# --------------------------------------------------------------------------- #

class NestedContractType(PrimitiveType):
    """Casts a mapping into a contract of :attr:`schema`.

    * ``None`` stays ``None`` (absent, no child is built).
    * A ``Mapping`` becomes a child contract built from its entries.
    * Any contract passes through unchanged; validation rejects one bound
      to a different schema.
    * Anything else passes through unchanged; validation rejects it.
    """

    name = "contract"

    def __init__(self, schema):
        self.schema = schema

    def cast_value(self, value):
        from .contract import Contract

        if isinstance(value, Contract):
            return value
        if isinstance(value, Mapping):
            return Contract(self.schema, value)
        return value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, NestedContractType) and other.schema is self.schema

    def __hash__(self) -> int:
        return hash((NestedContractType, id(self.schema)))

    def __repr__(self) -> str:
        return f"<NestedContractType {self.schema.qualname!r}>"


# --------------------------------------------------------------------------- #
# Registry                                                                    #
# --------------------------------------------------------------------------- #

_TYPE_MAP: dict[str, PrimitiveType] = {
    t.name: t
    for t in (Value(), String(), Integer(), Float(), DecimalType(), Boolean(), Date(), DateTime())
}


def lookup(kind: str | PrimitiveType) -> PrimitiveType:
    """Return the coercer registered under *kind*."""
    if isinstance(kind, PrimitiveType):
        return kind
    try:
        return _TYPE_MAP[kind]
    except (KeyError, TypeError):
        raise SchemaError(f"unknown attribute type {kind!r}; expected one of {sorted(_TYPE_MAP)}") from None
