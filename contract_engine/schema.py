"""
schema.py - contract schemas and the builder that declares them
===============================================================

A :class:`Schema` is the immutable declaration of a contract: for every
attribute its type (a primitive coercer or a nested sub-schema), its
validation rules and an optional default. Schemas are produced by a
:class:`SchemaBuilder`; nested attributes are declared with a *block* that
receives a fresh child builder::

    def user(u):
        u.attribute("username", "string")
        u.validates("username", presence=True)

    builder = SchemaBuilder("SignupContract")
    builder.attribute("channel_id", "integer")
    builder.attribute("user", block=user)
    builder.validates("channel_id", presence=True)
    schema = builder.build()

    contract = schema.new({"channel_id": "7", "user": {"username": "alice"}})

Each nested schema is named after its attribute (``UserContract``) and
carries a qualified name (``SignupContract.UserContract``) so error message
keys stay distinct even when two nested shapes are structurally identical.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping

from . import rules as _rules
from . import types as _types
from . import utils
from .errors import SchemaError

__all__ = [
    "MISSING",
    "AttributeSpec",
    "Schema",
    "SchemaBuilder",
]

log = logging.getLogger(__name__)


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


# --------------------------------------------------------------------------- #
# Declarations                                                                #
# --------------------------------------------------------------------------- #

@dataclass(frozen=True)
class AttributeSpec:
    """Declared shape of one attribute."""

    name: str
    type: _types.PrimitiveType
    rules: tuple[_rules.Rule, ...] = ()
    default: Any = MISSING

    @property
    def nested(self) -> bool:
        return isinstance(self.type, _types.NestedContractType)

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    def default_value(self) -> Any:
        """Fresh default for a contract whose input omits this attribute."""
        if callable(self.default):
            return self.default()
        return copy.deepcopy(self.default)

    def cast(self, value: Any) -> Any:
        return self.type.cast(value)


class Schema:
    """Immutable attribute set of a contract."""

    def __init__(self, name: str, attributes: Mapping[str, AttributeSpec], *, qualname: str | None = None):
        self.name = name
        self.qualname = qualname or name
        self._attributes = MappingProxyType(dict(attributes))

    @classmethod
    def define(cls, name: str, block: Callable[["SchemaBuilder"], Any]) -> "Schema":
        """Declare a schema in one call: ``Schema.define("X", lambda s: ...)``."""
        builder = SchemaBuilder(name)
        block(builder)
        return builder.build()

    # Introspection ------------------------------------------------------------
    @property
    def attributes(self) -> Mapping[str, AttributeSpec]:
        return self._attributes

    @property
    def attribute_names(self) -> tuple[str, ...]:
        return tuple(self._attributes)

    @property
    def nested_attributes(self) -> tuple[AttributeSpec, ...]:
        return tuple(spec for spec in self._attributes.values() if spec.nested)

    @property
    def i18n_key(self) -> str:
        """``"Signup.UserContract"`` -> ``"signup/user_contract"``."""
        return "/".join(utils._underscore(part) for part in self.qualname.split("."))

    def subschema(self, name: str) -> "Schema":
        spec = self[name]
        if not spec.nested:
            raise SchemaError(f"{self.qualname}.{name} is not a nested contract")
        return spec.type.schema

    def __getitem__(self, name: str) -> AttributeSpec:
        try:
            return self._attributes[name]
        except KeyError:
            raise KeyError(f"{self.qualname} has no attribute {name!r}") from None

    def __contains__(self, name: object) -> bool:
        return name in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def __len__(self) -> int:
        return len(self._attributes)

    def __repr__(self) -> str:
        return f"<Schema {self.qualname} {list(self._attributes)}>"

    # Instantiation ------------------------------------------------------------
    def new(self, data: Mapping[Any, Any] | None = None, /, *, options: Any = None, **attrs: Any):
        """Build a :class:`~contract_engine.contract.Contract` bound to this schema."""
        from .contract import Contract

        return Contract(self, data, options=options, **attrs)


# --------------------------------------------------------------------------- #
# Builder                                                                     #
# --------------------------------------------------------------------------- #

class SchemaBuilder:
    """Mutable declaration surface; :meth:`build` seals it."""

    def __init__(self, name: str, *, parent: str | None = None):
        if not isinstance(name, str) or not name:
            raise SchemaError(f"schema name must be a non-empty string, got {name!r}")
        self.name = name
        self.qualname = f"{parent}.{name}" if parent else name
        self._specs: dict[str, AttributeSpec] = {}
        self._sealed = False

    def _ensure_open(self) -> None:
        if self._sealed:
            raise SchemaError(f"{self.qualname} is already built; declare attributes before building")

    def _ensure_declared(self, name: str) -> AttributeSpec:
        try:
            return self._specs[name]
        except KeyError:
            raise SchemaError(f"{self.qualname}: attribute {name!r} has not been declared") from None

    # Attributes ---------------------------------------------------------------
    def attribute(
        self,
        name: str,
        type: str | _types.PrimitiveType = "value",
        *,
        default: Any = MISSING,
        block: Callable[["SchemaBuilder"], Any] | None = None,
    ) -> "SchemaBuilder":
        """Declare *name*; with *block* the attribute becomes a nested contract.

        Declaring an existing name again replaces its previous spec, rules
        included.
        """
        self._ensure_open()
        if not isinstance(name, str) or not name:
            raise SchemaError(f"{self.qualname}: attribute name must be a non-empty string, got {name!r}")

        if block is not None:
            child = SchemaBuilder(f"{utils._camelize(name)}Contract", parent=self.qualname)
            block(child)
            coercer: _types.PrimitiveType = _types.NestedContractType(child.build())
        else:
            coercer = _types.lookup(type)

        if name in self._specs:
            log.warning("attribute %r redeclared on %s; previous declaration replaced", name, self.qualname)
        self._specs[name] = AttributeSpec(name, coercer, (), default)
        return self

    def validates(
        self,
        name: str,
        *rules: _rules.Rule,
        presence: bool = False,
        inclusion: Any = None,
        exclusion: Any = None,
        length: Mapping[str, int] | None = None,
        format: Any = None,
        numericality: bool | Mapping[str, Any] = False,
    ) -> "SchemaBuilder":
        """Append validation rules to a declared attribute."""
        self._ensure_open()
        spec = self._ensure_declared(name)

        added: list[_rules.Rule] = []
        if presence:
            added.append(_rules.Presence())
        if inclusion is not None:
            added.append(_rules.Inclusion(inclusion))
        if exclusion is not None:
            added.append(_rules.Exclusion(exclusion))
        if length is not None:
            added.append(_rules.Length(**length))
        if format is not None:
            added.append(_rules.Format(format))
        if numericality:
            added.append(_rules.Numericality(**({} if numericality is True else numericality)))
        for rule in rules:
            if not isinstance(rule, _rules.Rule):
                raise SchemaError(f"{self.qualname}.{name}: {rule!r} is not a Rule")
            added.append(rule)

        self._specs[name] = AttributeSpec(spec.name, spec.type, spec.rules + tuple(added), spec.default)
        return self

    # Finalisation -------------------------------------------------------------
    def build(self) -> Schema:
        """Return the immutable schema; the builder accepts no more declarations."""
        self._ensure_open()
        self._sealed = True
        schema = Schema(self.name, self._specs, qualname=self.qualname)
        log.debug("built schema %s with attributes %s", schema.qualname, list(schema.attribute_names))
        return schema
