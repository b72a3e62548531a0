"""
contract.py - runtime contract instances
========================================

A :class:`Contract` binds one :class:`~contract_engine.schema.Schema` to one
raw input mapping. Values are cast eagerly when the contract is built;
errors are only filled in by validation.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from . import utils
from .errors import Errors
from .types import CoercionError

__all__ = ["Contract"]

log = logging.getLogger(__name__)


class Contract:
    """A cast, independently validatable instance of a schema.

    Parameters
    ----------
    schema : Schema
        The declaration this contract conforms to.
    data : Mapping, optional
        Raw input. Keys may be strings, enum members or bytes; unknown keys
        are dropped and missing keys become ``None`` (or the declared
        default).
    options : Any, optional
        Opaque side-channel value; never cast, validated or serialized.
    **attrs
        Extra raw input, merged over *data*.
    """

    def __init__(self, schema, data: Mapping[Any, Any] | None = None, /, *, options: Any = None, **attrs: Any):
        if data is not None and not isinstance(data, Mapping):
            raise TypeError(f"{schema.qualname} expects a mapping, got {type(data).__name__}")

        raw = utils._normalize_keys(data or {})
        raw.update(utils._normalize_keys(attrs))

        self._schema = schema
        self._options = options
        self._raw_values: dict[str, Any] = {}
        self._values: dict[str, Any] = {}
        self._cast_failures: dict[str, CoercionError] = {}
        self._errors = Errors(schema.i18n_key)

        for name, spec in schema.attributes.items():
            if name in raw:
                value = raw[name]
            elif spec.has_default:
                value = spec.default_value()
            else:
                value = None
            self._raw_values[name] = value
            try:
                self._values[name] = spec.cast(value)
            except CoercionError as exc:
                log.debug("%s.%s: %s", schema.qualname, name, exc)
                self._values[name] = None
                self._cast_failures[name] = exc

        dropped = set(raw) - set(schema.attributes)
        if dropped:
            log.debug("%s: ignoring unknown keys %s", schema.qualname, sorted(dropped))

    # ------------------------------------------------------------------ #
    # State                                                               #
    # ------------------------------------------------------------------ #
    @property
    def schema(self):
        return self._schema

    @property
    def options(self) -> Any:
        return self._options

    @property
    def values(self) -> Mapping[str, Any]:
        return MappingProxyType(self._values)

    @property
    def raw_values(self) -> Mapping[str, Any]:
        """Pre-coercion input for every declared attribute."""
        return MappingProxyType(self._raw_values)

    @property
    def cast_failures(self) -> Mapping[str, CoercionError]:
        """Coercion failures recorded at construction, surfaced by validation."""
        return MappingProxyType(self._cast_failures)

    @property
    def errors(self) -> Errors:
        return self._errors

    # ------------------------------------------------------------------ #
    # Attribute access                                                    #
    # ------------------------------------------------------------------ #
    def get(self, name: str) -> Any:
        """Cast value of *name*; ``KeyError`` for names the schema lacks."""
        try:
            return self._values[name]
        except KeyError:
            raise KeyError(f"{self._schema.qualname} has no attribute {name!r}") from None

    __getitem__ = get

    def raw(self, name: str) -> Any:
        try:
            return self._raw_values[name]
        except KeyError:
            raise KeyError(f"{self._schema.qualname} has no attribute {name!r}") from None

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        values = self.__dict__.get("_values", {})
        if name in values:
            return values[name]
        raise AttributeError(f"{self.__dict__.get('_schema')!r} has no attribute {name!r}")

    def __contains__(self, name: object) -> bool:
        return name in self._values

    # ------------------------------------------------------------------ #
    # Validation                                                          #
    # ------------------------------------------------------------------ #
    def is_valid(self) -> bool:
        from . import validator

        return validator.validate(self)

    def is_invalid(self) -> bool:
        return not self.is_valid()

    # ------------------------------------------------------------------ #
    # Serialization                                                       #
    # ------------------------------------------------------------------ #
    def to_mapping(self) -> dict[str, Any]:
        """Plain nested ``dict`` of cast values; absent attributes map to ``None``."""
        return {
            name: value.to_mapping() if isinstance(value, Contract) else value
            for name, value in self._values.items()
        }

    def slice(self, *names: str) -> dict[str, Any]:
        mapping = self.to_mapping()
        return {name: mapping[name] for name in names if name in mapping}

    def merge(self, other: Mapping[Any, Any]) -> dict[str, Any]:
        """Serialized mapping updated with *other* (no casting, no validation)."""
        mapping = self.to_mapping()
        mapping.update(utils._normalize_keys(other))
        return mapping

    def to_json(self, **kwargs: Any) -> str:
        kwargs.setdefault("ensure_ascii", False)
        return json.dumps(utils._json_safe(self.to_mapping()), **kwargs)

    # ------------------------------------------------------------------ #
    # Dunder                                                              #
    # ------------------------------------------------------------------ #
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Contract):
            return NotImplemented
        return other._schema is self._schema and other._values == self._values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        fields = " ".join(f"{k}={v!r}" for k, v in self._values.items())
        return f"<{self._schema.name} {fields}>"
