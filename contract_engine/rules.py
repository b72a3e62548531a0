"""
rules.py - per-attribute validation rules
=========================================

Rules are attached to an attribute at declaration time and run only when a
contract is validated. A rule inspects the *cast* value and reports zero or
more ``(kind, message)`` pairs.

Every rule except :class:`Presence` treats ``None`` (absent) as passing, so
"is it there" and "is it well-formed" stay separate concerns.
"""

from __future__ import annotations

import numbers
import re
from collections.abc import Collection, Sized
from decimal import Decimal
from typing import Any, Callable, Iterable

__all__ = [
    "Rule",
    "Presence",
    "Inclusion",
    "Exclusion",
    "Length",
    "Format",
    "Numericality",
    "Predicate",
]


class Rule:
    """Base class: override :meth:`check` to return a failing kind or ``None``."""

    messages: dict[str, str] = {"invalid": "is invalid"}
    allow_none = True

    def check(self, value: Any) -> str | None:
        raise NotImplementedError

    def message(self, kind: str) -> str:
        template = self.messages.get(kind, Rule.messages["invalid"])
        return template.format(**vars(self))

    def errors_for(self, value: Any) -> list[tuple[str, str]]:
        if value is None and self.allow_none:
            return []
        kind = self.check(value)
        if kind is None:
            return []
        return [(kind, self.message(kind))]

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v!r}" for k, v in vars(self).items() if v is not None)
        return f"{type(self).__name__}({args})"


class Presence(Rule):
    """Fails on ``None``, whitespace-only strings and empty collections."""

    messages = {"blank": "can't be blank"}
    allow_none = False

    def check(self, value):
        if value is None:
            return "blank"
        if isinstance(value, (str, bytes)):
            return "blank" if not value.strip() else None
        if isinstance(value, Sized) and len(value) == 0:
            return "blank"
        return None


class Inclusion(Rule):
    messages = {"inclusion": "is not included in the list"}

    def __init__(self, values: Iterable[Any]):
        self.values = tuple(values)

    def check(self, value):
        return None if value in self.values else "inclusion"


class Exclusion(Rule):
    messages = {"exclusion": "is reserved"}

    def __init__(self, values: Iterable[Any]):
        self.values = tuple(values)

    def check(self, value):
        return "exclusion" if value in self.values else None


class Length(Rule):
    messages = {
        "too_short":    "is too short (minimum is {minimum} characters)",
        "too_long":     "is too long (maximum is {maximum} characters)",
        "wrong_length": "is the wrong length (should be {exact} characters)",
        "invalid":      "is invalid",
    }

    def __init__(self, *, minimum: int | None = None, maximum: int | None = None, exact: int | None = None):
        if minimum is None and maximum is None and exact is None:
            raise ValueError("Length requires one of minimum, maximum or exact")
        self.minimum = minimum
        self.maximum = maximum
        self.exact = exact

    def check(self, value):
        if not isinstance(value, Collection):
            return "invalid"
        n = len(value)
        if self.exact is not None and n != self.exact:
            return "wrong_length"
        if self.minimum is not None and n < self.minimum:
            return "too_short"
        if self.maximum is not None and n > self.maximum:
            return "too_long"
        return None


class Format(Rule):
    """String must match *pattern* (searched, so anchor it if needed)."""

    messages = {"invalid": "is invalid"}

    def __init__(self, pattern: str | re.Pattern[str]):
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def check(self, value):
        if isinstance(value, str) and self.pattern.search(value):
            return None
        return "invalid"


class Numericality(Rule):
    messages = {
        "not_a_number":             "is not a number",
        "not_an_integer":           "must be an integer",
        "greater_than":             "must be greater than {greater_than}",
        "greater_than_or_equal_to": "must be greater than or equal to {greater_than_or_equal_to}",
        "less_than":                "must be less than {less_than}",
        "less_than_or_equal_to":    "must be less than or equal to {less_than_or_equal_to}",
    }

    def __init__(
        self,
        *,
        greater_than: Any = None,
        greater_than_or_equal_to: Any = None,
        less_than: Any = None,
        less_than_or_equal_to: Any = None,
        only_integer: bool = False,
    ):
        self.greater_than = greater_than
        self.greater_than_or_equal_to = greater_than_or_equal_to
        self.less_than = less_than
        self.less_than_or_equal_to = less_than_or_equal_to
        self.only_integer = only_integer

    def check(self, value):
        if isinstance(value, bool) or not isinstance(value, (numbers.Real, Decimal)):
            return "not_a_number"
        if self.only_integer and not isinstance(value, numbers.Integral):
            return "not_an_integer"
        if self.greater_than is not None and not value > self.greater_than:
            return "greater_than"
        if self.greater_than_or_equal_to is not None and not value >= self.greater_than_or_equal_to:
            return "greater_than_or_equal_to"
        if self.less_than is not None and not value < self.less_than:
            return "less_than"
        if self.less_than_or_equal_to is not None and not value <= self.less_than_or_equal_to:
            return "less_than_or_equal_to"
        return None


class Predicate(Rule):
    """Wraps a callable; a falsy result reports *kind* with *message*."""

    def __init__(self, fn: Callable[[Any], bool], *, kind: str = "invalid", message: str = "is invalid"):
        self.fn = fn
        self.kind = kind
        self.messages = {kind: message}

    def check(self, value):
        return None if self.fn(value) else self.kind

    def message(self, kind):
        return self.messages[kind]
