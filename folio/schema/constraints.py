#!/usr/bin/env python3
"""
constraints.py
--------------
Named predicates that refine the value set of a primitive schema node.

A Constraint is pure: its check is a function of the candidate value
only. Constraints are attached to primitive nodes by the combinators in
nodes.py and run by the validator after the value's type has been
accepted, so checks may assume they receive the coerced value
(str for strings, int/float for numbers, date/datetime for dates).

Usage:
    from folio.schema import constraints

    c = constraints.min_length(3)
    c.check("ab")      # False
    c.describe()       # 'must be at least 3 characters long'
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, Optional, Tuple
from urllib.parse import urlparse

STRING = "string"
NUMBER = "number"
BOOLEAN = "boolean"
DATE = "date"

PRIMITIVE_KINDS: Tuple[str, ...] = (STRING, NUMBER, BOOLEAN, DATE)

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass(frozen=True)
class Constraint:
    """
    A named, composable predicate.

    Attributes:
        name: Stable identifier reported in ConstraintViolation errors
        description: Human-readable rule, used in error messages
        predicate: Pure function of the candidate value
        applies_to: Primitive kinds this constraint may be attached to
        params: Parameters the constraint was built with (for export)
    """

    name: str
    description: str
    predicate: Callable[[Any], bool] = field(compare=False)
    applies_to: FrozenSet[str] = frozenset(PRIMITIVE_KINDS)
    params: Tuple[Tuple[str, Any], ...] = ()

    def check(self, value: Any) -> bool:
        return bool(self.predicate(value))

    def describe(self) -> str:
        return self.description

    def param(self, key: str) -> Optional[Any]:
        return dict(self.params).get(key)


# ----- String constraints -----

def non_empty() -> Constraint:
    return Constraint(
        name="nonEmpty",
        description="must not be empty",
        predicate=lambda value: len(value) > 0,
        applies_to=frozenset({STRING}),
    )


def min_length(n: int) -> Constraint:
    return Constraint(
        name="minLength",
        description=f"must be at least {n} characters long",
        predicate=lambda value: len(value) >= n,
        applies_to=frozenset({STRING}),
        params=(("min", n),),
    )


def max_length(n: int) -> Constraint:
    return Constraint(
        name="maxLength",
        description=f"must be at most {n} characters long",
        predicate=lambda value: len(value) <= n,
        applies_to=frozenset({STRING}),
        params=(("max", n),),
    )


def exact_length(n: int) -> Constraint:
    return Constraint(
        name="length",
        description=f"must be exactly {n} characters long",
        predicate=lambda value: len(value) == n,
        applies_to=frozenset({STRING}),
        params=(("length", n),),
    )


def _looks_like_url(value: str) -> bool:
    parsed = urlparse(value)
    return bool(parsed.scheme) and (bool(parsed.netloc) or parsed.scheme == "mailto")


def is_url() -> Constraint:
    """URL-shaped string: needs a scheme and a host (``mailto:`` excepted)."""
    return Constraint(
        name="isUrl",
        description="must be a valid URL",
        predicate=_looks_like_url,
        applies_to=frozenset({STRING}),
    )


def is_email() -> Constraint:
    return Constraint(
        name="isEmail",
        description="must be a valid email address",
        predicate=lambda value: _EMAIL_PATTERN.match(value) is not None,
        applies_to=frozenset({STRING}),
    )


def matches(pattern: str) -> Constraint:
    """
    String must match a regular expression (anywhere, like re.search).

    Raises:
        re.error: If the pattern does not compile
    """
    compiled = re.compile(pattern)
    return Constraint(
        name="matches",
        description=f"must match pattern {pattern!r}",
        predicate=lambda value: compiled.search(value) is not None,
        applies_to=frozenset({STRING}),
        params=(("pattern", pattern),),
    )


# ----- Number constraints -----

def positive() -> Constraint:
    return Constraint(
        name="positive",
        description="must be greater than 0",
        predicate=lambda value: value > 0,
        applies_to=frozenset({NUMBER}),
    )


def nonnegative() -> Constraint:
    return Constraint(
        name="nonnegative",
        description="must be greater than or equal to 0",
        predicate=lambda value: value >= 0,
        applies_to=frozenset({NUMBER}),
    )


def _is_whole(value: Any) -> bool:
    # Large ints cannot be converted to float
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def integer() -> Constraint:
    return Constraint(
        name="integer",
        description="must be a whole number",
        predicate=_is_whole,
        applies_to=frozenset({NUMBER}),
    )


def min_value(n: float) -> Constraint:
    return Constraint(
        name="min",
        description=f"must be greater than or equal to {n}",
        predicate=lambda value: value >= n,
        applies_to=frozenset({NUMBER}),
        params=(("min", n),),
    )


def max_value(n: float) -> Constraint:
    return Constraint(
        name="max",
        description=f"must be less than or equal to {n}",
        predicate=lambda value: value <= n,
        applies_to=frozenset({NUMBER}),
        params=(("max", n),),
    )
