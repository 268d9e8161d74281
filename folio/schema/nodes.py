#!/usr/bin/env python3
"""
nodes.py
--------
Immutable schema nodes and their fluent combinators.

A schema node describes one validatable shape:
- PrimitiveNode: string, number, boolean or date, refined by constraints
- EnumNode: one of an ordered set of allowed strings
- ObjectNode: ordered named fields, each a schema node
- ArrayNode: homogeneous list of one element schema

Every combinator returns a new node built with dataclasses.replace, so a
fragment can be reused and specialised in many places without one usage
leaking into another:

    image = builders.obj({"src": builders.string(), "alt": builders.string()})
    hero_image = image.with_metadata({"group": "hero"})
    avatar = image.optional()        # image itself is unchanged

Metadata (editor hints, descriptions) travels with the node and is
never consulted by the validator.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import (
    Any,
    ClassVar,
    Iterable,
    Iterator,
    Mapping,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
    Union,
)

# --- Local imports ---
from folio.core.exceptions import SchemaDefinitionError
from folio.schema import constraints as c
from folio.utils.frozen import freeze


class _Missing:
    """Sentinel type for 'no default declared'."""

    _instance: Optional["_Missing"] = None

    def __new__(cls) -> "_Missing":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

FieldsInput = Union[Mapping[str, "SchemaNode"], Iterable[Tuple[str, "SchemaNode"]]]


class FieldSpec(NamedTuple):
    """One declared field of an ObjectNode, as seen by the validator."""

    name: str
    node: "SchemaNode"
    required: bool
    default: Any


def _empty_metadata() -> Mapping[str, Any]:
    return MappingProxyType({})


@dataclass(frozen=True)
class SchemaNode:
    """
    Base class for all schema nodes.

    Attributes:
        is_optional: Field may be absent from its parent object
        default: Value substituted when absent (MISSING if none)
        metadata: Advisory annotations, ignored by validation
    """

    kind: ClassVar[str] = "node"

    is_optional: bool = False
    default: Any = MISSING
    metadata: Mapping[str, Any] = field(default_factory=_empty_metadata)

    # ----- Presence -----

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING

    @property
    def is_required(self) -> bool:
        """Required means: neither optional nor carrying a default."""
        return not self.is_optional and not self.has_default

    def optional(self) -> "SchemaNode":
        return replace(self, is_optional=True)

    def required(self) -> "SchemaNode":
        """Undo optional() and with_default()."""
        return replace(self, is_optional=False, default=MISSING)

    def with_default(self, value: Any) -> "SchemaNode":
        """
        Supply a value for when the field is absent.

        The default is validated against this node right away and stored
        in its coerced, read-only form.

        Raises:
            SchemaDefinitionError: If the default does not satisfy the node
        """
        # Deferred: the validator imports this module
        from folio.validation.validator import validate

        result = validate(self.required(), value)
        if not result.ok:
            problems = "; ".join(error.message for error in result.errors)
            raise SchemaDefinitionError(
                f"Default {value!r} is invalid for {self.kind} schema: {problems}"
            )
        return replace(self, default=result.value)

    # ----- Metadata -----

    def with_metadata(
        self, metadata: Optional[Mapping[str, Any]] = None, **entries: Any
    ) -> "SchemaNode":
        """Merge advisory metadata into a copy of this node."""
        merged = dict(self.metadata)
        merged.update(metadata or {})
        merged.update(entries)
        return replace(self, metadata=freeze(merged))

    def editor(self, **hints: Any) -> "SchemaNode":
        """
        Attach editor hints, e.g. ``string().editor(input="media")``.

        Hints merge with any existing editor hints on the node.
        """
        current = dict(self.metadata.get("editor", {}))
        current.update(hints)
        return self.with_metadata(editor=current)

    def describe(self, text: str) -> "SchemaNode":
        return self.with_metadata(description=text)

    @property
    def description(self) -> Optional[str]:
        return self.metadata.get("description")

    # ----- Constraints -----

    def refine(self, constraint: c.Constraint) -> "SchemaNode":
        raise SchemaDefinitionError(
            f"Constraint '{constraint.name}' cannot be attached to {self.kind} schemas"
        )

    def non_empty(self) -> "SchemaNode":
        return self.refine(c.non_empty())

    def positive(self) -> "SchemaNode":
        return self.refine(c.positive())

    def nonnegative(self) -> "SchemaNode":
        return self.refine(c.nonnegative())

    def integer(self) -> "SchemaNode":
        return self.refine(c.integer())

    def is_url(self) -> "SchemaNode":
        return self.refine(c.is_url())

    def is_email(self) -> "SchemaNode":
        return self.refine(c.is_email())

    def matches(self, pattern: str) -> "SchemaNode":
        return self.refine(c.matches(pattern))

    def length(self, n: int) -> "SchemaNode":
        return self.refine(c.exact_length(_length_bound("length", n)))

    def min(self, n: float) -> "SchemaNode":
        """Lower bound: length for strings, value for numbers."""
        raise SchemaDefinitionError(f"min() is not defined for {self.kind} schemas")

    def max(self, n: float) -> "SchemaNode":
        """Upper bound: length for strings, value for numbers."""
        raise SchemaDefinitionError(f"max() is not defined for {self.kind} schemas")

    # ----- Traversal -----

    def children(self) -> Iterator[Tuple[str, "SchemaNode"]]:
        """Yield (label, child) pairs; labels are field names or '[]'."""
        return iter(())


@dataclass(frozen=True)
class PrimitiveNode(SchemaNode):
    """String, number, boolean or date value with ordered constraints."""

    primitive: str = c.STRING
    constraints: Tuple[c.Constraint, ...] = ()

    def __post_init__(self) -> None:
        if self.primitive not in c.PRIMITIVE_KINDS:
            raise SchemaDefinitionError(
                f"Unknown primitive kind '{self.primitive}'. "
                f"Valid kinds: {', '.join(c.PRIMITIVE_KINDS)}"
            )

    @property
    def kind(self) -> str:  # type: ignore[override]
        return self.primitive

    def refine(self, constraint: c.Constraint) -> "PrimitiveNode":
        if self.primitive not in constraint.applies_to:
            raise SchemaDefinitionError(
                f"Constraint '{constraint.name}' does not apply to {self.primitive} schemas "
                f"(applies to: {', '.join(sorted(constraint.applies_to))})"
            )
        return replace(self, constraints=self.constraints + (constraint,))

    def min(self, n: float) -> "PrimitiveNode":
        if self.primitive == c.STRING:
            return self.refine(c.min_length(_length_bound("min", n)))
        if self.primitive == c.NUMBER:
            return self.refine(c.min_value(n))
        return super().min(n)

    def max(self, n: float) -> "PrimitiveNode":
        if self.primitive == c.STRING:
            return self.refine(c.max_length(_length_bound("max", n)))
        if self.primitive == c.NUMBER:
            return self.refine(c.max_value(n))
        return super().max(n)


@dataclass(frozen=True)
class EnumNode(SchemaNode):
    """Exact, case-sensitive match against an ordered set of strings."""

    kind: ClassVar[str] = "enum"

    values: Tuple[str, ...] = ()

    def __contains__(self, value: Any) -> bool:
        return isinstance(value, str) and value in self.values


@dataclass(frozen=True)
class ObjectNode(SchemaNode):
    """Ordered mapping of field name to schema node."""

    kind: ClassVar[str] = "object"

    fields: Tuple[Tuple[str, SchemaNode], ...] = ()

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.fields)

    @property
    def shape(self) -> Mapping[str, SchemaNode]:
        return MappingProxyType(dict(self.fields))

    def get_field(self, name: str) -> SchemaNode:
        for field_name, node in self.fields:
            if field_name == name:
                return node
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        return name in self.field_names

    def entries(self) -> Iterator[FieldSpec]:
        """Yield FieldSpec(name, node, required, default) in declared order."""
        for name, node in self.fields:
            yield FieldSpec(name, node, node.is_required, node.default)

    def children(self) -> Iterator[Tuple[str, SchemaNode]]:
        return iter(self.fields)

    def extend(self, fields: FieldsInput) -> "ObjectNode":
        """
        Add fields after the existing ones.

        Raises:
            SchemaDefinitionError: If a new field reuses an existing name
        """
        additions = normalize_fields(fields)
        for name, _ in additions:
            if name in self.field_names:
                raise SchemaDefinitionError(
                    f"Cannot extend object schema: field '{name}' already exists"
                )
        return replace(self, fields=self.fields + additions)

    def pick(self, *names: str) -> "ObjectNode":
        self._require_known(names)
        return replace(self, fields=tuple(f for f in self.fields if f[0] in names))

    def omit(self, *names: str) -> "ObjectNode":
        self._require_known(names)
        return replace(self, fields=tuple(f for f in self.fields if f[0] not in names))

    def _require_known(self, names: Sequence[str]) -> None:
        unknown = [name for name in names if name not in self.field_names]
        if unknown:
            raise SchemaDefinitionError(
                f"Unknown field(s) {', '.join(repr(n) for n in unknown)}; "
                f"object declares: {', '.join(self.field_names) or '(none)'}"
            )


@dataclass(frozen=True)
class ArrayNode(SchemaNode):
    """Homogeneous list; every element is validated against ``element``."""

    kind: ClassVar[str] = "array"

    element: Optional[SchemaNode] = None

    def children(self) -> Iterator[Tuple[str, SchemaNode]]:
        if self.element is not None:
            yield "[]", self.element


def normalize_fields(fields: FieldsInput) -> Tuple[Tuple[str, SchemaNode], ...]:
    """
    Turn a mapping or sequence of (name, node) pairs into the stored form.

    Raises:
        SchemaDefinitionError: On duplicate names, non-string names or
            values that are not schema nodes
    """
    pairs = list(fields.items()) if isinstance(fields, Mapping) else list(fields)
    seen = set()
    normalized = []
    for pair in pairs:
        try:
            name, node = pair
        except (TypeError, ValueError):
            raise SchemaDefinitionError(
                f"Field entries must be (name, schema) pairs, got {pair!r}"
            ) from None
        if not isinstance(name, str) or not name:
            raise SchemaDefinitionError(f"Field names must be non-empty strings, got {name!r}")
        if not isinstance(node, SchemaNode):
            raise SchemaDefinitionError(
                f"Field '{name}' must be a schema node, got {type(node).__name__}"
            )
        if name in seen:
            raise SchemaDefinitionError(f"Duplicate field '{name}' in object schema")
        seen.add(name)
        normalized.append((name, node))
    return tuple(normalized)


def _length_bound(combinator: str, n: Any) -> int:
    """Accept whole, non-negative string length bounds (2 or 2.0, not 2.5)."""
    if isinstance(n, bool) or not isinstance(n, (int, float)):
        raise SchemaDefinitionError(f"{combinator}() length bound must be a number, got {n!r}")
    if isinstance(n, float) and not n.is_integer():
        raise SchemaDefinitionError(f"{combinator}() length bound must be a whole number, got {n!r}")
    if n < 0:
        raise SchemaDefinitionError(f"{combinator}() length bound must not be negative, got {n!r}")
    return int(n)
