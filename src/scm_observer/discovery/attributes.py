"""Attribute vocabularies for organization and project metadata.

The observer contract defines no attribute keys of its own. Consumers supply
an :class:`AttributeSchema` mapping each key they recognize to the type its
value must have, and record values through an :class:`AttributeSet` which
enforces the set-at-most-once rule.

Examples:
    >>> schema = AttributeSchema({"description": str, "stars": int})
    >>> attrs = AttributeSet(schema)
    >>> attrs.add("description", "Build tooling")
    >>> dict(attrs.as_dict())
    {'description': 'Build tooling'}
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from scm_observer._internal.exceptions import AttributeTypeError, InvalidArgumentError

_TYPE_NAMES: Dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "list": list,
    "dict": dict,
    "any": Any,
}


def parse_type_name(name: str) -> Any:
    """Translate a configuration type name into a type annotation.

    A trailing ``?`` marks the value as nullable, so ``"str?"`` becomes
    ``Optional[str]``.

    Raises:
        ValueError: If the name is not a known type.
    """

    cleaned = name.strip().lower()
    nullable = cleaned.endswith("?")
    if nullable:
        cleaned = cleaned[:-1]
    try:
        base = _TYPE_NAMES[cleaned]
    except KeyError as exc:
        known = ", ".join(sorted(_TYPE_NAMES))
        raise ValueError(f"Unknown attribute type '{name}'. Known: {known}") from exc
    if nullable and base is not Any:
        return Optional[base]
    return base


def _adapter_for(annotation: Any) -> TypeAdapter:
    # BaseModel subclasses carry their own config and reject an override
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return TypeAdapter(annotation)
    return TypeAdapter(annotation, config=ConfigDict(arbitrary_types_allowed=True))


def _describe(annotation: Any) -> str:
    if isinstance(annotation, type):
        return annotation.__name__
    return str(annotation).replace("typing.", "")


class AttributeSchema(Mapping[str, Any]):
    """Closed vocabulary of attribute keys and the value type each expects.

    Values are checked with pydantic in strict mode, so ``"1"`` is not an
    ``int`` and ``1`` is not a ``str``. The validated value is never stored in
    place of the caller's object.

    Consumer-defined classes are accepted as types and checked with
    ``isinstance``.
    """

    def __init__(self, types: Optional[Mapping[str, Any]] = None) -> None:
        self._types: Dict[str, Any] = dict(types or {})
        self._adapters: Dict[str, TypeAdapter] = {
            key: _adapter_for(annotation) for key, annotation in self._types.items()
        }

    @classmethod
    def from_type_names(cls, names: Mapping[str, str]) -> "AttributeSchema":
        """Build a schema from ``{key: type_name}`` as found in config files."""

        return cls({key: parse_type_name(type_name) for key, type_name in names.items()})

    def __getitem__(self, key: str) -> Any:
        return self._types[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __repr__(self) -> str:
        inner = ", ".join(f"{key}: {_describe(tp)}" for key, tp in self._types.items())
        return f"AttributeSchema({{{inner}}})"

    def validate(self, key: str, value: Any) -> None:
        """Check that ``key`` is recognized and ``value`` fits its type.

        Raises:
            InvalidArgumentError: If ``key`` is not part of the vocabulary.
            AttributeTypeError: If ``value`` has the wrong type for ``key``.
        """

        adapter = self._adapters.get(key)
        if adapter is None:
            raise InvalidArgumentError(f"Unrecognized attribute '{key}'", key=key)
        try:
            adapter.validate_python(value, strict=True)
        except PydanticValidationError as exc:
            raise AttributeTypeError(key, _describe(self._types[key]), value) from exc


class AttributeSet:
    """Attribute values recorded against one observer instance."""

    def __init__(self, schema: Optional[AttributeSchema] = None) -> None:
        self._schema = schema if schema is not None else AttributeSchema()
        self._values: Dict[str, Any] = {}

    @property
    def schema(self) -> AttributeSchema:
        return self._schema

    def add(self, key: str, value: Any) -> None:
        """Record ``value`` under ``key``; each key may be set only once.

        Raises:
            InvalidArgumentError: If ``key`` is unrecognized or already set.
            AttributeTypeError: If ``value`` has the wrong type for ``key``.
        """

        if key not in self._schema:
            raise InvalidArgumentError(f"Unrecognized attribute '{key}'", key=key)
        if key in self._values:
            raise InvalidArgumentError(f"Attribute '{key}' was already added", key=key)
        self._schema.validate(key, value)
        self._values[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def as_dict(self) -> Mapping[str, Any]:
        """Return a read-only view of the recorded values."""

        return MappingProxyType(self._values)


__all__ = ["AttributeSchema", "AttributeSet", "parse_type_name"]
