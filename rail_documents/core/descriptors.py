"""
Type descriptors for registered document types.

A ``TypeDescriptor`` records the declared kind of every field of a document
type. Kinds are computed once, at registration time, so the filter engine
never has to guess from the runtime shape of a value whether it is a nested
object to descend into or a leaf (identifiers look like objects in some
representations).
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Type, Union

from django.db import models


class FieldKind(Enum):
    """
    Declared kind of a document field.

    - SCALAR: plain value (string, number, date, ...)
    - OBJECT: nested mapping, filtered recursively
    - REFERENCE: identifier of another document, eligible for expansion
    - ARRAY: list of values, filtered as a whole
    - IDENTIFIER: the primary identifier of the document
    """

    SCALAR = "scalar"
    OBJECT = "object"
    REFERENCE = "reference"
    ARRAY = "array"
    IDENTIFIER = "identifier"


@dataclass(frozen=True)
class FieldSpec:
    """
    Declaration of a single field.

    Attributes:
        kind: The declared kind of the field.
        target: Referenced type name for references (and arrays of references).
        item_kind: Kind of the elements for arrays.
        fields: Nested field declarations for objects.
    """

    kind: FieldKind
    target: Optional[str] = None
    item_kind: Optional[FieldKind] = None
    fields: Mapping[str, "FieldSpec"] = field(default_factory=dict)

    @property
    def is_reference(self) -> bool:
        if self.kind == FieldKind.REFERENCE:
            return True
        return self.kind == FieldKind.ARRAY and self.item_kind == FieldKind.REFERENCE

    @property
    def is_identifier(self) -> bool:
        return self.kind in (FieldKind.IDENTIFIER, FieldKind.REFERENCE)

    @property
    def is_object(self) -> bool:
        return self.kind == FieldKind.OBJECT

    @classmethod
    def parse(cls, declaration: Union["FieldSpec", str, Mapping[str, Any]]) -> "FieldSpec":
        """
        Build a FieldSpec from a declaration.

        Accepted forms:
            "scalar", "object", "identifier"
            "reference:Address"
            "array", "array:scalar", "array:reference:Ticket"
            {"name": "scalar", "id": "scalar"}  (nested object)

        Raises:
            ValueError: If the declaration cannot be understood.
        """
        if isinstance(declaration, FieldSpec):
            return declaration
        if isinstance(declaration, Mapping):
            return cls(
                kind=FieldKind.OBJECT,
                fields=MappingProxyType(
                    {name: cls.parse(value) for name, value in declaration.items()}
                ),
            )
        if not isinstance(declaration, str):
            raise ValueError(f"Unsupported field declaration: {declaration!r}")

        head, _, rest = declaration.partition(":")
        kind = FieldKind(head.strip().lower())
        if kind == FieldKind.REFERENCE:
            if not rest:
                raise ValueError("Reference declarations need a target type")
            return cls(kind=kind, target=rest.strip())
        if kind == FieldKind.ARRAY and rest:
            item = cls.parse(rest)
            return cls(kind=kind, item_kind=item.kind, target=item.target)
        if rest:
            raise ValueError(f"Unsupported field declaration: {declaration!r}")
        return cls(kind=kind)


class TypeDescriptor:
    """
    Immutable description of a document type's declared fields.

    Example:
        >>> descriptor = TypeDescriptor(
        ...     "User",
        ...     {
        ...         "name": "scalar",
        ...         "fb": {"id": "scalar", "accessToken": "scalar"},
        ...         "address": "reference:Address",
        ...         "tickets": "array:reference:Ticket",
        ...     },
        ...     primary_key="_id",
        ... )
        >>> descriptor.reference_fields()
        ['address', 'tickets']
    """

    def __init__(
        self,
        name: str,
        fields: Mapping[str, Any],
        primary_key: str = "id",
        model: Optional[Type[models.Model]] = None,
        aliases: Optional[Mapping[str, str]] = None,
    ):
        self.name = name
        self.primary_key = primary_key
        self.model = model
        parsed = {key: FieldSpec.parse(value) for key, value in fields.items()}
        parsed.setdefault(primary_key, FieldSpec(FieldKind.IDENTIFIER))
        self._fields = MappingProxyType(parsed)
        self._aliases = MappingProxyType(dict(aliases or {}))

    @property
    def fields(self) -> Mapping[str, FieldSpec]:
        return self._fields

    @property
    def aliases(self) -> Mapping[str, str]:
        """Alternate attribute names (Django ``attname``) mapped to field names."""
        return self._aliases

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __repr__(self) -> str:
        return f"<TypeDescriptor {self.name} fields={list(self._fields)}>"

    def has_field(self, name: str) -> bool:
        return name in self._fields

    def get_field(self, path: str) -> Optional[FieldSpec]:
        """Resolve a dot path to its FieldSpec, or None when undeclared."""
        current: Mapping[str, FieldSpec] = self._fields
        spec: Optional[FieldSpec] = None
        for segment in path.split("."):
            spec = current.get(segment)
            if spec is None:
                return None
            current = spec.fields
        return spec

    def reference_fields(self) -> list[str]:
        """All declared reference fields except the primary identifier."""
        return [
            name
            for name, spec in self._fields.items()
            if spec.is_reference and name != self.primary_key
        ]

    def is_reference(self, name: str) -> bool:
        spec = self._fields.get(name)
        return bool(spec and spec.is_reference)

    def resolve_alias(self, name: str) -> str:
        return self._aliases.get(name, name)

    @classmethod
    def from_model(cls, model: Type[models.Model]) -> "TypeDescriptor":
        """Introspect a Django model's concrete and many-to-many fields."""
        opts = model._meta
        fields: dict[str, FieldSpec] = {}
        aliases: dict[str, str] = {}

        for model_field in list(opts.concrete_fields) + list(opts.many_to_many):
            fields[model_field.name] = _spec_for_model_field(model_field)
            attname = getattr(model_field, "attname", None)
            if attname and attname != model_field.name:
                aliases[attname] = model_field.name

        return cls(
            opts.label_lower,
            fields,
            primary_key=opts.pk.name,
            model=model,
            aliases=aliases,
        )


def _spec_for_model_field(model_field: models.Field) -> FieldSpec:
    if getattr(model_field, "primary_key", False):
        return FieldSpec(FieldKind.IDENTIFIER)
    if model_field.many_to_many:
        return FieldSpec(
            FieldKind.ARRAY,
            item_kind=FieldKind.REFERENCE,
            target=model_field.related_model._meta.label_lower,
        )
    if model_field.is_relation and model_field.related_model is not None:
        return FieldSpec(
            FieldKind.REFERENCE, target=model_field.related_model._meta.label_lower
        )
    if isinstance(model_field, models.JSONField):
        return FieldSpec(FieldKind.OBJECT)
    return FieldSpec(FieldKind.SCALAR)
