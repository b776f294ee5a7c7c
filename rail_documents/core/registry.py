"""
DocumentRegistry implementation.

Document types are registered once, with their filter and denormalization
options, and the per-type registries built at that point are read-only for
the rest of the process. A registry is an ordinary object: projects create
one (or several) and pass it where documents are filtered or queried.
"""

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Optional, Type, Union

from django.db import models

from ..exceptions import ConfigurationError, UnregisteredTypeError
from .descriptors import TypeDescriptor

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from ..denormalization.config import ReferenceRegistry
    from ..denormalization.types import ExpansionDirective
    from ..filtering.engine import DocumentFilterEngine
    from ..filtering.profiles import FilterProfileRegistry

logger = logging.getLogger(__name__)

# Attribute injected on registered model classes
REGISTRY_ATTRIBUTE = "_document_registry"


@dataclass(frozen=True)
class RegisteredType:
    """A registered document type with its filter and reference registries."""

    descriptor: TypeDescriptor
    profiles: Optional["FilterProfileRegistry"] = None
    engine: Optional["DocumentFilterEngine"] = None
    references: Optional["ReferenceRegistry"] = None

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def model(self) -> Optional[Type[models.Model]]:
        return self.descriptor.model

    def _require_engine(self) -> "DocumentFilterEngine":
        if self.engine is None:
            raise ConfigurationError(
                "Document type was registered without filter options", self.name
            )
        return self.engine

    def apply_read_filter(self, input: Any, filter_role: Optional[str] = None) -> Any:
        return self._require_engine().apply_read_filter(input, filter_role)

    def apply_write_filter(self, input: Any, filter_role: Optional[str] = None) -> Any:
        return self._require_engine().apply_write_filter(input, filter_role)

    def extend_with_write_filter(
        self, target: Any, input: Any, filter_role: Optional[str] = None
    ) -> Any:
        return self._require_engine().extend_with_write_filter(target, input, filter_role)

    def get_read_filter_keys(self, filter_role: Optional[str] = None) -> Optional[str]:
        if self.profiles is None:
            return None
        return self.profiles.get_read_filter_keys(filter_role)

    def get_write_filter_keys(self, filter_role: Optional[str] = None) -> Optional[str]:
        if self.profiles is None:
            return None
        return self.profiles.get_write_filter_keys(filter_role)

    def get_denormalization_refs(self, refs: Any = None) -> list[str]:
        if self.references is None:
            return []
        return self.references.get_denormalization_refs(refs)


TypeKey = Union[str, Type[models.Model], TypeDescriptor]


class DocumentRegistry:
    """
    Registry of document types for filtering and denormalization.

    Example:
        >>> registry = DocumentRegistry()
        >>> registry.register(
        ...     User,
        ...     filter={"read_filter": {"public": ["name"]}},
        ...     denormalize={"defaults": ["address"], "exclude": "bankaccount"},
        ... )
        >>> User.objects.denormalize(refs=["address"], filter="public")
    """

    def __init__(self):
        self._types: dict[str, RegisteredType] = {}
        self._lock = threading.Lock()

    def register(
        self,
        target: Union[Type[models.Model], TypeDescriptor],
        filter: Optional[Mapping[str, Any]] = None,
        denormalize: Optional[Mapping[str, Any]] = None,
    ) -> RegisteredType:
        """
        Register a model class or TypeDescriptor.

        ``filter`` and ``denormalize`` are the option mappings of the two
        engines; ``None`` leaves that engine off for the type.

        Raises:
            ConfigurationError: On duplicate registration or invalid options.
        """
        from ..denormalization.config import ReferenceRegistry
        from ..filtering.engine import DocumentFilterEngine
        from ..filtering.profiles import FilterProfileRegistry

        if isinstance(target, TypeDescriptor):
            descriptor = target
        elif isinstance(target, type) and issubclass(target, models.Model):
            descriptor = TypeDescriptor.from_model(target)
        else:
            raise ConfigurationError(f"Cannot register {target!r} as a document type")

        profiles = engine = references = None
        if filter is not None:
            profiles = FilterProfileRegistry.from_options(descriptor, filter)
            engine = DocumentFilterEngine(profiles)
        if denormalize is not None:
            references = ReferenceRegistry.from_options(descriptor, denormalize)

        registered = RegisteredType(descriptor, profiles, engine, references)

        with self._lock:
            if descriptor.name in self._types:
                raise ConfigurationError(
                    "Document type is already registered", descriptor.name
                )
            self._types[descriptor.name] = registered
            if descriptor.model is not None:
                setattr(descriptor.model, REGISTRY_ATTRIBUTE, self)

        logger.info(
            "Document type registered: %s (filter=%s denormalize=%s)",
            descriptor.name,
            profiles is not None,
            references is not None,
        )
        return registered

    def unregister(self, target: TypeKey) -> None:
        with self._lock:
            registered = self._types.pop(self._key(target), None)
        if registered is not None and registered.model is not None:
            if getattr(registered.model, REGISTRY_ATTRIBUTE, None) is self:
                delattr(registered.model, REGISTRY_ATTRIBUTE)

    def clear(self) -> None:
        for name in list(self._types):
            self.unregister(name)

    @staticmethod
    def _key(target: TypeKey) -> str:
        if isinstance(target, TypeDescriptor):
            return target.name
        if isinstance(target, type) and issubclass(target, models.Model):
            return target._meta.label_lower
        if isinstance(target, models.Model):
            return target._meta.label_lower
        return str(target)

    def find(self, target: TypeKey) -> Optional[RegisteredType]:
        key = self._key(target)
        registered = self._types.get(key)
        if registered is None and "." in key:
            registered = self._types.get(key.lower())
        return registered

    def get(self, target: TypeKey) -> RegisteredType:
        registered = self.find(target)
        if registered is None:
            raise UnregisteredTypeError(self._key(target))
        return registered

    def __contains__(self, target: TypeKey) -> bool:
        return self.find(target) is not None

    def __len__(self) -> int:
        return len(self._types)

    def plan(self, target: TypeKey, request: Any = None) -> list["ExpansionDirective"]:
        """Expansion directives for ``target`` and a request (or options mapping)."""
        from ..denormalization.planner import ReferencePlanner

        return ReferencePlanner(self).plan(self.get(target), request)

    def denormalize(self, queryset: "QuerySet", request: Any = None, **options: Any) -> "QuerySet":
        """Plan expansions for the queryset's model and apply them."""
        from ..denormalization.augmenter import QueryAugmenter

        directives = self.plan(queryset.model, request if request is not None else options)
        return QueryAugmenter().apply(queryset, directives)


def get_model_registry(model: Union[Type[models.Model], models.Model]) -> DocumentRegistry:
    """Return the registry a model class was registered with."""
    registry = getattr(model, REGISTRY_ATTRIBUTE, None)
    if registry is None:
        raise UnregisteredTypeError(DocumentRegistry._key(model))
    return registry
