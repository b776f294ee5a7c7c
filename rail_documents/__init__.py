"""
rail-documents: field-level filter profiles and reference denormalization
for Django models and plain documents.

Example usage:
    >>> from rail_documents import DocumentRegistry
    >>>
    >>> registry = DocumentRegistry()
    >>> users = registry.register(
    ...     User,
    ...     filter={
    ...         "read_filter": {
    ...             "owner": ["name", "address", "fb.id", "fb.name"],
    ...             "public": ["name", "fb.name"],
    ...         },
    ...         "write_filter": {"owner": ["name", "address", "fb.id"]},
    ...         "sanitize": True,
    ...     },
    ...     denormalize={"defaults": ["address", "tickets"], "exclude": "bankaccount"},
    ... )
    >>> users.apply_read_filter(document, "public")
    >>> User.objects.denormalize(refs=["address"], filter="public")
"""

from .core.descriptors import FieldKind, FieldSpec, TypeDescriptor
from .core.registry import DocumentRegistry, RegisteredType, get_model_registry
from .defaults import LIBRARY_VERSION, NOFILTER_ROLE
from .exceptions import (
    ConfigurationError,
    DocumentFilterError,
    SanitizationError,
    UnregisteredTypeError,
)

__version__ = LIBRARY_VERSION

__all__ = [
    "DocumentRegistry",
    "RegisteredType",
    "get_model_registry",
    "TypeDescriptor",
    "FieldSpec",
    "FieldKind",
    "NOFILTER_ROLE",
    "DocumentFilterError",
    "ConfigurationError",
    "SanitizationError",
    "UnregisteredTypeError",
]
