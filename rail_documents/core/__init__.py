"""
Core type descriptors and the document registry.
"""

from .descriptors import FieldKind, FieldSpec, TypeDescriptor
from .registry import DocumentRegistry, RegisteredType, get_model_registry

__all__ = [
    "FieldKind",
    "FieldSpec",
    "TypeDescriptor",
    "DocumentRegistry",
    "RegisteredType",
    "get_model_registry",
]
