"""
Profile-based field filtering for documents.

This package provides:
- Dot-path matching helpers for filter lists
- Named read/write filter profiles per document type
- The recursive document filter engine
- A model mixin exposing filters on instances
"""

from .engine import DocumentFilterEngine
from .mixins import FilteredDocumentMixin
from .paths import (
    is_allowed,
    is_whole_subtree_allowed,
    reduce_for_descent,
    top_level_fields,
)
from .profiles import FilterKind, FilterProfileRegistry

__all__ = [
    "DocumentFilterEngine",
    "FilteredDocumentMixin",
    "FilterKind",
    "FilterProfileRegistry",
    "is_allowed",
    "is_whole_subtree_allowed",
    "reduce_for_descent",
    "top_level_fields",
]
