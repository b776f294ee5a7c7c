"""
Reference expansion ("denormalization") for registered document types.
"""

from .augmenter import QueryAugmenter
from .config import ReferenceRegistry, normalize_refs, strip_id_suffix
from .planner import ReferencePlanner
from .queryset import DocumentManager, DocumentQuerySet
from .types import ExpansionDirective, ExpansionRequest, RefsSelector

__all__ = [
    "QueryAugmenter",
    "ReferenceRegistry",
    "ReferencePlanner",
    "DocumentManager",
    "DocumentQuerySet",
    "ExpansionDirective",
    "ExpansionRequest",
    "RefsSelector",
    "normalize_refs",
    "strip_id_suffix",
]
