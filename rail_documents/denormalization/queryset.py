"""
QuerySet and Manager exposing denormalization on registered models.
"""

from typing import Any, Optional

from django.db import models

from ..core.registry import get_model_registry
from .augmenter import QueryAugmenter


class DocumentQuerySet(models.QuerySet):
    """
    QuerySet with reference expansion and read projections.

    Example:
        >>> User.objects.filter(name="Foo Bar").denormalize(
        ...     refs=["transactions", "address"],
        ...     filter="public",
        ...     conditions={"address": {"city": "Seattle"}},
        ... )
    """

    def denormalize(self, request: Any = None, **options: Any) -> "DocumentQuerySet":
        """Expand reference fields according to the model's registration."""
        registry = get_model_registry(self.model)
        return registry.denormalize(self, request, **options)

    def with_read_filter(self, filter_role: Optional[str] = None) -> "DocumentQuerySet":
        """Load only the fields the role may read."""
        registered = get_model_registry(self.model).get(self.model)
        projection = registered.get_read_filter_keys(filter_role)
        return QueryAugmenter().restrict(self, projection)


DocumentManager = models.Manager.from_queryset(DocumentQuerySet)
