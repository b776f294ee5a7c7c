"""
Query augmenter for applying expansion directives to Django querysets.
"""

import logging
from typing import Iterable, Optional, Sequence, Union

from django.db import models
from django.db.models import Prefetch, Q, QuerySet

from ..config_proxy import get_setting
from ..filtering.paths import top_level_fields
from .types import Condition, ExpansionDirective

logger = logging.getLogger(__name__)


class QueryAugmenter:
    """Issues one prefetch per expansion directive against a queryset."""

    def __init__(self, apply_only: Optional[bool] = None):
        if apply_only is None:
            apply_only = bool(get_setting("denormalize_settings.apply_only", True))
        self.apply_only = apply_only

    def apply(
        self, queryset: QuerySet, directives: Iterable[ExpansionDirective]
    ) -> QuerySet:
        """
        Chain a Prefetch for every directive, in order.

        Returns the queryset unchanged when there is nothing to expand.
        """
        prefetches = [
            self._build_prefetch(queryset.model, directive) for directive in directives
        ]
        if not prefetches:
            return queryset

        logger.debug(
            "Applied denormalization prefetches: %s",
            [p.prefetch_to for p in prefetches],
        )
        return queryset.prefetch_related(*prefetches)

    def restrict(
        self, queryset: QuerySet, projection: Union[str, Sequence[str], None]
    ) -> QuerySet:
        """Apply a read projection (space-joined string or list) to a queryset."""
        if projection is None or not self.apply_only:
            return queryset
        if isinstance(projection, str):
            projection = projection.split()
        only_fields = self._only_fields(queryset.model, projection)
        if not only_fields:
            return queryset
        return queryset.only(*only_fields)

    def _build_prefetch(
        self, model: type[models.Model], directive: ExpansionDirective
    ) -> Prefetch:
        related_model = model._meta.get_field(directive.path).related_model
        related_qs = self._apply_condition(
            related_model._default_manager.all(), directive.condition
        )
        if directive.field_restriction is not None and self.apply_only:
            only_fields = self._only_fields(related_model, directive.field_restriction)
            if only_fields:
                related_qs = related_qs.only(*only_fields)

        if directive.suffix:
            return Prefetch(
                directive.path, queryset=related_qs, to_attr=directive.target_key
            )
        return Prefetch(directive.path, queryset=related_qs)

    @staticmethod
    def _apply_condition(queryset: QuerySet, condition: Condition) -> QuerySet:
        if isinstance(condition, Q):
            return queryset.filter(condition)
        if condition:
            return queryset.filter(**condition)
        return queryset

    @staticmethod
    def _only_fields(
        model: type[models.Model], paths: Sequence[str]
    ) -> list[str]:
        """Top-level concrete field names for ``only()``."""
        concrete = {f.name for f in model._meta.concrete_fields}
        return [name for name in top_level_fields(paths) if name in concrete]
