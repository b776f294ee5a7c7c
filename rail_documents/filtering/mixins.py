"""
Model mixin exposing filter operations on instances.
"""

import copy
from typing import Any, Optional

from django.db import models

from ..core.registry import RegisteredType, get_model_registry


class FilteredDocumentMixin:
    """
    Mixin for models registered with a DocumentRegistry.

    Example:
        >>> user = User.objects.get(pk=user_id)
        >>> user.extend_with_write_filter(request_data, "owner")
        >>> user.save()
        >>> payload = user.apply_read_filter("owner")
    """

    def _registered_type(self) -> RegisteredType:
        return get_model_registry(self).get(type(self))

    def to_document(self) -> dict[str, Any]:
        """Copy of the concrete and many-to-many field values keyed by field name."""
        opts = self._meta
        document: dict[str, Any] = {}
        for field in opts.concrete_fields:
            document[field.name] = field.value_from_object(self)
        if self.pk is not None:
            for field in opts.many_to_many:
                document[field.name] = [
                    obj.pk for obj in field.value_from_object(self)
                ]
        return copy.deepcopy(document)

    def apply_read_filter(self, filter_role: Optional[str] = None) -> dict[str, Any]:
        """Return this instance as a document filtered for ``filter_role``."""
        return self._registered_type().apply_read_filter(self.to_document(), filter_role)

    def apply_write_filter(self, filter_role: Optional[str] = None) -> dict[str, Any]:
        """Return this instance as a document with only writable fields."""
        return self._registered_type().apply_write_filter(self.to_document(), filter_role)

    def extend_with_write_filter(
        self, input: dict[str, Any], filter_role: Optional[str] = None
    ) -> "FilteredDocumentMixin":
        """Assign the writable fields of ``input`` to this instance."""
        registered = self._registered_type()
        filtered = registered.apply_write_filter(input, filter_role)
        descriptor = registered.descriptor
        for key, value in filtered.items():
            spec = descriptor.fields.get(key)
            if spec is not None and spec.is_reference and not isinstance(value, models.Model):
                field = self._meta.get_field(key)
                if field.many_to_many:
                    getattr(self, key).set(value)
                    continue
                setattr(self, field.attname, value)
            else:
                setattr(self, key, value)
        return self
