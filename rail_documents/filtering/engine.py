"""
Document filter engine.

Applies a type's read or write profiles to documents (plain mappings),
recursing into nested objects with dot-path filters.

Read filtering is meant to run just before a document is handed to a
caller. Write filtering removes every field the role may not write and
should never be applied to a stored document before saving it; use
``extend_with_write_filter`` to patch a stored document instead.
"""

import copy
import logging
from typing import Any, Mapping, MutableMapping, Optional, Sequence, Union

from ..core.descriptors import FieldKind, FieldSpec
from ..utils.sanitization import Sanitizer, get_sanitizer, sanitize_object
from .paths import FilterList, is_allowed, is_whole_subtree_allowed, reduce_for_descent
from .profiles import FilterKind, FilterProfileRegistry

logger = logging.getLogger(__name__)

Document = MutableMapping[str, Any]
DocumentInput = Union[Document, Sequence[Document]]


class DocumentFilterEngine:
    """Filter documents of one registered type by profile name."""

    def __init__(
        self, profiles: FilterProfileRegistry, sanitizer: Optional[Sanitizer] = None
    ):
        self.profiles = profiles
        self.descriptor = profiles.descriptor
        self._sanitizer = sanitizer

    @property
    def sanitizer(self) -> Sanitizer:
        return self._sanitizer or get_sanitizer()

    def apply_read_filter(self, input: DocumentInput, filter_role: Optional[str] = None):
        """
        Return a filtered copy of a document or list of documents.

        The input is never modified. Fields the role may not read are removed,
        nested objects are filtered with their dot paths.
        """
        if _is_many(input):
            return _map_many(input, lambda doc: self.apply_read_filter(doc, filter_role))

        filters = self.profiles.get_filter_keys(FilterKind.READ, filter_role)
        document = copy.deepcopy(input)
        return self.apply_filter(document, filters)

    def apply_write_filter(self, input: DocumentInput, filter_role: Optional[str] = None):
        """
        Filter an incoming document (or list) down to the writable fields.

        When the type sanitizes, every string leaf of the input is escaped in
        place first. Note that this DELETES every field not in the profile.
        """
        if _is_many(input):
            return _map_many(input, lambda doc: self.apply_write_filter(doc, filter_role))

        if self.profiles.sanitize:
            sanitize_object(input, self.sanitizer)

        filters = self.profiles.get_filter_keys(FilterKind.WRITE, filter_role)
        return self.apply_filter(copy.copy(input), filters)

    def extend_with_write_filter(
        self, target: Any, input: Document, filter_role: Optional[str] = None
    ) -> Any:
        """
        Copy the writable fields of ``input`` onto ``target``.

        Existing fields of the target that are absent from the filtered input
        are left alone. Mapping targets get keys assigned, anything else gets
        attributes set.
        """
        filtered = self.apply_write_filter(input, filter_role)
        if isinstance(target, MutableMapping):
            target.update(filtered)
        else:
            for key, value in filtered.items():
                setattr(target, key, value)
        return target

    def apply_filter(self, obj: Document, filters: FilterList) -> Document:
        """Filter ``obj`` in place against top-level field declarations."""
        return _filter_object(obj, filters, self.descriptor.fields)


def _is_many(input: Any) -> bool:
    return isinstance(input, (list, tuple))


def _map_many(input: Sequence[Any], func) -> Sequence[Any]:
    """Apply ``func`` to each document, keeping tuples as tuples."""
    filtered = [func(doc) for doc in input]
    return tuple(filtered) if isinstance(input, tuple) else filtered


def _is_nested_object(value: Any, spec: Optional[FieldSpec]) -> bool:
    if spec is not None and not spec.is_object:
        return False
    return isinstance(value, Mapping) and len(value) > 0


def _filter_object(
    obj: Document, filters: FilterList, specs: Mapping[str, FieldSpec]
) -> Document:
    if filters is None:
        return obj

    keys_to_remove = []
    for key, value in obj.items():
        spec = specs.get(key)

        if _is_nested_object(value, spec):
            if is_whole_subtree_allowed(key, filters):
                continue
            reduced = reduce_for_descent(key, filters)
            if reduced:
                nested_specs = spec.fields if spec is not None else {}
                obj[key] = _filter_object(copy.copy(value), reduced, nested_specs)
            else:
                keys_to_remove.append(key)
            continue

        if not is_allowed(key, filters):
            keys_to_remove.append(key)
        elif value == "" and spec is not None and spec.kind == FieldKind.REFERENCE:
            # empty identifiers are rejected by the store on write
            keys_to_remove.append(key)

    for key in keys_to_remove:
        del obj[key]

    return obj
