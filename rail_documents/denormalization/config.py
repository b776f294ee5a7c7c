"""
Reference configuration for a document type.

Holds which reference fields are expanded by default, which are never
expanded, and the suffix appended to expanded keys.
"""

import logging
import re
from typing import Any, Iterable, Mapping, Optional

from ..config_proxy import get_setting
from ..core.descriptors import TypeDescriptor
from ..exceptions import ConfigurationError
from .types import RefsSelector

logger = logging.getLogger(__name__)

ID_SUFFIX_PATTERN = re.compile(r"_id$")


def normalize_refs(raw: Any) -> list[Any]:
    """
    Normalize a single name, a list, or a nested list into a flat list.

    Examples:
        >>> normalize_refs("address")
        ['address']
        >>> normalize_refs(["address", ["tickets"]])
        ['address', 'tickets']
        >>> normalize_refs(None)
        []
    """
    if raw is None:
        return []
    if isinstance(raw, (list, tuple, set, frozenset)):
        flat: list[Any] = []
        for item in raw:
            flat.extend(normalize_refs(item))
        return flat
    return [raw]


def strip_id_suffix(name: str) -> str:
    return ID_SUFFIX_PATTERN.sub("", name)


class ReferenceRegistry:
    """
    Per-type defaults, exclusions and suffix for reference expansion.

    Example:
        >>> refs = ReferenceRegistry.from_options(
        ...     descriptor, {"defaults": ["address", "tickets"], "exclude": "bankaccount"}
        ... )
        >>> refs.get_denormalization_refs("true")
        ['address', 'tickets']
        >>> refs.get_denormalization_refs(["bankaccount"])
        []
    """

    def __init__(
        self,
        descriptor: TypeDescriptor,
        defaults: Any = None,
        exclude: Any = None,
        suffix: Optional[str] = None,
    ):
        self.descriptor = descriptor
        excluded = normalize_refs(exclude)
        self._validate_names(normalize_refs(defaults), "defaults")
        self._validate_names(excluded, "exclude", allow_id_suffix=True)
        # attnames such as "address_id" also exclude the field they belong to
        self.excluded_refs: tuple[str, ...] = tuple(
            dict.fromkeys(
                name
                for raw in excluded
                for name in (raw, descriptor.resolve_alias(raw))
            )
        )
        self.default_refs: tuple[str, ...] = tuple(self.parse_refs(defaults))
        if suffix is None:
            suffix = get_setting("denormalize_settings.suffix", "")
        self.suffix = suffix

    @classmethod
    def from_options(
        cls, descriptor: TypeDescriptor, options: Optional[Mapping[str, Any]] = None
    ) -> "ReferenceRegistry":
        options = dict(options or {})
        unknown = set(options) - {"defaults", "exclude", "suffix"}
        if unknown:
            raise ConfigurationError(
                f"Unknown denormalize options: {sorted(unknown)}", descriptor.name
            )
        return cls(
            descriptor,
            defaults=options.get("defaults"),
            exclude=options.get("exclude"),
            suffix=options.get("suffix"),
        )

    def _validate_names(
        self, names: Iterable[Any], option: str, allow_id_suffix: bool = False
    ) -> None:
        for name in names:
            if not isinstance(name, str) or not name:
                raise ConfigurationError(
                    f"Invalid reference name {name!r} in '{option}'",
                    self.descriptor.name,
                )
            candidates = {name, self.descriptor.resolve_alias(name)}
            if allow_id_suffix:
                candidates.add(strip_id_suffix(name))
            if not any(self.descriptor.has_field(c) for c in candidates):
                raise ConfigurationError(
                    f"'{option}' references unknown field '{name}'",
                    self.descriptor.name,
                    field_name=name,
                )

    def all_refs(self) -> list[str]:
        """Every declared reference field except the primary identifier."""
        return self.descriptor.reference_fields()

    def parse_refs(self, raw: Any) -> list[str]:
        """
        Match requested names against declared reference fields.

        Unknown or non-reference names are dropped. Empty input selects
        every declared reference.
        """
        refs = normalize_refs(raw)
        if not refs:
            return self.all_refs()

        return [
            ref
            for ref in refs
            if isinstance(ref, str) and ref and self.descriptor.is_reference(ref)
        ]

    def is_excluded(self, ref: str) -> bool:
        return ref in self.excluded_refs or strip_id_suffix(ref) in self.excluded_refs

    def filter_excludes(self, refs: Iterable[str]) -> list[str]:
        return [ref for ref in refs if not self.is_excluded(ref)]

    def get_denormalization_refs(self, refs: Any = None) -> list[str]:
        """Final ordered list of references to expand for a request's ``refs``."""
        selector = RefsSelector.parse(refs)
        if selector == RefsSelector.NONE:
            return []
        if selector == RefsSelector.DEFAULT:
            candidates = list(self.default_refs)
        elif selector == RefsSelector.ALL:
            candidates = self.all_refs()
        else:
            candidates = self.parse_refs(refs)
        return self.filter_excludes(candidates)
