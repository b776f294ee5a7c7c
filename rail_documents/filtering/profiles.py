"""
Named read/write filter profiles for a document type.

A profile maps a role name (``"owner"``, ``"public"``...) to the list of
field paths that role may read or write. The reserved ``"nofilter"`` profile
always means "no restriction".
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from ..config_proxy import get_setting
from ..core.descriptors import FieldKind, TypeDescriptor
from ..defaults import NOFILTER_ROLE
from ..exceptions import ConfigurationError
from .paths import FilterList, PATH_SEPARATOR

logger = logging.getLogger(__name__)

# camelCase option names accepted for compatibility with plugin-style configs
OPTION_ALIASES = {
    "readFilter": "read_filter",
    "writeFilter": "write_filter",
    "defaultFilterRole": "default_filter_role",
}


class FilterKind(Enum):
    """Which profile map a lookup targets."""

    READ = "read"
    WRITE = "write"


class FilterProfileRegistry:
    """
    Per-type read and write profiles with a default role and sanitize flag.

    Built once at registration time and read-only afterwards.

    Example:
        >>> profiles = FilterProfileRegistry.from_options(
        ...     descriptor,
        ...     {
        ...         "read_filter": {"owner": ["name", "fb.id"], "public": ["name"]},
        ...         "write_filter": {"owner": ["name"], "public": []},
        ...         "default_filter_role": "public",
        ...     },
        ... )
        >>> profiles.get_filter_keys("read", "unknown")
        ['name', 'id']
    """

    def __init__(
        self,
        descriptor: TypeDescriptor,
        read_filter: Optional[Mapping[str, list[str]]] = None,
        write_filter: Optional[Mapping[str, list[str]]] = None,
        default_filter_role: str = NOFILTER_ROLE,
        sanitize: bool = False,
    ):
        self.descriptor = descriptor
        self.default_filter_role = default_filter_role
        self.sanitize = bool(sanitize)
        self._profiles = {
            FilterKind.READ: self._build_profiles(FilterKind.READ, read_filter),
            FilterKind.WRITE: self._build_profiles(FilterKind.WRITE, write_filter),
        }
        self._validate_default_role()

    @classmethod
    def from_options(
        cls, descriptor: TypeDescriptor, options: Optional[Mapping[str, Any]] = None
    ) -> "FilterProfileRegistry":
        """Build a registry from plugin-style options, filling gaps from settings."""
        normalized = {
            OPTION_ALIASES.get(key, key): value for key, value in (options or {}).items()
        }
        unknown = set(normalized) - {
            "read_filter",
            "write_filter",
            "default_filter_role",
            "sanitize",
        }
        if unknown:
            raise ConfigurationError(
                f"Unknown filter options: {sorted(unknown)}", descriptor.name
            )

        default_role = normalized.get("default_filter_role")
        if default_role is None:
            default_role = get_setting("filter_settings.default_filter_role", NOFILTER_ROLE)
        sanitize = normalized.get("sanitize")
        if sanitize is None:
            sanitize = get_setting("filter_settings.sanitize", False)

        return cls(
            descriptor,
            read_filter=normalized.get("read_filter"),
            write_filter=normalized.get("write_filter"),
            default_filter_role=default_role,
            sanitize=sanitize,
        )

    def _build_profiles(
        self, kind: FilterKind, profiles: Optional[Mapping[str, list[str]]]
    ) -> Mapping[str, FilterList]:
        built: dict[str, FilterList] = {}
        for role, paths in (profiles or {}).items():
            if role == NOFILTER_ROLE:
                raise ConfigurationError(
                    f"'{NOFILTER_ROLE}' is a reserved {kind.value} profile and cannot be redefined",
                    self.descriptor.name,
                )
            if isinstance(paths, str):
                paths = [paths]
            for path in paths:
                self._validate_path(kind, role, path)
            built[role] = list(paths)
        built[NOFILTER_ROLE] = None
        return MappingProxyType(built)

    def _validate_path(self, kind: FilterKind, role: str, path: Any) -> None:
        if not isinstance(path, str) or not path:
            raise ConfigurationError(
                f"Invalid path {path!r} in {kind.value} profile '{role}'",
                self.descriptor.name,
            )
        head, _, rest = path.partition(PATH_SEPARATOR)
        spec = self.descriptor.fields.get(head)
        if spec is None:
            raise ConfigurationError(
                f"{kind.value.capitalize()} profile '{role}' references unknown field '{head}'",
                self.descriptor.name,
                field_name=head,
            )
        if rest and spec.kind != FieldKind.OBJECT:
            raise ConfigurationError(
                f"{kind.value.capitalize()} profile '{role}' path '{path}' descends "
                f"into non-object field '{head}'",
                self.descriptor.name,
                field_name=head,
            )
        if rest and spec.fields and self.descriptor.get_field(path) is None:
            raise ConfigurationError(
                f"{kind.value.capitalize()} profile '{role}' references unknown field '{path}'",
                self.descriptor.name,
                field_name=path,
            )

    def _validate_default_role(self) -> None:
        if self.default_filter_role == NOFILTER_ROLE:
            return
        for kind, profiles in self._profiles.items():
            if self.default_filter_role not in profiles:
                raise ConfigurationError(
                    f"Default filter role '{self.default_filter_role}' has no "
                    f"{kind.value} profile",
                    self.descriptor.name,
                )

    def roles(self, kind: Union[FilterKind, str]) -> list[str]:
        return list(self._profiles[FilterKind(kind)])

    def get_filter_keys(
        self, kind: Union[FilterKind, str], filter_role: Optional[str] = None
    ) -> FilterList:
        """
        Resolve a role to its field paths.

        Unknown or missing roles fall back to the default role. ``None`` means
        no restriction. Read profiles always carry the primary identifier.
        """
        kind = FilterKind(kind)
        profiles = self._profiles[kind]
        if filter_role in profiles:
            filters = profiles[filter_role]
        else:
            filters = profiles.get(self.default_filter_role)

        if filters is None:
            return None
        filters = list(filters)
        if kind == FilterKind.READ:
            filters.append(self.descriptor.primary_key)
        return filters

    def get_read_filter_keys(self, filter_role: Optional[str] = None) -> Optional[str]:
        """Space-joined read projection for the role, or None for no projection."""
        filters = self.get_filter_keys(FilterKind.READ, filter_role)
        return None if filters is None else " ".join(filters)

    def get_write_filter_keys(self, filter_role: Optional[str] = None) -> Optional[str]:
        """Space-joined write projection for the role, or None for no projection."""
        filters = self.get_filter_keys(FilterKind.WRITE, filter_role)
        return None if filters is None else " ".join(filters)
