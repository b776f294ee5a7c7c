"""
Request and directive types for reference expansion.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Union

from django.db.models import Q

Condition = Union[Mapping[str, Any], Q]


class RefsSelector(Enum):
    """
    How the caller selected the references to expand.

    - DEFAULT: use the type's configured defaults
    - NONE: expand nothing
    - ALL: every declared reference field
    - NAMED: an explicit list of names
    """

    DEFAULT = "default"
    NONE = "none"
    ALL = "all"
    NAMED = "named"

    @classmethod
    def parse(cls, refs: Any) -> "RefsSelector":
        """Translate the external ``refs`` value into a selector."""
        if isinstance(refs, RefsSelector):
            return refs
        if refs == "false":
            return cls.NONE
        if isinstance(refs, (list, tuple)) and not refs:
            return cls.ALL
        if not refs or refs is True or refs == "true":
            return cls.DEFAULT
        return cls.NAMED


@dataclass
class ExpansionRequest:
    """
    Caller-supplied options for one denormalized query.

    Attributes:
        refs: Explicit list (or single name) of references, a RefsSelector,
            or one of the sentinels ``"true"``/``"false"``. Falsy values,
            ``False`` included, mean defaults.
        filter: Read profile applied to each referenced document.
        conditions: Per-reference query condition.
        suffix: Overrides the type's configured suffix.
    """

    refs: Any = None
    filter: Optional[str] = None
    conditions: dict[str, Condition] = field(default_factory=dict)
    suffix: Optional[str] = None

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "ExpansionRequest":
        """Build a request from a plain options mapping."""
        if isinstance(options, ExpansionRequest):
            return options
        options = dict(options or {})
        nested = options.pop("options", None) or {}
        suffix = options.get("suffix", nested.get("suffix"))
        return cls(
            refs=options.get("refs"),
            filter=options.get("filter"),
            conditions=dict(options.get("conditions") or {}),
            suffix=suffix,
        )


@dataclass(frozen=True)
class ExpansionDirective:
    """One reference to expand, with its field restriction and condition."""

    path: str
    field_restriction: Optional[tuple[str, ...]]
    condition: Condition
    suffix: str = ""

    @property
    def target_key(self) -> str:
        """Key under which the expanded document is exposed."""
        return self.path + self.suffix
