"""
Reference expansion planner.

Turns a caller's ExpansionRequest into the ordered list of
ExpansionDirective objects for a registered document type. Planning is pure:
it reads the immutable per-type registries and performs no I/O.
"""

import logging
from typing import TYPE_CHECKING, Any, Optional

from ..exceptions import ConfigurationError
from ..filtering.profiles import FilterKind
from .types import ExpansionDirective, ExpansionRequest

if TYPE_CHECKING:
    from ..core.registry import DocumentRegistry, RegisteredType

logger = logging.getLogger(__name__)


class ReferencePlanner:
    """Compute expansion directives against a DocumentRegistry."""

    def __init__(self, registry: "DocumentRegistry"):
        self.registry = registry

    def plan(
        self, registered: "RegisteredType", request: Any = None
    ) -> list[ExpansionDirective]:
        request = ExpansionRequest.from_options(request)
        references = registered.references
        if references is None:
            return []

        suffix = request.suffix if request.suffix is not None else references.suffix
        directives: list[ExpansionDirective] = []
        target_keys: dict[str, str] = {}

        for ref in references.get_denormalization_refs(request.refs):
            if ref in target_keys.values():
                continue
            directive = ExpansionDirective(
                path=ref,
                field_restriction=self._field_restriction(registered, ref, request.filter),
                condition=request.conditions.get(ref) or {},
                suffix=suffix or "",
            )
            self._check_target_key(registered, directive, target_keys)
            target_keys[directive.target_key] = ref
            directives.append(directive)

        logger.debug(
            "Planned expansion of %s for %s",
            [d.path for d in directives],
            registered.name,
        )
        return directives

    def _field_restriction(
        self, registered: "RegisteredType", ref: str, filter_role: Optional[str]
    ) -> Optional[tuple[str, ...]]:
        spec = registered.descriptor.fields[ref]
        target = self.registry.find(spec.target) if spec.target else None
        if target is None or target.profiles is None:
            return None
        filters = target.profiles.get_filter_keys(FilterKind.READ, filter_role)
        return None if filters is None else tuple(filters)

    @staticmethod
    def _check_target_key(
        registered: "RegisteredType",
        directive: ExpansionDirective,
        target_keys: dict[str, str],
    ) -> None:
        descriptor = registered.descriptor
        key = directive.target_key
        clash = target_keys.get(key)
        # attnames such as "address_id" are real attributes on model instances
        if clash is None and key != directive.path and (
            descriptor.has_field(key) or key in descriptor.aliases
        ):
            clash = key
        if clash is not None:
            raise ConfigurationError(
                f"Expanding '{directive.path}' with suffix '{directive.suffix}' "
                f"collides with '{clash}'",
                registered.name,
                field_name=directive.path,
            )
