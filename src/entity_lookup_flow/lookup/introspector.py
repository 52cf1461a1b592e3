"""Schema introspection for configuration-time choices.

Never used while transforming items; a configuration surface (CLI, HTTP
API, admin form) calls it to offer valid bundles and fields. Failures
degrade to empty choices so the surface still renders.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..store.base import SchemaProvider
from .engine import ENTITY_KINDS
from .types import ENTITY_ID, EntityKind


class SchemaIntrospector:

    def __init__(
        self,
        schema: SchemaProvider,
        logger: logging.Logger | None = None,
        entity_kinds: dict[str, EntityKind] | None = None,
    ):
        self.schema = schema
        self.logger = logger or logging.getLogger(__name__)
        self.entity_kinds = ENTITY_KINDS if entity_kinds is None else entity_kinds

    def entity_type_options(self) -> dict[str, str]:
        """The supported entity kinds with their display labels."""
        return {name: kind.label for name, kind in self.entity_kinds.items()}

    def bundle_options(self, entity_type: str | None) -> dict[str, str]:
        """Bundle id -> label for an entity kind, empty on any failure."""
        if not entity_type:
            return {}
        if entity_type not in self.entity_kinds:
            self.logger.error(f'Entity type "{entity_type}" is not supported for lookups.')
            return {}
        try:
            return dict(self.schema.list_bundles(entity_type))
        except Exception as e:
            self.logger.error(str(e))
            return {}

    def field_options(self, entity_type: str | None, bundle: str | None) -> dict[str, str]:
        """Field name -> label defined on a bundle, empty on any failure."""
        if not entity_type or not bundle:
            return {}
        if entity_type not in self.entity_kinds:
            self.logger.error(f'Entity type "{entity_type}" is not supported for lookups.')
            return {}
        try:
            return dict(self.schema.list_fields(entity_type, bundle))
        except Exception as e:
            self.logger.error(str(e))
            return {}

    def return_field_options(self, entity_type: str | None, bundle: str | None) -> dict[str, str]:
        """Field options with the identifier sentinel offered first."""
        options = {ENTITY_ID: "Entity ID"}
        options.update(self.field_options(entity_type, bundle))
        return options

    def configuration_options(self, configuration: Mapping[str, Any]) -> dict[str, dict[str, str]]:
        """
        All four choice lists for a (possibly partial) configuration.

        Changing the entity type or bundle changes which bundles and fields
        are valid; a configuration surface re-requests this after each
        change.
        """
        entity_type = configuration.get("entity_type") or ""
        bundle = configuration.get("bundle") or ""
        bundles = self.bundle_options(entity_type)
        if bundle not in bundles:
            bundle = ""
        return {
            "entity_type": self.entity_type_options(),
            "bundle": bundles,
            "lookup_field": self.field_options(entity_type, bundle),
            "return_field": self.return_field_options(entity_type, bundle),
        }
