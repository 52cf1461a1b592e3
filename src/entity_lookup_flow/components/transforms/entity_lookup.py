"""Entity lookup transform - replace a value with data from matching records."""

from __future__ import annotations

import logging
from typing import Any

from ...core.component import Component, ComponentManifest, ConfigSpec, InputSpec, OutputSpec
from ...core.context import ExecutionContext
from ...core.errors import ComponentError
from ...core.registry import register_component
from ...lookup import ENTITY_ID, ENTITY_KINDS, EntityLookup, default_configuration

logger = logging.getLogger(__name__)

_DEFAULTS = default_configuration()


@register_component("transform/lookup_entity")
class EntityLookupTransform(Component):
    """
    Resolve an imported value against records of one bundle.

    Finds records whose lookup field equals the input (any of, for list
    input) and outputs the return field of each, e.g. mapping legacy ids
    to the ids of already imported content. When nothing resolves the
    input is passed through unchanged.
    """

    @classmethod
    def describe(cls) -> ComponentManifest:
        return ComponentManifest(
            type="transform/lookup_entity",
            description="Resolve a value to fields of matching records",
            category="transform",
            config={
                "entity_type": ConfigSpec(
                    type="string",
                    default=_DEFAULTS["entity_type"],
                    choices=list(ENTITY_KINDS),
                    description="Entity type to search"
                ),
                "bundle": ConfigSpec(
                    type="string",
                    default=_DEFAULTS["bundle"],
                    description="Content type or media type to filter by"
                ),
                "lookup_field": ConfigSpec(
                    type="string",
                    default=_DEFAULTS["lookup_field"],
                    description='Field matched against the input, e.g. "field_old_id"'
                ),
                "return_field": ConfigSpec(
                    type="string",
                    default=_DEFAULTS["return_field"],
                    description=f'Field returned from each match; "{ENTITY_ID}" for the record id'
                ),
            },
            inputs={
                "value": InputSpec(
                    type="any",
                    required=True,
                    description="Value or list of values to look up"
                ),
            },
            outputs={
                "value": OutputSpec(
                    type="any",
                    description="Projected values, or the input when nothing resolved"
                ),
                "found": OutputSpec(
                    type="boolean",
                    description="Whether the lookup resolved"
                ),
                "status": OutputSpec(
                    type="string",
                    description="Lookup status (resolved, no_matches, engine_error, ...)"
                ),
            }
        )

    async def execute(
        self,
        inputs: dict[str, Any],
        context: ExecutionContext
    ) -> dict[str, Any]:
        store = context.record_store
        if store is None:
            raise ComponentError(
                "No record store available in the execution context",
                component_id=self.instance_id,
                inputs=inputs,
            )

        value = inputs.get("value")
        outcome = EntityLookup(store, logger=logger).lookup(value, self.resolved_config())

        if outcome.resolved:
            self.debug(f"Resolved {value!r} → {outcome.output!r}", context)
        elif outcome.error is not None:
            self.report(f"⚠ Lookup failed, kept {value!r}: {outcome.error}", context)
        else:
            self.debug(f"Passed through {value!r} ({outcome.status.value})", context)

        return {
            "value": outcome.output,
            "found": outcome.resolved,
            "status": outcome.status.value,
        }
