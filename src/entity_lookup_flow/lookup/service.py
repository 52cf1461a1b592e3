"""The lookup pipeline step: resolve configuration, find records, project."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..store.base import RecordStore
from .engine import LookupEngine, normalize_input
from .errors import EngineError, EngineErrorKind
from .projector import FieldProjector
from .resolver import resolve
from .types import SKIP, LookupOutcome, LookupStatus


class EntityLookup:
    """
    Replaces an imported value with values taken from matching records.

    Every failure mode returns the original input unchanged: an item is
    never dropped or corrupted by a lookup that could not complete. Only
    unexpected failures (engine errors) are logged at error level.

    Example:
        lookup = EntityLookup(store)
        lookup.transform("A-1", {
            "entity_type": "node",
            "bundle": "article",
            "lookup_field": "field_old_id",
        })
        # -> [42]
    """

    def __init__(
        self,
        store: RecordStore,
        logger: logging.Logger | None = None,
        engine: LookupEngine | None = None,
        projector: FieldProjector | None = None,
    ):
        self.logger = logger or logging.getLogger(__name__)
        self.engine = engine or LookupEngine(store, logger=self.logger)
        self.projector = projector or FieldProjector(logger=self.logger)

    def transform(self, value: Any, configuration: Mapping[str, Any] | None) -> Any:
        """Projected values for the input, or the input itself."""
        return self.lookup(value, configuration).output

    def lookup(self, value: Any, configuration: Mapping[str, Any] | None) -> LookupOutcome:
        config = resolve(configuration)
        if config is SKIP:
            return LookupOutcome(output=value, status=LookupStatus.CONFIG_INCOMPLETE)

        if normalize_input(value) is None:
            return LookupOutcome(output=value, status=LookupStatus.EMPTY_INPUT)

        result = self.engine.find(config, value)
        if not result.ok:
            return self._failed(value, result.error)

        if not result.records:
            return LookupOutcome(output=value, status=LookupStatus.NO_MATCHES)

        # Record handles read lazily from the store, so field access can fail too
        try:
            values = self.projector.project(result.records, config.return_field, config.entity_type)
        except Exception as e:
            return self._failed(value, EngineError(
                kind=EngineErrorKind.STORE_FAILURE,
                message=f"{type(e).__name__}: {e}",
                entity_type=config.entity_type,
            ))

        if not values:
            return LookupOutcome(output=value, status=LookupStatus.ALL_PROJECTIONS_EMPTY)

        return LookupOutcome(output=values, status=LookupStatus.RESOLVED)

    def _failed(self, value: Any, error: EngineError) -> LookupOutcome:
        self.logger.error(error.message)
        return LookupOutcome(output=value, status=LookupStatus.ENGINE_ERROR, error=error)
