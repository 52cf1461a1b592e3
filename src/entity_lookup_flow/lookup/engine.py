"""Lookup engine: runs the typed query and loads the matching records."""

from __future__ import annotations

import logging
from typing import Any

from ..store.base import RecordStore, StorageHandlerNotFound
from .errors import EngineError, EngineErrorKind
from .types import EngineResult, EntityKind, LookupConfiguration

# Supported entity kinds. Media stores its subtype in "bundle", every
# other kind in "type"; add new kinds here.
ENTITY_KINDS: dict[str, EntityKind] = {
    "node": EntityKind(name="node", label="Content (Node)", bundle_key="type"),
    "media": EntityKind(name="media", label="Media", bundle_key="bundle"),
}


def normalize_input(value: Any) -> Any:
    """
    Reduce a lookup input to what the query should match.

    Lists and tuples lose their None/"" members and become a list (matched
    as "any of"); scalars are returned as-is. Returns None when nothing is
    left to look up.
    """
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [item for item in value if item is not None and item != ""]
        return items or None
    if value is None or value == "":
        return None
    return value


class LookupEngine:
    """
    Finds the records of one bundle whose lookup field equals the input.

    Store failures never escape: they come back as EngineResult.error so
    the caller decides how to degrade.
    """

    def __init__(
        self,
        store: RecordStore,
        logger: logging.Logger | None = None,
        entity_kinds: dict[str, EntityKind] | None = None,
    ):
        self.store = store
        self.logger = logger or logging.getLogger(__name__)
        self.entity_kinds = ENTITY_KINDS if entity_kinds is None else entity_kinds

    def find(self, config: LookupConfiguration, value: Any) -> EngineResult:
        value = normalize_input(value)
        if value is None:
            return EngineResult()

        kind = self.entity_kinds.get(config.entity_type)
        if kind is None:
            return EngineResult.failed(EngineError(
                kind=EngineErrorKind.INVALID_ENTITY_TYPE,
                message=f'Entity type "{config.entity_type}" is not supported for lookups.',
                entity_type=config.entity_type,
            ))

        try:
            storage = self.store.get_storage(kind.name)
            ids = (
                storage.get_query()
                .condition(kind.bundle_key, config.bundle)
                .condition(config.lookup_field, value)
                .access_check(True)
                .execute()
            )
            if not ids:
                return EngineResult()

            loaded = storage.load_multiple(list(ids))
        except StorageHandlerNotFound as e:
            return EngineResult.failed(EngineError(
                kind=EngineErrorKind.INVALID_ENTITY_TYPE,
                message=str(e),
                entity_type=config.entity_type,
            ))
        except Exception as e:
            return EngineResult.failed(EngineError(
                kind=EngineErrorKind.STORE_FAILURE,
                message=f"{type(e).__name__}: {e}",
                entity_type=config.entity_type,
            ))

        loaded = loaded or {}
        records = [loaded[record_id] for record_id in ids if record_id in loaded]
        self.logger.debug(
            f"{config.entity_type}/{config.bundle}: {config.lookup_field}={value!r} "
            f"matched {len(ids)} id(s), loaded {len(records)}"
        )
        return EngineResult(records=records)
