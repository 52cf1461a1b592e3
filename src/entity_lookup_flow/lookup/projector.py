"""Field projector: turns matched records into output values."""

from __future__ import annotations

import logging
from typing import Any, Iterable

from ..store.base import RecordHandle
from .types import ENTITY_ID


class FieldProjector:
    """
    Projects one return field (or the identifier) from each record.

    Records lacking the field are skipped with a warning; they never abort
    the projection. Output order follows record order and duplicates are
    kept.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def project(
        self,
        records: Iterable[RecordHandle],
        return_field: str,
        entity_type: str = "",
    ) -> list[Any]:
        values = []
        for record in records:
            if return_field == ENTITY_ID:
                values.append(record.id)
            elif record.has_field(return_field):
                values.append(record.get(return_field))
            else:
                self.logger.warning(
                    f'Field "{return_field}" not found on entity of type '
                    f'"{entity_type}" with ID {record.id}.'
                )
        return values
