"""Engine error kinds; returned to the caller rather than raised."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EngineErrorKind(str, Enum):
    INVALID_ENTITY_TYPE = "invalid_entity_type"
    STORE_FAILURE = "store_failure"


@dataclass(frozen=True)
class EngineError:
    kind: EngineErrorKind
    message: str
    entity_type: str | None = None

    def __str__(self) -> str:
        return self.message
