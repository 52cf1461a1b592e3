"""Value types shared by the lookup stages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..store.base import RecordHandle
from .errors import EngineError

# Return-field sentinel selecting the record identifier instead of a field
ENTITY_ID = "entity_id"


class _Skip:
    """Marker returned when a lookup must not run; the input passes through."""

    _instance: "_Skip | None" = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "SKIP"


SKIP = _Skip()


@dataclass(frozen=True)
class EntityKind:
    """How one entity kind is addressed in the record store."""
    name: str
    label: str
    bundle_key: str  # field holding the subtype discriminator


@dataclass(frozen=True)
class LookupConfiguration:
    """A validated lookup configuration, safe to execute."""
    entity_type: str
    bundle: str
    lookup_field: str
    return_field: str = ENTITY_ID

    @property
    def returns_id(self) -> bool:
        return self.return_field == ENTITY_ID


@dataclass
class EngineResult:
    """Records matched by the engine, or the error that stopped it."""
    records: list[RecordHandle] = field(default_factory=list)
    error: EngineError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, error: EngineError) -> "EngineResult":
        return cls(error=error)


class LookupStatus(str, Enum):
    """Why a lookup produced the output it did."""
    RESOLVED = "resolved"
    CONFIG_INCOMPLETE = "config_incomplete"
    EMPTY_INPUT = "empty_input"
    NO_MATCHES = "no_matches"
    ALL_PROJECTIONS_EMPTY = "all_projections_empty"
    ENGINE_ERROR = "engine_error"


@dataclass
class LookupOutcome:
    """Output of one lookup plus its status; output is the input unless resolved."""
    output: Any
    status: LookupStatus
    error: EngineError | None = None

    @property
    def resolved(self) -> bool:
        return self.status is LookupStatus.RESOLVED
