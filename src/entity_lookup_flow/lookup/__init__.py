"""Entity lookup: resolve imported values against records in a content store."""

from .engine import ENTITY_KINDS, LookupEngine, normalize_input
from .errors import EngineError, EngineErrorKind
from .introspector import SchemaIntrospector
from .projector import FieldProjector
from .resolver import default_configuration, resolve
from .service import EntityLookup
from .types import (
    ENTITY_ID,
    SKIP,
    EngineResult,
    EntityKind,
    LookupConfiguration,
    LookupOutcome,
    LookupStatus,
)

__all__ = [
    "ENTITY_KINDS",
    "LookupEngine",
    "normalize_input",
    "EngineError",
    "EngineErrorKind",
    "SchemaIntrospector",
    "FieldProjector",
    "default_configuration",
    "resolve",
    "EntityLookup",
    "ENTITY_ID",
    "SKIP",
    "EngineResult",
    "EntityKind",
    "LookupConfiguration",
    "LookupOutcome",
    "LookupStatus",
]
