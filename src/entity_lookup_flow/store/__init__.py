"""Record store interfaces and the in-memory implementation."""

from .base import (
    EntityQuery,
    EntityStorage,
    RecordHandle,
    RecordStore,
    SchemaProvider,
    StorageHandlerNotFound,
    StoreError,
)
from .memory import InMemoryRecordStore, MediaRecord, MemoryRecord, NodeRecord

__all__ = [
    "EntityQuery",
    "EntityStorage",
    "RecordHandle",
    "RecordStore",
    "SchemaProvider",
    "StorageHandlerNotFound",
    "StoreError",
    "InMemoryRecordStore",
    "MemoryRecord",
    "NodeRecord",
    "MediaRecord",
]
