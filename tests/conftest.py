"""Shared fixtures: a populated in-memory store and recording/failing fakes."""

from __future__ import annotations

import pytest

from entity_lookup_flow.store import InMemoryRecordStore, StoreError


@pytest.fixture
def store() -> InMemoryRecordStore:
    store = InMemoryRecordStore()
    store.add_bundle("node", "article", "Article", {
        "field_old_id": "Old ID",
        "field_summary": "Summary",
        "field_tags": "Tags",
    })
    store.add_bundle("node", "page", "Basic page", {"field_old_id": "Old ID"})
    store.add_bundle("media", "image", "Image", {"field_source_url": "Source URL"})

    store.add_record("node", "article", {"title": "One", "field_old_id": "A-1", "field_summary": "first"}, record_id=1)
    store.add_record("node", "article", {"title": "Two", "field_old_id": "A-2", "field_summary": "second"}, record_id=2)
    store.add_record("node", "article", {"title": "Three", "field_old_id": "A-2"}, record_id=3)
    store.add_record("node", "page", {"title": "Page", "field_old_id": "A-1"}, record_id=4)
    store.add_record("node", "article", {"title": "Hidden", "field_old_id": "A-9"}, record_id=5, published=False)
    store.add_record("node", "article", {"title": "Tagged", "field_old_id": "A-7", "field_tags": ["x", "y"]}, record_id=6)

    store.add_record("media", "image", {"name": "logo.png", "field_source_url": "https://example.com/logo.png"}, record_id=10)
    return store


class RecordingQuery:
    def __init__(self, owner: "RecordingStore"):
        self.owner = owner

    def condition(self, field, value):
        self.owner.conditions.append((field, value))
        return self

    def access_check(self, enabled=True):
        self.owner.access_checks.append(enabled)
        return self

    def execute(self):
        self.owner.maybe_fail("execute")
        return list(self.owner.ids)


class RecordingStore:
    """
    Store fake that records the query it was asked to run.

    fail_at names the stage ("query", "execute" or "load") that raises error.
    """

    def __init__(self, ids=(), records=None, fail_at: str | None = None, error: Exception | None = None):
        self.ids = list(ids)
        self.records = records or {}
        self.fail_at = fail_at
        self.error = error or StoreError("database went away")
        self.conditions: list[tuple] = []
        self.access_checks: list[bool] = []
        self.storages_requested: list[str] = []
        self.loaded: list[list] = []

    def get_storage(self, entity_type):
        self.storages_requested.append(entity_type)
        return self

    def maybe_fail(self, stage):
        if self.fail_at == stage:
            raise self.error

    def get_query(self):
        self.maybe_fail("query")
        return RecordingQuery(self)

    def load_multiple(self, ids):
        self.maybe_fail("load")
        self.loaded.append(list(ids))
        return {i: self.records[i] for i in ids if i in self.records}


@pytest.fixture
def recording_store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def failing_store() -> RecordingStore:
    return RecordingStore(fail_at="query")


@pytest.fixture
def article_config() -> dict:
    return {
        "entity_type": "node",
        "bundle": "article",
        "lookup_field": "field_old_id",
    }
