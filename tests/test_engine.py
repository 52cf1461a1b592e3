"""Tests for lookup/engine.py."""

from __future__ import annotations

import pytest

from entity_lookup_flow.lookup import (
    ENTITY_KINDS,
    EngineErrorKind,
    LookupConfiguration,
    LookupEngine,
    normalize_input,
)
from entity_lookup_flow.store import InMemoryRecordStore, MemoryRecord

from conftest import RecordingStore


def _config(entity_type="node", bundle="article", lookup_field="field_old_id"):
    return LookupConfiguration(entity_type, bundle, lookup_field)


# =============================================================================
# Input normalization
# =============================================================================


@pytest.mark.parametrize("value", [None, "", [], (), [None, ""]])
def test_normalize_input_empty(value):
    assert normalize_input(value) is None


def test_normalize_input_keeps_scalars_and_zero():
    assert normalize_input("A-1") == "A-1"
    assert normalize_input(0) == 0
    assert normalize_input(["a", "", None, "b"]) == ["a", "b"]
    assert normalize_input(("a",)) == ["a"]


# =============================================================================
# Query construction
# =============================================================================


def test_node_query_uses_type_discriminator(recording_store):
    LookupEngine(recording_store).find(_config("node"), "A-1")
    assert recording_store.conditions[0] == ("type", "article")


def test_media_query_uses_bundle_discriminator(recording_store):
    LookupEngine(recording_store).find(_config("media", "image", "field_source_url"), "x")
    assert recording_store.conditions[0] == ("bundle", "image")
    assert recording_store.storages_requested == ["media"]


def test_discriminators_come_from_the_kind_table():
    assert ENTITY_KINDS["node"].bundle_key == "type"
    assert ENTITY_KINDS["media"].bundle_key == "bundle"


def test_query_is_always_access_checked(recording_store):
    LookupEngine(recording_store).find(_config(), "A-1")
    assert recording_store.access_checks == [True]


def test_list_input_is_passed_as_set_condition(recording_store):
    LookupEngine(recording_store).find(_config(), ["A-1", "A-2"])
    assert recording_store.conditions[1] == ("field_old_id", ["A-1", "A-2"])


def test_empty_input_does_not_touch_store(recording_store):
    result = LookupEngine(recording_store).find(_config(), "")
    assert result.ok
    assert result.records == []
    assert recording_store.storages_requested == []


def test_no_ids_skips_loading(recording_store):
    result = LookupEngine(recording_store).find(_config(), "A-1")
    assert result.ok and result.records == []
    assert recording_store.loaded == []


def test_vanished_records_yield_empty_result():
    store = RecordingStore(ids=[7, 8], records={})
    result = LookupEngine(store).find(_config(), "A-1")
    assert result.ok
    assert result.records == []
    assert store.loaded == [[7, 8]]


def test_records_follow_query_order():
    store = RecordingStore(ids=[3, 1, 2], records={1: "one", 2: "two", 3: "three"})
    result = LookupEngine(store).find(_config(), "A-1")
    assert result.records == ["three", "one", "two"]


# =============================================================================
# Against the in-memory store
# =============================================================================


def test_finds_matching_records_in_bundle(store):
    result = LookupEngine(store).find(_config(), "A-1")
    assert [r.id for r in result.records] == [1]


def test_finds_any_of_list_values(store):
    result = LookupEngine(store).find(_config(), ["A-1", "A-2"])
    assert [r.id for r in result.records] == [1, 2, 3]


def test_unpublished_records_are_not_visible(store):
    result = LookupEngine(store).find(_config(), "A-9")
    assert result.ok and result.records == []


# =============================================================================
# Errors
# =============================================================================


def test_unsupported_entity_type_is_an_error(recording_store):
    result = LookupEngine(recording_store).find(_config("taxonomy_term"), "A-1")
    assert not result.ok
    assert result.error.kind is EngineErrorKind.INVALID_ENTITY_TYPE
    assert result.error.entity_type == "taxonomy_term"
    assert recording_store.storages_requested == []


def test_missing_storage_handler_is_invalid_entity_type():
    class TermRecord(MemoryRecord):
        entity_type = "taxonomy_term"

    # A store that only knows terms has no handler for nodes
    store = InMemoryRecordStore(record_classes={"taxonomy_term": TermRecord})
    result = LookupEngine(store).find(_config("node"), "A-1")
    assert result.error.kind is EngineErrorKind.INVALID_ENTITY_TYPE
    assert "node" in result.error.message


def test_store_exception_becomes_store_failure(failing_store):
    result = LookupEngine(failing_store).find(_config(), "A-1")
    assert not result.ok
    assert result.error.kind is EngineErrorKind.STORE_FAILURE
    assert "database went away" in result.error.message
