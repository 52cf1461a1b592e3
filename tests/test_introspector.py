"""Tests for lookup/introspector.py."""

from __future__ import annotations

import logging

import pytest

from entity_lookup_flow.lookup import SchemaIntrospector


@pytest.fixture
def introspector(store) -> SchemaIntrospector:
    return SchemaIntrospector(store)


def test_entity_type_options(introspector):
    assert introspector.entity_type_options() == {"node": "Content (Node)", "media": "Media"}


def test_bundle_options_in_definition_order(introspector):
    assert introspector.bundle_options("node") == {"article": "Article", "page": "Basic page"}
    assert introspector.bundle_options("media") == {"image": "Image"}


def test_field_options_include_base_fields(introspector):
    fields = introspector.field_options("node", "page")
    assert list(fields) == ["nid", "type", "title", "status", "field_old_id"]
    assert fields["field_old_id"] == "Old ID"


def test_media_field_options(introspector):
    fields = introspector.field_options("media", "image")
    assert "bundle" in fields and "field_source_url" in fields


def test_return_field_options_offer_identifier_first(introspector):
    options = introspector.return_field_options("node", "page")
    assert list(options)[0] == "entity_id"
    assert "field_old_id" in options


@pytest.mark.parametrize("entity_type, bundle", [("", "article"), ("node", ""), (None, None)])
def test_blank_selection_gives_no_fields_silently(introspector, caplog, entity_type, bundle):
    with caplog.at_level(logging.ERROR):
        assert introspector.field_options(entity_type, bundle) == {}
    assert caplog.records == []


def test_unknown_entity_type_degrades_with_log(introspector, caplog):
    with caplog.at_level(logging.ERROR):
        assert introspector.bundle_options("taxonomy_term") == {}
        assert introspector.field_options("taxonomy_term", "tags") == {}
    assert len(caplog.records) == 2


def test_unknown_bundle_degrades_with_log(introspector, caplog):
    with caplog.at_level(logging.ERROR):
        assert introspector.field_options("node", "recipe") == {}
    assert 'Bundle "recipe"' in caplog.records[0].getMessage()


def test_store_error_degrades_with_log(caplog):
    class BrokenSchema:
        def list_bundles(self, entity_type):
            raise RuntimeError("schema unavailable")

        def list_fields(self, entity_type, bundle):
            raise RuntimeError("schema unavailable")

    introspector = SchemaIntrospector(BrokenSchema())
    with caplog.at_level(logging.ERROR):
        assert introspector.bundle_options("node") == {}
        assert introspector.field_options("node", "article") == {}
    assert [r.getMessage() for r in caplog.records] == ["schema unavailable"] * 2


def test_configuration_options_follow_selection(introspector):
    options = introspector.configuration_options({"entity_type": "media", "bundle": "image"})
    assert options["entity_type"] == {"node": "Content (Node)", "media": "Media"}
    assert options["bundle"] == {"image": "Image"}
    assert "field_source_url" in options["lookup_field"]
    assert "entity_id" in options["return_field"]


def test_configuration_options_drop_stale_bundle(introspector):
    # Switching entity type leaves a bundle from the previous type selected
    options = introspector.configuration_options({"entity_type": "media", "bundle": "article"})
    assert options["bundle"] == {"image": "Image"}
    assert options["lookup_field"] == {}
    assert options["return_field"] == {"entity_id": "Entity ID"}
