"""Tests for lookup/resolver.py."""

from __future__ import annotations

import pytest

from entity_lookup_flow.lookup import ENTITY_ID, SKIP, LookupConfiguration, default_configuration, resolve


def test_complete_configuration_resolves():
    config = resolve({
        "entity_type": "node",
        "bundle": "article",
        "lookup_field": "field_old_id",
        "return_field": "title",
    })
    assert config == LookupConfiguration("node", "article", "field_old_id", "title")
    assert not config.returns_id


@pytest.mark.parametrize("missing", ["entity_type", "bundle", "lookup_field"])
def test_missing_required_key_skips(article_config, missing):
    del article_config[missing]
    assert resolve(article_config) is SKIP


@pytest.mark.parametrize("empty", ["", None, "   "])
def test_empty_required_value_skips(article_config, empty):
    article_config["bundle"] = empty
    assert resolve(article_config) is SKIP


def test_none_configuration_skips():
    assert resolve(None) is SKIP
    assert resolve({}) is SKIP


@pytest.mark.parametrize("return_field", [None, ""])
def test_return_field_defaults_to_identifier(article_config, return_field):
    if return_field is not None:
        article_config["return_field"] = return_field
    config = resolve(article_config)
    assert config.return_field == ENTITY_ID
    assert config.returns_id


def test_skip_is_falsy_singleton():
    assert not SKIP
    assert resolve({}) is resolve({"entity_type": "node"})


def test_default_configuration():
    assert default_configuration() == {
        "entity_type": "node",
        "bundle": "",
        "lookup_field": "",
        "return_field": "entity_id",
    }
    # Defaults alone are not enough to run a lookup
    assert resolve(default_configuration()) is SKIP
