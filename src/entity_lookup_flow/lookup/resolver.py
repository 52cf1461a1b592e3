"""Configuration resolver: decides whether a lookup may run at all."""

from __future__ import annotations

from typing import Any, Mapping

from .types import ENTITY_ID, SKIP, LookupConfiguration, _Skip

REQUIRED_KEYS = ("entity_type", "bundle", "lookup_field")


def default_configuration() -> dict[str, str]:
    """Defaults for a freshly added lookup step."""
    return {
        "entity_type": "node",
        "bundle": "",
        "lookup_field": "",
        "return_field": ENTITY_ID,
    }


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def resolve(configuration: Mapping[str, Any] | None) -> LookupConfiguration | _Skip:
    """
    Validate and normalize a raw lookup configuration.

    Returns SKIP when entity_type, bundle or lookup_field is missing or
    empty; the caller passes its input through unchanged. An unset
    return_field means the record identifier.
    """
    configuration = configuration or {}
    values = {key: _clean(configuration.get(key)) for key in REQUIRED_KEYS}
    if not all(values.values()):
        return SKIP

    return LookupConfiguration(
        entity_type=values["entity_type"],
        bundle=values["bundle"],
        lookup_field=values["lookup_field"],
        return_field=_clean(configuration.get("return_field")) or ENTITY_ID,
    )
