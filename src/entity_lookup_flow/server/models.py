"""Pydantic models for the lookup HTTP API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


# === Lookup Models ===

class LookupConfigurationModel(BaseModel):
    """Lookup step configuration; empty required keys mean "not configured"."""
    entity_type: str = "node"
    bundle: str = ""
    lookup_field: str = ""
    return_field: str = "entity_id"


class LookupRequest(BaseModel):
    """Value to resolve and the configuration to resolve it with."""
    value: Any = None
    configuration: LookupConfigurationModel = Field(default_factory=LookupConfigurationModel)


class LookupResponse(BaseModel):
    """Result of a lookup; output equals the input unless found."""
    output: Any = None
    found: bool = False
    status: str
    error: str | None = None


class OptionsResponse(BaseModel):
    """Configuration choices for the given entity type and bundle."""
    entity_type: dict[str, str] = Field(default_factory=dict)
    bundle: dict[str, str] = Field(default_factory=dict)
    lookup_field: dict[str, str] = Field(default_factory=dict)
    return_field: dict[str, str] = Field(default_factory=dict)


# === Component Models ===

class ComponentSchema(BaseModel):
    """Full component manifest."""
    type: str
    description: str
    category: str
    config: dict[str, dict[str, Any]] = Field(default_factory=dict)
    inputs: dict[str, dict[str, Any]] = Field(default_factory=dict)
    outputs: dict[str, dict[str, Any]] = Field(default_factory=dict)


class ComponentListResponse(BaseModel):
    """Response listing components by category."""
    components: dict[str, list[str]]
    total: int


# === Health Check ===

class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str = "1.0.0"
    entity_types: list[str] = Field(default_factory=list)
    uptime_seconds: float = 0.0
