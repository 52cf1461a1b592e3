"""API route handlers for the lookup service."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, Request

from .. import __version__
from ..core import ComponentRegistry
from ..lookup import ENTITY_KINDS, EntityLookup, SchemaIntrospector
from ..store.base import RecordStore
from .models import (
    ComponentListResponse,
    ComponentSchema,
    HealthResponse,
    LookupRequest,
    LookupResponse,
    OptionsResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_store(request: Request) -> RecordStore:
    """The record store injected into the app at startup."""
    store = getattr(request.app.state, "record_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="No record store configured")
    return store


# === Health ===

@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check() -> HealthResponse:
    """Check service health."""
    from .app import get_uptime

    return HealthResponse(
        status="healthy",
        version=__version__,
        entity_types=list(ENTITY_KINDS),
        uptime_seconds=get_uptime(),
    )


# === Lookup ===

@router.post("/lookup", response_model=LookupResponse, tags=["Lookup"])
def run_lookup(request: Request, body: LookupRequest) -> LookupResponse:
    """Resolve a value; failures come back as pass-through, never as errors."""
    store = get_store(request)
    outcome = EntityLookup(store, logger=logger).lookup(
        body.value, body.configuration.model_dump()
    )
    return LookupResponse(
        output=outcome.output,
        found=outcome.resolved,
        status=outcome.status.value,
        error=outcome.error.message if outcome.error else None,
    )


@router.get("/options", response_model=OptionsResponse, tags=["Lookup"])
def get_options(
    request: Request,
    entity_type: str = Query("node", description="Entity type to list bundles for"),
    bundle: str = Query("", description="Bundle to list fields for"),
) -> OptionsResponse:
    """Choices for configuring a lookup step."""
    introspector = SchemaIntrospector(get_store(request), logger=logger)
    options = introspector.configuration_options({"entity_type": entity_type, "bundle": bundle})
    return OptionsResponse(**options)


# === Components ===

@router.get("/components", response_model=ComponentListResponse, tags=["Components"])
async def list_components() -> ComponentListResponse:
    """List registered pipeline components by category."""
    registry = ComponentRegistry.get_instance()

    by_category: dict[str, list[str]] = {}
    for comp_type in registry.list_types():
        category = comp_type.split("/")[0]
        by_category.setdefault(category, []).append(comp_type)

    return ComponentListResponse(
        components=by_category,
        total=len(registry.list_types()),
    )


@router.get("/components/{component_type:path}", response_model=ComponentSchema, tags=["Components"])
async def get_component(component_type: str) -> ComponentSchema:
    """Get a component's manifest."""
    manifest = ComponentRegistry.get_instance().get_manifest(component_type)
    if manifest is None:
        raise HTTPException(status_code=404, detail=f"Component '{component_type}' not found")
    return ComponentSchema(**manifest)
