"""SEO metadata router: standalone batch creation and lookup by slug."""

from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from inventory.errors import BatchFailure
from inventory.schemas.common import envelope
from inventory.schemas.content import SeoBatchRequest
from inventory.services.cache_service import CITY_LIST, HOTEL_LIST, ROOM_LIST, cache_service
from inventory.services.seo_service import seo_service
from inventory.store import EntityStore, get_store

router = APIRouter()


@router.post("")
async def create_seo_metadata(req: SeoBatchRequest, store: EntityStore = Depends(get_store)):
    """Create SEO records one by one; a failed entry never blocks the others."""
    seo_service.validate_batch(req.seo_data)
    outcome = await seo_service.create_batch(store, req.seo_data)
    if not outcome.successful:
        raise BatchFailure("Failed to create any SEO metadata", details=outcome.failed)

    # List responses embed slugs
    await cache_service.invalidate(CITY_LIST, HOTEL_LIST, ROOM_LIST)

    data = {"seo_metadata": outcome.successful, "summary": outcome.summary()}
    if outcome.failed:
        data["errors"] = outcome.failed
    message = (
        "SEO metadata created successfully"
        if not outcome.failed
        else "SEO metadata partially created"
    )
    return JSONResponse(status_code=outcome.status_code, content=jsonable_encoder(envelope(message, data)))


@router.get("")
async def get_seo_metadata(
    slug: str | None = Query(default=None, max_length=200),
    store: EntityStore = Depends(get_store),
):
    data = await seo_service.get_by_slug(store, slug)
    return envelope("SEO metadata retrieved successfully", jsonable_encoder(data))
