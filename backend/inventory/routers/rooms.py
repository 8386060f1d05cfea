"""Room router: aggregate creation and listing by hotel."""

from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from inventory.config import settings
from inventory.schemas.common import envelope
from inventory.schemas.room import RoomCreateRequest
from inventory.services.cache_service import ROOM_LIST, cache_service
from inventory.services.room_service import room_service
from inventory.services.seo_service import clean_slug
from inventory.store import EntityStore, get_store

router = APIRouter()


@router.post("")
async def create_room(req: RoomCreateRequest, store: EntityStore = Depends(get_store)):
    """Create a room with pricing tiers, options, SEO metadata and images."""
    result = await room_service.create(store, req)
    await cache_service.invalidate(ROOM_LIST)
    return JSONResponse(
        status_code=result.status_code,
        content=jsonable_encoder(envelope("Room created successfully", result.to_payload())),
    )


@router.get("/list")
async def list_rooms(
    hotel_slug: str = Query(min_length=1, max_length=100),
    limit: int = Query(default=settings.default_page_limit, ge=1, le=settings.max_page_limit),
    offset: int = Query(default=0, ge=0),
    store: EntityStore = Depends(get_store),
):
    hotel_slug = clean_slug(hotel_slug)
    cached = await cache_service.get_list(ROOM_LIST, hotel_slug, limit, offset)
    if cached is not None:
        return envelope("Rooms retrieved successfully", cached)

    data = jsonable_encoder(await room_service.list_rooms(store, hotel_slug, limit, offset))
    await cache_service.set_list(ROOM_LIST, data, hotel_slug, limit, offset)
    return envelope("Rooms retrieved successfully", data)
