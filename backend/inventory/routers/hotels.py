"""Hotel router: aggregate creation and listing."""

from fastapi import APIRouter, Depends, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from inventory.config import settings
from inventory.schemas.common import envelope
from inventory.schemas.hotel import HotelCreateRequest
from inventory.services.cache_service import CITY_LIST, HOTEL_LIST, cache_service
from inventory.services.hotel_service import hotel_service
from inventory.services.seo_service import clean_slug
from inventory.store import EntityStore, get_store

router = APIRouter()


@router.post("")
async def create_hotel(req: HotelCreateRequest, store: EntityStore = Depends(get_store)):
    """Create a hotel with its city links, amenities, SEO metadata and images."""
    result = await hotel_service.create(store, req)
    await cache_service.invalidate(HOTEL_LIST, CITY_LIST)
    return JSONResponse(
        status_code=result.status_code,
        content=jsonable_encoder(envelope("Hotel created successfully", result.to_payload())),
    )


@router.get("/list")
async def list_hotels(
    city_slug: str | None = Query(default=None, max_length=100),
    limit: int = Query(default=settings.default_page_limit, ge=1, le=settings.max_page_limit),
    offset: int = Query(default=0, ge=0),
    store: EntityStore = Depends(get_store),
):
    # A blank filter lists every city
    city = clean_slug(city_slug or "") or None
    cached = await cache_service.get_list(HOTEL_LIST, city, limit, offset)
    if cached is not None:
        return envelope("Hotels retrieved successfully", cached)

    data = jsonable_encoder(await hotel_service.list_hotels(store, city, limit, offset))
    await cache_service.set_list(HOTEL_LIST, data, city, limit, offset)
    return envelope("Hotels retrieved successfully", data)
