from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from inventory.schemas.common import envelope
from inventory.schemas.geo import CityCreate
from inventory.services.cache_service import CITY_LIST, cache_service
from inventory.services.geo_service import geo_service
from inventory.store import EntityStore, get_store

router = APIRouter()


@router.post("")
async def create_city(req: CityCreate, store: EntityStore = Depends(get_store)):
    city = await geo_service.create_city(store, req)
    return JSONResponse(
        status_code=201,
        content=jsonable_encoder(envelope("City created successfully", city)),
    )


@router.get("/list")
async def list_cities(store: EntityStore = Depends(get_store)):
    """Cities that currently have hotels."""
    cached = await cache_service.get_list(CITY_LIST)
    if cached is not None:
        return envelope("Cities retrieved successfully", cached)

    data = jsonable_encoder(await geo_service.list_cities(store))
    await cache_service.set_list(CITY_LIST, data)
    return envelope("Cities retrieved successfully", data)
