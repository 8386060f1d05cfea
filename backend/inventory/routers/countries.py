from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from inventory.schemas.common import envelope
from inventory.schemas.geo import CountryCreate
from inventory.services.geo_service import geo_service
from inventory.store import EntityStore, get_store

router = APIRouter()


@router.post("")
async def create_country(req: CountryCreate, store: EntityStore = Depends(get_store)):
    country = await geo_service.create_country(store, req)
    return JSONResponse(
        status_code=201,
        content=jsonable_encoder(envelope("Country created successfully", country)),
    )
