"""Image collection router."""

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from inventory.schemas.common import envelope
from inventory.schemas.content import ImageCollectionRequest
from inventory.services.image_service import image_service
from inventory.store import EntityStore, get_store

router = APIRouter()


@router.post("")
async def create_image_collection(req: ImageCollectionRequest, store: EntityStore = Depends(get_store)):
    outcome = await image_service.create_collection(store, req.content_type, req.content_id, req.images)
    data = {"image_assets": outcome.successful, "summary": outcome.summary()}
    if outcome.failed:
        data["errors"] = outcome.failed
    message = "Images created successfully" if not outcome.failed else "Images partially created"
    return JSONResponse(status_code=outcome.status_code, content=jsonable_encoder(envelope(message, data)))
