import uuid
from decimal import Decimal

from pydantic import BaseModel, Field

from inventory.schemas.content import ImageIn, SeoEntryIn
from inventory.schemas.pricing import BasePriceIn, OverridePriceIn, SeasonPriceIn

ENGLISH_NAME_PATTERN = r"^[a-zA-Z0-9\s\-'&.,()]+$"


class RoomDataIn(BaseModel):
    hotel_id: uuid.UUID
    name_th: str = Field(min_length=2, max_length=100)
    name_en: str = Field(min_length=2, max_length=100, pattern=ENGLISH_NAME_PATTERN)
    room_size: Decimal = Field(ge=1, le=9999, decimal_places=2)
    description_th: str = Field(min_length=20, max_length=5000)
    description_en: str = Field(min_length=20, max_length=5000)
    max_adult: int = Field(ge=1, le=10)
    max_children: int = Field(ge=0, le=10)
    total_room: int = Field(ge=1, le=999)
    is_active: bool

    model_config = {"str_strip_whitespace": True}


class RoomCreateRequest(BaseModel):
    room_data: RoomDataIn
    room_option_ids: list[uuid.UUID] = Field(default_factory=list)
    base_price: BasePriceIn
    season_base_prices: list[SeasonPriceIn] = Field(default_factory=list, max_length=20)
    override_prices: list[OverridePriceIn] = Field(default_factory=list, max_length=100)
    seo_data: list[SeoEntryIn] = Field(default_factory=list, max_length=5)
    images: list[ImageIn] = Field(default_factory=list, max_length=50)
