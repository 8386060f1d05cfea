import uuid

from pydantic import BaseModel, Field, field_validator

from inventory.schemas.content import ImageIn, SeoEntryIn, check_url

ENGLISH_NAME_PATTERN = r"^[a-zA-Z0-9\s\-'&.,()]+$"
TIME_PATTERN = r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$"
GOOGLE_MAPS_PATTERN = r"^https://(maps\.app\.goo\.gl/[a-zA-Z0-9]+|maps\.google\.com/.+|goo\.gl/maps/[a-zA-Z0-9]+)"


class HotelDataIn(BaseModel):
    name_th: str = Field(min_length=2, max_length=200)
    name_en: str = Field(min_length=2, max_length=200, pattern=ENGLISH_NAME_PATTERN)
    excerpt_th: str = Field(min_length=20, max_length=500)
    excerpt_en: str = Field(min_length=20, max_length=500)
    description_th: str = Field(min_length=50, max_length=5000)
    description_en: str = Field(min_length=50, max_length=5000)
    checkin_time: str = Field(pattern=TIME_PATTERN)
    checkout_time: str = Field(pattern=TIME_PATTERN)
    image: str
    location_txt_th: str = Field(min_length=10, max_length=500)
    location_txt_en: str = Field(min_length=10, max_length=500)
    google_map_link: str = Field(pattern=GOOGLE_MAPS_PATTERN)
    is_active: bool

    model_config = {"str_strip_whitespace": True}

    @field_validator("image")
    @classmethod
    def image_url(cls, v: str) -> str:
        checked = check_url(v)
        if checked is None:
            raise ValueError("Image URL is required")
        return checked


class HotelCreateRequest(BaseModel):
    hotel_data: HotelDataIn
    city_ids: list[uuid.UUID] = Field(min_length=1)
    hotel_option_ids: list[uuid.UUID] = Field(default_factory=list)
    seo_data: list[SeoEntryIn] = Field(default_factory=list, max_length=5)
    images: list[ImageIn] = Field(default_factory=list, max_length=50)
