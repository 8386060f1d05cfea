import uuid

from pydantic import BaseModel, Field, field_validator

from inventory.schemas.content import check_storage_url

GEO_NAME_PATTERN = r"^[a-zA-Z\s\-']+$"


class CountryCreate(BaseModel):
    name_th: str = Field(min_length=2, max_length=100)
    name_en: str = Field(min_length=2, max_length=100, pattern=GEO_NAME_PATTERN)
    image: str | None = None

    model_config = {"str_strip_whitespace": True}

    @field_validator("image")
    @classmethod
    def image_in_storage(cls, v: str | None) -> str | None:
        return check_storage_url(v)


class CityCreate(CountryCreate):
    country_id: uuid.UUID
