import re
import uuid
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from inventory.config import settings
from inventory.data.content_types import ContentType

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"
URL_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)


def check_url(value: str | None) -> str | None:
    if value is None or value == "":
        return None
    value = value.strip()
    if not URL_PATTERN.match(value):
        raise ValueError("Invalid URL format")
    return value


def check_storage_url(value: str | None) -> str | None:
    value = check_url(value)
    if value is not None and not re.match(settings.image_storage_url_pattern, value):
        raise ValueError("Image must be hosted in the configured storage bucket")
    return value


class SeoEntryIn(BaseModel):
    """One language of SEO metadata for a page created in the same request."""

    slug: str = Field(min_length=3, max_length=100, pattern=SLUG_PATTERN)
    lang: Literal["th", "en"]
    title: str = Field(min_length=10, max_length=150)
    description: str = Field(min_length=10, max_length=250)
    og_image: str | None = None

    @field_validator("og_image")
    @classmethod
    def og_image_url(cls, v: str | None) -> str | None:
        return check_url(v)


class SeoMetadataIn(SeoEntryIn):
    page_type: ContentType
    page_id: uuid.UUID | None = None


class SeoBatchRequest(BaseModel):
    seo_data: list[SeoMetadataIn] = Field(min_length=1, max_length=20)


class ImageIn(BaseModel):
    url: str = Field(max_length=500)
    alt: str | None = Field(default=None, max_length=255)
    caption: str | None = Field(default=None, max_length=500)
    is_cover: bool
    sort_order: int | None = Field(default=0, ge=0, le=999)

    @field_validator("url")
    @classmethod
    def url_in_storage(cls, v: str) -> str:
        checked = check_storage_url(v)
        if checked is None:
            raise ValueError("Image URL is required")
        return checked


class ImageCollectionRequest(BaseModel):
    content_type: ContentType
    content_id: uuid.UUID
    images: list[ImageIn] = Field(min_length=1, max_length=50)
