"""Countries and cities."""

import logging
import uuid

from inventory.data.content_types import ContentType
from inventory.errors import ConflictError, NotFoundError
from inventory.schemas.geo import CityCreate, CountryCreate
from inventory.services.seo_service import seo_service
from inventory.store import EntityStore, ForeignKeyViolation, UniqueViolation

logger = logging.getLogger(__name__)


class GeoService:
    async def create_country(self, store: EntityStore, data: CountryCreate) -> dict:
        for name_field in ("name_th", "name_en"):
            if await store.exists("countries", {name_field: getattr(data, name_field)}):
                raise ConflictError(
                    "This country name already exists.", code="COUNTRY_EXISTS", field=name_field
                )

        try:
            country = await store.insert("countries", {"id": uuid.uuid4(), **data.model_dump()})
        except UniqueViolation as e:
            raise ConflictError("This country name already exists.", code="COUNTRY_EXISTS") from e

        logger.info(f"Country created: {country['id']} ({country['name_en']})")
        return country

    async def create_city(self, store: EntityStore, data: CityCreate) -> dict:
        if not await store.exists("countries", {"id": data.country_id}):
            raise NotFoundError("Country not found", code="COUNTRY_NOT_FOUND", field="country_id")

        for name_field in ("name_th", "name_en"):
            if await store.exists(
                "cities", {"country_id": data.country_id, name_field: getattr(data, name_field)}
            ):
                raise ConflictError(
                    "City name already exists in this country", code="CITY_EXISTS", field=name_field
                )

        try:
            city = await store.insert("cities", {"id": uuid.uuid4(), **data.model_dump()})
        except UniqueViolation as e:
            raise ConflictError("City name already exists in this country", code="CITY_EXISTS") from e
        except ForeignKeyViolation as e:
            # Country removed between the check and the write
            raise NotFoundError("Country not found", code="COUNTRY_NOT_FOUND", field="country_id") from e

        logger.info(f"City created: {city['id']} ({city['name_en']})")
        return city

    async def list_cities(self, store: EntityStore) -> dict:
        """Cities that have at least one hotel, ordered by English name."""
        links = await store.select("hotels_cities_map")
        city_ids = list({link["city_id"] for link in links})
        if not city_ids:
            return {"cities": [], "total": 0}

        cities = await store.select("cities", {"id": city_ids}, order_by="name_en")
        slugs = await seo_service.slugs_for(store, ContentType.CITY, city_ids)

        formatted = [
            {
                "id": city["id"],
                "name_th": city["name_th"],
                "name_en": city["name_en"],
                "slug_th": slugs.get(city["id"], {}).get("slug_th", ""),
                "slug_en": slugs.get(city["id"], {}).get("slug_en", ""),
                "image": city.get("image"),
            }
            for city in cities
        ]
        logger.info(f"City list fetched: {len(formatted)} cities")
        return {"cities": formatted, "total": len(formatted)}


geo_service = GeoService()
