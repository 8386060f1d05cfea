"""Hotel service: aggregate creation with city and amenity links, and listing."""

import logging
import uuid

from inventory.data.content_types import ContentType
from inventory.errors import ConflictError, NotFoundError
from inventory.schemas.common import Pagination
from inventory.schemas.hotel import HotelCreateRequest
from inventory.services.creation_orchestrator import AggregateCreator, AggregateResult, check_references
from inventory.services.seo_service import clean_slug, seo_service
from inventory.store import EntityStore

logger = logging.getLogger(__name__)


class HotelCreator(AggregateCreator):
    content_type = ContentType.HOTEL
    collection = "hotels"
    exists_code = "HOTEL_EXISTS"

    async def validate(self, request: HotelCreateRequest) -> None:
        hotel = request.hotel_data
        for name_field in ("name_th", "name_en"):
            if await self.store.exists("hotels", {name_field: getattr(hotel, name_field)}):
                raise ConflictError(
                    "Hotel name already exists", code="HOTEL_EXISTS", field=f"hotel_data.{name_field}"
                )

        await check_references(
            self.store, "cities", request.city_ids, "INVALID_CITY_ID", "city", "city_ids"
        )
        await check_references(
            self.store, "hotel_options", request.hotel_option_ids,
            "INVALID_OPTION_ID", "hotel option", "hotel_option_ids",
        )

    def primary_record(self, request: HotelCreateRequest) -> dict:
        return request.hotel_data.model_dump()

    async def write_dependents(self, hotel_id: uuid.UUID, request: HotelCreateRequest, result: AggregateResult) -> None:
        city_ids = list(dict.fromkeys(request.city_ids))
        option_ids = list(dict.fromkeys(request.hotel_option_ids))

        await self.insert_dependents(
            "hotels_cities_map",
            [{"id": uuid.uuid4(), "hotel_id": hotel_id, "city_id": cid} for cid in city_ids],
            hotel_id,
        )
        await self.insert_dependents(
            "hotels_options_map",
            [{"id": uuid.uuid4(), "hotel_id": hotel_id, "hotel_option_id": oid} for oid in option_ids],
            hotel_id,
        )

        result.dependents["city_ids"] = [str(cid) for cid in city_ids]
        result.dependents["hotel_option_ids"] = [str(oid) for oid in option_ids]
        result.counts.update({"cities_linked": len(city_ids), "options_linked": len(option_ids)})


class HotelService:
    async def create(
        self, store: EntityStore, request: HotelCreateRequest, log: logging.Logger = logger
    ) -> AggregateResult:
        return await HotelCreator(store, log=log).create(request)

    async def list_hotels(
        self, store: EntityStore, city_slug: str | None, limit: int, offset: int
    ) -> dict:
        """Active hotels ordered by English name, optionally limited to one city."""
        filters: dict = {"is_active": True}
        city = None
        if city_slug:
            seo = await store.select_one(
                "seo_metadata", {"page_type": ContentType.CITY.value, "slug": clean_slug(city_slug)}
            )
            city = await store.select_one("cities", {"id": seo["page_id"]}) if seo else None
            if city is None:
                raise NotFoundError("City not found", code="CITY_NOT_FOUND", field="city_slug")
            links = await store.select("hotels_cities_map", {"city_id": city["id"]})
            filters["id"] = [link["hotel_id"] for link in links]

        total = await store.count("hotels", filters)
        hotels = await store.select("hotels", filters, order_by="name_en", limit=limit, offset=offset)
        hotel_ids = [hotel["id"] for hotel in hotels]

        options_by_hotel = await self._options_for(store, hotel_ids)
        slugs = await seo_service.slugs_for(store, ContentType.HOTEL, hotel_ids)

        data = {
            "hotels": [
                {
                    **hotel,
                    "options": options_by_hotel.get(hotel["id"], []),
                    "slug_th": slugs.get(hotel["id"], {}).get("slug_th"),
                    "slug_en": slugs.get(hotel["id"], {}).get("slug_en"),
                }
                for hotel in hotels
            ],
            "pagination": Pagination.build(total, limit, offset).model_dump(),
        }
        if city is not None:
            data["city"] = {"id": city["id"], "name_th": city["name_th"], "name_en": city["name_en"]}
        return data

    async def _options_for(self, store: EntityStore, hotel_ids: list) -> dict:
        if not hotel_ids:
            return {}
        links = await store.select("hotels_options_map", {"hotel_id": hotel_ids})
        option_ids = list({link["hotel_option_id"] for link in links})
        options = await store.select("hotel_options", {"id": option_ids}) if option_ids else []
        by_id = {option["id"]: option for option in options}

        grouped: dict = {}
        for link in links:
            option = by_id.get(link["hotel_option_id"])
            if option:
                grouped.setdefault(link["hotel_id"], []).append(option)
        return grouped


hotel_service = HotelService()
