"""Room service: aggregate creation with tiered pricing, tier overlap checks and listing."""

import logging
import uuid

from inventory.data.content_types import ContentType
from inventory.errors import ConflictError, NotFoundError
from inventory.schemas.common import Pagination
from inventory.schemas.pricing import OverridePriceIn, SeasonPriceIn
from inventory.schemas.room import RoomCreateRequest
from inventory.services.creation_orchestrator import AggregateCreator, AggregateResult, check_references
from inventory.services.overlap import NamedRange
from inventory.services.pricing_validator import price_tier_validator
from inventory.services.seo_service import clean_slug, seo_service
from inventory.store import EntityStore

logger = logging.getLogger(__name__)


def stored_range(row: dict) -> NamedRange:
    return NamedRange(row["name"], row["start_date"], row["end_date"])


class RoomCreator(AggregateCreator):
    content_type = ContentType.ROOM
    collection = "rooms"
    exists_code = "ROOM_EXISTS"

    async def validate(self, request: RoomCreateRequest) -> None:
        room = request.room_data
        if not await self.store.exists("hotels", {"id": room.hotel_id}):
            raise NotFoundError("Hotel not found", code="HOTEL_NOT_FOUND", field="room_data.hotel_id")

        for name_field in ("name_th", "name_en"):
            if await self.store.exists(
                "rooms", {"hotel_id": room.hotel_id, name_field: getattr(room, name_field)}
            ):
                raise ConflictError(
                    "Room name already exists in this hotel",
                    code="ROOM_EXISTS",
                    field=f"room_data.{name_field}",
                )

        await check_references(
            self.store, "room_options", request.room_option_ids,
            "INVALID_OPTION_ID", "room option", "room_option_ids",
        )

        # A new room has no stored tiers to compare against
        price_tier_validator.validate(
            request.base_price, request.season_base_prices, request.override_prices
        )

    def primary_record(self, request: RoomCreateRequest) -> dict:
        return request.room_data.model_dump()

    async def write_dependents(self, room_id: uuid.UUID, request: RoomCreateRequest, result: AggregateResult) -> None:
        option_ids = list(dict.fromkeys(request.room_option_ids))
        await self.insert_dependents(
            "room_options_map",
            [{"id": uuid.uuid4(), "room_id": room_id, "room_option_id": oid} for oid in option_ids],
            room_id,
        )

        base_price = await self.insert_dependents(
            "room_base_prices",
            [{"id": uuid.uuid4(), "room_id": room_id, **request.base_price.model_dump()}],
            room_id,
        )
        seasons = await self.insert_dependents(
            "room_season_base_prices",
            [self._tier_record(room_id, s) for s in request.season_base_prices],
            room_id,
        )
        overrides = await self.insert_dependents(
            "room_override_prices",
            [self._tier_record(room_id, o) for o in request.override_prices],
            room_id,
        )

        result.dependents["base_price"] = base_price[0]
        result.dependents["room_option_ids"] = [str(oid) for oid in option_ids]
        if seasons:
            result.dependents["season_base_prices"] = seasons
        if overrides:
            result.dependents["override_prices"] = overrides
        result.counts.update({
            "options_linked": len(option_ids),
            "seasons_created": len(seasons),
            "overrides_created": len(overrides),
        })

    def _tier_record(self, room_id: uuid.UUID, tier: SeasonPriceIn | OverridePriceIn) -> dict:
        record = tier.model_dump()
        record["name"] = tier.name.strip()
        if isinstance(tier, OverridePriceIn) and tier.note:
            record["note"] = tier.note.strip()
        return {"id": uuid.uuid4(), "room_id": room_id, **record}


class RoomService:
    """Room creation, tier overlap checks against stored tiers, and listing."""

    async def create(
        self, store: EntityStore, request: RoomCreateRequest, log: logging.Logger = logger
    ) -> AggregateResult:
        return await RoomCreator(store, log=log).create(request)

    async def check_date_overlaps(
        self,
        store: EntityStore,
        room_id: uuid.UUID,
        season_prices: list[SeasonPriceIn] | None = None,
        override_prices: list[OverridePriceIn] | None = None,
    ) -> None:
        """Validate new tiers for an existing room against its stored tiers.

        Entry point for the tier update path. Creation validates its own
        payload in one pass and never calls this.
        """
        existing_seasons = []
        existing_overrides = []
        if season_prices:
            rows = await store.select("room_season_base_prices", {"room_id": room_id})
            existing_seasons = [stored_range(row) for row in rows]
        if override_prices:
            rows = await store.select("room_override_prices", {"room_id": room_id, "is_active": True})
            existing_overrides = [stored_range(row) for row in rows]

        price_tier_validator.validate(
            None,
            season_prices,
            override_prices,
            existing_seasons=existing_seasons,
            existing_overrides=existing_overrides,
        )

    async def list_rooms(self, store: EntityStore, hotel_slug: str, limit: int, offset: int) -> dict:
        seo = await store.select_one(
            "seo_metadata", {"page_type": ContentType.HOTEL.value, "slug": clean_slug(hotel_slug)}
        )
        hotel = await store.select_one("hotels", {"id": seo["page_id"]}) if seo else None
        if hotel is None:
            raise NotFoundError("Hotel not found", code="HOTEL_NOT_FOUND", field="hotel_slug")

        filters = {"hotel_id": hotel["id"], "is_active": True}
        total = await store.count("rooms", filters)
        rooms = await store.select("rooms", filters, order_by="name_en", limit=limit, offset=offset)
        room_ids = [room["id"] for room in rooms]

        options_by_room = await self._options_for(store, room_ids)
        slugs = await seo_service.slugs_for(store, ContentType.ROOM, room_ids)

        return {
            "hotel": {"id": hotel["id"], "name_th": hotel["name_th"], "name_en": hotel["name_en"]},
            "rooms": [
                {
                    **room,
                    "options": options_by_room.get(room["id"], []),
                    "slug_th": slugs.get(room["id"], {}).get("slug_th"),
                    "slug_en": slugs.get(room["id"], {}).get("slug_en"),
                }
                for room in rooms
            ],
            "pagination": Pagination.build(total, limit, offset).model_dump(),
        }

    async def _options_for(self, store: EntityStore, room_ids: list) -> dict:
        if not room_ids:
            return {}
        links = await store.select("room_options_map", {"room_id": room_ids})
        option_ids = list({link["room_option_id"] for link in links})
        options = await store.select("room_options", {"id": option_ids}) if option_ids else []
        by_id = {option["id"]: option for option in options}

        grouped: dict = {}
        for link in links:
            option = by_id.get(link["room_option_id"])
            if option:
                grouped.setdefault(link["room_id"], []).append(option)
        return grouped


room_service = RoomService()
