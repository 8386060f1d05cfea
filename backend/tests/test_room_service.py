import uuid
from datetime import date

import pytest

from inventory.errors import ConflictError, NotFoundError
from inventory.schemas.pricing import OverridePriceIn, SeasonPriceIn
from inventory.services.room_service import room_service
from tests.factories import room_record, seo_record, weekly


@pytest.fixture
def room(store, hotel):
    return store.seed("rooms", room_record(hotel["id"]))


@pytest.fixture
def stored_tiers(store, room):
    store.seed("room_season_base_prices", {
        "id": uuid.uuid4(), "room_id": room["id"], "name": "High",
        "start_date": date(2024, 11, 1), "end_date": date(2024, 11, 30), **weekly("2200"),
    })
    store.seed("room_override_prices", {
        "id": uuid.uuid4(), "room_id": room["id"], "name": "Loy Krathong", "price": "1800",
        "start_date": date(2024, 11, 15), "end_date": date(2024, 11, 16), "is_active": True,
    })
    store.seed("room_override_prices", {
        "id": uuid.uuid4(), "room_id": room["id"], "name": "Retired promo", "price": "900",
        "start_date": date(2024, 12, 1), "end_date": date(2024, 12, 31), "is_active": False,
    })


def season(name, start, end):
    return SeasonPriceIn(name=name, start_date=start, end_date=end, **weekly())


def override(name, start, end, active=True):
    return OverridePriceIn(name=name, price="1000", start_date=start, end_date=end, is_promotion=False, is_active=active)


class TestCheckDateOverlaps:
    async def test_new_season_touching_stored_one_conflicts(self, store, room, stored_tiers):
        with pytest.raises(ConflictError) as exc_info:
            await room_service.check_date_overlaps(
                store, room["id"], season_prices=[season("Winter", date(2024, 11, 30), date(2024, 12, 15))]
            )
        assert exc_info.value.code == "SEASON_OVERLAP"
        assert '"High"' in exc_info.value.message

    async def test_new_season_after_stored_one_passes(self, store, room, stored_tiers):
        await room_service.check_date_overlaps(
            store, room["id"], season_prices=[season("Winter", date(2024, 12, 1), date(2024, 12, 15))]
        )

    async def test_stored_inactive_override_is_ignored(self, store, room, stored_tiers):
        await room_service.check_date_overlaps(
            store, room["id"], override_prices=[override("Christmas", date(2024, 12, 24), date(2024, 12, 26))]
        )

    async def test_stored_active_override_conflicts(self, store, room, stored_tiers):
        with pytest.raises(ConflictError) as exc_info:
            await room_service.check_date_overlaps(
                store, room["id"], override_prices=[override("Festival", date(2024, 11, 16), date(2024, 11, 17))]
            )
        assert exc_info.value.code == "OVERRIDE_OVERLAP"

    async def test_other_rooms_tiers_are_not_considered(self, store, hotel, stored_tiers):
        other = store.seed("rooms", room_record(hotel["id"], name_en="Suite"))
        await room_service.check_date_overlaps(
            store, other["id"], season_prices=[season("High", date(2024, 11, 1), date(2024, 11, 30))]
        )


class TestListRooms:
    @pytest.fixture
    def listed_hotel(self, store, hotel, room_options):
        store.seed("seo_metadata", seo_record("hotel", hotel["id"], "beautiful-sea-hotel"))
        rooms = [
            store.seed("rooms", room_record(hotel["id"], name_en=name))
            for name in ("Superior", "Deluxe", "Family Suite")
        ]
        store.seed("rooms", room_record(hotel["id"], name_en="Closed Wing", is_active=False))
        store.seed("room_options_map", {"id": uuid.uuid4(), "room_id": rooms[1]["id"], "room_option_id": room_options[0]["id"]})
        store.seed("seo_metadata", seo_record("room", rooms[1]["id"], "deluxe", lang="en"))
        store.seed("seo_metadata", seo_record("room", rooms[1]["id"], "deluxe-th", lang="th"))
        return hotel

    async def test_active_rooms_sorted_by_english_name(self, store, listed_hotel):
        data = await room_service.list_rooms(store, "beautiful-sea-hotel", limit=20, offset=0)

        assert [r["name_en"] for r in data["rooms"]] == ["Deluxe", "Family Suite", "Superior"]
        assert data["hotel"]["id"] == listed_hotel["id"]
        assert data["pagination"] == {
            "total": 3, "limit": 20, "offset": 0, "current_page": 1, "total_pages": 1, "has_more": False,
        }

    async def test_rooms_carry_options_and_slugs(self, store, listed_hotel):
        data = await room_service.list_rooms(store, "Beautiful-Sea-Hotel", limit=20, offset=0)

        deluxe = data["rooms"][0]
        assert [o["name_en"] for o in deluxe["options"]] == ["King Bed"]
        assert (deluxe["slug_en"], deluxe["slug_th"]) == ("deluxe", "deluxe-th")
        suite = data["rooms"][1]
        assert suite["options"] == []
        assert suite["slug_en"] is None

    async def test_pagination(self, store, listed_hotel):
        data = await room_service.list_rooms(store, "beautiful-sea-hotel", limit=2, offset=2)

        assert [r["name_en"] for r in data["rooms"]] == ["Superior"]
        assert data["pagination"]["current_page"] == 2
        assert data["pagination"]["total_pages"] == 2
        assert data["pagination"]["has_more"] is False

    async def test_unknown_hotel_slug_is_not_found(self, store, listed_hotel):
        with pytest.raises(NotFoundError) as exc_info:
            await room_service.list_rooms(store, "no-such-hotel", limit=20, offset=0)
        assert exc_info.value.code == "HOTEL_NOT_FOUND"

    async def test_hotel_without_rooms_lists_nothing(self, store, hotel):
        store.seed("seo_metadata", seo_record("hotel", hotel["id"], "empty-hotel"))

        data = await room_service.list_rooms(store, "empty-hotel", limit=20, offset=0)

        assert data["rooms"] == []
        assert data["pagination"]["total"] == 0
        assert data["pagination"]["total_pages"] == 0
