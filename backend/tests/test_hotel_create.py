import uuid

import pytest

from inventory.errors import ConflictError, StoreError, ValidationError
from inventory.schemas.hotel import HotelCreateRequest
from inventory.services.creation_orchestrator import CreationState
from inventory.services.hotel_service import hotel_service
from tests.factories import STORAGE, hotel_payload, image, seo_entry

HOTEL_COLLECTIONS = ("hotels", "hotels_cities_map", "hotels_options_map", "seo_metadata", "image_assets")


def nothing_written(store):
    return all(not store.rows(name) for name in HOTEL_COLLECTIONS)


async def test_creates_hotel_with_links_seo_and_gallery(store, city, hotel_options):
    payload = hotel_payload(
        [city["id"]],
        hotel_option_ids=[str(o["id"]) for o in hotel_options],
        seo_data=[seo_entry("en", "beautiful-sea-hotel"), seo_entry("th", "beautiful-sea-hotel")],
        images=[image("lobby.jpg", is_cover=True, url=f"{STORAGE}/hotels/lobby.jpg")],
    )

    result = await hotel_service.create(store, HotelCreateRequest(**payload))

    assert result.status_code == 201
    assert result.state is CreationState.SUCCEEDED
    hotel_id = result.primary["id"]
    assert store.rows("hotels_cities_map", hotel_id=hotel_id)[0]["city_id"] == city["id"]
    assert len(store.rows("hotels_options_map", hotel_id=hotel_id)) == 2
    assert len(store.rows("seo_metadata", page_type="hotel", page_id=hotel_id)) == 2
    assert store.rows("image_assets", content_type="hotel")[0]["is_cover"] is True

    body = result.to_payload()
    assert body["hotel"]["name_en"] == "Beautiful Sea Hotel"
    assert body["city_ids"] == [str(city["id"])]
    assert body["summary"]["hotel_created"] is True
    assert body["summary"]["cities_linked"] == 1
    assert body["summary"]["options_linked"] == 2


async def test_repeated_city_ids_are_linked_once(store, city):
    payload = hotel_payload([city["id"], city["id"]])

    result = await hotel_service.create(store, HotelCreateRequest(**payload))

    assert result.summary()["cities_linked"] == 1
    assert len(store.rows("hotels_cities_map")) == 1


@pytest.mark.parametrize("name_field", ["name_th", "name_en"])
async def test_existing_hotel_name_conflicts(store, city, hotel, name_field):
    payload = hotel_payload([city["id"]])
    renamed = "name_en" if name_field == "name_th" else "name_th"
    payload["hotel_data"][renamed] = "Different Name"

    with pytest.raises(ConflictError) as exc_info:
        await hotel_service.create(store, HotelCreateRequest(**payload))

    assert exc_info.value.code == "HOTEL_EXISTS"
    assert exc_info.value.field == f"hotel_data.{name_field}"
    assert len(store.rows("hotels")) == 1


async def test_unknown_city_rejected(store, city):
    payload = hotel_payload([city["id"], uuid.uuid4()])

    with pytest.raises(ValidationError) as exc_info:
        await hotel_service.create(store, HotelCreateRequest(**payload))

    assert exc_info.value.code == "INVALID_CITY_ID"
    assert nothing_written(store)


async def test_unknown_hotel_option_rejected(store, city):
    payload = hotel_payload([city["id"]], hotel_option_ids=[str(uuid.uuid4())])

    with pytest.raises(ValidationError) as exc_info:
        await hotel_service.create(store, HotelCreateRequest(**payload))

    assert exc_info.value.code == "INVALID_OPTION_ID"


async def test_option_link_failure_removes_hotel_and_city_links(store, city, hotel_options):
    store.fail_on("insert", "hotels_options_map")
    payload = hotel_payload([city["id"]], hotel_option_ids=[str(hotel_options[0]["id"])])

    with pytest.raises(StoreError):
        await hotel_service.create(store, HotelCreateRequest(**payload))

    assert nothing_written(store)
    deletes = [collection for op, collection in store.calls if op == "delete"]
    assert deletes == ["hotels_cities_map", "hotels"]


async def test_seo_partial_failure_keeps_hotel(store, city):
    payload = hotel_payload([city["id"]], seo_data=[seo_entry("en", "login"), seo_entry("th", "sea-hotel")])

    result = await hotel_service.create(store, HotelCreateRequest(**payload))

    assert result.status_code == 207
    assert result.to_payload()["seo_errors"][0]["code"] == "RESERVED_SLUG"
    assert len(store.rows("hotels")) == 1
