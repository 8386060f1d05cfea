import pytest
from pydantic import ValidationError

from inventory.schemas.common import Pagination
from inventory.schemas.content import SeoEntryIn
from inventory.schemas.geo import CountryCreate
from inventory.schemas.hotel import HotelDataIn
from inventory.schemas.room import RoomDataIn
from tests.factories import hotel_record, room_payload, seo_entry


@pytest.mark.parametrize("slug", ["deluxe-room", "room-101", "abc"])
def test_valid_slugs(slug):
    assert SeoEntryIn(**seo_entry(slug=slug)).slug == slug


@pytest.mark.parametrize("slug", ["Deluxe", "deluxe--room", "-room", "room-", "ab", "room_101"])
def test_invalid_slugs(slug):
    with pytest.raises(ValidationError):
        SeoEntryIn(**seo_entry(slug=slug))


def test_unsupported_language_rejected():
    with pytest.raises(ValidationError):
        SeoEntryIn(**seo_entry(lang="fr"))


def test_og_image_must_be_a_url():
    with pytest.raises(ValidationError):
        SeoEntryIn(**seo_entry(og_image="not a url"))
    assert SeoEntryIn(**seo_entry(og_image="")).og_image is None


def test_room_names_are_trimmed():
    data = room_payload("2f1b6c1e-7d38-4a51-9d0c-3c9b5f0c1a11")["room_data"]
    data["name_en"] = "  Deluxe Room  "

    assert RoomDataIn(**data).name_en == "Deluxe Room"


def test_room_size_allows_two_decimals_only():
    data = room_payload("2f1b6c1e-7d38-4a51-9d0c-3c9b5f0c1a11")["room_data"]
    data["room_size"] = "32.555"

    with pytest.raises(ValidationError):
        RoomDataIn(**data)


@pytest.mark.parametrize("time", ["24:00", "14:60", "2pm"])
def test_checkin_time_format(time):
    data = hotel_record(checkin_time=time)
    data.pop("id")

    with pytest.raises(ValidationError):
        HotelDataIn(**data)


def test_google_map_link_must_be_google_maps():
    data = hotel_record(google_map_link="https://example.com/map")
    data.pop("id")

    with pytest.raises(ValidationError):
        HotelDataIn(**data)


def test_country_image_must_be_in_storage():
    with pytest.raises(ValidationError):
        CountryCreate(name_th="ญี่ปุ่น", name_en="Japan", image="https://example.com/japan.jpg")


@pytest.mark.parametrize(
    "total,limit,offset,page,pages,more",
    [(0, 20, 0, 1, 0, False), (45, 20, 0, 1, 3, True), (45, 20, 40, 3, 3, False), (40, 20, 20, 2, 2, False)],
)
def test_pagination(total, limit, offset, page, pages, more):
    p = Pagination.build(total, limit, offset)
    assert (p.current_page, p.total_pages, p.has_more) == (page, pages, more)
