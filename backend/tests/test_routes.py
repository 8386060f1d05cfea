import uuid

import pytest

from inventory.services.cache_service import cache_service
from tests.factories import STORAGE, hotel_payload, image, room_payload, seo_entry, seo_record


def record_list_cache_keys(monkeypatch) -> list[str]:
    """Route list-cache reads and writes into a list of keys; every read misses."""
    keys: list[str] = []

    async def get_list(prefix, *parts):
        keys.append(cache_service.list_key(prefix, *parts))
        return None

    async def set_list(prefix, data, *parts):
        keys.append(cache_service.list_key(prefix, *parts))
        return True

    monkeypatch.setattr(cache_service, "get_list", get_list)
    monkeypatch.setattr(cache_service, "set_list", set_list)
    return keys


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


class TestRooms:
    def test_create_returns_201_envelope(self, client, hotel):
        payload = room_payload(hotel["id"], seo_data=[seo_entry("en"), seo_entry("th", "deluxe-th")])

        response = client.post("/api/room", json=payload)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Room created successfully"
        assert body["data"]["room"]["name_en"] == "Deluxe Room"
        assert body["data"]["summary"]["seo_created"] == 2

    def test_partial_seo_failure_returns_207(self, client, hotel):
        payload = room_payload(hotel["id"], seo_data=[seo_entry("en", "admin"), seo_entry("th", "deluxe-th")])

        response = client.post("/api/room", json=payload)

        assert response.status_code == 207
        data = response.json()["data"]
        assert data["seo_errors"][0]["lang"] == "en"
        assert data["summary"]["seo_failed"] == 1

    def test_field_validation_uses_error_envelope(self, client, hotel):
        payload = room_payload(hotel["id"])
        payload["room_data"]["max_adult"] = 0

        response = client.post("/api/room", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "VALIDATION_ERROR"
        assert body["error"]["field"] == "room_data.max_adult"

    def test_price_beyond_column_limit_is_400_and_not_written(self, client, store, hotel):
        payload = room_payload(hotel["id"])
        payload["base_price"]["price_fri"] = "1000000000.00"

        response = client.post("/api/room", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == {"code": "INVALID_PRICE", "field": "base_price.price_fri"}
        assert store.rows("rooms") == []

    def test_unknown_hotel_is_404(self, client):
        response = client.post("/api/room", json=room_payload(uuid.uuid4()))

        assert response.status_code == 404
        assert response.json()["error"] == {"code": "HOTEL_NOT_FOUND", "field": "room_data.hotel_id"}

    def test_duplicate_room_is_409(self, client, hotel):
        client.post("/api/room", json=room_payload(hotel["id"]))

        response = client.post("/api/room", json=room_payload(hotel["id"]))

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ROOM_EXISTS"

    def test_failed_dependent_write_is_reported_and_rolled_back(self, client, store, hotel):
        store.fail_on("insert", "room_base_prices")

        response = client.post("/api/room", json=room_payload(hotel["id"]))

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "STORE_ERROR"
        assert store.rows("rooms") == []

    def test_list_by_hotel_slug(self, client, store, hotel):
        store.seed("seo_metadata", seo_record("hotel", hotel["id"], "beautiful-sea-hotel"))
        client.post("/api/room", json=room_payload(hotel["id"]))

        response = client.get("/api/room/list", params={"hotel_slug": "beautiful-sea-hotel"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert [r["name_en"] for r in data["rooms"]] == ["Deluxe Room"]
        assert data["pagination"]["total"] == 1

    def test_padded_mixed_case_slug_shares_one_cache_key(self, client, store, hotel, monkeypatch):
        store.seed("seo_metadata", seo_record("hotel", hotel["id"], "beautiful-sea-hotel"))
        keys = record_list_cache_keys(monkeypatch)

        for slug in ("beautiful-sea-hotel", "  Beautiful-Sea-Hotel "):
            assert client.get("/api/room/list", params={"hotel_slug": slug}).status_code == 200

        assert set(keys) == {"rooms:list:beautiful-sea-hotel:20:0"}

    def test_list_unknown_hotel_slug_is_404(self, client):
        response = client.get("/api/room/list", params={"hotel_slug": "nowhere"})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "HOTEL_NOT_FOUND"

    def test_list_requires_hotel_slug(self, client):
        response = client.get("/api/room/list")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestHotels:
    def test_create(self, client, city):
        response = client.post("/api/hotel", json=hotel_payload([city["id"]]))

        assert response.status_code == 201
        assert response.json()["data"]["summary"]["cities_linked"] == 1

    def test_city_ids_required(self, client):
        response = client.post("/api/hotel", json=hotel_payload([]))

        assert response.status_code == 400
        assert response.json()["error"]["field"] == "city_ids"

    def test_list_paginates(self, client, store, city):
        for n in range(3):
            payload = hotel_payload([city["id"]])
            payload["hotel_data"]["name_th"] = f"โรงแรม {n}"
            payload["hotel_data"]["name_en"] = f"Hotel {n}"
            assert client.post("/api/hotel", json=payload).status_code == 201

        response = client.get("/api/hotel/list", params={"limit": 2, "offset": 0})

        data = response.json()["data"]
        assert [h["name_en"] for h in data["hotels"]] == ["Hotel 0", "Hotel 1"]
        assert data["pagination"]["has_more"] is True
        assert data["pagination"]["total_pages"] == 2
        assert "city" not in data

    def test_list_filtered_by_city(self, client, store, city, country):
        store.seed("seo_metadata", seo_record("city", city["id"], "phuket"))
        other_city = store.seed(
            "cities", {"id": uuid.uuid4(), "country_id": country["id"], "name_th": "กระบี่", "name_en": "Krabi"}
        )
        client.post("/api/hotel", json=hotel_payload([city["id"]]))
        payload = hotel_payload([other_city["id"]])
        payload["hotel_data"]["name_th"] = "โรงแรมกระบี่"
        payload["hotel_data"]["name_en"] = "Krabi Resort"
        client.post("/api/hotel", json=payload)

        response = client.get("/api/hotel/list", params={"city_slug": "phuket"})

        data = response.json()["data"]
        assert [h["name_en"] for h in data["hotels"]] == ["Beautiful Sea Hotel"]
        assert data["city"]["name_en"] == "Phuket"

    def test_city_filter_normalized_before_cache_lookup(self, client, store, city, monkeypatch):
        store.seed("seo_metadata", seo_record("city", city["id"], "phuket"))
        keys = record_list_cache_keys(monkeypatch)

        response = client.get("/api/hotel/list", params={"city_slug": " PHUKET "})
        client.get("/api/hotel/list", params={"city_slug": "   "})

        assert response.json()["data"]["city"]["name_en"] == "Phuket"
        assert set(keys) == {"hotels:list:phuket:20:0", "hotels:list:all:20:0"}

    def test_unknown_city_slug_is_404(self, client):
        response = client.get("/api/hotel/list", params={"city_slug": "atlantis"})

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CITY_NOT_FOUND"

    def test_limit_is_bounded(self, client):
        response = client.get("/api/hotel/list", params={"limit": 1000})

        assert response.status_code == 400


class TestSeoMetadata:
    def test_create_batch(self, client):
        payload = {"seo_data": [
            {**seo_entry("en", "about-us"), "page_type": "page"},
            {**seo_entry("th", "about-us"), "page_type": "page"},
        ]}

        response = client.post("/api/seo-metadata", json=payload)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["summary"] == {"total": 2, "success": 2, "failed": 0}
        assert "errors" not in data

    def test_partial_batch_is_207(self, client, hotel):
        payload = {"seo_data": [
            {**seo_entry("en", "sea-hotel"), "page_type": "hotel", "page_id": str(hotel["id"])},
            {**seo_entry("th", "sea-hotel"), "page_type": "hotel", "page_id": str(uuid.uuid4())},
        ]}

        response = client.post("/api/seo-metadata", json=payload)

        assert response.status_code == 207
        assert response.json()["data"]["errors"][0]["code"] == "HOTEL_NOT_FOUND"

    def test_all_failed_is_400(self, client):
        payload = {"seo_data": [{**seo_entry("en", "admin"), "page_type": "page"}]}

        response = client.post("/api/seo-metadata", json=payload)

        assert response.status_code == 400
        body = response.json()
        assert body["error"]["code"] == "ALL_FAILED"
        assert body["error"]["details"][0]["code"] == "RESERVED_SLUG"

    def test_duplicate_language_is_400(self, client):
        entry = {**seo_entry("en", "about-us"), "page_type": "page"}

        response = client.post("/api/seo-metadata", json={"seo_data": [entry, {**entry, "slug": "about"}]})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "DUPLICATE_LANGUAGE"

    def test_invalid_slug_format_is_400(self, client):
        payload = {"seo_data": [{**seo_entry("en", "Not A Slug"), "page_type": "page"}]}

        response = client.post("/api/seo-metadata", json=payload)

        assert response.status_code == 400

    def test_lookup(self, client, store):
        store.seed("seo_metadata", seo_record("page", None, "home", lang="th"))

        response = client.get("/api/seo-metadata", params={"slug": "/"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["th"]["slug"] == "home"
        assert data["en"] is None

    def test_lookup_unknown_slug_is_404(self, client):
        response = client.get("/api/seo-metadata", params={"slug": "missing"})

        assert response.status_code == 404


class TestImageCollection:
    @pytest.fixture
    def gallery(self, hotel):
        return {
            "content_type": "hotel",
            "content_id": str(hotel["id"]),
            "images": [
                image("a.jpg", is_cover=True, url=f"{STORAGE}/hotels/a.jpg"),
                image("b.jpg", url=f"{STORAGE}/hotels/b.jpg"),
            ],
        }

    def test_create(self, client, gallery):
        response = client.post("/api/image-collection", json=gallery)

        assert response.status_code == 201
        data = response.json()["data"]
        assert len(data["image_assets"]) == 2
        assert data["summary"]["success"] == 2

    def test_resubmission_conflicts(self, client, gallery):
        client.post("/api/image-collection", json=gallery)

        response = client.post("/api/image-collection", json=gallery)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "ALL_DUPLICATES"

    def test_missing_cover_is_400(self, client, gallery):
        gallery["images"][0]["is_cover"] = False

        response = client.post("/api/image-collection", json=gallery)

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "NO_COVER_IMAGE"


class TestGeo:
    def test_create_country(self, client):
        response = client.post("/api/country", json={"name_th": "ญี่ปุ่น", "name_en": "Japan"})

        assert response.status_code == 201
        assert response.json()["data"]["name_en"] == "Japan"

    def test_duplicate_country_is_409(self, client, country):
        response = client.post("/api/country", json={"name_th": "ไทย", "name_en": "Thailand"})

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "COUNTRY_EXISTS"

    def test_create_city(self, client, country):
        response = client.post(
            "/api/city",
            json={"country_id": str(country["id"]), "name_th": "เชียงใหม่", "name_en": "Chiang Mai"},
        )

        assert response.status_code == 201
        assert response.json()["data"]["country_id"] == str(country["id"])

    def test_city_in_unknown_country_is_404(self, client):
        response = client.post(
            "/api/city", json={"country_id": str(uuid.uuid4()), "name_th": "เชียงใหม่", "name_en": "Chiang Mai"}
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "COUNTRY_NOT_FOUND"

    def test_duplicate_city_is_409(self, client, city):
        response = client.post(
            "/api/city", json={"country_id": str(city["country_id"]), "name_th": "ภูเก็ตใหม่", "name_en": "Phuket"}
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CITY_EXISTS"

    def test_city_list_only_includes_cities_with_hotels(self, client, store, city, hotel, country):
        store.seed("cities", {"id": uuid.uuid4(), "country_id": country["id"], "name_th": "น่าน", "name_en": "Nan"})
        store.seed("hotels_cities_map", {"id": uuid.uuid4(), "hotel_id": hotel["id"], "city_id": city["id"]})
        store.seed("seo_metadata", seo_record("city", city["id"], "phuket"))

        response = client.get("/api/city/list")

        data = response.json()["data"]
        assert data["total"] == 1
        assert data["cities"][0]["slug_en"] == "phuket"
        assert data["cities"][0]["slug_th"] == ""
