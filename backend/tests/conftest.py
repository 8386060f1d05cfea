import os
import tempfile
import uuid

# Settings are read at import time
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("SCHEDULER_ENABLED", "false")
os.environ.setdefault("SEED_ON_STARTUP", "false")
os.environ.setdefault("LOG_DIR", os.path.join(tempfile.gettempdir(), "inventory-test-logs"))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from tests.factories import hotel_record  # noqa: E402
from tests.fakes import InMemoryStore  # noqa: E402


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def country(store):
    return store.seed("countries", {"id": uuid.uuid4(), "name_th": "ประเทศไทย", "name_en": "Thailand"})


@pytest.fixture
def city(store, country):
    return store.seed(
        "cities", {"id": uuid.uuid4(), "country_id": country["id"], "name_th": "ภูเก็ต", "name_en": "Phuket"}
    )


@pytest.fixture
def hotel(store):
    return store.seed("hotels", hotel_record())


@pytest.fixture
def room_options(store):
    return [
        store.seed("room_options", {"id": uuid.uuid4(), "name_th": "เตียงคิงไซส์", "name_en": "King Bed", "is_bed": True}),
        store.seed("room_options", {"id": uuid.uuid4(), "name_th": "ระเบียง", "name_en": "Balcony", "is_bed": False}),
    ]


@pytest.fixture
def hotel_options(store):
    return [
        store.seed("hotel_options", {"id": uuid.uuid4(), "name_th": "สระว่ายน้ำ", "name_en": "Swimming Pool"}),
        store.seed("hotel_options", {"id": uuid.uuid4(), "name_th": "สปา", "name_en": "Spa"}),
    ]


@pytest.fixture
def client(store):
    from inventory.main import app
    from inventory.store import get_store

    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
