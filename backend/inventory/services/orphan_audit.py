"""Detects rows left behind by an incomplete rollback.

Compensating deletes are best effort, so a failed rollback can leave
dependent rows whose owning room or hotel no longer exists. This audit only
reports them; cleanup is an operator decision.
"""

import logging

from inventory.data.content_types import ContentType
from inventory.store import EntityStore

logger = logging.getLogger(__name__)

# (dependent collection, owner field, owner collection)
OWNED_COLLECTIONS = [
    ("room_options_map", "room_id", "rooms"),
    ("room_base_prices", "room_id", "rooms"),
    ("room_season_base_prices", "room_id", "rooms"),
    ("room_override_prices", "room_id", "rooms"),
    ("hotels_cities_map", "hotel_id", "hotels"),
    ("hotels_options_map", "hotel_id", "hotels"),
]

# Content types whose SEO records and images point at a row
CONTENT_OWNERS = {
    ContentType.HOTEL.value: "hotels",
    ContentType.ROOM.value: "rooms",
    ContentType.CITY.value: "cities",
    ContentType.COUNTRY.value: "countries",
}


async def _missing_owner_ids(store: EntityStore, owner_collection: str, owner_ids: set) -> set:
    if not owner_ids:
        return set()
    found = await store.select(owner_collection, {"id": list(owner_ids)})
    return owner_ids - {row["id"] for row in found}


async def find_orphans(store: EntityStore, log: logging.Logger = logger) -> dict[str, int]:
    """Count orphaned rows per collection. Collections without orphans are omitted."""
    orphans: dict[str, int] = {}

    for collection, owner_field, owner_collection in OWNED_COLLECTIONS:
        rows = await store.select(collection)
        missing = await _missing_owner_ids(store, owner_collection, {row[owner_field] for row in rows})
        count = sum(1 for row in rows if row[owner_field] in missing)
        if count:
            orphans[collection] = count

    for collection, type_field, id_field in (
        ("seo_metadata", "page_type", "page_id"),
        ("image_assets", "content_type", "content_id"),
    ):
        for content_type, owner_collection in CONTENT_OWNERS.items():
            rows = await store.select(collection, {type_field: content_type})
            owner_ids = {row[id_field] for row in rows if row[id_field] is not None}
            missing = await _missing_owner_ids(store, owner_collection, owner_ids)
            count = sum(1 for row in rows if row[id_field] in missing)
            if count:
                key = f"{collection}:{content_type}"
                orphans[key] = orphans.get(key, 0) + count

    if orphans:
        log.warning(f"Orphan audit found rows without an owner: {orphans}")
    else:
        log.info("Orphan audit: no orphaned rows")
    return orphans
