"""Content target types shared by SEO metadata and image assets."""

from enum import Enum


class ContentType(str, Enum):
    HOTEL = "hotel"
    ROOM = "room"
    CITY = "city"
    COUNTRY = "country"
    PAGE = "page"
    BLOG = "blog"


CONTENT_TYPE_VALUES = [t.value for t in ContentType]

# Collection that owns each content type. Pages and blogs are managed
# outside this service, so they have no collection to check against.
CONTENT_TYPE_COLLECTIONS: dict[str, str | None] = {
    "hotel": "hotels",
    "room": "rooms",
    "city": "cities",
    "country": "countries",
    "page": None,
    "blog": None,
}

ACTIVE_LANGUAGES = ["th", "en"]

# Slugs that would shadow site routes.
RESERVED_SLUGS = frozenset({
    "admin",
    "api",
    "auth",
    "login",
    "logout",
    "register",
    "search",
    "new",
    "edit",
    "delete",
    "settings",
    "static",
    "assets",
    "null",
    "undefined",
})


def collection_for(content_type: str) -> str | None:
    return CONTENT_TYPE_COLLECTIONS.get(content_type)
