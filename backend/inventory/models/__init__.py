from inventory.models.content import ImageAsset, SeoMetadata
from inventory.models.geo import City, Country
from inventory.models.hotel import Hotel, HotelCityMap, HotelOption, HotelOptionMap
from inventory.models.room import (
    Room,
    RoomBasePrice,
    RoomOption,
    RoomOptionMap,
    RoomOverridePrice,
    RoomSeasonBasePrice,
)

__all__ = [
    "City",
    "Country",
    "Hotel",
    "HotelCityMap",
    "HotelOption",
    "HotelOptionMap",
    "ImageAsset",
    "Room",
    "RoomBasePrice",
    "RoomOption",
    "RoomOptionMap",
    "RoomOverridePrice",
    "RoomSeasonBasePrice",
    "SeoMetadata",
]
