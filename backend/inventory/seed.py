"""Seed script for the amenity catalogs (hotel and room options)."""

import asyncio

from sqlalchemy import select

from inventory.database import async_session_factory
from inventory.models import HotelOption, RoomOption

# ── Hotel options ──────────────────────────────────────────────────────────────

HOTEL_OPTIONS = [
    ("สระว่ายน้ำ", "Swimming Pool", "pool"),
    ("ฟิตเนส", "Fitness Center", "dumbbell"),
    ("สปา", "Spa", "spa"),
    ("ที่จอดรถ", "Parking", "car"),
    ("ร้านอาหาร", "Restaurant", "utensils"),
    ("บริการรับส่งสนามบิน", "Airport Shuttle", "shuttle"),
    ("อินเทอร์เน็ตไร้สาย", "Free Wi-Fi", "wifi"),
    ("ห้องประชุม", "Meeting Room", "presentation"),
]

# ── Room options ───────────────────────────────────────────────────────────────

ROOM_OPTIONS = [
    # (name_th, name_en, icon, is_bed)
    ("เตียงคิงไซส์", "King Bed", "bed-double", True),
    ("เตียงควีนไซส์", "Queen Bed", "bed-double", True),
    ("เตียงเดี่ยวสองเตียง", "Twin Beds", "bed-single", True),
    ("เครื่องปรับอากาศ", "Air Conditioning", "snowflake", False),
    ("ระเบียง", "Balcony", "balcony", False),
    ("อ่างอาบน้ำ", "Bathtub", "bath", False),
    ("มินิบาร์", "Minibar", "wine", False),
    ("ตู้เซฟ", "In-room Safe", "lock", False),
    ("วิวทะเล", "Sea View", "waves", False),
]


async def seed() -> bool:
    """Insert the catalogs when empty. Returns False when already seeded."""
    async with async_session_factory() as db:
        result = await db.execute(select(HotelOption).limit(1))
        if result.scalar_one_or_none():
            print("Option catalogs already seeded. Skipping.")
            return False

        for name_th, name_en, icon in HOTEL_OPTIONS:
            db.add(HotelOption(name_th=name_th, name_en=name_en, icon=icon))
        print(f"Created {len(HOTEL_OPTIONS)} hotel options")

        for name_th, name_en, icon, is_bed in ROOM_OPTIONS:
            db.add(RoomOption(name_th=name_th, name_en=name_en, icon=icon, is_bed=is_bed))
        print(f"Created {len(ROOM_OPTIONS)} room options")

        await db.commit()
        print("Seed complete.")
        return True


if __name__ == "__main__":
    asyncio.run(seed())
