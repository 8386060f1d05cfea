"""Hotel, hotel amenity catalog and hotel link tables."""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from inventory.database import Base


class Hotel(Base):
    __tablename__ = "hotels"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name_th: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    name_en: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    excerpt_th: Mapped[str] = mapped_column(String(500), nullable=False)
    excerpt_en: Mapped[str] = mapped_column(String(500), nullable=False)
    description_th: Mapped[str] = mapped_column(Text, nullable=False)
    description_en: Mapped[str] = mapped_column(Text, nullable=False)
    checkin_time: Mapped[str] = mapped_column(String(5), nullable=False)  # HH:MM
    checkout_time: Mapped[str] = mapped_column(String(5), nullable=False)
    image: Mapped[str] = mapped_column(String(500), nullable=False)
    location_txt_th: Mapped[str] = mapped_column(String(500), nullable=False)
    location_txt_en: Mapped[str] = mapped_column(String(500), nullable=False)
    google_map_link: Mapped[str] = mapped_column(String(500), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class HotelOption(Base):
    """Amenity catalog entry for hotels (pool, spa, parking...)."""

    __tablename__ = "hotel_options"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name_th: Mapped[str] = mapped_column(String(100), nullable=False)
    name_en: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    icon: Mapped[str | None] = mapped_column(String(100))


class HotelCityMap(Base):
    __tablename__ = "hotels_cities_map"
    __table_args__ = (UniqueConstraint("hotel_id", "city_id", name="uq_hotels_cities_map"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    hotel_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("hotels.id"), nullable=False, index=True
    )
    city_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("cities.id"), nullable=False, index=True
    )


class HotelOptionMap(Base):
    __tablename__ = "hotels_options_map"
    __table_args__ = (UniqueConstraint("hotel_id", "hotel_option_id", name="uq_hotels_options_map"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    hotel_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("hotels.id"), nullable=False, index=True
    )
    hotel_option_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("hotel_options.id"), nullable=False
    )
