"""Room, room amenity catalog and the three price tier tables."""

import uuid
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from inventory.database import Base


class Room(Base):
    __tablename__ = "rooms"
    __table_args__ = (
        UniqueConstraint("hotel_id", "name_th", name="uq_rooms_hotel_name_th"),
        UniqueConstraint("hotel_id", "name_en", name="uq_rooms_hotel_name_en"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    hotel_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("hotels.id"), nullable=False, index=True
    )
    name_th: Mapped[str] = mapped_column(String(100), nullable=False)
    name_en: Mapped[str] = mapped_column(String(100), nullable=False)
    room_size: Mapped[Decimal] = mapped_column(Numeric(6, 2), nullable=False)  # sqm
    description_th: Mapped[str] = mapped_column(Text, nullable=False)
    description_en: Mapped[str] = mapped_column(Text, nullable=False)
    max_adult: Mapped[int] = mapped_column(Integer, nullable=False)
    max_children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_room: Mapped[int] = mapped_column(Integer, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class RoomOption(Base):
    """Amenity catalog entry for rooms. ``is_bed`` marks bed configurations."""

    __tablename__ = "room_options"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name_th: Mapped[str] = mapped_column(String(100), nullable=False)
    name_en: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    icon: Mapped[str | None] = mapped_column(String(100))
    is_bed: Mapped[bool] = mapped_column(Boolean, default=False)


class RoomOptionMap(Base):
    __tablename__ = "room_options_map"
    __table_args__ = (UniqueConstraint("room_id", "room_option_id", name="uq_room_options_map"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    room_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("rooms.id"), nullable=False, index=True
    )
    room_option_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("room_options.id"), nullable=False
    )


class RoomBasePrice(Base):
    __tablename__ = "room_base_prices"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    room_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("rooms.id"), nullable=False, unique=True
    )
    price_sun: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    price_mon: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    price_tue: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    price_wed: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    price_thu: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    price_fri: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    price_sat: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)


class RoomSeasonBasePrice(Base):
    __tablename__ = "room_season_base_prices"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    room_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("rooms.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    price_sun: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    price_mon: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    price_tue: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    price_wed: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    price_thu: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    price_fri: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    price_sat: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)


class RoomOverridePrice(Base):
    __tablename__ = "room_override_prices"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    room_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("rooms.id"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    is_promotion: Mapped[bool] = mapped_column(Boolean, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    note: Mapped[str | None] = mapped_column(String(500))
