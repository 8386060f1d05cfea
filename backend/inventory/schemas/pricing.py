from datetime import date
from decimal import Decimal

from pydantic import BaseModel

DAY_FIELDS = (
    "price_sun",
    "price_mon",
    "price_tue",
    "price_wed",
    "price_thu",
    "price_fri",
    "price_sat",
)


class WeeklyPrices(BaseModel):
    price_sun: Decimal
    price_mon: Decimal
    price_tue: Decimal
    price_wed: Decimal
    price_thu: Decimal
    price_fri: Decimal
    price_sat: Decimal

    def day_prices(self) -> dict[str, Decimal]:
        return {day: getattr(self, day) for day in DAY_FIELDS}


class BasePriceIn(WeeklyPrices):
    pass


class SeasonPriceIn(WeeklyPrices):
    name: str
    start_date: date
    end_date: date


class OverridePriceIn(BaseModel):
    name: str
    price: Decimal
    start_date: date
    end_date: date
    is_promotion: bool
    is_active: bool
    note: str | None = None
