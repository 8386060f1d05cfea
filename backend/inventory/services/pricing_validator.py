"""Price tier validation: tier shapes plus date-overlap rules.

A room has exactly one weekly base price, any number of named seasonal
tiers and any number of named override tiers. Seasonal tiers may never
share a day. Override tiers may only share days when at most one of them
is active; inactive overrides are ignored by the overlap rule.
"""

from decimal import Decimal

from inventory.errors import ConflictError, ValidationError
from inventory.schemas.pricing import BasePriceIn, OverridePriceIn, SeasonPriceIn, WeeklyPrices
from inventory.services.overlap import NamedRange, find_first_overlap

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
NOTE_MAX_LENGTH = 500
MAX_DECIMAL_PLACES = 2
# Largest value a Numeric(10, 2) price column holds
MAX_PRICE = Decimal("99999999.99")


def decimal_places(value: Decimal | int | float) -> int:
    """Digits after the decimal point when written out in plain notation."""
    text = format(Decimal(str(value)).normalize(), "f")
    return len(text.split(".", 1)[1]) if "." in text else 0


def tier_range(tier: SeasonPriceIn | OverridePriceIn) -> NamedRange:
    return NamedRange(tier.name.strip(), tier.start_date, tier.end_date)


class PriceTierValidator:
    """Checks a pricing payload before anything is written."""

    def validate(
        self,
        base_price: BasePriceIn | None,
        season_prices: list[SeasonPriceIn] | None = None,
        override_prices: list[OverridePriceIn] | None = None,
        *,
        existing_seasons: list[NamedRange] | None = None,
        existing_overrides: list[NamedRange] | None = None,
    ) -> None:
        """Raise ValidationError for a malformed tier, ConflictError for an overlap.

        ``existing_overrides`` must already be limited to active tiers.
        """
        season_prices = season_prices or []
        override_prices = override_prices or []

        if base_price is not None:
            self._check_weekly(base_price, "base_price")
        for i, season in enumerate(season_prices):
            self._check_season(season, f"season_base_prices[{i}]")
        for i, override in enumerate(override_prices):
            self._check_override(override, f"override_prices[{i}]")

        self.check_season_overlap(season_prices, existing_seasons or [])
        self.check_override_overlap(override_prices, existing_overrides or [])

    # ─── Overlap rules ───

    def check_season_overlap(
        self, season_prices: list[SeasonPriceIn], existing: list[NamedRange]
    ) -> None:
        conflict = find_first_overlap(existing + [tier_range(s) for s in season_prices])
        if conflict:
            first, second = conflict
            raise ConflictError(
                f'Season "{first.name}" ({first.start} to {first.end}) overlaps with '
                f'season "{second.name}" ({second.start} to {second.end})',
                code="SEASON_OVERLAP",
                details=[first.describe(), second.describe()],
            )

    def check_override_overlap(
        self, override_prices: list[OverridePriceIn], existing_active: list[NamedRange]
    ) -> None:
        active = [tier_range(o) for o in override_prices if o.is_active]
        conflict = find_first_overlap(existing_active + active)
        if conflict:
            first, second = conflict
            raise ConflictError(
                f'Override price "{first.name}" ({first.start} to {first.end}) overlaps with '
                f'override "{second.name}" ({second.start} to {second.end})',
                code="OVERRIDE_OVERLAP",
                details=[first.describe(), second.describe()],
            )

    # ─── Shape rules ───

    def _check_weekly(self, prices: WeeklyPrices, path: str) -> None:
        for day, price in prices.day_prices().items():
            field = f"{path}.{day}"
            if price is None:
                raise ValidationError(f"{field} is required", code="MISSING_PRICE", field=field)
            if price < 0:
                raise ValidationError(f"{field} must not be negative", code="INVALID_PRICE", field=field)
            if price > MAX_PRICE:
                raise ValidationError(
                    f"{field} must not exceed {MAX_PRICE}", code="INVALID_PRICE", field=field
                )
            if decimal_places(price) > MAX_DECIMAL_PLACES:
                raise ValidationError(
                    f"{field} can have maximum 2 decimal places", code="INVALID_PRICE", field=field
                )

    def _check_name(self, name: str, path: str) -> None:
        length = len(name.strip()) if name else 0
        if not NAME_MIN_LENGTH <= length <= NAME_MAX_LENGTH:
            raise ValidationError(
                f"{path}.name must be between {NAME_MIN_LENGTH}-{NAME_MAX_LENGTH} characters",
                code="INVALID_TIER_NAME",
                field=f"{path}.name",
            )

    def _check_range(self, tier: SeasonPriceIn | OverridePriceIn, path: str) -> None:
        # Same-day ranges are allowed for day-use pricing
        if tier.end_date < tier.start_date:
            raise ValidationError(
                f"{path}.end_date must be on or after start date",
                code="INVALID_DATE_RANGE",
                field=f"{path}.end_date",
            )

    def _check_season(self, season: SeasonPriceIn, path: str) -> None:
        self._check_name(season.name, path)
        self._check_range(season, path)
        self._check_weekly(season, path)

    def _check_override(self, override: OverridePriceIn, path: str) -> None:
        self._check_name(override.name, path)
        self._check_range(override, path)
        field = f"{path}.price"
        if override.price <= 0:
            raise ValidationError(f"{field} must be greater than 0", code="INVALID_PRICE", field=field)
        if override.price > MAX_PRICE:
            raise ValidationError(f"{field} must not exceed {MAX_PRICE}", code="INVALID_PRICE", field=field)
        if decimal_places(override.price) > MAX_DECIMAL_PLACES:
            raise ValidationError(
                f"{field} can have maximum 2 decimal places", code="INVALID_PRICE", field=field
            )
        if override.note and len(override.note) > NOTE_MAX_LENGTH:
            raise ValidationError(
                f"{path}.note must not exceed {NOTE_MAX_LENGTH} characters",
                code="INVALID_NOTE",
                field=f"{path}.note",
            )


price_tier_validator = PriceTierValidator()
