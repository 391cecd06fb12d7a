"""Application service: create or update a customer price level."""

from __future__ import annotations

from decimal import Decimal

from llantera.domain.exceptions import ValidationError
from llantera.domain.model.price_column import normalize_code, validate_code
from llantera.domain.model.price_level import PriceLevel
from llantera.domain.model.value_objects import to_decimal
from llantera.domain.repository.price_column_repository import PriceColumnRepository
from llantera.domain.repository.price_level_repository import PriceLevelRepository


class SavePriceLevelHandler:

    def __init__(
        self,
        level_repo: PriceLevelRepository,
        column_repo: PriceColumnRepository,
    ) -> None:
        self._level_repo = level_repo
        self._column_repo = column_repo

    def handle(
        self,
        code: str,
        name: str,
        price_column: str,
        reference_column: str | None = None,
        description: str | None = None,
        discount_percentage: str | int | float | Decimal | None = None,
        can_view_offers: bool | None = None,
    ) -> PriceLevel:
        """Upsert by code.  Both referenced columns must exist.

        ``None`` for ``description``, ``discount_percentage`` or
        ``can_view_offers`` keeps the stored value of an existing level.
        """
        code = validate_code(code, label="Price level code")
        name = name.strip()
        if not name:
            raise ValidationError("Price level name is required")

        discount = None
        if discount_percentage is not None:
            discount = to_decimal(discount_percentage, field="discount percentage")
            if not discount.is_finite() or not Decimal("0") <= discount <= Decimal("100"):
                raise ValidationError("Discount percentage must be between 0 and 100")

        main = normalize_code(price_column)
        if not main:
            raise ValidationError("Price column is required")
        reference = normalize_code(reference_column) or None
        for column_code in (main, reference):
            if column_code and self._column_repo.get_by_code(column_code) is None:
                raise ValidationError(f"Price column '{column_code}' does not exist")

        level = self._level_repo.get_by_code(code)
        if level is None:
            level = PriceLevel(id=None, code=code, name=name, price_column=main)
        level.name = name
        level.price_column = main
        level.reference_column = reference
        if description is not None:
            level.description = description.strip() or None
        if discount is not None:
            level.discount_percentage = discount
        if can_view_offers is not None:
            level.can_view_offers = can_view_offers
        self._level_repo.save(level)
        return level

    def list(self) -> list[PriceLevel]:
        return self._level_repo.list()
