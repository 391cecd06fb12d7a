"""PriceLevel — which price column a customer tier sees."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from llantera.domain.model.price_column import LIST_PRICE_CODE, normalize_code

# Used when a level is not configured in the price level repository.
STATIC_LEVEL_COLUMNS: dict[str, tuple[str, str | None]] = {
    "empresa": ("empresa", LIST_PRICE_CODE),
    "distribuidor": ("mayoreo", LIST_PRICE_CODE),
    "mayorista": ("mayoreo_6", LIST_PRICE_CODE),
}


@dataclass
class PriceLevel:
    """A customer price tier.

    ``price_column`` is the code of the column the tier pays;
    ``reference_column`` is an optional "was" price shown next to it.
    """

    id: int | None
    code: str
    name: str
    price_column: str
    reference_column: str | None = None
    description: str | None = None
    discount_percentage: Decimal = Decimal("0")
    can_view_offers: bool = False

    def uses_column(self, code: str) -> bool:
        target = normalize_code(code)
        return normalize_code(self.price_column) == target or (
            self.reference_column is not None
            and normalize_code(self.reference_column) == target
        )

    def transfer_column(self, old_code: str, new_code: str) -> None:
        """Point every reference to *old_code* at *new_code*."""
        old = normalize_code(old_code)
        if normalize_code(self.price_column) == old:
            self.price_column = new_code
        if self.reference_column is not None and normalize_code(self.reference_column) == old:
            self.reference_column = new_code

    def columns(self) -> tuple[str, str | None]:
        main = normalize_code(self.price_column) or LIST_PRICE_CODE
        reference = normalize_code(self.reference_column) or None
        return main, reference


def static_level_columns(level: str | None) -> tuple[str, str | None]:
    """Fallback mapping from a level code to ``(main, reference)`` codes.

    Unknown levels, ``public`` and the empty level see the list price only.
    """
    return STATIC_LEVEL_COLUMNS.get(normalize_code(level), (LIST_PRICE_CODE, None))
