"""Tire catalog entities: tires, their per-column prices and list filters."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from llantera.domain.exceptions import ValidationError

DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 10_000


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Tire:
    """A tire in the catalog, identified externally by its SKU."""

    id: str
    sku: str
    model: str = ""
    brand_id: int | None = None
    width: int = 0
    profile: int | None = None
    rim: float = 0.0
    construction: str = ""
    tube_type: str = ""
    ply_rating: str = ""
    load_index: str = ""
    speed_index: str = ""
    type_id: int | None = None
    usage: str = ""
    description: str = ""
    public_price: Decimal = Decimal("0")
    image_url: str = ""
    original_measure: str = ""
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


@dataclass
class TirePrice:
    """Price of one tire in one price column; unique per (tire_id, column_id)."""

    tire_id: str
    column_id: int
    price: Decimal
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)


@dataclass
class Brand:
    id: int | None
    name: str
    aliases: list[str] = field(default_factory=list)


class TireSortField(Enum):
    SKU = "sku"
    MODEL = "model"
    PRICE = "price"
    CREATED = "created"


# Accepted spellings -> sort field.  Anything else is rejected.
_SORT_ALIASES: dict[str, TireSortField] = {
    "sku": TireSortField.SKU,
    "model": TireSortField.MODEL,
    "modelo": TireSortField.MODEL,
    "price": TireSortField.PRICE,
    "precio": TireSortField.PRICE,
    "created": TireSortField.CREATED,
    "creado": TireSortField.CREATED,
    "created_at": TireSortField.CREATED,
    "createdat": TireSortField.CREATED,
}


@dataclass(frozen=True)
class TireSort:
    field: TireSortField = TireSortField.CREATED
    descending: bool = True

    @staticmethod
    def parse(raw: str | None) -> TireSort:
        """Parse ``"sku"`` / ``"-precio"`` style sort keys.

        An empty key means newest first.
        """
        key = (raw or "").strip()
        if not key:
            return TireSort()
        descending = key.startswith("-")
        key = key.lstrip("-").lower()
        try:
            sort_field = _SORT_ALIASES[key]
        except KeyError:
            raise ValidationError(f"Unsupported sort field: {raw!r}") from None
        return TireSort(field=sort_field, descending=descending)


@dataclass
class TireFilter:
    """Criteria for listing tires.  Text fields match case-insensitively."""

    search: str = ""
    brand_id: int | None = None
    type_id: int | None = None
    usage: str = ""
    width: int | None = None
    profile: int | None = None
    rim: float | None = None
    construction: str = ""
    ply_rating: str = ""
    load_index: str = ""
    speed_index: str = ""
    in_stock_only: bool = False
    limit: int = DEFAULT_LIST_LIMIT
    offset: int = 0
    sort: TireSort = field(default_factory=TireSort)

    def normalized(self) -> TireFilter:
        """Copy with limit/offset clamped to their allowed ranges."""
        limit = self.limit if self.limit > 0 else DEFAULT_LIST_LIMIT
        return replace(
            self,
            limit=min(limit, MAX_LIST_LIMIT),
            offset=max(self.offset, 0),
        )

    def page(self, limit: int, offset: int) -> TireFilter:
        return replace(self, limit=limit, offset=offset)


@dataclass
class TireType:
    """Normalized tire type, e.g. "Light Truck Radial (LTR)"."""

    id: int | None
    name: str
    description: str = ""
