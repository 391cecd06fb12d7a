"""Data Transfer Objects — plain containers that cross layer boundaries.

Commands carry caller input into the handlers; views carry read models
back out to the presentation layer (CLI or HTTP handlers).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from llantera.domain.model.inventory import Inventory
from llantera.domain.model.tire import Tire


@dataclass(frozen=True)
class PriceColumnCommand:
    """Input for creating (``code`` required) or updating a price column."""

    name: str
    code: str = ""
    description: str = ""
    visual_order: int = 0
    active: bool = True
    is_public: bool = False
    mode: str = ""
    base_code: str = ""
    operation: str = ""
    amount: str | float | int | Decimal | None = None


@dataclass(frozen=True)
class TireUpsertCommand:
    """Input for creating or updating a tire by SKU."""

    sku: str
    brand_name: str = ""
    brand_alias: str = ""
    model: str = ""
    width: int = 0
    profile: int | None = None
    rim: float = 0.0
    construction: str = ""
    tube_type: str = ""
    ply_rating: str = ""
    load_index: str = ""
    speed_index: str = ""
    type_name: str = ""
    usage: str = ""
    description: str = ""
    public_price: Decimal = Decimal("0")
    image_url: str = ""
    original_measure: str = ""


@dataclass(frozen=True)
class AdminTireView:
    """Admin read model: tire, its inventory and its price per column code."""

    tire: Tire
    inventory: Inventory | None
    prices: dict[str, Decimal] = field(default_factory=dict)
    brand_name: str = ""


@dataclass(frozen=True)
class CatalogItemView:
    """Public catalog read model for one tire at one price level."""

    tire: Tire
    price: Decimal
    price_code: str
    reference_price: Decimal | None = None
    reference_code: str | None = None
    stock: int | None = None


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one cart line (tire SKU, quantity and the quoted unit price)."""

    tire_sku: str
    quantity: int
    unit_price: str | Decimal
    tire_measure: str = ""
    tire_brand: str = ""
    tire_model: str = ""


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single order line as displayed to the user."""

    tire_sku: str
    quantity: int
    unit_price: str  # formatted, e.g. "$1,250.00"
    subtotal: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    order_number: str
    user_id: str
    status: str
    payment_method: str
    payment_mode: str
    items: list[OrderItemDTO]
    subtotal: str
    iva: str
    total: str
    created_at: str
