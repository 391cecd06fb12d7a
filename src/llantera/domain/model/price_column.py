"""PriceColumn aggregate — one named price tier of the catalog.

A column is either *fixed* (prices typed in per tire) or *derived*
(every tire's price is computed from a base column with a configured
operation and amount).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from llantera.domain.exceptions import ValidationError
from llantera.domain.model.value_objects import to_decimal

LIST_PRICE_CODE = "lista"

_CODE_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")
_HUNDRED = Decimal("100")


class PriceMode(Enum):
    FIXED = "fixed"
    DERIVED = "derived"

    @staticmethod
    def parse(raw: str | PriceMode | None) -> PriceMode:
        if isinstance(raw, PriceMode):
            return raw
        value = (raw or "").strip().lower()
        if not value:
            return PriceMode.FIXED
        try:
            return PriceMode(value)
        except ValueError:
            raise ValidationError(f"Invalid calculation mode: {raw!r}") from None


class PriceOperation(Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    PERCENT = "percent"

    @staticmethod
    def parse(raw: str | PriceOperation | None) -> PriceOperation:
        if isinstance(raw, PriceOperation):
            return raw
        value = (raw or "").strip().lower()
        if not value:
            return PriceOperation.PERCENT
        try:
            return PriceOperation(value)
        except ValueError:
            raise ValidationError(f"Invalid calculation operation: {raw!r}") from None

    def apply(self, base: Decimal, amount: Decimal) -> Decimal:
        """Compute a derived price from *base*.

        ``PERCENT`` is a discount: an amount of 10 yields 90% of the base.
        """
        if self is PriceOperation.ADD:
            return base + amount
        if self is PriceOperation.SUBTRACT:
            return base - amount
        if self is PriceOperation.MULTIPLY:
            return base * amount
        return base * (1 - amount / _HUNDRED)


def normalize_code(raw: str | None) -> str:
    return (raw or "").strip().lower()


def validate_code(raw: str | None, label: str = "Code") -> str:
    """Return the normalized code or raise if it is empty or malformed."""
    code = normalize_code(raw)
    if not code:
        raise ValidationError(f"{label} is required")
    if not _CODE_PATTERN.match(code):
        raise ValidationError(
            f"{label} may only contain letters, digits and underscores, without spaces"
        )
    return code


@dataclass
class PriceColumn:
    """Aggregate root for a price tier.

    Use ``PriceColumn.create()`` for new columns and ``reconfigure()`` for
    updates; both validate the calculation settings.  Whether the base
    column exists is checked by the application handler, which has
    access to the repository.
    """

    id: int | None
    code: str
    name: str
    description: str = ""
    visual_order: int = 0
    active: bool = True
    is_public: bool = False
    mode: PriceMode = PriceMode.FIXED
    base_code: str | None = None
    operation: PriceOperation | None = None
    amount: Decimal | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW columns only) ----------------------------------

    @staticmethod
    def create(
        code: str,
        name: str,
        *,
        description: str = "",
        visual_order: int = 0,
        active: bool = True,
        is_public: bool = False,
        mode: str | PriceMode | None = None,
        base_code: str | None = None,
        operation: str | PriceOperation | None = None,
        amount: str | float | int | Decimal | None = None,
    ) -> PriceColumn:
        column = PriceColumn(id=None, code=validate_code(code), name="")
        column.reconfigure(
            name=name,
            description=description,
            visual_order=visual_order,
            active=active,
            is_public=is_public,
            mode=mode,
            base_code=base_code,
            operation=operation,
            amount=amount,
        )
        return column

    # --- Mutations ------------------------------------------------------------

    def reconfigure(
        self,
        *,
        name: str,
        description: str = "",
        visual_order: int = 0,
        active: bool = True,
        is_public: bool = False,
        mode: str | PriceMode | None = None,
        base_code: str | None = None,
        operation: str | PriceOperation | None = None,
        amount: str | float | int | Decimal | None = None,
    ) -> None:
        """Replace the editable settings of the column (code is immutable)."""
        clean_name = (name or "").strip()
        if not clean_name:
            raise ValidationError("Name is required")
        if visual_order < 0:
            raise ValidationError("Visual order cannot be negative")

        parsed_mode = PriceMode.parse(mode)
        parsed_base: str | None = None
        parsed_operation: PriceOperation | None = None
        parsed_amount: Decimal | None = None

        if parsed_mode is PriceMode.DERIVED:
            parsed_base = validate_code(base_code, "Base column")
            parsed_operation = PriceOperation.parse(operation)
            if amount is None or (isinstance(amount, str) and not amount.strip()):
                raise ValidationError("Amount is required for derived columns")
            parsed_amount = to_decimal(amount)
            if parsed_base == self.code:
                raise ValidationError("A derived column cannot use itself as base")

        self.name = clean_name
        self.description = (description or "").strip()
        self.visual_order = visual_order
        self.active = active
        self.is_public = is_public
        self.mode = parsed_mode
        self.base_code = parsed_base
        self.operation = parsed_operation
        self.amount = parsed_amount
        self.updated_at = datetime.now(timezone.utc)

    # --- Queries --------------------------------------------------------------

    @property
    def is_derived(self) -> bool:
        return self.mode is PriceMode.DERIVED

    @property
    def is_list_price(self) -> bool:
        return self.code == LIST_PRICE_CODE

    def derive(self, base_price: Decimal) -> Decimal:
        """Apply this column's operation to a base price."""
        if not self.is_derived or self.amount is None:
            raise ValidationError(
                f"Column '{self.code}' has no derivation settings"
            )
        operation = self.operation or PriceOperation.PERCENT
        return operation.apply(base_price, self.amount)
