"""Domain service: Price Derivation.

Recomputes the prices of a derived column from the current prices of
its base column.  Each recompute looks exactly one level down: a chain
``lista -> mayoreo -> mayoreo_6`` is refreshed level by level by
whichever upstream column actually changed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from llantera.domain.exceptions import ValidationError
from llantera.domain.model.price_column import PriceColumn, normalize_code
from llantera.domain.model.tire import TirePrice
from llantera.domain.repository.price_column_repository import PriceColumnRepository
from llantera.domain.repository.price_repository import PriceRepository

logger = logging.getLogger(__name__)


class PriceDerivationService:

    def __init__(
        self,
        column_repo: PriceColumnRepository,
        price_repo: PriceRepository,
    ) -> None:
        self._column_repo = column_repo
        self._price_repo = price_repo

    def recalculate(self, column: PriceColumn) -> int:
        """Rewrite every price of *column* from its base column.

        Returns the number of rows written.  A base column without
        prices is a no-op.
        """
        if not column.is_derived:
            raise ValidationError(f"Column '{column.code}' is not a derived column")
        if column.id is None:
            raise ValidationError(f"Column '{column.code}' has not been saved yet")
        if not column.base_code or column.amount is None:
            raise ValidationError(
                f"Incomplete calculation settings for derived column '{column.code}'"
            )

        base = self._column_repo.get_by_code(column.base_code)
        if base is None:
            raise ValidationError(
                f"Base column '{column.base_code}' of '{column.code}' does not exist"
            )

        base_prices = self._price_repo.list_by_column_id(base.id)  # type: ignore[arg-type]
        if not base_prices:
            logger.debug("Base column '%s' has no prices; nothing to derive", base.code)
            return 0

        now = datetime.now(timezone.utc)
        derived = [
            TirePrice(
                tire_id=row.tire_id,
                column_id=column.id,
                price=column.derive(row.price),
                created_at=now,
                updated_at=now,
            )
            for row in base_prices
        ]
        self._price_repo.upsert_many(derived)

        logger.info(
            "Recalculated %d prices of '%s' from '%s'",
            len(derived), column.code, base.code,
        )
        return len(derived)

    def recalculate_dependents(self, changed_codes: set[str]) -> list[str]:
        """Recompute the active derived columns based on any of *changed_codes*.

        Only direct dependents are refreshed.  Returns their codes.
        """
        changed = {normalize_code(code) for code in changed_codes}
        refreshed: list[str] = []
        for column in self._column_repo.list():
            if not column.is_derived or not column.active:
                continue
            if normalize_code(column.base_code) not in changed:
                continue
            self.recalculate(column)
            refreshed.append(column.code)
        return refreshed

    def recalculate_all(self) -> list[str]:
        """Recompute every derived column once.

        A column is refreshed after its base when the base is itself
        derived, so chains settle in a single pass.  Columns caught in a
        base cycle are refreshed in repository order.
        """
        pending = [c for c in self._column_repo.list() if c.is_derived]
        refreshed: list[str] = []
        while pending:
            pending_codes = {c.code for c in pending}
            ready = [c for c in pending if c.base_code not in pending_codes]
            if not ready:
                ready = list(pending)
            for column in ready:
                self.recalculate(column)
                refreshed.append(column.code)
            pending = [c for c in pending if c not in ready]
        return refreshed
