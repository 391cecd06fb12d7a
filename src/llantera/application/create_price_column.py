"""Application service: Create Price Column use case.

A new fixed column gets a zero price for every existing tire; a new
derived column is filled immediately from its base column.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal

from llantera.application.dto import PriceColumnCommand
from llantera.domain.exceptions import ConflictError, ValidationError
from llantera.domain.model.price_column import PriceColumn
from llantera.domain.model.tire import TireFilter, TirePrice
from llantera.domain.repository.price_column_repository import PriceColumnRepository
from llantera.domain.repository.price_repository import PriceRepository
from llantera.domain.repository.tire_repository import TireRepository
from llantera.domain.service.price_derivation_service import PriceDerivationService

logger = logging.getLogger(__name__)

BACKFILL_PAGE_SIZE = 200


class CreatePriceColumnHandler:

    def __init__(
        self,
        column_repo: PriceColumnRepository,
        price_repo: PriceRepository,
        tire_repo: TireRepository,
    ) -> None:
        self._column_repo = column_repo
        self._price_repo = price_repo
        self._tire_repo = tire_repo

    def handle(self, cmd: PriceColumnCommand) -> PriceColumn:
        column = PriceColumn.create(
            cmd.code,
            cmd.name,
            description=cmd.description,
            visual_order=cmd.visual_order,
            active=cmd.active,
            is_public=cmd.is_public,
            mode=cmd.mode,
            base_code=cmd.base_code,
            operation=cmd.operation,
            amount=cmd.amount,
        )

        if self._column_repo.get_by_code(column.code) is not None:
            raise ConflictError(f"A price column with code '{column.code}' already exists")

        if column.is_derived and self._column_repo.get_by_code(column.base_code or "") is None:
            raise ValidationError(f"Base column '{column.base_code}' does not exist")

        self._column_repo.create(column)
        logger.info("Created %s price column '%s'", column.mode.value, column.code)

        if column.is_derived:
            PriceDerivationService(self._column_repo, self._price_repo).recalculate(column)
        else:
            self._backfill_zero_prices(column)

        return column

    def _backfill_zero_prices(self, column: PriceColumn) -> None:
        """Insert a zero price for every tire, one page at a time."""
        offset = 0
        written = 0
        while True:
            tires, total = self._tire_repo.list(
                TireFilter(limit=BACKFILL_PAGE_SIZE, offset=offset)
            )
            if not tires:
                break

            now = datetime.now(timezone.utc)
            self._price_repo.upsert_many([
                TirePrice(
                    tire_id=tire.id,
                    column_id=column.id,  # type: ignore[arg-type]
                    price=Decimal("0"),
                    created_at=now,
                    updated_at=now,
                )
                for tire in tires
            ])
            written += len(tires)
            logger.debug("Backfilled page at offset %d for '%s'", offset, column.code)

            offset += len(tires)
            if offset >= total or len(tires) < BACKFILL_PAGE_SIZE:
                break

        logger.info("Backfilled %d zero prices for '%s'", written, column.code)
