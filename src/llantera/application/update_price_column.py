"""Application service: Update Price Column use case."""

from __future__ import annotations

from llantera.application.dto import PriceColumnCommand
from llantera.domain.exceptions import EntityNotFoundError, ValidationError
from llantera.domain.model.price_column import PriceColumn
from llantera.domain.repository.price_column_repository import PriceColumnRepository
from llantera.domain.repository.price_repository import PriceRepository
from llantera.domain.service.price_derivation_service import PriceDerivationService


class UpdatePriceColumnHandler:

    def __init__(
        self,
        column_repo: PriceColumnRepository,
        price_repo: PriceRepository,
    ) -> None:
        self._column_repo = column_repo
        self._price_repo = price_repo

    def handle(self, column_id: int, cmd: PriceColumnCommand) -> PriceColumn:
        """Replace the column's settings; derived columns are recomputed.

        The code never changes, so ``cmd.code`` is ignored.
        """
        if column_id <= 0:
            raise ValidationError("Column ID is required")

        column = self._column_repo.get_by_id(column_id)
        if column is None:
            raise EntityNotFoundError(f"Price column #{column_id} not found")

        column.reconfigure(
            name=cmd.name,
            description=cmd.description,
            visual_order=cmd.visual_order,
            active=cmd.active,
            is_public=cmd.is_public,
            mode=cmd.mode,
            base_code=cmd.base_code,
            operation=cmd.operation,
            amount=cmd.amount,
        )

        if column.is_derived and self._column_repo.get_by_code(column.base_code or "") is None:
            raise ValidationError(f"Base column '{column.base_code}' does not exist")

        self._column_repo.update(column)

        if column.is_derived:
            PriceDerivationService(self._column_repo, self._price_repo).recalculate(column)

        return column
