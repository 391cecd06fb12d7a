"""Application service: Delete Price Column use case.

Runs the deletion guards, moves the price levels that show the column
to the requested destination, then deletes the column.
"""

from __future__ import annotations

import logging

from llantera.domain.exceptions import EntityNotFoundError, ValidationError
from llantera.domain.repository.price_column_repository import PriceColumnRepository
from llantera.domain.repository.price_level_repository import PriceLevelRepository
from llantera.domain.service.column_deletion_guards import (
    ColumnDeletion,
    first_deletion_failure,
)

logger = logging.getLogger(__name__)


class DeletePriceColumnHandler:

    def __init__(
        self,
        column_repo: PriceColumnRepository,
        level_repo: PriceLevelRepository,
    ) -> None:
        self._column_repo = column_repo
        self._level_repo = level_repo

    def handle(self, column_id: int, transfer_to_code: str | None = None) -> None:
        if column_id <= 0:
            raise ValidationError("Column ID is required")

        column = self._column_repo.get_by_id(column_id)
        if column is None:
            raise EntityNotFoundError(f"Price column #{column_id} not found")

        request = ColumnDeletion(
            column=column,
            columns=self._column_repo.list(),
            price_levels=self._level_repo.list(),
            transfer_to_code=transfer_to_code,
        )
        failure = first_deletion_failure(request)
        if failure is not None:
            raise ValidationError(failure)

        if request.transfer_target is not None:
            for level in request.affected_levels:
                level.transfer_column(column.code, request.transfer_target.code)
                self._level_repo.save(level)
            logger.info(
                "Moved %d price levels from '%s' to '%s'",
                len(request.affected_levels), column.code, request.transfer_target.code,
            )

        self._column_repo.delete(column_id)
        logger.info("Deleted price column '%s'", column.code)
