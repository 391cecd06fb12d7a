"""Application service: remove a tire from the catalog.

The tire's prices are dropped with it.  Its inventory row stays, so
stock and reservations of orders still in flight keep their history.
"""

from __future__ import annotations

import logging

from llantera.domain.exceptions import ValidationError
from llantera.domain.model.tire import Tire
from llantera.domain.repository.tire_repository import TireRepository

logger = logging.getLogger(__name__)


class DeleteTireHandler:

    def __init__(self, tire_repo: TireRepository) -> None:
        self._tire_repo = tire_repo

    def handle(self, sku: str) -> Tire:
        sku = sku.strip()
        if not sku:
            raise ValidationError("SKU is required")
        removed = self._tire_repo.delete(sku)
        logger.info("Deleted tire %s (%s)", removed.sku, removed.id)
        return removed
