"""Application service: Upsert Tire use case.

Creates the tire when the SKU is new, otherwise overwrites its fields.
Brands and types are resolved by name and created on first sight.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from llantera.application.dto import TireUpsertCommand
from llantera.domain.exceptions import ValidationError
from llantera.domain.model.tire import Brand, Tire, TireType
from llantera.domain.repository.brand_repository import BrandRepository
from llantera.domain.repository.tire_repository import TireRepository
from llantera.domain.repository.tire_type_repository import TireTypeRepository
from llantera.domain.service.catalog_normalizer import OTHER_TYPES, CatalogNormalizer


class UpsertTireHandler:

    def __init__(
        self,
        tire_repo: TireRepository,
        brand_repo: BrandRepository,
        type_repo: TireTypeRepository,
        normalizer: CatalogNormalizer | None = None,
    ) -> None:
        self._tire_repo = tire_repo
        self._brand_repo = brand_repo
        self._type_repo = type_repo
        self._normalizer = normalizer or CatalogNormalizer()

    def handle(self, cmd: TireUpsertCommand) -> Tire:
        """Create or update the tire identified by ``cmd.sku``.

        When the command names no brand (or no type), an existing tire
        keeps the one it has.
        """
        sku = cmd.sku.strip()
        if not sku:
            raise ValidationError("SKU is required")

        now = datetime.now(timezone.utc)
        tire = self._tire_repo.get_by_sku(sku)
        is_new = tire is None
        if tire is None:
            tire = Tire(id=str(uuid.uuid4()), sku=sku, created_at=now)

        if cmd.brand_name.strip() or cmd.brand_alias.strip() or is_new:
            tire.brand_id = self._resolve_brand(cmd.brand_name, cmd.brand_alias).id
        if cmd.type_name.strip():
            tire.type_id = self._resolve_type(cmd.type_name).id

        tire.model = cmd.model.strip()
        tire.width = cmd.width
        tire.profile = cmd.profile if cmd.profile else None
        tire.rim = cmd.rim
        tire.construction = cmd.construction.strip().upper()
        tire.tube_type = cmd.tube_type.strip().upper()
        tire.ply_rating = cmd.ply_rating.strip()
        tire.load_index = cmd.load_index.strip()
        tire.speed_index = cmd.speed_index.strip()
        tire.usage = cmd.usage.strip().upper()
        tire.description = cmd.description.strip()
        tire.public_price = cmd.public_price
        tire.image_url = cmd.image_url.strip()
        tire.original_measure = cmd.original_measure.strip()
        tire.updated_at = now

        if is_new:
            self._tire_repo.create(tire)
        else:
            self._tire_repo.update(tire)
        return tire

    # --- Lookups --------------------------------------------------------------

    def _resolve_brand(self, name: str, alias: str) -> Brand:
        """Alias first, then name; unknown brands are created with both."""
        alias_clean = alias.strip().upper()
        if alias_clean:
            brand = self._brand_repo.get_by_alias(alias_clean)
            if brand is not None:
                return brand

        clean_name = name.strip() or self._normalizer.brand(alias_clean)
        brand = self._brand_repo.get_by_name(clean_name)
        if brand is not None:
            return brand

        aliases = [a for a in (alias_clean, clean_name.upper()) if a]
        brand = Brand(id=None, name=clean_name, aliases=list(dict.fromkeys(aliases)))
        self._brand_repo.create(brand)
        return brand

    def _resolve_type(self, name: str) -> TireType:
        """Abbreviations ("LTR") map to their canonical type name."""
        clean = self._normalizer.tire_type(name)
        if clean == OTHER_TYPES:
            clean = name.strip()
        existing = self._type_repo.get_by_name(clean)
        if existing is not None:
            return existing
        tire_type = TireType(id=None, name=clean)
        self._type_repo.create(tire_type)
        return tire_type
