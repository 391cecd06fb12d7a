"""Application service: Admin catalog export (query).

Writes the admin view of every matching tire to an XLSX workbook with
one column per price code.  The file round-trips through
``ImportTiresHandler``.
"""

from __future__ import annotations

import logging
from io import BytesIO

from openpyxl import Workbook

from llantera.application.list_admin_tires import ListAdminTiresHandler
from llantera.domain.model.price_column import normalize_code
from llantera.domain.model.tire import TireFilter
from llantera.domain.repository.brand_repository import BrandRepository
from llantera.domain.repository.price_column_repository import PriceColumnRepository
from llantera.domain.repository.tire_type_repository import TireTypeRepository

logger = logging.getLogger(__name__)

SHEET_NAME = "Catalogo"
EXPORT_PAGE_SIZE = 500

LEADING_HEADERS = (
    "sku",
    "marca",
    "modelo",
    "ancho",
    "perfil",
    "construccion",
    "rin",
    "tipo_tubo",
    "calificacion_capas",
    "indice_carga",
    "indice_velocidad",
    "uso",
    "tipo",
    "cantidad",
    "stock_minimo",
    "precio_publico",
)
TRAILING_HEADERS = ("descripcion", "url_imagen")


class ExportAdminTiresHandler:

    def __init__(
        self,
        admin_view: ListAdminTiresHandler,
        column_repo: PriceColumnRepository,
        brand_repo: BrandRepository,
        type_repo: TireTypeRepository,
    ) -> None:
        self._admin_view = admin_view
        self._column_repo = column_repo
        self._brand_repo = brand_repo
        self._type_repo = type_repo

    def price_codes(self) -> list[str]:
        """Price codes in column order: ``visual_order``, then code."""
        columns = sorted(
            self._column_repo.list(),
            key=lambda c: (c.visual_order, normalize_code(c.code)),
        )
        return [code for code in (normalize_code(c.code) for c in columns) if code]

    def handle(self, tire_filter: TireFilter | None = None) -> bytes:
        base_filter = tire_filter or TireFilter()
        codes = self.price_codes()
        brand_names = {b.id: b.name for b in self._brand_repo.list()}
        type_names: dict[int, str] = {}

        workbook = Workbook()
        sheet = workbook.active
        sheet.title = SHEET_NAME
        sheet.append([*LEADING_HEADERS, *codes, *TRAILING_HEADERS])

        exported = 0
        offset = 0
        while True:
            views, total = self._admin_view.handle(base_filter.page(EXPORT_PAGE_SIZE, offset))
            if not views:
                break
            for view in views:
                tire = view.tire
                inventory = view.inventory
                type_name = ""
                if tire.type_id is not None:
                    if tire.type_id not in type_names:
                        tire_type = self._type_repo.get_by_id(tire.type_id)
                        type_names[tire.type_id] = tire_type.name if tire_type else ""
                    type_name = type_names[tire.type_id]

                sheet.append([
                    tire.sku,
                    brand_names.get(tire.brand_id, ""),
                    tire.model,
                    tire.width,
                    tire.profile if tire.profile is not None else "",
                    tire.construction,
                    tire.rim,
                    tire.tube_type,
                    tire.ply_rating,
                    tire.load_index,
                    tire.speed_index,
                    tire.usage,
                    type_name,
                    inventory.quantity if inventory else 0,
                    inventory.minimum_stock if inventory else 0,
                    tire.public_price,
                    *(view.prices.get(code, "") for code in codes),
                    tire.description,
                    tire.image_url,
                ])
            exported += len(views)
            offset += len(views)
            logger.debug("Exported %d of %d tires", offset, total)
            if offset >= total or len(views) < EXPORT_PAGE_SIZE:
                break

        buffer = BytesIO()
        workbook.save(buffer)
        logger.info("Exported %d tires with %d price columns", exported, len(codes))
        return buffer.getvalue()
