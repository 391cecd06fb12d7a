"""Application service: Admin catalog import from XLSX.

Reads the layout written by ``ExportAdminTiresHandler``.  Only the
``sku`` column is mandatory; a tire keeps its current value for every
column the sheet does not have.  Headers that match a price column code
set that price for the row.
"""

from __future__ import annotations

import logging
import zipfile
from collections.abc import Callable
from decimal import Decimal
from io import BytesIO
from typing import Any

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from llantera.application.dto import TireUpsertCommand
from llantera.application.update_tire_admin import UpdateTireAdminHandler
from llantera.application.upsert_tire import UpsertTireHandler
from llantera.domain.exceptions import DomainException, ValidationError
from llantera.domain.model.price_column import LIST_PRICE_CODE, normalize_code
from llantera.domain.model.value_objects import parse_price
from llantera.domain.repository.price_column_repository import PriceColumnRepository
from llantera.domain.repository.price_repository import PriceRepository
from llantera.domain.repository.tire_repository import TireRepository
from llantera.domain.service.measurement_parser import parse_float, parse_int
from llantera.domain.service.price_derivation_service import PriceDerivationService

logger = logging.getLogger(__name__)

SHEET_NAME = "Catalogo"


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def build_original_measure(
    width: int,
    profile: int | None,
    rim: float,
    construction: str = "",
    ply_rating: str = "",
    usage: str = "",
    load_index: str = "",
    speed_index: str = "",
    model: str = "",
) -> str:
    """Rebuild the human-readable size, e.g. ``"205/55R16 PS-4 91V Ecopia"``.

    Diagonal tires use ``-`` before the rim, and sizes without a profile
    use ``X`` (``"7.50X16"`` style) unless they are diagonal.
    """
    construction = construction.strip().upper()
    usage = usage.strip().upper()
    ply_rating = ply_rating.strip()
    load_index = load_index.strip()
    speed_index = speed_index.strip().upper()
    diagonal = construction in ("DIAGONAL", "D", "-")

    size = ""
    if width > 0:
        rim_text = ""
        if rim > 0:
            rim_text = str(int(rim)) if rim == int(rim) else f"{rim:g}"
        if profile:
            separator = "-" if diagonal else "R"
            size = f"{width}/{profile}" + (separator + rim_text if rim_text else "")
        elif diagonal:
            size = f"{width}" + ("-" + rim_text if rim_text else "")
        else:
            size = f"{width}" + ("X" + rim_text if rim_text else "")

    usage_ply = "-".join(part for part in (usage, ply_rating) if part)
    load_speed = load_index + speed_index

    parts = [p for p in (size, usage_ply, load_speed, model.strip()) if p]
    return " ".join(" ".join(parts).split())


class ImportTiresHandler:

    def __init__(
        self,
        tire_repo: TireRepository,
        column_repo: PriceColumnRepository,
        price_repo: PriceRepository,
        upsert_tire: UpsertTireHandler,
        update_admin: UpdateTireAdminHandler,
    ) -> None:
        self._tire_repo = tire_repo
        self._column_repo = column_repo
        self._price_repo = price_repo
        self._upsert_tire = upsert_tire
        self._update_admin = update_admin

    def handle(self, data: bytes) -> int:
        """Import every row with a SKU and return how many were processed.

        Derived columns are recomputed once, after the last row.
        """
        rows = self._read_rows(data)
        if not rows:
            raise ValidationError("The XLSX file has no rows")

        col_index: dict[str, int] = {}
        for i, name in enumerate(rows[0]):
            key = _cell_text(name).lower()
            if key:
                col_index[key] = i
        if "sku" not in col_index:
            raise ValidationError("The XLSX file must have a 'sku' column")

        price_codes = [
            code
            for code in (normalize_code(c.code) for c in self._column_repo.list())
            if code and code in col_index
        ]

        processed = 0
        for line, row in enumerate(rows[1:], start=2):
            def cell(key: str) -> str:
                idx = col_index.get(key)
                if idx is None or idx >= len(row):
                    return ""
                return _cell_text(row[idx])

            sku = cell("sku")
            if not sku:
                continue
            try:
                self._import_row(sku, cell, col_index, price_codes)
            except DomainException as exc:
                raise ValidationError(f"Row {line} (SKU {sku}): {exc}") from exc
            processed += 1

        svc = PriceDerivationService(self._column_repo, self._price_repo)
        refreshed = svc.recalculate_all()
        logger.info(
            "Imported %d tires; recalculated %d derived columns",
            processed, len(refreshed),
        )
        return processed

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _read_rows(data: bytes) -> list[tuple[Any, ...]]:
        if not data:
            raise ValidationError("The XLSX file is empty")
        try:
            workbook = load_workbook(BytesIO(data), read_only=True, data_only=True)
        except (InvalidFileException, zipfile.BadZipFile, KeyError) as exc:
            raise ValidationError(f"Cannot open XLSX file: {exc}") from exc
        try:
            if not workbook.sheetnames:
                raise ValidationError("The XLSX file has no sheets")
            name = SHEET_NAME if SHEET_NAME in workbook.sheetnames else workbook.sheetnames[0]
            return list(workbook[name].iter_rows(values_only=True))
        finally:
            workbook.close()

    def _import_row(
        self,
        sku: str,
        cell: Callable[[str], str],
        col_index: dict[str, int],
        price_codes: list[str],
    ) -> None:
        existing = self._tire_repo.get_by_sku(sku)

        def text(key: str, current: str) -> str:
            return cell(key) if key in col_index else current

        width = existing.width if existing is not None else 0
        if "ancho" in col_index and cell("ancho"):
            width = parse_int(cell("ancho"))
        profile = existing.profile if existing is not None else None
        if "perfil" in col_index:
            profile = parse_int(cell("perfil")) or None
        rim = existing.rim if existing is not None else 0.0
        if "rin" in col_index and cell("rin"):
            rim = parse_float(cell("rin"))

        public_price = existing.public_price if existing is not None else Decimal("0")
        if "precio_publico" in col_index and cell("precio_publico"):
            public_price = parse_price(cell("precio_publico"))

        prices: dict[str, Decimal] = {}
        for code in price_codes:
            raw = cell(code)
            if not raw:
                continue
            value = parse_price(raw)
            if value > 0:
                prices[code] = value
        if public_price <= 0 and prices.get(LIST_PRICE_CODE, Decimal("0")) > 0:
            public_price = prices[LIST_PRICE_CODE]

        model = text("modelo", existing.model if existing else "")
        construction = text("construccion", existing.construction if existing else "")
        ply_rating = text("calificacion_capas", existing.ply_rating if existing else "")
        usage = text("uso", existing.usage if existing else "")
        load_index = text("indice_carga", existing.load_index if existing else "")
        speed_index = text("indice_velocidad", existing.speed_index if existing else "")

        if width > 0 or rim > 0:
            original_measure = build_original_measure(
                width, profile, rim, construction, ply_rating,
                usage, load_index, speed_index, model,
            )
        else:
            original_measure = existing.original_measure if existing else ""

        self._upsert_tire.handle(TireUpsertCommand(
            sku=sku,
            brand_name=cell("marca"),
            model=model,
            width=width,
            profile=profile,
            rim=rim,
            construction=construction,
            tube_type=text("tipo_tubo", existing.tube_type if existing else ""),
            ply_rating=ply_rating,
            load_index=load_index,
            speed_index=speed_index,
            type_name=cell("tipo"),
            usage=usage,
            description=text("descripcion", existing.description if existing else ""),
            public_price=public_price,
            image_url=text("url_imagen", existing.image_url if existing else ""),
            original_measure=original_measure,
        ))

        quantity = None
        if "cantidad" in col_index and cell("cantidad"):
            quantity = parse_int(cell("cantidad"))

        if quantity is not None or prices:
            self._update_admin.handle(
                sku, quantity=quantity, prices=prices, recalculate_derived=False
            )
