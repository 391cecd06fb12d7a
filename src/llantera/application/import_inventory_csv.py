"""Application service: supplier inventory import from a ';'-separated CSV.

The supplier list has a fixed column layout and a header row that is
skipped:

    0 CODIGO   1 MEDIDA    2 CANT      3 MAY -6%   4 MAY -3%
    5 MAYOREO  6 EMPRESA   7 P.LISTA   8 P.LIST -10  9 EFEC
    13 MARCA   14 TIPO     15 RIN      16 USO

Dimensions come from the free-text size in MEDIDA.  Brand and type
abbreviations are expanded by the catalog normalizer.
"""

from __future__ import annotations

import csv
import io
import logging
from decimal import Decimal

from llantera.application.dto import TireUpsertCommand
from llantera.application.update_tire_admin import UpdateTireAdminHandler
from llantera.application.upsert_tire import UpsertTireHandler
from llantera.domain.exceptions import DomainException, ValidationError
from llantera.domain.model.value_objects import parse_price
from llantera.domain.repository.price_column_repository import PriceColumnRepository
from llantera.domain.repository.price_repository import PriceRepository
from llantera.domain.service.catalog_normalizer import CatalogNormalizer
from llantera.domain.service.measurement_parser import (
    default_construction,
    first_number,
    parse_float,
    parse_int,
    parse_measurement,
)
from llantera.domain.service.price_derivation_service import PriceDerivationService

logger = logging.getLogger(__name__)

DELIMITER = ";"
MIN_COLUMNS = 17
DEFAULT_MINIMUM_STOCK = 4

# Price column code -> CSV column.  Codes without a configured column are skipped.
PRICE_COLUMNS: tuple[tuple[str, int], ...] = (
    ("mayoreo_6", 3),
    ("mayoreo_3", 4),
    ("mayoreo", 5),
    ("empresa", 6),
    ("lista", 7),
    ("lista_10", 8),
    ("efectivo", 9),
)

# First non-zero of these is the tire's public price.
PUBLIC_PRICE_COLUMNS = (7, 8, 9)


def decode_csv(data: bytes) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        return data.decode("latin-1")


class ImportInventoryCsvHandler:

    def __init__(
        self,
        column_repo: PriceColumnRepository,
        price_repo: PriceRepository,
        upsert_tire: UpsertTireHandler,
        update_admin: UpdateTireAdminHandler,
        normalizer: CatalogNormalizer | None = None,
    ) -> None:
        self._column_repo = column_repo
        self._price_repo = price_repo
        self._upsert_tire = upsert_tire
        self._update_admin = update_admin
        self._normalizer = normalizer or CatalogNormalizer()

    def handle(self, data: bytes) -> int:
        """Upsert one tire per data row, with its stock and prices.

        Rows before a failing row stay imported; the error names the row.
        Derived columns are recomputed once, after the last row.
        """
        reader = csv.reader(
            io.StringIO(decode_csv(data)), delimiter=DELIMITER, skipinitialspace=True
        )
        if next(reader, None) is None:
            raise ValidationError("The CSV file has no rows")

        processed = 0
        for line, row in enumerate(reader, start=2):
            if not any(cell.strip() for cell in row):
                continue
            try:
                cmd = self.build_command(row)
                self._upsert_tire.handle(cmd)
                self._update_admin.handle(
                    cmd.sku,
                    quantity=parse_int(row[2]),
                    prices=self._row_prices(row),
                    recalculate_derived=False,
                    minimum_stock=DEFAULT_MINIMUM_STOCK,
                )
            except DomainException as exc:
                raise ValidationError(f"Row {line}: {exc}") from exc
            processed += 1

        svc = PriceDerivationService(self._column_repo, self._price_repo)
        refreshed = svc.recalculate_all()
        logger.info(
            "Imported %d tires from CSV; recalculated %d derived columns",
            processed, len(refreshed),
        )
        return processed

    def build_command(self, row: list[str]) -> TireUpsertCommand:
        if len(row) < MIN_COLUMNS:
            raise ValidationError(
                f"Incomplete row: expected at least {MIN_COLUMNS} columns, got {len(row)}"
            )
        sku = row[0].strip()
        if not sku:
            raise ValidationError("SKU is empty")
        measure = row[1].strip()
        if not measure:
            raise ValidationError(f"Size is empty for SKU {sku}")

        size = parse_measurement(measure)
        model = " ".join(size.remainder.split()) or measure

        width = size.width or first_number(measure)
        if not width:
            raise ValidationError(f"Cannot determine the width for SKU {sku}")
        rim = size.rim or parse_float(row[15])
        if not rim:
            raise ValidationError(f"Cannot determine the rim for SKU {sku}")

        public_price = Decimal("0")
        for idx in PUBLIC_PRICE_COLUMNS:
            public_price = parse_price(row[idx])
            if public_price:
                break

        alias = row[13].strip()
        return TireUpsertCommand(
            sku=sku,
            brand_name=self._normalizer.brand(alias, model),
            brand_alias=alias.upper(),
            model=model,
            width=width,
            profile=size.profile,
            rim=rim,
            construction=default_construction(size.construction, measure),
            tube_type=size.tube_type,
            ply_rating=size.ply_rating,
            load_index=size.load_index,
            speed_index=size.speed_index,
            type_name=self._normalizer.tire_type(row[14], model),
            usage=row[16].strip().upper(),
            description=f"{measure} {model}".strip(),
            public_price=public_price,
            original_measure=measure,
        )

    @staticmethod
    def _row_prices(row: list[str]) -> dict[str, Decimal]:
        prices: dict[str, Decimal] = {}
        for code, idx in PRICE_COLUMNS:
            value = parse_price(row[idx])
            if value > 0:
                prices[code] = value
        return prices
