"""Brand and tire-type normalization tables.

Supplier spreadsheets abbreviate brands ("GDY", "BS") and tire types
("LTR", "PSR").  The lookup tables are plain data handed to
``CatalogNormalizer`` so deployments can extend them from configuration.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

OTHER_BRANDS = "Otras Marcas"
OTHER_TYPES = "Otros"

DEFAULT_BRANDS: dict[str, str] = {
    "AB": "AB Tires",
    "AURORA": "Aurora Tires",
    "BS": "Bridgestone",
    "BRIDGESTONE": "Bridgestone",
    "DAYTON": "Dayton",
    "DOUBLE COIN": "Double Coin",
    "FS": "Firestone",
    "FIRESTONE": "Firestone",
    "FUZION": "Fuzion",
    "GDY": "Goodyear",
    "GOODYEAR": "Goodyear",
    "GOO": "Goodride",
    "HAN": "Hankook",
    "HANKOOK": "Hankook",
    "KUM": "Kumho",
    "KUMHO": "Kumho",
    "LAUFENN": "Laufenn",
    "OTR": "OTR Tires",
    "OTRAS": OTHER_BRANDS,
    "PIRELLI": "Pirelli",
    "SUM": "Sumitomo",
    "SUMITOMO": "Sumitomo",
    "TOR": "Tornel",
    "TORNEL": "Tornel",
}

DEFAULT_TYPES: dict[str, str] = {
    "PS": "Pasajero",
    "PASAJERO": "Pasajero",
    "PASAJERO RADIAL": "Pasajero Radial (PSR)",
    "PSR": "Pasajero Radial (PSR)",
    "LT": "Camioneta Convencional",
    "LTS": "Light Truck Convencional (LTS)",
    "LTR": "Light Truck Radial (LTR)",
    "LT R": "Light Truck Radial (LTR)",
    "LTA": "Light Truck Radial (LTR)",
    "ST": "Special Trailer (ST)",
    "TBR": "Truck & Bus Radial (TBR)",
    "IND": "Industrial Radial",
    "INDUSTRIAL": "Industrial Radial",
    "MOTO CONVENCIONAL": "Moto Convencional",
    "MOTO RADIAL": "Moto Radial",
    "AGR": "Agrícola Radial",
    "AGRICOLA": "Agrícola Radial",
    "CAMION RADIAL": "Camión Radial",
    "CAMION CONVENCIONAL": "Camión Convencional",
    "CAMIONETA RADIAL": "Camioneta Radial",
    "CAMIONETA CONVENCIONAL": "Camioneta Convencional",
    "LLANTA TEMPORAL": "Llanta Temporal",
}


def _key(raw: str | None) -> str:
    return (raw or "").strip().upper()


@dataclass(frozen=True)
class CatalogNormalizer:
    brands: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_BRANDS))
    types: Mapping[str, str] = field(default_factory=lambda: dict(DEFAULT_TYPES))

    @staticmethod
    def with_overrides(
        brands: Mapping[str, str] | None = None,
        types: Mapping[str, str] | None = None,
    ) -> CatalogNormalizer:
        """Defaults extended (and overridden) by the given tables."""
        merged_brands = dict(DEFAULT_BRANDS)
        merged_brands.update({_key(k): v for k, v in (brands or {}).items()})
        merged_types = dict(DEFAULT_TYPES)
        merged_types.update({_key(k): v for k, v in (types or {}).items()})
        return CatalogNormalizer(brands=merged_brands, types=merged_types)

    def brand(self, alias: str | None, fallback: str | None = None) -> str:
        """Canonical brand name for an alias, else a title-cased guess."""
        key = _key(alias) or _key(fallback)
        if key in self.brands:
            return self.brands[key]
        if not key:
            return OTHER_BRANDS
        return key.title()

    def tire_type(self, *candidates: str | None) -> str:
        """Canonical type for the first candidate found in the table."""
        for candidate in candidates:
            key = _key(candidate)
            if key and key in self.types:
                return self.types[key]
        return OTHER_TYPES
