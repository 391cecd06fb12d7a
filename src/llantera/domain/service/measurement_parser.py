"""Parse supplier size strings into tire dimensions.

Supplier lists describe a tire in one free-text "medida" cell, for
example ``"205/55R16 91V ECOPIA"``, ``"31X10.50R15 LT 6PR"`` or
``"7.5-16 8PR TT"``.  Four size shapes are recognised, tried in this
order:

* metric: ``205/55R16``, ``110/90-17``
* flotation: ``31X10.50R15`` (profile converted from inches to mm)
* moto: ``90/90-18``
* agricultural: ``7.5-16`` (width converted from inches to mm, no profile)

Whatever follows the size is kept as ``remainder`` and is searched for
the load/speed indices and the ply rating.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

MM_PER_INCH = Decimal("25.4")

_METRIC = re.compile(r"^(\d{3})\s*/\s*(\d{2})\s*([R-])\s*(\d{2})(.*)$", re.IGNORECASE)
_FLOTATION = re.compile(
    r"^(\d{2,3})\s*X\s*(\d{1,2}\.\d{1,2})\s*([R-])\s*(\d{2})(.*)$", re.IGNORECASE
)
_MOTO = re.compile(r"^(\d{2,3})\s*/\s*(\d{2,3})\s*-\s*(\d{2})(.*)$", re.IGNORECASE)
_AGRI = re.compile(r"^(\d{1,2}\.\d)\s*([R-])\s*(\d{2})(.*)$", re.IGNORECASE)
_LOAD_SPEED = re.compile(r"(\d{2,3})([A-Z]{1,2})\b")
_PLY = re.compile(r"(\d{1,2})\s*PR\b")
_TUBE = re.compile(r"\b(TL|TT)\b")
_NUMBER = re.compile(r"\d+")


@dataclass(frozen=True)
class Measurement:
    width: int = 0
    profile: int | None = None
    rim: float = 0.0
    construction: str = ""
    tube_type: str = ""
    ply_rating: str = ""
    load_index: str = ""
    speed_index: str = ""
    remainder: str = ""


def parse_int(text: str) -> int:
    """Whole number from a cell; anything unparseable reads as 0."""
    try:
        return int(text.strip())
    except ValueError:
        return 0


def parse_float(text: str) -> float:
    """Number from a cell, accepting a decimal comma; 0.0 when unparseable."""
    try:
        return float(text.replace(",", ".").strip())
    except ValueError:
        return 0.0


def first_number(text: str) -> int:
    match = _NUMBER.search(text)
    return int(match.group()) if match else 0


def _inches_to_mm(text: str) -> int:
    try:
        mm = Decimal(text.replace(",", ".")) * MM_PER_INCH
    except InvalidOperation:
        return 0
    return int(mm.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def _construction(token: str) -> str:
    token = token.upper()
    return token if token in ("R", "D") else ""


def default_construction(construction: str, raw: str) -> str:
    """Parsed construction, else guessed from the size text ("R" or "D")."""
    if construction:
        return construction
    upper = raw.upper()
    if "R" in upper:
        return "R"
    if "-" in upper:
        return "D"
    return ""


def _parse_size(cleaned: str) -> tuple[int, int | None, float, str, str] | None:
    """``(width, profile, rim, construction, remainder)`` or None."""
    m = _METRIC.match(cleaned)
    if m is not None:
        return (int(m.group(1)), int(m.group(2)), parse_float(m.group(4)),
                _construction(m.group(3)), m.group(5).strip())
    m = _FLOTATION.match(cleaned)
    if m is not None:
        return (int(m.group(1)), _inches_to_mm(m.group(2)), parse_float(m.group(4)),
                _construction(m.group(3)), m.group(5).strip())
    m = _MOTO.match(cleaned)
    if m is not None:
        return (int(m.group(1)), int(m.group(2)), parse_float(m.group(3)),
                "D", m.group(4).strip())
    m = _AGRI.match(cleaned)
    if m is not None:
        return (_inches_to_mm(m.group(1)), None, parse_float(m.group(3)),
                _construction(m.group(2)), m.group(4).strip())
    return None


def parse_measurement(raw: str) -> Measurement:
    cleaned = raw.strip().upper()
    size = _parse_size(cleaned)
    if size is None:
        width, profile, rim, construction, remainder = 0, None, 0.0, "", cleaned
    else:
        width, profile, rim, construction, remainder = size

    # The ply rating ("10PR") would otherwise read as a load/speed pair.
    ply_rating = ""
    indices_text = remainder
    ply = _PLY.search(remainder)
    if ply is not None:
        ply_rating = ply.group(0)
        indices_text = remainder[:ply.start()] + " " + remainder[ply.end():]

    load_index = speed_index = ""
    load_speed = _LOAD_SPEED.search(indices_text)
    if load_speed is not None:
        load_index, speed_index = load_speed.group(1), load_speed.group(2)

    tube = _TUBE.search(cleaned)

    return Measurement(
        width=width,
        profile=profile,
        rim=rim,
        construction=construction,
        tube_type=tube.group(1) if tube else "",
        ply_rating=ply_rating,
        load_index=load_index,
        speed_index=speed_index,
        remainder=remainder,
    )
