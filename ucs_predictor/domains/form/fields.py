"""
Input field set for the UCS form: names, layout groups, numeric parsing.
"""

from __future__ import annotations

import math
from typing import Any

# Fixed enumeration order. Validation walks fields in this order.
FIELD_NAMES: tuple[str, ...] = (
    "Clay",
    "Silt",
    "LL",
    "PL",
    "PI",
    "DryDensity",
    "SiO2",
    "Al2O3",
    "CaOlime",
    "Mixing",
    "CuringDays",
    "WaterContent",
)

DERIVED_FIELDS: frozenset[str] = frozenset({"PI"})
REQUIRED_FIELDS: tuple[str, ...] = tuple(f for f in FIELD_NAMES if f not in DERIVED_FIELDS)

FIELD_GROUPS: dict[str, tuple[str, ...]] = {
    "Material Properties": ("Clay", "Silt", "LL", "PL", "PI", "DryDensity"),
    "Chemical Properties": ("SiO2", "Al2O3", "CaOlime"),
    "Process Parameters": ("Mixing", "CuringDays", "WaterContent"),
}

MIXING_MAX = 12.0
CLAY_SILT_MIN = 50.0

EMPTY = ""


def is_field(name: str) -> bool:
    return name in FIELD_NAMES


def parse_number(value: Any) -> float | None:
    """
    Parse a record value as a finite float.

    Accepts ints/floats (not bools) and numeric strings with surrounding
    whitespace. Returns None for empty, non-numeric, nan, or inf.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        num = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            num = float(text)
        except ValueError:
            return None
    else:
        return None
    return num if math.isfinite(num) else None


def is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == EMPTY)


def format_value(value: Any) -> str:
    """Render a record value for a text input (20.0 -> "20", 20.5 -> "20.5")."""
    if is_empty(value):
        return EMPTY
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)
