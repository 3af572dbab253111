"""
Pre-submit validation: compound threshold, required fields, numeric fields.
Checks run in a fixed order and stop at the first failure.
"""

from __future__ import annotations

from typing import Any, Mapping

from ucs_predictor.domains.form.fields import (
    CLAY_SILT_MIN,
    FIELD_NAMES,
    REQUIRED_FIELDS,
    is_empty,
    parse_number,
)

CLAY_SILT_MESSAGE = "Clay + Silt must be ≥ 50%"


def required_message(field: str) -> str:
    return f"{field} is required"


def not_a_number_message(field: str) -> str:
    return f"{field} must be a number"


def check_clay_silt(record: Mapping[str, Any]) -> str | None:
    """Clay + Silt must reach CLAY_SILT_MIN. Unparseable Clay or Silt fails."""
    clay = parse_number(record.get("Clay"))
    silt = parse_number(record.get("Silt"))
    if clay is None or silt is None or clay + silt < CLAY_SILT_MIN:
        return CLAY_SILT_MESSAGE
    return None


def check_required(record: Mapping[str, Any]) -> str | None:
    for field in REQUIRED_FIELDS:
        if is_empty(record.get(field)):
            return required_message(field)
    return None


def check_numeric(record: Mapping[str, Any]) -> str | None:
    # PI included: LL - PL can overflow to inf and leave PI empty.
    for field in FIELD_NAMES:
        if parse_number(record.get(field)) is None:
            return not_a_number_message(field)
    return None


def validate_record(record: Mapping[str, Any]) -> str | None:
    """
    Run all pre-submit checks in order.

    Returns:
        The user-facing message of the first failing check, or None if valid.
    """
    for check in (check_clay_silt, check_required, check_numeric):
        message = check(record)
        if message:
            return message
    return None


def to_numeric(record: Mapping[str, Any]) -> dict[str, float]:
    """
    Convert every field (PI included) to float for the request body.
    Call only on a record that passed validate_record.

    Raises:
        ValueError: If a field does not parse.
    """
    out: dict[str, float] = {}
    for field in FIELD_NAMES:
        num = parse_number(record.get(field))
        if num is None:
            raise ValueError(f"{field} is not numeric: {record.get(field)!r}")
        out[field] = num
    return out
