"""
Derived-field rules for the input record.

Each rule is a pure function from (old record, edit) to a new record so the
form logic can be tested without rendering anything.
"""

from __future__ import annotations

import math
from typing import Any

from ucs_predictor.domains.form.fields import (
    EMPTY,
    FIELD_NAMES,
    MIXING_MAX,
    is_field,
    parse_number,
)

Record = dict[str, Any]


def initial_record() -> Record:
    """All fields empty."""
    return {name: EMPTY for name in FIELD_NAMES}


def derive_pi(ll: Any, pl: Any) -> float | str:
    """PI = LL - PL when both parse, else empty."""
    ll_num = parse_number(ll)
    pl_num = parse_number(pl)
    if ll_num is None or pl_num is None:
        return EMPTY
    pi = ll_num - pl_num
    return pi if math.isfinite(pi) else EMPTY


def cap_mixing(raw: Any) -> float | str:
    """min(parsed, MIXING_MAX), or empty when raw does not parse."""
    num = parse_number(raw)
    if num is None:
        return EMPTY
    return min(num, MIXING_MAX)


def update_field(record: Record, name: str, raw: Any) -> Record:
    """
    Return a new record with `name` set to `raw` and derived fields re-applied.

    Raises:
        ValueError: If name is not one of the form fields, or is PI (derived only).
    """
    if not is_field(name):
        raise ValueError(f"Unknown field: {name!r}")
    if name == "PI":
        raise ValueError("PI is derived from LL and PL and cannot be edited")

    updated = dict(record)
    updated[name] = raw

    if name in ("LL", "PL"):
        updated["PI"] = derive_pi(updated.get("LL"), updated.get("PL"))

    if name == "Mixing":
        updated["Mixing"] = cap_mixing(raw)

    return updated
