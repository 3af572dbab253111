"""Form domain: fields, derived-field rules, validation."""

from ucs_predictor.domains.form.fields import FIELD_GROUPS, FIELD_NAMES, REQUIRED_FIELDS
from ucs_predictor.domains.form.rules import initial_record, update_field
from ucs_predictor.domains.form.validation import to_numeric, validate_record

__all__ = [
    "FIELD_GROUPS",
    "FIELD_NAMES",
    "REQUIRED_FIELDS",
    "initial_record",
    "update_field",
    "to_numeric",
    "validate_record",
]
