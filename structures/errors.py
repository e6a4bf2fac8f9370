"""
errors.py — Validation Failures
================================
Every caller mistake the engine can detect is reported as a
ValidationError *before* any structure is touched.  Not-found results
(search miss, delete of an absent value, unreachable target) are NOT
errors; they come back as ordinary Outcomes.
"""

import math
from typing import Any, Optional


class ValidationError(ValueError):
    """
    Attributes:
        reason : Human-readable explanation, safe to show to the user.
        field  : Name of the offending parameter (or None).
    """

    def __init__(self, reason: str, field: Optional[str] = None):
        super().__init__(reason)
        self.reason: str           = reason
        self.field:  Optional[str] = field

    def to_dict(self) -> dict:
        return {"error": self.reason, "field": self.field}


def require_int(raw: Any, field: str) -> int:
    """Coerce `raw` to int or raise.  Accepts ints and numeric strings, rejects bools/floats with a fraction."""
    if isinstance(raw, bool) or raw is None:
        raise ValidationError(f"'{field}' must be a number", field)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if raw.is_integer():
            return int(raw)
        raise ValidationError(f"'{field}' must be a whole number", field)
    if isinstance(raw, str):
        try:
            return int(raw.strip())
        except ValueError:
            raise ValidationError(f"'{field}' must be a number, got '{raw}'", field) from None
    raise ValidationError(f"'{field}' must be a number", field)


def require_index(raw: Any, field: str, upper: int) -> int:
    """int in the half-open range [0, upper)."""
    idx = require_int(raw, field)
    if not 0 <= idx < upper:
        raise ValidationError(f"Invalid {field}: {idx} (expected 0..{upper - 1})", field)
    return idx


def require_number(raw: Any, field: str) -> float:
    """Coerce `raw` to float or raise.  Accepts ints, floats and numeric strings."""
    if isinstance(raw, bool) or raw is None:
        raise ValidationError(f"'{field}' must be a number", field)
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError:
            raise ValidationError(f"'{field}' must be a number, got '{raw}'", field) from None
    else:
        raise ValidationError(f"'{field}' must be a number", field)
    if not math.isfinite(value):
        raise ValidationError(f"'{field}' must be a finite number", field)
    return value
