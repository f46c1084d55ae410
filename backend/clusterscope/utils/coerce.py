"""Value coercion helpers. No engine imports."""

from __future__ import annotations

import math
import re
from typing import Any

_THOUSANDS_RE = re.compile(r"(?<=\d),(?=\d{3}\b)")
_CURRENCY_PREFIX = ("$", "US$")


def is_blank(value: Any) -> bool:
    """None, NaN, or a string that is empty after trimming."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return str(value).strip() == ""


def to_number(value: Any) -> float | None:
    """Coerce a raw value to a finite float, or None.

    Accepts ints, floats and numeric strings. Booleans are not numbers here.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        num = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            num = float(text)
        except ValueError:
            return None
    return num if math.isfinite(num) else None


def parse_amount(value: Any) -> float | None:
    """Like to_number but tolerates thousands separators and a currency sign."""
    if isinstance(value, str):
        text = value.strip()
        for prefix in _CURRENCY_PREFIX:
            if text.startswith(prefix):
                text = text[len(prefix):].strip()
                break
        value = _THOUSANDS_RE.sub("", text)
    return to_number(value)


def string_form(value: Any) -> str:
    """Canonical string form of a raw value.

    Integral floats render without a fractional part (``1.0`` -> ``"1"``) so a
    code exported as a float matches the same code exported as an int.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
