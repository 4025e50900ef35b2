"""Permissive numeric coercion for form text and stored ledger values.

Trade forms deliver every numeric field as free text and stored ledgers may
carry whatever an older front end wrote.  The engine never rejects such
input: anything that does not parse as a finite real number
becomes ``0.0``.  This keeps scoring and aggregation total functions.

Blank-ness is a separate question: a mandatory field is *missing* only when
it is ``None`` or whitespace.  Garbage text is present and coerces to 0.
"""

from __future__ import annotations

import math
from typing import Any


def to_number(value: Any) -> float:
    """Coerce *value* to a float, defaulting to ``0.0`` on failure.

    Accepts ints, floats and numeric strings (surrounding whitespace,
    a leading ``+`` and exponent notation are fine).  ``None``, booleans,
    blank strings, NaN, infinities (``"inf"``, ``"1e400"``) and unparsable
    text all yield ``0.0``.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    else:
        text = str(value).strip()
        # float() accepts digit separators, form input does not
        if not text or "_" in text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def is_blank(value: Any) -> bool:
    """True when a form field was left empty."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False
