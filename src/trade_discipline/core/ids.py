"""Canonical ID and date factories.

All modules import from here instead of defining local _uuid()/_today()
copies.  Dates are ISO ``YYYY-MM-DD`` strings in UTC, months are the
``YYYY-MM`` prefix of such a string.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone


def new_id() -> str:
    """Generate a new UUID v4 string for trade records."""
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(timezone.utc)


def today_iso() -> str:
    """Today's UTC date as ``YYYY-MM-DD``."""
    return utc_now().date().isoformat()


def current_month() -> str:
    """Current UTC month as ``YYYY-MM``."""
    return today_iso()[:7]


def month_of(date_text: str) -> str:
    """Month prefix of an ISO date string (plain string slice)."""
    return (date_text or "")[:7]
