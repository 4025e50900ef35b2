"""Core domain models: the trade setup form and the committed trade record.

Both are frozen pydantic models.  Field names are snake_case; the camelCase
keys written by the older browser front end (``dailyDir``, ``resultR``,
``id`` ...) are accepted as aliases so old ledgers load unchanged.

Numeric form fields stay text on :class:`TradeSetup`.  They are coerced at
the point of use with :func:`~trade_discipline.core.coerce.to_number`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .coerce import is_blank, to_number


# ---------------------------------------------------------------------------
# Form input
# ---------------------------------------------------------------------------

class TradeSetup(BaseModel):
    """A candidate trade as entered on the form, before commitment."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    date: str = ""  # "YYYY-MM-DD", blank -> today at commit
    pair: str = "USD/JPY"
    daily_dir: str = Field(default="UP", alias="dailyDir")
    h4_dir: str = Field(default="UP", alias="h4Dir")
    h1_push: str = Field(default="", alias="h1Push")
    m15_push: str = Field(default="", alias="m15Push")
    break_quality: str = Field(default="A", alias="breakQuality")
    space_pips: str = Field(default="", alias="spacePips")
    time_score: str = Field(default="", alias="timeScore")
    risk_pct: str = Field(default="2", alias="riskPct")
    rr: str = ""  # mandatory
    result_r: str = Field(default="", alias="resultR")  # mandatory

    @field_validator(
        "date", "pair", "daily_dir", "h4_dir", "h1_push", "m15_push",
        "break_quality", "space_pips", "time_score", "risk_pct", "rr",
        "result_r",
        mode="before",
    )
    @classmethod
    def _as_text(cls, value: Any) -> str:
        if value is None:
            return ""
        if isinstance(value, str):
            return value
        return str(value)

    # ------------------------------------------------------------------ #
    # Coerced views                                                        #
    # ------------------------------------------------------------------ #

    @property
    def space_value(self) -> float:
        return to_number(self.space_pips)

    @property
    def time_value(self) -> float:
        return to_number(self.time_score)

    @property
    def risk_value(self) -> float:
        return to_number(self.risk_pct)

    @property
    def rr_value(self) -> float:
        return to_number(self.rr)

    @property
    def result_value(self) -> float:
        return to_number(self.result_r)

    @property
    def missing_fields(self) -> tuple[str, ...]:
        """Mandatory fields that were left blank."""
        missing = []
        if is_blank(self.result_r):
            missing.append("result_r")
        if is_blank(self.rr):
            missing.append("rr")
        return tuple(missing)

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields


# ---------------------------------------------------------------------------
# Committed record
# ---------------------------------------------------------------------------

class TradeRecord(TradeSetup):
    """An immutable committed trade.

    Created only by :func:`~trade_discipline.risk.pre_trade.commit`.  The
    stored ``score``, ``pnl`` and ``balance`` are historical values: they are
    never recomputed when other records are deleted.
    """

    trade_id: str = Field(alias="id")
    score: float = 0.0
    pnl: float = 0.0
    balance: float = 0.0
    win: bool = False

    @field_validator("trade_id", mode="before")
    @classmethod
    def _id_as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("score", "pnl", "balance", mode="before")
    @classmethod
    def _coerce_number(cls, value: Any) -> float:
        return to_number(value)

    @field_validator("win", mode="before")
    @classmethod
    def _coerce_win(cls, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        return to_number(value) > 0

    @property
    def r(self) -> float:
        """Coerced result-R."""
        return self.result_value

    def to_dict(self) -> dict[str, Any]:
        """Export to a flat dictionary for logging / storage."""
        return self.model_dump(mode="json")
