"""Shared fixtures for the trade-discipline test suite."""

from __future__ import annotations

import itertools
from collections.abc import Callable, Sequence

import pytest

from trade_discipline.core.config import ModeThresholds, Settings
from trade_discipline.core.models import TradeRecord, TradeSetup
from trade_discipline.journal.ledger import Ledger

INITIAL = 100_000.0
MONTH = "2024-03"

_ids = itertools.count(1)


# ---------------------------------------------------------------------------
# Setup / record helpers
# ---------------------------------------------------------------------------

@pytest.fixture
def make_setup() -> Callable[..., TradeSetup]:
    """Factory for a complete setup; override any field by keyword."""

    def _make(**fields) -> TradeSetup:
        defaults = {
            "date": f"{MONTH}-15",
            "daily_dir": "UP",
            "h4_dir": "UP",
            "break_quality": "A",
            "space_pips": "40",
            "time_score": "15",
            "risk_pct": "2",
            "rr": "2.5",
            "result_r": "2",
        }
        defaults.update(fields)
        return TradeSetup(**defaults)

    return _make


@pytest.fixture
def build_ledger() -> Callable[..., Ledger]:
    """Factory: ledger from a list of R results at a fixed risk amount.

    Balances follow the ledger invariant
    ``balance_i = balance_{i-1} + r_i * risk_amount``.
    """

    def _build(
        results: Sequence[float],
        *,
        risk_amount: float = 1_000.0,
        initial: float = INITIAL,
        dates: Sequence[str] | None = None,
    ) -> Ledger:
        ledger = Ledger()
        balance = initial
        for i, r in enumerate(results):
            pnl = r * risk_amount
            balance += pnl
            ledger.append(
                TradeRecord(
                    trade_id=f"t{next(_ids)}",
                    date=dates[i] if dates else f"{MONTH}-{(i % 28) + 1:02d}",
                    result_r=str(r),
                    rr="2",
                    risk_pct="1",
                    score=70.0,
                    pnl=pnl,
                    balance=balance,
                    win=r > 0,
                )
            )
        return ledger

    return _build


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def thresholds() -> ModeThresholds:
    return ModeThresholds()
