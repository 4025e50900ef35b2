"""Performance statistics over a trade ledger.

Every function here is a pure, linear scan over the records it is handed.
Nothing is cached: callers recompute on every read, so two calls over the
same ledger always agree.

Conventions
-----------
* A trade's R is its ``result_r`` coerced with
  :func:`~trade_discipline.core.coerce.to_number` (garbage -> 0).
* Win iff R > 0, loss iff R < 0.  Exactly 0 is neither.
* Drawdowns are percentages (``10.0`` means 10 %), measured against the
  running peak balance, which is seeded at the initial balance.
* Losses enter expectancy as a flat -1R regardless of their size.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import Any

from trade_discipline.core.config import DEFAULT_INITIAL_BALANCE
from trade_discipline.core.ids import month_of
from trade_discipline.core.models import TradeRecord

from .ledger import as_records

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PerformanceSnapshot:
    """Derived performance metrics for a ledger.  Carries no identity."""

    win_rate: float = 0.0
    avg_win_r: float = 0.0
    expectancy: float = 0.0
    max_drawdown_pct: float = 0.0
    current_drawdown_pct: float = 0.0
    total_r: float = 0.0
    losing_streak: int = 0
    wins: int = 0
    losses: int = 0
    trade_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# ------------------------------------------------------------------ #
# Balance / drawdown                                                   #
# ------------------------------------------------------------------ #

def latest_balance(
    ledger: Sequence[TradeRecord] | None,
    initial_balance: float = DEFAULT_INITIAL_BALANCE,
) -> float:
    """Balance after the most recent trade, or the initial balance."""
    records = as_records(ledger)
    return records[-1].balance if records else initial_balance


def peak_balance(
    ledger: Sequence[TradeRecord] | None,
    initial_balance: float = DEFAULT_INITIAL_BALANCE,
) -> float:
    """Highest balance ever recorded, never below the initial balance."""
    return max(equity_curve(ledger, initial_balance))


def drawdown_pct(peak: float, balance: float) -> float:
    """Percentage decline of *balance* from *peak*.  0 for a non-positive peak."""
    if peak <= 0.0:
        return 0.0
    return (peak - balance) / peak * 100


def current_drawdown_pct(
    ledger: Sequence[TradeRecord] | None,
    initial_balance: float = DEFAULT_INITIAL_BALANCE,
    current_balance: float | None = None,
) -> float:
    """Drawdown of the current balance from the all-time peak.

    Args:
        current_balance: Balance to evaluate.  Defaults to the latest ledger
            balance.
    """
    if current_balance is None:
        current_balance = latest_balance(ledger, initial_balance)
    return drawdown_pct(peak_balance(ledger, initial_balance), current_balance)


def max_drawdown_pct(
    ledger: Sequence[TradeRecord] | None,
    initial_balance: float = DEFAULT_INITIAL_BALANCE,
) -> float:
    """Largest peak-to-balance drawdown seen while scanning chronologically."""
    peak = initial_balance
    worst = 0.0
    for record in as_records(ledger):
        peak = max(peak, record.balance)
        worst = max(worst, drawdown_pct(peak, record.balance))
    return worst


def equity_curve(
    ledger: Sequence[TradeRecord] | None,
    initial_balance: float = DEFAULT_INITIAL_BALANCE,
) -> list[float]:
    """``[initial, balance_1, ..., balance_n]`` for charting."""
    return [initial_balance, *(r.balance for r in as_records(ledger))]


def profit_pct(balance: float, initial_balance: float = DEFAULT_INITIAL_BALANCE) -> float:
    """Return on the initial balance, in percent."""
    if initial_balance <= 0.0:
        return 0.0
    return (balance - initial_balance) / initial_balance * 100


# ------------------------------------------------------------------ #
# R-based series                                                       #
# ------------------------------------------------------------------ #

def losing_streak(ledger: Sequence[TradeRecord] | None) -> int:
    """Number of consecutive losing trades at the end of the ledger."""
    streak = 0
    for record in reversed(as_records(ledger)):
        if record.r >= 0:
            break
        streak += 1
    return streak


def rolling_avg_r(ledger: Sequence[TradeRecord] | None, window: int = 10) -> float:
    """Mean R over the most recent *window* trades (0 when empty)."""
    recent = list(as_records(ledger))[-window:]
    if not recent:
        return 0.0
    return sum(r.r for r in recent) / len(recent)


def has_consecutive_losses(ledger: Sequence[TradeRecord] | None, count: int = 3) -> bool:
    """True iff the last *count* trades exist and every one lost.

    Fewer than *count* trades never trips the flag.
    """
    records = as_records(ledger)
    if len(records) < count:
        return False
    return all(r.r < 0 for r in list(records)[-count:])


def month_pnl(ledger: Sequence[TradeRecord] | None, month: str) -> float:
    """Sum of P&L over trades dated in *month* (``YYYY-MM``)."""
    return sum(r.pnl for r in as_records(ledger) if month_of(r.date) == month)


# ------------------------------------------------------------------ #
# Aggregate                                                            #
# ------------------------------------------------------------------ #

def aggregate(
    ledger: Sequence[TradeRecord] | None,
    initial_balance: float = DEFAULT_INITIAL_BALANCE,
) -> PerformanceSnapshot:
    """Compute a :class:`PerformanceSnapshot` for the full ledger.

    An empty (or missing) ledger yields the all-zero snapshot.
    """
    records = as_records(ledger)
    if not records:
        return PerformanceSnapshot()

    win_rs = [r.r for r in records if r.r > 0]
    losses = sum(1 for r in records if r.r < 0)
    n = len(records)

    win_rate = len(win_rs) / n
    avg_win_r = sum(win_rs) / len(win_rs) if win_rs else 0.0
    expectancy = win_rate * avg_win_r - (1 - win_rate) * 1

    snapshot = PerformanceSnapshot(
        win_rate=win_rate,
        avg_win_r=avg_win_r,
        expectancy=expectancy,
        max_drawdown_pct=max_drawdown_pct(records, initial_balance),
        current_drawdown_pct=current_drawdown_pct(records, initial_balance),
        total_r=sum(r.r for r in records),
        losing_streak=losing_streak(records),
        wins=len(win_rs),
        losses=losses,
        trade_count=n,
    )
    logger.debug(
        "Aggregated %d trades: win_rate=%.3f expectancy=%.3f dd=%.2f%%",
        n, win_rate, expectancy, snapshot.current_drawdown_pct,
    )
    return snapshot
