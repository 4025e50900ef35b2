"""Trade Journal: the ledger and the statistics derived from it.

Key components
--------------
Ledger               Ordered append-and-delete list of committed trades
PerformanceSnapshot  Win rate, expectancy, drawdowns, losing streak
aggregate            Ledger -> PerformanceSnapshot
LedgerStore          JSON ledger under one key of a caller-owned mapping
"""

from .ledger import Ledger
from .stats import (
    PerformanceSnapshot,
    aggregate,
    current_drawdown_pct,
    equity_curve,
    has_consecutive_losses,
    latest_balance,
    losing_streak,
    max_drawdown_pct,
    month_pnl,
    peak_balance,
    profit_pct,
    rolling_avg_r,
)
from .storage import LedgerStore, ledger_from_json, ledger_to_json

__all__ = [
    "Ledger",
    "PerformanceSnapshot",
    "aggregate",
    "current_drawdown_pct",
    "equity_curve",
    "has_consecutive_losses",
    "latest_balance",
    "losing_streak",
    "max_drawdown_pct",
    "month_pnl",
    "peak_balance",
    "profit_pct",
    "rolling_avg_r",
    "LedgerStore",
    "ledger_from_json",
    "ledger_to_json",
]
