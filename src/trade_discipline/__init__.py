"""Trade discipline engine.

Scores trade setups, derives performance statistics from a trade ledger
and classifies the ledger into a risk mode (STOPPED / DEFENSE / NORMAL /
ATTACK) with a fixed recommended risk percentage.
"""

from .core.enums import TradingMode
from .core.errors import CommitBlocked, MissingRequiredField, ModeBlocked
from .core.models import TradeRecord, TradeSetup
from .desk import Dashboard, TradeDesk
from .journal import Ledger, PerformanceSnapshot, aggregate
from .risk import classify, commit, preview, score_setup

__all__ = [
    "TradingMode",
    "CommitBlocked",
    "MissingRequiredField",
    "ModeBlocked",
    "TradeRecord",
    "TradeSetup",
    "Dashboard",
    "TradeDesk",
    "Ledger",
    "PerformanceSnapshot",
    "aggregate",
    "classify",
    "commit",
    "preview",
    "score_setup",
]
