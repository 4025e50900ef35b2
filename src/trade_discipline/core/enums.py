"""Enumerations used across the discipline engine."""

from enum import Enum


class Direction(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    RANGE = "RANGE"


class BreakQuality(str, Enum):
    """Breakout quality grade assigned by the trader."""

    A = "A"
    B = "B"
    C = "C"


class TradingMode(str, Enum):
    """Risk-gating mode derived from the trade ledger.

    Ordered from most to least restrictive.
    """

    STOPPED = "STOPPED"
    DEFENSE = "DEFENSE"
    NORMAL = "NORMAL"
    ATTACK = "ATTACK"

    @property
    def risk_pct(self) -> float:
        """Recommended risk per trade, in percent of balance."""
        mapping = {"STOPPED": 0.0, "DEFENSE": 1.0, "NORMAL": 2.0, "ATTACK": 3.0}
        return mapping[self.value]

    @property
    def allows_entry(self) -> bool:
        return self is not TradingMode.STOPPED


class BlockReason(str, Enum):
    """Why a trade commit was refused."""

    MISSING_REQUIRED_FIELD = "missing_required_field"
    MODE_BLOCKED = "mode_blocked"


class ScoreBand(str, Enum):
    STRONG = "strong"  # >= 70
    FAIR = "fair"      # >= 50
    WEAK = "weak"


class ModeRule(str, Enum):
    """Which classifier rule produced a mode."""

    EMPTY_LEDGER = "empty_ledger"
    DRAWDOWN_STOP = "drawdown_stop"
    MONTHLY_LOSS = "monthly_loss"
    LOSS_STREAK = "loss_streak"
    ATTACK = "attack"
    DEFAULT = "default"
