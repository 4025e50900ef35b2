"""Mode classification: the automatic risk gate.

The current :class:`~trade_discipline.core.enums.TradingMode` is a pure
function of the ledger; nothing is persisted between calls and there is no
hysteresis.  Rules are evaluated in a fixed order and the first match wins:

1. drawdown from peak >= 10 %                      -> STOPPED
2. current-month P&L <= -5 % of initial balance    -> DEFENSE
3. last 3 trades all losses                        -> NORMAL
4. 10-trade avg R > 0.5 and drawdown < 5 %         -> ATTACK
5. otherwise                                       -> NORMAL

Rule 3 deliberately sits above rule 4: three straight losses cap the mode
at NORMAL even when the rolling average still looks strong.  An empty
ledger is NORMAL before any rule is consulted.

All cut-offs come from :class:`~trade_discipline.core.config.ModeThresholds`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from trade_discipline.core.config import DEFAULT_INITIAL_BALANCE, ModeThresholds
from trade_discipline.core.enums import ModeRule, TradingMode
from trade_discipline.core.ids import current_month
from trade_discipline.core.models import TradeRecord
from trade_discipline.journal.ledger import as_records
from trade_discipline.journal.stats import (
    current_drawdown_pct,
    has_consecutive_losses,
    latest_balance,
    losing_streak,
    month_pnl,
    rolling_avg_r,
)

logger = logging.getLogger(__name__)


# ================================================================== #
# Display metadata                                                    #
# ================================================================== #

@dataclass(frozen=True)
class ModeProfile:
    """Fixed display metadata and recommended risk for a mode."""

    mode: TradingMode
    label: str
    emoji: str
    color: str
    background: str
    border: str

    @property
    def risk_pct(self) -> float:
        return self.mode.risk_pct


MODE_PROFILES: dict[TradingMode, ModeProfile] = {
    TradingMode.STOPPED: ModeProfile(
        TradingMode.STOPPED, "Forced stop", "🛑", "#b91c1c", "#fef2f2", "#fca5a5",
    ),
    TradingMode.DEFENSE: ModeProfile(
        TradingMode.DEFENSE, "Defense", "🛡️", "#c2410c", "#fff7ed", "#fdba74",
    ),
    TradingMode.NORMAL: ModeProfile(
        TradingMode.NORMAL, "Normal", "⚡", "#15803d", "#f0fdf4", "#86efac",
    ),
    TradingMode.ATTACK: ModeProfile(
        TradingMode.ATTACK, "Attack", "🚀", "#1d4ed8", "#eff6ff", "#93c5fd",
    ),
}


def profile_for(mode: TradingMode) -> ModeProfile:
    return MODE_PROFILES[mode]


def recommended_risk_amount(mode: TradingMode, balance: float) -> float:
    """Currency amount to risk on the next trade under *mode*."""
    return balance * mode.risk_pct / 100


# ================================================================== #
# Classification                                                      #
# ================================================================== #

@dataclass(frozen=True)
class ModeDecision:
    """A classified mode together with the inputs that produced it."""

    mode: TradingMode
    rule: ModeRule
    drawdown_pct: float = 0.0
    month: str = ""
    month_pnl: float = 0.0
    month_pnl_pct: float = 0.0
    rolling_avg_r: float = 0.0
    consecutive_losses: bool = False

    @property
    def risk_pct(self) -> float:
        return self.mode.risk_pct

    @property
    def profile(self) -> ModeProfile:
        return MODE_PROFILES[self.mode]


def evaluate_mode(
    ledger: Sequence[TradeRecord] | None,
    current_balance: float | None = None,
    initial_balance: float = DEFAULT_INITIAL_BALANCE,
    *,
    month: str | None = None,
    thresholds: ModeThresholds | None = None,
) -> ModeDecision:
    """Classify the ledger and report the deciding inputs.

    Args:
        ledger: Committed trades, oldest first.  ``None`` means empty.
        current_balance: Balance to judge drawdown on.  Defaults to the
            latest ledger balance.
        initial_balance: Account starting balance; seeds the peak and is
            the denominator of the monthly loss percentage.
        month: Evaluation month ``YYYY-MM``.  Defaults to the current UTC
            month.
        thresholds: Rule cut-offs.  Defaults to :class:`ModeThresholds`.
    """
    records = as_records(ledger)
    cfg = thresholds or ModeThresholds()
    month = month or current_month()

    if not records:
        return ModeDecision(mode=TradingMode.NORMAL, rule=ModeRule.EMPTY_LEDGER, month=month)

    if current_balance is None:
        current_balance = latest_balance(records, initial_balance)

    dd = current_drawdown_pct(records, initial_balance, current_balance)
    m_pnl = month_pnl(records, month)
    m_pct = m_pnl / initial_balance * 100 if initial_balance > 0 else 0.0
    avg_r = rolling_avg_r(records, cfg.rolling_window)
    streak_flag = has_consecutive_losses(records, cfg.loss_streak_len)

    if dd >= cfg.stop_drawdown_pct:
        mode, rule = TradingMode.STOPPED, ModeRule.DRAWDOWN_STOP
    elif m_pct <= -cfg.defense_month_loss_pct:
        mode, rule = TradingMode.DEFENSE, ModeRule.MONTHLY_LOSS
    elif streak_flag:
        mode, rule = TradingMode.NORMAL, ModeRule.LOSS_STREAK
    elif avg_r > cfg.attack_min_avg_r and dd < cfg.attack_max_drawdown_pct:
        mode, rule = TradingMode.ATTACK, ModeRule.ATTACK
    else:
        mode, rule = TradingMode.NORMAL, ModeRule.DEFAULT

    decision = ModeDecision(
        mode=mode,
        rule=rule,
        drawdown_pct=dd,
        month=month,
        month_pnl=m_pnl,
        month_pnl_pct=m_pct,
        rolling_avg_r=avg_r,
        consecutive_losses=streak_flag,
    )
    if mode is TradingMode.STOPPED:
        logger.warning(
            "Forced stop: drawdown %.2f%% >= %.2f%% (balance=%.2f)",
            dd, cfg.stop_drawdown_pct, current_balance,
        )
    else:
        logger.debug(
            "Mode %s via %s (dd=%.2f%% month=%.2f%% avg_r=%.3f streak=%s)",
            mode.value, rule.value, dd, m_pct, avg_r, streak_flag,
        )
    return decision


def classify(
    ledger: Sequence[TradeRecord] | None,
    current_balance: float | None = None,
    initial_balance: float = DEFAULT_INITIAL_BALANCE,
    *,
    month: str | None = None,
    thresholds: ModeThresholds | None = None,
) -> TradingMode:
    """Current trading mode for the ledger.  See :func:`evaluate_mode`."""
    return evaluate_mode(
        ledger, current_balance, initial_balance, month=month, thresholds=thresholds,
    ).mode


# ================================================================== #
# Condition checklists                                                #
# ================================================================== #

@dataclass(frozen=True)
class ConditionCheck:
    """One row of a mode condition checklist.

    ``ok`` rows are satisfied attack conditions; ``danger`` rows are
    restrictions that are (nearly) in force.
    """

    label: str
    value: float
    ok: bool = False
    danger: bool = False


def attack_conditions(
    ledger: Sequence[TradeRecord] | None,
    initial_balance: float = DEFAULT_INITIAL_BALANCE,
    *,
    thresholds: ModeThresholds | None = None,
) -> list[ConditionCheck]:
    """What ATTACK mode requires, and whether each part currently holds."""
    cfg = thresholds or ModeThresholds()
    avg_r = rolling_avg_r(ledger, cfg.rolling_window)
    dd = current_drawdown_pct(ledger, initial_balance)
    streak = losing_streak(ledger)
    return [
        ConditionCheck(
            f"Last {cfg.rolling_window} trades avg R > {cfg.attack_min_avg_r:g}",
            avg_r,
            ok=avg_r > cfg.attack_min_avg_r,
        ),
        ConditionCheck(
            f"Drawdown < {cfg.attack_max_drawdown_pct:g}%",
            dd,
            ok=dd < cfg.attack_max_drawdown_pct,
        ),
        ConditionCheck(
            f"No {cfg.loss_streak_len}-loss streak",
            float(streak),
            ok=streak < cfg.loss_streak_len,
        ),
    ]


def restriction_status(
    ledger: Sequence[TradeRecord] | None,
    initial_balance: float = DEFAULT_INITIAL_BALANCE,
    *,
    month: str | None = None,
    thresholds: ModeThresholds | None = None,
) -> list[ConditionCheck]:
    """Status of the three restriction rules.

    The drawdown row turns to danger at the warning level, ahead of the
    actual stop.  The monthly row is evaluated for the given month.
    """
    cfg = thresholds or ModeThresholds()
    month = month or current_month()
    dd = current_drawdown_pct(ledger, initial_balance)
    streak = losing_streak(ledger)
    m_pct = (
        month_pnl(ledger, month) / initial_balance * 100 if initial_balance > 0 else 0.0
    )
    return [
        ConditionCheck(
            f"Drawdown -{cfg.stop_drawdown_pct:g}% forced stop",
            dd,
            danger=dd >= cfg.drawdown_warning_pct,
        ),
        ConditionCheck(
            f"{cfg.loss_streak_len} straight losses ban attack mode",
            float(streak),
            danger=streak >= cfg.loss_streak_len,
        ),
        ConditionCheck(
            f"Month -{cfg.defense_month_loss_pct:g}% locks defense mode",
            m_pct,
            danger=m_pct <= -cfg.defense_month_loss_pct,
        ),
    ]
