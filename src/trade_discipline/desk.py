"""TradeDesk: the one interface front ends consume.

Binds the pure scoring / statistics / mode functions to a
:class:`~trade_discipline.core.config.Settings` instance so every front end
uses the same initial balance and thresholds.  The desk holds no ledger:
each call receives the caller's ledger and recomputes from scratch.

Usage::

    desk = TradeDesk(settings)
    ledger = desk.store(local_storage).load()
    print(desk.dashboard(ledger).mode)
    record = desk.commit(ledger, TradeSetup(rr="2.5", result_r="+2"))
    ledger.append(record)
"""

from __future__ import annotations

import logging
from collections.abc import MutableMapping, Sequence
from dataclasses import dataclass, field

from .core.config import Settings
from .core.enums import TradingMode
from .core.ids import current_month
from .core.models import TradeRecord, TradeSetup
from .journal.stats import (
    PerformanceSnapshot,
    aggregate,
    equity_curve,
    latest_balance,
    profit_pct,
)
from .journal.storage import LedgerStore
from .risk.mode import (
    ConditionCheck,
    ModeDecision,
    ModeProfile,
    attack_conditions,
    evaluate_mode,
    recommended_risk_amount,
    restriction_status,
)
from .risk.pre_trade import TradePreview, commit, preview
from .risk.scoring import score_setup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Dashboard:
    """Everything the overview screen shows, derived from one ledger."""

    balance: float
    profit_pct: float
    decision: ModeDecision
    recommended_risk_amount: float
    snapshot: PerformanceSnapshot
    equity_curve: list[float] = field(default_factory=list)
    streak_warning: bool = False
    drawdown_warning: bool = False

    @property
    def mode(self) -> TradingMode:
        return self.decision.mode

    @property
    def profile(self) -> ModeProfile:
        return self.decision.profile

    @property
    def recommended_risk_pct(self) -> float:
        return self.decision.risk_pct

    @property
    def stopped(self) -> bool:
        return self.decision.mode is TradingMode.STOPPED


class TradeDesk:
    """Settings-bound facade over the discipline engine."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or Settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def initial_balance(self) -> float:
        return self._settings.initial_balance

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def store(self, backend: MutableMapping[str, str]) -> LedgerStore:
        return LedgerStore(backend, key=self._settings.storage_key)

    def new_setup(self, **fields: str) -> TradeSetup:
        """Blank form with the configured default pair."""
        fields.setdefault("pair", self._settings.default_pair)
        return TradeSetup(**fields)

    # ------------------------------------------------------------------
    # Core operations
    # ------------------------------------------------------------------

    def score(self, setup: TradeSetup) -> float:
        return score_setup(setup)

    def aggregate(self, ledger: Sequence[TradeRecord] | None) -> PerformanceSnapshot:
        return aggregate(ledger, self.initial_balance)

    def evaluate(
        self,
        ledger: Sequence[TradeRecord] | None,
        *,
        month: str | None = None,
    ) -> ModeDecision:
        return evaluate_mode(
            ledger,
            None,
            self.initial_balance,
            month=month,
            thresholds=self._settings.thresholds,
        )

    def classify(
        self,
        ledger: Sequence[TradeRecord] | None,
        *,
        month: str | None = None,
    ) -> TradingMode:
        return self.evaluate(ledger, month=month).mode

    def preview(
        self, ledger: Sequence[TradeRecord] | None, setup: TradeSetup
    ) -> TradePreview | None:
        return preview(ledger, setup, self.initial_balance)

    def commit(
        self,
        ledger: Sequence[TradeRecord] | None,
        setup: TradeSetup,
        *,
        month: str | None = None,
    ) -> TradeRecord:
        return commit(
            ledger,
            setup,
            self.initial_balance,
            month=month,
            thresholds=self._settings.thresholds,
        )

    # ------------------------------------------------------------------
    # Screens
    # ------------------------------------------------------------------

    def dashboard(
        self,
        ledger: Sequence[TradeRecord] | None,
        *,
        month: str | None = None,
    ) -> Dashboard:
        month = month or current_month()
        balance = latest_balance(ledger, self.initial_balance)
        decision = self.evaluate(ledger, month=month)
        snapshot = self.aggregate(ledger)
        cfg = self._settings.thresholds
        return Dashboard(
            balance=balance,
            profit_pct=profit_pct(balance, self.initial_balance),
            decision=decision,
            recommended_risk_amount=recommended_risk_amount(decision.mode, balance),
            snapshot=snapshot,
            equity_curve=equity_curve(ledger, self.initial_balance),
            streak_warning=snapshot.losing_streak >= cfg.loss_streak_len,
            drawdown_warning=snapshot.current_drawdown_pct >= cfg.attack_max_drawdown_pct,
        )

    def attack_conditions(self, ledger: Sequence[TradeRecord] | None) -> list[ConditionCheck]:
        return attack_conditions(
            ledger, self.initial_balance, thresholds=self._settings.thresholds
        )

    def restriction_status(
        self,
        ledger: Sequence[TradeRecord] | None,
        *,
        month: str | None = None,
    ) -> list[ConditionCheck]:
        return restriction_status(
            ledger,
            self.initial_balance,
            month=month,
            thresholds=self._settings.thresholds,
        )
