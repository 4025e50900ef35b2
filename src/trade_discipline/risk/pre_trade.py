"""Pre-trade gate: preview and commit of a trade setup.

:func:`commit` is the only way to create a
:class:`~trade_discipline.core.models.TradeRecord`.  It never touches the
ledger it is given; the caller appends the returned record.  A refused
commit raises a :class:`~trade_discipline.core.errors.CommitBlocked`
subclass and the caller's ledger stays as it was:

* :class:`~trade_discipline.core.errors.ModeBlocked` -- mode is STOPPED
  (checked first);
* :class:`~trade_discipline.core.errors.MissingRequiredField` -- result-R
  or reward ratio left blank.

P&L sizing::

    risk_amount = previous_balance * risk_pct / 100
    pnl         = result_r * risk_amount
    balance     = previous_balance + pnl
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from trade_discipline.core.config import DEFAULT_INITIAL_BALANCE, ModeThresholds
from trade_discipline.core.enums import ScoreBand, TradingMode
from trade_discipline.core.errors import MissingRequiredField, ModeBlocked
from trade_discipline.core.ids import new_id, today_iso
from trade_discipline.core.models import TradeRecord, TradeSetup
from trade_discipline.journal.stats import latest_balance

from .mode import classify
from .scoring import score_band, score_setup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TradePreview:
    """What committing a setup would produce, against the current balance."""

    score: float
    band: ScoreBand
    risk_amount: float
    pnl: float
    new_balance: float


def _size(balance: float, setup: TradeSetup) -> tuple[float, float]:
    risk_amount = balance * (setup.risk_value / 100)
    return risk_amount, setup.result_value * risk_amount


def preview(
    ledger: Sequence[TradeRecord] | None,
    setup: TradeSetup,
    initial_balance: float = DEFAULT_INITIAL_BALANCE,
) -> TradePreview | None:
    """Preview a commit.  ``None`` while mandatory fields are blank.

    Does not consult the mode; a STOPPED ledger still previews.
    """
    if not setup.is_complete:
        return None
    balance = latest_balance(ledger, initial_balance)
    risk_amount, pnl = _size(balance, setup)
    score = score_setup(setup)
    return TradePreview(
        score=score,
        band=score_band(score),
        risk_amount=risk_amount,
        pnl=pnl,
        new_balance=balance + pnl,
    )


def commit(
    ledger: Sequence[TradeRecord] | None,
    setup: TradeSetup,
    initial_balance: float = DEFAULT_INITIAL_BALANCE,
    *,
    month: str | None = None,
    thresholds: ModeThresholds | None = None,
) -> TradeRecord:
    """Finalize *setup* into a new record for the caller to append.

    Args:
        ledger: Current trades, oldest first.
        setup: The submitted form.
        initial_balance: Account starting balance.
        month: Evaluation month for the mode check (default: current).
        thresholds: Mode rule cut-offs.

    Returns:
        The new immutable :class:`TradeRecord`.

    Raises:
        ModeBlocked: If the current mode is STOPPED.
        MissingRequiredField: If result-R or reward ratio is blank.
    """
    mode = classify(ledger, None, initial_balance, month=month, thresholds=thresholds)
    if mode is TradingMode.STOPPED:
        logger.warning("Commit refused: trading is stopped")
        raise ModeBlocked(mode)

    missing = setup.missing_fields
    if missing:
        logger.warning("Commit refused: missing %s", ", ".join(missing))
        raise MissingRequiredField(missing)

    previous = latest_balance(ledger, initial_balance)
    _, pnl = _size(previous, setup)
    fields = setup.model_dump()
    if not fields["date"].strip():
        fields["date"] = today_iso()

    record = TradeRecord(
        **fields,
        trade_id=new_id(),
        score=score_setup(setup),
        pnl=pnl,
        balance=previous + pnl,
        win=setup.result_value > 0,
    )
    logger.info(
        "Committed trade %s %s: R=%.2f pnl=%.2f balance=%.2f score=%g",
        record.trade_id, record.pair, record.r, record.pnl, record.balance, record.score,
    )
    return record
