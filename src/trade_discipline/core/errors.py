"""Custom exception hierarchy for the discipline engine."""

from __future__ import annotations

from .enums import BlockReason, TradingMode


class DisciplineError(Exception):
    """Base exception for all discipline engine errors."""


# --- Configuration ---
class ConfigError(DisciplineError):
    """Invalid or missing configuration."""


# --- Ledger ---
class LedgerError(DisciplineError):
    """Ledger manipulation error."""


class TradeNotFound(LedgerError):
    """No record with the requested trade id."""

    def __init__(self, trade_id: str):
        self.trade_id = trade_id
        super().__init__(f"No trade with id {trade_id!r} in ledger")


# --- Commit ---
class CommitBlocked(DisciplineError):
    """A trade commit was refused; the ledger is left unchanged."""

    reason: BlockReason

    def __init__(self, reason: BlockReason, message: str):
        self.reason = reason
        super().__init__(message)


class MissingRequiredField(CommitBlocked):
    """Result-R or reward ratio is blank."""

    def __init__(self, fields: tuple[str, ...]):
        self.fields = fields
        super().__init__(
            BlockReason.MISSING_REQUIRED_FIELD,
            f"Required fields missing: {', '.join(fields)}",
        )


class ModeBlocked(CommitBlocked):
    """Current mode forbids new trades (forced stop)."""

    def __init__(self, mode: TradingMode):
        self.mode = mode
        super().__init__(
            BlockReason.MODE_BLOCKED,
            f"Trading blocked: mode is {mode.value}",
        )
