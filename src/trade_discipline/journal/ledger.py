"""Trade ledger: the ordered, caller-owned list of committed trades.

Insertion order is chronological order.  The ledger only grows by
:meth:`Ledger.append` and shrinks by :meth:`Ledger.delete` /
:meth:`Ledger.clear`; records are never reordered or edited in place.

Deleting a record does not touch any other record: stored balances and
scores stay as they were computed at commit time.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from typing import overload

from trade_discipline.core.errors import LedgerError, TradeNotFound
from trade_discipline.core.models import TradeRecord

logger = logging.getLogger(__name__)


class Ledger(Sequence[TradeRecord]):
    """Append-and-delete list of :class:`TradeRecord`.

    Usage::

        ledger = Ledger()
        record = commit(ledger, setup, initial_balance=100_000)
        ledger.append(record)
        snapshot = aggregate(ledger, initial_balance=100_000)
    """

    def __init__(self, records: Iterable[TradeRecord] | None = None) -> None:
        self._records: list[TradeRecord] = []
        for record in records or ():
            self.append(record)

    # ------------------------------------------------------------------ #
    # Sequence protocol                                                    #
    # ------------------------------------------------------------------ #

    @overload
    def __getitem__(self, index: int) -> TradeRecord: ...

    @overload
    def __getitem__(self, index: slice) -> list[TradeRecord]: ...

    def __getitem__(self, index):
        return self._records[index]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[TradeRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"Ledger({len(self._records)} trades)"

    # ------------------------------------------------------------------ #
    # Mutation                                                             #
    # ------------------------------------------------------------------ #

    def append(self, record: TradeRecord) -> None:
        """Append a committed record.  Ids must be unique."""
        if any(r.trade_id == record.trade_id for r in self._records):
            raise LedgerError(f"Duplicate trade id {record.trade_id!r}")
        self._records.append(record)

    def delete(self, trade_id: str) -> TradeRecord:
        """Remove exactly one record by id and return it.

        Raises:
            TradeNotFound: If no record has *trade_id*.
        """
        for i, record in enumerate(self._records):
            if record.trade_id == trade_id:
                del self._records[i]
                logger.info("Deleted trade %s (%d remaining)", trade_id, len(self._records))
                return record
        raise TradeNotFound(trade_id)

    def clear(self) -> None:
        """Remove every record."""
        count = len(self._records)
        self._records.clear()
        logger.info("Cleared ledger (%d trades removed)", count)

    # ------------------------------------------------------------------ #
    # Queries                                                              #
    # ------------------------------------------------------------------ #

    def get(self, trade_id: str) -> TradeRecord | None:
        for record in self._records:
            if record.trade_id == trade_id:
                return record
        return None

    def records(self) -> list[TradeRecord]:
        """Shallow copy of the records, oldest first."""
        return list(self._records)


def as_records(ledger: Sequence[TradeRecord] | None) -> Sequence[TradeRecord]:
    """Normalise a missing ledger to an empty one."""
    return ledger if ledger is not None else ()
