"""Ledger (de)serialisation against a caller-owned key/value blob.

The engine does not own a storage medium.  Front ends hand in any
``MutableMapping[str, str]`` (browser local storage bridge, a dict backed by
a file, a cache client wrapper ...) and :class:`LedgerStore` reads and writes
the JSON-encoded ledger under a single key.

Loading is forgiving: a missing key, an undecodable blob or a non-list
payload all load as an empty ledger, and individual entries that fail
validation are skipped.  Each recovery is logged at WARNING.

Usage::

    store = LedgerStore(local_storage, key="fx_trades")
    ledger = store.load()
    ledger.append(record)
    store.save(ledger)
"""

from __future__ import annotations

import json
import logging
from collections.abc import MutableMapping, Sequence
from typing import Any

from pydantic import ValidationError

from trade_discipline.core.models import TradeRecord

from .ledger import Ledger, as_records

logger = logging.getLogger(__name__)

DEFAULT_KEY = "fx_trades"


def ledger_to_json(ledger: Sequence[TradeRecord] | None) -> str:
    """Encode records as a JSON array, oldest first."""
    return json.dumps([r.to_dict() for r in as_records(ledger)], ensure_ascii=False)


def ledger_from_entries(entries: Sequence[Any]) -> Ledger:
    """Build a ledger from decoded record mappings, skipping bad entries."""
    ledger = Ledger()
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            logger.warning("Skipping ledger entry %d: not an object", i)
            continue
        try:
            record = TradeRecord.model_validate(entry)
        except ValidationError as exc:
            logger.warning("Skipping ledger entry %d: %s", i, exc.errors()[0]["msg"])
            continue
        if ledger.get(record.trade_id) is not None:
            logger.warning("Skipping ledger entry %d: duplicate id %s", i, record.trade_id)
            continue
        ledger.append(record)
    return ledger


def ledger_from_json(blob: str | bytes | None) -> Ledger:
    """Decode a JSON blob into a ledger.  Unusable input -> empty ledger."""
    if not blob:
        return Ledger()
    try:
        payload = json.loads(blob)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Discarding undecodable ledger blob: %s", exc)
        return Ledger()
    if not isinstance(payload, list):
        logger.warning("Discarding ledger blob of type %s", type(payload).__name__)
        return Ledger()
    return ledger_from_entries(payload)


class LedgerStore:
    """Reads and writes one ledger under one key of a key/value mapping.

    Parameters
    ----------
    backend : MutableMapping[str, str]
        Caller-owned storage.  Only ``key`` is touched.
    key : str
        Storage key.  Default ``"fx_trades"``.
    """

    def __init__(self, backend: MutableMapping[str, str], *, key: str = DEFAULT_KEY) -> None:
        self._backend = backend
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> Ledger:
        ledger = ledger_from_json(self._backend.get(self._key))
        logger.debug("Loaded %d trades from %r", len(ledger), self._key)
        return ledger

    def save(self, ledger: Sequence[TradeRecord]) -> None:
        self._backend[self._key] = ledger_to_json(ledger)
        logger.debug("Saved %d trades to %r", len(ledger), self._key)
