"""Tests for ledger (de)serialisation and the key/value store adapter."""

import json
import logging

import pytest

from trade_discipline.journal.ledger import Ledger
from trade_discipline.journal.storage import (
    LedgerStore,
    ledger_from_json,
    ledger_to_json,
)

# As written by the older browser front end
LEGACY_BLOB = json.dumps(
    [
        {
            "date": "2024-03-04", "pair": "USD/JPY", "dailyDir": "UP", "h4Dir": "UP",
            "h1Push": "", "m15Push": "", "breakQuality": "A", "spacePips": "55",
            "timeScore": "18", "riskPct": 2, "rr": "2.5", "resultR": "2",
            "id": 1709510400000, "score": 98, "pnl": 4000, "balance": 104000, "win": True,
        },
        {
            "date": "2024-03-05", "pair": "EUR/USD", "dailyDir": "DOWN", "h4Dir": "UP",
            "breakQuality": "C", "spacePips": "", "timeScore": "", "riskPct": "2",
            "rr": "2", "resultR": "-1",
            "id": 1709596800000, "score": 40, "pnl": -2080, "balance": 101920, "win": False,
        },
    ]
)


class TestLedgerJson:
    def test_round_trip(self, build_ledger):
        ledger = build_ledger([1, -1, 2])
        restored = ledger_from_json(ledger_to_json(ledger))
        assert restored.records() == ledger.records()

    def test_legacy_blob(self):
        ledger = ledger_from_json(LEGACY_BLOB)
        assert len(ledger) == 2
        first, second = ledger
        assert first.trade_id == "1709510400000"
        assert first.daily_dir == "UP"
        assert first.risk_pct == "2"
        assert first.balance == 104_000.0
        assert second.r == -1.0
        assert second.win is False

    @pytest.mark.parametrize("blob", [None, "", b""])
    def test_missing_blob_is_empty(self, blob):
        assert len(ledger_from_json(blob)) == 0

    def test_undecodable_blob(self, caplog):
        with caplog.at_level(logging.WARNING, logger="trade_discipline.journal.storage"):
            ledger = ledger_from_json("{not json")
        assert len(ledger) == 0
        assert "undecodable" in caplog.text

    def test_non_list_payload(self):
        assert len(ledger_from_json('{"id": 1}')) == 0

    def test_bad_entries_skipped(self, caplog):
        blob = json.dumps(
            [
                "junk",
                {"resultR": "1"},  # no id
                {"id": "ok", "resultR": "1", "balance": 101000, "pnl": 1000},
                {"id": "ok", "resultR": "2"},  # duplicate id
            ]
        )
        with caplog.at_level(logging.WARNING, logger="trade_discipline.journal.storage"):
            ledger = ledger_from_json(blob)
        assert [r.trade_id for r in ledger] == ["ok"]
        assert caplog.text.count("Skipping ledger entry") == 3

    def test_to_json_is_a_list(self):
        assert json.loads(ledger_to_json(None)) == []


class TestLedgerStore:
    def test_load_missing_key(self):
        store = LedgerStore({})
        assert isinstance(store.load(), Ledger)
        assert len(store.load()) == 0

    def test_save_then_load(self, build_ledger):
        backend: dict[str, str] = {}
        store = LedgerStore(backend, key="journal")
        ledger = build_ledger([1, -1])
        store.save(ledger)
        assert set(backend) == {"journal"}
        assert [r.trade_id for r in store.load()] == [r.trade_id for r in ledger]

    def test_default_key(self):
        backend = {"fx_trades": LEGACY_BLOB, "other": "untouched"}
        store = LedgerStore(backend)
        assert store.key == "fx_trades"
        ledger = store.load()
        ledger.clear()
        store.save(ledger)
        assert backend["fx_trades"] == "[]"
        assert backend["other"] == "untouched"
