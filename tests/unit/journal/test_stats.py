"""Tests for ledger performance statistics."""

import pytest

from trade_discipline.core.models import TradeRecord
from trade_discipline.journal.ledger import Ledger
from trade_discipline.journal.stats import (
    PerformanceSnapshot,
    aggregate,
    current_drawdown_pct,
    drawdown_pct,
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

INITIAL = 100_000.0


class TestAggregate:
    def test_empty_ledger_is_all_zero(self):
        snapshot = aggregate([], INITIAL)
        assert snapshot == PerformanceSnapshot()
        assert snapshot.win_rate == 0.0
        assert snapshot.expectancy == 0.0
        assert snapshot.losing_streak == 0
        assert snapshot.trade_count == 0

    def test_missing_ledger_is_all_zero(self):
        assert aggregate(None) == PerformanceSnapshot()

    def test_mixed_ledger(self, build_ledger):
        # balances: 102k, 101k, 101k, 102k, 101k
        ledger = build_ledger([2, -1, 0, 1, -1])
        s = aggregate(ledger, INITIAL)
        assert s.trade_count == 5
        assert s.wins == 2
        assert s.losses == 2  # the 0R trade is neither
        assert s.win_rate == pytest.approx(0.4)
        assert s.avg_win_r == pytest.approx(1.5)
        assert s.expectancy == pytest.approx(0.0, abs=1e-9)
        assert s.total_r == pytest.approx(1.0)
        assert s.max_drawdown_pct == pytest.approx(1_000 / 102_000 * 100)
        assert s.current_drawdown_pct == pytest.approx(1_000 / 102_000 * 100)
        assert s.losing_streak == 1

    def test_expectancy_treats_losses_as_one_r(self, build_ledger):
        # one 3R win, one -5R loss: 0.5 * 3 - 0.5 * 1
        s = aggregate(build_ledger([3, -5]), INITIAL)
        assert s.expectancy == pytest.approx(1.0)

    def test_no_wins(self, build_ledger):
        s = aggregate(build_ledger([-1, -1]), INITIAL)
        assert s.avg_win_r == 0.0
        assert s.expectancy == pytest.approx(-1.0)

    def test_garbage_result_counts_as_zero(self):
        ledger = [
            TradeRecord(trade_id="a", result_r="???", balance=100_000.0),
            TradeRecord(trade_id="b", result_r="2", balance=102_000.0, pnl=2_000.0),
        ]
        s = aggregate(ledger, INITIAL)
        assert s.wins == 1
        assert s.losses == 0
        assert s.total_r == 2.0

    def test_idempotent(self, build_ledger):
        ledger = build_ledger([1, -2, 3, -1])
        assert aggregate(ledger, INITIAL) == aggregate(ledger, INITIAL)

    def test_to_dict(self, build_ledger):
        data = aggregate(build_ledger([1]), INITIAL).to_dict()
        assert data["wins"] == 1
        assert set(data) >= {"win_rate", "expectancy", "max_drawdown_pct", "losing_streak"}


class TestDrawdown:
    def test_drawdown_pct(self):
        assert drawdown_pct(100_000.0, 90_000.0) == pytest.approx(10.0)
        assert drawdown_pct(0.0, -5.0) == 0.0

    def test_peak_seeded_at_initial(self, build_ledger):
        ledger = build_ledger([-2, 1])
        assert peak_balance(ledger, INITIAL) == INITIAL
        assert current_drawdown_pct(ledger, INITIAL) == pytest.approx(1.0)

    def test_max_drawdown_keeps_worst(self, build_ledger):
        # 98k, 101k, 100k
        ledger = build_ledger([-2, 3, -1])
        assert max_drawdown_pct(ledger, INITIAL) == pytest.approx(2.0)
        assert current_drawdown_pct(ledger, INITIAL) == pytest.approx(1_000 / 101_000 * 100)

    def test_max_drawdown_non_decreasing_over_prefixes(self, build_ledger):
        ledger = build_ledger([1, -3, 2, -1, 4, -6, 1])
        values = [max_drawdown_pct(ledger[:n], INITIAL) for n in range(len(ledger) + 1)]
        assert values == sorted(values)

    def test_current_drawdown_empty(self):
        assert current_drawdown_pct([], INITIAL) == 0.0

    def test_current_drawdown_with_explicit_balance(self, build_ledger):
        ledger = build_ledger([5])
        assert current_drawdown_pct(ledger, INITIAL, 94_500.0) == pytest.approx(10.0)

    def test_malformed_balance_coerces_to_zero(self):
        ledger = [TradeRecord.model_validate({"id": "x", "balance": "n/a", "resultR": "-1"})]
        assert latest_balance(ledger, INITIAL) == 0.0
        assert current_drawdown_pct(ledger, INITIAL) == pytest.approx(100.0)


class TestStreaks:
    def test_trailing_losses(self, build_ledger):
        assert losing_streak(build_ledger([1, -1, -1, -1])) == 3

    def test_streak_stops_at_breakeven(self, build_ledger):
        assert losing_streak(build_ledger([-1, 0, -1])) == 1

    def test_streak_zero_after_win(self, build_ledger):
        assert losing_streak(build_ledger([-1, -1, 2])) == 0

    def test_consecutive_losses_flag(self, build_ledger):
        assert has_consecutive_losses(build_ledger([2, -1, -1, -1]))
        assert not has_consecutive_losses(build_ledger([-1, -1]))
        assert not has_consecutive_losses(build_ledger([-1, 0, -1]))


class TestRollingAndMonthly:
    def test_rolling_avg_window(self, build_ledger):
        ledger = build_ledger([-10] + [1] * 10, risk_amount=10.0)
        assert rolling_avg_r(ledger, 10) == pytest.approx(1.0)
        assert rolling_avg_r(ledger, 11) == pytest.approx(0.0)

    def test_rolling_avg_short_ledger(self, build_ledger):
        assert rolling_avg_r(build_ledger([1, 2]), 10) == pytest.approx(1.5)
        assert rolling_avg_r([], 10) == 0.0

    def test_month_pnl_prefix(self, build_ledger):
        ledger = build_ledger(
            [1, -2, 3], dates=["2024-02-29", "2024-03-01", "2024-03-31"]
        )
        assert month_pnl(ledger, "2024-03") == pytest.approx(1_000.0)
        assert month_pnl(ledger, "2024-02") == pytest.approx(1_000.0)
        assert month_pnl(ledger, "2023-12") == 0.0

    def test_month_pnl_skips_blank_and_short_dates(self, build_ledger):
        ledger = build_ledger([1, 2, 4], dates=["", "2024", "2024-03-31"])
        assert month_pnl(ledger, "2024-03") == pytest.approx(4_000.0)


class TestCurve:
    def test_equity_curve(self, build_ledger):
        assert equity_curve(build_ledger([1, -1]), INITIAL) == [100_000.0, 101_000.0, 100_000.0]
        assert equity_curve(Ledger(), INITIAL) == [INITIAL]

    def test_profit_pct(self):
        assert profit_pct(110_000.0, INITIAL) == pytest.approx(10.0)
        assert profit_pct(95_000.0, INITIAL) == pytest.approx(-5.0)
        assert profit_pct(1.0, 0.0) == 0.0
