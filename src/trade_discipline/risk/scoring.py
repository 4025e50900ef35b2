"""Setup quality scoring.

Four independent, additive criteria::

    Criterion            Points
    ─────────────────────────────────────────────
    Daily == 4h direction   30
    Breakout grade          A 30 / B 20 / C 10
    Space (pips)            >= 50: 20, >= 30: 10
    Time-of-day score       raw value, capped at 20

A setup meeting every criterion scores exactly 100.  The time score has
no floor, so a negative entry lowers the total; the sum is not clamped.
"""

from __future__ import annotations

from trade_discipline.core.enums import ScoreBand
from trade_discipline.core.models import TradeSetup

ALIGNMENT_POINTS = 30.0

_BREAK_POINTS: dict[str, float] = {"A": 30.0, "B": 20.0, "C": 10.0}

# (minimum space, points), highest first
_SPACE_TIERS: list[tuple[float, float]] = [(50.0, 20.0), (30.0, 10.0)]

TIME_SCORE_CAP = 20.0

_BAND_THRESHOLDS: list[tuple[float, ScoreBand]] = [
    (70.0, ScoreBand.STRONG),
    (50.0, ScoreBand.FAIR),
]


def alignment_points(setup: TradeSetup) -> float:
    return ALIGNMENT_POINTS if setup.daily_dir == setup.h4_dir else 0.0


def break_points(setup: TradeSetup) -> float:
    return _BREAK_POINTS.get(setup.break_quality, 0.0)


def space_points(setup: TradeSetup) -> float:
    space = setup.space_value
    for minimum, points in _SPACE_TIERS:
        if space >= minimum:
            return points
    return 0.0


def time_points(setup: TradeSetup) -> float:
    return min(setup.time_value, TIME_SCORE_CAP)


def score_setup(setup: TradeSetup) -> float:
    """Quality score of a setup, nominally 0-100.  Never raises.

    Returned as a float rather than an int: the time score is free text and
    a fractional entry (``"7.5"``) is kept as is, not truncated.  Whole-number
    inputs always give a whole-number score.
    """
    return (
        alignment_points(setup)
        + break_points(setup)
        + space_points(setup)
        + time_points(setup)
    )


def score_band(score: float) -> ScoreBand:
    """Bucket a score for display."""
    for threshold, band in _BAND_THRESHOLDS:
        if score >= threshold:
            return band
    return ScoreBand.WEAK
