"""Risk gate: setup scoring, mode classification and trade commit."""

from .mode import (
    MODE_PROFILES,
    ConditionCheck,
    ModeDecision,
    ModeProfile,
    attack_conditions,
    classify,
    evaluate_mode,
    profile_for,
    recommended_risk_amount,
    restriction_status,
)
from .pre_trade import TradePreview, commit, preview
from .scoring import score_band, score_setup

__all__ = [
    "MODE_PROFILES",
    "ConditionCheck",
    "ModeDecision",
    "ModeProfile",
    "attack_conditions",
    "classify",
    "evaluate_mode",
    "profile_for",
    "recommended_risk_amount",
    "restriction_status",
    "TradePreview",
    "commit",
    "preview",
    "score_band",
    "score_setup",
]
