"""Configuration management.

Loads from TOML config files + environment variables.
Uses pydantic-settings for validation and env var overriding.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings

DEFAULT_INITIAL_BALANCE = 100_000.0


# ---------------------------------------------------------------------------
# Sub-configs
# ---------------------------------------------------------------------------

class ModeThresholds(BaseModel):
    """Cut-offs used by the mode classifier.  Percentages are whole numbers."""

    stop_drawdown_pct: float = 10.0  # drawdown >= this -> STOPPED
    defense_month_loss_pct: float = 5.0  # month loss >= this -> DEFENSE
    attack_min_avg_r: float = 0.5  # rolling avg R must exceed this
    attack_max_drawdown_pct: float = 5.0  # drawdown must stay below this
    rolling_window: int = Field(default=10, ge=1)
    loss_streak_len: int = Field(default=3, ge=1)
    drawdown_warning_pct: float = 8.0  # checklist turns red before the stop


class ObservabilityConfig(BaseModel):
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"


# ---------------------------------------------------------------------------
# Top-level settings
# ---------------------------------------------------------------------------

class Settings(BaseSettings):
    """Top-level application settings.

    Loaded from TOML config files, overridden by environment variables.
    """

    initial_balance: float = Field(default=DEFAULT_INITIAL_BALANCE, gt=0)
    storage_key: str = "fx_trades"
    default_pair: str = "USD/JPY"

    thresholds: ModeThresholds = Field(default_factory=ModeThresholds)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    model_config = {"env_prefix": "DISCIPLINE_", "env_nested_delimiter": "__"}


def load_settings(
    config_path: str | Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Settings:
    """Load settings from TOML file + env vars.

    Args:
        config_path: Path to TOML config file (optional).
        overrides: Dict of overrides to apply on top.

    Raises:
        ConfigError: If the file cannot be parsed or a value fails
            validation.
    """
    from .errors import ConfigError

    data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if path.exists():
            import tomli

            try:
                with open(path, "rb") as f:
                    data = tomli.load(f)
            except tomli.TOMLDecodeError as exc:
                raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc

    if overrides:
        data.update(overrides)

    try:
        return Settings(**data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
