"""Engine configuration.

Two layers:
- EngineSettings: defaults from environment variables / ``.env``
  (prefix ``SIGNAL_ENGINE_``)
- analysis.yaml: optional per-deployment overrides on top of the settings

Backward compatible: no YAML file and no environment = AnalysisConfig defaults.
"""

import logging
from decimal import Decimal
from functools import lru_cache
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

from signal_engine.models import AnalysisConfig, StrategyName

logger = logging.getLogger(__name__)


class EngineSettings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SIGNAL_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # EMA stack
    ema_fast_period: int = 9
    ema_medium_period: int = 20
    ema_slow_period: int = 200

    # MACD
    macd_fast_period: int = 12
    macd_slow_period: int = 26
    macd_signal_period: int = 9

    # EMA bounce
    bounce_tolerance_pct: Decimal = Decimal("0.05")
    max_wait_bars: int = 30  # 0 = unlimited

    # Supply/demand
    min_zone_candles: int = 10
    max_zones: int = 20
    zone_signal_lookback: int = 50

    strategies: list[StrategyName] = [
        StrategyName.EMA_BOUNCE,
        StrategyName.SUPPLY_DEMAND,
    ]

    # Logging (CLI only)
    log_level: str = "INFO"

    def to_analysis_config(self) -> AnalysisConfig:
        """Build the per-call AnalysisConfig from these settings."""
        return AnalysisConfig(
            **self.model_dump(include=set(AnalysisConfig.model_fields))
        )


@lru_cache
def get_settings() -> EngineSettings:
    """Get cached settings instance."""
    return EngineSettings()


_DEFAULT_PATH = Path(__file__).parent.parent / "analysis.yaml"


def load_analysis_config(path: Path | None = None) -> AnalysisConfig:
    """Load analysis config from a YAML file layered over the environment.

    Falls back to environment/default settings if the file doesn't exist.

    Raises:
        ValueError: If the file contains invalid parameters.
    """
    config_path = path or _DEFAULT_PATH

    # Load .env next to the config so EngineSettings sees it
    env_path = config_path.parent / ".env"
    load_dotenv(env_path, override=False)

    base = EngineSettings().model_dump(include=set(AnalysisConfig.model_fields))

    if not config_path.exists():
        logger.info(
            "No analysis.yaml found at %s, using environment/default settings",
            config_path,
        )
        return AnalysisConfig(**base)

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"{config_path} must contain a mapping, got {type(raw).__name__}")

    unknown = set(raw) - set(AnalysisConfig.model_fields)
    if unknown:
        raise ValueError(
            f"Unknown analysis parameters in {config_path}: {', '.join(sorted(unknown))}"
        )

    config = AnalysisConfig(**{**base, **raw})
    logger.info(
        "Loaded analysis config: ema=%d/%d/%d macd=%d/%d/%d tolerance=%s%% max_wait=%d strategies=%s",
        config.ema_fast_period,
        config.ema_medium_period,
        config.ema_slow_period,
        config.macd_fast_period,
        config.macd_slow_period,
        config.macd_signal_period,
        config.bounce_tolerance_pct,
        config.max_wait_bars,
        ",".join(s.value for s in config.strategies),
    )
    return config
