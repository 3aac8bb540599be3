"""Analysis configuration models."""

from __future__ import annotations

from decimal import Decimal
from pydantic import BaseModel, Field, model_validator

from signal_engine.models.signal import StrategyName


class AnalysisConfig(BaseModel):
    """Parameters for one analysis run.

    Everything is pass-through: nothing here is persisted between calls.
    """

    # EMA stack periods
    ema_fast_period: int = Field(default=9, gt=0)
    ema_medium_period: int = Field(default=20, gt=0)
    ema_slow_period: int = Field(default=200, gt=0)

    # MACD periods
    macd_fast_period: int = Field(default=12, gt=0)
    macd_slow_period: int = Field(default=26, gt=0)
    macd_signal_period: int = Field(default=9, gt=0)

    # How far above the fast EMA a low may sit and still count as a touch (percent)
    bounce_tolerance_pct: Decimal = Decimal("0.05")

    # Bars to wait for the pullback after a cross-up (0 = wait forever)
    max_wait_bars: int = 30

    # Supply/demand zones
    min_zone_candles: int = Field(default=10, gt=0)
    max_zones: int = Field(default=20, gt=0)
    zone_signal_lookback: int = Field(default=50, gt=0)

    strategies: list[StrategyName] = [
        StrategyName.EMA_BOUNCE,
        StrategyName.SUPPLY_DEMAND,
    ]

    @model_validator(mode="after")
    def _validate(self):
        if self.bounce_tolerance_pct < 0:
            raise ValueError(
                f"bounce_tolerance_pct must be >= 0, got {self.bounce_tolerance_pct}"
            )
        if self.max_wait_bars < 0:
            raise ValueError(
                f"max_wait_bars must be >= 0 (0 = unlimited), got {self.max_wait_bars}"
            )
        return self
