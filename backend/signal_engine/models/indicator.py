"""Indicator series point models."""

from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field


class EmaPoint(BaseModel):
    """Fast/medium/slow EMA values at one candle close."""

    model_config = ConfigDict(frozen=True)

    timestamp: int
    fast: Decimal
    medium: Decimal
    slow: Decimal


class VwapPoint(BaseModel):
    """Cumulative VWAP at one candle close.

    ``volume`` is the volume of that candle alone, not the running total.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int
    vwap: Decimal
    volume: Decimal


class MacdPoint(BaseModel):
    """MACD oscillator, its signal line and the histogram."""

    model_config = ConfigDict(frozen=True)

    timestamp: int
    macd: Decimal
    signal: Decimal
    histogram: Decimal


class IndicatorSet(BaseModel):
    """All indicator series derived from one candle window.

    Every series is aligned to the END of the candle window: the last
    point of each series belongs to the last candle.
    """

    model_config = ConfigDict(frozen=True)

    ema: list[EmaPoint] = Field(default_factory=list)
    vwap: list[VwapPoint] = Field(default_factory=list)
    macd: list[MacdPoint] = Field(default_factory=list)
