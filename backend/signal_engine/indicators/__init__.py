"""Technical indicators (pure math, no I/O)."""

from signal_engine.indicators.indicators import (
    ema,
    vwap,
    macd,
    typical_price,
    IndicatorCalculator,
)

__all__ = [
    "ema",
    "vwap",
    "macd",
    "typical_price",
    "IndicatorCalculator",
]
