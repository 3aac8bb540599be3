"""Data models: candles, indicator points, zones, signals and config."""

from signal_engine.models.candle import Candle
from signal_engine.models.config import AnalysisConfig
from signal_engine.models.converters import (
    candle_from_mapping,
    candle_from_row,
    candles_from_payload,
)
from signal_engine.models.indicator import (
    EmaPoint,
    IndicatorSet,
    MacdPoint,
    VwapPoint,
)
from signal_engine.models.signal import (
    BounceSignal,
    Direction,
    Exchange,
    Signal,
    StrategyName,
    Timeframe,
    TradingSignal,
    TradingType,
    ZoneSignal,
)
from signal_engine.models.zone import Zone, ZonePattern, ZoneStrength, ZoneType

__all__ = [
    "Candle",
    "AnalysisConfig",
    "candle_from_mapping",
    "candle_from_row",
    "candles_from_payload",
    "EmaPoint",
    "IndicatorSet",
    "MacdPoint",
    "VwapPoint",
    "BounceSignal",
    "Direction",
    "Exchange",
    "Signal",
    "StrategyName",
    "Timeframe",
    "TradingSignal",
    "TradingType",
    "ZoneSignal",
    "Zone",
    "ZonePattern",
    "ZoneStrength",
    "ZoneType",
]
