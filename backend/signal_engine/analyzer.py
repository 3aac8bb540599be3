"""Technical analysis entry point.

Runs the indicator calculator and zone detector once, hands the results to
every enabled signal detector and merges their output into one
chronological list of TradingSignal records.

This module is pure business logic with no I/O dependencies. Each call is
independent, so separate symbols/timeframes can be analysed in parallel.
"""

import logging
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field

from signal_engine.indicators import IndicatorCalculator
from signal_engine.models import (
    AnalysisConfig,
    BounceSignal,
    Candle,
    EmaPoint,
    Exchange,
    MacdPoint,
    Signal,
    StrategyName,
    Timeframe,
    TradingSignal,
    TradingType,
    VwapPoint,
    Zone,
    ZoneSignal,
)
from signal_engine.strategy import AnalysisContext, SignalDetector, create_detector
from signal_engine.strategy.supply_demand import ZoneDetector

logger = logging.getLogger(__name__)


class AnalysisResult(BaseModel):
    """Everything derived from one candle window."""

    model_config = ConfigDict(frozen=True)

    ema_series: list[EmaPoint] = Field(default_factory=list)
    vwap_series: list[VwapPoint] = Field(default_factory=list)
    macd_series: list[MacdPoint] = Field(default_factory=list)
    zones: list[Zone] = Field(default_factory=list)
    bounce_signals: list[BounceSignal] = Field(default_factory=list)
    zone_signals: list[ZoneSignal] = Field(default_factory=list)
    all_signals: list[TradingSignal] = Field(default_factory=list)


class TechnicalAnalyzer:
    """Composes indicators, zones and signal detectors into one analysis."""

    def __init__(self, config: AnalysisConfig | None = None):
        self.config = config or AnalysisConfig()
        self.indicator_calc = IndicatorCalculator(self.config)
        self.zone_detector = ZoneDetector(self.config)
        self.detectors: list[SignalDetector] = [
            create_detector(name, config=self.config)
            for name in self.config.strategies
        ]

    @staticmethod
    def tag_signal(
        detector: SignalDetector,
        signal: Signal,
        symbol: str,
        exchange: Exchange | str,
        trading_type: TradingType | str,
        timeframe: Timeframe | str,
    ) -> TradingSignal:
        """Wrap a detector signal with its market identity."""
        return TradingSignal(
            id=f"{detector.id_prefix}_{signal.timestamp}",
            symbol=symbol,
            exchange=exchange,
            trading_type=trading_type,
            timeframe=timeframe,
            timestamp=signal.timestamp,
            direction=signal.direction,
            price=signal.price,
            strategy=detector.name,
            signal_data=signal,
            confidence=signal.confidence,
        )

    def analyze(
        self,
        candles: Sequence[Candle],
        symbol: str,
        exchange: Exchange | str,
        trading_type: TradingType | str,
        timeframe: Timeframe | str,
    ) -> AnalysisResult:
        """
        Analyse one candle window.

        Args:
            candles: Candles in ascending time order (not validated)
            symbol: Trading pair, e.g. 'BTCUSDT'
            exchange: Exchange the candles came from
            trading_type: Spot or futures market
            timeframe: Candle interval

        Returns:
            AnalysisResult. Collections are empty where history is too short.
        """
        indicators = self.indicator_calc.calculate_all(candles)
        zones = self.zone_detector.detect(candles)
        context = AnalysisContext(candles=candles, indicators=indicators, zones=zones)

        signals_by_strategy: dict[StrategyName, list] = {}
        tagged: list[TradingSignal] = []
        for detector in self.detectors:
            signals = detector.detect(context)
            signals_by_strategy[detector.name] = signals
            tagged.extend(
                self.tag_signal(detector, s, symbol, exchange, trading_type, timeframe)
                for s in signals
            )

        # Stable: detectors keep their configured order on equal timestamps
        tagged.sort(key=lambda s: s.timestamp)

        logger.info(
            "Analysis %s %s/%s %s: %d candles, %d zones, %d signals",
            symbol,
            getattr(exchange, "value", exchange),
            getattr(trading_type, "value", trading_type),
            getattr(timeframe, "value", timeframe),
            len(candles),
            len(zones),
            len(tagged),
        )

        return AnalysisResult(
            ema_series=indicators.ema,
            vwap_series=indicators.vwap,
            macd_series=indicators.macd,
            zones=zones,
            bounce_signals=signals_by_strategy.get(StrategyName.EMA_BOUNCE, []),
            zone_signals=signals_by_strategy.get(StrategyName.SUPPLY_DEMAND, []),
            all_signals=tagged,
        )


def analyze(
    candles: Sequence[Candle],
    symbol: str,
    exchange: Exchange | str,
    trading_type: TradingType | str,
    timeframe: Timeframe | str,
    config: AnalysisConfig | None = None,
) -> AnalysisResult:
    """Analyse one candle window with a throwaway TechnicalAnalyzer."""
    return TechnicalAnalyzer(config).analyze(
        candles, symbol, exchange, trading_type, timeframe
    )
