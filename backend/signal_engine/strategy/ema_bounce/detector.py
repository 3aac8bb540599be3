"""EMA Bounce strategy implementation.

Trend-aligned pullback entries:
- Setup: fast EMA(9) crosses above medium EMA(20) while above slow EMA(200)
- Wait: up to ``max_wait_bars`` bars while fast > medium > slow holds
- Entry: low dips to within ``bounce_tolerance_pct`` of the fast EMA and
  closes back above it, with close > VWAP and MACD line > signal -> BUY

Long only: there is no mirrored bearish path.

This module is pure business logic with no I/O dependencies.
"""

import logging
from decimal import Decimal
from typing import Sequence

from signal_engine.indicators import IndicatorCalculator
from signal_engine.models import (
    AnalysisConfig,
    BounceSignal,
    Candle,
    Direction,
    EmaPoint,
    IndicatorSet,
    MacdPoint,
    StrategyName,
)
from signal_engine.strategy.ema_bounce.state import IDLE, BounceStep, advance
from signal_engine.strategy.protocol import AnalysisContext
from signal_engine.strategy.registry import register_detector
from signal_engine.strategy.scoring import bounce_confidence, bounce_quality

logger = logging.getLogger(__name__)


def _aligned(series: Sequence, window: int, index: int):
    """Element ``index`` of the trailing ``window`` of ``series``."""
    return series[len(series) - window + index]


@register_detector(StrategyName.EMA_BOUNCE)
class EmaBounceDetector:
    """EMA bounce (pullback and reclaim) detector.

    Signal Logic:
    - BUY: armed by a fast/medium cross-up, fired on the first bar that
      touches the fast EMA tolerance band and closes above it with VWAP
      and MACD confirmation
    """

    def __init__(self, config: AnalysisConfig | None = None):
        self.config = config or AnalysisConfig()

        self.slow_period = self.config.ema_slow_period
        self.max_wait_bars = self.config.max_wait_bars
        self.tolerance_mult = 1 + self.config.bounce_tolerance_pct / 100

    @property
    def name(self) -> StrategyName:
        return StrategyName.EMA_BOUNCE

    @property
    def id_prefix(self) -> str:
        return "ema"

    def tolerance_band(self, fast_ema: Decimal) -> Decimal:
        """Highest low that still counts as touching the fast EMA."""
        return fast_ema * self.tolerance_mult

    def observe(
        self,
        candle: Candle,
        prev_ema: EmaPoint,
        cur_ema: EmaPoint,
        vwap_value: Decimal,
        macd_point: MacdPoint,
    ) -> BounceStep:
        """Evaluate the strategy conditions on one bar."""
        return BounceStep(
            bullish_stack=cur_ema.fast > cur_ema.medium > cur_ema.slow,
            cross_up=(
                prev_ema.fast <= prev_ema.medium
                and cur_ema.fast > cur_ema.medium
                and cur_ema.fast > cur_ema.slow
            ),
            bounce=(
                candle.low <= self.tolerance_band(cur_ema.fast)
                and candle.close > cur_ema.fast
            ),
            price_above_vwap=candle.close > vwap_value,
            macd_bullish=macd_point.macd > macd_point.signal,
        )

    def detect_signals(
        self,
        candles: Sequence[Candle],
        indicators: IndicatorSet | None = None,
    ) -> list[BounceSignal]:
        """
        Scan candles in chronological order and collect bounce signals.

        Args:
            candles: Candles in ascending time order
            indicators: Precomputed indicator series for ``candles``; computed
                here when omitted

        Returns:
            BUY signals in chronological order (empty if history is shorter
            than the slow EMA period)
        """
        if len(candles) < self.slow_period:
            return []

        if indicators is None:
            indicators = IndicatorCalculator(self.config).calculate_all(candles)

        # Scan only where every series is defined
        window = min(
            len(candles),
            len(indicators.ema),
            len(indicators.vwap),
            len(indicators.macd),
        )

        signals = []
        state = IDLE
        for i in range(1, window):
            candle = _aligned(candles, window, i)
            cur_ema = _aligned(indicators.ema, window, i)
            prev_ema = _aligned(indicators.ema, window, i - 1)
            vwap_value = _aligned(indicators.vwap, window, i).vwap
            macd_point = _aligned(indicators.macd, window, i)

            step = self.observe(candle, prev_ema, cur_ema, vwap_value, macd_point)
            state, fired = advance(state, step, self.max_wait_bars)
            if not fired:
                continue

            confidence = bounce_confidence(
                bullish_stack=step.bullish_stack,
                price_above_vwap=step.price_above_vwap,
                macd_bullish=step.macd_bullish,
                volume_confirmed=candle.volume > 0,
                quality=bounce_quality(self.tolerance_band(cur_ema.fast), candle.low),
            )
            signals.append(BounceSignal(
                timestamp=candle.close_time,
                direction=Direction.BUY,
                price=candle.close,
                ema_fast=cur_ema.fast,
                ema_medium=cur_ema.medium,
                ema_slow=cur_ema.slow,
                vwap=vwap_value,
                macd_line=macd_point.macd,
                macd_signal=macd_point.signal,
                bullish_stack=step.bullish_stack,
                price_above_vwap=step.price_above_vwap,
                macd_bullish=step.macd_bullish,
                bounce_confirmed=step.bounce,
                confidence=confidence,
            ))
            logger.info(
                f"EMA BOUNCE BUY @ {candle.close} (t={candle.close_time}) "
                f"fast={cur_ema.fast} medium={cur_ema.medium} slow={cur_ema.slow} "
                f"confidence={confidence}"
            )

        return signals

    def detect(self, context: AnalysisContext) -> list[BounceSignal]:
        return self.detect_signals(context.candles, context.indicators)
