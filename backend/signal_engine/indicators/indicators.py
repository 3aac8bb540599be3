"""Technical indicators for signal detection.

All arithmetic is done in Decimal so cumulative sums and recurrences are
exact and reproducible. Series shorter than an indicator's warm-up return
an empty list rather than NaN padding; outputs are aligned to the END of
the input (the last value always belongs to the last input element).
"""

import logging
from decimal import Decimal
from typing import Sequence

from signal_engine.models import (
    AnalysisConfig,
    Candle,
    EmaPoint,
    IndicatorSet,
    MacdPoint,
    VwapPoint,
)

logger = logging.getLogger(__name__)


def _trailing(values: Sequence, n: int) -> list:
    """Last ``n`` elements of ``values`` (empty for n <= 0)."""
    if n <= 0:
        return []
    return list(values[len(values) - n:])


def ema(values: Sequence[Decimal], period: int) -> list[Decimal]:
    """
    Calculate Exponential Moving Average.

    The first value is seeded with the SMA of the first ``period`` values;
    after that ``ema[i] = price[i] * k + ema[i-1] * (1 - k)`` with
    ``k = 2 / (period + 1)``, evaluated as ``ema[i-1] + k * (price[i] - ema[i-1])``
    so a constant series stays exactly constant.

    Args:
        values: Sequence of price values
        period: EMA period

    Returns:
        List of ``len(values) - period + 1`` EMA values, or an empty list
        if there is not enough data
    """
    if period <= 0 or len(values) < period:
        return []

    multiplier = Decimal(2) / (period + 1)
    result = [sum(values[:period], Decimal(0)) / period]

    for i in range(period, len(values)):
        prev = result[-1]
        result.append(prev + (values[i] - prev) * multiplier)

    return result


def typical_price(high: Decimal, low: Decimal, close: Decimal) -> Decimal:
    """(high + low + close) / 3."""
    return (high + low + close) / 3


def vwap(
    highs: Sequence[Decimal],
    lows: Sequence[Decimal],
    closes: Sequence[Decimal],
    volumes: Sequence[Decimal],
) -> list[Decimal]:
    """
    Calculate Volume Weighted Average Price (VWAP).

    Cumulative from the first element of the window; there is no session
    reset. While cumulative volume is zero the typical price is returned.

    Args:
        highs: Sequence of high prices
        lows: Sequence of low prices
        closes: Sequence of close prices
        volumes: Sequence of volumes

    Returns:
        List of VWAP values, one per input element
    """
    result = []
    cum_vol = Decimal("0")
    cum_pv = Decimal("0")

    for i in range(len(closes)):
        tp = typical_price(highs[i], lows[i], closes[i])
        cum_vol += volumes[i]
        cum_pv += tp * volumes[i]

        if cum_vol != 0:
            result.append(cum_pv / cum_vol)
        else:
            result.append(tp)

    return result


def macd(
    values: Sequence[Decimal],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[list[Decimal], list[Decimal], list[Decimal]]:
    """
    Calculate MACD (Moving Average Convergence Divergence).

    The fast and slow EMAs are computed independently and aligned on
    their common trailing window (the first ``slow - fast`` fast values
    are dropped). The signal line is an EMA of that oscillator line.

    Args:
        values: Sequence of price values
        fast_period: Fast EMA period
        slow_period: Slow EMA period
        signal_period: Signal line EMA period

    Returns:
        Tuple of (macd_line, signal_line, histogram), all the same length
        and aligned to the end of ``values``. Empty lists if there is not
        enough data.
    """
    fast = ema(values, fast_period)
    slow = ema(values, slow_period)
    if not fast or not slow:
        return [], [], []

    n = min(len(fast), len(slow))
    line = [f - s for f, s in zip(_trailing(fast, n), _trailing(slow, n))]

    signal_line = ema(line, signal_period)
    if not signal_line:
        return [], [], []

    line = _trailing(line, len(signal_line))
    histogram = [m - s for m, s in zip(line, signal_line)]
    return line, signal_line, histogram


class IndicatorCalculator:
    """Calculator for every indicator series the strategies consume."""

    def __init__(self, config: AnalysisConfig | None = None):
        self.config = config or AnalysisConfig()

    def ema_series(self, candles: Sequence[Candle]) -> list[EmaPoint]:
        """Fast/medium/slow EMAs for each candle where all three exist."""
        closes = [c.close for c in candles]
        fast = ema(closes, self.config.ema_fast_period)
        medium = ema(closes, self.config.ema_medium_period)
        slow = ema(closes, self.config.ema_slow_period)

        n = min(len(fast), len(medium), len(slow))
        if n == 0:
            return []

        return [
            EmaPoint(timestamp=c.close_time, fast=f, medium=m, slow=s)
            for c, f, m, s in zip(
                _trailing(candles, n),
                _trailing(fast, n),
                _trailing(medium, n),
                _trailing(slow, n),
            )
        ]

    def vwap_series(self, candles: Sequence[Candle]) -> list[VwapPoint]:
        """Cumulative VWAP for every candle."""
        values = vwap(
            [c.high for c in candles],
            [c.low for c in candles],
            [c.close for c in candles],
            [c.volume for c in candles],
        )
        return [
            VwapPoint(timestamp=c.close_time, vwap=v, volume=c.volume)
            for c, v in zip(candles, values)
        ]

    def macd_series(self, candles: Sequence[Candle]) -> list[MacdPoint]:
        """MACD points stamped with the close time of their own candle."""
        line, signal_line, histogram = macd(
            [c.close for c in candles],
            self.config.macd_fast_period,
            self.config.macd_slow_period,
            self.config.macd_signal_period,
        )
        return [
            MacdPoint(timestamp=c.close_time, macd=m, signal=s, histogram=h)
            for c, m, s, h in zip(
                _trailing(candles, len(line)), line, signal_line, histogram
            )
        ]

    def calculate_all(self, candles: Sequence[Candle]) -> IndicatorSet:
        """
        Calculate all indicator series for the given candles.

        Args:
            candles: Candles in ascending time order

        Returns:
            IndicatorSet with EMA, VWAP and MACD series
        """
        result = IndicatorSet(
            ema=self.ema_series(candles),
            vwap=self.vwap_series(candles),
            macd=self.macd_series(candles),
        )
        logger.debug(
            "Indicators for %d candles: ema=%d vwap=%d macd=%d",
            len(candles),
            len(result.ema),
            len(result.vwap),
            len(result.macd),
        )
        return result
