"""Candle (OHLCV bar) data model."""

from decimal import Decimal
from pydantic import BaseModel, ConfigDict


class Candle(BaseModel):
    """Candle (OHLCV) data model.

    Prices and volume are exact decimals. String input is parsed
    straight to Decimal so no binary float rounding is introduced.
    Times are Unix milliseconds.
    """

    model_config = ConfigDict(frozen=True)

    open_time: int
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal
    close_time: int

    @property
    def is_bullish(self) -> bool:
        """Check if this is a bullish (green) candle."""
        return self.close > self.open

    @property
    def is_bearish(self) -> bool:
        """Check if this is a bearish (red) candle."""
        return self.close < self.open

    @property
    def body_size(self) -> Decimal:
        """Get the absolute size of the candle body."""
        return abs(self.close - self.open)

    @property
    def upper_wick(self) -> Decimal:
        """Distance from the top of the body to the high."""
        return self.high - max(self.open, self.close)

    @property
    def lower_wick(self) -> Decimal:
        """Distance from the bottom of the body to the low."""
        return min(self.open, self.close) - self.low

    @property
    def range_size(self) -> Decimal:
        """Get the full range (high - low) of the candle."""
        return self.high - self.low

    @property
    def typical_price(self) -> Decimal:
        """(high + low + close) / 3."""
        return (self.high + self.low + self.close) / 3
