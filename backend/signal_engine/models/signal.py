"""Signal models."""

import hashlib
from decimal import Decimal
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from signal_engine.models.zone import Zone


class Direction(str, Enum):
    """Trade direction."""

    BUY = "buy"
    SELL = "sell"


class StrategyName(str, Enum):
    """Strategies that emit signals."""

    EMA_BOUNCE = "ema_bounce"
    SUPPLY_DEMAND = "supply_demand"


class Exchange(str, Enum):
    BINANCE = "binance"
    BYBIT = "bybit"


class TradingType(str, Enum):
    SPOT = "spot"
    FUTURES = "futures"


class Timeframe(str, Enum):
    """Candle interval."""

    M1 = "1m"
    M5 = "5m"
    M15 = "15m"
    M30 = "30m"
    H1 = "1h"
    H4 = "4h"
    D1 = "1d"
    W1 = "1w"
    MN1 = "1M"

    @property
    def milliseconds(self) -> int:
        """Interval length in ms (a month counts as 30 days)."""
        return _TIMEFRAME_MS[self]


_TIMEFRAME_MS = {
    Timeframe.M1: 60_000,
    Timeframe.M5: 5 * 60_000,
    Timeframe.M15: 15 * 60_000,
    Timeframe.M30: 30 * 60_000,
    Timeframe.H1: 60 * 60_000,
    Timeframe.H4: 4 * 60 * 60_000,
    Timeframe.D1: 24 * 60 * 60_000,
    Timeframe.W1: 7 * 24 * 60 * 60_000,
    Timeframe.MN1: 30 * 24 * 60 * 60_000,
}


Confidence = Annotated[Decimal, Field(ge=0, le=100)]


class BounceSignal(BaseModel):
    """EMA bounce signal with the indicator evidence at the signal candle."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["bounce"] = "bounce"
    timestamp: int
    direction: Direction
    price: Decimal
    ema_fast: Decimal
    ema_medium: Decimal
    ema_slow: Decimal
    vwap: Decimal
    macd_line: Decimal
    macd_signal: Decimal
    bullish_stack: bool
    price_above_vwap: bool
    macd_bullish: bool
    bounce_confirmed: bool
    confidence: Confidence


class ZoneSignal(BaseModel):
    """Supply/demand zone signal with stop and target levels.

    ``reward_risk`` is None when the entry sits exactly on the stop.
    It is not range-checked and may be negative for degenerate zones.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["zone"] = "zone"
    timestamp: int
    direction: Direction
    price: Decimal
    zone: Zone
    entry_reason: str
    stop_loss: Decimal
    take_profit: Decimal
    reward_risk: Decimal | None = None
    confidence: Confidence


Signal = Annotated[Union[BounceSignal, ZoneSignal], Field(discriminator="kind")]


def _generate_signal_key(
    symbol: str,
    exchange: str,
    timeframe: str,
    strategy: str,
    timestamp: int,
    direction: str,
) -> str:
    """Deterministic composite identity for a signal.

    Unlike ``id`` this stays unique across symbols, exchanges and
    timeframes analysed side by side.
    """
    key = f"{exchange}:{symbol}:{timeframe}:{strategy}:{timestamp}:{direction}"
    return hashlib.sha256(key.encode()).hexdigest()[:32]


class TradingSignal(BaseModel):
    """A strategy signal tagged with the market it was detected on."""

    model_config = ConfigDict(frozen=True)

    id: str
    symbol: str
    exchange: Exchange
    trading_type: TradingType
    timeframe: Timeframe
    timestamp: int
    direction: Direction
    price: Decimal
    strategy: StrategyName
    signal_data: Signal
    is_active: bool = True
    confidence: Confidence

    @property
    def key(self) -> str:
        return _generate_signal_key(
            self.symbol,
            self.exchange.value,
            self.timeframe.value,
            self.strategy.value,
            self.timestamp,
            self.direction.value,
        )
