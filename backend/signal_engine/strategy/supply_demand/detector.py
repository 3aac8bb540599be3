"""Supply & Demand zone signal detector.

Recent candles that trade into a valid zone produce signals:
- Demand zone, close above the zone low -> BUY
- Supply zone, close below the zone high -> SELL

Stops sit 1% beyond the far edge of the zone; targets project twice the
zone height past the near edge.

This module is pure business logic with no I/O dependencies.
"""

import logging
from decimal import Decimal
from typing import Sequence

from signal_engine.models import (
    AnalysisConfig,
    Candle,
    Direction,
    StrategyName,
    Zone,
    ZoneSignal,
    ZoneType,
)
from signal_engine.strategy.protocol import AnalysisContext
from signal_engine.strategy.registry import register_detector
from signal_engine.strategy.scoring import zone_confidence

logger = logging.getLogger(__name__)


def _reward_risk(reward: Decimal, risk: Decimal) -> Decimal | None:
    if risk == 0:
        return None
    return reward / risk


@register_detector(StrategyName.SUPPLY_DEMAND)
class SupplyDemandDetector:
    """Signals from candles interacting with supply/demand zones.

    No deduplication: one candle touching several zones yields one signal
    per zone.
    """

    STOP_BUFFER = Decimal("0.01")
    TARGET_ZONE_MULT = Decimal("2")

    def __init__(self, config: AnalysisConfig | None = None):
        self.config = config or AnalysisConfig()
        self.lookback = self.config.zone_signal_lookback

    @property
    def name(self) -> StrategyName:
        return StrategyName.SUPPLY_DEMAND

    @property
    def id_prefix(self) -> str:
        return "sd"

    def signal_for(self, candle: Candle, zone: Zone) -> ZoneSignal | None:
        """
        Build the signal ``candle`` produces against ``zone``, if any.

        Args:
            candle: Candle to test
            zone: Zone to test against

        Returns:
            ZoneSignal, or None if the candle does not trade into the zone
            from the right side
        """
        if not zone.is_valid or not zone.touches(candle.low, candle.high):
            return None

        price = candle.close
        height = zone.high - zone.low

        if zone.type == ZoneType.DEMAND and price > zone.low:
            stop_loss = zone.low * (1 - self.STOP_BUFFER)
            take_profit = zone.high + height * self.TARGET_ZONE_MULT
            return ZoneSignal(
                timestamp=candle.close_time,
                direction=Direction.BUY,
                price=price,
                zone=zone,
                entry_reason=f"Price bounced from {zone.pattern.value} demand zone",
                stop_loss=stop_loss,
                take_profit=take_profit,
                reward_risk=_reward_risk(take_profit - price, price - stop_loss),
                confidence=zone_confidence(zone),
            )

        if zone.type == ZoneType.SUPPLY and price < zone.high:
            stop_loss = zone.high * (1 + self.STOP_BUFFER)
            take_profit = zone.low - height * self.TARGET_ZONE_MULT
            return ZoneSignal(
                timestamp=candle.close_time,
                direction=Direction.SELL,
                price=price,
                zone=zone,
                entry_reason=f"Price rejected from {zone.pattern.value} supply zone",
                stop_loss=stop_loss,
                take_profit=take_profit,
                reward_risk=_reward_risk(price - take_profit, stop_loss - price),
                confidence=zone_confidence(zone),
            )

        return None

    def detect_signals(
        self,
        candles: Sequence[Candle],
        zones: Sequence[Zone],
    ) -> list[ZoneSignal]:
        """Test the most recent candles against every valid zone."""
        if not candles or not zones:
            return []

        signals = []
        for candle in candles[-self.lookback:]:
            for zone in zones:
                signal = self.signal_for(candle, zone)
                if signal is not None:
                    signals.append(signal)

        logger.debug(
            "Supply/demand: %d signals from %d zones", len(signals), len(zones)
        )
        return signals

    def detect(self, context: AnalysisContext) -> list[ZoneSignal]:
        return self.detect_signals(context.candles, context.zones)
