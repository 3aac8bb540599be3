"""Supply/demand zone detection.

Zones come from reversal candles:
- Bullish engulfing -> strong DBR demand zone
- Bearish engulfing -> strong RBD supply zone
- Pin bar with a dominant lower wick -> DBR demand zone
- Pin bar with a dominant upper wick -> RBD supply zone

Overlapping zones of the same type are consolidated so only the
strongest survives, and only the most recent zones are kept.
"""

import logging
from decimal import Decimal
from typing import Sequence

from signal_engine.models import (
    AnalysisConfig,
    Candle,
    Zone,
    ZonePattern,
    ZoneStrength,
    ZoneType,
)

logger = logging.getLogger(__name__)

# Candles skipped at each end of the window
EDGE_CANDLES = 2


def _make_zone(
    zone_type: ZoneType,
    low: Decimal,
    high: Decimal,
    candle: Candle,
    strength: ZoneStrength,
    pattern: ZonePattern,
) -> Zone:
    # Malformed candles (high < low) must not produce an inverted band
    return Zone(
        type=zone_type,
        low=min(low, high),
        high=max(low, high),
        timestamp=candle.close_time,
        strength=strength,
        pattern=pattern,
    )


def _pin_strength(wick: Decimal, body: Decimal) -> ZoneStrength:
    return ZoneStrength.STRONG if wick > body * 3 else ZoneStrength.MEDIUM


class ZoneDetector:
    """Detects and consolidates supply/demand zones from candle geometry."""

    def __init__(self, config: AnalysisConfig | None = None):
        config = config or AnalysisConfig()
        self.min_candles = config.min_zone_candles
        self.max_zones = config.max_zones

    def candle_zones(self, prev: Candle, current: Candle) -> list[Zone]:
        """
        Zone candidates emitted by ``current`` given the candle before it.

        Every pattern is tested independently, so one candle may emit
        several candidates.
        """
        zones = []

        # Bullish engulfing
        if prev.close < current.open and current.close > prev.high:
            zones.append(_make_zone(
                ZoneType.DEMAND,
                min(current.low, prev.low),
                current.high,
                current,
                ZoneStrength.STRONG,
                ZonePattern.DBR,
            ))

        # Bearish engulfing
        if prev.close > current.open and current.close < prev.low:
            zones.append(_make_zone(
                ZoneType.SUPPLY,
                current.low,
                max(current.high, prev.high),
                current,
                ZoneStrength.STRONG,
                ZonePattern.RBD,
            ))

        body = current.body_size
        upper = current.upper_wick
        lower = current.lower_wick
        if current.range_size > 0:
            # Bullish pin bar
            if lower > body * 2 and lower > upper * 2:
                zones.append(_make_zone(
                    ZoneType.DEMAND,
                    current.low,
                    max(current.open, current.close),
                    current,
                    _pin_strength(lower, body),
                    ZonePattern.DBR,
                ))

            # Bearish pin bar
            if upper > body * 2 and upper > lower * 2:
                zones.append(_make_zone(
                    ZoneType.SUPPLY,
                    min(current.open, current.close),
                    current.high,
                    current,
                    _pin_strength(upper, body),
                    ZonePattern.RBD,
                ))

        return zones

    def find_candidates(self, candles: Sequence[Candle]) -> list[Zone]:
        """All zone candidates in detection order, before consolidation."""
        if len(candles) < self.min_candles:
            return []

        candidates = []
        for i in range(EDGE_CANDLES, len(candles) - EDGE_CANDLES):
            candidates.extend(self.candle_zones(candles[i - 1], candles[i]))
        return candidates

    def consolidate(self, zones: Sequence[Zone]) -> list[Zone]:
        """
        Merge overlapping same-type zones, keeping the stronger one.

        Each candidate is compared against accepted zones from the most
        recently accepted backwards. The first overlap decides: the
        stronger zone takes that slot (the existing one wins ties) and the
        scan stops. Candidates with no overlap are appended.

        Returns:
            At most ``max_zones`` zones, the most recently accepted ones
        """
        accepted: list[Zone] = []

        for zone in zones:
            for i in range(len(accepted) - 1, -1, -1):
                existing = accepted[i]
                if zone.overlaps(existing):
                    if zone.strength.rank > existing.strength.rank:
                        accepted[i] = zone
                    break
            else:
                accepted.append(zone)

        return accepted[-self.max_zones:]

    def detect(self, candles: Sequence[Candle]) -> list[Zone]:
        """Detect consolidated supply/demand zones in ``candles``."""
        candidates = self.find_candidates(candles)
        zones = self.consolidate(candidates)
        logger.debug(
            "Zones: %d candidates -> %d after consolidation",
            len(candidates),
            len(zones),
        )
        return zones
