"""Tests for supply/demand zone detection and consolidation."""

import pytest
from decimal import Decimal

from signal_engine.models import (
    AnalysisConfig,
    Candle,
    Zone,
    ZonePattern,
    ZoneStrength,
    ZoneType,
)
from signal_engine.strategy.supply_demand import ZoneDetector


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_candle(i: int, o: str, h: str, l: str, c: str, vol: str = "10") -> Candle:
    return Candle(
        open_time=i * 60_000,
        open=Decimal(o),
        high=Decimal(h),
        low=Decimal(l),
        close=Decimal(c),
        volume=Decimal(vol),
        close_time=i * 60_000 + 59_999,
    )


def _flat(i: int, price: str = "100") -> Candle:
    return _make_candle(i, price, price, price, price)


def _flat_with(n: int, inserts: dict[int, tuple[str, str, str, str]]) -> list[Candle]:
    """n flat candles at 100 with OHLC overrides at the given indices."""
    candles = []
    for i in range(n):
        if i in inserts:
            candles.append(_make_candle(i, *inserts[i]))
        else:
            candles.append(_flat(i))
    return candles


def _zone(
    zone_type: ZoneType,
    low: str,
    high: str,
    strength: ZoneStrength = ZoneStrength.MEDIUM,
    timestamp: int = 0,
) -> Zone:
    return Zone(
        type=zone_type,
        low=Decimal(low),
        high=Decimal(high),
        timestamp=timestamp,
        strength=strength,
        pattern=ZonePattern.DBR if zone_type == ZoneType.DEMAND else ZonePattern.RBD,
    )


# ---------------------------------------------------------------------------
# Detection
# ---------------------------------------------------------------------------

class TestZoneDetection:
    """Tests for pattern detection."""

    def test_flat_candles_have_no_zones(self):
        candles = [_flat(i) for i in range(250)]
        assert ZoneDetector().detect(candles) == []

    def test_too_few_candles(self):
        candles = _flat_with(9, {4: ("100", "102", "98", "100"), 5: ("101", "105", "99", "105")})
        assert ZoneDetector().detect(candles) == []

    def test_bullish_engulfing(self):
        """prevClose=100 < open=101, close=105 > prevHigh=102 -> strong demand [98, 105]."""
        candles = _flat_with(30, {
            14: ("100", "102", "98", "100"),
            15: ("101", "105", "99", "105"),
        })

        zones = ZoneDetector().detect(candles)

        assert len(zones) == 1
        zone = zones[0]
        assert zone.type == ZoneType.DEMAND
        assert zone.strength == ZoneStrength.STRONG
        assert zone.pattern == ZonePattern.DBR
        assert zone.low == Decimal("98")
        assert zone.high == Decimal("105")
        assert zone.timestamp == candles[15].close_time
        assert zone.is_valid

    def test_bearish_engulfing(self):
        """prevClose=100 > open=99, close=95 < prevLow=98 -> strong supply [95, 102]."""
        candles = _flat_with(30, {
            14: ("100", "102", "98", "100"),
            15: ("99", "101", "95", "95"),
        })

        zones = ZoneDetector().detect(candles)

        assert len(zones) == 1
        zone = zones[0]
        assert zone.type == ZoneType.SUPPLY
        assert zone.strength == ZoneStrength.STRONG
        assert zone.pattern == ZonePattern.RBD
        assert zone.low == Decimal("95")
        assert zone.high == Decimal("102")

    def test_strong_bullish_pin_bar(self):
        # body 1, upper wick 0.5, lower wick 10 -> strong (10 > 3 * 1)
        candles = _flat_with(30, {15: ("100", "101.5", "90", "101")})

        zones = ZoneDetector().detect(candles)

        assert len(zones) == 1
        zone = zones[0]
        assert zone.type == ZoneType.DEMAND
        assert zone.strength == ZoneStrength.STRONG
        assert zone.pattern == ZonePattern.DBR
        assert zone.low == Decimal("90")
        assert zone.high == Decimal("101")

    def test_medium_bullish_pin_bar(self):
        # body 4, upper wick 1, lower wick 10 -> 10 > 8 but not > 12 -> medium
        candles = _flat_with(30, {15: ("100", "105", "90", "104")})

        detector = ZoneDetector()
        candidates = detector.find_candidates(candles)

        pins = [z for z in candidates if z.timestamp == candles[15].close_time]
        assert len(pins) == 1
        assert pins[0].type == ZoneType.DEMAND
        assert pins[0].strength == ZoneStrength.MEDIUM

    def test_bearish_pin_bar(self):
        # body 1, upper wick 10, lower wick 0 -> strong supply [99, 110]
        candles = _flat_with(30, {15: ("100", "110", "99", "99")})

        zones = ZoneDetector().detect(candles)

        supply = [z for z in zones if z.type == ZoneType.SUPPLY]
        assert len(supply) == 1
        assert supply[0].strength == ZoneStrength.STRONG
        assert supply[0].pattern == ZonePattern.RBD
        assert supply[0].low == Decimal("99")
        assert supply[0].high == Decimal("110")

    def test_one_candle_can_emit_several_zones(self):
        """A bullish engulfing candle that is also a pin bar emits both candidates."""
        prev = _make_candle(0, "100", "100.5", "99.5", "100")
        # open 101, close 102 > prevHigh; lower wick 11 dwarfs body 1 and upper wick 0
        current = _make_candle(1, "101", "102", "90", "102")

        zones = ZoneDetector().candle_zones(prev, current)

        assert len(zones) == 2
        assert all(z.type == ZoneType.DEMAND for z in zones)
        assert zones[0].low == Decimal("90")
        assert zones[0].high == Decimal("102")
        assert zones[1].low == Decimal("90")
        assert zones[1].high == Decimal("102")

    def test_edge_candles_are_skipped(self):
        """Patterns in the first two or last two candles are ignored."""
        candles = _flat_with(20, {
            0: ("100", "102", "98", "100"),
            1: ("101", "105", "99", "105"),
            19: ("100", "110", "99", "99"),
        })
        assert ZoneDetector().detect(candles) == []

    def test_zero_range_candle_is_not_a_pin_bar(self):
        candles = _flat_with(20, {10: ("100", "100", "100", "100")})
        assert ZoneDetector().find_candidates(candles) == []

    def test_inverted_candle_band_is_ordered(self):
        """Malformed candles still yield low <= high."""
        prev = _make_candle(0, "100", "102", "98", "100")
        current = _make_candle(1, "101", "97", "99", "105")  # high < low

        zones = ZoneDetector().candle_zones(prev, current)

        assert zones
        for zone in zones:
            assert zone.low <= zone.high


# ---------------------------------------------------------------------------
# Consolidation
# ---------------------------------------------------------------------------

class TestZoneConsolidation:
    """Tests for overlap consolidation."""

    def test_stronger_overlapping_zone_replaces_weaker(self):
        weak = _zone(ZoneType.DEMAND, "95", "100", ZoneStrength.MEDIUM, timestamp=1)
        strong = _zone(ZoneType.DEMAND, "98", "104", ZoneStrength.STRONG, timestamp=2)

        result = ZoneDetector().consolidate([weak, strong])

        assert result == [strong]

    def test_weaker_overlapping_zone_is_dropped(self):
        strong = _zone(ZoneType.DEMAND, "95", "100", ZoneStrength.STRONG, timestamp=1)
        weak = _zone(ZoneType.DEMAND, "98", "104", ZoneStrength.WEAK, timestamp=2)

        result = ZoneDetector().consolidate([strong, weak])

        assert result == [strong]

    def test_equal_strength_keeps_existing(self):
        first = _zone(ZoneType.SUPPLY, "100", "105", ZoneStrength.STRONG, timestamp=1)
        second = _zone(ZoneType.SUPPLY, "104", "110", ZoneStrength.STRONG, timestamp=2)

        assert ZoneDetector().consolidate([first, second]) == [first]

    def test_touching_bands_overlap(self):
        first = _zone(ZoneType.DEMAND, "95", "100", ZoneStrength.WEAK, timestamp=1)
        second = _zone(ZoneType.DEMAND, "100", "105", ZoneStrength.MEDIUM, timestamp=2)

        assert ZoneDetector().consolidate([first, second]) == [second]

    def test_different_types_do_not_conflict(self):
        demand = _zone(ZoneType.DEMAND, "95", "105", timestamp=1)
        supply = _zone(ZoneType.SUPPLY, "95", "105", timestamp=2)

        assert ZoneDetector().consolidate([demand, supply]) == [demand, supply]

    def test_disjoint_zones_are_all_kept(self):
        zones = [
            _zone(ZoneType.DEMAND, str(10 * i), str(10 * i + 5), timestamp=i)
            for i in range(5)
        ]
        assert ZoneDetector().consolidate(zones) == zones

    def test_replacement_keeps_slot_position(self):
        a = _zone(ZoneType.DEMAND, "10", "20", ZoneStrength.WEAK, timestamp=1)
        b = _zone(ZoneType.DEMAND, "50", "60", ZoneStrength.WEAK, timestamp=2)
        a2 = _zone(ZoneType.DEMAND, "15", "25", ZoneStrength.STRONG, timestamp=3)

        assert ZoneDetector().consolidate([a, b, a2]) == [a2, b]

    def test_scan_stops_at_most_recent_conflict(self):
        """Only the newest overlapping zone is compared; older ones stay."""
        old = _zone(ZoneType.DEMAND, "10", "20", ZoneStrength.WEAK, timestamp=1)
        recent = _zone(ZoneType.DEMAND, "22", "30", ZoneStrength.WEAK, timestamp=2)
        # Overlaps both accepted zones
        new = _zone(ZoneType.DEMAND, "18", "24", ZoneStrength.STRONG, timestamp=3)

        result = ZoneDetector().consolidate([old, recent, new])
        assert result == [old, new]

    def test_result_capped_at_max_zones(self):
        zones = [
            _zone(ZoneType.DEMAND, str(10 * i), str(10 * i + 5), timestamp=i)
            for i in range(30)
        ]

        result = ZoneDetector().consolidate(zones)

        assert len(result) == 20
        assert result == zones[-20:]

    def test_custom_max_zones(self):
        zones = [
            _zone(ZoneType.SUPPLY, str(10 * i), str(10 * i + 5), timestamp=i)
            for i in range(10)
        ]
        detector = ZoneDetector(AnalysisConfig(max_zones=3))
        assert detector.consolidate(zones) == zones[-3:]

    def test_detect_output_never_exceeds_twenty(self):
        # Alternate pin bars at rising, non-overlapping price levels
        candles = []
        for i in range(200):
            base = Decimal(100 + i * 20)
            if i % 2:
                candles.append(_make_candle(
                    i, str(base), str(base + 1), str(base - 10), str(base + 1)
                ))
            else:
                candles.append(_flat(i, str(base)))

        zones = ZoneDetector().detect(candles)

        assert 0 < len(zones) <= 20
