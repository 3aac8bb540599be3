"""Tests for confidence scoring."""

from decimal import Decimal

from signal_engine.models import Zone, ZonePattern, ZoneStrength, ZoneType
from signal_engine.strategy.scoring import (
    BOUNCE_WEIGHTS,
    bounce_confidence,
    bounce_quality,
    clamp_confidence,
    score_factors,
    zone_confidence,
)


def _zone(strength: ZoneStrength, pattern: ZonePattern) -> Zone:
    return Zone(
        type=ZoneType.DEMAND,
        low=Decimal("100"),
        high=Decimal("110"),
        timestamp=0,
        strength=strength,
        pattern=pattern,
    )


class TestClamp:
    """Tests for clamping into [0, 100]."""

    def test_clamp(self):
        assert clamp_confidence(Decimal("-5")) == Decimal("0")
        assert clamp_confidence(Decimal("42.5")) == Decimal("42.5")
        assert clamp_confidence(Decimal("250")) == Decimal("100")


class TestScoreFactors:
    """Tests for the weighted factor sum."""

    def test_only_true_factors_count(self):
        score = score_factors(
            {"bullish_stack": True, "price_above_vwap": False,
             "macd_bullish": True, "volume_confirmed": False},
            BOUNCE_WEIGHTS,
        )
        assert score == Decimal("45")

    def test_base_and_extra(self):
        score = score_factors(
            {"a": True}, {"a": Decimal("10")},
            base=Decimal("50"), extra=Decimal("5"),
        )
        assert score == Decimal("65")

    def test_result_is_clamped(self):
        score = score_factors({"a": True}, {"a": Decimal("90")}, base=Decimal("50"))
        assert score == Decimal("100")


class TestBounceScoring:
    """Tests for EMA bounce confidence."""

    def test_quality_ratio(self):
        # Low 10% under the band
        assert bounce_quality(Decimal("100"), Decimal("90")) == Decimal("0.1")

    def test_quality_zero_band(self):
        assert bounce_quality(Decimal("0"), Decimal("-1")) == Decimal("0")

    def test_perfect_touch_scores_full_marks(self):
        confidence = bounce_confidence(
            bullish_stack=True,
            price_above_vwap=True,
            macd_bullish=True,
            volume_confirmed=True,
            quality=Decimal("0"),
        )
        assert confidence == Decimal("100")

    def test_deep_undershoot_loses_quality_points(self):
        # 20 - 0.25 * 100 < 0 -> no quality points
        confidence = bounce_confidence(
            bullish_stack=True,
            price_above_vwap=True,
            macd_bullish=True,
            volume_confirmed=True,
            quality=Decimal("0.25"),
        )
        assert confidence == Decimal("80")

    def test_partial_quality(self):
        # 25 + 15 + (20 - 5)
        confidence = bounce_confidence(
            bullish_stack=True,
            price_above_vwap=False,
            macd_bullish=False,
            volume_confirmed=True,
            quality=Decimal("0.05"),
        )
        assert confidence == Decimal("55")

    def test_negative_quality_is_clamped(self):
        confidence = bounce_confidence(
            bullish_stack=True,
            price_above_vwap=True,
            macd_bullish=True,
            volume_confirmed=True,
            quality=Decimal("-1"),
        )
        assert confidence == Decimal("100")


class TestZoneScoring:
    """Tests for zone signal confidence."""

    def test_strong_reversal_is_capped(self):
        assert zone_confidence(_zone(ZoneStrength.STRONG, ZonePattern.DBR)) == Decimal("100")

    def test_medium_reversal(self):
        assert zone_confidence(_zone(ZoneStrength.MEDIUM, ZonePattern.RBD)) == Decimal("85")

    def test_weak_continuation_is_base(self):
        assert zone_confidence(_zone(ZoneStrength.WEAK, ZonePattern.RBR)) == Decimal("50")
