"""Confidence scoring shared by all detectors.

A confidence is a base value plus the weight of every factor that holds,
plus an optional continuous term, clamped to [0, 100]. Scoring is pure:
no state, same factors in, same score out.
"""

from decimal import Decimal
from typing import Mapping

from signal_engine.models import Zone, ZoneStrength

CONFIDENCE_MIN = Decimal("0")
CONFIDENCE_MAX = Decimal("100")

BOUNCE_WEIGHTS: dict[str, Decimal] = {
    "bullish_stack": Decimal("25"),
    "price_above_vwap": Decimal("20"),
    "macd_bullish": Decimal("20"),
    "volume_confirmed": Decimal("15"),
}
# Full credit for a low right on the tolerance band, less the deeper it undershoots
BOUNCE_QUALITY_MAX = Decimal("20")

ZONE_BASE = Decimal("50")
ZONE_WEIGHTS: dict[str, Decimal] = {
    "strong": Decimal("30"),
    "medium": Decimal("15"),
    "reversal_pattern": Decimal("20"),
}


def clamp_confidence(value: Decimal) -> Decimal:
    """Clamp a raw score into [0, 100]."""
    return min(CONFIDENCE_MAX, max(CONFIDENCE_MIN, value))


def score_factors(
    factors: Mapping[str, bool],
    weights: Mapping[str, Decimal],
    base: Decimal = CONFIDENCE_MIN,
    extra: Decimal = CONFIDENCE_MIN,
) -> Decimal:
    """
    Sum the weights of the factors that hold.

    Args:
        factors: Factor name -> whether it holds
        weights: Factor name -> weight added when it holds
        base: Starting score
        extra: Continuous term added on top of the weighted factors

    Returns:
        Score clamped to [0, 100]
    """
    total = base + extra
    for name, holds in factors.items():
        if holds:
            total += weights[name]
    return clamp_confidence(total)


def bounce_quality(tolerance_band: Decimal, low: Decimal) -> Decimal:
    """How far the low undershot the tolerance band, relative to the band.

    A zero band has no meaningful ratio and scores as a perfect touch.
    """
    if tolerance_band == 0:
        return Decimal("0")
    return (tolerance_band - low) / tolerance_band


def bounce_confidence(
    *,
    bullish_stack: bool,
    price_above_vwap: bool,
    macd_bullish: bool,
    volume_confirmed: bool,
    quality: Decimal,
) -> Decimal:
    """Confidence for an EMA bounce signal."""
    quality_term = max(Decimal("0"), BOUNCE_QUALITY_MAX - quality * 100)
    return score_factors(
        {
            "bullish_stack": bullish_stack,
            "price_above_vwap": price_above_vwap,
            "macd_bullish": macd_bullish,
            "volume_confirmed": volume_confirmed,
        },
        BOUNCE_WEIGHTS,
        extra=quality_term,
    )


def zone_confidence(zone: Zone) -> Decimal:
    """Confidence for a signal taken off ``zone``."""
    return score_factors(
        {
            "strong": zone.strength == ZoneStrength.STRONG,
            "medium": zone.strength == ZoneStrength.MEDIUM,
            "reversal_pattern": zone.pattern.is_reversal,
        },
        ZONE_WEIGHTS,
        base=ZONE_BASE,
    )
