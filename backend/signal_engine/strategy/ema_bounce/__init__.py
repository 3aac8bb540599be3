"""EMA Bounce strategy package.

Importing this package triggers detector registration via the
@register_detector decorator on EmaBounceDetector.
"""

from signal_engine.strategy.ema_bounce.detector import EmaBounceDetector
from signal_engine.strategy.ema_bounce.state import (
    IDLE,
    BounceState,
    BounceStep,
    advance,
)

__all__ = [
    "EmaBounceDetector",
    "IDLE",
    "BounceState",
    "BounceStep",
    "advance",
]
