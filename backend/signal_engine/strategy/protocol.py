"""Detector protocol defining the interface all signal detectors implement.

This module provides:
- AnalysisContext: Everything derived once per analysis and shared by detectors
- SignalDetector: Runtime-checkable Protocol that detectors must satisfy
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, Sequence, runtime_checkable

from signal_engine.models import Candle, IndicatorSet, Signal, StrategyName, Zone


# ---------------------------------------------------------------------------
# AnalysisContext: inputs handed to every detector
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class AnalysisContext:
    """Inputs for one detection pass.

    Attributes:
        candles: Full candle window in ascending time order.
        indicators: EMA/VWAP/MACD series computed from ``candles``.
        zones: Consolidated supply/demand zones detected in ``candles``.
    """

    candles: Sequence[Candle]
    indicators: IndicatorSet = field(default_factory=IndicatorSet)
    zones: list[Zone] = field(default_factory=list)


# ---------------------------------------------------------------------------
# SignalDetector Protocol
# ---------------------------------------------------------------------------
@runtime_checkable
class SignalDetector(Protocol):
    """Protocol that all signal detectors must implement.

    Detectors are pure: the same context always yields the same signals,
    and nothing is carried over between calls.
    """

    @property
    def name(self) -> StrategyName:
        """Strategy identifier (e.g., 'ema_bounce')."""
        ...

    @property
    def id_prefix(self) -> str:
        """Prefix for signal ids built as ``{prefix}_{timestamp}``."""
        ...

    def detect(self, context: AnalysisContext) -> list[Signal]:
        """Scan the context and return signals in chronological order."""
        ...
