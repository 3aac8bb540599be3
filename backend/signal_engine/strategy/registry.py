"""Detector registry keyed by StrategyName.

``AnalysisConfig.strategies`` lists StrategyName values; the analyzer turns
each into a detector instance through ``create_detector``. Plain strings are
accepted wherever a name is expected and validated against StrategyName.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar

from signal_engine.models import StrategyName
from signal_engine.strategy.protocol import SignalDetector

logger = logging.getLogger(__name__)

D = TypeVar("D", bound=type)

_REGISTRY: dict[StrategyName, type[SignalDetector]] = {}


def _strategy(name: StrategyName | str) -> StrategyName:
    try:
        return StrategyName(name)
    except ValueError:
        raise KeyError(
            f"Unknown detector '{name}'. Available: {', '.join(list_detectors()) or '(none)'}"
        ) from None


def register_detector(name: StrategyName | str) -> Callable[[D], D]:
    """Class decorator binding a detector class to a strategy.

    Raises:
        KeyError: If ``name`` is not a StrategyName.
        ValueError: If the strategy already has a detector.
    """
    strategy = _strategy(name)

    def decorator(cls: D) -> D:
        existing = _REGISTRY.get(strategy)
        if existing is not None:
            raise ValueError(
                f"Detector '{strategy.value}' is already registered by {existing.__name__}"
            )
        _REGISTRY[strategy] = cls
        logger.debug("Registered detector: %s -> %s", strategy.value, cls.__name__)
        return cls

    return decorator


def get_detector_class(name: StrategyName | str) -> type[SignalDetector]:
    """Detector class for a strategy.

    Raises:
        KeyError: If no detector handles the strategy.
    """
    strategy = _strategy(name)
    if strategy not in _REGISTRY:
        raise KeyError(
            f"No detector for '{strategy.value}'. Available: {', '.join(list_detectors()) or '(none)'}"
        )
    return _REGISTRY[strategy]


def create_detector(name: StrategyName | str, **kwargs: Any) -> SignalDetector:
    return get_detector_class(name)(**kwargs)


def list_detectors() -> list[str]:
    """Registered strategy names, sorted."""
    return sorted(s.value for s in _REGISTRY)
