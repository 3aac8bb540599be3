"""Signal detector plugin system.

Public API:
- SignalDetector: Protocol that all detectors must implement
- AnalysisContext: Shared inputs handed to every detector
- register_detector: Decorator to register a detector class
- create_detector: Factory function to instantiate detectors by name
- list_detectors: Discover all registered detectors
- get_detector_class: Get detector class by name without instantiating

Importing this package auto-registers all built-in detectors.
"""

from signal_engine.strategy.protocol import AnalysisContext, SignalDetector
from signal_engine.strategy.registry import (
    register_detector,
    create_detector,
    list_detectors,
    get_detector_class,
)

# Import built-in detectors to trigger auto-registration
import signal_engine.strategy.ema_bounce  # noqa: F401
import signal_engine.strategy.supply_demand  # noqa: F401

__all__ = [
    "AnalysisContext",
    "SignalDetector",
    "register_detector",
    "create_detector",
    "list_detectors",
    "get_detector_class",
]
