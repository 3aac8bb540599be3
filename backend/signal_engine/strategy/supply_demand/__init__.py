"""Supply & Demand strategy package.

Importing this package triggers detector registration via the
@register_detector decorator on SupplyDemandDetector.
"""

from signal_engine.strategy.supply_demand.detector import SupplyDemandDetector
from signal_engine.strategy.supply_demand.zones import ZoneDetector

__all__ = [
    "SupplyDemandDetector",
    "ZoneDetector",
]
