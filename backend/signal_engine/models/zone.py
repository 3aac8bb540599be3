"""Supply/demand zone models."""

from decimal import Decimal
from enum import Enum
from pydantic import BaseModel, ConfigDict


class ZoneType(str, Enum):
    """Which side of the market a zone is expected to attract."""

    SUPPLY = "supply"
    DEMAND = "demand"


class ZoneStrength(str, Enum):
    """Zone strength classification."""

    WEAK = "weak"
    MEDIUM = "medium"
    STRONG = "strong"

    @property
    def rank(self) -> int:
        """Ordering used when overlapping zones compete (weak < medium < strong)."""
        return _STRENGTH_RANK[self]


_STRENGTH_RANK = {
    ZoneStrength.WEAK: 1,
    ZoneStrength.MEDIUM: 2,
    ZoneStrength.STRONG: 3,
}


class ZonePattern(str, Enum):
    """Base formation that produced a zone."""

    RBR = "RBR"  # Rally-Base-Rally
    DBD = "DBD"  # Drop-Base-Drop
    DBR = "DBR"  # Drop-Base-Rally
    RBD = "RBD"  # Rally-Base-Drop

    @property
    def is_reversal(self) -> bool:
        """DBR and RBD mark a change of direction; RBR and DBD continue it."""
        return self in (ZonePattern.DBR, ZonePattern.RBD)


class Zone(BaseModel):
    """A supply or demand price band. ``low`` never exceeds ``high``."""

    model_config = ConfigDict(frozen=True)

    type: ZoneType
    high: Decimal
    low: Decimal
    timestamp: int
    strength: ZoneStrength
    pattern: ZonePattern
    is_valid: bool = True

    def overlaps(self, other: "Zone") -> bool:
        """Check if both zones are the same type and their bands intersect."""
        return (
            self.type == other.type
            and self.low <= other.high
            and self.high >= other.low
        )

    def touches(self, low: Decimal, high: Decimal) -> bool:
        """Check if a price range [low, high] intersects the zone band."""
        return low <= self.high and high >= self.low

    @property
    def height(self) -> Decimal:
        return self.high - self.low
