"""Map elements (origin and food sources) for the slime mold simulation."""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class SourcePoint:
    """Network origin; agents spawn around it."""
    x: float
    y: float


@dataclass(frozen=True)
class FoodSource:
    """Attractor the network should connect to."""
    x: float
    y: float
    category: str = "food"  # "food", "station", "hospital", ...
    strength: float = 1.0


class SiteMap:
    """
    Holds the single source point and the food sources of one map.

    Placing a second source is refused here, the way the map builder
    refuses it; the engine itself simply overwrites.
    """

    def __init__(self):
        self.source: Optional[SourcePoint] = None
        self.food_sources: List[FoodSource] = []

    def place_source(self, x: float, y: float) -> bool:
        """Set the origin once per map. Returns False if one already exists."""
        if self.source is not None:
            return False
        self.source = SourcePoint(x, y)
        return True

    def add_food(self, x: float, y: float, category: str = "food") -> FoodSource:
        food = FoodSource(x, y, category or "food")
        self.food_sources.append(food)
        return food

    def is_ready(self) -> bool:
        """Check that the map has an origin and at least one food source."""
        return self.source is not None and len(self.food_sources) > 0

    def clear(self) -> None:
        """Remove all placed elements."""
        self.source = None
        self.food_sources = []
