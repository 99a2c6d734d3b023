"""Agent storage and spawn policy for the slime mold simulation."""

from dataclasses import dataclass
from typing import List, Optional, Tuple
import numpy as np

from .sites import SourcePoint


@dataclass(frozen=True)
class Agent:
    """Immutable view of a single slime particle."""
    x: float
    y: float
    heading: float  # radians
    speed: float    # multiplier around 1.0


class AgentStore:
    """
    Owns the particle population as parallel numpy arrays.

    The set is created in bulk by spawn() and only ever replaced as a
    whole (spawn or clear); no particle is added or removed mid-run.

    Spawn count:
        count = min(max_agents, base_count + food_count * per_food_bonus)
    """

    def __init__(self, base_count: int = 2000,
                 per_food_bonus: int = 600,
                 spawn_radius: float = 8.0,
                 speed_range: Tuple[float, float] = (0.8, 1.2)):
        self.base_count = base_count
        self.per_food_bonus = per_food_bonus
        self.spawn_radius = spawn_radius
        self.speed_range = speed_range

        self.x = np.zeros(0, dtype=np.float64)
        self.y = np.zeros(0, dtype=np.float64)
        self.heading = np.zeros(0, dtype=np.float64)
        self.speed = np.zeros(0, dtype=np.float64)

    def spawn_count(self, food_count: int, max_agents: int) -> int:
        """Number of particles a run with food_count food sources gets."""
        return max(0, min(max_agents,
                          self.base_count + food_count * self.per_food_bonus))

    def spawn(self, source: Optional[SourcePoint], food_count: int,
              max_agents: int, rng: np.random.Generator) -> int:
        """
        Replace the population with a blob of particles around source.

        Returns the number of particles created; 0 when no source is set.
        """
        if source is None:
            self.clear()
            return 0

        count = self.spawn_count(food_count, max_agents)

        # Random offset within spawn_radius of the source
        angles = rng.random(count) * 2 * np.pi
        radii = rng.random(count) * self.spawn_radius
        self.x = source.x + np.cos(angles) * radii
        self.y = source.y + np.sin(angles) * radii

        self.heading = rng.random(count) * 2 * np.pi
        low, high = self.speed_range
        self.speed = low + rng.random(count) * (high - low)
        return count

    def clear(self) -> None:
        """Drop every particle."""
        self.x = np.zeros(0, dtype=np.float64)
        self.y = np.zeros(0, dtype=np.float64)
        self.heading = np.zeros(0, dtype=np.float64)
        self.speed = np.zeros(0, dtype=np.float64)

    def positions(self) -> np.ndarray:
        """Return an (n, 2) copy of particle positions."""
        return np.column_stack((self.x, self.y))

    def agents(self) -> List[Agent]:
        return [
            Agent(float(x), float(y), float(h), float(s))
            for x, y, h, s in zip(self.x, self.y, self.heading, self.speed)
        ]

    def __len__(self) -> int:
        return len(self.x)

    def __repr__(self) -> str:
        return f"AgentStore(count={len(self)})"
