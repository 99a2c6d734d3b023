"""State snapshot dataclasses for the slime mold simulation."""

from dataclasses import dataclass, asdict
from typing import List, Dict, Optional, Tuple
import math
import numpy as np

from .sites import FoodSource, SourcePoint


@dataclass(frozen=True)
class PathEdge:
    """Undirected edge between two adjacent above-threshold cells."""
    x1: float
    y1: float
    x2: float
    y2: float
    strength: float  # mean of the two endpoint cell values

    @property
    def length(self) -> float:
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)


@dataclass(frozen=True)
class SimulationStats:
    """Network statistics at one point in time."""
    nodes: int
    path_length: float
    efficiency: float
    iterations: int

    @classmethod
    def from_paths(cls, paths: List[PathEdge], food_count: int,
                   iterations: int) -> "SimulationStats":
        """
        Compute node count, total edge length and efficiency.

        efficiency = min(100, food / (length / 100 or 1) * 100)

        With no paths the divisor falls back to 1, so any map with food
        reports 100 before a network has formed.
        """
        total_length = sum(p.length for p in paths)
        if food_count > 0:
            efficiency = min(100.0, food_count / (total_length / 100 or 1) * 100)
        else:
            efficiency = 0.0
        return cls(
            nodes=food_count + 1,
            path_length=total_length,
            efficiency=efficiency,
            iterations=iterations
        )

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass
class SimulationState:
    """Complete read-only snapshot of the simulation at one iteration."""
    iteration: int
    running: bool
    source: Optional[SourcePoint]
    food_sources: Tuple[FoodSource, ...]
    agent_positions: np.ndarray  # (n, 2) copy of particle positions
    trail_field: np.ndarray  # Copy of trail grid
    paths: Tuple[PathEdge, ...]
    stats: SimulationStats

    def to_csv_row(self) -> Dict:
        """Convert to CSV-compatible format."""
        return {
            "step": self.iteration,
            "agents": len(self.agent_positions),
            "paths": len(self.paths),
            "path_length": round(self.stats.path_length, 3),
            "efficiency": round(self.stats.efficiency, 3),
            "nodes": self.stats.nodes,
        }
