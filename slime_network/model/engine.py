"""Simulation controller for the slime mold network simulation."""

from enum import Enum
from typing import List, Optional, Tuple, TYPE_CHECKING
import numpy as np

from .trail_field import TrailField
from .agent import AgentStore
from .sites import SiteMap, SourcePoint, FoodSource
from .steering import FoodAttraction, Steering
from .movement import MovementIntegrator
from .paths import PathExtractor
from .state import PathEdge, SimulationState, SimulationStats

if TYPE_CHECKING:
    from ..config import SimulationConfig, LayoutConfig


class RunState(Enum):
    """Run/pause flag of the controller."""
    IDLE = "idle"
    RUNNING = "running"


class SimulationEngine:
    """
    Orchestrates the tick-driven slime mold simulation.

    Two orthogonal pieces of state:
    1. run_state: IDLE or RUNNING (start/stop)
    2. session data: particles, trail field, paths and iteration count,
       kept across stop/start and only cleared by reset()

    Per tick: steer -> move -> deposit -> diffuse/decay -> extract paths.
    """

    def __init__(self, config: "SimulationConfig",
                 rng: Optional[np.random.Generator] = None):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)

        self.run_state = RunState.IDLE
        self.iteration = 0
        self.max_agents = config.agents.max_agents
        self.deposit_amount = config.trail.deposit_amount

        self.sites = SiteMap()

        self.trail = TrailField(
            config.grid.width, config.grid.height,
            config.grid.cell_size,
            config.trail.decay_rate
        )

        self.agents = AgentStore(
            base_count=config.agents.base_count,
            per_food_bonus=config.agents.per_food_bonus,
            spawn_radius=config.agents.spawn_radius,
            speed_range=(config.agents.speed_min, config.agents.speed_max)
        )

        self.steering = Steering(
            FoodAttraction(
                sensitivity=config.food.sensitivity,
                attraction_radius=config.food.attraction_radius,
                attraction_gain=config.food.attraction_gain
            ),
            sensor_angle=config.sensors.sensor_angle,
            sensor_distance=config.sensors.sensor_distance,
            rotation_angle=config.sensors.rotation_angle
        )

        self.movement = MovementIntegrator(
            config.grid.width, config.grid.height, config.agents.speed
        )

        self.extractor = PathExtractor(
            config.grid.cell_size, config.trail.path_threshold
        )
        self._paths: List[PathEdge] = []

        self.load_layout(config.layout)

    # ----- map elements -------------------------------------------------

    def load_layout(self, layout: "LayoutConfig") -> None:
        """Replace the map's source and food sources with a configured layout."""
        self.sites.clear()
        if layout.source is not None:
            self.sites.place_source(*layout.source)
        for food in layout.food_sources:
            self.sites.add_food(food.x, food.y, food.category)

    def set_source(self, x: float, y: float) -> None:
        """Set (or move) the network origin."""
        self.sites.source = SourcePoint(x, y)

    def add_food_source(self, x: float, y: float,
                        category: str = "food") -> FoodSource:
        return self.sites.add_food(x, y, category)

    def clear_sites(self) -> None:
        """Remove source and food sources; session data is untouched."""
        self.sites.clear()

    @property
    def source(self) -> Optional[SourcePoint]:
        return self.sites.source

    @property
    def food_sources(self) -> Tuple[FoodSource, ...]:
        return tuple(self.sites.food_sources)

    # ----- lifecycle ----------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self.run_state == RunState.RUNNING

    @property
    def has_session_data(self) -> bool:
        """True when anything a reset() would clear is present."""
        return (len(self.agents) > 0 or self.iteration > 0
                or bool(self._paths) or not self.trail.is_empty())

    def start(self) -> bool:
        """
        Begin (or resume) a run with a fresh particle population.

        Returns False and leaves all state untouched when the map has no
        source or no food. The iteration counter is not reset.
        """
        if not self.sites.is_ready():
            return False

        self.run_state = RunState.RUNNING
        self.agents.spawn(
            self.sites.source,
            len(self.sites.food_sources),
            self.max_agents,
            self.rng
        )
        return True

    def stop(self) -> None:
        """Pause; particles, field, paths and iteration count are kept."""
        self.run_state = RunState.IDLE

    def reset(self) -> None:
        """Clear all session data and return to IDLE."""
        self.agents.clear()
        self._paths = []
        self.trail.reset()
        self.iteration = 0
        self.run_state = RunState.IDLE

    def step(self) -> bool:
        """
        Execute one tick.

        1. Sense and steer
        2. Move with reflective boundaries
        3. Deposit trail chemical
        4. Diffuse and decay the field
        5. Extract the path graph

        Returns False without doing anything unless running with particles.
        """
        if not self.is_running or len(self.agents) == 0:
            return False

        food = self.sites.food_sources
        self.steering.steer(self.agents, self.trail, food, self.rng)
        self.movement.move(self.agents)
        self.trail.deposit_many(self.agents.x, self.agents.y,
                                self.deposit_amount)
        self.trail.diffuse_and_decay()
        self._paths = self.extractor.extract(self.trail.field)

        self.iteration += 1
        return True

    def run(self, steps: int) -> int:
        """Call step() up to steps times; returns how many ticks ran."""
        done = 0
        for _ in range(steps):
            if not self.step():
                break
            done += 1
        return done

    # ----- live parameters ----------------------------------------------

    def update_parameters(self, sensitivity: Optional[float] = None,
                          decay_rate: Optional[float] = None,
                          speed: Optional[float] = None) -> None:
        """Apply slider edits; takes effect from the next tick."""
        if sensitivity is not None:
            if sensitivity < 0:
                raise ValueError(f"sensitivity must be non-negative, got {sensitivity}")
            self.steering.attraction.sensitivity = sensitivity
        if decay_rate is not None:
            if not 0 < decay_rate < 1:
                raise ValueError(f"decay_rate must be in (0, 1), got {decay_rate}")
            self.trail.decay_rate = decay_rate
        if speed is not None:
            if speed <= 0:
                raise ValueError(f"speed must be positive, got {speed}")
            self.movement.speed = speed

    # ----- read-only views ----------------------------------------------

    @property
    def field(self) -> np.ndarray:
        """Copy of the trail grid for heat-map rendering."""
        return self.trail.snapshot()

    @property
    def paths(self) -> Tuple[PathEdge, ...]:
        return tuple(self._paths)

    def get_stats(self) -> SimulationStats:
        """Node count, total path length, efficiency and iteration count."""
        return SimulationStats.from_paths(
            self._paths, len(self.sites.food_sources), self.iteration
        )

    def snapshot(self) -> SimulationState:
        """Create immutable snapshot of current simulation state."""
        return SimulationState(
            iteration=self.iteration,
            running=self.is_running,
            source=self.sites.source,
            food_sources=self.food_sources,
            agent_positions=self.agents.positions(),
            trail_field=self.trail.snapshot(),
            paths=self.paths,
            stats=self.get_stats()
        )

    def is_finished(self) -> bool:
        """Check if a batch run should terminate."""
        return (self.iteration >= self.config.max_steps or
                not self.is_running or len(self.agents) == 0)
