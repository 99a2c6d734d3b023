"""Configuration dataclasses and YAML loader for the slime mold simulation."""

from dataclasses import dataclass, field
from typing import List, Tuple, Dict, Any, Optional
from pathlib import Path
import math
import yaml


@dataclass
class GridConfig:
    width: float = 800
    height: float = 600
    cell_size: float = 3  # continuous units per trail cell


@dataclass
class TrailConfig:
    decay_rate: float = 0.97      # multiplicative, in (0, 1)
    deposit_amount: float = 0.08  # added per particle per tick
    path_threshold: float = 0.2   # strict lower bound for path cells


@dataclass
class AgentConfig:
    max_agents: int = 5000
    base_count: int = 2000
    per_food_bonus: int = 600
    spawn_radius: float = 8.0
    speed_min: float = 0.8
    speed_max: float = 1.2
    speed: float = 5.0  # slider value; step scale = speed / 5


@dataclass
class SensorConfig:
    sensor_angle: float = math.pi / 4     # radians
    sensor_distance: float = 9.0
    rotation_angle: float = math.pi / 4   # radians


@dataclass
class FoodConfig:
    sensitivity: float = 5.0
    attraction_radius: float = 80.0
    attraction_gain: float = 3.0


@dataclass
class FoodSpec:
    x: float
    y: float
    category: str = "food"
    name: Optional[str] = None


@dataclass
class ReferenceNetwork:
    """Known real-world network to compare the slime network against."""
    stations: Dict[str, Tuple[float, float]]
    connections: List[Tuple[str, str]]

    def segments(self) -> List[Tuple[Tuple[float, float], Tuple[float, float]]]:
        """Resolve named connections into coordinate pairs, skipping unknown names."""
        return [
            (self.stations[a], self.stations[b])
            for a, b in self.connections
            if a in self.stations and b in self.stations
        ]


@dataclass
class LayoutConfig:
    source: Optional[Tuple[float, float]] = None
    source_name: Optional[str] = None
    food_sources: List[FoodSpec] = field(default_factory=list)
    reference: Optional[ReferenceNetwork] = None


@dataclass
class SimulationConfig:
    grid: GridConfig = field(default_factory=GridConfig)
    trail: TrailConfig = field(default_factory=TrailConfig)
    agents: AgentConfig = field(default_factory=AgentConfig)
    sensors: SensorConfig = field(default_factory=SensorConfig)
    food: FoodConfig = field(default_factory=FoodConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    max_steps: int = 1000
    steps_per_frame: int = 5

    # Export flags (can be overridden by CLI)
    csv_enabled: bool = True
    snapshot_enabled: bool = True
    gif_enabled: bool = False
    quiet: bool = False
    seed: Optional[int] = None
    out_dir: Path = field(default_factory=lambda: Path("./output"))


def default_config() -> SimulationConfig:
    """Configuration with the stock slider values and an empty map."""
    return SimulationConfig()


def validate_config(config: SimulationConfig) -> SimulationConfig:
    """Raise ValueError if any parameter is outside its usable range."""
    if config.grid.width <= 0 or config.grid.height <= 0:
        raise ValueError("grid width and height must be positive")
    if config.grid.cell_size <= 0:
        raise ValueError("grid cell_size must be positive")
    if not 0 < config.trail.decay_rate < 1:
        raise ValueError(f"decay_rate must be in (0, 1), got {config.trail.decay_rate}")
    if config.trail.deposit_amount < 0:
        raise ValueError("deposit_amount must be non-negative")
    if config.agents.max_agents < 0:
        raise ValueError("max_agents must be non-negative")
    if config.agents.spawn_radius < 0:
        raise ValueError("spawn_radius must be non-negative")
    if config.agents.speed_min < 0:
        raise ValueError("speed_min must be non-negative")
    if config.agents.speed_min > config.agents.speed_max:
        raise ValueError("speed_min must not exceed speed_max")
    if config.agents.speed <= 0:
        raise ValueError("speed must be positive")
    if config.food.sensitivity < 0:
        raise ValueError("sensitivity must be non-negative")
    if config.food.attraction_radius <= 0:
        raise ValueError("attraction_radius must be positive")
    if config.food.attraction_gain <= 0:
        raise ValueError("attraction_gain must be positive")
    if config.sensors.sensor_distance < 0:
        raise ValueError("sensor_distance must be non-negative")
    if config.max_steps < 0 or config.steps_per_frame < 1:
        raise ValueError("max_steps must be >= 0 and steps_per_frame >= 1")
    return config


def _parse_point(raw: Any, what: str) -> Tuple[float, float]:
    """Accept [x, y] or {x: .., y: ..}."""
    if isinstance(raw, dict):
        return float(raw['x']), float(raw['y'])
    if isinstance(raw, (list, tuple)) and len(raw) == 2:
        return float(raw[0]), float(raw[1])
    raise ValueError(f"Invalid {what} coordinate: {raw!r}")


def _parse_food_sources(food_raw: List[Dict]) -> List[FoodSpec]:
    """Parse food source specifications from raw YAML data."""
    if not isinstance(food_raw, list) or not all(isinstance(f, dict) for f in food_raw):
        raise ValueError("food_sources must be a list of mappings")
    return [
        FoodSpec(
            x=f['x'],
            y=f['y'],
            category=f.get('category', 'food'),
            name=f.get('name')
        )
        for f in food_raw
    ]


def _parse_reference(ref_raw: Optional[Dict]) -> Optional[ReferenceNetwork]:
    """Parse an optional reference network (named stations + connections)."""
    if not ref_raw:
        return None
    stations = {
        name: _parse_point(point, f"station '{name}'")
        for name, point in _section(ref_raw, 'stations').items()
    }
    connections = []
    for pair in ref_raw.get('connections') or []:
        if not isinstance(pair, list) or len(pair) != 2:
            raise ValueError(f"Connection must name two stations: {pair!r}")
        connections.append((pair[0], pair[1]))
    return ReferenceNetwork(stations=stations, connections=connections)


def _parse_layout(layout_raw: Dict) -> LayoutConfig:
    """
    Parse the map layout.

    The source may be given as a coordinate or as the name of a reference
    station; in the latter case every other station becomes a food source
    unless food_sources is given explicitly.
    """
    reference = _parse_reference(_section(layout_raw, 'reference_network'))
    source_raw = layout_raw.get('source')
    source = None
    source_name = None

    if isinstance(source_raw, str):
        if reference is None or source_raw not in reference.stations:
            raise ValueError(f"Unknown source station: {source_raw}")
        source_name = source_raw
        source = reference.stations[source_raw]
    elif source_raw is not None:
        source = _parse_point(source_raw, "source")

    if 'food_sources' in layout_raw:
        food_sources = _parse_food_sources(layout_raw['food_sources'] or [])
    elif reference is not None:
        food_sources = [
            FoodSpec(x=x, y=y, category='station', name=name)
            for name, (x, y) in reference.stations.items()
            if name != source_name
        ]
    else:
        food_sources = []

    return LayoutConfig(
        source=source,
        source_name=source_name,
        food_sources=food_sources,
        reference=reference
    )


def _section(raw: Dict, name: str) -> Dict:
    """Return a mapping section of raw; empty or missing sections read as {}."""
    section = raw.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Section '{name}' must be a mapping, got {type(section).__name__}")
    return section


def load_config(config_path: Path) -> SimulationConfig:
    """Load and validate YAML configuration file."""
    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError("Configuration file must contain a mapping")

    defaults = SimulationConfig()

    # Parse grid config
    grid_raw = _section(raw, 'grid')
    grid = GridConfig(
        width=grid_raw.get('width', defaults.grid.width),
        height=grid_raw.get('height', defaults.grid.height),
        cell_size=grid_raw.get('cell_size', defaults.grid.cell_size)
    )

    # Parse trail config
    trail_raw = _section(raw, 'trail')
    trail = TrailConfig(
        decay_rate=trail_raw.get('decay_rate', defaults.trail.decay_rate),
        deposit_amount=trail_raw.get('deposit_amount', defaults.trail.deposit_amount),
        path_threshold=trail_raw.get('path_threshold', defaults.trail.path_threshold)
    )

    # Parse agent config
    agents_raw = _section(raw, 'agents')
    agents = AgentConfig(
        max_agents=agents_raw.get('max_agents', defaults.agents.max_agents),
        base_count=agents_raw.get('base_count', defaults.agents.base_count),
        per_food_bonus=agents_raw.get('per_food_bonus', defaults.agents.per_food_bonus),
        spawn_radius=agents_raw.get('spawn_radius', defaults.agents.spawn_radius),
        speed_min=agents_raw.get('speed_min', defaults.agents.speed_min),
        speed_max=agents_raw.get('speed_max', defaults.agents.speed_max),
        speed=agents_raw.get('speed', defaults.agents.speed)
    )

    # Parse sensor geometry (angles in degrees in YAML)
    sensors_raw = _section(raw, 'sensors')
    sensors = SensorConfig(
        sensor_angle=math.radians(sensors_raw.get(
            'sensor_angle_deg', math.degrees(defaults.sensors.sensor_angle))),
        sensor_distance=sensors_raw.get('sensor_distance', defaults.sensors.sensor_distance),
        rotation_angle=math.radians(sensors_raw.get(
            'rotation_angle_deg', math.degrees(defaults.sensors.rotation_angle)))
    )

    # Parse food attraction
    food_raw = _section(raw, 'food')
    food = FoodConfig(
        sensitivity=food_raw.get('sensitivity', defaults.food.sensitivity),
        attraction_radius=food_raw.get('attraction_radius', defaults.food.attraction_radius),
        attraction_gain=food_raw.get('attraction_gain', defaults.food.attraction_gain)
    )

    layout = _parse_layout(_section(raw, 'layout'))

    # Parse simulation and export config (optional)
    sim_raw = _section(raw, 'simulation')
    export_raw = _section(raw, 'export')

    config = SimulationConfig(
        grid=grid,
        trail=trail,
        agents=agents,
        sensors=sensors,
        food=food,
        layout=layout,
        max_steps=sim_raw.get('max_steps', defaults.max_steps),
        steps_per_frame=sim_raw.get('steps_per_frame', defaults.steps_per_frame),
        csv_enabled=export_raw.get('csv', True),
        snapshot_enabled=export_raw.get('snapshot', True),
        gif_enabled=export_raw.get('gif', False),
        seed=sim_raw.get('seed')
    )
    return validate_config(config)
