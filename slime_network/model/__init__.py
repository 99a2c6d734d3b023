"""Model package for the slime mold network simulation."""

from .state import PathEdge, SimulationStats, SimulationState
from .sites import SourcePoint, FoodSource, SiteMap
from .trail_field import TrailField
from .agent import Agent, AgentStore
from .steering import FoodAttraction, Steering
from .movement import MovementIntegrator
from .paths import PathExtractor
from .engine import SimulationEngine, RunState

__all__ = [
    'PathEdge',
    'SimulationStats',
    'SimulationState',
    'SourcePoint',
    'FoodSource',
    'SiteMap',
    'TrailField',
    'Agent',
    'AgentStore',
    'FoodAttraction',
    'Steering',
    'MovementIntegrator',
    'PathExtractor',
    'SimulationEngine',
    'RunState',
]
