"""Three-sensor sensing and steering for slime particles."""

from typing import Sequence
import numpy as np

from .trail_field import TrailField
from .sites import FoodSource
from .agent import AgentStore


class FoodAttraction:
    """
    Chemical signal emitted by food sources.

    Each food within attraction_radius of a point adds
        (1 - d / attraction_radius) * attraction_gain * (sensitivity / reference)
    so the bonus falls off linearly to zero at the radius edge.
    """

    def __init__(self, sensitivity: float = 5.0,
                 attraction_radius: float = 80.0,
                 attraction_gain: float = 3.0,
                 reference_sensitivity: float = 5.0):
        self.sensitivity = sensitivity
        self.attraction_radius = attraction_radius
        self.attraction_gain = attraction_gain
        self.reference_sensitivity = reference_sensitivity

    @property
    def scale(self) -> float:
        return self.attraction_gain * (self.sensitivity / self.reference_sensitivity)

    def at(self, xs: np.ndarray, ys: np.ndarray,
           food_sources: Sequence[FoodSource]) -> np.ndarray:
        """Return the summed food bonus at each point."""
        xs = np.asarray(xs, dtype=np.float64)
        ys = np.asarray(ys, dtype=np.float64)
        bonus = np.zeros(xs.shape, dtype=np.float64)
        for food in food_sources:
            dist = np.hypot(food.x - xs, food.y - ys)
            near = dist < self.attraction_radius
            bonus[near] += (1 - dist[near] / self.attraction_radius) * self.scale
        return bonus


class Steering:
    """
    Greedy, noisy hill-climb over the trail + food potential.

    Sensors sit sensor_distance ahead of each particle at heading,
    heading - sensor_angle (left) and heading + sensor_angle (right).
    Rules, first match wins:
        F > L and F > R  -> keep heading
        F < L and F < R  -> random turn in +/- rotation_angle
        L > R            -> turn left by rotation_angle * U(0.5, 1)
        R > L            -> turn right by rotation_angle * U(0.5, 1)
        otherwise (ties) -> jitter in +/- rotation_angle / 2
    """

    def __init__(self, attraction: FoodAttraction,
                 sensor_angle: float = np.pi / 4,
                 sensor_distance: float = 9.0,
                 rotation_angle: float = np.pi / 4):
        self.attraction = attraction
        self.sensor_angle = sensor_angle
        self.sensor_distance = sensor_distance
        self.rotation_angle = rotation_angle

    def sense(self, field: TrailField, xs: np.ndarray, ys: np.ndarray,
              angles: np.ndarray,
              food_sources: Sequence[FoodSource]) -> np.ndarray:
        """
        Sample trail + food signal one sensor_distance along each angle.

        Points outside the domain read 0 in total, food bonus included.
        """
        sx = xs + np.cos(angles) * self.sensor_distance
        sy = ys + np.sin(angles) * self.sensor_distance
        _, _, inside = field.cell_indices(sx, sy)
        values = field.sample_many(sx, sy)
        if food_sources:
            values += self.attraction.at(sx, sy, food_sources)
        values[~inside] = 0.0
        return values

    def steer(self, agents: AgentStore, field: TrailField,
              food_sources: Sequence[FoodSource],
              rng: np.random.Generator) -> None:
        """Update every particle's heading in place."""
        n = len(agents)
        if n == 0:
            return

        heading = agents.heading
        front = self.sense(field, agents.x, agents.y, heading, food_sources)
        left = self.sense(field, agents.x, agents.y,
                          heading - self.sensor_angle, food_sources)
        right = self.sense(field, agents.x, agents.y,
                           heading + self.sensor_angle, food_sources)

        # One uniform draw per particle, interpreted per rule
        u = rng.random(n)

        forward_best = (front > left) & (front > right)
        forward_worst = ~forward_best & (front < left) & (front < right)
        undecided = ~(forward_best | forward_worst)
        turn_left = undecided & (left > right)
        turn_right = undecided & (right > left)
        tied = undecided & ~(turn_left | turn_right)

        delta = np.zeros(n, dtype=np.float64)
        delta[forward_worst] = (u[forward_worst] - 0.5) * self.rotation_angle * 2
        delta[turn_left] = -self.rotation_angle * (u[turn_left] * 0.5 + 0.5)
        delta[turn_right] = self.rotation_angle * (u[turn_right] * 0.5 + 0.5)
        delta[tied] = (u[tied] - 0.5) * self.rotation_angle

        agents.heading = heading + delta
