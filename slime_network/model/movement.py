"""Movement integration with reflective boundaries."""

import numpy as np

from .agent import AgentStore


class MovementIntegrator:
    """
    Advances particles along their heading and keeps them in the domain.

    Step length is speed * speed_scale, where speed_scale = speed / 5 so
    the default speed setting of 5 moves a unit-speed particle one unit.
    Crossing a vertical wall clamps x and mirrors the heading (pi - h);
    crossing a horizontal wall clamps y and negates the heading.
    """

    REFERENCE_SPEED = 5.0

    def __init__(self, width: float, height: float, speed: float = 5.0):
        self.width = width
        self.height = height
        self.speed = speed

    @property
    def speed_scale(self) -> float:
        return self.speed / self.REFERENCE_SPEED

    def move(self, agents: AgentStore) -> None:
        """Move every particle in place."""
        if len(agents) == 0:
            return

        step = agents.speed * self.speed_scale
        x = agents.x + np.cos(agents.heading) * step
        y = agents.y + np.sin(agents.heading) * step
        heading = agents.heading.copy()

        below = x < 0
        above = x >= self.width
        x[below] = 0.0
        x[above] = self.width - 1
        flip_x = below | above
        heading[flip_x] = np.pi - heading[flip_x]

        below = y < 0
        above = y >= self.height
        y[below] = 0.0
        y[above] = self.height - 1
        flip_y = below | above
        heading[flip_y] = -heading[flip_y]

        agents.x = x
        agents.y = y
        agents.heading = heading
