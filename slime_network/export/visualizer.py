"""Visualization and export for the slime mold simulation."""

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend
import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from matplotlib.colors import to_rgb
from pathlib import Path
from typing import List, Optional, TYPE_CHECKING
from PIL import Image
import io

if TYPE_CHECKING:
    from ..config import ReferenceNetwork
    from ..model.state import SimulationState


class Visualizer:
    """
    Renders trail heat map, extracted paths and map nodes with matplotlib.

    Supports:
    - Single PNG snapshots
    - Animated GIF compilation
    """

    # Color scheme
    COLORS = {
        'background': '#0A0E27',
        'trail': '#FFD700',
        'path': '#FFD700',
        'reference': '#00CED1',
        'source': '#FFD700',
        'food': '#FF6B6B',
        'station': '#FF1493',
        'house': '#FF6B6B',
        'school': '#4ECDC4',
        'hospital': '#FF1493',
        'bus': '#FFA500',
        'park': '#39FF14',
        'market': '#9D4EDD',
        'office': '#00CED1',
    }

    # Paths weaker than this are not drawn as lines
    MIN_DRAWN_STRENGTH = 0.3

    def __init__(self, width: float, height: float, cell_size: float,
                 reference: Optional["ReferenceNetwork"] = None,
                 show_agents: bool = False):
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.reference = reference
        self.show_agents = show_agents
        self.frames: List[Image.Image] = []

    def _heat_map(self, trail_field: np.ndarray) -> np.ndarray:
        """Blend trail intensity over the background colour."""
        rows, cols = trail_field.shape
        base = np.ones((rows, cols, 3))
        base[:, :] = to_rgb(self.COLORS['background'])
        trail_rgb = np.array(to_rgb(self.COLORS['trail']))
        alpha = np.clip(trail_field, 0, 1)[:, :, None] * 0.6
        return np.clip(base * (1 - alpha) + trail_rgb * alpha, 0, 1)

    def _create_figure(self, state: "SimulationState") -> plt.Figure:
        """Create matplotlib figure for state visualization."""
        aspect = self.width / self.height
        fig_height = 6
        fig_width = max(8, fig_height * aspect)
        fig, ax = plt.subplots(figsize=(fig_width, fig_height))

        # Screen convention: y grows downward
        rows, cols = state.trail_field.shape
        ax.imshow(self._heat_map(state.trail_field), origin='upper',
                  aspect='equal',
                  extent=[0, cols * self.cell_size, rows * self.cell_size, 0])

        # Reference network overlay
        if self.reference is not None:
            segments = self.reference.segments()
            if segments:
                ax.add_collection(LineCollection(
                    segments, colors=self.COLORS['reference'],
                    linewidths=2, alpha=0.6
                ))

        # Extracted paths
        strong = [p for p in state.paths if p.strength > self.MIN_DRAWN_STRENGTH]
        if strong:
            segments = [((p.x1, p.y1), (p.x2, p.y2)) for p in strong]
            alphas = np.clip([p.strength for p in strong], 0, 1)
            colors = np.zeros((len(strong), 4))
            colors[:, :3] = to_rgb(self.COLORS['path'])
            colors[:, 3] = alphas
            ax.add_collection(LineCollection(segments, colors=colors,
                                             linewidths=1.5))

        if self.show_agents and len(state.agent_positions):
            ax.scatter(state.agent_positions[:, 0], state.agent_positions[:, 1],
                       s=0.5, c='white', alpha=0.3)

        # Nodes
        for food in state.food_sources:
            color = self.COLORS.get(food.category, self.COLORS['food'])
            ax.plot(food.x, food.y, 'o', color=color, markersize=7,
                    markeredgecolor='white', markeredgewidth=0.5)
        if state.source is not None:
            ax.plot(state.source.x, state.source.y, '*',
                    color=self.COLORS['source'], markersize=14,
                    markeredgecolor='black', markeredgewidth=0.5)

        ax.set_title(f'Iteration {state.iteration} | '
                     f'Paths: {len(state.paths)} | '
                     f'Efficiency: {round(state.stats.efficiency)}%')
        ax.set_xlim(0, self.width)
        ax.set_ylim(self.height, 0)
        ax.set_xticks([])
        ax.set_yticks([])

        plt.tight_layout()
        return fig

    def buffer_frame(self, state: "SimulationState") -> None:
        """Store frame for GIF generation."""
        fig = self._create_figure(state)

        # Convert to PIL Image
        buf = io.BytesIO()
        fig.savefig(buf, format='png', dpi=80)
        buf.seek(0)
        img = Image.open(buf).copy()
        self.frames.append(img)
        buf.close()
        plt.close(fig)

    def save_snapshot(self, state: "SimulationState", output_path: Path) -> None:
        """Save single PNG image of current state."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig = self._create_figure(state)
        fig.savefig(output_path, dpi=150, bbox_inches='tight')
        plt.close(fig)

    def generate_gif(self, output_path: Path, fps: int = 10) -> None:
        """Compile buffered frames into animated GIF."""
        if not self.frames:
            return

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        duration = int(1000 / fps)  # milliseconds per frame

        self.frames[0].save(
            output_path,
            save_all=True,
            append_images=self.frames[1:],
            duration=duration,
            loop=0
        )

    def clear_frames(self) -> None:
        """Clear buffered frames."""
        self.frames.clear()
