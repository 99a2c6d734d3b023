"""Summary report generation for the slime mold simulation."""

from typing import List, Dict, Optional, TYPE_CHECKING
from pathlib import Path

if TYPE_CHECKING:
    from ..model.state import SimulationState, SimulationStats


# Iterations the comparison view treats as a complete run
PROGRESS_ITERATIONS = 1000


def similarity(stats: "SimulationStats") -> float:
    """Rough similarity to a reference network: 80% of efficiency, capped at 100."""
    return min(100.0, stats.efficiency * 0.8)


def progress(stats: "SimulationStats") -> float:
    """Percentage of PROGRESS_ITERATIONS completed, capped at 100."""
    return min(100.0, stats.iterations / PROGRESS_ITERATIONS * 100)


def format_distance(length: float) -> str:
    """Rounded map units shown as kilometres (10 units per km)."""
    return f"{round(length) / 10:.2f} km"


class Reporter:
    """Accumulates network statistics and renders a text report."""

    def __init__(self, config_path: str, seed: Optional[int],
                 has_reference: bool = False):
        self.config_path = config_path
        self.seed = seed
        self.has_reference = has_reference
        self.step_metrics: List[Dict] = []
        self.peak_path_length = 0.0
        self.peak_paths = 0
        self.first_network_iteration: Optional[int] = None

    def update(self, state: "SimulationState") -> None:
        """Accumulate metrics per recorded frame."""
        self.step_metrics.append(state.stats.to_dict())

        if state.stats.path_length > self.peak_path_length:
            self.peak_path_length = state.stats.path_length
        if len(state.paths) > self.peak_paths:
            self.peak_paths = len(state.paths)

        # First frame with any extracted edge
        if self.first_network_iteration is None and state.paths:
            self.first_network_iteration = state.iteration

    def mean_efficiency(self) -> float:
        """Average efficiency over recorded frames (0 before any update)."""
        if not self.step_metrics:
            return 0.0
        return sum(m['efficiency'] for m in self.step_metrics) / len(self.step_metrics)

    def generate_summary(self, final_state: "SimulationState",
                         output_dir: Path,
                         csv_enabled: bool,
                         snapshot_enabled: bool,
                         gif_enabled: bool) -> str:
        """Returns formatted text report."""
        stats = final_state.stats
        formed = (f"iteration {self.first_network_iteration}"
                  if self.first_network_iteration is not None else "never")

        lines = [
            "",
            "=" * 80,
            "                  SLIME MOLD NETWORK SIMULATION REPORT",
            "=" * 80,
            f"Configuration: {self.config_path}",
            f"Random Seed: {self.seed if self.seed is not None else 'None (random)'}",
            "",
            "NETWORK METRICS",
            "-" * 40,
            f"Iterations:            {stats.iterations}",
            f"Particles:             {len(final_state.agent_positions)}",
            f"Nodes:                 {stats.nodes}",
            f"Path Edges:            {len(final_state.paths)} (peak {self.peak_paths})",
            f"Path Length:           {format_distance(stats.path_length)} "
            f"(peak {format_distance(self.peak_path_length)})",
            f"Efficiency:            {round(stats.efficiency)}%",
            f"Mean Efficiency:       {round(self.mean_efficiency())}% "
            f"over {len(self.step_metrics)} frames",
            f"Network Formed:        {formed}",
        ]

        if self.has_reference:
            lines.extend([
                "",
                "REFERENCE COMPARISON",
                "-" * 40,
                f"Similarity:            {round(similarity(stats))}%",
                f"Progress:              {round(progress(stats))}%",
            ])

        lines.extend([
            "",
            "OUTPUT FILES",
            "-" * 40,
        ])

        # Output file paths
        if csv_enabled:
            lines.append(f"CSV Log:    {output_dir / 'simulation_log.csv'}")
        else:
            lines.append("CSV Log:    (disabled)")

        if snapshot_enabled:
            lines.append(f"Snapshot:   {output_dir / 'final_state.png'}")
        else:
            lines.append("Snapshot:   (disabled)")

        if gif_enabled:
            lines.append(f"Animation:  {output_dir / 'simulation.gif'}")
        else:
            lines.append("Animation:  (disabled)")

        lines.append("=" * 80)

        return "\n".join(lines)
