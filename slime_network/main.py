#!/usr/bin/env python3
"""
Slime Mold Network Simulation

A Physarum polycephalum style network optimiser: particles lay and follow
a decaying chemical trail until it settles into a network joining an
origin to a set of food sources.

Usage:
    slime-network --config configs/builder.yaml [options]

Examples:
    slime-network --config configs/builder.yaml
    slime-network --config configs/tokyo.yaml --gif --out-dir results/
    slime-network --config configs/builder.yaml --no-csv --no-snapshot --quiet
    slime-network --config configs/tokyo.yaml --seed 42 --decay 0.95
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import yaml

from slime_network.config import load_config
from slime_network.model.engine import SimulationEngine
from slime_network.export.csv_writer import CSVWriter
from slime_network.export.visualizer import Visualizer
from slime_network.export.reporter import Reporter


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Slime Mold Network Simulation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    slime-network --config configs/builder.yaml
    slime-network --config configs/tokyo.yaml --gif --out-dir results/
    slime-network --config configs/builder.yaml --no-csv --no-snapshot --quiet
    slime-network --config configs/tokyo.yaml --seed 42 --decay 0.95
        """
    )

    # Required arguments
    parser.add_argument('--config', type=Path, required=True,
                        help='Path to YAML configuration file')

    # Optional overrides
    parser.add_argument('--steps', type=int, default=None,
                        help='Override max simulation iterations')
    parser.add_argument('--out-dir', type=Path, default=Path('./output'),
                        help='Output directory for exports (default: ./output)')
    parser.add_argument('--sensitivity', type=float, default=None,
                        help='Override food sensitivity (default 5)')
    parser.add_argument('--decay', type=float, default=None,
                        help='Override trail decay rate, in (0, 1)')
    parser.add_argument('--speed', type=float, default=None,
                        help='Override particle speed setting (default 5)')

    # Export toggles
    parser.add_argument('--csv', dest='csv', action='store_true', default=None,
                        help='Enable CSV export (default)')
    parser.add_argument('--no-csv', dest='csv', action='store_false',
                        help='Disable CSV export')

    parser.add_argument('--snapshot', dest='snapshot', action='store_true', default=None,
                        help='Enable final snapshot (default)')
    parser.add_argument('--no-snapshot', dest='snapshot', action='store_false',
                        help='Disable final snapshot')

    parser.add_argument('--gif', action='store_true', default=False,
                        help='Enable GIF animation export')

    parser.add_argument('--quiet', action='store_true', default=False,
                        help='Suppress stdout output')

    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed for reproducibility')

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    # Load configuration
    try:
        config = load_config(args.config)
    except FileNotFoundError:
        print(f"Error: Configuration file not found: {args.config}", file=sys.stderr)
        return 1
    except (yaml.YAMLError, ValueError, KeyError, TypeError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    # Apply CLI overrides
    if args.steps is not None:
        config.max_steps = args.steps
    if args.csv is not None:
        config.csv_enabled = args.csv
    if args.snapshot is not None:
        config.snapshot_enabled = args.snapshot
    if args.gif:
        config.gif_enabled = True
    config.quiet = args.quiet
    if args.seed is not None:
        config.seed = args.seed
    config.out_dir = args.out_dir

    engine = SimulationEngine(config)
    try:
        engine.update_parameters(
            sensitivity=args.sensitivity,
            decay_rate=args.decay,
            speed=args.speed
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not config.quiet:
        print(f"Initializing simulation...")
        print(f"  Grid: {engine.trail.cols}x{engine.trail.rows} cells "
              f"({config.grid.width}x{config.grid.height}, cell {config.grid.cell_size})")
        print(f"  Food sources: {len(engine.food_sources)}")
        print(f"  Max iterations: {config.max_steps}")

    if not engine.start():
        print("Error: layout needs a source point and at least one food source",
              file=sys.stderr)
        return 1

    if not config.quiet:
        print(f"  Spawned: {len(engine.agents)} particles")

    # Initialize exporters
    csv_writer = None
    if config.csv_enabled:
        csv_writer = CSVWriter(config.out_dir / 'simulation_log.csv')
        csv_writer.open()

    visualizer = Visualizer(
        config.grid.width, config.grid.height, config.grid.cell_size,
        reference=config.layout.reference
    )

    reporter = Reporter(str(args.config), config.seed,
                        has_reference=config.layout.reference is not None)

    # Main simulation loop
    if not config.quiet:
        print(f"\nRunning simulation...")

    final_state = None
    try:
        while not engine.is_finished():
            remaining = config.max_steps - engine.iteration
            engine.run(min(config.steps_per_frame, remaining))
            state = engine.snapshot()
            final_state = state

            # Export CSV
            if csv_writer:
                csv_writer.append(state)

            # Buffer GIF frame (every 5 frames to reduce memory)
            if config.gif_enabled:
                frame = state.iteration // config.steps_per_frame
                if frame % 5 == 0 or engine.is_finished():
                    visualizer.buffer_frame(state)

            # Update reporter
            reporter.update(state)

            # Progress indicator
            if not config.quiet and state.iteration % 100 == 0:
                print(f"  Iteration {state.iteration}: {len(state.paths)} path edges, "
                      f"efficiency {round(state.stats.efficiency)}%")

    except KeyboardInterrupt:
        if not config.quiet:
            print("\nSimulation interrupted by user.")

    engine.stop()

    # Cleanup and final exports
    if csv_writer:
        csv_writer.close()
        if not config.quiet:
            print(f"\nCSV saved: {config.out_dir / 'simulation_log.csv'}")

    if config.snapshot_enabled and final_state:
        snapshot_path = config.out_dir / 'final_state.png'
        visualizer.save_snapshot(final_state, snapshot_path)
        if not config.quiet:
            print(f"Snapshot saved: {snapshot_path}")

    if config.gif_enabled:
        gif_path = config.out_dir / 'simulation.gif'
        if not config.quiet:
            print(f"Generating GIF ({len(visualizer.frames)} frames)...")
        visualizer.generate_gif(gif_path, fps=10)
        if not config.quiet:
            print(f"Animation saved: {gif_path}")

    # Print summary report
    if not config.quiet and final_state:
        report = reporter.generate_summary(
            final_state,
            config.out_dir,
            config.csv_enabled,
            config.snapshot_enabled,
            config.gif_enabled
        )
        print(report)

    return 0


if __name__ == '__main__':
    sys.exit(main())
