"""
Tests for the command line runner in main.py
"""

import csv

import pytest

from slime_network.main import main, parse_args


SMALL_CONFIG = """
grid:
  width: 90
  height: 90
  cell_size: 3
agents:
  max_agents: 120
  base_count: 100
  per_food_bonus: 10
layout:
  source: [45, 45]
  food_sources:
    - {x: 20, y: 20}
    - {x: 70, y: 60, category: school}
simulation:
  max_steps: 20
  steps_per_frame: 5
"""


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / 'small.yaml'
    path.write_text(SMALL_CONFIG)
    return path


class TestParseArgs:
    def test_defaults(self, config_path):
        args = parse_args(['--config', str(config_path)])
        assert args.csv is None
        assert args.snapshot is None
        assert args.gif is False
        assert args.seed is None

    def test_toggles(self, config_path):
        args = parse_args(['--config', str(config_path), '--no-csv',
                           '--no-snapshot', '--decay', '0.9'])
        assert args.csv is False
        assert args.snapshot is False
        assert args.decay == 0.9


class TestMain:
    """End-to-end runs of main()."""

    def test_full_run(self, config_path, tmp_path):
        out = tmp_path / 'out'
        code = main(['--config', str(config_path), '--out-dir', str(out),
                     '--seed', '1', '--quiet'])
        assert code == 0

        with open(out / 'simulation_log.csv', newline='') as f:
            rows = list(csv.DictReader(f))
        # 20 iterations recorded every 5
        assert [int(r['step']) for r in rows] == [5, 10, 15, 20]
        assert (out / 'final_state.png').exists()
        assert not (out / 'simulation.gif').exists()

    def test_steps_override_and_gif(self, config_path, tmp_path):
        out = tmp_path / 'out'
        code = main(['--config', str(config_path), '--out-dir', str(out),
                     '--steps', '7', '--gif', '--no-snapshot', '--quiet'])
        assert code == 0

        with open(out / 'simulation_log.csv', newline='') as f:
            rows = list(csv.DictReader(f))
        assert [int(r['step']) for r in rows] == [5, 7]
        assert (out / 'simulation.gif').exists()
        assert not (out / 'final_state.png').exists()

    def test_prints_report(self, config_path, tmp_path, capsys):
        code = main(['--config', str(config_path), '--out-dir', str(tmp_path),
                     '--no-csv', '--no-snapshot', '--steps', '5'])
        assert code == 0
        out = capsys.readouterr().out
        assert 'Spawned: 120 particles' in out
        assert 'SLIME MOLD NETWORK SIMULATION REPORT' in out

    def test_missing_config(self, tmp_path, capsys):
        code = main(['--config', str(tmp_path / 'missing.yaml'), '--quiet'])
        assert code == 1
        assert 'not found' in capsys.readouterr().err

    def test_invalid_config(self, tmp_path, capsys):
        path = tmp_path / 'bad.yaml'
        path.write_text("trail: {decay_rate: 2}\n")
        assert main(['--config', str(path), '--quiet']) == 1
        assert 'Error loading config' in capsys.readouterr().err

    @pytest.mark.parametrize("text", [
        "grid: [800, 600\n",
        "grid: [1, 2]\n",
        "- grid\n- layout\n",
        "layout: {food_sources: {x: 1, y: 2}}\n",
    ])
    def test_malformed_config(self, tmp_path, capsys, text):
        path = tmp_path / 'malformed.yaml'
        path.write_text(text)
        assert main(['--config', str(path), '--quiet']) == 1
        assert 'Error loading config' in capsys.readouterr().err

    def test_empty_sections(self, tmp_path, capsys):
        path = tmp_path / 'empty.yaml'
        path.write_text("grid:\nlayout:\n")
        code = main(['--config', str(path), '--out-dir', str(tmp_path), '--quiet'])
        assert code == 1
        assert 'source point' in capsys.readouterr().err

    def test_layout_without_food(self, tmp_path, capsys):
        path = tmp_path / 'nofood.yaml'
        path.write_text("layout: {source: [10, 10]}\n")
        code = main(['--config', str(path), '--out-dir', str(tmp_path), '--quiet'])
        assert code == 1
        assert 'source point' in capsys.readouterr().err

    def test_invalid_override(self, config_path, tmp_path):
        code = main(['--config', str(config_path), '--out-dir', str(tmp_path),
                     '--decay', '1.5', '--quiet'])
        assert code == 1
