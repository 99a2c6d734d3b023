"""
Tests for model/trail_field.py

Deposition, sampling and the diffusion/decay pass.
"""

import numpy as np
import pytest

from slime_network.model.trail_field import TrailField


@pytest.fixture
def field():
    return TrailField(width=20, height=20, cell_size=1, decay_rate=0.9)


class TestGeometry:
    """Tests for grid sizing and cell lookup."""

    def test_grid_shape(self):
        f = TrailField(width=800, height=600, cell_size=3, decay_rate=0.97)
        assert f.cols == 266
        assert f.rows == 200
        assert f.field.shape == (200, 266)
        assert not np.any(f.field)

    def test_cell_of(self):
        f = TrailField(width=30, height=30, cell_size=3, decay_rate=0.9)
        assert f.cell_of(0.0, 0.0) == (0, 0)
        assert f.cell_of(7.5, 4.0) == (2, 1)
        assert f.cell_of(-0.1, 4.0) is None
        assert f.cell_of(30.0, 4.0) is None

    def test_partial_trailing_cell_is_outside(self):
        # 10 units with 3-unit cells leaves x in [9, 10) without a cell
        f = TrailField(width=10, height=10, cell_size=3, decay_rate=0.9)
        assert f.cols == 3
        assert f.cell_of(9.5, 1.0) is None


class TestDeposit:
    """Tests for deposit and deposit_many."""

    def test_deposit_adds_to_cell(self, field):
        field.deposit(5.5, 7.2, 0.08)
        assert field.field[7, 5] == pytest.approx(0.08)
        assert field.field.sum() == pytest.approx(0.08)

    def test_deposit_clamps_at_one(self, field):
        for _ in range(100):
            field.deposit(3.0, 3.0, 0.08)
        assert field.field[3, 3] == 1.0

    def test_deposit_out_of_bounds_ignored(self, field):
        field.deposit(-1.0, 5.0, 0.5)
        field.deposit(5.0, 20.0, 0.5)
        field.deposit(20.0, 5.0, 0.5)
        assert not np.any(field.field)

    def test_deposit_many_accumulates_shared_cells(self, field):
        xs = np.array([2.1, 2.9, 4.0])
        ys = np.array([2.5, 2.2, 4.0])
        field.deposit_many(xs, ys, 0.1)
        assert field.field[2, 2] == pytest.approx(0.2)
        assert field.field[4, 4] == pytest.approx(0.1)

    def test_deposit_many_never_exceeds_one(self, field):
        xs = np.full(500, 6.5)
        ys = np.full(500, 6.5)
        field.deposit_many(xs, ys, 0.08)
        assert field.field[6, 6] == 1.0
        assert field.field.max() <= 1.0

    def test_deposit_many_skips_outside(self, field):
        field.deposit_many(np.array([-5.0, 25.0]), np.array([1.0, 1.0]), 0.5)
        assert not np.any(field.field)


class TestSample:
    """Tests for sample and sample_many."""

    def test_sample_reads_cell(self, field):
        field.field[4, 9] = 0.75
        assert field.sample(9.9, 4.1) == pytest.approx(0.75)

    @pytest.mark.parametrize("x,y", [(-0.01, 5), (20, 5), (5, -3), (5, 20), (1e6, 1e6)])
    def test_sample_outside_is_zero(self, field, x, y):
        field.field[:] = 0.5
        assert field.sample(x, y) == 0.0

    def test_sample_many(self, field):
        field.field[1, 1] = 0.3
        values = field.sample_many(np.array([1.5, -1.0, 30.0]),
                                   np.array([1.5, 1.0, 1.0]))
        assert np.allclose(values, [0.3, 0.0, 0.0])


class TestDiffuseAndDecay:
    """Tests for the diffusion kernel and decay."""

    def test_kernel_sums_to_one(self):
        assert TrailField.DIFFUSION_KERNEL.sum() == pytest.approx(1.0)

    def test_uniform_interior_decays_geometrically(self, field):
        field.field[:] = 0.5
        field.diffuse_and_decay()
        # Cells whose 3x3 neighbourhood is entirely inside the old grid
        assert np.allclose(field.field[1:-1, 1:-1], 0.5 * 0.9)

    def test_repeated_decay_follows_power_law(self):
        f = TrailField(width=30, height=30, cell_size=1, decay_rate=0.8)
        f.field[:] = 1.0
        for _ in range(3):
            f.diffuse_and_decay()
        # The zero border creeps inward one ring per step
        assert np.allclose(f.field[3:-3, 3:-3], 0.8 ** 3)

    def test_border_is_zeroed(self, field):
        field.field[:] = 1.0
        field.diffuse_and_decay()
        assert not np.any(field.field[0, :])
        assert not np.any(field.field[-1, :])
        assert not np.any(field.field[:, 0])
        assert not np.any(field.field[:, -1])

    def test_point_spreads_with_kernel_weights(self, field):
        field.field[10, 10] = 1.0
        field.diffuse_and_decay()
        expected = TrailField.DIFFUSION_KERNEL * 0.9
        assert np.allclose(field.field[9:12, 9:12], expected)
        assert field.field.sum() == pytest.approx(0.9)

    def test_not_in_place(self, field):
        before = field.field
        field.field[10, 10] = 1.0
        field.diffuse_and_decay()
        assert field.field is not before
        assert before[10, 10] == 1.0

    def test_values_stay_in_unit_interval(self, field):
        rng = np.random.default_rng(3)
        field.field[:] = rng.random(field.field.shape)
        field.diffuse_and_decay()
        assert field.field.min() >= 0.0
        assert field.field.max() <= 1.0


class TestReset:
    def test_reset_zeroes(self, field):
        field.field[:] = 0.4
        assert not field.is_empty()
        field.reset()
        assert field.is_empty()

    def test_snapshot_is_copy(self, field):
        snap = field.snapshot()
        snap[0, 0] = 1.0
        assert field.field[0, 0] == 0.0
