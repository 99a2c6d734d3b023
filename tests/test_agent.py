"""
Tests for model/agent.py

Spawn policy and population storage.
"""

import numpy as np
import pytest

from slime_network.model.agent import Agent, AgentStore
from slime_network.model.sites import SourcePoint


@pytest.fixture
def rng():
    return np.random.default_rng(42)


class TestSpawnCount:
    """Tests for the count formula."""

    def test_base_plus_bonus(self):
        store = AgentStore(base_count=2000, per_food_bonus=600)
        assert store.spawn_count(food_count=2, max_agents=5000) == 3200

    def test_capped_by_max_agents(self):
        store = AgentStore(base_count=2000, per_food_bonus=600)
        assert store.spawn_count(food_count=15, max_agents=2000) == 2000
        assert store.spawn_count(food_count=10, max_agents=5000) == 5000

    def test_zero_food(self):
        store = AgentStore(base_count=50, per_food_bonus=10)
        assert store.spawn_count(food_count=0, max_agents=100) == 50


class TestSpawn:
    """Tests for AgentStore.spawn."""

    def test_scenario_two_food_sources(self, rng):
        store = AgentStore(base_count=2000, per_food_bonus=600, spawn_radius=8)
        count = store.spawn(SourcePoint(100, 100), food_count=2,
                            max_agents=5000, rng=rng)

        assert count == 3200
        assert len(store) == 3200
        dist = np.hypot(store.x - 100, store.y - 100)
        assert np.all(dist <= 8)

    def test_headings_and_speeds_in_range(self, rng):
        store = AgentStore(base_count=500, per_food_bonus=0)
        store.spawn(SourcePoint(50, 50), food_count=1, max_agents=1000, rng=rng)

        assert np.all(store.heading >= 0)
        assert np.all(store.heading < 2 * np.pi)
        assert np.all(store.speed >= 0.8)
        assert np.all(store.speed < 1.2)

    def test_no_source_spawns_nothing(self, rng):
        store = AgentStore()
        assert store.spawn(None, food_count=3, max_agents=5000, rng=rng) == 0
        assert len(store) == 0

    def test_respawn_replaces_population(self, rng):
        store = AgentStore(base_count=100, per_food_bonus=0)
        store.spawn(SourcePoint(10, 10), 1, 1000, rng)
        store.spawn(SourcePoint(500, 500), 1, 1000, rng)

        assert len(store) == 100
        assert np.all(np.hypot(store.x - 500, store.y - 500) <= store.spawn_radius)

    def test_same_seed_same_population(self):
        a = AgentStore(base_count=50, per_food_bonus=0)
        b = AgentStore(base_count=50, per_food_bonus=0)
        a.spawn(SourcePoint(20, 20), 1, 100, np.random.default_rng(7))
        b.spawn(SourcePoint(20, 20), 1, 100, np.random.default_rng(7))

        assert np.array_equal(a.x, b.x)
        assert np.array_equal(a.heading, b.heading)
        assert np.array_equal(a.speed, b.speed)


class TestViews:
    """Tests for clear, positions and agents."""

    def test_clear(self, rng):
        store = AgentStore(base_count=10, per_food_bonus=0)
        store.spawn(SourcePoint(5, 5), 1, 10, rng)
        store.clear()
        assert len(store) == 0
        assert store.positions().shape == (0, 2)

    def test_agents_snapshot(self, rng):
        store = AgentStore(base_count=3, per_food_bonus=0)
        store.spawn(SourcePoint(5, 5), 1, 10, rng)
        agents = store.agents()

        assert len(agents) == 3
        assert all(isinstance(a, Agent) for a in agents)
        assert agents[0].x == pytest.approx(store.x[0])
        assert agents[2].heading == pytest.approx(store.heading[2])
