"""
Tests for model/sites.py
"""

import pytest

from slime_network.model.sites import SiteMap, SourcePoint, FoodSource


class TestSiteMap:
    """Tests for SiteMap placement rules."""

    def test_empty_map_not_ready(self):
        sites = SiteMap()
        assert sites.source is None
        assert sites.food_sources == []
        assert not sites.is_ready()

    def test_source_placed_once(self):
        sites = SiteMap()
        assert sites.place_source(10, 20) is True
        assert sites.place_source(30, 40) is False
        assert sites.source == SourcePoint(10, 20)

    def test_ready_needs_food(self):
        sites = SiteMap()
        sites.place_source(1, 1)
        assert not sites.is_ready()
        sites.add_food(5, 5, 'hospital')
        assert sites.is_ready()

    def test_add_food(self):
        sites = SiteMap()
        food = sites.add_food(3, 4, '')
        assert food == FoodSource(3, 4, 'food', 1.0)
        assert sites.food_sources == [food]

    def test_clear_allows_new_source(self):
        sites = SiteMap()
        sites.place_source(1, 1)
        sites.add_food(2, 2)
        sites.clear()
        assert sites.source is None
        assert sites.food_sources == []
        assert sites.place_source(7, 7) is True

    def test_points_are_frozen(self):
        point = SourcePoint(1, 2)
        with pytest.raises(AttributeError):
            point.x = 5
