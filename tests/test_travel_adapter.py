"""
Unit tests for the haversine distance and travel-leg rules.
"""

import math

import pytest

from fieldsched.core.sequencing_engine.travel_adapter import (
    HaversineTravelAdapter,
    haversine_km,
    home_leg_minutes,
    task_leg_minutes,
)
from fieldsched.domain.constraints import SequencingOptions
from fieldsched.domain.models import Resource, Task


def _task(task_id: str, lat=None, lng=None) -> Task:
    return Task(task_id=task_id, employee_id="R1", task_status="Assigned (ACT)", lat=lat, lng=lng)


class TestHaversine:
    """Great-circle distance in kilometers."""

    def test_same_point_is_zero(self):
        assert haversine_km(51.5, -0.12, 51.5, -0.12) == 0.0

    def test_one_degree_of_longitude_on_equator(self):
        expected = 6371.0 * math.radians(1.0)
        assert haversine_km(0.0, 0.0, 0.0, 1.0) == pytest.approx(expected)

    def test_known_city_pair(self):
        """London -> Paris is roughly 344 km."""
        assert haversine_km(51.5074, -0.1278, 48.8566, 2.3522) == pytest.approx(343.5, abs=1.0)

    def test_symmetric(self):
        a = haversine_km(40.4168, -3.7038, 41.3874, 2.1686)
        b = haversine_km(41.3874, 2.1686, 40.4168, -3.7038)
        assert a == pytest.approx(b)

    def test_nan_propagates(self):
        assert math.isnan(haversine_km(float("nan"), 0.0, 0.0, 0.0))

    def test_near_antipodal_points_do_not_raise(self):
        """Rounding can push the haversine term past 1; the result is half the circumference."""
        km = haversine_km(0.015, 0.0, -0.015, 180.0)
        assert km == pytest.approx(math.pi * 6371.0, rel=1e-6)

    def test_exact_antipodes(self):
        assert haversine_km(0.0, 0.0, 0.0, 180.0) == pytest.approx(math.pi * 6371.0)


class TestHaversineTravelAdapter:
    def test_minutes_at_40_kmh(self):
        adapter = HaversineTravelAdapter(speed_kmh=40.0)
        km = haversine_km(0.0, 0.0, 0.0, 0.36)
        assert adapter.tt_min(0.0, 0.0, 0.0, 0.36) == pytest.approx(km / 40.0 * 60.0)

    def test_faster_speed_halves_time(self):
        slow = HaversineTravelAdapter(speed_kmh=40.0).tt_min(0.0, 0.0, 0.0, 1.0)
        fast = HaversineTravelAdapter(speed_kmh=80.0).tt_min(0.0, 0.0, 0.0, 1.0)
        assert fast == pytest.approx(slow / 2)


class TestLegs:
    """Home leg is uncapped; task legs are capped or fall back to a flat default."""

    adapter = HaversineTravelAdapter(speed_kmh=40.0)
    options = SequencingOptions()

    def test_home_leg_is_not_capped(self):
        resource = Resource(resource_id="R1", shift_start="08:00", home_lat=0.0, home_lng=0.0)
        far = _task("T1", 0.0, 3.0)
        minutes = home_leg_minutes(resource, far, self.adapter)
        assert minutes > self.options.max_travel_minutes
        assert minutes == pytest.approx(haversine_km(0.0, 0.0, 0.0, 3.0) / 40.0 * 60.0)

    def test_home_leg_zero_without_home(self):
        resource = Resource(resource_id="R1", shift_start="08:00")
        assert home_leg_minutes(resource, _task("T1", 0.0, 3.0), self.adapter) == 0.0

    def test_home_leg_zero_without_task_location(self):
        resource = Resource(resource_id="R1", shift_start="08:00", home_lat=0.0, home_lng=0.0)
        assert home_leg_minutes(resource, _task("T1"), self.adapter) == 0.0

    def test_zero_coordinates_count_as_a_location(self):
        resource = Resource(resource_id="R1", shift_start="08:00", home_lat=0.0, home_lng=0.1)
        minutes = home_leg_minutes(resource, _task("T1", 0.0, 0.0), self.adapter)
        assert minutes > 0

    def test_task_leg_capped(self):
        minutes = task_leg_minutes(
            _task("A", 0.0, 0.0), _task("B", 0.0, 3.0), self.adapter, self.options
        )
        assert minutes == 120.0

    def test_task_leg_below_cap_uses_distance(self):
        minutes = task_leg_minutes(
            _task("A", 0.0, 0.0), _task("B", 0.0, 0.36), self.adapter, self.options
        )
        assert minutes == pytest.approx(haversine_km(0.0, 0.0, 0.0, 0.36) / 40.0 * 60.0)

    @pytest.mark.parametrize(
        "current,nxt",
        [
            (_task("A"), _task("B", 0.0, 0.36)),
            (_task("A", 0.0, 0.0), _task("B")),
            (_task("A", 0.0, None), _task("B", 0.0, 0.36)),
        ],
    )
    def test_task_leg_default_when_location_missing(self, current, nxt):
        assert task_leg_minutes(current, nxt, self.adapter, self.options) == 30.0

    def test_custom_cap_and_default(self):
        options = SequencingOptions(max_travel_minutes=45.0, default_travel_minutes=10.0)
        assert task_leg_minutes(_task("A", 0.0, 0.0), _task("B", 0.0, 3.0), self.adapter, options) == 45.0
        assert task_leg_minutes(_task("A"), _task("B"), self.adapter, options) == 10.0
