from __future__ import annotations

import pytest

from mapri.places.geo import distance_meters, format_distance

PARIS = (48.8566, 2.3522)
LONDON = (51.5074, -0.1278)


def test_distance_same_point_is_zero():
    assert distance_meters(*PARIS, *PARIS) == 0.0


def test_distance_paris_london():
    assert distance_meters(*PARIS, *LONDON) == pytest.approx(343_500, rel=0.01)


def test_distance_is_symmetric():
    assert distance_meters(*PARIS, *LONDON) == pytest.approx(distance_meters(*LONDON, *PARIS))


def test_distance_antipodal_points():
    half_circumference = distance_meters(0.0, 0.0, 0.0, 180.0)
    assert half_circumference == pytest.approx(3.14159265 * 6_371_000, rel=1e-6)


def test_format_distance_meters_below_one_km():
    assert format_distance(0) == "0 m"
    assert format_distance(532.4) == "532 m"
    assert format_distance(999.4) == "999 m"


def test_format_distance_kilometers_with_one_decimal():
    assert format_distance(1000) == "1.0 km"
    assert format_distance(1340) == "1.3 km"
    assert format_distance(343_512) == "343.5 km"
