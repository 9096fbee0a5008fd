from types import SimpleNamespace

import pytest

from nearbynomad.geo import distance_km, distance_meters, distances_km


def _point(lat, lon):
    return SimpleNamespace(latitude=lat, longitude=lon)


def test_same_point_is_zero():
    p = _point(12.9716, 77.5946)
    assert distance_meters(p, p) == 0.0


def test_one_degree_of_longitude_at_equator():
    assert distance_meters(_point(0, 0), _point(0, 1)) == pytest.approx(111_194.9, rel=1e-4)


def test_distance_is_symmetric():
    a = _point(12.9716, 77.5946)
    b = _point(12.9352, 77.6245)
    assert distance_meters(a, b) == pytest.approx(distance_meters(b, a))


def test_km_matches_meters():
    a = _point(51.5074, -0.1278)
    b = _point(48.8566, 2.3522)
    assert distance_km(a, b) == pytest.approx(distance_meters(a, b) / 1000)
    # London to Paris is roughly 344 km
    assert 340 < distance_km(a, b) < 348


def test_vectorised_distances_match_scalar():
    origin = _point(12.9716, 77.5946)
    targets = [_point(12.9763, 77.5929), _point(12.9425, 77.5683), _point(13.3702, 77.6835)]

    result = distances_km([t.latitude for t in targets], [t.longitude for t in targets], origin)

    assert len(result) == 3
    for value, target in zip(result, targets):
        assert value == pytest.approx(distance_km(origin, target))
