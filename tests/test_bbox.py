from __future__ import annotations

from services.bbox_builder import bbox_contains, expand_bbox_from_center
from utils import haversine_km


def test_expand_bbox_basic() -> None:
    lat, lon = 28.6139, 77.2090  # Delhi
    bbox = expand_bbox_from_center(lat, lon, 3.0)
    min_lat, min_lon, max_lat, max_lon = bbox
    assert min_lon < max_lon
    assert min_lat < max_lat
    # center must lie within bbox
    assert min_lon < lon < max_lon
    assert min_lat < lat < max_lat


def test_bbox_contains_points_on_the_circle() -> None:
    lat, lon = 19.0760, 72.8777  # Mumbai
    radius = 10.0
    bbox = expand_bbox_from_center(lat, lon, radius)
    # points just inside the radius along each axis
    for dlat, dlon in ((0.0899, 0.0), (-0.0899, 0.0), (0.0, 0.0951), (0.0, -0.0951)):
        p_lat, p_lon = lat + dlat, lon + dlon
        assert haversine_km(lat, lon, p_lat, p_lon) <= radius
        assert bbox_contains(bbox, p_lat, p_lon)


def test_bbox_near_pole_spans_all_longitudes() -> None:
    min_lat, min_lon, max_lat, max_lon = expand_bbox_from_center(89.9, 10.0, 50.0)
    assert (min_lon, max_lon) == (-180.0, 180.0)
    assert max_lat == 90.0


def test_bbox_across_antimeridian_spans_all_longitudes() -> None:
    _, min_lon, _, max_lon = expand_bbox_from_center(0.0, 179.99, 20.0)
    assert (min_lon, max_lon) == (-180.0, 180.0)
