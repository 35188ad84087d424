# -*- coding: utf-8 -*-
"""
Tests for geodesic polygon perimeter and area.

Tests pole-encircling polygons, polygons whose edges cross the
antimeridian, the polyline mode, the tentative test_point/test_edge
queries, and the longitude crossing counters.

License
-------
MIT License
Copyright (c) 2024 geoint.org

Created
-------
2026-10-18
"""

import math

import pytest

from grdl_geodesy.geometry.geodesic import WGS84, Geodesic
from grdl_geodesy.geometry.polygon_area import (
    PolygonArea,
    transit,
    transit_direct,
)


def planimeter(points, polyline=False, reverse=False, sign=True):
    """Perimeter and area of the polygon through ``points``."""
    poly = PolygonArea(WGS84, polyline)
    for lat, lon in points:
        poly.add_point(lat, lon)
    return poly.compute(reverse, sign)


@pytest.fixture
def polygon():
    return PolygonArea(WGS84)


class TestTransit:
    """Test the prime meridian crossing counters."""

    @pytest.mark.parametrize("lon1,lon2,expected", [
        (-10.0, 10.0, 1),
        (10.0, -10.0, -1),
        (170.0, -170.0, 0),
        (10.0, 20.0, 0),
        (0.0, 180.0, 1),
        (180.0, 0.0, 0),
    ])
    def test_transit(self, lon1, lon2, expected):
        assert transit(lon1, lon2) == expected

    def test_transit_normalizes(self):
        """Longitudes are reduced before counting."""
        assert transit(350.0, 370.0) == transit(-10.0, 10.0) == 1

    @pytest.mark.parametrize("lon1,lon2,expected", [
        (170.0, 190.0, 0),
        (350.0, 370.0, 1),
        (10.0, -10.0, 1),
        (-10.0, 10.0, -1),
        (10.0, 20.0, 0),
        (170.0, 550.0, 1),
        (0.0, 41.8, -1),
        (-41.8, 0.0, 0),
    ])
    def test_transit_direct(self, lon1, lon2, expected):
        """Unrolled longitudes change parity at each multiple of 360."""
        assert transit_direct(lon1, lon2) == expected

    @pytest.mark.parametrize("lon1,lon2", [
        (0.0, 41.8),
        (-41.8, 0.0),
        (0.0, -41.8),
        (41.8, 0.0),
        (-10.0, 10.0),
        (179.0, 181.0),
    ])
    def test_counters_agree_on_parity(self, lon1, lon2):
        """Both counters place longitude 0 on the same side."""
        assert (transit(lon1, lon2) - transit_direct(lon1, lon2)) % 2 == 0


class TestPlanimeter:
    """Test polygon perimeter and area on WGS-84."""

    def test_north_pole_square(self):
        """Square around the north pole encloses the pole."""
        r = planimeter([(89, 0), (89, 90), (89, 180), (89, 270)])
        assert r.vertex_count == 4
        assert r.perimeter == pytest.approx(631819.8745, abs=1e-4)
        assert r.area == pytest.approx(24952305678.0, abs=1)

    def test_south_pole_square(self):
        """Same square around the south pole is clockwise."""
        r = planimeter([(-89, 0), (-89, 90), (-89, 180), (-89, 270)])
        assert r.perimeter == pytest.approx(631819.8745, abs=1e-4)
        assert r.area == pytest.approx(-24952305678.0, abs=1)

    def test_diamond_on_equator(self):
        r = planimeter([(0, -1), (-1, 0), (0, 1), (1, 0)])
        assert r.perimeter == pytest.approx(627598.2731, abs=1e-4)
        assert r.area == pytest.approx(24619419146.0, abs=1)

    def test_octant(self):
        """Triangle covering one eighth of the ellipsoid."""
        points = [(90, 0), (0, 0), (0, 90)]
        r = planimeter(points)
        assert r.perimeter == pytest.approx(30022685, abs=1)
        assert r.area == pytest.approx(63758202715511.0, abs=1)
        assert r.area == pytest.approx(WGS84.ellipsoid_area / 8, abs=1)

    def test_octant_polyline(self):
        """Polyline length omits the closing edge and has no area."""
        r = planimeter([(90, 0), (0, 0), (0, 90)], polyline=True)
        assert r.perimeter == pytest.approx(20020719, abs=1)
        assert math.isnan(r.area)

    def test_pole_crossing_triangle(self):
        r = planimeter([(89, 0.1), (89, 90.1), (89, -179.9)])
        assert r.perimeter == pytest.approx(539297, abs=1)
        assert r.area == pytest.approx(12476152838.5, abs=1)

    @pytest.mark.parametrize("points", [
        [(9, -0.00000000000001), (9, 180), (9, 0)],
        [(9, 0.00000000000001), (9, 0), (9, 180)],
        [(9, 0.00000000000001), (9, 180), (9, 0)],
        [(9, -0.00000000000001), (9, 0), (9, 180)],
    ])
    def test_degenerate_antimeridian(self, points):
        """Degenerate polygons along a meridian pair have zero area."""
        r = planimeter(points)
        assert r.perimeter == pytest.approx(36026861, abs=1)
        assert r.area == pytest.approx(0, abs=1)

    def test_two_point_polygon(self):
        r = planimeter([(66.562222222, 0), (66.562222222, 180)])
        assert r.perimeter == pytest.approx(10465729, abs=1)
        assert r.area == pytest.approx(0, abs=1)

    def test_encircling_pole_twice(self):
        """Winding twice around the pole counts the cap once per turn."""
        points = [(89, -360), (89, -240), (89, -120),
                  (89, 0), (89, 120), (89, 240)]
        r = planimeter(points)
        assert r.perimeter == pytest.approx(1160741, abs=1)
        assert r.area == pytest.approx(32415230256.0, abs=1)

    def test_reverse_changes_sign(self):
        points = [(0, -1), (-1, 0), (0, 1), (1, 0)]
        fwd = planimeter(points)
        rev = planimeter(points, reverse=True)
        assert rev.area == pytest.approx(-fwd.area, abs=1e-3)
        assert rev.perimeter == fwd.perimeter

    def test_unsigned_area(self):
        """Unsigned areas lie in [0, A); clockwise gives the complement."""
        r = planimeter([(-89, 0), (-89, 90), (-89, 180), (-89, 270)],
                       sign=False)
        assert r.area == pytest.approx(
            WGS84.ellipsoid_area - 24952305678.0, abs=2)

    def test_sphere_octant(self):
        """One octant of a unit sphere has area pi / 2."""
        poly = PolygonArea(Geodesic(1.0, 0.0))
        for lat, lon in [(0, 0), (0, 90), (90, 0)]:
            poly.add_point(lat, lon)
        r = poly.compute()
        assert r.perimeter == pytest.approx(1.5 * math.pi, rel=1e-12)
        assert r.area == pytest.approx(math.pi / 2, rel=1e-12)


class TestAccumulatorState:
    """Test vertex bookkeeping of the accumulator."""

    def test_empty(self, polygon):
        r = polygon.compute()
        assert r.vertex_count == 0
        assert r.perimeter == 0.0
        assert math.isnan(r.area)

    def test_single_vertex(self, polygon):
        polygon.add_point(10, 20)
        r = polygon.compute()
        assert r.vertex_count == 1
        assert r.perimeter == 0.0
        assert math.isnan(r.area)

    def test_vertex_count(self, polygon):
        for lat, lon in [(0, 0), (0, 1), (1, 1)]:
            polygon.add_point(lat, lon)
        assert polygon.vertex_count == 3

    def test_clear(self, polygon):
        polygon.add_point(0, 0)
        polygon.add_point(0, 1)
        polygon.clear()
        assert polygon.vertex_count == 0
        assert math.isnan(polygon.compute().area)
        polygon.add_point(89, 0)
        polygon.add_point(89, 90)
        polygon.add_point(89, 180)
        polygon.add_point(89, 270)
        assert polygon.compute().area == pytest.approx(24952305678.0, abs=1)

    def test_compute_does_not_consume(self, polygon):
        """Computing leaves the accumulator ready for more vertices."""
        for lat, lon in [(0, -1), (-1, 0), (0, 1)]:
            polygon.add_point(lat, lon)
        first = polygon.compute()
        again = polygon.compute()
        assert first == again
        polygon.add_point(1, 0)
        assert polygon.compute().area == pytest.approx(24619419146.0, abs=1)

    def test_add_edge_ignored_when_empty(self, polygon):
        polygon.add_edge(90.0, 1000.0)
        assert polygon.vertex_count == 0

    @pytest.mark.parametrize("lon0", [0.0, 20.0, 180.0, -90.0])
    def test_add_edge_matches_add_point(self, lon0):
        """Edges given by azimuth and length trace the same polygon."""
        by_edge = PolygonArea(WGS84)
        by_point = PolygonArea(WGS84)
        by_edge.add_point(10.0, lon0)
        by_point.add_point(10.0, lon0)
        lat, lon = 10.0, lon0
        for azi, s in [(90.0, 2e5), (0.0, 3e5), (225.0, 1e5)]:
            by_edge.add_edge(azi, s)
            d = WGS84.direct(lat, lon, azi, s)
            lat, lon = d.lat2, d.lon2
            by_point.add_point(lat, lon)
        e = by_edge.compute()
        p = by_point.compute()
        assert e.vertex_count == p.vertex_count == 4
        assert e.perimeter == pytest.approx(p.perimeter, abs=1e-6)
        assert e.area == pytest.approx(p.area, abs=1e-2)

    def test_add_edge_around_pole_from_prime_meridian(self):
        """A pole-encircling path built from edges keeps the polar cap."""
        by_edge = PolygonArea(WGS84)
        by_point = PolygonArea(WGS84)
        by_edge.add_point(89.0, 0.0)
        by_point.add_point(89.0, 0.0)
        lat, lon = 89.0, 0.0
        for _ in range(8):
            by_edge.add_edge(90.0, 1e5)
            d = WGS84.direct(lat, lon, 90.0, 1e5)
            lat, lon = d.lat2, d.lon2
            by_point.add_point(lat, lon)
        e = by_edge.compute()
        p = by_point.compute()
        assert e.perimeter == pytest.approx(p.perimeter, abs=1e-6)
        assert p.area > 0
        assert e.area == pytest.approx(p.area, abs=1)

    def test_triple_winding(self):
        """Winding three times around the pole triples the area."""
        loop = [(89, 0), (89, 120), (89, -120)]
        once = planimeter(loop)
        thrice = planimeter(loop * 3)
        assert thrice.perimeter == pytest.approx(3 * once.perimeter, rel=1e-12)
        assert thrice.area == pytest.approx(3 * once.area, abs=1)

    def test_repr(self, polygon):
        assert repr(polygon) == "PolygonArea(polygon, vertices=0)"
        assert repr(PolygonArea(WGS84, True)).startswith("PolygonArea(polyline")


class TestTentativeQueries:
    """Test test_point and test_edge against adding and computing."""

    SQUARE = [(89, 0), (89, 90), (89, 180)]

    def test_point_matches_add(self, polygon):
        for lat, lon in self.SQUARE:
            polygon.add_point(lat, lon)
        tentative = polygon.test_point(89, 270)
        assert polygon.vertex_count == 3
        polygon.add_point(89, 270)
        actual = polygon.compute()
        assert tentative.vertex_count == actual.vertex_count == 4
        assert tentative.perimeter == pytest.approx(actual.perimeter, abs=1e-6)
        assert tentative.area == pytest.approx(actual.area, abs=1e-2)

    def test_point_on_empty(self, polygon):
        r = polygon.test_point(10, 20)
        assert r.vertex_count == 1
        assert r.perimeter == 0.0
        assert math.isnan(r.area)

    def test_point_polyline(self):
        line = PolygonArea(WGS84, polyline=True)
        line.add_point(0, 0)
        r = line.test_point(0, 1)
        assert r.vertex_count == 2
        assert r.perimeter == pytest.approx(
            WGS84.inverse(0, 0, 0, 1).s12, abs=1e-9)
        assert math.isnan(r.area)

    def test_edge_matches_add(self, polygon):
        polygon.add_point(-20.0, 30.0)
        polygon.add_edge(45.0, 5e5)
        tentative = polygon.test_edge(135.0, 4e5)
        assert polygon.vertex_count == 2
        polygon.add_edge(135.0, 4e5)
        actual = polygon.compute()
        assert tentative.vertex_count == actual.vertex_count == 3
        assert tentative.perimeter == pytest.approx(actual.perimeter, abs=1e-6)
        assert tentative.area == pytest.approx(actual.area, abs=1e-2)

    def test_edge_from_prime_meridian(self, polygon):
        """A tentative edge leaving longitude 0 counts its crossing."""
        polygon.add_point(89.0, 0.0)
        for _ in range(7):
            polygon.add_edge(90.0, 1e5)
        tentative = polygon.test_edge(90.0, 1e5)
        polygon.add_edge(90.0, 1e5)
        actual = polygon.compute()
        assert actual.area > 0
        assert tentative.area == pytest.approx(actual.area, abs=1e-2)

    def test_edge_on_empty(self, polygon):
        """Without a starting vertex the edge has nowhere to begin."""
        r = polygon.test_edge(90.0, 1000.0)
        assert r.vertex_count == 0
        assert r.perimeter == 0.0
        assert math.isnan(r.area)

    def test_edge_polyline(self):
        line = PolygonArea(WGS84, polyline=True)
        line.add_point(0, 0)
        line.add_point(0, 1)
        length = line.compute().perimeter
        r = line.test_edge(0.0, 1234.5)
        assert r.vertex_count == 3
        assert r.perimeter == pytest.approx(length + 1234.5, abs=1e-9)
        assert math.isnan(r.area)
