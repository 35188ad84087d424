# -*- coding: utf-8 -*-
"""
Polygon Area - Perimeter and area of geodesic polygons.

Vertices (or edges given by azimuth and length) are added one at a time.
Each edge is solved as a geodesic and its length and its area to the
equator are folded into exact running sums. The number of times the
path crosses the prime meridian is tracked so that a polygon encircling
a pole is assigned the correct one of the two regions it bounds.

Polygons are treated as closed: the last vertex is joined back to the
first when the result is computed. A polyline accumulator only measures
the length of the open path.

The area of a counter-clockwise polygon is positive. Edges should be
shorter than half the ellipsoid circumference and the polygon should not
intersect itself.

Examples
--------
>>> from grdl_geodesy import WGS84
>>> poly = WGS84.polygon()
>>> for lat, lon in [(89, 0), (89, 90), (89, 180), (89, 270)]:
...     poly.add_point(lat, lon)
>>> result = poly.compute()
>>> round(result.perimeter, 4)
631819.8745

License
-------
MIT License
Copyright (c) 2024 geoint.org

Created
-------
2026-10-18
"""

# Standard library
import logging
import math
from typing import TYPE_CHECKING

# GRDL internal
from grdl_geodesy.geometry.capabilities import GeodesicMask
from grdl_geodesy.geometry.result import PolygonResult
from grdl_geodesy.utils.accumulator import Accumulator
from grdl_geodesy.utils.geomath import ang_diff, ang_normalize

if TYPE_CHECKING:
    from grdl_geodesy.geometry.geodesic import Geodesic

logger = logging.getLogger(__name__)


# ===================================================================
# Prime Meridian Crossings
# ===================================================================

def transit(lon1: float, lon2: float) -> int:
    """
    Crossing of the prime meridian by an edge between two longitudes.

    Parameters
    ----------
    lon1, lon2 : float
        Longitudes of the edge end points (degrees).

    Returns
    -------
    int
        1 for an eastward crossing, -1 for a westward crossing, else 0.
    """
    # lon12 computed the same way as in the inverse solver
    lon1 = ang_normalize(lon1)
    lon2 = ang_normalize(lon2)
    lon12, _ = ang_diff(lon1, lon2)
    if lon1 <= 0 and lon2 > 0 and lon12 > 0:
        return 1
    if lon2 <= 0 and lon1 > 0 and lon12 < 0:
        return -1
    return 0


def transit_direct(lon1: float, lon2: float) -> int:
    """
    Crossing count between two unrolled longitudes.

    Used for edges given by azimuth and length, whose end longitude is
    reported unrolled; the parity of the crossing follows from the
    longitudes reduced modulo 720 degrees. Longitude 0 lies on the west
    side of the meridian, as in :func:`transit`.
    """
    lon1 = math.fmod(lon1, 720.0)
    lon2 = math.fmod(lon2, 720.0)
    return (_winding(lon2) - _winding(lon1))


def _winding(lon: float) -> int:
    return 1 if (-360 < lon <= 0) or lon > 360 else 0


# ===================================================================
# Accumulator
# ===================================================================

class PolygonArea:
    """
    Running perimeter and area of a geodesic polygon or polyline.

    Parameters
    ----------
    geodesic : Geodesic
        Solver for the edges.
    polyline : bool
        If True, measure an open path: no closing edge and no area.

    Attributes
    ----------
    geodesic : Geodesic
        Solver for the edges.
    polyline : bool
        Whether the accumulator measures an open path.
    area0 : float
        Total area of the ellipsoid (square meters).
    """

    def __init__(self, geodesic: "Geodesic", polyline: bool = False):
        self.geodesic = geodesic
        self.polyline = polyline
        self.area0 = geodesic.ellipsoid_area
        self._mask = (GeodesicMask.LATITUDE | GeodesicMask.LONGITUDE
                      | GeodesicMask.DISTANCE)
        if not polyline:
            self._mask |= GeodesicMask.AREA | GeodesicMask.LONG_UNROLL
        self._perimetersum = Accumulator()
        self._areasum = None if polyline else Accumulator()
        self.clear()

    @property
    def vertex_count(self) -> int:
        """Number of vertices added so far."""
        return self._num

    def clear(self) -> None:
        """Discard all vertices."""
        self._num = 0
        self._crossings = 0
        self._perimetersum.set(0.0)
        if not self.polyline:
            self._areasum.set(0.0)
        self._lat0 = self._lon0 = self._lat1 = self._lon1 = math.nan
        logger.debug("Cleared %s accumulator",
                     "polyline" if self.polyline else "polygon")

    def add_point(self, lat: float, lon: float) -> None:
        """
        Append a vertex.

        Parameters
        ----------
        lat : float
            Latitude (degrees) in [-90, 90].
        lon : float
            Longitude (degrees).
        """
        lon = ang_normalize(lon)
        if self._num == 0:
            self._lat0 = self._lat1 = lat
            self._lon0 = self._lon1 = lon
        else:
            g = self.geodesic.inverse(self._lat1, self._lon1, lat, lon,
                                      self._mask)
            self._perimetersum.add(g.s12)
            if not self.polyline:
                self._areasum.add(g.S12)
                self._crossings += transit(self._lon1, lon)
            self._lat1 = lat
            self._lon1 = lon
        self._num += 1

    def add_edge(self, azi: float, s: float) -> None:
        """
        Append a vertex at distance ``s`` (meters) along azimuth ``azi``
        (degrees) from the last vertex. Ignored while no vertex exists.
        """
        if self._num == 0:
            return
        g = self.geodesic.direct(self._lat1, self._lon1, azi, s, self._mask)
        self._perimetersum.add(g.s12)
        if not self.polyline:
            self._areasum.add(g.S12)
            self._crossings += transit_direct(self._lon1, g.lon2)
        self._lat1 = g.lat2
        self._lon1 = g.lon2
        self._num += 1

    def compute(self, reverse: bool = False, sign: bool = True) -> PolygonResult:
        """
        Perimeter and area of the polygon, closed back to the first vertex.

        The accumulator is left unchanged, so more vertices may be added
        afterwards.

        Parameters
        ----------
        reverse : bool
            If True clockwise traversal counts as positive, otherwise
            counter-clockwise does.
        sign : bool
            If True the area is reduced to (-A/2, A/2], where A is the
            ellipsoid area; otherwise to [0, A).

        Returns
        -------
        PolygonResult
            For a polyline the perimeter is the path length and the area
            is NaN. With fewer than two vertices the perimeter is 0 and
            the area NaN.
        """
        if self._num < 2:
            return PolygonResult(self._num, 0.0, math.nan)
        if self.polyline:
            return PolygonResult(self._num, self._perimetersum.sum(), math.nan)

        g = self.geodesic.inverse(self._lat1, self._lon1,
                                  self._lat0, self._lon0, self._mask)
        tempsum = Accumulator(self._areasum)
        tempsum.add(g.S12)
        crossings = self._crossings + transit(self._lon1, self._lon0)
        area = self._reduce_area(tempsum, crossings, reverse, sign)
        return PolygonResult(self._num, self._perimetersum.sum(g.s12), area)

    def test_point(self, lat: float, lon: float, reverse: bool = False,
                   sign: bool = True) -> PolygonResult:
        """
        Result as if the vertex ``(lat, lon)`` had been added.

        The accumulator is left unchanged. Cheaper than adding the point
        and computing, since the running sums are not copied twice.
        """
        lon = ang_normalize(lon)
        num = self._num + 1
        if self._num == 0:
            return PolygonResult(num, 0.0, math.nan)

        perimeter = Accumulator(self._perimetersum)
        g = self.geodesic.inverse(self._lat1, self._lon1, lat, lon, self._mask)
        perimeter.add(g.s12)
        if self.polyline:
            return PolygonResult(num, perimeter.sum(), math.nan)

        tempsum = Accumulator(self._areasum)
        tempsum.add(g.S12)
        crossings = self._crossings + transit(self._lon1, lon)
        g = self.geodesic.inverse(lat, lon, self._lat0, self._lon0, self._mask)
        perimeter.add(g.s12)
        tempsum.add(g.S12)
        crossings += transit(lon, self._lon0)
        area = self._reduce_area(tempsum, crossings, reverse, sign)
        return PolygonResult(num, perimeter.sum(), area)

    def test_edge(self, azi: float, s: float, reverse: bool = False,
                  sign: bool = True) -> PolygonResult:
        """
        Result as if the edge ``(azi, s)`` had been added.

        The accumulator is left unchanged. With no vertex there is no
        starting point and the result equals :meth:`compute` on the empty
        accumulator.
        """
        if self._num == 0:
            return PolygonResult(0, 0.0, math.nan)

        num = self._num + 1
        perimeter = Accumulator(self._perimetersum)
        perimeter.add(s)
        if self.polyline:
            return PolygonResult(num, perimeter.sum(), math.nan)

        tempsum = Accumulator(self._areasum)
        g = self.geodesic.direct(self._lat1, self._lon1, azi, s, self._mask)
        tempsum.add(g.S12)
        crossings = self._crossings + transit_direct(self._lon1, g.lon2)
        lat, lon = g.lat2, g.lon2
        g = self.geodesic.inverse(lat, lon, self._lat0, self._lon0, self._mask)
        perimeter.add(g.s12)
        tempsum.add(g.S12)
        crossings += transit(lon, self._lon0)
        area = self._reduce_area(tempsum, crossings, reverse, sign)
        return PolygonResult(num, perimeter.sum(), area)

    def _reduce_area(self, tempsum: Accumulator, crossings: int,
                     reverse: bool, sign: bool) -> float:
        tempsum.remainder(self.area0)
        # An odd crossing count means the sum measured the complement
        if crossings & 1:
            tempsum.add((1 if tempsum.sum() < 0 else -1) * self.area0 / 2)
        # The sum is clockwise positive
        if not reverse:
            tempsum.negate()
        if sign:
            if tempsum.sum() > self.area0 / 2:
                tempsum.add(-self.area0)
            elif tempsum.sum() <= -self.area0 / 2:
                tempsum.add(self.area0)
        else:
            if tempsum.sum() >= self.area0:
                tempsum.add(-self.area0)
            elif tempsum.sum() < 0:
                tempsum.add(self.area0)
        return 0.0 + tempsum.sum()

    def __repr__(self) -> str:
        kind = "polyline" if self.polyline else "polygon"
        return f"PolygonArea({kind}, vertices={self._num})"


__all__ = [
    "PolygonArea",
    "transit",
    "transit_direct",
]
