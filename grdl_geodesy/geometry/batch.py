# -*- coding: utf-8 -*-
"""
Batch Geodesics - Array front end for the scalar geodesic solver.

Applies the direct and inverse solvers element-wise over numpy arrays
following numpy broadcasting rules, and measures polygons given as
coordinate arrays.

Dependencies
------------
numpy - Array broadcasting and result storage

License
-------
MIT License
Copyright (c) 2024 geoint.org

Created
-------
2026-10-18
"""

# Standard library
from typing import Tuple

# Third-party
import numpy as np

# GRDL internal
from grdl_geodesy.geometry.capabilities import GeodesicMask
from grdl_geodesy.geometry.ellipsoid import GeodesicError
from grdl_geodesy.geometry.geodesic import WGS84, Geodesic
from grdl_geodesy.geometry.polygon_area import PolygonArea
from grdl_geodesy.geometry.result import PolygonResult

_INVERSE_MASK = GeodesicMask.DISTANCE | GeodesicMask.AZIMUTH
_DIRECT_MASK = (GeodesicMask.LATITUDE | GeodesicMask.LONGITUDE
                | GeodesicMask.AZIMUTH)


def inverse_arrays(
    lat1: np.ndarray,
    lon1: np.ndarray,
    lat2: np.ndarray,
    lon2: np.ndarray,
    geodesic: Geodesic = WGS84
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Solve the inverse problem element-wise.

    Parameters
    ----------
    lat1, lon1 : array_like
        First points (degrees).
    lat2, lon2 : array_like
        Second points (degrees).
    geodesic : Geodesic
        Solver to use (default WGS-84).

    Returns
    -------
    s12 : np.ndarray
        Distances (meters), shape of the broadcast inputs.
    azi1 : np.ndarray
        Azimuths at the first points (degrees).
    azi2 : np.ndarray
        Azimuths at the second points (degrees).

    Examples
    --------
    >>> s12, azi1, azi2 = inverse_arrays(0.0, 0.0, 0.0, [1.0, 2.0, 3.0])
    >>> s12.shape
    (3,)
    """
    lat1, lon1, lat2, lon2 = np.broadcast_arrays(
        *(np.asarray(x, dtype=np.float64) for x in (lat1, lon1, lat2, lon2)))

    s12 = np.empty(lat1.shape)
    azi1 = np.empty(lat1.shape)
    azi2 = np.empty(lat1.shape)
    for idx in np.ndindex(lat1.shape):
        r = geodesic.inverse(float(lat1[idx]), float(lon1[idx]),
                             float(lat2[idx]), float(lon2[idx]),
                             _INVERSE_MASK)
        s12[idx] = r.s12
        azi1[idx] = r.azi1
        azi2[idx] = r.azi2
    return s12, azi1, azi2


def direct_arrays(
    lat1: np.ndarray,
    lon1: np.ndarray,
    azi1: np.ndarray,
    s12: np.ndarray,
    geodesic: Geodesic = WGS84
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Solve the direct problem element-wise.

    Parameters
    ----------
    lat1, lon1 : array_like
        Starting points (degrees).
    azi1 : array_like
        Starting azimuths (degrees).
    s12 : array_like
        Distances (meters); may be negative.
    geodesic : Geodesic
        Solver to use (default WGS-84).

    Returns
    -------
    lat2, lon2, azi2 : np.ndarray
        End points and azimuths there (degrees), longitudes reduced to
        (-180, 180].
    """
    lat1, lon1, azi1, s12 = np.broadcast_arrays(
        *(np.asarray(x, dtype=np.float64) for x in (lat1, lon1, azi1, s12)))

    lat2 = np.empty(lat1.shape)
    lon2 = np.empty(lat1.shape)
    azi2 = np.empty(lat1.shape)
    for idx in np.ndindex(lat1.shape):
        r = geodesic.direct(float(lat1[idx]), float(lon1[idx]),
                            float(azi1[idx]), float(s12[idx]), _DIRECT_MASK)
        lat2[idx] = r.lat2
        lon2[idx] = r.lon2
        azi2[idx] = r.azi2
    return lat2, lon2, azi2


def polygon_area(
    lats: np.ndarray,
    lons: np.ndarray,
    geodesic: Geodesic = WGS84,
    polyline: bool = False
) -> PolygonResult:
    """
    Perimeter and area of the polygon through the given vertices.

    Parameters
    ----------
    lats, lons : array_like
        Vertex latitudes and longitudes (degrees), 1-D of equal length.
        The polygon is closed implicitly; do not repeat the first vertex.
    geodesic : Geodesic
        Solver to use (default WGS-84).
    polyline : bool
        Measure the open path instead (area NaN).

    Returns
    -------
    PolygonResult
        Counter-clockwise polygons have positive area.

    Raises
    ------
    GeodesicError
        If the coordinate arrays are not 1-D of equal length.
    """
    lats = np.asarray(lats, dtype=np.float64)
    lons = np.asarray(lons, dtype=np.float64)
    if lats.ndim != 1 or lats.shape != lons.shape:
        raise GeodesicError(
            f"lats and lons must be 1-D arrays of equal length, "
            f"got shapes {lats.shape} and {lons.shape}"
        )

    poly = PolygonArea(geodesic, polyline)
    for lat, lon in zip(lats, lons):
        poly.add_point(float(lat), float(lon))
    return poly.compute()


__all__ = [
    "inverse_arrays",
    "direct_arrays",
    "polygon_area",
]
