# -*- coding: utf-8 -*-
"""
Geodesic Results - Value records returned by the geodesic solvers.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

# Standard library
import math
from dataclasses import dataclass, fields
from typing import Dict

_NAN = math.nan


@dataclass
class GeodesicResult:
    """
    Outcome of a direct, inverse or line position computation.

    Only the fields selected by the output mask of the call are
    populated; every other field stays NaN.

    Attributes
    ----------
    lat1, lon1, azi1 : float
        Latitude, longitude and azimuth at point 1 (degrees).
    lat2, lon2, azi2 : float
        Latitude, longitude and forward azimuth at point 2 (degrees).
    s12 : float
        Distance from point 1 to point 2 (meters).
    a12 : float
        Arc length on the auxiliary sphere (degrees).
    m12 : float
        Reduced length (meters).
    M12, M21 : float
        Geodesic scales, dimensionless.
    S12 : float
        Area between the geodesic and the equator (square meters).
    """
    lat1: float = _NAN
    lon1: float = _NAN
    azi1: float = _NAN
    lat2: float = _NAN
    lon2: float = _NAN
    azi2: float = _NAN
    s12: float = _NAN
    a12: float = _NAN
    m12: float = _NAN
    M12: float = _NAN
    M21: float = _NAN
    S12: float = _NAN

    def as_dict(self) -> Dict[str, float]:
        """Populated (non-NaN) fields keyed by name."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if not math.isnan(getattr(self, f.name))
        }


@dataclass
class PolygonResult:
    """
    Perimeter and area of a polygon or polyline.

    Attributes
    ----------
    vertex_count : int
        Number of vertices.
    perimeter : float
        Perimeter (polygon) or length (polyline) in meters.
    area : float
        Signed area in square meters; NaN for a polyline and for fewer
        than two vertices.
    """
    vertex_count: int
    perimeter: float
    area: float = _NAN


__all__ = [
    "GeodesicResult",
    "PolygonResult",
]
