# -*- coding: utf-8 -*-
"""
Geodesic Geometry - Geodesics, polygons and error ellipses on an ellipsoid.

Provides:
- Ellipsoid parameters and the output/capability mask
- Direct and inverse geodesic solutions and geodesic lines
- Geodesic polygon perimeter and area
- Array front end over the scalar solver
- Confidence/error ellipse analysis

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from grdl_geodesy.geometry.ellipsoid import (
    Ellipsoid,
    GeodesicError,
    WGS84_ELLIPSOID,
)

from grdl_geodesy.geometry.capabilities import GeodesicMask

from grdl_geodesy.geometry.result import (
    GeodesicResult,
    PolygonResult,
)

from grdl_geodesy.geometry.geodesic_line import GeodesicLine

from grdl_geodesy.geometry.polygon_area import (
    PolygonArea,
    transit,
    transit_direct,
)

from grdl_geodesy.geometry.geodesic import (
    Geodesic,
    WGS84,
)

from grdl_geodesy.geometry.batch import (
    inverse_arrays,
    direct_arrays,
    polygon_area,
)

from grdl_geodesy.geometry.analysis import (
    ErrorEllipse,
    sigma_multiplier,
    confidence_from_sigma,
    compute_error_ellipse,
    error_ellipse_outline,
    error_ellipse_area,
)

__all__ = [
    # Ellipsoid
    "Ellipsoid",
    "GeodesicError",
    "WGS84_ELLIPSOID",
    # Masks and results
    "GeodesicMask",
    "GeodesicResult",
    "PolygonResult",
    # Solver
    "Geodesic",
    "GeodesicLine",
    "WGS84",
    # Polygons
    "PolygonArea",
    "transit",
    "transit_direct",
    # Arrays
    "inverse_arrays",
    "direct_arrays",
    "polygon_area",
    # Analysis
    "ErrorEllipse",
    "sigma_multiplier",
    "confidence_from_sigma",
    "compute_error_ellipse",
    "error_ellipse_outline",
    "error_ellipse_area",
]
