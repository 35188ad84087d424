# -*- coding: utf-8 -*-
"""
grdl-geodesy - Geodesics on an ellipsoid of revolution.

Direct and inverse geodesic problems accurate to round-off, geodesic
lines, polygon perimeter and area with pole-encircling support, and
horizontal error-ellipse analysis on the NumPy/SciPy stack.

Modules
-------
geometry : Ellipsoid, geodesic solver, lines, polygons, analysis
utils : Constants, angle arithmetic and the exact accumulator

The library logs through the standard ``logging`` module under the
``grdl_geodesy`` logger and stays silent unless the application
configures logging.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from grdl_geodesy import geometry, utils  # noqa: E402
from grdl_geodesy.geometry import (  # noqa: E402
    Ellipsoid,
    GeodesicError,
    WGS84_ELLIPSOID,
    GeodesicMask,
    GeodesicResult,
    PolygonResult,
    Geodesic,
    GeodesicLine,
    WGS84,
    PolygonArea,
    transit,
    transit_direct,
    inverse_arrays,
    direct_arrays,
    polygon_area,
    ErrorEllipse,
    sigma_multiplier,
    confidence_from_sigma,
    compute_error_ellipse,
    error_ellipse_outline,
    error_ellipse_area,
)

__all__ = [
    "geometry",
    "utils",
    "__version__",
    "Ellipsoid",
    "GeodesicError",
    "WGS84_ELLIPSOID",
    "GeodesicMask",
    "GeodesicResult",
    "PolygonResult",
    "Geodesic",
    "GeodesicLine",
    "WGS84",
    "PolygonArea",
    "transit",
    "transit_direct",
    "inverse_arrays",
    "direct_arrays",
    "polygon_area",
    "ErrorEllipse",
    "sigma_multiplier",
    "confidence_from_sigma",
    "compute_error_ellipse",
    "error_ellipse_outline",
    "error_ellipse_area",
]
