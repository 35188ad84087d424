# -*- coding: utf-8 -*-
"""
Error Ellipse Analysis - Horizontal position uncertainty on the ellipsoid.

Converts between confidence levels and standard deviation multipliers,
turns a 2x2 north/east position covariance into a confidence ellipse, and
traces that ellipse on the ellipsoid with the direct geodesic solver to
obtain its outline and its geodesic area.

Dependencies
------------
numpy - Eigen-decomposition of the covariance, outline arrays
scipy - Normal and chi-square distributions

License
-------
MIT License
Copyright (c) 2024 geoint.org

Created
-------
2026-10-18
"""

# Standard library
import math
from dataclasses import dataclass
from typing import Tuple

# Third-party
import numpy as np
from scipy import stats

# GRDL internal
from grdl_geodesy.geometry.capabilities import GeodesicMask
from grdl_geodesy.geometry.ellipsoid import GeodesicError
from grdl_geodesy.geometry.geodesic import WGS84, Geodesic
from grdl_geodesy.geometry.polygon_area import PolygonArea


# ===================================================================
# Data Structures
# ===================================================================

@dataclass(frozen=True)
class ErrorEllipse:
    """
    Confidence ellipse of a horizontal position.

    Attributes
    ----------
    semi_major : float
        Semi-major axis (meters).
    semi_minor : float
        Semi-minor axis (meters).
    orientation : float
        Azimuth of the semi-major axis, clockwise from north, in
        [0, 180) degrees.
    confidence : float
        Probability that the true position lies inside the ellipse.
    """
    semi_major: float
    semi_minor: float
    orientation: float
    confidence: float

    @property
    def area(self) -> float:
        """Planar area of the ellipse (square meters)."""
        return math.pi * self.semi_major * self.semi_minor


# ===================================================================
# Confidence Levels
# ===================================================================

def _check_dims(dims: int) -> None:
    if int(dims) != dims or dims < 1:
        raise GeodesicError(f"dims must be a positive integer, got {dims}")


def sigma_multiplier(confidence: float, dims: int = 2) -> float:
    """
    Standard deviation multiplier enclosing a given probability.

    Parameters
    ----------
    confidence : float
        Probability in (0, 1).
    dims : int
        Dimension of the error distribution. For 1 the two-sided normal
        interval is used, otherwise the radius of the chi-square region.

    Returns
    -------
    float
        ``k`` such that the ``k``-sigma region holds ``confidence``.

    Raises
    ------
    GeodesicError
        If ``confidence`` is outside (0, 1) or ``dims`` is not positive.

    Examples
    --------
    >>> round(sigma_multiplier(0.95, dims=1), 4)
    1.96
    >>> round(sigma_multiplier(0.95, dims=2), 4)
    2.4477
    """
    if not 0.0 < confidence < 1.0:
        raise GeodesicError(f"confidence must lie in (0, 1), got {confidence}")
    _check_dims(dims)
    if dims == 1:
        return float(stats.norm.ppf(0.5 + confidence / 2.0))
    return float(np.sqrt(stats.chi2.ppf(confidence, dims)))


def confidence_from_sigma(k: float, dims: int = 2) -> float:
    """
    Probability enclosed by the ``k``-sigma region.

    Inverse of :func:`sigma_multiplier`.

    Raises
    ------
    GeodesicError
        If ``k`` is negative or ``dims`` is not positive.
    """
    if not k >= 0:
        raise GeodesicError(f"k must be non-negative, got {k}")
    _check_dims(dims)
    if dims == 1:
        return float(2.0 * stats.norm.cdf(k) - 1.0)
    return float(stats.chi2.cdf(k * k, dims))


# ===================================================================
# Covariance to Ellipse
# ===================================================================

def compute_error_ellipse(
    covariance_ne: np.ndarray,
    confidence: float = 0.95
) -> ErrorEllipse:
    """
    Confidence ellipse of a north/east position covariance.

    Parameters
    ----------
    covariance_ne : array_like
        2x2 covariance matrix (square meters), rows and columns ordered
        north, east.
    confidence : float
        Probability in (0, 1) enclosed by the ellipse.

    Returns
    -------
    ErrorEllipse

    Raises
    ------
    GeodesicError
        If the covariance is not a symmetric positive semi-definite 2x2
        matrix, or ``confidence`` is outside (0, 1).

    Examples
    --------
    >>> e = compute_error_ellipse([[4.0, 0.0], [0.0, 1.0]], confidence=0.95)
    >>> e.orientation
    0.0
    """
    cov = np.asarray(covariance_ne, dtype=np.float64)
    if cov.shape != (2, 2):
        raise GeodesicError(f"covariance must be 2x2, got shape {cov.shape}")
    if not np.all(np.isfinite(cov)):
        raise GeodesicError("covariance must be finite")
    scale = max(float(np.max(np.abs(cov))), np.finfo(np.float64).tiny)
    if abs(cov[0, 1] - cov[1, 0]) > 1e-12 * scale:
        raise GeodesicError("covariance must be symmetric")

    # Ascending eigenvalues, eigenvectors in columns
    eigvals, eigvecs = np.linalg.eigh(cov)
    if eigvals[0] < -1e-12 * scale:
        raise GeodesicError(
            f"covariance must be positive semi-definite, "
            f"smallest eigenvalue is {eigvals[0]:.6g}"
        )
    eigvals = np.clip(eigvals, 0.0, None)

    k = sigma_multiplier(confidence, dims=2)
    north, east = eigvecs[:, 1]
    orientation = math.degrees(math.atan2(east, north)) % 180.0
    return ErrorEllipse(
        semi_major=k * math.sqrt(eigvals[1]),
        semi_minor=k * math.sqrt(eigvals[0]),
        orientation=0.0 + orientation,
        confidence=confidence,
    )


# ===================================================================
# Ellipse on the Ellipsoid
# ===================================================================

def error_ellipse_outline(
    lat: float,
    lon: float,
    ellipse: ErrorEllipse,
    num_points: int = 72,
    geodesic: Geodesic = WGS84
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Trace an error ellipse around a point on the ellipsoid.

    Each outline vertex is reached from the centre by a geodesic whose
    azimuth and length are those of the corresponding point of the planar
    ellipse in the local north/east frame.

    Parameters
    ----------
    lat, lon : float
        Centre of the ellipse (degrees).
    ellipse : ErrorEllipse
        Ellipse to trace.
    num_points : int
        Number of outline vertices, at least 3.
    geodesic : Geodesic
        Solver to use (default WGS-84).

    Returns
    -------
    lats, lons : np.ndarray
        Outline vertices (degrees), counter-clockwise, starting at the
        end of the semi-major axis.

    Raises
    ------
    GeodesicError
        If ``num_points`` is less than 3.
    """
    if num_points < 3:
        raise GeodesicError(f"num_points must be at least 3, got {num_points}")

    theta = np.radians(ellipse.orientation)
    t = np.linspace(0.0, 2.0 * np.pi, int(num_points), endpoint=False)
    major = ellipse.semi_major * np.cos(t)
    minor = ellipse.semi_minor * np.sin(t)
    # Minor axis taken on the counter-clockwise side of the major axis
    north = major * np.cos(theta) + minor * np.sin(theta)
    east = major * np.sin(theta) - minor * np.cos(theta)
    azimuths = np.degrees(np.arctan2(east, north))
    distances = np.hypot(north, east)

    mask = GeodesicMask.LATITUDE | GeodesicMask.LONGITUDE
    lats = np.empty(t.shape)
    lons = np.empty(t.shape)
    for i, (azi, s) in enumerate(zip(azimuths, distances)):
        r = geodesic.direct(lat, lon, float(azi), float(s), mask)
        lats[i] = r.lat2
        lons[i] = r.lon2
    return lats, lons


def error_ellipse_area(
    lat: float,
    lon: float,
    ellipse: ErrorEllipse,
    num_points: int = 72,
    geodesic: Geodesic = WGS84
) -> float:
    """
    Geodesic area of the traced error ellipse (square meters).

    The outline from :func:`error_ellipse_outline` is measured as a
    geodesic polygon; it approaches ``ellipse.area`` for small ellipses
    and many points.
    """
    lats, lons = error_ellipse_outline(lat, lon, ellipse, num_points, geodesic)
    poly = PolygonArea(geodesic)
    for plat, plon in zip(lats, lons):
        poly.add_point(float(plat), float(plon))
    return poly.compute().area


__all__ = [
    "ErrorEllipse",
    "sigma_multiplier",
    "confidence_from_sigma",
    "compute_error_ellipse",
    "error_ellipse_outline",
    "error_ellipse_area",
]
