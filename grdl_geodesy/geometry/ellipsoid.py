# -*- coding: utf-8 -*-
"""
Ellipsoid Parameters - Ellipsoid of revolution and its series coefficients.

An ellipsoid is defined by its equatorial radius and flattening. On
construction the derived constants (eccentricities, third flattening,
polar semi-axis, authalic radius) and the coefficient tables of the A3, C3
and C4 series are evaluated once; they depend only on the third flattening
and are shared by every geodesic computed on the ellipsoid.

References
----------
C. F. F. Karney, "Algorithms for geodesics", J. Geodesy 87, 43-55 (2013).

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

# Standard library
import logging
import math
from dataclasses import dataclass, field
from typing import List, Tuple

# GRDL internal
from grdl_geodesy.utils.constants import GEODESIC_ORDER, TOL2, WGS84_A, WGS84_F
from grdl_geodesy.utils.geomath import polyval, sq

logger = logging.getLogger(__name__)

NA3 = GEODESIC_ORDER
NA3X = NA3
NC3 = GEODESIC_ORDER
NC3X = (NC3 * (NC3 - 1)) // 2
NC4 = GEODESIC_ORDER
NC4X = (NC4 * (NC4 + 1)) // 2

# Rational coefficients in n, written numerator polynomial then denominator
_A3_COEFF = (
    # A3, coeff of eps^5, polynomial in n of order 0
    -3, 128,
    # A3, coeff of eps^4, polynomial in n of order 1
    -2, -3, 64,
    # A3, coeff of eps^3, polynomial in n of order 2
    -1, -3, -1, 16,
    # A3, coeff of eps^2, polynomial in n of order 2
    3, -1, -2, 8,
    # A3, coeff of eps^1, polynomial in n of order 1
    1, -1, 2,
    # A3, coeff of eps^0, polynomial in n of order 0
    1, 1,
)

_C3_COEFF = (
    # C3[1], coeff of eps^5 .. eps^1
    3, 128,
    2, 5, 128,
    -1, 3, 3, 64,
    -1, 0, 1, 8,
    -1, 1, 4,
    # C3[2], coeff of eps^5 .. eps^2
    5, 256,
    1, 3, 128,
    -3, -2, 3, 64,
    1, -3, 2, 32,
    # C3[3], coeff of eps^5 .. eps^3
    7, 512,
    -10, 9, 384,
    5, -9, 5, 192,
    # C3[4], coeff of eps^5, eps^4
    7, 512,
    -14, 7, 512,
    # C3[5], coeff of eps^5
    21, 2560,
)

_C4_COEFF = (
    # C4[0], coeff of eps^5 .. eps^0
    97, 15015,
    1088, 156, 45045,
    -224, -4784, 1573, 45045,
    -10656, 14144, -4576, -858, 45045,
    64, 624, -4576, 6864, -3003, 15015,
    100, 208, 572, 3432, -12012, 30030, 45045,
    # C4[1], coeff of eps^5 .. eps^1
    1, 9009,
    -2944, 468, 135135,
    5792, 1040, -1287, 135135,
    5952, -11648, 9152, -2574, 135135,
    -64, -624, 4576, -6864, 3003, 135135,
    # C4[2], coeff of eps^5 .. eps^2
    8, 10725,
    1856, -936, 225225,
    -8448, 4992, -1144, 225225,
    -1440, 4160, -4576, 1716, 225225,
    # C4[3], coeff of eps^5 .. eps^3
    -136, 63063,
    1024, -208, 105105,
    3584, -3328, 1144, 315315,
    # C4[4], coeff of eps^5, eps^4
    -128, 135135,
    -2560, 832, 405405,
    # C4[5], coeff of eps^5
    128, 99099,
)


class GeodesicError(ValueError):
    """Raised when an ellipsoid or a geodesic helper gets invalid parameters."""


def _a3_coefficients(n: float) -> Tuple[float, ...]:
    coeffs: List[float] = []
    o = 0
    for j in range(NA3 - 1, -1, -1):
        m = min(NA3 - j - 1, j)
        coeffs.append(polyval(m, _A3_COEFF, o, n) / _A3_COEFF[o + m + 1])
        o += m + 2
    return tuple(coeffs)


def _c3_coefficients(n: float) -> Tuple[float, ...]:
    coeffs: List[float] = []
    o = 0
    for l in range(1, NC3):
        for j in range(NC3 - 1, l - 1, -1):
            m = min(NC3 - j - 1, j)
            coeffs.append(polyval(m, _C3_COEFF, o, n) / _C3_COEFF[o + m + 1])
            o += m + 2
    return tuple(coeffs)


def _c4_coefficients(n: float) -> Tuple[float, ...]:
    coeffs: List[float] = []
    o = 0
    for l in range(NC4):
        for j in range(NC4 - 1, l - 1, -1):
            m = NC4 - j - 1
            coeffs.append(polyval(m, _C4_COEFF, o, n) / _C4_COEFF[o + m + 1])
            o += m + 2
    return tuple(coeffs)


@dataclass(frozen=True)
class Ellipsoid:
    """
    Ellipsoid of revolution.

    Attributes
    ----------
    a : float
        Equatorial radius in meters, finite and positive.
    f : float
        Flattening, ``|f| < 1``. Positive for oblate, negative for prolate
        and zero for a sphere.
    f1 : float
        ``1 - f``.
    e2 : float
        First eccentricity squared, ``f (2 - f)``.
    ep2 : float
        Second eccentricity squared, ``e2 / (1 - f)^2``.
    n : float
        Third flattening, ``f / (2 - f)``.
    b : float
        Polar semi-axis in meters.
    c2 : float
        Authalic radius squared in square meters.
    etol2 : float
        Threshold on the short-line starting guess of the inverse solver.
    a3x, c3x, c4x : tuple of float
        Coefficients in the third flattening of the A3, C3 and C4 series.

    Raises
    ------
    GeodesicError
        If ``a`` is not finite and positive or ``|f| >= 1``.
    """
    a: float
    f: float
    f1: float = field(init=False, repr=False)
    e2: float = field(init=False, repr=False)
    ep2: float = field(init=False, repr=False)
    n: float = field(init=False, repr=False)
    b: float = field(init=False, repr=False)
    c2: float = field(init=False, repr=False)
    etol2: float = field(init=False, repr=False)
    a3x: Tuple[float, ...] = field(init=False, repr=False)
    c3x: Tuple[float, ...] = field(init=False, repr=False)
    c4x: Tuple[float, ...] = field(init=False, repr=False)

    def __post_init__(self):
        """Validate the defining parameters and derive the constants."""
        a = float(self.a)
        f = float(self.f)
        if not (math.isfinite(a) and a > 0):
            raise GeodesicError(f"Equatorial radius must be finite and positive, got {self.a}")
        if not (math.isfinite(f) and abs(f) < 1):
            raise GeodesicError(f"Flattening must satisfy |f| < 1, got {self.f}")

        f1 = 1 - f
        e2 = f * (2 - f)
        ep2 = e2 / sq(f1)
        n = f / (2 - f)
        b = a * f1
        if e2 == 0:
            c2_factor = 1.0
        elif e2 > 0:
            c2_factor = math.atanh(math.sqrt(e2)) / math.sqrt(e2)
        else:
            c2_factor = math.atan(math.sqrt(-e2)) / math.sqrt(-e2)
        c2 = (sq(a) + sq(b) * c2_factor) / 2
        # Loosened for large |f| where the short-line guess is worse
        etol2 = 0.1 * TOL2 / math.sqrt(max(0.001, abs(f)) * min(1.0, 1 - f / 2) / 2)

        derived = {
            "a": a,
            "f": f,
            "f1": f1,
            "e2": e2,
            "ep2": ep2,
            "n": n,
            "b": b,
            "c2": c2,
            "etol2": etol2,
            "a3x": _a3_coefficients(n),
            "c3x": _c3_coefficients(n),
            "c4x": _c4_coefficients(n),
        }
        for name, value in derived.items():
            object.__setattr__(self, name, value)

        logger.debug("Ellipsoid a=%.3f f=%.12g initialised (n=%.6g)", a, f, n)

    @property
    def area(self) -> float:
        """Total surface area of the ellipsoid in square meters."""
        return 4 * math.pi * self.c2

    def a3f(self, eps: float) -> float:
        """A3 series evaluated at ``eps``."""
        return polyval(NA3 - 1, self.a3x, 0, eps)

    def c3f(self, eps: float) -> List[float]:
        """
        C3 series coefficients at ``eps``.

        Returns
        -------
        list of float
            ``NC3`` coefficients; element 0 is unused.
        """
        c = [0.0] * NC3
        mult = 1.0
        o = 0
        for l in range(1, NC3):
            m = NC3 - l - 1
            mult *= eps
            c[l] = mult * polyval(m, self.c3x, o, eps)
            o += m + 1
        return c

    def c4f(self, eps: float) -> List[float]:
        """
        C4 series coefficients at ``eps``.

        Returns
        -------
        list of float
            ``NC4`` coefficients.
        """
        c = [0.0] * NC4
        mult = 1.0
        o = 0
        for l in range(NC4):
            m = NC4 - l - 1
            c[l] = mult * polyval(m, self.c4x, o, eps)
            o += m + 1
            mult *= eps
        return c


#: Reference ellipsoid of the World Geodetic System 1984
WGS84_ELLIPSOID = Ellipsoid(WGS84_A, WGS84_F)


__all__ = [
    "Ellipsoid",
    "GeodesicError",
    "WGS84_ELLIPSOID",
]
