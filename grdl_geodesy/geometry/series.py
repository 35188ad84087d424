# -*- coding: utf-8 -*-
"""
Geodesic Series - Fourier series of the geodesic integrals.

The distance, reduced length, longitude and area integrals of a geodesic
are expanded as trigonometric series in the arc length on the auxiliary
sphere. This module holds the series that depend only on the
azimuth-dependent expansion parameter ``eps`` (A1, C1, C1', A2, C2), the
Clenshaw summation used to evaluate every series, and the astroid solver
that seeds the inverse problem for nearly antipodal points. The
ellipsoid-dependent series (A3, C3, C4) live on
:class:`~grdl_geodesy.geometry.ellipsoid.Ellipsoid`.

Dependencies
------------
math - scalar trigonometry

References
----------
C. F. F. Karney, "Algorithms for geodesics", J. Geodesy 87, 43-55 (2013),
equations 15-18, 42-43, 55-56.

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
from typing import List, Sequence

# GRDL internal
from grdl_geodesy.utils.constants import GEODESIC_ORDER
from grdl_geodesy.utils.geomath import cbrt, polyval, sq

NA1 = GEODESIC_ORDER
NC1 = GEODESIC_ORDER
NC1P = GEODESIC_ORDER
NA2 = GEODESIC_ORDER
NC2 = GEODESIC_ORDER

# (1 - eps) * A1 - 1, polynomial in eps^2 of order 3
_A1M1_COEFF = (1, 4, 64, 0, 256)

# C1[l] / eps^l, polynomials in eps^2 of order 2, 2, 1, 1, 0, 0
_C1_COEFF = (
    -1, 6, -16, 32,
    -9, 64, -128, 2048,
    9, -16, 768,
    3, -5, 512,
    -7, 1280,
    -7, 2048,
)

# C1'[l] / eps^l
_C1P_COEFF = (
    205, -432, 768, 1536,
    4005, -4736, 3840, 12288,
    -225, 116, 384,
    -7173, 2695, 7680,
    3467, 7680,
    38081, 61440,
)

# (1 + eps) * A2 - 1, polynomial in eps^2 of order 3
_A2M1_COEFF = (-11, -28, -192, 0, 256)

# C2[l] / eps^l
_C2_COEFF = (
    1, 2, 16, 32,
    35, 64, 384, 2048,
    15, 80, 768,
    7, 35, 512,
    63, 1280,
    77, 2048,
)


# ===================================================================
# Clenshaw Summation
# ===================================================================

def sin_cos_series(sinp: bool, sinx: float, cosx: float,
                   c: Sequence[float]) -> float:
    """
    Evaluate a sine or cosine series with Clenshaw summation.

    For ``sinp`` the value is ``sum(c[i] * sin(2 i x), i = 1 .. n)`` and
    ``c[0]`` is ignored; otherwise it is
    ``sum(c[i] * cos((2 i + 1) x), i = 0 .. n - 1)``.

    Parameters
    ----------
    sinp : bool
        Select the sine series.
    sinx, cosx : float
        Sine and cosine of ``x``.
    c : sequence of float
        Series coefficients.

    Returns
    -------
    float
        Value of the series.
    """
    k = len(c)
    n = k - (1 if sinp else 0)
    # 2 cos(2x)
    ar = 2 * (cosx - sinx) * (cosx + sinx)
    if n & 1:
        k -= 1
        y0 = c[k]
    else:
        y0 = 0.0
    y1 = 0.0
    # Two terms per pass so the accumulators end in their starting roles
    for _ in range(n // 2):
        k -= 1
        y1 = ar * y0 - y1 + c[k]
        k -= 1
        y0 = ar * y1 - y0 + c[k]
    return 2 * sinx * cosx * y0 if sinp else cosx * (y0 - y1)


def _fourier_coefficients(order: int, coeff: Sequence[float],
                          eps: float) -> List[float]:
    # Shared by C1, C1' and C2: index 0 is unused
    c = [0.0] * (order + 1)
    eps2 = sq(eps)
    d = eps
    o = 0
    for l in range(1, order + 1):
        m = (order - l) // 2
        c[l] = d * polyval(m, coeff, o, eps2) / coeff[o + m + 1]
        o += m + 2
        d *= eps
    return c


# ===================================================================
# Distance Series (I1) and Reduced Length Series (I2)
# ===================================================================

def a1m1f(eps: float) -> float:
    """Scale factor ``A1 - 1`` of the distance integral."""
    m = NA1 // 2
    t = polyval(m, _A1M1_COEFF, 0, sq(eps)) / _A1M1_COEFF[m + 1]
    return (t + eps) / (1 - eps)


def c1f(eps: float) -> List[float]:
    """Fourier coefficients ``C1[1..6]`` of the distance integral."""
    return _fourier_coefficients(NC1, _C1_COEFF, eps)


def c1pf(eps: float) -> List[float]:
    """Coefficients ``C1'[1..6]`` of the reverted distance series."""
    return _fourier_coefficients(NC1P, _C1P_COEFF, eps)


def a2m1f(eps: float) -> float:
    """Scale factor ``A2 - 1`` of the reduced length integral."""
    m = NA2 // 2
    t = polyval(m, _A2M1_COEFF, 0, sq(eps)) / _A2M1_COEFF[m + 1]
    return (t - eps) / (1 + eps)


def c2f(eps: float) -> List[float]:
    """Fourier coefficients ``C2[1..6]`` of the reduced length integral."""
    return _fourier_coefficients(NC2, _C2_COEFF, eps)


def expansion_parameter(k2: float) -> float:
    """
    Series parameter ``eps`` from ``k^2 = e'^2 cos^2(alpha0)``.

    Written to avoid cancellation: ``eps = k2 / (2 (1 + sqrt(1 + k2)) + k2)``.
    """
    return k2 / (2 * (1 + math.sqrt(1 + k2)) + k2)


# ===================================================================
# Astroid
# ===================================================================

def astroid(x: float, y: float) -> float:
    """
    Positive root of the astroid equation.

    Solves ``k^4 + 2 k^3 - (x^2 + y^2 - 1) k^2 - 2 y^2 k - y^2 = 0`` for
    ``k >= 0``. Used to seed Newton's method for nearly antipodal points.

    Parameters
    ----------
    x, y : float
        Scaled longitude and latitude offsets from the antipode.

    Returns
    -------
    float
        The positive root, or 0 for ``y == 0`` and ``|x| <= 1``.
    """
    p = sq(x)
    q = sq(y)
    r = (p + q - 1) / 6
    if q == 0 and r <= 0:
        # y = 0 with |x| <= 1
        return 0.0

    # Equations for s and t multiplied by r^3 and r avoid a division by r
    s = p * q / 4
    r2 = sq(r)
    r3 = r * r2
    # Zero on the evolute p^(1/3) + q^(1/3) = 1
    disc = s * (s + 2 * r3)
    u = r
    if disc >= 0:
        t3 = s + r3
        # Sign of the root chosen to maximise |t3|
        t3 += -math.sqrt(disc) if t3 < 0 else math.sqrt(disc)
        t = cbrt(t3)
        u += t + (r2 / t if t != 0 else 0.0)
    else:
        # t is complex but u stays real; disc < 0 implies r < 0
        ang = math.atan2(math.sqrt(-disc), -(s + r3))
        u += 2 * r * math.cos(ang / 3)

    v = math.sqrt(sq(u) + q)
    # u + v without cancellation, positive
    uv = q / (v - u) if u < 0 else u + v
    w = (uv - q) / (2 * v)
    return uv / (math.sqrt(uv + sq(w)) + w)


__all__ = [
    "sin_cos_series",
    "a1m1f",
    "c1f",
    "c1pf",
    "a2m1f",
    "c2f",
    "expansion_parameter",
    "astroid",
]
