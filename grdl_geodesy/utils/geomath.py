# -*- coding: utf-8 -*-
"""
Geodesic Math Utilities - Exact angle arithmetic in degrees.

Provides the floating point helpers the geodesic solver is built on:
error-free addition, Horner polynomial evaluation, and angle reduction,
rounding, differencing and trigonometry in degrees that are exact in the
quadrant (sind(90) is exactly 1, sind(180) is exactly +0).

All functions operate on Python floats. NaN arguments propagate to NaN
results; none of the functions raise on non-finite input.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

import math
from typing import Sequence, Tuple


def sq(x: float) -> float:
    """Square of a number."""
    return x * x


def cbrt(x: float) -> float:
    """Real cube root of a number."""
    y = math.pow(abs(x), 1.0 / 3.0)
    return y if x > 0 else (-y if x < 0 else x)


def norm(x: float, y: float) -> Tuple[float, float]:
    """
    Normalize a sine/cosine pair to unit length.

    Parameters
    ----------
    x : float
        Sine-like component.
    y : float
        Cosine-like component.

    Returns
    -------
    tuple of float
        ``(x / r, y / r)`` with ``r = hypot(x, y)``.
    """
    r = math.hypot(x, y)
    return x / r, y / r


def two_sum(u: float, v: float) -> Tuple[float, float]:
    """
    Error-free transformation of a sum.

    Returns the rounded sum ``s = u + v`` together with the rounding error
    ``t`` such that ``s + t == u + v`` exactly (Knuth's TwoSum).

    Parameters
    ----------
    u, v : float
        Addends.

    Returns
    -------
    s : float
        Rounded sum.
    t : float
        Exact rounding error.
    """
    s = u + v
    up = s - v
    vpp = s - up
    up -= u
    vpp -= v
    t = -(up + vpp)
    return s, t


def polyval(n: int, p: Sequence[float], s: int, x: float) -> float:
    """
    Evaluate a polynomial with Horner's method.

    Parameters
    ----------
    n : int
        Order of the polynomial; ``n < 0`` yields 0.
    p : sequence of float
        Coefficient table, highest order first.
    s : int
        Offset of the leading coefficient within ``p``.
    x : float
        Evaluation point.

    Returns
    -------
    float
        ``sum(p[s + j] * x**(n - j) for j in range(n + 1))``.
    """
    y = 0.0 if n < 0 else p[s]
    while n > 0:
        n -= 1
        s += 1
        y = y * x + p[s]
    return y


def ang_round(x: float) -> float:
    """
    Coarsen a small angle so that tiny values become exactly representable.

    Angles below 1/16 degree are rounded so that ``0.1`` and ``-1e-20``
    behave consistently; this removes spurious sign changes near zero.
    """
    z = 1.0 / 16.0
    if x == 0:
        return 0.0
    y = abs(x)
    # z - (z - y) must not be simplified to y
    y = z - (z - y) if y < z else y
    return -y if x < 0 else y


def ang_normalize(x: float) -> float:
    """
    Reduce an angle to the range (-180, 180].

    Parameters
    ----------
    x : float
        Angle in degrees.

    Returns
    -------
    float
        Equivalent angle in (-180, 180], NaN for non-finite input.
    """
    if not math.isfinite(x):
        return math.nan
    x = math.fmod(x, 360.0)
    if x <= -180:
        return x + 360
    return x if x <= 180 else x - 360


def lat_fix(x: float) -> float:
    """Replace a latitude outside [-90, 90] with NaN."""
    return math.nan if abs(x) > 90 else x


def ang_diff(x: float, y: float) -> Tuple[float, float]:
    """
    Exact difference of two angles reduced to (-180, 180].

    Parameters
    ----------
    x : float
        First angle in degrees.
    y : float
        Second angle in degrees.

    Returns
    -------
    d : float
        Rounded ``y - x`` reduced to (-180, 180].
    e : float
        Rounding error, so that ``d + e`` is the exact difference.
    """
    d, t = two_sum(ang_normalize(-x), ang_normalize(y))
    d = ang_normalize(d)
    return two_sum(-180.0 if d == 180 and t > 0 else d, t)


def sincosd(x: float) -> Tuple[float, float]:
    """
    Sine and cosine of an angle in degrees.

    The argument is reduced to the first octant before converting to
    radians, so results at multiples of 90 degrees are exact.

    Parameters
    ----------
    x : float
        Angle in degrees.

    Returns
    -------
    tuple of float
        ``(sin(x), cos(x))``.
    """
    r = math.fmod(x, 360.0) if math.isfinite(x) else math.nan
    q = 0 if math.isnan(r) else int(math.floor(r / 90 + 0.5))
    r -= 90 * q
    r = math.radians(r)
    s = math.sin(r)
    c = math.cos(r)
    q = q % 4
    if q == 1:
        s, c = c, -s
    elif q == 2:
        s, c = -s, -c
    elif q == 3:
        s, c = -c, s
    if x != 0:
        # turns -0 into +0 except for a -0 argument
        s += 0.0
        c += 0.0
    return s, c


def atan2d(y: float, x: float) -> float:
    """
    Two-argument arctangent in degrees.

    The result lies in [-180, 180]; arguments are swapped and reflected into
    the first octant before calling ``math.atan2`` so that exact quadrant
    boundaries are returned exactly.
    """
    q = 0
    if abs(y) > abs(x):
        x, y = y, x
        q = 2
    if x < 0:
        x = -x
        q += 1
    ang = math.degrees(math.atan2(y, x))
    if q == 1:
        ang = math.copysign(180.0, y) - ang
    elif q == 2:
        ang = 90 - ang
    elif q == 3:
        ang = -90 + ang
    return ang


__all__ = [
    "sq",
    "cbrt",
    "norm",
    "two_sum",
    "polyval",
    "ang_round",
    "ang_normalize",
    "lat_fix",
    "ang_diff",
    "sincosd",
    "atan2d",
]
