# -*- coding: utf-8 -*-
"""
Geodetic Constants - Ellipsoid parameters and solver tuning constants.

Provides commonly used constants including:
- WGS-84 ellipsoid parameters
- Unit conversions
- Series order, tolerances and iteration limits of the geodesic solver

License
-------
MIT License
Copyright (c) 2024 geoint.org

Created
-------
2026-02-11

Modified
--------
2026-10-18
"""

import math
import sys

# ===================================================================
# WGS-84 Ellipsoid Parameters
# ===================================================================

#: WGS-84 semi-major axis (equatorial radius) in meters
WGS84_A = 6378137.0  # m

#: WGS-84 flattening, defining value
WGS84_F = 1.0 / 298.257223563

#: WGS-84 semi-minor axis (polar radius) in meters
WGS84_B = WGS84_A * (1.0 - WGS84_F)  # ~6356752.314245 m

#: WGS-84 first eccentricity squared (e² = f(2-f))
WGS84_E2 = WGS84_F * (2.0 - WGS84_F)  # ~0.00669437999014

#: WGS-84 second eccentricity squared (e'² = e²/(1-f)²)
WGS84_EP2 = WGS84_E2 / (1.0 - WGS84_F) ** 2  # ~0.00673949674228

# ===================================================================
# Unit Conversions
# ===================================================================

#: Feet to meters conversion factor
FEET_TO_METERS = 0.3048  # m/ft

#: Meters to feet conversion factor
METERS_TO_FEET = 1.0 / FEET_TO_METERS  # ft/m

#: Nautical miles to meters conversion factor
NAUTICAL_MILES_TO_METERS = 1852.0  # m/nmi

#: Meters to nautical miles conversion factor
METERS_TO_NAUTICAL_MILES = 1.0 / NAUTICAL_MILES_TO_METERS  # nmi/m

#: Degrees to radians conversion factor
DEG_TO_RAD = 0.017453292519943295  # π/180

#: Radians to degrees conversion factor
RAD_TO_DEG = 57.29577951308232  # 180/π

# ===================================================================
# Floating Point
# ===================================================================

#: Binary digits in the mantissa of a float
DIGITS = sys.float_info.mant_dig  # 53

#: Machine epsilon, 2^-52
EPSILON = sys.float_info.epsilon

#: Smallest positive normalized float, 2^-1022
MIN_FLOAT = sys.float_info.min

# ===================================================================
# Geodesic Solver
# ===================================================================

#: Order of the series expansions in the third flattening
GEODESIC_ORDER = 6

#: Number of Newton iterations in the inverse solver
MAXIT1 = 20

#: Total iterations (Newton plus bisection) in the inverse solver
MAXIT2 = MAXIT1 + DIGITS + 10

#: Convergence tolerance on the longitude residual
TOL0 = EPSILON

#: Threshold on the Lambda12 residual when the Newton step overshot
TOL1 = 200 * TOL0

#: Square root of machine epsilon
TOL2 = math.sqrt(TOL0)

#: Bracketing tolerance that stops the bisection
TOLB = TOL0 * TOL2

#: Threshold of the astroid starting guess for nearly antipodal points
XTHRESH = 1000 * TOL2

#: Small value substituted for a vanishing cosine of latitude
TINY = math.sqrt(MIN_FLOAT)

# ===================================================================
# Constants Dictionary (for programmatic access)
# ===================================================================

CONSTANTS = {
    'WGS84_A': WGS84_A,
    'WGS84_B': WGS84_B,
    'WGS84_F': WGS84_F,
    'WGS84_E2': WGS84_E2,
    'WGS84_EP2': WGS84_EP2,
    'FEET_TO_METERS': FEET_TO_METERS,
    'METERS_TO_FEET': METERS_TO_FEET,
    'NAUTICAL_MILES_TO_METERS': NAUTICAL_MILES_TO_METERS,
    'METERS_TO_NAUTICAL_MILES': METERS_TO_NAUTICAL_MILES,
    'DEG_TO_RAD': DEG_TO_RAD,
    'RAD_TO_DEG': RAD_TO_DEG,
    'GEODESIC_ORDER': GEODESIC_ORDER,
    'MAXIT1': MAXIT1,
    'MAXIT2': MAXIT2,
    'TOL0': TOL0,
    'TOL1': TOL1,
    'TOL2': TOL2,
    'TOLB': TOLB,
    'XTHRESH': XTHRESH,
    'TINY': TINY,
}

__all__ = [
    # WGS-84 parameters
    'WGS84_A',
    'WGS84_B',
    'WGS84_F',
    'WGS84_E2',
    'WGS84_EP2',
    # Unit conversions
    'FEET_TO_METERS',
    'METERS_TO_FEET',
    'NAUTICAL_MILES_TO_METERS',
    'METERS_TO_NAUTICAL_MILES',
    'DEG_TO_RAD',
    'RAD_TO_DEG',
    # Floating point
    'DIGITS',
    'EPSILON',
    'MIN_FLOAT',
    # Geodesic solver
    'GEODESIC_ORDER',
    'MAXIT1',
    'MAXIT2',
    'TOL0',
    'TOL1',
    'TOL2',
    'TOLB',
    'XTHRESH',
    'TINY',
    # Dictionary
    'CONSTANTS',
]
