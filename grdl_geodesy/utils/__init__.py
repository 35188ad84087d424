# -*- coding: utf-8 -*-
"""
Utilities - Constants and floating point helpers.

WGS-84 parameters, solver tolerances, exact angle arithmetic in degrees
and the compensated accumulator used for polygon areas.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from grdl_geodesy.utils.constants import (
    WGS84_A,
    WGS84_B,
    WGS84_F,
    WGS84_E2,
    WGS84_EP2,
    FEET_TO_METERS,
    METERS_TO_FEET,
    NAUTICAL_MILES_TO_METERS,
    METERS_TO_NAUTICAL_MILES,
    CONSTANTS,
)

from grdl_geodesy.utils.geomath import (
    ang_diff,
    ang_normalize,
    ang_round,
    atan2d,
    lat_fix,
    sincosd,
    two_sum,
)

from grdl_geodesy.utils.accumulator import Accumulator

__all__ = [
    "WGS84_A",
    "WGS84_B",
    "WGS84_F",
    "WGS84_E2",
    "WGS84_EP2",
    "FEET_TO_METERS",
    "METERS_TO_FEET",
    "NAUTICAL_MILES_TO_METERS",
    "METERS_TO_NAUTICAL_MILES",
    "CONSTANTS",
    "ang_diff",
    "ang_normalize",
    "ang_round",
    "atan2d",
    "lat_fix",
    "sincosd",
    "two_sum",
    "Accumulator",
]
