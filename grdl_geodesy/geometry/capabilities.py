# -*- coding: utf-8 -*-
"""
Geodesic Capabilities - Bit mask selecting the outputs of a geodesic solve.

Each output bit is or-ed with the ``CAP_*`` bits naming the series that
must be prepared to produce it, so the mask handed to a geodesic line is
also the recipe for which coefficient tables the line computes.

License
-------
MIT License
Copyright (c) 2024 geoint.org
"""

from enum import IntFlag


class GeodesicMask(IntFlag):
    """
    Capabilities of a geodesic line and outputs of a geodesic solve.

    Output bits
    -----------
    LATITUDE : lat2
    LONGITUDE : lon2
    AZIMUTH : azi2
    DISTANCE : s12
    DISTANCE_IN : allow distance (rather than arc) as the line parameter
    REDUCED_LENGTH : m12
    GEODESIC_SCALE : M12 and M21
    AREA : S12
    LONG_UNROLL : unroll lon2 instead of reducing it to (-180, 180]

    Presets
    -------
    NONE, STANDARD (latitude, longitude, azimuth and distance), ALL.
    """

    # Series required by the outputs
    CAP_NONE = 0
    CAP_C1 = 1 << 0
    CAP_C1p = 1 << 1
    CAP_C2 = 1 << 2
    CAP_C3 = 1 << 3
    CAP_C4 = 1 << 4
    CAP_ALL = 0x1F
    CAP_MASK = CAP_ALL

    OUT_ALL = 0x7F80
    # Includes LONG_UNROLL
    OUT_MASK = 0xFF80

    NONE = 0
    LATITUDE = 1 << 7 | CAP_NONE
    LONGITUDE = 1 << 8 | CAP_C3
    AZIMUTH = 1 << 9 | CAP_NONE
    DISTANCE = 1 << 10 | CAP_C1
    STANDARD = LATITUDE | LONGITUDE | AZIMUTH | DISTANCE
    DISTANCE_IN = 1 << 11 | CAP_C1 | CAP_C1p
    REDUCED_LENGTH = 1 << 12 | CAP_C1 | CAP_C2
    GEODESIC_SCALE = 1 << 13 | CAP_C1 | CAP_C2
    AREA = 1 << 14 | CAP_C4
    LONG_UNROLL = 1 << 15
    ALL = OUT_ALL | CAP_ALL


__all__ = [
    "GeodesicMask",
]
