# -*- coding: utf-8 -*-
"""
Geodesic Line - Repeated position queries along a fixed geodesic.

A geodesic line is defined by a starting point and azimuth on an
ellipsoid. Everything that depends only on the line (equatorial azimuth,
series parameter, Fourier coefficients and their values at the starting
point) is evaluated once at construction, so each subsequent
:meth:`GeodesicLine.position` call costs a handful of Clenshaw sums.

Lines are normally created through the factories on
:class:`~grdl_geodesy.geometry.geodesic.Geodesic` (``line``,
``direct_line``, ``inverse_line``, ...). The ``direct_line`` and
``inverse_line`` factories also record a reference point 3 on the line,
available through :attr:`GeodesicLine.distance` and
:attr:`GeodesicLine.arc`.

Dependencies
------------
math - scalar trigonometry

References
----------
C. F. F. Karney, "Algorithms for geodesics", J. Geodesy 87, 43-55 (2013).

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
from typing import TYPE_CHECKING, Tuple

# GRDL internal
from grdl_geodesy.geometry.capabilities import GeodesicMask
from grdl_geodesy.geometry.result import GeodesicResult
from grdl_geodesy.geometry.series import (
    a1m1f,
    a2m1f,
    c1f,
    c1pf,
    c2f,
    expansion_parameter,
    sin_cos_series,
)
from grdl_geodesy.utils.constants import TINY
from grdl_geodesy.utils.geomath import (
    ang_normalize,
    ang_round,
    atan2d,
    lat_fix,
    norm,
    sincosd,
    sq,
)

if TYPE_CHECKING:
    from grdl_geodesy.geometry.geodesic import Geodesic


class GeodesicLine:
    """
    A geodesic starting at ``(lat1, lon1)`` with azimuth ``azi1``.

    Parameters
    ----------
    geodesic : Geodesic
        Solver holding the ellipsoid.
    lat1 : float
        Latitude of point 1 (degrees), in [-90, 90]; otherwise NaN.
    lon1 : float
        Longitude of point 1 (degrees).
    azi1 : float
        Azimuth at point 1 (degrees).
    caps : GeodesicMask
        Capabilities the line must support. LATITUDE, AZIMUTH and
        LONG_UNROLL are always added. Outputs requested from
        :meth:`position` beyond these capabilities are left NaN.
    salp1, calp1 : float, optional
        Sine and cosine of ``azi1`` when already known exactly (used by the
        inverse-line factory); computed from ``azi1`` when omitted.

    Examples
    --------
    >>> from grdl_geodesy import WGS84
    >>> line = WGS84.line(40.64, -73.78, 45.0)
    >>> stops = [line.position(s) for s in range(0, 5000001, 1000000)]
    """

    def __init__(self, geodesic: "Geodesic", lat1: float, lon1: float,
                 azi1: float, caps: int = GeodesicMask.ALL,
                 salp1: float = math.nan, calp1: float = math.nan):
        if math.isnan(salp1) or math.isnan(calp1):
            azi1 = ang_normalize(azi1)
            # Guard against underflow in salp0; also converts -0 to +0
            salp1, calp1 = sincosd(ang_round(azi1))

        ellipsoid = geodesic.ellipsoid
        self._a = ellipsoid.a
        self._f = ellipsoid.f
        self._b = ellipsoid.b
        self._c2 = ellipsoid.c2
        self._f1 = ellipsoid.f1
        self._caps = GeodesicMask(
            caps | GeodesicMask.LATITUDE | GeodesicMask.AZIMUTH
            | GeodesicMask.LONG_UNROLL)

        self._lat1 = lat_fix(lat1)
        self._lon1 = lon1
        self._azi1 = azi1
        self._salp1 = salp1
        self._calp1 = calp1

        sbet1, cbet1 = sincosd(ang_round(self._lat1))
        sbet1 *= self._f1
        sbet1, cbet1 = norm(sbet1, cbet1)
        # cbet1 = +epsilon at the poles
        cbet1 = max(cbet1, TINY)
        self._dn1 = math.sqrt(1 + ellipsoid.ep2 * sq(sbet1))

        # alp0 in [0, pi/2 - |bet1|]
        self._salp0 = salp1 * cbet1
        self._calp0 = math.hypot(calp1, salp1 * sbet1)

        # sig1 measured from the northward equator crossing; tan(bet1) =
        # tan(sig1) cos(alp1) and tan(omg1) = sin(alp0) tan(sig1)
        self._somg1 = self._salp0 * sbet1
        self._comg1 = cbet1 * calp1 if (sbet1 != 0 or calp1 != 0) else 1.0
        self._ssig1, self._csig1 = norm(sbet1, self._comg1)

        self._k2 = sq(self._calp0) * ellipsoid.ep2
        eps = expansion_parameter(self._k2)

        self._a1m1 = self._b11 = self._stau1 = self._ctau1 = math.nan
        self._c1a: Tuple[float, ...] = ()
        if self._caps & GeodesicMask.CAP_C1:
            self._a1m1 = a1m1f(eps)
            self._c1a = tuple(c1f(eps))
            self._b11 = sin_cos_series(True, self._ssig1, self._csig1, self._c1a)
            s = math.sin(self._b11)
            c = math.cos(self._b11)
            # tau1 = sig1 + B11
            self._stau1 = self._ssig1 * c + self._csig1 * s
            self._ctau1 = self._csig1 * c - self._ssig1 * s

        self._c1pa: Tuple[float, ...] = ()
        if self._caps & GeodesicMask.CAP_C1p:
            self._c1pa = tuple(c1pf(eps))

        self._a2m1 = self._b21 = math.nan
        self._c2a: Tuple[float, ...] = ()
        if self._caps & GeodesicMask.CAP_C2:
            self._a2m1 = a2m1f(eps)
            self._c2a = tuple(c2f(eps))
            self._b21 = sin_cos_series(True, self._ssig1, self._csig1, self._c2a)

        self._a3c = self._b31 = math.nan
        self._c3a: Tuple[float, ...] = ()
        if self._caps & GeodesicMask.CAP_C3:
            self._c3a = tuple(ellipsoid.c3f(eps))
            self._a3c = -self._f * self._salp0 * ellipsoid.a3f(eps)
            self._b31 = sin_cos_series(True, self._ssig1, self._csig1, self._c3a)

        self._a4 = self._b41 = math.nan
        self._c4a: Tuple[float, ...] = ()
        if self._caps & GeodesicMask.CAP_C4:
            self._c4a = tuple(ellipsoid.c4f(eps))
            # a^2 e^2 cos(alp0) sin(alp0)
            self._a4 = sq(self._a) * self._calp0 * self._salp0 * ellipsoid.e2
            self._b41 = sin_cos_series(False, self._ssig1, self._csig1, self._c4a)

        self._s13 = math.nan
        self._a13 = math.nan

    # ===================================================================
    # Position Queries
    # ===================================================================

    def gen_position(self, arcmode: bool, s12_a12: float,
                     outmask: int) -> GeodesicResult:
        """
        Position of point 2 at a distance or arc length from point 1.

        Parameters
        ----------
        arcmode : bool
            If True ``s12_a12`` is the arc length ``a12`` (degrees),
            otherwise the distance ``s12`` (meters). Either may be
            negative.
        s12_a12 : float
            Distance or arc length from point 1 to point 2.
        outmask : GeodesicMask
            Requested outputs; masked by the line's capabilities.

        Returns
        -------
        GeodesicResult
            ``lat1``, ``lon1``, ``azi1`` and ``a12`` are always set; the
            rest follow ``outmask``. A distance query on a line built
            without DISTANCE_IN returns an all-NaN result.
        """
        outmask &= self._caps & GeodesicMask.OUT_MASK
        r = GeodesicResult()
        if not (arcmode or
                self._caps & (GeodesicMask.OUT_MASK & GeodesicMask.DISTANCE_IN)):
            # Distance requested but the reverted series was not prepared
            return r

        unroll = bool(outmask & GeodesicMask.LONG_UNROLL)
        r.lat1 = self._lat1
        r.azi1 = self._azi1
        r.lon1 = self._lon1 if unroll else ang_normalize(self._lon1)

        b12 = 0.0
        ab1 = 0.0
        if arcmode:
            r.a12 = s12_a12
            sig12 = math.radians(s12_a12)
            ssig12, csig12 = sincosd(s12_a12)
        else:
            r.s12 = s12_a12
            tau12 = s12_a12 / (self._b * (1 + self._a1m1))
            tau12 = tau12 if math.isfinite(tau12) else math.nan
            s = math.sin(tau12)
            c = math.cos(tau12)
            # tau2 = tau1 + tau12
            b12 = -sin_cos_series(True,
                                  self._stau1 * c + self._ctau1 * s,
                                  self._ctau1 * c - self._stau1 * s,
                                  self._c1pa)
            sig12 = tau12 - (b12 - self._b11)
            ssig12 = math.sin(sig12)
            csig12 = math.cos(sig12)
            if abs(self._f) > 0.01:
                # The reverted series loses accuracy for |f| > 1/100;
                # polish sig12 with one Newton step
                ssig2 = self._ssig1 * csig12 + self._csig1 * ssig12
                csig2 = self._csig1 * csig12 - self._ssig1 * ssig12
                b12 = sin_cos_series(True, ssig2, csig2, self._c1a)
                serr = ((1 + self._a1m1) * (sig12 + (b12 - self._b11))
                        - s12_a12 / self._b)
                sig12 = sig12 - serr / math.sqrt(1 + self._k2 * sq(ssig2))
                ssig12 = math.sin(sig12)
                csig12 = math.cos(sig12)
            r.a12 = math.degrees(sig12)

        # sig2 = sig1 + sig12
        ssig2 = self._ssig1 * csig12 + self._csig1 * ssig12
        csig2 = self._csig1 * csig12 - self._ssig1 * ssig12
        dn2 = math.sqrt(1 + self._k2 * sq(ssig2))
        if outmask & (GeodesicMask.DISTANCE | GeodesicMask.REDUCED_LENGTH
                      | GeodesicMask.GEODESIC_SCALE):
            if arcmode or abs(self._f) > 0.01:
                b12 = sin_cos_series(True, ssig2, csig2, self._c1a)
            ab1 = (1 + self._a1m1) * (b12 - self._b11)

        # sin(bet2) = cos(alp0) sin(sig2)
        sbet2 = self._calp0 * ssig2
        cbet2 = math.hypot(self._salp0, self._calp0 * csig2)
        if cbet2 == 0:
            # salp0 = 0 and csig2 = 0
            cbet2 = csig2 = TINY
        # tan(alp0) = cos(sig2) tan(alp2)
        salp2 = self._salp0
        calp2 = self._calp0 * csig2

        if outmask & GeodesicMask.DISTANCE and arcmode:
            r.s12 = self._b * ((1 + self._a1m1) * sig12 + ab1)

        if outmask & GeodesicMask.LONGITUDE:
            # tan(omg2) = sin(alp0) tan(sig2)
            somg2 = self._salp0 * ssig2
            e = math.copysign(1.0, self._salp0)
            if unroll:
                omg12 = e * (sig12
                             - (math.atan2(ssig2, csig2)
                                - math.atan2(self._ssig1, self._csig1))
                             + (math.atan2(e * somg2, csig2)
                                - math.atan2(e * self._somg1, self._comg1)))
            else:
                omg12 = math.atan2(somg2 * self._comg1 - csig2 * self._somg1,
                                   csig2 * self._comg1 + somg2 * self._somg1)
            lam12 = omg12 + self._a3c * (
                sig12 + (sin_cos_series(True, ssig2, csig2, self._c3a)
                         - self._b31))
            lon12 = math.degrees(lam12)
            if unroll:
                r.lon2 = self._lon1 + lon12
            else:
                r.lon2 = ang_normalize(r.lon1 + ang_normalize(lon12))

        if outmask & GeodesicMask.LATITUDE:
            r.lat2 = atan2d(sbet2, self._f1 * cbet2)

        if outmask & GeodesicMask.AZIMUTH:
            r.azi2 = atan2d(salp2, calp2)

        if outmask & (GeodesicMask.REDUCED_LENGTH | GeodesicMask.GEODESIC_SCALE):
            b22 = sin_cos_series(True, ssig2, csig2, self._c2a)
            ab2 = (1 + self._a2m1) * (b22 - self._b21)
            j12 = (self._a1m1 - self._a2m1) * sig12 + (ab1 - ab2)
            if outmask & GeodesicMask.REDUCED_LENGTH:
                # Parenthesised products cancel exactly for coincident points
                r.m12 = self._b * ((dn2 * (self._csig1 * ssig2)
                                    - self._dn1 * (self._ssig1 * csig2))
                                   - self._csig1 * csig2 * j12)
            if outmask & GeodesicMask.GEODESIC_SCALE:
                t = (self._k2 * (ssig2 - self._ssig1) * (ssig2 + self._ssig1)
                     / (self._dn1 + dn2))
                r.M12 = csig12 + (t * ssig2 - csig2 * j12) * self._ssig1 / self._dn1
                r.M21 = csig12 - (t * self._ssig1 - self._csig1 * j12) * ssig2 / dn2

        if outmask & GeodesicMask.AREA:
            b42 = sin_cos_series(False, ssig2, csig2, self._c4a)
            if self._calp0 == 0 or self._salp0 == 0:
                # alp12 = alp2 - alp1, fed to atan2 so left unnormalised
                salp12 = salp2 * self._calp1 - calp2 * self._salp1
                calp12 = calp2 * self._calp1 + salp2 * self._salp1
            else:
                # tan(alp2 - alp1) = calp0 salp0 (csig1 - csig2) /
                #   (salp0^2 + calp0^2 csig1 csig2), with csig1 - csig2
                # rewritten to avoid cancellation
                if csig12 <= 0:
                    dcsig = self._csig1 * (1 - csig12) + ssig12 * self._ssig1
                else:
                    dcsig = ssig12 * (self._csig1 * ssig12 / (1 + csig12)
                                      + self._ssig1)
                salp12 = self._calp0 * self._salp0 * dcsig
                calp12 = sq(self._salp0) + sq(self._calp0) * self._csig1 * csig2
            r.S12 = (self._c2 * math.atan2(salp12, calp12)
                     + self._a4 * (b42 - self._b41))

        return r

    def position(self, s12: float,
                 outmask: int = GeodesicMask.STANDARD) -> GeodesicResult:
        """
        Position at distance ``s12`` (meters) from point 1.

        Requires the line to carry DISTANCE_IN; otherwise the result is all
        NaN. See :meth:`gen_position`.
        """
        return self.gen_position(False, s12, outmask)

    def arc_position(self, a12: float,
                     outmask: int = GeodesicMask.STANDARD) -> GeodesicResult:
        """Position at arc length ``a12`` (degrees) from point 1."""
        return self.gen_position(True, a12, outmask)

    # ===================================================================
    # Reference Point
    # ===================================================================

    def set_distance(self, s13: float) -> None:
        """
        Place point 3 at distance ``s13`` (meters) from point 1.

        The matching arc length is NaN when the line lacks DISTANCE_IN.
        """
        self._s13 = s13
        self._a13 = self.gen_position(False, s13, GeodesicMask.NONE).a12

    def set_arc(self, a13: float) -> None:
        """
        Place point 3 at arc length ``a13`` (degrees) from point 1.

        The matching distance is NaN when the line lacks DISTANCE.
        """
        self._a13 = a13
        self._s13 = self.gen_position(True, a13, GeodesicMask.DISTANCE).s12

    def gen_set_distance(self, arcmode: bool, s13_a13: float) -> None:
        """Place point 3 by arc length (``arcmode``) or by distance."""
        if arcmode:
            self.set_arc(s13_a13)
        else:
            self.set_distance(s13_a13)

    def gen_distance(self, arcmode: bool) -> float:
        """Arc length (``arcmode``) or distance to point 3."""
        return self._a13 if arcmode else self._s13

    # ===================================================================
    # Accessors
    # ===================================================================

    @property
    def latitude(self) -> float:
        """Latitude of point 1 (degrees)."""
        return self._lat1

    @property
    def longitude(self) -> float:
        """Longitude of point 1 (degrees), as given."""
        return self._lon1

    @property
    def azimuth(self) -> float:
        """Azimuth at point 1 (degrees)."""
        return self._azi1

    @property
    def azimuth_cosines(self) -> Tuple[float, float]:
        """Sine and cosine of the azimuth at point 1."""
        return self._salp1, self._calp1

    @property
    def equatorial_azimuth(self) -> float:
        """Azimuth at the northward equator crossing (degrees)."""
        return atan2d(self._salp0, self._calp0)

    @property
    def equatorial_azimuth_cosines(self) -> Tuple[float, float]:
        """Sine and cosine of the equatorial azimuth."""
        return self._salp0, self._calp0

    @property
    def equatorial_arc(self) -> float:
        """Arc length from the northward equator crossing to point 1 (degrees)."""
        return atan2d(self._ssig1, self._csig1)

    @property
    def major_radius(self) -> float:
        """Equatorial radius of the ellipsoid (meters)."""
        return self._a

    @property
    def flattening(self) -> float:
        """Flattening of the ellipsoid."""
        return self._f

    @property
    def capabilities(self) -> GeodesicMask:
        """Capabilities the line was built with."""
        return self._caps

    def has_capabilities(self, testcaps: int) -> bool:
        """True if every output bit of ``testcaps`` is supported."""
        testcaps &= GeodesicMask.OUT_ALL
        return (self._caps & testcaps) == testcaps

    @property
    def distance(self) -> float:
        """Distance to point 3 (meters); NaN when no point 3 is set."""
        return self._s13

    @property
    def arc(self) -> float:
        """Arc length to point 3 (degrees); NaN when no point 3 is set."""
        return self._a13

    def __repr__(self) -> str:
        return (f"GeodesicLine(lat1={self._lat1!r}, lon1={self._lon1!r}, "
                f"azi1={self._azi1!r}, caps={int(self._caps):#x})")


__all__ = [
    "GeodesicLine",
]
