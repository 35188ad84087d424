# -*- coding: utf-8 -*-
"""
Geodesic Solver - Direct and inverse geodesic problems on an ellipsoid.

Solves, to round-off accuracy, the two classical problems for geodesics on
an ellipsoid of revolution:

- direct: given a point, an azimuth and a distance (or arc length), find
  the end point and the azimuth there;
- inverse: given two points, find the shortest geodesic joining them.

Both also report the reduced length ``m12``, the geodesic scales ``M12``
and ``M21`` and the area ``S12`` between the geodesic and the equator when
requested through a :class:`~grdl_geodesy.geometry.capabilities.GeodesicMask`.

The inverse problem is solved on the auxiliary sphere. A starting guess
(the spherical solution for well separated points, a closed form for
short lines, the astroid solution for nearly antipodal points) is refined
by Newton's method on the longitude residual, falling back to bisection
of a bracketing interval when a Newton step misbehaves.

Dependencies
------------
math - scalar trigonometry
logging - non-convergence diagnostics

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
import logging
import math
from typing import Tuple

# GRDL internal
from grdl_geodesy.geometry.capabilities import GeodesicMask
from grdl_geodesy.geometry.ellipsoid import Ellipsoid
from grdl_geodesy.geometry.geodesic_line import GeodesicLine
from grdl_geodesy.geometry.polygon_area import PolygonArea
from grdl_geodesy.geometry.result import GeodesicResult
from grdl_geodesy.geometry.series import (
    a1m1f,
    a2m1f,
    astroid,
    c1f,
    c2f,
    expansion_parameter,
    sin_cos_series,
)
from grdl_geodesy.utils.constants import (
    MAXIT1,
    MAXIT2,
    TINY,
    TOL0,
    TOL1,
    TOLB,
    WGS84_A,
    WGS84_F,
    XTHRESH,
)
from grdl_geodesy.utils.geomath import (
    ang_diff,
    ang_normalize,
    ang_round,
    atan2d,
    lat_fix,
    norm,
    sincosd,
    sq,
)

logger = logging.getLogger(__name__)

_NAN = math.nan
_LENGTHS = GeodesicMask.REDUCED_LENGTH | GeodesicMask.GEODESIC_SCALE


class Geodesic:
    """
    Geodesic calculations on an ellipsoid of revolution.

    Parameters
    ----------
    a : float
        Equatorial radius in meters.
    f : float
        Flattening; 0 for a sphere, negative for a prolate ellipsoid.

    Raises
    ------
    GeodesicError
        If ``a`` is not finite and positive or ``|f| >= 1``.

    Examples
    --------
    >>> from grdl_geodesy import WGS84
    >>> r = WGS84.inverse(40.6, -73.8, 49.0166667, 2.55)  # JFK to CDG
    >>> round(r.s12 / 1000)
    5853
    """

    def __init__(self, a: float, f: float):
        self.ellipsoid = Ellipsoid(a, f)
        el = self.ellipsoid
        self.a = el.a
        self.f = el.f
        self.f1 = el.f1
        self.e2 = el.e2
        self.ep2 = el.ep2
        self.n = el.n
        self.b = el.b
        self.c2 = el.c2
        self.etol2 = el.etol2

    @property
    def major_radius(self) -> float:
        """Equatorial radius of the ellipsoid (meters)."""
        return self.a

    @property
    def flattening(self) -> float:
        """Flattening of the ellipsoid."""
        return self.f

    @property
    def ellipsoid_area(self) -> float:
        """Total area of the ellipsoid (square meters)."""
        return self.ellipsoid.area

    def __repr__(self) -> str:
        return f"Geodesic(a={self.a!r}, f={self.f!r})"

    # ===================================================================
    # Direct Problem
    # ===================================================================

    def gen_direct(self, lat1: float, lon1: float, azi1: float,
                   arcmode: bool, s12_a12: float,
                   outmask: int = GeodesicMask.STANDARD) -> GeodesicResult:
        """
        Solve the direct problem by distance or by arc length.

        Parameters
        ----------
        lat1, lon1 : float
            Point 1 (degrees); ``lat1`` in [-90, 90].
        azi1 : float
            Azimuth at point 1 (degrees).
        arcmode : bool
            If True ``s12_a12`` is the arc length in degrees, otherwise the
            distance in meters.
        s12_a12 : float
            Distance or arc length to point 2; may be negative.
        outmask : GeodesicMask
            Requested outputs. ``a12`` is always returned.

        Returns
        -------
        GeodesicResult
        """
        if not arcmode:
            outmask |= GeodesicMask.DISTANCE_IN
        line = GeodesicLine(self, lat1, lon1, azi1, outmask)
        return line.gen_position(arcmode, s12_a12, outmask)

    def direct(self, lat1: float, lon1: float, azi1: float, s12: float,
               outmask: int = GeodesicMask.STANDARD) -> GeodesicResult:
        """
        Point at distance ``s12`` (meters) from point 1 along azimuth ``azi1``.

        Returns
        -------
        GeodesicResult
            With the default mask: ``lat2``, ``lon2``, ``azi2``, ``s12`` and
            ``a12`` (plus ``lat1``, ``lon1``, ``azi1``).
        """
        return self.gen_direct(lat1, lon1, azi1, False, s12, outmask)

    def arc_direct(self, lat1: float, lon1: float, azi1: float, a12: float,
                   outmask: int = GeodesicMask.STANDARD) -> GeodesicResult:
        """Point at arc length ``a12`` (degrees) from point 1."""
        return self.gen_direct(lat1, lon1, azi1, True, a12, outmask)

    # ===================================================================
    # Line Factories
    # ===================================================================

    def line(self, lat1: float, lon1: float, azi1: float,
             caps: int = GeodesicMask.ALL) -> GeodesicLine:
        """Geodesic line from point 1 with azimuth ``azi1``."""
        return GeodesicLine(self, lat1, lon1, azi1, caps)

    def gen_direct_line(self, lat1: float, lon1: float, azi1: float,
                        arcmode: bool, s12_a12: float,
                        caps: int = GeodesicMask.ALL) -> GeodesicLine:
        """
        Geodesic line with point 3 at a given distance or arc length.

        Point 3 of the line corresponds to point 2 of the direct problem;
        see :attr:`GeodesicLine.distance` and :attr:`GeodesicLine.arc`.
        """
        azi1 = ang_normalize(azi1)
        # Guard against underflow in salp0; also converts -0 to +0
        salp1, calp1 = sincosd(ang_round(azi1))
        if not arcmode:
            caps |= GeodesicMask.DISTANCE_IN
        line = GeodesicLine(self, lat1, lon1, azi1, caps, salp1, calp1)
        line.gen_set_distance(arcmode, s12_a12)
        return line

    def direct_line(self, lat1: float, lon1: float, azi1: float, s12: float,
                    caps: int = GeodesicMask.ALL) -> GeodesicLine:
        """Geodesic line with point 3 at distance ``s12`` (meters)."""
        return self.gen_direct_line(lat1, lon1, azi1, False, s12, caps)

    def arc_direct_line(self, lat1: float, lon1: float, azi1: float,
                        a12: float,
                        caps: int = GeodesicMask.ALL) -> GeodesicLine:
        """Geodesic line with point 3 at arc length ``a12`` (degrees)."""
        return self.gen_direct_line(lat1, lon1, azi1, True, a12, caps)

    def inverse_line(self, lat1: float, lon1: float, lat2: float,
                     lon2: float,
                     caps: int = GeodesicMask.ALL) -> GeodesicLine:
        """
        Geodesic line through two points, with point 3 at point 2.

        Parameters
        ----------
        lat1, lon1, lat2, lon2 : float
            End points (degrees).
        caps : GeodesicMask
            Line capabilities. DISTANCE is added when DISTANCE_IN is
            requested so that the arc to point 3 converts to a distance.

        Returns
        -------
        GeodesicLine
            ``line.position(line.distance)`` reproduces point 2.
        """
        _, salp1, calp1, _, _, a12 = self._gen_inverse(
            lat1, lon1, lat2, lon2, GeodesicMask.NONE)
        azi1 = atan2d(salp1, calp1)
        if caps & (GeodesicMask.OUT_MASK & GeodesicMask.DISTANCE_IN):
            caps |= GeodesicMask.DISTANCE
        line = GeodesicLine(self, lat1, lon1, azi1, caps, salp1, calp1)
        line.set_arc(a12)
        return line

    def polygon(self, polyline: bool = False) -> PolygonArea:
        """Empty polygon (or polyline) accumulator on this ellipsoid."""
        return PolygonArea(self, polyline)

    # ===================================================================
    # Inverse Problem
    # ===================================================================

    def inverse(self, lat1: float, lon1: float, lat2: float, lon2: float,
                outmask: int = GeodesicMask.STANDARD) -> GeodesicResult:
        """
        Shortest geodesic between two points.

        Parameters
        ----------
        lat1, lon1 : float
            Point 1 (degrees).
        lat2, lon2 : float
            Point 2 (degrees).
        outmask : GeodesicMask
            Requested outputs. ``a12`` is always returned. With
            LONG_UNROLL, ``lon1`` is returned unchanged and ``lon2 - lon1``
            is the signed longitude difference.

        Returns
        -------
        GeodesicResult
            NaN input yields NaN in every dependent field.

        Notes
        -----
        Azimuths at a pole follow the convention of holding the longitude
        fixed and approaching the pole. For coincident points the
        azimuths are equal; for antipodal points the returned azimuth is
        one of the many valid ones.
        """
        outmask &= GeodesicMask.OUT_MASK
        r, salp1, calp1, salp2, calp2, _ = self._gen_inverse(
            lat1, lon1, lat2, lon2, outmask)
        if outmask & GeodesicMask.AZIMUTH:
            r.azi1 = atan2d(salp1, calp1)
            r.azi2 = atan2d(salp2, calp2)
        return r

    def _gen_inverse(self, lat1: float, lon1: float, lat2: float,
                     lon2: float, outmask: int):
        r = GeodesicResult()

        r.lat1 = lat1 = lat_fix(lat1)
        r.lat2 = lat2 = lat_fix(lat2)
        # Very close to the equator counts as on it
        lat1 = ang_round(lat1)
        lat2 = ang_round(lat2)

        # lon12 in [-180, 180]; -180 only for west-going geodesics
        lon12, lon12s = ang_diff(lon1, lon2)
        if outmask & GeodesicMask.LONG_UNROLL:
            r.lon1 = lon1
            r.lon2 = (lon1 + lon12) + lon12s
        else:
            r.lon1 = ang_normalize(lon1)
            r.lon2 = ang_normalize(lon2)

        # Fold to a non-negative longitude difference
        lonsign = 1 if lon12 >= 0 else -1
        # Very close to the same half-meridian counts as on it
        lon12 = lonsign * ang_round(lon12)
        lon12s = ang_round((180 - lon12) - lonsign * lon12s)
        lam12 = math.radians(lon12)
        if lon12 > 90:
            slam12, clam12 = sincosd(lon12s)
            clam12 = -clam12
        else:
            slam12, clam12 = sincosd(lon12)

        # Point 1 gets the larger |lat|; a NaN latitude ends up in lat1
        swapp = -1 if abs(lat1) < abs(lat2) else 1
        if swapp < 0:
            lonsign *= -1
            lat1, lat2 = lat2, lat1
        # Make lat1 <= 0
        latsign = 1 if lat1 < 0 else -1
        lat1 *= latsign
        lat2 *= latsign
        # Now 0 <= lon12 <= 180, -90 <= lat1 <= 0 and lat1 <= lat2 <= -lat1.
        # lonsign, swapp and latsign record the folding (1 means unchanged)

        sbet1, cbet1 = sincosd(lat1)
        sbet1 *= self.f1
        sbet1, cbet1 = norm(sbet1, cbet1)
        # cbet1 = +epsilon at the poles, so sig12 <= 2 tiny for both at a pole
        cbet1 = max(cbet1, TINY)

        sbet2, cbet2 = sincosd(lat2)
        sbet2 *= self.f1
        sbet2, cbet2 = norm(sbet2, cbet2)
        cbet2 = max(cbet2, TINY)

        # Force bet2 = +/- bet1 exactly when the difference vanishes in the
        # measure lambda12 uses to assign calp2
        if cbet1 < -sbet1:
            if cbet2 == cbet1:
                sbet2 = sbet1 if sbet2 < 0 else -sbet1
        elif abs(sbet2) == -sbet1:
            cbet2 = cbet1

        dn1 = math.sqrt(1 + self.ep2 * sq(sbet1))
        dn2 = math.sqrt(1 + self.ep2 * sq(sbet2))

        a12 = sig12 = calp1 = salp1 = calp2 = salp2 = _NAN
        s12x = m12x = _NAN

        meridian = lat1 == -90 or slam12 == 0
        if meridian:
            # Both points on one full meridian; the geodesic may run along it
            calp1 = clam12
            salp1 = slam12
            # Heading north at the target
            calp2 = 1.0
            salp2 = 0.0

            # tan(bet) = tan(sig) cos(alp)
            ssig1 = sbet1
            csig1 = calp1 * cbet1
            ssig2 = sbet2
            csig2 = calp2 * cbet2
            sig12 = math.atan2(max(csig1 * ssig2 - ssig1 * csig2, 0.0),
                               csig1 * csig2 + ssig1 * ssig2)
            s12x, m12x, _, M12, M21 = self._lengths(
                self.n, sig12, ssig1, csig1, dn1, ssig2, csig2, dn2,
                cbet1, cbet2,
                outmask | GeodesicMask.DISTANCE | GeodesicMask.REDUCED_LENGTH)
            if outmask & GeodesicMask.GEODESIC_SCALE:
                r.M12 = M12
                r.M21 = M21

            # A meridian with sig12 > pi/2 and m12 < 0 is not shortest
            # (prolate, nearly antipodal); zero length lines may give m12 < 0
            if sig12 < 1 or m12x >= 0:
                # Needs at least 2 tiny to handle 90 0 90 180
                if sig12 < 3 * TINY:
                    sig12 = m12x = s12x = 0.0
                m12x *= self.b
                s12x *= self.b
                a12 = math.degrees(sig12)
            else:
                meridian = False

        omg12 = _NAN
        somg12 = 2.0
        comg12 = _NAN
        if (not meridian and sbet1 == 0
                and (self.f <= 0 or lon12s >= self.f * 180)):
            # Geodesic runs along the equator
            calp1 = calp2 = 0.0
            salp1 = salp2 = 1.0
            s12x = self.a * lam12
            sig12 = omg12 = lam12 / self.f1
            m12x = self.b * math.sin(sig12)
            if outmask & GeodesicMask.GEODESIC_SCALE:
                r.M12 = r.M21 = math.cos(sig12)
            a12 = lon12 / self.f1

        elif not meridian:
            sig12, salp1, calp1, salp2, calp2, dnm = self._inverse_start(
                sbet1, cbet1, dn1, sbet2, cbet2, dn2, lam12, slam12, clam12)

            if sig12 >= 0:
                # Short line; the start already fixed salp2, calp2 and dnm
                s12x = sig12 * self.b * dnm
                m12x = sq(dnm) * self.b * math.sin(sig12 / dnm)
                if outmask & GeodesicMask.GEODESIC_SCALE:
                    r.M12 = r.M21 = math.cos(sig12 / dnm)
                a12 = math.degrees(sig12)
                omg12 = lam12 / (self.f1 * dnm)
            else:
                (sig12, salp1, calp1, salp2, calp2, ssig1, csig1, ssig2,
                 csig2, eps, domg12) = self._solve_alp1(
                     sbet1, cbet1, dn1, sbet2, cbet2, dn2, salp1, calp1,
                     slam12, clam12, lat1, lat2, lon12)

                # Reduced length and scales always come from the I2 integral
                lengthmask = outmask
                if outmask & _LENGTHS:
                    lengthmask |= GeodesicMask.DISTANCE
                s12x, m12x, _, M12, M21 = self._lengths(
                    eps, sig12, ssig1, csig1, dn1, ssig2, csig2, dn2,
                    cbet1, cbet2, lengthmask)
                if outmask & GeodesicMask.GEODESIC_SCALE:
                    r.M12 = M12
                    r.M21 = M21
                m12x *= self.b
                s12x *= self.b
                a12 = math.degrees(sig12)
                if outmask & GeodesicMask.AREA:
                    # omg12 = lam12 - domg12
                    sdomg12 = math.sin(domg12)
                    cdomg12 = math.cos(domg12)
                    somg12 = slam12 * cdomg12 - clam12 * sdomg12
                    comg12 = clam12 * cdomg12 + slam12 * sdomg12

        if outmask & GeodesicMask.DISTANCE:
            r.s12 = 0.0 + s12x
        if outmask & GeodesicMask.REDUCED_LENGTH:
            r.m12 = 0.0 + m12x

        if outmask & GeodesicMask.AREA:
            r.S12 = self._area(sbet1, cbet1, sbet2, cbet2, salp1, calp1,
                               salp2, calp2, somg12, comg12, omg12, meridian)
            r.S12 *= swapp * lonsign * latsign
            r.S12 += 0.0

        # Undo the folding on the azimuths
        if swapp < 0:
            salp1, salp2 = salp2, salp1
            calp1, calp2 = calp2, calp1
            if outmask & GeodesicMask.GEODESIC_SCALE:
                r.M12, r.M21 = r.M21, r.M12
        salp1 *= swapp * lonsign
        calp1 *= swapp * latsign
        salp2 *= swapp * lonsign
        calp2 *= swapp * latsign

        r.a12 = a12
        return r, salp1, calp1, salp2, calp2, a12

    def _solve_alp1(self, sbet1, cbet1, dn1, sbet2, cbet2, dn2, salp1, calp1,
                    slam12, clam12, lat1, lat2, lon12):
        """
        Newton iteration for the azimuth at point 1.

        lambda12(alp1) - lam12 has a single root in (0, pi) with positive
        slope there. A bracket (alp1a, alp1b) of the root shrinks with
        every evaluation; whenever a Newton step has the wrong slope or
        leaves (0, pi) the next estimate is the bracket midpoint.
        """
        salp1a, calp1a = TINY, 1.0
        salp1b, calp1b = TINY, -1.0
        tripn = tripb = False
        for numit in range(MAXIT2):
            (v, salp2, calp2, sig12, ssig1, csig1, ssig2, csig2, eps,
             domg12, dv) = self._lambda12(
                 sbet1, cbet1, dn1, sbet2, cbet2, dn2, salp1, calp1,
                 slam12, clam12, numit < MAXIT1)
            # 2 TOL0 is about 1 ulp in [0, pi]; the reversed test lets NaN out
            if tripb or not abs(v) >= (8 if tripn else 1) * TOL0:
                break

            # Shrink the bracket
            if v > 0 and (numit > MAXIT1 or calp1 / salp1 > calp1b / salp1b):
                salp1b, calp1b = salp1, calp1
            elif v < 0 and (numit > MAXIT1 or calp1 / salp1 < calp1a / salp1a):
                salp1a, calp1a = salp1, calp1

            if numit < MAXIT1 and dv > 0:
                dalp1 = -v / dv
                if abs(dalp1) < math.pi:
                    sdalp1 = math.sin(dalp1)
                    cdalp1 = math.cos(dalp1)
                    nsalp1 = salp1 * cdalp1 + calp1 * sdalp1
                    if nsalp1 > 0:
                        calp1 = calp1 * cdalp1 - salp1 * sdalp1
                        salp1, calp1 = norm(nsalp1, calp1)
                        # Slope may vanish and spoil quadratic convergence,
                        # so the stop test uses epsilon rather than sqrt(eps)
                        tripn = abs(v) <= 16 * TOL0
                        continue

            # Bisect the bracket
            salp1, calp1 = norm((salp1a + salp1b) / 2, (calp1a + calp1b) / 2)
            tripn = False
            tripb = (abs(salp1a - salp1) + (calp1a - calp1) < TOLB
                     or abs(salp1 - salp1b) + (calp1 - calp1b) < TOLB)
        else:
            logger.debug(
                "Inverse solution did not converge in %d iterations for "
                "lat1=%r lat2=%r lon12=%r; returning best iterate",
                MAXIT2, lat1, lat2, lon12)

        return (sig12, salp1, calp1, salp2, calp2, ssig1, csig1, ssig2, csig2,
                eps, domg12)

    def _area(self, sbet1, cbet1, sbet2, cbet2, salp1, calp1, salp2, calp2,
              somg12, comg12, omg12, meridian) -> float:
        """Area between the folded geodesic and the equator."""
        # sin(alp0) = sin(alp1) cos(bet1), calp0 > 0
        salp0 = salp1 * cbet1
        calp0 = math.hypot(calp1, salp1 * sbet1)
        if calp0 != 0 and salp0 != 0:
            # tan(bet) = tan(sig) cos(alp)
            ssig1, csig1 = norm(sbet1, calp1 * cbet1)
            ssig2, csig2 = norm(sbet2, calp2 * cbet2)
            k2 = sq(calp0) * self.ep2
            eps = expansion_parameter(k2)
            # a^2 e^2 cos(alp0) sin(alp0)
            a4 = sq(self.a) * calp0 * salp0 * self.e2
            c4a = self.ellipsoid.c4f(eps)
            b41 = sin_cos_series(False, ssig1, csig1, c4a)
            b42 = sin_cos_series(False, ssig2, csig2, c4a)
            s12 = a4 * (b42 - b41)
        else:
            # sig1 and sig2 are indeterminate on the equator
            s12 = 0.0

        if not meridian and somg12 > 1:
            somg12 = math.sin(omg12)
            comg12 = math.cos(omg12)

        if not meridian and comg12 > -0.7071 and sbet2 - sbet1 < 1.75:
            # Longitude and latitude differences not too big:
            # tan(gamma/2) = tan(omg12/2) (tan(bet1/2) + tan(bet2/2)) /
            #                (1 + tan(bet1/2) tan(bet2/2))
            domg12 = 1 + comg12
            dbet1 = 1 + cbet1
            dbet2 = 1 + cbet2
            alp12 = 2 * math.atan2(somg12 * (sbet1 * dbet2 + sbet2 * dbet1),
                                   domg12 * (sbet1 * sbet2 + dbet1 * dbet2))
        else:
            # alp12 = alp2 - alp1, fed to atan2 so left unnormalised
            salp12 = salp2 * calp1 - calp2 * salp1
            calp12 = calp2 * calp1 + salp2 * salp1
            # alp1 = +/-180 with alp2 = 0 must give alp12 = -180
            if salp12 == 0 and calp12 < 0:
                salp12 = TINY * calp1
                calp12 = -1.0
            alp12 = math.atan2(salp12, calp12)
        return s12 + self.c2 * alp12

    # ===================================================================
    # Inverse Helpers
    # ===================================================================

    def _lengths(self, eps, sig12, ssig1, csig1, dn1, ssig2, csig2, dn2,
                 cbet1, cbet2, outmask) -> Tuple[float, float, float, float, float]:
        """
        Distance and reduced length in units of b.

        Returns ``(s12b, m12b, m0, M12, M21)`` where ``m0`` is the
        coefficient of the secular term of the reduced length. Fields not
        selected by ``outmask`` are NaN.
        """
        outmask &= GeodesicMask.OUT_MASK
        s12b = m12b = m0 = M12 = M21 = _NAN
        m0x = j12 = a1 = a2 = 0.0
        c1a = c2a = None
        if outmask & (GeodesicMask.DISTANCE | _LENGTHS):
            a1 = a1m1f(eps)
            c1a = c1f(eps)
            if outmask & _LENGTHS:
                a2 = a2m1f(eps)
                c2a = c2f(eps)
                m0x = a1 - a2
                a2 = 1 + a2
            a1 = 1 + a1

        if outmask & GeodesicMask.DISTANCE:
            b1 = (sin_cos_series(True, ssig2, csig2, c1a)
                  - sin_cos_series(True, ssig1, csig1, c1a))
            s12b = a1 * (sig12 + b1)
            if outmask & _LENGTHS:
                b2 = (sin_cos_series(True, ssig2, csig2, c2a)
                      - sin_cos_series(True, ssig1, csig1, c2a))
                j12 = m0x * sig12 + (a1 * b1 - a2 * b2)
        elif outmask & _LENGTHS:
            # Combined series, C1 and C2 share an order
            c12a = [a1 * x1 - a2 * x2 for x1, x2 in zip(c1a, c2a)]
            j12 = m0x * sig12 + (sin_cos_series(True, ssig2, csig2, c12a)
                                 - sin_cos_series(True, ssig1, csig1, c12a))

        if outmask & GeodesicMask.REDUCED_LENGTH:
            m0 = m0x
            # Parenthesised products cancel exactly for coincident points
            m12b = (dn2 * (csig1 * ssig2) - dn1 * (ssig1 * csig2)
                    - csig1 * csig2 * j12)

        if outmask & GeodesicMask.GEODESIC_SCALE:
            csig12 = csig1 * csig2 + ssig1 * ssig2
            t = self.ep2 * (cbet1 - cbet2) * (cbet1 + cbet2) / (dn1 + dn2)
            M12 = csig12 + (t * ssig2 - csig2 * j12) * ssig1 / dn1
            M21 = csig12 - (t * ssig1 - csig1 * j12) * ssig2 / dn2

        return s12b, m12b, m0, M12, M21

    def _inverse_start(self, sbet1, cbet1, dn1, sbet2, cbet2, dn2,
                       lam12, slam12, clam12):
        """
        Starting guess for the azimuth at point 1.

        Returns ``(sig12, salp1, calp1, salp2, calp2, dnm)``. ``sig12`` is
        -1 when Newton's method is still needed; a non-negative value is
        the final arc length of a short line, in which case ``salp2``,
        ``calp2`` and ``dnm`` are also set.
        """
        sig12 = -1.0
        salp2 = calp2 = dnm = _NAN

        # bet12 = bet2 - bet1 in [0, pi); bet12a = bet2 + bet1 in (-pi, 0]
        sbet12 = sbet2 * cbet1 - cbet2 * sbet1
        cbet12 = cbet2 * cbet1 + sbet2 * sbet1
        sbet12a = sbet2 * cbet1 + cbet2 * sbet1
        shortline = cbet12 >= 0 and sbet12 < 0.5 and cbet2 * lam12 < 0.5
        if shortline:
            # sin((bet1 + bet2) / 2)^2
            sbetm2 = sq(sbet1 + sbet2)
            sbetm2 /= sbetm2 + sq(cbet1 + cbet2)
            dnm = math.sqrt(1 + self.ep2 * sbetm2)
            omg12 = lam12 / (self.f1 * dnm)
            somg12 = math.sin(omg12)
            comg12 = math.cos(omg12)
        else:
            somg12 = slam12
            comg12 = clam12

        salp1 = cbet2 * somg12
        if comg12 >= 0:
            calp1 = sbet12 + cbet2 * sbet1 * sq(somg12) / (1 + comg12)
        else:
            calp1 = sbet12a - cbet2 * sbet1 * sq(somg12) / (1 - comg12)

        ssig12 = math.hypot(salp1, calp1)
        csig12 = sbet1 * sbet2 + cbet1 * cbet2 * comg12

        if shortline and ssig12 < self.etol2:
            # Really short line
            salp2 = cbet1 * somg12
            calp2 = sbet12 - cbet1 * sbet2 * (
                sq(somg12) / (1 + comg12) if comg12 >= 0 else 1 - comg12)
            salp2, calp2 = norm(salp2, calp2)
            sig12 = math.atan2(ssig12, csig12)
        elif (abs(self.n) > 0.1 or csig12 >= 0
              or ssig12 >= 6 * abs(self.n) * math.pi * sq(cbet1)):
            # Zeroth order spherical approximation is good enough
            pass
        else:
            # Nearly antipodal: scale to coordinates with the antipode at
            # the origin and the singular point at (x, y) = (-1, 0)
            # lam12 - pi
            lam12x = math.atan2(-slam12, -clam12)
            if self.f >= 0:
                # x = dlong, y = dlat
                k2 = sq(sbet1) * self.ep2
                eps = expansion_parameter(k2)
                lamscale = self.f * cbet1 * self.ellipsoid.a3f(eps) * math.pi
                betscale = lamscale * cbet1
                x = lam12x / lamscale
                y = sbet12a / betscale
            else:
                # x = dlat, y = dlong
                cbet12a = cbet2 * cbet1 - sbet2 * sbet1
                bet12a = math.atan2(sbet12a, cbet12a)
                _, m12b, m0, _, _ = self._lengths(
                    self.n, math.pi + bet12a, sbet1, -cbet1, dn1, sbet2,
                    cbet2, dn2, cbet1, cbet2, GeodesicMask.REDUCED_LENGTH)
                x = -1 + m12b / (cbet1 * cbet2 * m0 * math.pi)
                if x < -0.01:
                    betscale = sbet12a / x
                else:
                    betscale = -self.f * sq(cbet1) * math.pi
                lamscale = betscale / cbet1
                if lamscale != 0:
                    y = lam12x / lamscale
                else:
                    y = math.copysign(math.inf, lam12x * lamscale)

            if y > -TOL1 and x > -1 - XTHRESH:
                # Strip near the cut
                if self.f >= 0:
                    salp1 = min(1.0, -x)
                    calp1 = -math.sqrt(1 - sq(salp1))
                else:
                    calp1 = max(x, 0.0 if x > -TOL1 else -1.0)
                    salp1 = math.sqrt(1 - sq(calp1))
            else:
                # Estimate omg12 from the astroid, then alp1 from the
                # spherical formula; omg12 is near pi so work with
                # omg12a = pi - omg12
                k = astroid(x, y)
                if self.f >= 0:
                    omg12a = lamscale * (-x * k / (1 + k))
                else:
                    omg12a = lamscale * (-y * (1 + k) / k)
                somg12 = math.sin(omg12a)
                comg12 = -math.cos(omg12a)
                salp1 = cbet2 * somg12
                calp1 = sbet12a - cbet2 * sbet1 * sq(somg12) / (1 - comg12)

        # Sanity check on the guess; the reversed test lets NaN through
        if not salp1 <= 0:
            salp1, calp1 = norm(salp1, calp1)
        else:
            salp1 = 1.0
            calp1 = 0.0
        return sig12, salp1, calp1, salp2, calp2, dnm

    def _lambda12(self, sbet1, cbet1, dn1, sbet2, cbet2, dn2, salp1, calp1,
                  slam120, clam120, diffp):
        """
        Longitude difference reached from azimuth ``alp1``, less the target.

        Returns ``(lam12, salp2, calp2, sig12, ssig1, csig1, ssig2, csig2,
        eps, domg12, dlam12)``; ``dlam12`` is the derivative with respect
        to ``alp1`` when ``diffp`` is set, NaN otherwise.
        """
        if sbet1 == 0 and calp1 == 0:
            # Break the degeneracy of an equatorial line
            calp1 = -TINY

        # sin(alp1) cos(bet1) = sin(alp0), calp0 > 0
        salp0 = salp1 * cbet1
        calp0 = math.hypot(calp1, salp1 * sbet1)

        # tan(bet1) = tan(sig1) cos(alp1)
        # tan(omg1) = sin(alp0) tan(sig1) = tan(alp1) sin(bet1)
        somg1 = salp0 * sbet1
        comg1 = calp1 * cbet1
        ssig1, csig1 = norm(sbet1, comg1)

        # Symmetric treatment when |bet2| = -bet1, a singular case for the
        # Newton iteration; sin(alp2) cos(bet2) = sin(alp0)
        salp2 = salp0 / cbet2 if cbet2 != cbet1 else salp1
        # calp2 = sqrt(calp0^2 - sbet2^2) / cbet2, positive root
        if cbet2 != cbet1 or abs(sbet2) != -sbet1:
            if cbet1 < -sbet1:
                delta = (cbet2 - cbet1) * (cbet1 + cbet2)
            else:
                delta = (sbet1 - sbet2) * (sbet1 + sbet2)
            calp2 = math.sqrt(sq(calp1 * cbet1) + delta) / cbet2
        else:
            calp2 = abs(calp1)

        # tan(bet2) = tan(sig2) cos(alp2), tan(omg2) = sin(alp0) tan(sig2)
        somg2 = salp0 * sbet2
        comg2 = calp2 * cbet2
        ssig2, csig2 = norm(sbet2, comg2)

        # sig12 = sig2 - sig1 in [0, pi]
        sig12 = math.atan2(max(csig1 * ssig2 - ssig1 * csig2, 0.0),
                           csig1 * csig2 + ssig1 * ssig2)
        # omg12 = omg2 - omg1 in [0, pi]
        somg12 = max(comg1 * somg2 - somg1 * comg2, 0.0)
        comg12 = comg1 * comg2 + somg1 * somg2
        # eta = omg12 - lam120
        eta = math.atan2(somg12 * clam120 - comg12 * slam120,
                         comg12 * clam120 + somg12 * slam120)

        k2 = sq(calp0) * self.ep2
        eps = expansion_parameter(k2)
        c3a = self.ellipsoid.c3f(eps)
        b312 = (sin_cos_series(True, ssig2, csig2, c3a)
                - sin_cos_series(True, ssig1, csig1, c3a))
        domg12 = -self.f * self.ellipsoid.a3f(eps) * salp0 * (sig12 + b312)
        lam12 = eta + domg12

        dlam12 = _NAN
        if diffp:
            if calp2 == 0:
                dlam12 = (-2 * self.f1 * dn1 / sbet1 if sbet1 != 0
                          else -math.inf)
            else:
                _, dlam12, _, _, _ = self._lengths(
                    eps, sig12, ssig1, csig1, dn1, ssig2, csig2, dn2,
                    cbet1, cbet2, GeodesicMask.REDUCED_LENGTH)
                dlam12 *= self.f1 / (calp2 * cbet2)

        return (lam12, salp2, calp2, sig12, ssig1, csig1, ssig2, csig2, eps,
                domg12, dlam12)


#: Geodesic solver on the WGS-84 ellipsoid
WGS84 = Geodesic(WGS84_A, WGS84_F)


__all__ = [
    "Geodesic",
    "WGS84",
]
