# -*- coding: utf-8 -*-
"""
Tests for the ellipsoid, series expansions, output mask and result types.

License
-------
MIT License
Copyright (c) 2024 geoint.org

Created
-------
2026-10-18
"""

import dataclasses
import math

import pytest

from grdl_geodesy.geometry.capabilities import GeodesicMask
from grdl_geodesy.geometry.ellipsoid import (
    NC3,
    NC4,
    WGS84_ELLIPSOID,
    Ellipsoid,
    GeodesicError,
)
from grdl_geodesy.geometry.result import GeodesicResult, PolygonResult
from grdl_geodesy.geometry.series import (
    a1m1f,
    a2m1f,
    astroid,
    c1f,
    c1pf,
    c2f,
    expansion_parameter,
    sin_cos_series,
)
from grdl_geodesy.utils import constants


class TestEllipsoid:
    """Test derived ellipsoid parameters and validation."""

    def test_wgs84_derived(self):
        el = WGS84_ELLIPSOID
        assert el.a == constants.WGS84_A
        assert el.b == pytest.approx(constants.WGS84_B, abs=1e-9)
        assert el.e2 == pytest.approx(constants.WGS84_E2, rel=1e-15)
        assert el.ep2 == pytest.approx(constants.WGS84_EP2, rel=1e-15)
        assert el.f1 == 1 - constants.WGS84_F
        assert el.n == pytest.approx(constants.WGS84_F / (2 - constants.WGS84_F))

    def test_sphere(self):
        """A sphere has zero eccentricity and authalic radius a."""
        el = Ellipsoid(6.4e6, 0.0)
        assert el.e2 == 0.0
        assert el.n == 0.0
        assert el.b == el.a
        assert el.c2 == 6.4e6 ** 2
        assert el.area == pytest.approx(4 * math.pi * 6.4e6 ** 2)

    def test_prolate(self):
        """Negative flattening gives a polar radius larger than a."""
        el = Ellipsoid(6.4e6, -1 / 150.0)
        assert el.b > el.a
        assert el.e2 < 0
        assert el.c2 > el.a ** 2

    def test_authalic_radius_oblate(self):
        """Authalic radius lies between the polar and equatorial radii."""
        el = WGS84_ELLIPSOID
        assert el.b ** 2 < el.c2 < el.a ** 2
        assert math.sqrt(el.c2) == pytest.approx(6371007.181, abs=1e-3)

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            WGS84_ELLIPSOID.a = 1.0

    def test_equality(self):
        assert Ellipsoid(constants.WGS84_A, constants.WGS84_F) == WGS84_ELLIPSOID

    @pytest.mark.parametrize("a,f", [
        (-1.0, 0.0),
        (0.0, 0.0),
        (math.nan, 0.0),
        (1.0, 1.0),
        (1.0, -1.0),
        (1.0, math.inf),
    ])
    def test_invalid(self, a, f):
        with pytest.raises(GeodesicError):
            Ellipsoid(a, f)

    def test_series_coefficient_lengths(self):
        el = WGS84_ELLIPSOID
        c3 = el.c3f(0.001)
        c4 = el.c4f(0.001)
        assert len(c3) == NC3
        assert c3[0] == 0.0
        assert len(c4) == NC4

    def test_a3_series_at_zero(self):
        """A3 is 1 for eps = 0."""
        assert WGS84_ELLIPSOID.a3f(0.0) == pytest.approx(1.0)

    def test_c3_vanishes_at_zero(self):
        assert WGS84_ELLIPSOID.c3f(0.0) == [0.0] * NC3


class TestSeries:
    """Test Clenshaw summation and the series coefficients."""

    def test_sine_series_single_term(self):
        x = math.radians(30.0)
        value = sin_cos_series(True, math.sin(x), math.cos(x), [0.0, 1.0])
        assert value == pytest.approx(math.sin(2 * x))

    def test_sine_series_higher_term(self):
        x = math.radians(20.0)
        value = sin_cos_series(True, math.sin(x), math.cos(x),
                               [0.0, 0.0, 1.0])
        assert value == pytest.approx(math.sin(4 * x))

    def test_cosine_series(self):
        """Cosine series uses odd multiples of x."""
        x = math.radians(25.0)
        c = [0.5, 0.25, 0.125]
        expected = sum(c[i] * math.cos((2 * i + 1) * x) for i in range(3))
        value = sin_cos_series(False, math.sin(x), math.cos(x), c)
        assert value == pytest.approx(expected, abs=1e-15)

    def test_sine_series_general(self):
        x = 0.7
        c = [99.0, 0.3, -0.2, 0.1, 0.05]
        expected = sum(c[i] * math.sin(2 * i * x) for i in range(1, 5))
        value = sin_cos_series(True, math.sin(x), math.cos(x), c)
        assert value == pytest.approx(expected, abs=1e-15)

    def test_expansion_parameter(self):
        """eps = (sqrt(1 + k2) - 1) / (sqrt(1 + k2) + 1)."""
        k2 = constants.WGS84_EP2
        root = math.sqrt(1 + k2)
        assert expansion_parameter(k2) == pytest.approx(
            (root - 1) / (root + 1), rel=1e-12)
        assert expansion_parameter(0.0) == 0.0

    def test_coefficients_vanish_at_zero(self):
        """All series reduce to their leading term on a sphere."""
        assert a1m1f(0.0) == 0.0
        assert a2m1f(0.0) == 0.0
        assert c1f(0.0) == [0.0] * 7
        assert c1pf(0.0) == [0.0] * 7
        assert c2f(0.0) == [0.0] * 7

    def test_leading_coefficients(self):
        """First-order terms of C1 and C1' are -eps/2 and +eps/2."""
        eps = 1e-6
        assert c1f(eps)[1] == pytest.approx(-eps / 2, rel=1e-6)
        assert c1pf(eps)[1] == pytest.approx(eps / 2, rel=1e-6)
        assert c2f(eps)[1] == pytest.approx(eps / 2, rel=1e-6)

    @pytest.mark.parametrize("x,y", [(0.5, 0.5), (-2.0, 0.3), (0.1, 2.0)])
    def test_astroid_root(self, x, y):
        """The returned k is a non-negative root of the astroid quartic."""
        k = astroid(x, y)
        p, q = x * x, y * y
        residual = k ** 4 + 2 * k ** 3 - (p + q - 1) * k ** 2 - 2 * q * k - q
        assert k >= 0
        assert residual == pytest.approx(0.0, abs=1e-12)

    def test_astroid_degenerate(self):
        assert astroid(0.5, 0.0) == 0.0


class TestGeodesicMask:
    """Test the output/capability mask."""

    def test_standard(self):
        assert GeodesicMask.STANDARD == (GeodesicMask.LATITUDE
                                         | GeodesicMask.LONGITUDE
                                         | GeodesicMask.AZIMUTH
                                         | GeodesicMask.DISTANCE)

    def test_outputs_carry_series(self):
        """Output bits include the series they need."""
        assert GeodesicMask.DISTANCE & GeodesicMask.CAP_C1
        assert GeodesicMask.LONGITUDE & GeodesicMask.CAP_C3
        assert GeodesicMask.AREA & GeodesicMask.CAP_C4
        assert GeodesicMask.DISTANCE_IN & GeodesicMask.CAP_C1p
        assert not GeodesicMask.LATITUDE & GeodesicMask.CAP_MASK

    def test_all_excludes_unroll(self):
        assert not GeodesicMask.ALL & GeodesicMask.LONG_UNROLL
        assert GeodesicMask.ALL & GeodesicMask.OUT_ALL == GeodesicMask.OUT_ALL

    def test_out_mask_keeps_unroll(self):
        masked = (GeodesicMask.ALL | GeodesicMask.LONG_UNROLL) & GeodesicMask.OUT_MASK
        assert masked & GeodesicMask.LONG_UNROLL
        assert not masked & GeodesicMask.CAP_MASK

    def test_integer_values(self):
        assert int(GeodesicMask.LATITUDE) == 1 << 7
        assert int(GeodesicMask.LONG_UNROLL) == 1 << 15


class TestResults:
    """Test the result containers."""

    def test_geodesic_result_defaults(self):
        r = GeodesicResult()
        assert math.isnan(r.lat1)
        assert math.isnan(r.S12)
        assert r.as_dict() == {}

    def test_geodesic_result_as_dict(self):
        r = GeodesicResult(lat1=1.0, s12=2.0)
        assert r.as_dict() == {"lat1": 1.0, "s12": 2.0}

    def test_polygon_result_default_area(self):
        r = PolygonResult(2, 10.0)
        assert math.isnan(r.area)
