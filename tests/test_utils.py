"""
Tests for positions and spherical geometry.
"""

import numpy as np
import pytest

from cmbtomo.utils import (Position, HorizontalPosition, epicentral_distance,
                           azimuth, destination_point, real_sph_harm)
from cmbtomo.raytheory import PerturbationTriple, RayPolyline


class TestPosition:

    def test_depth(self):
        assert Position(0, 0, 5871.).depth == 500.
        assert HorizontalPosition(10, 20).to_position().depth == 0.

    def test_horizontal(self):
        position = Position(10., 20., 4000.)
        assert position.horizontal() == HorizontalPosition(10., 20.)
        assert position.with_radius(3480.) == Position(10., 20., 3480.)

    def test_cartesian(self):
        np.testing.assert_allclose(Position(0, 0, 10.).to_cartesian(), 
                                   [10, 0, 0], atol=1e-12)
        np.testing.assert_allclose(Position(90, 0, 10.).to_cartesian(), 
                                   [0, 0, 10], atol=1e-12)

    def test_straight_distance(self):
        a = Position(0., 0., 3480.)
        b = Position(0., 90., 3480.)
        assert a.straight_distance(b) == pytest.approx(3480. * np.sqrt(2))
        assert a.straight_distance(a.with_radius(3000.)) == pytest.approx(480.)
        assert a.straight_distance(b) == b.straight_distance(a)

    def test_immutable(self):
        position = Position(0., 0., 3480.)
        with pytest.raises(AttributeError):
            position.radius = 3000.


class TestGeometry:

    def test_epicentral_distance(self):
        assert epicentral_distance(0, 0, 0, 95) == pytest.approx(95.)
        assert epicentral_distance(90, 0, -90, 0) == pytest.approx(180.)

    def test_azimuth(self):
        assert azimuth(0, 0, 0, 10) == pytest.approx(90.)
        assert azimuth(0, 0, 10, 0) == pytest.approx(0.)

    def test_destination_point(self):
        lat, lon = destination_point(0., 0., 90., [0., 45., 95.])
        np.testing.assert_allclose(lat, 0, atol=1e-12)
        np.testing.assert_allclose(lon, [0, 45, 95], atol=1e-10)
        lat, lon = destination_point(0., 170., 90., 20.)
        assert lon == pytest.approx(-170.)
        lat, lon = destination_point(0., 0., 0., 30.)
        assert lat == pytest.approx(30.)

    def test_destination_point_roundtrip(self):
        lat, lon = destination_point(-20., 35., 40., 70.)
        assert epicentral_distance(-20., 35., lat, lon) == pytest.approx(70.)


class TestSphericalHarmonics:

    def test_shape(self):
        ylm = real_sph_harm(4, 10., 20.)
        assert ylm.shape == (2, 5, 5)
        assert np.all(ylm[:, np.triu_indices(5, k=1)[0], 
                          np.triu_indices(5, k=1)[1]] == 0)
        assert np.all(ylm[1, :, 0] == 0)

    def test_normalization(self):
        # The mean square of a 4-pi normalized harmonic over the sphere is 1
        lats = np.linspace(-89.5, 89.5, 180)
        lons = np.linspace(0.5, 359.5, 360)
        weights = np.cos(np.radians(lats))
        total = np.zeros((2, 4, 4))
        for lat, w in zip(lats, weights):
            for lon in lons[::6]:
                total += w * real_sph_harm(3, lat, lon)**2
        total /= weights.sum() * lons[::6].size
        np.testing.assert_allclose(total[0, 2, 1], 1, rtol=1e-2)
        np.testing.assert_allclose(total[1, 3, 3], 1, rtol=1e-2)
        np.testing.assert_allclose(total[0, 0, 0], 1, rtol=1e-6)


class TestDataTypes:

    def test_triple_sum(self):
        total = PerturbationTriple(1., 2., 3.) + PerturbationTriple(0.5, 1., 1.)
        assert total == PerturbationTriple(1.5, 3., 4.)
        assert total.traveltime_3d == 4.5

    def test_nan_sentinel(self):
        nan = PerturbationTriple.nan()
        assert not nan.is_finite
        assert not (nan + PerturbationTriple(1., 1., 1.)).is_finite
        assert PerturbationTriple.zero().is_finite

    def test_polyline(self):
        positions = [Position(0, lon, 5000.) for lon in (0, 1, 2)]
        polyline = RayPolyline(positions)
        assert len(polyline) == 3
        assert polyline[-1] == positions[-1]
        assert list(polyline.segments()) == [(positions[0], positions[1]),
                                             (positions[1], positions[2])]
