"""
Tests for the 3-D Earth models.
"""

import numpy as np
import pytest

from cmbtomo.models import (ConstantModel, GaussianPointPerturbation,
                            SphericalHarmonicModel, ISO_PREM)
from cmbtomo.utils import Position, HorizontalPosition

from conftest import InstrumentedModel


class TestConstantModel:

    def setup_method(self):
        self.model = ConstantModel(dlnvp=0.005, dlnvs=0.01, cmb_elevation=2.)
        self.position = Position(10., 20., 4000.)

    def test_default_is_reference(self):
        model = ConstantModel()
        assert model.get_dlnvp(self.position) == 0
        assert model.get_dlnvs(self.position) == 0
        assert model.get_cmb_elevation(self.position.horizontal()) == 0
        assert model.get_vs(4000.) == ISO_PREM.get_vs(4000.)

    def test_fields(self):
        assert self.model.get_dlnvp(self.position) == 0.005
        assert self.model.get_dlnvs(self.position) == 0.01
        assert self.model.get_dlnv(self.position, 'S') == 0.01
        assert self.model.get_cmb_elevation(HorizontalPosition(0, 0)) == 2.

    def test_truncation(self):
        self.model.set_truncation_range(3480., 4500.)
        assert self.model.get_dlnvs(self.position) == 0.01
        assert self.model.get_dlnvs(self.position.with_radius(5000.)) == 0
        assert self.model.get_dlnvp(self.position.with_radius(3000.)) == 0
        # The CMB topography is not truncated
        assert self.model.get_cmb_elevation(self.position) == 2.

    def test_invalid_truncation(self):
        with pytest.raises(ValueError):
            self.model.set_truncation_range(4000., 3480.)

    def test_filter(self):
        assert self.model.filter(0) is self.model
        assert self.model.get_dlnvs(self.position) == 0.01


class TestGaussianPointPerturbation:

    def setup_method(self):
        self.center = Position(0., 0., 3700.)
        self.model = GaussianPointPerturbation(center=self.center, dlnvs=0.02,
                                               cmb_center=HorizontalPosition(0, 0),
                                               cmb_elevation=5.)

    def test_peak(self):
        assert self.model.get_dlnvs(self.center) == pytest.approx(0.02)
        assert self.model.get_dlnvp(self.center) == pytest.approx(0.01)
        assert self.model.get_cmb_elevation(HorizontalPosition(0, 0)) \
            == pytest.approx(5.)

    def test_decay(self):
        far = Position(0., 90., 3700.)
        assert self.model.get_dlnvs(far) == pytest.approx(0, abs=1e-12)
        deeper = self.center.with_radius(3500.)
        expected = 0.02 * np.exp(-0.5)
        assert self.model.get_dlnvs(deeper) == pytest.approx(expected)

    def test_no_velocity_anomaly(self):
        model = GaussianPointPerturbation(cmb_center=HorizontalPosition(0, 0))
        assert model.get_dlnvs(self.center) == 0

    def test_filter_high_degree(self):
        # Both shapes are smooth enough to be reproduced at degree 100
        assert self.model.filter(100) is self.model
        assert self.model.degree == 100
        assert self.model.get_dlnvs(self.center) == pytest.approx(0.02, rel=1e-6)
        deeper = self.center.with_radius(3500.)
        expected = 0.02 * np.exp(-0.5)
        assert self.model.get_dlnvs(deeper) == pytest.approx(expected, rel=1e-6)
        assert self.model.get_cmb_elevation(HorizontalPosition(0, 0)) \
            == pytest.approx(5., rel=1e-6)
        far = Position(0., 90., 3700.)
        assert self.model.get_dlnvs(far) == pytest.approx(0, abs=1e-8)

    def test_filter_low_degree(self):
        self.model.filter(4)
        peak = self.model.get_cmb_elevation(HorizontalPosition(0, 0))
        assert 0 < peak < 5.
        assert self.model.get_dlnvs(self.center) < 0.02

    def test_filter_degree_zero(self):
        self.model.filter(0)
        center = self.model.get_dlnvs(self.center)
        antipode = self.model.get_dlnvs(Position(0., 180., 3700.))
        assert center > 0
        assert center == pytest.approx(antipode)
        assert self.model.get_cmb_elevation(HorizontalPosition(0, 0)) \
            == pytest.approx(self.model.get_cmb_elevation(HorizontalPosition(45, 90)))

    def test_filter_negative_degree(self):
        self.model.filter(-1)
        assert self.model.get_dlnvs(self.center) == 0
        assert self.model.get_dlnvp(self.center) == 0
        assert self.model.get_cmb_elevation(HorizontalPosition(0, 0)) == 0

    def test_filter_without_velocity_anomaly(self):
        model = GaussianPointPerturbation(cmb_center=HorizontalPosition(0, 0))
        model.filter(100)
        assert model.get_dlnvs(self.center) == 0
        assert model.get_cmb_elevation(HorizontalPosition(0, 0)) \
            == pytest.approx(1., rel=1e-6)


class TestEarthModel:

    def test_filter_not_implemented(self):
        model = InstrumentedModel()
        with pytest.raises(NotImplementedError):
            model.filter(4)


class TestSphericalHarmonicModel:

    def test_degree_zero(self):
        topography = np.zeros((2, 1, 1))
        topography[0, 0, 0] = 2.
        model = SphericalHarmonicModel(topography=topography)
        for lat, lon in [(0, 0), (45, 120), (-80, -60)]:
            assert model.get_cmb_elevation(HorizontalPosition(lat, lon)) \
                == pytest.approx(2.)

    def test_zonal_degree_two(self):
        topography = np.zeros((2, 3, 3))
        topography[0, 2, 0] = 1.
        model = SphericalHarmonicModel(topography=topography)
        pole = HorizontalPosition(90, 0)
        equator = HorizontalPosition(0, 30)
        assert model.get_cmb_elevation(pole) == pytest.approx(np.sqrt(5))
        assert model.get_cmb_elevation(equator) == pytest.approx(-np.sqrt(5) / 2)

    def test_filter(self):
        topography = np.zeros((2, 3, 3))
        topography[0, 0, 0] = 1.
        topography[0, 2, 0] = 1.
        model = SphericalHarmonicModel(topography=topography)
        assert model.lmax == 2
        model.filter(1)
        assert model.get_cmb_elevation(HorizontalPosition(90, 0)) \
            == pytest.approx(1.)

    def test_radial_interpolation(self):
        dlnvs = np.zeros((2, 2, 1, 1))
        dlnvs[0, 0, 0, 0] = 0.01
        dlnvs[1, 0, 0, 0] = 0.03
        model = SphericalHarmonicModel(dlnvs=dlnvs, radii=[3480., 3680.],
                                       vp_vs_scaling=0.5)
        position = Position(10., 10., 3580.)
        assert model.get_dlnvs(position) == pytest.approx(0.02)
        assert model.get_dlnvp(position) == pytest.approx(0.01)
        assert model.get_dlnvs(position.with_radius(4000.)) == 0
        assert model.get_cmb_elevation(position) == 0

    def test_invalid_coefficients(self):
        with pytest.raises(ValueError):
            SphericalHarmonicModel(topography=np.zeros((3, 2, 2)))
        with pytest.raises(ValueError):
            SphericalHarmonicModel(dlnvs=np.zeros((2, 2, 1, 1)))
        with pytest.raises(ValueError):
            SphericalHarmonicModel(dlnvs=np.zeros((3, 2, 1, 1)), 
                                   radii=[3480., 3680.])
