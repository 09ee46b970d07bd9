#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Three-Dimensional Earth Models
==============================

"""

import numpy as np
from cmbtomo.models.structure import ISO_PREM, CMB_RADIUS
from cmbtomo.utils import epicentral_distance, real_sph_harm

__all__ = ['EarthModel', 'ConstantModel', 'GaussianPointPerturbation',
           'SphericalHarmonicModel']



class EarthModel:
    """ 
    Base class of the 3-D Earth models. 
    
    Velocities are those of the 1-D structure in which the rays are traced;
    sub-classes only define the perturbations, through the methods 
    `_dlnvp`, `_dlnvs`, and `_cmb_elevation`.
    
    Parameters
    ----------
    name : str
        Name of the model
    
    structure : cmbtomo.models.PolynomialStructure
        Reference 1-D structure. Default is isotropic PREM
        
        
    Attributes
    ----------
    rmin, rmax : float
        Radii (in km) outside of which the velocity perturbations are 
        set to zero. See :meth:`set_truncation_range`
    """

    def __init__(self, name, structure=ISO_PREM):
        self.name = name
        self.structure = structure
        self.rmin = 0.
        self.rmax = structure.radius
        
        
    def __repr__(self):
        return str(self)


    def __str__(self):
        string = '%s\n'%self.name
        string += 'Reference structure : %s\n'%self.structure.name
        string += 'Truncation range : %.1f - %.1f km\n'%(self.rmin, self.rmax)
        return string


    def get_vp(self, radius):
        return self.structure.get_vp(radius)


    def get_vs(self, radius):
        return self.structure.get_vs(radius)
    
    
    def get_velocity(self, radius, wave_type):
        """ Reference velocity of P or S waves at `radius` """
        return self.structure.get_velocity(radius, wave_type)


    def get_dlnvp(self, position):
        """ 
        Relative P-wave velocity perturbation at the given position
        
        Parameters
        ----------
        position : cmbtomo.utils.Position
        
        Returns
        -------
        float
            Zero if the radius of the position is outside the truncation
            range
        """
        if not self.rmin <= position.radius <= self.rmax:
            return 0.
        return float(self._dlnvp(position))


    def get_dlnvs(self, position):
        """ 
        Relative S-wave velocity perturbation at the given position
        
        Parameters
        ----------
        position : cmbtomo.utils.Position
        
        Returns
        -------
        float
            Zero if the radius of the position is outside the truncation
            range
        """
        if not self.rmin <= position.radius <= self.rmax:
            return 0.
        return float(self._dlnvs(position))
    
    
    def get_dlnv(self, position, wave_type):
        if wave_type == 'P':
            return self.get_dlnvp(position)
        return self.get_dlnvs(position)


    def get_cmb_elevation(self, position):
        """ 
        Elevation of the CMB (in km, positive upwards) below the given 
        horizontal position
        
        Parameters
        ----------
        position : cmbtomo.utils.HorizontalPosition or Position
        
        Returns
        -------
        float
        """
        return float(self._cmb_elevation(position))


    def set_truncation_range(self, rmin, rmax):
        """ 
        Restricts the velocity perturbations to the radii between `rmin` and
        `rmax` (in km, both included). The CMB topography is not affected
        """
        if rmin >= rmax:
            raise ValueError('rmin (%s) should be smaller than rmax (%s)'%(rmin, rmax))
        self.rmin = rmin
        self.rmax = rmax


    def filter(self, degree):
        """ 
        Band-limits the model to the spherical-harmonic degrees <= `degree`
        
        Raises
        ------
        NotImplementedError
            If the model cannot be expanded in spherical harmonics
        """
        raise NotImplementedError('%s cannot be band-limited'%self.name)


    def _dlnvp(self, position):
        raise NotImplementedError


    def _dlnvs(self, position):
        raise NotImplementedError


    def _cmb_elevation(self, position):
        raise NotImplementedError



class ConstantModel(EarthModel):
    """ 
    Model with laterally and radially uniform perturbations. With the
    default arguments, the model coincides with its reference structure.
    
    Parameters
    ----------
    dlnvp, dlnvs : float
        Relative velocity perturbations. Default is 0
        
    cmb_elevation : float
        Elevation of the CMB (in km). Default is 0
        
    structure : cmbtomo.models.PolynomialStructure
        Default is isotropic PREM
    """

    def __init__(self, dlnvp=0., dlnvs=0., cmb_elevation=0., 
                 structure=ISO_PREM, name='ConstantModel'):
        super().__init__(name, structure=structure)
        self.dlnvp = dlnvp
        self.dlnvs = dlnvs
        self.cmb_elevation = cmb_elevation


    def filter(self, degree):
        if degree < 0:
            self.dlnvp = self.dlnvs = self.cmb_elevation = 0.
        return self


    def _dlnvp(self, position):
        return self.dlnvp


    def _dlnvs(self, position):
        return self.dlnvs


    def _cmb_elevation(self, position):
        return self.cmb_elevation



class GaussianPointPerturbation(EarthModel):
    r""" 
    Gaussian anomaly in velocity and/or Gaussian bump on the CMB
    
    The velocity anomaly is 
    
    .. math::
        
        \delta \ln V = A \exp \left( - \frac{d^2}{2\sigma_h^2} 
        - \frac{(r - r_0)^2}{2\sigma_r^2} \right),
        
    where `d` is the great-circle distance from the centre of the anomaly,
    measured at the radius :math:`r_0` of the centre.
    
    Parameters
    ----------
    center : cmbtomo.utils.Position, optional
        Centre of the velocity anomaly. If `None`, the model has no 
        velocity perturbations
        
    dlnvs : float
        Amplitude `A` of the S-wave anomaly. Default is 0.01
        
    dlnvp : float, optional
        Amplitude of the P-wave anomaly. If `None` (default), half of `dlnvs`
        
    horizontal_width, radial_width : float
        :math:`\sigma_h` and :math:`\sigma_r` (in km). Defaults are 500 and 200
        
    cmb_center : cmbtomo.utils.HorizontalPosition, optional
        Centre of the CMB bump. If `None`, the CMB is flat
        
    cmb_elevation : float
        Maximum elevation (in km) of the CMB bump. Default is 1
        
    cmb_width : float
        Standard deviation (in km, measured on the CMB) of the bump. Default 
        is 500

    Notes
    -----
    After a call to `filter`, the horizontal shapes are replaced by their
    Legendre expansions truncated at the requested degree
    """

    def __init__(self, center=None, dlnvs=0.01, dlnvp=None, 
                 horizontal_width=500., radial_width=200., cmb_center=None,
                 cmb_elevation=1., cmb_width=500., structure=ISO_PREM,
                 name='GaussianPointPerturbation'):
        super().__init__(name, structure=structure)
        self.center = center
        self.dlnvs = dlnvs
        self.dlnvp = dlnvp if dlnvp is not None else 0.5 * dlnvs
        self.horizontal_width = horizontal_width
        self.radial_width = radial_width
        self.cmb_center = cmb_center
        self.cmb_elevation = cmb_elevation
        self.cmb_width = cmb_width
        self.degree = None
        self._velocity_legendre = None
        self._cmb_legendre = None


    @staticmethod
    def _horizontal_profile(delta, radius, width):
        d = np.radians(delta) * radius
        return np.exp(-d**2 / (2 * width**2))


    @staticmethod
    def _legendre_coefficients(profile, degree):
        r""" 
        Coefficients :math:`c_l` of the expansion of an axisymmetric function
        :math:`f(\Delta) = \sum_l c_l P_l(\cos \Delta)`, for l <= `degree`,
        computed by Gauss-Legendre quadrature
        """
        x, w = np.polynomial.legendre.leggauss(max(2*degree + 2, 512))
        values = profile(np.degrees(np.arccos(x)))
        pl = np.polynomial.legendre.legvander(x, degree)
        l = np.arange(degree + 1)
        return (2*l + 1) / 2 * ((w * values) @ pl)


    def filter(self, degree):
        """ 
        Band-limits the horizontal shape of the velocity anomaly and of the
        CMB bump to the spherical-harmonic degrees <= `degree`. Both shapes
        are axisymmetric, so that only their Legendre expansions around the
        respective centres are needed. The radial shape is not affected
        
        Returns
        -------
        self
        """
        if degree < 0:
            self.dlnvs = self.dlnvp = self.cmb_elevation = 0.
            return self
        self.degree = degree
        if self.center is not None:
            self._velocity_legendre = self._legendre_coefficients(
                    lambda delta: self._horizontal_profile(
                            delta, self.center.radius, self.horizontal_width), 
                    degree)
        if self.cmb_center is not None:
            self._cmb_legendre = self._legendre_coefficients(
                    lambda delta: self._horizontal_profile(
                            delta, CMB_RADIUS, self.cmb_width), 
                    degree)
        return self


    def _horizontal(self, center, position, radius, width, legendre):
        delta = epicentral_distance(center.latitude, center.longitude,
                                    position.latitude, position.longitude)
        if legendre is not None:
            return np.polynomial.legendre.legval(np.cos(np.radians(delta)), 
                                                 legendre)
        return self._horizontal_profile(delta, radius, width)


    def _gaussian(self, position):
        if self.center is None:
            return 0.
        horizontal = self._horizontal(self.center, 
                                      position, 
                                      self.center.radius,
                                      self.horizontal_width, 
                                      self._velocity_legendre)
        dr = position.radius - self.center.radius
        return horizontal * np.exp(-dr**2 / (2 * self.radial_width**2))


    def _dlnvp(self, position):
        return self.dlnvp * self._gaussian(position)


    def _dlnvs(self, position):
        return self.dlnvs * self._gaussian(position)


    def _cmb_elevation(self, position):
        if self.cmb_center is None:
            return 0.
        return self.cmb_elevation * self._horizontal(self.cmb_center,
                                                     position,
                                                     CMB_RADIUS,
                                                     self.cmb_width,
                                                     self._cmb_legendre)



class SphericalHarmonicModel(EarthModel):
    """ 
    Model expanded in real, fully-normalized spherical harmonics (see 
    :func:`cmbtomo.utils.real_sph_harm`)
    
    Parameters
    ----------
    topography : ndarray of shape (2, lmax+1, lmax+1), optional
        Cosine and sine coefficients (in km) of the CMB elevation, indexed
        as [l, m]
        
    dlnvs, dlnvp : ndarray of shape (n, 2, lmax+1, lmax+1), optional
        Coefficients of the relative velocity perturbations at each of the
        `n` radial knots. Between two knots, the coefficients are linearly
        interpolated; outside the knots the perturbations are zero
        
    radii : array-like of shape (n,), optional
        Radii (in km, increasing) of the knots. Required if `dlnvs` or 
        `dlnvp` are passed
        
    vp_vs_scaling : float, optional
        If passed and `dlnvp` is None, dlnvp = vp_vs_scaling * dlnvs
        
    structure : cmbtomo.models.PolynomialStructure
        Default is isotropic PREM
        
    
    Examples
    --------
    A degree-2 undulation of the CMB, with 3 km amplitude
    
    >>> topography = np.zeros((2, 3, 3))
    >>> topography[0, 2, 0] = 3
    >>> model = SphericalHarmonicModel(topography=topography)
    >>> model.filter(1).get_cmb_elevation(HorizontalPosition(0, 0))
    0.0
    """

    def __init__(self, topography=None, dlnvs=None, dlnvp=None, radii=None,
                 vp_vs_scaling=None, structure=ISO_PREM, 
                 name='SphericalHarmonicModel'):
        super().__init__(name, structure=structure)
        if dlnvp is None and dlnvs is not None and vp_vs_scaling is not None:
            dlnvp = vp_vs_scaling * np.asarray(dlnvs)
        self.topography = self._check_coefficients(topography, ndim=3)
        self.dlnvs = self._check_coefficients(dlnvs, ndim=4)
        self.dlnvp = self._check_coefficients(dlnvp, ndim=4)
        if self.dlnvs is not None or self.dlnvp is not None:
            if radii is None:
                raise ValueError('The radii of the knots should be passed')
            radii = np.asarray(radii, dtype=np.float64)
            if radii.size < 2 or np.any(np.diff(radii) <= 0):
                raise ValueError('At least two knots, with increasing radii, are needed')
            for coeffs in (self.dlnvs, self.dlnvp):
                if coeffs is not None and coeffs.shape[0] != radii.size:
                    raise ValueError('Number of knots and coefficients differ')
        self.radii = radii
        
        
    @staticmethod
    def _check_coefficients(coeffs, ndim):
        if coeffs is None:
            return None
        coeffs = np.array(coeffs, dtype=np.float64)
        if coeffs.ndim != ndim or coeffs.shape[-3] != 2 \
                or coeffs.shape[-1] != coeffs.shape[-2]:
            raise ValueError('Coefficients of shape %s are not valid'%(coeffs.shape,))
        return coeffs
    
    
    @property
    def lmax(self):
        degrees = [c.shape[-1] - 1 for c in (self.topography, self.dlnvs, 
                                             self.dlnvp) if c is not None]
        return max(degrees) if degrees else 0


    def filter(self, degree):
        """ 
        Sets to zero all coefficients of degree larger than `degree`
        
        Returns
        -------
        self
        """
        for coeffs in (self.topography, self.dlnvs, self.dlnvp):
            if coeffs is not None:
                coeffs[..., max(degree + 1, 0):, :] = 0
        return self


    @staticmethod
    def _expand(coeffs, position):
        lmax = coeffs.shape[-1] - 1
        ylm = real_sph_harm(lmax, position.latitude, position.longitude)
        return np.sum(coeffs * ylm)


    def _radial(self, coeffs, position):
        r = position.radius
        if coeffs is None or r < self.radii[0] or r > self.radii[-1]:
            return 0.
        i = min(int(np.searchsorted(self.radii, r, side='right')) - 1, 
                self.radii.size - 2)
        w = (r - self.radii[i]) / (self.radii[i+1] - self.radii[i])
        return self._expand((1 - w) * coeffs[i] + w * coeffs[i+1], position)


    def _dlnvp(self, position):
        return self._radial(self.dlnvp, position)


    def _dlnvs(self, position):
        return self._radial(self.dlnvs, position)


    def _cmb_elevation(self, position):
        if self.topography is None:
            return 0.
        return self._expand(self.topography, position)
