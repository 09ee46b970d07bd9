#!/usr/bin/env python3
# -*- coding: utf-8 -*-
r"""
Spherically Symmetric Structures
================================

Radially layered Earth models. In each zone :math:`r_{min} \le r < r_{max}`,
P- and S-wave velocities (in km/s) are cubic polynomials of the normalized
radius :math:`x = r / a`, where `a` is the radius of the Earth.

"""

import numpy as np

__all__ = ['PolynomialStructure', 'ISO_PREM', 'AK135', 'get_structure',
           'EARTH_RADIUS', 'CMB_RADIUS', 'ICB_RADIUS']

EARTH_RADIUS = 6371.
CMB_RADIUS = 3480.
ICB_RADIUS = 1221.5


class PolynomialStructure:
    """ 
    Isotropic 1-D Earth structure defined by polynomials in each zone
    
    Parameters
    ----------
    name : str
        Name of the structure
        
    rmin, rmax : array-like of shape (n,)
        Bottom and top radius (in km) of each zone, sorted from the centre
        of the Earth to the surface
        
    vp, vs : array-like of shape (n, 4)
        Polynomial coefficients (in ascending order of powers of `x`) of 
        the P- and S-wave velocity in each zone
        
    n_core_zones : int
        Number of zones belonging to the core (inner and outer). Default is 2
    """

    def __init__(self, name, rmin, rmax, vp, vs, n_core_zones=2):
        self.name = name
        self.rmin = np.asarray(rmin, dtype=np.float64)
        self.rmax = np.asarray(rmax, dtype=np.float64)
        self.vp = np.asarray(vp, dtype=np.float64)
        self.vs = np.asarray(vs, dtype=np.float64)
        self.n_core_zones = n_core_zones
        if not (self.rmin.size == self.rmax.size == self.vp.shape[0] 
                == self.vs.shape[0]):
            raise ValueError('Inconsistent number of zones')


    def __repr__(self):
        return str(self)


    def __str__(self):
        return 'PolynomialStructure(%s, %d zones)'%(self.name, self.rmin.size)


    @property
    def radius(self):
        """ Radius of the Earth in this structure (in km) """
        return self.rmax[-1]


    @property
    def cmb_radius(self):
        return self.rmin[self.n_core_zones]


    @property
    def icb_radius(self):
        return self.rmin[1]


    def zone_of(self, r, below=False):
        r""" 
        Index of the zone containing the radius `r`
        
        Parameters
        ----------
        r : float
            Radius (in km)
            
        below : bool
            If `True`, a radius lying on a discontinuity is attributed to the
            zone underneath (i.e., :math:`r_{min} < r \le r_{max}`). Default
            is `False` (:math:`r_{min} \le r < r_{max}`, the surface being
            part of the top zone)
            
        Returns
        -------
        int
        
        Raises
        ------
        ValueError
            If `r` lies outside the Earth
        """
        if r < 0 or r > self.radius:
            raise ValueError('Radius %s km is outside the Earth'%r)
        if below:
            return max(int(np.searchsorted(self.rmax, r, side='left')), 0)
        return min(int(np.searchsorted(self.rmin, r, side='right')) - 1,
                   self.rmin.size - 1)


    def _evaluate(self, coeffs, r, below):
        izone = self.zone_of(r, below=below)
        return np.polynomial.polynomial.polyval(r / self.radius, coeffs[izone])


    def get_vp(self, r, below=False):
        """ P-wave velocity (in km/s) at the radius `r` (in km) """
        return self._evaluate(self.vp, r, below)


    def get_vs(self, r, below=False):
        """ S-wave velocity (in km/s) at the radius `r` (in km) """
        return self._evaluate(self.vs, r, below)
    
    
    def get_velocity(self, r, wave_type, below=False):
        """ 
        Velocity (in km/s) of P or S waves at the radius `r` (in km)
        
        Parameters
        ----------
        wave_type : {'P', 'S'} or cmbtomo.raytheory.WaveType
        """
        if wave_type == 'P':
            return self.get_vp(r, below=below)
        return self.get_vs(r, below=below)
    

def _iso_prem():
    rmin = [0, 1221.5, 3480, 3630, 5600, 5701, 5771, 5971, 6151, 6291, 
            6346.6, 6356]
    rmax = [1221.5, 3480, 3630, 5600, 5701, 5771, 5971, 6151, 6291, 6346.6, 
            6356, 6371]
    vp = [[11.2622, 0, -6.364, 0], 
          [11.0487, -4.0362, 4.8023, -13.5732],
          [15.3891, -5.3181, 5.5242, -2.5514], 
          [24.952, -40.4673, 51.4832, -26.6419], 
          [29.2766, -23.6027, 5.5242, -2.5514],
          [19.0957, -9.8672, 0, 0], 
          [39.7027, -32.6166, 0, 0], 
          [20.3926, -12.2569, 0, 0],
          [4.1875, 3.9382, 0, 0], 
          [4.1875, 3.9382, 0, 0], 
          [6.8, 0, 0, 0], 
          [5.8, 0, 0, 0]]
    vs = [[3.6678, 0, -4.4475, 0], 
          [0, 0, 0, 0],
          [6.9254, 1.4672, -2.0834, 0.9783], 
          [11.1671, -13.7818, 17.4575, -9.2777], 
          [22.3459, -17.2473, -2.0834, 0.9783],
          [9.9839, -4.9324, 0, 0], 
          [22.3512, -18.5856, 0, 0], 
          [8.9496, -4.4597, 0, 0],
          [2.1519, 2.3481, 0, 0], 
          [2.1519, 2.3481, 0, 0], 
          [3.9, 0, 0, 0], 
          [3.2, 0, 0, 0]]
    return PolynomialStructure('PREM', rmin, rmax, vp, vs)


def _ak135():
    rmin = [0, 1217.5, 3479.5, 3631, 5611, 5711, 5961, 6161, 6251, 6336, 6351]
    rmax = [1217.5, 3479.5, 3631, 5611, 5711, 5961, 6161, 6251, 6336, 6351, 6371]
    vp = [[11.261692, 0.028794, -6.627846, 0], 
          [10.118851, 3.457774, -13.434875, 0],
          [13.908244, -0.45417, 0, 0], 
          [24.138794, -37.097655, 46.631994, -24.272115], 
          [25.969838, -16.934118, 0, 0],
          [29.38896, -21.40656, 0, 0], 
          [30.78765, -23.25415, 0, 0], 
          [25.413889, -17.697222, 0, 0],
          [8.785412, -0.749529, 0, 0], 
          [6.5, 0, 0, 0], 
          [5.8, 0, 0, 0]]
    vs = [[3.667865, -0.001345, -4.440915, 0], 
          [0, 0, 0, 0],
          [8.018341, -1.349895, 0, 0], 
          [12.213901, -18.573085, 24.557329, -12.728015], 
          [20.208945, -15.895645, 0, 0],
          [17.71732, -13.50652, 0, 0], 
          [15.212335, -11.053685, 0, 0], 
          [5.7502, -1.2742, 0, 0],
          [5.970824, -1.499059, 0, 0], 
          [3.85, 0, 0, 0], 
          [3.46, 0, 0, 0]]
    return PolynomialStructure('AK135', rmin, rmax, vp, vs)


ISO_PREM = _iso_prem()
AK135 = _ak135()


def get_structure(name):
    """ 
    Built-in structure associated with `name`
    
    Parameters
    ----------
    name : {'prem', 'ak135'}
        Case insensitive
        
    Returns
    -------
    PolynomialStructure
    
    Raises
    ------
    ValueError
        If the structure is not implemented
    """
    structures = {'prem': ISO_PREM, 'ak135': AK135}
    try:
        return structures[name.lower()]
    except KeyError:
        raise ValueError('Model not implemented yet: %s'%name) from None
