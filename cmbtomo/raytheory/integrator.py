#!/usr/bin/env python3
# -*- coding: utf-8 -*-
r"""
Volumetric Integration
======================

Travel-time perturbation caused by 3-D velocity heterogeneity, integrated
along the ray path of the 1-D reference structure. For a segment of length 
`l` joining two points of radii :math:`r_1` and :math:`r_2`,

.. math::
    
    \delta t = - \frac{l}{v(r_1) + v(r_2)} 
    \left( \delta \ln V(r_1) + \delta \ln V(r_2) \right), \qquad
    t = \frac{2l}{v(r_1) + v(r_2)},
    
where `v` and :math:`\delta \ln V` are the P- or S-wave fields, depending
on the phase and on the position of the segment. The radii of the end points
are moved inwards by a small amount (:data:`S_EPSILON` or :data:`P_EPSILON`),
so that the fields are never sampled on the wrong side of the core-mantle
boundary.

"""

import numpy as np
from cmbtomo.models.structure import ISO_PREM, CMB_RADIUS, ICB_RADIUS
from cmbtomo.raytheory.data import WaveType, PerturbationTriple
from cmbtomo.raytheory.phases import WaveFamily, get_phase_spec

__all__ = ['VolumetricIntegrator', 'S_EPSILON', 'P_EPSILON']

S_EPSILON = 1e-7
P_EPSILON = 1e-5
BOUNDARY_TOLERANCE = 1e-6


class VolumetricIntegrator:
    """ 
    Integrates the sensitivity to velocity perturbations along ray paths
    
    Parameters
    ----------
    baseline : cmbtomo.models.PolynomialStructure
        Structure in which the baseline travel times are computed. Default
        is isotropic PREM
        
    cmb_radius, icb_radius : float
        Radii (in km) of the core-mantle and inner-core boundaries in the 
        structure used for ray tracing. Defaults are 3480 and 1221.5 (PREM)
    """

    def __init__(self, baseline=ISO_PREM, cmb_radius=CMB_RADIUS, 
                 icb_radius=ICB_RADIUS):
        self.baseline = baseline
        self.cmb_radius = cmb_radius
        self.icb_radius = icb_radius


    def integrate(self, polyline, phase_name, model):
        """ 
        Travel-time perturbation along a ray path
        
        Parameters
        ----------
        polyline : cmbtomo.raytheory.RayPolyline
        
        phase_name : str
        
        model : cmbtomo.models.EarthModel
        
        Returns
        -------
        PerturbationTriple
            Zero if the ray path has less than two points
            
        Raises
        ------
        UnsupportedPhaseError
            If the phase is not supported
        """
        spec = get_phase_spec(phase_name)
        if len(polyline) < 2:
            return PerturbationTriple.zero()
        
        total = self._first_segment(polyline[0], polyline[1], spec, model)
        for pos1, pos2 in list(polyline.segments())[1:]:
            total = total + self._segment(pos1, pos2, spec, model)
        return total
    
    
    def integrate_segment(self, pos1, pos2, phase_name, model):
        """ 
        Travel-time perturbation along the straight segment joining `pos1`
        and `pos2`, evaluated at both end points
        
        Returns
        -------
        PerturbationTriple
        """
        return self._segment(pos1, pos2, get_phase_spec(phase_name), model)


    def _in_outer_core(self, r):
        return self.icb_radius < r < self.cmb_radius


    def _first_segment(self, pos1, pos2, spec, model):
        # Fields evaluated at the first point only
        wave_type = spec.down_wave_type
        r = pos1.radius
        if spec.family is WaveFamily.S and self._in_outer_core(r):
            return PerturbationTriple.zero()
        length = pos1.straight_distance(pos2)
        v = model.get_velocity(r, wave_type)
        dlnv = model.get_dlnv(pos1, wave_type)
        v_baseline = self._baseline_velocity(r, wave_type)
        return PerturbationTriple(-length / v * dlnv, 
                                  length / v, 
                                  length / v_baseline)


    def _baseline_velocity(self, r, wave_type):
        """ 
        Baseline velocity at `r`, taken in the same shell (mantle, outer core
        or inner core) as `r` in the structure used for ray tracing
        """
        cmb = self.baseline.cmb_radius
        icb = self.baseline.icb_radius
        if r >= self.cmb_radius:
            r = max(r, cmb)
        elif r >= self.icb_radius:
            r = min(max(r, icb), np.nextafter(cmb, -np.inf))
        else:
            r = min(r, np.nextafter(icb, -np.inf))
        return self.baseline.get_velocity(r, wave_type)


    def _on_mantle_side(self, r, other):
        """ A radius on the CMB takes the side of the other end point """
        if abs(r - self.cmb_radius) < BOUNDARY_TOLERANCE \
                and abs(other - self.cmb_radius) >= BOUNDARY_TOLERANCE:
            return other > self.cmb_radius
        return r >= self.cmb_radius


    def _clamp(self, r, mantle_side):
        if mantle_side:
            return max(r, self.cmb_radius)
        return min(r, np.nextafter(self.cmb_radius, -np.inf))


    def nudge_radii(self, r1, r2, epsilon):
        """ 
        Radii at which the fields of a segment are evaluated: the end points
        are moved by `epsilon` towards each other, without crossing the CMB
        
        Returns
        -------
        n1, n2 : float
        """
        if r1 > r2:
            n1, n2 = r1 - epsilon, r2 + epsilon
        elif r1 < r2:
            n1, n2 = r1 + epsilon, r2 - epsilon
        else:
            n1, n2 = r1, r2
        n1 = self._clamp(n1, self._on_mantle_side(r1, r2))
        n2 = self._clamp(n2, self._on_mantle_side(r2, r1))
        return n1, n2


    def _wave_type(self, spec, n1, n2, r1, r2):
        if spec.family is WaveFamily.MIXED:
            return spec.down_wave_type if r1 >= r2 else spec.up_wave_type
        if spec.outer_core_conversion \
                and self._in_outer_core(n1) and self._in_outer_core(n2):
            return WaveType.P
        return spec.down_wave_type


    def _segment(self, pos1, pos2, spec, model):
        epsilon = P_EPSILON if spec.family is WaveFamily.P else S_EPSILON
        r1, r2 = pos1.radius, pos2.radius
        n1, n2 = self.nudge_radii(r1, r2, epsilon)
        wave_type = self._wave_type(spec, n1, n2, r1, r2)
        
        length = pos1.straight_distance(pos2)
        v1 = model.get_velocity(n1, wave_type)
        v2 = model.get_velocity(n2, wave_type)
        dlnv1 = model.get_dlnv(pos1.with_radius(n1), wave_type)
        dlnv2 = model.get_dlnv(pos2.with_radius(n2), wave_type)
        vb1 = self._baseline_velocity(n1, wave_type)
        vb2 = self._baseline_velocity(n2, wave_type)
        return PerturbationTriple(-length / (v1 + v2) * (dlnv1 + dlnv2),
                                  2 * length / (v1 + v2),
                                  2 * length / (vb1 + vb2))
