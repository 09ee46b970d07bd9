#!/usr/bin/env python3
# -*- coding: utf-8 -*-
r"""
Boundary Sensitivity Kernel
===========================

First-order sensitivity of the travel time of a ray to the elevation 
:math:`\delta h` (in km, positive upwards) of the core-mantle boundary at the 
point where the ray interacts with it. For a ray of ray parameter `p` 
(in s/rad), the vertical slowness of a wave of velocity `v` at the CMB 
radius :math:`r_b` is

.. math::
    
    \eta = \sqrt{\frac{1}{v^2} - \frac{p^2}{r_b^2}},
    
and the travel-time perturbation is :math:`\delta t = K \delta h`, with

- transmission (mantle wave X, outer-core wave K): 
  :math:`K = \eta_K - \eta_X`
- top-side reflection (incident X, reflected Y): 
  :math:`K = -(\eta_X + \eta_Y)`
- underside reflection (K waves in the outer core): :math:`K = 2 \eta_K`

Evanescent configurations (imaginary :math:`\eta`) have no real sensitivity
and raise :class:`cmbtomo.exceptions.KernelError`.

"""

import numpy as np
from cmbtomo.exceptions import KernelError
from cmbtomo.models.structure import ISO_PREM
from cmbtomo.raytheory.data import WaveType, Interaction

__all__ = ['BoundaryKernel']


class BoundaryKernel:
    """ 
    Sensitivity of travel times to the topography of the CMB
    
    Parameters
    ----------
    structure : cmbtomo.models.PolynomialStructure
        Reference 1-D structure in which the rays are traced. Default is
        isotropic PREM
        
    
    Examples
    --------
    >>> kernel = BoundaryKernel()
    >>> round(kernel.sensitivity(300, WaveType.S, Interaction.REFLECTION_TOP), 3)
    -0.215
    
    The above is the change in the travel time of ScS (in s) per km of CMB
    elevation at the bounce point. The kernels do not depend on the 3-D model,
    so they can be evaluated once and multiplied by any topography.
    """

    def __init__(self, structure=ISO_PREM):
        self.structure = structure
        self.radius = structure.cmb_radius


    def vertical_slowness(self, ray_parameter, wave_type, below=False):
        """ 
        Vertical slowness (in s/km) at the CMB
        
        Parameters
        ----------
        ray_parameter : float
            In s/rad
            
        wave_type : WaveType
        
        below : bool
            If `True`, the slowness is computed on the core side of the CMB
            
        Returns
        -------
        float
        
        Raises
        ------
        KernelError
            If the wave is evanescent, or does not propagate, at the CMB
        """
        v = self.structure.get_velocity(self.radius, wave_type, below=below)
        side = 'core' if below else 'mantle'
        if v <= 0:
            raise KernelError(message='%s waves do not propagate on the %s '
                              'side of the CMB'%(wave_type, side))
        q2 = 1 / v**2 - (ray_parameter / self.radius)**2
        if q2 < 0:
            raise KernelError('%s wave, %s side, ray parameter %.3f s/rad'%(
                    wave_type, side, ray_parameter))
        return float(np.sqrt(q2))


    def transmission(self, ray_parameter, wave_type):
        """ 
        Sensitivity (in s/km) of a ray transmitted through the CMB
        
        Parameters
        ----------
        ray_parameter : float
            In s/rad
            
        wave_type : WaveType
            Wave type of the mantle leg
        """
        eta_core = self.vertical_slowness(ray_parameter, WaveType.P, below=True)
        eta_mantle = self.vertical_slowness(ray_parameter, wave_type)
        return eta_core - eta_mantle


    def top_reflection(self, ray_parameter, wave_type, outgoing_wave_type=None):
        """ 
        Sensitivity (in s/km) of a ray reflected on top of the CMB
        
        Parameters
        ----------
        ray_parameter : float
            In s/rad
            
        wave_type : WaveType
            Wave type of the incident ray
            
        outgoing_wave_type : WaveType, optional
            Wave type of the reflected ray. If `None`, the same as `wave_type`
        """
        if outgoing_wave_type is None:
            outgoing_wave_type = wave_type
        eta_in = self.vertical_slowness(ray_parameter, wave_type)
        eta_out = self.vertical_slowness(ray_parameter, outgoing_wave_type)
        return -(eta_in + eta_out)


    def underside_reflection(self, ray_parameter):
        """ 
        Sensitivity (in s/km) of a ray reflected on the underside of the CMB.
        Only P (K) waves propagate in the outer core, so that no wave type is
        needed
        """
        return 2 * self.vertical_slowness(ray_parameter, WaveType.P, below=True)


    def sensitivity(self, ray_parameter, wave_type, interaction, 
                    outgoing_wave_type=None):
        """ 
        Sensitivity (in s/km) of the travel time to the CMB elevation
        
        Parameters
        ----------
        ray_parameter : float
            In s/rad
            
        wave_type : WaveType or None
            Wave type on the illuminated side of the boundary. Required for
            transmissions and top-side reflections, ignored for underside
            reflections
            
        interaction : Interaction or str
            'transmission', 'reflection_top', or 'reflection_under'
            
        outgoing_wave_type : WaveType, optional
            Wave type of the ray reflected on top of the CMB, if converted
            
        Returns
        -------
        float
        
        Raises
        ------
        KernelError
            If the configuration is evanescent or post-critical
            
        ValueError
            If the wave type is missing
        """
        interaction = Interaction(interaction)
        if interaction is Interaction.REFLECTION_UNDER:
            return self.underside_reflection(ray_parameter)
        if wave_type is None:
            raise ValueError('A wave type is needed for %s'%interaction)
        wave_type = WaveType(wave_type)
        if interaction is Interaction.TRANSMISSION:
            return self.transmission(ray_parameter, wave_type)
        return self.top_reflection(ray_parameter, wave_type, outgoing_wave_type)
        
    
    def scatter_point_sensitivity(self, scatter_point):
        """ :meth:`sensitivity` of a :class:`ScatterPoint` """
        return self.sensitivity(scatter_point.ray_parameter,
                                scatter_point.wave_type,
                                scatter_point.interaction,
                                scatter_point.outgoing_wave_type)
