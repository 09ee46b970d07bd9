#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Travel-Time Perturbations
=========================

The class :class:`Traveltime` computes, for a list of source-receiver pairs
and seismic phases, the travel times in a 3-D Earth model. Each ray is traced
in a 1-D reference structure, and the perturbations caused by (i) the
topography of the core-mantle boundary and (ii) the 3-D velocity structure
are added to the reference travel time.

Failures are handled at two levels:

- If the ray paths of a source-receiver pair cannot be computed, the pair 
  is skipped and no record is produced for any of its phases (see 
  :attr:`Traveltime.skipped`)
  
- If the CMB kernel cannot be evaluated at one of the scatter points of a 
  phase, the travel times of that phase are set to NaN


Examples
--------
>>> from cmbtomo.utils import Position, HorizontalPosition
>>> from cmbtomo.models import ConstantModel
>>> from cmbtomo.raytheory import RaypathQuery, Traveltime
>>> queries = [RaypathQuery('event', 'station', Position(0, 0, 5871), 
...                         HorizontalPosition(0, 95))]
>>> model = ConstantModel(cmb_elevation=1.)
>>> traveltime = Traveltime(queries, model, 'SKS, SKKS', ignore_mantle=True,
...                         verbose=False)
>>> measurements = traveltime.run()
>>> [record.phase_name for record in measurements[0]]
['SKS', 'SKKS']

"""

import warnings
from cmbtomo.exceptions import KernelError, RayTracingError
from cmbtomo.models.structure import get_structure
from cmbtomo.raytheory.data import PerturbationTriple, PerturbationRecord
from cmbtomo.raytheory.phases import parse_phase_list, validate_phases
from cmbtomo.raytheory.kernel import BoundaryKernel
from cmbtomo.raytheory.integrator import VolumetricIntegrator
from cmbtomo.raytheory.tracer import TauPRayTracer

__all__ = ['Traveltime']


class Traveltime:
    """ 
    Travel times of seismic phases in a 3-D Earth model
    
    Parameters
    ----------
    queries : list of RaypathQuery
        Source-receiver pairs
        
    seismic3d_model : cmbtomo.models.EarthModel
        3-D model. It is not modified by the computation, and can be shared
        among several instances of :class:`Traveltime`. Its reference 
        structure should be the 1-D model named by `model_name`
        
    phases : str or list of str
        Phase names, either as a list or as a comma-separated string 
        (e.g., 'S, ScS')
        
    model_name : str
        1-D model in which the rays are traced ('prem' or 'ak135'). Default
        is 'prem'
        
    tracer : RayTracer, optional
        If `None`, a :class:`TauPRayTracer` is built for `model_name`
        
    ignore_mantle : bool
        If `True`, the 3-D velocity structure is not taken into account.
        Default is `False`
        
    ignore_cmb_elevation : bool
        If `True`, the CMB topography is not taken into account. Default is 
        `False`
        
    verbose : bool
        If `True`, information on the progress and on the failures are 
        displayed in console. Default is `True`
        
        
    Attributes
    ----------
    skipped : list of tuples (RaypathQuery, str)
        Source-receiver pairs skipped during the last call to :meth:`run`,
        together with the error message
        
        
    Raises
    ------
    UnsupportedPhaseError
        If any of the phases is not supported
        
    ValueError
        If `model_name` is not supported, or differs from the reference
        structure of `seismic3d_model`
    """

    def __init__(self, queries, seismic3d_model, phases, model_name='prem',
                 tracer=None, ignore_mantle=False, ignore_cmb_elevation=False,
                 verbose=True):
        self.queries = list(queries)
        self.seismic3d_model = seismic3d_model
        self.phases = parse_phase_list(phases)
        validate_phases(self.phases)
        self.model_name = model_name
        self.structure = get_structure(model_name)
        if seismic3d_model.structure.name != self.structure.name:
            raise ValueError('The reference structure of %s (%s) differs from the'
                             ' 1-D model used for ray tracing (%s)'%(
                                 seismic3d_model.name, 
                                 seismic3d_model.structure.name,
                                 self.structure.name))
        self.tracer = tracer if tracer is not None else TauPRayTracer(model_name)
        self.kernel = BoundaryKernel(self.structure)
        self.integrator = VolumetricIntegrator(
                cmb_radius=self.structure.cmb_radius,
                icb_radius=self.structure.icb_radius)
        self.ignore_mantle = ignore_mantle
        self.ignore_cmb_elevation = ignore_cmb_elevation
        self.verbose = verbose
        self.skipped = []
        if ignore_mantle and ignore_cmb_elevation:
            warnings.warn('Both the mantle and the CMB topography are ignored:'
                          ' all perturbations will be zero')


    def __repr__(self):
        return str(self)


    def __str__(self):
        string = 'TRAVELTIME PARAMETERS\n'
        string += 'Number of raypaths : %s\n'%len(self.queries)
        string += 'Phases : %s\n'%', '.join(self.phases)
        string += '3-D model : %s\n'%self.seismic3d_model.name
        string += '1-D model : %s\n'%self.model_name
        string += 'Ignore mantle : %s\n'%self.ignore_mantle
        string += 'Ignore CMB elevation : %s\n'%self.ignore_cmb_elevation
        string += '-------------------------------------\n'
        return string


    def run(self):
        """ 
        Computes the travel times for all source-receiver pairs
        
        Returns
        -------
        measurements : list of lists of PerturbationRecord
            One list per source-receiver pair, in the same order as 
            `queries`. Pairs for which the ray paths could not be computed
            are not included (see :attr:`skipped`)
        """
        self.skipped = []
        measurements = []
        nqueries = len(self.queries)
        step = max(1, nqueries // 10)
        if self.verbose:
            print('Computing %d raypaths'%nqueries)
            
        for ndone, query in enumerate(self.queries, 1):
            records = self.compute_query(query)
            if records is not None:
                measurements.append(records)
            if self.verbose and not ndone % step:
                print('PERCENTAGE DONE: %.2f'%(ndone / nqueries * 100))
        return measurements


    def compute_query(self, query):
        """ 
        Travel times of all phases for one source-receiver pair
        
        Returns
        -------
        list of PerturbationRecord, or None if the ray paths could not be 
        computed
        """
        try:
            rays = self.tracer.trace(query, self.phases)
        except RayTracingError as e:
            self.skipped.append((query, str(e)))
            if self.verbose:
                print('Skipping %s: %s'%(query, e))
            return None
        
        records = []
        for ray in rays:
            triple = self.compute_ray(query, ray)
            records.append(PerturbationRecord(query, 
                                              ray.phase_name,
                                              ray.scatter_points, 
                                              triple))
        return records


    def compute_ray(self, query, ray):
        """ 
        Sum of the CMB and mantle contributions for one ray
        
        Returns
        -------
        PerturbationTriple
            All values are NaN if the CMB kernel could not be evaluated
        """
        triple = PerturbationTriple.zero()
        if not self.ignore_cmb_elevation:
            for scatter_point in ray.scatter_points:
                dh = self.seismic3d_model.get_cmb_elevation(scatter_point.position)
                try:
                    k = self.kernel.scatter_point_sensitivity(scatter_point)
                except KernelError as e:
                    if self.verbose:
                        print('%s at %s, %s, phase %s: %s'%(
                                scatter_point.interaction, 
                                scatter_point.position,
                                query, ray.phase_name, e))
                    return PerturbationTriple.nan()
                triple = triple + PerturbationTriple(k * dh, 0., 0.)
        
        if not self.ignore_mantle:
            triple = triple + self.integrator.integrate(ray.polyline, 
                                                        ray.phase_name,
                                                        self.seismic3d_model)
        return triple
