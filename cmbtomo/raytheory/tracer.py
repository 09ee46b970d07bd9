#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Ray Tracing
===========

Ray paths, and their interactions with the core-mantle boundary, in a 
spherically symmetric structure. Any object implementing 
:meth:`RayTracer.trace` can be passed to :class:`cmbtomo.raytheory.Traveltime`;
the default one relies on the TauP toolkit shipped with ObsPy.

"""

from dataclasses import dataclass
from typing import Tuple
import numpy as np
from obspy.taup import TauPyModel
from obspy.taup.helper_classes import TauModelError
from cmbtomo.exceptions import RayTracingError
from cmbtomo.utils import Position, destination_point
from cmbtomo.raytheory.data import Interaction, RayPolyline, ScatterPoint
from cmbtomo.raytheory.phases import PHASE_TABLE, base_phase_name
from cmbtomo.raytheory.phases import cmb_interactions

__all__ = ['TracedRay', 'RayTracer', 'TauPRayTracer']


@dataclass(frozen=True)
class TracedRay:
    """ Ray path of one phase, for one source-receiver pair
    
    Parameters
    ----------
    phase_name : str
    
    ray_parameter : float
        In s/rad
        
    polyline : RayPolyline
    
    scatter_points : tuple of ScatterPoint
        Interactions with the CMB, from the source to the receiver
    """
    phase_name: str
    ray_parameter: float
    polyline: RayPolyline
    scatter_points: Tuple[ScatterPoint, ...] = ()


class RayTracer:
    """ Base class of the ray tracers """
    
    def trace(self, query, phase_names):
        """ 
        Ray paths of the given phases
        
        Parameters
        ----------
        query : cmbtomo.raytheory.RaypathQuery
        
        phase_names : list of str
        
        Returns
        -------
        list of TracedRay
        
        Raises
        ------
        RayTracingError
            If the ray paths cannot be computed
        """
        raise NotImplementedError



class TauPRayTracer(RayTracer):
    """ 
    Ray tracer based on :class:`obspy.taup.TauPyModel`
    
    Each arrival predicted by TauP gives a :class:`TracedRay`. If a phase
    has two arrivals (e.g., triplication of SKKS), the second one is named 
    with the suffix `m` (SKKSm), provided that such name is supported; later
    arrivals are discarded. Only the requested names are returned, so that
    second arrivals must be requested explicitly (e.g., ['SKKS', 'SKKSm']).
    Arrivals travelling the long way round the Earth leave the source in the
    direction opposite to the receiver.
    
    Parameters
    ----------
    model_name : str
        Name of the 1-D model used by TauP. Default is 'prem'
        
    cmb_tolerance : float
        Path samples closer than `cmb_tolerance` (in km) to the CMB depth are
        considered on the CMB. Default is 1e-3
        
        
    Examples
    --------
    >>> from cmbtomo.utils import Position, HorizontalPosition
    >>> from cmbtomo.raytheory import RaypathQuery, TauPRayTracer
    >>> query = RaypathQuery('event', 'station', Position(0, 0, 5871), 
    ...                      HorizontalPosition(0, 95))
    >>> tracer = TauPRayTracer()
    >>> rays = tracer.trace(query, ['SKS', 'SKKS'])
    >>> [ray.phase_name for ray in rays]
    ['SKS', 'SKKS']
    """

    def __init__(self, model_name='prem', cmb_tolerance=1e-3):
        self.model_name = model_name
        self.cmb_tolerance = cmb_tolerance
        self.model = TauPyModel(model=model_name)
        self.radius = self.model.model.radius_of_planet
        self.cmb_depth = self.model.model.cmb_depth
        
        
    def __str__(self):
        return 'TauPRayTracer(%s)'%self.model_name


    def trace(self, query, phase_names):
        names = []
        for name in phase_names:
            base = base_phase_name(name)
            if base not in names:
                names.append(base)
        depth = max(self.radius - query.source.radius, 0.)
        try:
            arrivals = self.model.get_ray_paths(source_depth_in_km=depth,
                                                distance_in_degree=query.epicentral_distance,
                                                phase_list=names)
        except (TauModelError, ValueError) as e:
            raise RayTracingError(str(query), e) from e
        if not len(arrivals):
            raise RayTracingError(message='No arrivals of %s for %s'%(
                    ', '.join(names), query))
            
        rays = []
        counts = {}
        azimuth = query.azimuth
        for arrival in arrivals:
            count = counts.get(arrival.name, 0)
            counts[arrival.name] = count + 1
            if count == 0:
                name = arrival.name
            elif count == 1 and arrival.name + 'm' in PHASE_TABLE:
                name = arrival.name + 'm'
            else:
                continue
            if name in phase_names:
                rays.append(self._traced_ray(arrival, name, query, azimuth))
        return rays


    def _traced_ray(self, arrival, phase_name, query, azimuth):
        path = arrival.path
        depths = np.asarray(path['depth'], dtype=np.float64)
        # Arrivals travelling the long way round (e.g., 360 - distance)
        if np.degrees(path['dist'][-1]) % 360 > 180:
            azimuth = (azimuth + 180) % 360
        lats, lons = destination_point(query.source.latitude, 
                                       query.source.longitude,
                                       azimuth,
                                       np.degrees(path['dist']))
        radii = self.radius - depths
        positions = [Position(float(lat), float(lon), float(r)) 
                     for lat, lon, r in zip(lats, lons, radii)]
        polyline = RayPolyline(positions)
        scatter_points = self._scatter_points(phase_name, 
                                              arrival.ray_param, 
                                              depths,
                                              positions,
                                              query)
        return TracedRay(phase_name, float(arrival.ray_param), polyline,
                         tuple(scatter_points))
        
        
    def _cmb_runs(self, depths):
        """ First and last index of each run of samples lying on the CMB """
        on_cmb = np.abs(depths - self.cmb_depth) < self.cmb_tolerance
        runs = []
        start = None
        for i, flag in enumerate(on_cmb):
            if flag and start is None:
                start = i
            elif not flag and start is not None:
                runs.append((start, i - 1))
                start = None
        if start is not None:
            runs.append((start, on_cmb.size - 1))
        return runs
    
    
    def _classify(self, depths, first, last):
        above_before = bool(depths[first-1] < self.cmb_depth) \
            if first > 0 else None
        above_after = bool(depths[last+1] < self.cmb_depth) \
            if last + 1 < depths.size else None
        if above_before is None:
            above_before = above_after
        if above_after is None:
            above_after = above_before
        if above_before and above_after:
            return Interaction.REFLECTION_TOP
        if above_before is False and above_after is False:
            return Interaction.REFLECTION_UNDER
        return Interaction.TRANSMISSION


    def _scatter_points(self, phase_name, ray_parameter, depths, positions, 
                        query):
        expected = cmb_interactions(phase_name)
        runs = self._cmb_runs(depths)
        kinds = [self._classify(depths, first, last) for first, last in runs]
        if kinds != [kind for kind, _, _ in expected]:
            raise RayTracingError(
                    message='Interactions of %s with the CMB (%s) do not match'
                    ' the phase, for %s'%(phase_name, 
                                          ', '.join(str(k) for k in kinds),
                                          query))
        
        cmb_radius = self.radius - self.cmb_depth
        scatter_points = []
        for (first, last), (kind, wave_type, outgoing) in zip(runs, expected):
            position = positions[(first + last) // 2].with_radius(cmb_radius)
            scatter_points.append(ScatterPoint(position, 
                                               float(ray_parameter), 
                                               wave_type, 
                                               kind, 
                                               outgoing))
        return scatter_points
