#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Data Model
==========

Immutable containers exchanged between the ray tracer, the boundary kernel,
the volumetric integrator and the travel-time orchestrator. Only the 
:class:`PerturbationRecord` objects outlive the computation: they are 
returned to the caller, which owns them.

"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple
import numpy as np
from cmbtomo.utils import Position, HorizontalPosition
from cmbtomo.utils import epicentral_distance, azimuth

__all__ = ['WaveType', 'Interaction', 'RaypathQuery', 'ScatterPoint', 
           'RayPolyline', 'PerturbationTriple', 'PerturbationRecord']


class WaveType(str, Enum):
    P = 'P'
    S = 'S'

    def __str__(self):
        return self.value


class Interaction(Enum):
    """ Kind of interaction of a ray with the core-mantle boundary """
    TRANSMISSION = 'transmission'
    REFLECTION_TOP = 'reflection_top'
    REFLECTION_UNDER = 'reflection_under'

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class RaypathQuery:
    """ Source-receiver pair for which travel times are computed
    
    Parameters
    ----------
    source_id, receiver_id : str
        Identifiers of the event and of the station
        
    source : cmbtomo.utils.Position
        Hypocentre
        
    receiver : cmbtomo.utils.HorizontalPosition
        Station location (the station is assumed at the surface)
    """
    source_id: str
    receiver_id: str
    source: Position
    receiver: HorizontalPosition

    def __str__(self):
        return '%s -> %s'%(self.source_id, self.receiver_id)

    @property
    def epicentral_distance(self):
        """ Epicentral distance (in degrees) """
        return float(epicentral_distance(self.source.latitude, 
                                         self.source.longitude,
                                         self.receiver.latitude, 
                                         self.receiver.longitude))

    @property
    def azimuth(self):
        """ Azimuth (in degrees) from the source to the receiver """
        return float(azimuth(self.source.latitude, 
                             self.source.longitude,
                             self.receiver.latitude, 
                             self.receiver.longitude))


@dataclass(frozen=True)
class ScatterPoint:
    """ Point where a ray interacts with the core-mantle boundary
    
    Parameters
    ----------
    position : cmbtomo.utils.Position
    
    ray_parameter : float
        Ray parameter (in s/rad) of the ray
        
    wave_type : WaveType
        Wave type of the incident ray, on the illuminated side of the boundary
        (always P for underside reflections)
        
    interaction : Interaction
    
    outgoing_wave_type : WaveType, optional
        Wave type of the reflected ray, for converted top-side reflections
        (e.g., ScP). If `None`, the same as `wave_type`
    """
    position: Position
    ray_parameter: float
    wave_type: WaveType
    interaction: Interaction
    outgoing_wave_type: Optional[WaveType] = None


@dataclass(frozen=True)
class RayPolyline:
    """ Ordered positions along a ray path, from the source to the receiver """
    positions: Tuple[Position, ...]

    def __post_init__(self):
        object.__setattr__(self, 'positions', tuple(self.positions))

    def __len__(self):
        return len(self.positions)

    def __iter__(self):
        return iter(self.positions)

    def __getitem__(self, index):
        return self.positions[index]

    def segments(self):
        """ Consecutive pairs of positions """
        return zip(self.positions[:-1], self.positions[1:])


@dataclass(frozen=True)
class PerturbationTriple:
    """ 
    Travel-time perturbation (`dt`, in s) caused by the 3-D model, together 
    with the travel times (in s) in the 1-D reference structure used for
    ray tracing (`t_reference`) and in the baseline structure (PREM, 
    `t_baseline`). Triples are summed component-wise.
    """
    dt: float = 0.
    t_reference: float = 0.
    t_baseline: float = 0.

    def __add__(self, other):
        if not isinstance(other, PerturbationTriple):
            return NotImplemented
        return PerturbationTriple(self.dt + other.dt, 
                                  self.t_reference + other.t_reference,
                                  self.t_baseline + other.t_baseline)

    @classmethod
    def zero(cls):
        return cls(0., 0., 0.)

    @classmethod
    def nan(cls):
        """ Sentinel for a computation that failed """
        return cls(np.nan, np.nan, np.nan)

    @property
    def is_finite(self):
        return bool(np.all(np.isfinite([self.dt, 
                                        self.t_reference, 
                                        self.t_baseline])))

    @property
    def traveltime_3d(self):
        return self.t_reference + self.dt


class PerturbationRecord:
    """ 
    Travel time of a seismic phase, for a given source-receiver pair, in the
    3-D model. Two records are equal if they refer to the same source, 
    receiver and phase.
    
    Parameters
    ----------
    query : RaypathQuery
    
    phase_name : str
        Name of the phase (e.g., 'ScS', 'SKKSm')
        
    scatter_points : list of ScatterPoint
        Interactions of the ray with the CMB
        
    triple : PerturbationTriple
        If the computation failed, all its values are NaN
    """

    def __init__(self, query, phase_name, scatter_points, triple):
        self.query = query
        self.phase_name = phase_name
        self.scatter_points = tuple(scatter_points)
        self.triple = triple


    def __repr__(self):
        return str(self)


    def __str__(self):
        return '%s %s %s dt=%.4f t_ref=%.4f t_baseline=%.4f'%(
                self.source_id, self.receiver_id, self.phase_name, 
                self.dt, self.t_reference, self.t_baseline)


    def __eq__(self, other):
        if not isinstance(other, PerturbationRecord):
            return NotImplemented
        return self.key == other.key


    def __hash__(self):
        return hash(self.key)


    @property
    def key(self):
        """ Identity of the measurement: (source id, receiver id, phase) """
        return (self.source_id, self.receiver_id, self.phase_name)

    @property
    def source_id(self):
        return self.query.source_id

    @property
    def receiver_id(self):
        return self.query.receiver_id

    @property
    def dt(self):
        return self.triple.dt

    @property
    def t_reference(self):
        return self.triple.t_reference

    @property
    def t_baseline(self):
        return self.triple.t_baseline

    @property
    def traveltime_3d(self):
        """ Travel time (in s) in the 3-D model """
        return self.triple.traveltime_3d

    @property
    def perturbation_to_baseline(self):
        """ Difference (in s) between the 3-D and the baseline travel time """
        return self.traveltime_3d - self.t_baseline

    @property
    def epicentral_distance(self):
        return self.query.epicentral_distance

    @property
    def azimuth(self):
        return self.query.azimuth

    @property
    def is_finite(self):
        return self.triple.is_finite
