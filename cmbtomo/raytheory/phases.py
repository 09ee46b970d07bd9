#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Seismic Phases
==============

Table of the seismic phases for which travel-time perturbations can be 
computed. The table is built once, at import; any request for a phase that 
is not in the table raises :class:`cmbtomo.exceptions.UnsupportedPhaseError`.

A phase name followed by `m` (e.g., `SKKSm`) denotes the second arrival, 
with the same name, predicted by the ray tracer (triplications).

"""

from collections import namedtuple
from enum import Enum
from cmbtomo.exceptions import UnsupportedPhaseError
from cmbtomo.raytheory.data import WaveType, Interaction

__all__ = ['WaveFamily', 'PhaseSpec', 'PHASE_TABLE', 'get_phase_spec', 
           'validate_phases', 'parse_phase_list', 'base_phase_name', 
           'cmb_interactions']


class WaveFamily(Enum):
    P = 'P'
    S = 'S'
    MIXED = 'mixed'


PhaseSpec = namedtuple('PhaseSpec', ['name', 
                                     'family', 
                                     'down_wave_type', 
                                     'up_wave_type', 
                                     'outer_core_conversion'])
PhaseSpec.__doc__ = """
Properties of a seismic phase

Parameters
----------
name : str
family : WaveFamily
down_wave_type, up_wave_type : WaveType
    Wave type of the down-going and up-going mantle legs
outer_core_conversion : bool
    If `True`, the legs of the phase that cross the outer core propagate as
    P waves even though the phase belongs to the S family
"""


def _build_phase_table():
    p_phases = ['P', 'PcP', 'PKP', 'PKKP', 'PKKKP', 'PKKKKP']
    s_phases = ['S', 'SKS', 'SKKS', 'SKKKS', 'ScS', 'ScSScS', 'ScSScSScS']
    table = {}
    for name in p_phases + [p + 'm' for p in p_phases] + ['PKiKP']:
        table[name] = PhaseSpec(name, WaveFamily.P, WaveType.P, WaveType.P, 
                                False)
    for name in s_phases + [s + 'm' for s in s_phases]:
        table[name] = PhaseSpec(name, WaveFamily.S, WaveType.S, WaveType.S, 
                                True)
    table['PcS'] = PhaseSpec('PcS', WaveFamily.MIXED, WaveType.P, WaveType.S, 
                             False)
    table['ScP'] = PhaseSpec('ScP', WaveFamily.MIXED, WaveType.S, WaveType.P, 
                             False)
    return table


PHASE_TABLE = _build_phase_table()


def get_phase_spec(phase_name):
    """ 
    Retrieves the properties of a phase
    
    Parameters
    ----------
    phase_name : str
    
    Returns
    -------
    PhaseSpec
    
    Raises
    ------
    UnsupportedPhaseError
        If the phase is not in :data:`PHASE_TABLE`
    """
    try:
        return PHASE_TABLE[phase_name]
    except (KeyError, TypeError):
        raise UnsupportedPhaseError(phase_name) from None


def validate_phases(phase_names):
    """ 
    Checks that all phases are supported, before any computation starts
    
    Returns
    -------
    list of PhaseSpec
    """
    return [get_phase_spec(name) for name in phase_names]


def parse_phase_list(phases):
    """ 
    List of phase names from a comma-separated string (e.g., 'S, ScS') or
    from an iterable of names
    """
    if isinstance(phases, str):
        phases = phases.split(',')
    return [name.strip() for name in phases if name.strip()]


def base_phase_name(phase_name):
    """ Name of the phase without the `m` suffix of the second arrivals """
    if phase_name.endswith('m') and phase_name[:-1] in PHASE_TABLE:
        return phase_name[:-1]
    return phase_name


def cmb_interactions(phase_name):
    """ 
    Expected interactions with the core-mantle boundary, in the order in
    which they are met along the ray path
    
    Parameters
    ----------
    phase_name : str
    
    Returns
    -------
    list of tuples (Interaction, WaveType, WaveType or None)
        Kind of interaction, wave type of the incident ray on the illuminated
        side of the boundary, and wave type of the reflected ray (only for 
        top-side reflections)
        
    Raises
    ------
    UnsupportedPhaseError
        If the phase is not in :data:`PHASE_TABLE`
    
    Examples
    --------
    SKKS is transmitted into the core as S, reflected once on the underside
    of the CMB, and transmitted back into the mantle as S
    
    >>> [str(kind) for kind, _, _ in cmb_interactions('SKKS')]
    ['transmission', 'reflection_under', 'transmission']
    """
    get_phase_spec(phase_name)
    legs = base_phase_name(phase_name)
    interactions = []
    previous = None
    for i, leg in enumerate(legs):
        if leg == 'c':
            interactions.append((Interaction.REFLECTION_TOP, 
                                 WaveType(legs[i-1]), 
                                 WaveType(legs[i+1])))
        elif leg == 'K':
            if previous in ('P', 'S'):
                interactions.append((Interaction.TRANSMISSION, 
                                     WaveType(previous), 
                                     None))
            elif previous == 'K':
                interactions.append((Interaction.REFLECTION_UNDER, 
                                     WaveType.P, 
                                     None))
        elif leg in ('P', 'S') and previous == 'K':
            interactions.append((Interaction.TRANSMISSION, WaveType(leg), None))
        # 'i' is a reflection on top of the inner core
        if leg != 'c':
            previous = leg
    return interactions
