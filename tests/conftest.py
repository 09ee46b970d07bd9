"""
Shared stubs: an Earth model that records the radii at which it is queried,
a ray tracer returning synthetic rays, and helpers to build them.
"""

import numpy as np
import pytest

from cmbtomo.exceptions import RayTracingError
from cmbtomo.models import EarthModel, ISO_PREM, CMB_RADIUS
from cmbtomo.utils import Position, HorizontalPosition
from cmbtomo.raytheory import (Interaction, RaypathQuery, RayPolyline, 
                               ScatterPoint, TracedRay, RayTracer,
                               cmb_interactions)

MANTLE_RADIUS = 4600.
CORE_RADIUS = 2800.


class InstrumentedModel(EarthModel):
    """Uniform model keeping track of every field evaluation."""

    def __init__(self, dlnvp=0., dlnvs=0., cmb_elevation=0., 
                 structure=ISO_PREM):
        super().__init__('InstrumentedModel', structure=structure)
        self.dlnvp = dlnvp
        self.dlnvs = dlnvs
        self.cmb_elevation = cmb_elevation
        self.velocity_calls = []
        self.perturbation_calls = []

    def get_velocity(self, radius, wave_type):
        self.velocity_calls.append((radius, str(wave_type)))
        return super().get_velocity(radius, wave_type)

    def _dlnvp(self, position):
        self.perturbation_calls.append((position.radius, 'P'))
        return self.dlnvp

    def _dlnvs(self, position):
        self.perturbation_calls.append((position.radius, 'S'))
        return self.dlnvs

    def _cmb_elevation(self, position):
        return self.cmb_elevation

    @property
    def queried_radii(self):
        return [r for r, _ in self.velocity_calls + self.perturbation_calls]

    @property
    def queried_wave_types(self):
        return {w for _, w in self.velocity_calls + self.perturbation_calls}


def make_ray(phase_name, ray_parameter, source_radius=5871., distance=95.):
    """Synthetic ray path crossing the CMB as the phase topology requires."""
    interactions = cmb_interactions(phase_name)
    radii = [source_radius, MANTLE_RADIUS]
    on_cmb = []
    in_core = False
    for kind, _, _ in interactions:
        on_cmb.append(len(radii))
        radii.append(CMB_RADIUS)
        if kind is Interaction.TRANSMISSION:
            in_core = not in_core
        radii.append(CORE_RADIUS if in_core else MANTLE_RADIUS)
    radii.append(6371.)
    longitudes = np.linspace(0, distance, len(radii))
    positions = [Position(0., float(lon), r) for lon, r in zip(longitudes, radii)]
    scatter_points = tuple(
        ScatterPoint(positions[i], ray_parameter, wave_type, kind, outgoing)
        for i, (kind, wave_type, outgoing) in zip(on_cmb, interactions)
    )
    return TracedRay(phase_name, ray_parameter, RayPolyline(positions),
                     scatter_points)


def make_query(source_id='event', receiver_id='station', depth=500., 
               distance=95.):
    return RaypathQuery(source_id, receiver_id, 
                        Position(0., 0., 6371. - depth),
                        HorizontalPosition(0., distance))


class ScriptedTracer(RayTracer):
    """Returns the same synthetic rays for every query, except for the 
    sources listed in `failing`."""

    def __init__(self, rays, failing=()):
        self.rays = list(rays)
        self.failing = set(failing)
        self.calls = []

    def trace(self, query, phase_names):
        self.calls.append(query.source_id)
        if query.source_id in self.failing:
            raise RayTracingError(message='No ray path for %s'%query)
        return [ray for ray in self.rays if ray.phase_name in phase_names]


# Ray parameters (s/rad) in the range of the core phases at 95 degrees
RAY_PARAMETERS = {'SKS': 300., 'SKKS': 380., 'SKKKS': 410., 'ScS': 250., 
                  'S': 450., 'SKKSm': 385.}


@pytest.fixture
def core_rays():
    return [make_ray(name, RAY_PARAMETERS[name]) 
            for name in ('SKS', 'SKKS', 'SKKKS')]


@pytest.fixture
def core_tracer(core_rays):
    return ScriptedTracer(core_rays)
