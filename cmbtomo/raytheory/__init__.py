r"""
=============================================
Ray Theory (:mod:`cmbtomo.raytheory`)
=============================================

Travel-time perturbations caused by 3-D velocity heterogeneity in the mantle
and by the topography of the core-mantle boundary (CMB), computed by 
first-order ray theory along ray paths traced in a 1-D reference structure.

The computation is carried out by :class:`Traveltime`, which, for each 
source-receiver pair (:class:`RaypathQuery`):

- traces the ray paths of the requested phases (:class:`TauPRayTracer`)

- multiplies the elevation of the CMB at each point where the ray interacts
  with it (:class:`ScatterPoint`) by the boundary kernel 
  (:class:`BoundaryKernel`)

- integrates the velocity perturbations along the ray path 
  (:class:`VolumetricIntegrator`)

- sums the two contributions in a :class:`PerturbationRecord`

Large datasets can be split in batches, and processed in parallel, through
:func:`compute_traveltimes`.

The supported phases are listed in :data:`PHASE_TABLE`. A phase name 
followed by `m` (e.g., 'SKKSm') denotes the second arrival of that phase.

"""
from .data import *
from .phases import *
from .kernel import *
from .integrator import *
from .tracer import *
from .traveltime import *
from .batch import *
