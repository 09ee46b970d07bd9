"""
=============================================
Exceptions (:mod:`cmbtomo.exceptions`)
=============================================

Three failure classes are distinguished during a travel-time run:

- :class:`RayTracingError`: no ray path could be computed for a given
  source-receiver pair. The whole query is skipped.

- :class:`KernelError`: the boundary sensitivity cannot be evaluated at a
  scatter point (evanescent wave). The record of that phase is flagged
  with NaNs.

- :class:`UnsupportedPhaseError`: the requested phase is not implemented.
  This is a configuration error and is never caught.

"""
from .exceptions import *
