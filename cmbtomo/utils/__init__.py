"""
===========================================
Utility Functions (:mod:`cmbtomo.utils`)
===========================================

This module provides the geometric support needed to follow a ray
through a spherical Earth. It includes:

- Immutable geocentric positions (:class:`Position`,
  :class:`HorizontalPosition`), their Cartesian coordinates and 
  straight-line (chord) distances
  
- Calculation of epicentral distances and azimuths, building on
  `ObsPy <https://docs.obspy.org/>`_
  
- Vectorized calculation of the points reached by travelling along a 
  great circle
  
- Evaluation of real, fully-normalized spherical harmonics
  
"""
from .position import *
from ._utils import *
