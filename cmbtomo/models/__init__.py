r"""
=============================================
Earth Models (:mod:`cmbtomo.models`)
=============================================

Travel-time perturbations are computed with respect to a spherically 
symmetric reference structure (see 
:class:`cmbtomo.models.structure.PolynomialStructure`), in which the ray 
paths are traced. The three-dimensional models implemented in 
:mod:`cmbtomo.models.models` describe the departures from such structure:

- Relative perturbations in P- and S-wave velocity, 
  :math:`\delta \ln V_P` and :math:`\delta \ln V_S`
  
- Elevation (in km, positive upwards) of the core-mantle boundary (CMB)

All models share the same interface (:class:`EarthModel`), so that the 
computation of the travel times never depends on the particular model. 
Perturbations can be restricted to a range of radii through
:meth:`EarthModel.set_truncation_range`, and models expanded in spherical
harmonics can be band-limited through :meth:`EarthModel.filter`.

"""
from .structure import *
from .models import *
