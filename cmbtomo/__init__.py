#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
=======
CMBTomo
=======

Ray-theoretical travel-time perturbations due to 3-D mantle structure and
core-mantle boundary topography.
"""

from .__version__ import __version__
from . import exceptions
from . import utils
from . import models
from . import raytheory
