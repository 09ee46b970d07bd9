#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Positions on (and inside) a spherical Earth. Latitudes are geocentric,
angles are in degrees and radii in km.
"""

from dataclasses import dataclass
import numpy as np

__all__ = ['HorizontalPosition', 'Position']

EARTH_RADIUS = 6371.


@dataclass(frozen=True)
class HorizontalPosition:
    """ Point on the Earth's surface
    
    Parameters
    ----------
    latitude, longitude : float
        Geocentric coordinates, in degrees
    """
    latitude: float
    longitude: float

    def __str__(self):
        return '(%.4f, %.4f)'%(self.latitude, self.longitude)

    def to_position(self, radius=EARTH_RADIUS):
        """ :class:`Position` at the given radius (in km) below this point """
        return Position(self.latitude, self.longitude, radius)


@dataclass(frozen=True)
class Position(HorizontalPosition):
    """ Point inside the Earth
    
    Parameters
    ----------
    latitude, longitude : float
        Geocentric coordinates, in degrees
        
    radius : float
        Distance from the centre of the Earth, in km
    """
    radius: float = EARTH_RADIUS

    def __str__(self):
        return '(%.4f, %.4f, %.4f)'%(self.latitude, self.longitude, self.radius)

    @property
    def depth(self):
        """ Depth below the surface of a 6371 km radius Earth (in km) """
        return EARTH_RADIUS - self.radius

    def horizontal(self):
        return HorizontalPosition(self.latitude, self.longitude)

    def with_radius(self, radius):
        """ Same horizontal position, different radius """
        return Position(self.latitude, self.longitude, radius)

    def to_cartesian(self):
        """ 
        Cartesian coordinates (in km) of the position
        
        Returns
        -------
        ndarray of shape (3,)
        """
        lat = np.radians(self.latitude)
        lon = np.radians(self.longitude)
        return self.radius * np.array([np.cos(lat) * np.cos(lon),
                                       np.cos(lat) * np.sin(lon),
                                       np.sin(lat)])

    def straight_distance(self, other):
        """ 
        Length (in km) of the straight segment joining two positions
        
        Parameters
        ----------
        other : Position
        
        Returns
        -------
        float
        """
        return float(np.linalg.norm(self.to_cartesian() - other.to_cartesian()))
