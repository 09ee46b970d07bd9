#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Geodesic utilities: distances, azimuths and spherical harmonics
"""

import numpy as np
from scipy.special import lpmv, gammaln
from obspy.geodetics import gps2dist_azimuth, locations2degrees

__all__ = ['epicentral_distance', 'azimuth', 'destination_point', 
           'real_sph_harm']


def epicentral_distance(lat1, lon1, lat2, lon2):
    """ 
    Calculates the epicentral distance (in degrees) between coordinate points
    (in degrees) on a sphere. This function calls directly the obspy 
    `locations2degrees`.
    
    Parameters
    ----------
    lat1, lon1, lat2, lon2 : float or array-like of shape (n,)
        Coordinates of the points on the Earth's surface, in degrees.        
    
    Returns
    -------
    Epicentral distance (in degrees) 
        If the input is an array (or list) of coordinates, an array of 
        distances is returned
    """
    return locations2degrees(lat1, lon1, lat2, lon2)


def azimuth(lat1, lon1, lat2, lon2):
    """ 
    Calculates the azimuth (in degrees) from the first to the second point.
    This function calls directly the obspy `gps2dist_azimuth`, it only 
    extends its functionality through the `numpy.vectorize` decorator
    
    Parameters
    ----------
    lat1, lon1, lat2, lon2 : float or array-like of shape (n,)
        Coordinates of the points on the Earth's surface, in degrees.               
    
    Returns
    -------
    float or ndarray of shape (n,)
    """
    func = np.vectorize(gps2dist_azimuth)
    return func(lat1, lon1, lat2, lon2)[1]


def destination_point(lat, lon, azimuth, distance):
    """ 
    Coordinates of the point reached by travelling along a great circle
    
    Parameters
    ----------
    lat, lon : float
        Coordinates of the starting point, in degrees
        
    azimuth : float
        Direction of travel, clockwise from North (in degrees)
        
    distance : float or array-like of shape (n,)
        Angular distance travelled (in degrees)
        
    Returns
    -------
    lat2, lon2 : float or ndarray of shape (n,)
        Latitude and longitude (in degrees, -180 <= lon < 180) of the 
        destination point(s)
    """
    lat1 = np.radians(lat)
    lon1 = np.radians(lon)
    az = np.radians(azimuth)
    delta = np.radians(np.asarray(distance, dtype=np.float64))
    
    sin_lat2 = np.sin(lat1)*np.cos(delta) + np.cos(lat1)*np.sin(delta)*np.cos(az)
    lat2 = np.arcsin(np.clip(sin_lat2, -1, 1))
    lon2 = lon1 + np.arctan2(np.sin(az) * np.sin(delta) * np.cos(lat1),
                             np.cos(delta) - np.sin(lat1)*sin_lat2)
    lon2 = (np.degrees(lon2) + 180) % 360 - 180
    return np.degrees(lat2), lon2


def real_sph_harm(lmax, lat, lon):
    r""" 
    Real, fully-normalized (:math:`4\pi`) spherical harmonics up to degree
    `lmax`, without the Condon-Shortley phase
    
    .. math::
        
        Y^c_{lm} = \bar{P}_{lm}(\sin \phi) \cos m\lambda, \qquad
        Y^s_{lm} = \bar{P}_{lm}(\sin \phi) \sin m\lambda
    
    Parameters
    ----------
    lmax : int
        Maximum spherical-harmonic degree
        
    lat, lon : float
        Coordinates of the point, in degrees
        
    Returns
    -------
    ndarray of shape (2, lmax+1, lmax+1)
        Cosine (index 0) and sine (index 1) harmonics, indexed as [l, m].
        Entries with m > l are zero
    """
    degrees = np.arange(lmax + 1)
    L, M = np.meshgrid(degrees, degrees, indexing='ij')
    valid = M <= L
    x = np.sin(np.radians(lat))
    
    log_ratio = gammaln(np.where(valid, L - M, 0) + 1) - gammaln(L + M + 1)
    norm = np.sqrt(np.where(M == 0, 1, 2) * (2*L + 1) * np.exp(log_ratio))
    plm = np.where(valid, (-1.)**M * lpmv(M, L, x), 0) * norm
    
    mlon = M * np.radians(lon)
    return np.array([plm * np.cos(mlon), plm * np.sin(mlon)])
