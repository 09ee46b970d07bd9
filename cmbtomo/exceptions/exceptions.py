#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Exceptions raised by the travel-time perturbation engine
"""

__all__ = ['KernelError', 'UnsupportedPhaseError', 'RayTracingError']


class KernelError(Exception):
    """
    Exception raised when the CMB sensitivity kernel has no real value for
    the given ray parameter (evanescent or post-critical wave). 
    """

    def __init__(self, *args, message=None):
        if message is not None:
            self.message = message
        else:
            self.message = 'No real boundary sensitivity for this ray parameter.'
        for arg in args:
            self.message += '\n%s'%arg
        super().__init__(self.message)

    def __str__(self):
        return self.message


class UnsupportedPhaseError(Exception):
    """
    Exception raised when a seismic phase is not implemented. 
    """

    def __init__(self, phase_name, *args):
        self.phase_name = phase_name
        self.message = 'Phase not implemented yet: %s'%phase_name
        for arg in args:
            self.message += '\n%s'%arg
        super().__init__(self.message)

    def __str__(self):
        return self.message


class RayTracingError(Exception):
    """
    Exception raised when no ray path could be computed for a source-receiver
    pair.
    """

    def __init__(self, *args, message=None):
        if message is not None:
            self.message = message
        else:
            self.message = 'It was not possible to compute the ray paths'
        for arg in args:
            self.message += '\n%s'%arg
        super().__init__(self.message)

    def __str__(self):
        return self.message
