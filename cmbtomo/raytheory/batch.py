#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Batch Processing
================

Large collections of source-receiver pairs are split into contiguous 
batches, each processed by an independent :class:`Traveltime` instance. 
The batches share the (read-only) 3-D model, and return their own list of
measurements; these are concatenated only after all batches are done.

"""

from joblib import Parallel, delayed
from cmbtomo.raytheory.phases import base_phase_name
from cmbtomo.raytheory.traveltime import Traveltime

__all__ = ['partition', 'compute_traveltimes', 'unique_records', 
           'select_phase']


def partition(total, max_per_batch):
    """ 
    Splits the indexes 0, ..., `total` - 1 in contiguous batches
    
    Parameters
    ----------
    total : int
        Number of elements, >= 0
        
    max_per_batch : int
        Maximum number of elements per batch, >= 1
        
    Returns
    -------
    list of tuples (start, end)
        Half-open ranges of indexes. If `total` <= `max_per_batch`, a single
        batch (0, `total`) is returned, also when `total` is 0
        
    Examples
    --------
    >>> partition(10, 4)
    [(0, 4), (4, 8), (8, 10)]
    """
    if total < 0:
        raise ValueError('The number of elements cannot be negative')
    if max_per_batch < 1:
        raise ValueError('Batches should contain at least one element')
    if total <= max_per_batch:
        return [(0, total)]
    return [(start, min(start + max_per_batch, total)) 
            for start in range(0, total, max_per_batch)]


def _run_batch(queries, seismic3d_model, phases, **kwargs):
    return Traveltime(queries, seismic3d_model, phases, **kwargs).run()


def compute_traveltimes(queries, seismic3d_model, phases, max_per_batch=10000,
                        n_cpus=1, backend=None, verbose=True, **kwargs):
    """ 
    Travel times of a (possibly large) collection of source-receiver pairs,
    processed in parallel batches
    
    Parameters
    ----------
    queries : list of RaypathQuery
    
    seismic3d_model : cmbtomo.models.EarthModel
    
    phases : str or list of str
    
    max_per_batch : int
        Maximum number of source-receiver pairs per batch. Default is 10000
        
    n_cpus : int
        Number of batches processed simultaneously. Default is 1. (See 
        :class:`joblib.Parallel`)
        
    backend : str, optional
        joblib backend (e.g., 'loky', 'threading')
        
    verbose : bool
        Default is `True`
        
    **kwargs
        Additional keyword arguments passed to :class:`Traveltime` 
        
    Returns
    -------
    measurements : list of lists of PerturbationRecord
        In the same order as `queries`
    """
    queries = list(queries)
    batches = partition(len(queries), max_per_batch)
    if verbose:
        print('%d raypaths, %d batches'%(len(queries), len(batches)))
    results = Parallel(n_jobs=n_cpus, backend=backend, 
                       verbose=5 if verbose else 0)(
        delayed(_run_batch)(queries[start : end], 
                            seismic3d_model, 
                            phases, 
                            verbose=verbose,
                            **kwargs)
        for start, end in batches
    )
    measurements = []
    for batch_measurements in results:
        measurements.extend(batch_measurements)
    return measurements


def unique_records(records):
    """ 
    Removes duplicated records (same source, receiver and phase), keeping
    the first occurrence
    """
    unique = {}
    for record in records:
        unique.setdefault(record.key, record)
    return list(unique.values())


def select_phase(measurements, phase_name):
    """ 
    Records of the given phase, and of its second arrival (suffix `m`)
    
    Parameters
    ----------
    measurements : list of lists of PerturbationRecord
        As returned by :meth:`Traveltime.run`
        
    phase_name : str
    
    Returns
    -------
    list of PerturbationRecord
    """
    phase_name = base_phase_name(phase_name)
    names = (phase_name, phase_name + 'm')
    return [record for records in measurements for record in records
            if record.phase_name in names]
