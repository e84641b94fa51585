"""
Core module for meanforce.

This module provides the data structures and numerical routines: subunit
geometry, circular averaging, per-frame force reduction and running moments.
"""

from .atoms import AtomSet
from .geometry import center_of_mass, superpose, align_subunits
from .circular import circular_mean, wrap_to_reference, rough_angle_from_rotation, make_positive
from .alignment import AlignmentResult, compute_alignment
from .forces import radial_force, torque, frame_quantities
from .moments import MomentAccumulator, ForceStatistics

__all__ = [
    'AtomSet',
    'center_of_mass',
    'superpose',
    'align_subunits',
    'circular_mean',
    'wrap_to_reference',
    'rough_angle_from_rotation',
    'make_positive',
    'AlignmentResult',
    'compute_alignment',
    'radial_force',
    'torque',
    'frame_quantities',
    'MomentAccumulator',
    'ForceStatistics',
]
