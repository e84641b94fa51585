"""
Input/Output module for meanforce.

This module provides the streaming force trajectory reader, the topology mass
loader, block file discovery and the output writers.
"""

from .force_reader import ForceTrajectoryReader, ForceStreamProcessor, StreamReport, StreamStatus, StaticGeometry
from .mass_table import load_masses, check_mass_symmetry
from .discovery import find_block_files
from .writer import ForceSeriesWriter, ResultsWriter

__all__ = [
    'ForceTrajectoryReader',
    'ForceStreamProcessor',
    'StreamReport',
    'StreamStatus',
    'StaticGeometry',
    'load_masses',
    'check_mass_symmetry',
    'find_block_files',
    'ForceSeriesWriter',
    'ResultsWriter',
]
