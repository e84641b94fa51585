"""
meanforce: mean restraint force and torque between two identical subunits.
"""

__version__ = "0.1.0"

# Core components
from .core.atoms import AtomSet
from .core.geometry import center_of_mass, superpose, align_subunits
from .core.circular import circular_mean, wrap_to_reference
from .core.alignment import AlignmentResult, compute_alignment
from .core.forces import radial_force, torque, frame_quantities
from .core.moments import MomentAccumulator, ForceStatistics

# IO components
from .io.force_reader import ForceTrajectoryReader, ForceStreamProcessor, StreamReport, StreamStatus
from .io.mass_table import load_masses, check_mass_symmetry
from .io.discovery import find_block_files
from .io.writer import ForceSeriesWriter, ResultsWriter

# Session driver
from .session import MeanForceSession, SessionResult, resolve_inputs

from .utils.config_manager import ConfigManager

__all__ = [
    # Core
    'AtomSet',
    'center_of_mass',
    'superpose',
    'align_subunits',
    'circular_mean',
    'wrap_to_reference',
    'AlignmentResult',
    'compute_alignment',
    'radial_force',
    'torque',
    'frame_quantities',
    'MomentAccumulator',
    'ForceStatistics',
    # IO
    'ForceTrajectoryReader',
    'ForceStreamProcessor',
    'StreamReport',
    'StreamStatus',
    'load_masses',
    'check_mass_symmetry',
    'find_block_files',
    'ForceSeriesWriter',
    'ResultsWriter',
    # Session
    'MeanForceSession',
    'SessionResult',
    'resolve_inputs',
    # Utils
    'ConfigManager',
]
