"""
Rigid-body relationship between the two subunits.
"""
from dataclasses import dataclass
import numpy as np
import logging
from typing import Dict, Any

from .atoms import AtomSet
from .geometry import center_of_mass, align_subunits
from .circular import circular_mean, rough_angle_from_rotation, make_positive, NEGATIVE_ANGLE_THRESHOLD

logger = logging.getLogger(__name__)


@dataclass
class AlignmentResult:
    centers: np.ndarray      # (2, 3): subunit A, subunit B
    rotation: np.ndarray     # (3, 3), maps A onto B
    translation: np.ndarray  # (3,)
    rmsd: float
    rough_angle: float       # radians, from the rotation matrix
    angle: float             # radians, refined circular mean

    def __post_init__(self):
        if self.centers.shape != (2, 3):
            raise ValueError(f"Centers must have shape (2, 3), got {self.centers.shape}")
        if self.rotation.shape != (3, 3):
            raise ValueError(f"Rotation must be 3x3, got {self.rotation.shape}")
        if self.translation.shape != (3,):
            raise ValueError(f"Translation must be a 3-element array, got {self.translation.shape}")

    @property
    def separation(self) -> float:
        """Translation along x, the distance between the two subunits."""
        return float(self.translation[0])

    @property
    def angle_degrees(self) -> float:
        return float(np.degrees(self.angle))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'centers': self.centers.tolist(),
            'rotation': self.rotation.tolist(),
            'translation': self.translation.tolist(),
            'rmsd': float(self.rmsd),
            'separation': self.separation,
            'rough_angle': float(self.rough_angle),
            'angle': float(self.angle),
            'angle_degrees': self.angle_degrees,
        }


def compute_alignment(positions: np.ndarray, atoms: AtomSet,
                      negative_angle_threshold: float = NEGATIVE_ANGLE_THRESHOLD) -> AlignmentResult:
    """
    Characterize how subunit B sits relative to subunit A.

    The angle is first estimated from the superposition rotation, then refined
    with a circular mean over the atoms wrapped to the rough estimate.

    Args:
        positions: Positions of all atoms, shape (n_atoms, 3)
        atoms: Atom set describing the subunit partition and masses
        negative_angle_threshold: Refined angles below this get 2*pi added

    Returns:
        AlignmentResult
    """
    positions = np.asarray(positions, dtype=np.float64)
    if positions.shape != (atoms.n_atoms, 3):
        raise ValueError(f"Positions have shape {positions.shape}, expected ({atoms.n_atoms}, 3)")
    pos_a, pos_b = atoms.subunit_a(positions), atoms.subunit_b(positions)
    weights = atoms.subunit_masses()

    centers = np.vstack([center_of_mass(pos_a, weights), center_of_mass(pos_b, weights)])
    rot, trans, rmsd = align_subunits(pos_a, pos_b, weights)

    angref = rough_angle_from_rotation(rot)
    dang = circular_mean(pos_a, pos_b, weights, reference=angref, centers=(centers[0], centers[1]))
    logger.info(f"angle modified from {angref:g}({np.degrees(angref):g}) to {dang:g}({np.degrees(dang):g})")
    dang = make_positive(dang, negative_angle_threshold)

    return AlignmentResult(centers=centers, rotation=rot, translation=np.asarray(trans),
                           rmsd=rmsd, rough_angle=angref, angle=dang)
