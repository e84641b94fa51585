"""
Atomic masses from a PSF topology file.
"""
import numpy as np
from pathlib import Path
import logging
from typing import Union

from ..errors import CorruptedMassTableError

logger = logging.getLogger(__name__)

ATOM_SECTION_MARKER = '!NATOM'
MASS_TOLERANCE = 0.001


def load_masses(psf_file: Union[str, Path], n_atoms: int) -> np.ndarray:
    """
    Read the masses of the first `n_atoms` atoms of a PSF file.

    The atom section starts after the line containing ``!NATOM``; the mass is
    the eighth whitespace-separated field of each atom line.

    Args:
        psf_file: Path to the topology file
        n_atoms: Number of atom records to read

    Returns:
        Array of masses, shape (n_atoms,)

    Raises:
        FileNotFoundError: If the file does not exist
        CorruptedMassTableError: If the marker or enough atom lines are missing
    """
    path = Path(psf_file)
    if not path.exists():
        raise FileNotFoundError(f"Topology file not found: {psf_file}")

    masses = np.zeros(n_atoms, dtype=np.float64)
    with open(path, 'r') as f:
        for line in f:
            if ATOM_SECTION_MARKER in line:
                break
        else:
            raise CorruptedMassTableError(f"{path}: no '{ATOM_SECTION_MARKER}' section")

        for i in range(n_atoms):
            line = f.readline()
            if not line:
                raise CorruptedMassTableError(f"{path}: corrupted in scanning atom {i}")
            fields = line.split()
            try:
                masses[i] = float(fields[7])
            except (IndexError, ValueError):
                raise CorruptedMassTableError(f"{path}: no mass on atom line {i}: {line.strip()!r}")

    logger.info(f"Loaded {n_atoms} masses from {path} (total {masses.sum():g})")
    return masses


def check_mass_symmetry(masses: np.ndarray, tolerance: float = MASS_TOLERANCE) -> bool:
    """
    Check that atom i of subunit A has the mass of atom i of subunit B.

    Mismatches are reported as a warning only.

    Returns:
        True if all paired masses agree within `tolerance`
    """
    masses = np.asarray(masses, dtype=np.float64)
    ns = masses.shape[0] // 2
    diff = np.abs(masses[:ns] - masses[ns:2 * ns])
    bad = np.nonzero(diff > tolerance)[0]
    if bad.size:
        i = int(bad[0])
        logger.warning(f"mass {i} != mass {i + ns}, {masses[i]:g} vs. {masses[i + ns]:g} "
                       f"({bad.size} mismatched pairs)")
        return False
    logger.info("mass is ok!")
    return True
