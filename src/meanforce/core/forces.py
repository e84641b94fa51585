"""
Per-frame reduction of atomic forces to restraint quantities.
"""
import numpy as np
from typing import Tuple


def _half(n_atoms: int) -> int:
    if n_atoms % 2 != 0:
        raise ValueError(f"Number of atoms must be even, got {n_atoms}")
    return n_atoms // 2


def radial_force(forces: np.ndarray) -> float:
    """
    Net force along x separating the two subunits.

    Subunit A and subunit B each give an estimate of the same restraint force
    with opposite signs; the result is their average, (sum fx[B] - sum fx[A]) / 2.
    """
    ns = _half(forces.shape[0])
    return float((forces[ns:, 0].sum() - forces[:ns, 0].sum()) / 2)


def torque(positions: np.ndarray, forces: np.ndarray, centers: np.ndarray) -> Tuple[float, float]:
    """
    Torque about z on the two subunits.

    Each atom contributes (r - c) x f in the x-y plane, with c the center of
    its own subunit. Contributions of subunit A are sign-flipped.

    Args:
        positions: Atom positions, shape (n_atoms, 3)
        forces: Atom forces, shape (n_atoms, 3)
        centers: Centers of subunit A and B, shape (2, 3)

    Returns:
        (torque, symmetric_torque): the two-subunit estimate and the
        subunit-B-only estimate, both halved
    """
    ns = _half(forces.shape[0])
    disp = np.empty((forces.shape[0], 2))
    disp[:ns] = positions[:ns, :2] - centers[0, :2]
    disp[ns:] = positions[ns:forces.shape[0], :2] - centers[1, :2]

    t = -disp[:, 1] * forces[:, 0] + disp[:, 0] * forces[:, 1]
    t[:ns] = -t[:ns]
    t_b = t[ns:].sum()
    return float((t[:ns].sum() + t_b) / 2), float(t_b / 2)


def frame_quantities(positions: np.ndarray, forces: np.ndarray, centers: np.ndarray) -> Tuple[float, float, float]:
    """Radial force, torque and symmetric torque of one frame."""
    tq, sym = torque(positions, forces, centers)
    return radial_force(forces), tq, sym
