"""
Geometry primitives for the two-subunit system.

Centers of mass and the weighted rigid superposition (Kabsch) of one point
set onto another.
"""
import numpy as np
import logging
from typing import Optional, Tuple

from ..errors import DegenerateWeightError

logger = logging.getLogger(__name__)


def _as_weights(weights: Optional[np.ndarray], n: int) -> np.ndarray:
    if weights is None:
        return np.ones(n, dtype=np.float64)
    w = np.asarray(weights, dtype=np.float64)
    if w.shape != (n,):
        raise ValueError(f"Weights have shape {w.shape}, expected ({n},)")
    return w


def center_of_mass(positions: np.ndarray, weights: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Compute the weighted center of a set of points.

    Args:
        positions: Array of shape (n, 3)
        weights: Optional per-point weights of shape (n,); 1.0 per point if omitted

    Returns:
        Center as a 3-element array

    Raises:
        DegenerateWeightError: If the total weight is not positive
    """
    pos = np.asarray(positions, dtype=np.float64)
    if pos.ndim != 2 or pos.shape[1] != 3:
        raise ValueError(f"Positions must have shape (n, 3), got {pos.shape}")
    w = _as_weights(weights, pos.shape[0])
    w_tot = w.sum()
    if not w_tot > 0:
        raise DegenerateWeightError(f"Total weight must be positive, got {w_tot}")
    center = (w[:, None] * pos).sum(axis=0) / w_tot
    logger.debug(f"{pos.shape[0]} atoms, total weight {w_tot:g}: center {center[0]:g} {center[1]:g} {center[2]:g}")
    return center


def superpose(x: np.ndarray, y: np.ndarray,
              weights: Optional[np.ndarray] = None) -> Tuple[np.ndarray, np.ndarray, float]:
    """
    Find the rotation and translation that best map x onto y.

    Minimizes sum_i w_i |R x_i + t - y_i|^2 with the Kabsch algorithm,
    correcting for reflections so that det(R) = +1.

    Args:
        x: Moving points, shape (n, 3)
        y: Target points, shape (n, 3)
        weights: Optional per-point weights, shape (n,)

    Returns:
        (rotation (3, 3), translation (3,), weighted RMSD after the fit)
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    if x.shape != y.shape:
        raise ValueError(f"Point sets differ in shape: {x.shape} vs {y.shape}")
    w = _as_weights(weights, x.shape[0])

    xc = center_of_mass(x, w)
    yc = center_of_mass(y, w)
    dx = x - xc
    dy = y - yc

    cov = (w[:, None] * dx).T @ dy
    u, _, vt = np.linalg.svd(cov)
    d = np.sign(np.linalg.det(vt.T @ u.T))
    if d == 0:
        d = 1.0
    rot = vt.T @ np.diag([1.0, 1.0, d]) @ u.T
    trans = yc - rot @ xc

    resid = x @ rot.T + trans - y
    rmsd = float(np.sqrt(np.sum(w * np.sum(resid**2, axis=1)) / w.sum()))
    return rot, trans, rmsd


def align_subunits(positions_a: np.ndarray, positions_b: np.ndarray,
                   weights: Optional[np.ndarray] = None) -> Tuple[np.ndarray, np.ndarray, float]:
    """Superpose subunit A onto subunit B; returns (rotation, translation, rmsd)."""
    return superpose(positions_a, positions_b, weights)
