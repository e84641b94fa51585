"""
Circular averaging of the in-plane angular offset between two point sets.
"""
import numpy as np
import logging
from typing import Optional, Tuple

from .geometry import center_of_mass
from ..errors import DegenerateWeightError

logger = logging.getLogger(__name__)

NEGATIVE_ANGLE_THRESHOLD = -0.08


def wrap_to_reference(diff, reference: float):
    """Offset of `diff` from `reference` on the branch nearest to it, in [-pi, pi)."""
    return np.mod(np.asarray(diff) - reference + 5 * np.pi, 2 * np.pi) - np.pi


def rough_angle_from_rotation(rotation: np.ndarray) -> float:
    """Estimate the rotation angle about z from a 3x3 rotation matrix."""
    return float(np.arctan2(rotation[1, 0] - rotation[0, 1], rotation[0, 0] + rotation[1, 1]))


def circular_mean(x: np.ndarray, y: np.ndarray, weights: Optional[np.ndarray] = None,
                  reference: float = 0.0,
                  centers: Optional[Tuple[np.ndarray, np.ndarray]] = None) -> float:
    """
    Weighted average of the angle from each point of x to its partner in y.

    Angles are measured in the x-y plane about the center of each set. Every
    per-point difference is wrapped to the branch nearest `reference` before
    averaging, so that differences straddling +-pi are not averaged to zero.
    Each point is weighted by the sum of its squared in-plane distances from
    the two centers, times its weight when `weights` is given.

    Args:
        x: Points of the first set, shape (n, 3)
        y: Points of the second set, shape (n, 3)
        weights: Optional per-point weights (masses), shape (n,)
        reference: Angle (radians) selecting the branch to wrap to
        centers: Optional (center_x, center_y); computed from the weights if omitted

    Returns:
        Refined angle in radians, close to `reference`
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    if x.shape != y.shape:
        raise ValueError(f"Point sets differ in shape: {x.shape} vs {y.shape}")
    if centers is None:
        centers = (center_of_mass(x, weights), center_of_mass(y, weights))
    xc, yc = centers

    dx = x[:, :2] - np.asarray(xc)[:2]
    dy = y[:, :2] - np.asarray(yc)[:2]
    ang_x = np.arctan2(dx[:, 1], dx[:, 0])
    ang_y = np.arctan2(dy[:, 1], dy[:, 0])
    dang = wrap_to_reference(ang_y - ang_x, reference)

    wt = np.sum(dx**2, axis=1) + np.sum(dy**2, axis=1)
    if weights is not None:
        wt = wt * np.asarray(weights, dtype=np.float64)
    w_tot = wt.sum()
    if not w_tot > 0:
        raise DegenerateWeightError("All points lie on the rotation axis; angle is undefined.")
    return float(reference + np.sum(wt * dang) / w_tot)


def make_positive(angle: float, threshold: float = NEGATIVE_ANGLE_THRESHOLD) -> float:
    """Shift an angle below `threshold` up by 2*pi."""
    if angle < threshold:
        return angle + 2 * np.pi
    return angle
