"""
Atom set made of two structurally identical subunits.
"""
from dataclasses import dataclass
import numpy as np
from typing import Optional

from ..errors import DegenerateWeightError


@dataclass
class AtomSet:
    n_atoms: int
    masses: Optional[np.ndarray] = None

    def __post_init__(self):
        if self.n_atoms <= 0:
            raise ValueError(f"Number of atoms must be positive, got {self.n_atoms}")
        if self.n_atoms % 2 != 0:
            raise ValueError(f"Number of atoms must be even (two equal subunits), got {self.n_atoms}")
        if self.masses is not None:
            self.masses = np.asarray(self.masses, dtype=np.float64)
            if self.masses.shape != (self.n_atoms,):
                raise ValueError(f"Masses must be a 1D array of length {self.n_atoms}, got shape {self.masses.shape}")
            m_tot = self.masses[:self.n_subunit].sum()
            if not m_tot > 0:
                raise DegenerateWeightError(f"Subunit masses must sum to a positive value, got {m_tot}")

    @property
    def n_subunit(self) -> int:
        return self.n_atoms // 2

    def subunit_a(self, arr: np.ndarray) -> np.ndarray:
        return arr[:self.n_subunit]

    def subunit_b(self, arr: np.ndarray) -> np.ndarray:
        return arr[self.n_subunit:self.n_atoms]

    def subunit_masses(self) -> Optional[np.ndarray]:
        """Masses of subunit A, used as the weights of both subunits."""
        if self.masses is None:
            return None
        return self.masses[:self.n_subunit]
