"""
Streaming reader for force trajectory text files.

A frame starts with a line beginning with ``timestep`` and is followed by one
line per atom. Fields 1-3 of an atom line hold its position and fields 4-6
its force. Positions are static within a file, so they are parsed from the
first frame only; later frames are scanned for forces alone.
"""
from dataclasses import dataclass
from enum import Enum
import numpy as np
from pathlib import Path
import logging
import time
from typing import Iterator, List, Optional, TextIO, Union

from ..core.atoms import AtomSet
from ..core.geometry import center_of_mass
from ..core.forces import frame_quantities
from ..core.moments import ForceStatistics
from ..errors import TrajectoryFormatError, TruncatedFrameError

logger = logging.getLogger(__name__)

FRAME_MARKER = 'timestep'


class StreamStatus(Enum):
    DONE = 'done'
    TRUNCATED = 'truncated'
    MISSING = 'missing'


@dataclass(frozen=True)
class StaticGeometry:
    positions: np.ndarray  # (n_atoms, 3), first frame of the file
    centers: np.ndarray    # (2, 3), subunit A and B


class ForceTrajectoryReader:
    """
    Two-phase reader over an open force trajectory.

    `initialize()` reads the first complete frame and captures the static
    geometry; `stream()` then yields the force array of every frame, starting
    with the first one.
    """

    def __init__(self, fh: TextIO, atoms: AtomSet, name: str = '<stream>'):
        self._fh = fh
        self.atoms = atoms
        self.name = name
        self.geometry: Optional[StaticGeometry] = None
        self.n_frames = 0
        self._pending: Optional[np.ndarray] = None

    def _readline(self) -> str:
        try:
            return self._fh.readline()
        except UnicodeDecodeError as e:
            raise TrajectoryFormatError(f"{self.name}: undecodable text after frame {self.n_frames}: {e}")

    def _next_frame_starts(self) -> bool:
        return self._readline().startswith(FRAME_MARKER)

    def _to_array(self, tokens: List[str]) -> np.ndarray:
        try:
            return np.array(tokens, dtype=np.float64).reshape(self.atoms.n_atoms, 3)
        except ValueError as e:
            raise TrajectoryFormatError(f"{self.name}: bad number in frame {self.n_frames}: {e}")

    def _read_atom_lines(self, with_positions: bool):
        n = self.atoms.n_atoms
        force_tok: List[str] = []
        pos_tok: List[str] = []
        for i in range(n):
            line = self._readline()
            if not line:
                raise TruncatedFrameError(
                    f"cannot read frame {self.n_frames} from {self.name}: "
                    f"input ended after {i} of {n} atom lines")
            tok = line.split()
            if len(tok) < 7:
                raise TrajectoryFormatError(
                    f"{self.name}: atom line {i} of frame {self.n_frames} has {len(tok)} fields, expected 7")
            force_tok.extend(tok[4:7])
            if with_positions:
                pos_tok.extend(tok[1:4])
        forces = self._to_array(force_tok)
        positions = self._to_array(pos_tok) if with_positions else None
        return positions, forces

    def initialize(self) -> Optional[StaticGeometry]:
        """
        Read the first frame and compute the subunit centers.

        Returns:
            The static geometry, or None if the input holds no frame

        Raises:
            TrajectoryFormatError: If the first frame is incomplete or malformed
        """
        if self.geometry is not None:
            return self.geometry
        if not self._next_frame_starts():
            return None
        positions, forces = self._read_atom_lines(with_positions=True)
        weights = self.atoms.subunit_masses()
        centers = np.vstack([
            center_of_mass(self.atoms.subunit_a(positions), weights),
            center_of_mass(self.atoms.subunit_b(positions), weights),
        ])
        self.geometry = StaticGeometry(positions=positions, centers=centers)
        self._pending = forces
        self.n_frames = 1
        return self.geometry

    def stream(self) -> Iterator[np.ndarray]:
        """Yield the forces of each complete frame."""
        if self.geometry is None:
            raise RuntimeError("initialize() must capture the geometry before streaming forces.")
        if self._pending is not None:
            forces, self._pending = self._pending, None
            yield forces
        while self._next_frame_starts():
            _, forces = self._read_atom_lines(with_positions=False)
            self.n_frames += 1
            yield forces


@dataclass
class StreamReport:
    filepath: Path
    status: StreamStatus
    frames_before: int
    frames_after: int
    elapsed: float
    geometry: Optional[StaticGeometry] = None
    message: Optional[str] = None

    @property
    def n_frames(self) -> int:
        return self.frames_after - self.frames_before


class ForceStreamProcessor:
    def __init__(self, atoms: AtomSet, series_writer=None):
        """
        Args:
            atoms: Atom set of the trajectories to process
            series_writer: Optional object with write(radial_force, torque),
                called once per frame
        """
        self.atoms = atoms
        self.series_writer = series_writer

    def process(self, filepath: Union[str, Path], statistics: ForceStatistics) -> StreamReport:
        """
        Stream one trajectory file into `statistics`.

        Truncated or malformed frames end the file; frames completed before
        them stay accumulated. An unreadable file is reported, not raised.
        """
        path = Path(filepath)
        start = time.perf_counter()
        n0 = statistics.count
        status, message, geometry = StreamStatus.DONE, None, None

        try:
            with open(path, 'r') as fh:
                reader = ForceTrajectoryReader(fh, self.atoms, name=str(path))
                try:
                    geometry = reader.initialize()
                    if geometry is None:
                        logger.warning(f"No frames found in {path}")
                    else:
                        for forces in reader.stream():
                            self._consume(geometry, forces, statistics)
                except TrajectoryFormatError as e:
                    status, message = StreamStatus.TRUNCATED, str(e)
                    logger.warning(f"Stopped reading {path}: {e}")
        except OSError as e:
            status, message = StreamStatus.MISSING, str(e)
            logger.error(f"cannot read {path}: {e}")

        elapsed = time.perf_counter() - start
        logger.info(f"loaded {path} in {elapsed:.3f} seconds, {n0} -> {statistics.count} frames")
        return StreamReport(filepath=path, status=status, frames_before=n0,
                            frames_after=statistics.count, elapsed=elapsed,
                            geometry=geometry, message=message)

    def _consume(self, geometry: StaticGeometry, forces: np.ndarray, statistics: ForceStatistics) -> None:
        radial, torq, symm = frame_quantities(geometry.positions, forces, geometry.centers)
        statistics.add(radial, torq, symm)
        if self.series_writer is not None:
            self.series_writer.write(radial, torq)
