"""
Mean force and torque over a batch of force trajectory files.
"""
from dataclasses import dataclass, field
import numpy as np
from pathlib import Path
import logging
from typing import List, Optional, Sequence, Union, Dict, Any
from tqdm import tqdm

from .core.atoms import AtomSet
from .core.alignment import AlignmentResult, compute_alignment
from .core.circular import NEGATIVE_ANGLE_THRESHOLD
from .core.moments import ForceStatistics
from .io.force_reader import ForceStreamProcessor, StreamReport
from .io.discovery import find_block_files, DEFAULT_TAIL
from .errors import DegenerateWeightError

logger = logging.getLogger(__name__)


def resolve_inputs(files: Optional[Sequence[Union[str, Path]]] = None,
                   directory: Optional[Union[str, Path]] = None,
                   scan: bool = False, tail: str = DEFAULT_TAIL) -> List[Path]:
    """
    Build the list of trajectory files to process.

    Args:
        files: Explicit files (a single file is a one-element list)
        directory: Directory to scan for block files; '.' if omitted
        scan: Scan `directory` instead of using `files`
        tail: File name suffix of block files

    Returns:
        Ordered list of paths
    """
    if scan:
        logger.info(f"scanning directory [{directory or '.'}]")
        return find_block_files(directory or '.', tail)
    if not files:
        raise ValueError("No input files given and directory scan not requested.")
    return [Path(f) for f in files]


def _none_if_nan(value):
    if isinstance(value, float) and np.isnan(value):
        return None
    return value


@dataclass
class SessionResult:
    statistics: ForceStatistics
    reports: List[StreamReport] = field(default_factory=list)
    alignment: Optional[AlignmentResult] = None
    pooled: bool = True

    @property
    def n_frames(self) -> int:
        return sum(r.n_frames for r in self.reports)

    def summary(self) -> Dict[str, Any]:
        return {
            'pooled': self.pooled,
            'n_frames': self.n_frames,
            'statistics': {
                name: {key: _none_if_nan(value) for key, value in stats.items()}
                for name, stats in self.statistics.summary().items()
            },
            'alignment': self.alignment.to_dict() if self.alignment is not None else None,
            'files': [
                {'file': str(r.filepath), 'status': r.status.value, 'frames': r.n_frames,
                 'elapsed': r.elapsed, 'message': r.message}
                for r in self.reports
            ],
        }


def format_report_line(alignment: Optional[AlignmentResult], statistics: ForceStatistics) -> str:
    """One line with the geometry and the mean, std and count of each quantity."""
    if alignment is not None:
        dis, ang, rmsd = alignment.separation, alignment.angle, alignment.rmsd
    else:
        dis = ang = rmsd = float('nan')
    parts = [f"dis {dis:g}, ang {ang:g}/{np.degrees(ang):g}, rmsd {rmsd:g}"]
    for label, acc in (('f', statistics.radial_force), ('torq', statistics.torque),
                       ('symmtorq', statistics.symmetric_torque)):
        mean, std, count = acc.summary()
        parts.append(f"{label} {mean:g} {std:g} {count}")
    return " | ".join(parts)


class MeanForceSession:
    def __init__(self, atoms: AtomSet, pooled: bool = True, series_writer=None,
                 negative_angle_threshold: float = NEGATIVE_ANGLE_THRESHOLD,
                 show_progress: bool = True):
        """
        Args:
            atoms: Atom set shared by all files
            pooled: Carry statistics across files (cumulative) instead of
                resetting them at the start of each file
            series_writer: Optional per-frame (radial force, torque) sink
            negative_angle_threshold: Passed to the alignment step
            show_progress: Show a tqdm progress bar over the files
        """
        self.atoms = atoms
        self.pooled = pooled
        self.negative_angle_threshold = negative_angle_threshold
        self.show_progress = show_progress
        self.processor = ForceStreamProcessor(atoms, series_writer=series_writer)

    def run(self, filepaths: Sequence[Union[str, Path]]) -> SessionResult:
        """
        Process every file in order and report statistics after each one.

        The alignment of the two subunits is computed once, from the first
        file that yields a complete frame. Errors in one file never stop the
        batch.
        """
        result = SessionResult(statistics=ForceStatistics(), pooled=self.pooled)
        if not filepaths:
            logger.warning("No trajectory files to process.")
            return result

        aligned = False
        for fn in tqdm(filepaths, desc="Processing force files", unit="file",
                       disable=not self.show_progress):
            if not self.pooled:
                result.statistics.reset()
            report = self.processor.process(fn, result.statistics)
            result.reports.append(report)

            if not aligned and report.geometry is not None:
                aligned = True
                try:
                    result.alignment = compute_alignment(report.geometry.positions, self.atoms,
                                                         self.negative_angle_threshold)
                    self._log_alignment(result.alignment)
                except DegenerateWeightError as e:
                    logger.error(f"Cannot align the two subunits of {report.filepath}: {e}")

            print(format_report_line(result.alignment, result.statistics))

        if result.statistics.count == 0:
            logger.error("No complete frame was read; statistics are undefined.")
        return result

    @staticmethod
    def _log_alignment(alignment: AlignmentResult) -> None:
        rot, trans = alignment.rotation, alignment.translation
        logger.info(f"rmsd {alignment.rmsd:g}")
        logger.info(f"trans : {trans[0]:10.5f} {trans[1]:10.5f} {trans[2]:10.5f}")
        logger.debug("rot   :\n" + "\n".join(
            f"        {r[0]:10.5f} {r[1]:10.5f} {r[2]:10.5f}" for r in rot))
