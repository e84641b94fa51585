"""
Output writers for meanforce.

This module writes the per-frame force/torque series and the final
statistics of a run.
"""
from pathlib import Path
import logging
from typing import Optional, Union, Dict, Any, TextIO
import json
import yaml

from ..utils.helpers import ensure_directory

logger = logging.getLogger(__name__)


class ForceSeriesWriter:
    """Writes one ``radial_force torque`` line per frame (the corr.dat series)."""

    def __init__(self, filepath: Union[str, Path]):
        self.filepath = Path(filepath)
        self._fh: Optional[TextIO] = None
        self.n_written = 0

    def open(self) -> 'ForceSeriesWriter':
        ensure_directory(self.filepath.parent)
        self._fh = open(self.filepath, 'w')
        self._fh.write("# radial_force torque\n")
        logger.info(f"Writing force/torque series to {self.filepath}")
        return self

    def write(self, radial_force: float, torque: float) -> None:
        if self._fh is None:
            raise RuntimeError(f"Series file {self.filepath} is not open.")
        self._fh.write(f"{radial_force:.10g} {torque:.10g}\n")
        self.n_written += 1

    def close(self) -> None:
        if self._fh is not None:
            self._fh.close()
            self._fh = None
            logger.debug(f"Wrote {self.n_written} frames to {self.filepath}")

    def __enter__(self) -> 'ForceSeriesWriter':
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class ResultsWriter:
    """Class for writing run configuration and statistics."""

    def __init__(self, output_dir: Union[str, Path]):
        """
        Initialize the results writer.

        Args:
            output_dir: Directory to write output files to
        """
        self.output_dir = ensure_directory(output_dir)

    def save_config(self, config: Dict[str, Any], filename: Optional[str] = None) -> Path:
        """
        Save configuration data to a YAML file.

        Args:
            config: Configuration dictionary to save
            filename: Optional custom filename (default: 'config.yaml')
        """
        if filename is None:
            filename = 'config.yaml'
        filepath = self.output_dir / filename

        logger.info(f"Saving configuration to {filepath}")
        with open(filepath, 'w') as f:
            yaml.dump(config, f, default_flow_style=False)
        return filepath

    def save_summary(self, results: Dict[str, Any], filename: Optional[str] = None) -> Path:
        """
        Save run statistics to a JSON file.

        Args:
            results: Summary dictionary to save
            filename: Optional custom filename (default: 'meanforce_results.json')
        """
        if filename is None:
            filename = 'meanforce_results.json'
        filepath = self.output_dir / filename

        logger.info(f"Saving results to {filepath}")
        with open(filepath, 'w') as f:
            json.dump(results, f, indent=4, allow_nan=False)
        return filepath
