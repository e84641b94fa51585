"""
Plots of the per-frame radial force and torque series.
"""
import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path
from typing import Optional, Tuple, Union
import logging

from ..utils.helpers import ensure_directory

logger = logging.getLogger(__name__)

DEFAULT_STYLE = {
    'figure.figsize': (10, 6),
    'font.size': 12,
    'axes.labelsize': 14,
    'axes.titlesize': 16,
    'axes.grid': True,
    'grid.alpha': 0.3,
    'grid.linestyle': '--',
    'axes.spines.top': False,
    'axes.spines.right': False,
}


def load_series(filepath: Union[str, Path]) -> Tuple[np.ndarray, np.ndarray]:
    """Read a ``radial_force torque`` series file; returns (radial_force, torque)."""
    data = np.loadtxt(filepath, comments='#', ndmin=2)
    if data.size == 0:
        return np.array([]), np.array([])
    if data.shape[1] < 2:
        raise ValueError(f"Series file {filepath} must have two columns, got {data.shape[1]}")
    return data[:, 0], data[:, 1]


class SeriesPlotter:
    def __init__(self, radial_force: np.ndarray, torque: np.ndarray, plot_type: str,
                 output_path: Union[str, Path], **kwargs):
        """
        Initialize SeriesPlotter with the per-frame series.

        Args:
            radial_force: Radial force of each frame
            torque: Torque of each frame
            plot_type: 'timeseries' (values and running mean per frame) or
                'histogram' (distribution of each quantity)
            output_path: Path to save the plot
            **kwargs: Additional plotting parameters (title, bins, dpi)
        """
        self.radial_force = np.asarray(radial_force, dtype=np.float64)
        self.torque = np.asarray(torque, dtype=np.float64)
        self.plot_type = plot_type
        self.output_path = Path(output_path)
        self.default_params = {
            'title': 'Mean force and torque',
            'bins': 50,
            'dpi': 300,
        }
        self.plot_params = {**self.default_params, **kwargs}

    @classmethod
    def from_file(cls, series_file: Union[str, Path], plot_type: str,
                  output_path: Union[str, Path], **kwargs) -> 'SeriesPlotter':
        radial, torq = load_series(series_file)
        return cls(radial, torq, plot_type, output_path, **kwargs)

    def _validate(self) -> None:
        if self.plot_type not in ('timeseries', 'histogram'):
            raise ValueError(f"Unknown plot type: {self.plot_type}")
        if self.radial_force.shape != self.torque.shape:
            raise ValueError("Radial force and torque series differ in length.")

    def generate_plot(self) -> Optional[Path]:
        self._validate()
        if self.radial_force.size == 0:
            logger.warning(f"Empty series; {self.output_path} not created.")
            return None

        fig = None
        with plt.rc_context(DEFAULT_STYLE):
            try:
                fig, axes = plt.subplots(2, 1, sharex=(self.plot_type == 'timeseries'))
                series = ((self.radial_force, 'Radial force'), (self.torque, 'Torque'))
                for ax, (values, label) in zip(axes, series):
                    if self.plot_type == 'timeseries':
                        self._plot_timeseries(ax, values, label)
                    else:
                        self._plot_histogram(ax, values, label)
                axes[0].set_title(self.plot_params['title'])
                fig.tight_layout()
                ensure_directory(self.output_path.parent)
                fig.savefig(self.output_path, dpi=self.plot_params['dpi'], bbox_inches='tight')
                logger.info(f"Plot saved to: {self.output_path}")
            finally:
                if fig is not None:
                    plt.close(fig)
        return self.output_path

    def _plot_timeseries(self, ax, values: np.ndarray, label: str) -> None:
        frames = np.arange(1, values.size + 1)
        ax.plot(frames, values, lw=0.5, alpha=0.5, label=label)
        ax.plot(frames, np.cumsum(values) / frames, lw=2, label='running mean')
        ax.set_xlabel('Frame')
        ax.set_ylabel(label)
        ax.legend(loc='best')

    def _plot_histogram(self, ax, values: np.ndarray, label: str) -> None:
        ax.hist(values, bins=self.plot_params['bins'], density=True, alpha=0.7)
        ax.axvline(values.mean(), color='k', ls='--', label=f"mean {values.mean():.4g}")
        ax.set_xlabel(label)
        ax.set_ylabel('Probability density')
        ax.legend(loc='best')
