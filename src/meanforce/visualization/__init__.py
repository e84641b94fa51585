"""
Visualization module for meanforce.

This module provides plots of the per-frame force and torque series.
"""

from .series_plotter import SeriesPlotter, load_series

__all__ = [
    'SeriesPlotter',
    'load_series',
]
