"""
Data handling module for the point-charge field plotter.

This module provides observation grid sampling and the interactive
collection of charges, plot bounds and output path.
"""

from .grid_sampler import PlotBounds, GridSampler, generate

from .input_collector import (
    InputCollector,
    RunConfiguration,
    parse_charge,
    parse_float
)

__all__ = [
    'PlotBounds',
    'GridSampler',
    'generate',
    'InputCollector',
    'RunConfiguration',
    'parse_charge',
    'parse_float'
]
