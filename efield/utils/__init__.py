"""
Utilities module for the point-charge field plotter.

This module provides the field colour mapping, the matplotlib renderer and
summary statistics of computed field maps.
"""

from .metrics import MetricResult, FieldStatistics, format_metrics

from .plotting import (
    REFERENCE_SCALE,
    PlotConfig,
    ScatterPrimitive,
    SegmentPrimitive,
    RenderResult,
    BasePlotter,
    ChargeFieldPlotter,
    field_line_color,
    charge_color
)

__all__ = [
    # Metrics
    'MetricResult',
    'FieldStatistics',
    'format_metrics',

    # Plotting
    'REFERENCE_SCALE',
    'PlotConfig',
    'ScatterPrimitive',
    'SegmentPrimitive',
    'RenderResult',
    'BasePlotter',
    'ChargeFieldPlotter',
    'field_line_color',
    'charge_color'
]
