"""
Error taxonomy for the point-charge field plotter.

Every error is terminal for a run; the command-line entry point reports the
message and exits non-zero.
"""


class FieldPlotError(Exception):
    """Base class for all errors raised by the efield package."""


class InputFormatError(FieldPlotError, ValueError):
    """Input line has the wrong number of tokens or a token fails to parse."""


class StreamReadError(FieldPlotError, IOError):
    """The input stream failed or ended before all values were read."""


class InvalidConfiguration(FieldPlotError, ValueError):
    """Sampling interval, plot bounds or a configuration value is unusable."""


class RenderError(FieldPlotError, RuntimeError):
    """The rendering sink could not produce the output file."""


__all__ = [
    'FieldPlotError',
    'InputFormatError',
    'StreamReadError',
    'InvalidConfiguration',
    'RenderError'
]
