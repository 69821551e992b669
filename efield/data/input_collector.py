"""
Interactive collection of charges, plot range and output path.

Reads one value per prompt from a line-oriented text stream. Any malformed
line stops collection immediately with an error naming the offending value.
"""

import sys
import math
import logging
from dataclasses import dataclass
from typing import List, Optional, TextIO

from ..errors import InputFormatError, StreamReadError
from ..physics.charges import Charge
from .grid_sampler import PlotBounds


logger = logging.getLogger(__name__)

PROMPT_CHARGE_COUNT = "Enter the number of charges:"
PROMPT_CHARGE = "Enter the position (x y) and charge value for charge {index}, separated by spaces: "
PROMPT_MAX_VALUE = "Enter the maximum value for the plot: "
PROMPT_FILENAME = "Enter the filename for the final plot (e.g., my_plot.png): "


@dataclass(frozen=True)
class RunConfiguration:
    """Everything gathered from the user for a single run."""
    charges: List[Charge]
    bounds: PlotBounds
    output_path: str


def parse_float(token: str, name: str) -> float:
    """Parse a finite float, raising InputFormatError with ``name`` on failure."""
    if '_' in token:
        raise InputFormatError(f"invalid {name}: {token!r} is not a number")
    try:
        value = float(token)
    except ValueError:
        raise InputFormatError(f"invalid {name}: {token!r} is not a number")
    if not math.isfinite(value):
        raise InputFormatError(f"invalid {name}: {token!r} is not a finite number")
    return value


def parse_charge(line: str) -> Charge:
    """
    Parse a ``x y q`` line into a charge.

    Args:
        line: Three whitespace-separated numbers

    Returns:
        Parsed charge

    Raises:
        InputFormatError: Wrong token count or a non-numeric token
    """
    parts = line.split()
    if len(parts) != 3:
        raise InputFormatError(
            f"invalid input format: expected 3 values (x y charge), got {len(parts)}")
    x = parse_float(parts[0], "position x")
    y = parse_float(parts[1], "position y")
    magnitude = parse_float(parts[2], "charge value")
    return Charge(x, y, magnitude)


class InputCollector:
    """
    Prompt-driven reader for a run configuration.

    Args:
        input_stream: Stream the answers are read from (stdin by default)
        output_stream: Stream the prompts are written to (stdout by default)
        min_value: Lower bound applied to both plot axes
    """

    def __init__(self,
                 input_stream: Optional[TextIO] = None,
                 output_stream: Optional[TextIO] = None,
                 min_value: float = 0.0):
        self.input_stream = input_stream if input_stream is not None else sys.stdin
        self.output_stream = output_stream if output_stream is not None else sys.stdout
        self.min_value = min_value

    def _prompt(self, text: str) -> str:
        """Write a prompt and read the answer line, stripped."""
        self.output_stream.write(text)
        self.output_stream.flush()
        try:
            line = self.input_stream.readline()
        except (OSError, UnicodeDecodeError) as e:
            raise StreamReadError(f"error reading input: {e}") from e
        if line == '':
            raise StreamReadError("error reading input: unexpected end of input")
        return line.strip()

    def read_charge_count(self) -> int:
        answer = self._prompt(PROMPT_CHARGE_COUNT)
        if '_' in answer:
            raise InputFormatError(f"invalid number of charges: {answer!r}")
        try:
            count = int(answer)
        except ValueError:
            raise InputFormatError(f"invalid number of charges: {answer!r}")
        if count < 0:
            raise InputFormatError(f"invalid number of charges: {count} is negative")
        return count

    def read_charges(self, count: int) -> List[Charge]:
        charges = []
        for i in range(count):
            line = self._prompt(PROMPT_CHARGE.format(index=i + 1))
            try:
                charges.append(parse_charge(line))
            except InputFormatError as e:
                raise InputFormatError(f"charge {i + 1}: {e}") from e
        return charges

    def read_bounds(self) -> PlotBounds:
        answer = self._prompt(PROMPT_MAX_VALUE)
        max_value = parse_float(answer, "maximum value")
        return PlotBounds(self.min_value, max_value)

    def read_output_path(self) -> str:
        filename = self._prompt(PROMPT_FILENAME)
        if not filename:
            raise InputFormatError("invalid filename: empty")
        return filename

    def collect(self) -> RunConfiguration:
        """
        Run the full prompt sequence.

        Returns:
            Charges, plot bounds and output path

        Raises:
            InputFormatError: A value could not be parsed
            StreamReadError: The stream failed or ended early
            InvalidConfiguration: The maximum does not exceed the minimum
        """
        count = self.read_charge_count()
        charges = self.read_charges(count)
        bounds = self.read_bounds()
        output_path = self.read_output_path()

        logger.debug(f"Collected {len(charges)} charges, bounds [{bounds.min}, {bounds.max}], "
                     f"output {output_path}")
        return RunConfiguration(charges=charges, bounds=bounds, output_path=output_path)
