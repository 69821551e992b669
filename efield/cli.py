"""
Command-line entry point for point-charge field plots.

Prompts for charges, the plot maximum and an output filename, samples the
observation grid, computes the net field at every sample and writes the
rendered plot.
"""

import sys
import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from .config import ConfigManager, resolve_device
from .errors import FieldPlotError, InvalidConfiguration
from .data.grid_sampler import GridSampler
from .data.input_collector import InputCollector, RunConfiguration
from .physics.charges import ObservationPoint
from .physics.coulomb import CoulombField
from .utils.metrics import FieldStatistics, format_metrics
from .utils.plotting import ChargeFieldPlotter, PlotConfig, RenderResult


@dataclass
class RunResult:
    """Observation grid and render outcome of one run."""
    points: List[ObservationPoint]
    render: RenderResult


class FieldPlotRunner:
    """Wires input collection, grid sampling, field computation and rendering."""

    def __init__(self, config_path: Optional[str] = None):
        """Initialize runner with configuration."""
        self.config_manager = ConfigManager()
        self.config_manager.load_full_config(config_path)
        self.config = self.config_manager.config
        self.logger = logging.getLogger(__name__)

    def setup_logging(self):
        """Setup logging infrastructure."""
        handlers = [logging.StreamHandler()]
        log_file = self.config['logging'].get('log_file')
        if log_file:
            try:
                Path(log_file).parent.mkdir(parents=True, exist_ok=True)
                handlers.append(logging.FileHandler(log_file))
            except OSError as e:
                raise InvalidConfiguration(f"Cannot open log file {log_file}: {e}") from e

        logging.basicConfig(
            level=getattr(logging, self.config['logging']['level']),
            format=self.config['logging'].get('format', '%(asctime)s - %(levelname)s - %(message)s'),
            handlers=handlers
        )

    def build_sampler(self, run_config: RunConfiguration) -> GridSampler:
        return GridSampler(run_config.bounds, self.config['grid']['interval'])

    def build_plotter(self) -> ChargeFieldPlotter:
        field_calculator = CoulombField(
            coulomb_constant=self.config['physics']['coulomb_constant'],
            device=self.config['device']
        )
        return ChargeFieldPlotter(PlotConfig.from_config(self.config['rendering']), field_calculator)

    def collect(self, input_stream: Optional[TextIO] = None,
                output_stream: Optional[TextIO] = None) -> RunConfiguration:
        collector = InputCollector(input_stream, output_stream,
                                   min_value=self.config['plot']['min_value'])
        return collector.collect()

    def run(self, run_config: RunConfiguration) -> RunResult:
        """
        Sample the grid, compute the field and render it.

        Args:
            run_config: Charges, bounds and output path

        Returns:
            Observation points and render outcome
        """
        self.logger.info(f"Plotting field of {len(run_config.charges)} charges over "
                         f"[{run_config.bounds.min}, {run_config.bounds.max}]")

        sampler = self.build_sampler(run_config)
        points = sampler.generate(run_config.charges)
        self.logger.info(f"Generated {len(points)} observation points "
                         f"(interval {sampler.interval})")

        plotter = self.build_plotter()
        render = plotter.render(run_config.charges, points, run_config.bounds, run_config.output_path)

        for line in format_metrics(FieldStatistics().compute(render.field_map)):
            self.logger.info(line)

        return RunResult(points=points, render=render)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Plot the electric field of point charges')
    parser.add_argument('--config', type=str, help='Path to custom config file')
    parser.add_argument('--interval', type=float, help='Spacing between observation points')
    parser.add_argument('--device', type=str, help='Device to use (cpu/cuda/auto)')
    parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    parser.add_argument('--show-config', nargs='?', const='', metavar='SECTION',
                        help='Print the effective configuration (or one section) and exit')
    return parser


def main(argv: Optional[Sequence[str]] = None,
         input_stream: Optional[TextIO] = None,
         output_stream: Optional[TextIO] = None) -> int:
    """Main plotting function; returns the process exit status."""
    args = build_parser().parse_args(argv)
    logger = logging.getLogger(__name__)

    try:
        runner = FieldPlotRunner(config_path=args.config)

        if args.interval is not None:
            runner.config['grid']['interval'] = args.interval
        if args.device:
            runner.config['device'] = resolve_device(args.device)
        if args.debug:
            runner.config['logging']['level'] = 'DEBUG'

        if args.show_config is not None:
            runner.config_manager.print_config(args.show_config or None, file=output_stream)
            return 0

        runner.setup_logging()
        run_config = runner.collect(input_stream, output_stream)
        runner.run(run_config)
    except FieldPlotError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    logger.info("Plot completed successfully")
    return 0


if __name__ == '__main__':
    sys.exit(main())
