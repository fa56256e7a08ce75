"""
Command-line interface for sizegen.

Provides commands for:
- Drawing sizes from a histogram given as CSV
- Drawing counts from a Poisson rate, optionally at scale
- Inspecting a Poisson probability table
- Drawing from samplers defined in YAML
"""

import argparse
import logging
import random
import sys
from pathlib import Path

from .config import default_config_path, load_samplers
from .defaults import get_default_seed, get_default_separator
from .errors import SamplerConfigError
from .exporters.console_exporter import create_console_metric_exporter
from .exporters.file_exporter import FileMetricExporter
from .exporters.otlp_exporter import create_otlp_metric_exporter
from .generators.draw_generator import DrawGenerator, distribution_name
from .statistics.histogram import parse_weighted_sampler_from_csv
from .statistics.poisson import build_poisson_sampler, build_poisson_table

logger = logging.getLogger(__name__)

# Draws per output line
_VALUES_PER_LINE = 20


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sizegen",
        description="Discrete size and count generators for load simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Object sizes: 70% up to 512B, 25% up to 4KiB, 5% up to 64KiB
  sizegen histogram --csv "512:70,4096:25,65536:5" --count 50

  # Events per second with a rate of 12 per second
  sizegen poisson --lambda 12 --count 10

  # Events over 2.5s when the rate is given per second
  sizegen poisson --lambda 12 --scale 2500 1000

  # Show the probability table
  sizegen table --lambda 12

  # Draw from samplers in resource/config/samplers.yaml, recording metrics
  sizegen --output-file draws.jsonl config --count 100
        """,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--output-file",
        type=str,
        default=None,
        help="Record draw metrics to this JSONL file",
    )
    parser.add_argument(
        "--endpoint",
        type=str,
        default=None,
        help="Record draw metrics to this OTLP HTTP endpoint (e.g. http://localhost:4318)",
    )
    parser.add_argument(
        "--console-metrics",
        action="store_true",
        help="Print draw metrics to stdout",
    )
    parser.add_argument(
        "--service-name",
        type=str,
        default="sizegen",
        help="Service name for recorded metrics (default: sizegen)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    hist_parser = subparsers.add_parser("histogram", help="Draw sizes from a CSV histogram")
    hist_parser.add_argument(
        "--csv",
        type=str,
        required=True,
        help='Comma-separated SIZE:WEIGHT bars, e.g. "512:70,4096:30"',
    )
    hist_parser.add_argument(
        "--separator",
        type=str,
        default=None,
        help="Separator between size and weight (default: SIZEGEN_CSV_SEPARATOR or ':')",
    )
    _add_draw_arguments(hist_parser)

    poisson_parser = subparsers.add_parser("poisson", help="Draw counts from a Poisson rate")
    poisson_parser.add_argument(
        "--lambda",
        dest="lambda_",
        type=int,
        required=True,
        help="Integer rate (mean count per slice)",
    )
    poisson_parser.add_argument(
        "--scale",
        type=int,
        nargs=2,
        metavar=("TOTAL", "SLICE"),
        default=None,
        help="Aggregate draws over TOTAL units with the rate given per SLICE units",
    )
    _add_draw_arguments(poisson_parser)

    table_parser = subparsers.add_parser("table", help="Print a Poisson probability table")
    table_parser.add_argument(
        "--lambda",
        dest="lambda_",
        type=int,
        required=True,
        help="Integer rate",
    )

    config_parser = subparsers.add_parser("config", help="Draw from samplers defined in YAML")
    config_parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Sampler file (default: SIZEGEN_CONFIG or resource/config/samplers.yaml)",
    )
    config_parser.add_argument(
        "--name",
        type=str,
        default=None,
        help="Only draw from this sampler",
    )
    _add_draw_arguments(config_parser)

    return parser


def _add_draw_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--count",
        type=int,
        default=10,
        help="Number of draws (default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed (default: SIZEGEN_SEED, else random)",
    )


def _make_rng(args: argparse.Namespace) -> random.Random:
    seed = args.seed if args.seed is not None else get_default_seed()
    return random.Random(seed)


def _make_generator(args: argparse.Namespace) -> DrawGenerator:
    if args.output_file:
        exporter = FileMetricExporter(args.output_file)
    elif args.endpoint:
        exporter = create_otlp_metric_exporter(args.endpoint)
    elif args.console_metrics:
        exporter = create_console_metric_exporter()
    else:
        return DrawGenerator()
    logger.debug("recording draw metrics with %s", type(exporter).__name__)
    return DrawGenerator(exporter, service_name=args.service_name)


def _print_values(values: list[int]) -> None:
    for i in range(0, len(values), _VALUES_PER_LINE):
        print(" ".join(str(v) for v in values[i : i + _VALUES_PER_LINE]))


def cmd_histogram(args: argparse.Namespace):
    """Draw sizes from a CSV histogram."""
    separator = args.separator or get_default_separator()
    sampler = parse_weighted_sampler_from_csv(args.csv, separator)
    generator = _make_generator(args)
    try:
        values = generator.generate("cli.histogram", sampler, _make_rng(args), args.count)
    finally:
        generator.shutdown()
    _print_values(values)


def cmd_poisson(args: argparse.Namespace):
    """Draw counts from a Poisson rate."""
    sampler = build_poisson_sampler(args.lambda_)
    rng = _make_rng(args)
    generator = _make_generator(args)
    try:
        if args.scale:
            total, slice_ = args.scale
            if slice_ <= 0 or total < 0:
                raise SamplerConfigError("--scale needs TOTAL >= 0 and SLICE > 0")
            values = generator.generate_at_scale(
                "cli.poisson", sampler, rng, args.count, total, slice_
            )
        else:
            values = generator.generate("cli.poisson", sampler, rng, args.count)
    finally:
        generator.shutdown()
    _print_values(values)


def cmd_table(args: argparse.Namespace):
    """Print the Poisson probability table."""
    table = build_poisson_table(args.lambda_)
    print(f"lambda={table.lambda_} slots={len(table.slots)} start={table.start}")
    print(f"{'k':>6}  {'probability':>14}  {'cumulative':>14}")
    for slot in table.slots:
        print(f"{slot.k:>6}  {slot.probability:>14.8g}  {slot.cumulative:>14.8f}")


def cmd_config(args: argparse.Namespace):
    """Draw from samplers defined in YAML."""
    path = Path(args.config) if args.config else default_config_path()
    samplers = load_samplers(path)
    if not samplers:
        print("No samplers found.")
        print(f"Looking in: {path}")
        return
    if args.name:
        if args.name not in samplers:
            print(f"Sampler not found: {args.name}")
            print(f"   Available samplers: {', '.join(sorted(samplers))}")
            sys.exit(1)
        samplers = {args.name: samplers[args.name]}

    rng = _make_rng(args)
    generator = _make_generator(args)
    try:
        for name, sampler in samplers.items():
            values = generator.generate(name, sampler, rng, args.count)
            print(f"{name} ({distribution_name(sampler)}):")
            _print_values(values)
    finally:
        generator.shutdown()


_COMMANDS = {
    "histogram": cmd_histogram,
    "poisson": cmd_poisson,
    "table": cmd_table,
    "config": cmd_config,
}


def main(argv: list[str] | None = None):
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    command = _COMMANDS.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    try:
        command(args)
    except KeyboardInterrupt:
        print("\nGeneration interrupted")
        sys.exit(0)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
