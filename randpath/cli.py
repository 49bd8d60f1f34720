"""Command-line interface for randpath."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import List, Optional

from randpath.config import GeneratorConfig, TrendConfig
from randpath.experiment import load_experiment_yaml
from randpath.logging import configure_cli_logging, get_logger
from randpath.monte_carlo import calculate_trend
from randpath.path import PathGenerator
from randpath.types.base import AllocationOrder, DistanceMetric, Method
from randpath.utils.output_paths import trend_csv_path

logger = get_logger(__name__)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _apply_generator_overrides(
    config: GeneratorConfig, args: argparse.Namespace
) -> GeneratorConfig:
    """Overwrite config fields with command-line values that were given."""
    if args.nodes is not None:
        config.node_count = args.nodes
    if args.length is not None:
        config.segment_length = args.length
    if args.margin is not None:
        config.margin_length = args.margin
    if args.method is not None:
        config.method = Method.from_string(args.method)
    if args.order is not None:
        config.order = AllocationOrder.from_string(args.order)
    if args.parity:
        config.parity = True
    if args.workers is not None:
        config.workers = args.workers
    if args.max_draws is not None:
        config.max_draw_attempts = args.max_draws
    config.validate()
    return config


def _generate_paths(args: argparse.Namespace) -> None:
    """Print ``args.count`` paths to stdout, one JSON array per line."""
    try:
        config = _apply_generator_overrides(GeneratorConfig(), args)
        generator = PathGenerator(config, seed=args.seed)
        logger.debug(
            f"Generating {args.count} path(s) of length {config.path_length}: "
            f"method={config.method.name.lower()} nodes={config.node_count} "
            f"length={config.segment_length} margin={config.margin_length}"
        )
        for _ in range(args.count):
            print(json.dumps(generator.generate()))
    except Exception as e:
        logger.error(f"Failed to generate path: {type(e).__name__}: {e}")
        print(f"ERROR: Failed to generate path: {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)


def _run_trend(args: argparse.Namespace) -> None:
    """Run an iteration sweep and write the distance-to-mean CSV."""
    _start_time = perf_counter()
    try:
        seed = args.seed
        if args.config is not None:
            logger.info(f"Loading experiment from: {args.config}")
            experiment = load_experiment_yaml(args.config.read_text())
            generator_config = experiment.generator
            trend_config = experiment.trend
            if seed is None:
                seed = experiment.seed
        else:
            generator_config = GeneratorConfig()
            trend_config = TrendConfig()

        generator_config = _apply_generator_overrides(generator_config, args)
        if args.max_iterations is not None:
            trend_config.max_iterations = args.max_iterations
        if args.delta is not None:
            trend_config.delta = args.delta
        if args.metric is not None:
            trend_config.metric = DistanceMetric.from_string(args.metric)
        if args.notes is not None:
            trend_config.notes = args.notes
        trend_config.validate()

        generator = PathGenerator(generator_config, seed=seed)
        result = calculate_trend(generator, trend_config)

        out_path = trend_csv_path(generator_config, trend_config, args.output)
        logger.info(f"Writing trend to: {out_path}")
        result.to_csv(out_path)
        print(f"Trend written to: {out_path}")
        logger.info(f"Trend summary: {json.dumps(result.summary())}")

        _elapsed = perf_counter() - _start_time
        logger.info(f"Trend run completed in {_format_duration(_elapsed)}")
    except FileNotFoundError:
        logger.error(f"Experiment file not found: {args.config}")
        print(f"ERROR: Experiment file not found: {args.config}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to run trend: {type(e).__name__}: {e}")
        print(f"ERROR: Failed to run trend: {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)


def _add_generator_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--nodes", "-n", type=int, default=None, help="Number of nodes")
    parser.add_argument(
        "--length", "-l", type=int, default=None, help="Segment length per node"
    )
    parser.add_argument(
        "--margin", "-m", type=int, default=None, help="Margin length per side"
    )
    parser.add_argument(
        "--method",
        choices=[m.name.lower() for m in Method],
        default=None,
        help="Path generation method",
    )
    parser.add_argument(
        "--order",
        choices=[o.name.lower() for o in AllocationOrder],
        default=None,
        help="Margin allocation order (constrained method)",
    )
    parser.add_argument(
        "--parity",
        action="store_true",
        help="Make margins parity consistent (unconstrained method)",
    )
    parser.add_argument(
        "--workers", "-w", type=int, default=None, help="Threads for segment work"
    )
    parser.add_argument(
        "--max-draws",
        type=int,
        default=None,
        help="Rejection-sampling budget per drawn value",
    )
    parser.add_argument(
        "--seed", "-s", type=int, default=None, help="Master seed for reproducibility"
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``randpath`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="randpath",
        description="Generate constrained random paths and measure their uniformity.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress informational logging"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{generate,trend}",
        help="Available commands",
    )

    generate_parser = subparsers.add_parser("generate", help="Print generated paths")
    _add_generator_arguments(generate_parser)
    generate_parser.add_argument(
        "--count", "-c", type=int, default=1, help="Number of paths to print"
    )

    trend_parser = subparsers.add_parser(
        "trend", help="Sweep iteration counts and write distance-to-mean CSV"
    )
    _add_generator_arguments(trend_parser)
    trend_parser.add_argument(
        "--config", type=Path, default=None, help="Experiment YAML file"
    )
    trend_parser.add_argument(
        "--max-iterations", type=int, default=None, help="Upper bound of the sweep"
    )
    trend_parser.add_argument(
        "--delta", type=int, default=None, help="Step between iteration counts"
    )
    trend_parser.add_argument(
        "--metric",
        choices=[m.name.lower() for m in DistanceMetric],
        default=None,
        help="Distance metric",
    )
    trend_parser.add_argument(
        "--notes", default=None, help="Text appended to the output file name"
    )
    trend_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output directory for the CSV (default: current directory)",
    )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if configure_cli_logging(verbose=args.verbose, quiet=args.quiet) == logging.DEBUG:
        logger.debug("Debug logging enabled")

    if args.command == "generate":
        _generate_paths(args)
    elif args.command == "trend":
        _run_trend(args)


if __name__ == "__main__":
    main()
