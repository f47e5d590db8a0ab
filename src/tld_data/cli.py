"""
Command-line interface for the TLD data pipeline.

Fetches every source, merges them and writes the dataset as JSON to stdout
(or --output). Progress goes to stderr. Data from a previous run can be fed
back in (--stdin or --previous) to skip re-scraping registry agreements.
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional, TextIO

from dotenv import load_dotenv

from . import __version__
from .aggregator import TLDAggregator
from .config import PipelineConfig, apply_env_overrides, load_config_from_file
from .exceptions import TLDDataError
from .models import BrandOverride, TLDRecord
from .overrides import previous_from_records
from .run_logger import RunLogger, create_logger


def read_previous(stream: TextIO) -> Optional[dict[str, BrandOverride]]:
    """
    Read a previous run's output from a stream.

    Returns:
        Carry-forward data keyed by TLD, or None if the stream is empty
    """
    text = stream.read()
    if not text.strip():
        return None
    return previous_from_records(json.loads(text))


def dump_records(records: list[TLDRecord]) -> str:
    return json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False)


def build_config(args: argparse.Namespace) -> Optional[PipelineConfig]:
    """Load configuration from file/environment and apply command line overrides."""
    if args.config:
        config = load_config_from_file(Path(args.config))
        if config is None:
            return None
    else:
        config = PipelineConfig()

    apply_env_overrides(config)

    if args.concurrency is not None:
        config.concurrency = args.concurrency
    if args.log_level:
        config.logging.level = args.log_level
    if args.log_format:
        config.logging.output_format = args.log_format

    return config


async def run_pipeline(
    config: PipelineConfig,
    previous: Optional[dict[str, BrandOverride]],
    logger: RunLogger,
) -> list[TLDRecord]:
    aggregator = TLDAggregator(config, logger=logger)
    return await aggregator.run(previous)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="tld-data",
        description="Fetch TLD Data",
    )
    parser.add_argument(
        "-v", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-s", "--stdin",
        action="store_true",
        help="Read previously output data on STDIN to reuse some old data to "
             "reduce amount of web scraping requests needed.",
    )
    parser.add_argument(
        "--previous", "-p",
        help="Path to a previously output data file (same purpose as --stdin)",
    )
    parser.add_argument(
        "--output", "-o",
        help="Path to write the dataset to (default: stdout)",
    )
    parser.add_argument(
        "--config", "-c",
        help="Path to configuration file",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        help="Maximum concurrent registry agreement lookups",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warn", "error"],
        help="Minimum progress log level (default: info)",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json", "both"],
        help="Progress log format (default: text)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    load_dotenv()
    parser = create_parser()
    args = parser.parse_args(argv)

    config = build_config(args)
    if config is None:
        print(f"Error: Could not load config from {args.config}", file=sys.stderr)
        return 1

    logger = create_logger(config.logging.level, config.logging.output_format)

    try:
        previous = None
        if args.stdin:
            previous = read_previous(sys.stdin)
        elif args.previous:
            with open(args.previous, "r", encoding="utf-8") as f:
                previous = read_previous(f)
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.log_error("CLI", "Could not read previous data", e)
        return 1

    try:
        records = asyncio.run(run_pipeline(config, previous, logger))
    except TLDDataError as e:
        logger.log_error("CLI", f"Run failed: {e.message}", e)
        return 1

    output = dump_records(records)
    if args.output:
        Path(args.output).write_text(output + "\n", encoding="utf-8")
    else:
        sys.stdout.write(output)
        sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
