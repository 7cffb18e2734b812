#!/usr/bin/env python3
"""
Read RR intervals (one decimal per line) from a file and print RMSSD computed
at each float width: float, double, long double, then the same widths with
every sample rounded to 3 decimal places.
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from src.core.domain.width import DEFAULT_WIDTH_ORDER, FloatWidth
from src.core.errors import DataFileError
from src.ingest.interval_file import read_interval_tokens
from src.rmssd.config import (
    LOG_LEVEL_DEFAULT,
    OUTPUT_PRECISION_DEFAULT,
    ROUND_PLACES_DEFAULT,
    RMSSDConfig,
)
from src.rmssd.pipeline import run_plan
from src.rmssd.report import format_error, format_json, format_text

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_RUN_FAILED = 1
EXIT_USAGE = 2


def _widths(value: str) -> list[FloatWidth]:
    try:
        return [FloatWidth.parse(name) for name in value.split(",") if name.strip()]
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def _non_negative_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if n < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rmssd-widths",
        description="Compute RMSSD of RR intervals at float, double and long double precision",
    )
    parser.add_argument("data_file", help="Text file with one RR interval per line")
    parser.add_argument(
        "--widths",
        type=_widths,
        default=list(DEFAULT_WIDTH_ORDER),
        metavar="LIST",
        help="Comma-separated widths in run order: narrow,standard,extended (default all)",
    )
    parser.add_argument(
        "--round-places",
        type=_non_negative_int,
        default=ROUND_PLACES_DEFAULT,
        metavar="N",
        help=f"Decimal places for the rounded runs (default {ROUND_PLACES_DEFAULT})",
    )
    parser.add_argument("--no-rounded", action="store_true", help="Skip the rounded runs")
    parser.add_argument(
        "--precision",
        type=_non_negative_int,
        default=OUTPUT_PRECISION_DEFAULT,
        metavar="N",
        help=f"Digits after the decimal point in text output (default {OUTPUT_PRECISION_DEFAULT})",
    )
    parser.add_argument("--json", action="store_true", help="Emit one JSON line per run")
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL_DEFAULT,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level for stderr (default {LOG_LEVEL_DEFAULT})",
    )
    return parser


def _run(data_file: str, config: RMSSDConfig) -> int:
    try:
        tokens = read_interval_tokens(data_file)
    except DataFileError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_USAGE

    # Прогоны строго последовательно: порядок вывода — часть контракта
    outcomes = run_plan(tokens, config)

    status = EXIT_OK
    for outcome in outcomes:
        if config.json_output:
            print(format_json(outcome, config.output_precision), flush=True)
        elif outcome.ok:
            print(format_text(outcome, config.output_precision), flush=True)
        else:
            print(format_error(outcome), file=sys.stderr, flush=True)

        if not outcome.ok:
            status = EXIT_RUN_FAILED

    return status


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )

    try:
        config = RMSSDConfig.from_args(args)
    except ValueError as e:
        parser.error(str(e))

    logger.debug("config %s", config)
    return _run(args.data_file, config)


if __name__ == "__main__":
    sys.exit(main())
