"""Command-line driver: load the stocks file, advance every stock, save it."""

import argparse
import logging
import sys

from .collection import spawn_rngs
from .config import DEFAULT_PARAMS
from .exceptions import StonksError
from .storage import StocksFile

logger = logging.getLogger(__name__)

DESCRIPTION = (
    "Generates fake \"stock\" data. Every invocation advances each stock in "
    "the stocks file by one period (or --steps periods) and saves the result."
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='stonks', description=DESCRIPTION)
    parser.add_argument(
        'path', nargs='?', default=DEFAULT_PARAMS['stocks_file'],
        help="Path to the stocks file, or to the folder holding it "
             f"(uses '{DEFAULT_PARAMS['stocks_filename']}'). The file is "
             "created with default stocks if it does not exist.")
    parser.add_argument(
        '-n', '--steps', type=int, default=DEFAULT_PARAMS['advance_steps'],
        help="Number of periods to advance each stock (default: %(default)s)")
    parser.add_argument(
        '--seed', type=int, default=None,
        help="Seed the random sources for a reproducible run")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        '-q', '--quiet', action='store_true',
        help="Suppress all regular, non-error output")
    verbosity.add_argument(
        '-v', '--verbose', action='store_true',
        help="Print debug information")
    return parser


def configure_logging(quiet: bool = False, verbose: bool = False):
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format=DEFAULT_PARAMS['log_format'])


def run(path, steps: int = 1, seed: int | None = None) -> list:
    """Advance every stock in the file ``steps`` times and write them back.

    Returns the advanced stocks.
    """
    stocks_file = StocksFile(path)
    stocks = stocks_file.read_stocks()
    if seed is not None:
        for stock, rng in zip(stocks, spawn_rngs(seed, len(stocks))):
            stock.rng = rng

    for stock in stocks:
        states = stock.advance_many(steps)
        bankruptcies = sum(s.bankrupt for s in states)
        logger.debug("%s advanced %d times to %.2f (%d bankrupt periods)",
                     stock.name, steps, stock.get_price(), bankruptcies)

    stocks_file.write_stocks(stocks)
    return stocks


def format_prices(stocks) -> str:
    width = max((len(s.name) for s in stocks), default=0)
    lines = []
    for stock in stocks:
        status = "  BANKRUPT" if stock.is_bankrupt() else ""
        lines.append(f"  {stock.name:<{width}}  {stock.get_price():>10.2f}{status}")
    return "\n".join(lines)


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.steps < 1:
        parser.error("--steps must be at least 1")

    configure_logging(quiet=args.quiet, verbose=args.verbose)

    try:
        stocks = run(args.path, steps=args.steps, seed=args.seed)
    except StonksError as e:
        logger.error("%s", e)
        return 1

    if not args.quiet:
        noun = "iteration" if args.steps == 1 else "iterations"
        print(f"Successfully advanced all stocks by {args.steps} {noun}.")
        print(format_prices(stocks))
    return 0


if __name__ == '__main__':
    sys.exit(main())
