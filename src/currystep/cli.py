"""Command line driver: reduce a term and print every step.

```
$ currystep "(#x -> x) y"
eval: (#x -> x) y
eval: y
y
```
"""

import logging
import sys
from argparse import ArgumentParser
from itertools import islice
from pathlib import Path
from typing import Optional, Sequence

import polars as pl

from . import config
from .core import reduction_chain, step
from .dataframe import chain_to_frame
from .display import to_svg
from .errors import ParseError
from .parser import parse
from .printer import render

logger = logging.getLogger(__name__)

EXIT_PARSE_ERROR = 1
EXIT_NO_NORMAL_FORM = 2


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="currystep", description="Normal order evaluator for the untyped lambda calculus"
    )
    parser.add_argument("term", help="term to reduce, like '(#x -> x) y'. Use - to read standard input")
    parser.add_argument(
        "--max-steps",
        "-n",
        type=int,
        default=None,
        help="stop after this many reductions, 0 for no limit (default: $CURRYSTEP_MAX_STEPS or 10000)",
    )
    parser.add_argument("--plain", action="store_true", help="do not show the original names of renamed variables")
    parser.add_argument("--quiet", "-q", action="store_true", help="only print the normal form")
    parser.add_argument("--table", action="store_true", help="print the reduction as a table")
    parser.add_argument("--svg", type=Path, default=None, help="write a diagram of the result to this file")
    parser.add_argument("--verbose", "-v", action="count", default=0, help="more logging, can be repeated")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        max_steps = config.get_max_steps() if args.max_steps is None else args.max_steps
        origins = config.get_origins() and not args.plain
        level = config.get_log_level()
    except ValueError as e:
        parser.error(str(e))
    if max_steps < 0:
        parser.error("--max-steps must not be negative")

    logging.basicConfig(
        level=max(logging.DEBUG, level - 10 * args.verbose),
        format="%(levelname)s %(name)s: %(message)s",
    )

    text = sys.stdin.read() if args.term == "-" else args.term
    try:
        term = parse(text)
    except ParseError as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_PARSE_ERROR

    chain = reduction_chain(term)
    if max_steps:
        chain = islice(chain, max_steps + 1)

    terms = []
    for t in chain:
        if not args.quiet and not args.table:
            print(f"eval: {render(t, origins)}", flush=True)
        terms.append(t)

    if args.table:
        with pl.Config(tbl_rows=-1, fmt_str_lengths=1000):
            print(chain_to_frame(terms, origins))

    result = terms[-1]
    if args.svg is not None:
        args.svg.write_text(to_svg(result).as_str())
        logger.info("diagram written to %s", args.svg)

    print(render(result, origins))
    if step(result) is not None:
        print(f"no normal form after {max_steps} steps", file=sys.stderr)
        return EXIT_NO_NORMAL_FORM
    return 0
