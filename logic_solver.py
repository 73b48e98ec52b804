# Copyright (C) 2022 Matthew Marting
# SPDX-License-Identifier: GPL-3.0-or-later

import argparse
import logging
import os
import sys

from errors import LogicError, handle
from interpreter import evaluate
from parser import parse
from tree import write_graph

__all__ = ["LOG_LEVEL_VARIABLE", "build_argument_parser", "configure_logging", "read_source", "main"]

LOG_LEVEL_VARIABLE = "LOGIC_SOLVER_LOG"

logger = logging.getLogger(__name__)


def build_argument_parser():
    parser = argparse.ArgumentParser(
        prog="logic-solver",
        description="Evaluate a propositional logic statement.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("source", nargs="?", help="file holding the statement, `-' for standard input")
    source.add_argument("-e", "--expression", help="statement given on the command line")
    parser.add_argument("-g", "--graph", metavar="PATH", help="write the expression tree to PATH as a Graphviz graph")
    parser.add_argument("--render", metavar="FORMAT", help="also render the graph, e.g. `png' (needs Graphviz)")
    parser.add_argument("-v", "--verbose", action="store_true", help="log parser tracing")
    return parser


def configure_logging(verbose, environ=None):
    if environ is None:
        environ = os.environ
    if verbose:
        level = logging.DEBUG
    else:
        level = environ.get(LOG_LEVEL_VARIABLE, "WARNING").upper()
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s: %(message)s")


def read_source(args):
    if args.expression is not None:
        return "<expression>", args.expression
    if args.source == "-":
        return "<stdin>", sys.stdin.read()
    with open(args.source, encoding="utf-8") as f:
        return args.source, f.read()


def main(argv=None):
    args = build_argument_parser().parse_args(argv)
    if args.render is not None and args.graph is None:
        build_argument_parser().error("--render requires --graph")
    configure_logging(args.verbose)
    source_file, s = read_source(args)
    try:
        tree, bindings = parse(s)
        logger.debug("tree %s", tree)
        result = evaluate(tree, bindings)
    except LogicError as e:
        handle(e, source_file)
        return 1
    if args.graph is not None:
        path = write_graph(tree, args.graph, render_format=args.render)
        logger.info("wrote %s", path)
    print(int(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
