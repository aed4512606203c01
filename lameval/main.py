"""Runs the lameval interpreter on a file, or in command-line mode if no file is given. Also uses error handling
context manager. Called from the lameval console script.
"""

import argparse
import sys

from lameval.lang.error import ErrorHandler
from lameval.lang.session import Session
from lameval.lang.shell import Shell

RECURSION_LIMIT = 20000  # terms are traversed recursively, so deep numerals need more than the default


def build_parser():
    parser = argparse.ArgumentParser(prog="lameval", description="Untyped lambda calculus evaluator.")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--max-steps", type=int, default=None,
                        help="give up on a term after this many beta reductions (default: never)")
    parser.add_argument("--trace", action="store_true", help="print every beta reduction step")
    parser.add_argument("--numerals", action="store_true", help="print Church numerals in results as numbers")
    parser.add_argument("--no-color", action="store_true", help="do not color output")
    return parser


def main(argv=None):
    """Runs lameval interpreter. Called from lameval executable script."""
    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    with ErrorHandler() as error_handler:
        args = build_parser().parse_args(argv)
        error_handler.trace = args.trace

        options = dict(max_steps=args.max_steps, color=not args.no_color, numerals=args.numerals)

        if args.file is not None:
            Session(error_handler, args.file, cmd_line=False, **options).run()
        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, **options)).cmdloop()


if __name__ == "__main__":
    main()
