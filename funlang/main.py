"""Runs funlang token files from the command line. Called from the funlang console script.

Lexing is not part of funlang: FILE must already be tokenized (see lang/session.py for the format). Without FILE,
the built-in sample program is run.
"""

import argparse

from funlang.lang.error import ErrorHandler
from funlang.lang.session import Session


def main(argv=None):
    """Runs funlang interpreter. Called from funlang console script."""
    parser = argparse.ArgumentParser(prog="funlang")
    parser.add_argument("file", help="token file to interpret and run (if empty, runs the built-in sample)", nargs="?")
    parser.add_argument("--trace", action="store_true", help="print parser/resolver/interpreter trace lines")
    parser.add_argument("--dump", action="store_true", help="print the parsed syntax tree before running")
    parser.add_argument("--max-depth", type=int, default=None, help="maximum nested call depth (default: unbounded)")
    args = parser.parse_args(argv)

    with ErrorHandler(trace=args.trace) as error_handler:
        sess = Session(error_handler, args.file if args.file is not None else Session.SAMPLE, max_depth=args.max_depth)

        if args.dump:
            print(sess.dump())

        sess.run()


if __name__ == "__main__":
    main()
