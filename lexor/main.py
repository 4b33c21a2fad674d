"""Runs a lexor program file. Uses the scanner/parser/evaluator pipeline through Session, and the error handling
context manager for reporting. Called from the lexor executable script.
"""

import argparse
import sys

from lexor.lang.error import ErrorHandler, LexorException
from lexor.lang.session import Session


def open_input(path):
    """Returns the input source for SCAN statements: path if given, else standard input."""
    if path is None:
        return sys.stdin
    try:
        return open(path, "r", encoding=Session.ENCODING)
    except OSError:
        raise LexorException(f"'{path}' could not be opened")


def main(argv=None):
    """Runs the lexor interpreter. Called from the lexor executable script."""
    parser = argparse.ArgumentParser(prog="lexor", description="interpreter for the LEXOR teaching language")
    parser.add_argument("file", help="program to interpret and run")
    parser.add_argument("-i", "--input", help="file to read SCAN input from (if empty, reads standard input)")
    args = parser.parse_args(argv)

    with ErrorHandler() as error_handler:
        input_source = open_input(args.input)
        try:
            sess = Session(error_handler, args.file, input_source=input_source)
            try:
                sess.run()
            finally:
                # partial output is still shown if the run failed
                sys.stdout.write(sess.output)
                sys.stdout.flush()
        finally:
            if input_source is not sys.stdin:
                input_source.close()


if __name__ == "__main__":
    main()
