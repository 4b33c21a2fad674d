"""Session control for the lexor language: runs one program through scanner, parser and evaluator.

A Session is the boundary the pipeline exposes to its callers. It takes source text (or a path to read it from) and a
line-based input source for SCAN statements, and returns the captured output text. Failures propagate as
LexorExceptions; whatever output was produced before the failure stays available through Session.output.
"""

from lexor.core.evaluator import Evaluator
from lexor.core.parser import parse
from lexor.core.scanner import tokenize
from lexor.lang.error import ErrorHandler, LexorException


class Session:
    """Governs a single lexor run."""
    SOURCE_FILE = "<source>"  # name used in error messages when no path is given
    ENCODING = "utf-8"

    def __init__(self, error_handler=None, path=None, source=None, input_source=None):
        if error_handler is None:
            error_handler = ErrorHandler(fatal=False)
        self.error_handler = error_handler
        self.input_source = input_source

        self.path = path if path is not None else Session.SOURCE_FILE  # used for error messages
        if source is None:
            source = Session.read(self.path)
        self.source = source

        self.error_handler.register_file(self.path, self.source)
        self.evaluator = None

    @staticmethod
    def read(path):
        """Returns the contents of path. Raises LexorException if it can't be read."""
        try:
            with open(path, "r", encoding=Session.ENCODING) as file:
                return file.read()
        except (OSError, UnicodeDecodeError):
            raise LexorException(f"'{path}' could not be opened")

    def run(self):
        """Scans, parses and executes self.source. Returns the printed text."""
        program = parse(tokenize(self.source))

        self.evaluator = Evaluator(self.input_source, self.error_handler)
        self.evaluator.execute(program)
        return self.evaluator.text

    @property
    def output(self):
        """Text printed so far: the complete output after run, the partial output after a runtime failure."""
        return self.evaluator.text if self.evaluator is not None else ""


def run(source, input_source=None):
    """Runs source and returns its output text. Raises LexError, ParseError or LexorRuntimeError on failure."""
    return Session(source=source, input_source=input_source).run()
