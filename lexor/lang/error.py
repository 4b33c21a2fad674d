"""Error handling for the lexor language. Only LexorExceptions should be encountered while running a program: if another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Every stage of the pipeline fails fast and none of them recover locally:
    - LexError: an unrecognized character, reported when the parser reaches its error token
    - ParseError: a required token/construct is missing
    - LexorRuntimeError: undefined variable, division/modulo by zero, unknown operator
"""

import sys

from termcolor import colored


class LexorException(Exception):
    """Base lexor error. Carries a message and, where known, the line/column of the construct that caused it."""
    kind = "error"

    def __init__(self, msg, line=None, column=None):
        super().__init__(msg)
        self.msg = msg
        self.line = line
        self.column = column

    @property
    def location(self):
        """'line:column' if both are known, else empty string."""
        if self.line is None or self.column is None:
            return ""
        return f"{self.line}:{self.column}"

    def __str__(self):
        if self.location:
            return f"{self.kind} at {self.location}: {self.msg}"
        return f"{self.kind}: {self.msg}"


class LexError(LexorException):
    kind = "lex error"


class ParseError(LexorException):
    kind = "parse error"


class LexorRuntimeError(LexorException):
    kind = "runtime error"


class ErrorHandler:
    """Context manager that reports lexor errors/warnings in color instead of letting Python tracebacks through."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream if stream is not None else sys.stderr
        self.path = None
        self.sources = {}  # dict of path: list of source lines

    def register_file(self, path, source=""):
        """Registers path and its source text so that errors can quote the offending line."""
        self.path = path
        self.sources[path] = source.splitlines()

    def source_line(self, line_num):
        """Returns line line_num (1-based) of the current file, or None if unknown."""
        lines = self.sources.get(self.path, [])
        if line_num is None or not 0 < line_num <= len(lines):
            return None
        return lines[line_num - 1]

    def diagnose(self, error, warning=False):
        """Returns the offending source line with a caret under error.column."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        line = self.source_line(error.line)
        if line is None:
            return None

        line = line.replace("\t", " ")
        start = max((error.column or 1) - 1, 0)
        diagnosis = "  " + line[:start] + colored(line[start:start + 1], color, attrs=["bold"]) + line[start + 1:]
        diagnosis += "\n  " + " " * start + colored("^", color, attrs=["bold"])
        return diagnosis

    def _header(self, error):
        where = self.path if self.path else "<source>"
        if error.location:
            where += f":{error.location}"
        return colored(f"{where}: ", attrs=["bold"])

    def _print(self, msg):
        print(msg, file=self.stream)

    def warn(self, msg, line=None, column=None):
        """Generates and prints a runtime warning. Warnings never stop execution."""
        warning = LexorException(msg, line, column)

        self._print(self._header(warning) + colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + msg)

        diagnosis = self.diagnose(warning, warning=True)
        if diagnosis:
            self._print(diagnosis)

    def throw(self, error, internal=False):
        """Prints error, a LexorException. Exits if self.fatal."""
        error_msg = self._header(error)

        if internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored(f"{error.kind}: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        self._print(error_msg)

        diagnosis = None if internal else self.diagnose(error)
        if diagnosis:
            self._print(diagnosis)

        if self.fatal:
            sys.exit(1)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(LexorException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(LexorException("maximum recursion depth exceeded, expression nested too deeply"))
        elif exc_type is not None and issubclass(exc_type, LexorException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(LexorException(f"unknown error: '{exc_type.__name__}: {exc_val}'"), internal=True)
            do_exit = True

        return not do_exit
