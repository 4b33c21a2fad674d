import io
import unittest

from lexor.lang.error import ErrorHandler, LexError, LexorException, LexorRuntimeError, ParseError


class LexorExceptionTestCase(unittest.TestCase):

    def test_kinds(self):
        cases = {LexError: "lex error", ParseError: "parse error", LexorRuntimeError: "runtime error"}
        for error, kind in cases.items():
            self.assertEqual(kind, error.kind)
            self.assertTrue(issubclass(error, LexorException))

        self.assertFalse(issubclass(LexorRuntimeError, RuntimeError))

    def test_location(self):
        self.assertEqual("3:14", ParseError("expected ':'", 3, 14).location)
        self.assertEqual("", LexorRuntimeError("division by zero").location)
        self.assertEqual("", LexorRuntimeError("division by zero", 3).location)

    def test_str(self):
        self.assertEqual("parse error at 3:14: expected ':'", str(ParseError("expected ':'", 3, 14)))
        self.assertEqual("runtime error: division by zero", str(LexorRuntimeError("division by zero")))


class ErrorHandlerTestCase(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.handler = ErrorHandler(fatal=False, stream=self.stream)
        self.handler.register_file("program.lexor", "SCRIPT AREA\nSTART SCRIPT\nPRINT x\nEND SCRIPT\n")

    def test_source_line(self):
        self.assertEqual("PRINT x", self.handler.source_line(3))
        self.assertIsNone(self.handler.source_line(0))
        self.assertIsNone(self.handler.source_line(5))
        self.assertIsNone(self.handler.source_line(None))

    def test_throw(self):
        with self.handler:
            raise ParseError("expected ':' after 'PRINT', got 'x'", 3, 7)

        report = self.stream.getvalue()
        self.assertIn("program.lexor:3:7", report)
        self.assertIn("parse error: ", report)
        self.assertIn("expected ':' after 'PRINT', got 'x'", report)
        self.assertIn("PRINT ", report)
        self.assertIn(" " * 8, report.splitlines()[-1])  # caret under column 7

    def test_throw_without_location(self):
        with self.handler:
            raise LexorRuntimeError("undefined variable 'x'")

        report = self.stream.getvalue()
        self.assertIn("runtime error: ", report)
        self.assertEqual(1, len(report.splitlines()))

    def test_fatal(self):
        self.handler.fatal = True
        with self.assertRaises(SystemExit) as context:
            with self.handler:
                raise LexError("unrecognized character '@'", 1, 1)
        self.assertEqual(1, context.exception.code)

    def test_internal(self):
        with self.assertRaises(ValueError):
            with self.handler:
                raise ValueError("boom")
        self.assertIn("[internal]", self.stream.getvalue())
        self.assertIn("ValueError: boom", self.stream.getvalue())

    def test_recursion(self):
        with self.handler:
            raise RecursionError()
        self.assertIn("nested too deeply", self.stream.getvalue())

    def test_warn(self):
        self.handler.warn("SCAN expected 2 value(s), got 1", 3, 1)
        report = self.stream.getvalue()
        self.assertIn("warning: ", report)
        self.assertIn("program.lexor:3:1", report)
        self.assertEqual(3, len(report.splitlines()))


if __name__ == '__main__':
    unittest.main()
