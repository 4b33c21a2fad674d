"""Tree-walking evaluator for the lexor language.

The Evaluator owns a flat Environment (no nested scopes) and an output buffer. Declarations at the head of the program
run first, then statements run in source order. Any LexorRuntimeError aborts the rest of the run; variables and output
produced so far are kept.
"""

import math

from lexor.core import tokens
from lexor.core.syntax import (
    Assignment, BinaryOp, BooleanLiteral, CharacterLiteral, Declaration, ForStatement, Identifier, IfStatement,
    NumberLiteral, PrintStatement, RepeatStatement, ScanStatement, StringLiteral, UnaryOp,
)
from lexor.core.values import NUL, Boolean, Character, Float, Integer, Text, from_field, zero
from lexor.lang.error import LexorRuntimeError


LINE_BREAK = "$"


class Environment:
    """Flat mapping of variable name: (declared type tag, current Value). Entries are never removed."""

    def __init__(self):
        self.variables = {}

    def __contains__(self, name):
        return name in self.variables

    def declare(self, name, type_tag, value):
        self.variables[name] = (type_tag, value)

    def type_of(self, name):
        return self.variables[name][0]

    def lookup(self, name, node=None):
        """Returns the Value of name. Raises LexorRuntimeError if name was never declared or assigned."""
        if name not in self.variables:
            raise runtime_error(f"undefined variable '{name}'", node)
        return self.variables[name][1]

    def assign(self, name, value):
        """Overwrites the value of name, keeping its type tag. Undeclared names are auto-declared as INT."""
        type_tag = self.variables[name][0] if name in self.variables else tokens.INT
        self.variables[name] = (type_tag, value)


def runtime_error(msg, node=None):
    if node is None:
        return LexorRuntimeError(msg)
    return LexorRuntimeError(msg, node.line, node.column)


def arithmetic(op, left, right):
    """+ - * on numbers. Integer only if both operands are Integer."""
    a, b = left.to_number(), right.to_number()
    result = a + b if op == "+" else a - b if op == "-" else a * b
    if isinstance(left, Integer) and isinstance(right, Integer):
        return Integer(result)
    return Float(float(result))


def equality(op, left, right):
    """== <> compare text if either side is Text, else numbers."""
    if isinstance(left, Text) or isinstance(right, Text):
        equal = left.to_text() == right.to_text()
    else:
        equal = left.to_number() == right.to_number()
    return Boolean(equal if op == "==" else not equal)


class Evaluator:
    """Executes a Program against its own Environment, collecting printed text in self.output.

    input_source is any object with a readline() method (file objects, io.StringIO, sys.stdin); it is only read by
    SCAN statements. error_handler, if given, receives non-fatal warnings.
    """

    def __init__(self, input_source=None, error_handler=None):
        self.input_source = input_source
        self.error_handler = error_handler
        self.environment = Environment()
        self.output = []

    @property
    def text(self):
        """Everything printed so far."""
        return "".join(self.output)

    def execute(self, program):
        for declaration in program.declarations:
            self.declare(declaration)
        self.run_block(program.statements)

    def run_block(self, statements):
        for statement in statements:
            self.run(statement)

    # ---------- STATEMENTS ----------
    def run(self, statement):
        if isinstance(statement, Declaration):
            self.declare(statement)
        elif isinstance(statement, Assignment):
            self.environment.assign(statement.target, self.evaluate(statement.value))
        elif isinstance(statement, PrintStatement):
            self.print_(statement)
        elif isinstance(statement, ScanStatement):
            self.scan(statement)
        elif isinstance(statement, IfStatement):
            if self.evaluate(statement.condition).to_boolean():
                self.run_block(statement.then_branch)
            elif statement.else_branch is not None:
                self.run_block(statement.else_branch)
        elif isinstance(statement, RepeatStatement):
            while self.evaluate(statement.condition).to_boolean():
                self.run_block(statement.body)
        elif isinstance(statement, ForStatement):
            # no condition exists in the grammar: the body runs exactly once
            self.run_block(statement.body)
        else:
            raise TypeError(f"unknown statement node '{type(statement).__name__}'")

    def declare(self, declaration):
        for name, initializer in declaration.bindings:
            value = zero(declaration.type_tag) if initializer is None else self.evaluate(initializer)
            self.environment.declare(name, declaration.type_tag, value)

    def print_(self, statement):
        for expression in statement.expressions:
            text = self.evaluate(expression).to_text()
            self.output.append("\n" if text == LINE_BREAK else text)

    def read_line(self):
        """One line of input without its line ending. End of input reads as an empty line."""
        if self.input_source is None:
            return ""
        return self.input_source.readline().rstrip("\r\n")

    def scan(self, statement):
        # every target must exist before any input is consumed
        type_tags = []
        for name in statement.targets:
            self.environment.lookup(name, statement)
            type_tags.append(self.environment.type_of(name))

        # a blank line (or end of input) carries no fields at all
        line = self.read_line()
        fields = [field.strip(" \t") for field in line.split(",")] if line.strip(" \t") else []

        if self.error_handler is not None and len(fields) != len(statement.targets):
            self.error_handler.warn(f"SCAN expected {len(statement.targets)} value(s), got {len(fields)}",
                                    statement.line, statement.column)

        for name, type_tag, field in zip(statement.targets, type_tags, fields):
            self.environment.assign(name, from_field(type_tag, field))

    # ---------- EXPRESSIONS ----------
    def evaluate(self, expression):
        if isinstance(expression, NumberLiteral):
            return Float(float(expression.value)) if expression.is_float else Integer(int(expression.value))
        if isinstance(expression, StringLiteral):
            return Text(expression.text)
        if isinstance(expression, CharacterLiteral):
            return Character(expression.char or NUL)
        if isinstance(expression, BooleanLiteral):
            return Boolean(expression.value)
        if isinstance(expression, Identifier):
            return self.environment.lookup(expression.name, expression)
        if isinstance(expression, UnaryOp):
            return self.unary(expression)
        if isinstance(expression, BinaryOp):
            return self.binary(expression)
        raise TypeError(f"unknown expression node '{type(expression).__name__}'")

    def unary(self, expression):
        operand = self.evaluate(expression.operand)

        if expression.op == "NOT":
            return Boolean(not operand.to_boolean())
        if expression.op in ("+", "-"):
            number = operand.to_number()
            if expression.op == "-":
                number = -number
            return Integer(number) if isinstance(operand, Integer) else Float(float(number))
        raise runtime_error(f"unknown operator '{expression.op}'", expression)

    def binary(self, expression):
        # both sides are always evaluated, AND/OR included
        left = self.evaluate(expression.left)
        right = self.evaluate(expression.right)

        try:
            return self.operate(expression, left, right)
        except OverflowError:
            raise runtime_error("numeric overflow", expression)

    def operate(self, expression, left, right):
        op = expression.op

        if op in ("+", "-", "*"):
            return arithmetic(op, left, right)

        if op == "/":
            divisor = right.to_number()
            if divisor == 0:
                raise runtime_error("division by zero", expression)
            return Float(left.to_number() / divisor)

        if op == "%":
            a, b = left.to_number(), right.to_number()
            if not (math.isfinite(a) and math.isfinite(b)):
                raise runtime_error("numeric overflow", expression)
            dividend, divisor = math.trunc(a), math.trunc(b)
            if divisor == 0:
                raise runtime_error("modulo by zero", expression)
            # remainder takes the sign of the dividend
            remainder = abs(dividend) % abs(divisor)
            return Integer(-remainder if dividend < 0 else remainder)

        if op in ("<", ">", "<=", ">="):
            a, b = left.to_number(), right.to_number()
            result = a < b if op == "<" else a > b if op == ">" else a <= b if op == "<=" else a >= b
            return Boolean(result)

        if op in ("==", "<>"):
            return equality(op, left, right)

        if op == "AND":
            return Boolean(left.to_boolean() and right.to_boolean())
        if op == "OR":
            return Boolean(left.to_boolean() or right.to_boolean())

        raise runtime_error(f"unknown operator '{op}'", expression)
