"""Runtime values of the lexor language. Value is a closed union: Integer, Float, Character, Boolean, Text and Void,
each carrying exactly one payload. All implicit conversions go through to_text, to_number and to_boolean.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
import math
import re

from lexor.core import tokens


NUL = "\0"
NUMERIC = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def parse_number(text):
    """Parses text as a floating value. Returns 0.0 if text is not a number."""
    text = text.strip()
    return float(text) if NUMERIC.fullmatch(text) else 0.0


class Value(ABC):
    """Superclass of runtime values."""

    @abstractmethod
    def to_text(self):
        ...

    @abstractmethod
    def to_number(self):
        ...

    @abstractmethod
    def to_boolean(self):
        ...


@dataclass(frozen=True)
class Integer(Value):
    value: int = 0

    def to_text(self):
        return str(int(self.value))

    def to_number(self):
        return self.value

    def to_boolean(self):
        return self.value != 0


@dataclass(frozen=True)
class Float(Value):
    value: float = 0.0

    def to_text(self):
        return str(self.value)

    def to_number(self):
        return self.value

    def to_boolean(self):
        return self.value != 0


@dataclass(frozen=True)
class Character(Value):
    value: str = NUL

    def to_text(self):
        return self.value

    def to_number(self):
        return ord(self.value) if self.value else 0

    def to_boolean(self):
        return self.value not in (NUL, "")


@dataclass(frozen=True)
class Boolean(Value):
    value: bool = False

    def to_text(self):
        return "TRUE" if self.value else "FALSE"

    def to_number(self):
        return 1 if self.value else 0

    def to_boolean(self):
        return self.value


@dataclass(frozen=True)
class Text(Value):
    value: str = ""

    def to_text(self):
        return self.value

    def to_number(self):
        return parse_number(self.value)

    def to_boolean(self):
        return self.value != ""


@dataclass(frozen=True)
class Void(Value):
    """The absence of a value. Carries no payload."""

    def to_text(self):
        return ""

    def to_number(self):
        return 0

    def to_boolean(self):
        return False


ZERO = {
    tokens.INT: Integer(0),
    tokens.FLOAT: Float(0.0),
    tokens.CHAR: Character(NUL),
    tokens.BOOL: Boolean(False),
}


def zero(type_tag):
    """Value of a variable declared with type_tag but no initializer."""
    return ZERO[type_tag]


def from_field(type_tag, field):
    """Converts one SCAN input field to a Value of the variable's declared type."""
    if type_tag == tokens.INT:
        number = parse_number(field)
        return Integer(int(number) if math.isfinite(number) else 0)
    if type_tag == tokens.FLOAT:
        return Float(parse_number(field))
    if type_tag == tokens.CHAR:
        return Character(field[0] if field else NUL)
    if type_tag == tokens.BOOL:
        return Boolean(field in ("TRUE", "true"))
    raise ValueError(f"unknown type tag '{type_tag}'")
