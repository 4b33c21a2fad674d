"""Token kinds and the keyword table of the lexor language. Keywords are case-sensitive and uppercase."""

from dataclasses import dataclass


# keywords
SCRIPT = "SCRIPT"
AREA = "AREA"
START = "START"
END = "END"
DECLARE = "DECLARE"
INT = "INT"
CHAR = "CHAR"
BOOL = "BOOL"
FLOAT = "FLOAT"
PRINT = "PRINT"
SCAN = "SCAN"
IF = "IF"
ELSE = "ELSE"
FOR = "FOR"
REPEAT = "REPEAT"
WHEN = "WHEN"
AND = "AND"
OR = "OR"
NOT = "NOT"
TRUE = "TRUE"
FALSE = "FALSE"

# literals
NUMBER = "NUMBER"      # 123, 45.67
STRING = "STRING"      # "hello", [#]
CHAR_LIT = "CHAR_LIT"  # 'a'
IDENTIFIER = "IDENTIFIER"

# operators and punctuation
PLUS = "PLUS"
MINUS = "MINUS"
MULTIPLY = "MULTIPLY"
DIVIDE = "DIVIDE"
MODULO = "MODULO"
GT = "GT"
LT = "LT"
GTE = "GTE"
LTE = "LTE"
EQ = "EQ"
NEQ = "NEQ"
ASSIGN = "ASSIGN"
CONCAT = "CONCAT"
NEWLINE = "NEWLINE"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
LBRACKET = "LBRACKET"
RBRACKET = "RBRACKET"
COLON = "COLON"
COMMA = "COMMA"

# special
EOF = "EOF"
ERROR = "ERROR"

KEYWORDS = {
    keyword: keyword for keyword in (
        SCRIPT, AREA, START, END, DECLARE, INT, CHAR, BOOL, FLOAT, PRINT, SCAN,
        IF, ELSE, FOR, REPEAT, WHEN, AND, OR, NOT, TRUE, FALSE,
    )
}

# greedy: two-character operators are matched before their one-character prefixes
DOUBLE_OPERATORS = {
    "<=": LTE,
    ">=": GTE,
    "==": EQ,
    "<>": NEQ,
}

SINGLE_OPERATORS = {
    "+": PLUS,
    "-": MINUS,
    "*": MULTIPLY,
    "/": DIVIDE,
    "%": MODULO,
    ">": GT,
    "<": LT,
    "=": ASSIGN,
    "&": CONCAT,
    "$": NEWLINE,
    "(": LPAREN,
    ")": RPAREN,
    "[": LBRACKET,
    "]": RBRACKET,
    ":": COLON,
    ",": COMMA,
}

# declared type tags of variables
TYPES = (INT, CHAR, BOOL, FLOAT)


@dataclass(frozen=True)
class Token:
    kind: str
    lexeme: str
    line: int
    column: int

    def __repr__(self):
        if self.lexeme:
            return f"{self.kind}({self.lexeme!r})@{self.line}:{self.column}"
        return f"{self.kind}@{self.line}:{self.column}"
