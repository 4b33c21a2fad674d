"""Lexical analysis for the lexor language: converts source text into a list of Tokens terminated by a single EOF.

```
<comment>   ::= "%%" <char>* <newline>               ; produces no token
<number>    ::= <digit>+ ("." <digit>+)?             ; a second "." terminates the literal
<string>    ::= '"' (<char> | "\" <char>)* '"'?      ; unterminated strings end at end of input
<char_lit>  ::= "'" <char>? "'"
<escape>    ::= "[" <char> "]"                       ; one-character STRING token, e.g. [#] -> "#"
<word>      ::= (<letter> | "_") (<letter> | <digit> | "_")*
```

Unrecognized characters do not stop scanning: they become ERROR tokens and the parser fails when it reaches one.
"""

from lexor.core import tokens
from lexor.core.tokens import Token


DIGITS = "0123456789"
ESCAPES = {"n": "\n", "t": "\t", '"': '"'}


class Scanner:
    """Single-pass scanner over a source string. Tracks line/column of the current character."""

    def __init__(self, source):
        self.source = source
        self.pos = 0
        self.current_char = source[0] if source else None
        self.line = 1
        self.column = 1

    def advance(self):
        """Moves to the next character, updating line/column based on the character being left."""
        if self.current_char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1
        self.current_char = self.source[self.pos] if self.pos < len(self.source) else None

    def peek(self, n=1):
        idx = self.pos + n
        if idx >= len(self.source):
            return None
        return self.source[idx]

    def skip_comment(self):
        # the terminating newline belongs to the comment
        while self.current_char is not None and self.current_char != "\n":
            self.advance()
        if self.current_char == "\n":
            self.advance()

    def read_word(self):
        line, column = self.line, self.column
        result = ""
        while self.current_char is not None and (self.current_char.isalnum() or self.current_char == "_"):
            result += self.current_char
            self.advance()
        return Token(tokens.KEYWORDS.get(result, tokens.IDENTIFIER), result, line, column)

    def read_number(self):
        line, column = self.line, self.column
        result = ""
        has_dot = False

        while self.current_char is not None:
            if self.current_char == "." and not has_dot and self.peek() is not None and self.peek() in DIGITS:
                has_dot = True
            elif self.current_char not in DIGITS:
                break
            result += self.current_char
            self.advance()

        return Token(tokens.NUMBER, result, line, column)

    def read_string(self):
        line, column = self.line, self.column
        self.advance()  # opening quote
        result = ""

        while self.current_char is not None and self.current_char != '"':
            if self.current_char == "\\":
                self.advance()
                if self.current_char is None:
                    break
                result += ESCAPES.get(self.current_char, self.current_char)
            else:
                result += self.current_char
            self.advance()

        if self.current_char == '"':
            self.advance()
        return Token(tokens.STRING, result, line, column)

    def read_char(self):
        line, column = self.line, self.column
        self.advance()  # opening quote
        result = ""

        if self.current_char is not None and self.current_char != "'":
            result = self.current_char
            self.advance()
        if self.current_char == "'":
            self.advance()
        return Token(tokens.CHAR_LIT, result, line, column)

    def read_bracket(self):
        """[c] is an escaped one-character string; any other [ is plain punctuation."""
        line, column = self.line, self.column
        char = self.peek()

        if char is not None and self.peek(2) == "]":
            for __ in range(3):
                self.advance()
            return Token(tokens.STRING, char, line, column)

        self.advance()
        return Token(tokens.LBRACKET, "[", line, column)

    def read_operator(self):
        line, column = self.line, self.column
        char = self.current_char

        pair = char + (self.peek() or "")
        if pair in tokens.DOUBLE_OPERATORS:
            self.advance()
            self.advance()
            return Token(tokens.DOUBLE_OPERATORS[pair], pair, line, column)

        self.advance()
        return Token(tokens.SINGLE_OPERATORS.get(char, tokens.ERROR), char, line, column)

    def next_token(self):
        """Returns the next Token, or EOF once the source is exhausted."""
        while self.current_char is not None:
            char = self.current_char

            if char in " \t\r\n":
                self.advance()
                continue

            if char == "%" and self.peek() == "%":
                self.skip_comment()
                continue

            if char.isalpha() or char == "_":
                return self.read_word()
            if char in DIGITS:
                return self.read_number()
            if char == '"':
                return self.read_string()
            if char == "'":
                return self.read_char()
            if char == "[":
                return self.read_bracket()

            return self.read_operator()

        return Token(tokens.EOF, "", self.line, self.column)

    def tokenize(self):
        result = [self.next_token()]
        while result[-1].kind != tokens.EOF:
            result.append(self.next_token())
        return result


def tokenize(source):
    """Converts source into a list of Tokens ending in exactly one EOF Token. Never raises."""
    return Scanner(source).tokenize()
