"""Recursive-descent parser for the lexor language. Consumes the Token list produced by the scanner and returns a
Program syntax tree. There is no error recovery: the first unmet expectation raises ParseError (or LexError, if the
offending token is an unrecognized character).

```
<program>     ::= SCRIPT AREA START SCRIPT <declaration>* <statement>* END SCRIPT
<declaration> ::= DECLARE <type> <binding> ("," <binding>)*
<binding>     ::= IDENTIFIER ("=" <expr>)?
<statement>   ::= <declaration> | <assignment> | <print> | <scan> | <if> | <for> | <repeat>
<assignment>  ::= IDENTIFIER ("=" IDENTIFIER)* "=" <expr>      ; a=b=5 becomes b=5, a=b
<print>       ::= PRINT ":" <expr> ("&" <expr>)*
<scan>        ::= SCAN ":" IDENTIFIER ("," IDENTIFIER)*
<if>          ::= IF "(" <expr> ")" START IF <statement>* END IF (ELSE (<if> | START IF <statement>* END IF))?
<for>         ::= START FOR <statement>* END FOR
<repeat>      ::= REPEAT WHEN "(" <expr> ")" START REPEAT <statement>* END REPEAT
```

Expressions are parsed by precedence climbing, loosest first: OR, AND, comparisons, + -, * / %, unary + - NOT.
All binary levels are left-associative.
"""

from lexor.core import tokens
from lexor.core.syntax import (
    Assignment, BinaryOp, BooleanLiteral, CharacterLiteral, Declaration, ForStatement, Identifier, IfStatement,
    NumberLiteral, PrintStatement, Program, RepeatStatement, ScanStatement, StringLiteral, UnaryOp,
)
from lexor.lang.error import LexError, ParseError


class Parser:
    COMPARISONS = (tokens.LT, tokens.GT, tokens.LTE, tokens.GTE, tokens.EQ, tokens.NEQ)
    ADDITIVE = (tokens.PLUS, tokens.MINUS)
    MULTIPLICATIVE = (tokens.MULTIPLY, tokens.DIVIDE, tokens.MODULO)
    UNARY = (tokens.PLUS, tokens.MINUS, tokens.NOT)

    def __init__(self, token_list):
        if not token_list or token_list[-1].kind != tokens.EOF:
            raise ValueError("token list must end with an EOF token")
        self.tokens = token_list
        self.pos = 0

    @property
    def current(self):
        return self.tokens[self.pos]

    def peek(self, n=1):
        return self.tokens[min(self.pos + n, len(self.tokens) - 1)]

    def check(self, kind):
        return self.current.kind == kind

    def error(self, expected):
        """Raises the error for the current token. Unrecognized characters surface here as LexErrors."""
        tok = self.current
        if tok.kind == tokens.ERROR:
            raise LexError(f"unrecognized character '{tok.lexeme}'", tok.line, tok.column)
        got = "end of input" if tok.kind == tokens.EOF else f"'{tok.lexeme}'"
        raise ParseError(f"expected {expected}, got {got}", tok.line, tok.column)

    def eat(self, kind, expected=None):
        """Consumes and returns the current token if it is of kind, else raises."""
        tok = self.current
        if tok.kind != kind:
            self.error(expected or f"'{kind}'")
        if tok.kind != tokens.EOF:
            self.pos += 1
        return tok

    # ---------- TOP LEVEL ----------
    def parse(self):
        start = self.eat(tokens.SCRIPT, "'SCRIPT AREA' at start of program")
        self.eat(tokens.AREA, "'AREA' after 'SCRIPT'")
        self.eat(tokens.START, "'START SCRIPT'")
        self.eat(tokens.SCRIPT, "'SCRIPT' after 'START'")

        program = Program().at(start)
        while self.check(tokens.DECLARE):
            program.declarations.append(self.declaration())

        program.statements = self.block("'END SCRIPT'")
        self.eat(tokens.END, "'END SCRIPT'")
        self.eat(tokens.SCRIPT, "'SCRIPT' after 'END'")
        self.eat(tokens.EOF, "end of input after 'END SCRIPT'")
        return program

    def block(self, closing):
        """Parses statements up to (not including) the next END."""
        statements = []
        while not self.check(tokens.END):
            if self.check(tokens.EOF):
                self.error(closing)
            statements.extend(self.statement())
        return statements

    # ---------- STATEMENTS ----------
    def statement(self):
        """Returns a list of statements: chained assignments desugar into several."""
        kind = self.current.kind

        if kind == tokens.DECLARE:
            return [self.declaration()]
        if kind == tokens.IDENTIFIER:
            return self.assignment()
        if kind == tokens.PRINT:
            return [self.print_statement()]
        if kind == tokens.SCAN:
            return [self.scan_statement()]
        if kind == tokens.IF:
            return [self.if_statement()]
        if kind == tokens.REPEAT:
            return [self.repeat_statement()]
        if kind == tokens.START and self.peek().kind == tokens.FOR:
            return [self.for_statement()]

        self.error("a statement")

    def declaration(self):
        tok = self.eat(tokens.DECLARE)
        if self.current.kind not in tokens.TYPES:
            self.error("a type (INT, CHAR, BOOL or FLOAT) after 'DECLARE'")
        type_tag = self.eat(self.current.kind).kind

        node = Declaration(type_tag).at(tok)
        node.bindings.append(self.binding())
        while self.check(tokens.COMMA):
            self.eat(tokens.COMMA)
            node.bindings.append(self.binding())
        return node

    def binding(self):
        name = self.eat(tokens.IDENTIFIER, "a variable name").lexeme
        initializer = None
        if self.check(tokens.ASSIGN):
            self.eat(tokens.ASSIGN)
            initializer = self.expr()
        return name, initializer

    def assignment(self):
        targets = [self.eat(tokens.IDENTIFIER)]
        self.eat(tokens.ASSIGN, "'=' after variable name")

        while self.check(tokens.IDENTIFIER) and self.peek().kind == tokens.ASSIGN:
            targets.append(self.eat(tokens.IDENTIFIER))
            self.eat(tokens.ASSIGN)

        value = self.expr()

        # rightmost target takes the value, every other target takes its right neighbour
        last = targets[-1]
        statements = [Assignment(last.lexeme, value).at(last)]
        for target, neighbour in zip(reversed(targets[:-1]), reversed(targets[1:])):
            statements.append(Assignment(target.lexeme, Identifier(neighbour.lexeme).at(neighbour)).at(target))
        return statements

    def print_statement(self):
        tok = self.eat(tokens.PRINT)
        self.eat(tokens.COLON, "':' after 'PRINT'")

        node = PrintStatement([self.expr()]).at(tok)
        while self.check(tokens.CONCAT):
            self.eat(tokens.CONCAT)
            node.expressions.append(self.expr())
        return node

    def scan_statement(self):
        tok = self.eat(tokens.SCAN)
        self.eat(tokens.COLON, "':' after 'SCAN'")

        node = ScanStatement([self.eat(tokens.IDENTIFIER, "a variable name").lexeme]).at(tok)
        while self.check(tokens.COMMA):
            self.eat(tokens.COMMA)
            node.targets.append(self.eat(tokens.IDENTIFIER, "a variable name").lexeme)
        return node

    def condition(self, keyword):
        self.eat(tokens.LPAREN, f"'(' after '{keyword}'")
        node = self.expr()
        self.eat(tokens.RPAREN, f"')' after {keyword} condition")
        return node

    def enclosed_block(self, keyword):
        """START <keyword> <statement>* END <keyword>"""
        self.eat(tokens.START, f"'START {keyword}'")
        self.eat(keyword, f"'{keyword}' after 'START'")
        statements = self.block(f"'END {keyword}'")
        self.eat(tokens.END, f"'END {keyword}'")
        self.eat(keyword, f"'{keyword}' after 'END'")
        return statements

    def if_statement(self):
        tok = self.eat(tokens.IF)
        node = IfStatement(self.condition(tokens.IF)).at(tok)
        node.then_branch = self.enclosed_block(tokens.IF)

        if self.check(tokens.ELSE):
            self.eat(tokens.ELSE)
            if self.check(tokens.IF):
                node.else_branch = [self.if_statement()]
            else:
                node.else_branch = self.enclosed_block(tokens.IF)
        return node

    def repeat_statement(self):
        tok = self.eat(tokens.REPEAT)
        self.eat(tokens.WHEN, "'WHEN' after 'REPEAT'")
        node = RepeatStatement(self.condition(tokens.WHEN)).at(tok)
        node.body = self.enclosed_block(tokens.REPEAT)
        return node

    def for_statement(self):
        node = ForStatement().at(self.current)
        node.body = self.enclosed_block(tokens.FOR)
        return node

    # ---------- EXPRESSIONS ----------
    def expr(self):
        return self.binary_level(self.logical_and, (tokens.OR,))

    def logical_and(self):
        return self.binary_level(self.comparison, (tokens.AND,))

    def comparison(self):
        return self.binary_level(self.additive, Parser.COMPARISONS)

    def additive(self):
        return self.binary_level(self.multiplicative, Parser.ADDITIVE)

    def multiplicative(self):
        return self.binary_level(self.unary, Parser.MULTIPLICATIVE)

    def binary_level(self, operand, kinds):
        """operand ((kinds) operand)*, folded to the left."""
        node = operand()
        while self.current.kind in kinds:
            op = self.eat(self.current.kind)
            node = BinaryOp(op.lexeme, node, operand()).at(op)
        return node

    def unary(self):
        if self.current.kind in Parser.UNARY:
            op = self.eat(self.current.kind)
            return UnaryOp(op.lexeme, self.unary()).at(op)
        return self.primary()

    def primary(self):
        tok = self.current

        if tok.kind == tokens.NUMBER:
            self.eat(tokens.NUMBER)
            if "." in tok.lexeme:
                return NumberLiteral(float(tok.lexeme), True).at(tok)
            return NumberLiteral(int(tok.lexeme)).at(tok)

        if tok.kind == tokens.STRING:
            self.eat(tokens.STRING)
            return StringLiteral(tok.lexeme).at(tok)

        if tok.kind == tokens.NEWLINE:
            self.eat(tokens.NEWLINE)
            return StringLiteral("$").at(tok)

        if tok.kind == tokens.CHAR_LIT:
            self.eat(tokens.CHAR_LIT)
            return CharacterLiteral(tok.lexeme).at(tok)

        if tok.kind in (tokens.TRUE, tokens.FALSE):
            self.eat(tok.kind)
            return BooleanLiteral(tok.kind == tokens.TRUE).at(tok)

        if tok.kind == tokens.IDENTIFIER:
            self.eat(tokens.IDENTIFIER)
            return Identifier(tok.lexeme).at(tok)

        if tok.kind == tokens.LPAREN:
            self.eat(tokens.LPAREN)
            node = self.expr()
            self.eat(tokens.RPAREN, "')' to close '('")
            return node

        self.error("an expression")


def parse(token_list):
    """Parses token_list (ending in EOF) into a Program. Raises ParseError/LexError on the first error."""
    return Parser(token_list).parse()
