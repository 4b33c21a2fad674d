"""Abstract syntax tree of the lexor language. Nodes are passive: the parser builds them and the evaluator walks them.

Every node owns its children and the tree is never mutated after parsing. Nodes compare by structure; the source
position (line/column of the token that started the node) is kept outside of the compared fields.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


class Node:
    """Superclass of all syntax tree nodes. Position is set by the parser."""
    line = None
    column = None

    def at(self, token):
        """Records token's position on self and returns self."""
        self.line = token.line
        self.column = token.column
        return self


class Expression(Node):
    pass


class Statement(Node):
    pass


# ---------- expressions ----------

@dataclass
class NumberLiteral(Expression):
    value: float
    is_float: bool = False


@dataclass
class StringLiteral(Expression):
    text: str


@dataclass
class CharacterLiteral(Expression):
    char: str


@dataclass
class BooleanLiteral(Expression):
    value: bool


@dataclass
class Identifier(Expression):
    name: str


@dataclass
class BinaryOp(Expression):
    op: str
    left: Expression
    right: Expression


@dataclass
class UnaryOp(Expression):
    op: str
    operand: Expression


# ---------- statements ----------

@dataclass
class Declaration(Statement):
    type_tag: str                                             # INT, FLOAT, CHAR or BOOL
    bindings: List[Tuple[str, Optional[Expression]]] = field(default_factory=list)


@dataclass
class Assignment(Statement):
    target: str
    value: Expression


@dataclass
class PrintStatement(Statement):
    expressions: List[Expression] = field(default_factory=list)


@dataclass
class ScanStatement(Statement):
    targets: List[str] = field(default_factory=list)


@dataclass
class IfStatement(Statement):
    """An ELSE IF is a single nested IfStatement as the only statement of else_branch."""
    condition: Expression
    then_branch: List[Statement] = field(default_factory=list)
    else_branch: Optional[List[Statement]] = None


@dataclass
class RepeatStatement(Statement):
    condition: Expression
    body: List[Statement] = field(default_factory=list)


@dataclass
class ForStatement(Statement):
    """Has no condition: the body is an unconditional block that runs once."""
    body: List[Statement] = field(default_factory=list)


@dataclass
class Program(Node):
    declarations: List[Declaration] = field(default_factory=list)
    statements: List[Statement] = field(default_factory=list)
