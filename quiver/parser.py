"""
Quiver Parser
=============
Parser that builds an expression tree from the token
list produced by the Lexer.

Grammar (whitespace already dropped):
    line       := statement (';' statement)*
    statement  := LABEL | LABEL operator statement
    operator   := ':' | '->' | '.' | '--'

Every multi-token form is exactly "label, operator, expression", so each
accepted line has a single parse and chains associate to the right:
    a -> b -> c   parses as   arrow(a, arrow(b, c))
"""
from dataclasses import dataclass
from enum import Enum

from .errors import ParseError
from .lexer import Token, TokenType


# ─────────────────────────────────────────────────────────────
#  Expression Tree
# ─────────────────────────────────────────────────────────────

class Operator(Enum):
    """Binary operators, tagged by what they build."""
    DEFN  = "defn"    # f: ...
    ARROW = "arrow"   # a -> b
    DOT   = "dot"     # g . f
    ROUTE = "route"   # a -- b


OPERATOR_TOKENS = {
    TokenType.COLON: Operator.DEFN,
    TokenType.ARROW: Operator.ARROW,
    TokenType.DOT:   Operator.DOT,
    TokenType.ROUTE: Operator.ROUTE,
}

OPERATOR_SYMBOLS = {
    Operator.DEFN:  ":",
    Operator.ARROW: " ->",
    Operator.DOT:   " .",
    Operator.ROUTE: " --",
}


@dataclass(frozen=True)
class ExpressionNode:
    """Base class for all expression tree nodes."""
    pass


@dataclass(frozen=True)
class LabelNode(ExpressionNode):
    """A leaf naming an object or an arrow."""
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class OperationNode(ExpressionNode):
    """A binary operation: left <operator> right."""
    operator: Operator
    left: ExpressionNode
    right: ExpressionNode

    def __str__(self) -> str:
        # Walk the right spine; chains can be thousands of links long.
        parts = []
        node: ExpressionNode = self
        while isinstance(node, OperationNode):
            parts.append(f"{node.left}{OPERATOR_SYMBOLS[node.operator]} ")
            node = node.right
        parts.append(str(node))
        return "".join(parts)


@dataclass(frozen=True)
class StatementListNode(ExpressionNode):
    """Semicolon-separated statements, in source order. Never nested."""
    statements: tuple[ExpressionNode, ...] = ()

    def __str__(self) -> str:
        return "; ".join(str(stmt) for stmt in self.statements)


# ─────────────────────────────────────────────────────────────
#  Parser
# ─────────────────────────────────────────────────────────────

def _render(tokens: list[Token]) -> str:
    return " ".join(token.value for token in tokens)


class Parser:
    """
    Parser for one line of Quiver.

    Usage:
        parser = Parser(tokens)
        tree = parser.parse()

    The token list is modified in place: whitespace tokens are removed
    before parsing starts.
    """

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens

    def parse(self) -> ExpressionNode:
        """Parse the token list into a single expression tree."""
        self.tokens[:] = [t for t in self.tokens if t.type != TokenType.WHITESPACE]
        if not self.tokens:
            raise ParseError("Nothing to parse")

        if any(t.type == TokenType.SEMICOLON for t in self.tokens):
            return self._parse_statements(self.tokens)
        return self._parse_expression(self.tokens)

    def _parse_statements(self, tokens: list[Token]) -> StatementListNode:
        """Split on ';' and parse each non-empty segment independently."""
        segments: list[list[Token]] = [[]]
        for token in tokens:
            if token.type == TokenType.SEMICOLON:
                segments.append([])
            else:
                segments[-1].append(token)

        statements = tuple(
            self._parse_expression(segment) for segment in segments if segment
        )
        if not statements:
            raise ParseError(f"No statements in {_render(tokens)!r}")
        return StatementListNode(statements=statements)

    def _parse_expression(self, tokens: list[Token]) -> ExpressionNode:
        """Parse: LABEL (operator LABEL)*, folded into a right-leaning tree."""
        if not tokens:
            raise ParseError("Expected an expression, found nothing")

        links: list[tuple[str, Operator]] = []
        pos = 0
        while len(tokens) - pos > 1:
            links.append(self._parse_link(tokens, pos))
            pos += 2

        last = tokens[pos]
        if last.type != TokenType.LABEL:
            raise ParseError(
                f"Expected a label, got {last.type.name} ({last.value!r}) "
                f"at col {last.col}"
            )

        node: ExpressionNode = LabelNode(last.value)
        for name, operator in reversed(links):
            node = OperationNode(operator=operator, left=LabelNode(name), right=node)
        return node

    def _parse_link(self, tokens: list[Token], pos: int) -> tuple[str, Operator]:
        """Parse the LABEL operator pair at `pos`; something must follow it."""
        first, second = tokens[pos], tokens[pos + 1]
        if first.type != TokenType.LABEL:
            raise ParseError(
                f"Cannot parse {_render(tokens[pos:])!r}: expected a label at col "
                f"{first.col}, got {first.value!r}"
            )
        operator = OPERATOR_TOKENS.get(second.type)
        if operator is None:
            raise ParseError(
                f"Cannot parse {_render(tokens[pos:])!r}: expected an operator at col "
                f"{second.col}, got {second.value!r}"
            )
        if pos + 2 == len(tokens):
            raise ParseError(
                f"Cannot parse {_render(tokens[pos:])!r}: missing right-hand side "
                f"after {second.value!r}"
            )
        return first.value, operator


def parse(tokens: list[Token]) -> ExpressionNode:
    """Shorthand for Parser(tokens).parse()."""
    return Parser(tokens).parse()
