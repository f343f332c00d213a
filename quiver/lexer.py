"""
Quiver Lexer
============
Scans a line of Quiver source into an ordered list of typed tokens.

Each token kind has a regex pattern; at every position the patterns are
tried in a fixed priority order and the first non-empty match wins.
Whitespace tokens are emitted too and dropped later by the parser, so the
lexer never needs to look ahead or backtrack.
"""
import re
from dataclasses import dataclass
from enum import Enum, auto

from .errors import LexError


class TokenType(Enum):
    """All token types in the Quiver language."""
    LABEL       = auto()   # hello, f'
    WHITESPACE  = auto()
    COLON       = auto()   # :
    ARROW       = auto()   # ->
    DOT         = auto()   # .
    SEMICOLON   = auto()   # ;
    ROUTE       = auto()   # --


@dataclass(frozen=True)
class Token:
    """A single token from a line of Quiver source."""
    type: TokenType
    value: str
    col: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, C{self.col})"


# Tried in this order at each position; the first non-empty match wins.
TOKEN_PATTERNS: list[tuple[TokenType, re.Pattern]] = [
    (TokenType.LABEL,      re.compile(r"[a-zA-Z']+")),
    (TokenType.ARROW,      re.compile(r"->")),
    (TokenType.WHITESPACE, re.compile(r"\s+")),
    (TokenType.COLON,      re.compile(r":")),
    (TokenType.DOT,        re.compile(r"\.")),
    (TokenType.SEMICOLON,  re.compile(r";")),
    (TokenType.ROUTE,      re.compile(r"--")),
]


class Lexer:
    """
    Tokenizes one line of Quiver source.

    Usage:
        lexer = Lexer("f: a -> b")
        tokens = lexer.tokenize()
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0

    def _match_next(self) -> Token:
        for token_type, pattern in TOKEN_PATTERNS:
            match = pattern.match(self.source, self.pos)
            if match and match.end() > self.pos:
                token = Token(token_type, match.group(), self.pos + 1)
                self.pos = match.end()
                return token
        raise LexError(self.source[self.pos:], self.pos + 1)

    def tokenize(self) -> list[Token]:
        """Tokenize the entire source, whitespace included."""
        tokens = []
        while self.pos < len(self.source):
            tokens.append(self._match_next())
        return tokens


def scan(text: str) -> list[Token]:
    """Shorthand for Lexer(text).tokenize()."""
    return Lexer(text).tokenize()
