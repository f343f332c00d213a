# Quiver — a small language for drawing and composing arrows
"""
Quiver: declare directed, optionally named arrows between objects and
compose them, in notation borrowed from category theory.

    f: a -> b; g: b -> c
    h: g . f
    a -- c
"""
from .errors import (
    QuiverError, LexError, ParseError, InterpretError,
    ControllerError, CompositionError,
)
from .lexer import Lexer, Token, TokenType, scan
from .parser import (
    Parser, Operator, ExpressionNode, LabelNode, OperationNode,
    StatementListNode, parse,
)
from .commands import (
    Command, Noop, QueryEntity, QueryRoute, DrawArrow, DrawNamedArrow,
    ComposeArrows, DrawNamedComposition, DrawLinkedArrows, DrawNamedArrowLinks,
    DrawChainedComposition, DrawNamedCompositionChain, CommandList,
)
from .interpreter import Interpreter, lower
from .environment import Arrow, Environment
from .controller import Controller, Evaluator, Result, check
from .config import ShellConfig
from .shell import Shell

__version__ = "0.1.0"
__all__ = [
    "QuiverError", "LexError", "ParseError", "InterpretError",
    "ControllerError", "CompositionError",
    "Lexer", "Token", "TokenType", "scan",
    "Parser", "Operator", "ExpressionNode", "LabelNode", "OperationNode",
    "StatementListNode", "parse",
    "Command", "Noop", "QueryEntity", "QueryRoute", "DrawArrow",
    "DrawNamedArrow", "ComposeArrows", "DrawNamedComposition",
    "DrawLinkedArrows", "DrawNamedArrowLinks", "DrawChainedComposition",
    "DrawNamedCompositionChain", "CommandList",
    "Interpreter", "lower",
    "Arrow", "Environment",
    "Controller", "Evaluator", "Result", "check",
    "ShellConfig", "Shell",
]
