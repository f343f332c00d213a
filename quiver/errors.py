"""
Quiver Errors
=============
Exception hierarchy for the Quiver language.

Input errors (fatal to the current line only):
  - LexError:       unrecognized character sequence
  - ParseError:     token sequence does not match the grammar
  - InterpretError: well-formed tree, invalid node combination

Controller errors (programmer-fatal, never ordinary domain failures):
  - ControllerError:  unknown command variant
  - CompositionError: composing arrows whose endpoints do not meet

Ordinary domain failures (duplicate names, missing arrows, broken routes)
are reported as Result values, not exceptions.
"""


class QuiverError(Exception):
    """Base class for every error raised by Quiver."""
    pass


class LexError(QuiverError):
    """Raised when no token pattern matches the remaining input."""

    def __init__(self, remainder: str, col: int):
        self.remainder = remainder
        self.col = col
        super().__init__(f"Unrecognized input at col {col}: {remainder!r}")


class ParseError(QuiverError):
    """Raised when the token stream cannot be parsed into an expression."""
    pass


class InterpretError(QuiverError):
    """Raised when an expression tree cannot be lowered to a command."""
    pass


class ControllerError(QuiverError):
    """Raised for conditions the controller cannot recover from."""
    pass


class CompositionError(ControllerError):
    """Raised when composing arrows whose endpoints do not meet."""
    pass
