"""
Quiver Commands
===============
The closed set of commands the Interpreter lowers expression trees into.
Commands are immutable values: built once, applied once by the Controller.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class Command:
    """Base class for all commands."""
    pass


@dataclass(frozen=True)
class Noop(Command):
    pass


@dataclass(frozen=True)
class QueryEntity(Command):
    """Describe the object or arrow called `name`."""
    name: str


@dataclass(frozen=True)
class QueryRoute(Command):
    """Find a path of arrows from origin to destination: a -- d."""
    origin: str
    destination: str


@dataclass(frozen=True)
class DrawArrow(Command):
    """a -> b"""
    source: str
    target: str


@dataclass(frozen=True)
class DrawNamedArrow(Command):
    """f: a -> b"""
    name: str
    source: str
    target: str


@dataclass(frozen=True)
class ComposeArrows(Command):
    """g . f, referring to both arrows by name.

    `source` is the outer (left) arrow and `target` the inner (right) one,
    so the composite applies `target` first.
    """
    source: str
    target: str


@dataclass(frozen=True)
class DrawNamedComposition(Command):
    """h: g . f"""
    name: str
    first_arrow: str
    second_arrow: str


@dataclass(frozen=True)
class DrawLinkedArrows(Command):
    """a -> b -> c, drawn pairwise."""
    objects: tuple[str, ...]


@dataclass(frozen=True)
class DrawNamedArrowLinks(Command):
    """f: a -> b -> c, drawn pairwise with f naming a -> c."""
    name: str
    objects: tuple[str, ...]


@dataclass(frozen=True)
class DrawChainedComposition(Command):
    """h . g . f"""
    arrows: tuple[str, ...]


@dataclass(frozen=True)
class DrawNamedCompositionChain(Command):
    """i: h . g . f"""
    name: str
    arrows: tuple[str, ...]


@dataclass(frozen=True)
class CommandList(Command):
    """Commands from semicolon-separated statements, applied in order."""
    subcommands: tuple[Command, ...]
