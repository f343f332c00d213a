"""
Quiver Controller
=================
Applies commands to a session's relation graph and reports Results.

The Controller is the only writer of its Environment. It enforces:
  1. No name is both an object and an arrow's name.
  2. Arrow names are unique.
  3. An anonymous arrow may be named later; a named arrow is never
     renamed or duplicated.

Ordinary failures come back as Result(successful=False, ...). Unknown
commands and mismatched compositions raise ControllerError instead.
There is no rollback: when a list or chain fails partway, whatever already
succeeded stays applied.
"""
import logging
from dataclasses import dataclass
from functools import reduce
from itertools import pairwise
from typing import Iterable, Optional

from .commands import (
    Command, Noop, QueryEntity, QueryRoute, DrawArrow, DrawNamedArrow,
    ComposeArrows, DrawNamedComposition, DrawLinkedArrows, DrawNamedArrowLinks,
    DrawChainedComposition, DrawNamedCompositionChain, CommandList,
)
from .environment import Arrow, Environment
from .errors import ControllerError
from .interpreter import Interpreter
from .lexer import Lexer
from .parser import Parser

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Result:
    """Outcome of applying one command."""
    successful: bool
    message: str = ""

    def __str__(self) -> str:
        return self.message


def check(results: Iterable[Result]) -> Result:
    """Fold several results into one.

    Successful only if every result was. Identical messages are reported
    once; distinct ones are joined with newlines in first-seen order.
    """
    results = list(results)
    messages = dict.fromkeys(r.message for r in results if r.message)
    return Result(
        successful=all(r.successful for r in results),
        message="\n".join(messages),
    )


def _ok(message: str) -> Result:
    return Result(True, message)


def _fail(message: str) -> Result:
    return Result(False, message)


class Evaluator:
    """Lexer → Parser → Interpreter for a single line of input."""

    def __init__(self):
        self.interpreter = Interpreter()

    def determine(self, line: str) -> Command:
        """Turn a line of source into a command.

        Raises LexError, ParseError or InterpretError.
        """
        tokens = Lexer(line).tokenize()
        logger.debug("tokens: %s", tokens)
        tree = Parser(tokens).parse()
        logger.debug("tree: %s", tree)
        command = self.interpreter.lower(tree)
        logger.debug("command: %r", command)
        return command


class Controller:
    """
    Owns one session's relation graph and applies commands to it.

    Usage:
        controller = Controller()
        result = controller.evaluate("f: a -> b")
        result.successful, result.message
    """

    def __init__(self, environment: Optional[Environment] = None):
        self.environment = environment if environment is not None else Environment()
        self.evaluator = Evaluator()

    def evaluate(self, line: str) -> Result:
        """Determine and apply one line of source."""
        return self.apply(self.evaluator.determine(line))

    def reset(self):
        """Clear the graph in place."""
        logger.debug("resetting environment (%d arrows)", len(self.environment.arrows))
        self.environment.clear()

    def apply(self, command: Command) -> Result:
        """Apply a command to the environment."""
        logger.debug("applying %r", command)
        match command:
            case Noop():
                result = _ok("")
            case QueryEntity(name=name):
                result = self.query_entity(name)
            case QueryRoute(origin=origin, destination=destination):
                result = self.query_route(origin, destination)
            case DrawArrow(source=source, target=target):
                result = self.draw_arrow(source, target)
            case DrawNamedArrow(name=name, source=source, target=target):
                result = self.draw_named_arrow(name, source, target)
            case ComposeArrows(source=outer, target=inner):
                result = self.compose_arrows(outer, inner)
            case DrawNamedComposition(name=name, first_arrow=first, second_arrow=second):
                result = self.draw_named_composition(name, first, second)
            case DrawLinkedArrows(objects=objects):
                result = self.draw_linked_arrows(objects)
            case DrawNamedArrowLinks(name=name, objects=objects):
                result = self.draw_named_arrow_links(name, objects)
            case DrawChainedComposition(arrows=arrows):
                result = self.draw_chained_composition(arrows)
            case DrawNamedCompositionChain(name=name, arrows=arrows):
                result = self.draw_named_composition_chain(name, arrows)
            case CommandList(subcommands=subcommands):
                result = self.handle_list(subcommands)
            case _:
                raise ControllerError(f"Unknown command: {command!r}")

        if not result.successful:
            logger.info("%s failed: %s", type(command).__name__, result.message)
        return result

    # ─────────────────────────────────────────────────────────
    #  Queries
    # ─────────────────────────────────────────────────────────

    def query_entity(self, name: str) -> Result:
        env = self.environment
        arrow = env.find_arrow(name)
        if arrow is not None:
            return _ok(str(arrow))
        if env.is_object(name):
            touching = ", ".join(str(a) for a in env.arrows_touching(name))
            return _ok(f"{name} is an object with arrows: {touching}")
        return _fail(f"Nothing named {name}")

    def query_route(self, origin: str, destination: str) -> Result:
        for endpoint in (origin, destination):
            if not self.environment.is_object(endpoint):
                return _fail(f"Nothing named {endpoint}")
        path = self.environment.route(origin, destination)
        if path is None:
            return _fail(f"No route from {origin} to {destination}")
        return _ok(" -> ".join(path))

    # ─────────────────────────────────────────────────────────
    #  Arrows
    # ─────────────────────────────────────────────────────────

    def draw_arrow(self, source: str, target: str) -> Result:
        env = self.environment
        if env.is_arrow_name(source) or env.is_arrow_name(target):
            return _fail("Arrows can't point to arrows")

        existing = env.find_edge(source, target)
        if existing is not None:
            return _ok(f"Arrow {existing} already exists")

        arrow = env.add(Arrow(source=source, target=target))
        return _ok(f"Drew arrow {arrow}")

    def draw_named_arrow(self, name: str, source: str, target: str) -> Result:
        env = self.environment
        if env.is_object(name) or name in (source, target):
            return _fail("Objects can't also be arrows")
        if env.is_arrow_name(source) or env.is_arrow_name(target):
            return _fail("Arrows can't point to arrows")

        existing = env.find_edge(source, target)
        if existing is not None and existing.name == name:
            return _ok(f"Arrow {existing} already exists")
        if existing is not None and existing.name:
            return _fail(f"Arrow {source} -> {target} is already named {existing.name}")
        if env.is_arrow_name(name):
            return _fail(f"Arrow name {name} is already taken")

        if existing is not None:
            existing.name = name
            return _ok(f"Named arrow {existing}")

        arrow = env.add(Arrow(source=source, target=target, name=name))
        return _ok(f"Drew arrow {arrow}")

    def draw_linked_arrows(self, objects: Iterable[str]) -> Result:
        return check(self.draw_arrow(s, t) for s, t in pairwise(objects))

    def draw_named_arrow_links(self, name: str, objects: tuple[str, ...]) -> Result:
        """Draw each link, then name the first -> last arrow."""
        links = self.draw_linked_arrows(objects)
        if not links.successful:
            return links
        return check([links, self.draw_named_arrow(name, objects[0], objects[-1])])

    # ─────────────────────────────────────────────────────────
    #  Composition
    # ─────────────────────────────────────────────────────────

    def _find_arrows(self, names: Iterable[str]) -> tuple[list[Arrow], Optional[Result]]:
        """Look up arrows by name; the Result reports any that are missing."""
        found, missing = [], []
        for name in names:
            arrow = self.environment.find_arrow(name)
            if arrow is None:
                missing.append(_fail(f"No arrow named {name}"))
            else:
                found.append(arrow)
        return found, (check(missing) if missing else None)

    def compose_arrows(self, outer: str, inner: str) -> Result:
        """Draw outer ∘ inner. Raises CompositionError if they don't meet."""
        arrows, failure = self._find_arrows([outer, inner])
        if failure is not None:
            return failure
        composite = arrows[0].compose(arrows[1])
        return self.draw_arrow(composite.source, composite.target)

    def draw_named_composition(self, name: str, first_arrow: str, second_arrow: str) -> Result:
        arrows, failure = self._find_arrows([first_arrow, second_arrow])
        if failure is not None:
            return failure
        composite = arrows[0].compose(arrows[1])
        return self.draw_named_arrow(name, composite.source, composite.target)

    def _compose_chain(self, names: tuple[str, ...]) -> tuple[Result, Optional[Arrow]]:
        """Draw every adjacent composite, then compute the whole one.

        The composite is None when any adjacent composition failed.
        """
        steps = check(self.compose_arrows(outer, inner) for outer, inner in pairwise(names))
        if not steps.successful:
            return steps, None
        arrows, _ = self._find_arrows(names)
        return steps, reduce(Arrow.compose, arrows)

    def draw_chained_composition(self, arrows: tuple[str, ...]) -> Result:
        steps, composite = self._compose_chain(arrows)
        if composite is None:
            return steps
        return check([steps, self.draw_arrow(composite.source, composite.target)])

    def draw_named_composition_chain(self, name: str, arrows: tuple[str, ...]) -> Result:
        steps, composite = self._compose_chain(arrows)
        if composite is None:
            return steps
        return check([steps, self.draw_named_arrow(name, composite.source, composite.target)])

    # ─────────────────────────────────────────────────────────
    #  Lists
    # ─────────────────────────────────────────────────────────

    def handle_list(self, subcommands: Iterable[Command]) -> Result:
        """Apply every subcommand in order, even after a failure."""
        return check([self.apply(command) for command in subcommands])
