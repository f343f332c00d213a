"""
Quiver Environment
==================
The relation graph: an ordered collection of arrows.

Objects are not stored; they are every distinct source or target,
in order of first appearance. Arrows are only ever added, named in place
(an anonymous arrow may acquire a name once) or cleared all together.
"""
from collections import deque
from dataclasses import dataclass
from typing import Optional

from .errors import CompositionError


@dataclass
class Arrow:
    """A directed edge between two objects, optionally named."""
    source: str
    target: str
    name: Optional[str] = None

    def same_edge(self, other: "Arrow") -> bool:
        """Two arrows are the same edge when their endpoints match."""
        return self.source == other.source and self.target == other.target

    def compose(self, other: "Arrow") -> "Arrow":
        """Return self ∘ other: apply `other`, then `self`.

        Raises CompositionError unless other.target == self.source.
        """
        if other.target != self.source:
            raise CompositionError(
                f"Cannot compose {self} after {other}: "
                f"{other.target} is not {self.source}"
            )
        return Arrow(source=other.source, target=self.target)

    def __str__(self) -> str:
        edge = f"{self.source} -> {self.target}"
        return f"{self.name}: {edge}" if self.name else edge


class Environment:
    """
    Mutable relation graph for one session.

    Only the Controller mutates an Environment; everything else should
    treat `arrows` and `objects` as read-only.
    """

    def __init__(self):
        self.arrows: list[Arrow] = []

    @property
    def objects(self) -> list[str]:
        """Every distinct arrow endpoint, in order of first appearance."""
        seen: dict[str, None] = {}
        for arrow in self.arrows:
            seen.setdefault(arrow.source)
            seen.setdefault(arrow.target)
        return list(seen)

    def is_object(self, name: str) -> bool:
        return any(name in (arrow.source, arrow.target) for arrow in self.arrows)

    def is_arrow_name(self, name: str) -> bool:
        return self.find_arrow(name) is not None

    def find_arrow(self, name: str) -> Optional[Arrow]:
        """Look up an arrow by name."""
        for arrow in self.arrows:
            if arrow.name == name:
                return arrow
        return None

    def find_edge(self, source: str, target: str) -> Optional[Arrow]:
        """Look up the arrow from source to target, named or not."""
        wanted = Arrow(source=source, target=target)
        for arrow in self.arrows:
            if arrow.same_edge(wanted):
                return arrow
        return None

    def arrows_touching(self, name: str) -> list[Arrow]:
        return [a for a in self.arrows if name in (a.source, a.target)]

    def add(self, arrow: Arrow) -> Arrow:
        self.arrows.append(arrow)
        return arrow

    def clear(self):
        """Drop every arrow, leaving an empty graph."""
        self.arrows.clear()

    def edge_pairs(self) -> list[str]:
        """Edges as "source-target" tokens, one per arrow, for graph renderers."""
        return [f"{arrow.source}-{arrow.target}" for arrow in self.arrows]

    def route(self, origin: str, destination: str) -> Optional[list[str]]:
        """Shortest path of objects from origin to destination.

        Breadth-first over existing arrows; among equally short paths the
        one using earlier-drawn arrows wins. Returns None if unreachable.
        """
        if origin == destination:
            return [origin]

        previous: dict[str, str] = {origin: origin}
        frontier = deque([origin])
        while frontier:
            current = frontier.popleft()
            for arrow in self.arrows:
                if arrow.source != current or arrow.target in previous:
                    continue
                previous[arrow.target] = current
                if arrow.target == destination:
                    return self._walk_back(previous, origin, destination)
                frontier.append(arrow.target)
        return None

    @staticmethod
    def _walk_back(previous: dict[str, str], origin: str, destination: str) -> list[str]:
        path = [destination]
        while path[-1] != origin:
            path.append(previous[path[-1]])
        path.reverse()
        return path
