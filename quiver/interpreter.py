"""
Quiver Interpreter
==================
Lowers an expression tree into a single Command.

The parser builds right-associative binary trees; lowering flattens them.
For `a -> b -> c` the right side `b -> c` lowers to a DrawArrow, which the
outer arrow merges into a three-object DrawLinkedArrows. Longer chains keep
prepending. Compositions (`h . g . f`) flatten the same way, and a
definition (`name: ...`) re-tags whatever its right side lowered to as the
matching named command.
"""
from .commands import (
    Command, Noop, QueryEntity, QueryRoute, DrawArrow, DrawNamedArrow,
    ComposeArrows, DrawNamedComposition, DrawLinkedArrows, DrawNamedArrowLinks,
    DrawChainedComposition, DrawNamedCompositionChain, CommandList,
)
from .errors import InterpretError
from .parser import ExpressionNode, LabelNode, OperationNode, StatementListNode


class Interpreter:
    """
    Tree-lowering pass from expressions to commands.

    Usage:
        interp = Interpreter()
        command = interp.lower(tree)
    """

    def lower(self, node: ExpressionNode | None) -> Command:
        """Lower an expression tree into a command."""
        match node:
            case None:
                return Noop()
            case LabelNode(value=name):
                return QueryEntity(name=name)
            case StatementListNode(statements=statements):
                return CommandList(subcommands=tuple(self.lower(s) for s in statements))
            case OperationNode():
                return self._lower_spine(node)
            case _:
                raise InterpretError(f"Cannot lower {type(node).__name__}: {node}")

    def _lower_spine(self, node: OperationNode) -> Command:
        """Lower a chain of operations innermost-first.

        The right spine is walked in a loop; each operation receives the
        command its right side already lowered to.
        """
        spine: list[OperationNode] = []
        current: ExpressionNode = node
        while isinstance(current, OperationNode):
            spine.append(current)
            current = current.right

        command = self.lower(current)
        for operation in reversed(spine):
            lowerer = getattr(self, f"_lower_{operation.operator.value}", None)
            if lowerer is None:
                raise InterpretError(f"Unknown operator: {operation.operator}")
            command = lowerer(operation, command)
        return command

    # ─────────────────────────────────────────────────────────
    #  Operators
    # ─────────────────────────────────────────────────────────

    def _lower_defn(self, node: OperationNode, right: Command) -> Command:
        """name: <arrow or composition>"""
        if not isinstance(node.left, LabelNode):
            raise InterpretError(f"Definition name {node.left} is not a label")
        name = node.left.value

        match right:
            case ComposeArrows(source=first, target=second):
                return DrawNamedComposition(name=name, first_arrow=first, second_arrow=second)
            case DrawArrow(source=source, target=target):
                return DrawNamedArrow(name=name, source=source, target=target)
            case DrawLinkedArrows(objects=objects):
                return DrawNamedArrowLinks(name=name, objects=objects)
            case DrawChainedComposition(arrows=arrows):
                return DrawNamedCompositionChain(name=name, arrows=arrows)
            case other:
                raise InterpretError(
                    f"Cannot define {name} as {node.right}: "
                    f"not an arrow or composition of arrows ({type(other).__name__})"
                )

    def _lower_arrow(self, node: OperationNode, right: Command) -> Command:
        """a -> b, a -> b -> c, ..."""
        if not isinstance(node.left, LabelNode):
            raise InterpretError(f"Arrows must start from a named object, not {node.left}")
        source = node.left.value

        if isinstance(node.right, LabelNode):
            return DrawArrow(source=source, target=node.right.value)

        match right:
            case DrawArrow(source=middle, target=target):
                return DrawLinkedArrows(objects=(source, middle, target))
            case DrawLinkedArrows(objects=objects):
                return DrawLinkedArrows(objects=(source, *objects))
            case other:
                raise InterpretError(
                    f"Cannot draw an arrow from {source} to {node.right} "
                    f"({type(other).__name__})"
                )

    def _lower_dot(self, node: OperationNode, right: Command) -> Command:
        """g . f, h . g . f, ..."""
        if not isinstance(node.left, LabelNode):
            raise InterpretError(f"First element of a composition must be a label, not {node.left}")
        outer = node.left.value

        if isinstance(node.right, LabelNode):
            return ComposeArrows(source=outer, target=node.right.value)

        match right:
            case ComposeArrows(source=middle, target=inner):
                return DrawChainedComposition(arrows=(outer, middle, inner))
            case DrawChainedComposition(arrows=arrows):
                return DrawChainedComposition(arrows=(outer, *arrows))
            case other:
                raise InterpretError(
                    f"Cannot compose {outer} with {node.right} ({type(other).__name__})"
                )

    def _lower_route(self, node: OperationNode, right: Command) -> Command:
        """a -- b"""
        if not (isinstance(node.left, LabelNode) and isinstance(node.right, LabelNode)):
            raise InterpretError(f"Can only route between named objects, not {node}")
        return QueryRoute(origin=node.left.value, destination=node.right.value)


def lower(node: ExpressionNode | None) -> Command:
    """Shorthand for Interpreter().lower(node)."""
    return Interpreter().lower(node)
