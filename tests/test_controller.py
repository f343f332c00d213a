"""
Quiver Test Suite — Relation Graph & Controller
================================================
Tests for arrows, the environment, result aggregation and every
controller operation.

Usage:
    python -m pytest tests/test_controller.py -v
"""
import sys
import os
import unittest
from itertools import islice, product
from string import ascii_lowercase

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from quiver.commands import (
    Command, CommandList, ComposeArrows, DrawArrow, DrawLinkedArrows, Noop,
)
from quiver.controller import Controller, Evaluator, Result, check
from quiver.environment import Arrow, Environment
from quiver.errors import CompositionError, ControllerError, InterpretError, LexError


def _names(count: int) -> list[str]:
    return ["".join(p) for p in islice(product(ascii_lowercase, repeat=3), count)]


# ─────────────────────────────────────────────
#  Arrow & Environment
# ─────────────────────────────────────────────

class TestArrow(unittest.TestCase):

    def test_source_and_target(self):
        arrow = Arrow(source="source", target="target")
        self.assertEqual(arrow.source, "source")
        self.assertEqual(arrow.target, "target")
        self.assertIsNone(arrow.name)

    def test_compose(self):
        arrow = Arrow(source="source", target="target")
        another = Arrow(source="target", target="another_target")
        composed = another.compose(arrow)
        self.assertEqual(composed.source, "source")
        self.assertEqual(composed.target, "another_target")
        self.assertIsNone(composed.name)

    def test_compose_mismatch_raises(self):
        f = Arrow("a", "b", "f")
        h = Arrow("c", "d", "h")
        with self.assertRaises(CompositionError):
            h.compose(f)

    def test_same_edge_ignores_name(self):
        self.assertTrue(Arrow("a", "b", "f").same_edge(Arrow("a", "b")))
        self.assertFalse(Arrow("a", "b").same_edge(Arrow("b", "a")))

    def test_str(self):
        self.assertEqual(str(Arrow("a", "b")), "a -> b")
        self.assertEqual(str(Arrow("a", "b", "f")), "f: a -> b")


class TestEnvironment(unittest.TestCase):

    def setUp(self):
        self.env = Environment()
        for source, target in [("a", "b"), ("b", "c"), ("c", "a"), ("b", "d")]:
            self.env.add(Arrow(source, target))

    def test_objects_in_first_appearance_order(self):
        self.assertEqual(self.env.objects, ["a", "b", "c", "d"])

    def test_edge_pairs(self):
        self.assertEqual(self.env.edge_pairs(), ["a-b", "b-c", "c-a", "b-d"])

    def test_find_edge(self):
        self.assertIsNotNone(self.env.find_edge("b", "d"))
        self.assertIsNone(self.env.find_edge("d", "b"))

    def test_route_shortest(self):
        self.env.add(Arrow("a", "d"))
        self.assertEqual(self.env.route("a", "d"), ["a", "d"])

    def test_route_ties_follow_insertion_order(self):
        env = Environment()
        for source, target in [("a", "x"), ("a", "y"), ("y", "z"), ("x", "z")]:
            env.add(Arrow(source, target))
        self.assertEqual(env.route("a", "z"), ["a", "x", "z"])

    def test_route_handles_cycles(self):
        self.assertEqual(self.env.route("c", "d"), ["c", "a", "b", "d"])
        self.assertIsNone(self.env.route("d", "a"))

    def test_trivial_route(self):
        self.assertEqual(self.env.route("a", "a"), ["a"])

    def test_clear(self):
        self.env.clear()
        self.assertEqual(self.env.arrows, [])
        self.assertEqual(self.env.objects, [])


# ─────────────────────────────────────────────
#  Result aggregation
# ─────────────────────────────────────────────

class TestCheck(unittest.TestCase):

    def test_identical_messages_reported_once(self):
        result = check([Result(True, "same"), Result(True, "same")])
        self.assertTrue(result.successful)
        self.assertEqual(result.message, "same")

    def test_distinct_messages_joined(self):
        result = check([Result(True, "one"), Result(False, "two"), Result(True, "one")])
        self.assertFalse(result.successful)
        self.assertEqual(result.message, "one\ntwo")

    def test_empty(self):
        self.assertEqual(check([]), Result(True, ""))


# ─────────────────────────────────────────────
#  Evaluator
# ─────────────────────────────────────────────

class TestEvaluator(unittest.TestCase):

    def test_determine(self):
        self.assertEqual(Evaluator().determine("a -> b"), DrawArrow(source="a", target="b"))

    def test_errors_propagate(self):
        with self.assertRaises(LexError):
            Evaluator().determine("a => b")
        with self.assertRaises(InterpretError):
            Evaluator().determine("f: a")


# ─────────────────────────────────────────────
#  Controller
# ─────────────────────────────────────────────

class ControllerTestCase(unittest.TestCase):

    def setUp(self):
        self.controller = Controller()
        self.env = self.controller.environment

    def evaluate(self, line: str) -> Result:
        return self.controller.evaluate(line)

    def assertSucceeds(self, line: str) -> Result:
        result = self.evaluate(line)
        self.assertTrue(result.successful, f"{line!r} failed: {result.message}")
        return result

    def assertFails(self, line: str) -> Result:
        result = self.evaluate(line)
        self.assertFalse(result.successful, f"{line!r} unexpectedly succeeded")
        return result


class TestDrawing(ControllerTestCase):

    def test_draw_arrow(self):
        result = self.assertSucceeds("hello -> world")
        self.assertEqual(len(self.env.arrows), 1)
        arrow = self.env.arrows[0]
        self.assertEqual((arrow.source, arrow.target, arrow.name), ("hello", "world", None))
        self.assertEqual(self.env.objects, ["hello", "world"])
        self.assertEqual(result.message, "Drew arrow hello -> world")

    def test_draw_arrow_is_idempotent(self):
        self.assertSucceeds("a -> b")
        result = self.assertSucceeds("a -> b")
        self.assertIn("already exists", result.message)
        self.assertEqual(len(self.env.arrows), 1)

    def test_draw_arrow_to_arrow_fails(self):
        self.assertSucceeds("f: a -> b")
        result = self.assertFails("x -> f")
        self.assertEqual(result.message, "Arrows can't point to arrows")
        self.assertFails("f -> x")

    def test_linked_arrows(self):
        self.assertSucceeds("a -> b -> c")
        self.assertEqual(self.env.objects, ["a", "b", "c"])
        self.assertEqual(self.env.edge_pairs(), ["a-b", "b-c"])

    def test_long_chain_draws_pairwise(self):
        names = ["a", "b", "c", "d", "e"]
        self.assertSucceeds(" -> ".join(names))
        self.assertEqual(len(self.env.arrows), len(names) - 1)

    def test_chain_of_two_thousand_links(self):
        names = _names(2001)
        result = self.assertSucceeds(" -> ".join(names))
        self.assertEqual(len(self.env.arrows), 2000)
        self.assertEqual(self.env.objects, names)
        self.assertIn(f"Drew arrow {names[-2]} -> {names[-1]}", result.message)

    def test_named_chain_of_two_thousand_links(self):
        names = _names(2001)
        self.assertSucceeds("z: " + " -> ".join(names))
        self.assertEqual(str(self.env.find_arrow("z")), f"z: {names[0]} -> {names[-1]}")
        self.assertEqual(len(self.env.arrows), 2001)

    def test_definition(self):
        self.assertSucceeds("hello: there -> world")
        arrow = self.env.find_arrow("hello")
        self.assertEqual((arrow.source, arrow.target), ("there", "world"))

    def test_naming_an_anonymous_arrow(self):
        self.assertSucceeds("a -> b")
        result = self.assertSucceeds("f: a -> b")
        self.assertEqual(result.message, "Named arrow f: a -> b")
        self.assertEqual(len(self.env.arrows), 1)
        self.assertEqual(self.env.arrows[0].name, "f")

    def test_redefining_same_arrow_is_satisfied(self):
        self.assertSucceeds("f: a -> b")
        result = self.assertSucceeds("f: a -> b")
        self.assertIn("already exists", result.message)
        self.assertEqual(len(self.env.arrows), 1)

    def test_named_arrow_cannot_be_renamed(self):
        self.assertSucceeds("f: a -> b")
        result = self.assertFails("g: a -> b")
        self.assertIn("already named f", result.message)
        self.assertIsNone(self.env.find_arrow("g"))

    def test_objects_cannot_be_arrows(self):
        self.assertSucceeds("f: a -> b")
        result = self.assertFails("a: x -> y")
        self.assertEqual(result.message, "Objects can't also be arrows")

    def test_name_cannot_be_own_endpoint(self):
        self.assertFails("a: a -> b")
        self.assertEqual(self.env.arrows, [])

    def test_duplicate_name_fails(self):
        self.assertSucceeds("f: a -> b")
        result = self.assertFails("f: c -> d")
        self.assertIn("already taken", result.message)
        self.assertEqual(len(self.env.arrows), 1)

    def test_named_links(self):
        self.assertSucceeds("f: a -> b -> c")
        self.assertEqual(self.env.edge_pairs(), ["a-b", "b-c", "a-c"])
        self.assertEqual(str(self.env.find_arrow("f")), "f: a -> c")

    def test_named_links_stop_when_links_fail(self):
        self.assertSucceeds("g: x -> y")
        self.assertFails("f: a -> g -> c")
        self.assertIsNone(self.env.find_arrow("f"))


class TestComposition(ControllerTestCase):

    def setUp(self):
        super().setUp()
        self.assertSucceeds("f: a -> b")
        self.assertSucceeds("g: b -> c")
        self.assertSucceeds("h: c -> d")

    def test_named_composition(self):
        self.assertSucceeds("k: g . f")
        arrow = self.env.find_arrow("k")
        self.assertEqual((arrow.source, arrow.target), ("a", "c"))

    def test_anonymous_composition(self):
        self.assertSucceeds("g . f")
        arrow = self.env.find_edge("a", "c")
        self.assertIsNotNone(arrow)
        self.assertIsNone(arrow.name)

    def test_named_composition_names_existing_edge(self):
        self.assertSucceeds("g . f")
        self.assertSucceeds("k: g . f")
        self.assertEqual(self.env.find_edge("a", "c").name, "k")
        self.assertEqual(len(self.env.arrows), 4)

    def test_chained_composition(self):
        self.assertSucceeds("i: h.g.f")
        arrow = self.env.find_arrow("i")
        self.assertEqual((arrow.source, arrow.target), ("a", "d"))
        # the adjacent composites are drawn along the way
        self.assertIsNotNone(self.env.find_edge("b", "d"))
        self.assertIsNotNone(self.env.find_edge("a", "c"))

    def test_unnamed_chain(self):
        self.assertSucceeds("h . g . f")
        self.assertIsNotNone(self.env.find_edge("a", "d"))

    def test_missing_arrow(self):
        result = self.assertFails("k: g . z")
        self.assertEqual(result.message, "No arrow named z")
        self.assertIsNone(self.env.find_arrow("k"))

    def test_chain_with_missing_arrow_names_nothing(self):
        result = self.assertFails("i: h . z . f")
        self.assertIn("No arrow named z", result.message)
        self.assertIsNone(self.env.find_arrow("i"))

    def test_mismatched_composition_raises(self):
        with self.assertRaises(CompositionError):
            self.evaluate("k: f . h")
        with self.assertRaises(CompositionError):
            self.evaluate("f . g")

    def test_composing_objects_fails(self):
        self.assertFails("a . b")


class TestQueries(ControllerTestCase):

    def test_query_object(self):
        self.assertSucceeds("hello -> there")
        result = self.assertSucceeds("hello")
        self.assertEqual(result.message, "hello is an object with arrows: hello -> there")

    def test_query_arrow(self):
        self.assertSucceeds("f: a -> b")
        self.assertEqual(self.assertSucceeds("f").message, "f: a -> b")

    def test_query_unknown(self):
        self.assertEqual(self.assertFails("nobody").message, "Nothing named nobody")

    def test_routes(self):
        self.assertSucceeds("a -> b -> c -> d")
        self.assertSucceeds("e -> f")
        self.assertEqual(self.assertSucceeds("a--c").message, "a -> b -> c")
        self.assertEqual(self.assertSucceeds("a -- d").message, "a -> b -> c -> d")
        self.assertEqual(self.assertFails("a -- f").message, "No route from a to f")

    def test_route_to_unknown_object(self):
        self.assertSucceeds("a -> b")
        self.assertEqual(self.assertFails("a -- z").message, "Nothing named z")

    def test_route_follows_direction(self):
        self.assertSucceeds("a -> b")
        self.assertFails("b -- a")


class TestLists(ControllerTestCase):

    def test_statement_list(self):
        command = self.controller.evaluator.determine("a -> b; c -> d")
        self.assertIsInstance(command, CommandList)
        self.assertEqual(len(command.subcommands), 2)
        self.assertTrue(all(isinstance(c, DrawArrow) for c in command.subcommands))

        result = self.controller.apply(command)
        self.assertTrue(result.successful)
        self.assertEqual(self.env.edge_pairs(), ["a-b", "c-d"])

    def test_list_keeps_going_after_failure(self):
        result = self.assertFails("f: a -> b; a: x -> y; c -> d")
        self.assertIn("Objects can't also be arrows", result.message)
        self.assertIsNotNone(self.env.find_edge("c", "d"))
        self.assertIsNotNone(self.env.find_arrow("f"))

    def test_definitions_then_composition_in_one_line(self):
        self.assertSucceeds("f: a -> b; g: b -> c; h: c -> d; i: h.g.f")
        self.assertEqual(str(self.env.find_arrow("i")), "i: a -> d")


class TestControllerLifecycle(ControllerTestCase):

    def test_noop(self):
        self.assertEqual(self.controller.apply(Noop()), Result(True, ""))

    def test_unknown_command_raises(self):
        class Bogus(Command):
            pass

        with self.assertRaises(ControllerError):
            self.controller.apply(Bogus())

    def test_reset(self):
        self.assertSucceeds("f: a -> b")
        self.controller.reset()
        self.assertEqual(self.env.arrows, [])
        self.assertSucceeds("a: x -> y")

    def test_shared_environment(self):
        env = Environment()
        Controller(env).apply(DrawLinkedArrows(objects=("a", "b", "c")))
        self.assertEqual(env.objects, ["a", "b", "c"])

    def test_apply_compose_directly(self):
        self.assertSucceeds("f: a -> b; g: b -> c")
        result = self.controller.apply(ComposeArrows(source="g", target="f"))
        self.assertTrue(result.successful)


if __name__ == "__main__":
    unittest.main(verbosity=2)
