import logging
import unittest
from unittest import mock

from wordsearch.core.constants import BuildState, ScanMode
from wordsearch.core.exceptions import (
    BuildStateError,
    ConfigurationError,
    SolverTimeoutError,
    UnsatisfiableFillError,
)
from wordsearch.core.models import PlacementOutcome
from wordsearch.engine import builder as builder_module
from wordsearch.engine.builder import BuilderConfig, GridBuilder

ALL_STEPS = [(0, 1), (1, 0), (1, 1), (0, -1), (-1, 0), (-1, -1), (1, -1), (-1, 1)]
ALPHABET = list("ABCDEFGHIJKLMNOPQRSTUVWXYZ")


def spelled_words(rows, length):
    """Every string of ``length`` letters readable in a straight line."""

    height, width = len(rows), len(rows[0])
    found = set()
    for r in range(height):
        for c in range(width):
            for dr, dc in ALL_STEPS:
                end_r, end_c = r + dr * (length - 1), c + dc * (length - 1)
                if 0 <= end_r < height and 0 <= end_c < width:
                    found.add("".join(rows[r + dr * i][c + dc * i] for i in range(length)))
    return found


def contains_any(rows, words):
    return any(word in spelled_words(rows, len(word)) for word in words)


class BuilderTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.quiet = logging.getLogger("test.builder.quiet")
        self.quiet.addHandler(logging.NullHandler())
        self.quiet.propagate = False

    def build(self, **overrides) -> GridBuilder:
        options = dict(rows=8, cols=8, alphabet=ALPHABET, seed=7)
        options.update(overrides)
        return GridBuilder(BuilderConfig(**options), logger=self.quiet)


class PlacementTests(BuilderTestCase):
    def test_banned_word_in_request_list_is_never_placed(self) -> None:
        builder = self.build(words=["CAT", "DOG"], banned=["CAT"])
        with mock.patch.object(builder.grid, "can_place", wraps=builder.grid.can_place) as spy:
            results = {result.word: result for result in builder.generate()}
        self.assertEqual(results["CAT"].outcome, PlacementOutcome.BANNED)
        self.assertEqual(results["CAT"].attempts, 0)
        self.assertTrue(all(call.args[0] != "CAT" for call in spy.call_args_list))
        self.assertNotIn("CAT", [placement.word for placement in builder.placements])
        self.assertFalse(contains_any(builder.rows(), ["CAT"]))

    def test_word_longer_than_grid_is_exhausted(self) -> None:
        builder = self.build(rows=3, cols=3, words=["ABCDE"])
        with self.assertLogs(self.quiet, level="WARNING") as captured:
            results = builder.generate()
        self.assertEqual(results[0].outcome, PlacementOutcome.EXHAUSTED)
        self.assertEqual(results[0].attempts, 100)
        self.assertTrue(any("Failed to place word: ABCDE" in line for line in captured.output))
        self.assertTrue(builder.grid.is_full())

    def test_placement_that_would_spell_banned_word_is_rejected(self) -> None:
        builder = self.build(rows=5, cols=5, words=["CAT"], banned=["AT"])
        results = builder.generate()
        self.assertEqual(results[0].outcome, PlacementOutcome.EXHAUSTED)
        self.assertFalse(contains_any(builder.rows(), ["AT"]))

    def test_empty_word_is_skipped(self) -> None:
        builder = self.build(words=[""])
        results = builder.generate()
        self.assertEqual(results[0].outcome, PlacementOutcome.SKIPPED)

    def test_placed_words_read_back_from_grid(self) -> None:
        words = ["PYTHON", "GRID", "WORD", "SEARCH", "LETTER"]
        builder = self.build(rows=10, cols=10, words=words, banned=["XYZ"])
        builder.generate()
        rows = builder.rows()
        for placement in builder.placements:
            text = "".join(rows[r][c] for r, c in placement.cells)
            self.assertEqual(text, placement.word)
            self.assertIn(placement.step, builder_module.PLACEMENT_STEPS)


class FillTests(BuilderTestCase):
    def test_grid_is_fully_populated_with_allowed_letters(self) -> None:
        builder = self.build(words=["CAT", "DOG"], banned=["AB", "XYZ"])
        builder.generate()
        rows = builder.rows()
        allowed = set(ALPHABET)
        self.assertEqual(len(rows), 8)
        for row in rows:
            self.assertEqual(len(row), 8)
            self.assertTrue(set(row) <= allowed)
        self.assertFalse(contains_any(rows, ["AB", "XYZ"]))

    def test_two_letter_alphabet_with_reverse_banned_word(self) -> None:
        for seed in range(10):
            with self.subTest(seed=seed):
                builder = self.build(rows=5, cols=5, alphabet=["A", "B"], words=["AB"], banned=["BA"], seed=seed)
                results = builder.generate()
                rows = builder.rows()
                self.assertFalse(contains_any(rows, ["BA"]))
                if results[0].placed:
                    self.assertTrue(contains_any(rows, ["AB"]))
                else:
                    self.assertEqual(results[0].outcome, PlacementOutcome.EXHAUSTED)

    def test_single_letter_grid_without_banned_words(self) -> None:
        builder = self.build(rows=1, cols=1, alphabet=["A"], words=[], banned=[])
        builder.generate()
        self.assertEqual(builder.rows(), ["A"])

    def test_unsatisfiable_fill_without_solver(self) -> None:
        builder = self.build(rows=2, cols=2, alphabet=["A"], banned=["AA"], solver_fallback=False)
        with self.assertRaises(UnsatisfiableFillError):
            builder.generate()

    def test_unsatisfiable_fill_with_solver(self) -> None:
        builder = self.build(rows=2, cols=2, alphabet=["A"], banned=["AA"])
        with self.assertRaises(UnsatisfiableFillError):
            builder.generate()

    def test_stuck_fill_falls_back_to_solver(self) -> None:
        solver_calls = 0
        for seed in range(20):
            builder = self.build(
                rows=3, cols=3, alphabet=["A", "B"], banned=["AB"], seed=seed, max_fill_attempts=1
            )
            with mock.patch.object(builder_module, "solve_fill", wraps=builder_module.solve_fill) as spy:
                builder.generate()
            solver_calls += spy.call_count
            rows = builder.rows()
            self.assertFalse(contains_any(rows, ["AB"]))
            self.assertEqual(len(set("".join(rows))), 1)
        self.assertGreater(solver_calls, 0)

    def test_solver_fill_when_random_fill_is_skipped(self) -> None:
        banned = ["AB", "CD", "EF", "GH"]
        options = dict(rows=15, cols=15, alphabet=list("ABCDEFGH"), banned=banned, max_fill_attempts=0)
        first = self.build(seed=21, **options)
        first.generate()
        second = self.build(seed=21, **options)
        second.generate()
        self.assertFalse(contains_any(first.rows(), banned))
        self.assertEqual(first.rows(), second.rows())

    def test_solver_limit_reached_is_reported_as_timeout(self) -> None:
        builder = self.build(
            rows=40,
            cols=40,
            alphabet=list("ABCDEFGH"),
            banned=["AB", "CD", "EF", "GH"],
            max_fill_attempts=0,
            solver_timeout=1e-6,
        )
        with self.assertRaises(SolverTimeoutError) as ctx:
            builder.generate()
        self.assertNotIsInstance(ctx.exception, UnsatisfiableFillError)
        self.assertIn("time limit", str(ctx.exception))

    def test_global_scan_builds_the_same_grid_as_local_scan(self) -> None:
        options = dict(words=["CAT", "DOG"], banned=["AB", "QZ", "EEE"], seed=11)
        local = self.build(scan_mode=ScanMode.LOCAL, **options)
        local.generate()
        global_scan = self.build(scan_mode="global", **options)
        global_scan.generate()
        self.assertEqual(local.rows(), global_scan.rows())


class DeterminismTests(BuilderTestCase):
    def test_same_seed_same_grid(self) -> None:
        options = dict(words=["CAT", "DOG", "BIRD"], banned=["AA"], seed=1234)
        first = self.build(**options)
        first.generate()
        second = self.build(**options)
        second.generate()
        self.assertEqual(first.rows(), second.rows())
        self.assertEqual(first.placements, second.placements)


class StateTests(BuilderTestCase):
    def test_generate_twice_is_rejected(self) -> None:
        builder = self.build(words=["CAT"])
        builder.generate()
        self.assertEqual(builder.state, BuildState.FILLED)
        with self.assertRaises(BuildStateError):
            builder.generate()

    def test_fill_before_placement_is_rejected(self) -> None:
        builder = self.build()
        with self.assertRaises(BuildStateError):
            builder.fill()

    def test_place_after_fill_is_rejected(self) -> None:
        builder = self.build(words=["CAT"])
        builder.generate()
        with self.assertRaises(BuildStateError):
            builder.place_word("DOG")

    def test_grid_is_read_only_after_generate(self) -> None:
        builder = self.build()
        builder.generate()
        with self.assertRaises(BuildStateError):
            builder.grid.set(0, 0, "A")


class ConfigTests(BuilderTestCase):
    def test_empty_alphabet_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            self.build(alphabet=[])

    def test_multi_character_letter_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            self.build(alphabet=["A", "BC"])

    def test_unknown_scan_mode_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            self.build(scan_mode="sideways")

    def test_non_positive_grid_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            self.build(rows=0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
