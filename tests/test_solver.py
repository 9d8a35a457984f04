import random
import unittest

from wordsearch.core.exceptions import SolverTimeoutError
from wordsearch.engine.grid import GridConfig, LetterGrid
from wordsearch.engine.scanner import BannedWordScanner
from wordsearch.engine.solver import solve_fill


class SolveFillTests(unittest.TestCase):
    def test_assignment_avoids_banned_words(self) -> None:
        grid = LetterGrid(GridConfig(rows=1, cols=3))
        free = list(grid.coordinates())
        assignment = solve_fill(grid, free, ["A", "B"], ["AA", "BB"], rng=random.Random(3))
        self.assertIsNotNone(assignment)
        self.assertEqual(set(assignment), set(free))
        grid.write_cells(assignment.items())
        self.assertIn(grid.rows(), (["ABA"], ["BAB"]))

    def test_fixed_letters_force_the_fill(self) -> None:
        grid = LetterGrid.from_rows(["A.."])
        assignment = solve_fill(grid, [(0, 1), (0, 2)], ["A", "B"], ["AB"])
        self.assertEqual(assignment, {(0, 1): "A", (0, 2): "A"})

    def test_infeasible_constraints_return_none(self) -> None:
        grid = LetterGrid(GridConfig(rows=2, cols=2))
        self.assertIsNone(solve_fill(grid, list(grid.coordinates()), ["A", "B"], ["AA", "BB"]))

    def test_fixed_letters_already_banned_return_none(self) -> None:
        grid = LetterGrid.from_rows(["AB."])
        self.assertIsNone(solve_fill(grid, [(0, 2)], ["A", "B"], ["AB"]))

    def test_no_free_cells(self) -> None:
        grid = LetterGrid.from_rows(["AB"])
        self.assertEqual(solve_fill(grid, [], ["A"], ["X"]), {})

    def test_larger_fill_is_clean(self) -> None:
        grid = LetterGrid.from_rows(["CAT...", "......", "......", "......"])
        free = grid.empty_cells()
        banned = ["AA", "TT", "CAB", "ZZ"]
        assignment = solve_fill(grid, free, list("ABCTZ"), banned, rng=random.Random(5))
        self.assertIsNotNone(assignment)
        grid.write_cells(assignment.items())
        self.assertTrue(grid.is_full())
        self.assertFalse(BannedWordScanner(banned).contains_banned_word(grid))
        self.assertEqual(grid.rows()[0][:3], "CAT")

    def test_work_limit_reached_is_not_reported_as_infeasible(self) -> None:
        grid = LetterGrid(GridConfig(rows=40, cols=40))
        with self.assertRaises(SolverTimeoutError):
            solve_fill(
                grid,
                list(grid.coordinates()),
                list("ABCDEFGH"),
                ["AB", "CD", "EF", "GH"],
                rng=random.Random(1),
                timeout=1e-6,
            )


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
