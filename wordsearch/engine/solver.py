"""CP-SAT fill fallback using OR-Tools."""

from __future__ import annotations

import random
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ortools.sat.python import cp_model

from ..core.constants import SCAN_STEPS
from ..core.exceptions import SolverTimeoutError
from ..utils.logger import get_logger
from .grid import LetterGrid

LOGGER = get_logger(__name__)

Cell = Tuple[int, int]


def solve_fill(
    grid: LetterGrid,
    free_cells: Sequence[Cell],
    alphabet: Sequence[str],
    banned: Iterable[str],
    rng: Optional[random.Random] = None,
    timeout: float = 30.0,
) -> Optional[Dict[Cell, str]]:
    """Assign alphabet letters to ``free_cells`` so no banned word appears.

    Letters already on the grid outside ``free_cells`` are treated as fixed.
    Each free cell gets one boolean per distinct letter; every straight run
    that could spell a banned word (8 directions, consistent with the fixed
    letters) becomes a clause forbidding its free cells from completing it.

    Args:
        grid: Grid holding the fixed letters.
        free_cells: Cells the solver may assign.
        alphabet: Fill letters; duplicates are ignored.
        banned: Words that must not appear.
        rng: Source for the solution hint and solver seed.
        timeout: Solver limit in deterministic seconds, so the outcome does not
            depend on machine speed.

    Returns:
        Mapping of cell to letter, or ``None`` if no assignment exists.

    Raises:
        SolverTimeoutError: The limit was reached before a fill was found or
            ruled out.
    """
    rng = rng or random.Random()
    letters = list(dict.fromkeys(alphabet))
    free = set(free_cells)
    if not free:
        return {}

    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: one literal per (cell, letter), exactly one letter per cell
    # ------------------------------------------------------------------
    cell_vars: Dict[Cell, Dict[str, cp_model.IntVar]] = {}
    for r, c in sorted(free):
        choices = {
            letter: model.new_bool_var(f"L_{r}_{c}_{index}")
            for index, letter in enumerate(letters)
        }
        model.add_exactly_one(list(choices.values()))
        cell_vars[(r, c)] = choices

    # ------------------------------------------------------------------
    # Step 2: forbid every run that could complete a banned word
    # ------------------------------------------------------------------
    clause_count = 0
    for word in sorted(set(w for w in banned if w)):
        for row, col in grid.coordinates():
            for step in SCAN_STEPS:
                cells = grid.run_cells(row, col, step, len(word))
                if cells is None:
                    continue
                literals = _run_literals(grid, cell_vars, free, word, cells)
                if literals is None:
                    continue
                if not literals:
                    LOGGER.warning(
                        "CP-SAT: fixed letters already spell banned word '%s' at (%d,%d)",
                        word, row, col,
                    )
                    return None
                model.add_bool_or(literals)
                clause_count += 1

    # ------------------------------------------------------------------
    # Step 3: random hint so repeated solves do not all look alike
    # ------------------------------------------------------------------
    for cell in sorted(free):
        hinted = rng.choice(letters)
        for letter, var in cell_vars[cell].items():
            model.add_hint(var, int(letter == hinted))

    solver = cp_model.CpSolver()
    solver.parameters.max_deterministic_time = timeout
    solver.parameters.num_workers = 1
    solver.parameters.random_seed = rng.randint(0, 2**31 - 1)

    LOGGER.info(
        "CP-SAT: %d free cells, %d letters, %d banned-run clauses, solving (deterministic limit=%0.1fs)...",
        len(free), len(letters), clause_count, timeout,
    )

    status = solver.solve(model)

    if status == cp_model.UNKNOWN:
        LOGGER.warning("CP-SAT: deterministic time limit reached after %.2fs", solver.wall_time)
        raise SolverTimeoutError(
            f"CP-SAT reached its {timeout:g}s deterministic time limit before deciding the fill"
        )
    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no fill found (status=%s)", solver.status_name(status))
        return None

    LOGGER.info("CP-SAT: fill found in %.2fs", solver.wall_time)

    return {
        cell: next(letter for letter, var in choices.items() if solver.boolean_value(var))
        for cell, choices in cell_vars.items()
    }


def _run_literals(
    grid: LetterGrid,
    cell_vars: Dict[Cell, Dict[str, cp_model.IntVar]],
    free: set,
    word: str,
    cells: List[Cell],
) -> Optional[list]:
    """Negated literals for a run, or ``None`` if the run can never spell ``word``."""
    literals = []
    for letter, cell in zip(word, cells):
        if cell in free:
            var = cell_vars[cell].get(letter)
            if var is None:
                return None
            literals.append(~var)
        elif grid.get(*cell) != letter:
            return None
    return literals
