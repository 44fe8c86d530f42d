"""Salmon scoring cards (runs of salmon)."""

from typing import ClassVar

from cascadia_engine.data.models import Animal, Cell
from cascadia_engine.map.habitat import Board
from .wildlife import (
    WildlifeScorer,
    capped_lookup,
    count_neighbours,
    groups,
    register,
)


def salmon_runs(board: Board) -> list[set[Cell]]:
    """Salmon groups that form runs.

    A run is a group where no salmon touches more than two other salmon; a
    branching group is not a run and never scores.
    """
    res = []
    for group in groups(board, Animal.SALMON):
        if all(count_neighbours(board, c, Animal.SALMON) <= 2 for c in group):
            res.append(group)
    return res


class _SalmonRunTable(WildlifeScorer):
    points: ClassVar[dict[int, int]] = {}

    def score_board(self, board: Board) -> int:
        return sum(capped_lookup(self.points, len(run)) for run in salmon_runs(board))


@register(Animal.SALMON, 1)
class SalmonLongRuns(_SalmonRunTable):
    name: ClassVar[str] = "Salmon A"
    points: ClassVar[dict[int, int]] = {1: 2, 2: 5, 3: 8, 4: 12, 5: 16, 6: 20, 7: 25}


@register(Animal.SALMON, 2)
class SalmonMidRuns(_SalmonRunTable):
    name: ClassVar[str] = "Salmon B"
    points: ClassVar[dict[int, int]] = {1: 2, 2: 4, 3: 9, 4: 11, 5: 17}


@register(Animal.SALMON, 3)
class SalmonMinimumRuns(_SalmonRunTable):
    """Only runs of three or more score."""

    name: ClassVar[str] = "Salmon C"
    points: ClassVar[dict[int, int]] = {3: 10, 4: 12, 5: 15}


@register(Animal.SALMON, 4)
class SalmonRunNeighbours(WildlifeScorer):
    """Run length plus one, plus each tile with another animal next to the run."""

    name: ClassVar[str] = "Salmon D"

    def score_board(self, board: Board) -> int:
        res = 0
        for run in salmon_runs(board):
            adjacent: set[Cell] = set()
            for cell in run:
                for nb in board.neighbours(cell):
                    if board.animal_at(nb) not in (None, Animal.SALMON):
                        adjacent.add(nb)
            res += len(run) + 1 + len(adjacent)
        return res
