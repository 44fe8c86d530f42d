"""Buzzard scoring cards (lone buzzards and lines of sight)."""

from itertools import combinations
from typing import ClassVar

from cascadia_engine.data.models import Animal, Cell
from cascadia_engine.map.geometry import cells_between
from cascadia_engine.map.habitat import Board
from .wildlife import WildlifeScorer, capped_lookup, count_neighbours, register

COUNT_POINTS = {1: 2, 2: 5, 3: 8, 4: 11, 5: 14, 6: 18, 7: 22, 8: 26}


def lone_buzzards(board: Board) -> list[Cell]:
    """Buzzards with no buzzard next to them."""
    return [
        c
        for c in board.tokens(Animal.BUZZARD)
        if count_neighbours(board, c, Animal.BUZZARD) == 0
    ]


def sight_lines(board: Board) -> list[list[Cell]]:
    """Cells between each pair of buzzards that see each other.

    Two buzzards see each other when they share a straight line, aren't
    adjacent, and no other buzzard sits between them. Empty cells don't block.
    """
    res = []
    buzzards = sorted(board.tokens(Animal.BUZZARD), key=lambda c: (c[1], c[0]))
    for a, b in combinations(buzzards, 2):
        between = cells_between(a, b, board.grid)
        if not between:
            continue
        if any(board.animal_at(c) == Animal.BUZZARD for c in between):
            continue
        res.append(between)
    return res


@register(Animal.BUZZARD, 1)
class BuzzardLoners(WildlifeScorer):
    """Buzzards that keep to themselves."""

    name: ClassVar[str] = "Buzzard A"

    def score_board(self, board: Board) -> int:
        return capped_lookup(COUNT_POINTS, len(lone_buzzards(board)))


@register(Animal.BUZZARD, 2)
class BuzzardSightLines(WildlifeScorer):
    name: ClassVar[str] = "Buzzard B"

    def score_board(self, board: Board) -> int:
        return capped_lookup(COUNT_POINTS, len(sight_lines(board)))


@register(Animal.BUZZARD, 3)
class BuzzardSightLinePoints(WildlifeScorer):
    name: ClassVar[str] = "Buzzard C"
    points_per_line: ClassVar[int] = 3

    def score_board(self, board: Board) -> int:
        return self.points_per_line * len(sight_lines(board))


@register(Animal.BUZZARD, 4)
class BuzzardSightedSpecies(WildlifeScorer):
    """Distinct species seen between buzzards."""

    name: ClassVar[str] = "Buzzard D"

    def score_board(self, board: Board) -> int:
        seen: set[Animal] = set()
        for between in sight_lines(board):
            for cell in between:
                animal = board.animal_at(cell)
                if animal is not None and animal != Animal.BUZZARD:
                    seen.add(animal)
        return len(seen)
