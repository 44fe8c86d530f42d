"""Fox scoring cards (each fox looks at its neighbours)."""

from collections import Counter
from typing import ClassVar

from cascadia_engine.data.models import Animal
from cascadia_engine.map.habitat import Board
from .wildlife import (
    WildlifeScorer,
    animal_neighbours,
    capped_lookup,
    register,
)


def pairs_of_others(counts: Counter[Animal]) -> int:
    """Number of same-species pairs among non-fox neighbours."""
    return sum(n // 2 for a, n in counts.items() if a != Animal.FOX)


@register(Animal.FOX, 1)
class FoxDistinctNeighbours(WildlifeScorer):
    """Distinct species around each fox, the fox included."""

    name: ClassVar[str] = "Fox A"
    max_points: ClassVar[int] = 5

    def score_board(self, board: Board) -> int:
        res = 0
        for cell in board.tokens(Animal.FOX):
            species = {Animal.FOX, *animal_neighbours(board, cell)}
            res += min(len(species), self.max_points)
        return res


@register(Animal.FOX, 2)
class FoxNeighbourPairs(WildlifeScorer):
    """Pairs of other species around each fox."""

    name: ClassVar[str] = "Fox B"
    points: ClassVar[dict[int, int]] = {1: 3, 2: 5, 3: 7}

    def score_board(self, board: Board) -> int:
        res = 0
        for cell in board.tokens(Animal.FOX):
            counts = Counter(animal_neighbours(board, cell))
            res += capped_lookup(self.points, pairs_of_others(counts))
        return res


@register(Animal.FOX, 3)
class FoxMostCommonNeighbour(WildlifeScorer):
    """Most common other species around each fox."""

    name: ClassVar[str] = "Fox C"

    def score_board(self, board: Board) -> int:
        res = 0
        for cell in board.tokens(Animal.FOX):
            others = [a for a in animal_neighbours(board, cell) if a != Animal.FOX]
            res += max(Counter(others).values(), default=0)
        return res


@register(Animal.FOX, 4)
class FoxPairs(FoxNeighbourPairs):
    """Pairs of other species around each fox, on a richer table."""

    name: ClassVar[str] = "Fox D"
    points: ClassVar[dict[int, int]] = {1: 5, 2: 7, 3: 9, 4: 11}
