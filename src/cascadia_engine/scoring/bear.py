"""Bear scoring cards (groups of adjacent bears)."""

from collections import Counter
from typing import ClassVar

from cascadia_engine.data.models import Animal
from cascadia_engine.map.habitat import Board
from .wildlife import WildlifeScorer, capped_lookup, groups, register


def bear_group_sizes(board: Board) -> Counter[int]:
    """Count bear groups by size."""
    return Counter(len(g) for g in groups(board, Animal.BEAR))


@register(Animal.BEAR, 1)
class BearGroupSize(WildlifeScorer):
    """Every group scores by its size, 4+ capped."""

    name: ClassVar[str] = "Bear A"
    points: ClassVar[dict[int, int]] = {1: 4, 2: 11, 3: 19, 4: 20}

    def score_board(self, board: Board) -> int:
        sizes = bear_group_sizes(board)
        return sum(capped_lookup(self.points, s) * n for s, n in sizes.items())


@register(Animal.BEAR, 2)
class BearTriples(WildlifeScorer):
    """10 points per group of exactly three."""

    name: ClassVar[str] = "Bear B"
    points_per_group: ClassVar[int] = 10

    def score_board(self, board: Board) -> int:
        return self.points_per_group * bear_group_sizes(board)[3]


@register(Animal.BEAR, 3)
class BearMixedSizes(WildlifeScorer):
    """Groups of 1, 2 and 3, with a bonus for having all three."""

    name: ClassVar[str] = "Bear C"
    points: ClassVar[dict[int, int]] = {1: 2, 2: 5, 3: 8}
    bonus: ClassVar[int] = 3

    def score_board(self, board: Board) -> int:
        sizes = bear_group_sizes(board)
        res = sum(pts * sizes[s] for s, pts in self.points.items())
        if all(sizes[s] > 0 for s in self.points):
            res += self.bonus
        return res


@register(Animal.BEAR, 4)
class BearLargeGroups(WildlifeScorer):
    """Groups of 2, 3 and 4; other sizes score nothing."""

    name: ClassVar[str] = "Bear D"
    points: ClassVar[dict[int, int]] = {2: 5, 3: 8, 4: 13}

    def score_board(self, board: Board) -> int:
        sizes = bear_group_sizes(board)
        return sum(pts * sizes[s] for s, pts in self.points.items())
