"""Family and intermediate cards: every species scored by group size."""

from typing import ClassVar

from cascadia_engine.data.models import Animal
from cascadia_engine.map.habitat import Board
from .wildlife import (
    FAMILY_PATTERN,
    INTERMEDIATE_PATTERN,
    WildlifeScorer,
    capped_lookup,
    groups,
    register,
)


class _GroupSizeCard(WildlifeScorer):
    points: ClassVar[dict[int, int]] = {}

    def score_board(self, board: Board) -> int:
        res = 0
        for animal in Animal:
            for group in groups(board, animal):
                res += capped_lookup(self.points, len(group))
        return res


@register(None, FAMILY_PATTERN)
class FamilyCard(_GroupSizeCard):
    name: ClassVar[str] = "Family"
    points: ClassVar[dict[int, int]] = {1: 2, 2: 5, 3: 9}


@register(None, INTERMEDIATE_PATTERN)
class IntermediateCard(_GroupSizeCard):
    """Single tokens score nothing."""

    name: ClassVar[str] = "Intermediate"
    points: ClassVar[dict[int, int]] = {2: 5, 3: 8, 4: 12}
