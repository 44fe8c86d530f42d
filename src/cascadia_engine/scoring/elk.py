"""Elk scoring cards."""

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

# Elk in a line link along these offsets (both ways)
LINE_OFFSETS: tuple[Cell, ...] = ((1, 1), (-1, -1), (1, 0), (-1, 0))


@register(Animal.ELK, 1)
class ElkLines(WildlifeScorer):
    """Straight lines of elk; lines longer than four score nothing."""

    name: ClassVar[str] = "Elk A"
    points: ClassVar[dict[int, int]] = {1: 2, 2: 5, 3: 9, 4: 13}

    def score_board(self, board: Board) -> int:
        def linked(cell: Cell) -> list[Cell]:
            x, y = cell
            return [(x + dx, y + dy) for dx, dy in LINE_OFFSETS]

        lines = groups(board, Animal.ELK, linked=linked)
        return sum(self.points.get(len(g), 0) for g in lines)


# Shapes anchored at an elk, tried largest first
SHAPES: tuple[tuple[Cell, ...], ...] = (
    ((0, 0), (-1, 0), (1, 0), (1, 1)),
    ((0, 0), (1, 0), (0, -1)),
    ((0, 0), (1, 0)),
    ((0, 0),),
)


@register(Animal.ELK, 2)
class ElkShapes(WildlifeScorer):
    """Elk claimed into fixed shapes.

    Larger shapes are claimed first; anchors are scanned in reading order.
    """

    name: ClassVar[str] = "Elk B"
    points: ClassVar[dict[int, int]] = {1: 2, 2: 5, 3: 9, 4: 13}

    def score_board(self, board: Board) -> int:
        elk = set(board.tokens(Animal.ELK))
        claimed: set[Cell] = set()
        res = 0
        anchors = sorted(elk, key=lambda c: (c[1], c[0]))
        for shape in SHAPES:
            for x, y in anchors:
                cells = {(x + dx, y + dy) for dx, dy in shape}
                if cells <= elk and not cells & claimed:
                    claimed |= cells
                    res += self.points[len(cells)]
        return res


@register(Animal.ELK, 3)
class ElkHerds(WildlifeScorer):
    """Connected herds of any shape; herds over eight score nothing."""

    name: ClassVar[str] = "Elk C"
    points: ClassVar[dict[int, int]] = {
        1: 2,
        2: 4,
        3: 7,
        4: 10,
        5: 14,
        6: 18,
        7: 23,
        8: 28,
    }

    def score_board(self, board: Board) -> int:
        herds = groups(board, Animal.ELK)
        return sum(self.points.get(len(g), 0) for g in herds)


@register(Animal.ELK, 4)
class ElkCompanions(WildlifeScorer):
    """Each elk scores by how many elk surround it."""

    name: ClassVar[str] = "Elk D"
    points: ClassVar[dict[int, int]] = {1: 2, 2: 5, 3: 8, 4: 12, 5: 16, 6: 21}

    def score_board(self, board: Board) -> int:
        res = 0
        for cell in board.tokens(Animal.ELK):
            res += capped_lookup(self.points, count_neighbours(board, cell, Animal.ELK))
        return res
