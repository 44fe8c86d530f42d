"""Wildlife scoring cards: shared machinery and the card registry."""

from abc import abstractmethod
from collections import deque
from typing import Callable, ClassVar

from pydantic import BaseModel

from cascadia_engine.data.models import Animal, Cell
from cascadia_engine.game.player import Player
from cascadia_engine.map.habitat import Board


class WildlifeScorer(BaseModel):
    """Scoring card for wildlife tokens."""

    model_config = {"frozen": True}

    name: ClassVar[str] = "wildlife"

    @abstractmethod
    def score_board(self, board: Board) -> int:
        """Score the tokens on a board."""

    def score(self, player: Player) -> int:
        return self.score_board(player.board)


def animal_neighbours(board: Board, cell: Cell) -> list[Animal]:
    """Tokens on the neighbours of a cell (empty slots skipped)."""
    res = []
    for nb in board.neighbours(cell):
        animal = board.animal_at(nb)
        if animal is not None:
            res.append(animal)
    return res


def count_neighbours(board: Board, cell: Cell, animal: Animal) -> int:
    return sum(1 for a in animal_neighbours(board, cell) if a == animal)


def groups(
    board: Board,
    animal: Animal,
    linked: Callable[[Cell], list[Cell]] | None = None,
) -> list[set[Cell]]:
    """Connected groups of one animal.

    By default groups follow grid adjacency; `linked` can replace it with
    another relation, which must be symmetric.
    """
    if linked is None:
        linked = board.neighbours
    todo = board.tokens(animal)
    visited: set[Cell] = set()
    res = []
    for seed in todo:
        if seed in visited:
            continue
        group = {seed}
        visited.add(seed)
        queue: deque[Cell] = deque([seed])
        while queue:
            cell = queue.popleft()
            for nb in linked(cell):
                if nb in visited or board.animal_at(nb) != animal:
                    continue
                visited.add(nb)
                group.add(nb)
                queue.append(nb)
        res.append(group)
    return res


def capped_lookup(table: dict[int, int], key: int) -> int:
    """Look up a points table, clamping to its largest key (0 below the smallest)."""
    if key in table:
        return table[key]
    top = max(table)
    if key > top:
        return table[top]
    return 0


ScorerKey = tuple[Animal | None, int]
CARD_REGISTRY: dict[ScorerKey, type[WildlifeScorer]] = {}

FAMILY_PATTERN = 5
INTERMEDIATE_PATTERN = 6


def register(animal: Animal | None, pattern: int):
    """Register a scoring card class under (species, pattern).

    Family and intermediate cards cover all species and use `animal=None`.
    """

    def _wrap(cls: type[WildlifeScorer]) -> type[WildlifeScorer]:
        CARD_REGISTRY[(animal, pattern)] = cls
        return cls

    return _wrap
