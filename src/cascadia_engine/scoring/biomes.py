"""Biome scoring: largest connected region per biome."""

from collections import deque

from cascadia_engine.data.models import Biome, Cell
from cascadia_engine.game.player import Player
from cascadia_engine.map.geometry import direction_to, neighbour
from cascadia_engine.map.habitat import Board


def _admits(board: Board, cell: Cell, came_from: Cell | None, biome: Biome) -> bool:
    """Check that `biome` on `cell` faces the cell we came from."""
    placed = board.get(cell)
    if placed is None:
        return False
    edges = placed.open_edges(biome, board.grid)
    if not edges:
        return False
    if came_from is None:
        return True
    return direction_to(cell, came_from, board.grid) in edges


def region_size(board: Board, seed: Cell, biome: Biome, visited: set[Cell]) -> int:
    """Size of the region of `biome` grown from `seed`.

    Cells reached are added to `visited`.
    """
    if seed in visited or not _admits(board, seed, None, biome):
        return 0
    size = 0
    queue: deque[Cell] = deque([seed])
    visited.add(seed)
    while queue:
        cell = queue.popleft()
        size += 1
        placed = board.get(cell)
        assert placed is not None
        for d in sorted(placed.open_edges(biome, board.grid)):
            nb = neighbour(cell, d, board.grid)
            if nb in visited or not _admits(board, nb, cell, biome):
                continue
            visited.add(nb)
            queue.append(nb)
    return size


def region_sizes(board: Board, biome: Biome) -> list[int]:
    """Sizes of all regions of a biome."""
    visited: set[Cell] = set()
    sizes = []
    for cell in board.cells:
        size = region_size(board, cell, biome, visited)
        if size:
            sizes.append(size)
    return sizes


def largest_region(board: Board, biome: Biome) -> int:
    return max(region_sizes(board, biome), default=0)


def score_biomes(player: Player) -> dict[Biome, int]:
    """Store and return the largest region of each biome."""
    res = {b: largest_region(player.board, b) for b in Biome}
    player.biome_points = res
    return res
