"""Board geometry for square and offset-hex grids.

Cells are `(x, y)` pairs. On a hex grid, rows with odd and even `y` are offset
from each other, so the neighbour offsets depend on the parity of `y`.
Neighbours are always listed in direction order, and direction `d` of a hex
cell is also the index of the tile edge facing that neighbour.
"""

from typing import Iterator

from cascadia_engine.data.models import Biome, Cell, GridKind

BOARD_SIZE = 50

SQUARE_OFFSETS: tuple[Cell, ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))

HEX_OFFSETS_ODD: tuple[Cell, ...] = (
    (0, -1),
    (1, 0),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
)
HEX_OFFSETS_EVEN: tuple[Cell, ...] = (
    (1, -1),
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 0),
    (0, -1),
)

# rotation -> (edges of the first biome, edges of the second biome)
EDGE_RUNS: dict[int, tuple[frozenset[int], frozenset[int]]] = {
    1: (frozenset({2, 3, 4}), frozenset({5, 0, 1})),
    2: (frozenset({3, 4, 5}), frozenset({0, 1, 2})),
    3: (frozenset({4, 5, 0}), frozenset({1, 2, 3})),
    4: (frozenset({5, 0, 1}), frozenset({2, 3, 4})),
    5: (frozenset({0, 1, 2}), frozenset({3, 4, 5})),
    6: (frozenset({1, 2, 3}), frozenset({4, 5, 0})),
}


def in_bounds(cell: Cell, size: int = BOARD_SIZE) -> bool:
    """Check that the cell lies on the board."""
    x, y = cell
    return 0 <= x < size and 0 <= y < size


def offsets(cell: Cell, grid: GridKind) -> tuple[Cell, ...]:
    """Get neighbour offsets for a cell, in direction order."""
    if grid == GridKind.SQUARE:
        return SQUARE_OFFSETS
    return HEX_OFFSETS_ODD if cell[1] % 2 else HEX_OFFSETS_EVEN


def n_directions(grid: GridKind) -> int:
    """Number of neighbours per cell."""
    return 4 if grid == GridKind.SQUARE else 6


def neighbour(cell: Cell, direction: int, grid: GridKind) -> Cell:
    """Get the neighbouring cell in some direction."""
    dx, dy = offsets(cell, grid)[direction]
    return (cell[0] + dx, cell[1] + dy)


def neighbours(cell: Cell, grid: GridKind) -> list[Cell]:
    """Get all neighbouring cells, in direction order (may be off-board)."""
    x, y = cell
    return [(x + dx, y + dy) for dx, dy in offsets(cell, grid)]


def direction_to(cell: Cell, other: Cell, grid: GridKind) -> int | None:
    """Get the direction from `cell` to an adjacent `other`, if they touch."""
    for d, nb in enumerate(neighbours(cell, grid)):
        if nb == other:
            return d
    return None


def opposite(direction: int, grid: GridKind) -> int:
    """Direction pointing the other way."""
    n = n_directions(grid)
    return (direction + n // 2) % n


def edge_run(rotation: int, slot: int) -> frozenset[int]:
    """Edges covered by biome `slot` (0 or 1) of a two-biome tile."""
    try:
        return EDGE_RUNS[rotation][slot]
    except KeyError as ke:
        raise ValueError(f"Rotation must be within [1, 6], got: {rotation}") from ke


def biome_edges(
    biomes: tuple[Biome, ...], rotation: int, biome: Biome, grid: GridKind
) -> frozenset[int]:
    """Edges along which `biome` continues out of a tile.

    Single-biome tiles (and every tile on a square grid) open all their edges
    for their first biome.
    """
    if grid == GridKind.SQUARE:
        if biomes[0] == biome:
            return frozenset(range(4))
        return frozenset()
    if len(biomes) == 1:
        if biomes[0] == biome:
            return frozenset(range(6))
        return frozenset()
    edges: frozenset[int] = frozenset()
    for slot, b in enumerate(biomes):
        if b == biome:
            edges = edges | edge_run(rotation, slot)
    return edges


def line(cell: Cell, direction: int, grid: GridKind) -> Iterator[Cell]:
    """Walk a straight line from a cell (exclusive) to the board edge."""
    cur = neighbour(cell, direction, grid)
    while in_bounds(cur):
        yield cur
        cur = neighbour(cur, direction, grid)


def cells_between(a: Cell, b: Cell, grid: GridKind) -> list[Cell] | None:
    """Cells strictly between two cells on a common straight line.

    Returns None if the cells don't share a line.
    """
    if a == b:
        return None
    for d in range(n_directions(grid)):
        between: list[Cell] = []
        for cur in line(a, d, grid):
            if cur == b:
                return between
            between.append(cur)
    return None
