"""A player's habitat: placed tiles on a grid."""

from typing import Sequence

from typing_extensions import Annotated
from pydantic import BaseModel, ConfigDict, Field, model_validator

from cascadia_engine.data.models import Animal, Biome, Cell, GridKind, HabitatTile
from cascadia_engine.errors import InvalidAnimalAssignment, InvalidPlacement
from .geometry import BOARD_SIZE, biome_edges, in_bounds, neighbours

N_BOOTSTRAP_TILES = 3
# (cell, rotation)
STARTER_SLOTS: tuple[tuple[Cell, int], ...] = (
    ((25, 24), 1),
    ((25, 25), 2),
    ((26, 25), 3),
)


class PlacedTile(BaseModel):
    """A tile on the board, with its orientation and wildlife token."""

    model_config = ConfigDict(validate_assignment=True)

    tile: HabitatTile
    rotation: Annotated[int, Field(ge=0, le=6)] = 0
    animal: Animal | None = None

    @property
    def biomes(self) -> tuple[Biome, ...]:
        return self.tile.biomes

    @property
    def is_keystone(self) -> bool:
        return self.tile.is_keystone

    def open_edges(self, biome: Biome, grid: GridKind) -> frozenset[int]:
        """Edges through which `biome` connects to neighbours."""
        return biome_edges(self.tile.biomes, self.rotation, biome, grid)

    def place_animal(self, animal: Animal) -> None:
        """Put a wildlife token on this tile."""
        if self.animal is not None:
            raise InvalidAnimalAssignment(
                f"Tile already carries a {self.animal.value} token"
            )
        if animal not in self.tile.animals:
            raise InvalidAnimalAssignment(
                f"{animal.value} is not allowed on tile {self.tile}"
            )
        self.animal = animal


class Board(BaseModel):
    """Sparse grid of placed tiles."""

    grid: GridKind
    size: int = BOARD_SIZE
    cells: dict[Cell, PlacedTile] = {}

    @model_validator(mode="after")
    def _check_cells(self) -> "Board":
        """Ensure all cells are on the board and hex tiles are oriented."""
        for cell, placed in self.cells.items():
            if not in_bounds(cell, self.size):
                raise ValueError(f"Cell {cell} is outside the board")
            if (
                self.grid == GridKind.HEX
                and not placed.is_keystone
                and placed.rotation == 0
            ):
                raise ValueError(f"Two-biome tile at {cell} needs a rotation")
        return self

    def __len__(self) -> int:
        return len(self.cells)

    def __contains__(self, cell: Cell) -> bool:
        return cell in self.cells

    def get(self, cell: Cell) -> PlacedTile | None:
        """Get the tile at a cell, if any."""
        return self.cells.get(cell)

    def neighbours(self, cell: Cell) -> list[Cell]:
        """Neighbouring cells that lie on the board."""
        return [nb for nb in neighbours(cell, self.grid) if in_bounds(nb, self.size)]

    def has_neighbour(self, cell: Cell) -> bool:
        """Check whether any neighbour is occupied."""
        return any(nb in self.cells for nb in self.neighbours(cell))

    def check_placement(self, cell: Cell, tile: HabitatTile, rotation: int = 0) -> None:
        """Raise if the tile can't go on this cell."""
        if not in_bounds(cell, self.size):
            raise InvalidPlacement(f"Cell {cell} is outside the board")
        if cell in self.cells:
            raise InvalidPlacement(f"Cell {cell} is already occupied")
        if len(self.cells) >= N_BOOTSTRAP_TILES and not self.has_neighbour(cell):
            raise InvalidPlacement(f"Cell {cell} doesn't touch the habitat")
        if not 0 <= rotation <= 6:
            raise InvalidPlacement(f"Rotation must be within [0, 6], got: {rotation}")
        if self.grid == GridKind.HEX and not tile.is_keystone and rotation == 0:
            raise InvalidPlacement("Two-biome hex tiles need a rotation in [1, 6]")

    def place(
        self,
        cell: Cell,
        tile: HabitatTile,
        *,
        animal: Animal | None = None,
        rotation: int = 0,
    ) -> PlacedTile:
        """Place a tile (and optionally its token) on a cell."""
        self.check_placement(cell, tile, rotation)
        if animal is not None and animal not in tile.animals:
            raise InvalidAnimalAssignment(f"{animal.value} is not allowed on {tile}")
        placed = PlacedTile(tile=tile, rotation=rotation, animal=animal)
        self.cells[cell] = placed
        return placed

    def seed_starters(
        self,
        tiles: list[HabitatTile],
        slots: Sequence[tuple[Cell, int]] = STARTER_SLOTS,
    ) -> None:
        """Lay down the three starter tiles at (cell, rotation) slots."""
        if len(tiles) != N_BOOTSTRAP_TILES or len(slots) != N_BOOTSTRAP_TILES:
            raise InvalidPlacement(f"Expected 3 starter tiles, got: {len(tiles)}")
        for (cell, rotation), tile in zip(slots, tiles):
            self.place(cell, tile, rotation=rotation)

    def place_animal(self, cell: Cell, animal: Animal) -> PlacedTile:
        """Put a wildlife token on an existing tile."""
        placed = self.cells.get(cell)
        if placed is None:
            raise InvalidAnimalAssignment(f"No tile at {cell}")
        placed.place_animal(animal)
        return placed

    def tokens(self, animal: Animal) -> list[Cell]:
        """Cells currently carrying this animal."""
        return [c for c, pt in self.cells.items() if pt.animal == animal]

    def animal_at(self, cell: Cell) -> Animal | None:
        placed = self.cells.get(cell)
        return None if placed is None else placed.animal

    def frontier(self) -> list[Cell]:
        """Empty cells where a tile may legally go."""
        res: set[Cell] = set()
        for cell in self.cells:
            for nb in self.neighbours(cell):
                if nb not in self.cells:
                    res.add(nb)
        return sorted(res, key=lambda c: (c[1], c[0]))

    def open_slots(self) -> list[Cell]:
        """Occupied cells without a wildlife token yet."""
        return [c for c, pt in self.cells.items() if pt.animal is None]
