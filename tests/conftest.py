"""Shared fixtures."""

import pytest

from cascadia_engine.data.models import Animal, Biome, Cell, GridKind, HabitatTile
from cascadia_engine.game.player import Player
from cascadia_engine.map.habitat import Board, PlacedTile


@pytest.fixture
def make_board():
    """Build a board where each cell holds a keystone tile with a given token.

    Cells mapped to None get an empty tile.
    """

    def _make(
        tokens: dict[Cell, Animal | None],
        grid: GridKind = GridKind.SQUARE,
        biome: Biome = Biome.FOREST,
    ) -> Board:
        cells = {}
        for cell, animal in tokens.items():
            candidates = [animal] if animal is not None else [Animal.BEAR]
            tile = HabitatTile(biomes=[biome], animals=candidates)
            cells[cell] = PlacedTile(tile=tile, animal=animal)
        return Board(grid=grid, cells=cells)

    return _make


@pytest.fixture
def make_player(make_board):
    """Build a player around a token layout."""

    def _make(
        tokens: dict[Cell, Animal | None],
        grid: GridKind = GridKind.SQUARE,
        name: str = "alice",
        nature_tokens: int = 0,
    ) -> Player:
        board = make_board(tokens, grid)
        return Player(name=name, board=board, nature_tokens=nature_tokens)

    return _make


@pytest.fixture
def forest() -> HabitatTile:
    return HabitatTile(biomes=[Biome.FOREST], animals=[Animal.BEAR, Animal.ELK])


@pytest.fixture
def forest_river() -> HabitatTile:
    return HabitatTile(
        biomes=[Biome.FOREST, Biome.RIVER], animals=[Animal.SALMON, Animal.FOX]
    )
