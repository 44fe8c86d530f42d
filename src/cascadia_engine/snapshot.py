"""Recorded boards in YAML, for scoring finished games."""

from pathlib import Path
from typing import Any

from typing_extensions import Annotated
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_yaml import parse_yaml_file_as

from cascadia_engine.data.models import Animal, Cell, GridKind, ScoringMode
from cascadia_engine.errors import InvalidConfig, InvalidDeck
from cascadia_engine.game.player import Player
from cascadia_engine.map.deck import NOTHING, parse_tile_line
from cascadia_engine.map.habitat import Board, PlacedTile
from cascadia_engine.scoring.cards import scorers_for
from cascadia_engine.scoring.wildlife import WildlifeScorer


class YamlPlacedTile(BaseModel):
    """A placed tile, with the tile written as a deck line."""

    at: Cell
    tile: str
    rotation: Annotated[int, Field(ge=0, le=6)] = 0
    token: Animal | None = None

    @field_validator("token", mode="before")
    @classmethod
    def _nothing_is_none(cls, v: Any) -> Any:
        if v == NOTHING:
            return None
        return v

    def fix_tile(self) -> PlacedTile:
        """Convert to a placed tile."""
        tile = parse_tile_line(self.tile)
        if self.token is not None and self.token not in tile.animals:
            raise InvalidConfig(f"{self.token.value} is not allowed on {tile}")
        return PlacedTile(tile=tile, rotation=self.rotation, animal=self.token)


class YamlPlayer(BaseModel):
    name: str
    nature_tokens: Annotated[int, Field(ge=0)] = 0
    tiles: list[YamlPlacedTile]

    def fix_player(self, grid: GridKind) -> Player:
        """Convert to a player with a populated board."""
        cells: dict[Cell, PlacedTile] = {}
        for yt in self.tiles:
            if yt.at in cells:
                raise InvalidConfig(f"{self.name} has two tiles at {yt.at}")
            cells[yt.at] = yt.fix_tile()
        board = Board(grid=grid, cells=cells)
        return Player(name=self.name, board=board, nature_tokens=self.nature_tokens)


class YamlSnapshot(BaseModel):
    """End-of-game boards and the scoring setup used."""

    grid: GridKind = GridKind.HEX
    mode: ScoringMode = ScoringMode.FAMILY
    cards: dict[Animal, int] = {}
    players: Annotated[list[YamlPlayer], Field(min_length=1)]

    def fix_players(self) -> list[Player]:
        return [p.fix_player(self.grid) for p in self.players]

    def scorers(self) -> list[WildlifeScorer]:
        return scorers_for(self.mode, self.cards)


def load_snapshot(path: Path) -> tuple[list[Player], list[WildlifeScorer]]:
    """Read players and scoring cards from a snapshot file."""
    try:
        snap = parse_yaml_file_as(YamlSnapshot, path)
        return snap.fix_players(), snap.scorers()
    except (ValidationError, InvalidDeck) as e:
        raise InvalidConfig(f"{path}: {e}") from e
