"""Data models."""

from enum import Enum

from typing_extensions import Annotated
from pydantic import BaseModel, Field, model_validator


class Biome(str, Enum):
    """Habitat biome."""

    FOREST = "FOREST"
    MEADOW = "MEADOW"
    MOUNTAIN = "MOUNTAIN"
    RIVER = "RIVER"
    SWAMP = "SWAMP"


class Animal(str, Enum):
    """Wildlife species."""

    BEAR = "BEAR"
    SALMON = "SALMON"
    FOX = "FOX"
    ELK = "ELK"
    BUZZARD = "BUZZARD"


class GridKind(str, Enum):
    """Board geometry."""

    SQUARE = "SQUARE"
    HEX = "HEX"


class ScoringMode(str, Enum):
    """How wildlife is scored at game end."""

    FAMILY = "FAMILY"
    INTERMEDIATE = "INTERMEDIATE"
    CARDS = "CARDS"  # one card per species


class HabitatTile(BaseModel):
    """Habitat tile blueprint: 1-2 biomes, 1-2 candidate animals."""

    model_config = {"frozen": True}

    biomes: Annotated[tuple[Biome, ...], Field(min_length=1, max_length=2)]
    animals: Annotated[tuple[Animal, ...], Field(min_length=1, max_length=2)]

    @property
    def is_keystone(self) -> bool:
        """Whether the tile shows a single biome."""
        return len(self.biomes) == 1

    def has_biome(self, biome: Biome) -> bool:
        """Check whether the tile shows this biome at all."""
        return biome in self.biomes

    def __str__(self) -> str:
        bio = " ".join(b.value for b in self.biomes)
        ani = " ".join(a.value for a in self.animals)
        return f"{bio} | {ani}"


Cell = tuple[int, int]


class StarterSlot(BaseModel):
    """Where one tile of a starter habitat goes."""

    at: Cell
    rotation: Annotated[int, Field(ge=1, le=6)]


class GameRules(BaseModel):
    """Rule book constants."""

    min_players: int
    max_players: int
    board_size: Annotated[int, Field(gt=0)]
    token_supply: Annotated[int, Field(gt=0)]
    tiles_per_player: Annotated[int, Field(gt=0)]
    extra_tiles: Annotated[int, Field(ge=0)]
    turns: Annotated[int, Field(gt=0)]
    offer_size: Annotated[int, Field(gt=0)]
    starting_nature_tokens: dict[ScoringMode, Annotated[int, Field(ge=0)]]
    starter_slots: Annotated[list[StarterSlot], Field(min_length=3, max_length=3)]
    overpopulation_retries: Annotated[int, Field(ge=0)] = 10

    @model_validator(mode="after")
    def _check_players(self) -> "GameRules":
        """Ensure the player range makes sense."""
        if self.min_players < 1 or self.min_players > self.max_players:
            raise ValueError(
                f"Bad player range: [{self.min_players}, {self.max_players}]"
            )
        return self

    def deck_size(self, n_players: int) -> int:
        """Number of habitat tiles dealt into the draw pile."""
        return n_players * self.tiles_per_player + self.extra_tiles
