"""Players."""

from typing_extensions import Annotated
from pydantic import BaseModel, ConfigDict, Field, field_validator

from cascadia_engine.data.models import Animal, Biome, Cell
from cascadia_engine.errors import InvalidPlacement
from cascadia_engine.map.habitat import Board, PlacedTile


def _zero_biomes() -> dict[Biome, int]:
    return {b: 0 for b in Biome}


class Player(BaseModel):
    """A player with their habitat and score."""

    model_config = ConfigDict(validate_assignment=True)

    name: str
    board: Board
    points: int = 0
    nature_tokens: Annotated[int, Field(ge=0)] = 0
    biome_points: dict[Biome, int] = Field(default_factory=_zero_biomes)

    @field_validator("biome_points", mode="after")
    @classmethod
    def _fill_biomes(cls, v: dict[Biome, int]) -> dict[Biome, int]:
        """Ensure every biome has an entry."""
        return {b: v.get(b, 0) for b in Biome}

    def place_animal(self, cell: Cell, animal: Animal) -> PlacedTile:
        """Place a token; a keystone tile earns a nature token."""
        placed = self.board.place_animal(cell, animal)
        if placed.is_keystone:
            self.nature_tokens += 1
        return placed

    def spend_nature_token(self) -> None:
        if self.nature_tokens < 1:
            raise InvalidPlacement(f"{self.name} has no nature tokens left")
        self.nature_tokens -= 1
