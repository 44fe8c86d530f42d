"""Game configuration and setup."""

import logging
from pathlib import Path
from random import Random
from typing import Any

from pydantic import BaseModel, ValidationError, field_validator, model_validator
from pydantic_yaml import parse_yaml_file_as

from cascadia_engine.data import base_rules
from cascadia_engine.data.models import (
    Animal,
    GameRules,
    GridKind,
    HabitatTile,
    ScoringMode,
)
from cascadia_engine.errors import InvalidConfig
from cascadia_engine.map.deck import (
    deal,
    generate_square_deck,
    generate_square_starters,
    load_deck,
    load_starters,
)
from cascadia_engine.map.habitat import Board
from cascadia_engine.scoring.cards import scorers_for
from .market import Market, TokenPool
from .player import Player
from .session import GameSession

logger = logging.getLogger(__name__)


class GameConfig(BaseModel):
    """Settings chosen before a game starts."""

    players: list[str]
    mode: ScoringMode = ScoringMode.FAMILY
    grid: GridKind = GridKind.HEX
    cards: dict[Animal, int] = {}
    seed: int | None = None

    @field_validator("players", mode="after")
    @classmethod
    def _check_players(cls, v: list[str]) -> list[str]:
        """Ensure the player count is supported and names are unique."""
        n = len(v)
        if n < base_rules.min_players or n > base_rules.max_players:
            raise ValueError(
                f"Need {base_rules.min_players} to {base_rules.max_players}"
                f" players, got: {n}"
            )
        if len(set(v)) != n:
            raise ValueError(f"Player names must be unique: {v}")
        return v

    @field_validator("cards", mode="after")
    @classmethod
    def _check_cards(cls, v: dict[Animal, int]) -> dict[Animal, int]:
        """Ensure card patterns are within range."""
        for animal, pattern in v.items():
            if pattern < 1 or pattern > 4:
                raise ValueError(f"Card for {animal.value} must be 1-4: {pattern}")
        return v

    @model_validator(mode="after")
    def _check_mode(self) -> "GameConfig":
        """Card mode needs a card for every species."""
        if self.mode == ScoringMode.CARDS:
            missing = [a.value for a in Animal if a not in self.cards]
            if missing:
                raise ValueError(f"No scoring card chosen for: {missing}")
        return self


def parse_config(data: dict[str, Any]) -> GameConfig:
    """Validate raw settings."""
    try:
        return GameConfig.model_validate(data)
    except ValidationError as ve:
        raise InvalidConfig(str(ve)) from ve


def load_config(path: Path) -> GameConfig:
    """Read settings from a YAML file."""
    try:
        return parse_yaml_file_as(GameConfig, path)
    except ValidationError as ve:
        raise InvalidConfig(f"{path}: {ve}") from ve


def _make_rng(seed: Random | int | None) -> Random:
    if isinstance(seed, Random):
        # clone
        rng = Random()
        rng.setstate(seed.getstate())
    else:
        rng = Random(seed)
    return rng


def new_game(
    config: GameConfig,
    rules: GameRules = base_rules,
    *,
    seed: Random | int | None = None,
    deck: list[HabitatTile] | None = None,
    starters: list[list[HabitatTile]] | None = None,
) -> GameSession:
    """Deal tiles, seed the habitats and fill the offer row.

    `seed` overrides the configured seed. `deck` and `starters` replace the
    bundled (hex) or generated (square) tiles.
    """
    rng = _make_rng(config.seed if seed is None else seed)
    n_players = len(config.players)
    if deck is None:
        if config.grid == GridKind.HEX:
            deck = load_deck()
        else:
            deck = generate_square_deck(rng)
    if starters is None:
        if config.grid == GridKind.HEX:
            starters = load_starters()
        else:
            starters = generate_square_starters(rng)
    if len(starters) < n_players:
        raise InvalidConfig(f"Only {len(starters)} starter habitats for {n_players}")

    pile = deal(deck, rules.deck_size(n_players), rng)
    starters = list(starters)
    rng.shuffle(starters)

    slots = [(s.at, s.rotation) for s in rules.starter_slots]
    nature = rules.starting_nature_tokens.get(config.mode, 0)
    players = []
    for name, start in zip(config.players, starters):
        board = Board(grid=config.grid, size=rules.board_size)
        board.seed_starters(start, slots)
        players.append(Player(name=name, board=board, nature_tokens=nature))

    market = Market(
        pile,
        TokenPool.full(rules.token_supply),
        rng,
        size=rules.offer_size,
        max_retries=rules.overpopulation_retries,
    )
    market.fill()
    logger.info(
        f"New {config.grid.value.lower()} game for {n_players} players"
        f" ({config.mode.value.lower()} scoring), {len(pile)} tiles"
    )
    scorers = scorers_for(config.mode, config.cards)
    return GameSession(players, market, scorers, rules)
