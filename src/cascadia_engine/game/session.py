"""Turn loop."""

import logging
from abc import ABC, abstractmethod

from pydantic import BaseModel

from cascadia_engine.data.models import Animal, Cell, GameRules, GridKind, HabitatTile
from cascadia_engine.errors import InvalidAnimalAssignment, InvalidPlacement
from cascadia_engine.scoring.tally import ScoreBreakdown, tally, winner_names
from cascadia_engine.scoring.wildlife import WildlifeScorer
from .market import Market
from .player import Player

logger = logging.getLogger(__name__)


class TurnChoice(BaseModel):
    """What a player does on their turn.

    Taking a tile and an animal from different slots costs a nature token.
    `animal_cell=None` returns the animal to the bag.
    """

    tile_index: int
    animal_index: int
    cell: Cell
    rotation: int = 0
    animal_cell: Cell | None = None


class TurnDecider(ABC):
    """Makes the decisions for a player."""

    @abstractmethod
    def choose(self, player: Player, market: Market) -> TurnChoice:
        """Pick offers and where to put them."""

    def choose_redraw(self, player: Player, species: Animal) -> bool:
        """Whether to redraw three offered animals of the same species."""
        return False

    def choose_tokens_to_discard(self, player: Player, market: Market) -> list[int]:
        """Offered animals to redraw for a nature token (none by default)."""
        return []


def _check_animal(
    player: Player,
    animal: Animal,
    target: Cell,
    new_cell: Cell,
    new_tile: HabitatTile,
) -> None:
    """Raise if the animal can't go on `target` once the new tile is down."""
    if target == new_cell:
        candidates = new_tile.animals
    else:
        placed = player.board.get(target)
        if placed is None:
            raise InvalidAnimalAssignment(f"No tile at {target}")
        if placed.animal is not None:
            raise InvalidAnimalAssignment(f"Tile at {target} already has a token")
        candidates = placed.tile.animals
    if animal not in candidates:
        raise InvalidAnimalAssignment(f"{animal.value} can't go on {target}")


class GameSession:
    """A game in progress."""

    def __init__(
        self,
        players: list[Player],
        market: Market,
        scorers: list[WildlifeScorer],
        rules: GameRules,
    ):
        self.players = players
        self.market = market
        self.scorers = scorers
        self.rules = rules
        self.turn = 0
        self.results: list[ScoreBreakdown] = []

    @property
    def grid(self) -> GridKind:
        return self.players[0].board.grid

    @property
    def nature_actions(self) -> bool:
        """Nature tokens can only be spent on hex boards."""
        return self.grid == GridKind.HEX

    def play_turn(self, player: Player, decider: TurnDecider) -> TurnChoice:
        """Run one player's turn."""
        self.market.resolve_overpopulation(
            lambda species: decider.choose_redraw(player, species)
        )
        if self.nature_actions and player.nature_tokens > 0:
            discard = decider.choose_tokens_to_discard(player, self.market)
            if discard:
                player.spend_nature_token()
                logger.info(f"{player.name} redraws animals {discard}")
                self.market.replace_animals(discard)

        choice = decider.choose(player, self.market)
        tile = self.market.tiles[choice.tile_index]
        animal = self.market.animals[choice.animal_index]
        if tile is None or animal is None:
            raise IndexError(f"Empty offer slot in {choice}")
        decoupled = choice.tile_index != choice.animal_index
        if decoupled and not self.nature_actions:
            raise InvalidPlacement("Tile and animal must come from the same slot")
        if decoupled and player.nature_tokens < 1:
            raise InvalidPlacement(f"{player.name} has no nature token to spend")
        player.board.check_placement(choice.cell, tile, choice.rotation)
        if choice.animal_cell is not None:
            _check_animal(player, animal, choice.animal_cell, choice.cell, tile)

        if decoupled:
            player.spend_nature_token()
        self.market.take(choice.tile_index, choice.animal_index)
        player.board.place(choice.cell, tile, rotation=choice.rotation)
        if choice.animal_cell is not None:
            self.market.pool.take(animal)
            player.place_animal(choice.animal_cell, animal)
        return choice

    def play(self, deciders: dict[str, TurnDecider]) -> list[ScoreBreakdown]:
        """Play all turns, then score the game."""
        for turn in range(1, self.rules.turns + 1):
            self.turn = turn
            logger.info(f"Turn {self.turn}")
            for player in self.players:
                if all(t is None for t in self.market.tiles):
                    logger.warning("Draw pile ran out, ending early")
                    return self.finish()
                self.play_turn(player, deciders[player.name])
        return self.finish()

    def finish(self) -> list[ScoreBreakdown]:
        """Score the game and announce the winners."""
        self.results = tally(self.players, self.scorers)
        logger.info(f"Winner(s): {winner_names(self.players)}")
        return self.results
