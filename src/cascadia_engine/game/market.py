"""Tile deck, wildlife bag and the shared offer row."""

import logging
from collections import Counter
from random import Random
from typing import Callable

from typing_extensions import Annotated
from pydantic import BaseModel, Field

from cascadia_engine.data.models import Animal, HabitatTile
from cascadia_engine.errors import SupplyExhausted

logger = logging.getLogger(__name__)

OVERPOPULATED = 4  # forced redraw of the whole row
CROWDED = 3  # optional redraw of the matching slots


class TokenPool(BaseModel):
    """Wildlife tokens left in the bag."""

    supply: dict[Animal, Annotated[int, Field(ge=0)]]

    @classmethod
    def full(cls, per_species: int) -> "TokenPool":
        return cls(supply={a: per_species for a in Animal})

    def available(self, reserved: Counter[Animal] | None = None) -> list[Animal]:
        """Species with tokens left, not counting `reserved` ones."""
        reserved = reserved or Counter()
        return [a for a in Animal if self.supply.get(a, 0) > reserved[a]]

    def sample(self, rng: Random, reserved: Counter[Animal] | None = None) -> Animal:
        """Pick a species uniformly among those still in supply.

        Sampling doesn't remove the token; `take` does.
        """
        options = self.available(reserved)
        if not options:
            raise SupplyExhausted("No wildlife tokens left")
        return rng.choice(options)

    def take(self, animal: Animal) -> None:
        """Remove one token from the bag."""
        if self.supply.get(animal, 0) < 1:
            raise SupplyExhausted(f"No {animal.value} tokens left")
        self.supply[animal] -= 1


class Offer(BaseModel):
    """One slot of the offer row."""

    tile: HabitatTile | None = None
    animal: Animal | None = None


class Market:
    """Draw pile, wildlife bag and offer row shared by all players."""

    def __init__(
        self,
        deck: list[HabitatTile],
        pool: TokenPool,
        rng: Random,
        *,
        size: int = 4,
        max_retries: int = 10,
    ):
        self.deck = list(deck)
        self.pool = pool
        self.rng = rng
        self.size = size
        self.max_retries = max_retries
        self.offers = [Offer() for _ in range(size)]

    def fill(self) -> None:
        """Refill every empty slot (as long as the deck lasts)."""
        for offer in self.offers:
            if offer.tile is None and self.deck:
                offer.tile = self.deck.pop()
            if offer.animal is None:
                offered = Counter(a for a in self.animals if a is not None)
                offer.animal = self.pool.sample(self.rng, offered)

    @property
    def tiles(self) -> list[HabitatTile | None]:
        return [o.tile for o in self.offers]

    @property
    def animals(self) -> list[Animal | None]:
        return [o.animal for o in self.offers]

    def take(self, tile_index: int, animal_index: int) -> tuple[HabitatTile, Animal]:
        """Take a tile and an animal from the row, then refill it.

        The indices may differ; pairing them freely costs a nature token,
        which the caller collects.
        """
        tile = self.offers[tile_index].tile
        animal = self.offers[animal_index].animal
        if tile is None or animal is None:
            raise IndexError(f"Empty offer slot: {tile_index}, {animal_index}")
        self.offers[tile_index].tile = None
        self.offers[animal_index].animal = None
        self.fill()
        return tile, animal

    def replace_animals(self, indices: list[int]) -> None:
        """Return some offered animals to the bag and draw new ones."""
        for i in indices:
            self.offers[i].animal = None
        self.fill()

    def overpopulated_species(self, threshold: int) -> Animal | None:
        """Species appearing at least `threshold` times in the row."""
        counts = Counter(a for a in self.animals if a is not None)
        for animal, n in counts.most_common():
            if n >= threshold:
                return animal
        return None

    def resolve_overpopulation(
        self, choose_redraw: Callable[[Animal], bool] | None = None
    ) -> int:
        """Apply the overpopulation rule; returns the number of redraws.

        Four of a kind is redrawn automatically. Three of a kind is redrawn
        only if `choose_redraw` agrees. Both repeat while the condition holds,
        up to `max_retries` times.
        """
        n_redraws = 0
        while n_redraws < self.max_retries:
            species = self.overpopulated_species(OVERPOPULATED)
            if species is not None:
                logger.info(f"Overpopulation of {species.value}, redrawing all")
                self.replace_animals(list(range(self.size)))
                n_redraws += 1
                continue
            species = self.overpopulated_species(CROWDED)
            if species is not None and choose_redraw is not None:
                if choose_redraw(species):
                    logger.info(f"Redrawing three {species.value}")
                    idx = [i for i, a in enumerate(self.animals) if a == species]
                    self.replace_animals(idx)
                    n_redraws += 1
                    continue
            return n_redraws
        logger.warning(f"Overpopulation still present after {n_redraws} redraws")
        return n_redraws
