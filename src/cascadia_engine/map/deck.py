"""Habitat decks: text format, bundled decks and procedural square decks."""

from pathlib import Path
from random import Random

from pydantic import ValidationError

from cascadia_engine.data import deck_path, starter_deck_path
from cascadia_engine.data.models import Animal, Biome, HabitatTile
from cascadia_engine.errors import InvalidDeck

SEPARATOR = "|"
NOTHING = "NOTHING"  # placeholder accepted in files, never stored


def parse_tile_line(line: str) -> HabitatTile:
    """Parse `BIOME [BIOME] | ANIMAL [ANIMAL]` into a tile."""
    if line.count(SEPARATOR) != 1:
        raise InvalidDeck(f"Expected exactly one '{SEPARATOR}' in: {line!r}")
    left, right = line.split(SEPARATOR)
    try:
        biomes = [Biome(w) for w in left.split() if w != NOTHING]
        animals = [Animal(w) for w in right.split() if w != NOTHING]
    except ValueError as ve:
        raise InvalidDeck(f"Unknown token in: {line!r}") from ve
    try:
        return HabitatTile(biomes=biomes, animals=animals)
    except ValidationError as ve:
        raise InvalidDeck(f"Bad tile {line!r}: {ve}") from ve


def format_tile(tile: HabitatTile) -> str:
    """Format a tile as one deck line."""
    return str(tile)


def read_tiles(path: Path) -> list[HabitatTile]:
    """Read all tiles from a deck file, skipping blanks and comments."""
    tiles = []
    with open(path, encoding="utf-8") as f:
        for i, raw in enumerate(f, start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            try:
                tiles.append(parse_tile_line(line))
            except InvalidDeck as e:
                raise InvalidDeck(f"{path}:{i}: {e}") from e
    return tiles


def write_tiles(path: Path, tiles: list[HabitatTile]) -> None:
    """Write tiles to a deck file."""
    with open(path, "w", encoding="utf-8") as f:
        for tile in tiles:
            f.write(format_tile(tile) + "\n")


def group_starters(tiles: list[HabitatTile]) -> list[list[HabitatTile]]:
    """Group consecutive tiles into starter habitats of three."""
    if len(tiles) % 3 != 0:
        raise InvalidDeck(f"Starter tiles must come in threes, got: {len(tiles)}")
    return [tiles[i : i + 3] for i in range(0, len(tiles), 3)]


def load_deck(path: Path = deck_path) -> list[HabitatTile]:
    """Load the habitat tile deck."""
    return read_tiles(path)


def load_starters(path: Path = starter_deck_path) -> list[list[HabitatTile]]:
    """Load the starter habitats."""
    return group_starters(read_tiles(path))


def deal(tiles: list[HabitatTile], n: int, rng: Random) -> list[HabitatTile]:
    """Shuffle and take `n` tiles for a draw pile."""
    if n > len(tiles):
        raise InvalidDeck(f"Deck has {len(tiles)} tiles, need {n}")
    pile = list(tiles)
    rng.shuffle(pile)
    return pile[:n]


def _square_tile(biome: Biome, animal: Animal, rng: Random) -> HabitatTile:
    other = rng.choice([a for a in Animal if a != animal])
    return HabitatTile(biomes=[biome], animals=[animal, other])


def generate_square_deck(rng: Random) -> list[HabitatTile]:
    """Generate the square-grid deck.

    Per biome: three tiles for every species (paired with another random
    species), plus two fully random tiles.
    """
    tiles = []
    for biome in Biome:
        for animal in Animal:
            for _ in range(3):
                tiles.append(_square_tile(biome, animal, rng))
        for _ in range(2):
            tiles.append(_square_tile(biome, rng.choice(list(Animal)), rng))
    return tiles


def generate_square_starters(rng: Random, n: int = 5) -> list[list[HabitatTile]]:
    """Generate starter habitats for the square grid, each with three biomes."""
    biomes = list(Biome)
    res = []
    for _ in range(n):
        picked = rng.sample(biomes, 3)
        animals = rng.sample(list(Animal), 3)
        res.append([_square_tile(b, a, rng) for b, a in zip(picked, animals)])
    return res
