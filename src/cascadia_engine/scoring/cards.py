"""Pick scoring cards by species and pattern number."""

from cascadia_engine.data.models import Animal, ScoringMode
from cascadia_engine.errors import InvalidConfig
from . import bear, buzzard, elk, families, fox, salmon  # noqa: F401
from .wildlife import (
    CARD_REGISTRY,
    FAMILY_PATTERN,
    INTERMEDIATE_PATTERN,
    ScorerKey,
    WildlifeScorer,
)


def make_scorer(animal: Animal | None, pattern: int) -> WildlifeScorer:
    """Create the scorer for a species card (1-4) or an aggregate card (5-6)."""
    if animal is None and pattern not in (FAMILY_PATTERN, INTERMEDIATE_PATTERN):
        raise InvalidConfig(f"Aggregate card must be 5 or 6, got: {pattern}")
    if animal is not None and (pattern < 1 or pattern > 4):
        raise InvalidConfig(
            f"Card for {animal.value} must be within [1, 4], got: {pattern}"
        )
    return CARD_REGISTRY[(animal, pattern)]()


def scorers_for(
    mode: ScoringMode, cards: dict[Animal, int] | None = None
) -> list[WildlifeScorer]:
    """Scorers used by a scoring mode."""
    match mode:
        case ScoringMode.FAMILY:
            return [make_scorer(None, FAMILY_PATTERN)]
        case ScoringMode.INTERMEDIATE:
            return [make_scorer(None, INTERMEDIATE_PATTERN)]
        case ScoringMode.CARDS:
            cards = cards or {}
            missing = [a.value for a in Animal if a not in cards]
            if missing:
                raise InvalidConfig(f"No scoring card chosen for: {missing}")
            return [make_scorer(a, cards[a]) for a in Animal]
    raise InvalidConfig(f"Unknown scoring mode: {mode!r}")


def registered_cards() -> list[ScorerKey]:
    """All (species, pattern) pairs with a scorer."""
    return sorted(
        CARD_REGISTRY, key=lambda k: ("" if k[0] is None else k[0].value, k[1])
    )
