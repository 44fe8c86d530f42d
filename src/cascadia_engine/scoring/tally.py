"""End-of-game scoring."""

import logging

from pydantic import BaseModel

from cascadia_engine.data.models import Biome
from cascadia_engine.game.player import Player
from .biomes import score_biomes
from .wildlife import WildlifeScorer

logger = logging.getLogger(__name__)

MAJORITY_POINTS = 2
SHARED_MAJORITY_POINTS = 1


class ScoreBreakdown(BaseModel):
    """Where a player's points came from."""

    name: str
    biomes: dict[Biome, int]
    wildlife: dict[str, int]
    majority_bonus: int
    nature_tokens: int
    total: int

    def human_description(self) -> str:
        """Multi-line summary."""
        lines = [f"{self.name}: {self.total}"]
        for biome, pts in self.biomes.items():
            lines.append(f"  {biome.value.lower()}: {pts}")
        for card, pts in self.wildlife.items():
            lines.append(f"  {card}: {pts}")
        lines.append(f"  majority bonus: {self.majority_bonus}")
        lines.append(f"  nature tokens: {self.nature_tokens}")
        return "\n".join(lines)


def majority_bonuses(players: list[Player]) -> list[dict[Biome, int]]:
    """Bonus per player and biome for the largest region of each biome.

    A single leader gets 2; tied leaders get 1 each.
    """
    res: list[dict[Biome, int]] = [{b: 0 for b in Biome} for _ in players]
    for biome in Biome:
        best = max(p.biome_points[biome] for p in players)
        leaders = [i for i, p in enumerate(players) if p.biome_points[biome] == best]
        pts = MAJORITY_POINTS if len(leaders) == 1 else SHARED_MAJORITY_POINTS
        for i in leaders:
            res[i][biome] = pts
    return res


def tally(players: list[Player], scorers: list[WildlifeScorer]) -> list[ScoreBreakdown]:
    """Score every player, adding to their points."""
    if not players:
        return []
    for player in players:
        score_biomes(player)
    wildlife: list[dict[str, int]] = []
    for player in players:
        player.points += sum(player.biome_points.values())
        by_card = {s.name: s.score(player) for s in scorers}
        player.points += sum(by_card.values())
        wildlife.append(by_card)
    bonuses = majority_bonuses(players)
    res = []
    for player, by_card, bonus in zip(players, wildlife, bonuses):
        bonus_total = sum(bonus.values())
        player.points += bonus_total + player.nature_tokens
        logger.info(f"Final score for {player.name}: {player.points}")
        res.append(
            ScoreBreakdown(
                name=player.name,
                biomes=dict(player.biome_points),
                wildlife=by_card,
                majority_bonus=bonus_total,
                nature_tokens=player.nature_tokens,
                total=player.points,
            )
        )
    return res


def winners(players: list[Player]) -> list[Player]:
    """Players with the highest score."""
    best = max((p.points for p in players), default=0)
    return [p for p in players if p.points == best]


def winner_names(players: list[Player]) -> str:
    return ", ".join(p.name for p in winners(players))
