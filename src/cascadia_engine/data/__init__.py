"""Set up the data."""

from pathlib import Path

from pydantic_yaml import parse_yaml_file_as

from .models import GameRules

__all__ = ["data_path", "base_rules", "deck_path", "starter_deck_path"]

data_path = Path(__file__).parent

deck_path = data_path / "HabitatCards.txt"
starter_deck_path = data_path / "StartHabitatCards.txt"

base_rules = parse_yaml_file_as(GameRules, data_path / "base_rules.yaml")
