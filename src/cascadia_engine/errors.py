"""Errors raised by the game engine."""


class CascadiaError(Exception):
    """Base class for all engine errors."""


class InvalidConfig(CascadiaError, ValueError):
    """Game configuration is not playable."""


class InvalidPlacement(CascadiaError, ValueError):
    """A tile can't be placed where requested."""


class InvalidAnimalAssignment(CascadiaError, ValueError):
    """A wildlife token can't be placed where requested."""


class InvalidDeck(CascadiaError, ValueError):
    """A deck file is malformed."""


class SupplyExhausted(CascadiaError, RuntimeError):
    """No wildlife tokens left to draw from."""
