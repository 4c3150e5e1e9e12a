"""Exceptions raised by the simulation engine"""


class SimulationError(Exception):
    """Base class for every engine error"""


class MissingPlayerError(SimulationError, KeyError):
    """A roster references a player key that is not in the registry"""

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key

    def __str__(self):
        return f"Unknown player: {self.key!r}"


class PlayerDataError(SimulationError, ValueError):
    """A row of the static player or team table could not be parsed"""


class RosterError(SimulationError):
    """A team does not satisfy the lineup invariants"""


class GameOverError(SimulationError):
    """A period was requested after the game reached its final state"""


class GameNotCompleteError(SimulationError):
    """A game was finalized while still in progress (tied or short of regulation)"""


class SeriesCompleteError(SimulationError):
    """A game result was applied to a series that already has a winner"""


class SeriesMismatchError(SimulationError):
    """A game result names a team that is not part of the series"""
