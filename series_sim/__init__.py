"""
Classic Series Simulator
Possession-by-possession basketball games and best-of-seven series between
rosters of rated players
"""

from .config import DEFAULT_CONFIG, SimConfig
from .errors import (
    GameNotCompleteError,
    GameOverError,
    MissingPlayerError,
    PlayerDataError,
    RosterError,
    SeriesCompleteError,
    SeriesMismatchError,
    SimulationError,
)
from .game import GameResult, GameScore, GameSimulation, GameStatus, calculate_mvp, finalize_game, play_game
from .period import PeriodLog, PeriodResult, simulate_period
from .players import POSITIONS, PlayerInGame, PlayerRating, PlayerRegistry, Position, Trait
from .possession import PossessionContext, PossessionDelta, apply_delta, resolve_possession
from .rng import RandomSource, weighted_choice
from .rotation import rotate
from .series import (
    HistoricalSeries,
    MVPRecord,
    SeriesState,
    apply_game_to_series,
    series_mvp,
    simulate_series,
    start_series,
)
from .teams import TeamInGame, TeamSetup, build_team

__version__ = "1.0.0"
