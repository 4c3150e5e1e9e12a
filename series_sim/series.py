"""
Best-of-seven series
Tracks wins and per-player series totals across games and picks the series MVP
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .config import DEFAULT_CONFIG, SimConfig
from .errors import SeriesCompleteError, SeriesMismatchError
from .game import GameResult, mvp_score, play_game
from .players import PlayerRegistry
from .rng import RandomSource
from .teams import TeamInGame, TeamSetup

logger = logging.getLogger(__name__)


@dataclass
class SeriesLine:
    """Series totals for one player (minutes are not tracked across games)"""
    pts: int = 0
    reb: int = 0
    ast: int = 0
    pf: int = 0


@dataclass
class SeriesTeam:
    setup: TeamSetup
    wins: int = 0
    stats: Dict[str, SeriesLine] = field(default_factory=dict)  # player name -> totals

    @property
    def name(self) -> str:
        return self.setup.name

    def add_game(self, team: TeamInGame):
        """Fold one game's box score into the series totals"""
        for player in team.all_players():
            line = self.stats.get(player.name)
            if line is None:
                # Not on the original roster
                continue
            line.pts += player.points
            line.reb += player.rebounds
            line.ast += player.assists
            line.pf += player.fouls


@dataclass
class SeriesState:
    team1: SeriesTeam
    team2: SeriesTeam
    results: List[GameResult] = field(default_factory=list)
    wins_to_clinch: int = 4

    @property
    def games_played(self) -> int:
        return len(self.results)

    @property
    def next_game_number(self) -> int:
        return self.team1.wins + self.team2.wins + 1

    @property
    def is_complete(self) -> bool:
        return self.team1.wins >= self.wins_to_clinch or self.team2.wins >= self.wins_to_clinch

    @property
    def winner(self) -> Optional[SeriesTeam]:
        if not self.is_complete:
            return None
        return self.team1 if self.team1.wins > self.team2.wins else self.team2

    @property
    def loser(self) -> Optional[SeriesTeam]:
        if not self.is_complete:
            return None
        return self.team2 if self.team1.wins > self.team2.wins else self.team1

    @property
    def series_score(self) -> str:
        """Leader's wins first, e.g. 4-2"""
        high = max(self.team1.wins, self.team2.wins)
        low = min(self.team1.wins, self.team2.wins)
        return f"{high}-{low}"

    def team_named(self, name: str) -> Optional[SeriesTeam]:
        for team in (self.team1, self.team2):
            if team.name == name:
                return team
        return None


@dataclass(frozen=True)
class HistoricalSeries:
    """A real Finals matchup: the two period rosters and the dates games were played"""
    series_id: str
    name: str
    description: str
    team1: TeamSetup
    team2: TeamSetup
    game_dates: Tuple[str, ...] = ()

    def game_date(self, game_number: int) -> str:
        """Date of the given game (1-based), blank for games the real series never needed"""
        if 1 <= game_number <= len(self.game_dates):
            return self.game_dates[game_number - 1]
        return ''


@dataclass(frozen=True)
class MVPRecord:
    name: str
    pts: int
    reb: int
    ast: int
    pf: int
    ppg: float
    rpg: float
    apg: float
    score: float
    img_url: str = ''


def _series_team(setup: TeamSetup, registry: PlayerRegistry) -> SeriesTeam:
    stats = {registry[key].name: SeriesLine() for key in setup.player_keys()}
    return SeriesTeam(setup=setup, stats=stats)


def start_series(setup1: TeamSetup, setup2: TeamSetup, registry: PlayerRegistry,
                 config: SimConfig = DEFAULT_CONFIG) -> SeriesState:
    """Fresh 0-0 series with every roster player at zero"""
    if setup1.name == setup2.name:
        raise SeriesMismatchError(f"Both teams are named {setup1.name!r}")
    return SeriesState(
        team1=_series_team(setup1, registry),
        team2=_series_team(setup2, registry),
        wins_to_clinch=config.wins_to_clinch,
    )


def apply_game_to_series(state: SeriesState, result: GameResult) -> SeriesState:
    """Return a new series state with the game's winner and box scores folded in"""
    if state.is_complete:
        raise SeriesCompleteError(f"Series already decided {state.series_score}")

    names = {state.team1.name, state.team2.name}
    if {result.team1.name, result.team2.name} != names or result.winner.name not in names:
        raise SeriesMismatchError(
            f"Result {result.team1.name} vs {result.team2.name} does not belong to "
            f"{state.team1.name} vs {state.team2.name}")

    new_state = SeriesState(
        team1=copy.deepcopy(state.team1),
        team2=copy.deepcopy(state.team2),
        results=list(state.results) + [result],
        wins_to_clinch=state.wins_to_clinch,
    )
    new_state.team_named(result.winner.name).wins += 1
    for game_team in (result.team1, result.team2):
        new_state.team_named(game_team.name).add_game(game_team)

    logger.debug("After game %d: %s %d - %s %d", result.game_number, new_state.team1.name,
                 new_state.team1.wins, new_state.team2.name, new_state.team2.wins)
    return new_state


def series_mvp(team: SeriesTeam, games_played: int, registry: PlayerRegistry) -> MVPRecord:
    """
    Series MVP: same weighting as the game MVP, on per-game averages

    Only the given team's roster is considered (callers pass the winner).
    An empty stat table falls back to the first player in the registry.
    """
    if games_played < 1:
        raise ValueError("games_played must be at least 1")

    best_name, best_line, best_score = None, None, None
    for name, line in team.stats.items():
        score = mvp_score(line.pts / games_played, line.reb / games_played,
                          line.ast / games_played, line.pf / games_played)
        if best_score is None or score > best_score:
            best_name, best_line, best_score = name, line, score

    if best_name is None:
        fallback = registry.first()
        return MVPRecord(name=fallback.name, pts=0, reb=0, ast=0, pf=0, ppg=0.0, rpg=0.0, apg=0.0,
                         score=0.0, img_url=fallback.img_url)

    try:
        img_url = registry.by_name(best_name).img_url
    except KeyError:
        img_url = ''
    return MVPRecord(
        name=best_name,
        pts=best_line.pts,
        reb=best_line.reb,
        ast=best_line.ast,
        pf=best_line.pf,
        ppg=best_line.pts / games_played,
        rpg=best_line.reb / games_played,
        apg=best_line.ast / games_played,
        score=best_score,
        img_url=img_url,
    )


def simulate_series(setup1: TeamSetup, setup2: TeamSetup, registry: PlayerRegistry,
                    rng: Optional[RandomSource] = None, config: SimConfig = DEFAULT_CONFIG) -> SeriesState:
    """Play games until one team has clinched (4 to 7 games)"""
    rng = rng or RandomSource()
    state = start_series(setup1, setup2, registry, config)
    while not state.is_complete:
        result = play_game(setup1, setup2, registry, rng, state.next_game_number, config)
        state = apply_game_to_series(state, result)

    logger.info("%s win the series %s", state.winner.name, state.series_score)
    return state
