"""
Game flow and final result
Keeps the period-by-period score, decides when a game is over, and packages
the finished game with its MVP
"""

import copy
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .config import DEFAULT_CONFIG, SimConfig
from .errors import GameNotCompleteError, GameOverError, RosterError
from .period import TIED, PeriodLog, period_name, simulate_period
from .players import PlayerInGame, PlayerRegistry
from .rng import RandomSource
from .rotation import rotate_teams
from .teams import TeamInGame, TeamSetup, build_team

logger = logging.getLogger(__name__)


class GameScore:
    """Points per period, keyed q1..q4 then ot1, ot2, ...  Periods are only ever appended."""

    def __init__(self, regulation_periods: int = 4):
        self.regulation_periods = regulation_periods
        self._periods: Dict[str, Tuple[int, int]] = {}

    def period_key(self, period: int) -> str:
        return period_name(period, self.regulation_periods).lower()

    def record(self, period: int, points: Tuple[int, int]):
        key = self.period_key(period)
        if key in self._periods:
            raise ValueError(f"Score for {key} already recorded")
        self._periods[key] = (points[0], points[1])

    def __getitem__(self, key: str) -> Tuple[int, int]:
        return self._periods[key]

    def __contains__(self, key: object) -> bool:
        return key in self._periods

    def __iter__(self) -> Iterator[str]:
        return iter(self._periods)

    def __len__(self) -> int:
        return len(self._periods)

    def items(self):
        return self._periods.items()

    def totals(self) -> Tuple[int, int]:
        return (sum(t1 for t1, _ in self._periods.values()),
                sum(t2 for _, t2 in self._periods.values()))

    def halftime(self) -> Tuple[int, int]:
        """Points through the first two periods"""
        first_half = [self._periods[k] for k in ('q1', 'q2') if k in self._periods]
        return sum(t1 for t1, _ in first_half), sum(t2 for _, t2 in first_half)

    def overtime_periods(self) -> int:
        return sum(1 for key in self._periods if key.startswith('ot'))

    def periods_played(self) -> int:
        return len(self._periods)

    def copy(self) -> 'GameScore':
        clone = GameScore(self.regulation_periods)
        clone._periods = dict(self._periods)
        return clone


class GameStatus(Enum):
    IN_PROGRESS = 'in_progress'
    COMPLETE = 'complete'


def game_status(next_period: int, score: GameScore, regulation_periods: int = 4) -> GameStatus:
    """A game ends once regulation is done and the totals differ"""
    team1_total, team2_total = score.totals()
    if next_period > regulation_periods and team1_total != team2_total:
        return GameStatus.COMPLETE
    return GameStatus.IN_PROGRESS


def mvp_score(points: float, rebounds: float, assists: float, fouls: float) -> float:
    return points * 1.0 + rebounds * 1.2 + assists * 1.5 - fouls * 2.0


def calculate_mvp(players: Sequence[PlayerInGame], registry: PlayerRegistry) -> PlayerInGame:
    """
    Best all-around line among the given players, first one found on a tie

    An empty list falls back to the first player in the registry with an
    empty box score.
    """
    if not players:
        return PlayerInGame(registry.first(), stamina=0.0)

    best = players[0]
    best_score = mvp_score(best.points, best.rebounds, best.assists, best.fouls)
    for player in players[1:]:
        score = mvp_score(player.points, player.rebounds, player.assists, player.fouls)
        if score > best_score:
            best, best_score = player, score
    return best


@dataclass(frozen=True)
class GameResult:
    """Snapshot of a finished game"""
    game_number: int
    winner: TeamInGame
    loser: TeamInGame
    score: str  # "high - low"
    team1: TeamInGame
    team2: TeamInGame
    halftime_score: str  # "team1 - team2"
    lead_changes: int
    mvp: PlayerInGame
    total_minutes: int
    periods: GameScore = field(compare=False)
    play_by_play: Tuple[PeriodLog, ...] = field(default=(), compare=False)

    @property
    def overtime_periods(self) -> int:
        return self.periods.overtime_periods()

    @property
    def final(self) -> Tuple[int, int]:
        return self.periods.totals()


def finalize_game(team1: TeamInGame, team2: TeamInGame, score: GameScore, play_by_play: Sequence[PeriodLog],
                  registry: PlayerRegistry, game_number: int = 1,
                  config: SimConfig = DEFAULT_CONFIG) -> GameResult:
    """Build the GameResult for a finished game; a tie is not a final state"""
    team1_total, team2_total = score.totals()
    if team1_total == team2_total:
        raise GameNotCompleteError(f"Game is tied {team1_total}-{team2_total}, play overtime first")
    if score.periods_played() < config.regulation_periods:
        raise GameNotCompleteError(f"Only {score.periods_played()} periods played")

    team1 = copy.deepcopy(team1)
    team2 = copy.deepcopy(team2)
    winner, loser = (team1, team2) if team1_total > team2_total else (team2, team1)

    half1, half2 = score.halftime()
    overtimes = score.overtime_periods()
    total_minutes = (config.regulation_periods * config.regulation_minutes
                     + overtimes * config.overtime_minutes)

    return GameResult(
        game_number=game_number,
        winner=winner,
        loser=loser,
        score=f"{max(team1_total, team2_total)} - {min(team1_total, team2_total)}",
        team1=team1,
        team2=team2,
        halftime_score=f"{half1} - {half2}",
        lead_changes=sum(log.lead_changes for log in play_by_play),
        mvp=calculate_mvp(winner.all_players(), registry),
        total_minutes=total_minutes,
        periods=score.copy(),
        play_by_play=tuple(play_by_play),
    )


class GameSimulation:
    """Simulates a basketball game one period at a time"""

    def __init__(self, team1: TeamInGame, team2: TeamInGame, registry: PlayerRegistry,
                 rng: Optional[RandomSource] = None, game_number: int = 1,
                 config: SimConfig = DEFAULT_CONFIG):
        team1.check_lineup()
        team2.check_lineup()
        shared = {p.id for p in team1.all_players()} & {p.id for p in team2.all_players()}
        if shared:
            raise RosterError(f"{team1.name} and {team2.name} share players")

        self.team1 = team1
        self.team2 = team2
        self.registry = registry
        self.rng = rng or RandomSource()
        self.game_number = game_number
        self.config = config
        self.period = 1  # Next period to be played
        self.score = GameScore(config.regulation_periods)
        self.play_by_play: List[PeriodLog] = []
        self.last_lead_team = TIED

    @property
    def status(self) -> GameStatus:
        return game_status(self.period, self.score, self.config.regulation_periods)

    @property
    def is_complete(self) -> bool:
        return self.status is GameStatus.COMPLETE

    def simulate_next_period(self) -> PeriodLog:
        """Play the next period, then run the substitution window"""
        if self.is_complete:
            raise GameOverError(f"Game {self.game_number} is already over")

        result = simulate_period(self.team1, self.team2, self.period, self.score.totals(),
                                 self.last_lead_team, self.rng, self.config)
        self.team1, self.team2 = rotate_teams(result.team1, result.team2, self.period, self.config)
        self.score.record(self.period, result.points)
        self.play_by_play.append(result.log)
        self.last_lead_team = result.last_lead_team
        self.period += 1
        return result.log

    def simulate_game(self) -> GameResult:
        """Four quarters, then overtime until the tie breaks"""
        while not self.is_complete:
            self.simulate_next_period()
        return self.finalize()

    def finalize(self) -> GameResult:
        if not self.is_complete:
            raise GameNotCompleteError(f"Game {self.game_number} is still in progress")
        result = finalize_game(self.team1, self.team2, self.score, self.play_by_play,
                               self.registry, self.game_number, self.config)
        ot = result.overtime_periods
        logger.info("Game %d final: %s def. %s %s%s", self.game_number, result.winner.name,
                    result.loser.name, result.score, f" ({ot} OT)" if ot else "")
        return result


def play_game(setup1: TeamSetup, setup2: TeamSetup, registry: PlayerRegistry,
              rng: Optional[RandomSource] = None, game_number: int = 1,
              config: SimConfig = DEFAULT_CONFIG) -> GameResult:
    """Build both teams from their rosters and simulate a full game"""
    game = GameSimulation(build_team(setup1, registry), build_team(setup2, registry),
                          registry, rng, game_number, config)
    return game.simulate_game()
