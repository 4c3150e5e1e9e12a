"""Shared fixtures: rating factories and a scripted random source"""

from typing import Iterable, List, Sequence

import pytest

from series_sim.data import load_players, load_teams
from series_sim.game import GameResult, GameScore, finalize_game
from series_sim.players import (
    POSITIONS,
    Attributes,
    CareerStats,
    PlayerInGame,
    PlayerRating,
    PlayerRegistry,
    Position,
    ShotTendencies,
)
from series_sim.rng import RandomSource
from series_sim.teams import TeamInGame, TeamSetup, build_team


class ScriptedRandom(RandomSource):
    """Replays a fixed list of draws and fails loudly when it runs out"""

    def __init__(self, values: Iterable[float]):
        super().__init__(0)
        self.values: List[float] = list(values)

    def random(self) -> float:
        if not self.values:
            raise AssertionError("ScriptedRandom ran out of draws")
        return self.values.pop(0)


def make_rating(player_id: int, position: Position, **overrides) -> PlayerRating:
    """A plain 80-rated player who only takes inside shots and never fouls"""
    attributes = dict(
        inside_scoring=80, mid_range=80, three_point=80, playmaking=80, perimeter_defense=80,
        interior_defense=80, rebounding=80, athleticism=80, basketball_iq=80,
    )
    attributes.update(overrides.pop('attributes', {}))
    fields = dict(
        id=player_id,
        key=f"p{player_id}",
        name=f"Player {player_id}",
        position=position,
        attributes=Attributes(**attributes),
        career=CareerStats(usg_pct=20, fg_pct=45),
        shot_tendencies=ShotTendencies(inside=100, mid=0, three=0),
        target_minutes=30,
        foul_tendency=0,
    )
    fields.update(overrides)
    return PlayerRating(**fields)


def make_team(name: str, first_id: int, bench: bool = False,
              positions: Sequence[Position] = POSITIONS, **overrides) -> TeamInGame:
    """Five starters (ids first_id..first_id+4), optionally a full second unit"""
    starters = [make_rating(first_id + i, pos, **overrides) for i, pos in enumerate(positions)]
    reserves = []
    if bench:
        reserves = [make_rating(first_id + 5 + i, pos, **overrides) for i, pos in enumerate(positions)]
    return TeamInGame(
        name=name,
        on_court=[PlayerInGame(r) for r in starters],
        bench=[PlayerInGame(r) for r in reserves],
        starters={r.position: r for r in starters},
        reserves=reserves,
    )


@pytest.fixture
def offense():
    return make_team("Offense", 1)


@pytest.fixture
def defense():
    return make_team("Defense", 11)


@pytest.fixture(scope="session")
def registry() -> PlayerRegistry:
    return load_players()


@pytest.fixture(scope="session")
def teams():
    return load_teams()


def finished_game(setup1: TeamSetup, setup2: TeamSetup, registry: PlayerRegistry, team1_wins: bool,
                  game_number: int = 1) -> GameResult:
    """A finished game without simulating it: the winner's first starter scores every point"""
    team1, team2 = build_team(setup1, registry), build_team(setup2, registry)
    score = GameScore()
    for period in range(1, 5):
        score.record(period, (25, 20) if team1_wins else (20, 25))
    winner, loser = (team1, team2) if team1_wins else (team2, team1)
    winner.on_court[0].points = 100
    loser.on_court[0].points = 80
    return finalize_game(team1, team2, score, [], registry, game_number)
