import pytest

from conftest import make_team
from series_sim.errors import GameNotCompleteError, GameOverError, RosterError
from series_sim.game import (
    GameScore,
    GameSimulation,
    GameStatus,
    calculate_mvp,
    finalize_game,
    game_status,
    mvp_score,
    play_game,
)
from series_sim.players import PlayerInGame
from series_sim.rng import RandomSource
from series_sim.teams import build_team


def regulation(points=(25, 25)):
    score = GameScore()
    for period in range(1, 5):
        score.record(period, points)
    return score


def test_game_score_keys_and_totals():
    score = regulation((20, 22))
    score.record(5, (10, 8))
    score.record(6, (12, 9))

    assert list(score) == ["q1", "q2", "q3", "q4", "ot1", "ot2"]
    assert score["ot2"] == (12, 9)
    assert score.totals() == (102, 105)
    assert score.halftime() == (40, 44)
    assert score.overtime_periods() == 2
    assert score.periods_played() == 6


def test_game_score_refuses_to_rewrite_a_period():
    score = regulation()
    with pytest.raises(ValueError):
        score.record(3, (0, 0))


def test_game_score_copy_is_independent():
    score = regulation()
    clone = score.copy()
    clone.record(5, (2, 0))
    assert "ot1" not in score
    assert len(clone) == 5


def test_game_status():
    empty = GameScore()
    assert game_status(1, empty) is GameStatus.IN_PROGRESS

    partial = GameScore()
    partial.record(1, (30, 10))
    assert game_status(2, partial) is GameStatus.IN_PROGRESS

    assert game_status(5, regulation((25, 25))) is GameStatus.IN_PROGRESS
    assert game_status(5, regulation((26, 25))) is GameStatus.COMPLETE


def test_mvp_weights():
    assert mvp_score(20, 10, 5, 2) == pytest.approx(20 + 12 + 7.5 - 4)


def test_mvp_first_one_wins_a_tie(registry):
    a = PlayerInGame(registry["magic_johnson"], points=20)
    b = PlayerInGame(registry["byron_scott"], points=20)
    assert calculate_mvp([a, b], registry) is a


def test_mvp_fouls_count_against(registry):
    a = PlayerInGame(registry["magic_johnson"], points=20, fouls=5)
    b = PlayerInGame(registry["byron_scott"], points=15)
    assert calculate_mvp([a, b], registry) is b


def test_mvp_with_nobody_falls_back_to_first_registered(registry):
    mvp = calculate_mvp([], registry)
    assert mvp.name == "Magic Johnson"
    assert mvp.points == 0
    assert mvp.stamina == 0


def test_finalize_rejects_ties_and_short_games(offense, defense, registry):
    with pytest.raises(GameNotCompleteError):
        finalize_game(offense, defense, regulation(), [], registry)

    short = GameScore()
    short.record(1, (30, 20))
    with pytest.raises(GameNotCompleteError):
        finalize_game(offense, defense, short, [], registry)


def test_teams_cannot_share_players(registry):
    with pytest.raises(RosterError):
        GameSimulation(make_team("Home", 1), make_team("Away", 3), registry)


def test_short_lineup_is_rejected(registry):
    home = make_team("Home", 1)
    home.on_court.pop()
    with pytest.raises(RosterError):
        GameSimulation(home, make_team("Away", 11), registry)


@pytest.fixture
def lakers_celtics(teams, registry):
    return play_game(teams["lakers_85"], teams["celtics_86"], registry, RandomSource(7))


def test_full_game_result(lakers_celtics):
    result = lakers_celtics
    team1_total, team2_total = result.final

    assert team1_total != team2_total
    assert result.winner.points() > result.loser.points()
    assert result.score == f"{max(result.final)} - {min(result.final)}"
    assert result.team1.points() == team1_total
    assert result.team2.points() == team2_total
    assert list(result.periods)[:4] == ["q1", "q2", "q3", "q4"]
    assert len(result.play_by_play) == len(result.periods)


def test_full_game_bookkeeping(lakers_celtics):
    result = lakers_celtics
    half1 = result.periods["q1"][0] + result.periods["q2"][0]
    half2 = result.periods["q1"][1] + result.periods["q2"][1]

    assert result.halftime_score == f"{half1} - {half2}"
    assert result.lead_changes == sum(log.lead_changes for log in result.play_by_play)
    assert result.total_minutes == 48 + 5 * result.overtime_periods
    assert result.mvp in result.winner.all_players()
    for team in (result.team1, result.team2):
        assert sum(p.minutes for p in team.all_players()) == 5 * result.total_minutes
        assert all(0 <= p.stamina <= 100 for p in team.all_players())


def test_same_seed_same_game(teams, registry, lakers_celtics):
    again = play_game(teams["lakers_85"], teams["celtics_86"], registry, RandomSource(7))
    assert again.final == lakers_celtics.final
    assert again.mvp.name == lakers_celtics.mvp.name


def test_period_by_period(teams, registry):
    game = GameSimulation(build_team(teams["bulls_97"], registry), build_team(teams["jazz_97"], registry),
                          registry, RandomSource(3))
    log = game.simulate_next_period()
    assert log.period == 1
    assert game.period == 2
    assert game.status is GameStatus.IN_PROGRESS
    with pytest.raises(GameNotCompleteError):
        game.finalize()

    result = game.simulate_game()
    assert game.is_complete
    assert result.final == game.score.totals()
    with pytest.raises(GameOverError):
        game.simulate_next_period()


def test_tied_regulation_goes_to_overtime(registry):
    game = GameSimulation(make_team("Home", 1), make_team("Away", 11), registry, RandomSource(4))
    for period in range(1, 5):
        game.score.record(period, (25, 25))
    game.period = 5

    assert not game.is_complete
    log = game.simulate_next_period()
    assert log.period == 5
    assert len(log.plays) == 20
    assert "ot1" in game.score

    result = game.simulate_game()
    assert result.overtime_periods >= 1
    assert result.total_minutes == 48 + 5 * result.overtime_periods
    # No rotation in overtime: the starters play every overtime minute
    assert all(p.minutes == 5 * result.overtime_periods for p in result.team1.on_court)
