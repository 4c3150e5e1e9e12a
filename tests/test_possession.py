import pytest

from conftest import ScriptedRandom, make_rating, make_team
from series_sim.players import CareerStats, PlayerInGame, Position, ShotTendencies, Trait
from series_sim.possession import (
    PossessionContext,
    ShotType,
    apply_delta,
    pass_chance,
    rebound_weight,
    resolve_possession,
    score_chance,
)
from series_sim.rng import RandomSource
from series_sim.teams import TeamInGame

Q1 = PossessionContext(period=1)

# Draw order: handler, pass, [shooter], [defender], shot type, foul, make, [rebounder]


def test_unassisted_make(offense, defense):
    rng = ScriptedRandom([0.0, 0.9, 0.5, 0.5, 0.1])
    delta, play = resolve_possession(offense, defense, Q1, rng)

    assert rng.values == []
    assert delta.handler_id == 1
    assert delta.shooter_id == 1
    assert delta.assister_id is None
    assert delta.defender_id == 11  # Same position (PG)
    assert delta.shot_type is ShotType.INSIDE
    # 45 + (80 * 0.98 - 80 * 0.99) * 0.75
    assert delta.score_chance == pytest.approx(44.4)
    assert delta.points == 2
    assert delta.rebounder_id is None
    assert not delta.foul
    assert "Player 1 scores 2" in play


def test_resolver_does_not_touch_the_teams(offense, defense):
    resolve_possession(offense, defense, Q1, ScriptedRandom([0.0, 0.9, 0.5, 0.5, 0.1]))
    for player in offense.on_court + defense.on_court:
        assert player.stamina == 100
        assert player.points == 0


def test_apply_delta_updates_stats_and_stamina(offense, defense):
    delta, _ = resolve_possession(offense, defense, Q1, ScriptedRandom([0.0, 0.9, 0.5, 0.5, 0.1]))
    apply_delta(offense, defense, delta)

    handler = offense.find(1)
    assert handler.points == 2
    assert handler.stamina == 98
    assert defense.find(11).stamina == 99
    assert sum(p.rebounds for p in offense.on_court + defense.on_court) == 0


def test_pass_to_teammate_credits_assist_and_floor_general_bonus(defense):
    offense = make_team("Offense", 1)
    general = make_rating(1, Position.PG, traits=frozenset({Trait.FLOOR_GENERAL}))
    offense.on_court[0] = PlayerInGame(general)

    # pass chance 50 + 20; 0.5 -> 50 < 70 passes; shooter pick 0.0 -> first teammate
    rng = ScriptedRandom([0.0, 0.5, 0.0, 0.5, 0.99, 0.0])
    delta, play = resolve_possession(offense, defense, Q1, rng)

    assert delta.handler_id == 1
    assert delta.shooter_id == 2
    assert delta.assister_id == 1
    assert delta.defender_id == 12
    # 45 + (80 - 80 * 0.99) * 0.75 + 3
    assert delta.score_chance == pytest.approx(48.6)
    assert "assist: Player 1" in play

    apply_delta(offense, defense, delta)
    assert offense.find(2).points == 2
    assert offense.find(1).assists == 1
    assert offense.find(1).stamina == 98
    assert offense.find(2).stamina == 100


def test_miss_goes_to_rebound(offense, defense):
    # last rebound candidate is the defending center
    rng = ScriptedRandom([0.0, 0.9, 0.5, 0.5, 0.99, 0.9999])
    delta, play = resolve_possession(offense, defense, Q1, rng)

    assert delta.points == 0
    assert not delta.made
    assert delta.rebounder_id == 15
    assert delta.defensive_rebound
    assert "Rebound: Player 15" in play

    apply_delta(offense, defense, delta)
    assert defense.find(15).rebounds == 1
    assert sum(p.points for p in offense.on_court) == 0


def test_offensive_rebound(offense, defense):
    rng = ScriptedRandom([0.0, 0.9, 0.5, 0.5, 0.99, 0.0])
    delta, play = resolve_possession(offense, defense, Q1, rng)
    assert delta.rebounder_id == 1
    assert not delta.defensive_rebound
    assert "Offensive rebound" in play
    apply_delta(offense, defense, delta)
    assert offense.find(1).rebounds == 1


def test_foul_is_charged_to_defender(offense):
    defense = make_team("Defense", 11, foul_tendency=10)
    rng = ScriptedRandom([0.0, 0.9, 0.5, 0.1, 0.1])
    delta, play = resolve_possession(offense, defense, Q1, rng)
    assert delta.foul
    assert "Foul on Player 11 (PF1)" in play
    apply_delta(offense, defense, delta)
    assert defense.find(11).fouls == 1


def test_defender_falls_back_to_random_pick(offense):
    defense = make_team("Defense", 11, positions=[Position.C] * 5)
    # extra draw for the defender: int(0.3 * 5) -> second defender
    rng = ScriptedRandom([0.0, 0.9, 0.3, 0.5, 0.5, 0.0])
    delta, _ = resolve_possession(offense, defense, Q1, rng)
    assert delta.defender_id == 12
    assert rng.values == []


def test_lone_player_never_passes(defense):
    solo = make_rating(1, Position.PG, career=CareerStats(usg_pct=100, fg_pct=45),
                       attributes={'playmaking': 0})
    offense = TeamInGame(name="Solo", on_court=[PlayerInGame(solo)])
    assert pass_chance(offense.on_court[0]) == 5

    rng = RandomSource(3)
    for _ in range(50):
        delta, _ = resolve_possession(offense, defense, Q1, rng)
        assert delta.handler_id == delta.shooter_id == 1
        assert delta.assister_id is None


def test_every_possession_is_a_make_or_a_rebound(offense, defense):
    rng = RandomSource(11)
    for _ in range(200):
        delta, _ = resolve_possession(offense, defense, Q1, rng)
        assert delta.made != (delta.rebounder_id is not None)


def test_pass_chance_adjustments_and_clamp():
    base = PlayerInGame(make_rating(1, Position.PG))
    assert pass_chance(base) == 50
    alpha = PlayerInGame(make_rating(1, Position.PG, traits=frozenset({Trait.ALPHA_DOG})))
    assert pass_chance(alpha) == 25
    scorer = PlayerInGame(make_rating(1, Position.PG, traits=frozenset({Trait.UNSTOPPABLE_SCORER})))
    assert pass_chance(scorer) == 30
    wizard = PlayerInGame(make_rating(1, Position.PG, career=CareerStats(usg_pct=5, fg_pct=45),
                                      attributes={'playmaking': 100},
                                      traits=frozenset({Trait.FLOOR_GENERAL})))
    assert pass_chance(wizard) == 95


def test_score_chance_trait_table():
    shooter = PlayerInGame(make_rating(1, Position.SF))
    plain = PlayerInGame(make_rating(2, Position.SF))
    rim = PlayerInGame(make_rating(3, Position.C, traits=frozenset({Trait.RIM_PROTECTOR})))
    lockdown = PlayerInGame(make_rating(4, Position.SF, traits=frozenset({Trait.LOCKDOWN_DEFENDER})))
    q1, q4, ot = PossessionContext(1), PossessionContext(4), PossessionContext(6)

    assert score_chance(shooter, plain, ShotType.INSIDE, None, q1, 100, 100) == 45
    assert score_chance(shooter, rim, ShotType.INSIDE, None, q1, 100, 100) == 38
    assert score_chance(shooter, rim, ShotType.THREE, None, q1, 100, 100) == 45
    assert score_chance(shooter, lockdown, ShotType.MID, None, q1, 100, 100) == 38
    assert score_chance(shooter, lockdown, ShotType.INSIDE, None, q1, 100, 100) == 45

    clutch = PlayerInGame(make_rating(5, Position.SF, traits=frozenset({Trait.CLUTCH_PERFORMER})))
    assert score_chance(clutch, plain, ShotType.MID, None, q1, 100, 100) == 45
    assert score_chance(clutch, plain, ShotType.MID, None, q4, 100, 100) == 50
    assert score_chance(clutch, plain, ShotType.MID, None, ot, 100, 100) == 50


def test_score_chance_is_not_clamped():
    star = PlayerInGame(make_rating(1, Position.SG, career=CareerStats(usg_pct=30, fg_pct=90),
                                    attributes={'three_point': 100}))
    scrub = PlayerInGame(make_rating(2, Position.SG, attributes={'perimeter_defense': 0}))
    assert score_chance(star, scrub, ShotType.THREE, None, Q1, 100, 100) == 165


def test_three_pointer_is_worth_three(defense):
    offense = make_team("Offense", 1, shot_tendencies=ShotTendencies(0, 0, 1))
    delta, _ = resolve_possession(offense, defense, Q1, ScriptedRandom([0.0, 0.9, 0.5, 0.5, 0.0]))
    assert delta.shot_type is ShotType.THREE
    assert delta.points == 3


def test_rebound_weight_multipliers():
    guard = PlayerInGame(make_rating(1, Position.PG))
    center = PlayerInGame(make_rating(2, Position.C, traits=frozenset({Trait.TIRELESS_MOTOR, Trait.POST_ANCHOR})))
    assert rebound_weight(guard, 100, False) == pytest.approx(80)
    assert rebound_weight(guard, 50, True) == pytest.approx(60)
    assert rebound_weight(center, 100, True) == pytest.approx(80 * 1.2 * 1.1 * 1.1 * 1.5)


def test_context_flags():
    assert not PossessionContext(4).is_overtime
    assert PossessionContext(5).is_overtime
    assert not PossessionContext(3).is_clutch
    assert PossessionContext(4).is_clutch
