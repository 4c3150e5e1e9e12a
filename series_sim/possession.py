"""
Possession resolver
Simulates one trip down the floor: ball-handler, pass, shot, foul and rebound.
Pure with respect to the teams passed in; the result is a delta the caller
applies to the state it owns.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .config import DEFAULT_CONFIG, SimConfig
from .players import PlayerInGame, Position, Trait
from .rng import RandomSource, weighted_choice
from .teams import TeamInGame

BASE_PASS_CHANCE = 40.0
PASS_CHANCE_MIN = 5.0
PASS_CHANCE_MAX = 95.0
PASS_TRAIT_ADJUSTMENTS: Dict[Trait, float] = {
    Trait.FLOOR_GENERAL: 20.0,
    Trait.ALPHA_DOG: -25.0,
    Trait.UNSTOPPABLE_SCORER: -20.0,
}

RATING_WEIGHT = 0.75  # Points of FG% per point of offense-over-defense edge
FLOOR_GENERAL_ASSIST_BONUS = 3.0
UNSTOPPABLE_SCORER_BONUS = 3.0
CLUTCH_BONUS = 5.0
RIM_PROTECTOR_PENALTY = 7.0
LOCKDOWN_PENALTY = 7.0

BIG_MAN_REBOUND_BOOST = 1.2
MOTOR_REBOUND_BOOST = 1.1  # Tireless Motor and Post Anchor stack
DEFENSIVE_REBOUND_BOOST = 1.5


class ShotType(str, Enum):
    INSIDE = 'inside'
    MID = 'mid'
    THREE = 'three'

    @property
    def attribute(self) -> str:
        """Name of the shooter attribute that rates this shot"""
        return _SHOT_ATTRIBUTES[self]

    @property
    def label(self) -> str:
        return _SHOT_LABELS[self]


_SHOT_ATTRIBUTES = {
    ShotType.INSIDE: 'inside_scoring',
    ShotType.MID: 'mid_range',
    ShotType.THREE: 'three_point',
}
_SHOT_LABELS = {
    ShotType.INSIDE: 'inside shot',
    ShotType.MID: 'mid-range jumper',
    ShotType.THREE: 'three-pointer',
}


@dataclass(frozen=True)
class PossessionContext:
    """What the resolver knows about the game: only the period number"""
    period: int
    regulation_periods: int = 4

    @property
    def is_overtime(self) -> bool:
        return self.period > self.regulation_periods

    @property
    def is_clutch(self) -> bool:
        # 4th quarter or any overtime
        return self.period >= self.regulation_periods


@dataclass(frozen=True)
class PossessionDelta:
    """Stat increments and stamina costs produced by one possession"""
    handler_id: int
    shooter_id: int
    assister_id: Optional[int]
    defender_id: int
    shot_type: ShotType
    score_chance: float
    points: int
    foul: bool
    rebounder_id: Optional[int]
    defensive_rebound: bool
    handler_stamina_cost: int
    defender_stamina_cost: int

    @property
    def made(self) -> bool:
        return self.points > 0


def pass_chance(handler: PlayerInGame) -> float:
    """Probability (0-100) that the ball-handler gives the ball up"""
    rating = handler.rating
    chance = BASE_PASS_CHANCE
    chance += (rating.attributes.playmaking - 80) * 1.5
    chance -= (rating.career.usg_pct - 25) * 2.0
    for trait, adjustment in PASS_TRAIT_ADJUSTMENTS.items():
        if rating.has(trait):
            chance += adjustment
    return max(PASS_CHANCE_MIN, min(PASS_CHANCE_MAX, chance))


def score_chance(shooter: PlayerInGame, defender: PlayerInGame, shot_type: ShotType,
                 assister: Optional[PlayerInGame], context: PossessionContext,
                 shooter_stamina: float, defender_stamina: float) -> float:
    """
    Probability (0-100) that the shot goes in

    Not clamped: values past either end mean a guaranteed make or miss.
    """
    off_rating = getattr(shooter.rating.attributes, shot_type.attribute) * (shooter_stamina / 100)
    if shot_type is ShotType.INSIDE:
        def_attr = defender.rating.attributes.interior_defense
    else:
        def_attr = defender.rating.attributes.perimeter_defense
    def_rating = def_attr * (defender_stamina / 100)

    chance = shooter.rating.career.fg_pct + (off_rating - def_rating) * RATING_WEIGHT

    if assister is not None and assister.has(Trait.FLOOR_GENERAL):
        chance += FLOOR_GENERAL_ASSIST_BONUS
    if shooter.has(Trait.UNSTOPPABLE_SCORER):
        chance += UNSTOPPABLE_SCORER_BONUS
    if shooter.has(Trait.CLUTCH_PERFORMER) and context.is_clutch:
        chance += CLUTCH_BONUS
    if shot_type is ShotType.INSIDE and defender.has(Trait.RIM_PROTECTOR):
        chance -= RIM_PROTECTOR_PENALTY
    if shot_type is not ShotType.INSIDE and defender.has(Trait.LOCKDOWN_DEFENDER):
        chance -= LOCKDOWN_PENALTY
    return chance


def rebound_weight(player: PlayerInGame, stamina: float, on_defense: bool) -> float:
    """Relative chance of a player grabbing a missed shot"""
    weight = player.rating.attributes.rebounding * (stamina / 100)
    if player.position in (Position.PF, Position.C):
        weight *= BIG_MAN_REBOUND_BOOST
    if player.has(Trait.TIRELESS_MOTOR):
        weight *= MOTOR_REBOUND_BOOST
    if player.has(Trait.POST_ANCHOR):
        weight *= MOTOR_REBOUND_BOOST
    if on_defense:
        weight *= DEFENSIVE_REBOUND_BOOST
    return weight


def _drain(stamina: Dict[int, float], player: PlayerInGame, cost: int):
    stamina[player.id] = max(0.0, min(100.0, stamina[player.id] - cost))


def resolve_possession(offense: TeamInGame, defense: TeamInGame, context: PossessionContext,
                       rng: RandomSource, config: SimConfig = DEFAULT_CONFIG) -> Tuple[PossessionDelta, str]:
    """
    Simulate a single possession

    Draws, in order: ball-handler (weighted by usage), pass coin flip,
    shooter (only on a pass), defender (only without a positional match),
    shot type, foul coin flip, make coin flip, rebounder (only on a miss).

    Returns: (delta, play description)
    """
    on_court = offense.on_court
    stamina = {p.id: p.stamina for p in on_court + defense.on_court}

    handler = weighted_choice(on_court, [p.rating.career.usg_pct for p in on_court], rng)

    assister = None
    shooter = handler
    if rng.chance(pass_chance(handler)) and len(on_court) > 1:
        shooter = rng.pick([p for p in on_court if p.id != handler.id])
        assister = handler

    _drain(stamina, handler, config.handler_stamina_cost)

    defender = next((d for d in defense.on_court if d.position == shooter.position), None)
    if defender is None:
        defender = rng.pick(defense.on_court)
    _drain(stamina, defender, config.defender_stamina_cost)

    tendencies = shooter.rating.shot_tendencies
    shot_type = weighted_choice(
        [ShotType.INSIDE, ShotType.MID, ShotType.THREE],
        [tendencies.inside, tendencies.mid, tendencies.three],
        rng,
    )

    chance = score_chance(shooter, defender, shot_type, assister, context,
                          stamina[shooter.id], stamina[defender.id])

    fouled = rng.chance(defender.rating.foul_tendency * 2)

    plays: List[str] = []
    rebounder = None
    defensive_rebound = False
    points = 0
    if rng.chance(chance):
        points = 3 if shot_type is ShotType.THREE else 2
        play = f"{shooter.name} scores {points} on a {shot_type.label}"
        if assister is not None:
            play += f" (assist: {assister.name})"
        plays.append(play)
    else:
        candidates = on_court + defense.on_court
        defender_ids = {d.id for d in defense.on_court}
        weights = [rebound_weight(p, stamina[p.id], p.id in defender_ids) for p in candidates]
        rebounder = weighted_choice(candidates, weights, rng)
        defensive_rebound = rebounder.id in defender_ids
        plays.append(f"{shooter.name} misses the {shot_type.label}")
        plays.append(f"{'Rebound' if defensive_rebound else 'Offensive rebound'}: {rebounder.name}")

    if fouled:
        plays.append(f"Foul on {defender.name} (PF{defender.fouls + 1})")

    delta = PossessionDelta(
        handler_id=handler.id,
        shooter_id=shooter.id,
        assister_id=assister.id if assister is not None else None,
        defender_id=defender.id,
        shot_type=shot_type,
        score_chance=chance,
        points=points,
        foul=fouled,
        rebounder_id=rebounder.id if rebounder is not None else None,
        defensive_rebound=defensive_rebound,
        handler_stamina_cost=config.handler_stamina_cost,
        defender_stamina_cost=config.defender_stamina_cost,
    )
    return delta, " → ".join(plays)


def apply_delta(offense: TeamInGame, defense: TeamInGame, delta: PossessionDelta):
    """Apply a resolved possession to team state owned by the caller"""
    handler = offense.find(delta.handler_id)
    shooter = offense.find(delta.shooter_id)
    defender = defense.find(delta.defender_id)

    handler.adjust_stamina(-delta.handler_stamina_cost)
    defender.adjust_stamina(-delta.defender_stamina_cost)

    if delta.foul:
        defender.fouls += 1

    if delta.made:
        shooter.points += delta.points
        if delta.assister_id is not None:
            offense.find(delta.assister_id).assists += 1
    elif delta.rebounder_id is not None:
        team = defense if delta.defensive_rebound else offense
        team.find(delta.rebounder_id).rebounds += 1
