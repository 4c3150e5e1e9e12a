"""
Rotation manager
Re-picks each team's five between quarters, balancing minutes, stamina, foul
trouble and positions
"""

import copy
import logging
from typing import List, Optional, Set, Tuple

from .config import DEFAULT_CONFIG, SimConfig
from .players import POSITIONS, PlayerInGame, Position
from .teams import TeamInGame

logger = logging.getLogger(__name__)

MINUTES_WEIGHT = 2.5
STAMINA_WEIGHT = 0.4
FOUL_TROUBLE_PENALTY = 1000.0
STARTER_BONUS = 15.0


def rotation_score(player: PlayerInGame, position: Position, team: TeamInGame,
                   config: SimConfig = DEFAULT_CONFIG) -> float:
    """How much a player deserves the spot at this position next period"""
    score = (player.rating.target_minutes - player.minutes) * MINUTES_WEIGHT
    score += player.stamina * STAMINA_WEIGHT
    if player.fouls >= config.foul_trouble:
        score -= FOUL_TROUBLE_PENALTY
    starter = team.starters.get(position)
    if starter is not None and starter.id == player.id:
        score += STARTER_BONUS
    return score


def recover_bench(team: TeamInGame, config: SimConfig = DEFAULT_CONFIG):
    """Players resting on the bench get some stamina back"""
    for player in team.bench:
        player.adjust_stamina(config.bench_recovery)


def pick_lineup(team: TeamInGame, config: SimConfig = DEFAULT_CONFIG) -> Optional[List[PlayerInGame]]:
    """
    Choose the best available player at each position

    Returns the five in position order, or None when some position has no
    eligible player.
    """
    pool = team.all_players()
    lineup: List[PlayerInGame] = []
    assigned: Set[int] = set()

    for position in POSITIONS:
        best, best_score = None, None
        for player in pool:
            if player.position != position or player.id in assigned:
                continue
            score = rotation_score(player, position, team, config)
            if best_score is None or score > best_score:
                best, best_score = player, score
        if best is not None:
            lineup.append(best)
            assigned.add(best.id)

    if len(lineup) != len(POSITIONS):
        return None
    return lineup


def rotate(team: TeamInGame, period_completed: int, config: SimConfig = DEFAULT_CONFIG) -> TeamInGame:
    """
    Substitution window at the end of a period

    The bench always recovers stamina.  After quarters 1-3 the five is
    re-picked; after the 4th quarter and overtimes the lineup carries over.
    A team that cannot field one player per position keeps its current five.

    The starter bonus goes to the players in team.starters, the five a team
    was built with (build_team fills it from TeamSetup.starters), so the
    original lineup per position travels with the team state.
    """
    team = copy.deepcopy(team)
    recover_bench(team, config)

    if period_completed not in config.rotation_periods:
        return team

    lineup = pick_lineup(team, config)
    if lineup is None:
        logger.warning("Malformed roster for %s after period %d: could not form a full 5-man lineup, "
                       "keeping current lineup", team.name, period_completed)
        return team

    lineup_ids = {p.id for p in lineup}
    team.bench = [p for p in team.all_players() if p.id not in lineup_ids]
    team.on_court = lineup
    return team


def rotate_teams(team1: TeamInGame, team2: TeamInGame, period_completed: int,
                 config: SimConfig = DEFAULT_CONFIG) -> Tuple[TeamInGame, TeamInGame]:
    return rotate(team1, period_completed, config), rotate(team2, period_completed, config)
