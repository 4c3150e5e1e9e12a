"""
Period simulator
Runs a quarter or overtime on copies of both teams and reports the period's
points, lead changes and play-by-play
"""

import copy
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .config import DEFAULT_CONFIG, SimConfig
from .possession import PossessionContext, apply_delta, resolve_possession
from .rng import RandomSource
from .teams import TeamInGame

logger = logging.getLogger(__name__)

# Leading team markers
TIED = 0
TEAM1 = 1
TEAM2 = 2


def period_name(period: int, regulation_periods: int = 4) -> str:
    """Q1..Q4, then OT1, OT2, ..."""
    if period <= regulation_periods:
        return f"Q{period}"
    return f"OT{period - regulation_periods}"


@dataclass
class PeriodLog:
    """Play-by-play record for one period"""
    period: int
    plays: List[str] = field(default_factory=list)
    star: str = 'Balanced scoring'
    lead_changes: int = 0


@dataclass
class PeriodResult:
    team1: TeamInGame
    team2: TeamInGame
    points: Tuple[int, int]  # Points scored in this period only
    log: PeriodLog
    lead_changes: int
    last_lead_team: int


def leading_team(team1_total: int, team2_total: int) -> int:
    if team1_total > team2_total:
        return TEAM1
    if team2_total > team1_total:
        return TEAM2
    return TIED


def period_star(player_points: Dict[str, int]) -> str:
    """Highest scorer of the period, first one found on a tie"""
    star_name, star_points = None, 0
    for name, points in player_points.items():
        if points > star_points:
            star_name, star_points = name, points
    if star_name is None:
        return 'Balanced scoring'
    return f"{star_name} ({star_points} pts)"


def simulate_period(team1: TeamInGame, team2: TeamInGame, period: int, score_so_far: Tuple[int, int],
                    last_lead_team: int, rng: RandomSource,
                    config: SimConfig = DEFAULT_CONFIG) -> PeriodResult:
    """
    Simulate one quarter (or overtime) of basketball

    Args:
        team1, team2: team states going into the period (not modified)
        period: 1-4 for regulation, 5+ for overtime
        score_so_far: cumulative (team1, team2) points before this period
        last_lead_team: TEAM1, TEAM2 or TIED, carried over from earlier periods
        rng: source of every random draw

    Returns a PeriodResult holding new copies of both teams.
    """
    team1 = copy.deepcopy(team1)
    team2 = copy.deepcopy(team2)
    context = PossessionContext(period, config.regulation_periods)

    log = PeriodLog(period)
    period_points = [0, 0]
    player_points: Dict[str, int] = {}

    for i in range(config.possessions_for(period)):
        # Team 1 has the ball on even possessions
        offense_idx = i % 2
        offense, defense = (team1, team2) if offense_idx == 0 else (team2, team1)

        delta, play = resolve_possession(offense, defense, context, rng, config)
        apply_delta(offense, defense, delta)

        if delta.made:
            period_points[offense_idx] += delta.points
            shooter_name = offense.find(delta.shooter_id).name
            player_points[shooter_name] = player_points.get(shooter_name, 0) + delta.points

            team1_total = score_so_far[0] + period_points[0]
            team2_total = score_so_far[1] + period_points[1]
            current_lead = leading_team(team1_total, team2_total)
            if current_lead != TIED and current_lead != last_lead_team:
                log.lead_changes += 1
                last_lead_team = current_lead
            play = f"{play} ({team1_total}-{team2_total})"

        log.plays.append(play)

    # Whoever is on the floor plays the whole period
    minutes = config.minutes_for(period)
    for team in (team1, team2):
        for player in team.on_court:
            player.minutes += minutes

    log.star = period_star(player_points)
    logger.debug("%s: %s %d - %s %d, %d lead changes", period_name(period, config.regulation_periods),
                 team1.name, period_points[0], team2.name, period_points[1], log.lead_changes)

    return PeriodResult(
        team1=team1,
        team2=team2,
        points=(period_points[0], period_points[1]),
        log=log,
        lead_changes=log.lead_changes,
        last_lead_team=last_lead_team,
    )
