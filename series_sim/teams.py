"""
Team state for a single game
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .errors import RosterError
from .players import POSITIONS, PlayerInGame, PlayerRating, PlayerRegistry, Position

MAX_BENCH = 7
MAX_ROSTER = 12


@dataclass(frozen=True)
class TeamSetup:
    """Static roster assignment: one starter per position plus bench keys"""
    name: str
    starters: Dict[Position, str]
    bench: List[str] = field(default_factory=list)
    logo: str = ''
    description: str = ''

    def player_keys(self) -> List[str]:
        """Starters in position order, then the bench"""
        keys = [self.starters[pos] for pos in POSITIONS if self.starters.get(pos)]
        return keys + [key for key in self.bench if key]


@dataclass
class TeamInGame:
    """Represents a team during a game: five on the floor, the rest on the bench"""
    name: str
    on_court: List[PlayerInGame]
    bench: List[PlayerInGame] = field(default_factory=list)
    starters: Dict[Position, PlayerRating] = field(default_factory=dict)  # Original starter per position
    reserves: List[PlayerRating] = field(default_factory=list)
    logo: str = ''

    def all_players(self) -> List[PlayerInGame]:
        """Everyone who can appear in this game, on-court first"""
        return self.on_court + self.bench

    def find(self, player_id: int) -> Optional[PlayerInGame]:
        for player in self.all_players():
            if player.id == player_id:
                return player
        return None

    def points(self) -> int:
        return sum(p.points for p in self.all_players())

    def check_lineup(self):
        """Raise RosterError unless the on-court/bench split is valid"""
        if len(self.on_court) != 5:
            raise RosterError(f"{self.name} has {len(self.on_court)} players on court, expected 5")
        if len(self.bench) > MAX_BENCH:
            raise RosterError(f"{self.name} has {len(self.bench)} bench players (max {MAX_BENCH})")
        court_ids = {p.id for p in self.on_court}
        bench_ids = {p.id for p in self.bench}
        if len(court_ids) != len(self.on_court) or len(bench_ids) != len(self.bench):
            raise RosterError(f"{self.name} lists the same player twice")
        if court_ids & bench_ids:
            raise RosterError(f"{self.name} has a player both on court and on the bench")


def build_team(setup: TeamSetup, registry: PlayerRegistry) -> TeamInGame:
    """
    Create fresh in-game state for a team

    Every key must resolve in the registry; a missing key raises
    MissingPlayerError before any state is created.
    """
    missing = [pos.value for pos in POSITIONS if not setup.starters.get(pos)]
    if missing:
        raise RosterError(f"{setup.name} has no starter at {', '.join(missing)}")

    starters = {pos: registry[setup.starters[pos]] for pos in POSITIONS}
    reserves = [registry[key] for key in setup.bench if key]

    if len(reserves) > MAX_BENCH:
        raise RosterError(f"{setup.name} has {len(reserves)} bench players (max {MAX_BENCH})")
    keys = [r.key for r in starters.values()] + [r.key for r in reserves]
    if len(set(keys)) != len(keys):
        raise RosterError(f"{setup.name} lists the same player twice")

    team = TeamInGame(
        name=setup.name,
        logo=setup.logo,
        on_court=[PlayerInGame(starters[pos]) for pos in POSITIONS],
        bench=[PlayerInGame(rating) for rating in reserves],
        starters=starters,
        reserves=reserves,
    )
    team.check_lineup()
    return team
