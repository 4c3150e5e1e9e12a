"""
Player model
Immutable rating records, the read-only registry that holds them, and the
mutable per-game state wrapped around a rating
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Tuple

from .errors import MissingPlayerError


class Position(str, Enum):
    PG = 'PG'
    SG = 'SG'
    SF = 'SF'
    PF = 'PF'
    C = 'C'


# Canonical order, also the order lineups are filled in
POSITIONS: Tuple[Position, ...] = (Position.PG, Position.SG, Position.SF, Position.PF, Position.C)


class Trait(str, Enum):
    """Qualitative tags that nudge the possession probabilities"""
    FLOOR_GENERAL = 'Floor General'
    ALPHA_DOG = 'Alpha Dog'
    UNSTOPPABLE_SCORER = 'Unstoppable Scorer'
    CLUTCH_PERFORMER = 'Clutch Performer'
    RIM_PROTECTOR = 'Rim Protector'
    LOCKDOWN_DEFENDER = 'Lockdown Defender'
    TIRELESS_MOTOR = 'Tireless Motor'
    POST_ANCHOR = 'Post Anchor'


@dataclass(frozen=True)
class Attributes:
    """Nine 0-100 skill ratings"""
    inside_scoring: float
    mid_range: float
    three_point: float
    playmaking: float
    perimeter_defense: float
    interior_defense: float
    rebounding: float
    athleticism: float
    basketball_iq: float


@dataclass(frozen=True)
class CareerStats:
    usg_pct: float  # Usage rate - share of team possessions used
    fg_pct: float  # Field goal percentage (0-100)
    ppg: float = 0.0
    rpg: float = 0.0
    apg: float = 0.0


@dataclass(frozen=True)
class ShotTendencies:
    """Relative shot-type weights (need not sum to 100)"""
    inside: float
    mid: float
    three: float


@dataclass(frozen=True)
class PlayerRating:
    """Static reference data for a player, created once at load time"""
    id: int
    key: str
    name: str
    position: Position
    attributes: Attributes
    career: CareerStats
    shot_tendencies: ShotTendencies
    target_minutes: float
    foul_tendency: float
    traits: FrozenSet[Trait] = frozenset()
    tier: str = 'Role Player'
    era: str = ''
    img_url: str = ''

    def has(self, trait: Trait) -> bool:
        return trait in self.traits

    def __deepcopy__(self, memo):
        # Ratings are immutable, copies of game state can share them
        return self


class PlayerRegistry:
    """Read-only lookup of player ratings by key, in load order"""

    def __init__(self, ratings: List[PlayerRating]):
        self._by_key: Dict[str, PlayerRating] = {}
        for rating in ratings:
            if rating.key in self._by_key:
                raise ValueError(f"Duplicate player key: {rating.key!r}")
            self._by_key[rating.key] = rating

    def __getitem__(self, key: str) -> PlayerRating:
        try:
            return self._by_key[key]
        except KeyError:
            raise MissingPlayerError(key) from None

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def __iter__(self) -> Iterator[PlayerRating]:
        return iter(self._by_key.values())

    def __len__(self) -> int:
        return len(self._by_key)

    def first(self) -> PlayerRating:
        """First player in the table (used as the MVP fallback)"""
        if not self._by_key:
            raise MissingPlayerError('<empty registry>')
        return next(iter(self._by_key.values()))

    def by_name(self, name: str) -> PlayerRating:
        for rating in self._by_key.values():
            if rating.name == name:
                return rating
        raise MissingPlayerError(name)


@dataclass
class PlayerInGame:
    """A player's box score and stamina for one game"""
    rating: PlayerRating
    points: int = 0
    rebounds: int = 0
    assists: int = 0
    fouls: int = 0
    minutes: float = 0.0
    stamina: float = 100.0

    @property
    def id(self) -> int:
        return self.rating.id

    @property
    def name(self) -> str:
        return self.rating.name

    @property
    def position(self) -> Position:
        return self.rating.position

    def has(self, trait: Trait) -> bool:
        return self.rating.has(trait)

    def adjust_stamina(self, amount: float):
        """Add (or subtract) stamina, clamped to 0-100"""
        self.stamina = max(0.0, min(100.0, self.stamina + amount))
