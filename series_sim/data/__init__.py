"""
Static player and team tables
Loads the CSV files shipped in this directory (or any directory with the
same layout) into a PlayerRegistry, TeamSetup rows and the historical
Finals table
"""

import csv
from pathlib import Path
from typing import Dict, Optional, Union

from ..errors import PlayerDataError
from ..players import Attributes, CareerStats, PlayerRating, PlayerRegistry, Position, ShotTendencies, Trait
from ..series import HistoricalSeries
from ..teams import MAX_BENCH, TeamSetup

PathLike = Union[str, Path]

ATTRIBUTE_COLUMNS = (
    'inside_scoring', 'mid_range', 'three_point', 'playmaking', 'perimeter_defense',
    'interior_defense', 'rebounding', 'athleticism', 'basketball_iq',
)


def default_data_dir() -> Path:
    return Path(__file__).resolve().parent


def _number(row: Dict[str, str], column: str, line: int) -> float:
    try:
        return float(row[column])
    except (KeyError, TypeError, ValueError):
        raise PlayerDataError(f"line {line}: bad or missing value for {column!r}") from None


def _traits(raw: str, line: int):
    traits = set()
    for name in (raw or '').split(';'):
        name = name.strip()
        if not name:
            continue
        try:
            traits.add(Trait(name))
        except ValueError:
            raise PlayerDataError(f"line {line}: unknown trait {name!r}") from None
    return frozenset(traits)


def parse_player(row: Dict[str, str], line: int) -> PlayerRating:
    """Turn one players.csv row into a PlayerRating"""
    try:
        position = Position(row['position'].strip())
    except (KeyError, AttributeError, ValueError):
        raise PlayerDataError(f"line {line}: bad position {row.get('position')!r}") from None

    key = (row.get('key') or '').strip()
    if not key:
        raise PlayerDataError(f"line {line}: missing player key")

    return PlayerRating(
        id=int(_number(row, 'id', line)),
        key=key,
        name=row['name'].strip(),
        position=position,
        attributes=Attributes(**{col: _number(row, col, line) for col in ATTRIBUTE_COLUMNS}),
        career=CareerStats(
            usg_pct=_number(row, 'usg_pct', line),
            fg_pct=_number(row, 'fg_pct', line),
            ppg=_number(row, 'ppg', line),
            rpg=_number(row, 'rpg', line),
            apg=_number(row, 'apg', line),
        ),
        shot_tendencies=ShotTendencies(
            inside=_number(row, 'shot_inside', line),
            mid=_number(row, 'shot_mid', line),
            three=_number(row, 'shot_three', line),
        ),
        target_minutes=_number(row, 'target_minutes', line),
        foul_tendency=_number(row, 'foul_tendency', line),
        traits=_traits(row.get('traits', ''), line),
        tier=(row.get('tier') or 'Role Player').strip(),
        era=(row.get('era') or '').strip(),
        img_url=(row.get('img_url') or '').strip(),
    )


def load_players(path: Optional[PathLike] = None) -> PlayerRegistry:
    """Load players.csv into a read-only registry"""
    path = Path(path) if path is not None else default_data_dir() / 'players.csv'
    ratings = []
    with open(path, 'r', newline='') as f:
        reader = csv.DictReader(f)
        for line, row in enumerate(reader, start=2):
            ratings.append(parse_player(row, line))
    return PlayerRegistry(ratings)


def load_teams(path: Optional[PathLike] = None) -> Dict[str, TeamSetup]:
    """Load teams.csv: team_id -> TeamSetup"""
    path = Path(path) if path is not None else default_data_dir() / 'teams.csv'
    teams: Dict[str, TeamSetup] = {}
    with open(path, 'r', newline='') as f:
        reader = csv.DictReader(f)
        for line, row in enumerate(reader, start=2):
            team_id = (row.get('team_id') or '').strip()
            if not team_id:
                raise PlayerDataError(f"line {line}: missing team_id")
            starters = {pos: (row.get(pos.value) or '').strip() for pos in Position}
            bench = [(row.get(f"bench{i}") or '').strip() for i in range(1, MAX_BENCH + 1)]
            teams[team_id] = TeamSetup(
                name=row['name'].strip(),
                starters=starters,
                bench=[key for key in bench if key],
                logo=(row.get('logo') or '').strip(),
                description=(row.get('description') or '').strip(),
            )
    return teams


def load_series(teams: Dict[str, TeamSetup], path: Optional[PathLike] = None) -> Dict[str, HistoricalSeries]:
    """Load series.csv: series_id -> HistoricalSeries, resolving team ids against teams"""
    path = Path(path) if path is not None else default_data_dir() / 'series.csv'
    table: Dict[str, HistoricalSeries] = {}
    with open(path, 'r', newline='') as f:
        reader = csv.DictReader(f)
        for line, row in enumerate(reader, start=2):
            series_id = (row.get('series_id') or '').strip()
            if not series_id:
                raise PlayerDataError(f"line {line}: missing series_id")
            sides = []
            for column in ('team1', 'team2'):
                team_id = (row.get(column) or '').strip()
                if team_id not in teams:
                    raise PlayerDataError(f"line {line}: unknown team {team_id!r} in {column}")
                sides.append(teams[team_id])
            dates = [d.strip() for d in (row.get('game_dates') or '').split(';')]
            table[series_id] = HistoricalSeries(
                series_id=series_id,
                name=(row.get('name') or series_id).strip(),
                description=(row.get('description') or '').strip(),
                team1=sides[0],
                team2=sides[1],
                game_dates=tuple(d for d in dates if d),
            )
    return table
