"""
Game and series write-ups
Plain {{placeholder}} templates filled from a finished game or series
"""

import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .game import GameResult
from .rng import RandomSource
from .series import MVPRecord, SeriesState

_PLACEHOLDER = re.compile(r"\{\{(\w+)\}\}")


@dataclass(frozen=True)
class Story:
    headline: str
    subheadline: str
    paragraphs: Tuple[str, ...]


@dataclass(frozen=True)
class StoryTemplate:
    headline: str
    subheadline: str
    paragraphs: Tuple[str, ...]


GAME_TEMPLATES: List[StoryTemplate] = [
    StoryTemplate(
        "{{mvpName}} Carries {{winnerName}} Past {{loserName}}, {{score}}",
        "{{mvpPts}} points, {{mvpReb}} rebounds and {{mvpAst}} assists from the game's best player.",
        (
            "The {{winnerName}} and {{loserName}} went to the locker room at {{halftimeScore}}, "
            "and for a while it looked like anybody's game.",
            "Then {{mvpName}} took over. The {{loserName}} threw every coverage they had at the problem "
            "and none of it stuck.",
        ),
    ),
    StoryTemplate(
        "{{winnerName}} Grind Out {{score}} Win Over {{loserName}}",
        "A defensive slog goes the way of the team with {{mvpName}}.",
        (
            "Nothing came easy. The halftime score of {{halftimeScore}} told the story of a game "
            "played in the half court, possession by possession.",
            "{{mvpName}} finished with {{mvpPts}} points, {{mvpReb}} rebounds and {{mvpAst}} assists, "
            "enough to tip a game that never found a rhythm.",
        ),
    ),
    StoryTemplate(
        "Back and Forth: {{winnerName}} Edge {{loserName}} {{score}}",
        "{{leadChanges}} lead changes before {{mvpName}} settled it.",
        (
            "Neither side could shake the other. The lead changed hands {{leadChanges}} times "
            "and the building never sat down.",
            "When it mattered, the ball found {{mvpName}}, who closed with {{mvpPts}} points.",
        ),
    ),
    StoryTemplate(
        "Statement Night: {{winnerName}} Roll Past {{loserName}}, {{score}}",
        "{{mvpName}} leads a wire-to-wire performance.",
        (
            "The {{winnerName}} set the tone early and were never seriously threatened after "
            "taking a {{halftimeScore}} score into the break.",
            "{{mvpName}} did a little of everything: {{mvpPts}} points, {{mvpReb}} rebounds, "
            "{{mvpAst}} assists.",
        ),
    ),
]

# Keyed by the loser's win total in a finished series
SERIES_TEMPLATES: Dict[int, StoryTemplate] = {
    0: StoryTemplate(
        "Clean Sweep: {{winnerName}} Dispatch {{loserName}} {{seriesScore}}",
        "Series MVP {{seriesMvpName}} never let the {{loserName}} breathe.",
        (
            "Four games, four wins. The {{winnerName}} were in control from the opening tip of Game 1.",
            "{{seriesMvpName}} averaged {{seriesMvpPpg}} points, {{seriesMvpRpg}} rebounds and "
            "{{seriesMvpApg}} assists over the series.",
        ),
    ),
    1: StoryTemplate(
        "{{winnerName}} Close Out {{loserName}} in Five, {{seriesScore}}",
        "{{seriesMvpName}} named Series MVP after a dominant run.",
        (
            "The {{loserName}} stole one, but the {{winnerName}} were the better team all series.",
            "{{seriesMvpName}} put up {{seriesMvpPpg}} points per game to lead the way.",
        ),
    ),
    2: StoryTemplate(
        "Six Hard Games: {{winnerName}} Outlast {{loserName}} {{seriesScore}}",
        "A physical series ends with {{seriesMvpName}} holding the MVP trophy.",
        (
            "Every game was a fight, and the {{winnerName}} won enough of them.",
            "{{seriesMvpName}} was the steadiest player on the floor: {{seriesMvpPpg}} points, "
            "{{seriesMvpRpg}} rebounds and {{seriesMvpApg}} assists a night.",
        ),
    ),
    3: StoryTemplate(
        "Game 7! {{winnerName}} Survive {{loserName}} {{seriesScore}}",
        "{{seriesMvpName}} delivers when the series goes the distance.",
        (
            "Seven games were needed to separate these two, and the {{loserName}} pushed "
            "the {{winnerName}} to the very last possession.",
            "{{seriesMvpName}} finished the series averaging {{seriesMvpPpg}} points, "
            "{{seriesMvpRpg}} rebounds and {{seriesMvpApg}} assists.",
        ),
    ),
}


def fill_template(template: str, data: Dict[str, str]) -> str:
    """Replace {{key}} with data[key]; unknown keys are left as they are"""
    return _PLACEHOLDER.sub(lambda m: data.get(m.group(1), m.group(0)), template)


def _render(template: StoryTemplate, data: Dict[str, str]) -> Story:
    return Story(
        headline=fill_template(template.headline, data),
        subheadline=fill_template(template.subheadline, data),
        paragraphs=tuple(fill_template(p, data) for p in template.paragraphs),
    )


def game_story_data(result: GameResult) -> Dict[str, str]:
    return {
        'winnerName': result.winner.name,
        'loserName': result.loser.name,
        'score': result.score,
        'halftimeScore': result.halftime_score,
        'mvpName': result.mvp.name,
        'mvpPts': str(result.mvp.points),
        'mvpReb': str(result.mvp.rebounds),
        'mvpAst': str(result.mvp.assists),
        'leadChanges': str(result.lead_changes),
    }


def game_story(result: GameResult, rng: Optional[RandomSource] = None) -> Story:
    """Write-up of a single game using a randomly picked template"""
    rng = rng or RandomSource()
    return _render(rng.pick(GAME_TEMPLATES), game_story_data(result))


def series_story(state: SeriesState, mvp: MVPRecord, rng: Optional[RandomSource] = None) -> Story:
    """Write-up of a finished series; the template follows the final series score"""
    if not state.is_complete:
        raise ValueError("Series is not finished")
    template = SERIES_TEMPLATES.get(state.loser.wins)
    if template is None:
        rng = rng or RandomSource()
        template = rng.pick(list(SERIES_TEMPLATES.values()))
    data = {
        'winnerName': state.winner.name,
        'loserName': state.loser.name,
        'seriesScore': state.series_score,
        'seriesMvpName': mvp.name,
        'seriesMvpPpg': f"{mvp.ppg:.1f}",
        'seriesMvpRpg': f"{mvp.rpg:.1f}",
        'seriesMvpApg': f"{mvp.apg:.1f}",
    }
    return _render(template, data)
