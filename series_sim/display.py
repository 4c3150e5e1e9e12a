"""
Terminal rendering with rich
Box scores, scoring by period, play-by-play and the series log
"""

from typing import Optional, Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .game import GameResult
from .period import PeriodLog, period_name
from .series import MVPRecord, SeriesState
from .stories import Story
from .teams import TeamInGame

console = Console()


def show_period_scores(result: GameResult, out: Optional[Console] = None):
    """Display period-by-period scoring breakdown"""
    out = out or console
    score_table = Table(box=box.ROUNDED, title="Scoring by Period")
    score_table.add_column("Team", style="cyan")

    for key in result.periods:
        if key.startswith('ot'):
            score_table.add_column(key.upper(), justify="right", style="yellow")
        else:
            score_table.add_column(key.upper(), justify="right", style="white")
    score_table.add_column("Total", justify="right", style="bold green")

    team1_total, team2_total = result.final
    period_points = [points for _, points in result.periods.items()]
    team1_row = [result.team1.name] + [str(t1) for t1, _ in period_points] + [str(team1_total)]
    team2_row = [result.team2.name] + [str(t2) for _, t2 in period_points] + [str(team2_total)]
    score_table.add_row(*team1_row)
    score_table.add_row(*team2_row)

    out.print(score_table)
    out.print()


def show_team_stats(team: TeamInGame, out: Optional[Console] = None):
    """Display final statistics for a team"""
    out = out or console
    out.print(f"\n[bold]{team.name} - Final Stats[/bold]")

    stats_table = Table(box=box.SIMPLE)
    stats_table.add_column("Player", style="cyan")
    stats_table.add_column("POS", justify="center", style="yellow")
    stats_table.add_column("MIN", justify="right")
    stats_table.add_column("PTS", justify="right")
    stats_table.add_column("REB", justify="right")
    stats_table.add_column("AST", justify="right")
    stats_table.add_column("PF", justify="right")
    stats_table.add_column("STA", justify="right")

    for player in team.all_players():
        # Highlight foul trouble
        foul_str = f"[bold red]{player.fouls}[/bold red]" if player.fouls >= 4 else str(player.fouls)
        stats_table.add_row(
            player.name,
            player.position.value,
            f"{int(player.minutes)}",
            str(player.points),
            str(player.rebounds),
            str(player.assists),
            foul_str,
            f"{int(player.stamina)}",
        )

    out.print(stats_table)


def show_box_score(result: GameResult, out: Optional[Console] = None):
    """Display combined box score with period scores and player stats"""
    out = out or console
    out.print("[bold]BOX SCORE[/bold]\n")
    show_period_scores(result, out)
    show_team_stats(result.team1, out)
    show_team_stats(result.team2, out)
    out.print(f"[bold]Halftime:[/bold] {result.halftime_score}   "
              f"[bold]Lead changes:[/bold] {result.lead_changes}   "
              f"[bold]Minutes:[/bold] {result.total_minutes}")
    mvp = result.mvp
    out.print(f"[bold magenta]Game MVP:[/bold magenta] {mvp.name} "
              f"({mvp.points} PTS, {mvp.rebounds} REB, {mvp.assists} AST)\n")


def show_play_by_play(log: PeriodLog, out: Optional[Console] = None, limit: int = 12):
    """Most recent plays of a period, newest first"""
    out = out or console
    recent = list(reversed(log.plays))[:limit]
    body = "\n".join(recent) if recent else "[dim]No plays[/dim]"
    title = f"{period_name(log.period)} - Star: {log.star} - Lead changes: {log.lead_changes}"
    out.print(Panel(body, title=title, border_style="yellow", padding=(1, 2)))


def show_story(story: Story, out: Optional[Console] = None):
    out = out or console
    text = "\n\n".join(story.paragraphs)
    out.print(Panel(f"[italic]{story.subheadline}[/italic]\n\n{text}",
                    title=f"[bold]{story.headline}[/bold]", border_style="cyan", padding=(1, 2)))


def show_series(state: SeriesState, mvp: Optional[MVPRecord] = None, out: Optional[Console] = None,
                game_dates: Sequence[str] = ()):
    """Series log: one row per game, with the real game dates for a historical series"""
    out = out or console
    out.print(f"\n[bold cyan]═══ {state.team1.name} {state.team1.wins} - "
              f"{state.team2.wins} {state.team2.name} ═══[/bold cyan]\n")

    table = Table(box=box.ROUNDED, title="Series Log")
    table.add_column("Game", justify="right", style="cyan")
    if game_dates:
        table.add_column("Date", style="dim")
    table.add_column("Winner", style="green")
    table.add_column("Score", justify="center", style="yellow")
    table.add_column("OT", justify="right")
    table.add_column("MVP", style="dim")

    for result in state.results:
        ot = str(result.overtime_periods) if result.overtime_periods else ""
        row = [str(result.game_number)]
        if game_dates:
            # A simulated series can run longer than the real one did
            idx = result.game_number - 1
            row.append(game_dates[idx] if idx < len(game_dates) else "")
        row += [result.winner.name, result.score, ot, result.mvp.name]
        table.add_row(*row)

    out.print(table)

    if mvp is not None:
        out.print(f"\n[bold magenta]Series MVP:[/bold magenta] {mvp.name} - "
                  f"{mvp.ppg:.1f} PPG, {mvp.rpg:.1f} RPG, {mvp.apg:.1f} APG")
