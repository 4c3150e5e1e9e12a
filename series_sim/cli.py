"""
Classic Series Simulator
Terminal front end: pick two all-time rosters and play a single game, a
best-of-seven series or a replay of a real Finals matchup
"""

import argparse
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from rich import box
from rich.logging import RichHandler
from rich.prompt import Prompt
from rich.table import Table

from .data import default_data_dir, load_players, load_series, load_teams
from .display import console, show_box_score, show_play_by_play, show_series, show_story
from .errors import SimulationError
from .game import GameResult, GameSimulation
from .period import period_name
from .players import PlayerRegistry
from .rng import RandomSource
from .series import HistoricalSeries, apply_game_to_series, series_mvp, start_series
from .stories import game_story, series_story
from .teams import TeamSetup, build_team

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False):
    """Route engine logs through rich so they share the console with the tables"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


def select_team(teams: Dict[str, TeamSetup], label: str, exclude: Optional[str] = None) -> Tuple[str, TeamSetup]:
    """Interactive team selection"""
    console.print(f"\n[bold cyan]Select {label}:[/bold cyan]\n")

    team_list = [(team_id, setup) for team_id, setup in teams.items() if team_id != exclude]

    table = Table(box=box.ROUNDED)
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Team", style="green")
    table.add_column("", style="dim")
    for idx, (team_id, setup) in enumerate(team_list, 1):
        table.add_row(str(idx), setup.name, setup.description)
    console.print(table)

    while True:
        choice = Prompt.ask("\nEnter team number", default="1")
        try:
            idx = int(choice) - 1
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")
            continue
        if 0 <= idx < len(team_list):
            return team_list[idx]
        console.print("[red]Invalid team number. Try again.[/red]")


def overtime_banner(game: GameSimulation) -> Optional[str]:
    """Announcement before an overtime period, None during regulation"""
    regulation = game.config.regulation_periods
    if game.period <= regulation:
        return None
    t1, t2 = game.score.totals()
    return f"[bold yellow]OVERTIME {game.period - regulation}![/bold yellow] Score tied at {t1}-{t2}"


def play_interactive_game(setup1: TeamSetup, setup2: TeamSetup, registry: PlayerRegistry, rng: RandomSource,
                          game_number: int = 1, watch: bool = True) -> GameResult:
    """Run a game period by period, showing each period's plays as it ends"""
    game = GameSimulation(build_team(setup1, registry), build_team(setup2, registry),
                          registry, rng, game_number)

    while not game.is_complete:
        banner = overtime_banner(game)
        if banner:
            console.print("\n" + banner)
        log = game.simulate_next_period()
        if watch:
            show_play_by_play(log)
            t1, t2 = game.score.totals()
            console.print(f"[bold green]End of {period_name(log.period, game.config.regulation_periods)}"
                          f"[/bold green]  {game.team1.name} {t1} - {game.team2.name} {t2}")
            if not game.is_complete:
                console.input("[dim]Press ENTER for the next period[/dim]")

    return game.finalize()


def run_single_game(teams: Dict[str, TeamSetup], registry: PlayerRegistry, rng: RandomSource):
    team1_id, setup1 = select_team(teams, "Home Team")
    _, setup2 = select_team(teams, "Away Team", exclude=team1_id)
    console.print(f"\n[bold]{setup1.name}[/bold] vs [bold]{setup2.name}[/bold]")
    console.print("[dim]Press Ctrl+C to quit anytime[/dim]\n")

    watch = Prompt.ask("Watch period by period?", choices=["y", "n"], default="y") == "y"
    result = play_interactive_game(setup1, setup2, registry, rng, watch=watch)

    console.print("\n" + "=" * 60)
    ot = result.overtime_periods
    console.print(f"[bold magenta]FINAL SCORE{f' ({ot} OT)' if ot else ''}[/bold magenta]")
    console.print("=" * 60)
    console.print(f"[bold green]{result.winner.name} defeats {result.loser.name} {result.score}![/bold green]\n")
    show_box_score(result)
    show_story(game_story(result, rng))


def play_series(setup1: TeamSetup, setup2: TeamSetup, registry: PlayerRegistry, rng: RandomSource,
                game_dates: Sequence[str] = ()):
    """Best-of-seven loop shared by the custom and historical series modes"""
    state = start_series(setup1, setup2, registry)
    while not state.is_complete:
        game_number = state.next_game_number
        action = Prompt.ask(f"\nSimulate Game {game_number}? ([bold]w[/bold]atch / [bold]s[/bold]im / "
                            f"[bold]a[/bold]ll remaining)", choices=["w", "s", "a"], default="s")
        if action == "a":
            while not state.is_complete:
                result = play_interactive_game(setup1, setup2, registry, rng, state.next_game_number, watch=False)
                state = apply_game_to_series(state, result)
                console.print(f"Game {result.game_number}: {result.winner.name} win {result.score}")
            break

        result = play_interactive_game(setup1, setup2, registry, rng, game_number, watch=(action == "w"))
        state = apply_game_to_series(state, result)
        console.print(f"\n[bold green]Game {game_number}: {result.winner.name} win {result.score}[/bold green]")
        if action == "w":
            show_box_score(result)
        console.print(f"Series: {state.team1.name} {state.team1.wins} - {state.team2.wins} {state.team2.name}")

    mvp = series_mvp(state.winner, state.games_played, registry)
    show_series(state, mvp, game_dates=game_dates)
    show_story(series_story(state, mvp, rng))


def run_series(teams: Dict[str, TeamSetup], registry: PlayerRegistry, rng: RandomSource):
    team1_id, setup1 = select_team(teams, "Team 1")
    _, setup2 = select_team(teams, "Team 2", exclude=team1_id)
    play_series(setup1, setup2, registry, rng)


def select_historical_series(table: Dict[str, HistoricalSeries]) -> HistoricalSeries:
    """Interactive pick of a real Finals matchup"""
    console.print("\n[bold cyan]Select a Historical Series:[/bold cyan]\n")
    series_list = list(table.values())

    table_view = Table(box=box.ROUNDED)
    table_view.add_column("#", style="cyan", justify="right")
    table_view.add_column("Series", style="green")
    table_view.add_column("Matchup", style="dim")
    for idx, series in enumerate(series_list, 1):
        table_view.add_row(str(idx), series.name, series.description)
    console.print(table_view)

    choices = [str(i) for i in range(1, len(series_list) + 1)]
    choice = Prompt.ask("\nEnter series number", choices=choices, default="1")
    return series_list[int(choice) - 1]


def run_historical_series(table: Dict[str, HistoricalSeries], registry: PlayerRegistry, rng: RandomSource):
    series = select_historical_series(table)
    console.print(f"\n[bold]{series.name}[/bold]: {series.team1.name} vs {series.team2.name}")
    play_series(series.team1, series.team2, registry, rng, series.game_dates)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Classic basketball game and series simulator")
    parser.add_argument("--data-dir", type=Path, default=default_data_dir(),
                        help="directory holding players.csv, teams.csv and series.csv")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible games")
    parser.add_argument("-v", "--verbose", action="store_true", help="show engine debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None):
    """Main game loop"""
    args = parse_args(argv)
    configure_logging(args.verbose)

    console.print("[bold magenta]═══════════════════════════════════════════[/bold magenta]")
    console.print("[bold cyan]      CLASSIC BASKETBALL SERIES SIMULATOR   [/bold cyan]")
    console.print("[bold magenta]═══════════════════════════════════════════[/bold magenta]\n")

    try:
        registry = load_players(args.data_dir / 'players.csv')
        teams = load_teams(args.data_dir / 'teams.csv')
        history: Dict[str, HistoricalSeries] = {}
        series_path = args.data_dir / 'series.csv'
        if series_path.exists():
            history = load_series(teams, series_path)
    except FileNotFoundError as e:
        console.print(f"[red]Error: Could not find {e.filename}[/red]")
        return 1
    except SimulationError as e:
        console.print(f"[red]Error in player data: {e}[/red]")
        return 1
    console.print(f"[green]Loaded {len(registry)} players, {len(teams)} teams "
                  f"and {len(history)} historical series[/green]\n")

    rng = RandomSource(args.seed)
    modes = ["1", "2", "3"] if history else ["1", "2"]

    while True:
        console.print("\n[bold cyan]Select Game Mode:[/bold cyan]")
        console.print("  1. Single Game - Watch two teams play")
        console.print("  2. Best of 7 - Play out a full series")
        if history:
            console.print("  3. Historical Series - Replay a real Finals matchup")
        console.print()
        mode_choice = Prompt.ask("Select mode", choices=modes, default="1")

        try:
            if mode_choice == "3":
                run_historical_series(history, registry, rng)
            elif mode_choice == "2":
                run_series(teams, registry, rng)
            else:
                run_single_game(teams, registry, rng)
        except KeyboardInterrupt:
            console.print("\n[yellow]Game interrupted by user[/yellow]")
        except SimulationError as e:
            logger.error("Simulation failed: %s", e)

        play_again = Prompt.ask("\n[bold cyan]Play again?[/bold cyan]", choices=["y", "n"], default="y")
        if play_again.lower() != "y":
            break
        console.print("\n" + "=" * 60 + "\n")

    console.print("\n[bold]Thanks for playing![/bold]")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
