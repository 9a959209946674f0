#!/usr/bin/env python3
"""Main entry point for FF VBD Engine"""
import json
import sys
from datetime import datetime
from typing import Dict, List, Optional, Sequence

import click
from rich.console import Console
from rich.table import Table

from src.utils.logging import setup_logging, get_logger

from src.core import (
    DraftBoardBuilder, LeagueSettings, Position, ProjectionCurve, ReplacementModel,
    BoardEntry, DraftStrategy, get_recommendations, log_breakdown
)
from src.core.models import VALUED_POSITIONS
from src.core.pool import load_players, load_schedule
from src.exporters import CSVExporter
from src.utils.validation import InputValidator, ValidationError
from src.utils.monitoring import monitor
from config import DEFAULT_SETTINGS, PLATFORM_PRESETS, DATA_DIR

# Rich console for pretty output
console = Console()

SCORING_CHOICES = ['standard', 'half_ppr', 'ppr', 'superflex']


def league_options(f):
    """Shared league-shape options"""
    options = [
        click.option('--preset', type=click.Choice(list(PLATFORM_PRESETS.keys())),
                     help='Start from a platform preset'),
        click.option('--teams', type=int, help='Number of teams in your league'),
        click.option('--scoring', type=click.Choice(SCORING_CHOICES), help='Scoring format'),
        click.option('--roster', help='Roster counts as JSON, e.g. \'{"QB":1,"RB":2,"WR":2,"TE":1,"FLEX":2}\''),
        click.option('--flex-share', help='Flex share preset name or JSON mapping'),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def build_settings(preset: Optional[str], teams: Optional[int], scoring: Optional[str],
                   roster: Optional[str], flex_share: Optional[str]) -> Dict:
    """Merge preset and command-line overrides into a validated settings dict"""
    settings = dict(PLATFORM_PRESETS[preset] if preset else DEFAULT_SETTINGS)

    if teams is not None:
        settings['teams'] = teams
    if scoring:
        settings['scoring'] = scoring
    if roster:
        try:
            settings['roster'] = json.loads(roster)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Roster must be valid JSON: {e}")
    if flex_share:
        try:
            settings['flex_share'] = json.loads(flex_share)
        except json.JSONDecodeError:
            settings['flex_share'] = flex_share

    return InputValidator.validate_league_settings(settings)


@click.group()
@click.version_option(version='0.3.0')
@click.option('--debug', is_flag=True, help='Enable debug logging (traces every valuation)')
@click.pass_context
def cli(ctx, debug):
    """Fantasy Football VBD Engine - value-based rankings and draft tiers

    Commands:
      rank         - Value, tier and display a player pool
      tier-breaks  - Show where tiers break and why
      recommend    - Suggest picks for a draft strategy
      replacement  - Show replacement levels for a league
      curve        - Show the projection curve for a position
      metrics      - Show performance metrics

    Quick Start:
      python main.py rank players.csv --preset sleeper_ppr
    """
    log_file = None
    trace_file = None
    if debug:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = DATA_DIR / 'logs' / f'debug_{timestamp}.log'
        trace_file = DATA_DIR / 'logs' / f'vbd_trace_{timestamp}.log'

    setup_logging(debug=debug, log_file=log_file, trace_file=trace_file)
    ctx.ensure_object(dict)
    ctx.obj['debug'] = debug
    ctx.call_on_close(_save_metrics)


def _save_metrics():
    """Keep this run's metrics for later `metrics` invocations"""
    try:
        monitor.save_history()
    except OSError as e:
        get_logger(__name__).warning(f"Could not save metrics history: {e}")


def _load_board(ctx, players_file: str, schedule_file: Optional[str], settings: Dict,
                tier_scope: str) -> List[BoardEntry]:
    players = load_players(players_file)
    if not players:
        raise ValidationError(f"No valid players found in {players_file}")

    schedule = load_schedule(schedule_file) if schedule_file else None
    observer = log_breakdown if ctx.obj.get('debug') else None
    builder = DraftBoardBuilder(settings, tier_scope=tier_scope, observer=observer)
    return builder.build(players, schedule)


@cli.command()
@click.argument('players_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--schedule', 'schedule_file', type=click.Path(exists=True, dir_okay=False),
              help='JSON map of position to SOS rank (1=hardest, 32=easiest)')
@league_options
@click.option('--tier-scope', type=click.Choice(['position', 'overall']), default='position')
@click.option('--position', type=click.Choice(['QB', 'RB', 'WR', 'TE', 'K', 'DST']), help='Only show one position')
@click.option('--top', type=int, default=30, help='Rows to display')
@click.option('--export', is_flag=True, help='Export the board to CSV')
@click.pass_context
def rank(ctx, players_file, schedule_file, preset, teams, scoring, roster, flex_share,
         tier_scope, position, top, export):
    """Value, tier and display a player pool"""
    logger = get_logger(__name__)

    try:
        settings = build_settings(preset, teams, scoring, roster, flex_share)
        with console.status("[yellow]Valuing players...[/yellow]"):
            board = _load_board(ctx, players_file, schedule_file, settings, tier_scope)
    except ValidationError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    console.print(f"[green]✓[/green] Valued {len(board)} players")

    shown = [e for e in board if not position or e.position.value == position]
    display_board(shown[:top])

    if export:
        builder = DraftBoardBuilder(settings, tier_scope=tier_scope)
        breaks = builder.get_tier_breaks(board) if tier_scope == 'overall' else None
        try:
            exported = CSVExporter().export_all(board, breaks)
        except OSError as e:
            logger.error(f"Export failed: {e}")
            console.print("\n[red]Error: Failed to export draft board.[/red]")
            sys.exit(1)
        console.print(f"\n[green]✓[/green] Exported to: [cyan]{exported['board']}[/cyan]")

    if ctx.obj.get('debug'):
        monitor.log_summary()


@cli.command('tier-breaks')
@click.argument('players_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--schedule', 'schedule_file', type=click.Path(exists=True, dir_okay=False))
@league_options
@click.option('--position', type=click.Choice(['QB', 'RB', 'WR', 'TE', 'K', 'DST']),
              help='Break report for one position (default: overall list)')
@click.pass_context
def tier_breaks(ctx, players_file, schedule_file, preset, teams, scoring, roster, flex_share, position):
    """Show where tiers break and why"""
    try:
        settings = build_settings(preset, teams, scoring, roster, flex_share)
        scope = 'position' if position else 'overall'
        board = _load_board(ctx, players_file, schedule_file, settings, scope)
    except ValidationError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    builder = DraftBoardBuilder(settings, tier_scope=scope)
    pos = Position(position) if position else None
    entries = builder.get_top_players(board, count=len(board), position=pos)
    breaks = builder.get_tier_breaks(board, position=pos)

    table = Table(title=f"\n[bold]Tier Breaks ({position or 'overall'})[/bold]")
    table.add_column("After", style="magenta")
    table.add_column("Next", style="magenta")
    table.add_column("VBD Drop", justify="right", style="bright_green")
    table.add_column("% Drop", justify="right")
    table.add_column("Reason", style="dim")

    for tier_break in breaks:
        i = tier_break.after_index
        table.add_row(
            entries[i].player.name,
            entries[i + 1].player.name,
            f"{tier_break.vbd_drop:.1f}",
            f"{tier_break.percent_drop * 100:.1f}%",
            tier_break.reason
        )

    console.print(table)


@cli.command()
@click.argument('players_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--strategy', type=click.Choice([s.value for s in DraftStrategy]), default='balanced')
@click.option('--pick', 'current_pick', type=int, required=True, help='Current overall pick number')
@click.option('--my-team', default='', help='Comma-separated positions already drafted, e.g. RB,WR')
@click.option('--drafted', default='', help='Comma-separated player ids already taken')
@league_options
@click.pass_context
def recommend(ctx, players_file, strategy, current_pick, my_team, drafted,
              preset, teams, scoring, roster, flex_share):
    """Suggest picks for a draft strategy"""
    try:
        settings = build_settings(preset, teams, scoring, roster, flex_share)
        board = _load_board(ctx, players_file, None, settings, 'position')
        league = LeagueSettings.from_dict(settings)
        InputValidator.validate_draft_pick(current_pick, league.teams)
    except ValidationError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    taken = {p.strip() for p in drafted.split(',') if p.strip()}
    available = [e for e in board if e.player_id not in taken]
    team = [p.strip() for p in my_team.split(',') if p.strip()]

    ids = get_recommendations(strategy, team, available, league, current_pick)
    by_id = {e.player_id: e for e in available}

    if not ids:
        console.print("[yellow]No players match this strategy right now[/yellow]")
        return

    display_board([by_id[i] for i in ids if i in by_id], title=f"Recommendations ({strategy})")


@cli.command()
@league_options
def replacement(preset, teams, scoring, roster, flex_share):
    """Show replacement levels for a league"""
    try:
        settings = build_settings(preset, teams, scoring, roster, flex_share)
    except ValidationError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    league = LeagueSettings.from_dict(settings)
    model = ReplacementModel(league)

    table = Table(title=f"\n[bold]Replacement Levels ({league.teams} teams, {league.scoring})[/bold]")
    table.add_column("Pos", style="green")
    table.add_column("Starters", justify="right")
    table.add_column("Flex Share", justify="right")
    table.add_column("Repl Rank", justify="right", style="cyan")
    table.add_column("Repl Pts", justify="right", style="bright_green")

    for position, baseline in model.baselines().items():
        share = league.flex_share.get(position.value, 0.0) if position in league.flex.eligible else 0.0
        table.add_row(
            position.value,
            str(league.starters_at(position)),
            f"{share:.2f}",
            f"{position.value}{baseline['rank']}",
            f"{baseline['points']:.1f}"
        )

    console.print(table)
    console.print(f"\n[dim]Flex: {league.flex.count} slot(s), eligible "
                  f"{'/'.join(sorted(p.value for p in league.flex.eligible))}[/dim]")


@cli.command()
@click.argument('position', type=click.Choice([p.value for p in VALUED_POSITIONS]))
@click.option('--max-rank', type=int, default=40)
def curve(position, max_rank):
    """Show the projection curve for a position"""
    table = Table(title=f"\n[bold]{position} Projection Curve[/bold]")
    table.add_column("Rank", style="cyan", justify="right")
    table.add_column("Points", style="bright_green", justify="right")

    for rank_number, points in ProjectionCurve().curve_table(position, max_rank).items():
        table.add_row(f"{position}{rank_number}", f"{points:.1f}")

    console.print(table)


@cli.command()
@click.option('--export', is_flag=True, help='Export metrics to JSON file')
@click.option('--clear', is_flag=True, help='Clear all metrics data')
def metrics(export: bool, clear: bool):
    """View performance metrics saved by earlier commands"""
    if clear:
        monitor.clear_metrics()
        console.print("[green]✓[/green] Metrics cleared")
        return

    summary = monitor.get_performance_summary(include_history=True)

    if summary.get("message") == "No metrics recorded":
        console.print("[dim]No metrics recorded yet. Run some commands first![/dim]")
        return

    table = Table(title="Operation Performance")
    table.add_column("Operation", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Errors", justify="right", style="red")
    table.add_column("Avg Time", justify="right")
    table.add_column("Max Time", justify="right")

    for name, stats in sorted((k, v) for k, v in summary.items() if k != 'system'):
        table.add_row(
            name,
            str(stats['count']),
            str(stats['error_count']),
            f"{stats['avg_duration']:.3f}s",
            f"{stats['max_duration']:.3f}s"
        )

    console.print(table)

    if export:
        filepath = monitor.export_metrics(include_history=True)
        console.print(f"\n[green]✓[/green] Metrics exported to: {filepath}")


def display_board(entries: Sequence[BoardEntry], title: str = "Draft Board"):
    """Display board entries in a table"""
    table = Table(title=f"\n[bold]{title}[/bold]")

    table.add_column("#", style="cyan", no_wrap=True)
    table.add_column("Player", style="magenta")
    table.add_column("Pos", style="green")
    table.add_column("ADP", justify="right", style="yellow")
    table.add_column("Tier", style="blue")
    table.add_column("VBD", justify="right", style="bright_green")
    table.add_column("Adj Pts", justify="right", style="bright_cyan")
    table.add_column("Repl", justify="right", style="dim")
    table.add_column("Note", style="red")

    for i, entry in enumerate(entries, 1):
        b = entry.breakdown
        table.add_row(
            str(i),
            entry.player.name,
            f"{entry.position.value}{b.position_rank}" if b.position_rank else entry.position.value,
            f"{entry.adp:.1f}",
            str(entry.tier) if entry.tier is not None else "-",
            f"{entry.vbd:.1f}",
            f"{b.adjusted_points:.0f}",
            f"{b.replacement_points:.0f}",
            entry.dead_zone_warning or ""
        )

    console.print(table)


if __name__ == '__main__':
    cli()
