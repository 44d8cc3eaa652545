"""Analytics dashboard command."""

import click

from cuelog.analytics.insights import performance_insights
from .output import exit_on_error, get_tracker

SECTION_TITLES = {
    'distance': 'Distance Analysis',
    'table_position': 'Table Position Analysis',
    'cut_angle': 'Cut Angle Analysis',
    'power_level': 'Power Level Analysis',
    'spin': 'Spin Type Analysis',
    'cue_ball_control': 'Cue Ball Control',
    'shot_type': 'Shot Type Analysis',
    'strategic_intent': 'Strategic Intent',
}


def _heading(title: str) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * len(title))


@click.command()
@click.option('--csv', 'csv_dir', type=click.Path(file_okay=False), help='Also export every section as CSV into this directory')
@click.pass_context
def stats(ctx, csv_dir):
    """Show the analytics dashboard."""
    tracker = get_tracker(ctx)

    result = tracker.dashboard.load(tracker.user_id)
    exit_on_error(result)
    report = result.data
    s = report.stats

    click.echo("=" * 60)
    click.echo("Analytics Dashboard")
    click.echo("=" * 60)
    click.echo(f"Total Games:      {s.total_games}")
    click.echo(f"Shot Accuracy:    {s.shot_accuracy}%")
    click.echo(f"Win Rate:         {s.win_rate}%")
    click.echo(f"Avg Shots/Game:   {s.avg_shots_per_game}")
    click.echo(f"Total Shots:      {s.total_shots}")
    click.echo(f"Successful Shots: {s.successful_shots}")
    click.echo(f"Games Won:        {s.games_won}")
    click.echo(f"Games Lost:       {s.games_lost}")

    _heading("Performance by Game Type")
    for entry in report.game_types:
        click.echo(f"  {entry.label:<16} {entry.games:>4} games  {entry.win_rate:>3}% won")

    _heading("Shot Outcomes")
    for entry in report.outcomes:
        click.echo(f"  {entry.label:<16} {entry.count:>4}  {entry.percentage:>3}%")

    _heading("Monthly Activity")
    for entry in report.monthly:
        click.echo(f"  {entry.label:<16} {entry.games:>4} games  {entry.shots:>5} shots")

    for field, entries in report.shot_analyses.items():
        if not entries:
            continue
        _heading(SECTION_TITLES[field])
        for entry in entries:
            click.echo(f"  {entry.label:<16} {entry.successful:>4}/{entry.total:<4} {entry.success_rate:>3}%")

    _heading("Performance Insights")
    for insight in performance_insights(s):
        click.echo(f"  {insight.headline} {insight.detail}")

    if csv_dir:
        from cuelog.analytics.export import export_report_csv

        paths = export_report_csv(report, csv_dir)
        click.echo(click.style(f"\nExported {len(paths)} files to {csv_dir}", fg='green'))
