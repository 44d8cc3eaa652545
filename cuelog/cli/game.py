"""Game commands."""

import click

from cuelog.helpers.shot_taxonomy import GAME_TYPES, PLAYER_MODES
from .output import echo_result, exit_on_error, get_tracker


@click.group()
@click.pass_context
def game(ctx):
    """Start, score, finish and delete games."""
    pass


@game.command('new')
@click.option('--type', 'game_type', type=click.Choice(GAME_TYPES), default='8-ball', show_default=True)
@click.option('--mode', 'player_mode', type=click.Choice(PLAYER_MODES), default='single', show_default=True)
@click.option('--player-a', help='Name of player A')
@click.option('--player-b', help='Name of player B (double mode only)')
@click.pass_context
def new(ctx, game_type, player_mode, player_a, player_b):
    """Start a new game."""
    tracker = get_tracker(ctx)

    result = tracker.games.create_game(
        tracker.user_id, game_type, player_mode,
        player_a_name=player_a, player_b_name=player_b,
    )
    exit_on_error(result)
    click.echo(f"Game id: {result.data.game_id}")


@game.command('list')
@click.option('--limit', default=5, show_default=True, help='Number of recent games')
@click.pass_context
def list_games(ctx, limit):
    """Show recent games."""
    tracker = get_tracker(ctx)

    result = tracker.games.recent_games(tracker.user_id, limit=limit)
    exit_on_error(result)

    if not result.data:
        click.echo("No games yet. Start one with 'cuelog game new'.")
        return

    for g in result.data:
        players = f" {g.players}" if g.players else ''
        click.echo(f"{g.game_id}  {g}{players}")


@game.command('show')
@click.argument('game_id')
@click.option('--last', default=5, show_default=True, help='Number of latest shots to show')
@click.pass_context
def show(ctx, game_id, last):
    """Show a game and its latest shots."""
    tracker = get_tracker(ctx)

    result = tracker.games.game_detail(tracker.user_id, game_id)
    exit_on_error(result)
    detail = result.data
    g = detail.game

    click.echo("=" * 60)
    click.echo(f"{g.game_type}  ({g.status})")
    click.echo("=" * 60)
    if g.players:
        click.echo(f"Players:      {g.players}")
    click.echo(f"Started:      {g.started_at.date() if g.started_at else 'N/A'}")
    click.echo(f"Score:        {g.score}")
    click.echo(f"Current Rack: {g.current_rack}")

    click.echo(f"\nShot History ({len(detail.shots)})")
    for s in reversed(detail.shots[-last:]):
        click.echo(f"  {s}")
        if s.notes:
            click.echo(f"    \"{s.notes}\"")
    if len(detail.shots) > last:
        click.echo(f"  Showing latest {last} shots")


@game.command('rack')
@click.argument('game_id')
@click.option('--won/--lost', required=True, help='Whether you won the rack')
@click.pass_context
def rack(ctx, game_id, won):
    """Finish the current rack and start the next one."""
    tracker = get_tracker(ctx)
    exit_on_error(tracker.games.record_rack(tracker.user_id, game_id, won))


@game.command('finish')
@click.argument('game_id')
@click.pass_context
def finish(ctx, game_id):
    """Finish a game or training session."""
    tracker = get_tracker(ctx)
    exit_on_error(tracker.games.finish_game(tracker.user_id, game_id))


@game.command('delete')
@click.argument('game_id')
@click.confirmation_option(prompt='Delete this game and all of its shots?')
@click.pass_context
def delete(ctx, game_id):
    """Delete a game and its shots."""
    tracker = get_tracker(ctx)
    if not echo_result(tracker.games.delete_game(tracker.user_id, game_id)):
        raise SystemExit(1)
