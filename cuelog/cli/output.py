"""Shared helpers for CLI commands."""

import click

from ..services.base import Result


def get_tracker(ctx):
    """Build the tracker from the environment, with --db and --user from the root command."""
    from cuelog.config import Config
    from cuelog.tracker import PracticeTracker

    config = Config.from_env()
    config.db_path = ctx.obj['db']
    config.user_id = ctx.obj['user']
    return PracticeTracker(config=config)


def echo_result(result: Result) -> bool:
    """Print a result's message in the notification style. Returns True on success."""
    if result.is_error:
        click.echo(click.style(f"  {result.message}", fg='red'), err=True)
        return False
    if result.is_skipped:
        click.echo(click.style(f"  Skipped: {result.message}", fg='yellow'))
        return True
    if result.message:
        click.echo(click.style(f"  {result.message}", fg='green'))
    return True


def exit_on_error(result: Result) -> None:
    """Print the result and exit with status 1 if it is an error."""
    if not echo_result(result):
        raise SystemExit(1)
