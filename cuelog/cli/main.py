"""
Cuelog CLI

Command-line interface for logging billiards practice and reviewing analytics.

Usage:
    cuelog [OPTIONS] COMMAND [ARGS]...

Commands:
    init-db   Create the database tables
    game      Start, score, finish and delete games
    shot      Log shots
    stats     Analytics dashboard
"""

import click
import logging
import sys
from dotenv import load_dotenv

# Load .env file
load_dotenv()

from cuelog.config import get_db_path
from cuelog.monitoring import init_sentry


def setup_logging(verbose: bool):
    """Configure logging to output to stdout."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(message)s',  # Simple format for CLI
        handlers=[logging.StreamHandler(sys.stdout)]
    )


@click.group()
@click.option('--db', default=get_db_path, show_default='data/cuelog.db', help='Database path')
@click.option('--user', envvar='CUELOG_USER_ID', help='Current user id (or CUELOG_USER_ID)')
@click.option('-v', '--verbose', is_flag=True, help='Verbose output (show DEBUG logs)')
@click.option('-q', '--quiet', is_flag=True, help='Quiet mode (only show warnings/errors)')
@click.pass_context
def cli(ctx, db, user, verbose, quiet):
    """Cuelog - Billiards practice log and analytics."""
    # Configure logging based on verbosity
    if quiet:
        logging.basicConfig(level=logging.WARNING, format='%(message)s')
    else:
        setup_logging(verbose)

    init_sentry()

    ctx.ensure_object(dict)
    ctx.obj['db'] = db
    ctx.obj['user'] = user
    ctx.obj['verbose'] = verbose


@cli.command('init-db')
@click.pass_context
def init_db(ctx):
    """Create the database tables (safe to run repeatedly)."""
    from cuelog.db.init_db import init_database

    init_database(ctx.obj['db'])
    click.echo(f"Database ready at {ctx.obj['db']}")


# Import and register command groups
from .game import game
from .shot import shot
from .stats import stats

cli.add_command(game)
cli.add_command(shot)
cli.add_command(stats)


if __name__ == '__main__':
    cli()
