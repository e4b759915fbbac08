"""Main CLI entry point."""

import click
import structlog

from spendsense.database.factories import create_database
from spendsense.domain.users import UserService
from spendsense.logconfig import configure_logging

# Import and register all commands at module level
from spendsense.cli.commands import (
    user,
    ledger,
    add,
    transaction,
    report,
    import_cmd,
    notes,
)

logger = structlog.get_logger(__name__)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Database file path or SQLAlchemy URL (overrides SPENDSENSE_DB_PATH environment variable)",
    envvar="SPENDSENSE_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Log informational messages to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """SpendSense - personal ledger.

    Organize transactions into ledger groups and sub-groups, import them from
    bank SMS text, and review statements and dashboards.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose=verbose)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(db_path)
        db.connect()
        db.initialize_schema()
        UserService(db).ensure_default_admin()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)
        logger.debug("database_ready", url=db.database_url)


# Register all commands
user.register_commands(cli)
ledger.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
report.register_commands(cli)
import_cmd.register_commands(cli)
notes.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
