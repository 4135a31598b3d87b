"""Main CLI entry point."""

import getpass
import logging

import click
from invoicekit.database.factories import create_sqlite_database

# Import and register all commands at module level
from invoicekit.cli.commands import client, dashboard, invoice


def _default_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "default"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides INVOICEKIT_DB_PATH environment variable)",
    envvar="INVOICEKIT_DB_PATH",
)
@click.option(
    "--user",
    "user_id",
    help="User that owns the clients and invoices (defaults to the login name)",
    envvar="INVOICEKIT_USER",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, user_id: str | None, verbose: bool):
    """Invoicekit - Small-business invoicing.

    Manage clients, issue invoices with line items, track payment status
    and view per-currency earnings on the dashboard.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.obj["user_id"] = user_id or _default_user()
        ctx.call_on_close(db.disconnect)


# Register all commands
client.register_commands(cli)
invoice.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
