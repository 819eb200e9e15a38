"""Main CLI entry point."""

import logging

import click
from invoicekit.database.factories import create_sqlite_database

# Import and register all commands at module level
from invoicekit.cli.commands import business, client, invoice, dashboard


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides INVOICEKIT_DB_PATH environment variable)",
    envvar="INVOICEKIT_DB_PATH",
)
@click.option(
    "--business-id",
    type=int,
    help="ID of the business you act as (overrides INVOICEKIT_BUSINESS_ID)",
    envvar="INVOICEKIT_BUSINESS_ID",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, business_id: int | None, verbose: bool):
    """Invoicekit - Invoicing for small businesses.

    Register your business, manage clients, issue invoices, track their
    payment status and download them as PDF documents.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    ctx.obj["business_id"] = business_id

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
business.register_commands(cli)
client.register_commands(cli)
invoice.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
