"""Client management commands."""

import click
from invoicekit.cli.business_context import require_business_id
from invoicekit.cli.error_handling import handle_domain_error
from invoicekit.domain.client import ClientService
from invoicekit.domain.errors import DomainError


@click.group()
def client_group():
    """Manage clients."""
    pass


@client_group.command("create")
@click.argument("name", metavar="CLIENT_NAME")
@click.option("--email", help="Client email address")
@click.option("--phone", help="Client phone number")
@click.option("--address", help="Client postal address")
@click.pass_context
def create_client(ctx, name: str, email: str | None, phone: str | None, address: str | None):
    """Create a new client.

    Examples:
        invoicekit client create "Globex" --email billing@globex.example
    """
    business_id = require_business_id(ctx)
    service = ClientService(ctx.obj["db"])

    try:
        client_id = service.create_client(
            business_id, name=name, email=email, phone=phone, address=address
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created client '{name.strip()}' (ID: {client_id})")


@client_group.command("list")
@click.pass_context
def list_clients(ctx):
    """List your clients."""
    business_id = require_business_id(ctx)
    service = ClientService(ctx.obj["db"])

    clients = service.list_clients(business_id)
    if not clients:
        click.echo("No clients found.")
        return

    click.echo("\nClients:")
    click.echo("-" * 80)
    for client in clients:
        click.echo(f"ID: {client.id:3d} | {client.name:25s} | {client.email or '':30s}")


@client_group.command("show")
@click.argument("client_id", type=int)
@click.pass_context
def show_client(ctx, client_id: int):
    """Show a client."""
    business_id = require_business_id(ctx)
    service = ClientService(ctx.obj["db"])

    try:
        client = service.get_client(client_id, business_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{client.name}")
    click.echo("-" * 60)
    click.echo(f"ID:      {client.id}")
    click.echo(f"Email:   {client.email or 'N/A'}")
    click.echo(f"Phone:   {client.phone or 'N/A'}")
    click.echo(f"Address: {client.address or 'N/A'}")


@client_group.command("update")
@click.argument("client_id", type=int)
@click.option("--name", help="New name")
@click.option("--email", help="New email address")
@click.option("--phone", help="New phone number")
@click.option("--address", help="New postal address")
@click.pass_context
def update_client(
    ctx,
    client_id: int,
    name: str | None,
    email: str | None,
    phone: str | None,
    address: str | None,
) -> None:
    """Update a client.

    Updates only the fields that are provided.
    """
    business_id = require_business_id(ctx)
    service = ClientService(ctx.obj["db"])

    try:
        client = service.update_client(
            client_id, business_id, name=name, email=email, phone=phone, address=address
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated client '{client.name}'")


@client_group.command("delete")
@click.argument("client_id", type=int)
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
@click.pass_context
def delete_client(ctx, client_id: int, force: bool) -> None:
    """Delete a client that has no invoices."""
    business_id = require_business_id(ctx)
    service = ClientService(ctx.obj["db"])

    try:
        client = service.get_client(client_id, business_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not force and not click.confirm(f"Delete client '{client.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_client(client_id, business_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted client '{client.name}'")


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
