"""Business profile commands."""

import click
from invoicekit.cli.business_context import require_business_id
from invoicekit.cli.error_handling import handle_domain_error
from invoicekit.domain.business import BusinessService
from invoicekit.domain.errors import DomainError


@click.group()
def business_group():
    """Manage your business profile."""
    pass


@business_group.command("register")
@click.argument("name", metavar="BUSINESS_NAME")
@click.option("--tax-number", required=True, help="Tax registration number (GSTIN)")
@click.option("--address", required=True, help="Business address")
@click.option("--logo", help="Logo reference (path or URL)")
@click.pass_context
def register_business(ctx, name: str, tax_number: str, address: str, logo: str | None):
    """Register a new business.

    Examples:
        invoicekit business register "Acme Traders" --tax-number 27AAPFU0939F1ZV --address "12 MG Road, Pune"
    """
    service = BusinessService(ctx.obj["db"])

    try:
        business_id = service.register_business(
            name=name, tax_number=tax_number, address=address, logo_url=logo
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Registered business '{name.strip()}' (ID: {business_id})")
    click.echo(f"Set INVOICEKIT_BUSINESS_ID={business_id} to act as this business.")


@business_group.command("show")
@click.pass_context
def show_business(ctx):
    """Show your business profile."""
    business_id = require_business_id(ctx)
    service = BusinessService(ctx.obj["db"])

    try:
        business = service.get_profile(business_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\n{business.name}")
    click.echo("-" * 60)
    click.echo(f"ID:         {business.id}")
    click.echo(f"Tax number: {business.tax_number}")
    click.echo(f"Address:    {business.address}")
    if business.logo_url:
        click.echo(f"Logo:       {business.logo_url}")


@business_group.command("update")
@click.option("--name", help="New business name")
@click.option("--address", help="New address")
@click.option("--logo", help="New logo reference")
@click.pass_context
def update_business(ctx, name: str | None, address: str | None, logo: str | None):
    """Update your business profile.

    The tax registration number cannot be changed.
    """
    business_id = require_business_id(ctx)
    service = BusinessService(ctx.obj["db"])

    if name is None and address is None and logo is None:
        click.echo("Error: Nothing to update. Use --name, --address or --logo.", err=True)
        ctx.exit(1)

    try:
        business = service.update_profile(
            business_id, name=name, address=address, logo_url=logo
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated business '{business.name}'")


def register_commands(cli):
    """Register business commands with main CLI."""
    cli.add_command(business_group, name="business")
