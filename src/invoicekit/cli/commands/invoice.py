"""Invoice commands."""

from datetime import datetime, time, timedelta
from pathlib import Path

import click
from invoicekit.cli.business_context import require_business_id
from invoicekit.cli.error_handling import handle_domain_error
from invoicekit.domain.client import ClientService
from invoicekit.domain.entities import InvoiceStatus
from invoicekit.domain.errors import DomainError
from invoicekit.domain.invoice import InvoiceService
from invoicekit.domain.totals import discount_amount, line_total, round_money
from invoicekit.utils.date_parser import parse_date
from invoicekit.utils.formatting import (
    format_date,
    format_money,
    format_percent,
    format_quantity,
)
from invoicekit.utils.item_parser import parse_item_spec

STATUS_CHOICES = click.Choice(InvoiceStatus.values())


@click.group()
def invoice_group():
    """Manage invoices."""
    pass


@invoice_group.command("create")
@click.option("--client", "client_id", type=int, required=True, help="Client ID")
@click.option(
    "--item",
    "items",
    multiple=True,
    required=True,
    help="Line item as DESCRIPTION:QUANTITY:UNIT_PRICE (repeatable)",
)
@click.option("--tax", help="Tax rate in percent (0-100)")
@click.option("--discount", help="Discount rate in percent (0-100)")
@click.pass_context
def create_invoice(ctx, client_id: int, items: tuple[str, ...], tax: str | None, discount: str | None):
    """Create an invoice.

    Examples:
        invoicekit invoice create --client 1 --item "Design:2:50" --item "Hosting:1:25" --tax 5 --discount 10
    """
    business_id = require_business_id(ctx)
    service = InvoiceService(ctx.obj["db"])

    try:
        raw_items = [parse_item_spec(spec) for spec in items]
        invoice = service.create_invoice(
            business_id, client_id, raw_items, tax_rate=tax, discount_rate=discount
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created invoice {invoice.invoice_number} (ID: {invoice.id})")
    click.echo(f"Total: {format_money(invoice.total)}")


@invoice_group.command("list")
@click.option("--status", type=STATUS_CHOICES, help="Only invoices with this status")
@click.option("--client", "client_id", type=int, help="Only invoices for this client ID")
@click.option("--start-date", help="Created on or after (YYYY-MM-DD or relative like '30 days ago')")
@click.option("--end-date", help="Created on or before (YYYY-MM-DD or relative)")
@click.pass_context
def list_invoices(
    ctx,
    status: str | None,
    client_id: int | None,
    start_date: str | None,
    end_date: str | None,
):
    """List invoices, newest first."""
    business_id = require_business_id(ctx)
    service = InvoiceService(ctx.obj["db"])

    created_from = None
    created_to = None
    try:
        if start_date:
            created_from = datetime.combine(parse_date(start_date), time.min)
        if end_date:
            created_to = datetime.combine(parse_date(end_date) + timedelta(days=1), time.min)
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)

    try:
        invoices = service.list_invoices(
            business_id,
            status=status,
            client_id=client_id,
            created_from=created_from,
            created_to=created_to,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not invoices:
        click.echo("No invoices found.")
        return

    clients = {client.id: client.name for client in ClientService(ctx.obj["db"]).list_clients(business_id)}

    click.echo(f"\nFound {len(invoices)} invoice(s):")
    click.echo("-" * 90)
    for invoice in invoices:
        click.echo(
            f"ID: {invoice.id:3d} | {invoice.invoice_number:16s} | {format_date(invoice.created_at):11s} | "
            f"{clients.get(invoice.client_id, 'Unknown'):20s} | {invoice.status.value:7s} | "
            f"{format_money(invoice.total):>12s}"
        )


@invoice_group.command("show")
@click.argument("invoice_id", type=int)
@click.pass_context
def show_invoice(ctx, invoice_id: int):
    """Show an invoice with its line items."""
    business_id = require_business_id(ctx)
    service = InvoiceService(ctx.obj["db"])

    try:
        invoice = service.get_invoice(invoice_id, business_id)
        client = ClientService(ctx.obj["db"]).get_client(invoice.client_id, business_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nInvoice {invoice.invoice_number}")
    click.echo("=" * 70)
    click.echo(f"Date:    {format_date(invoice.created_at)}")
    click.echo(f"Status:  {invoice.status.value}")
    click.echo(f"Bill to: {client.name}")
    click.echo("-" * 70)
    for item in invoice.items:
        click.echo(
            f"{item.description[:32]:32s} {format_quantity(item.quantity):>6s} x "
            f"{format_money(item.unit_price):>10s} = {format_money(line_total(item)):>12s}"
        )
    click.echo("-" * 70)
    click.echo(f"{'Subtotal:':>56s} {format_money(invoice.subtotal):>12s}")
    if invoice.discount_rate > 0:
        discount = round_money(discount_amount(invoice.subtotal, invoice.discount_rate))
        label = f"Discount ({format_percent(invoice.discount_rate)}):"
        click.echo(f"{label:>56s} {'-' + format_money(discount):>12s}")
    if invoice.tax_rate > 0:
        label = f"Tax ({format_percent(invoice.tax_rate)}):"
        click.echo(f"{label:>56s} {format_money(invoice.tax_amount):>12s}")
    click.echo(f"{'Total:':>56s} {format_money(invoice.total):>12s}")


@invoice_group.command("status")
@click.argument("invoice_id", type=int)
@click.argument("status", metavar="STATUS")
@click.option("--expect", help="Only change the status if it is currently this value")
@click.pass_context
def set_status(ctx, invoice_id: int, status: str, expect: str | None):
    """Change an invoice's payment status (Unpaid, Paid or Overdue).

    Examples:
        invoicekit invoice status 3 Paid
        invoicekit invoice status 3 Overdue --expect Unpaid
    """
    business_id = require_business_id(ctx)
    service = InvoiceService(ctx.obj["db"])

    try:
        invoice = service.set_status(invoice_id, status, business_id, expected_status=expect)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Invoice {invoice.invoice_number} is now {invoice.status.value}")


@invoice_group.command("download")
@click.argument("invoice_id", type=int)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Output file (defaults to <invoice number>.pdf)",
)
@click.pass_context
def download_invoice(ctx, invoice_id: int, output: str | None):
    """Render an invoice to a PDF file."""
    business_id = require_business_id(ctx)
    service = InvoiceService(ctx.obj["db"])

    try:
        document = service.export_pdf(invoice_id, business_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    path = Path(output) if output else Path(document.filename)
    path.write_bytes(document.content)
    click.echo(f"Saved {document.content_type} to {path}")


def register_commands(cli):
    """Register invoice commands with main CLI."""
    cli.add_command(invoice_group, name="invoice")
