"""Dashboard command."""

import click
from invoicekit.cli.business_context import require_business_id
from invoicekit.domain.dashboard import DashboardService
from invoicekit.utils.formatting import format_money


@click.command("dashboard")
@click.option("--days", type=click.IntRange(min=1), default=30, show_default=True,
              help="Window for counting recently created invoices")
@click.pass_context
def dashboard(ctx, days: int):
    """Show invoice counts, revenue and outstanding amounts."""
    business_id = require_business_id(ctx)
    service = DashboardService(ctx.obj["db"])

    summary = service.get_summary(business_id, recent_days=days)

    click.echo("\nDashboard")
    click.echo("-" * 40)
    click.echo(f"{'Invoices:':22s} {summary.total_invoices:>12d}")
    for status, count in summary.status_counts.items():
        click.echo(f"{'  ' + status.value + ':':22s} {count:>12d}")
    click.echo(f"{'Revenue (paid):':22s} {format_money(summary.revenue):>12s}")
    click.echo(f"{'Outstanding:':22s} {format_money(summary.outstanding):>12s}")
    click.echo(f"{f'Created last {days} days:':22s} {summary.recent_invoices:>12d}")


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
