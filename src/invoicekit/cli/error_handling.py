"""CLI error handling helpers."""

import click

from invoicekit.domain.errors import DomainError, ValidationError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, ValidationError) and len(error.errors) > 1:
        for field, reason in error.errors.items():
            click.echo(f"  {field}: {reason}", err=True)
    ctx.exit(1)
