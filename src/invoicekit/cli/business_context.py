"""CLI helpers for resolving the calling business."""

from __future__ import annotations

import click


def require_business_id(ctx: click.Context) -> int:
    """Return the caller's business ID, or exit with a CLI error.

    The ID comes from --business-id or INVOICEKIT_BUSINESS_ID and is passed
    explicitly into every tenant-scoped service call.
    """
    business_id = ctx.obj.get("business_id")
    if business_id is None:
        click.echo(
            "Error: No business selected. Use --business-id or set INVOICEKIT_BUSINESS_ID.",
            err=True,
        )
        ctx.exit(1)
    return business_id
