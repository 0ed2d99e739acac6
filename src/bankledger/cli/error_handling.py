"""CLI error handling helpers."""

import click

from bankledger.domain.errors import DomainError, ReconciliationError


def handle_domain_error(ctx: click.Context, error: DomainError | OSError) -> None:
    """Render a domain or I/O error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    if isinstance(error, ReconciliationError):
        for entry in error.orphans:
            click.echo(
                f"  {entry.operation_date} {entry.label} ({entry.account.label})", err=True
            )
    ctx.exit(1)
