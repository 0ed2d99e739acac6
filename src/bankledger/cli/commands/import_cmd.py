"""Statement import command."""

import click

from bankledger.cli.error_handling import handle_domain_error
from bankledger.domain.errors import DomainError
from bankledger.domain.statement_import import StatementImportService
from bankledger.utils.account_resolver import resolve_account


@click.command("import")
@click.argument("account")
@click.option(
    "--file",
    "statement_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Import this file instead of scanning the account's statement folder",
)
@click.option(
    "--mark/--no-mark",
    default=True,
    show_default=True,
    help="Rename imported files with the processed marker",
)
@click.pass_context
def import_statements(ctx, account: str, statement_file: str | None, mark: bool):
    """Import statement files of ACCOUNT into the ledger.

    Every imported transaction is kept; those already in the ledger are
    flagged as duplicates for review.
    """
    registry = ctx.obj["registry"]
    ledger_service = ctx.obj["ledger_service"]
    service = StatementImportService(
        ledger_service.ledger, registry, ctx.obj["statements_dir"]
    )

    try:
        resolved = resolve_account(registry, account)
        try:
            if statement_file:
                result = service.import_file(resolved, statement_file, mark=mark)
            else:
                result = service.import_account(resolved, mark=mark)
        finally:
            # Files parsed before a failure are already merged and possibly renamed
            ledger_service.save()
    except (DomainError, OSError) as e:
        handle_domain_error(ctx, e)

    click.echo("\nImport complete:")
    click.echo(f"  Account: {result.account.label}")
    click.echo(f"  Files: {len(result.files_processed)} imported, "
               f"{len(result.files_skipped)} already processed")
    click.echo(f"  Added: {result.added} transactions")
    click.echo(f"  Duplicates: {result.duplicates} flagged")
    if result.errors:
        click.echo(f"  Errors: {len(result.errors)}")
        for error in result.errors:
            click.echo(f"    {error}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_statements)
