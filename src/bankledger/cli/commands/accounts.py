"""Account listing command."""

import click

from bankledger.domain.statement_import import StatementImportService


@click.command("accounts")
@click.pass_context
def list_accounts(ctx):
    """List configured accounts and where their statements are read from."""
    registry = ctx.obj["registry"]
    importer = StatementImportService(
        ctx.obj["ledger_service"].ledger, registry, ctx.obj["statements_dir"]
    )

    click.echo("\nAccounts:")
    click.echo("-" * 80)
    for account in registry.accounts:
        fmt = registry.get_format(account)
        click.echo(f"{account.label}")
        click.echo(f"  Code: {account.code}")
        click.echo(f"  Initial balance: {account.initial_balance:,.2f}")
        click.echo(f"  Statements: {importer.account_directory(account)}")
        click.echo(
            f"  Format: delimiter '{fmt.delimiter}', decimal '{fmt.decimal_separator}', "
            f"dates {fmt.date_operation_format} / {fmt.date_value_format}"
        )


def register_commands(cli):
    """Register accounts command with main CLI."""
    cli.add_command(list_accounts)
