"""Totals and balance commands."""

import click

from bankledger.cli.error_handling import handle_domain_error
from bankledger.cli.rendering import echo_totals
from bankledger.domain.entities import DateField
from bankledger.domain.errors import DomainError
from bankledger.domain.summary import SummaryService
from bankledger.utils.account_resolver import resolve_account
from bankledger.utils.date_parser import parse_month


@click.command("totals")
@click.pass_context
def show_totals(ctx):
    """Show the total of each account, duplicates excluded."""
    ledger = ctx.obj["ledger_service"].ledger
    echo_totals(SummaryService(ledger).account_totals())


@click.command("balance")
@click.option("--account", help="Account name, label or code (default: all accounts)")
@click.option(
    "--by",
    "date_field",
    type=click.Choice([field.value for field in DateField]),
    default=DateField.OPERATION.value,
    show_default=True,
    help="Date used to assign transactions to months",
)
@click.option("--monthly", is_flag=True, help="Show each month's net instead of the running balance")
@click.option("--with-initial-balance", is_flag=True, help="Start from the accounts' initial balances")
@click.option("--include-duplicates", is_flag=True, help="Count duplicate-flagged transactions too")
@click.option("--from-month", help="First month shown (YYYY-MM)")
@click.option("--to-month", help="Last month shown (YYYY-MM)")
@click.pass_context
def show_balance(
    ctx,
    account: str | None,
    date_field: str,
    monthly: bool,
    with_initial_balance: bool,
    include_duplicates: bool,
    from_month: str | None,
    to_month: str | None,
):
    """Show the balance at the end of each month."""
    ledger = ctx.obj["ledger_service"].ledger
    service = SummaryService(ledger)

    try:
        selected = resolve_account(ctx.obj["registry"], account) if account else None
        start = parse_month(from_month) if from_month else None
        end = parse_month(to_month) if to_month else None
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    if monthly:
        series = service.monthly_totals(
            DateField(date_field),
            account=selected,
            include_duplicates=include_duplicates,
            start_month=start,
            end_month=end,
        )
    else:
        series = service.monthly_series(
            DateField(date_field),
            account=selected,
            include_duplicates=include_duplicates,
            include_initial_balance=with_initial_balance,
            start_month=start,
            end_month=end,
        )

    if not series:
        click.echo("No transactions found.")
        return

    click.echo(f"\n{'Month':<10} {'Net' if monthly else 'Balance':>14}")
    click.echo("-" * 25)
    for point in series:
        click.echo(f"{point.month_key:<10} {point.balance:>14,.2f}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(show_totals)
    cli.add_command(show_balance)
