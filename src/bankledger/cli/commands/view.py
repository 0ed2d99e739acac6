"""Ledger viewing command."""

import click

from bankledger.cli.filters import filter_options
from bankledger.cli.rendering import echo_entries, echo_totals
from bankledger.domain.search import SearchService
from bankledger.domain.summary import SummaryService


@click.command("view")
@filter_options
@click.option("--verbose", "-v", is_flag=True, help="Show every field of each transaction")
@click.option("--totals/--no-totals", default=True, help="Show account totals of the matches")
@click.pass_context
def view_entries(ctx, search_filter, verbose: bool, totals: bool):
    """View transactions matching all given filters."""
    ledger = ctx.obj["ledger_service"].ledger
    result = SearchService(ledger).search(search_filter)

    click.echo(
        f"Found {result.match_count} / {result.total_count} transactions matching criteria"
    )
    if not result.entries:
        return

    echo_entries(result.entries, verbose=verbose)
    if totals:
        echo_totals(SummaryService(ledger).account_totals(result.entries))


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_entries)
