"""CLI helpers shared by commands that select ledger entries."""

from datetime import date
import functools

import click

from bankledger.domain.entities import Category
from bankledger.domain.errors import DomainError
from bankledger.domain.search import ALL_ACCOUNTS, ALL_CATEGORIES, SearchFilter
from bankledger.utils.account_resolver import resolve_account
from bankledger.utils.date_parser import get_date_range, parse_date

PERIODS = ("this-month", "this-year", "this-week", "last-month", "last-year", "last-week")

CATEGORY_CHOICES = [category.value for category in Category]


FILTER_OPTIONS = [
    click.option("--label", default="", help="Label contains (case-insensitive)"),
    click.option(
        "--category",
        "category_filter",
        type=click.Choice(CATEGORY_CHOICES, case_sensitive=False),
        help="Only entries of this category (default: all categories)",
    ),
    click.option("--account", "account_filter", help="Account name, label or code"),
    click.option("--start-date", help="First operation date (YYYY-MM-DD or 'last month', ...)"),
    click.option("--end-date", help="Last operation date, inclusive"),
    click.option("--this-month", is_flag=True, help="Operation date in the current month"),
    click.option("--this-year", is_flag=True, help="Operation date in the current year"),
    click.option("--this-week", is_flag=True, help="Operation date in the current week"),
    click.option("--last-month", is_flag=True, help="Operation date in the previous month"),
    click.option("--last-year", is_flag=True, help="Operation date in the previous year"),
    click.option("--last-week", is_flag=True, help="Operation date in the previous week"),
    click.option("--only-new", is_flag=True, help="Only entries never saved before"),
    click.option("--only-duplicates", is_flag=True, help="Only entries flagged duplicate"),
]


def filter_options(command):
    """Add the entry selection options to a command.

    The decorated command receives a single ``search_filter`` keyword argument
    in place of the individual options.
    """

    @functools.wraps(command)
    def wrapper(*args, label, category_filter, account_filter, start_date, end_date,
                only_new, only_duplicates, **kwargs):
        ctx = click.get_current_context()
        period_flags = {period: kwargs.pop(period.replace("-", "_")) for period in PERIODS}
        start, end = resolve_cli_date_range(
            ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
        )

        try:
            account = ALL_ACCOUNTS
            if account_filter:
                account = resolve_account(ctx.obj["registry"], account_filter)
            search_filter = SearchFilter(
                label=label,
                category=Category(category_filter.lower()) if category_filter else ALL_CATEGORIES,
                account=account,
                start_date=start,
                end_date=end,
                only_new=only_new,
                only_duplicates=only_duplicates,
            )
        except DomainError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)

        return command(*args, search_filter=search_filter, **kwargs)

    for option in reversed(FILTER_OPTIONS):
        wrapper = option(wrapper)
    return wrapper


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        click.echo(
            f"Error: Only one period option can be specified at a time "
            f"(got {', '.join('--' + p for p in selected)}).",
            err=True,
        )
        ctx.exit(1)

    if selected and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if selected:
        return get_date_range(selected[0])

    bounds = []
    for name, value in (("start", start_date), ("end", end_date)):
        parsed = None
        if value:
            try:
                parsed = parse_date(value)
            except ValueError as e:
                click.echo(f"Error: Invalid {name} date: {e}", err=True)
                ctx.exit(1)
        bounds.append(parsed)
    return bounds[0], bounds[1]
