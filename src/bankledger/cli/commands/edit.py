"""Bulk edit commands: categorize, describe, toggle duplicates and delete."""

import click

from bankledger.cli.error_handling import handle_domain_error
from bankledger.cli.filters import CATEGORY_CHOICES, filter_options
from bankledger.cli.rendering import echo_entries
from bankledger.domain.entities import Category
from bankledger.domain.errors import DomainError
from bankledger.domain.ledger import apply_edits, toggle_duplicate as flip_duplicate
from bankledger.domain.search import SearchService

MAX_UPDATE_WITHOUT_CONFIRMATION = 5

yes_option = click.option(
    "--yes", "-y", is_flag=True, help="Do not ask for confirmation on large selections"
)


def _select(ctx, search_filter):
    """Return the entries matching the filter, or exit when there are none."""
    ledger = ctx.obj["ledger_service"].ledger
    entries = SearchService(ledger).search(search_filter).entries
    if not entries:
        click.echo("No transactions found.")
        ctx.exit(0)
    return list(entries)


def _confirm(entries, action: str, yes: bool) -> None:
    if len(entries) > MAX_UPDATE_WITHOUT_CONFIRMATION and not yes:
        click.confirm(f"You are about to {action} {len(entries)} transactions. Proceed?", abort=True)


def _apply(ctx, entries, mutator) -> list:
    ledger_service = ctx.obj["ledger_service"]
    try:
        updated = ledger_service.ledger.update(entries, mutator)
        ledger_service.save()
    except (DomainError, OSError) as e:
        handle_domain_error(ctx, e)
    return updated


@click.group("edit")
def edit_group():
    """Edit the transactions selected by filters."""
    pass


@edit_group.command("categorize")
@click.argument("category", type=click.Choice(CATEGORY_CHOICES, case_sensitive=False))
@filter_options
@yes_option
@click.pass_context
def categorize(ctx, category: str, search_filter, yes: bool):
    """Set CATEGORY on every selected transaction."""
    entries = _select(ctx, search_filter)
    _confirm(entries, "categorize", yes)
    updated = _apply(ctx, entries, apply_edits(category=Category(category.lower())))
    click.echo(f"Categorized {len(updated)} transactions as {category.lower()}")


@edit_group.command("describe")
@click.argument("description")
@click.option("--force", is_flag=True, help="Overwrite existing descriptions too")
@filter_options
@yes_option
@click.pass_context
def describe(ctx, description: str, force: bool, search_filter, yes: bool):
    """Set DESCRIPTION on selected transactions that have none (all with --force)."""
    if not description.strip():
        click.echo("Error: Description cannot be empty", err=True)
        ctx.exit(1)
    entries = _select(ctx, search_filter)
    _confirm(entries, "describe", yes)
    updated = _apply(ctx, entries, apply_edits(description=description, force_description=force))
    changed = sum(1 for old, new in zip(entries, updated) if old.description != new.description)
    click.echo(f"Described {changed} of {len(updated)} transactions")


@edit_group.command("toggle-duplicate")
@filter_options
@yes_option
@click.pass_context
def toggle_duplicate(ctx, search_filter, yes: bool):
    """Flip the duplicate flag of every selected transaction."""
    entries = _select(ctx, search_filter)
    _confirm(entries, "switch the duplicate flag of", yes)
    updated = _apply(ctx, entries, flip_duplicate)
    flagged = sum(1 for entry in updated if entry.duplicate)
    click.echo(
        f"Switched {len(updated)} transactions: {flagged} now duplicate, "
        f"{len(updated) - flagged} not duplicate"
    )


@edit_group.command("delete")
@filter_options
@click.option("--confirm", "confirmation", default="", help="Type DELETE to confirm")
@click.pass_context
def delete(ctx, search_filter, confirmation: str):
    """Delete every selected transaction (requires --confirm DELETE)."""
    entries = _select(ctx, search_filter)
    if confirmation != "DELETE":
        echo_entries(entries)
        click.echo(
            f"Error: Refusing to delete {len(entries)} transactions without --confirm DELETE",
            err=True,
        )
        ctx.exit(1)

    ledger_service = ctx.obj["ledger_service"]
    try:
        removed = ledger_service.ledger.delete(entries)
        ledger_service.save()
    except (DomainError, OSError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted {removed} transactions")


def register_commands(cli):
    """Register edit commands with main CLI."""
    cli.add_command(edit_group)
