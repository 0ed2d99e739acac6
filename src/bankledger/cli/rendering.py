"""Console rendering of entries and totals."""

import click


def format_amount(amount) -> str:
    return f"{amount:,.2f}" if amount else ""


def echo_entries(entries, verbose: bool = False) -> None:
    """Print entries as a compact table, or one block per entry when verbose."""
    if verbose:
        click.echo("=" * 110)
        for entry in entries:
            flags = [name for name, is_set in (("new", entry.new), ("duplicate", entry.duplicate)) if is_set]
            click.echo(f"\n{entry.label}")
            click.echo(f"  Account: {entry.account.label} [{entry.account.code}]")
            click.echo(f"  Operation date: {entry.operation_date}")
            click.echo(f"  Value date: {entry.value_date}")
            click.echo(f"  Debit: {format_amount(entry.debit) or '-'}")
            click.echo(f"  Credit: {format_amount(entry.credit) or '-'}")
            click.echo(f"  Category: {entry.category.value}")
            if entry.description:
                click.echo(f"  Description: {entry.description}")
            if flags:
                click.echo(f"  Flags: {', '.join(flags)}")
            click.echo("-" * 110)
        return

    click.echo("-" * 110)
    click.echo(
        f"{'Date':<11} {'Account':<22} {'Label':<32} {'Debit':>10} {'Credit':>10} "
        f"{'Category':<20} {'':<2}"
    )
    click.echo("-" * 110)
    for entry in entries:
        marker = ("D" if entry.duplicate else "") + ("N" if entry.new else "")
        click.echo(
            f"{str(entry.operation_date):<11} {entry.account.label[:22]:<22} "
            f"{entry.label[:32]:<32} {format_amount(entry.debit):>10} "
            f"{format_amount(entry.credit):>10} {entry.category.value:<20} {marker:<2}"
        )


def echo_totals(rows) -> None:
    click.echo(f"\n{'Account':<40} {'Total':>14}")
    click.echo("-" * 55)
    for row in rows:
        click.echo(f"{row.label:<40} {row.total:>14,.2f}")
