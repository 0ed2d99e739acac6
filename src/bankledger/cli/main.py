"""Main CLI entry point."""

import click

from bankledger.config import load_config, resolve_statements_dir
from bankledger.database.factories import create_repository
from bankledger.domain.errors import DomainError
from bankledger.domain.ledger_service import LedgerService
from bankledger.cli.error_handling import handle_domain_error
from bankledger.utils.logging_setup import setup_logging

# Import and register all commands at module level
from bankledger.cli.commands import (
    accounts,
    import_cmd,
    view,
    summary,
    edit,
)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Account configuration file (overrides BANKLEDGER_CONFIG)",
    envvar="BANKLEDGER_CONFIG",
)
@click.option(
    "--ledger",
    "ledger_path",
    type=click.Path(dir_okay=False),
    help="Ledger file, .json or .db (overrides BANKLEDGER_LEDGER_PATH)",
    envvar="BANKLEDGER_LEDGER_PATH",
)
@click.option(
    "--statements-dir",
    type=click.Path(file_okay=False),
    help="Directory holding one statement folder per account (overrides BANKLEDGER_STATEMENTS_DIR)",
    envvar="BANKLEDGER_STATEMENTS_DIR",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default="warning",
    show_default=True,
    help="Logging level",
)
@click.pass_context
def cli(ctx, config_path, ledger_path, statements_dir, debug: bool, log_level: str):
    """Bankledger - bank statement ledger.

    Import account statements, flag transactions that were already recorded,
    categorize them and follow account totals and monthly balances.
    """
    ctx.ensure_object(dict)

    # Load configuration and ledger only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is None:
        return

    setup_logging(debug=debug, log_level=log_level)
    try:
        registry = load_config(config_path)
        service = LedgerService(create_repository(ledger_path), registry)
        service.load()
    except (DomainError, OSError) as e:
        handle_domain_error(ctx, e)

    ctx.obj["registry"] = registry
    ctx.obj["ledger_service"] = service
    ctx.obj["statements_dir"] = resolve_statements_dir(statements_dir)


# Register all commands
accounts.register_commands(cli)
import_cmd.register_commands(cli)
view.register_commands(cli)
summary.register_commands(cli)
edit.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
