"""Tests for CLI filter helpers."""

import click
import pytest

from bankledger.cli.filters import resolve_cli_date_range
from bankledger.utils.date_parser import get_date_range, parse_date


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_cli_date_range_rejects_multiple_periods(capsys):
    period_flags = {"this-month": True, "last-year": True}

    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_cli_date_range(_ctx(), start_date=None, end_date=None, period_flags=period_flags)

    assert excinfo.value.exit_code == 1
    assert "--this-month, --last-year" in capsys.readouterr().err


def test_resolve_cli_date_range_rejects_period_with_dates(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(
            _ctx(), start_date=None, end_date="2024-01-31", period_flags={"last-week": True}
        )

    assert "cannot be combined" in capsys.readouterr().err


def test_resolve_cli_date_range_returns_period_range():
    start, end = resolve_cli_date_range(
        _ctx(), start_date=None, end_date=None, period_flags={"last-month": True}
    )

    assert (start, end) == get_date_range("last-month")


def test_resolve_cli_date_range_parses_explicit_dates():
    start, end = resolve_cli_date_range(
        _ctx(), start_date="2024-01-01", end_date="last month", period_flags={}
    )

    assert start == parse_date("2024-01-01")
    assert end == parse_date("last month")


def test_resolve_cli_date_range_open_ended():
    assert resolve_cli_date_range(
        _ctx(), start_date=None, end_date=None, period_flags={"this-week": False}
    ) == (None, None)


def test_resolve_cli_date_range_invalid_date(capsys):
    with pytest.raises(click.exceptions.Exit):
        resolve_cli_date_range(
            _ctx(), start_date="not a date at all", end_date=None, period_flags={}
        )

    assert "Invalid start date" in capsys.readouterr().err
