"""Tests for CLI reference date and period helpers."""

from datetime import date

import click
import pytest

from cashpanel.cli.date_filters import resolve_month, resolve_today


def _ctx() -> click.Context:
    return click.Context(click.Command("test"))


def test_resolve_today_defaults_to_system_date():
    assert resolve_today(_ctx(), None) == date.today()


def test_resolve_today_parses_value():
    assert resolve_today(_ctx(), "2024-03-15") == date(2024, 3, 15)


def test_resolve_today_rejects_garbage(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_today(_ctx(), "not a date at all")

    assert excinfo.value.exit_code == 1
    assert "Invalid --today" in capsys.readouterr().err


def test_resolve_month_defaults_to_reference_month():
    assert resolve_month(_ctx(), month=None, year=None, today=date(2024, 3, 15)) == (3, 2024)
    assert resolve_month(_ctx(), month=1, year=None, today=date(2024, 3, 15)) == (1, 2024)


def test_resolve_month_rejects_invalid_month(capsys):
    with pytest.raises(click.exceptions.Exit) as excinfo:
        resolve_month(_ctx(), month=13, year=2024, today=date(2024, 3, 15))

    assert excinfo.value.exit_code == 1
    assert "Invalid month" in capsys.readouterr().err
