"""Tests for the installed-package report."""

import io

import pytest
from rich.console import Console

from gitdeps.core.pip.fake import FakePip
from gitdeps.core.pip.types import InstalledPackage
from gitdeps.core.reporter import format_installed_table, report_installed


def make_console() -> tuple[Console, io.StringIO]:
    buffer = io.StringIO()
    return Console(file=buffer, width=120, color_system=None), buffer


def test_report_lists_installed_packages() -> None:
    pip = FakePip(installed={"requests": "2.31.0", "click": "8.1.7"})
    console, buffer = make_console()

    packages = report_installed(pip, console)

    assert packages == [
        InstalledPackage(name="click", version="8.1.7"),
        InstalledPackage(name="requests", version="2.31.0"),
    ]
    output = buffer.getvalue()
    assert "requests" in output
    assert "2.31.0" in output
    assert "2 packages installed" in output


def test_listing_failure_is_not_fatal(capsys: pytest.CaptureFixture[str]) -> None:
    pip = FakePip(list_error="pip list exploded")
    console, buffer = make_console()

    assert report_installed(pip, console) is None
    assert buffer.getvalue() == ""
    err = capsys.readouterr().err
    assert "Could not list installed packages" in err
    assert "pip list exploded" in err


def test_format_installed_table_row_count() -> None:
    table = format_installed_table([InstalledPackage("a", "1"), InstalledPackage("b", "2")])

    assert table.row_count == 2
