"""Functional tests for ALMANAC's CLI help and version output.

This suite verifies:
- The long-form `HELP` prose from `almanac.entrypoints.cli.main` is rendered on
  `--help` (compared after stripping ANSI and normalizing whitespace).
- The help frame lists the `db` and `calendars` command groups.
- Each group explains its own subcommands.

Notes:
- Help text can be reflowed by Click; `_normalize()` collapses whitespace so the
  comparison is robust to wrapping.
"""

from __future__ import annotations

import re
from textwrap import dedent
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

import almanac
from almanac.entrypoints.cli import main

if TYPE_CHECKING:
    from click.testing import Result

# pylint: disable=magic-value-comparison

ANSI_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")  # strip SGR styling only


def _normalize(s: str) -> str:
    """Return `s` with leading/trailing space trimmed and internal whitespace collapsed."""
    return re.sub(r"\s+", " ", s.strip())


def _plain(result: Result) -> str:
    return ANSI_RE.sub("", result.output)


def _assert_help_displayed(result: Result):
    """Assert that help output contains the project HELP text and expected sections."""
    text = _plain(result)
    expected_message = _normalize(dedent(main.HELP))
    assert expected_message
    assert expected_message in _normalize(text), "HELP text not rendered."
    assert "Usage:" in text
    assert "Options:" in text
    assert "Commands:" in text
    assert re.search(r"^\s+calendars\s+Calendar management commands\.", text, re.M)
    assert re.search(r"^\s+db\s+Database management commands\.", text, re.M)


# ============================================================================
#                           Tests
# ============================================================================


class TestNewAlmanacUser:
    """A new user of ALMANAC, unfamiliar with the tool, tries to get help."""

    @staticmethod
    @pytest.mark.parametrize("args", ([], ["-h"], ["--help"]))
    def test_almanac_help_output(args: list[str]):
        """Help is shown with no args, -h or --help.

        Given ALMANAC is available on the PATH
        When `almanac` is invoked with no args, `-h`, or `--help`
        Then the long HELP prose and the command groups appear
        """
        runner = CliRunner()
        result = runner.invoke(main.almanac, args)

        _assert_help_displayed(result)

    @staticmethod
    def test_almanac_version_output():
        """User runs --version and sees the version string."""
        runner = CliRunner()
        result = runner.invoke(main.almanac, ["--version"])

        assert result.exit_code == 0
        assert almanac.__version__ in result.output

    @staticmethod
    def test_calendars_help_lists_subcommands():
        """`almanac calendars --help` names every calendar operation."""
        runner = CliRunner()
        result = runner.invoke(main.almanac, ["calendars", "--help"])

        assert result.exit_code == 0, result.output
        text = _plain(result)
        for name in ("create", "update", "show", "list", "delete", "purge"):
            assert re.search(rf"^\s+{name}\s+\S", text, re.M), name

    @staticmethod
    def test_list_help_explains_paging():
        """The list command documents its paging options and bounds."""
        runner = CliRunner()
        result = runner.invoke(main.almanac, ["calendars", "list", "--help"])

        assert result.exit_code == 0, result.output
        text = _normalize(_plain(result))
        assert "--page" in text
        assert "--size" in text
        assert "clamped to 1..100 (default 10)" in text
