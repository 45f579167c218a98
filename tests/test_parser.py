"""Tests for the option parser (cli/parser.py).

Coverage:
* Switch-string notation → OptionSpec.
* Storing values under every option name when no handler is given.
* Handler dispatch (with and without a value parameter).
* Parse failures raise ArgumentParseError and print usage.
"""

from __future__ import annotations

from typing import Any

import pytest

from mainline.cli.parser import OptionParser, parse_switches
from mainline.core.options import OptionStore
from mainline.exceptions import ArgumentParseError


# ---------------------------------------------------------------------------
# parse_switches
# ---------------------------------------------------------------------------

class TestParseSwitches:
    def test_plain_switch(self) -> None:
        spec = parse_switches(["--switch"])
        assert spec.option_strings == ("--switch",)
        assert spec.keys == ("switch",)
        assert not spec.takes_value
        assert not spec.negatable

    def test_flag_with_value_and_alias_and_docs(self) -> None:
        spec = parse_switches(["--flag FLAG", "-f", "Some documentation string"])
        assert spec.option_strings == ("--flag", "-f")
        assert spec.keys == ("flag", "f")
        assert spec.canonical_key == "flag"
        assert spec.metavar == "FLAG"
        assert spec.help == "Some documentation string"

    def test_equals_notation(self) -> None:
        spec = parse_switches(["--retries=N"])
        assert spec.option_strings == ("--retries",)
        assert spec.metavar == "N"

    def test_optional_value(self) -> None:
        spec = parse_switches(["--color [WHEN]"])
        assert spec.metavar == "WHEN"
        assert spec.value_optional

    def test_negatable(self) -> None:
        spec = parse_switches(["--[no-]negatable"])
        assert spec.option_strings == ("--negatable", "--no-negatable")
        assert spec.keys == ("negatable",)
        assert spec.negatable

    def test_dashes_become_underscores_in_keys(self) -> None:
        spec = parse_switches(["--dry-run", "-n"])
        assert spec.keys == ("dry_run", "n")

    def test_short_only_switch(self) -> None:
        spec = parse_switches(["-v"])
        assert spec.keys == ("v",)

    def test_explicit_help_wins_over_docs(self) -> None:
        spec = parse_switches(["--flag", "from docs"], help="explicit")
        assert spec.help == "explicit"

    def test_percent_in_docs_is_escaped_for_argparse(self) -> None:
        spec = parse_switches(["--done", "Mark 100%"])
        assert spec.help == "Mark 100%%"

    def test_explicit_help_keeps_argparse_placeholders(self) -> None:
        spec = parse_switches(["--flag"], help="%(default)s")
        assert spec.help == "%(default)s"

    def test_docs_only_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="no switch declared"):
            parse_switches(["just documentation"])

    def test_negatable_with_value_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="negatable"):
            parse_switches(["--[no-]color WHEN"])


# ---------------------------------------------------------------------------
# OptionParser.parse
# ---------------------------------------------------------------------------

class TestOptionParser:
    def test_returns_positionals_in_order(self) -> None:
        parser = OptionParser(prog="test-app").on("--switch")
        options = OptionStore()

        leftovers = parser.parse(["a", "--switch", "b", "c"], options)
        assert leftovers == ["a", "b", "c"]
        assert options == {"switch": True}

    def test_no_arguments(self) -> None:
        parser = OptionParser(prog="test-app")
        assert parser.parse([], OptionStore()) == []

    def test_value_stored_under_every_name(self) -> None:
        parser = OptionParser(prog="test-app").on("--flag FLAG", "-f")
        options = OptionStore()

        parser.parse(["-f", "value"], options)
        assert options == {"flag": "value", "f": "value"}

    def test_unset_options_are_absent(self) -> None:
        parser = OptionParser(prog="test-app").on("--flag FLAG")
        options = OptionStore()

        parser.parse([], options)
        assert "flag" not in options
        assert options.get("flag") is None

    def test_optional_value(self) -> None:
        parser = OptionParser(prog="test-app").on("--color [WHEN]")

        bare = OptionStore()
        parser.parse(["--color"], bare)
        assert bare["color"] is True

        given = OptionStore()
        parser.parse(["--color", "always"], given)
        assert given["color"] == "always"

    def test_handler_receives_value(self) -> None:
        received: list[Any] = []
        parser = OptionParser(prog="test-app")
        parser.on("--flag FLAG", handler=received.append)
        parser.on("--[no-]color", handler=received.append)
        options = OptionStore()

        parser.parse(["--flag", "value", "--no-color"], options)
        assert received == ["value", False]
        assert options == {}

    def test_handler_without_parameters_is_called_bare(self) -> None:
        calls: list[str] = []
        parser = OptionParser(prog="test-app")
        parser.on("--ping", handler=lambda: calls.append("pong"))

        parser.parse(["--ping"], OptionStore())
        assert calls == ["pong"]

    def test_unknown_option_raises(self, capsys: pytest.CaptureFixture[str]) -> None:
        parser = OptionParser(prog="test-app").on("--switch")

        with pytest.raises(ArgumentParseError, match="--invalid"):
            parser.parse(["--invalid"], OptionStore())
        err = capsys.readouterr().err
        assert "usage: test-app" in err
        assert "test-app: error:" in err

    def test_missing_value_raises(self) -> None:
        parser = OptionParser(prog="test-app").on("--flag FLAG")

        with pytest.raises(ArgumentParseError):
            parser.parse(["--flag"], OptionStore())

    def test_choices(self) -> None:
        parser = OptionParser(prog="test-app").on("--mode MODE", choices=["fast", "slow"])
        options = OptionStore()

        parser.parse(["--mode", "fast"], options)
        assert options["mode"] == "fast"
        with pytest.raises(ArgumentParseError):
            parser.parse(["--mode", "medium"], OptionStore())

    def test_abbreviations_are_not_accepted(self) -> None:
        parser = OptionParser(prog="test-app").on("--verbose")

        with pytest.raises(ArgumentParseError):
            parser.parse(["--verb"], OptionStore())

    def test_help_text_lists_options(self) -> None:
        parser = OptionParser(prog="test-app", description="Tests things.")
        parser.on("--flag FLAG", "-f", "Some documentation string")

        text = str(parser)
        assert "Tests things." in text
        assert "--flag" in text
        assert "FLAG" in text
        assert "Some documentation string" in text
        assert parser.prog == "test-app"

    def test_percent_in_docs_renders_literally(self) -> None:
        parser = OptionParser(prog="test-app")
        parser.on("--done", "Mark 100%")
        parser.on("--share N", "Share of traffic in % of total")

        text = parser.format_help()
        assert "Mark 100%" in text
        assert "Mark 100%%" not in text
        assert "in % of total" in text

    @pytest.mark.parametrize(
        "argv",
        [["--flag", "-x"], ["-f", "-x"], ["--flag=-x"], ["--flag", "-1"]],
    )
    def test_value_may_start_with_a_dash(self, argv: list[str]) -> None:
        parser = OptionParser(prog="test-app").on("--flag FLAG", "-f")
        options = OptionStore()

        assert parser.parse([*argv, "rest"], options) == ["rest"]
        assert options["flag"] == argv[-1].removeprefix("--flag=")

    def test_help_exits_zero(self) -> None:
        parser = OptionParser(prog="test-app")

        with pytest.raises(SystemExit) as exc_info:
            parser.parse(["--help"], OptionStore())
        assert exc_info.value.code == 0
