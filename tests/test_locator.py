"""
Tests for JVM discovery through jps.
"""

import pytest

from jstat_exporter.system.locator import (
    locate_target,
    parse_jps_output,
    select_target,
)
from jstat_exporter.validation import TargetNotFoundError

from conftest import jps_runner


class TestParseJpsOutput:

    def test_pairs_are_parsed_in_order(self):
        assert parse_jps_output("1234 MyApp\n5678 Jps\n") == [
            ("1234", "MyApp"),
            ("5678", "Jps"),
        ]

    @pytest.mark.parametrize("line", [
        "1234",
        "1234 -- process information unavailable",
        "",
        "1234  MyApp",
    ])
    def test_lines_without_exactly_two_fields_are_ignored(self, line):
        assert parse_jps_output(line + "\n") == []


class TestSelectTarget:

    def test_named_target_matches_exactly(self):
        entries = [("1", "MyAppServer"), ("2", "MyApp")]
        assert select_target(entries, "MyApp") == "2"

    def test_without_name_first_eligible_entry_wins(self):
        entries = [("1", "Jps"), ("2", "Jstat"), ("3", "Other"), ("4", "MyApp")]
        assert select_target(entries) == "3"

    def test_tools_are_never_selected_even_by_name(self):
        assert select_target([("1", "Jps")], "Jps") is None

    def test_no_match_returns_none(self):
        assert select_target([("1", "Other")], "MyApp") is None


class TestLocateTarget:

    def test_finds_named_target(self):
        runner = jps_runner("1234 MyApp\n5678 Jps\n")
        assert locate_target("MyApp", runner=runner) == "1234"

    def test_first_jvm_when_no_name_given(self):
        runner = jps_runner("5678 Jps\n1234 MyApp\n")
        assert locate_target(None, runner=runner) == "1234"

    def test_runs_configured_jps_binary(self):
        seen = []

        def runner(args, timeout=None):
            seen.append(args)
            return 0, "1 MyApp\n", ""

        locate_target("MyApp", jps_path="/opt/jdk/bin/jps", runner=runner)
        assert seen == [["/opt/jdk/bin/jps"]]

    def test_missing_target_raises(self):
        runner = jps_runner("5678 Jps\n")
        with pytest.raises(TargetNotFoundError) as exc_info:
            locate_target("MyApp", runner=runner)
        assert exc_info.value.target == "MyApp"
        assert "MyApp" in str(exc_info.value)

    def test_only_tools_running_raises_without_name(self):
        with pytest.raises(TargetNotFoundError):
            locate_target(None, runner=jps_runner("1 Jps\n2 Jstat\n"))

    def test_jps_not_runnable_raises(self):
        runner = jps_runner("", return_code=-1, stderr="Error: Command not found 'jps'")
        with pytest.raises(TargetNotFoundError, match="Command not found"):
            locate_target("MyApp", runner=runner)

    def test_nonzero_exit_still_uses_listing(self):
        runner = jps_runner("1234 MyApp\n", return_code=1, stderr="partial")
        assert locate_target("MyApp", runner=runner) == "1234"
