"""test_severity.py - Unit tests for Severity.

Covers:
    - Declaration order is the rank order, START between INFO and SUCCESS
    - Fixed 3-character codes
    - Color table, identity for OFF
    - coerce() from names, codes and ranks
"""

import pytest
from colorama import Fore, Style

from wherelog.severity import Severity


class TestOrder:
    def test_total_order_follows_declaration(self):
        """debug < info < start < success < warning < error < off."""
        ordered = [
            Severity.DEBUG,
            Severity.INFO,
            Severity.START,
            Severity.SUCCESS,
            Severity.WARNING,
            Severity.ERROR,
            Severity.OFF,
        ]
        assert list(Severity) == ordered
        assert [level.rank for level in ordered] == list(range(7))
        for lower, higher in zip(ordered, ordered[1:]):
            assert lower.rank < higher.rank
            assert lower < higher

    def test_start_ranks_between_info_and_success(self):
        assert Severity.INFO < Severity.START < Severity.SUCCESS

    def test_off_is_still_comparable(self):
        assert Severity.OFF >= Severity.ERROR
        assert not Severity.DEBUG >= Severity.OFF


class TestCodes:
    @pytest.mark.parametrize(
        "level, code",
        [
            (Severity.DEBUG, "DBG"),
            (Severity.INFO, "INF"),
            (Severity.START, " FN"),
            (Severity.SUCCESS, "SCC"),
            (Severity.WARNING, "WRN"),
            (Severity.ERROR, "ERR"),
        ],
    )
    def test_code_is_three_characters(self, level, code):
        assert level.code == code
        assert len(level.code) == 3

    def test_off_has_empty_code(self):
        assert Severity.OFF.code == ""

    def test_str_is_code(self):
        assert str(Severity.WARNING) == "WRN"


class TestColorize:
    def test_error_is_red(self):
        assert Severity.ERROR.colorize("boom") == f"{Fore.RED}boom{Style.RESET_ALL}"

    def test_each_level_has_its_own_color(self):
        painted = {level.colorize("x") for level in Severity if level is not Severity.OFF}
        assert len(painted) == 6

    def test_off_is_identity(self):
        assert Severity.OFF.colorize("plain") == "plain"


class TestCoerce:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("debug", Severity.DEBUG),
            ("WARNING", Severity.WARNING),
            (" error ", Severity.ERROR),
            ("SCC", Severity.SUCCESS),
            ("fn", Severity.START),
            (1, Severity.INFO),
            (Severity.OFF, Severity.OFF),
        ],
    )
    def test_coerce_accepts_names_codes_and_ranks(self, value, expected):
        assert Severity.coerce(value) is expected

    @pytest.mark.parametrize("value", ["verbose", 42, ""])
    def test_coerce_rejects_unknown_levels(self, value):
        with pytest.raises(ValueError):
            Severity.coerce(value)
