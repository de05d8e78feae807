import pytest

from src.domain.services.symbols import ExchangeSymbols, normalize_symbol


class TestNormalizeSymbol:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("LQ45", "^JKLQ45"),
            ("LQ45.JK", "^JKLQ45"),
            ("IDX:LQ45", "^JKLQ45"),
            ("JKSE", "^JKSE"),
            ("^JKSE", "^JKSE"),
            ("^LQ45", "^LQ45"),
            ("BBCA", "BBCA.JK"),
            ("TEBE.JK", "TEBE.JK"),
            (" bbri ", "bbri.JK"),
        ],
    )
    def test_rules(self, raw, expected):
        assert normalize_symbol(raw) == expected

    def test_any_dot_counts_as_qualified(self):
        """A foreign suffix is left alone rather than double-suffixed."""
        assert normalize_symbol("BRK.B") == "BRK.B"

    def test_unknown_prefixed_alias_is_suffixed(self):
        assert normalize_symbol("IDX:BBCA") == "IDX:BBCA.JK"

    @pytest.mark.parametrize(
        "raw",
        ["LQ45", "LQ45.JK", "IDX:LQ45", "JKSE", "^JKSE", "BBCA", "BBCA.JK", "IDX:BBCA", "", "x y"],
    )
    def test_idempotent(self, raw):
        once = normalize_symbol(raw)
        assert normalize_symbol(once) == once

    def test_other_exchange(self):
        tse = ExchangeSymbols(
            suffix=".T",
            composite_alias="N225",
            composite_symbol="^N225",
            lq45_aliases=frozenset(),
            lq45_symbol="",
        )
        assert tse.normalize("7203") == "7203.T"
        assert tse.normalize("N225") == "^N225"
