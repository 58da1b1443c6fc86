"""Tests for core data models."""

import pytest

from schwingen.errors import ValidationError
from schwingen.models import Competitor, Pairing, RoundResult, parse_result


class TestParseResult:
    def test_single_score(self):
        result = parse_result("9.75")
        assert result == RoundResult(high=9.75, low=9.75, display="9.75")

    def test_single_score_is_formatted(self):
        assert parse_result("10").display == "10.00"

    def test_split_score(self):
        result = parse_result("10.00 / 9.75")
        assert result.high == 10.00
        assert result.low == 9.75
        assert result.display == "10.00 / 9.75"

    def test_split_score_without_spaces(self):
        result = parse_result("9.00/8.75")
        assert (result.high, result.low) == (9.00, 8.75)
        assert result.display == "9.00 / 8.75"

    def test_decimal_comma(self):
        assert parse_result("8,75").high == 8.75

    def test_empty(self):
        with pytest.raises(ValidationError, match="Missing result"):
            parse_result("")

    def test_none(self):
        with pytest.raises(ValidationError):
            parse_result(None)

    def test_not_a_number(self):
        with pytest.raises(ValidationError, match="Invalid result"):
            parse_result("Sieg")

    def test_too_many_parts(self):
        with pytest.raises(ValidationError):
            parse_result("10.00 / 9.75 / 9.00")

    def test_negative(self):
        with pytest.raises(ValidationError):
            parse_result("-9.75")


class TestCompetitor:
    def setup_method(self):
        self.competitor = Competitor.create("7", "Giger Samuel", 6, decoration="***", base_score=38.5)

    def test_create_has_empty_rounds(self):
        assert self.competitor.round_results == (None,) * 6
        assert self.competitor.total == 38.5

    def test_total_adds_high_scores(self):
        c = self.competitor.with_result(5, parse_result("10.00 / 9.75"))
        c = c.with_result(6, parse_result("8.75"))
        assert c.total == 38.5 + 10.00 + 8.75

    def test_total_follows_cleared_slot(self):
        c = self.competitor.with_result(5, parse_result("9.75"))
        assert c.with_result(5, None).total == 38.5

    def test_with_result_leaves_original_untouched(self):
        updated = self.competitor.with_result(1, parse_result("9.00"))
        assert self.competitor.result_for(1) is None
        assert updated.result_for(1).high == 9.00

    def test_has_result(self):
        c = self.competitor.with_result(3, parse_result("8.50"))
        assert c.has_result(3)
        assert not c.has_result(4)

    def test_round_out_of_range(self):
        with pytest.raises(ValidationError, match="out of range"):
            self.competitor.result_for(7)
        with pytest.raises(ValidationError):
            self.competitor.with_result(0, None)

    def test_display_name(self):
        assert self.competitor.display_name == "Giger Samuel ***"
        assert Competitor.create("1", "Orlik Armon", 6).display_name == "Orlik Armon"

    def test_from_dict_recomputes_total(self):
        data = self.competitor.with_result(1, parse_result("9.75")).to_dict()
        data["total"] = 999
        restored = Competitor.from_dict(data)
        assert restored.total == 38.5 + 9.75
        assert restored.decoration == "***"


class TestPairing:
    def test_clear(self):
        pairing = Pairing(slot_id=2)
        pairing.first.competitor_id = "1"
        pairing.second.result = "9.75"
        pairing.error = "Fill in all fields"
        pairing.clear()
        assert pairing.first.competitor_id == ""
        assert pairing.second.result == ""
        assert pairing.error is None
        assert pairing.slot_id == 2

    def test_entry_complete(self):
        pairing = Pairing(slot_id=0)
        pairing.first.competitor_id = "1"
        assert not pairing.first.is_complete
        pairing.first.result = "9.00"
        assert pairing.first.is_complete
