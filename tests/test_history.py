"""Tests for the undo history."""

from tests.conftest import make_competitors

from schwingen.history import History
from schwingen.models import parse_result


class TestHistory:
    def setup_method(self):
        self.history = History()
        self.live = make_competitors([("1", 0, None), ("2", 0, None)])

    def test_empty_pop(self):
        assert self.history.pop() is None
        assert len(self.history) == 0

    def test_push_pop(self):
        self.history.push(self.live)
        assert len(self.history) == 1
        assert self.history.pop() == self.live
        assert len(self.history) == 0

    def test_snapshot_unaffected_by_live_changes(self):
        self.history.push(self.live)
        self.live["1"] = self.live["1"].with_result(1, parse_result("10.00"))
        del self.live["2"]
        snapshot = self.history.pop()
        assert snapshot["1"].result_for(1) is None
        assert "2" in snapshot

    def test_last_in_first_out(self):
        self.history.push(self.live)
        self.live["1"] = self.live["1"].with_result(1, parse_result("9.00"))
        self.history.push(self.live)
        assert self.history.pop()["1"].total == 9.00
        assert self.history.pop()["1"].total == 0

    def test_iterates_oldest_first(self):
        self.history.push({})
        self.history.push(self.live)
        assert [len(s) for s in self.history] == [0, 2]

    def test_restore_from_list(self):
        history = History([self.live, {}])
        assert len(history) == 2
        assert history.pop() == {}
