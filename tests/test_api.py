"""Tests for the festival serverless function."""

import json
from unittest.mock import MagicMock

import pytest

from api.festival import handler

ROSTER_TEXT = "1, Giger Samuel ***\n2, Orlik Armon *\n3, Wicki Joel **\n4, Schlegel Werner *\n"
STANDING_TEXT = "38.75, Giger Samuel ***\n38.50, Orlik Armon *\n37.75, Wicki Joel **\n"


def make_request(body, method="POST"):
    request = MagicMock()
    request.method = method
    request.body = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    return request


def call(body, method="POST"):
    response = handler(make_request(body, method))
    payload = json.loads(response["body"]) if response["body"] else None
    return response["statusCode"], payload


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("SCHWINGEN_DATA_DIR", str(tmp_path))
    return tmp_path


def start(festival="Test", **fields):
    body = {"festival": festival, "action": "start", "roster": ROSTER_TEXT}
    body.update(fields)
    return call(body)


def save_bout(festival="Test", slot=0, first=("1", "9.75"), second=("2", "8.75")):
    for side, (competitor_id, result) in ((1, first), (2, second)):
        call({
            "festival": festival, "action": "pairing", "slot": slot,
            "side": side, "id": competitor_id, "result": result,
        })
    return call({"festival": festival, "action": "save_pairing", "slot": slot})


class TestRequestHandling:

    def test_options_preflight(self):
        response = handler(make_request(b"", method="OPTIONS"))
        assert response["statusCode"] == 204
        assert "POST" in response["headers"]["Access-Control-Allow-Methods"]

    def test_get_not_allowed(self):
        status, payload = call(b"", method="GET")
        assert status == 405

    def test_invalid_json(self):
        status, payload = call(b"{nope")
        assert status == 400
        assert "Invalid JSON" in payload["error"]

    def test_body_must_be_object(self):
        status, payload = call([1, 2])
        assert status == 400

    def test_options(self):
        status, payload = call({"action": "options"})
        assert status == 200
        assert payload["festival_types"] == ["normal", "esaf"]
        assert "10.00 / 9.75" in payload["result_options"]
        assert payload["line_menus"]["esaf"]["kranz"] == [75.00, 74.75, 74.50]

    def test_missing_festival(self):
        status, payload = call({"action": "standings"})
        assert status == 400
        assert "festival" in payload["error"]

    def test_unknown_festival(self):
        status, payload = call({"festival": "Nowhere", "action": "standings"})
        assert status == 404

    def test_unknown_action(self):
        start()
        status, payload = call({"festival": "Test", "action": "shuffle"})
        assert status == 400
        assert "shuffle" in payload["error"]

    def test_missing_field(self):
        start()
        status, payload = call({"festival": "Test", "action": "record", "round": 1})
        assert status == 400
        assert "Missing or invalid field" in payload["error"]


class TestStart:

    def test_start_round_1(self):
        status, payload = start()
        assert status == 200
        assert payload["festival"] == "Test"
        assert payload["current_round"] == 1
        assert payload["standing"] == []
        assert payload["kranz_bounds"] == {"min": 1, "max": 1}
        assert len(payload["pairings"]) == 4
        assert payload["can_undo"] is False

    def test_start_later_round(self):
        status, payload = start(current_round=5, standing=STANDING_TEXT)
        assert status == 200
        status, payload = call({"festival": "Test", "action": "awaiting"})
        assert [a["id"] for a in payload["awaiting"]] == ["1", "2", "3"]
        assert payload["awaiting"][0]["total"] == 38.75

    def test_start_later_round_without_standing(self):
        status, payload = start(current_round=3)
        assert status == 400
        assert "standing" in payload["error"]

    def test_start_with_bad_roster_line(self):
        status, payload = start(roster="1 Giger Samuel")
        assert status == 400
        assert '"1 Giger Samuel"' in payload["error"]

    def test_standing_pasted_as_roster(self):
        status, payload = start(roster=STANDING_TEXT)
        assert status == 400
        assert "roster field holds a standing list" in payload["error"]
        assert "1, Giger Samuel ***" in payload["error"]

    def test_duplicate_start_number(self):
        status, payload = start(roster="1, Giger Samuel ***\n1, Orlik Armon *")
        assert status == 400
        assert "Duplicate start number" in payload["error"]

    def test_list_and_delete(self):
        start("Brünig")
        start("Schwägalp")
        status, payload = call({"action": "list"})
        assert payload["festivals"] == ["Brünig", "Schwägalp"]
        status, payload = call({"festival": "Brünig", "action": "delete"})
        assert status == 200
        status, payload = call({"action": "list"})
        assert payload["festivals"] == ["Schwägalp"]


class TestResults:

    @pytest.fixture(autouse=True)
    def started(self, data_dir):
        start()

    def test_save_pairing(self):
        status, payload = save_bout()
        assert status == 200
        assert payload["saved"] == ["1", "2"]
        assert [(r["label"], r["id"]) for r in payload["standing"]] == [("1a", "1"), ("2a", "2")]
        assert payload["standing"][0]["result"] == "9.75"
        assert payload["last_added"] == ["1", "2"]
        assert payload["can_undo"] is True

    def test_failed_save_keeps_slot_error(self):
        call({"festival": "Test", "action": "pairing", "slot": 0, "side": 1, "id": "1"})
        status, payload = call({"festival": "Test", "action": "save_pairing", "slot": 0})
        assert status == 400
        assert payload["error"] == "Fill in all fields"
        status, payload = call({"festival": "Test", "action": "standings"})
        assert payload["pairings"][0]["error"] == "Fill in all fields"

    def test_undo(self):
        save_bout()
        status, payload = call({"festival": "Test", "action": "undo"})
        assert status == 200
        assert sorted(payload["reverted"]) == ["1", "2"]
        assert payload["message"] == "Resultat für Giger Samuel & Orlik Armon rückgängig gemacht."
        assert payload["standing"] == []
        assert payload["can_undo"] is False

    def test_undo_with_empty_history(self):
        status, payload = call({"festival": "Test", "action": "undo"})
        assert status == 200
        assert payload["reverted"] == []
        assert payload["message"] == ""

    def test_record_and_occupied_slot(self):
        status, payload = call({"festival": "Test", "action": "record", "id": "3", "round": 1, "result": "10"})
        assert status == 200
        status, payload = call({"festival": "Test", "action": "record", "id": "3", "round": 1, "result": "9"})
        assert status == 400
        assert "already has a result" in payload["error"]

    def test_edit_and_clear(self):
        save_bout()
        status, payload = call({"festival": "Test", "action": "edit", "id": "2", "result": "10.00"})
        assert [(r["label"], r["id"]) for r in payload["standing"]] == [("1a", "2"), ("2a", "1")]
        status, payload = call({"festival": "Test", "action": "clear", "id": "2", "round": 1})
        assert [r["id"] for r in payload["standing"]] == ["1"]

    def test_pairings_count(self):
        status, payload = call({"festival": "Test", "action": "pairings", "count": 6})
        assert len(payload["pairings"]) == 6

    def test_calculator_outside_last_rounds(self):
        status, payload = call({"festival": "Test", "action": "calculator", "id": "1"})
        assert status == 200
        assert payload["calculator"] == []


class TestLinesAndCalculator:

    def test_lines(self):
        start(current_round=4, standing=STANDING_TEXT)
        status, payload = call({"festival": "Test", "action": "lines", "line": "ausstich", "value": "36.00"})
        assert status == 200
        assert payload["line_values"]["ausstich"] == 36.00
        status, payload = call({"festival": "Test", "action": "lines", "line": "ausstich", "value": "12"})
        assert status == 400
        assert "choose from" in payload["error"]

    def test_calculator(self):
        start(current_round=5, standing=STANDING_TEXT)
        status, payload = call({"festival": "Test", "action": "calculator", "id": "3"})
        assert status == 200
        first = payload["calculator"][0]
        assert first["target"] == 56.50
        assert first["text"] == "Gestellt (8.75) & Sieg (10.00)"

    def test_show_calculator(self):
        start(current_round=6, standing=STANDING_TEXT)
        status, payload = call({"festival": "Test", "action": "show_calculator", "show": True})
        assert payload["show_calculator"] is True
        assert payload["calculator_relevant"] is True
        status, payload = call({"festival": "Test", "action": "show_calculator", "show": False})
        assert payload["show_calculator"] is False
