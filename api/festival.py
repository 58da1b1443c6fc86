"""Serverless function for entering results and reading the live standing."""

import json
import logging
import os
import sys
from pathlib import Path

# Add the project root to the path so we can import schwingen modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from schwingen.constants import BOUT_COUNT_CHOICES, FESTIVAL_TYPES, LINE_MENUS, RESULT_OPTIONS
from schwingen.errors import FestivalNotFoundError, SchwingenError, ValidationError
from schwingen.parsers import detect_parser, get_parser, get_supported_formats
from schwingen.session import FestivalSession, undo_message
from schwingen.storage import JsonFileRepository

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = "/tmp/schwingen"


def get_repository() -> JsonFileRepository:
    return JsonFileRepository(os.environ.get("SCHWINGEN_DATA_DIR", DEFAULT_DATA_DIR))


def handler(request):
    """Handle a JSON action on a festival.

    Accepts POST with JSON body: {"festival": "<name>", "action": "<action>", ...}

    Actions and their extra fields:
    - start: festival_type, current_round, roster (text), standing (text, after round 1)
    - record: id, round, result
    - clear: id, round
    - edit: id, result (current round)
    - pairings: count
    - pairing: slot, side, id and/or result
    - save_pairing: slot
    - undo
    - lines: line, value (menu value or "none")
    - standings, awaiting
    - show_calculator: show (bool)
    - calculator: id
    - delete
    - list, options (no festival needed)

    Every state-changing action saves the festival and returns the live
    standing.
    """
    # Handle CORS preflight
    if request.method == "OPTIONS":
        return create_response(
            "",
            status=204,
            headers={
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": "POST, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type",
            },
        )

    if request.method != "POST":
        return create_response(
            {"error": "Method not allowed. Use POST."},
            status=405,
        )

    try:
        data = json.loads(request.body.decode("utf-8"))
        if not isinstance(data, dict):
            return create_response({"error": "Request body must be a JSON object"}, status=400)

        repository = get_repository()
        action = data.get("action")

        if action == "list":
            return create_response({"festivals": repository.list_names()})

        if action == "options":
            return create_response(options_response())

        name = data.get("festival")
        if not name:
            return create_response(
                {"error": "Missing 'festival' in request body"},
                status=400,
            )

        if action == "start":
            session = start_festival(name, data)
            repository.save(session)
            return create_response(session_response(session))

        if action == "delete":
            repository.delete(name)
            return create_response({"deleted": name})

        session = repository.load(name)
        try:
            body = dispatch(session, action, data)
        except SchwingenError:
            if action == "save_pairing":
                # Keep the slot's error message for the operator
                repository.save(session)
            raise
        if action in MUTATING_ACTIONS:
            repository.save(session)
            body.update(session_response(session))
        return create_response(body)

    except FestivalNotFoundError as e:
        return create_response({"error": str(e)}, status=404)
    except SchwingenError as e:
        logger.warning("Rejected %s request: %s", data.get("action"), e)
        return create_response({"error": str(e)}, status=400)
    except json.JSONDecodeError as e:
        return create_response(
            {"error": f"Invalid JSON: {e}"},
            status=400,
        )
    except (KeyError, ValueError) as e:
        return create_response(
            {"error": f"Missing or invalid field: {e}"},
            status=400,
        )
    except Exception as e:
        logger.exception("Unexpected error handling request")
        return create_response(
            {"error": f"Internal error: {e}"},
            status=500,
        )


MUTATING_ACTIONS = {
    "record", "clear", "edit", "pairings", "pairing", "save_pairing", "undo", "lines",
    "show_calculator",
}


def parse_pasted(kind: str, text: str) -> list:
    """Parse pasted list text, rejecting text that is clearly the other kind of list."""
    detected = detect_parser(text)
    if detected is not None and detected.KIND != kind:
        raise ValidationError(
            f"The {kind} field holds a {detected.KIND} list. {get_supported_formats()}"
        )
    return get_parser(kind).parse(text)


def start_festival(name: str, data: dict) -> FestivalSession:
    roster = parse_pasted("roster", data.get("roster", ""))
    standing = parse_pasted("standing", data.get("standing", ""))
    return FestivalSession.start(
        name,
        data.get("festival_type", "normal"),
        int(data.get("current_round", 1)),
        roster,
        standing,
    )


def dispatch(session: FestivalSession, action: str | None, data: dict) -> dict:
    """Apply an action to a loaded session and return the response body."""
    if action == "record":
        session.record_result(str(data["id"]), int(data["round"]), data.get("result", ""))
        return {}
    if action == "clear":
        session.clear_result(str(data["id"]), int(data["round"]))
        return {}
    if action == "edit":
        session.edit_result(str(data["id"]), data.get("result", ""))
        return {}
    if action == "pairings":
        session.set_bout_count(int(data["count"]))
        return {}
    if action == "pairing":
        competitor_id = data.get("id")
        session.update_pairing(
            int(data["slot"]),
            int(data["side"]),
            competitor_id=str(competitor_id) if competitor_id is not None else None,
            result=data.get("result"),
        )
        return {}
    if action == "save_pairing":
        first, second = session.save_pairing(int(data["slot"]))
        return {"saved": [first.id, second.id]}
    if action == "undo":
        reverted = session.undo()
        return {"reverted": [c.id for c in reverted], "message": undo_message(reverted)}
    if action == "lines":
        session.set_line_value(data["line"], data.get("value"))
        return {}
    if action == "standings":
        return session_response(session)
    if action == "awaiting":
        return {"awaiting": [awaiting_entry(c) for c in session.awaiting()]}
    if action == "show_calculator":
        session.show_calculator = bool(data.get("show", True))
        return {}
    if action == "calculator":
        results = session.calculator_for(str(data["id"]))
        return {"calculator": [r.to_dict() for r in results]}
    raise UnknownActionError(f"Unknown action: {action!r}")


class UnknownActionError(SchwingenError):
    """Raised for an action the handler does not know."""
    pass


def awaiting_entry(competitor) -> dict:
    return {
        "id": competitor.id,
        "name": competitor.name,
        "decoration": competitor.decoration,
        "total": competitor.total,
        "initial_rank_label": competitor.initial_rank_label,
    }


def options_response() -> dict:
    """Choices offered to the operator: result texts, bout counts and line menus."""
    return {
        "festival_types": list(FESTIVAL_TYPES),
        "result_options": RESULT_OPTIONS,
        "bout_counts": list(BOUT_COUNT_CHOICES),
        "line_menus": {
            festival_type: {line: list(values) for line, values in menus.items()}
            for festival_type, menus in LINE_MENUS.items()
        },
    }


def session_response(session: FestivalSession) -> dict:
    min_kranz, max_kranz = session.kranz_bounds()
    return {
        "festival": session.name,
        "festival_type": session.festival_type,
        "current_round": session.current_round,
        "standing": [row.to_dict() for row in session.standing()],
        "kranz_bounds": {"min": min_kranz, "max": max_kranz},
        "pairings": [p.to_dict() for p in session.pairings],
        "line_values": session.line_values,
        "show_calculator": session.show_calculator,
        "calculator_relevant": session.calculator_relevant,
        "can_undo": len(session.history) > 0,
        "last_added": session.last_added,
    }


def create_response(body, status: int = 200, headers: dict = None):
    """Create a response object for Vercel."""
    response_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
    }
    if headers:
        response_headers.update(headers)

    if isinstance(body, dict):
        body = json.dumps(body, ensure_ascii=False)

    # Return in format expected by Vercel Python runtime
    return {
        "statusCode": status,
        "headers": response_headers,
        "body": body,
    }
