"""Saving and loading festival sessions.

A session is stored as a JSON document with this shape:

    {
        "name": "Schwägalp 2026",
        "festival_type": "normal",
        "current_round": 5,
        "competitors": {"<id>": {...Competitor.to_dict()...}, ...},
        "history": [{"<id>": {...}, ...}, ...],
        "pairings": [{...Pairing.to_dict()...}, ...],
        "line_values": {"kranz": 56.5, ...},
        "show_calculator": false,
        "last_added": ["<id>", ...]
    }

Totals are written for readers of the file but recomputed on load.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any

from schwingen.errors import FestivalNotFoundError, ValidationError
from schwingen.history import History
from schwingen.models import Competitor, Pairing
from schwingen.session import FestivalSession

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1


def _collection_to_dict(collection: dict[str, Competitor]) -> dict[str, Any]:
    return {competitor_id: c.to_dict() for competitor_id, c in collection.items()}


def _collection_from_dict(data: dict[str, Any]) -> dict[str, Competitor]:
    return {str(competitor_id): Competitor.from_dict(c) for competitor_id, c in data.items()}


def session_to_dict(session: FestivalSession) -> dict[str, Any]:
    """Convert a session to a JSON-serializable dictionary."""
    return {
        "version": FORMAT_VERSION,
        "name": session.name,
        "festival_type": session.festival_type,
        "current_round": session.current_round,
        "competitors": _collection_to_dict(session.competitors),
        "history": [_collection_to_dict(snapshot) for snapshot in session.history],
        "pairings": [p.to_dict() for p in session.pairings],
        "line_values": dict(session.line_values),
        "show_calculator": session.show_calculator,
        "last_added": list(session.last_added),
    }


def session_from_dict(data: dict[str, Any]) -> FestivalSession:
    """Rebuild a session from the dictionary written by session_to_dict.

    Raises:
        ValidationError: If required fields are missing or malformed
    """
    try:
        return FestivalSession(
            name=data["name"],
            festival_type=data["festival_type"],
            current_round=int(data["current_round"]),
            competitors=_collection_from_dict(data["competitors"]),
            history=History([_collection_from_dict(s) for s in data.get("history", [])]),
            pairings=[Pairing.from_dict(p) for p in data["pairings"]] if "pairings" in data else None,
            line_values=data.get("line_values"),
            show_calculator=bool(data.get("show_calculator", False)),
            last_added=data.get("last_added", []),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid saved festival: {e}") from e


class JsonFileRepository:
    """Stores one JSON file per festival in a directory."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, name: str) -> Path:
        slug = re.sub(r"[^\w.-]+", "_", name.strip()).strip("._")
        if not slug:
            raise ValidationError(f"Invalid festival name: {name!r}")
        return self.directory / f"{slug}.json"

    def save(self, session: FestivalSession) -> Path:
        """Write the session, replacing any earlier save under the same name."""
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(session.name)
        tmp_path = path.with_suffix(".json.tmp")
        tmp_path.write_text(
            json.dumps(session_to_dict(session), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        tmp_path.replace(path)
        logger.debug("Saved festival %r to %s", session.name, path)
        return path

    def load(self, name: str) -> FestivalSession:
        """Load a saved session.

        Raises:
            FestivalNotFoundError: If no festival is saved under ``name``
            ValidationError: If the file is not a valid saved festival
        """
        path = self._path(name)
        if not path.exists():
            raise FestivalNotFoundError(f"No saved festival named {name!r}")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValidationError(f"Saved festival {name!r} is corrupt: {e}") from e
        logger.debug("Loaded festival %r from %s", name, path)
        return session_from_dict(data)

    def exists(self, name: str) -> bool:
        return self._path(name).exists()

    def list_names(self) -> list[str]:
        """Names of all saved festivals, sorted."""
        if not self.directory.exists():
            return []
        names = []
        for path in sorted(self.directory.glob("*.json")):
            try:
                names.append(json.loads(path.read_text(encoding="utf-8"))["name"])
            except (json.JSONDecodeError, KeyError) as e:
                logger.warning("Skipping unreadable save file %s: %s", path, e)
        return sorted(names)

    def delete(self, name: str) -> None:
        path = self._path(name)
        if not path.exists():
            raise FestivalNotFoundError(f"No saved festival named {name!r}")
        path.unlink()
        logger.info("Deleted festival %r", name)
