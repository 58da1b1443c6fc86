"""Core data models for competitors, round results and bout slots."""

import math
from dataclasses import dataclass, field, replace
from typing import Any, Self

from schwingen.errors import ValidationError


@dataclass(frozen=True)
class RoundResult:
    """The score a competitor received for one round.

    Attributes:
        high: Score credited to the total
        low: Lower score of a split result ("10.00 / 9.75"), kept for
             display only. Equal to ``high`` for a single score.
        display: Text shown in the standing
    """
    high: float
    low: float
    display: str

    def to_dict(self) -> dict[str, Any]:
        return {"high": self.high, "low": self.low, "display": self.display}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(high=float(data["high"]), low=float(data["low"]), display=data["display"])


def _parse_score(part: str, text: str) -> float:
    try:
        value = float(part.strip().replace(",", "."))
    except ValueError:
        raise ValidationError(f"Invalid result: {text!r}") from None
    if not math.isfinite(value) or value < 0:
        raise ValidationError(f"Invalid result: {text!r}")
    return value


def parse_result(text: str | None) -> RoundResult:
    """Parse a result text into a RoundResult.

    Accepts a single score ("9.75") or a split score ("10.00 / 9.75"), in
    which case the first value is credited and the second is display-only.

    Raises:
        ValidationError: If the text is empty or not numeric
    """
    text = (text or "").strip()
    if not text:
        raise ValidationError("Missing result")

    if "/" in text:
        parts = text.split("/")
        if len(parts) != 2:
            raise ValidationError(f"Invalid result: {text!r}")
        high = _parse_score(parts[0], text)
        low = _parse_score(parts[1], text)
        return RoundResult(high=high, low=low, display=f"{high:.2f} / {low:.2f}")

    score = _parse_score(text, text)
    return RoundResult(high=score, low=score, display=f"{score:.2f}")


@dataclass(frozen=True)
class Competitor:
    """A competitor (Schwinger) and their results in the festival.

    Records are immutable: every change produces a new Competitor, so
    history snapshots can share unchanged records with the live collection.

    Attributes:
        id: Start number, supplied by the roster and never regenerated
        name: Name without decoration
        decoration: Trailing stars of the raw name (prior titles)
        base_score: Total carried over from before the session
        round_results: One slot per round, None while the round is open
        initial_rank: Rank at session start
        initial_rank_label: Rank label at session start (e.g. "3b")
    """
    id: str
    name: str
    decoration: str
    base_score: float
    round_results: tuple[RoundResult | None, ...]
    initial_rank: int = 0
    initial_rank_label: str = ""

    @classmethod
    def create(
        cls, id: str, name: str, round_count: int, decoration: str = "", base_score: float = 0.0
    ) -> Self:
        """Create a competitor with all round slots empty."""
        return cls(
            id=id,
            name=name,
            decoration=decoration,
            base_score=base_score,
            round_results=(None,) * round_count,
        )

    @property
    def total(self) -> float:
        return self.base_score + sum(r.high for r in self.round_results if r is not None)

    @property
    def round_count(self) -> int:
        return len(self.round_results)

    @property
    def display_name(self) -> str:
        return f"{self.name} {self.decoration}".strip()

    def _slot(self, round_number: int) -> int:
        if not 1 <= round_number <= self.round_count:
            raise ValidationError(
                f"Round {round_number} is out of range (1-{self.round_count})"
            )
        return round_number - 1

    def result_for(self, round_number: int) -> RoundResult | None:
        """Get the result for a round (1-indexed), or None if still open."""
        return self.round_results[self._slot(round_number)]

    def has_result(self, round_number: int) -> bool:
        return self.result_for(round_number) is not None

    def with_result(self, round_number: int, result: RoundResult | None) -> Self:
        """Return a copy with the given round slot set (or emptied with None)."""
        results = list(self.round_results)
        results[self._slot(round_number)] = result
        return replace(self, round_results=tuple(results))

    def with_initial_rank(self, rank: int, label: str) -> Self:
        return replace(self, initial_rank=rank, initial_rank_label=label)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "decoration": self.decoration,
            "base_score": self.base_score,
            "round_results": [r.to_dict() if r else None for r in self.round_results],
            "total": self.total,
            "initial_rank": self.initial_rank,
            "initial_rank_label": self.initial_rank_label,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Restore a competitor. The stored total is ignored and recomputed."""
        return cls(
            id=str(data["id"]),
            name=data["name"],
            decoration=data.get("decoration", ""),
            base_score=float(data.get("base_score", 0.0)),
            round_results=tuple(
                RoundResult.from_dict(r) if r else None for r in data["round_results"]
            ),
            initial_rank=int(data.get("initial_rank", 0)),
            initial_rank_label=data.get("initial_rank_label", ""),
        )


@dataclass
class PairingEntry:
    """One side of a bout slot: the chosen competitor and result text."""
    competitor_id: str = ""
    result: str = ""

    @property
    def is_complete(self) -> bool:
        return bool(self.competitor_id.strip()) and bool(self.result.strip())

    def to_dict(self) -> dict[str, Any]:
        return {"competitor_id": self.competitor_id, "result": self.result}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(competitor_id=data.get("competitor_id", ""), result=data.get("result", ""))


@dataclass
class Pairing:
    """A bout slot (Platz) in the current round.

    Attributes:
        slot_id: Position in the bout list (0-indexed)
        first: Entry for the first competitor
        second: Entry for the second competitor
        error: Message from the last failed save, if any
    """
    slot_id: int
    first: PairingEntry = field(default_factory=PairingEntry)
    second: PairingEntry = field(default_factory=PairingEntry)
    error: str | None = None

    @property
    def entries(self) -> tuple[PairingEntry, PairingEntry]:
        return self.first, self.second

    def clear(self) -> None:
        self.first = PairingEntry()
        self.second = PairingEntry()
        self.error = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "slot_id": self.slot_id,
            "first": self.first.to_dict(),
            "second": self.second.to_dict(),
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            slot_id=int(data["slot_id"]),
            first=PairingEntry.from_dict(data.get("first", {})),
            second=PairingEntry.from_dict(data.get("second", {})),
            error=data.get("error"),
        )


@dataclass(frozen=True)
class RosterEntry:
    """A line of the start list (Startliste): start number and name."""
    id: str
    name: str
    decoration: str = ""


@dataclass(frozen=True)
class StandingEntry:
    """A line of the standing after the previous round (Rangliste)."""
    total: float
    name: str
    decoration: str = ""
