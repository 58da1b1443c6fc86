"""Kranzrechner: which results does a competitor need to reach a target?"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from schwingen.constants import KRANZ_TARGETS, OFFICIAL_TARGETS, ROUND_COUNTS


@dataclass(frozen=True)
class Outcome:
    """A possible result of a single bout."""
    score: float
    label: str

    def __str__(self) -> str:
        return f"{self.label} ({self.score:.2f})"


# Ascending by score. The enumeration order decides which combination is
# reported when several reach the target.
POSSIBLE_OUTCOMES = (
    Outcome(8.50, "Niederlage"),
    Outcome(8.75, "Gestellt"),
    Outcome(9.00, "Gestellt"),
    Outcome(9.75, "Sieg"),
    Outcome(10.00, "Sieg"),
)

UNREACHABLE = "Nicht erreichbar"


@dataclass(frozen=True)
class TargetResult:
    """The first sufficient combination of outcomes for one target total.

    Attributes:
        target: Total to reach
        outcomes: One outcome per remaining round, or None if the target
                  cannot be reached
    """
    target: float
    outcomes: tuple[Outcome, ...] | None

    @property
    def reachable(self) -> bool:
        return self.outcomes is not None

    @property
    def target_display(self) -> str:
        star = "*" if self.target in OFFICIAL_TARGETS else ""
        return f"{self.target:.2f}{star}"

    @property
    def text(self) -> str:
        if self.outcomes is None:
            return UNREACHABLE
        return " & ".join(str(o) for o in self.outcomes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "target": self.target,
            "target_display": self.target_display,
            "outcomes": (
                [{"score": o.score, "label": o.label} for o in self.outcomes]
                if self.outcomes is not None else None
            ),
            "text": self.text,
        }


def rounds_remaining(festival_type: str, current_round: int) -> int:
    """Number of rounds left including the current one."""
    return ROUND_COUNTS[festival_type] + 1 - current_round


def is_relevant(festival_type: str, current_round: int) -> bool:
    """The calculator is offered for the last two rounds only."""
    return rounds_remaining(festival_type, current_round) in (1, 2)


def needed_outcomes(current_total: float, rounds: int, target: float) -> tuple[Outcome, ...] | None:
    """Find the first outcome combination that lifts ``current_total`` to ``target``.

    For one round, the lowest sufficient outcome is returned. For two
    rounds, pairs are tried with the first round in the outer loop and the
    second in the inner loop, both ascending; the first sufficient pair wins
    even if a more balanced pair would have a smaller sum.

    Returns:
        A tuple with one outcome per round, or None if unreachable

    Raises:
        ValueError: If ``rounds`` is not 1 or 2
    """
    needed = target - current_total
    if rounds == 1:
        for outcome in POSSIBLE_OUTCOMES:
            if outcome.score >= needed:
                return (outcome,)
        return None
    if rounds == 2:
        for first in POSSIBLE_OUTCOMES:
            for second in POSSIBLE_OUTCOMES:
                if first.score + second.score >= needed:
                    return (first, second)
        return None
    raise ValueError(f"Calculator supports 1 or 2 remaining rounds, not {rounds}")


def calculate(current_total: float, rounds: int, targets: Iterable[float]) -> list[TargetResult]:
    """Run the calculator for each target total."""
    return [
        TargetResult(target=target, outcomes=needed_outcomes(current_total, rounds, target))
        for target in targets
    ]


def kranz_targets(festival_type: str) -> tuple[float, ...]:
    return KRANZ_TARGETS[festival_type]
