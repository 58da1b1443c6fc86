"""A festival session: competitors, bout slots and undo history."""

import logging
from collections.abc import Iterable, Mapping

from schwingen import calculator, lines
from schwingen.constants import BOUT_COUNT_CHOICES, DEFAULT_BOUT_COUNT, FESTIVAL_TYPES, ROUND_COUNTS
from schwingen.errors import (
    DuplicateNameError,
    SlotOccupiedError,
    UnknownCompetitorError,
    ValidationError,
)
from schwingen.history import History
from schwingen.models import Competitor, Pairing, RosterEntry, StandingEntry, parse_result
from schwingen.ranking import rank_competitors, sort_by_total

logger = logging.getLogger(__name__)

FILL_ALL_FIELDS = "Fill in all fields"


def _validate_setup(festival_type: str, current_round: int) -> None:
    if festival_type not in ROUND_COUNTS:
        raise ValidationError(
            f"Unknown festival type {festival_type!r} (choose from {', '.join(FESTIVAL_TYPES)})"
        )
    round_count = ROUND_COUNTS[festival_type]
    if not 1 <= current_round <= round_count:
        raise ValidationError(f"Round {current_round} is out of range (1-{round_count})")


def seed_competitors(
    festival_type: str,
    current_round: int,
    roster: Iterable[RosterEntry],
    standing: Iterable[StandingEntry] | None = None,
) -> dict[str, Competitor]:
    """Create the competitor collection at session start.

    In round 1 every roster entry starts at 0. In later rounds only the
    competitors of the standing take part; each is matched to the roster by
    name to find the start number and starts from the standing's total.

    Initial ranks are assigned from the seeded totals.

    Raises:
        ValidationError: For a missing roster or standing, or a repeated
            start number
        DuplicateNameError: If a name appears twice in the roster or the
            standing
        UnknownCompetitorError: If a standing name is not on the roster
    """
    _validate_setup(festival_type, current_round)
    round_count = ROUND_COUNTS[festival_type]

    roster = list(roster)
    if not roster:
        raise ValidationError("A start list is required")
    by_name: dict[str, RosterEntry] = {}
    numbers: set[str] = set()
    for entry in roster:
        if entry.id in numbers:
            raise ValidationError(f"Duplicate start number in start list: {entry.id}")
        if entry.name in by_name:
            raise DuplicateNameError(f"Duplicate name in start list: {entry.name}")
        numbers.add(entry.id)
        by_name[entry.name] = entry

    seeded: list[Competitor] = []
    if current_round == 1:
        for entry in roster:
            seeded.append(Competitor.create(
                entry.id, entry.name, round_count, decoration=entry.decoration,
            ))
    else:
        standing = list(standing or [])
        if not standing:
            raise ValidationError(f"Round {current_round} requires the standing after round {current_round - 1}")
        seen: set[str] = set()
        for entry in standing:
            if entry.name in seen:
                raise DuplicateNameError(f"Duplicate name in standing: {entry.name}")
            seen.add(entry.name)
            roster_entry = by_name.get(entry.name)
            if roster_entry is None:
                raise UnknownCompetitorError(
                    f'Competitor "{entry.name}" from the standing is not on the start list'
                )
            seeded.append(Competitor.create(
                roster_entry.id, entry.name, round_count,
                decoration=entry.decoration, base_score=entry.total,
            ))

    ordered = sort_by_total(seeded)
    ranks = rank_competitors(ordered)
    return {
        c.id: c.with_initial_rank(info.rank, info.label)
        for c, info in zip(ordered, ranks)
    }


class FestivalSession:
    """Live state of one festival.

    Owns the competitor collection (keyed by start number), the undo
    history, the bout slots and the operator's view settings. All mutations
    go through this class; callers persist the session afterwards.
    """

    def __init__(
        self,
        name: str,
        festival_type: str,
        current_round: int,
        competitors: Mapping[str, Competitor],
        history: History | None = None,
        pairings: list[Pairing] | None = None,
        line_values: Mapping[str, float | None] | None = None,
        show_calculator: bool = False,
        last_added: list[str] | None = None,
    ):
        _validate_setup(festival_type, current_round)
        self.name = name
        self.festival_type = festival_type
        self.current_round = current_round
        self.competitors: dict[str, Competitor] = dict(competitors)
        self.history = history if history is not None else History()
        self.pairings = pairings if pairings is not None else self._new_pairings(DEFAULT_BOUT_COUNT)
        self.line_values: dict[str, float | None] = lines.default_line_values(festival_type)
        if line_values:
            self.line_values.update(line_values)
        self.show_calculator = show_calculator
        self.last_added = list(last_added or [])

    @classmethod
    def start(
        cls,
        name: str,
        festival_type: str,
        current_round: int,
        roster: Iterable[RosterEntry],
        standing: Iterable[StandingEntry] | None = None,
    ) -> "FestivalSession":
        """Seed a new session from a start list and, after round 1, a standing."""
        competitors = seed_competitors(festival_type, current_round, roster, standing)
        logger.info(
            "Started festival %r (%s, round %d) with %d competitors",
            name, festival_type, current_round, len(competitors),
        )
        return cls(name, festival_type, current_round, competitors)

    @property
    def round_count(self) -> int:
        return ROUND_COUNTS[self.festival_type]

    def get(self, competitor_id: str) -> Competitor:
        try:
            return self.competitors[competitor_id]
        except KeyError:
            raise UnknownCompetitorError(f"Number {competitor_id} not found") from None

    # --- results ---

    def record_result(self, competitor_id: str, round_number: int, result_text: str) -> Competitor:
        """Write a result into an empty round slot.

        Raises:
            UnknownCompetitorError: If the id is unknown
            SlotOccupiedError: If the slot already holds a result
            ValidationError: If the result text or round number is invalid
        """
        competitor = self.get(competitor_id)
        if competitor.has_result(round_number):
            raise SlotOccupiedError(
                f"{competitor.name} already has a result for round {round_number}"
            )
        updated = competitor.with_result(round_number, parse_result(result_text))
        self.competitors[competitor_id] = updated
        logger.debug("Recorded %s for %s in round %d", result_text, competitor_id, round_number)
        return updated

    def clear_result(self, competitor_id: str, round_number: int) -> Competitor:
        """Empty a round slot."""
        updated = self.get(competitor_id).with_result(round_number, None)
        self.competitors[competitor_id] = updated
        logger.debug("Cleared round %d for %s", round_number, competitor_id)
        return updated

    def edit_result(self, competitor_id: str, result_text: str) -> Competitor:
        """Replace the current-round result of a competitor."""
        parse_result(result_text)
        self.clear_result(competitor_id, self.current_round)
        return self.record_result(competitor_id, self.current_round, result_text)

    # --- bout slots ---

    @staticmethod
    def _new_pairings(count: int) -> list[Pairing]:
        return [Pairing(slot_id=i) for i in range(count)]

    def set_bout_count(self, count: int) -> None:
        """Recreate the bout slots when the number of simultaneous bouts changes."""
        if count not in BOUT_COUNT_CHOICES:
            raise ValidationError(f"Number of bouts must be one of {BOUT_COUNT_CHOICES}")
        if count != len(self.pairings):
            self.pairings = self._new_pairings(count)

    def get_pairing(self, slot_id: int) -> Pairing:
        for pairing in self.pairings:
            if pairing.slot_id == slot_id:
                return pairing
        raise ValidationError(f"No bout slot {slot_id}")

    def update_pairing(
        self,
        slot_id: int,
        side: int,
        competitor_id: str | None = None,
        result: str | None = None,
    ) -> Pairing:
        """Change one side (1 or 2) of a bout slot. Clears the slot's error."""
        if side not in (1, 2):
            raise ValidationError(f"Side must be 1 or 2, not {side}")
        pairing = self.get_pairing(slot_id)
        entry = pairing.first if side == 1 else pairing.second
        if competitor_id is not None:
            entry.competitor_id = competitor_id.strip()
        if result is not None:
            entry.result = result.strip()
        pairing.error = None
        return pairing

    def save_pairing(self, slot_id: int) -> tuple[Competitor, Competitor]:
        """Save the results of a bout slot into the current round.

        The collection is pushed onto the history first so the save can be
        undone. On failure the slot's error is set and the error re-raised;
        nothing is changed.
        """
        pairing = self.get_pairing(slot_id)
        try:
            updates = self._validate_pairing(pairing)
        except (ValidationError, UnknownCompetitorError) as e:
            pairing.error = str(e)
            logger.debug("Rejected bout slot %d: %s", slot_id, e)
            raise

        self.history.push(self.competitors)
        saved = []
        for competitor, result in updates:
            updated = competitor.with_result(self.current_round, result)
            self.competitors[competitor.id] = updated
            saved.append(updated)
        self.last_added = [c.id for c in saved]
        pairing.clear()
        logger.info(
            "Saved bout slot %d: %s %s, %s %s",
            slot_id, saved[0].id, saved[0].result_for(self.current_round).display,
            saved[1].id, saved[1].result_for(self.current_round).display,
        )
        return saved[0], saved[1]

    def _validate_pairing(self, pairing: Pairing):
        if not all(entry.is_complete for entry in pairing.entries):
            raise ValidationError(FILL_ALL_FIELDS)
        first_id, second_id = (entry.competitor_id for entry in pairing.entries)
        if first_id == second_id:
            raise ValidationError(f"Number {first_id} is entered on both sides")
        updates = []
        for entry in pairing.entries:
            competitor = self.get(entry.competitor_id)
            if competitor.has_result(self.current_round):
                raise SlotOccupiedError(f"{competitor.name} already has a result")
            updates.append((competitor, parse_result(entry.result)))
        return updates

    # --- undo ---

    def undo(self) -> list[Competitor]:
        """Restore the collection as it was before the last bout save.

        Returns:
            The competitors (as they were before the undo) whose
            current-round result was removed. Empty if there was nothing to
            undo.
        """
        previous = self.history.pop()
        if previous is None:
            return []
        reverted = [
            competitor for competitor_id, competitor in self.competitors.items()
            if competitor.has_result(self.current_round)
            and competitor_id in previous
            and not previous[competitor_id].has_result(self.current_round)
        ]
        self.competitors = previous
        self.last_added = []
        logger.info("Undid last save, reverted %s", [c.id for c in reverted])
        return reverted

    # --- views ---

    def set_line_value(self, line: str, value) -> None:
        """Select a line value from the line's menu, or hide it with None."""
        self.line_values[line] = lines.validate_line_value(self.festival_type, line, value)

    def standing(self) -> list[lines.Row]:
        """The live standing of the current round."""
        return lines.build_standing(
            self.competitors.values(), self.festival_type, self.current_round, self.line_values,
        )

    def awaiting(self) -> list[Competitor]:
        """Competitors still without a result in the current round."""
        return lines.awaiting(self.competitors.values(), self.current_round)

    def kranz_bounds(self) -> tuple[int, int]:
        return lines.kranz_bounds(len(self.competitors))

    @property
    def calculator_relevant(self) -> bool:
        return calculator.is_relevant(self.festival_type, self.current_round)

    def calculator_for(self, competitor_id: str) -> list[calculator.TargetResult]:
        """Run the Kranzrechner for a competitor's current total.

        Returns an empty list outside the last two rounds.
        """
        competitor = self.get(competitor_id)
        if not self.calculator_relevant:
            return []
        return calculator.calculate(
            competitor.total,
            calculator.rounds_remaining(self.festival_type, self.current_round),
            calculator.kranz_targets(self.festival_type),
        )


def undo_message(reverted: list[Competitor]) -> str:
    """Message shown after an undo that removed a bout's two results."""
    if len(reverted) != 2:
        return ""
    return f"Resultat für {reverted[0].name} & {reverted[1].name} rückgängig gemacht."
