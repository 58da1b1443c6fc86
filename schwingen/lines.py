"""Live standing with threshold lines (Linien) and Kranz placeholders.

The standing ranks every competitor who already has a result for the
current round. Depending on the festival type and round, divider rows are
inserted where the totals cross a configured line:

- Ausstichlinie: round 4
- Kranzausstichlinie: ESAF round 6
- Schlussgangkandidaten: round 5 (normal) / 7 (ESAF)
- Kranzlinie, Min. Kränze, Max. Kränze: final round

In the final round the number of Kränze is bounded by 15% and 18% of the
field. If fewer competitors than the upper bound are still in contention,
placeholder rows stand in for the competitors yet to be decided so both
bounds can be shown.
"""

import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from schwingen.constants import (
    AUSSTICH,
    ESAF,
    KRANZ,
    KRANZ_CANDIDATE_THRESHOLD,
    KRANZAUSSTICH,
    LINE_DEFAULTS,
    LINE_MENUS,
    LINE_TITLES,
    MAX_KRANZ,
    MAX_KRANZ_SHARE,
    MIN_KRANZ,
    MIN_KRANZ_SHARE,
    NORMAL,
    ROUND_COUNTS,
    SCHLUSSGANG,
)
from schwingen.errors import ValidationError
from schwingen.models import Competitor
from schwingen.ranking import rank_competitors, sort_by_total

# Order in which value lines are checked at each crossing and at the end
VALUE_LINES = (AUSSTICH, KRANZAUSSTICH, KRANZ)


@dataclass
class Row:
    """A row of the live standing.

    Attributes:
        kind: "competitor", "placeholder" or "line"
        rank: Rank for competitor and placeholder rows
        label: Rank label for competitor and placeholder rows
        competitor: The competitor, for competitor rows
        result: Display text of the current-round result, for competitor rows
        line: Line key (see schwingen.constants), for line rows
        text: Divider text, for line rows
    """
    kind: str
    rank: int | None = None
    label: str = ""
    competitor: Competitor | None = None
    result: str = ""
    line: str | None = None
    text: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"kind": self.kind}
        if self.kind == "line":
            data.update(line=self.line, text=self.text)
        else:
            data.update(rank=self.rank, label=self.label)
        if self.competitor is not None:
            data.update(
                id=self.competitor.id,
                name=self.competitor.name,
                decoration=self.competitor.decoration,
                result=self.result,
                total=self.competitor.total,
            )
        return data


def active_lines(festival_type: str, current_round: int) -> set[str]:
    """Return the lines shown for this festival type and round."""
    final_round = ROUND_COUNTS[festival_type]
    lines = set()
    if current_round == 4:
        lines.add(AUSSTICH)
    if festival_type == ESAF and current_round == 6:
        lines.add(KRANZAUSSTICH)
    if (festival_type == NORMAL and current_round == 5) or (festival_type == ESAF and current_round == 7):
        lines.add(SCHLUSSGANG)
    if current_round == final_round:
        lines.update((KRANZ, MIN_KRANZ, MAX_KRANZ))
    return lines


def default_line_values(festival_type: str) -> dict[str, float | None]:
    """Return the default value of every configurable line."""
    return dict(LINE_DEFAULTS[festival_type])


def validate_line_value(festival_type: str, line: str, value: Any) -> float | None:
    """Check an operator-selected line value against the line's menu.

    Args:
        festival_type: "normal" or "esaf"
        line: Line key
        value: A menu value (number or numeric string), or None / "none" /
               "0" to hide the line

    Returns:
        The value as float, or None if the line is hidden

    Raises:
        ValidationError: If the line is not configurable or the value is not
            on its menu
    """
    menu = LINE_MENUS[festival_type].get(line)
    if menu is None:
        raise ValidationError(f"Line {line!r} cannot be configured for {festival_type}")
    if value is None or str(value).strip().lower() in ("none", "0", ""):
        return None
    try:
        number = float(str(value).replace("*", "").strip())
    except ValueError:
        raise ValidationError(f"Invalid value for {line}: {value!r}") from None
    if number not in menu:
        options = ", ".join(f"{v:.2f}" for v in menu)
        raise ValidationError(f"Invalid value for {line}: {value!r} (choose from {options})")
    return number


def kranz_bounds(field_size: int) -> tuple[int, int]:
    """Return (min, max) number of Kränze for a field of ``field_size``."""
    return (
        math.ceil(field_size * MIN_KRANZ_SHARE),
        math.ceil(field_size * MAX_KRANZ_SHARE),
    )


def competed(competitors: Iterable[Competitor], current_round: int) -> list[Competitor]:
    """Competitors with a result in the current round, best first."""
    return sort_by_total([c for c in competitors if c.has_result(current_round)])


def awaiting(competitors: Iterable[Competitor], current_round: int) -> list[Competitor]:
    """Competitors still without a result in the current round.

    Sorted by total, then by the rank they held at session start.
    """
    pending = [c for c in competitors if not c.has_result(current_round)]
    return sorted(pending, key=lambda c: (-c.total, c.initial_rank, c.initial_rank_label))


def _line_row(line: str, value: float | int | None = None) -> Row:
    title = LINE_TITLES[line]
    if value is None:
        text = f"--- {title} ---"
    elif isinstance(value, int):
        text = f"--- {title} ({value}) ---"
    else:
        text = f"--- {title} ({value:.2f}) ---"
    return Row(kind="line", line=line, text=text)


def build_standing(
    competitors: Iterable[Competitor],
    festival_type: str,
    current_round: int,
    line_values: Mapping[str, float | None] | None = None,
) -> list[Row]:
    """Build the live standing for the current round.

    Args:
        competitors: All competitors of the festival
        festival_type: "normal" or "esaf"
        current_round: Round being entered (1-indexed)
        line_values: Configured value per line key; None hides a line.
            Missing keys fall back to the defaults.

    Returns:
        Rows in display order. Every active line with a value appears
        exactly once; a line whose value is never crossed goes at the end.
    """
    everyone = list(competitors)
    lines = active_lines(festival_type, current_round)
    values = default_line_values(festival_type)
    if line_values:
        values.update(line_values)
    configured = {
        line: values[line] for line in VALUE_LINES if line in lines and values.get(line) is not None
    }

    show_kranz = KRANZ in lines
    ranked = competed(everyone, current_round)
    if show_kranz:
        threshold = KRANZ_CANDIDATE_THRESHOLD[festival_type]
        candidates = [c for c in ranked if c.total > threshold]
        rest = [c for c in ranked if c.total <= threshold]
        min_kranz, max_kranz = kranz_bounds(len(everyone))
    else:
        candidates, rest = ranked, []
        min_kranz = max_kranz = 0

    standing = candidates + rest
    ranks = rank_competitors(standing)
    first_rank_size = sum(1 for r in ranks if r.rank == 1)
    schlussgang_rank = 1 if first_rank_size >= 2 else 2

    rows: list[Row] = []
    emitted: set[str] = set()
    last_total = math.inf

    def emit(line: str, value: float | int | None = None) -> None:
        rows.append(_line_row(line, value))
        emitted.add(line)

    def add_competitor_row(index: int) -> None:
        nonlocal last_total
        competitor = standing[index]
        total = competitor.total
        for line, value in configured.items():
            if last_total >= value > total:
                emit(line, value)

        info = ranks[index]
        result = competitor.result_for(current_round)
        rows.append(Row(
            kind="competitor",
            rank=info.rank,
            label=info.label,
            competitor=competitor,
            result=result.display if result else "-",
        ))

        is_last_of_rank = index + 1 == len(standing) or standing[index + 1].total != total
        if is_last_of_rank:
            if SCHLUSSGANG in lines and info.rank == schlussgang_rank:
                emit(SCHLUSSGANG)
            if show_kranz and index < len(candidates):
                if index + 1 == min_kranz:
                    emit(MIN_KRANZ, min_kranz)
                if index + 1 == max_kranz:
                    emit(MAX_KRANZ, max_kranz)
        last_total = total

    for index in range(len(candidates)):
        add_competitor_row(index)

    if show_kranz and len(candidates) < max_kranz:
        last_rank = ranks[len(candidates) - 1].rank if candidates else 0
        for i in range(max_kranz - len(candidates)):
            position = len(candidates) + i + 1
            rank = last_rank + i + 1
            rows.append(Row(kind="placeholder", rank=rank, label=f"{rank}a"))
            if position == min_kranz and MIN_KRANZ not in emitted:
                emit(MIN_KRANZ, min_kranz)
            if position == max_kranz and MAX_KRANZ not in emitted:
                emit(MAX_KRANZ, max_kranz)

    for index in range(len(candidates), len(standing)):
        add_competitor_row(index)

    for line, value in configured.items():
        if line not in emitted:
            emit(line, value)
    if show_kranz:
        if MAX_KRANZ not in emitted:
            emit(MAX_KRANZ, max_kranz)
        if MIN_KRANZ not in emitted:
            emit(MIN_KRANZ, min_kranz)

    return rows
