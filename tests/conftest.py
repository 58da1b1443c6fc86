"""Shared test helpers."""

from schwingen.constants import ROUND_COUNTS
from schwingen.models import Competitor, parse_result


def make_competitors(
    entries: list[tuple[str, float, str | None]],
    festival_type: str = "normal",
    current_round: int = 1,
) -> dict[str, Competitor]:
    """Build a competitor collection from a compact table.

    Args:
        entries: (id, base_score, current-round result or None) per competitor
        festival_type: "normal" or "esaf"
        current_round: Round the result is recorded in

    Returns:
        Competitors keyed by id, named "Schwinger <id>".
    """
    competitors = {}
    for competitor_id, base_score, result in entries:
        competitor = Competitor.create(
            competitor_id, f"Schwinger {competitor_id}", ROUND_COUNTS[festival_type],
            base_score=base_score,
        )
        if result is not None:
            competitor = competitor.with_result(current_round, parse_result(result))
        competitors[competitor_id] = competitor
    return competitors


def row_summary(rows) -> list[str]:
    """Condense standing rows: "<label> <id>", "<label> ..." or the line key."""
    summary = []
    for row in rows:
        if row.kind == "competitor":
            summary.append(f"{row.label} {row.competitor.id}")
        elif row.kind == "placeholder":
            summary.append(f"{row.label} ...")
        else:
            summary.append(row.line)
    return summary
