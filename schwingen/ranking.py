"""Tie-aware rank labels for a standing sorted by total."""

from collections.abc import Sequence
from dataclasses import dataclass

from schwingen.models import Competitor


@dataclass(frozen=True)
class RankInfo:
    """Rank of a competitor in a standing.

    Attributes:
        rank: Dense rank (1 = best); equal totals share a rank
        label: Rank with a letter distinguishing tied competitors, e.g. "2b"
    """
    rank: int
    label: str


def next_suffix(suffix: str) -> str:
    """Return the suffix following ``suffix`` for the next tied competitor.

    Letters run a..z, then roll over to two letters like spreadsheet
    columns: "z" -> "aa", "az" -> "ba", "zz" -> "aaa".
    """
    letters = list(suffix)
    i = len(letters) - 1
    while i >= 0:
        if letters[i] != "z":
            letters[i] = chr(ord(letters[i]) + 1)
            return "".join(letters)
        letters[i] = "a"
        i -= 1
    return "a" + "".join(letters)


def rank_labels(totals: Sequence[float]) -> list[RankInfo]:
    """Compute the rank and rank label for each position of a standing.

    Args:
        totals: Totals sorted descending (tied totals adjacent)

    Returns:
        RankInfo per position, aligned with ``totals``. The rank advances by
        one at every strict decrease of the total (dense ranking); members of
        a rank group are labelled a, b, c, ... in list order.
    """
    ranks: list[RankInfo] = []
    rank = 0
    suffix = ""
    previous: float | None = None
    for total in totals:
        if previous is not None and total == previous:
            suffix = next_suffix(suffix)
        else:
            rank += 1
            suffix = "a"
        ranks.append(RankInfo(rank=rank, label=f"{rank}{suffix}"))
        previous = total
    return ranks


def rank_competitors(competitors: Sequence[Competitor]) -> list[RankInfo]:
    """Compute rank labels for competitors already sorted by total."""
    return rank_labels([c.total for c in competitors])


def sort_by_total(competitors: Sequence[Competitor]) -> list[Competitor]:
    """Sort competitors by total, best first. Ties keep their input order."""
    return sorted(competitors, key=lambda c: c.total, reverse=True)
