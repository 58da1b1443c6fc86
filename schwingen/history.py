"""Undo history for the competitor collection."""

from collections.abc import Iterator, Mapping

from schwingen.models import Competitor

Collection = dict[str, Competitor]


class History:
    """A stack of competitor-collection snapshots.

    Competitor records are immutable, so a snapshot only copies the mapping
    and shares the records themselves with the live collection. Replacing a
    record in the live collection never reaches a pushed snapshot.
    """

    def __init__(self, snapshots: list[Collection] | None = None):
        self._snapshots: list[Collection] = [dict(s) for s in snapshots or []]

    def __len__(self) -> int:
        return len(self._snapshots)

    def __iter__(self) -> Iterator[Collection]:
        return iter(self._snapshots)

    def push(self, collection: Mapping[str, Competitor]) -> None:
        """Snapshot ``collection``. Call before every mutating save."""
        self._snapshots.append(dict(collection))

    def pop(self) -> Collection | None:
        """Remove and return the most recent snapshot, or None if empty."""
        if not self._snapshots:
            return None
        return self._snapshots.pop()
