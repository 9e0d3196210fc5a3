from __future__ import annotations
from corpus.domain.entities import Entry
from corpus.domain.interfaces import IDeduplicator


class InMemoryDeduplicator(IDeduplicator):
    """
    Remembers every module path seen during one crawl.

    Restart windows can overlap when several repos share the boundary star
    count, and forks or mirrors may declare the same module path; with this
    plugged in, only the first (most starred) occurrence is kept.
    """

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def is_fresh(self, entry: Entry) -> bool:
        if entry.module_path in self._seen:
            return False
        self._seen.add(entry.module_path)
        return True

    def total_seen(self) -> int:
        return len(self._seen)
