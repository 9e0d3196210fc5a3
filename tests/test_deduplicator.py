from __future__ import annotations

from corpus.application.deduplicator import InMemoryDeduplicator
from fakes import entry


def test_first_occurrence_is_fresh():
    dedup = InMemoryDeduplicator()

    assert dedup.is_fresh(entry("a", 10))
    assert not dedup.is_fresh(entry("a", 5))
    assert dedup.is_fresh(entry("b", 5))
    assert dedup.total_seen() == 2
