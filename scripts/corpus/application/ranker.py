from __future__ import annotations
from corpus.domain.entities import Entry


def rank(entries: list[Entry]) -> list[Entry]:
    """
    Order entries by score, highest first.
    sorted() is stable with reverse=True, so equal scores keep crawl order.
    """
    return sorted(entries, key=lambda e: e.score, reverse=True)
