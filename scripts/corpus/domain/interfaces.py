"""
Domain Layer: Interfaces (Abstract Contracts)
---------------------------------------------
These are ABSTRACT definitions of what the outer layers must provide.
The domain layer defines the shape; infrastructure and application implement it.

The crawl controller only ever sees ISearchClient and IRecordExtractor,
so tests can hand it a FakeSearchClient that replays canned pages
without touching the network.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from datetime import datetime

from .entities import Entry, Ineligible, RawRecord, SearchPage


class ISearchClient(ABC):
    """
    Contract that any search backend must fulfil.
    The application layer depends on THIS, not on the concrete GitHubClient.
    """

    @abstractmethod
    async def fetch_page(self, query_str: str, cursor: str | None = None) -> SearchPage:
        """
        Fetch one page of search results.

        Raises SearchError on any transport or API-level failure.
        Callers treat that as fatal; implementations must not retry.
        """
        ...


class IRecordExtractor(ABC):
    """Turns one raw search record into a scored Entry, or says why it can't."""

    @abstractmethod
    def extract(self, raw: RawRecord, cutoff: datetime) -> Entry | Ineligible:
        ...


class IReporter(ABC):
    """
    Contract for the report sink.
    Receives the final ranked entries; never sees partial results.
    """

    @abstractmethod
    def write(self, entries: list[Entry]) -> None:
        """Serialize the ranked entries, one row each, in the given order."""
        ...


class IDeduplicator(ABC):
    """
    Contract for the optional deduplication step.
    Separated from the controller so each class has one job.
    """

    @abstractmethod
    def is_fresh(self, entry: Entry) -> bool:
        """Return True the first time a module path is seen, then remember it."""
        ...

    @abstractmethod
    def total_seen(self) -> int:
        """Return how many unique module paths have been seen so far."""
        ...
