from __future__ import annotations


class CorpusError(Exception):
    """Base class for every failure that aborts a corpus run."""


class SearchError(CorpusError):
    """A search request failed: transport, HTTP status, GraphQL error or timeout."""


class ExhaustedError(CorpusError):
    """Ran out of candidates before reaching the target count."""

    def __init__(self, found: int, target: int, pages: int) -> None:
        self.found  = found
        self.target = target
        self.pages  = pages
        super().__init__(
            f"ran out of candidates before reaching target: "
            f"{found}/{target} modules after {pages} pages"
        )


class StuckRestartError(CorpusError):
    """A narrowed restart made no progress, or the restart limit was hit."""


class CrawlCancelled(CorpusError):
    """The caller asked the crawl to stop."""
