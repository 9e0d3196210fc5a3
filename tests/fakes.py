"""Test doubles and builders shared by the test modules."""

from __future__ import annotations
import asyncio
from datetime import datetime, timedelta, timezone

from corpus.domain.entities import Entry, RawRecord, SearchPage
from corpus.domain.interfaces import ISearchClient

NOW    = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
CUTOFF = NOW - timedelta(days=364)
RECENT = NOW - timedelta(days=3)


def record(name: str, stars: int, forks: int = 0, pushed: datetime | None = RECENT, go_mod: str | None = None) -> RawRecord:
    """A repo named `name` whose go.mod declares github.com/test/<name>."""
    return RawRecord(
        url             = f"https://github.com/test/{name}",
        stargazer_count = stars,
        fork_count      = forks,
        pushed_date     = pushed,
        head_oid        = f"oid-{name}",
        go_mod_text     = f"module github.com/test/{name}\n\ngo 1.21\n" if go_mod is None else go_mod,
    )


def page(*records: RawRecord, cursor: str | None = None, has_next: bool = False) -> SearchPage:
    return SearchPage(records=list(records), end_cursor=cursor, has_next_page=has_next)


def entry(name: str, score: int) -> Entry:
    return Entry(
        module_path = f"github.com/test/{name}",
        source_url  = f"https://github.com/test/{name}",
        version     = f"oid-{name}",
        score       = score,
    )


class FakeSearchClient(ISearchClient):
    """
    Replays canned pages (or raises canned exceptions) in order and
    records every (query, cursor) it was asked for.
    """

    def __init__(self, *responses: SearchPage | Exception, latency: float = 0.0) -> None:
        self._responses = list(responses)
        self._latency   = latency
        self.calls: list[tuple[str, str | None]] = []

    async def fetch_page(self, query_str: str, cursor: str | None = None) -> SearchPage:
        self.calls.append((query_str, cursor))
        if self._latency:
            await asyncio.sleep(self._latency)
        if not self._responses:
            raise AssertionError(f"unexpected request #{len(self.calls)}: {query_str!r} {cursor!r}")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response
