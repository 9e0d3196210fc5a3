from __future__ import annotations
import asyncio
import enum
import logging
from datetime import datetime

from corpus.domain.entities import CrawlState, Entry, Ineligible, SearchPage
from corpus.domain.errors import CrawlCancelled, ExhaustedError, SearchError, StuckRestartError
from corpus.domain.interfaces import IDeduplicator, IRecordExtractor, ISearchClient
from .query import narrow_query

log = logging.getLogger(__name__)

PAGE_TIMEOUT = 20.0   # GraphQL search queries can take a few seconds
PAGE_DELAY   = 1.0    # a search costs ~101 points; one page per second stays well inside the budget
MAX_RESTARTS = 1000


class ExhaustionPolicy(enum.Enum):
    """What to do when a query has no next page and the target isn't met."""
    RESTART = "restart"   # search is capped; narrow by stars and start over
    FAIL    = "fail"      # query was pre-filtered; running dry is an error


class CrawlController:
    """
    Walks a capped, cursor-paginated search until `target` entries are found.

    Strictly sequential: one request in flight, a fixed pause between
    requests, and no retries. When a query runs out of pages the controller
    either restarts below the last star count it saw, or gives up,
    depending on the ExhaustionPolicy.

    All dependencies are injected:
      - ISearchClient     -> how to talk to the search API
      - IRecordExtractor  -> how a raw record becomes an Entry
      - IDeduplicator     -> optional, drops repeated module paths
    """

    def __init__(self,client: ISearchClient,extractor: IRecordExtractor,*,policy: ExhaustionPolicy = ExhaustionPolicy.RESTART,page_delay: float = PAGE_DELAY,page_timeout: float = PAGE_TIMEOUT,max_restarts: int = MAX_RESTARTS,deduplicator: IDeduplicator | None = None) -> None:
        self._client       = client
        self._extractor    = extractor
        self._policy       = policy
        self._page_delay   = page_delay
        self._page_timeout = page_timeout
        self._max_restarts = max_restarts
        self._deduplicator = deduplicator

    async def _pause(self, stop_event: asyncio.Event | None) -> None:
        """Sleep for the inter-page delay, waking early if asked to stop."""
        if self._page_delay <= 0:
            return
        if stop_event is None:
            await asyncio.sleep(self._page_delay)
            return
        try:
            await asyncio.wait_for(stop_event.wait(), timeout=self._page_delay)
        except asyncio.TimeoutError:
            return
        raise CrawlCancelled("crawl cancelled during inter-page delay")

    async def _fetch(self, state: CrawlState) -> SearchPage:
        # The timeout scope covers this one call only and is released
        # before the next iteration starts.
        try:
            return await asyncio.wait_for(
                self._client.fetch_page(state.query_str, state.cursor),
                timeout=self._page_timeout,
            )
        except asyncio.TimeoutError as exc:
            raise SearchError(
                f"page {state.page} timed out after {self._page_timeout:g}s"
            ) from exc

    def _filter(self, state: CrawlState, page: SearchPage, cutoff: datetime, target: int) -> bool:
        """Append eligible entries from `page`. Returns True once the target is hit."""
        for raw in page.records:
            state.last_star_count = raw.stargazer_count
            outcome = self._extractor.extract(raw, cutoff)
            if isinstance(outcome, Ineligible):
                log.debug("%s: %s; skipping", outcome.source_url, outcome.reason)
                continue
            if self._deduplicator is not None and not self._deduplicator.is_fresh(outcome):
                log.debug("duplicate module %s in %s; skipping", outcome.module_path, outcome.source_url)
                continue

            state.accumulated.append(outcome)
            if len(state.accumulated) >= target:
                del state.accumulated[target:]
                return True
        return False

    def _restart(self, state: CrawlState, orig_query: str, target: int) -> None:
        """Move to the next star slice, or raise if that can't make progress."""
        found = len(state.accumulated)
        if self._policy is ExhaustionPolicy.FAIL:
            raise ExhaustedError(found, target, state.page)
        if state.last_star_count is None or state.last_star_count <= 0:
            # nothing seen yet, or nothing below zero stars to ask for
            raise ExhaustedError(found, target, state.page)

        narrowed = narrow_query(orig_query, state.last_star_count)
        if narrowed == state.query_str:
            raise StuckRestartError(
                f"restart at {state.last_star_count} stars made no progress "
                f"after {state.page} pages and {found} modules"
            )
        if self._max_restarts and state.restarts >= self._max_restarts:
            raise StuckRestartError(
                f"gave up after {state.restarts} restarts with {found}/{target} modules"
            )

        # GitHub's search is capped at 1k results, so start over
        # below the star count of the last result.
        log.info(
            "out of results at %d pages and %d modules; restarting at %d stars",
            state.page, found, state.last_star_count,
        )
        state.restarts += 1
        state.query_str = narrowed
        state.cursor = None

    async def collect(self,query_str: str,target: int,cutoff: datetime,stop_event: asyncio.Event | None = None) -> list[Entry]:
        """
        Crawl until `target` eligible entries are accumulated.

        Returns exactly `target` entries in the order they were found.
        Raises SearchError, ExhaustedError, StuckRestartError or
        CrawlCancelled; no partial result is returned on failure.
        """
        if target <= 0:
            raise ValueError(f"target must be positive, got {target}")

        state = CrawlState(query_str=query_str)
        log.info("Starting crawl | target=%d | policy=%s", target, self._policy.value)

        while True:
            if stop_event is not None and stop_event.is_set():
                raise CrawlCancelled(f"crawl cancelled with {len(state.accumulated)}/{target} modules")
            if state.page > 0:
                await self._pause(stop_event)

            state.page += 1
            if state.cursor is None:
                log.debug("querying first page of results for %r", state.query_str)
            else:
                log.debug("%d/%d done; querying page %d with cursor %s",
                          len(state.accumulated), target, state.page, state.cursor)

            first_page = state.cursor is None
            page = await self._fetch(state)
            if first_page:
                log.debug("%r matches %d repositories", state.query_str, page.repository_count)
            if page.rate_limit is not None:
                log.debug(
                    "Rate limit: %d/%d remaining (cost %d), resets %s",
                    page.rate_limit.remaining, page.rate_limit.limit,
                    page.rate_limit.cost, page.rate_limit.reset_at,
                )

            if self._filter(state, page, cutoff, target):
                log.info("Crawl complete | %d modules | %d pages | %d restarts",
                         len(state.accumulated), state.page, state.restarts)
                if self._deduplicator is not None:
                    log.info("Unique module paths seen: %d", self._deduplicator.total_seen())
                return state.accumulated

            if page.has_next_page and page.end_cursor:
                state.cursor = page.end_cursor
            else:
                self._restart(state, query_str, target)
