from __future__ import annotations

import asyncio
import logging
import math
from datetime import datetime, timezone

from corpus.domain.entities import CorpusResult
from corpus.domain.errors import CorpusError, CrawlCancelled
from corpus.domain.interfaces import IReporter
from .crawler import CrawlController
from .ranker import rank

log = logging.getLogger(__name__)


class CorpusService:
    """
    The top-level use case: crawl, rank, report.

    Receives all dependencies via constructor injection.
    Knows about the sequence of operations but not the implementation details.
    """

    def __init__(self,controller: CrawlController,reporter: IReporter,overfetch: float = 0.0) -> None:
        if overfetch < 0:
            raise ValueError(f"overfetch must not be negative, got {overfetch}")
        self._controller = controller
        self._reporter   = reporter
        self._overfetch  = overfetch

    def crawl_target(self, count: int) -> int:
        """
        How many entries to crawl for `count` reported ones.

        The search is sorted by stars while the score also counts forks,
        so the tail near the cutoff is skewed. Fetching a bit extra and
        discarding the lowest-ranked ones evens that out.
        """
        return math.ceil(count * (1 + self._overfetch))

    async def execute(self,query_str: str,count: int,cutoff: datetime,stop_event: asyncio.Event | None = None) -> CorpusResult:
        """
        Build the corpus for `count` modules and hand it to the reporter.
        Returns a CorpusResult describing what happened; on failure
        nothing is reported.
        """
        started_at = datetime.now(tz=timezone.utc)
        target     = self.crawl_target(count)

        log.info("CorpusService | count: %d | crawl target: %d", count, target)

        try:
            entries = await self._controller.collect(query_str, target, cutoff, stop_event)
        except CrawlCancelled as exc:
            elapsed = (datetime.now(tz=timezone.utc) - started_at).total_seconds()
            log.debug("Crawl cancelled: %s", exc)
            return CorpusResult(
                total_entries = 0,
                status        = "cancelled",
                elapsed_secs  = elapsed,
                error_message = str(exc),
            )
        except CorpusError as exc:
            elapsed = (datetime.now(tz=timezone.utc) - started_at).total_seconds()
            log.debug("Crawl failed: %s", exc, exc_info=True)
            return CorpusResult(
                total_entries = 0,
                status        = "failed",
                elapsed_secs  = elapsed,
                error_message = str(exc),
            )

        ranked = rank(entries)[:count]
        self._reporter.write(ranked)

        elapsed = (datetime.now(tz=timezone.utc) - started_at).total_seconds()
        log.info("Corpus complete | %d modules | %.0fs", len(ranked), elapsed)
        return CorpusResult(
            total_entries = len(ranked),
            status        = "success",
            elapsed_secs  = elapsed,
            entries       = ranked,
        )
