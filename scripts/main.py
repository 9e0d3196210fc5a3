"""
main.py: Dependency Wiring (Composition Root)
---------------------------------------------
This file has ONE job: wire all the pieces together and run the app.

It does NOT contain any business logic. It just:
  1. Reads configuration from the command line and environment variables
  2. Creates concrete implementations of each interface
  3. Injects them into the classes that need them
  4. Calls the top-level use case (CorpusService.execute)
  5. Reports the result and exits

Dependency graph (what depends on what):
                  main.py  (wires everything)
                     |
          +----------+-----------+
          v                      v
    CorpusService            TsvReporter
          |
          v
    CrawlController
          |
    +-----+--------------+-------------------+
    v                    v                   v
ISearchClient     IRecordExtractor     IDeduplicator (optional)
(GitHub)          (GoModule)           (InMemory)
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import signal
import sys
from datetime import datetime

import httpx

# Application layer
from corpus.application.corpus_service import CorpusService
from corpus.application.crawler import MAX_RESTARTS, PAGE_DELAY, PAGE_TIMEOUT, CrawlController, ExhaustionPolicy
from corpus.application.deduplicator import InMemoryDeduplicator
from corpus.application.extractor import GoModuleExtractor
from corpus.application.query import build_query, recency_cutoff
from corpus.config import DEFAULT_COUNT, CorpusConfig

# Infrastructure layer
from corpus.infrastructure.github_client import GitHubClient
from corpus.infrastructure.tsv_reporter import TsvReporter

log = logging.getLogger(__name__)

EXIT_FAILED    = 1
EXIT_CANCELLED = 130

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def configure_logging(verbose: bool) -> None:
    """Log to stderr; stdout is reserved for the report."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    if not verbose:
        # httpx logs every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def _read_env() -> str:
    """
    Read the GitHub token.
    Fails fast with a clear error if it is missing.
    """
    token = os.environ.get("GITHUB_TOKEN")
    if not token:
        log.error("GITHUB_TOKEN environment variable is required")
        sys.exit(EXIT_FAILED)
    return token


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="corpus",
        description="Build a ranked corpus of popular, recently pushed Go modules",
    )
    parser.add_argument("--count", type=int, default=DEFAULT_COUNT,
                        help=f"number of modules to output (default: {DEFAULT_COUNT})")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="print verbose log output")
    parser.add_argument("--language", default="go",
                        help="repository language to search (default: go)")
    parser.add_argument("--min-stars", type=int, default=None,
                        help="only search repositories with at least this many stars")
    parser.add_argument("--policy", choices=[p.value for p in ExhaustionPolicy], default=ExhaustionPolicy.RESTART.value,
                        help="on running out of pages: restart below the last star count, or fail (default: restart)")
    parser.add_argument("--max-restarts", type=int, default=MAX_RESTARTS,
                        help="give up after this many restarts, 0 for no limit (default: %(default)s)")
    parser.add_argument("--delay", type=float, default=PAGE_DELAY,
                        help="seconds to wait between page requests (default: %(default)s)")
    parser.add_argument("--timeout", type=float, default=PAGE_TIMEOUT,
                        help="seconds before a single page request fails (default: %(default)s)")
    parser.add_argument("--overfetch", type=float, default=0.0,
                        help="crawl this fraction extra, then drop the lowest ranked (default: 0)")
    parser.add_argument("--unique", action="store_true",
                        help="keep only the first repository for each module path")
    args = parser.parse_args(argv)
    if args.count <= 0:
        parser.error("--count must be positive")
    return args


def build_config(args: argparse.Namespace, token: str) -> CorpusConfig:
    return CorpusConfig(
        token        = token,
        count        = args.count,
        verbose      = args.verbose,
        language     = args.language,
        min_stars    = args.min_stars,
        policy       = ExhaustionPolicy(args.policy),
        max_restarts = args.max_restarts,
        page_delay   = args.delay,
        page_timeout = args.timeout,
        overfetch    = args.overfetch,
        unique       = args.unique,
    )


# ---------------------------------------------------------------------------
# Dependency wiring
# ---------------------------------------------------------------------------


async def build_and_run(config: CorpusConfig, now: datetime | None = None) -> int:
    """
    Wires all dependencies together and executes the corpus use case.

    This is the Composition Root: the only place that knows which
    concrete class implements each interface. Returns the exit code.
    `now` pins the recency cutoff; it defaults to the current time.
    """
    cutoff    = recency_cutoff(now)
    query_str = build_query(cutoff, config.language, config.min_stars)

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    try:
        loop.add_signal_handler(signal.SIGINT, stop_event.set)
    except NotImplementedError:
        pass  # no signal handlers on Windows event loops

    client = httpx.AsyncClient(timeout=config.page_timeout)
    try:
        github_client = GitHubClient(
            token  = config.token,
            client = client,       # injected: GitHubClient doesn't create this
        )
        controller = CrawlController(
            github_client,
            GoModuleExtractor(),
            policy       = config.policy,
            page_delay   = config.page_delay,
            page_timeout = config.page_timeout,
            max_restarts = config.max_restarts,
            deduplicator = InMemoryDeduplicator() if config.unique else None,
        )
        service = CorpusService(
            controller = controller,
            reporter   = TsvReporter(sys.stdout),
            overfetch  = config.overfetch,
        )

        result = await service.execute(query_str, config.count, cutoff, stop_event)
    finally:
        # Always clean up, even if an exception occurred
        await client.aclose()
        try:
            loop.remove_signal_handler(signal.SIGINT)
        except NotImplementedError:
            pass

    if result.status == "success":
        log.info("Success | %d modules | %.0fs", result.total_entries, result.elapsed_secs)
        return 0
    if result.status == "cancelled":
        log.error("Cancelled: %s", result.error_message)
        return EXIT_CANCELLED
    log.error("Failed: %s", result.error_message)
    return EXIT_FAILED


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging(args.verbose)
    token = _read_env()
    try:
        config = build_config(args, token)
    except ValueError as exc:
        log.error("Invalid configuration: %s", exc)
        sys.exit(EXIT_FAILED)
    sys.exit(asyncio.run(build_and_run(config)))


if __name__ == "__main__":
    main()
