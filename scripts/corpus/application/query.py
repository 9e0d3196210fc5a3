from __future__ import annotations
import logging
from datetime import datetime, timedelta, timezone

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Search predicate
# ---------------------------------------------------------------------------
# A single GitHub search query exposes at most 1,000 results no matter how
# many repositories match. Sorting by stars and restarting with
# "stars:<N" (see narrow_query) walks past that cap one slice at a time.

RECENCY_WINDOW = timedelta(days=364)
DEFAULT_LANGUAGE = "go"


def recency_cutoff(now: datetime | None = None) -> datetime:
    """Oldest default-branch push still considered active: now minus 364 days."""
    now = now or datetime.now(tz=timezone.utc)
    return now - RECENCY_WINDOW


def build_query(cutoff: datetime, language: str = DEFAULT_LANGUAGE, min_stars: int | None = None) -> str:
    """
    Base predicate: public, unarchived repos in `language`, pushed since
    `cutoff`, most-starred first. `min_stars` adds a popularity floor,
    which is what the "fail" exhaustion policy expects.
    """
    parts = [
        "archived:false",
        "is:public",
        f"pushed:>={cutoff.strftime('%Y-%m-%d')}",
        f"language:{language}",
    ]
    if min_stars is not None:
        parts.append(f"stars:>={min_stars}")
    parts.append("sort:stars")

    query_str = " ".join(parts)
    log.debug("Base query: %s", query_str)
    return query_str


def narrow_query(orig_query: str, last_star_count: int) -> str:
    """Restrict the original query to repos below the last star count seen."""
    return f"{orig_query} stars:<{last_star_count}"
