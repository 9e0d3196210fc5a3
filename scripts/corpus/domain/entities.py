from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class RawRecord:
    """
    Read-only view of one repository node returned by the search API.

    Field names are OURS (snake_case), not GitHub's (camelCase).
    The translation happens in the client's anti-corruption layer.
    """
    url:             str
    stargazer_count: int
    fork_count:      int
    pushed_date:     datetime | None
    head_oid:        str | None
    go_mod_text:     str = ""


@dataclass(frozen=True)
class Entry:
    """
    One eligible Go module, scored and pinned to a commit.
    Created by the record extractor and never changed afterwards.
    """
    module_path: str
    source_url:  str
    version:     str
    score:       int


@dataclass(frozen=True)
class Ineligible:
    """Why a raw record did not become an Entry."""
    source_url: str
    reason:     str


@dataclass(frozen=True)
class RateLimit:
    cost:      int
    limit:     int
    remaining: int
    reset_at:  datetime | None


@dataclass(frozen=True)
class SearchPage:
    """One page of search results plus the pagination bookmark."""
    records:          list[RawRecord]
    end_cursor:       str | None
    has_next_page:    bool
    rate_limit:       RateLimit | None = None
    repository_count: int = 0


@dataclass
class CrawlState:
    """
    Mutable bookkeeping for a single crawl invocation.
    Owned by the crawl controller and dropped once the crawl returns.
    """
    query_str:       str
    cursor:          str | None = None
    accumulated:     list[Entry] = field(default_factory=list)
    last_star_count: int | None = None
    page:            int = 0
    restarts:        int = 0


@dataclass(frozen=True)
class CorpusResult:
    """
    Immutable value object summarising a completed corpus run.
    Returned by the application service when crawling finishes.
    """
    total_entries: int
    status:        str
    elapsed_secs:  float
    entries:       list[Entry] = field(default_factory=list)
    error_message: str | None = None
