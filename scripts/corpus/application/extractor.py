from __future__ import annotations
from datetime import datetime

from corpus.domain.entities import Entry, Ineligible, RawRecord
from corpus.domain.interfaces import IRecordExtractor
from .modfile import module_path

NO_MODULE  = "no module descriptor"
STALE_PUSH = "stale push date"


class GoModuleExtractor(IRecordExtractor):
    """
    Turns a repository search node into a scored Go module Entry.

    Pure: no I/O and no logging. The controller decides what to do
    with an Ineligible result.
    """

    def extract(self, raw: RawRecord, cutoff: datetime) -> Entry | Ineligible:
        path = module_path(raw.go_mod_text) if raw.go_mod_text else ""
        if not path:
            return Ineligible(source_url=raw.url, reason=NO_MODULE)

        # GitHub's "pushed" search filter also matches pushes to non-default
        # branches, so the default branch head is checked again here.
        if raw.pushed_date is None or raw.pushed_date < cutoff:
            return Ineligible(source_url=raw.url, reason=STALE_PUSH)

        return Entry(
            module_path = path,
            source_url  = raw.url,
            version     = raw.head_oid or "",
            # For now, the score is just the sum of stars and forks.
            score       = raw.stargazer_count + raw.fork_count,
        )
