from __future__ import annotations
import csv
import logging
import sys
from typing import TextIO

from corpus.domain.entities import Entry
from corpus.domain.interfaces import IReporter

log = logging.getLogger(__name__)

HEADER = ["module", "version", "source", "score"]


class TsvReporter(IReporter):
    """
    Writes ranked entries as tab-separated rows.

    Receives the output stream (injected) and never closes it; the
    composition root passes sys.stdout.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout

    def write(self, entries: list[Entry]) -> None:
        writer = csv.writer(self._stream, delimiter="\t", lineterminator="\n")
        writer.writerow(HEADER)
        writer.writerows(
            (e.module_path, e.version, e.source_url, str(e.score))
            for e in entries
        )
        self._stream.flush()
        log.debug("Wrote %d report rows", len(entries))
