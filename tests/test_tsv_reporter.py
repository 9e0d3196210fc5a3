from __future__ import annotations
import io

from corpus.application.ranker import rank
from corpus.domain.entities import Entry
from corpus.infrastructure.tsv_reporter import TsvReporter


def test_report_rows_in_ranked_order():
    entries = [
        Entry("modA", "urlA", "v1", 12),
        Entry("modB", "urlB", "v2", 40),
    ]
    out = io.StringIO()

    TsvReporter(out).write(rank(entries))

    assert out.getvalue() == (
        "module\tversion\tsource\tscore\n"
        "modB\tv2\turlB\t40\n"
        "modA\tv1\turlA\t12\n"
    )


def test_empty_report_has_header_only():
    out = io.StringIO()
    TsvReporter(out).write([])
    assert out.getvalue() == "module\tversion\tsource\tscore\n"
