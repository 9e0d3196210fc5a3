from __future__ import annotations
from datetime import datetime, timedelta, timezone

from corpus.application.query import build_query, narrow_query, recency_cutoff


def test_recency_cutoff_is_364_days_back():
    now = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    assert recency_cutoff(now) == now - timedelta(days=364)


def test_build_query():
    cutoff = datetime(2023, 6, 3, 12, 0, tzinfo=timezone.utc)
    assert build_query(cutoff) == "archived:false is:public pushed:>=2023-06-03 language:go sort:stars"


def test_build_query_with_language_and_floor():
    cutoff = datetime(2023, 6, 3, tzinfo=timezone.utc)
    assert build_query(cutoff, language="rust", min_stars=500) == (
        "archived:false is:public pushed:>=2023-06-03 language:rust stars:>=500 sort:stars"
    )


def test_narrow_query():
    assert narrow_query("language:go sort:stars", 1234) == "language:go sort:stars stars:<1234"
