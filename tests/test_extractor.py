from __future__ import annotations
from datetime import timedelta

from corpus.application.extractor import NO_MODULE, STALE_PUSH, GoModuleExtractor
from corpus.domain.entities import Entry, Ineligible
from fakes import CUTOFF, record

extractor = GoModuleExtractor()


def test_eligible_record_becomes_entry():
    raw = record("tool", stars=120, forks=30)

    assert extractor.extract(raw, CUTOFF) == Entry(
        module_path = "github.com/test/tool",
        source_url  = "https://github.com/test/tool",
        version     = "oid-tool",
        score       = 150,
    )


def test_extract_is_pure():
    raw = record("tool", stars=7, forks=2)
    assert extractor.extract(raw, CUTOFF) == extractor.extract(raw, CUTOFF)

    stale = record("old", stars=7, pushed=CUTOFF - timedelta(days=1))
    assert extractor.extract(stale, CUTOFF) == extractor.extract(stale, CUTOFF)


def test_missing_module_is_ineligible_regardless_of_score():
    raw = record("popular", stars=100_000, forks=50_000, go_mod="go 1.21\n")
    assert extractor.extract(raw, CUTOFF) == Ineligible("https://github.com/test/popular", NO_MODULE)


def test_empty_go_mod_is_ineligible():
    outcome = extractor.extract(record("nomod", stars=10, go_mod=""), CUTOFF)
    assert isinstance(outcome, Ineligible)
    assert outcome.reason == NO_MODULE


def test_push_exactly_at_cutoff_is_eligible():
    outcome = extractor.extract(record("edge", stars=1, pushed=CUTOFF), CUTOFF)
    assert isinstance(outcome, Entry)


def test_push_just_before_cutoff_is_stale():
    outcome = extractor.extract(record("edge", stars=1, pushed=CUTOFF - timedelta(microseconds=1)), CUTOFF)
    assert outcome == Ineligible("https://github.com/test/edge", STALE_PUSH)


def test_missing_push_date_is_stale():
    outcome = extractor.extract(record("empty", stars=1, pushed=None), CUTOFF)
    assert isinstance(outcome, Ineligible)
    assert outcome.reason == STALE_PUSH


def test_module_check_runs_before_recency_check():
    raw = record("both", stars=1, pushed=None, go_mod="")
    assert extractor.extract(raw, CUTOFF).reason == NO_MODULE
