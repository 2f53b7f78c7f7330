"""Tests for page parsing and the slug-deduplicating merge."""

import pytest

from job_browser.errors import JobNotFoundError, MalformedResponseError
from job_browser.models import JobRecord
from job_browser.store import JobStore, merge, parse_page
from tests.conftest import job, page


def _records(*slugs):
    return [JobRecord(slug=s, title=f"Job {s}") for s in slugs]


def test_merge_appends_new_records_in_order():
    existing = _records("a", "b")
    incoming = _records("c", "d")

    merged = merge(existing, incoming)

    assert [r.slug for r in merged] == ["a", "b", "c", "d"]


def test_merge_is_idempotent_on_slug():
    existing = _records("a", "b", "c")

    merged = merge(existing, _records("c", "a", "b"))

    assert [r.slug for r in merged] == ["a", "b", "c"]


def test_merge_keeps_first_record_for_duplicate_slug():
    existing = [JobRecord(slug="a", title="Original")]
    incoming = [JobRecord(slug="a", title="Replacement"), JobRecord(slug="b", title="New")]

    merged = merge(existing, incoming)

    assert [r.title for r in merged] == ["Original", "New"]


def test_merge_drops_missing_slugs_and_duplicates_within_page():
    incoming = [JobRecord(title="no slug"), JobRecord(slug="  "), *_records("x", "x", "y")]

    merged = merge([], incoming)

    assert [r.slug for r in merged] == ["x", "y"]


def test_merge_does_not_mutate_existing():
    existing = _records("a")
    merge(existing, _records("b"))
    assert [r.slug for r in existing] == ["a"]


def test_parse_page_skips_bad_entries():
    payload = page(
        job("a"),
        None,
        "not a job",
        {"title": "missing slug"},
        job("b", title={"nested": "object"}),
        job("c", remote=1, tags="oops"),
    )

    records = parse_page(payload)

    assert [r.slug for r in records] == ["a", "c"]
    assert records[1].remote is True
    assert records[1].tags == []


@pytest.mark.parametrize("payload", [None, [], {"jobs": []}, {"data": "nope"}, {"data": {"a": 1}}])
def test_parse_page_rejects_wrong_shape(payload):
    with pytest.raises(MalformedResponseError):
        parse_page(payload)


def test_store_merge_page_counts_new_records():
    store = JobStore()

    assert store.merge_page(page(job("a"), job("b"))) == 2
    assert store.merge_page(page(job("b"), job("c"))) == 1
    assert store.slugs() == ["a", "b", "c"]
    assert len(store) == 3


def test_store_merge_page_rejects_malformed_payload_without_changes():
    store = JobStore(_records("a"))

    with pytest.raises(MalformedResponseError):
        store.merge_page({"data": None})

    assert store.slugs() == ["a"]


def test_store_get_returns_record_or_raises():
    store = JobStore(_records("a", "b"))

    assert store.get("b").slug == "b"
    with pytest.raises(JobNotFoundError):
        store.get("zzz")


def test_job_record_keeps_unknown_fields_and_action_url():
    record = JobRecord.model_validate(job("a", url=None, apply_url="https://apply.example", visa=True))

    assert record.action_url == "https://apply.example"
    assert record.model_dump()["visa"] is True


def test_parse_page_keeps_numeric_text_fields():
    records = parse_page(page(job("a", title=404, company_name=7, location=10115, description=1.5)))

    assert len(records) == 1
    assert records[0].title == "404"
    assert records[0].company_name == "7"
    assert records[0].location == "10115"
    assert records[0].description == "1.5"
