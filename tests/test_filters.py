"""Tests for the filter engine and the location vocabulary."""

from job_browser.filters import FilterCriteria, apply_criteria, apply_filters
from job_browser.models import JobRecord
from job_browser.store import merge
from job_browser.vocabulary import derive_locations


def test_search_matches_title_case_insensitively(sample_records):
    assert [r.slug for r in apply_filters(sample_records, "engineer", "", False)] == ["a"]


def test_search_matches_company_name(sample_records):
    assert [r.slug for r in apply_filters(sample_records, "ZEN")] == ["b"]


def test_search_term_is_trimmed(sample_records):
    assert [r.slug for r in apply_filters(sample_records, "  scientist ")] == ["b"]


def test_remote_only(sample_records):
    assert [r.slug for r in apply_filters(sample_records, "", "", True)] == ["b"]


def test_location_exact_match(sample_records):
    assert [r.slug for r in apply_filters(sample_records, "", "Berlin", False)] == ["a"]
    assert apply_filters(sample_records, "", "berlin", False) == []


def test_empty_inputs_return_everything_in_order(sample_records):
    assert apply_filters(sample_records) == sample_records


def test_missing_fields_compare_as_empty():
    records = [JobRecord(slug="x"), JobRecord(slug="y", title="Engineer")]

    assert [r.slug for r in apply_filters(records, "engineer")] == ["y"]
    assert apply_filters(records, "", "Berlin") == []
    assert [r.slug for r in apply_filters(records)] == ["x", "y"]


def test_filters_are_pure(sample_records):
    before = [r.model_dump() for r in sample_records]

    first = apply_filters(sample_records, "e", "", False)
    second = apply_filters(sample_records, "e", "", False)

    assert first == second
    assert [r.model_dump() for r in sample_records] == before


def test_criteria_helper(sample_records):
    criteria = FilterCriteria(search_term="data", remote_only=True)

    assert not criteria.is_default
    assert FilterCriteria().is_default
    assert [r.slug for r in apply_criteria(sample_records, criteria)] == ["b"]


def test_vocabulary_sorted_deduplicated_without_blanks():
    records = [
        JobRecord(slug="1", location="Munich"),
        JobRecord(slug="2", location="  Berlin "),
        JobRecord(slug="3", location="Berlin"),
        JobRecord(slug="4", location="   "),
        JobRecord(slug="5"),
        JobRecord(slug="6", location="Amsterdam"),
    ]

    assert derive_locations(records) == ["Amsterdam", "Berlin", "Munich"]


def test_vocabulary_stays_consistent_across_merges():
    store = []
    batches = [
        [JobRecord(slug="1", location="Zurich"), JobRecord(slug="2", location="")],
        [JobRecord(slug="3", location="Berlin"), JobRecord(slug="1", location="Paris")],
        [JobRecord(slug="4", location="Zurich"), JobRecord(slug="5", location="Athens")],
    ]
    for batch in batches:
        store = merge(store, batch)
        locations = derive_locations(store)
        assert locations == sorted(set(locations))
        assert all(loc.strip() for loc in locations)

    # The duplicate slug "1" from the second batch never made it in.
    assert derive_locations(store) == ["Athens", "Berlin", "Zurich"]
