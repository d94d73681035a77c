import random

import pytest

from neighbourhoods.cases import CaseRecord, aggregate_case_counts, decode_case_record
from neighbourhoods.errors import MalformedRecord


def test_decode_case_record_carries_descriptive_fields(case_documents):
    record = decode_case_record(case_documents[0])

    assert record == CaseRecord(
        neighbourhood="Mimico (includes Humber Bay Shores)",
        record_id=1,
        outbreak_associated="Sporadic",
        age_group="20 to 29 Years",
        fsa="M8V",
    )


def test_decode_case_record_allows_missing_fields():
    assert decode_case_record({}) == CaseRecord()
    assert decode_case_record({"Neighbourhood Name": None}).neighbourhood is None


def test_decode_case_record_custom_neighbourhood_field():
    record = decode_case_record({"hood": "Annex"}, neighbourhood_field="hood")
    assert record.neighbourhood == "Annex"


@pytest.mark.parametrize(
    "data",
    [
        ["Annex"],
        "Annex",
        {"Neighbourhood Name": 95},
        {"Neighbourhood Name": ["Annex"]},
        {"_id": "7"},
        {"_id": True},
        {"FSA": 123},
    ],
)
def test_decode_case_record_rejects_malformed_records(data):
    with pytest.raises(MalformedRecord):
        decode_case_record(data)


def test_aggregate_merges_spelling_variants():
    records = [
        CaseRecord(neighbourhood="Briar Hill - Belgravia"),
        CaseRecord(neighbourhood="Briar Hill-Belgravia"),
        CaseRecord(neighbourhood="Mimico (includes Humber Bay Shores)"),
    ]

    assert aggregate_case_counts(records) == {"Briar Hill-Belgravia": 2, "Mimico": 1}


def test_aggregate_skips_records_without_neighbourhood(case_documents):
    records = [decode_case_record(doc) for doc in case_documents]
    counts = aggregate_case_counts(records)

    with_name = [r for r in records if r.neighbourhood is not None]
    assert sum(counts.values()) == len(with_name)
    assert counts == {
        "Briar Hill-Belgravia": 1,
        "Danforth East York": 1,
        "Mimico": 2,
        "Weston-Pellam Park": 1,
    }
    assert all(type(count) is int for count in counts.values())


def test_aggregate_only_missing_neighbourhoods_is_empty():
    assert aggregate_case_counts([CaseRecord(), CaseRecord(fsa="M5V")]) == {}
    assert aggregate_case_counts([]) == {}


def test_aggregate_is_order_independent(case_documents):
    records = [decode_case_record(doc) for doc in case_documents] * 3
    expected = aggregate_case_counts(records)

    rng = random.Random(2016)
    for _ in range(5):
        shuffled = list(records)
        rng.shuffle(shuffled)
        assert aggregate_case_counts(shuffled) == expected
