import pytest

from riskon.store import ApplicantNotFoundError, ApplicantStore


def test_from_json_keeps_insertion_order(store):
    assert store.ids() == ["A001", "B002", "C003"]
    assert len(store) == 3
    assert "A001" in store and "Z999" not in store


def test_get_returns_record(store, sample_data):
    assert store.get("C003") == sample_data["C003"]


@pytest.mark.parametrize("applicant_id", ["missing", None])
def test_get_unknown_raises(store, applicant_id):
    with pytest.raises(ApplicantNotFoundError) as ei:
        store.get(applicant_id)
    assert ei.value.applicant_id == applicant_id


def test_store_is_read_only(store):
    with pytest.raises(TypeError):
        store._data["NEW"] = {}


def test_store_detached_from_source(sample_data):
    s = ApplicantStore(sample_data)
    sample_data["LATE"] = {}
    assert "LATE" not in s
