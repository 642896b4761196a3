"""
Tests for the ordered sub-record ledger.
"""

import itertools

import pytest

from core.errors import RecordNotFound
from core.profile import ledger


def _ids(records):
    return [r["id"] for r in records]


class TestAppend:
    def test_new_record_goes_first(self):
        records, first = ledger.append([], {"title": "First"})
        records, second = ledger.append(records, {"title": "Second"})

        assert [r["title"] for r in records] == ["Second", "First"]
        assert records[0]["id"] == second["id"]

    def test_assigns_unique_ids(self):
        records = []
        for i in range(20):
            records, _ = ledger.append(records, {"n": i})

        assert len(set(_ids(records))) == 20

    def test_regenerates_colliding_ids(self):
        ids = iter(["a", "a", "b"])
        records, _ = ledger.append([], {"n": 1}, id_factory=lambda: next(ids))

        records, stored = ledger.append(records, {"n": 2}, id_factory=lambda: next(ids))

        assert stored["id"] == "b"
        assert _ids(records) == ["b", "a"]

    def test_replaces_caller_supplied_id(self):
        records, stored = ledger.append([], {"id": "mine", "title": "x"})

        assert stored["id"] != "mine"
        assert records[0]["title"] == "x"

    def test_does_not_mutate_input(self):
        original = [{"id": "a", "title": "A"}]
        record = {"title": "B"}

        ledger.append(original, record)

        assert original == [{"id": "a", "title": "A"}]
        assert record == {"title": "B"}

    def test_accepts_none_as_empty(self):
        records, stored = ledger.append(None, {"title": "x"})

        assert records == [stored]


class TestRemoveById:
    @pytest.fixture
    def records(self):
        counter = itertools.count()
        result = []
        for title in ["E3", "E2", "E1"]:
            result, _ = ledger.append(result, {"title": title}, id_factory=lambda: f"id{next(counter)}")
        # newest first: E1 (id2), E2 (id1), E3 (id0)
        return result

    def test_removes_exactly_one_and_keeps_order(self, records):
        remaining, removed = ledger.remove_by_id(records, "id1")

        assert removed["title"] == "E2"
        assert [r["title"] for r in remaining] == ["E1", "E3"]

    def test_remove_first_and_last(self, records):
        remaining, _ = ledger.remove_by_id(records, "id2")
        remaining, _ = ledger.remove_by_id(remaining, "id0")

        assert [r["title"] for r in remaining] == ["E2"]

    def test_unknown_id_raises_and_leaves_ledger(self, records):
        before = [dict(r) for r in records]

        with pytest.raises(RecordNotFound) as exc_info:
            ledger.remove_by_id(records, "nonexistent-id", kind="education")

        assert exc_info.value.kind == "education"
        assert exc_info.value.record_id == "nonexistent-id"
        assert records == before

    def test_second_removal_of_same_id_raises(self, records):
        remaining, _ = ledger.remove_by_id(records, "id1")

        with pytest.raises(RecordNotFound):
            ledger.remove_by_id(remaining, "id1")

        assert len(remaining) == 2

    def test_empty_ledger(self):
        with pytest.raises(RecordNotFound):
            ledger.remove_by_id([], "anything")

    def test_index_of(self, records):
        assert ledger.index_of(records, "id2") == 0
        assert ledger.index_of(records, "id0") == 2
        assert ledger.index_of(records, "missing") == -1
