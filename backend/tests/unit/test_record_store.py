"""Tests for the in-memory record store."""

import pytest

from wigu.core.errors import NotFoundError
from wigu.schemas.career import AdvisorResponse, CareerResponse
from wigu.services.record_store import (
    RecordStore,
    get_record_store,
    record_id,
    reset_record_store,
)


@pytest.fixture
def store() -> RecordStore:
    return RecordStore()


class TestRecordId:
    """Tests for record_id()."""

    def test_self_responses_use_question_id(self, make_response) -> None:
        """Self responses are keyed by the question they answer."""
        assert record_id(make_response(question_id="q42")) == "q42"

    def test_other_records_use_id(self, make_advisor_response) -> None:
        assert record_id(make_advisor_response(id="adv9")) == "adv9"


class TestRecordStore:
    """Tests for RecordStore operations."""

    def test_put_then_get(self, store: RecordStore, make_response) -> None:
        """A stored record is returned by type, session and id."""
        response = make_response()
        identifier = store.put("s1", response)

        assert store.get_by_id(CareerResponse, "s1", identifier) == response

    def test_get_missing_raises(self, store: RecordStore) -> None:
        """Unknown ids raise NotFoundError naming the record type."""
        with pytest.raises(NotFoundError) as exc_info:
            store.get_by_id(CareerResponse, "s1", "missing")

        assert exc_info.value.code == "NOT_FOUND"
        assert exc_info.value.message == "CareerResponse with id 'missing' not found"

    def test_types_are_separate(
        self, store: RecordStore, make_response, make_advisor_response
    ) -> None:
        """The same id under another type is a different record."""
        store.put("s1", make_response(question_id="x1"))

        with pytest.raises(NotFoundError):
            store.get_by_id(AdvisorResponse, "s1", "x1")

        store.put("s1", make_advisor_response(id="x1"))
        assert store.get_by_id(AdvisorResponse, "s1", "x1").id == "x1"

    def test_sessions_sharing_question_ids_do_not_collide(
        self, store: RecordStore, make_response
    ) -> None:
        """Two sessions answering the same question keep separate answers."""
        first = make_response("First session answer.", question_id="q1")
        second = make_response("Second session answer.", question_id="q1")
        store.put("s1", first)
        store.put("s2", second)

        assert store.list_for_session(CareerResponse, "s1") == [first]
        assert store.list_for_session(CareerResponse, "s2") == [second]
        assert store.get_by_id(CareerResponse, "s1", "q1") == first
        assert store.get_by_id(CareerResponse, "s2", "q1") == second

    def test_get_is_scoped_to_session(self, store: RecordStore, make_response) -> None:
        """A record is not visible under another session."""
        store.put("s1", make_response(question_id="q1"))

        with pytest.raises(NotFoundError):
            store.get_by_id(CareerResponse, "s2", "q1")

    def test_put_replaces_same_session_and_id(
        self, store: RecordStore, make_response
    ) -> None:
        """A later put for the same session and id wins."""
        store.put("s1", make_response("First answer.", question_id="q1"))
        store.put("s1", make_response("Second answer.", question_id="q1"))

        assert store.get_by_id(CareerResponse, "s1", "q1").response == "Second answer."
        assert len(store.list_for_session(CareerResponse, "s1")) == 1

    def test_list_for_session(self, store: RecordStore, make_response) -> None:
        """Only the session's records are listed, in insertion order."""
        first, second, other = make_response(), make_response(), make_response()
        store.put("s1", first)
        store.put("s2", other)
        store.put("s1", second)

        assert store.list_for_session(CareerResponse, "s1") == [first, second]
        assert store.list_for_session(CareerResponse, "s3") == []

    def test_delete(self, store: RecordStore, make_response) -> None:
        identifier = store.put("s1", make_response())
        store.delete(CareerResponse, "s1", identifier)

        with pytest.raises(NotFoundError):
            store.get_by_id(CareerResponse, "s1", identifier)

    def test_delete_leaves_other_sessions(
        self, store: RecordStore, make_response
    ) -> None:
        """Deleting one session's record keeps another session's copy."""
        store.put("s1", make_response(question_id="q1"))
        kept = make_response(question_id="q1")
        store.put("s2", kept)

        store.delete(CareerResponse, "s1", "q1")

        assert store.get_by_id(CareerResponse, "s2", "q1") == kept

    def test_delete_missing_raises(self, store: RecordStore) -> None:
        with pytest.raises(NotFoundError):
            store.delete(CareerResponse, "s1", "missing")

    def test_clear(self, store: RecordStore, make_response) -> None:
        """Clearing removes every record."""
        store.put("s1", make_response())
        store.clear()

        assert store.list_for_session(CareerResponse, "s1") == []


class TestSingleton:
    """Tests for the process-wide store."""

    def test_returns_same_instance(self) -> None:
        assert get_record_store() is get_record_store()

    def test_reset_empties_store(self, make_response) -> None:
        """Reset leaves no records behind."""
        get_record_store().put("s1", make_response())
        reset_record_store()

        assert get_record_store().list_for_session(CareerResponse, "s1") == []
