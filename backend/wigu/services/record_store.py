"""In-memory record store keyed by session id and entity id.

Holds the records the scoring core reads: responses, advisor responses,
insights, Five Insights profiles, syntheses and progress trackers. Only
get-by-id and list-for-session are required of a persistence layer; there
are no multi-record transactions.
"""

import logging
from typing import TypeVar

from wigu.core.errors import NotFoundError
from wigu.schemas.base import RecordModel
from wigu.schemas.career import CareerResponse

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=RecordModel)


def record_id(record: RecordModel) -> str:
    """Entity id of a record.

    CareerResponse has no id of its own and is keyed by question_id.

    Raises:
        ValueError: If the record type carries no id.
    """
    if isinstance(record, CareerResponse):
        return record.question_id
    identifier = getattr(record, "id", None)
    if not isinstance(identifier, str):
        raise ValueError(f"{type(record).__name__} records have no id")
    return identifier


class RecordStore:
    """In-memory store for session records.

    Records are keyed by type, session id and entity id, so sessions that
    answer the same question bank never collide. A later put with the same
    key replaces the earlier record. Safe for single-threaded async usage.
    """

    def __init__(self) -> None:
        self._records: dict[type[RecordModel], dict[tuple[str, str], RecordModel]] = {}

    def put(self, session_id: str, record: RecordModel) -> str:
        """Store a record under a session.

        Args:
            session_id: Session the record belongs to.
            record: Record to store.

        Returns:
            The record's entity id.
        """
        identifier = record_id(record)
        self._records.setdefault(type(record), {})[(session_id, identifier)] = record
        logger.debug(
            "Stored %s %s for session %s", type(record).__name__, identifier, session_id
        )
        return identifier

    def get_by_id(
        self, record_type: type[RecordT], session_id: str, record_id: str
    ) -> RecordT:
        """Get a session's record by type and id.

        Raises:
            NotFoundError: If no such record is stored for the session.
        """
        record = self._records.get(record_type, {}).get((session_id, record_id))
        if record is None:
            raise NotFoundError(record_type.__name__, record_id)
        return record  # type: ignore[return-value]

    def list_for_session(
        self, record_type: type[RecordT], session_id: str
    ) -> list[RecordT]:
        """All records of a type for a session, in insertion order."""
        return [
            record  # type: ignore[misc]
            for (owner, _), record in self._records.get(record_type, {}).items()
            if owner == session_id
        ]

    def delete(
        self, record_type: type[RecordModel], session_id: str, record_id: str
    ) -> None:
        """Remove a session's record.

        Raises:
            NotFoundError: If no such record is stored for the session.
        """
        records = self._records.get(record_type, {})
        if (session_id, record_id) not in records:
            raise NotFoundError(record_type.__name__, record_id)
        del records[(session_id, record_id)]

    def clear(self) -> None:
        """Remove all records (for testing)."""
        self._records.clear()


_record_store: RecordStore | None = None


def get_record_store() -> RecordStore:
    """Get the singleton record store instance."""
    global _record_store
    if _record_store is None:
        _record_store = RecordStore()
    return _record_store


def reset_record_store() -> None:
    """Reset the record store singleton (for testing)."""
    global _record_store
    if _record_store is not None:
        _record_store.clear()
    _record_store = None
