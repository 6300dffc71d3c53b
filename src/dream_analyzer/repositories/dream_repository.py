"""Repository for dream record persistence."""

from typing import Any, Callable, ContextManager
from uuid import UUID

from sqlmodel import Session, col, select

from ..db_models import DreamRecord, utcnow
from ..exceptions import PersistenceError
from ..logging import setup_logging

logger = setup_logging()


class DreamRepository:
    """
    Handles database operations for dream records.

    Encapsulates SQL queries and transaction management,
    keeping the pipeline and the HTTP layer free of database concerns.
    Ownership is not checked here; see DreamJournal.
    """

    def __init__(self, session_factory: Callable[[], ContextManager[Session]]):
        """
        Initializes the repository.

        Args:
            session_factory: Callable that returns a SQLModel Session context manager.
        """
        self._session_factory = session_factory

    def create(self, record: DreamRecord) -> UUID:
        """
        Persists a new dream record.

        Raises:
            PersistenceError: If the insert fails.
        """
        try:
            with self._session_factory() as db_session:
                db_session.add(record)
                db_session.commit()
                db_session.refresh(record)
                logger.info(
                    "Dream record persisted",
                    extra={"dream_id": str(record.id), "owner_id": record.owner_id},
                )
                return record.id
        except Exception as e:
            logger.exception("Failed to persist dream", extra={"owner_id": record.owner_id})
            raise PersistenceError("Dream record could not be saved", e) from e

    def get_by_id(self, dream_id: UUID) -> DreamRecord | None:
        try:
            with self._session_factory() as db_session:
                return db_session.get(DreamRecord, dream_id)
        except Exception as e:
            logger.exception("Failed to load dream", extra={"dream_id": str(dream_id)})
            raise PersistenceError("Dream record could not be loaded", e) from e

    def list_by_owner(self, owner_id: str) -> list[DreamRecord]:
        """Returns every dream of an owner, newest first."""
        try:
            with self._session_factory() as db_session:
                statement = (
                    select(DreamRecord)
                    .where(DreamRecord.owner_id == owner_id)
                    .order_by(col(DreamRecord.created_at).desc())
                )
                return list(db_session.exec(statement).all())
        except Exception as e:
            logger.exception("Failed to list dreams", extra={"owner_id": owner_id})
            raise PersistenceError("Dream records could not be listed", e) from e

    def update(self, dream_id: UUID, fields: dict[str, Any]) -> DreamRecord | None:
        """Applies a partial update; returns None if the dream does not exist."""
        try:
            with self._session_factory() as db_session:
                record = db_session.get(DreamRecord, dream_id)
                if record is None:
                    return None
                for name, value in fields.items():
                    setattr(record, name, value)
                record.updated_at = utcnow()
                db_session.add(record)
                db_session.commit()
                db_session.refresh(record)
                logger.info(
                    "Dream record updated",
                    extra={"dream_id": str(dream_id), "fields": sorted(fields)},
                )
                return record
        except Exception as e:
            logger.exception("Failed to update dream", extra={"dream_id": str(dream_id)})
            raise PersistenceError("Dream record could not be updated", e) from e

    def delete(self, dream_id: UUID) -> None:
        try:
            with self._session_factory() as db_session:
                record = db_session.get(DreamRecord, dream_id)
                if record is not None:
                    db_session.delete(record)
                    db_session.commit()
                    logger.info("Dream record deleted", extra={"dream_id": str(dream_id)})
        except Exception as e:
            logger.exception("Failed to delete dream", extra={"dream_id": str(dream_id)})
            raise PersistenceError("Dream record could not be deleted", e) from e
