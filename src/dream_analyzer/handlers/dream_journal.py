"""Owner-scoped access to persisted dreams."""

from uuid import UUID

from ..db_models import DreamRecord
from ..exceptions import DreamAccessDeniedError, DreamNotFoundError
from ..logging import setup_logging
from ..repositories import DreamRepository
from ..response_models import DreamUpdate

logger = setup_logging()


class DreamJournal:
    """
    Enforces dream ownership on top of the repository.

    Reads of a foreign dream look exactly like reads of a missing one, so
    callers cannot probe for other owners' dreams. Writes to a foreign dream
    are refused explicitly.
    """

    def __init__(self, repository: DreamRepository):
        self._repository = repository

    def list_dreams(self, owner_id: str) -> list[DreamRecord]:
        return self._repository.list_by_owner(owner_id)

    def get_dream(self, dream_id: UUID, owner_id: str) -> DreamRecord:
        """
        Raises:
            DreamNotFoundError: If the dream is missing or owned by someone else.
        """
        record = self._repository.get_by_id(dream_id)
        if record is None or record.owner_id != owner_id:
            raise DreamNotFoundError(dream_id)
        return record

    def update_dream(self, dream_id: UUID, owner_id: str, update: DreamUpdate) -> DreamRecord:
        """
        Applies title, archive and privacy changes.

        Raises:
            DreamNotFoundError: If the dream does not exist.
            DreamAccessDeniedError: If the dream belongs to another owner.
        """
        self._check_writable(dream_id, owner_id)
        changes = update.changes()
        if not changes:
            return self.get_dream(dream_id, owner_id)
        record = self._repository.update(dream_id, changes)
        if record is None:
            raise DreamNotFoundError(dream_id)
        return record

    def delete_dream(self, dream_id: UUID, owner_id: str) -> None:
        self._check_writable(dream_id, owner_id)
        self._repository.delete(dream_id)
        logger.info("Dream removed from journal", extra={"dream_id": str(dream_id)})

    def _check_writable(self, dream_id: UUID, owner_id: str) -> None:
        record = self._repository.get_by_id(dream_id)
        if record is None:
            raise DreamNotFoundError(dream_id)
        if record.owner_id != owner_id:
            logger.warning(
                "Write to foreign dream refused",
                extra={"dream_id": str(dream_id), "owner_id": owner_id},
            )
            raise DreamAccessDeniedError(dream_id, owner_id)
