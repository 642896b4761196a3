"""User repository for the identity rows profiles point at."""

from core.logging import get_logger
from core.models import User

from .base import BaseRepository

logger = get_logger("repository.user")


class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    model = User

    def delete(self, id: int) -> bool:
        """Delete a user by ID, logging when there was nothing to delete."""
        deleted = super().delete(id)
        if not deleted:
            logger.warning("user_delete_missing", user_id=id)
        return deleted
